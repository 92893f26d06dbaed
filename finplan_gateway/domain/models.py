"""Domain models - pure Python dataclasses representing calculation inputs and results"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from finplan_gateway.domain.debt import DebtSnapshot
from finplan_gateway.domain.exceptions import InvalidGoalParametersError


class Strategy(str, Enum):
    """Priority ordering used to pick the debt that receives the surplus budget"""

    AVALANCHE = "avalanche"  # highest rate first
    SNOWBALL = "snowball"  # smallest balance first


class SimulationStatus(str, Enum):
    """Where a repayment simulation stopped"""

    RUNNING = "running"
    COMPLETED = "completed"
    INSUFFICIENT_BUDGET = "insufficient_budget"
    PERIOD_LIMIT = "period_limit"


@dataclass(frozen=True)
class SimulationResult:
    """Output of a repayment simulation, frozen once the run terminates"""

    strategy: Strategy
    status: SimulationStatus
    budget: float
    periods_elapsed: int
    total_interest_paid: float
    payoff_order: Tuple[DebtSnapshot, ...]
    remaining_debts: Tuple[DebtSnapshot, ...]
    total_unapplied_excess: float = 0.0

    @property
    def all_paid_off(self) -> bool:
        return self.status == SimulationStatus.COMPLETED


@dataclass(frozen=True)
class StrategyComparison:
    """Avalanche and Snowball results for the same debts and budget"""

    avalanche: SimulationResult
    snowball: SimulationResult
    interest_saved: float
    interest_saved_pct: Optional[float]


@dataclass(frozen=True)
class SavingsGoal:
    """Parameters for a time-to-target estimate (rate and contribution are per period)"""

    initial_principal: float
    periodic_contribution: float
    periodic_rate: float
    target_amount: float
    precision: float = 1.0 / 12.0

    def __post_init__(self) -> None:
        if self.precision <= 0:
            raise InvalidGoalParametersError(f"Precision must be positive, got {self.precision}")
        if self.periodic_rate <= -1:
            raise InvalidGoalParametersError(f"Rate must be greater than -100%, got {self.periodic_rate}")


@dataclass(frozen=True)
class SavingsEstimate:
    """Result of a time-to-target search"""

    goal: SavingsGoal
    time_to_target: float
    final_balance: float
    iterations: int
