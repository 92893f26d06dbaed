"""Debt repayment simulator - greedy period-by-period payoff under a fixed budget"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from finplan_gateway.domain.debt import Debt, DebtSnapshot
from finplan_gateway.domain.models import (
    SimulationResult,
    SimulationStatus,
    Strategy,
    StrategyComparison,
)

# Money-rounding tolerance for declaring a target debt paid off
PAYOFF_THRESHOLD = 0.01

# 100 years of monthly periods
DEFAULT_MAX_PERIODS = 1200

_PRIORITY_KEYS: Dict[Strategy, Callable[[Debt], float]] = {
    Strategy.AVALANCHE: lambda d: -d.annual_rate,
    Strategy.SNOWBALL: lambda d: d.principal,
}


class DebtSimulator:
    """
    Simulate paying down a set of debts with a fixed budget per period.

    Each period every non-target debt receives an interest-only payment and
    the rest of the budget goes to the target (first debt in priority order).
    Priority is fixed once at construction:
    - AVALANCHE: highest annual rate first
    - SNOWBALL: lowest starting balance first

    The simulator works on its own copies of the input debts; the caller's
    objects are never mutated.
    """

    def __init__(
        self,
        debts: Iterable[Debt],
        budget: float,
        strategy: Strategy = Strategy.AVALANCHE,
        max_periods: int = DEFAULT_MAX_PERIODS,
        payoff_threshold: float = PAYOFF_THRESHOLD,
    ):
        self.budget = budget
        self.strategy = Strategy(strategy)
        self.max_periods = max_periods
        self.payoff_threshold = payoff_threshold

        # Stable sort: ties keep input order
        copies = [d.copy() for d in debts]
        self._debts: List[Debt] = sorted(copies, key=_PRIORITY_KEYS[self.strategy])

        self._periods_elapsed = 0
        self._total_interest_paid = 0.0
        self._total_unapplied_excess = 0.0
        self._payoff_order: List[DebtSnapshot] = []
        self._status = SimulationStatus.RUNNING

    @property
    def periods_elapsed(self) -> int:
        return self._periods_elapsed

    @property
    def total_interest_paid(self) -> float:
        return self._total_interest_paid

    @property
    def payoff_order(self) -> Tuple[DebtSnapshot, ...]:
        return tuple(self._payoff_order)

    @property
    def active_debts(self) -> Tuple[DebtSnapshot, ...]:
        return tuple(d.snapshot() for d in self._debts)

    @property
    def status(self) -> SimulationStatus:
        return self._status

    def simulate(self) -> SimulationResult:
        """Run periods until every debt is paid or the run cannot continue"""
        while self._status == SimulationStatus.RUNNING:
            self.step()
        return self.result()

    def step(self) -> SimulationStatus:
        """
        Advance one period.

        Returns the status after the period; anything other than RUNNING is
        terminal and further calls are no-ops.
        """
        if self._status != SimulationStatus.RUNNING:
            return self._status

        if not self._debts:
            self._status = SimulationStatus.COMPLETED
            return self._status

        if self._periods_elapsed >= self.max_periods:
            logging.warning(
                "Simulation stopped at period limit",
                extra={
                    "strategy": self.strategy.value,
                    "max_periods": self.max_periods,
                    "active_debts": len(self._debts),
                },
            )
            self._status = SimulationStatus.PERIOD_LIMIT
            return self._status

        self._periods_elapsed += 1

        interest_due = sum(d.periodic_interest() for d in self._debts)
        if self.budget < interest_due:
            # Terminal, not an error: partial results stay inspectable
            logging.warning(
                "Budget insufficient to cover interest",
                extra={
                    "period": self._periods_elapsed,
                    "interest_due": round(interest_due, 2),
                    "budget": self.budget,
                },
            )
            self._status = SimulationStatus.INSUFFICIENT_BUDGET
            return self._status

        remaining_budget = self.budget

        # Interest-only payments on everything but the target
        for debt in self._debts[1:]:
            interest = debt.periodic_interest()
            debt.apply_payment(interest)
            remaining_budget -= interest
            self._total_interest_paid += interest

        target = self._debts[0]
        self._total_interest_paid += target.periodic_interest()
        # Excess is not rolled into the next debt within the same period
        self._total_unapplied_excess += target.apply_payment(remaining_budget)

        if target.principal <= self.payoff_threshold:
            self._payoff_order.append(target.snapshot())
            self._debts.pop(0)

        if not self._debts:
            self._status = SimulationStatus.COMPLETED
        return self._status

    def result(self) -> SimulationResult:
        return SimulationResult(
            strategy=self.strategy,
            status=self._status,
            budget=self.budget,
            periods_elapsed=self._periods_elapsed,
            total_interest_paid=self._total_interest_paid,
            payoff_order=self.payoff_order,
            remaining_debts=self.active_debts,
            total_unapplied_excess=self._total_unapplied_excess,
        )


def simulate_repayment(
    debts: Iterable[Debt],
    budget: float,
    strategy: Strategy = Strategy.AVALANCHE,
    max_periods: int = DEFAULT_MAX_PERIODS,
) -> SimulationResult:
    """Main entry point: run a full repayment simulation and return its result."""
    return DebtSimulator(debts, budget, strategy=strategy, max_periods=max_periods).simulate()


def compare_strategies(
    debts: Iterable[Debt],
    budget: float,
    max_periods: int = DEFAULT_MAX_PERIODS,
) -> StrategyComparison:
    """
    Run Avalanche and Snowball on the same debts and budget.

    Each run works on its own copies, so neither affects the other.
    interest_saved is positive when Avalanche pays less interest.
    """
    debts = list(debts)
    avalanche = simulate_repayment(debts, budget, Strategy.AVALANCHE, max_periods)
    snowball = simulate_repayment(debts, budget, Strategy.SNOWBALL, max_periods)

    interest_saved = snowball.total_interest_paid - avalanche.total_interest_paid
    interest_saved_pct: Optional[float] = None
    if snowball.total_interest_paid > 0:
        interest_saved_pct = interest_saved / snowball.total_interest_paid * 100

    return StrategyComparison(
        avalanche=avalanche,
        snowball=snowball,
        interest_saved=interest_saved,
        interest_saved_pct=interest_saved_pct,
    )
