"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import List, Optional

from finplan_gateway.domain.models import SimulationStatus, Strategy


class DebtSchema(BaseModel):
    """Single debt in a simulation request"""

    principal: float = Field(..., ge=0, description="Current balance")
    annual_rate: float = Field(..., ge=0, description="Annual rate as a decimal (0.18 = 18%)")


class SimulationRequest(BaseModel):
    """Request body for POST /v1/debts/simulate"""

    debts: List[DebtSchema] = Field(..., description="Debts to pay down")
    budget: float = Field(..., ge=0, description="Total payment available per period")
    strategy: Strategy = Strategy.AVALANCHE


class ComparisonRequest(BaseModel):
    """Request body for POST /v1/debts/compare"""

    debts: List[DebtSchema]
    budget: float = Field(..., ge=0)


class DebtRecordSchema(BaseModel):
    """Debt identity with its balance when recorded"""

    original_principal: float
    original_rate: float
    balance: float


class SimulationResponse(BaseModel):
    """Response for POST /v1/debts/simulate"""

    strategy: Strategy
    status: SimulationStatus
    budget: float
    periods_elapsed: int
    years_elapsed: float
    total_interest_paid: float
    payoff_order: List[DebtRecordSchema]
    remaining_debts: List[DebtRecordSchema]


class ComparisonResponse(BaseModel):
    """Response for POST /v1/debts/compare"""

    avalanche: SimulationResponse
    snowball: SimulationResponse
    interest_saved: float
    interest_saved_pct: Optional[float] = None


class SavingsGoalRequest(BaseModel):
    """Request body for POST /v1/savings/estimate"""

    initial_principal: float = Field(..., description="Starting balance")
    periodic_contribution: float = Field(..., description="Amount added each period")
    periodic_rate: float = Field(..., gt=-1, description="Growth rate per period as a decimal")
    target_amount: float = Field(..., description="Balance to reach")
    precision: Optional[float] = Field(None, gt=0, description="Search tolerance in periods")


class SavingsEstimateResponse(BaseModel):
    """Response for POST /v1/savings/estimate"""

    time_to_target: float
    formatted: str
    final_balance: float
    iterations: int


class ProjectionRequest(SavingsGoalRequest):
    """Request body for POST /v1/savings/projection"""

    times: List[float] = Field(..., min_length=1)


class ProjectionPoint(BaseModel):
    time: float
    balance: float


class ProjectionResponse(BaseModel):
    """Response for POST /v1/savings/projection"""

    points: List[ProjectionPoint]
