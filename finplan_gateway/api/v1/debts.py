"""POST /v1/debts/simulate and /v1/debts/compare - debt repayment endpoints"""

import time
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request

from finplan_gateway.api.v1.schemas import (
    ComparisonRequest,
    ComparisonResponse,
    DebtRecordSchema,
    DebtSchema,
    SimulationRequest,
    SimulationResponse,
)
from finplan_gateway.api.dependencies import get_request_id, get_settings
from finplan_gateway.config import Settings
from finplan_gateway.domain.debt import Debt, DebtSnapshot
from finplan_gateway.domain.models import SimulationResult
from finplan_gateway.domain.simulator import compare_strategies, simulate_repayment
from finplan_gateway.infrastructure.observability.logging import log_simulation
from finplan_gateway.infrastructure.observability.metrics import record_simulation
from finplan_gateway.utils.time_utils import periods_to_years

router = APIRouter()


def _to_debts(debts: List[DebtSchema], periods_per_year: int) -> List[Debt]:
    return [
        Debt(principal=d.principal, annual_rate=d.annual_rate, periods_per_year=periods_per_year)
        for d in debts
    ]


def _to_record(snapshot: DebtSnapshot) -> DebtRecordSchema:
    return DebtRecordSchema(
        original_principal=snapshot.original_principal,
        original_rate=snapshot.original_rate,
        balance=round(snapshot.balance, 2),
    )


def _to_response(result: SimulationResult, periods_per_year: int) -> SimulationResponse:
    return SimulationResponse(
        strategy=result.strategy,
        status=result.status,
        budget=result.budget,
        periods_elapsed=result.periods_elapsed,
        years_elapsed=round(periods_to_years(result.periods_elapsed, periods_per_year), 2),
        total_interest_paid=round(result.total_interest_paid, 2),
        payoff_order=[_to_record(s) for s in result.payoff_order],
        remaining_debts=[_to_record(s) for s in result.remaining_debts],
    )


@router.post("/debts/simulate", response_model=SimulationResponse)
def simulate(
    request_body: SimulationRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Simulate period-by-period repayment of the given debts.

    An insufficient budget is not an error: the response carries
    status "insufficient_budget" with the partial results.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = simulate_repayment(
            _to_debts(request_body.debts, config.periods_per_year),
            request_body.budget,
            strategy=request_body.strategy,
            max_periods=config.max_simulation_periods,
        )
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_simulation(result.strategy.value, result.status.value, result.periods_elapsed)
    log_simulation(
        request_id,
        result.strategy.value,
        result.status.value,
        len(request_body.debts),
        result.periods_elapsed,
        duration_ms,
    )

    return _to_response(result, config.periods_per_year)


@router.post("/debts/compare", response_model=ComparisonResponse)
def compare(
    request_body: ComparisonRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """Run Avalanche and Snowball on the same debts and report the interest difference"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        comparison = compare_strategies(
            _to_debts(request_body.debts, config.periods_per_year),
            request_body.budget,
            max_periods=config.max_simulation_periods,
        )
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    for result in (comparison.avalanche, comparison.snowball):
        record_simulation(result.strategy.value, result.status.value, result.periods_elapsed)
        log_simulation(
            request_id,
            result.strategy.value,
            result.status.value,
            len(request_body.debts),
            result.periods_elapsed,
            duration_ms,
        )

    pct = comparison.interest_saved_pct
    return ComparisonResponse(
        avalanche=_to_response(comparison.avalanche, config.periods_per_year),
        snowball=_to_response(comparison.snowball, config.periods_per_year),
        interest_saved=round(comparison.interest_saved, 2),
        interest_saved_pct=None if pct is None else round(pct, 2),
    )
