"""POST /v1/savings/estimate and /v1/savings/projection - savings goal endpoints"""

import math
import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from finplan_gateway.api.v1.schemas import (
    ProjectionPoint,
    ProjectionRequest,
    ProjectionResponse,
    SavingsEstimateResponse,
    SavingsGoalRequest,
)
from finplan_gateway.api.dependencies import get_request_id, get_settings
from finplan_gateway.config import Settings
from finplan_gateway.domain.exceptions import InvalidGoalParametersError, UnreachableGoalError
from finplan_gateway.domain.models import SavingsGoal
from finplan_gateway.domain.savings import estimate_savings_goal, project_balances
from finplan_gateway.infrastructure.observability.logging import log_estimate
from finplan_gateway.infrastructure.observability.metrics import record_estimate
from finplan_gateway.utils.time_utils import format_years_and_months

router = APIRouter()


def _to_goal(body: SavingsGoalRequest, config: Settings) -> SavingsGoal:
    return SavingsGoal(
        initial_principal=body.initial_principal,
        periodic_contribution=body.periodic_contribution,
        periodic_rate=body.periodic_rate,
        target_amount=body.target_amount,
        precision=body.precision if body.precision is not None else config.savings_precision,
    )


@router.post("/savings/estimate", response_model=SavingsEstimateResponse)
def estimate(
    request_body: SavingsGoalRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Estimate how long it takes to reach a savings target.

    Returns 422 when the target is unreachable (no contribution and no
    positive growth).
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = estimate_savings_goal(_to_goal(request_body, config))

    except UnreachableGoalError as e:
        record_estimate(reached=False)
        log_estimate(request_id, False, None, (time.time() - start_time) * 1000)
        logging.warning(f"Unreachable goal: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except InvalidGoalParametersError as e:
        logging.warning(f"Invalid goal parameters: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_estimate(reached=True)
    log_estimate(request_id, True, result.time_to_target, (time.time() - start_time) * 1000)

    return SavingsEstimateResponse(
        time_to_target=result.time_to_target,
        formatted=format_years_and_months(result.time_to_target),
        final_balance=round(result.final_balance, 2),
        iterations=result.iterations,
    )


@router.post("/savings/projection", response_model=ProjectionResponse)
def projection(
    request_body: ProjectionRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """Balance at each requested time"""
    request_id = get_request_id(request)

    try:
        goal = _to_goal(request_body, config)
    except InvalidGoalParametersError as e:
        logging.warning(f"Invalid goal parameters: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    balances = project_balances(goal, request_body.times)
    overflowed = [t for t, balance in balances if not math.isfinite(balance)]
    if overflowed:
        logging.warning(
            f"Projection overflows at times {overflowed}",
            extra={"request_id": request_id},
        )
        raise HTTPException(
            status_code=422,
            detail=f"Balance is not representable at times {overflowed}",
        )

    points = [ProjectionPoint(time=t, balance=round(balance, 2)) for t, balance in balances]
    return ProjectionResponse(points=points)
