"""Savings goal estimator - time to reach a target balance under compound growth"""

import math
from typing import Iterable, List, Tuple

from finplan_gateway.domain.exceptions import UnreachableGoalError
from finplan_gateway.domain.models import SavingsEstimate, SavingsGoal

# Below this |rate| the annuity term degenerates to linear contributions
ZERO_RATE_EPSILON = 1e-10

MIN_UPPER_BOUND = 100.0
CONTRIBUTION_BOUND_FACTOR = 1.5
MAX_SEARCH_HORIZON = 10_000.0


def _growth_factor(rate: float, time: float) -> float:
    try:
        return (1 + rate) ** time
    except OverflowError:
        return math.inf


def _scale(amount: float, factor: float) -> float:
    # 0 * inf would be nan; a zero amount stays zero at any horizon
    if amount == 0:
        return 0.0
    return amount * factor


def balance_at(goal: SavingsGoal, time: float) -> float:
    """
    Balance after `time` periods of compounding with a contribution each period.

    Formula: F(t) = P(1+r)^t + C * [(1+r)^t - 1] / r

    Non-decreasing in t whenever contribution >= 0 and rate >= 0.
    """
    if time <= 0:
        return goal.initial_principal

    growth = _growth_factor(goal.periodic_rate, time)
    principal_growth = _scale(goal.initial_principal, growth)

    if abs(goal.periodic_rate) < ZERO_RATE_EPSILON:
        contribution_growth = goal.periodic_contribution * time
    else:
        contribution_growth = _scale(goal.periodic_contribution, (growth - 1) / goal.periodic_rate)

    return principal_growth + contribution_growth


def estimate_upper_bound(goal: SavingsGoal) -> float:
    """
    Starting upper bound for the bisection search.

    With contributions: 1.5x the no-interest time to close the deficit.
    Interest only: closed-form inversion of P(1+r)^t = target.
    Both are floored at MIN_UPPER_BOUND.
    """
    deficit = goal.target_amount - goal.initial_principal
    if deficit <= 0:
        return 0.0

    if goal.periodic_contribution > 0:
        return max(deficit / goal.periodic_contribution * CONTRIBUTION_BOUND_FACTOR, MIN_UPPER_BOUND)

    if goal.periodic_rate <= 0 or goal.initial_principal <= 0:
        return MIN_UPPER_BOUND

    return max(
        MIN_UPPER_BOUND,
        math.log(goal.target_amount / goal.initial_principal) / math.log1p(goal.periodic_rate),
    )


def _check_reachable(goal: SavingsGoal) -> None:
    if goal.periodic_contribution <= 0 and goal.periodic_rate <= 0:
        raise UnreachableGoalError("Cannot reach target: no contributions and no interest")
    if goal.periodic_contribution <= 0 and goal.initial_principal <= 0:
        raise UnreachableGoalError("Cannot reach target: no contributions and no principal to earn interest")


def _bracket(goal: SavingsGoal) -> float:
    """Upper bound whose balance meets the target, extended if the estimate falls short"""
    high = estimate_upper_bound(goal)
    if not math.isfinite(high):
        raise UnreachableGoalError("Cannot reach target within a finite number of periods")
    while balance_at(goal, high) < goal.target_amount:
        if high >= MAX_SEARCH_HORIZON:
            raise UnreachableGoalError(
                f"Cannot reach target within {MAX_SEARCH_HORIZON:g} periods"
            )
        high = min(high * 2, MAX_SEARCH_HORIZON)
    return high


def _search(goal: SavingsGoal) -> Tuple[float, int]:
    if goal.initial_principal >= goal.target_amount:
        return 0.0, 0

    _check_reachable(goal)

    # Invariant: balance_at(low) < target <= balance_at(high)
    low = 0.0
    high = _bracket(goal)
    iterations = 0

    while high - low > goal.precision:
        mid = (low + high) / 2.0
        if mid <= low or mid >= high:
            # Float resolution reached; the interval cannot shrink further
            break
        if balance_at(goal, mid) < goal.target_amount:
            low = mid
        else:
            high = mid
        iterations += 1

    # Upper bound guarantees the target is met, not just approached
    return high, iterations


def time_to_reach_target(goal: SavingsGoal) -> float:
    """
    Smallest time (within goal.precision) at which the balance meets the target.

    Raises:
        UnreachableGoalError: No growth mechanism can close the deficit
    """
    time, _ = _search(goal)
    return time


def estimate_savings_goal(goal: SavingsGoal) -> SavingsEstimate:
    """Time to target plus the balance reached at that time"""
    time, iterations = _search(goal)
    return SavingsEstimate(
        goal=goal,
        time_to_target=time,
        final_balance=balance_at(goal, time),
        iterations=iterations,
    )


def project_balances(goal: SavingsGoal, times: Iterable[float]) -> List[Tuple[float, float]]:
    return [(t, balance_at(goal, t)) for t in times]
