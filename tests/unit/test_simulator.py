"""Unit tests for the debt repayment simulator"""

import logging
import pytest
from finplan_gateway.domain.debt import Debt
from finplan_gateway.domain.models import SimulationStatus, Strategy
from finplan_gateway.domain.simulator import (
    DebtSimulator,
    compare_strategies,
    simulate_repayment,
)


def test_single_debt_scenario():
    """Test $1000 at 12% with $100/month pays off in 11 months"""
    result = simulate_repayment([Debt(1000, 0.12)], 100)

    assert result.status == SimulationStatus.COMPLETED
    assert result.all_paid_off
    assert result.periods_elapsed == 11
    assert result.total_interest_paid > 0
    assert len(result.payoff_order) == 1
    assert result.remaining_debts == ()


@pytest.mark.parametrize("budget", [50, 200, 1000])
def test_avalanche_pays_highest_rate_first(budget):
    """Test the 20% debt is paid before the 5% one regardless of input order"""
    debts = [Debt(1000, 0.05), Debt(1000, 0.20)]

    result = simulate_repayment(debts, budget, Strategy.AVALANCHE)

    assert [d.original_rate for d in result.payoff_order] == [0.20, 0.05]


def test_snowball_pays_smallest_balance_first(reference_debts):
    """Test Snowball order follows starting balances"""
    result = simulate_repayment(reference_debts, 500, Strategy.SNOWBALL)

    assert result.status == SimulationStatus.COMPLETED
    assert [d.original_principal for d in result.payoff_order] == [3000, 5000, 8000]


def test_snowball_ties_keep_input_order():
    """Test equal balances keep their input order"""
    debts = [Debt(1000, 0.05), Debt(1000, 0.20)]

    result = simulate_repayment(debts, 200, Strategy.SNOWBALL)

    assert [d.original_rate for d in result.payoff_order] == [0.05, 0.20]


def test_reference_scenario_avalanche(reference_debts):
    """Test the $5k/$8k/$3k reference scenario against its known interest total"""
    result = simulate_repayment(reference_debts, 500)

    assert result.strategy == Strategy.AVALANCHE
    assert result.status == SimulationStatus.COMPLETED
    assert [d.original_rate for d in result.payoff_order] == [0.18, 0.06, 0.04]
    assert result.total_interest_paid == pytest.approx(1700.73, abs=1.0)


def test_insufficient_budget_halts_at_first_period(overextended_debts):
    """Test interest above budget stops the run without payments"""
    simulator = DebtSimulator(overextended_debts, 100)
    result = simulator.simulate()

    assert result.status == SimulationStatus.INSUFFICIENT_BUDGET
    assert result.periods_elapsed == 1
    assert result.payoff_order == ()
    assert result.total_interest_paid == 0.0
    # No payments applied: balances are untouched
    assert sorted(d.balance for d in result.remaining_debts) == [3000, 5000, 10000]
    assert not result.all_paid_off


def test_insufficient_budget_logs_warning(overextended_debts, caplog):
    """Test the halt is logged rather than raised"""
    with caplog.at_level(logging.WARNING):
        simulate_repayment(overextended_debts, 100)

    assert "Budget insufficient to cover interest" in caplog.text


def test_caller_debts_are_not_mutated(reference_debts):
    """Test the simulator works on its own copies"""
    before = [(d.principal, d.annual_rate) for d in reference_debts]

    simulate_repayment(reference_debts, 500, Strategy.SNOWBALL)

    assert [(d.principal, d.annual_rate) for d in reference_debts] == before


def test_empty_debt_list_completes_immediately():
    """Test nothing to pay means zero periods"""
    result = simulate_repayment([], 500)

    assert result.status == SimulationStatus.COMPLETED
    assert result.periods_elapsed == 0
    assert result.total_interest_paid == 0.0


def test_period_limit_stops_stalled_run():
    """Test a budget that never reduces principal stops at the period cap"""
    result = simulate_repayment([Debt(1000, 0.0)], 0, max_periods=24)

    assert result.status == SimulationStatus.PERIOD_LIMIT
    assert result.periods_elapsed == 24
    assert result.payoff_order == ()
    assert result.remaining_debts[0].balance == 1000


def test_accumulators_are_monotonic(reference_debts):
    """Test interest and periods only grow and payoff order only appends"""
    simulator = DebtSimulator(reference_debts, 500)
    last_interest = 0.0
    last_periods = 0
    last_order = ()

    while simulator.step() == SimulationStatus.RUNNING:
        assert simulator.total_interest_paid >= last_interest
        assert simulator.periods_elapsed == last_periods + 1
        assert simulator.payoff_order[: len(last_order)] == last_order
        last_interest = simulator.total_interest_paid
        last_periods = simulator.periods_elapsed
        last_order = simulator.payoff_order

    assert simulator.status == SimulationStatus.COMPLETED
    assert len(simulator.payoff_order) == 3


def test_result_is_frozen_after_termination(reference_debts):
    """Test further calls after termination change nothing"""
    simulator = DebtSimulator(reference_debts, 500)
    first = simulator.simulate()

    assert simulator.step() == SimulationStatus.COMPLETED
    second = simulator.simulate()

    assert second == first


def test_overpayment_excess_is_recorded():
    """Test excess from clearing the target is kept, not cascaded"""
    result = simulate_repayment([Debt(100, 0.12)], 500)

    assert result.periods_elapsed == 1
    assert result.total_unapplied_excess == pytest.approx(500 - 101)


def test_non_target_debts_receive_interest_only(reference_debts):
    """Test lower-priority balances hold steady while the target is paid"""
    simulator = DebtSimulator(reference_debts, 500)
    simulator.step()

    balances = {d.original_rate: d.balance for d in simulator.active_debts}
    assert balances[0.06] == pytest.approx(8000)
    assert balances[0.04] == pytest.approx(3000)
    assert balances[0.18] < 5000


def test_strategy_accepts_string_value():
    """Test strategy may be given by its serialized name"""
    simulator = DebtSimulator([Debt(100, 0.1)], 50, strategy="snowball")
    assert simulator.strategy is Strategy.SNOWBALL


def test_compare_strategies_reference(reference_debts):
    """Test Avalanche pays less interest than Snowball on the reference scenario"""
    comparison = compare_strategies(reference_debts, 500)

    assert comparison.avalanche.strategy == Strategy.AVALANCHE
    assert comparison.snowball.strategy == Strategy.SNOWBALL
    assert comparison.avalanche.all_paid_off
    assert comparison.snowball.all_paid_off
    assert comparison.interest_saved > 0
    assert comparison.interest_saved == pytest.approx(
        comparison.snowball.total_interest_paid - comparison.avalanche.total_interest_paid
    )
    assert 0 < comparison.interest_saved_pct < 100


def test_compare_strategies_without_interest():
    """Test percent saved is undefined when Snowball pays no interest"""
    comparison = compare_strategies([Debt(1000, 0.0)], 100)

    assert comparison.interest_saved == 0.0
    assert comparison.interest_saved_pct is None
