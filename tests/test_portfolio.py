"""Tests for portfolio growth, allocation and withdrawal planning."""

import pytest

from finance_planner import InvalidParameterError
from finance_planner.calculators import portfolio


def test_weighted_return_defaults():
    rate = portfolio.weighted_return(portfolio.DEFAULT_ALLOCATION, portfolio.DEFAULT_RETURNS)
    assert rate == pytest.approx(0.077)


def test_growth_single_asset():
    result = portfolio.calculate_portfolio_growth(
        1000, 0, allocation={"cash": 1.0}, expected_returns={"cash": 0.12}, years=1, inflation_rate=0.0
    )
    assert result["final_value"] == 1127
    assert result["real_value"] == result["final_value"]
    assert result["weighted_return"] == 12.0
    assert result["timeline"][0]["breakdown"] == {"stocks": 0, "bonds": 0, "property": 0, "cash": 1127}


def test_growth_timeline():
    result = portfolio.calculate_portfolio_growth(50000, 1000, years=20)
    timeline = result["timeline"]
    assert len(timeline) == 20
    assert result["total_contributions"] == 50000 + 1000 * 12 * 20
    assert result["total_gains"] == result["final_value"] - result["total_contributions"]
    assert all(row["real_value"] < row["portfolio_value"] for row in timeline)


def test_growth_requires_years():
    with pytest.raises(InvalidParameterError):
        portfolio.calculate_portfolio_growth(1000, 100, years=0)


def test_optimize_allocation_moderate():
    result = portfolio.optimize_allocation(30, 67, "moderate")
    assert result["stocks"] == 0.7
    assert result["bonds"] == 0.12
    assert result["property"] == 0.15
    assert result["cash"] == 0.03
    assert result["years_to_retirement"] == 37


def test_optimize_allocation_clamped():
    assert portfolio.optimize_allocation(20, 67, "aggressive")["stocks"] == 0.9
    assert portfolio.optimize_allocation(80, 85, "conservative")["stocks"] == 0.2


def test_optimize_allocation_near_retirement():
    result = portfolio.optimize_allocation(63, 65, "moderate")
    assert result["stocks"] == 0.37
    assert result["bonds"] == 0.38
    assert result["cash"] == 0.19
    assert result["property"] == 0.06


def test_rebalancing_needed():
    current = {"stocks": 70000, "bonds": 20000, "property": 5000, "cash": 5000}
    result = portfolio.calculate_rebalancing(current, portfolio.DEFAULT_ALLOCATION)
    assert result["total_value"] == 100000
    assert result["adjustments"] == {"stocks": -10000, "bonds": 10000, "property": 0, "cash": 0}
    assert result["rebalancing_needed"] is True


def test_rebalancing_not_needed():
    current = {"stocks": 60000, "bonds": 30000, "property": 5000, "cash": 5000}
    result = portfolio.calculate_rebalancing(current, portfolio.DEFAULT_ALLOCATION)
    assert result["rebalancing_needed"] is False


def test_rebalancing_empty_portfolio():
    with pytest.raises(InvalidParameterError):
        portfolio.calculate_rebalancing({}, portfolio.DEFAULT_ALLOCATION)


def test_tax_efficient_withdrawal_uses_cash_first():
    result = portfolio.calculate_tax_efficient_withdrawal(100000, 8000, portfolio.DEFAULT_ALLOCATION)
    plan = result["withdrawal_plan"]
    assert [step["asset"] for step in plan] == ["cash", "bonds"]
    assert [step["amount"] for step in plan] == [5000, 3000]
    assert result["total_tax"] == 225
    assert result["net_withdrawal"] == 7775
    assert result["effective_tax_rate"] == 3
    assert result["shortfall"] == 0


def test_tax_efficient_withdrawal_shortfall():
    result = portfolio.calculate_tax_efficient_withdrawal(100000, 200000, portfolio.DEFAULT_ALLOCATION)
    assert len(result["withdrawal_plan"]) == 4
    assert result["shortfall"] == 100000


def test_dca_vs_lump_sum():
    flat = portfolio.calculate_dca_vs_lump_sum(12000, 1000, expected_return=0.0, years=1)
    assert flat["lump_sum"]["final_value"] == flat["dollar_cost_averaging"]["final_value"] == 12000
    assert flat["dollar_cost_averaging"]["investment_period"] == 12

    growing = portfolio.calculate_dca_vs_lump_sum(12000, 1000, expected_return=0.12, years=1)
    assert growing["lump_sum"]["final_value"] == 13440
    assert growing["dollar_cost_averaging"]["final_value"] == 12809
    assert growing["comparison"]["better"] == "lump_sum"
