"""Tests for drawdown sustainability and combined retirement income."""

import pytest

from finance_planner import InvalidParameterError
from finance_planner.calculators import retirement_income as ri


@pytest.mark.parametrize("years, expected", [(45, 0.035), (30, 0.04), (20, 0.04), (10, 0.045)])
def test_recommended_rate(years, expected):
    assert ri.recommended_withdrawal_rate(years) == expected


@pytest.mark.parametrize(
    "rate, expected",
    [(0.07, 0.50), (0.055, 0.70), (0.045, 0.90), (0.04, 0.95), (0.035, 0.95), (0.02, 1.0)],
)
def test_success_tiers(rate, expected):
    assert ri.estimated_success_rate(rate) == expected


def test_sustainable_withdrawal():
    result = ri.calculate_safe_withdrawal(1_000_000, 40000)
    assert result["safe_withdrawal_4_percent"] == 40000
    assert result["dynamic_safe_withdrawal"] == 40000
    assert result["actual_rate"] == 4.0
    assert result["estimated_success_rate"] == 95
    assert result["depleted"] is False
    assert len(result["timeline"]) == 30
    assert result["years_until_depletion"] == 30


def test_depletion_stops_timeline():
    result = ri.calculate_safe_withdrawal(100000, 30000, years_in_retirement=10,
                                          expected_return=0.0, inflation_rate=0.0)
    assert result["depleted"] is True
    assert result["years_until_depletion"] == 4
    assert [row["withdrawal"] for row in result["timeline"]] == [30000, 30000, 30000, 10000]
    assert result["timeline"][-1]["portfolio_value"] == 0
    assert result["estimated_success_rate"] == 50


def test_withdrawals_rise_with_inflation():
    result = ri.calculate_safe_withdrawal(1_000_000, 40000, years_in_retirement=3,
                                          expected_return=0.05, inflation_rate=0.10)
    assert [row["withdrawal"] for row in result["timeline"]] == [40000, 44000, 48400]


def test_safe_withdrawal_validation():
    with pytest.raises(InvalidParameterError):
        ri.calculate_safe_withdrawal(0, 40000)
    with pytest.raises(InvalidParameterError):
        ri.calculate_safe_withdrawal(100000, 4000, years_in_retirement=0)


def test_annuity_vs_account_based():
    result = ri.compare_annuity_vs_account_based(100000, annuity_rate=0.05, investment_return=0.0,
                                                 years_in_retirement=2, minimum_drawdown=0.05)
    assert result["annuity"]["annual_payment"] == 5000
    assert result["annuity"]["total_received"] == 10000
    account = result["account_based"]
    assert account["initial_payment"] == 5000
    assert [row["payment"] for row in account["timeline"]] == [5000, 4750]
    assert account["total_received"] == 9750
    assert account["residual_value"] == 90250
    assert result["comparison"]["total_difference"] == 90000
    assert result["comparison"]["better"] == "account_based"


def test_age_pension_wrapper_below_age():
    result = ri.calculate_age_pension(60, 100000, 0)
    assert result["eligible"] is False
    assert result["current_age"] == 60
    assert result["years_until_eligible"] == 7


def test_total_income_before_pension_age():
    result = ri.calculate_total_retirement_income(500000, 200000, 10000, age=60)
    assert result["total_annual_income"] == 43000
    assert result["breakdown"] == {
        "superannuation": 25000,
        "investments": 8000,
        "rental_income": 10000,
        "age_pension": 0,
    }
    assert result["percentages"]["super"] == 58
    assert result["percentages"]["age_pension"] == 0


def test_total_income_includes_pension():
    result = ri.calculate_total_retirement_income(200000, 0, 0, age=67)
    pension = result["age_pension_details"]
    assert pension["eligible"] is True
    # deemed income of 8000 a year puts the income test in charge
    assert pension["reduction_reason"] == "income"
    assert result["breakdown"]["age_pension"] == pension["annual_amount"]
    assert result["total_annual_income"] == 10000 + pension["annual_amount"]
