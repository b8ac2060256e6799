"""Tests for loan repayments, schedules and borrowing capacity."""

import pytest

from finance_planner import InvalidParameterError
from finance_planner.calculators import loan


def test_repayment_example():
    """$300k over 30 years at 5% costs $1,610.46 a month."""
    result = loan.calculate_loan_repayment(300000, 0.05, 30)
    assert result["payment"] == 1610.46
    assert result["total_payments"] == 360
    assert result["interest_rate"] == 5.0
    assert result["total_interest"] == pytest.approx(result["total_paid"] - 300000, abs=1)
    assert result["total_paid"] == pytest.approx(1610.46 * 360, abs=5)


def test_schedule_closes_loan():
    """The yearly schedule ends on payment 360 with nothing left owing."""
    schedule = loan.generate_amortization_schedule(300000, 0.05, 30)
    assert len(schedule) == 30
    assert [row["year"] for row in schedule] == list(range(1, 31))
    assert schedule[-1]["payment"] == 360
    assert schedule[-1]["remaining_balance"] == 0
    assert schedule[-1]["cumulative_principal"] == 300000
    balances = [row["remaining_balance"] for row in schedule]
    assert balances == sorted(balances, reverse=True)


def test_interest_share_falls_over_time():
    schedule = loan.generate_amortization_schedule(300000, 0.05, 30)
    assert schedule[0]["interest_payment"] > schedule[0]["principal_payment"]
    assert schedule[-1]["interest_payment"] < schedule[-1]["principal_payment"]


def test_zero_rate_loan():
    """Without interest each payment is the principal divided evenly."""
    result = loan.calculate_loan_repayment(12000, 0.0, 1)
    assert result["payment"] == 1000.0
    assert result["total_interest"] == 0


def test_fortnightly_payments():
    """26 payments a year over 30 years."""
    result = loan.calculate_loan_repayment(300000, 0.05, 30, payment_frequency="fortnightly")
    assert result["total_payments"] == 780
    assert result["schedule"][-1]["remaining_balance"] == 0


@pytest.mark.parametrize("amount, term", [(0, 30), (-1000, 30), (100000, 0)])
def test_invalid_loan(amount, term):
    with pytest.raises(InvalidParameterError):
        loan.calculate_loan_repayment(amount, 0.05, term)


def test_borrowing_capacity_inverts_repayment():
    """Borrowing capacity is the loan that a given payment repays."""
    assert abs(loan.calculate_borrowing_capacity(1610.46, 0.05, 30) - 300000) <= 5
    assert loan.calculate_borrowing_capacity(1000, 0.0, 30) == 360000


def test_borrowing_capacity_requires_term():
    with pytest.raises(InvalidParameterError):
        loan.calculate_borrowing_capacity(1000, 0.05, 0)


def test_extra_payments_save_interest():
    result = loan.calculate_extra_payment_impact(300000, 0.05, 30, 200)
    assert result["with_extra"]["payment"] == pytest.approx(1810.46)
    assert result["with_extra"]["total_payments"] < 360
    assert result["with_extra"]["total_interest"] < result["standard"]["total_interest"]
    assert result["savings"]["interest_saved"] > 0
    assert result["savings"]["time_saved"] > 0


def test_part_year_term_rounds_up_to_whole_payments():
    """A 1.3 year term repaid monthly takes 16 payments, the last in year 2."""
    result = loan.calculate_loan_repayment(10000, 0.05, 1.3)
    assert result["total_payments"] == 16
    assert result["payment"] * 16 >= 10000
    schedule = result["schedule"]
    assert [row["year"] for row in schedule] == [1, 2]
    assert schedule[-1]["payment"] == 16
    assert schedule[-1]["remaining_balance"] == 0
