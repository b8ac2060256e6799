"""Tests for superannuation projections and the contribution-rate search."""

import numpy as np
import pytest

from finance_planner import InvalidParameterError
from finance_planner.calculators import superannuation as super_calc


def test_single_year_example():
    """7% less 0.85% fees on $100k, plus 11.5% of $100k at year end."""
    result = super_calc.calculate_retirement_balance(60, 61, 100000, 100000)
    assert result["final_balance"] == 117650
    assert result["total_employer_contributions"] == 11500
    assert result["total_returns"] == 6150
    assert result["total_fees"] == 850
    assert result["years"] == 1


def test_contributions_grow_with_inflation():
    result = super_calc.calculate_retirement_balance(60, 62, 100000, 100000)
    assert [row["age"] for row in result["yearly_data"]] == [61, 62]
    contributions = [row["employer_contribution"] for row in result["yearly_data"]]
    assert contributions == pytest.approx([11500, 11787.5], abs=0.6)
    assert result["final_balance"] == 136673


def test_personal_contributions_split():
    result = super_calc.calculate_retirement_balance(
        60, 61, 0, 100000, personal_contribution_rate=0.05, return_rate=0.0, fee_rate=0.0
    )
    assert result["total_employer_contributions"] == 11500
    assert result["total_personal_contributions"] == 5000
    assert result["final_balance"] == 16500
    assert result["assumptions"]["personal_contribution_rate"] == 5.0


def test_contributions_tax():
    result = super_calc.calculate_retirement_balance(
        60, 61, 0, 100000, return_rate=0.0, fee_rate=0.0, contributions_tax_rate=0.15
    )
    assert result["final_balance"] == 9775
    assert result["total_tax"] == 1725


def test_retirement_age_must_be_later():
    with pytest.raises(InvalidParameterError):
        super_calc.calculate_retirement_balance(67, 67, 100000, 90000)


def test_required_contributions_checks_ages_first():
    """Reversed ages are rejected even when the target is already met."""
    with pytest.raises(InvalidParameterError):
        super_calc.calculate_required_contributions(67, 60, 500000, 400000, 90000)


def test_balance_rises_with_personal_rate():
    balances = [
        super_calc.final_balance(30, 67, 50000, 90000, float(rate))
        for rate in np.linspace(0.0, 0.5, 11)
    ]
    assert all(b > a for a, b in zip(balances, balances[1:]))


def test_required_contributions_round_trip():
    """Solving for the rate that produced a balance recovers 10%."""
    target = super_calc.final_balance(30, 67, 50000, 90000, 0.10)
    rate = super_calc.calculate_required_contributions(30, 67, 50000, target, 90000)
    assert rate == pytest.approx(10.0, abs=0.02)


def test_required_contributions_target_met():
    assert super_calc.calculate_required_contributions(30, 67, 500000, 400000, 90000) == 0.0


def test_required_contributions_capped():
    """Unreachable targets push the rate to the 50% cap."""
    rate = super_calc.calculate_required_contributions(30, 67, 0, 1e12, 90000)
    assert rate == pytest.approx(50.0, abs=0.02)
