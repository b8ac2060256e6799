"""Tests for savings growth and goal calculations."""

import pytest

from finance_planner import InvalidParameterError
from finance_planner.calculators import savings


def test_growth_example():
    """$1,000 plus $100 a month at 12% compounded monthly for a year."""
    result = savings.calculate_savings_growth(1000, 100, 0.12, 1)
    assert result["final_balance"] == 2408
    assert result["total_contributions"] == 1200
    assert result["total_interest"] == 208
    assert result["effective_rate"] == 12.0
    assert [row["year"] for row in result["yearly_data"]] == [0, 1]
    assert result["yearly_data"][0]["balance"] == 1000


def test_zero_interest():
    result = savings.calculate_savings_growth(1000, 100, 0.0, 2)
    assert result["final_balance"] == 3400
    assert result["total_interest"] == 0
    assert [row["total_contributions"] for row in result["yearly_data"]] == [0, 1200, 2400]


def test_annual_compounding_spreads_contributions():
    """Annual compounding pays the year's contributions as one deposit."""
    result = savings.calculate_savings_growth(0, 100, 0.10, 1, compounding_frequency="annually")
    assert result["final_balance"] == 1320


def test_unknown_frequency_compounds_monthly():
    monthly = savings.calculate_savings_growth(5000, 250, 0.05, 5)
    unknown = savings.calculate_savings_growth(5000, 250, 0.05, 5, compounding_frequency="hourly")
    assert unknown["final_balance"] == monthly["final_balance"]


def test_growth_requires_positive_years():
    with pytest.raises(InvalidParameterError):
        savings.calculate_savings_growth(1000, 100, 0.05, 0)


def test_goal_already_achieved():
    result = savings.calculate_time_to_goal(5000, 4000, 100, 0.05)
    assert result["achieved"] is True
    assert result["months"] == 0


def test_goal_without_growth_or_contributions():
    result = savings.calculate_time_to_goal(1000, 5000, 0, 0)
    assert result["achieved"] is False
    assert result["months"] is None


def test_time_to_goal_zero_rate():
    result = savings.calculate_time_to_goal(0, 1000, 100, 0.0)
    assert result["achieved"] is True
    assert result["months"] == 10
    assert result["years"] == 0.8
    assert result["total_interest"] == 0


def test_time_to_goal_with_interest_is_faster():
    plain = savings.calculate_time_to_goal(10000, 50000, 500, 0.0)
    earning = savings.calculate_time_to_goal(10000, 50000, 500, 0.06)
    assert earning["months"] < plain["months"] == 80


def test_goal_beyond_horizon():
    """Goals more than 100 years out are reported as not achieved."""
    result = savings.calculate_time_to_goal(0, 1_000_000_000, 1, 0.0)
    assert result["achieved"] is False
    assert "100 years" in result["message"]


def test_required_contribution():
    """Monthly deposit needed to reach a target, zero when already there."""
    assert savings.calculate_required_contribution(5000, 1000, 5, 0.05) == 0
    assert savings.calculate_required_contribution(0, 12000, 1, 0.0) == 1000
    with_interest = savings.calculate_required_contribution(0, 12000, 1, 0.06)
    assert 0 < with_interest < 1000


def test_compare_scenarios():
    results = savings.compare_scenarios(
        1000,
        [
            {"label": "low", "contribution": 100, "rate": 0.02},
            {"label": "high", "contribution": 300, "rate": 0.05},
        ],
        years=10,
    )
    assert [r["label"] for r in results] == ["low", "high"]
    assert results[1]["final_balance"] > results[0]["final_balance"]
    assert results[0]["total_contributions"] == 12000


def test_part_year_daily_compounding():
    """2.5 years of daily compounding runs 913 days and reports three years."""
    result = savings.calculate_savings_growth(1000, 100, 0.05, 2.5, "daily")
    assert [row["year"] for row in result["yearly_data"]] == [0, 1, 2, 3]
    assert result["total_contributions"] == 3002
    assert result["final_balance"] > 1000 + 3002


@pytest.mark.parametrize("years", [0, -3])
def test_required_contribution_rejects_bad_years_when_goal_met(years):
    """The years check applies even when the balance already covers the target."""
    with pytest.raises(InvalidParameterError):
        savings.calculate_required_contribution(5000, 1000, years, 0.05)
