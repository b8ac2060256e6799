"""Unit tests for the FIRE savings-goal helpers."""

import math

import pytest

from finance_planner import InvalidParameterError
from finance_planner.calculators import fire


def test_savings_goal():
    """$3,000 a month at a 4% withdrawal rate needs $900k invested."""
    assert math.isclose(fire.calculate_savings_goal(3000, 0.04), 900000.0)


def test_withdrawal_rate():
    """$36k a year drawn from $720k is a 5% withdrawal rate."""
    assert math.isclose(fire.calculate_withdrawal_rate(720000, 3000), 0.05)


@pytest.mark.parametrize("expenses, rate", [(2500, 0.035), (4000, 0.04), (6000, 0.05)])
def test_goal_and_rate_are_inverse(expenses, rate):
    goal = fire.calculate_savings_goal(expenses, rate)
    assert fire.calculate_withdrawal_rate(goal, expenses) == pytest.approx(rate)


def test_invalid_inputs():
    """A zero rate or an empty portfolio cannot be divided through."""
    with pytest.raises(InvalidParameterError):
        fire.calculate_savings_goal(3000, 0)
    with pytest.raises(InvalidParameterError):
        fire.calculate_withdrawal_rate(0, 3000)
