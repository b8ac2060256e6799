# calculators/fire.py
"""Financial independence targets from the withdrawal-rate rule.

>>> calculate_savings_goal(3000, 0.04)
900000.0
>>> calculate_withdrawal_rate(720000, 3000)
0.05
"""

from __future__ import annotations

from ..errors import InvalidParameterError


def calculate_savings_goal(monthly_expenses: float, withdrawal_rate: float) -> float:
    """Portfolio size whose withdrawals at ``withdrawal_rate`` cover the expenses."""
    if withdrawal_rate <= 0:
        raise InvalidParameterError("Withdrawal rate must be greater than zero.")
    return monthly_expenses * 12 / withdrawal_rate


def calculate_withdrawal_rate(savings_goal: float, monthly_expenses: float) -> float:
    """Fraction of ``savings_goal`` withdrawn each year to fund the expenses."""
    if savings_goal <= 0:
        raise InvalidParameterError("Savings goal must be greater than zero.")
    return monthly_expenses * 12 / savings_goal


__all__ = ["calculate_savings_goal", "calculate_withdrawal_rate"]
