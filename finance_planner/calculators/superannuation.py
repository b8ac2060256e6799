"""Superannuation balance at retirement.

The projection runs year by year.  Returns net of fees are earned on the
opening balance and the year's contributions are added at the end; salary,
and therefore contributions, grow with inflation from the second year on.
Contributions tax (15% in a taxed fund) and earnings tax are zero unless
supplied.

Example
-------

>>> result = calculate_retirement_balance(60, 61, 100000, 100000)
>>> result["final_balance"]
117650
"""

from __future__ import annotations

import logging
from typing import Dict, List

from ..config import DEFAULTS
from ..errors import InvalidParameterError
from .reporting import round_money, round_percent
from .simulator import Accumulation, Scenario, simulate
from .solver import bisect

logger = logging.getLogger(__name__)


def _scenario(
    current_age: int,
    retirement_age: int,
    current_super: float,
    annual_income: float,
    contribution_rate: float,
    return_rate: float,
    inflation_rate: float,
    fee_rate: float,
    contributions_tax_rate: float,
    earnings_tax_rate: float,
) -> Scenario:
    if retirement_age <= current_age:
        raise InvalidParameterError("Retirement age must be greater than current age.")
    return Scenario(
        principal=current_super,
        flow=annual_income * contribution_rate,
        annual_rate=return_rate,
        periods=retirement_age - current_age,
        periods_per_year=1,
        fee_rate=fee_rate,
        contributions_tax_rate=contributions_tax_rate,
        earnings_tax_rate=earnings_tax_rate,
        escalation_rate=inflation_rate,
    )


def calculate_retirement_balance(
    current_age: int,
    retirement_age: int,
    current_super: float,
    annual_income: float,
    employer_contribution_rate: float = DEFAULTS["super_guarantee_rate"],
    personal_contribution_rate: float = 0.0,
    return_rate: float = DEFAULTS["return_rate"],
    inflation_rate: float = DEFAULTS["inflation_rate"],
    fee_rate: float = DEFAULTS["fee_rate"],
    contributions_tax_rate: float = 0.0,
    earnings_tax_rate: float = 0.0,
) -> Dict:
    """Project a super balance from ``current_age`` to ``retirement_age``.

    Parameters
    ----------
    current_age, retirement_age : int
        Ages in whole years; retirement must come later.
    current_super : float
        Balance today.
    annual_income : float
        Gross salary in the first year.
    employer_contribution_rate, personal_contribution_rate : float, optional
        Contributions as fractions of salary.
    return_rate, inflation_rate, fee_rate : float, optional
        Annual investment return, salary growth and fund fees.
    contributions_tax_rate, earnings_tax_rate : float, optional
        Tax withheld from contributions and from positive net earnings.

    Returns
    -------
    dict
        Final balance, contribution and return totals, a per-age
        ``yearly_data`` list and the assumptions in percent.
    """
    total_rate = employer_contribution_rate + personal_contribution_rate
    scenario = _scenario(
        current_age, retirement_age, current_super, annual_income, total_rate,
        return_rate, inflation_rate, fee_rate, contributions_tax_rate, earnings_tax_rate,
    )
    final_balance, timeline = simulate(scenario, Accumulation("end"))

    employer_share = employer_contribution_rate / total_rate if total_rate > 0 else 0.0
    yearly_data: List[Dict] = []
    total_employer = total_personal = 0.0
    total_fees = total_tax = 0.0
    for rec in timeline:
        employer = rec.flow * employer_share
        personal = rec.flow - employer
        total_employer += employer
        total_personal += personal
        total_fees += rec.fees
        total_tax += rec.tax
        yearly_data.append({
            "age": current_age + rec.index,
            "balance": round_money(rec.balance),
            "employer_contribution": round_money(employer),
            "personal_contribution": round_money(personal),
            "returns": round_money(rec.interest),
            "fees": round_money(rec.fees),
            "tax": round_money(rec.tax),
        })

    return {
        "final_balance": round_money(final_balance),
        "current_super": round_money(current_super),
        "total_employer_contributions": round_money(total_employer),
        "total_personal_contributions": round_money(total_personal),
        "total_returns": round_money(timeline[-1].cumulative_interest),
        "total_fees": round_money(total_fees),
        "total_tax": round_money(total_tax),
        "total_contributions": round_money(total_employer + total_personal),
        "years": retirement_age - current_age,
        "yearly_data": yearly_data,
        "assumptions": {
            "return_rate": round_percent(return_rate, 2),
            "inflation_rate": round_percent(inflation_rate, 2),
            "fee_rate": round_percent(fee_rate, 2),
            "employer_contribution_rate": round_percent(employer_contribution_rate, 2),
            "personal_contribution_rate": round_percent(personal_contribution_rate, 2),
        },
    }


def final_balance(
    current_age: int,
    retirement_age: int,
    current_super: float,
    annual_income: float,
    personal_contribution_rate: float,
    employer_contribution_rate: float = DEFAULTS["super_guarantee_rate"],
    return_rate: float = DEFAULTS["return_rate"],
    inflation_rate: float = DEFAULTS["inflation_rate"],
    fee_rate: float = DEFAULTS["fee_rate"],
    contributions_tax_rate: float = 0.0,
    earnings_tax_rate: float = 0.0,
) -> float:
    """Unrounded balance at retirement for a given personal contribution rate."""
    scenario = _scenario(
        current_age, retirement_age, current_super, annual_income,
        employer_contribution_rate + personal_contribution_rate,
        return_rate, inflation_rate, fee_rate, contributions_tax_rate, earnings_tax_rate,
    )
    return simulate(scenario, Accumulation("end")).final_balance


def calculate_required_contributions(
    current_age: int,
    retirement_age: int,
    current_super: float,
    target_balance: float,
    annual_income: float,
    return_rate: float = DEFAULTS["return_rate"],
    employer_contribution_rate: float = DEFAULTS["super_guarantee_rate"],
    inflation_rate: float = DEFAULTS["inflation_rate"],
    fee_rate: float = DEFAULTS["fee_rate"],
) -> float:
    """Personal contribution rate, in percent of salary, that reaches ``target_balance``.

    The search is capped at 50% of salary; when even that falls short the
    result approaches 50.
    """
    if retirement_age <= current_age:
        raise InvalidParameterError("Retirement age must be greater than current age.")
    if target_balance <= current_super:
        return 0.0

    def objective(rate: float) -> float:
        return final_balance(
            current_age, retirement_age, current_super, annual_income, rate,
            employer_contribution_rate=employer_contribution_rate,
            return_rate=return_rate,
            inflation_rate=inflation_rate,
            fee_rate=fee_rate,
        )

    rate = bisect(
        objective,
        target_balance,
        lower=0.0,
        upper=DEFAULTS["max_personal_contribution_rate"],
        tolerance=1e-4,
        max_iterations=100,
    )
    logger.debug("Required personal contribution rate %.4f for target %.0f", rate, target_balance)
    return round_percent(rate, 2)


__all__ = [
    "calculate_retirement_balance",
    "calculate_required_contributions",
    "final_balance",
]
