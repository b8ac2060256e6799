"""Savings account projections.

Contributions are quoted per month and spread evenly over the compounding
periods, so a $100 monthly contribution compounded quarterly is paid as $300
per quarter.  Each period the contribution is added first and interest is
then earned on the new balance.

Example
-------

>>> result = calculate_savings_growth(1000, 100, 0.12, 1)
>>> result["final_balance"]
2408
>>> [row["year"] for row in result["yearly_data"]]
[0, 1]
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping

from ..config import COMPOUNDING_FREQUENCIES
from ..errors import InvalidParameterError
from .reporting import round_money, round_percent
from .simulator import Accumulation, Scenario, iter_periods, period_count, simulate

logger = logging.getLogger(__name__)

MAX_MONTHS = 1200  # 100 years


def _periods_per_year(compounding_frequency: str) -> int:
    ppy = COMPOUNDING_FREQUENCIES.get(compounding_frequency)
    if ppy is None:
        logger.debug("Unknown compounding frequency %r, using monthly", compounding_frequency)
        return 12
    return ppy


def calculate_savings_growth(
    initial_balance: float,
    monthly_contribution: float,
    annual_interest_rate: float,
    years: int,
    compounding_frequency: str = "monthly",
) -> Dict:
    """Project a savings balance with regular contributions.

    Parameters
    ----------
    initial_balance : float
        Opening balance.
    monthly_contribution : float
        Amount saved each month.
    annual_interest_rate : float
        Nominal annual rate as a fraction.
    years : int
        Projection length in whole years.
    compounding_frequency : str, optional
        ``"daily"``, ``"monthly"``, ``"quarterly"`` or ``"annually"``; anything
        else compounds monthly.

    Returns
    -------
    dict
        Totals plus ``yearly_data``, a year-0 opening row followed by one row
        per year.
    """
    if years <= 0:
        raise InvalidParameterError("Years must be greater than zero.")

    ppy = _periods_per_year(compounding_frequency)
    scenario = Scenario(
        principal=initial_balance,
        flow=monthly_contribution * 12 / ppy,
        annual_rate=annual_interest_rate,
        periods=period_count(years, ppy),
        periods_per_year=ppy,
    )
    final_balance, timeline = simulate(scenario, Accumulation(), compact=True)

    yearly_data: List[Dict] = [{
        "year": 0,
        "balance": round_money(initial_balance),
        "contributions": 0,
        "interest": 0,
        "total_contributions": 0,
        "total_interest": 0,
    }]
    for rec in timeline:
        yearly_data.append({
            "year": rec.year,
            "balance": round_money(rec.balance),
            "contributions": round_money(rec.flow),
            "interest": round_money(rec.interest),
            "total_contributions": round_money(rec.cumulative_flow),
            "total_interest": round_money(rec.cumulative_interest),
        })

    last = timeline[-1]
    return {
        "final_balance": round_money(final_balance),
        "initial_balance": round_money(initial_balance),
        "total_contributions": round_money(last.cumulative_flow),
        "total_interest": round_money(last.cumulative_interest),
        "years": years,
        "effective_rate": round_percent(annual_interest_rate, 2),
        "yearly_data": yearly_data,
    }


def calculate_time_to_goal(
    initial_balance: float,
    target_amount: float,
    monthly_contribution: float,
    annual_interest_rate: float,
) -> Dict:
    """Months of saving needed to reach ``target_amount``.

    Stops after 100 years; a goal that takes longer is reported as not
    achievable.
    """
    if target_amount <= initial_balance:
        return {"months": 0, "years": 0.0, "achieved": True, "message": "Goal already achieved!"}

    if monthly_contribution <= 0 and annual_interest_rate <= 0:
        return {
            "months": None,
            "years": None,
            "achieved": False,
            "message": "Cannot reach goal without contributions or interest",
        }

    scenario = Scenario(
        principal=initial_balance,
        flow=monthly_contribution,
        annual_rate=annual_interest_rate,
        periods=MAX_MONTHS,
        periods_per_year=12,
    )
    for month, state, _ in iter_periods(scenario, Accumulation()):
        if state.balance >= target_amount:
            contributed = monthly_contribution * month
            return {
                "months": month,
                "years": round_money(month / 12, 1),
                "achieved": True,
                "final_balance": round_money(state.balance),
                "total_contributions": round_money(contributed),
                "total_interest": round_money(state.balance - initial_balance - contributed),
            }

    return {
        "months": None,
        "years": None,
        "achieved": False,
        "message": "Goal will take more than 100 years to achieve",
    }


def calculate_required_contribution(
    initial_balance: float,
    target_amount: float,
    years: float,
    annual_interest_rate: float,
) -> float:
    """Monthly contribution that grows ``initial_balance`` to ``target_amount``.

    Uses the future value of an ordinary annuity,
    ``FV = PMT * ((1 + r)^n - 1) / r``, after growing the opening balance.
    """
    months = years * 12
    if months <= 0:
        raise InvalidParameterError("Years must be greater than zero.")
    if target_amount <= initial_balance:
        return 0
    monthly_rate = annual_interest_rate / 12

    if monthly_rate == 0:
        return round_money((target_amount - initial_balance) / months)

    growth = (1 + monthly_rate) ** months
    remaining = target_amount - initial_balance * growth
    return round_money(remaining / ((growth - 1) / monthly_rate))


def compare_scenarios(
    initial_balance: float,
    scenarios: Iterable[Mapping],
    years: int,
) -> List[Dict]:
    """Run :func:`calculate_savings_growth` for each ``{label, contribution, rate}``."""
    results = []
    for scenario in scenarios:
        growth = calculate_savings_growth(
            initial_balance, scenario["contribution"], scenario["rate"], years
        )
        results.append({
            "label": scenario.get("label"),
            "final_balance": growth["final_balance"],
            "total_contributions": growth["total_contributions"],
            "total_interest": growth["total_interest"],
        })
    return results


__all__ = [
    "calculate_savings_growth",
    "calculate_time_to_goal",
    "calculate_required_contribution",
    "compare_scenarios",
]
