"""Retirement income: drawdown sustainability and income sources.

Success rates here are rule-of-thumb tiers keyed on the withdrawal rate, not
a stochastic simulation.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..config import DEFAULTS
from ..errors import InvalidParameterError
from .pension import calculate_age_pension as _assess_age_pension
from .pension import summarize_age_pension
from .reporting import round_money, round_percent
from .simulator import Decumulation, Scenario, simulate

# (withdrawal rate above which, estimated success rate), checked in order
SUCCESS_TIERS = (
    (0.06, 0.50),
    (0.05, 0.70),
    (0.04, 0.90),
    (0.03, 0.95),
)


def recommended_withdrawal_rate(years_in_retirement: int) -> float:
    """4% rule, tightened for long and loosened for short retirements."""
    if years_in_retirement > 40:
        return 0.035
    if years_in_retirement < 20:
        return 0.045
    return DEFAULTS["withdrawal_rate"]


def estimated_success_rate(withdrawal_rate: float) -> float:
    for above, success in SUCCESS_TIERS:
        if withdrawal_rate > above:
            return success
    return 1.0


def calculate_safe_withdrawal(
    portfolio_value: float,
    annual_expenses: float,
    years_in_retirement: int = DEFAULTS["years_in_retirement"],
    expected_return: float = DEFAULTS["return_rate"],
    inflation_rate: float = DEFAULTS["inflation_rate"],
) -> Dict:
    """Assess whether ``annual_expenses`` can be drawn from ``portfolio_value``.

    Expenses are withdrawn at the start of each year and rise with inflation;
    the remainder earns ``expected_return``.  The timeline stops in the year
    the portfolio runs out.

    Parameters
    ----------
    portfolio_value : float
        Invested assets at retirement.
    annual_expenses : float
        First-year spending.
    years_in_retirement : int, optional
        Planning horizon.
    expected_return, inflation_rate : float, optional
        Annual fractions.
    """
    if portfolio_value <= 0:
        raise InvalidParameterError("Portfolio value must be greater than zero.")
    if years_in_retirement <= 0:
        raise InvalidParameterError("Years in retirement must be greater than zero.")

    dynamic_rate = recommended_withdrawal_rate(years_in_retirement)
    actual_rate = annual_expenses / portfolio_value

    scenario = Scenario(
        principal=portfolio_value,
        flow=annual_expenses,
        annual_rate=expected_return,
        periods=years_in_retirement,
        periods_per_year=1,
        escalation_rate=inflation_rate,
    )
    _, records = simulate(scenario, Decumulation())

    timeline: List[Dict] = []
    depleted = False
    for rec in records:
        timeline.append({
            "year": rec.year,
            "withdrawal": round_money(rec.flow),
            "portfolio_value": round_money(rec.balance),
            "withdrawal_rate": round_percent(rec.flow / rec.balance, 2) if rec.balance > 0 else 0.0,
        })
        if rec.balance <= 0:
            depleted = True
            break

    return {
        "portfolio_value": round_money(portfolio_value),
        "safe_withdrawal_4_percent": round_money(portfolio_value * DEFAULTS["withdrawal_rate"]),
        "dynamic_safe_withdrawal": round_money(portfolio_value * dynamic_rate),
        "recommended_rate": round_percent(dynamic_rate),
        "requested_withdrawal": round_money(annual_expenses),
        "actual_rate": round_percent(actual_rate),
        "estimated_success_rate": round_percent(estimated_success_rate(actual_rate), 0),
        "years_until_depletion": timeline[-1]["year"],
        "depleted": depleted,
        "timeline": timeline,
    }


def compare_annuity_vs_account_based(
    super_balance: float,
    annuity_rate: float = DEFAULTS["annuity_rate"],
    investment_return: float = DEFAULTS["account_based_return"],
    years_in_retirement: int = DEFAULTS["years_in_retirement"],
    minimum_drawdown: float = DEFAULTS["minimum_drawdown"],
) -> Dict:
    """Fixed lifetime annuity versus an account-based pension at the minimum drawdown."""
    if years_in_retirement <= 0:
        raise InvalidParameterError("Years in retirement must be greater than zero.")

    annual_annuity = super_balance * annuity_rate
    annuity_timeline = [
        {
            "year": year,
            "payment": round_money(annual_annuity),
            "total_received": round_money(annual_annuity * year),
            "remaining_value": 0,
        }
        for year in range(1, years_in_retirement + 1)
    ]
    total_annuity = annual_annuity * years_in_retirement

    scenario = Scenario(
        principal=super_balance,
        annual_rate=investment_return,
        periods=years_in_retirement,
        periods_per_year=1,
    )
    final_account, records = simulate(scenario, Decumulation(fraction=minimum_drawdown))
    account_timeline = [
        {
            "year": rec.year,
            "payment": round_money(rec.flow),
            "total_received": round_money(rec.cumulative_flow),
            "remaining_value": round_money(rec.balance),
        }
        for rec in records
    ]
    total_account = records[-1].cumulative_flow
    account_total_value = total_account + final_account

    return {
        "initial_balance": round_money(super_balance),
        "annuity": {
            "annual_payment": round_money(annual_annuity),
            "total_received": round_money(total_annuity),
            "residual_value": 0,
            "guaranteed_income": True,
            "timeline": annuity_timeline,
        },
        "account_based": {
            "initial_payment": account_timeline[0]["payment"],
            "total_received": round_money(total_account),
            "residual_value": round_money(final_account),
            "guaranteed_income": False,
            "timeline": account_timeline,
        },
        "comparison": {
            "total_difference": round_money(account_total_value - total_annuity),
            "better": "account_based" if account_total_value > total_annuity else "annuity",
            "flexibility_advantage": "account_based",
            "security_advantage": "annuity",
        },
    }


def calculate_age_pension(
    age: float,
    assessable_assets: float,
    annual_income: float,
    is_couple: bool = False,
    is_homeowner: bool = True,
    rules: Optional[Dict[str, Dict]] = None,
) -> Dict:
    """Means-tested age pension as a reporting dict."""
    result = _assess_age_pension(
        age, assessable_assets, annual_income, is_couple=is_couple, is_homeowner=is_homeowner, rules=rules
    )
    summary = summarize_age_pension(result, assessable_assets, annual_income)
    if result.binding_test is None:
        summary["current_age"] = age
    return summary


def calculate_total_retirement_income(
    super_balance: float,
    other_investments: float,
    rental_income: float,
    age: float,
    is_couple: bool = False,
    is_homeowner: bool = True,
) -> Dict:
    """Combine super drawdown, investment income, rent and the age pension.

    Super is drawn at the minimum rate and other investments at the safe
    withdrawal rate.  The pension is means-tested on the combined balances
    with deemed income at the safe withdrawal rate.
    """
    super_drawdown = super_balance * DEFAULTS["minimum_drawdown"]
    investment_income = other_investments * DEFAULTS["withdrawal_rate"]
    total_assets = super_balance + other_investments

    pension = calculate_age_pension(
        age,
        total_assets,
        total_assets * DEFAULTS["withdrawal_rate"],
        is_couple=is_couple,
        is_homeowner=is_homeowner,
    )
    pension_income = pension["annual_amount"] if pension["eligible"] else 0

    total = super_drawdown + investment_income + rental_income + pension_income

    def share(amount: float) -> int:
        return round_money(amount / total * 100) if total > 0 else 0

    return {
        "total_annual_income": round_money(total),
        "monthly_income": round_money(total / 12),
        "breakdown": {
            "superannuation": round_money(super_drawdown),
            "investments": round_money(investment_income),
            "rental_income": round_money(rental_income),
            "age_pension": pension_income,
        },
        "age_pension_details": pension,
        "percentages": {
            "super": share(super_drawdown),
            "investments": share(investment_income),
            "rental": share(rental_income),
            "age_pension": share(pension_income),
        },
    }


__all__ = [
    "SUCCESS_TIERS",
    "recommended_withdrawal_rate",
    "estimated_success_rate",
    "calculate_safe_withdrawal",
    "compare_annuity_vs_account_based",
    "calculate_age_pension",
    "calculate_total_retirement_income",
]
