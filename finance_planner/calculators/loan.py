"""Principal-and-interest loan repayments.

Example
-------

>>> result = calculate_loan_repayment(300000, 0.05, 30)
>>> result["payment"], result["total_payments"]
(1610.46, 360)
"""

from __future__ import annotations

from typing import Dict, List

from ..config import PAYMENT_FREQUENCIES
from ..errors import InvalidParameterError
from .reporting import round_money, round_percent
from .simulator import (
    Amortization,
    Scenario,
    annuity_payment,
    annuity_principal,
    iter_periods,
    period_count,
    simulate,
)


def _payments_per_year(payment_frequency: str) -> int:
    return PAYMENT_FREQUENCIES.get(payment_frequency, 12)


def _loan_scenario(loan_amount: float, annual_interest_rate: float, loan_term_years: float,
                   payment_frequency: str) -> Scenario:
    ppy = _payments_per_year(payment_frequency)
    return Scenario(
        principal=loan_amount,
        annual_rate=annual_interest_rate,
        periods=period_count(loan_term_years, ppy),
        periods_per_year=ppy,
    )


def generate_amortization_schedule(
    loan_amount: float,
    annual_interest_rate: float,
    loan_term_years: float,
    payment_frequency: str = "monthly",
) -> List[Dict]:
    """Yearly amortization rows (plus the final payment if it ends mid-year).

    ``principal_payment`` and ``interest_payment`` are the totals repaid
    during that year.
    """
    scenario = _loan_scenario(loan_amount, annual_interest_rate, loan_term_years, payment_frequency)
    payment = annuity_payment(loan_amount, scenario.period_rate, int(scenario.periods))
    _, timeline = simulate(scenario, Amortization(payment), compact=True)
    return [
        {
            "payment": rec.index,
            "year": rec.year,
            "principal_payment": round_money(rec.principal, 2),
            "interest_payment": round_money(rec.interest, 2),
            "total_payment": round_money(payment, 2),
            "remaining_balance": max(0, round_money(rec.balance)),
            "cumulative_principal": round_money(rec.cumulative_principal),
            "cumulative_interest": round_money(rec.cumulative_interest),
        }
        for rec in timeline
    ]


def calculate_loan_repayment(
    loan_amount: float,
    annual_interest_rate: float,
    loan_term_years: float,
    payment_frequency: str = "monthly",
) -> Dict:
    """Repayment amount, totals and yearly schedule for a level-payment loan.

    Parameters
    ----------
    loan_amount : float
        Amount borrowed.
    annual_interest_rate : float
        Nominal annual rate as a fraction.
    loan_term_years : float
        Term in years.
    payment_frequency : str, optional
        ``"weekly"``, ``"fortnightly"`` or ``"monthly"`` (the default, also used
        for unknown values).
    """
    if loan_amount <= 0:
        raise InvalidParameterError("Loan amount must be greater than zero.")
    if loan_term_years <= 0:
        raise InvalidParameterError("Loan term must be greater than zero.")

    scenario = _loan_scenario(loan_amount, annual_interest_rate, loan_term_years, payment_frequency)
    total_payments = int(scenario.periods)
    payment = annuity_payment(loan_amount, scenario.period_rate, total_payments)
    total_paid = payment * total_payments

    return {
        "loan_amount": round_money(loan_amount),
        "payment": round_money(payment, 2),
        "total_payments": total_payments,
        "total_paid": round_money(total_paid),
        "total_interest": round_money(total_paid - loan_amount),
        "payment_frequency": payment_frequency,
        "interest_rate": round_percent(annual_interest_rate, 2),
        "loan_term_years": loan_term_years,
        "schedule": generate_amortization_schedule(
            loan_amount, annual_interest_rate, loan_term_years, payment_frequency
        ),
    }


def calculate_borrowing_capacity(
    desired_payment: float,
    annual_interest_rate: float,
    loan_term_years: float,
    payment_frequency: str = "monthly",
) -> int:
    """Largest loan a ``desired_payment`` per period repays over the term."""
    ppy = _payments_per_year(payment_frequency)
    periods = period_count(loan_term_years, ppy)
    if periods <= 0:
        raise InvalidParameterError("Loan term must be greater than zero.")
    return round_money(annuity_principal(desired_payment, annual_interest_rate / ppy, periods))


def calculate_extra_payment_impact(
    loan_amount: float,
    annual_interest_rate: float,
    loan_term_years: float,
    extra_payment: float,
    payment_frequency: str = "monthly",
) -> Dict:
    """Compare the standard repayment with one that adds ``extra_payment`` each period."""
    standard = calculate_loan_repayment(loan_amount, annual_interest_rate, loan_term_years, payment_frequency)
    ppy = _payments_per_year(payment_frequency)
    enhanced_payment = standard["payment"] + extra_payment

    scenario = Scenario(
        principal=loan_amount,
        annual_rate=annual_interest_rate,
        periods=standard["total_payments"] * 2,
        periods_per_year=ppy,
    )
    payments = 0
    total_interest = 0.0
    total_paid = 0.0
    for period, state, flows in iter_periods(scenario, Amortization(enhanced_payment)):
        payments = period
        total_interest += flows.interest
        total_paid += flows.flow
        if state.balance <= 0:
            break

    years_with_extra = payments / ppy
    return {
        "standard": {
            "payment": standard["payment"],
            "total_payments": standard["total_payments"],
            "total_paid": standard["total_paid"],
            "total_interest": standard["total_interest"],
            "years": loan_term_years,
        },
        "with_extra": {
            "payment": round_money(enhanced_payment, 2),
            "total_payments": payments,
            "total_paid": round_money(total_paid),
            "total_interest": round_money(total_interest),
            "years": round_money(years_with_extra, 1),
        },
        "savings": {
            "interest_saved": round_money(standard["total_interest"] - total_interest),
            "time_saved": round_money(loan_term_years - years_with_extra, 1),
        },
    }


__all__ = [
    "calculate_loan_repayment",
    "generate_amortization_schedule",
    "calculate_borrowing_capacity",
    "calculate_extra_payment_impact",
]
