"""Buying versus renting the same home.

The buyer pays the deposit, stamp duty and other purchase costs up front,
then the mortgage plus maintenance, council rates and insurance each year
while the property appreciates.  The renter keeps the deposit invested and
each month invests the difference between the mortgage payment and the rent
(drawing on the investment when rent is higher).  Both positions are
compared year by year as what each side owns minus what it has spent.

Example
-------

>>> calculate_stamp_duty(14000)
175.0
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..config import DEFAULT_YEAR, DEFAULTS, load_tax_tables, year_rules
from ..errors import InvalidParameterError
from . import brackets
from .reporting import round_money, round_percent
from .simulator import Scenario, annuity_principal, period_count, simulate_offset

logger = logging.getLogger(__name__)


def stamp_duty_table(
    state: str = "NSW",
    year: str = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> brackets.BracketTable:
    duties = year_rules(tax_tables or load_tax_tables(), year)["stamp_duty"]
    if state not in duties:
        raise InvalidParameterError(f"No stamp duty table for {state!r}; available: {sorted(duties)}")
    return brackets.BracketTable.from_rows(duties[state]["brackets"])


def calculate_stamp_duty(
    property_price: float,
    state: str = "NSW",
    year: str = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Transfer duty on a purchase of ``property_price``."""
    return brackets.evaluate(stamp_duty_table(state, year, tax_tables), property_price)


def calculate_comparison(
    property_price: float,
    deposit: float,
    mortgage_rate: float,
    mortgage_term: int,
    monthly_rent: float,
    rent_increase_rate: float = DEFAULTS["rent_increase_rate"],
    property_appreciation_rate: float = DEFAULTS["property_appreciation_rate"],
    investment_return_rate: float = DEFAULTS["investment_return_rate"],
    years: int = 30,
    state: str = "NSW",
    tax_year: str = DEFAULT_YEAR,
) -> Dict:
    """Year-by-year net position of buying against renting and investing.

    Parameters
    ----------
    property_price, deposit : float
        Purchase price and the cash put towards it.
    mortgage_rate : float
        Annual mortgage rate as a fraction.
    mortgage_term : int
        Mortgage term in years.
    monthly_rent : float
        Rent in the first year.
    rent_increase_rate, property_appreciation_rate, investment_return_rate : float, optional
        Annual fractions.
    years : int, optional
        Comparison horizon; may be longer than the mortgage term.
    state, tax_year : str, optional
        Stamp duty table used for the upfront costs.

    Returns
    -------
    dict
        ``buying`` and ``renting`` summaries with yearly timelines, and a
        ``comparison`` with the first year buying is ahead (``None`` if never).
    """
    if years <= 0:
        raise InvalidParameterError("Years must be greater than zero.")
    if mortgage_term <= 0:
        raise InvalidParameterError("Mortgage term must be greater than zero.")
    if deposit > property_price:
        raise InvalidParameterError("Deposit cannot exceed the property price.")

    loan_amount = property_price - deposit
    stamp_duty = calculate_stamp_duty(property_price, state, tax_year)
    other_costs = property_price * DEFAULTS["other_buying_cost_rate"]
    upfront = deposit + stamp_duty + other_costs

    offset = simulate_offset(
        mortgage=Scenario(
            principal=loan_amount,
            annual_rate=mortgage_rate,
            periods=period_count(mortgage_term, 12),
            periods_per_year=12,
        ),
        investment=Scenario(
            principal=deposit,
            annual_rate=investment_return_rate,
            periods=period_count(years, 12),
            periods_per_year=12,
        ),
        monthly_rent=monthly_rent,
        rent_increase_rate=rent_increase_rate,
        property_value=property_price,
        appreciation_rate=property_appreciation_rate,
    )

    fixed_costs = DEFAULTS["council_rates"] + DEFAULTS["home_insurance"]
    buying_timeline: List[Dict] = []
    renting_timeline: List[Dict] = []
    buying_total = upfront
    renting_total = 0.0
    opening_value = property_price
    for loan, invested, value, rent in zip(
        offset.buying, offset.renting, offset.property_values, offset.annual_rents
    ):
        # maintenance on the value held during the year
        annual_cost = loan.flow + opening_value * DEFAULTS["maintenance_cost_rate"] + fixed_costs
        buying_total += annual_cost
        renting_total += rent
        opening_value = value

        equity = value - loan.balance
        buying_timeline.append({
            "year": loan.year,
            "total_cost": round_money(buying_total),
            "property_value": round_money(value),
            "remaining_balance": round_money(loan.balance),
            "equity": round_money(equity),
            "net_position": round_money(equity - buying_total),
            "annual_cost": round_money(annual_cost),
        })
        renting_timeline.append({
            "year": invested.year,
            "total_cost": round_money(renting_total),
            "investment_value": round_money(invested.balance),
            "net_position": round_money(invested.balance - renting_total),
            "annual_cost": round_money(rent),
        })

    break_even_year = next(
        (b["year"] for b, r in zip(buying_timeline, renting_timeline) if b["net_position"] >= r["net_position"]),
        None,
    )
    final_buy = buying_timeline[-1]
    final_rent = renting_timeline[-1]
    logger.debug("Buy-vs-rent over %d years: break-even year %s", years, break_even_year)

    return {
        "buying": {
            "upfront_costs": round_money(upfront),
            "stamp_duty": round_money(stamp_duty),
            "monthly_payment": round_money(offset.monthly_payment),
            "final_property_value": final_buy["property_value"],
            "final_equity": final_buy["equity"],
            "total_cost": final_buy["total_cost"],
            "final_net_position": final_buy["net_position"],
            "timeline": buying_timeline,
        },
        "renting": {
            "initial_investment": round_money(deposit),
            "monthly_rent": round_money(monthly_rent),
            "final_investment_value": final_rent["investment_value"],
            "total_cost": final_rent["total_cost"],
            "final_net_position": final_rent["net_position"],
            "timeline": renting_timeline,
        },
        "comparison": {
            "break_even_year": break_even_year,
            "buying_advantage": final_buy["net_position"] - final_rent["net_position"],
            "better": "buying" if final_buy["net_position"] >= final_rent["net_position"] else "renting",
        },
    }


def calculate_affordability(
    annual_income: float,
    monthly_debts: float,
    deposit: float,
    interest_rate: float = DEFAULTS["affordability_rate"],
    loan_term_years: int = 30,
) -> Dict:
    """Largest purchase price supported by housing costs of 28% of gross income."""
    max_monthly_payment = max(0.0, annual_income / 12 * DEFAULTS["affordability_ratio"] - monthly_debts)
    max_loan = annuity_principal(max_monthly_payment, interest_rate / 12, loan_term_years * 12)
    max_price = max_loan + deposit
    return {
        "max_property_price": round_money(max_price),
        "max_loan_amount": round_money(max_loan),
        "max_monthly_payment": round_money(max_monthly_payment),
        "deposit": round_money(deposit),
        "loan_to_value_ratio": round_percent(max_loan / max_price, 0) if max_price > 0 else 0,
    }


__all__ = [
    "stamp_duty_table",
    "calculate_stamp_duty",
    "calculate_comparison",
    "calculate_affordability",
]
