"""Multi-asset investment portfolio projections.

Asset classes are ``stocks``, ``bonds``, ``property`` and ``cash``.
Allocations are fractions of the portfolio keyed by asset class; expected
returns are annual fractions with the same keys.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

import numpy as np

from ..errors import InvalidParameterError
from .reporting import round_money, round_percent
from .simulator import Accumulation, Scenario, period_count, simulate

ASSET_CLASSES = ("stocks", "bonds", "property", "cash")

DEFAULT_ALLOCATION = {"stocks": 0.60, "bonds": 0.30, "property": 0.05, "cash": 0.05}
DEFAULT_RETURNS = {"stocks": 0.10, "bonds": 0.04, "property": 0.08, "cash": 0.02}

RISK_ADJUSTMENTS = {"conservative": -0.20, "moderate": 0.0, "aggressive": 0.20}

# Order in which assets are sold for income, with the tax rate on the gain.
# ``None`` means the capital gains rate supplied by the caller.
WITHDRAWAL_ORDER = (("cash", 0.0), ("bonds", 0.15), ("property", None), ("stocks", None))


def _weights(mapping: Mapping[str, float]) -> np.ndarray:
    return np.array([float(mapping.get(asset, 0.0)) for asset in ASSET_CLASSES])


def weighted_return(allocation: Mapping[str, float], expected_returns: Mapping[str, float]) -> float:
    """Allocation-weighted expected annual return."""
    return float(np.dot(_weights(allocation), _weights(expected_returns)))


def calculate_portfolio_growth(
    initial_investment: float,
    monthly_contribution: float,
    allocation: Optional[Mapping[str, float]] = None,
    expected_returns: Optional[Mapping[str, float]] = None,
    years: int = 30,
    inflation_rate: float = 0.025,
) -> Dict:
    """Project a portfolio at its weighted return with monthly contributions.

    Contributions are invested at the start of each month.  ``real_value``
    deflates the nominal value by ``inflation_rate``.
    """
    if years <= 0:
        raise InvalidParameterError("Years must be greater than zero.")
    allocation = allocation or DEFAULT_ALLOCATION
    expected_returns = expected_returns or DEFAULT_RETURNS
    rate = weighted_return(allocation, expected_returns)

    scenario = Scenario(
        principal=initial_investment,
        flow=monthly_contribution,
        annual_rate=rate,
        periods=period_count(years, 12),
        periods_per_year=12,
    )
    final_value, records = simulate(scenario, Accumulation(), compact=True)

    weights = _weights(allocation)
    timeline: List[Dict] = []
    for rec in records:
        contributed = initial_investment + rec.cumulative_flow
        split = weights * rec.balance
        timeline.append({
            "year": rec.year,
            "portfolio_value": round_money(rec.balance),
            "total_contributions": round_money(contributed),
            "gain_loss": round_money(rec.balance - contributed),
            "real_value": round_money(rec.balance / (1 + inflation_rate) ** rec.year),
            "breakdown": {asset: round_money(value) for asset, value in zip(ASSET_CLASSES, split)},
        })

    total_contributions = initial_investment + records[-1].cumulative_flow
    return {
        "final_value": round_money(final_value),
        "total_contributions": round_money(total_contributions),
        "total_gains": round_money(final_value - total_contributions),
        "real_value": round_money(final_value / (1 + inflation_rate) ** years),
        "weighted_return": round_percent(rate, 2),
        "timeline": timeline,
    }


def optimize_allocation(age: int, retirement_age: int, risk_tolerance: str = "moderate") -> Dict:
    """Rule-of-thumb allocation: stocks at ``100 - age`` percent, adjusted for risk.

    The stock weight is kept between 20% and 90%.  The remainder is split
    more defensively the closer retirement is.
    """
    years_to_retirement = retirement_age - age
    stocks = (100 - age) / 100 + RISK_ADJUSTMENTS.get(risk_tolerance, 0.0)
    stocks = max(0.20, min(0.90, stocks))
    rest = 1 - stocks

    if years_to_retirement < 5:
        bonds, prop, cash = 0.60, 0.10, 0.30
    elif years_to_retirement < 15:
        bonds, prop, cash = 0.50, 0.30, 0.20
    else:
        bonds, prop, cash = 0.40, 0.50, 0.10

    return {
        "stocks": round_money(stocks, 2),
        "bonds": round_money(rest * bonds, 2),
        "property": round_money(rest * prop, 2),
        "cash": round_money(rest * cash, 2),
        "risk_level": risk_tolerance,
        "years_to_retirement": years_to_retirement,
    }


def calculate_rebalancing(
    current_allocation: Mapping[str, float],
    target_allocation: Mapping[str, float],
    threshold: float = 0.05,
) -> Dict:
    """Trades that bring dollar holdings back to the target weights.

    Rebalancing is flagged when any trade exceeds ``threshold`` of the total.
    """
    holdings = _weights(current_allocation)
    total = float(holdings.sum())
    if total <= 0:
        raise InvalidParameterError("Portfolio value must be greater than zero.")
    targets = _weights(target_allocation) * total
    adjustments = targets - holdings

    return {
        "total_value": round_money(total),
        "current_percentages": {a: round_percent(v / total, 0) for a, v in zip(ASSET_CLASSES, holdings)},
        "target_amounts": {a: round_money(v) for a, v in zip(ASSET_CLASSES, targets)},
        "adjustments": {a: round_money(v) for a, v in zip(ASSET_CLASSES, adjustments)},
        "rebalancing_needed": bool(np.any(np.abs(adjustments) > total * threshold)),
    }


def calculate_tax_efficient_withdrawal(
    portfolio_value: float,
    annual_withdrawal: float,
    allocation: Mapping[str, float],
    capital_gains_tax_rate: float = 0.25,
    gain_fraction: float = 0.5,
) -> Dict:
    """Draw income from the least-taxed assets first.

    Cash is used first, then bonds, property and stocks.  ``gain_fraction``
    of each sale is treated as a taxable gain.
    """
    if annual_withdrawal <= 0:
        raise InvalidParameterError("Withdrawal must be greater than zero.")

    plan: List[Dict] = []
    remaining = annual_withdrawal
    total_tax = 0.0
    for asset, tax_rate in WITHDRAWAL_ORDER:
        if remaining <= 0:
            break
        rate = capital_gains_tax_rate if tax_rate is None else tax_rate
        amount = min(remaining, portfolio_value * float(allocation.get(asset, 0.0)))
        tax = amount * gain_fraction * rate
        plan.append({
            "asset": asset,
            "amount": round_money(amount),
            "tax": round_money(tax),
            "after_tax": round_money(amount - tax),
        })
        total_tax += tax
        remaining -= amount

    return {
        "requested_withdrawal": round_money(annual_withdrawal),
        "total_tax": round_money(total_tax),
        "net_withdrawal": round_money(annual_withdrawal - total_tax),
        "effective_tax_rate": round_percent(total_tax / annual_withdrawal, 0),
        "shortfall": round_money(max(0.0, remaining)),
        "withdrawal_plan": plan,
    }


def calculate_dca_vs_lump_sum(
    total_amount: float,
    monthly_amount: float,
    expected_return: float = 0.08,
    years: int = 10,
) -> Dict:
    """Compare investing everything now with drip-feeding ``monthly_amount``.

    Each monthly tranche compounds monthly for the months left in the
    horizon; any amount not drip-fed by the end is invested in one go.
    """
    if monthly_amount <= 0:
        raise InvalidParameterError("Monthly amount must be greater than zero.")
    if years <= 0:
        raise InvalidParameterError("Years must be greater than zero.")
    months = years * 12
    monthly_rate = expected_return / 12

    lump_sum = total_amount * (1 + expected_return) ** years

    dca_months = min(months, int(total_amount // monthly_amount))
    remaining_months = months - np.arange(dca_months)
    dca_value = float(np.sum(monthly_amount * (1 + monthly_rate) ** remaining_months))
    leftover = total_amount - monthly_amount * dca_months
    if leftover > 0:
        dca_value += leftover * (1 + monthly_rate) ** (months - dca_months)

    return {
        "lump_sum": {
            "initial_investment": round_money(total_amount),
            "final_value": round_money(lump_sum),
            "gain": round_money(lump_sum - total_amount),
        },
        "dollar_cost_averaging": {
            "total_invested": round_money(total_amount),
            "monthly_amount": round_money(monthly_amount),
            "investment_period": dca_months,
            "final_value": round_money(dca_value),
            "gain": round_money(dca_value - total_amount),
        },
        "comparison": {
            "difference": round_money(lump_sum - dca_value),
            "better": "lump_sum" if lump_sum > dca_value else "dca",
            "percentage_difference": round_percent((lump_sum - dca_value) / dca_value, 0) if dca_value else 0,
        },
    }


__all__ = [
    "ASSET_CLASSES",
    "DEFAULT_ALLOCATION",
    "DEFAULT_RETURNS",
    "weighted_return",
    "calculate_portfolio_growth",
    "optimize_allocation",
    "calculate_rebalancing",
    "calculate_tax_efficient_withdrawal",
    "calculate_dca_vs_lump_sum",
]
