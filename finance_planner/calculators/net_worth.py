"""Net worth snapshot and projection."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from ..errors import InvalidParameterError
from .reporting import round_money, round_percent
from .simulator import Accumulation, Scenario, period_count, simulate

ASSET_CATEGORIES = (
    "Cash & Savings",
    "Investments",
    "Superannuation",
    "Real Estate",
    "Vehicles",
    "Other Assets",
)

LIABILITY_CATEGORIES = (
    "Mortgage",
    "Car Loans",
    "Credit Cards",
    "Student Loans",
    "Personal Loans",
    "Other Debts",
)

LIQUID_CATEGORIES = ("Cash & Savings", "Investments")


def _amount(value) -> float:
    """Parse a form value; blanks and non-numbers count as zero."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _breakdown(items: Mapping[str, float], total: float) -> Dict[str, Dict]:
    breakdown = {}
    for category, raw in items.items():
        amount = _amount(raw)
        if amount > 0:
            breakdown[category] = {
                "amount": amount,
                "percentage": round_percent(amount / total, 2) if total > 0 else 0.0,
            }
    return breakdown


def calculate_liquidity_ratio(assets: Mapping[str, float], total_assets: float) -> float:
    """Cash and investments as a percentage of total assets."""
    if total_assets <= 0:
        return 0.0
    liquid = sum(_amount(assets.get(category)) for category in LIQUID_CATEGORIES)
    return round_percent(liquid / total_assets, 2)


def calculate_net_worth(
    assets: Optional[Mapping[str, float]] = None,
    liabilities: Optional[Mapping[str, float]] = None,
) -> Dict:
    """Totals and category breakdown of assets and liabilities.

    Parameters
    ----------
    assets, liabilities : mapping, optional
        Amount per category.  Categories are free-form; the liquidity ratio
        counts ``"Cash & Savings"`` and ``"Investments"``.
    """
    assets = assets or {}
    liabilities = liabilities or {}
    total_assets = sum(_amount(v) for v in assets.values())
    total_liabilities = sum(_amount(v) for v in liabilities.values())

    return {
        "net_worth": round_money(total_assets - total_liabilities),
        "total_assets": round_money(total_assets),
        "total_liabilities": round_money(total_liabilities),
        "asset_breakdown": _breakdown(assets, total_assets),
        "liability_breakdown": _breakdown(liabilities, total_liabilities),
        "debt_to_asset_ratio": round_percent(total_liabilities / total_assets, 2) if total_assets > 0 else 0.0,
        "liquidity_ratio": calculate_liquidity_ratio(assets, total_assets),
    }


def project_net_worth_growth(
    current_net_worth: float,
    monthly_savings: float,
    investment_return: float = 0.07,
    years: int = 10,
) -> List[Dict]:
    """Yearly net worth when ``monthly_savings`` are added after each month's return."""
    if years <= 0:
        raise InvalidParameterError("Years must be greater than zero.")
    scenario = Scenario(
        principal=current_net_worth,
        flow=monthly_savings,
        annual_rate=investment_return,
        periods=period_count(years, 12),
        periods_per_year=12,
    )
    _, timeline = simulate(scenario, Accumulation("end"), compact=True)

    projection = [{
        "year": 0,
        "net_worth": round_money(current_net_worth),
        "total_contributions": 0,
        "total_returns": 0,
    }]
    for rec in timeline:
        projection.append({
            "year": rec.year,
            "net_worth": round_money(rec.balance),
            "total_contributions": round_money(rec.cumulative_flow),
            "total_returns": round_money(rec.cumulative_interest),
        })
    return projection


__all__ = [
    "ASSET_CATEGORIES",
    "LIABILITY_CATEGORIES",
    "calculate_liquidity_ratio",
    "calculate_net_worth",
    "project_net_worth_growth",
]
