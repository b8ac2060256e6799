"""Age pension means test.

The pension is assessed under two independent tests and the lower result is
paid:

* **Assets test** – the maximum rate is reduced by a fixed amount per
  fortnight for every $1,000 of assessable assets above the threshold.
  Thresholds differ for singles and couples and for homeowners and
  non-homeowners.
* **Income test** – the maximum rate is reduced by a taper (50 cents in the
  dollar) on fortnightly income above the income free area.

Each candidate is clamped at zero, so the entitlement is never negative and
never exceeds the maximum for the household type.  People below pension age
are reported as ineligible with the number of years remaining.

Rates and thresholds come from ``data/pension_rules.json`` (2024-25 by
default) and can be overridden by passing ``rules``.

Example
-------

>>> result = calculate_age_pension(age=67, assessable_assets=301750, annual_income=0)
>>> result.entitlement
1116.3
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from ..config import DEFAULT_YEAR, load_pension_rules, year_rules
from .reporting import round_money


@dataclass(frozen=True)
class MeansTestResult:
    eligible: bool
    entitlement: float  # fortnightly
    binding_test: Optional[str]  # "assets" or "income"; None below pension age
    assets_candidate: float = 0.0
    income_candidate: float = 0.0
    max_entitlement: float = 0.0
    years_until_eligible: int = 0
    assets_threshold: float = 0.0
    pension_age: int = 0


def _household(is_couple: bool) -> str:
    return "couple" if is_couple else "single"


def assets_test(max_rate: float, assets: float, threshold: float, reduction_per_1000: float) -> float:
    """Fortnightly rate after the assets test."""
    if assets <= threshold:
        return max_rate
    return max(0.0, max_rate - (assets - threshold) / 1000.0 * reduction_per_1000)


def income_test(max_rate: float, fortnightly_income: float, free_area: float, taper: float) -> float:
    """Fortnightly rate after the income test."""
    if fortnightly_income <= free_area:
        return max_rate
    return max(0.0, max_rate - (fortnightly_income - free_area) * taper)


def calculate_age_pension(
    age: float,
    assessable_assets: float,
    annual_income: float,
    is_couple: bool = False,
    is_homeowner: bool = True,
    year: str = DEFAULT_YEAR,
    rules: Optional[Dict[str, Dict]] = None,
) -> MeansTestResult:
    """Assess the fortnightly age pension for one household.

    Parameters
    ----------
    age : float
        Age of the applicant.
    assessable_assets : float
        Assets counted by the assets test (excluding the home for homeowners).
    annual_income : float
        Assessable income per year; converted to a fortnightly amount.
    is_couple : bool, optional
        Use couple (combined) rates and thresholds.
    is_homeowner : bool, optional
        Homeowners have the lower assets threshold.
    year, rules : optional
        Rule year and an alternative rule mapping with the packaged schema.

    Returns
    -------
    MeansTestResult
        Entitlement per fortnight and the test that produced it.
    """
    r = year_rules(rules or load_pension_rules(), year)
    pension_age = int(r["pension_age"])
    if age < pension_age:
        return MeansTestResult(
            eligible=False,
            entitlement=0.0,
            binding_test=None,
            years_until_eligible=int(pension_age - age),
            pension_age=pension_age,
        )

    household = _household(is_couple)
    max_rate = float(r["max_fortnightly"][household])
    tenure = "homeowner" if is_homeowner else "non_homeowner"
    threshold = float(r["assets_threshold"][household][tenure])

    assets_rate = assets_test(max_rate, assessable_assets, threshold, float(r["assets_reduction_per_1000"]))
    fortnightly_income = annual_income / float(r["fortnights_per_year"])
    income_rate = income_test(
        max_rate, fortnightly_income, float(r["income_free_area"][household]), float(r["income_taper"])
    )

    entitlement = min(assets_rate, income_rate)
    return MeansTestResult(
        eligible=entitlement > 0,
        entitlement=entitlement,
        binding_test="assets" if assets_rate < income_rate else "income",
        assets_candidate=assets_rate,
        income_candidate=income_rate,
        max_entitlement=max_rate,
        assets_threshold=threshold,
        pension_age=pension_age,
    )


def summarize_age_pension(
    result: MeansTestResult,
    assessable_assets: float = 0.0,
    annual_income: float = 0.0,
    fortnights_per_year: int = 26,
) -> Dict:
    """Reporting view of a means-test result."""
    if result.binding_test is None:
        return {
            "eligible": False,
            "reason": f"Must be {result.pension_age} or older",
            "years_until_eligible": result.years_until_eligible,
        }
    return {
        "eligible": result.eligible,
        "fortnightly_amount": round_money(result.entitlement, 2),
        "annual_amount": round_money(result.entitlement * fortnights_per_year),
        "max_pension": round_money(result.max_entitlement * fortnights_per_year),
        "reduction_reason": result.binding_test,
        "assets_test": {
            "assessable_assets": round_money(assessable_assets),
            "threshold": result.assets_threshold,
            "pension_amount": round_money(result.assets_candidate * fortnights_per_year),
        },
        "income_test": {
            "annual_income": round_money(annual_income),
            "pension_amount": round_money(result.income_candidate * fortnights_per_year),
        },
    }


__all__ = [
    "MeansTestResult",
    "assets_test",
    "income_test",
    "calculate_age_pension",
    "summarize_age_pension",
]
