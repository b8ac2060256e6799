"""Tests for the age pension means test (2024-25 single and couple rates)."""

import copy

import numpy as np
import pytest

from finance_planner import InvalidParameterError
from finance_planner.calculators import pension
from finance_planner.config import load_pension_rules


def test_full_pension_at_threshold():
    """Assets and income at the free areas leave the maximum rate."""
    result = pension.calculate_age_pension(age=67, assessable_assets=301750, annual_income=0)
    assert result.eligible
    assert result.entitlement == pytest.approx(1116.30)
    # both tests give the maximum; ties are reported as income
    assert result.binding_test == "income"


def test_assets_test_binds():
    """$3 a fortnight is lost per $1,000 of assets over the free area."""
    result = pension.calculate_age_pension(age=70, assessable_assets=401750, annual_income=0)
    assert result.entitlement == pytest.approx(816.30)
    assert result.binding_test == "assets"


def test_income_test_binds():
    """Income over the free area reduces the pension by 50c in the dollar."""
    # 10140 a year is 390 a fortnight, 200 over the free area
    result = pension.calculate_age_pension(age=70, assessable_assets=0, annual_income=10140)
    assert result.entitlement == pytest.approx(1016.30)
    assert result.binding_test == "income"


def test_large_assets_floor_at_zero():
    result = pension.calculate_age_pension(age=70, assessable_assets=2_000_000, annual_income=0)
    assert result.entitlement == 0.0
    assert not result.eligible
    assert result.binding_test == "assets"


def test_couple_non_homeowner_rates():
    result = pension.calculate_age_pension(
        age=68, assessable_assets=693500, annual_income=0, is_couple=True, is_homeowner=False
    )
    assert result.entitlement == pytest.approx(1682.80)
    assert result.assets_threshold == 693500


def test_below_pension_age():
    """No entitlement before pension age."""
    result = pension.calculate_age_pension(age=60, assessable_assets=0, annual_income=0)
    assert not result.eligible
    assert result.binding_test is None
    assert result.years_until_eligible == 7

    summary = pension.summarize_age_pension(result)
    assert summary == {"eligible": False, "reason": "Must be 67 or older", "years_until_eligible": 7}


def test_entitlement_within_bounds():
    for assets in np.linspace(0, 1_500_000, 16):
        for income in np.linspace(0, 60_000, 7):
            result = pension.calculate_age_pension(67, float(assets), float(income))
            assert 0.0 <= result.entitlement <= result.max_entitlement
            assert result.entitlement == min(result.assets_candidate, result.income_candidate)


def test_summary_amounts():
    """Fortnightly amounts are annualised over 26 fortnights."""
    result = pension.calculate_age_pension(age=70, assessable_assets=401750, annual_income=0)
    summary = pension.summarize_age_pension(result, 401750, 0)
    assert summary["fortnightly_amount"] == pytest.approx(816.3)
    assert summary["annual_amount"] == 21224
    assert summary["max_pension"] == 29024
    assert summary["reduction_reason"] == "assets"
    assert summary["assets_test"]["threshold"] == 301750


def test_custom_rules():
    rules = copy.deepcopy(load_pension_rules())
    rules["2024-25"]["pension_age"] = 60
    result = pension.calculate_age_pension(age=62, assessable_assets=0, annual_income=0, rules=rules)
    assert result.eligible
    assert result.pension_age == 60


def test_unknown_year():
    with pytest.raises(InvalidParameterError):
        pension.calculate_age_pension(age=70, assessable_assets=0, annual_income=0, year="1999-00")
