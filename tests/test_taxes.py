"""Unit tests for the taxes module.

Values use the 2024-25 resident tables in ``data/tax_tables.json``:
brackets from $18,200 (19%, 32.5%, 37%, 45%), LITO of $700 phasing out at
5c above $37,500 and a 2% Medicare levy shading in above $24,276.
"""

import math

import pytest

from finance_planner import InvalidParameterError
from finance_planner.calculators import taxes as tax_calc


def test_income_tax_example():
    """Income tax on $100k: 5092 + 55000 × 0.325."""
    assert math.isclose(tax_calc.compute_income_tax(100000), 22967.0, rel_tol=1e-9)


def test_net_tax_example():
    """Adds the full 2% levy; no LITO at this income."""
    assert math.isclose(tax_calc.compute_net_tax(100000), 24967.0, rel_tol=1e-9)


def test_net_tax_low_income():
    """Low incomes get the offset; tax never goes below zero."""
    # 11800 × 0.19 − 700 + 2% levy
    assert tax_calc.compute_net_tax(30000) == pytest.approx(2142.0)
    # offset exceeds the tax; never negative
    assert tax_calc.compute_net_tax(20000) == 0.0


@pytest.mark.parametrize(
    "income, expected",
    [(20000, 700.0), (37500, 700.0), (40000, 575.0), (51500, 0.0), (66667, 0.0), (100000, 0.0)],
)
def test_lito(income, expected):
    """Full offset to $37,500, then phased out at 5c per dollar."""
    assert tax_calc.compute_lito(income) == pytest.approx(expected)


@pytest.mark.parametrize(
    "income, expected",
    [(20000, 0.0), (24276, 0.0), (26000, 172.4), (50000, 1000.0)],
)
def test_medicare_levy(income, expected):
    """No levy to the threshold, 10% shading above it, then a flat 2%."""
    assert tax_calc.compute_medicare_levy(income) == pytest.approx(expected)


def test_marginal_rate_includes_levy():
    """Marginal rate is the bracket rate plus the 2% levy."""
    assert tax_calc.marginal_tax_rate(100000) == 34.5
    assert tax_calc.marginal_tax_rate(10000) == 2.0


def test_net_salary_breakdown():
    """Take-home pay on $100k with super paid on top."""
    result = tax_calc.calculate_net_salary(100000)
    assert result["taxable_income"] == 100000
    assert result["superannuation"]["annual"] == 11500
    assert result["superannuation"]["rate"] == 11.5
    assert result["tax"]["income_tax"] == 22967
    assert result["tax"]["medicare_levy"] == 2000
    assert result["tax"]["total_tax"] == 24967
    assert result["net"]["annual_income"] == 75033
    assert result["net"]["weekly_income"] == 1443
    assert result["take_home_percentage"] == 75.0


def test_package_includes_super():
    result = tax_calc.calculate_net_salary(111500, include_super_in_package=True)
    assert result["taxable_income"] == 100000
    assert result["superannuation"]["annual"] == 11500
    assert result["superannuation"]["included_in_package"] is True
    assert abs(result["net"]["annual_income"] - 75033) <= 1


def test_deductions():
    result = tax_calc.calculate_net_salary(100000, pre_tax_deductions=10000, post_tax_deductions=1000)
    assert result["taxable_income"] == 90000
    expected = 90000 - tax_calc.compute_net_tax(90000) - 1000
    assert result["net"]["annual_income"] == pytest.approx(expected, abs=0.5)
    assert result["deductions"]["total"] == 11000


def test_compare_salaries():
    rows = tax_calc.compare_salaries([60000, 100000, 150000])
    assert [r["salary"] for r in rows] == [60000, 100000, 150000]
    nets = [r["net"]["annual_income"] for r in rows]
    assert nets == sorted(nets)


def test_required_gross_salary_inverts_net():
    """$75,033 take-home needs a $100k salary."""
    result = tax_calc.required_gross_salary(75033)
    assert abs(result["required_gross_salary"] - 100000) <= 2
    assert abs(result["actual_take_home"] - 75033) <= 2


def test_required_salary_increase():
    """At 34.5% marginal, $1,000 more take-home needs about $1,527 gross."""
    result = tax_calc.required_salary_increase(100000, 1000)
    assert abs(result["take_home_increase"] - 1000) <= 1
    assert abs(result["salary_increase"] - 1527) <= 2
    assert result["tax_on_increase"] == pytest.approx(result["salary_increase"] - result["take_home_increase"], abs=1)


def test_required_salary_increase_from_zero_salary():
    """Below the tax-free threshold every extra dollar earned is kept."""
    result = tax_calc.required_salary_increase(0, 10000)
    assert abs(result["required_salary"] - 10000) <= 2
    assert abs(result["take_home_increase"] - 10000) <= 2
    assert result["salary_increase_percentage"] == 0.0


def test_required_salary_increase_rejects_negative_salary():
    with pytest.raises(InvalidParameterError):
        tax_calc.required_salary_increase(-1, 1000)


def test_unknown_year():
    with pytest.raises(InvalidParameterError):
        tax_calc.compute_income_tax(50000, year="2001-02")
