"""Australian resident income tax and take-home pay.

Income tax is evaluated against the progressive brackets of the selected tax
year.  The Low Income Tax Offset (LITO) is subtracted and the Medicare levy
(with its shading-in range for low incomes) is added; the total is never
negative.  Superannuation guarantee contributions are reported either on top
of the salary or carved out of a package that includes them.

All thresholds live in ``data/tax_tables.json``; pass ``tax_tables`` with the
same schema to evaluate a different year.

Example
-------

>>> # Income tax on $100 000 of taxable income (2024-25)
>>> round(compute_income_tax(100000), 2)
22967.0

>>> # Net tax after the Medicare levy and offsets
>>> round(compute_net_tax(100000), 2)
24967.0
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..config import DEFAULT_YEAR, load_tax_tables, year_rules
from ..errors import InvalidParameterError
from . import brackets
from .reporting import round_money, round_percent
from .solver import bisect


def _rules(year: str, tax_tables: Optional[Dict[str, Dict]]) -> Dict:
    return year_rules(tax_tables or load_tax_tables(), year)


def income_tax_table(year: str = DEFAULT_YEAR, tax_tables: Optional[Dict[str, Dict]] = None) -> brackets.BracketTable:
    """Bracket table for the given tax year."""
    return brackets.BracketTable.from_rows(_rules(year, tax_tables)["income_tax"]["brackets"])


def compute_income_tax(
    taxable_income: float,
    year: str = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Progressive income tax before offsets and levies."""
    return brackets.evaluate(income_tax_table(year, tax_tables), taxable_income)


def compute_lito(
    taxable_income: float,
    year: str = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Low Income Tax Offset."""
    lito = _rules(year, tax_tables)["lito"]
    return brackets.phased_offset(
        taxable_income,
        maximum=float(lito["maximum"]),
        threshold=float(lito["threshold"]),
        phase_out_rate=float(lito["phase_out_rate"]),
        cutoff=float(lito["cutoff"]),
    )


def compute_medicare_levy(
    taxable_income: float,
    year: str = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Medicare levy for a single person with no dependants."""
    levy = _rules(year, tax_tables)["medicare_levy"]
    return brackets.shaded_levy(
        taxable_income,
        threshold=float(levy["threshold"]),
        rate=float(levy["rate"]),
        shade_band=float(levy["shade_band"]),
        shade_rate=float(levy["shade_rate"]),
    )


def compute_net_tax(
    taxable_income: float,
    year: str = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Income tax minus LITO plus the Medicare levy, floored at zero."""
    tables = tax_tables or load_tax_tables()
    income_tax = compute_income_tax(taxable_income, year, tables)
    lito = compute_lito(taxable_income, year, tables)
    levy = compute_medicare_levy(taxable_income, year, tables)
    return max(0.0, income_tax - lito + levy)


def compute_super(annual_income: float, super_rate: float) -> float:
    """Superannuation guarantee contribution on ``annual_income``."""
    return annual_income * super_rate


def marginal_tax_rate(
    taxable_income: float,
    year: str = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Marginal rate in percent, including the full Medicare levy rate."""
    rules = _rules(year, tax_tables)
    table = brackets.BracketTable.from_rows(rules["income_tax"]["brackets"])
    rate = brackets.marginal_rate(table, taxable_income, add_on=float(rules["medicare_levy"]["rate"]))
    return round_percent(rate)


def _split_package(annual_salary: float, include_super_in_package: bool, super_rate: float):
    """Return ``(base_salary, super_contribution)``."""
    if include_super_in_package:
        base = annual_salary / (1.0 + super_rate)
        return base, annual_salary - base
    return annual_salary, compute_super(annual_salary, super_rate)


def net_income(
    annual_salary: float,
    include_super_in_package: bool = False,
    super_rate: Optional[float] = None,
    pre_tax_deductions: float = 0.0,
    post_tax_deductions: float = 0.0,
    year: str = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Unrounded annual take-home pay; the objective used by the salary searches."""
    tables = tax_tables or load_tax_tables()
    if super_rate is None:
        super_rate = float(year_rules(tables, year)["super_guarantee_rate"])
    base, _ = _split_package(annual_salary, include_super_in_package, super_rate)
    taxable = base - pre_tax_deductions
    return taxable - compute_net_tax(taxable, year, tables) - post_tax_deductions


def calculate_net_salary(
    annual_salary: float,
    include_super_in_package: bool = False,
    super_rate: Optional[float] = None,
    pre_tax_deductions: float = 0.0,
    post_tax_deductions: float = 0.0,
    year: str = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> Dict:
    """Break a gross salary down into super, tax and take-home pay.

    Parameters
    ----------
    annual_salary : float
        Gross annual salary (or total package when ``include_super_in_package``).
    include_super_in_package : bool, optional
        When True the salary already contains super and it is backed out.
    super_rate : float, optional
        Super guarantee rate; defaults to the tax year's rate (11.5% for 2024-25).
    pre_tax_deductions, post_tax_deductions : float, optional
        Salary sacrifice reduces taxable income; post-tax deductions reduce
        take-home pay only.

    Returns
    -------
    dict
        Gross, super, taxable income, tax, deductions and net amounts per
        year, month, fortnight and week.
    """
    tables = tax_tables or load_tax_tables()
    if super_rate is None:
        super_rate = float(year_rules(tables, year)["super_guarantee_rate"])

    base, super_contribution = _split_package(annual_salary, include_super_in_package, super_rate)
    taxable = base - pre_tax_deductions

    income_tax = compute_income_tax(taxable, year, tables)
    lito = compute_lito(taxable, year, tables)
    levy = compute_medicare_levy(taxable, year, tables)
    total_tax = max(0.0, income_tax - lito + levy)
    net = taxable - total_tax - post_tax_deductions

    effective_rate = total_tax / taxable if taxable > 0 else 0.0
    take_home = net / annual_salary if annual_salary > 0 else 0.0

    return {
        "gross": {
            "annual_salary": round_money(annual_salary),
            "monthly_salary": round_money(annual_salary / 12),
            "fortnightly_salary": round_money(annual_salary / 26),
            "weekly_salary": round_money(annual_salary / 52),
        },
        "superannuation": {
            "annual": round_money(super_contribution),
            "monthly": round_money(super_contribution / 12),
            "rate": round_percent(super_rate),
            "included_in_package": include_super_in_package,
        },
        "taxable_income": round_money(taxable),
        "tax": {
            "income_tax": round_money(income_tax),
            "lito": round_money(lito),
            "medicare_levy": round_money(levy),
            "total_tax": round_money(total_tax),
            "effective_rate": round_percent(effective_rate),
            "marginal_rate": marginal_tax_rate(taxable, year, tables),
        },
        "deductions": {
            "pre_tax": round_money(pre_tax_deductions),
            "post_tax": round_money(post_tax_deductions),
            "total": round_money(pre_tax_deductions + post_tax_deductions),
        },
        "net": {
            "annual_income": round_money(net),
            "monthly_income": round_money(net / 12),
            "fortnightly_income": round_money(net / 26),
            "weekly_income": round_money(net / 52),
            "daily_income": round_money(net / 365),
        },
        "take_home_percentage": round_percent(take_home),
    }


def compare_salaries(salaries: Iterable[float], **kwargs) -> List[Dict]:
    """Net salary breakdown for each salary, keyed by the input salary."""
    return [{"salary": salary, **calculate_net_salary(salary, **kwargs)} for salary in salaries]


def required_gross_salary(
    target_take_home: float,
    year: str = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> Dict:
    """Gross salary whose take-home pay equals ``target_take_home``.

    Searches between the target and twice the target, to the nearest dollar.
    """
    tables = tax_tables or load_tax_tables()
    if target_take_home <= 0:
        required = 0.0
    else:
        required = bisect(
            lambda salary: net_income(salary, year=year, tax_tables=tables),
            target_take_home,
            lower=target_take_home,
            upper=target_take_home * 2,
            tolerance=1.0,
        )
    result = calculate_net_salary(required, year=year, tax_tables=tables)
    return {
        "target_take_home": round_money(target_take_home),
        "required_gross_salary": round_money(required),
        "actual_take_home": result["net"]["annual_income"],
        "tax_payable": result["tax"]["total_tax"],
        "superannuation": result["superannuation"]["annual"],
    }


def required_salary_increase(
    current_salary: float,
    desired_take_home_increase: float,
    year: str = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> Dict:
    """Pay rise needed for take-home pay to grow by ``desired_take_home_increase``.

    Searches upward from the current salary.  The upper bound is three times
    the salary or the salary plus twice the wanted increase, whichever is
    larger.
    """
    if current_salary < 0:
        raise InvalidParameterError("Current salary cannot be negative.")
    tables = tax_tables or load_tax_tables()
    current_net = net_income(current_salary, year=year, tax_tables=tables)
    if desired_take_home_increase <= 0:
        required = current_salary
    else:
        required = bisect(
            lambda salary: net_income(salary, year=year, tax_tables=tables),
            current_net + desired_take_home_increase,
            lower=current_salary,
            upper=max(current_salary * 3, current_salary + 2 * desired_take_home_increase),
            tolerance=1.0,
        )
    new_net = net_income(required, year=year, tax_tables=tables)
    increase = required - current_salary
    take_home_increase = new_net - current_net
    return {
        "current_salary": round_money(current_salary),
        "required_salary": round_money(required),
        "salary_increase": round_money(increase),
        "salary_increase_percentage": round_percent(increase / current_salary) if current_salary > 0 else 0.0,
        "current_take_home": round_money(current_net),
        "new_take_home": round_money(new_net),
        "take_home_increase": round_money(take_home_increase),
        "tax_on_increase": round_money(increase - take_home_increase),
    }


__all__ = [
    "income_tax_table",
    "compute_income_tax",
    "compute_lito",
    "compute_medicare_levy",
    "compute_net_tax",
    "compute_super",
    "marginal_tax_rate",
    "net_income",
    "calculate_net_salary",
    "compare_salaries",
    "required_gross_salary",
    "required_salary_increase",
]
