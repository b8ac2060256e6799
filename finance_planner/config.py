"""Default assumptions and rule-table loading.

Calculator defaults are kept in one plain dictionary so the forms and the
calculators agree on them.  Rule tables that change with each tax year
(income tax brackets, Medicare levy, offsets, stamp duty and pension
thresholds) are shipped as JSON under ``finance_planner/data`` and keyed by
year, e.g. ``"2024-25"``.  Every evaluator accepts an explicit mapping with the
same schema so a new year can be supplied without touching the code.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from .errors import InvalidParameterError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"
_DEFAULT_TAX_TABLE_PATH = DATA_DIR / "tax_tables.json"
_DEFAULT_PENSION_RULES_PATH = DATA_DIR / "pension_rules.json"

DEFAULT_YEAR = "2024-25"

# All rates are fractions.  Amounts are in whole currency units.
DEFAULTS = {
    # Growth assumptions
    "return_rate": 0.07,
    "inflation_rate": 0.025,
    "fee_rate": 0.0085,
    "compounding_frequency": "monthly",

    # Savings and loans
    "savings_rate": 0.03,
    "loan_rate": 0.05,
    "payment_frequency": "monthly",

    # Superannuation
    "super_guarantee_rate": 0.115,
    "max_personal_contribution_rate": 0.5,

    # Drawdown
    "withdrawal_rate": 0.04,
    "minimum_drawdown": 0.05,
    "annuity_rate": 0.05,
    "account_based_return": 0.06,
    "years_in_retirement": 30,

    # Property
    "property_appreciation_rate": 0.05,
    "maintenance_cost_rate": 0.01,
    "investment_return_rate": 0.07,
    "rent_increase_rate": 0.03,
    "council_rates": 2000.0,
    "home_insurance": 1500.0,
    "other_buying_cost_rate": 0.05,
    "affordability_ratio": 0.28,
    "affordability_rate": 0.06,
}

COMPOUNDING_FREQUENCIES = {
    "daily": 365,
    "monthly": 12,
    "quarterly": 4,
    "annually": 1,
}

PAYMENT_FREQUENCIES = {
    "weekly": 52,
    "fortnightly": 26,
    "monthly": 12,
}


def percent_to_fraction(value: Optional[float], default: Optional[float] = None) -> Optional[float]:
    """Convert a whole-number percentage (``7``) to a fraction (``0.07``).

    ``None`` and empty strings fall back to ``default`` so optional form fields
    pick up the calculator defaults.
    """
    if value is None or value == "":
        return default
    return float(value) / 100.0


def _load_json(path: Path) -> Dict[str, Dict]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


@lru_cache(maxsize=None)
def _cached_tables(path: str) -> Dict[str, Dict]:
    logger.debug("Loading rule tables from %s", path)
    return _load_json(Path(path))


def load_tax_tables(path: Optional[Path] = None) -> Dict[str, Dict]:
    """Load the tax tables, defaulting to the file shipped with the package."""
    return _cached_tables(str(path or _DEFAULT_TAX_TABLE_PATH))


def load_pension_rules(path: Optional[Path] = None) -> Dict[str, Dict]:
    """Load the pension means-test rules, defaulting to the packaged file."""
    return _cached_tables(str(path or _DEFAULT_PENSION_RULES_PATH))


def year_rules(tables: Dict[str, Dict], year: str = DEFAULT_YEAR) -> Dict:
    """Return the rules for ``year`` or raise if the year is not configured."""
    try:
        return tables[str(year)]
    except KeyError:
        raise InvalidParameterError(
            f"No rules configured for year {year!r}; available: {sorted(tables)}"
        ) from None


__all__ = [
    "DEFAULTS",
    "DEFAULT_YEAR",
    "COMPOUNDING_FREQUENCIES",
    "PAYMENT_FREQUENCIES",
    "percent_to_fraction",
    "load_tax_tables",
    "load_pension_rules",
    "year_rules",
]
