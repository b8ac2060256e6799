"""Helper package that exposes the financial calculators.

The core modules are shared by every calculator:

* ``simulator`` – time-stepped balance projection with accumulation,
  amortization, decumulation and buy-versus-rent step policies.
* ``solver`` – bisection search used to invert a projection for a target.
* ``brackets`` – progressive bracket tables, levy shading and offset phase-out.
* ``pension`` – age pension assets and income means tests.
* ``reporting`` – rounding and tabular views of timelines.

The calculators built on them are ``fire``, ``savings``, ``loan``,
``superannuation``, ``taxes``, ``retirement_income``, ``mortgage_vs_rent``,
``portfolio`` and ``net_worth``.  Each exposes a few public functions that take
plain numbers (rates as fractions) and return dictionaries of rounded results.
"""

from . import (  # noqa: F401
    brackets,
    fire,
    loan,
    mortgage_vs_rent,
    net_worth,
    pension,
    portfolio,
    reporting,
    retirement_income,
    savings,
    simulator,
    solver,
    superannuation,
    taxes,
)

__all__ = [
    "brackets",
    "fire",
    "loan",
    "mortgage_vs_rent",
    "net_worth",
    "pension",
    "portfolio",
    "reporting",
    "retirement_income",
    "savings",
    "simulator",
    "solver",
    "superannuation",
    "taxes",
]
