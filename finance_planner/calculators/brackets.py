"""Progressive bracket evaluation.

A bracket table partitions the non-negative reals into consecutive ranges,
each with a marginal rate.  The amount owed at the lower bound of every
bracket (its *base*) is precomputed when the table is built, so evaluating a
value is a single scan followed by ``base + (value - lower) * rate``.

The same tables drive income tax and stamp duty.  Two auxiliary rules used by
the tax calculator are also defined here: a levy that shades in linearly
above a threshold and an offset that phases out linearly.

Example
-------

>>> table = BracketTable.from_rows([
...     {"start": 0, "end": 18200, "rate": 0.0},
...     {"start": 18200, "end": 45000, "rate": 0.19},
...     {"start": 45000, "end": None, "rate": 0.325},
... ])
>>> round(evaluate(table, 100000), 2)
22967.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from ..errors import InvalidParameterError


@dataclass(frozen=True)
class Bracket:
    lower: float
    upper: float  # math.inf for the top bracket
    rate: float
    base: float = 0.0

    def contains(self, value: float) -> bool:
        return self.lower < value <= self.upper


@dataclass(frozen=True)
class BracketTable:
    """Ordered, gap-free brackets with precomputed bases.

    Build tables with :meth:`from_rows`; the constructor only validates.
    """

    brackets: Tuple[Bracket, ...]

    def __post_init__(self) -> None:
        _validate(self.brackets)

    @classmethod
    def from_rows(cls, rows: Iterable[Dict]) -> "BracketTable":
        """Create a table from ``{"start", "end", "rate"}`` rows.

        ``end`` may be ``None`` for the top bracket.  Bases are accumulated
        as ``base[i] = base[i-1] + (upper[i-1] - lower[i-1]) * rate[i-1]``.
        """
        brackets = []
        base = 0.0
        previous = None
        for row in rows:
            lower = float(row["start"])
            upper = math.inf if row.get("end") is None else float(row["end"])
            rate = float(row["rate"])
            if previous is not None:
                base = previous.base + (previous.upper - previous.lower) * previous.rate
            previous = Bracket(lower=lower, upper=upper, rate=rate, base=base)
            brackets.append(previous)
        return cls(tuple(brackets))

    def __iter__(self):
        return iter(self.brackets)

    def __len__(self) -> int:
        return len(self.brackets)


def _validate(brackets: Tuple[Bracket, ...]) -> None:
    if not brackets:
        raise InvalidParameterError("A bracket table needs at least one bracket.")
    if brackets[0].lower != 0:
        raise InvalidParameterError("The first bracket must start at zero.")
    for i, b in enumerate(brackets):
        if not b.upper > b.lower:
            raise InvalidParameterError(
                f"Bracket {i} has upper bound {b.upper} not above lower bound {b.lower}."
            )
        if math.isinf(b.upper) and i != len(brackets) - 1:
            raise InvalidParameterError("Only the last bracket may be unbounded.")
        if i == 0:
            continue
        prev = brackets[i - 1]
        if b.lower != prev.upper:
            raise InvalidParameterError(
                f"Bracket {i} starts at {b.lower} but bracket {i - 1} ends at {prev.upper}."
            )
        if b.rate < prev.rate:
            raise InvalidParameterError("Marginal rates must not decrease.")
        expected = prev.base + (prev.upper - prev.lower) * prev.rate
        if not math.isclose(b.base, expected, rel_tol=1e-12, abs_tol=1e-9):
            raise InvalidParameterError(
                f"Bracket {i} base {b.base} does not match the accumulated {expected}."
            )


def bracket_for(table: BracketTable, value: float) -> Bracket:
    """Return the bracket containing ``value``; values at or below zero map to the first."""
    if value <= table.brackets[0].lower:
        return table.brackets[0]
    for b in table:
        if b.contains(value):
            return b
    # only reachable when the top bracket is bounded
    return table.brackets[-1]


def evaluate(table: BracketTable, value: float) -> float:
    """Cumulative amount owed on ``value`` under ``table``."""
    if value <= 0:
        return 0.0
    b = bracket_for(table, value)
    return b.base + (min(value, b.upper) - b.lower) * b.rate


def marginal_rate(table: BracketTable, value: float, add_on: float = 0.0) -> float:
    """Marginal rate for ``value`` plus a flat ``add_on`` (e.g. a levy).  Reporting only."""
    return bracket_for(table, value).rate + add_on


def shaded_levy(
    value: float,
    threshold: float,
    rate: float,
    shade_band: float,
    shade_rate: float,
) -> float:
    """Levy that is zero up to ``threshold`` and shades in across ``shade_band``.

    Inside the band the levy is ``(value - threshold) * shade_rate``; above it
    the full ``rate`` applies to the whole value.
    """
    if value <= threshold:
        return 0.0
    if value <= threshold + shade_band:
        return (value - threshold) * shade_rate
    return value * rate


def phased_offset(
    value: float,
    maximum: float,
    threshold: float,
    phase_out_rate: float,
    cutoff: float,
) -> float:
    """Offset that is ``maximum`` up to ``threshold`` and phases out linearly.

    Reduced by ``phase_out_rate`` per unit above the threshold, never below
    zero, and nil from ``cutoff`` onwards.
    """
    if value <= threshold:
        return maximum
    if value < cutoff:
        return max(0.0, maximum - (value - threshold) * phase_out_rate)
    return 0.0


__all__ = [
    "Bracket",
    "BracketTable",
    "bracket_for",
    "evaluate",
    "marginal_rate",
    "shaded_levy",
    "phased_offset",
]
