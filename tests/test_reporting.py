"""Tests for rounding helpers, timeline views and rule-table loading."""

import math

import numpy as np
import pandas as pd
import pytest

from finance_planner import InvalidParameterError
from finance_planner.calculators.reporting import (
    round_money,
    round_percent,
    timeline_frame,
    timeline_rows,
    timeline_series,
)
from finance_planner.calculators.simulator import Accumulation, Scenario, simulate
from finance_planner.config import load_tax_tables, percent_to_fraction, year_rules


@pytest.mark.parametrize(
    "value, places, expected",
    [(0.5, 0, 1), (2.5, 0, 3), (-2.5, 0, -3), (1234.4, 0, 1234), (0.125, 2, 0.13), (12.34, 1, 12.3)],
)
def test_round_half_away_from_zero(value, places, expected):
    assert round_money(value, places) == expected


def test_round_money_types():
    assert isinstance(round_money(12.7), int)
    assert isinstance(round_money(12.7, 2), float)
    small = round_money(-0.0001, 2)
    assert small == 0.0 and math.copysign(1.0, small) == 1.0


def test_round_percent():
    assert round_percent(0.345) == 34.5
    assert round_percent(0.07, 2) == 7.0


@pytest.fixture
def timeline():
    scenario = Scenario(principal=1000.0, flow=100.0, annual_rate=0.06, periods=36, periods_per_year=12)
    return simulate(scenario, Accumulation(), compact=True).timeline


def test_timeline_rows(timeline):
    rows = timeline_rows(timeline)
    assert [r["year"] for r in rows] == [1, 2, 3]
    assert all(isinstance(r["balance"], int) for r in rows)
    assert rows[-1]["cumulative_flow"] == 3600


def test_timeline_frame(timeline):
    frame = timeline_frame(timeline)
    assert isinstance(frame, pd.DataFrame)
    assert len(frame) == 3
    assert list(frame.columns[:3]) == ["index", "year", "balance"]
    assert frame["index"].tolist() == [12, 24, 36]


def test_timeline_series(timeline):
    series = timeline_series(timeline, "interest")
    assert isinstance(series, np.ndarray)
    assert series.shape == (3,)
    assert np.all(np.diff(timeline_series(timeline)) > 0)


def test_percent_to_fraction():
    assert percent_to_fraction(7) == pytest.approx(0.07)
    assert percent_to_fraction("2.5") == pytest.approx(0.025)
    assert percent_to_fraction(None, 0.04) == 0.04
    assert percent_to_fraction("", 0.04) == 0.04


def test_tax_tables_loaded():
    tables = load_tax_tables()
    rules = year_rules(tables)
    assert rules["super_guarantee_rate"] == 0.115
    assert "NSW" in rules["stamp_duty"]
    with pytest.raises(InvalidParameterError):
        year_rules(tables, "1990-91")
