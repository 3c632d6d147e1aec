"""Unit tests for aiimpact.utils numeric parsing and helpers."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from aiimpact.utils import COLUMNS, TREND_BINS, fmt_pct, numeric_column, parse_numeric


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42%", 42.0),
        ("42", 42.0),
        (" 12.5 % ", 12.5),
        ("-3.25", -3.25),
        (".5", 0.5),
        ("1e2", 100.0),
        (7, 7.0),
        (np.int64(3), 3.0),
        (2.5, 2.5),
        ("12abc", 12.0),
        ("1,000", 1.0),
        ("%42", 42.0),
        ("1e", 1.0),
        ("-Infinity", float("-inf")),
    ],
)
def test_parse_numeric_reads_leading_number(raw, expected):
    assert parse_numeric(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "not a number", "n/a", "%", "abc12", ".e1", float("nan"), True, object()],
)
def test_parse_numeric_falls_back_to_zero(raw):
    assert parse_numeric(raw) == 0.0


def test_parse_numeric_returns_float():
    assert isinstance(parse_numeric(7), float)


def test_numeric_column_parses_each_cell():
    frame = pd.DataFrame({"v": ["10%", "x", None, 4]})
    assert numeric_column(frame, "v").tolist() == [10.0, 0.0, 0.0, 4.0]


def test_numeric_column_missing_field_is_zeros():
    frame = pd.DataFrame({"v": ["1", "2"]})
    series = numeric_column(frame, "missing")
    assert series.tolist() == [0.0, 0.0]
    assert series.dtype == float


def test_columns_cover_dataset_headers():
    assert COLUMNS["adoption"] == "AI Adoption Rate (%)"
    assert COLUMNS["tool"] == "Top AI Tools Used"
    assert TREND_BINS == {"width": 10, "count": 10}


def test_fmt_pct():
    assert fmt_pct(12.345) == "12.3%"
    assert fmt_pct(None) == "—"
    assert fmt_pct(float("nan")) == "—"
