from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd

from . import utils
from .logging import get_logger


logger = get_logger(__name__)

Rows = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]
Reducer = Callable[[pd.DataFrame], float]

C = utils.COLUMNS


@dataclass(frozen=True)
class TrendData:
    scatter: pd.DataFrame
    trend: pd.DataFrame


@dataclass(frozen=True)
class DashboardData:
    dominance: pd.DataFrame
    adoption: pd.DataFrame
    tools: pd.DataFrame
    job_loss_adoption: TrendData
    job_loss_collaboration: TrendData
    resilience: pd.DataFrame


def as_frame(rows: Rows) -> pd.DataFrame:
    """Accept a DataFrame or any sequence of row mappings."""
    if isinstance(rows, pd.DataFrame):
        return rows
    return pd.DataFrame.from_records(list(rows))


def sum_of(field: str) -> Reducer:
    """Reducer: sum of the parsed values of ``field`` (0 for an empty group)."""

    def reduce(group: pd.DataFrame) -> float:
        return float(utils.numeric_column(group, field).sum())

    return reduce


def mean_of(field: str) -> Reducer:
    """Reducer: arithmetic mean of the parsed values of ``field``."""

    def reduce(group: pd.DataFrame) -> float:
        return float(utils.numeric_column(group, field).mean())

    return reduce


def aggregate(
    rows: Rows,
    group_by: str,
    reducers: Mapping[str, Reducer],
    key_name: Optional[str] = None,
) -> pd.DataFrame:
    """
    Group rows by the exact value of ``group_by`` and reduce each group.

    Every reducer receives the full group and its result is stored under its
    output name. The key column is called ``key_name`` (``group_by`` when not
    given). Returns one record per distinct key in first-seen order; callers
    sort as needed.
    """
    frame = as_frame(rows)
    key_name = key_name or group_by
    columns = [key_name, *reducers]
    if frame.empty:
        return pd.DataFrame(columns=columns)

    if group_by in frame.columns:
        keys = frame[group_by]
    else:
        keys = pd.Series([None] * len(frame), index=frame.index, name=group_by, dtype=object)

    records = []
    for key, group in frame.groupby(keys, sort=False, dropna=False):
        record: Dict[str, Any] = {key_name: key}
        for name, reducer in reducers.items():
            record[name] = reducer(group)
        records.append(record)

    logger.debug("aggregate by %r: %d rows -> %d groups", group_by, len(frame), len(records))
    return pd.DataFrame.from_records(records, columns=columns)


def bin_and_average(
    rows: Rows,
    x_field: str,
    y_field: str,
    parse: Callable[[Any], float] = utils.parse_numeric,
    *,
    width: int = utils.TREND_BINS["width"],
    count: int = utils.TREND_BINS["count"],
) -> pd.DataFrame:
    """
    Mean of ``y_field`` per fixed-width bucket of ``x_field``.

    Always returns ``count`` rows with columns ``x`` (bucket midpoint),
    ``y`` (mean y, 0 for an empty bucket) and ``count`` (observations).
    Out-of-range x values saturate into the first/last bucket.
    """
    frame = as_frame(rows)
    if frame.empty:
        xs = np.zeros(0)
        ys = np.zeros(0)
    else:
        xs = np.asarray([parse(v) for v in _raw(frame, x_field)], dtype=float)
        ys = np.asarray([parse(v) for v in _raw(frame, y_field)], dtype=float)

    raw_idx = np.floor(xs / width)
    clamped = int(((raw_idx < 0) | (raw_idx > count - 1)).sum())
    if clamped:
        # Outliers are merged into the boundary buckets, not dropped.
        logger.debug("%d value(s) of %r outside [0, %s) clamped into edge bins", clamped, x_field, width * count)
    idx = np.clip(raw_idx, 0, count - 1).astype(int)

    sums = np.bincount(idx, weights=ys, minlength=count)
    counts = np.bincount(idx, minlength=count)
    means = np.divide(sums, counts, out=np.zeros(count, dtype=float), where=counts > 0)

    return pd.DataFrame(
        {
            "x": np.arange(count, dtype=float) * width + width / 2,
            "y": means,
            "count": counts.astype(int),
        }
    )


def _raw(frame: pd.DataFrame, field: str) -> pd.Series:
    if field in frame.columns:
        return frame[field]
    return pd.Series([None] * len(frame), index=frame.index, dtype=object)


def scatter_points(rows: Rows, x_field: str, y_field: str, label_field: str) -> pd.DataFrame:
    """One point per row, both axes parsed."""
    frame = as_frame(rows)
    if frame.empty:
        return pd.DataFrame(columns=["x", "y", "label"])
    return pd.DataFrame(
        {
            "x": utils.numeric_column(frame, x_field).values,
            "y": utils.numeric_column(frame, y_field).values,
            "label": _raw(frame, label_field).values,
        }
    )


def quadrant_lines(records: pd.DataFrame, x: str, y: str) -> Optional[Tuple[float, float]]:
    """Mean of each axis across the chart records, used as quadrant dividers."""
    if records.empty:
        return None
    return float(records[x].mean()), float(records[y].mean())


def country_dominance(rows: Rows) -> pd.DataFrame:
    return aggregate(
        rows,
        C["country"],
        {
            "volume": sum_of(C["volume"]),
            "market_share": mean_of(C["market_share"]),
            "revenue": mean_of(C["revenue"]),
        },
        key_name="country",
    )


def country_adoption(rows: Rows) -> pd.DataFrame:
    return aggregate(
        rows,
        C["country"],
        {
            "adoption": mean_of(C["adoption"]),
            "volume": sum_of(C["volume"]),
        },
        key_name="country",
    )


def tool_performance(rows: Rows) -> pd.DataFrame:
    """Tool statistics, highest revenue increase first."""
    stats = aggregate(
        rows,
        C["tool"],
        {
            "revenue": mean_of(C["revenue"]),
            "market_share": mean_of(C["market_share"]),
        },
        key_name="tool",
    )
    return stats.sort_values("revenue", ascending=False, kind="stable").reset_index(drop=True)


def industry_resilience(rows: Rows) -> pd.DataFrame:
    """Industry statistics, lowest collaboration first (horizontal bars read bottom-up)."""
    stats = aggregate(
        rows,
        C["industry"],
        {
            "collaboration": mean_of(C["collaboration"]),
            "job_loss": mean_of(C["job_loss"]),
        },
        key_name="industry",
    )
    return stats.sort_values("collaboration", ascending=True, kind="stable").reset_index(drop=True)


def job_loss_vs_adoption(rows: Rows) -> TrendData:
    return TrendData(
        scatter=scatter_points(rows, C["adoption"], C["job_loss"], C["country"]),
        trend=bin_and_average(rows, C["adoption"], C["job_loss"]),
    )


def job_loss_vs_collaboration(rows: Rows) -> TrendData:
    return TrendData(
        scatter=scatter_points(rows, C["collaboration"], C["job_loss"], C["industry"]),
        trend=bin_and_average(rows, C["collaboration"], C["job_loss"]),
    )


def build_dashboard(rows: Rows) -> DashboardData:
    """Prepare the six chart datasets from one loaded table."""
    frame = as_frame(rows)
    data = DashboardData(
        dominance=country_dominance(frame),
        adoption=country_adoption(frame),
        tools=tool_performance(frame),
        job_loss_adoption=job_loss_vs_adoption(frame),
        job_loss_collaboration=job_loss_vs_collaboration(frame),
        resilience=industry_resilience(frame),
    )
    logger.info(
        f"Prepared dashboard from {len(frame)} rows: "
        f"{len(data.dominance)} countries, {len(data.tools)} tools, {len(data.resilience)} industries"
    )
    return data
