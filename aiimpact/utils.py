from __future__ import annotations

import numbers
import re
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd


# Source headers of the Global AI Content Impact dataset, keyed by the short
# names used throughout the dashboard.
COLUMNS: Dict[str, str] = {
    "country": "Country",
    "year": "Year",
    "industry": "Industry",
    "adoption": "AI Adoption Rate (%)",
    "volume": "AI-Generated Content Volume (TBs per year)",
    "job_loss": "Job Loss Due to AI (%)",
    "revenue": "Revenue Increase Due to AI (%)",
    "collaboration": "Human-AI Collaboration Rate (%)",
    "tool": "Top AI Tools Used",
    "regulation": "Regulation Status",
    "trust": "Consumer Trust in AI (%)",
    "market_share": "Market Share of AI Companies (%)",
}

# Trend lines bucket percentages over [0, 100].
TREND_BINS: Dict[str, int] = {
    "width": 10,
    "count": 10,
}

PLOTLY_CONFIG: Dict[str, object] = {
    "displaylogo": False,
    "responsive": True,
}

THEME: Dict[str, str] = {
    "title": "#e2e8f0",
    "font": "#cbd5e1",
    "grid": "#334155",
    "guide": "#94a3b8",
    "scatter": "#475569",
    "trend": "#ef4444",
    "point": "#38bdf8",
    "revenue": "#10b981",
    "market_share": "#6366f1",
    "font_family": '"Inter", "Segoe UI", sans-serif',
}

# Leading numeric prefix, as read by a browser's parseFloat.
_NUMBER_RE = re.compile(r"[+-]?(?:Infinity|\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_numeric(value: Any) -> float:
    """
    Interpret a raw cell as a float, falling back to 0.

    The first percent sign is dropped, then the longest leading number is
    read, so ``"42%"`` gives 42 and ``"12abc"`` gives 12. Cells without a
    leading number, ``None``, NaN and booleans map to ``0.0``.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, numbers.Real):
        number = float(value)
        return 0.0 if np.isnan(number) else number
    text = str(value).replace("%", "", 1).strip()
    match = _NUMBER_RE.match(text)
    if match is None:
        return 0.0
    return float(match.group())


def numeric_column(frame: pd.DataFrame, field: str) -> pd.Series:
    """Parsed values of ``field``; zeros when the column is missing."""
    if field not in frame.columns:
        return pd.Series(0.0, index=frame.index, dtype=float)
    return frame[field].map(parse_numeric).astype(float)


def fmt_pct(x: Optional[float]) -> str:
    """Format a value already expressed in percent."""
    if x is None or not np.isfinite(x):
        return "—"
    return f"{x:.1f}%"
