"""Pytest configuration for aiimpact tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import pytest


def pytest_configure() -> None:
    # Make the aiimpact package importable when running tests from the repo root.
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


@pytest.fixture
def impact_rows() -> pd.DataFrame:
    """Small table using the real dataset headers, raw string cells."""
    return pd.DataFrame(
        {
            "Country": ["USA", "USA", "France", "Japan"],
            "Industry": ["Media", "Finance", "Media", "Legal"],
            "AI Adoption Rate (%)": ["80", "60%", "35", "150"],
            "AI-Generated Content Volume (TBs per year)": ["10", "20", "5", "bad"],
            "Job Loss Due to AI (%)": ["10", "30", "20", "40"],
            "Revenue Increase Due to AI (%)": ["50", "70", "20", "10"],
            "Human-AI Collaboration Rate (%)": ["40", "50", "80", "-5"],
            "Top AI Tools Used": ["ChatGPT", "Claude", "ChatGPT", "Bard"],
            "Market Share of AI Companies (%)": ["20", "30", "10", "5"],
        }
    )
