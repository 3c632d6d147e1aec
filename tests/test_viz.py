"""Tests for the Plotly figure builders and HTML export."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
import pytest

from aiimpact import compute, io as aio, viz


@pytest.fixture
def dashboard() -> compute.DashboardData:
    return compute.build_dashboard(aio.load_sample())


def test_build_figures_one_per_target(dashboard):
    figures = viz.build_figures(dashboard)
    assert tuple(figures) == viz.CHART_TARGETS
    assert all(isinstance(fig, go.Figure) for fig in figures.values())


def test_bubble_uses_country_records(dashboard):
    fig = viz.fig_bubble(dashboard.dominance)
    trace = fig.data[0]
    assert len(trace.x) == len(dashboard.dominance)
    assert trace.marker.sizemode == "area"
    assert fig.layout.title.text.startswith("AI Dominance")


def test_quadrant_lines_at_axis_means(dashboard):
    fig = viz.fig_quadrant(dashboard.adoption)
    vertical, horizontal = fig.layout.shapes
    assert vertical.x0 == pytest.approx(dashboard.adoption["adoption"].mean())
    assert horizontal.y0 == pytest.approx(dashboard.adoption["volume"].mean())


def test_tool_performance_grouped_bars(dashboard):
    fig = viz.fig_tool_performance(dashboard.tools)
    assert fig.layout.barmode == "group"
    assert [t.name for t in fig.data] == ["Revenue increase (%)", "Market share (%)"]
    assert list(fig.data[0].x) == dashboard.tools["tool"].tolist()


def test_trend_scatter_has_points_and_trend(dashboard):
    fig = viz.fig_trend_scatter(dashboard.job_loss_adoption, "Adoption", "Job loss", "Job Loss vs Adoption")
    scatter, trend = fig.data
    assert scatter.mode == "markers"
    assert trend.mode == "lines"
    assert list(trend.x) == [5.0, 15.0, 25.0, 35.0, 45.0, 55.0, 65.0, 75.0, 85.0, 95.0]


def test_industry_resilience_horizontal_bars(dashboard):
    fig = viz.fig_industry_resilience(dashboard.resilience)
    bar = fig.data[0]
    assert bar.orientation == "h"
    assert bar.marker.reversescale is True
    assert fig.layout.margin.l == 150


def test_empty_records_give_placeholder_figures():
    empty = compute.build_dashboard(pd.DataFrame())
    figures = viz.build_figures(empty)
    for fig in figures.values():
        assert len(fig.data) == 0
        assert "unavailable" in fig.layout.title.text


def test_chart_layout_titles():
    layout = viz.chart_layout("Title", "X", "Y")
    assert layout["title"]["text"] == "Title"
    assert layout["xaxis"]["title"]["text"] == "X"
    assert "title" not in viz.chart_layout(None, None, None)


def test_dashboard_html_has_one_div_per_target(dashboard):
    html = viz.dashboard_html(viz.build_figures(dashboard))
    for target in viz.CHART_TARGETS:
        assert f'id="{target}"' in html
    assert html.count("cdn.plot.ly") == 1


def test_bubble_accepts_negative_revenue():
    rows = pd.DataFrame(
        {
            "Country": ["A", "B"],
            "AI-Generated Content Volume (TBs per year)": ["10", "20"],
            "Market Share of AI Companies (%)": ["5", "6"],
            "Revenue Increase Due to AI (%)": ["-5", "12"],
        }
    )
    figures = viz.build_figures(compute.build_dashboard(rows))
    trace = figures["chart-dominance"].data[0]
    assert list(trace.marker.size) == [0.0, 12.0]
    assert trace.text[0] == "A<br>Rev: -5.0%"


def test_dashboard_html_escapes_title(dashboard):
    html = viz.dashboard_html(viz.build_figures(dashboard), title="<AI & Jobs>")
    assert "<title>&lt;AI &amp; Jobs&gt;</title>" in html
