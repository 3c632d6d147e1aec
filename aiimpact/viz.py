from __future__ import annotations

import html
from typing import Dict, Mapping, Optional, Tuple

import pandas as pd
import plotly.graph_objects as go

from . import compute, utils


# Container ids, one per chart, in page order.
CHART_TARGETS: Tuple[str, ...] = (
    "chart-dominance",
    "chart-productivity",
    "chart-tools",
    "chart-job-loss-adoption",
    "chart-job-loss-collaboration",
    "chart-resilience",
)

T = utils.THEME


def _empty(title: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(chart_layout(title, None, None))
    return fig


def chart_layout(title: Optional[str], x_title: Optional[str], y_title: Optional[str]) -> Dict[str, object]:
    """Dark transparent layout shared by every chart."""
    xaxis = dict(gridcolor=T["grid"], zerolinecolor=T["grid"], automargin=True)
    yaxis = dict(xaxis)
    if x_title:
        xaxis["title"] = dict(text=x_title)
    if y_title:
        yaxis["title"] = dict(text=y_title)
    layout: Dict[str, object] = dict(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=T["font"], family=T["font_family"]),
        margin=dict(t=100, b=80, l=80, r=40),
        xaxis=xaxis,
        yaxis=yaxis,
        hovermode="closest",
    )
    if title:
        layout["title"] = dict(text=title, font=dict(size=18, color=T["title"]), x=0, xanchor="left")
    return layout


def fig_bubble(
    records: pd.DataFrame,
    x: str = "volume",
    y: str = "market_share",
    size: str = "revenue",
    label: str = "country",
    x_title: str = "Volume (TB/year)",
    y_title: str = "Market share (%)",
    title: str = "AI Dominance: Volume vs Market Share vs Revenue",
) -> go.Figure:
    if records.empty:
        return _empty("Dominance chart unavailable")
    fig = go.Figure(
        go.Scatter(
            x=records[x],
            y=records[y],
            text=[f"{name}<br>Rev: {value:.1f}%" for name, value in zip(records[label], records[size])],
            mode="markers",
            marker=dict(
                # plotly rejects negative sizes; the hover text keeps the real value
                size=records[size].clip(lower=0),
                sizeref=2,
                sizemode="area",
                color=records[x],
                colorscale="Viridis",
                showscale=True,
                colorbar=dict(title="Volume", thickness=10),
            ),
        )
    )
    fig.update_layout(chart_layout(title, x_title, y_title))
    return fig


def fig_quadrant(
    records: pd.DataFrame,
    x: str = "adoption",
    y: str = "volume",
    label: str = "country",
    x_title: str = "Adoption rate (%)",
    y_title: str = "Content volume (TB/year)",
    title: str = "Productivity Matrix: Adoption vs Output",
) -> go.Figure:
    lines = compute.quadrant_lines(records, x, y)
    if lines is None:
        return _empty("Productivity matrix unavailable")
    x_avg, y_avg = lines
    fig = go.Figure(
        go.Scatter(
            x=records[x],
            y=records[y],
            text=records[label],
            mode="markers",
            marker=dict(color=T["point"], size=10, line=dict(color="#fff", width=1)),
        )
    )
    guide = dict(color=T["guide"], width=1, dash="dash")
    fig.update_layout(
        chart_layout(title, x_title, y_title),
        shapes=[
            dict(type="line", x0=x_avg, x1=x_avg, y0=0, y1=1, xref="x", yref="paper", line=guide),
            dict(type="line", x0=0, x1=1, y0=y_avg, y1=y_avg, xref="paper", yref="y", line=guide),
        ],
    )
    return fig


def fig_tool_performance(records: pd.DataFrame) -> go.Figure:
    if records.empty:
        return _empty("Tool performance unavailable")
    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=records["tool"],
            y=records["revenue"],
            name="Revenue increase (%)",
            marker=dict(color=T["revenue"]),
        )
    )
    fig.add_trace(
        go.Bar(
            x=records["tool"],
            y=records["market_share"],
            name="Market share (%)",
            marker=dict(color=T["market_share"]),
        )
    )
    fig.update_layout(
        chart_layout("Top Tools: Revenue Impact vs Popularity", "Tool", "Percent"),
        barmode="group",
        legend=dict(orientation="h", y=1.1),
    )
    return fig


def fig_trend_scatter(
    trend_data: compute.TrendData,
    x_title: str,
    y_title: str,
    title: str,
) -> go.Figure:
    scatter = trend_data.scatter
    trend = trend_data.trend
    if scatter.empty:
        return _empty(f"{title} unavailable")
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=scatter["x"],
            y=scatter["y"],
            text=scatter["label"],
            mode="markers",
            name="Data points",
            marker=dict(color=T["scatter"], size=6, opacity=0.4),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=trend["x"],
            y=trend["y"],
            customdata=trend[["count"]].values,
            mode="lines",
            name="Mean trend",
            line=dict(color=T["trend"], width=4, shape="spline"),
            hovertemplate="Bin midpoint: %{x}<br>Mean: %{y:.2f}<br>n = %{customdata[0]}<extra></extra>",
        )
    )
    fig.update_layout(
        chart_layout(title, x_title, y_title),
        showlegend=True,
        legend=dict(orientation="h", y=1.1),
    )
    return fig


def fig_industry_resilience(records: pd.DataFrame) -> go.Figure:
    if records.empty:
        return _empty("Industry resilience unavailable")
    fig = go.Figure(
        go.Bar(
            x=records["collaboration"],
            y=records["industry"],
            orientation="h",
            marker=dict(
                color=records["job_loss"],
                colorscale="RdYlGn",
                reversescale=True,  # red = high job loss
                showscale=True,
                colorbar=dict(title="Job loss %", thickness=15),
            ),
            text=[f"Loss: {utils.fmt_pct(v)}" for v in records["job_loss"]],
            textposition="auto",
        )
    )
    layout = chart_layout("Resilience by Industry: Collaborative Safe Zones", "Collaboration rate (%)", "")
    layout["margin"]["l"] = 150
    fig.update_layout(layout, height=500)
    return fig


def build_figures(data: compute.DashboardData) -> Dict[str, go.Figure]:
    """Map each chart target id to its figure."""
    figures = (
        fig_bubble(data.dominance),
        fig_quadrant(data.adoption),
        fig_tool_performance(data.tools),
        fig_trend_scatter(
            data.job_loss_adoption,
            "Adoption rate (%)",
            "Job loss (%)",
            "Job Loss vs Adoption",
        ),
        fig_trend_scatter(
            data.job_loss_collaboration,
            "Collaboration rate (%)",
            "Job loss (%)",
            "Job Loss vs Collaboration",
        ),
        fig_industry_resilience(data.resilience),
    )
    return dict(zip(CHART_TARGETS, figures))


def dashboard_html(figures: Mapping[str, go.Figure], title: str = "AI Content Impact Dashboard") -> str:
    """Standalone page with one div per target id; plotly.js is loaded once."""
    parts = []
    for idx, (target, fig) in enumerate(figures.items()):
        parts.append(
            fig.to_html(
                full_html=False,
                include_plotlyjs="cdn" if idx == 0 else False,
                div_id=target,
                config=utils.PLOTLY_CONFIG,
            )
        )
    body = "\n".join(f'<section class="chart">{part}</section>' for part in parts)
    return (
        "<!DOCTYPE html>\n"
        f'<html><head><meta charset="utf-8"><title>{html.escape(title)}</title>'
        "<style>body{background:#0f172a;margin:0;padding:24px;}"
        ".chart{margin-bottom:32px;}</style></head>\n"
        f"<body>\n{body}\n</body></html>\n"
    )
