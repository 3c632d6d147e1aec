from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from aiimpact import compute, io as aio, utils, viz
from aiimpact.logging import configure_logging, get_logger


st.set_page_config(
    page_title="AI Content Impact Dashboard",
    page_icon="🤖",
    layout="wide",
)

configure_logging()
logger = get_logger(__name__)


def _load_styles() -> None:
    css_path = Path(__file__).parent / "assets" / "styles.css"
    if css_path.exists():
        with css_path.open("r") as f:
            st.markdown(f"<style>{f.read()}</style>", unsafe_allow_html=True)


@st.cache_data(show_spinner=False)
def load_dataset(
    source_type: str,
    file_bytes: Optional[bytes],
    file_name: Optional[str],
    default_path: Optional[str],
) -> pd.DataFrame:
    if source_type == "sample":
        return aio.load_sample()
    if source_type == "default":
        if default_path is None:
            raise FileNotFoundError("Default dataset not available.")
        return aio.load_default(default_path)
    if source_type == "upload":
        if file_bytes is None or file_name is None:
            raise ValueError("No file provided for upload.")
        buffer = io.BytesIO(file_bytes)
        buffer.name = file_name
        return aio.load_table(buffer)
    raise ValueError(f"Unsupported source type: {source_type}")


def render_chart(target: str, fig: go.Figure, container) -> None:
    """Draw one figure into its own container."""
    with container:
        st.plotly_chart(fig, key=target, config=utils.PLOTLY_CONFIG, width="stretch")


def render_dashboard(figures: Dict[str, go.Figure]) -> None:
    targets = list(figures)
    for start in range(0, len(targets), 2):
        cols = st.columns(2)
        for col, target in zip(cols, targets[start:start + 2]):
            render_chart(target, figures[target], col)


def main() -> None:
    _load_styles()
    st.title("AI Content Impact Dashboard")
    st.caption("Adoption, output, revenue and job-loss metrics by country, industry and tool.")

    default_data_path = aio.default_path()

    with st.sidebar:
        st.header("Data")
        data_options = []
        if default_data_path is not None:
            data_options.append(("Default dataset", "default"))
        data_options.append(("Sample dataset", "sample"))
        data_options.append(("Upload file", "upload"))

        option_labels = [label for label, _ in data_options]
        label_to_key = {label: key for label, key in data_options}

        choice_label = st.radio("Source", option_labels, index=0)
        data_source = label_to_key[choice_label]

        uploaded = None
        if data_source == "upload":
            uploaded = st.file_uploader("Upload CSV", type=["csv"])

    if data_source == "upload" and uploaded is None:
        st.warning("Upload a CSV file to continue.")
        st.stop()

    file_bytes = uploaded.getvalue() if uploaded else None
    file_name = uploaded.name if uploaded else None
    default_path_str = str(default_data_path) if default_data_path is not None else None

    try:
        df = load_dataset(data_source, file_bytes, file_name, default_path_str)
    except Exception as exc:
        logger.error(f"Failed to load dataset from {data_source}: {exc}")
        st.error(f"Failed to load dataset: {exc}")
        st.stop()

    data = compute.build_dashboard(df)
    figures = viz.build_figures(data)
    render_dashboard(figures)

    with st.expander("Aggregated tables"):
        st.dataframe(data.dominance, width="stretch")
        st.dataframe(data.tools, width="stretch")
        st.dataframe(data.resilience, width="stretch")

    st.download_button(
        label="Download dashboard (HTML)",
        data=viz.dashboard_html(figures),
        file_name="ai_content_impact_dashboard.html",
        mime="text/html",
    )


if __name__ == "__main__":
    main()
