"""
Core package for the AI Content Impact dashboard.

Modules
-------
io
    CSV loading for paths and Streamlit uploads.
compute
    Group aggregation and binned trend lines feeding the six charts.
viz
    Plotly figures and the standalone HTML export.
utils
    Column names, numeric parsing, and shared constants.
logging
    Package logger helpers.
"""

from . import io, compute, viz, utils  # noqa: F401

__all__ = ["io", "compute", "viz", "utils"]
