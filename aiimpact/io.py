from __future__ import annotations

import io
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .logging import get_logger


logger = get_logger(__name__)

PathLike = Union[str, Path]
FileOrBuffer = Union[PathLike, io.BytesIO, io.StringIO]

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
SAMPLE_FILE = "ai_content_impact_sample.csv"
DEFAULT_CANDIDATES = ("Global_AI_Content_Impact_Dataset.csv", SAMPLE_FILE)


def _resolve_path(path: PathLike) -> Path:
    if isinstance(path, Path):
        return path
    return Path(path).expanduser().resolve()


def _read_csv(source) -> pd.DataFrame:
    # Cells stay as raw strings; utils.parse_numeric owns numeric interpretation.
    df = pd.read_csv(source, dtype=str, keep_default_na=False)
    df.columns = [str(c) for c in df.columns]
    return df


def load_table(source: FileOrBuffer) -> pd.DataFrame:
    """
    Load a CSV file into a DataFrame of raw string cells.

    Parameters
    ----------
    source:
        Either a filesystem path or an in-memory buffer compatible with
        Streamlit's `UploadedFile`.
    """
    if isinstance(source, (str, Path)):
        path = _resolve_path(source)
        df = _read_csv(path)
        name = str(path)
    elif hasattr(source, "read"):
        name = getattr(source, "name", "uploaded_file")
        buffer = io.BytesIO(source.read())  # copy for repeated reads
        buffer.seek(0)
        df = _read_csv(buffer)
    else:
        raise TypeError(f"Unsupported input type: {type(source)}")

    logger.info(f"Loaded {len(df)} rows x {len(df.columns)} columns from {name}")
    return df


def load_sample() -> pd.DataFrame:
    """Return the bundled sample dataset."""
    sample_path = DATA_DIR / SAMPLE_FILE
    if not sample_path.exists():
        raise FileNotFoundError(f"Sample dataset missing at {sample_path}")
    return load_table(sample_path)


def default_path() -> Optional[Path]:
    """First dataset found in the data directory, if any."""
    for candidate in DEFAULT_CANDIDATES:
        candidate_path = DATA_DIR / candidate
        if candidate_path.exists():
            return candidate_path.resolve()
    return None


def load_default(path: Optional[PathLike] = None) -> pd.DataFrame:
    """Load the primary dataset shipped with the app."""
    if path is not None:
        dataset_path = _resolve_path(path)
        if not dataset_path.exists():
            raise FileNotFoundError(f"Default dataset missing at {dataset_path}")
    else:
        dataset_path = default_path()
        if dataset_path is None:
            raise FileNotFoundError(f"No default dataset found in {DATA_DIR}")
    return load_table(dataset_path)
