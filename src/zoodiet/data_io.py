from __future__ import annotations
import io
from pathlib import Path
import pandas as pd
import matplotlib.pyplot as plt
from .config import INTERIM, FIGURES

# metadata entries that change between runs (timestamps, version strings)
_STRIP_METADATA = {
    "png": {"Software": None},
    "svg": {"Date": None, "Creator": None},
    "pdf": {"CreationDate": None, "Producer": None, "Creator": None},
}

def save_interim(df: pd.DataFrame, name: str) -> Path:
    """
    Save a DataFrame to the interim data directory as a Parquet file.

    Args:
        df: The DataFrame to save
        name: The filename (without path) for the saved file

    Returns:
        Path: The full path to the saved file
    """
    INTERIM.mkdir(parents=True, exist_ok=True)
    path = INTERIM / name
    df.to_parquet(path, index=False)
    return path

def load_interim(name: str) -> pd.DataFrame:
    """
    Load a DataFrame from the interim data directory.

    Args:
        name: The filename (without path) to load

    Returns:
        pd.DataFrame: The loaded DataFrame
    """
    return pd.read_parquet(INTERIM / name)

def figure_to_bytes(fig, fmt: str = "png", dpi: int = 150) -> bytes:
    """
    Render a figure without run-dependent metadata, so identical figures give identical bytes.
    """
    if fmt not in _STRIP_METADATA:
        raise ValueError(f"Unsupported figure format: {fmt}. Use one of {list(_STRIP_METADATA)}")
    buf = io.BytesIO()
    with plt.rc_context({"svg.hashsalt": "zoodiet"}):
        fig.savefig(buf, format=fmt, dpi=dpi, metadata=_STRIP_METADATA[fmt])
    return buf.getvalue()

def save_figure(fig, name: str, fmt: str = "png", dpi: int = 150, close: bool = True) -> Path:
    """
    Write a figure into the figures directory and (by default) close it.

    Returns:
        Path: The full path to the saved file
    """
    FIGURES.mkdir(parents=True, exist_ok=True)
    path = FIGURES / f"{name}.{fmt}"
    path.write_bytes(figure_to_bytes(fig, fmt=fmt, dpi=dpi))
    if close:
        plt.close(fig)
    return path
