from __future__ import annotations
from typing import Iterable, Mapping, Sequence
import pandas as pd

def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize column names by stripping whitespace, replacing spaces with underscores,
    and removing special characters ("Size.Class" -> "SizeClass").

    Args:
        df: Input DataFrame

    Returns:
        DataFrame with normalized column names
    """
    df = df.copy()
    df.columns = (
        df.columns
        .astype(str)
        .str.strip()
        .str.replace(r"\s+", "_", regex=True)
        .str.replace(r"[^0-9A-Za-z_]", "", regex=True)
    )
    return df

def require_columns(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    """
    Check that every expected column is present. Missing columns are never synthesized.

    Raises:
        KeyError: If any of the columns is absent
    """
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found: {missing}. Available: {list(df.columns)}")
    return df

def harmonize_labels(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    """
    Strip surrounding whitespace from free-form label columns.

    Args:
        df: Input DataFrame
        cols: Label columns to clean; absent columns are skipped

    Returns:
        New DataFrame with cleaned label columns
    """
    df = df.copy()
    for col in cols:
        if col in df.columns:
            df[col] = df[col].map(lambda v: v.strip() if isinstance(v, str) else v)
    return df

def cast_categories(
    df: pd.DataFrame,
    categories: Mapping[str, Sequence[str]],
    *,
    strict: bool = True,
) -> pd.DataFrame:
    """
    Cast nominal columns to pandas Categorical with a fixed category order.

    Args:
        df: Input DataFrame
        categories: Mapping of column name to its closed enumeration (in display order)
        strict: If True, values outside the enumeration raise. If False they are kept
                as extra categories appended in order of first appearance.

    Returns:
        New DataFrame with the columns typed as categorical

    Raises:
        KeyError: If a column is missing
        ValueError: If strict and a column holds an unknown value
    """
    require_columns(df, categories.keys())
    df = df.copy()
    for col, allowed in categories.items():
        values = df[col].astype(str)
        allowed = list(allowed)
        unknown = [v for v in pd.unique(values) if v not in allowed]
        if unknown and strict:
            raise ValueError(f"Unknown {col} values: {unknown}. Expected one of {allowed}")
        df[col] = pd.Categorical(values, categories=allowed + unknown)
    return df
