from __future__ import annotations
from typing import Mapping
import numpy as np
import pandas as pd
from .config import PROPORTION_COLUMNS, SOURCES, SE_SAMPLE_SIZE, TAXON_RENAMES
from .cleaning import require_columns

def to_long_format(df: pd.DataFrame) -> pd.DataFrame:
    """
    Wide -> long: one record per (input row, source).

    DietProportion and SeagrassProportion become a single `Proportion` column tagged by
    a categorical `Source` ("Diet" / "Seagrass"). All other columns are carried through
    unchanged. Output has exactly 2x the input rows, ordered by input row with the Diet
    record before the Seagrass record.
    """
    require_columns(df, PROPORTION_COLUMNS)
    base = df.reset_index(drop=True)
    id_data = base.drop(columns=list(PROPORTION_COLUMNS))
    parts = [
        id_data.assign(Source=source, Proportion=base[col].astype(float))
        for col, source in PROPORTION_COLUMNS.items()
    ]
    # stable sort on the row position interleaves Diet/Seagrass per input row
    long = pd.concat(parts).sort_index(kind="mergesort").reset_index(drop=True)
    long["Source"] = pd.Categorical(long["Source"], categories=SOURCES)
    return long

def canonicalize_taxa(df: pd.DataFrame, renames: Mapping[str, str] | None = None) -> pd.DataFrame:
    """
    Rename taxon labels to their display form. Taxa missing from the table pass through.
    """
    renames = TAXON_RENAMES if renames is None else renames
    require_columns(df, ["Taxon"])
    out = df.copy()
    out["Taxon"] = out["Taxon"].map(lambda t: renames.get(t, t))
    return out

def binomial_se(p, n: int = SE_SAMPLE_SIZE):
    """
    Binomial standard error sqrt(p (1 - p) / n), vectorized over p.

    Bounded by 0 <= SE <= 0.5 / sqrt(n), with SE = 0 exactly at p in {0, 1}.
    """
    if n <= 0:
        raise ValueError(f"binomial_se requires a positive sample size, got {n}.")
    P = np.asarray(p, dtype=float)
    if np.any(np.isnan(P)) or np.any((P < 0) | (P > 1)):
        raise ValueError("binomial_se requires proportions in [0, 1].")
    return np.sqrt(P * (1.0 - P) / n)

def add_standard_error(df: pd.DataFrame, n: int = SE_SAMPLE_SIZE) -> pd.DataFrame:
    require_columns(df, ["Proportion"])
    return df.assign(SE=binomial_se(df["Proportion"].to_numpy(dtype=float), n))

def enrich_long(df: pd.DataFrame, n: int = SE_SAMPLE_SIZE) -> pd.DataFrame:
    """Canonical taxon labels + per-record SE."""
    return add_standard_error(canonicalize_taxa(df), n=n)
