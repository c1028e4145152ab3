from __future__ import annotations
from pathlib import Path
from typing import Dict
import pandas as pd
from .config import (
    REQUIRED_COLUMNS, CATEGORY_COLUMNS, SEAGRASS_SPECIES, SIZE_CLASSES, SE_SAMPLE_SIZE,
)
from .ingest import read_diet_raw
from .cleaning import normalize_columns, require_columns, harmonize_labels, cast_categories
from .validators import validate_observations, validate_long_records
from .transform import to_long_format, enrich_long
from .scales import DualAxisScale, DEFAULT_SCALE
from .plotting import compose_size_class_panels
from .data_io import save_interim, load_interim, save_figure

def prepare_long_table(
    raw: pd.DataFrame,
    *,
    strict_categories: bool = True,
    n: int = SE_SAMPLE_SIZE,
    verbose: bool = False,
) -> pd.DataFrame:
    """
    Raw observation table -> enriched long table (Taxon, Seagrass, SizeClass, Index,
    Source, Proportion, SE). Any failure aborts; nothing is returned half-built.
    """
    # ---- Schema ----
    obs = normalize_columns(raw)
    obs = require_columns(obs, REQUIRED_COLUMNS)[REQUIRED_COLUMNS]
    obs = harmonize_labels(obs, ["Taxon"] + CATEGORY_COLUMNS)
    obs = validate_observations(obs, strict_categories=strict_categories)
    obs = cast_categories(
        obs,
        {"Seagrass": SEAGRASS_SPECIES, "SizeClass": SIZE_CLASSES},
        strict=strict_categories,
    )
    if verbose:
        print(f"Loaded {len(obs)} observations "
              f"({obs['Seagrass'].nunique()} seagrass species, {obs['SizeClass'].nunique()} size classes)")

    # ---- Long format + SE ----
    long = enrich_long(to_long_format(obs), n=n)
    # renamed taxa can collide with taxa already spelled the canonical way
    long = validate_long_records(long)
    if verbose:
        print(f"Long table: {len(long)} records, SE with fixed n={n}")
    return long

def make_interim(path: str | Path | None = None, verbose: bool = False) -> pd.DataFrame:
    long = prepare_long_table(read_diet_raw(path), verbose=verbose)
    out = save_interim(long, "diet_long.parquet")
    if verbose:
        print(f"Saved {out}")
    return long

def make_figures(
    path: str | Path | None = None,
    *,
    scale: DualAxisScale = DEFAULT_SCALE,
    interim: str | None = None,
    save: bool = True,
    verbose: bool = False,
) -> Dict[str, tuple]:
    """
    One stacked figure (one panel per seagrass species) per size class.

    Returns a dict size_class -> (fig, axes, info); saved figures are closed, so with
    save=True only the info part is meant for further use. With `interim` set (e.g.
    "diet_long.parquet" written by make_interim) the long table is read from the
    interim directory instead of being rebuilt from the raw file.
    """
    if interim is not None:
        long = load_interim(interim)
        if verbose:
            print(f"Loaded {len(long)} records from {interim}")
    else:
        long = prepare_long_table(read_diet_raw(path), verbose=verbose)
    figures = {}
    for size_class in SIZE_CLASSES:
        fig, axes, info = compose_size_class_panels(long, size_class, scale)
        if save:
            out = save_figure(fig, f"diet_selectivity_{size_class}cm")
            if verbose:
                print(f"Saved {out}")
        figures[size_class] = (fig, axes, info)
    return figures
