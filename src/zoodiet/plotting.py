"""
Diet vs. habitat selectivity charts.

Each panel shows, for one (seagrass species, size class) cell:
- side-by-side bars of taxon proportions in the fish diet and in the seagrass bed,
- binomial SE error bars on every bar,
- Ivlev's index per taxon, rescaled onto the proportion axis with a DualAxisScale,
- a dashed reference line at index = 0 and a secondary index axis on the right.

Taxa are placed along the x axis in order of first appearance in the selected rows
unless an explicit `taxon_order` is passed (the stacked panels pass a shared one).
"""

from __future__ import annotations
from itertools import product
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from .config import (
    SEAGRASS_SPECIES, SIZE_CLASSES, SOURCES, SOURCE_PALETTE, PROPORTION_RANGE,
    INDEX_TICKS, INDEX_MARKER, INDEX_LABEL, ROTATE_LABELS_ABOVE, PANEL_TAGS,
)
from .cleaning import require_columns
from .scales import DualAxisScale, DEFAULT_SCALE

LONG_COLUMNS = ["Taxon", "Seagrass", "SizeClass", "Index", "Source", "Proportion", "SE"]


def subset_selector(long_df: pd.DataFrame, seagrass: str, size_class: str) -> pd.DataFrame:
    """Rows of the long table for one (seagrass, size class) pair, in input order."""
    require_columns(long_df, LONG_COLUMNS)
    mask = (long_df["Seagrass"] == seagrass) & (long_df["SizeClass"] == size_class)
    return long_df.loc[mask]


def first_appearance_order(df: pd.DataFrame) -> List[str]:
    """Taxa in order of first appearance (no re-sorting)."""
    return [str(t) for t in pd.unique(df["Taxon"])]


def plot_diet_selectivity(
    long_df: pd.DataFrame,
    seagrass: str,
    size_class: str,
    scale: DualAxisScale = DEFAULT_SCALE,
    *,
    taxon_order: Optional[Sequence[str]] = None,
    ax=None,
    title: Optional[str] = None,
    legend: bool = True,
    bar_width: float = 0.38,
):
    """
    Grouped bar chart of diet vs. seagrass proportions with an Ivlev's index overlay.

    Parameters
    ----------
    long_df : long-format table (one row per taxon and source, with SE)
    seagrass, size_class : selector pair; the filter is applied here
    scale : DualAxisScale shared by every panel
    taxon_order : optional fixed x order; taxa absent from the selection leave a gap
    ax : matplotlib Axes or None; if None, a new fig/ax are created
    title : optional title (defaults to "<seagrass>, <size class> cm")
    legend : draw a legend on this axis
    bar_width : width of a single bar; the two sources sit side by side

    Returns
    -------
    (fig, ax, info) where info is a dict with keys:
      seagrass, size_class, taxa, n_bars, index_y, empty, secondary_axis
    A selector pair with no rows gives a placeholder chart (info["empty"] is True).
    Duplicate (Taxon, Source) records in the selection raise ValueError.
    """
    sub = subset_selector(long_df, seagrass, size_class)
    dup = sub.duplicated(["Taxon", "Source"])
    if dup.any():
        raise ValueError(
            f"Duplicate (Taxon, Source) records for {seagrass}, {size_class}: "
            f"{sorted(set(sub.loc[dup, 'Taxon']))}"
        )
    taxa = list(taxon_order) if taxon_order is not None else _first_taxa(sub)
    x = np.arange(len(taxa), dtype=float)

    created_fig = False
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 4.5))
        created_fig = True
    else:
        fig = ax.figure

    ax.set_ylim(*PROPORTION_RANGE)
    ax.set_ylabel("Proportion")
    ax.set_title(title or f"{seagrass}, {size_class} cm")
    ax.axhline(scale.zero_line, color="#6b7280", lw=1, ls="--", zorder=1)

    secax = ax.secondary_yaxis("right", functions=(scale.to_secondary, scale.to_primary))
    secax.set_ticks(list(INDEX_TICKS))
    secax.set_ylabel(INDEX_LABEL)

    n_bars = 0
    index_y: Dict[str, float] = {}
    empty = sub.empty

    if empty:
        ax.text(0.5, 0.5, "No data", transform=ax.transAxes,
                ha="center", va="center", fontsize=11, color="#6b7280")
    else:
        offsets = (np.arange(len(SOURCES)) - (len(SOURCES) - 1) / 2) * bar_width
        for source, off in zip(SOURCES, offsets):
            rows = sub[sub["Source"] == source].set_index("Taxon")
            rows = rows.reindex(taxa)
            ok = rows["Proportion"].notna().to_numpy()
            if not ok.any():
                continue
            heights = rows["Proportion"].to_numpy(dtype=float)[ok]
            errors = rows["SE"].to_numpy(dtype=float)[ok]
            ax.bar(x[ok] + off, heights, bar_width, color=SOURCE_PALETTE[source],
                   edgecolor="black", linewidth=0.5, label=source, zorder=2)
            ax.errorbar(x[ok] + off, heights, yerr=errors, fmt="none",
                        ecolor="black", elinewidth=0.8, capsize=3, zorder=3)
            n_bars += int(ok.sum())

        # Index is carried identically on both source records of a taxon
        index = sub.groupby("Taxon", sort=False)["Index"].first().reindex(taxa)
        ok = index.notna().to_numpy()
        y = scale.to_primary(index.to_numpy(dtype=float)[ok])
        if ok.any():
            ax.scatter(x[ok], y, label=INDEX_LABEL, **INDEX_MARKER)
        index_y = {t: float(v) for t, v in zip(np.asarray(taxa, dtype=object)[ok], y)}

    ax.set_xticks(x)
    if len(taxa) > ROTATE_LABELS_ABOVE:
        ax.set_xticklabels(taxa, rotation=45, ha="right")
    else:
        ax.set_xticklabels(taxa)
    ax.set_xlim(-0.6, max(len(taxa), 1) - 0.4)

    if legend and not empty:
        ax.legend(loc="upper right", fontsize=8)
    if created_fig:
        fig.tight_layout()

    info = {
        "seagrass": seagrass,
        "size_class": size_class,
        "taxa": taxa,
        "n_bars": n_bars,
        "index_y": index_y,
        "empty": empty,
        "secondary_axis": secax,
    }
    return fig, ax, info


def _first_taxa(sub: pd.DataFrame) -> List[str]:
    return first_appearance_order(sub) if not sub.empty else []


def compose_size_class_panels(
    long_df: pd.DataFrame,
    size_class: str,
    scale: DualAxisScale = DEFAULT_SCALE,
    *,
    species: Optional[Iterable[str]] = None,
    figsize: Optional[Tuple[float, float]] = None,
):
    """
    Stack one panel per seagrass species for a single size class.

    All panels share one taxon order (first appearance within the size class), so
    only the bottom panel keeps its x tick labels. One figure-level legend is collected
    from the panels and the panels are tagged A, B, C, ...

    Returns
    -------
    (fig, axes, info) where info has keys size_class, species, taxa, legend_labels, panels
    """
    species = list(species) if species is not None else list(SEAGRASS_SPECIES)
    require_columns(long_df, LONG_COLUMNS)
    in_class = long_df[(long_df["SizeClass"] == size_class) & long_df["Seagrass"].isin(species)]
    taxa = _first_taxa(in_class)

    n = len(species)
    if n > len(PANEL_TAGS):
        raise ValueError(f"At most {len(PANEL_TAGS)} species panels can be tagged, got {n}.")
    fig, axes = plt.subplots(n, 1, figsize=figsize or (9, 3.2 * n), sharex=True, squeeze=False)
    axes = list(axes[:, 0])

    panels = []
    for i, (ax, sp) in enumerate(zip(axes, species)):
        _, _, info = plot_diet_selectivity(
            long_df, sp, size_class, scale, taxon_order=taxa, ax=ax, legend=False,
        )
        ax.text(-0.08, 1.04, PANEL_TAGS[i], transform=ax.transAxes,
                fontsize=13, fontweight="bold", va="bottom")
        if i < n - 1:
            ax.tick_params(labelbottom=False)
            ax.set_xlabel("")
        else:
            ax.set_xlabel("Taxon")
        panels.append(info)

    found = {}
    for ax in axes:
        for h, lab in zip(*ax.get_legend_handles_labels()):
            found.setdefault(lab, h)
    labels = [lab for lab in SOURCES + [INDEX_LABEL] if lab in found]
    handles = [found[lab] for lab in labels]
    if handles:
        fig.legend(handles, labels, loc="upper center", ncol=len(labels), frameon=False)
    fig.suptitle(f"Size class {size_class} cm", y=0.995, fontsize=12)
    fig.tight_layout(rect=(0, 0, 1, 0.95))

    info = {
        "size_class": size_class,
        "species": species,
        "taxa": taxa,
        "legend_labels": labels,
        "panels": panels,
    }
    return fig, axes, info


def build_all_panels(
    long_df: pd.DataFrame,
    scale: DualAxisScale = DEFAULT_SCALE,
    *,
    species: Optional[Iterable[str]] = None,
    size_classes: Optional[Iterable[str]] = None,
) -> Dict[Tuple[str, str], tuple]:
    """One standalone chart per (species, size class) cell, keyed by the pair."""
    species = list(species) if species is not None else list(SEAGRASS_SPECIES)
    size_classes = list(size_classes) if size_classes is not None else list(SIZE_CLASSES)
    return {
        (sp, sc): plot_diet_selectivity(long_df, sp, sc, scale)
        for sp, sc in product(species, size_classes)
    }
