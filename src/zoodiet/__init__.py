from .cleaning import normalize_columns, cast_categories
from .validators import validate_observations
from .transform import to_long_format, canonicalize_taxa, binomial_se, add_standard_error, enrich_long
from .scales import DualAxisScale, compute_dual_axis_scale, DEFAULT_SCALE
from .plotting import plot_diet_selectivity, compose_size_class_panels, build_all_panels
from .pipeline import prepare_long_table

__all__ = [
    "normalize_columns",
    "cast_categories",
    "validate_observations",
    "to_long_format",
    "canonicalize_taxa",
    "binomial_se",
    "add_standard_error",
    "enrich_long",
    "DualAxisScale",
    "compute_dual_axis_scale",
    "DEFAULT_SCALE",
    "plot_diet_selectivity",
    "compose_size_class_panels",
    "build_all_panels",
    "prepare_long_table",
]

__version__ = "0.1.0"
