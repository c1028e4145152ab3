from __future__ import annotations
import pandas as pd
from pandera import Column, DataFrameSchema, Check
from .config import SEAGRASS_SPECIES, SIZE_CLASSES

def observation_schema(strict_categories: bool = True) -> DataFrameSchema:
    """One row per (Seagrass, SizeClass, Taxon) with diet/habitat proportions and Ivlev's index."""
    species_checks = [Check.isin(SEAGRASS_SPECIES)] if strict_categories else []
    size_checks = [Check.isin(SIZE_CLASSES)] if strict_categories else []
    return DataFrameSchema(
        {
            "Taxon": Column(str, nullable=False),
            "Seagrass": Column(str, species_checks, nullable=False),
            "SizeClass": Column(str, size_checks, nullable=False),
            "DietProportion": Column(float, Check.in_range(0.0, 1.0), nullable=False),
            "SeagrassProportion": Column(float, Check.in_range(0.0, 1.0), nullable=False),
            "Index": Column(float, Check.in_range(-1.0, 1.0), nullable=False),
        },
        unique=["Seagrass", "SizeClass", "Taxon"],
        coerce=True,
    )

def validate_observations(df: pd.DataFrame, strict_categories: bool = True) -> pd.DataFrame:
    """Validate lazily (all failures reported at once); returns the coerced frame."""
    return observation_schema(strict_categories).validate(df, lazy=True)

def long_schema() -> DataFrameSchema:
    """One record per (Seagrass, SizeClass, Taxon, Source), checked after taxa are renamed."""
    return DataFrameSchema(
        {
            "Taxon": Column(str, nullable=False),
            "Seagrass": Column(nullable=False),
            "SizeClass": Column(nullable=False),
            "Source": Column(nullable=False),
            "Proportion": Column(float, Check.in_range(0.0, 1.0), nullable=False),
            "SE": Column(float, Check.ge(0.0), nullable=False),
        },
        unique=["Seagrass", "SizeClass", "Taxon", "Source"],
    )

def validate_long_records(df: pd.DataFrame) -> pd.DataFrame:
    return long_schema().validate(df, lazy=True)
