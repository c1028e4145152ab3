from __future__ import annotations
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
DATA = ROOT / "data"
RAW = DATA / "raw"
INTERIM = DATA / "interim"
FIGURES = ROOT / "figures"

# raw input file (adjust to yours)
RAW_DIET_CSV = RAW / "diet_vs_seagrass.csv"

# canonical column names after normalize_columns ("Size.Class" -> "SizeClass")
REQUIRED_COLUMNS = [
    "Taxon", "Seagrass", "SizeClass",
    "DietProportion", "SeagrassProportion", "Index",
]
CATEGORY_COLUMNS = ["Seagrass", "SizeClass"]
PROPORTION_COLUMNS = {"DietProportion": "Diet", "SeagrassProportion": "Seagrass"}
SOURCES = list(PROPORTION_COLUMNS.values())

# closed enumerations, in panel order
SEAGRASS_SPECIES = ["H. stipulacea", "H. uninervis", "C. serrulata"]
SIZE_CLASSES = ["1-2", "2-3", "3-4", "4-5"]

# fixed n for the binomial SE, regardless of group size
SE_SAMPLE_SIZE = 13

# primary axis = proportion, secondary axis = Ivlev's index
PROPORTION_RANGE = (0.0, 1.0)
INDEX_RANGE = (-1.0, 1.0)
INDEX_TICKS = (-1, -0.5, 0, 0.5, 1)

TAXON_RENAMES = {
    "Fish_Larvae": "Fish Larva",
    "Appendicularians": "Appendicularia",
    "Decapod": "Decapoda",
    "Ostracod": "Ostracoda",
    "Amphipod": "Amphipoda",
}

# styling
SOURCE_PALETTE = {"Diet": "#E69F00", "Seagrass": "#56B4E9"}
INDEX_MARKER = {"marker": "D", "color": "#111827", "s": 28, "zorder": 4}
INDEX_LABEL = "Ivlev's index"
ROTATE_LABELS_ABOVE = 6
PANEL_TAGS = "ABCDEFGH"
