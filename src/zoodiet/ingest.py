from __future__ import annotations
from pathlib import Path
import pandas as pd
from .config import RAW_DIET_CSV

def read_diet_raw(path: str | Path | None = None, sep: str | None = None) -> pd.DataFrame:
    path = Path(path or RAW_DIET_CSV)
    if path.suffix.lower() == ".xlsx":
        return pd.read_excel(path, engine="openpyxl")
    if sep is None:
        sep = "\t" if path.suffix.lower() in (".tsv", ".tab") else ","
    return pd.read_csv(path, sep=sep)
