import numpy as np
import pandas as pd
import pytest
from zoodiet.config import TAXON_RENAMES
from zoodiet.transform import (
    to_long_format, canonicalize_taxa, binomial_se, add_standard_error, enrich_long,
)

def _wide():
    return pd.DataFrame(
        {
            "Taxon": ["Decapod", "Copepod", "Amphipod"],
            "Seagrass": ["H. stipulacea", "H. stipulacea", "H. uninervis"],
            "SizeClass": ["1-2", "1-2", "3-4"],
            "DietProportion": [0.3, 0.5, 0.2],
            "SeagrassProportion": [0.1, 0.6, 0.3],
            "Index": [0.5, -0.09, -0.2],
        },
        index=[10, 3, 7],
    )

def test_long_format_doubles_rows_and_interleaves_sources():
    wide = _wide()
    long = to_long_format(wide)
    assert len(long) == 2 * len(wide)
    assert list(long["Source"]) == ["Diet", "Seagrass"] * 3
    assert list(long["Taxon"]) == ["Decapod", "Decapod", "Copepod", "Copepod", "Amphipod", "Amphipod"]
    assert list(long["Proportion"]) == [0.3, 0.1, 0.5, 0.6, 0.2, 0.3]
    assert "DietProportion" not in long.columns and "SeagrassProportion" not in long.columns

def test_long_format_keeps_shared_fields_per_row():
    wide = _wide()
    long = to_long_format(wide)
    keys = ["Seagrass", "SizeClass", "Taxon", "Index"]
    for _, row in wide.iterrows():
        match = long[(long[keys] == row[keys]).all(axis=1)]
        assert sorted(match["Source"].astype(str)) == ["Diet", "Seagrass"]
    assert list(long["Source"].cat.categories) == ["Diet", "Seagrass"]

def test_long_format_requires_proportion_columns():
    with pytest.raises(KeyError):
        to_long_format(_wide().drop(columns=["SeagrassProportion"]))

def test_canonicalize_taxa_maps_known_and_passes_unknown():
    df = pd.DataFrame({"Taxon": list(TAXON_RENAMES) + ["Copepod", "Polychaete"]})
    out = canonicalize_taxa(df)
    assert list(out["Taxon"]) == list(TAXON_RENAMES.values()) + ["Copepod", "Polychaete"]
    assert list(df["Taxon"])[:1] == ["Fish_Larvae"]

def test_binomial_se_bounds():
    p = np.linspace(0, 1, 101)
    se = binomial_se(p, n=13)
    assert (se >= 0).all()
    assert (se <= 0.5 / np.sqrt(13) + 1e-12).all()
    assert se[0] == 0.0 and se[-1] == 0.0
    assert (se[1:-1] > 0).all()
    assert se[50] == pytest.approx(0.5 / np.sqrt(13))

def test_binomial_se_rejects_out_of_range():
    with pytest.raises(ValueError):
        binomial_se([0.2, 1.1])
    with pytest.raises(ValueError):
        binomial_se([np.nan])
    with pytest.raises(ValueError):
        binomial_se(0.5, n=0)

def test_add_standard_error_returns_new_frame():
    df = pd.DataFrame({"Proportion": [0.0, 0.5]})
    out = add_standard_error(df)
    assert "SE" not in df.columns
    assert out["SE"].tolist() == pytest.approx([0.0, 0.5 / np.sqrt(13)])

def test_decapod_row_through_reshape_and_enrich():
    wide = _wide().iloc[[0]]
    long = enrich_long(to_long_format(wide))
    assert len(long) == 2
    diet, habitat = long.iloc[0], long.iloc[1]
    assert (diet["Taxon"], diet["Source"], diet["Index"]) == ("Decapoda", "Diet", 0.5)
    assert diet["Proportion"] == 0.3
    assert diet["SE"] == pytest.approx(0.1272, abs=1e-3)
    assert (habitat["Taxon"], habitat["Source"], habitat["Index"]) == ("Decapoda", "Seagrass", 0.5)
    assert habitat["Proportion"] == 0.1
    assert habitat["SE"] == pytest.approx(0.0832, abs=1e-3)
