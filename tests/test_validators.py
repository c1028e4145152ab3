import pandas as pd
import pytest
from pandera.errors import SchemaErrors
from zoodiet.validators import validate_observations

def _obs(**overrides):
    row = {
        "Taxon": "Decapod",
        "Seagrass": "H. stipulacea",
        "SizeClass": "1-2",
        "DietProportion": 0.3,
        "SeagrassProportion": 0.1,
        "Index": 0.5,
    }
    row.update(overrides)
    return pd.DataFrame([row])

def test_valid_row_passes_and_coerces_numbers():
    out = validate_observations(_obs(Index=1))
    assert out["Index"].dtype == float
    assert float(out.loc[0, "Index"]) == 1.0

def test_proportion_out_of_range_fails():
    with pytest.raises(SchemaErrors):
        validate_observations(_obs(DietProportion=1.2))

def test_index_out_of_range_fails():
    with pytest.raises(SchemaErrors):
        validate_observations(_obs(Index=-1.5))

def test_unknown_species_fails_only_when_strict():
    df = _obs(Seagrass="Z. marina")
    with pytest.raises(SchemaErrors):
        validate_observations(df)
    assert len(validate_observations(df, strict_categories=False)) == 1

def test_duplicate_triple_fails():
    df = pd.concat([_obs(), _obs(DietProportion=0.2)], ignore_index=True)
    with pytest.raises(SchemaErrors):
        validate_observations(df)
