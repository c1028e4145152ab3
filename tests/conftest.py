import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import pytest


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


@pytest.fixture
def raw_table():
    # headers as they come out of the spreadsheet export
    return pd.DataFrame(
        {
            "Taxon": ["Decapod", "Copepod", "Amphipod", "Fish_Larvae", "Copepod", "Copepod", "Ostracod"],
            "Seagrass": ["H. stipulacea"] * 5 + ["H. uninervis"] * 2,
            "Size.Class": ["1-2", "1-2", "1-2", "2-3", "2-3", "1-2", "1-2"],
            "Diet.Proportion": [0.3, 0.5, 0.2, 0.4, 0.6, 0.7, 0.3],
            "Seagrass.Proportion": [0.1, 0.6, 0.3, 0.2, 0.8, 0.5, 0.5],
            "Index": [0.5, -0.09, -0.2, 0.33, -0.14, 0.17, -0.25],
        }
    )


@pytest.fixture
def long_table(raw_table):
    from zoodiet.pipeline import prepare_long_table
    return prepare_long_table(raw_table)
