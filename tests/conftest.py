"""Shared fixtures: a small hand-built dataset in the source csv layout."""

import pandas as pd
import pytest

from data_prep import coerce_records


@pytest.fixture()
def raw_frame():
    return pd.DataFrame({
        "CountryName": ["India", "India", "Pakistan", "Germany", "Germany", "United States", "Chad"],
        "Region": ["South Asia", "South Asia", "South Asia", "Europe & Central Asia",
                   "Europe & Central Asia", "North America", "Sub-Saharan Africa"],
        "Year": [2020, 2021, 2020, 2020, 2020, 2020, 2021],
        "GDP": [2600.0, 3100.0, 300.0, 3800.0, 4000.0, 21000.0, 11.0],
        "MilitaryExpenditure": [2.9, 2.7, 4.0, 1.4, 1.6, 3.7, 2.5],
    })


@pytest.fixture()
def records(raw_frame):
    return coerce_records(raw_frame)


@pytest.fixture()
def measure():
    """7px per character, stands in for real font metrics."""
    return lambda text: 7.0 * len(text)
