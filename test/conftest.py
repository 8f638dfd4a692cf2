"""
Shared pytest fixtures.

Earth Engine is replaced by a MagicMock so the analysis code can be exercised
without credentials or network access.
"""
import matplotlib
matplotlib.use("Agg")

import pytest
from unittest.mock import MagicMock

from omegaconf import OmegaConf

import src.data.gee_functions as gee


@pytest.fixture
def fake_ee(monkeypatch) -> MagicMock:
    fake = MagicMock(name="ee")
    monkeypatch.setattr(gee, "ee", fake)
    return fake


@pytest.fixture
def lamu_site():
    return OmegaConf.create({
        "id": "lamu",
        "name": "Lamu Archipelago",
        "polygon": [[40.830, -2.350], [40.950, -2.350], [40.950, -2.200], [40.830, -2.200]],
    })


@pytest.fixture
def s2_collection(fake_ee) -> MagicMock:
    """The collection object returned after the filter/map/select chain in get_s2_composite."""
    return (fake_ee.ImageCollection.return_value
            .filterBounds.return_value
            .filterDate.return_value
            .filter.return_value
            .map.return_value
            .select.return_value)
