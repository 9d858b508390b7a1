"""
Pytest configuration and fixtures for mvexport tests.
"""

import os
import sys

import numpy as np
import pandas as pd
import pytest

# Add the parent directory to the path to import the module
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mvexport.analysis.results import (
    OrdinationResult, DiscriminantResult, SpatialComponentResult
)
from mvexport.components.config import ConfigManager


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate every test from the environment and the shared configuration."""
    for name in list(os.environ):
        if name.startswith('MVEXPORT_'):
            monkeypatch.delenv(name)
    monkeypatch.delenv('LOG_LEVEL', raising=False)
    ConfigManager.reset()
    yield
    ConfigManager.reset()


@pytest.fixture
def keys():
    return ['A', 'B', 'C']


@pytest.fixture
def scores(keys):
    """Two components for three entities."""
    return pd.DataFrame(
        [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]],
        index=keys,
        columns=['Axis1', 'Axis2']
    )


@pytest.fixture
def dudi(scores):
    return OrdinationResult(scores=scores)


@pytest.fixture
def dapc(scores):
    return DiscriminantResult(
        scores=scores,
        grp=[1, 1, 2],
        assign=[1, 2, 2],
        posterior=np.array([[0.9, 0.1], [0.4, 0.6], [0.2, 0.8]])
    )


@pytest.fixture
def spca(scores):
    return SpatialComponentResult(
        scores=scores,
        lag_scores=scores * 0.5
    )


@pytest.fixture
def metadata(keys):
    """Metadata documenting every entity, with one extra column."""
    return pd.DataFrame({
        'key': keys,
        'lat': [45.0, 46.5, 47.25],
        'lon': [-122.0, -121.5, -120.75],
        'site': ['north', 'south', 'east'],
    })
