"""Shared test fixtures and utilities for modelflow tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
import pytest

from modelflow import ProgressUpdate, WorkflowConfig

# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def mtcars() -> pd.DataFrame:
    """Create an mtcars-like dataset.

    Returns:
        DataFrame with 32 rows of numeric car measurements.
    """
    np.random.seed(42)
    n_samples = 32

    cyl = np.random.choice([4, 6, 8], n_samples)
    disp = cyl * 40 + np.random.uniform(-20, 20, n_samples)
    hp = disp * 0.6 + np.random.randn(n_samples) * 10
    wt = 1.5 + cyl * 0.25 + np.random.randn(n_samples) * 0.2

    data = {
        "mpg": 37.0 - 2.9 * cyl + np.random.randn(n_samples) * 1.5,
        "cyl": cyl,
        "disp": disp,
        "hp": hp,
        "wt": wt,
    }

    return pd.DataFrame(data)


@pytest.fixture
def iris() -> pd.DataFrame:
    """Create an iris-like dataset.

    Returns:
        DataFrame with four numeric measurements and a string `Species` column.
    """
    np.random.seed(42)
    species = np.repeat(["setosa", "versicolor", "virginica"], 50)
    offset = np.repeat([0.0, 1.0, 2.0], 50)

    data = {
        "Sepal.Length": 5.0 + offset * 0.8 + np.random.randn(150) * 0.3,
        "Sepal.Width": 3.4 - offset * 0.3 + np.random.randn(150) * 0.3,
        "Petal.Length": 1.5 + offset * 2.0 + np.random.randn(150) * 0.2,
        "Petal.Width": 0.2 + offset * 0.8 + np.random.randn(150) * 0.1,
        "Species": species,
    }

    return pd.DataFrame(data)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def strict_config() -> WorkflowConfig:
    """Create a config that rejects duplicate actions."""
    return WorkflowConfig.builder().duplicate_policy("error").build()


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs.

    Yields:
        Path to temporary directory (cleaned up after test).
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def progress_tracker() -> dict[str, Any]:
    """Create a progress tracker for testing callbacks.

    Returns:
        Dictionary to store progress updates.
    """
    tracker: dict[str, Any] = {
        "updates": [],
        "stages": [],
        "final_progress": 0.0,
    }
    return tracker


@pytest.fixture
def progress_callback(progress_tracker: dict[str, Any]):
    """Create a progress callback that stores updates in the tracker."""

    def callback(update: ProgressUpdate) -> None:
        progress_tracker["updates"].append(update)
        progress_tracker["stages"].append(update.stage)
        progress_tracker["final_progress"] = update.progress

    return callback


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (full workflow fit)"
    )
