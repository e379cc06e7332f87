from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from orientation_filter import FilterConfig


REPO_ROOT = Path(__file__).resolve().parent.parent
FILTER_PARAMS_PATH = REPO_ROOT / 'config' / 'filter_params.yaml'


@pytest.fixture
def filter_params_path() -> Path:
    """Path to the shipped filter parameters."""
    return FILTER_PARAMS_PATH


@pytest.fixture
def reference_config() -> FilterConfig:
    """200 Hz, 4 deg/s measurement error, 0.2 deg/s^2 drift."""
    return FilterConfig.from_degrees(
        sample_frequency_hz=200.0,
        gyro_measurement_error_degps=4.0,
        gyro_drift_rate_degps2=0.2,
    )


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)
