"""Orientation estimation from gyroscope, accelerometer and magnetometer data.

This module provides a Madgwick gradient-descent filter producing a unit
quaternion (scalar first) for the sensor frame relative to the Earth frame.

Public API:
    - FilterConfig: Configuration dataclass for filter gains and sample rate
    - DEFAULT_FILTER_CONFIG: 200 Hz, 4 deg/s error, 0.2 deg/s^2 drift
    - MadgwickFilter: Filter state with AHRS, IMU and magnetometer-only updates
    - MARGReading: Dataclass for one gyro/accel/mag sample
    - inv_sqrt, fast_inv_sqrt: Inverse square root primitives
"""

from orientation_filter.config import FilterConfig, DEFAULT_FILTER_CONFIG
from orientation_filter.madgwick_filter import (
    MadgwickFilter,
    MARGReading,
    is_available,
)
from orientation_filter._internal.fast_math import inv_sqrt, fast_inv_sqrt

__all__ = [
    'FilterConfig',
    'DEFAULT_FILTER_CONFIG',
    'MadgwickFilter',
    'MARGReading',
    'is_available',
    'inv_sqrt',
    'fast_inv_sqrt',
]
