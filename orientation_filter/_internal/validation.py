"""Validation utilities for the orientation filter.

Provides input validation for filter configuration and sensor vectors.
"""

from typing import Optional

import numpy as np


def validate_positive(value: float, name: str) -> None:
    """Validate that a value is strictly positive.

    Args:
        value: The value to validate
        name: Parameter name for error messages

    Raises:
        ValueError: If value is not positive
    """
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """Validate that a value is non-negative.

    Args:
        value: The value to validate
        name: Parameter name for error messages

    Raises:
        ValueError: If value is negative
    """
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_positive_integer(value: int, name: str) -> None:
    """Validate that a value is a positive integer.

    Args:
        value: The value to validate
        name: Parameter name for error messages

    Raises:
        ValueError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}")


def as_vector3(vector, name: str) -> np.ndarray:
    """Convert a sensor vector to a float array of shape (3,).

    Args:
        vector: Sequence or array with three components
        name: Parameter name for error messages

    Returns:
        Float64 array of shape (3,)

    Raises:
        ValueError: If the vector does not have shape (3,)
    """
    array = np.asarray(vector, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {array.shape}")
    return array


def as_optional_vector3(vector, name: str) -> Optional[np.ndarray]:
    """Like as_vector3, but passes None through (sensor unavailable)."""
    if vector is None:
        return None
    return as_vector3(vector, name)


def validate_quaternion(quaternion: np.ndarray) -> None:
    """Validate quaternion has shape (4,), finite values and non-zero norm.

    Args:
        quaternion: Quaternion [q0, q1, q2, q3], scalar first

    Raises:
        ValueError: If shape incorrect, values non-finite or norm is zero
    """
    if quaternion.shape != (4,):
        raise ValueError(
            f"Quaternion must have shape (4,), got {quaternion.shape}"
        )

    if not np.all(np.isfinite(quaternion)):
        raise ValueError(
            f"Quaternion contains non-finite values: {quaternion}"
        )

    if not np.any(quaternion):
        raise ValueError("Quaternion must have non-zero norm")
