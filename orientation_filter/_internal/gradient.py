"""Closed-form gradient-descent corrective steps.

Pure functions over the current quaternion q = [q0, q1, q2, q3] and unit
measurement vectors. Each gradient is J^T f, where f is the residual between
the direction predicted from q and the measured direction, and J is the
analytic Jacobian of that prediction with respect to q.

Earth frame conventions:
    - gravity reference d_g = [0, 0, 1] (accelerometer reads +1 g on z
      when level)
    - magnetic reference b = [b_x, 0, b_z], recomputed every call from the
      measurement rotated into the Earth frame so that only inclination is
      assumed, never declination

None of these functions normalize their output; the caller decides how
to handle a zero-length step.
"""

import numpy as np


def imu_gradient(q: np.ndarray, acceleration_unit: np.ndarray) -> np.ndarray:
    """Gradient of the gravity residual, expanded for reduced arithmetic.

    Args:
        q: Current orientation quaternion (unit norm)
        acceleration_unit: Normalized accelerometer reading [a_x, a_y, a_z]

    Returns:
        Unnormalized step [s0, s1, s2, s3]
    """
    q0, q1, q2, q3 = q
    ax, ay, az = acceleration_unit

    # Auxiliary variables to avoid repeated arithmetic
    _2q0 = 2.0 * q0
    _2q1 = 2.0 * q1
    _2q2 = 2.0 * q2
    _2q3 = 2.0 * q3
    _4q0 = 4.0 * q0
    _4q1 = 4.0 * q1
    _4q2 = 4.0 * q2
    _8q1 = 8.0 * q1
    _8q2 = 8.0 * q2
    q0q0 = q0 * q0
    q1q1 = q1 * q1
    q2q2 = q2 * q2
    q3q3 = q3 * q3

    s0 = _4q0 * q2q2 + _2q2 * ax + _4q0 * q1q1 - _2q1 * ay
    s1 = (
        _4q1 * q3q3 - _2q3 * ax + 4.0 * q0q0 * q1 - _2q0 * ay
        - _4q1 + _8q1 * q1q1 + _8q1 * q2q2 + _4q1 * az
    )
    s2 = (
        4.0 * q0q0 * q2 + _2q0 * ax + _4q2 * q3q3 - _2q3 * ay
        - _4q2 + _8q2 * q1q1 + _8q2 * q2q2 + _4q2 * az
    )
    s3 = 4.0 * q1q1 * q3 - _2q1 * ax + 4.0 * q2q2 * q3 - _2q2 * ay
    return np.array([s0, s1, s2, s3])


def gravity_residual(q: np.ndarray, acceleration_unit: np.ndarray) -> np.ndarray:
    """Predicted gravity direction in the sensor frame minus the measurement."""
    q0, q1, q2, q3 = q
    ax, ay, az = acceleration_unit
    return np.array([
        2.0 * (q1 * q3 - q0 * q2) - ax,
        2.0 * (q0 * q1 + q2 * q3) - ay,
        2.0 * (0.5 - q1 * q1 - q2 * q2) - az,
    ])


def gravity_gradient(q: np.ndarray, acceleration_unit: np.ndarray) -> np.ndarray:
    """J_g^T f_g for the gravity reference [0, 0, 1].

    Algebraically identical to imu_gradient for a unit quaternion.
    """
    q0, q1, q2, q3 = q
    f1, f2, f3 = gravity_residual(q, acceleration_unit)
    return np.array([
        -2.0 * q2 * f1 + 2.0 * q1 * f2,
        2.0 * q3 * f1 + 2.0 * q0 * f2 - 4.0 * q1 * f3,
        -2.0 * q0 * f1 + 2.0 * q3 * f2 - 4.0 * q2 * f3,
        2.0 * q1 * f1 + 2.0 * q2 * f2,
    ])


def earth_field_reference(q: np.ndarray, magnetic_unit: np.ndarray):
    """Reference direction of the Earth's magnetic field.

    Rotates the measurement into the Earth frame (h = q ⊗ m ⊗ q*) and
    collapses its horizontal part onto the x axis.

    Args:
        q: Current orientation quaternion (unit norm)
        magnetic_unit: Normalized magnetometer reading [m_x, m_y, m_z]

    Returns:
        Tuple (two_bx, two_bz): horizontal magnitude sqrt(h_x^2 + h_y^2)
        and vertical component h_z
    """
    q0, q1, q2, q3 = q
    mx, my, mz = magnetic_unit

    _2q0mx = 2.0 * q0 * mx
    _2q0my = 2.0 * q0 * my
    _2q0mz = 2.0 * q0 * mz
    _2q1mx = 2.0 * q1 * mx
    _2q1 = 2.0 * q1
    _2q2 = 2.0 * q2
    q0q0 = q0 * q0
    q1q1 = q1 * q1
    q2q2 = q2 * q2
    q3q3 = q3 * q3

    hx = (
        mx * q0q0 - _2q0my * q3 + _2q0mz * q2 + mx * q1q1
        + _2q1 * my * q2 + _2q1 * mz * q3 - mx * q2q2 - mx * q3q3
    )
    hy = (
        _2q0mx * q3 + my * q0q0 - _2q0mz * q1 + _2q1mx * q2
        - my * q1q1 + my * q2q2 + _2q2 * mz * q3 - my * q3q3
    )
    two_bx = float(np.sqrt(hx * hx + hy * hy))
    two_bz = float(
        -_2q0mx * q2 + _2q0my * q1 + mz * q0q0 + _2q1mx * q3
        - mz * q1q1 + _2q2 * my * q3 - mz * q2q2 + mz * q3q3
    )
    return two_bx, two_bz


def magnetic_residual(
    q: np.ndarray,
    magnetic_unit: np.ndarray,
    two_bx: float,
    two_bz: float,
) -> np.ndarray:
    """Predicted magnetic direction in the sensor frame minus the measurement."""
    q0, q1, q2, q3 = q
    mx, my, mz = magnetic_unit
    return np.array([
        two_bx * (0.5 - q2 * q2 - q3 * q3) + two_bz * (q1 * q3 - q0 * q2) - mx,
        two_bx * (q1 * q2 - q0 * q3) + two_bz * (q0 * q1 + q2 * q3) - my,
        two_bx * (q0 * q2 + q1 * q3) + two_bz * (0.5 - q1 * q1 - q2 * q2) - mz,
    ])


def magnetic_gradient(q: np.ndarray, magnetic_unit: np.ndarray) -> np.ndarray:
    """J_b^T f_b for the magnetic reference only.

    Args:
        q: Current orientation quaternion (unit norm)
        magnetic_unit: Normalized magnetometer reading

    Returns:
        Unnormalized step [s0, s1, s2, s3]
    """
    q0, q1, q2, q3 = q
    two_bx, two_bz = earth_field_reference(q, magnetic_unit)
    f1, f2, f3 = magnetic_residual(q, magnetic_unit, two_bx, two_bz)
    four_bx = 2.0 * two_bx
    four_bz = 2.0 * two_bz

    return np.array([
        -two_bz * q2 * f1
        + (-two_bx * q3 + two_bz * q1) * f2
        + two_bx * q2 * f3,
        two_bz * q3 * f1
        + (two_bx * q2 + two_bz * q0) * f2
        + (two_bx * q3 - four_bz * q1) * f3,
        (-four_bx * q2 - two_bz * q0) * f1
        + (two_bx * q1 + two_bz * q3) * f2
        + (two_bx * q0 - four_bz * q2) * f3,
        (-four_bx * q3 + two_bz * q1) * f1
        + (-two_bx * q0 + two_bz * q2) * f2
        + two_bx * q1 * f3,
    ])


def marg_gradient(
    q: np.ndarray,
    acceleration_unit: np.ndarray,
    magnetic_unit: np.ndarray,
) -> np.ndarray:
    """Combined gravity and magnetic gradient J^T f."""
    return (
        gravity_gradient(q, acceleration_unit)
        + magnetic_gradient(q, magnetic_unit)
    )


def gyro_error_direction(q: np.ndarray, step: np.ndarray) -> np.ndarray:
    """Angular rate that the (normalized) step represents.

    This is the vector part of 2 * q* ⊗ step: the component of the
    correction that looks like a gyroscope bias rather than an
    orientation error.
    """
    q0, q1, q2, q3 = q
    s0, s1, s2, s3 = step
    return 2.0 * np.array([
        q0 * s1 - q1 * s0 - q2 * s3 + q3 * s2,
        q0 * s2 + q1 * s3 - q2 * s0 - q3 * s1,
        q0 * s3 - q1 * s2 + q2 * s1 - q3 * s0,
    ])
