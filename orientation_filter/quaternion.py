"""
Quaternion helpers shared across the filter, simulation, and tests.

Convention: quaternions are [q0, q1, q2, q3] with the scalar part first.
A filter quaternion q maps sensor-frame vectors into the Earth frame, so a
vector known in the Earth frame is seen by the sensor as q* v q.
"""

from __future__ import annotations

import numpy as np

IDENTITY_QUATERNION = np.array([1.0, 0.0, 0.0, 0.0])


def quaternion_multiply(p: np.ndarray, q: np.ndarray) -> np.ndarray:
    """Hamilton product p ⊗ q."""
    p0, p1, p2, p3 = p
    q0, q1, q2, q3 = q
    return np.array(
        [
            p0 * q0 - p1 * q1 - p2 * q2 - p3 * q3,
            p0 * q1 + p1 * q0 + p2 * q3 - p3 * q2,
            p0 * q2 - p1 * q3 + p2 * q0 + p3 * q1,
            p0 * q3 + p1 * q2 - p2 * q1 + p3 * q0,
        ]
    )


def quaternion_conjugate(q: np.ndarray) -> np.ndarray:
    """Return q* = [q0, -q1, -q2, -q3]."""
    return np.array([q[0], -q[1], -q[2], -q[3]])


def quaternion_rate(q: np.ndarray, angular_velocity_radps: np.ndarray) -> np.ndarray:
    """Quaternion kinematics: qDot = 0.5 * q ⊗ (0, gx, gy, gz)."""
    q0, q1, q2, q3 = q
    gx, gy, gz = angular_velocity_radps
    return 0.5 * np.array(
        [
            -q1 * gx - q2 * gy - q3 * gz,
            q0 * gx + q2 * gz - q3 * gy,
            q0 * gy - q1 * gz + q3 * gx,
            q0 * gz + q1 * gy - q2 * gx,
        ]
    )


def rotate_to_sensor_frame(q: np.ndarray, vector_earth: np.ndarray) -> np.ndarray:
    """Express an Earth-frame vector in the sensor frame (q* ⊗ v ⊗ q)."""
    pure = np.concatenate(([0.0], vector_earth))
    return quaternion_multiply(
        quaternion_multiply(quaternion_conjugate(q), pure), q
    )[1:]


def rotate_to_earth_frame(q: np.ndarray, vector_sensor: np.ndarray) -> np.ndarray:
    """Express a sensor-frame vector in the Earth frame (q ⊗ v ⊗ q*)."""
    pure = np.concatenate(([0.0], vector_sensor))
    return quaternion_multiply(
        quaternion_multiply(q, pure), quaternion_conjugate(q)
    )[1:]


def quaternion_angle_between(q_a: np.ndarray, q_b: np.ndarray) -> float:
    """Rotation angle in radians taking q_a to q_b (sign-insensitive)."""
    dot = abs(float(np.dot(q_a, q_b)))
    dot /= float(np.linalg.norm(q_a) * np.linalg.norm(q_b))
    return 2.0 * float(np.arccos(np.clip(dot, -1.0, 1.0)))


def ensure_quat_continuity(prev_quat: np.ndarray | None, quat: np.ndarray) -> np.ndarray:
    """Flip quaternion if needed to maintain continuity (q and -q represent same rotation)."""
    if prev_quat is None:
        return quat
    if np.dot(prev_quat, quat) < 0.0:
        return -quat
    return quat
