import numpy as np
from scipy.spatial.transform import Rotation

from orientation_filter.quaternion import (
    IDENTITY_QUATERNION,
    quaternion_multiply,
    quaternion_conjugate,
    quaternion_rate,
    rotate_to_sensor_frame,
    rotate_to_earth_frame,
    quaternion_angle_between,
    ensure_quat_continuity,
)


def yaw_quaternion(angle):
    return np.array([np.cos(angle / 2), 0.0, 0.0, np.sin(angle / 2)])


def test_multiply_by_identity():
    q = np.array([0.5, 0.5, -0.5, 0.5])
    np.testing.assert_allclose(quaternion_multiply(IDENTITY_QUATERNION, q), q)
    np.testing.assert_allclose(quaternion_multiply(q, IDENTITY_QUATERNION), q)


def test_conjugate_product_is_identity():
    q = np.array([0.8, 0.2, -0.4, 0.4])
    q = q / np.linalg.norm(q)
    np.testing.assert_allclose(
        quaternion_multiply(q, quaternion_conjugate(q)), IDENTITY_QUATERNION, atol=1e-12
    )


def test_yaw_composition():
    # Two 30 degree yaws make a 60 degree yaw
    q = quaternion_multiply(yaw_quaternion(np.pi / 6), yaw_quaternion(np.pi / 6))
    np.testing.assert_allclose(q, yaw_quaternion(np.pi / 3), atol=1e-12)


def test_rate_matches_pure_quaternion_product():
    q = np.array([0.9, 0.1, -0.3, 0.2])
    gyro = np.array([0.4, -0.7, 1.1])
    expected = 0.5 * quaternion_multiply(q, np.concatenate(([0.0], gyro)))
    np.testing.assert_allclose(quaternion_rate(q, gyro), expected)


def test_rotation_directions_match_scipy():
    # scipy quaternions are scalar-last and rotate actively (q v q*)
    rotation = Rotation.from_euler('ZYX', [40.0, -15.0, 25.0], degrees=True)
    x, y, z, w = rotation.as_quat()
    q = np.array([w, x, y, z])
    v = np.array([0.3, -1.2, 0.7])
    np.testing.assert_allclose(rotate_to_earth_frame(q, v), rotation.apply(v), atol=1e-12)
    np.testing.assert_allclose(
        rotate_to_sensor_frame(q, v), rotation.inv().apply(v), atol=1e-12
    )


def test_level_gravity_in_sensor_frame():
    # Rolling the sensor by +90 deg about x puts gravity on the sensor's +y
    q = np.array([np.cos(np.pi / 4), np.sin(np.pi / 4), 0.0, 0.0])
    g_sensor = rotate_to_sensor_frame(q, np.array([0.0, 0.0, 1.0]))
    np.testing.assert_allclose(g_sensor, [0.0, 1.0, 0.0], atol=1e-12)


def test_angle_between_is_sign_insensitive():
    q = yaw_quaternion(0.5)
    assert np.isclose(quaternion_angle_between(q, -q), 0.0, atol=1e-7)
    assert np.isclose(quaternion_angle_between(IDENTITY_QUATERNION, q), 0.5)


def test_quat_continuity():
    q1 = yaw_quaternion(1.0)
    q2 = -q1
    assert np.array_equal(ensure_quat_continuity(None, q1), q1)
    np.testing.assert_array_equal(ensure_quat_continuity(q1, q2), q1)
