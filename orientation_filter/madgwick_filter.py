"""Madgwick gradient-descent orientation filter.

Fuses gyroscope, accelerometer and (optionally) magnetometer readings into a
unit quaternion describing the sensor frame relative to the Earth frame.

Each update integrates the quaternion kinematics

    qDot = 0.5 * q ⊗ (0, omega) - beta * s / |s|

where s is the closed-form gradient of the residual between the predicted
and measured reference directions, then renormalizes q. In the full AHRS
path the normalized step also feeds a gyroscope bias integrator with gain
zeta.

Sensor availability:
    A reading of None, or exactly the zero vector, means "no sample". The
    AHRS update falls back to the IMU update without a magnetometer, and
    both skip the correction step without an accelerometer. The
    magnetometer-only update has no such guard: a zero magnetometer reading
    yields a non-finite quaternion and is a caller error.

The filter is not thread-safe; callers serialize access to an instance.
"""

import functools
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from orientation_filter.config import FilterConfig, DEFAULT_FILTER_CONFIG
from orientation_filter.quaternion import IDENTITY_QUATERNION, quaternion_rate
from orientation_filter._internal.fast_math import inv_sqrt, fast_inv_sqrt
from orientation_filter._internal.gradient import (
    imu_gradient,
    marg_gradient,
    magnetic_gradient,
    gyro_error_direction,
)
from orientation_filter._internal.validation import (
    as_vector3,
    as_optional_vector3,
    validate_quaternion,
)


logger = logging.getLogger(__name__)


def is_available(vector: Optional[np.ndarray]) -> bool:
    """Whether a sensor vector carries a sample (not None, not all zero)."""
    return vector is not None and bool(np.any(vector))


@dataclass
class MARGReading:
    """One sample of magnetic, angular rate and gravity sensors.

    Attributes:
        angular_velocity_radps: Gyroscope readings [g_x, g_y, g_z] in rad/s
        acceleration: Accelerometer readings [a_x, a_y, a_z], any unit,
            or None when unavailable
        magnetic_field: Magnetometer readings [m_x, m_y, m_z], any unit,
            or None when unavailable
    """

    angular_velocity_radps: np.ndarray  # Shape (3,)
    acceleration: Optional[np.ndarray] = None  # Shape (3,)
    magnetic_field: Optional[np.ndarray] = None  # Shape (3,)

    def __post_init__(self) -> None:
        """Validate array shapes."""
        self.angular_velocity_radps = as_vector3(
            self.angular_velocity_radps, 'angular_velocity_radps'
        )
        self.acceleration = as_optional_vector3(
            self.acceleration, 'acceleration'
        )
        self.magnetic_field = as_optional_vector3(
            self.magnetic_field, 'magnetic_field'
        )


class MadgwickFilter:
    """Gradient-descent AHRS/IMU orientation filter with gyro bias tracking.

    Holds the orientation quaternion q (scalar first) and the running
    gyroscope bias estimate. Both are mutated only by the update methods
    and reset().

    Attributes:
        quaternion: Current orientation [q0, q1, q2, q3]
        gyro_bias_radps: Current gyroscope bias estimate [w_bx, w_by, w_bz]
        beta: Proportional correction gain
        zeta: Bias integral gain
        sampling_period_s: Fixed integration step
    """

    def __init__(
        self,
        config: FilterConfig = DEFAULT_FILTER_CONFIG,
        initial_quaternion: Optional[np.ndarray] = None,
        initial_gyro_bias_radps: Optional[np.ndarray] = None,
    ) -> None:
        """Initialize the filter.

        Args:
            config: Filter configuration (gains and sample rate)
            initial_quaternion: Starting orientation, identity if None.
                Normalized on assignment.
            initial_gyro_bias_radps: Starting bias estimate, zero if None
        """
        self._config = config
        self._sampling_period_s = config.sampling_period_s
        self._beta = config.beta
        self._zeta = config.zeta

        if config.use_fast_inverse_sqrt:
            self._inv_sqrt = functools.partial(
                fast_inv_sqrt, iterations=config.inverse_sqrt_iterations
            )
        else:
            self._inv_sqrt = inv_sqrt

        self._quaternion = IDENTITY_QUATERNION.copy()
        self._gyro_bias_radps = np.zeros(3)
        self.reset(initial_quaternion, initial_gyro_bias_radps)

        logger.debug(
            "MadgwickFilter created: dt=%.6f s, beta=%.6f, zeta=%.6f",
            self._sampling_period_s,
            self._beta,
            self._zeta,
        )

    def update(self, reading: MARGReading) -> np.ndarray:
        """Update the orientation with whichever sensors are available.

        Dispatch:
            - accelerometer and magnetometer -> update_ahrs
            - magnetometer only              -> update_mag
            - otherwise                      -> update_imu

        Args:
            reading: Sensor sample

        Returns:
            Updated quaternion [q0, q1, q2, q3]
        """
        accel_available = is_available(reading.acceleration)
        mag_available = is_available(reading.magnetic_field)

        if accel_available and mag_available:
            return self.update_ahrs(
                reading.angular_velocity_radps,
                reading.acceleration,
                reading.magnetic_field,
            )
        if mag_available:
            return self.update_mag(
                reading.angular_velocity_radps,
                reading.magnetic_field,
            )
        return self.update_imu(
            reading.angular_velocity_radps,
            reading.acceleration,
        )

    def update_ahrs(
        self,
        angular_velocity_radps,
        acceleration,
        magnetic_field,
    ) -> np.ndarray:
        """Full 9-axis update (gyroscope, accelerometer and magnetometer).

        Falls back to update_imu when the magnetometer is unavailable and
        skips the correction step when the accelerometer is unavailable.
        The bias estimate is only updated when the correction runs.

        Args:
            angular_velocity_radps: Gyroscope readings in rad/s
            acceleration: Accelerometer readings (any unit) or None
            magnetic_field: Magnetometer readings (any unit) or None

        Returns:
            Updated quaternion [q0, q1, q2, q3]
        """
        gyro = as_vector3(angular_velocity_radps, 'angular_velocity_radps')
        accel = as_optional_vector3(acceleration, 'acceleration')
        mag = as_optional_vector3(magnetic_field, 'magnetic_field')

        if not is_available(mag):
            logger.debug("Magnetometer unavailable, using IMU update")
            return self.update_imu(gyro, accel)

        q = self._quaternion
        feedback = np.zeros(4)

        if is_available(accel):
            accel_unit = accel * self._inv_sqrt(np.dot(accel, accel))
            mag_unit = mag * self._inv_sqrt(np.dot(mag, mag))

            step = self._normalize_step(marg_gradient(q, accel_unit, mag_unit))
            feedback = self._beta * step

            # Bias integral term
            self._gyro_bias_radps = self._gyro_bias_radps + (
                gyro_error_direction(q, step)
                * self._sampling_period_s
                * self._zeta
            )
        else:
            logger.debug("Accelerometer unavailable, skipping correction")

        q_dot = quaternion_rate(q, gyro - self._gyro_bias_radps) - feedback
        return self._integrate(q_dot)

    def update_imu(
        self,
        angular_velocity_radps,
        acceleration,
    ) -> np.ndarray:
        """6-axis update (gyroscope and accelerometer).

        Neither reads nor updates the gyroscope bias estimate.

        Args:
            angular_velocity_radps: Gyroscope readings in rad/s
            acceleration: Accelerometer readings (any unit) or None

        Returns:
            Updated quaternion [q0, q1, q2, q3]
        """
        gyro = as_vector3(angular_velocity_radps, 'angular_velocity_radps')
        accel = as_optional_vector3(acceleration, 'acceleration')

        q = self._quaternion
        q_dot = quaternion_rate(q, gyro)

        if is_available(accel):
            accel_unit = accel * self._inv_sqrt(np.dot(accel, accel))
            step = self._normalize_step(imu_gradient(q, accel_unit))
            q_dot = q_dot - self._beta * step
        else:
            logger.debug("Accelerometer unavailable, skipping correction")

        return self._integrate(q_dot)

    def update_mag(
        self,
        angular_velocity_radps,
        magnetic_field,
    ) -> np.ndarray:
        """Heading correction from gyroscope and magnetometer only.

        Subtracts the existing bias estimate but never updates it, since
        bias estimation needs the gravity reference. The magnetometer
        reading must be non-zero; a zero vector produces a non-finite
        quaternion.

        Args:
            angular_velocity_radps: Gyroscope readings in rad/s
            magnetic_field: Magnetometer readings (any unit)

        Returns:
            Updated quaternion [q0, q1, q2, q3]
        """
        gyro = as_vector3(angular_velocity_radps, 'angular_velocity_radps')
        mag = as_vector3(magnetic_field, 'magnetic_field')

        q = self._quaternion
        mag_unit = mag * self._inv_sqrt(np.dot(mag, mag))
        step = self._normalize_step(magnetic_gradient(q, mag_unit))

        q_dot = (
            quaternion_rate(q, gyro - self._gyro_bias_radps)
            - self._beta * step
        )
        return self._integrate(q_dot)

    def reset(
        self,
        quaternion: Optional[np.ndarray] = None,
        gyro_bias_radps: Optional[np.ndarray] = None,
    ) -> None:
        """Reset the filter to a known state.

        Args:
            quaternion: New orientation, identity if None
            gyro_bias_radps: New bias estimate, zero if None

        Raises:
            ValueError: If the quaternion or bias is malformed
        """
        if quaternion is None:
            new_quaternion = IDENTITY_QUATERNION.copy()
        else:
            new_quaternion = np.asarray(quaternion, dtype=float)
            validate_quaternion(new_quaternion)
            new_quaternion = new_quaternion / np.linalg.norm(new_quaternion)

        if gyro_bias_radps is None:
            new_bias = np.zeros(3)
        else:
            new_bias = as_vector3(gyro_bias_radps, 'gyro_bias_radps').copy()

        self._quaternion = new_quaternion
        self._gyro_bias_radps = new_bias
        logger.debug(
            "Filter reset: q=%s, bias=%s", self._quaternion, self._gyro_bias_radps
        )

    def _normalize_step(self, step: np.ndarray) -> np.ndarray:
        """Scale the gradient to unit length.

        A zero gradient means the estimate already agrees with the
        measurements; it is returned unchanged (no feedback).
        """
        norm_squared = np.dot(step, step)
        if norm_squared == 0.0:
            return step
        return step * self._inv_sqrt(norm_squared)

    def _integrate(self, q_dot: np.ndarray) -> np.ndarray:
        """Euler-integrate q_dot over one sample period and renormalize."""
        q = self._quaternion + q_dot * self._sampling_period_s
        q = q * self._inv_sqrt(np.dot(q, q))

        if not np.all(np.isfinite(q)):
            logger.warning("Orientation update produced non-finite quaternion %s", q)

        self._quaternion = q
        return q.copy()

    @property
    def quaternion(self) -> np.ndarray:
        """Current orientation quaternion [q0, q1, q2, q3]."""
        return self._quaternion.copy()

    @property
    def gyro_bias_radps(self) -> np.ndarray:
        """Current gyroscope bias estimate in rad/s."""
        return self._gyro_bias_radps.copy()

    @property
    def beta(self) -> float:
        """Proportional correction gain."""
        return self._beta

    @property
    def zeta(self) -> float:
        """Gyroscope bias integral gain."""
        return self._zeta

    @property
    def sampling_period_s(self) -> float:
        """Integration step in seconds."""
        return self._sampling_period_s

    @property
    def config(self) -> FilterConfig:
        """Configuration the filter was built from."""
        return self._config
