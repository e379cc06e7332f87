"""Synthetic sensor simulation for orientation filter validation.

This module provides a simulation environment that:
1. Holds a sensor at a fixed true orientation
2. Synthesizes gyroscope, accelerometer and magnetometer samples with an
   injected constant gyro bias and Gaussian noise
3. Feeds the samples to a MadgwickFilter at its fixed sample rate
4. Logs quaternion, bias and orientation error histories for analysis

The Earth frame is z-up with magnetic north along x, matching the filter's
reference directions.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from orientation_filter import (
    DEFAULT_FILTER_CONFIG,
    FilterConfig,
    MadgwickFilter,
    MARGReading,
)
from orientation_filter.quaternion import ensure_quat_continuity
from orientation_filter._internal.validation import (
    validate_positive,
    validate_non_negative,
)


logger = logging.getLogger(__name__)


def quaternion_from_rotation(rotation: Rotation) -> np.ndarray:
    """Scalar-first quaternion from a scipy Rotation (scalar-last)."""
    x, y, z, w = rotation.as_quat()
    return np.array([w, x, y, z])


def rotation_from_quaternion(quaternion: np.ndarray) -> Rotation:
    """scipy Rotation from a scalar-first quaternion."""
    w, x, y, z = quaternion
    return Rotation.from_quat([x, y, z, w])


def orientation_error_rad(estimated: np.ndarray, true: np.ndarray) -> float:
    """Angle of the rotation between estimated and true quaternions."""
    difference = (
        rotation_from_quaternion(estimated).inv()
        * rotation_from_quaternion(true)
    )
    return float(difference.magnitude())


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration for a stationary sensor simulation.

    Attributes:
        duration_s: Simulated time span
        roll_deg: True roll (rotation about x)
        pitch_deg: True pitch (rotation about y)
        yaw_deg: True yaw from magnetic north (rotation about z)
        gyro_bias_radps: Constant bias added to every gyroscope sample
        gyro_noise_std_radps: Gyroscope white noise standard deviation
        accel_noise_std_mps2: Accelerometer white noise standard deviation
        mag_noise_std_ut: Magnetometer white noise standard deviation
        gravity_mps2: Magnitude of the simulated specific force
        field_strength_ut: Magnitude of the simulated magnetic field
        magnetic_inclination_deg: Dip of the field below the horizon
        use_magnetometer: If False, magnetometer samples are None
        seed: Random seed for the noise generator
    """

    duration_s: float = 30.0
    roll_deg: float = 0.0
    pitch_deg: float = 0.0
    yaw_deg: float = 0.0
    gyro_bias_radps: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    gyro_noise_std_radps: float = 0.0
    accel_noise_std_mps2: float = 0.0
    mag_noise_std_ut: float = 0.0
    gravity_mps2: float = 9.81
    field_strength_ut: float = 50.0
    magnetic_inclination_deg: float = 60.0
    use_magnetometer: bool = True
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate parameters satisfy constraints."""
        validate_positive(self.duration_s, 'duration_s')
        validate_non_negative(self.gyro_noise_std_radps, 'gyro_noise_std_radps')
        validate_non_negative(self.accel_noise_std_mps2, 'accel_noise_std_mps2')
        validate_non_negative(self.mag_noise_std_ut, 'mag_noise_std_ut')
        validate_positive(self.gravity_mps2, 'gravity_mps2')
        validate_positive(self.field_strength_ut, 'field_strength_ut')
        if len(self.gyro_bias_radps) != 3:
            raise ValueError(
                f"gyro_bias_radps must have 3 components, "
                f"got {len(self.gyro_bias_radps)}"
            )

    @property
    def true_rotation(self) -> Rotation:
        """Sensor-to-Earth rotation (intrinsic yaw, pitch, roll)."""
        return Rotation.from_euler(
            'ZYX', [self.yaw_deg, self.pitch_deg, self.roll_deg], degrees=True
        )

    @property
    def earth_magnetic_field_ut(self) -> np.ndarray:
        """Field vector in the Earth frame (north along x, z up)."""
        inclination_rad = np.deg2rad(self.magnetic_inclination_deg)
        return self.field_strength_ut * np.array([
            np.cos(inclination_rad), 0.0, -np.sin(inclination_rad)
        ])


@dataclass
class SimulationResult:
    """Result from a simulation run.

    Attributes:
        time_s: Sample times (N,)
        quaternion_history: Estimated quaternions (N, 4)
        gyro_bias_history_radps: Estimated bias after each sample (N, 3)
        orientation_error_rad: Angle between estimate and truth (N,)
        true_quaternion: True orientation (4,)
        true_gyro_bias_radps: Injected gyro bias (3,)
    """

    time_s: np.ndarray
    quaternion_history: np.ndarray
    gyro_bias_history_radps: np.ndarray
    orientation_error_rad: np.ndarray
    true_quaternion: np.ndarray
    true_gyro_bias_radps: np.ndarray

    @property
    def final_quaternion(self) -> np.ndarray:
        """Estimate after the last sample."""
        return self.quaternion_history[-1]

    @property
    def final_orientation_error_rad(self) -> float:
        """Orientation error after the last sample."""
        return float(self.orientation_error_rad[-1])

    @property
    def final_bias_error_radps(self) -> np.ndarray:
        """Estimated minus injected gyro bias after the last sample."""
        return self.gyro_bias_history_radps[-1] - self.true_gyro_bias_radps


class StationarySimulation:
    """Feeds synthetic stationary sensor data to a MadgwickFilter."""

    def __init__(
        self,
        filter_config: FilterConfig = DEFAULT_FILTER_CONFIG,
        simulation_config: Optional[SimulationConfig] = None,
    ) -> None:
        self._filter_config = filter_config
        self._config = simulation_config or SimulationConfig()
        self._rng = np.random.default_rng(self._config.seed)

    @property
    def num_samples(self) -> int:
        """Number of filter updates in one run."""
        return int(round(
            self._config.duration_s * self._filter_config.sample_frequency_hz
        ))

    @property
    def true_quaternion(self) -> np.ndarray:
        """True sensor orientation, scalar first."""
        return quaternion_from_rotation(self._config.true_rotation)

    def generate_readings(self) -> List[MARGReading]:
        """Synthesize sensor samples for the whole run.

        Returns:
            One MARGReading per filter update
        """
        config = self._config
        to_sensor = config.true_rotation.inv()
        num_samples = self.num_samples

        # Accelerometer measures the reaction to gravity: +z when level
        accel_true = to_sensor.apply([0.0, 0.0, config.gravity_mps2])
        mag_true = to_sensor.apply(config.earth_magnetic_field_ut)
        bias = np.asarray(config.gyro_bias_radps, dtype=float)

        gyro = bias + self._rng.normal(
            0.0, config.gyro_noise_std_radps, size=(num_samples, 3)
        )
        accel = accel_true + self._rng.normal(
            0.0, config.accel_noise_std_mps2, size=(num_samples, 3)
        )
        mag = mag_true + self._rng.normal(
            0.0, config.mag_noise_std_ut, size=(num_samples, 3)
        )

        return [
            MARGReading(
                angular_velocity_radps=gyro[k],
                acceleration=accel[k],
                magnetic_field=mag[k] if config.use_magnetometer else None,
            )
            for k in range(num_samples)
        ]

    def run(
        self,
        madgwick_filter: Optional[MadgwickFilter] = None,
    ) -> SimulationResult:
        """Run the filter over one set of synthetic readings.

        Args:
            madgwick_filter: Filter to drive. A fresh filter starting at the
                identity is created from filter_config if None.

        Returns:
            SimulationResult with per-sample histories
        """
        if madgwick_filter is None:
            madgwick_filter = MadgwickFilter(self._filter_config)

        readings = self.generate_readings()
        num_samples = len(readings)
        true_quaternion = self.true_quaternion

        logger.info(
            "Running stationary simulation: %d samples at %.1f Hz",
            num_samples,
            self._filter_config.sample_frequency_hz,
        )

        quaternion_history = np.zeros((num_samples, 4))
        bias_history = np.zeros((num_samples, 3))
        error_history = np.zeros(num_samples)

        previous = None
        for k, reading in enumerate(readings):
            quaternion = ensure_quat_continuity(
                previous, madgwick_filter.update(reading)
            )
            quaternion_history[k] = quaternion
            bias_history[k] = madgwick_filter.gyro_bias_radps
            error_history[k] = orientation_error_rad(quaternion, true_quaternion)
            previous = quaternion

        result = SimulationResult(
            time_s=np.arange(1, num_samples + 1) * madgwick_filter.sampling_period_s,
            quaternion_history=quaternion_history,
            gyro_bias_history_radps=bias_history,
            orientation_error_rad=error_history,
            true_quaternion=true_quaternion,
            true_gyro_bias_radps=np.asarray(
                self._config.gyro_bias_radps, dtype=float
            ),
        )

        logger.info(
            "Simulation finished: final orientation error %.3f deg",
            np.rad2deg(result.final_orientation_error_rad),
        )
        return result
