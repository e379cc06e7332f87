"""Orientation filter configuration parameters.

Single source of truth for filter settings.
See config/filter_params.yaml for parameter values.
"""

import logging
from dataclasses import dataclass

import numpy as np
import yaml

from orientation_filter._internal.validation import (
    validate_positive,
    validate_non_negative,
    validate_positive_integer,
)


logger = logging.getLogger(__name__)

# beta = sqrt(3/4) * gyro measurement error, zeta = sqrt(3/4) * drift rate
GAIN_SCALE = np.sqrt(3.0 / 4.0)


@dataclass(frozen=True)
class FilterConfig:
    """Configuration parameters for the Madgwick orientation filter.

    All parameters immutable after construction (frozen=True).
    Units encoded in parameter names.

    Attributes:
        sample_frequency_hz: Fixed rate at which updates are called
        gyro_measurement_error_radps: Expected gyroscope measurement error,
            sets the proportional gain beta
        gyro_drift_rate_radps2: Expected gyroscope bias drift rate, sets
            the bias integral gain zeta. Zero disables bias tracking.
        use_fast_inverse_sqrt: Normalize with the bit-level approximation
            instead of a direct 1/sqrt evaluation
        inverse_sqrt_iterations: Newton-Raphson steps for the fast
            approximation (ignored otherwise)
    """

    sample_frequency_hz: float
    gyro_measurement_error_radps: float
    gyro_drift_rate_radps2: float
    use_fast_inverse_sqrt: bool = False
    inverse_sqrt_iterations: int = 2

    def __post_init__(self) -> None:
        """Validate parameters satisfy constraints."""
        validate_positive(self.sample_frequency_hz, 'sample_frequency_hz')
        validate_non_negative(
            self.gyro_measurement_error_radps, 'gyro_measurement_error_radps'
        )
        validate_non_negative(
            self.gyro_drift_rate_radps2, 'gyro_drift_rate_radps2'
        )
        validate_positive_integer(
            self.inverse_sqrt_iterations, 'inverse_sqrt_iterations'
        )

    @classmethod
    def from_degrees(
        cls,
        sample_frequency_hz: float,
        gyro_measurement_error_degps: float,
        gyro_drift_rate_degps2: float,
        **kwargs,
    ) -> 'FilterConfig':
        """Build a configuration from gyroscope constants given in degrees.

        Args:
            sample_frequency_hz: Update rate in Hz
            gyro_measurement_error_degps: Gyroscope error in deg/s
            gyro_drift_rate_degps2: Gyroscope drift rate in deg/s^2
            **kwargs: Remaining FilterConfig fields

        Returns:
            FilterConfig instance
        """
        return cls(
            sample_frequency_hz=sample_frequency_hz,
            gyro_measurement_error_radps=float(
                np.deg2rad(gyro_measurement_error_degps)
            ),
            gyro_drift_rate_radps2=float(np.deg2rad(gyro_drift_rate_degps2)),
            **kwargs,
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'FilterConfig':
        """Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML file containing filter parameters

        Returns:
            FilterConfig instance

        Raises:
            FileNotFoundError: If YAML file does not exist
            ValueError: If required parameters missing or invalid
        """
        with open(yaml_path, 'r') as file:
            config = yaml.safe_load(file)

        required = (
            'sample_frequency_hz',
            'gyro_measurement_error_radps',
            'gyro_drift_rate_radps2',
        )
        missing = [key for key in required if key not in config]
        if missing:
            raise ValueError(
                f"Missing filter parameters in {yaml_path}: {missing}"
            )

        logger.info("Loaded filter configuration from %s", yaml_path)
        return cls(
            sample_frequency_hz=config['sample_frequency_hz'],
            gyro_measurement_error_radps=config['gyro_measurement_error_radps'],
            gyro_drift_rate_radps2=config['gyro_drift_rate_radps2'],
            use_fast_inverse_sqrt=config.get('use_fast_inverse_sqrt', False),
            inverse_sqrt_iterations=config.get('inverse_sqrt_iterations', 2),
        )

    @property
    def sampling_period_s(self) -> float:
        """Time between updates, 1 / sample_frequency_hz."""
        return 1.0 / self.sample_frequency_hz

    @property
    def beta(self) -> float:
        """Proportional correction gain."""
        return float(GAIN_SCALE * self.gyro_measurement_error_radps)

    @property
    def zeta(self) -> float:
        """Gyroscope bias integral gain."""
        return float(GAIN_SCALE * self.gyro_drift_rate_radps2)


DEFAULT_FILTER_CONFIG = FilterConfig.from_degrees(
    sample_frequency_hz=200.0,
    gyro_measurement_error_degps=4.0,
    gyro_drift_rate_degps2=0.2,
)
