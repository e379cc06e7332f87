"""Simulation module for orientation filter validation.

This module provides synthetic stationary sensor data for testing and
validating the Madgwick filter before deployment to hardware.

Public API:
    - StationarySimulation: Main simulation class
    - SimulationResult: Result dataclass from simulation runs
    - SimulationConfig: Configuration dataclass for simulation
    - orientation_error_rad: Angle between two quaternions via scipy
"""

from simulation.stationary_simulation import (
    StationarySimulation,
    SimulationResult,
    SimulationConfig,
    orientation_error_rad,
    quaternion_from_rotation,
    rotation_from_quaternion,
)

__all__ = [
    'StationarySimulation',
    'SimulationResult',
    'SimulationConfig',
    'orientation_error_rad',
    'quaternion_from_rotation',
    'rotation_from_quaternion',
]
