#!/usr/bin/env python3
"""Run the Madgwick filter on synthetic stationary sensor data.

Usage:
    python3 run_simulation.py                         # Default settings
    python3 run_simulation.py --roll 20 --yaw 45      # Tilted and rotated
    python3 run_simulation.py --bias 0.02 -0.01 0.01  # Inject gyro bias
    python3 run_simulation.py --imu --plot            # No magnetometer, plot
"""

import argparse
import logging

import numpy as np

from orientation_filter import FilterConfig
from simulation import StationarySimulation, SimulationConfig


def main():
    parser = argparse.ArgumentParser(description='Run orientation filter simulation')
    parser.add_argument('--config', type=str, default='config/filter_params.yaml',
                        help='Path to filter parameters YAML')
    parser.add_argument('--duration', type=float, default=30.0,
                        help='Simulated duration in seconds')
    parser.add_argument('--roll', type=float, default=0.0,
                        help='True roll in degrees')
    parser.add_argument('--pitch', type=float, default=0.0,
                        help='True pitch in degrees')
    parser.add_argument('--yaw', type=float, default=0.0,
                        help='True yaw from magnetic north in degrees')
    parser.add_argument('--bias', type=float, nargs=3, default=[0.0, 0.0, 0.0],
                        metavar=('BX', 'BY', 'BZ'),
                        help='Injected gyro bias in rad/s')
    parser.add_argument('--noise', action='store_true',
                        help='Add typical MEMS sensor noise')
    parser.add_argument('--imu', action='store_true',
                        help='Run without magnetometer (IMU update)')
    parser.add_argument('--seed', type=int, default=0,
                        help='Noise generator seed')
    parser.add_argument('--plot', action='store_true',
                        help='Show diagnostic plots')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable info logging')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )

    filter_config = FilterConfig.from_yaml(args.config)
    simulation_config = SimulationConfig(
        duration_s=args.duration,
        roll_deg=args.roll,
        pitch_deg=args.pitch,
        yaw_deg=args.yaw,
        gyro_bias_radps=tuple(args.bias),
        gyro_noise_std_radps=0.005 if args.noise else 0.0,
        accel_noise_std_mps2=0.05 if args.noise else 0.0,
        mag_noise_std_ut=0.5 if args.noise else 0.0,
        use_magnetometer=not args.imu,
        seed=args.seed,
    )

    mode = "IMU (gyro + accel)" if args.imu else "AHRS (gyro + accel + mag)"
    print(f"Mode: {mode}")
    print(f"Sample rate: {filter_config.sample_frequency_hz:.1f} Hz, "
          f"beta={filter_config.beta:.4f}, zeta={filter_config.zeta:.5f}")

    result = StationarySimulation(filter_config, simulation_config).run()

    # Print results
    print("\n" + "=" * 50)
    print("Simulation Results")
    print("=" * 50)
    print(f"  True quaternion:      {np.round(result.true_quaternion, 4)}")
    print(f"  Final quaternion:     {np.round(result.final_quaternion, 4)}")
    print(f"  Orientation error:    {np.rad2deg(result.final_orientation_error_rad):.3f} deg")
    print(f"  Final bias estimate:  {np.round(result.gyro_bias_history_radps[-1], 5)} rad/s")
    print(f"  Bias error:           {np.round(result.final_bias_error_radps, 5)} rad/s")

    if args.plot:
        import matplotlib.pyplot as plt
        from debug import plot_quaternion_history, plot_filter_diagnostics

        plot_quaternion_history(
            result.time_s, result.quaternion_history, result.true_quaternion
        )
        plot_filter_diagnostics(result)
        plt.show()

    return 0


if __name__ == '__main__':
    exit(main())
