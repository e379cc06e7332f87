"""Matplotlib plotting utilities for orientation filter debugging.

Provides reusable plotting functions for analyzing filter behavior.
"""

from typing import Optional
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from simulation import SimulationResult

# Quaternion component labels for plots
QUATERNION_LABELS = ['q0', 'q1', 'q2', 'q3']
AXIS_LABELS = ['x', 'y', 'z']


def plot_quaternion_history(
    time_s: np.ndarray,
    quaternion_history: np.ndarray,
    true_quaternion: Optional[np.ndarray] = None,
    title: str = "Estimated Quaternion",
    save_path: Optional[str] = None,
) -> Figure:
    """Plot quaternion components over time.

    Args:
        time_s: Time array (N,)
        quaternion_history: Estimated quaternions (N, 4)
        true_quaternion: Optional true orientation (4,) drawn as dashed lines
        title: Figure title
        save_path: Optional path to save figure

    Returns:
        Matplotlib Figure object
    """
    fig, axes = plt.subplots(2, 2, figsize=(12, 8))
    fig.suptitle(title, fontsize=14)

    for idx, label in enumerate(QUATERNION_LABELS):
        ax = axes[idx // 2, idx % 2]
        ax.plot(time_s, quaternion_history[:, idx], 'b-', label='Estimated', linewidth=1.5)
        if true_quaternion is not None:
            # q and -q are the same rotation; match the estimate's sign
            sign = np.sign(np.dot(quaternion_history[-1], true_quaternion)) or 1.0
            ax.axhline(y=sign * true_quaternion[idx], color='r', linestyle='--', label='True')

        ax.set_xlabel('Time (s)')
        ax.set_ylabel(label)
        ax.set_title(label)
        ax.legend(loc='best')
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_filter_diagnostics(
    result: SimulationResult,
    title: str = "Filter Diagnostics",
    save_path: Optional[str] = None,
) -> Figure:
    """Plot orientation error and gyro bias convergence.

    Args:
        result: Simulation result to analyze
        title: Figure title
        save_path: Optional path to save figure

    Returns:
        Matplotlib Figure object
    """
    fig, axes = plt.subplots(2, 1, figsize=(12, 8))
    fig.suptitle(title, fontsize=14)

    # Orientation error
    ax = axes[0]
    ax.plot(result.time_s, np.rad2deg(result.orientation_error_rad), 'm-', linewidth=1.5)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Error (deg)')
    ax.set_title(
        f'Orientation Error (final {np.rad2deg(result.final_orientation_error_rad):.3f} deg)'
    )
    ax.grid(True, alpha=0.3)

    # Bias estimate vs injected bias
    ax = axes[1]
    colors = ['b', 'g', 'r']
    for idx, axis in enumerate(AXIS_LABELS):
        ax.plot(
            result.time_s,
            result.gyro_bias_history_radps[:, idx],
            f'{colors[idx]}-',
            label=f'w_b{axis}',
            linewidth=1.5,
        )
        ax.axhline(y=result.true_gyro_bias_radps[idx], color=colors[idx], linestyle='--')
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Bias (rad/s)')
    ax.set_title('Gyroscope Bias Estimate (dashed: injected)')
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
