"""Debug module for orientation filter visualization.

Provides tools for inspecting filter behavior:
- plot_quaternion_history: Estimated quaternion components over time
- plot_filter_diagnostics: Orientation error and gyro bias convergence
"""

from debug.plotting import (
    plot_quaternion_history,
    plot_filter_diagnostics,
)

__all__ = [
    'plot_quaternion_history',
    'plot_filter_diagnostics',
]
