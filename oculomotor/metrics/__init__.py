"""
Metrics Module

Includes:
- EyeTrackingMetrics container
- Chaos index and fixation intersection coefficient (FIC)
- Incremental aggregation for long sessions
"""

from oculomotor.metrics.eye_tracking_metrics import EyeTrackingMetrics

from oculomotor.metrics.aggregator import (
    RunningMetrics,
    chaos_index,
    compute_metrics,
    fixation_intersection_coefficient,
    turning_angles
)

__all__ = [
    'EyeTrackingMetrics',
    'RunningMetrics',
    'chaos_index',
    'compute_metrics',
    'fixation_intersection_coefficient',
    'turning_angles'
]
