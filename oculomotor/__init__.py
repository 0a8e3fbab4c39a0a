"""
Oculomotor event detection for reading assessments

Classifies a live gaze stream into fixations and saccades and derives the
eye-tracking indices (chaos index, fixation intersection coefficient,
prolonged fixations, regressions) consumed by the risk estimator.
"""

from .event_detection import (
    DetectionConfig,
    DetectionResult,
    Fixation,
    FixationSaccadeDetector,
    GazeSample,
    Saccade,
)
from .metrics import EyeTrackingMetrics, RunningMetrics, compute_metrics
from .session import EventStore, GazeTrackingSession

__all__ = [
    'DetectionConfig',
    'DetectionResult',
    'Fixation',
    'FixationSaccadeDetector',
    'GazeSample',
    'Saccade',
    'EyeTrackingMetrics',
    'RunningMetrics',
    'compute_metrics',
    'EventStore',
    'GazeTrackingSession',
]

__version__ = '1.0.0'
