"""
Event Detection Module

Turns a stream of gaze samples into fixations and saccades.
"""

from .config import DetectionConfig
from .detector import FixationSaccadeDetector, Idle, InFixation, transition
from .models import DetectionResult, Fixation, GazeSample, Saccade
from .smoothing import GazeSmoother

__all__ = [
    'DetectionConfig',
    'FixationSaccadeDetector',
    'Idle',
    'InFixation',
    'transition',
    'DetectionResult',
    'Fixation',
    'GazeSample',
    'Saccade',
    'GazeSmoother',
]
