"""
Eye-tracking summary metrics handed to the downstream risk estimator
"""

from dataclasses import dataclass
from typing import Dict, Union


@dataclass(frozen=True)
class EyeTrackingMetrics:
    """Container for the eye-tracking indices of one session"""
    total_fixations: int = 0
    average_fixation_duration: float = 0.0  # ms
    regression_count: int = 0
    prolonged_fixations: int = 0
    chaos_index: float = 0.0  # radians
    fixation_intersection_coefficient: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self == EyeTrackingMetrics()

    def to_dict(self) -> Dict[str, Union[int, float]]:
        """Convert to dictionary for serialization"""
        return {
            'totalFixations': self.total_fixations,
            'averageFixationDuration': self.average_fixation_duration,
            'regressionCount': self.regression_count,
            'prolongedFixations': self.prolonged_fixations,
            'chaosIndex': self.chaos_index,
            'fixationIntersectionCoefficient': self.fixation_intersection_coefficient,
        }
