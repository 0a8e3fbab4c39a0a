"""
Gaze data models

Plain containers for validated tracker samples and the oculomotor events
derived from them. Events are frozen: once emitted they are never mutated.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class GazeSample:
    """Represents a single gaze sample in screen pixels"""
    x: float
    y: float
    timestamp_ms: int
    left_valid: bool = True
    right_valid: bool = True
    left_pupil_diameter: float = 0.0
    right_pupil_diameter: float = 0.0

    @property
    def valid(self) -> bool:
        """At least one eye was tracked"""
        return self.left_valid or self.right_valid

    @property
    def well_formed(self) -> bool:
        """Coordinates and timestamp are finite numbers"""
        try:
            return (
                math.isfinite(self.x)
                and math.isfinite(self.y)
                and math.isfinite(self.timestamp_ms)
            )
        except TypeError:
            return False

    @property
    def usable(self) -> bool:
        return self.valid and self.well_formed

    def distance_to(self, other: "GazeSample") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def moved_to(self, x: float, y: float) -> "GazeSample":
        """Copy of this sample at a new position (used by smoothing)"""
        return GazeSample(
            x=x,
            y=y,
            timestamp_ms=self.timestamp_ms,
            left_valid=self.left_valid,
            right_valid=self.right_valid,
            left_pupil_diameter=self.left_pupil_diameter,
            right_pupil_diameter=self.right_pupil_diameter,
        )

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "GazeSample":
        """
        Build a sample from a tracker adapter payload

        Args:
            payload: Mapping with ``x``, ``y``, ``timestamp`` and optionally
                ``leftPupilDiameter``, ``rightPupilDiameter`` and
                ``validity: {leftEye, rightEye}``

        Returns:
            GazeSample

        Raises:
            KeyError: If ``x``, ``y`` or ``timestamp`` is missing
        """
        validity = payload.get('validity') or {}
        timestamp = float(payload['timestamp'])
        # Non-finite timestamps stay float so the sample is dropped as malformed
        if math.isfinite(timestamp):
            timestamp = int(timestamp)
        return cls(
            x=float(payload['x']),
            y=float(payload['y']),
            timestamp_ms=timestamp,
            left_valid=bool(validity.get('leftEye', True)),
            right_valid=bool(validity.get('rightEye', True)),
            left_pupil_diameter=float(payload.get('leftPupilDiameter', 0.0) or 0.0),
            right_pupil_diameter=float(payload.get('rightPupilDiameter', 0.0) or 0.0),
        )


@dataclass(frozen=True)
class Fixation:
    """Represents a fixation event anchored at the first steady sample"""
    x: float
    y: float
    duration_ms: int
    start_timestamp_ms: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'x': self.x,
            'y': self.y,
            'duration': self.duration_ms,
            'timestamp': self.start_timestamp_ms,
        }


@dataclass(frozen=True)
class Saccade:
    """Represents a saccade between two consecutive valid samples"""
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    duration_ms: int
    is_regression: bool

    @property
    def dx(self) -> float:
        return self.end_x - self.start_x

    @property
    def dy(self) -> float:
        return self.end_y - self.start_y

    @property
    def amplitude(self) -> float:
        return math.hypot(self.dx, self.dy)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'startX': self.start_x,
            'startY': self.start_y,
            'endX': self.end_x,
            'endY': self.end_y,
            'duration': self.duration_ms,
            'isRegression': self.is_regression,
        }


@dataclass(frozen=True)
class DetectionResult:
    """Events emitted while processing one sample"""
    fixation: Optional[Fixation] = None
    saccade: Optional[Saccade] = None

    @property
    def empty(self) -> bool:
        return self.fixation is None and self.saccade is None


EMPTY_RESULT = DetectionResult()
