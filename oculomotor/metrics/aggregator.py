"""
Eye-Tracking Metrics Aggregator

Derives the session indices from the accumulated fixations, saccades and
the bounded raw-sample window.

Two implementations are provided:
- Pure functions (``chaos_index``, ``fixation_intersection_coefficient``,
  ``compute_metrics``) that recompute everything from a snapshot.
- ``RunningMetrics``, which maintains the same quantities incrementally so
  a metrics read is O(1) regardless of session length.
"""

import math
from collections import deque
from typing import Optional, Sequence, Tuple

import numpy as np

from oculomotor.event_detection.config import DetectionConfig
from oculomotor.event_detection.models import Fixation, GazeSample, Saccade
from oculomotor.metrics.eye_tracking_metrics import EyeTrackingMetrics

TWO_PI = 2.0 * math.pi


def wrap_angle(delta: float) -> float:
    """Absolute turn in [0, pi] for a raw angle difference"""
    return abs((delta + math.pi) % TWO_PI - math.pi)


def turning_angles(
    points: Sequence[Tuple[float, float]],
    wrap: bool = False
) -> np.ndarray:
    """
    Absolute heading change at every interior point of a gaze path

    Args:
        points: Ordered (x, y) positions
        wrap: Fold differences into [0, pi]. When False a turn just past
            +/-pi registers as almost 2*pi.

    Returns:
        Array of len(points) - 2 angles in radians (empty for short paths)
    """
    if len(points) < 3:
        return np.zeros(0)

    xy = np.asarray(points, dtype=float)
    steps = np.diff(xy, axis=0)
    headings = np.arctan2(steps[:, 1], steps[:, 0])
    deltas = np.diff(headings)
    if wrap:
        deltas = (deltas + np.pi) % TWO_PI - np.pi
    return np.abs(deltas)


def chaos_index(points: Sequence[Tuple[float, float]], wrap: bool = False) -> float:
    """
    Mean absolute turning angle along the gaze path

    Args:
        points: Ordered (x, y) positions of the raw-sample window
        wrap: See ``turning_angles``

    Returns:
        Chaos index in radians, 0.0 for fewer than 3 points
    """
    angles = turning_angles(points, wrap=wrap)
    if angles.size == 0:
        return 0.0
    return float(angles.sum() / angles.size)


def saccade_vectors(saccades: Sequence[Saccade]) -> np.ndarray:
    if not saccades:
        return np.zeros((0, 2))
    return np.array([(s.dx, s.dy) for s in saccades], dtype=float)


def fixation_intersection_coefficient(
    saccades: Sequence[Saccade],
    tolerance: float = 0.001
) -> float:
    """
    Share of saccade pairs whose direction vectors are not parallel

    Despite the name this is a direction-diversity ratio: two saccades
    "intersect" when the magnitude of their 2-D cross product exceeds
    ``tolerance``. No segment intersection test is made.

    Args:
        saccades: All saccades of the session
        tolerance: Cross-product magnitude treated as numerical noise

    Returns:
        Ratio in [0, 1], 0.0 for fewer than 2 saccades
    """
    n = len(saccades)
    if n < 2:
        return 0.0

    vectors = saccade_vectors(saccades)
    dx = vectors[:, 0]
    dy = vectors[:, 1]
    cross = np.outer(dx, dy) - np.outer(dy, dx)
    upper = np.triu_indices(n, k=1)
    non_parallel = int(np.count_nonzero(np.abs(cross[upper]) > tolerance))
    return non_parallel / (n * (n - 1) / 2)


def compute_metrics(
    fixations: Sequence[Fixation],
    saccades: Sequence[Saccade],
    window: Sequence[GazeSample],
    config: Optional[DetectionConfig] = None
) -> EyeTrackingMetrics:
    """
    Recompute all indices from a snapshot

    Args:
        fixations: All fixations of the session
        saccades: All saccades of the session
        window: Raw-sample window, oldest first
        config: Thresholds (defaults to the clinical preset)

    Returns:
        EyeTrackingMetrics, all zero for an empty snapshot
    """
    config = config or DetectionConfig.clinical()

    durations = np.array([f.duration_ms for f in fixations], dtype=float)
    average_duration = float(durations.mean()) if durations.size else 0.0
    prolonged = int(np.count_nonzero(durations > config.prolonged_fixation_ms))
    regressions = sum(1 for s in saccades if s.is_regression)

    chaos = chaos_index([(s.x, s.y) for s in window], wrap=config.wrap_turn_angles)
    fic = fixation_intersection_coefficient(saccades, tolerance=config.parallel_tolerance)

    if config.clamp_indices:
        chaos = min(chaos, 1.0)
        fic = min(fic, 1.0)

    return EyeTrackingMetrics(
        total_fixations=len(fixations),
        average_fixation_duration=average_duration,
        regression_count=regressions,
        prolonged_fixations=prolonged,
        chaos_index=chaos,
        fixation_intersection_coefficient=fic
    )


class RunningMetrics:
    """
    Incrementally maintained metrics

    - Fixation and regression counts plus the duration sum are running totals.
    - The chaos index keeps one turning angle per interior point of the
      raw-sample window in a ring aligned with that window, plus its sum.
    - FIC keeps a running count of non-parallel saccade pairs; each new
      saccade is compared once against all earlier saccade vectors.
    """

    def __init__(self, config: Optional[DetectionConfig] = None):
        self.config = config or DetectionConfig.clinical()
        self._angles: deque = deque(maxlen=self.config.window_size - 2)
        self._points: deque = deque(maxlen=2)
        self._vectors = np.zeros((64, 2))
        self.reset()

    def reset(self):
        self.total_fixations = 0
        self.duration_sum = 0
        self.prolonged_fixations = 0
        self.regression_count = 0
        self.saccade_count = 0
        self.non_parallel_pairs = 0
        self._angle_sum = 0.0
        self._evictions = 0
        self._angles.clear()
        self._points.clear()

    def add_sample(self, sample: GazeSample):
        """Record a sample that entered the raw-sample window"""
        if len(self._points) == 2:
            (x0, y0), (x1, y1) = self._points
            heading_in = math.atan2(y1 - y0, x1 - x0)
            heading_out = math.atan2(sample.y - y1, sample.x - x1)
            delta = heading_out - heading_in
            angle = wrap_angle(delta) if self.config.wrap_turn_angles else abs(delta)

            if len(self._angles) == self._angles.maxlen:
                self._angle_sum -= self._angles[0]
                self._evictions += 1
            self._angles.append(angle)
            self._angle_sum += angle

            # Re-sum once per full turnover of the ring to shed rounding drift
            if self._evictions >= self._angles.maxlen:
                self._angle_sum = math.fsum(self._angles)
                self._evictions = 0

        self._points.append((sample.x, sample.y))

    def add_fixation(self, fixation: Fixation):
        self.total_fixations += 1
        self.duration_sum += fixation.duration_ms
        if fixation.duration_ms > self.config.prolonged_fixation_ms:
            self.prolonged_fixations += 1

    def add_saccade(self, saccade: Saccade):
        if saccade.is_regression:
            self.regression_count += 1

        n = self.saccade_count
        if n:
            earlier = self._vectors[:n]
            cross = earlier[:, 0] * saccade.dy - earlier[:, 1] * saccade.dx
            self.non_parallel_pairs += int(
                np.count_nonzero(np.abs(cross) > self.config.parallel_tolerance)
            )

        if n == len(self._vectors):
            self._vectors = np.concatenate([self._vectors, np.zeros_like(self._vectors)])
        self._vectors[n] = (saccade.dx, saccade.dy)
        self.saccade_count = n + 1

    @property
    def chaos_index(self) -> float:
        if not self._angles:
            return 0.0
        return max(self._angle_sum, 0.0) / len(self._angles)

    @property
    def fixation_intersection_coefficient(self) -> float:
        n = self.saccade_count
        if n < 2:
            return 0.0
        return self.non_parallel_pairs / (n * (n - 1) / 2)

    def snapshot(self) -> EyeTrackingMetrics:
        """Current metrics; never mutates state"""
        average_duration = (
            self.duration_sum / self.total_fixations if self.total_fixations else 0.0
        )
        chaos = self.chaos_index
        fic = self.fixation_intersection_coefficient
        if self.config.clamp_indices:
            chaos = min(chaos, 1.0)
            fic = min(fic, 1.0)

        return EyeTrackingMetrics(
            total_fixations=self.total_fixations,
            average_fixation_duration=float(average_duration),
            regression_count=self.regression_count,
            prolonged_fixations=self.prolonged_fixations,
            chaos_index=chaos,
            fixation_intersection_coefficient=fic
        )
