"""
Fixation/Saccade Detection Module

Dispersion-threshold classifier that consumes one gaze sample at a time.
Consecutive valid samples closer than the dispersion threshold form a
steady run anchored at its first sample; a larger jump closes the run
(emitting a fixation if it lasted long enough) and emits a saccade between
the two samples.

Known limitation: invalid samples are dropped before they reach the
detector, so a dropout burst does not end an open fixation. The gap is
silently absorbed into the fixation duration once valid samples resume.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .config import DetectionConfig
from .models import EMPTY_RESULT, DetectionResult, Fixation, GazeSample, Saccade

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """No steady run in progress"""


@dataclass(frozen=True)
class InFixation:
    """Steady run in progress, anchored at its first sample"""
    x: float
    y: float
    start_timestamp_ms: int


DetectorState = Union[Idle, InFixation]

IDLE = Idle()


def transition(
    state: DetectorState,
    previous: GazeSample,
    sample: GazeSample,
    config: DetectionConfig
) -> Tuple[DetectorState, DetectionResult]:
    """
    Advance the detector by one pair of consecutive valid samples

    Args:
        state: Current detector state
        previous: Last valid sample seen
        sample: Newly arrived valid sample
        config: Detection thresholds

    Returns:
        Tuple of (next state, events emitted)
    """
    distance = sample.distance_to(previous)

    if distance < config.dispersion_threshold:
        if isinstance(state, Idle):
            return InFixation(sample.x, sample.y, sample.timestamp_ms), EMPTY_RESULT
        return state, EMPTY_RESULT

    fixation: Optional[Fixation] = None
    if isinstance(state, InFixation):
        duration = sample.timestamp_ms - state.start_timestamp_ms
        if duration >= config.min_fixation_duration_ms:
            fixation = Fixation(
                x=state.x,
                y=state.y,
                duration_ms=duration,
                start_timestamp_ms=state.start_timestamp_ms
            )

    saccade = Saccade(
        start_x=previous.x,
        start_y=previous.y,
        end_x=sample.x,
        end_y=sample.y,
        duration_ms=sample.timestamp_ms - previous.timestamp_ms,
        is_regression=sample.x < previous.x
    )
    return IDLE, DetectionResult(fixation=fixation, saccade=saccade)


class FixationSaccadeDetector:
    """
    Streaming dispersion-threshold event detector

    O(1) work and state per sample. Deterministic: the output depends only
    on the sample sequence and the config.
    """

    def __init__(self, config: Optional[DetectionConfig] = None):
        """
        Initialize detector

        Args:
            config: Detection thresholds (defaults to the clinical preset)
        """
        self.config = config or DetectionConfig.clinical()
        self.state: DetectorState = IDLE
        self.last_valid_sample: Optional[GazeSample] = None

    def process_sample(self, sample: GazeSample) -> DetectionResult:
        """
        Classify one sample

        Invalid or malformed samples are ignored without touching state.

        Args:
            sample: Gaze sample in arrival order

        Returns:
            DetectionResult with at most one fixation and one saccade
        """
        if not sample.usable:
            return EMPTY_RESULT

        previous = self.last_valid_sample
        self.last_valid_sample = sample
        if previous is None:
            return EMPTY_RESULT

        self.state, result = transition(self.state, previous, sample, self.config)

        if result.fixation is not None:
            logger.debug(
                f"Fixation at ({result.fixation.x:.1f}, {result.fixation.y:.1f}) "
                f"for {result.fixation.duration_ms} ms"
            )
        return result

    def flush(self) -> DetectionResult:
        """
        Close an open fixation at the end of the stream

        The fixation lasts from its anchor to the last valid sample and is
        emitted only if it meets the minimum duration. No saccade is
        emitted. The last valid sample is kept.

        Returns:
            DetectionResult with at most a fixation
        """
        state = self.state
        self.state = IDLE
        if not isinstance(state, InFixation) or self.last_valid_sample is None:
            return EMPTY_RESULT

        duration = self.last_valid_sample.timestamp_ms - state.start_timestamp_ms
        if duration < self.config.min_fixation_duration_ms:
            return EMPTY_RESULT

        return DetectionResult(fixation=Fixation(
            x=state.x,
            y=state.y,
            duration_ms=duration,
            start_timestamp_ms=state.start_timestamp_ms
        ))

    @property
    def in_fixation(self) -> bool:
        return isinstance(self.state, InFixation)

    def reset(self):
        """Forget the last sample and any open fixation"""
        self.state = IDLE
        self.last_valid_sample = None
