"""
Event Store

Append-only record of the fixations and saccades of one tracking session,
plus a fixed-capacity ring buffer of the most recent valid samples.
"""

from collections import deque
from dataclasses import dataclass
from typing import List, Tuple

from oculomotor.event_detection.models import DetectionResult, Fixation, GazeSample, Saccade


@dataclass(frozen=True)
class EventSnapshot:
    """Immutable copy of the store contents"""
    fixations: Tuple[Fixation, ...]
    saccades: Tuple[Saccade, ...]
    window: Tuple[GazeSample, ...]


class EventStore:
    """
    Single-writer event storage

    Callers that read while another thread writes must hold the owning
    session's lock or use ``snapshot()`` under it.
    """

    def __init__(self, window_size: int = 1000):
        """
        Initialize event store

        Args:
            window_size: Maximum number of raw samples kept
        """
        self.window_size = window_size
        self._fixations: List[Fixation] = []
        self._saccades: List[Saccade] = []
        self._window: deque = deque(maxlen=window_size)

    def add_sample(self, sample: GazeSample):
        """Push a valid sample, evicting the oldest when full"""
        self._window.append(sample)

    def add_events(self, result: DetectionResult):
        if result.fixation is not None:
            self._fixations.append(result.fixation)
        if result.saccade is not None:
            self._saccades.append(result.saccade)

    @property
    def window(self) -> Tuple[GazeSample, ...]:
        return tuple(self._window)

    def snapshot(self) -> EventSnapshot:
        return EventSnapshot(
            fixations=tuple(self._fixations),
            saccades=tuple(self._saccades),
            window=tuple(self._window)
        )

    def clear(self):
        """Clear all stored events and samples"""
        self._fixations.clear()
        self._saccades.clear()
        self._window.clear()

    def __len__(self) -> int:
        return len(self._fixations) + len(self._saccades)
