"""
Gaze Tracking Session

Wires the sample stream through validity filtering, optional smoothing,
the fixation/saccade detector, the event store and the running metrics.

This is the surface used by the tracker adapter (``process_sample``) and
by the UI/session layer (``get_metrics``, ``reset``, ``close``).
"""

import logging
import threading
import uuid
from typing import Any, Dict, Optional

from oculomotor.event_detection.config import DetectionConfig
from oculomotor.event_detection.detector import FixationSaccadeDetector
from oculomotor.event_detection.models import EMPTY_RESULT, DetectionResult, GazeSample
from oculomotor.event_detection.smoothing import GazeSmoother
from oculomotor.metrics.aggregator import RunningMetrics, compute_metrics
from oculomotor.metrics.eye_tracking_metrics import EyeTrackingMetrics
from oculomotor.session.event_store import EventSnapshot, EventStore

logger = logging.getLogger(__name__)


class GazeTrackingSession:
    """
    One eye-tracking session

    Samples are processed synchronously, one at a time. A lock guards all
    state so metric reads from another thread (e.g. a UI poller) always see
    a consistent snapshot.
    """

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        session_id: Optional[str] = None
    ):
        """
        Initialize tracking session

        Args:
            config: Detection thresholds and metric options
                (defaults to the clinical preset)
            session_id: Identifier used in logs (random if omitted)
        """
        self.config = config or DetectionConfig.clinical()
        self.session_id = session_id or uuid.uuid4().hex[:12]

        self.detector = FixationSaccadeDetector(self.config)
        self.store = EventStore(window_size=self.config.window_size)
        self.running = RunningMetrics(self.config)
        self.smoother: Optional[GazeSmoother] = None
        if self.config.smoothing_window > 1:
            self.smoother = GazeSmoother(self.config.smoothing_window)

        self._lock = threading.Lock()
        self._closed = False
        self.current_gaze: Optional[GazeSample] = None
        self.accepted_samples = 0
        self.dropped_samples = 0

        logger.info(
            f"Tracking session {self.session_id} started "
            f"(dispersion={self.config.dispersion_threshold}px, "
            f"min_fixation={self.config.min_fixation_duration_ms}ms)"
        )

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None, **kwargs) -> "GazeTrackingSession":
        """
        Create a session from a loaded YAML configuration

        Args:
            config: Full configuration dictionary; only the ``eye_tracking``
                section is read
        """
        section = (config or {}).get('eye_tracking', {})
        return cls(config=DetectionConfig.from_dict(section), **kwargs)

    @property
    def closed(self) -> bool:
        return self._closed

    def process_sample(self, sample: GazeSample) -> DetectionResult:
        """
        Process one incoming gaze sample

        Invalid, malformed and post-close samples are dropped silently.

        Args:
            sample: Validated sample from the tracker adapter

        Returns:
            DetectionResult with the fixation and/or saccade completed by
            this sample
        """
        with self._lock:
            if self._closed:
                logger.debug(f"Session {self.session_id} closed, ignoring sample")
                return EMPTY_RESULT

            if not sample.usable:
                self.dropped_samples += 1
                return EMPTY_RESULT

            if self.smoother is not None:
                sample = self.smoother.smooth(sample)

            self.accepted_samples += 1
            self.current_gaze = sample
            self.store.add_sample(sample)
            self.running.add_sample(sample)

            result = self.detector.process_sample(sample)
            if result.empty:
                return result

            self.store.add_events(result)
            if result.fixation is not None:
                self.running.add_fixation(result.fixation)
            if result.saccade is not None:
                self.running.add_saccade(result.saccade)
            return result

    def get_metrics(self) -> EyeTrackingMetrics:
        """Current session metrics (all zero before any events)"""
        with self._lock:
            return self.running.snapshot()

    def recompute_metrics(self) -> EyeTrackingMetrics:
        """Metrics recomputed from scratch from the stored events"""
        snapshot = self.snapshot()
        return compute_metrics(
            snapshot.fixations,
            snapshot.saccades,
            snapshot.window,
            self.config
        )

    def snapshot(self) -> EventSnapshot:
        with self._lock:
            return self.store.snapshot()

    def reset(self):
        """Clear all accumulated events, samples and detector state"""
        with self._lock:
            self.detector.reset()
            self.store.clear()
            self.running.reset()
            if self.smoother is not None:
                self.smoother.reset()
            self.current_gaze = None
            self.accepted_samples = 0
            self.dropped_samples = 0
        logger.info(f"Tracking session {self.session_id} reset")

    def close(self, flush_open_fixation: bool = False) -> DetectionResult:
        """
        Stop accepting samples

        Metrics stay readable and reflect only samples ingested before the
        call.

        Args:
            flush_open_fixation: Record a fixation still open at the end of
                the stream (off by default, matching the streaming rule
                that only a jump closes a fixation)

        Returns:
            DetectionResult with the flushed fixation, if any
        """
        result = EMPTY_RESULT
        with self._lock:
            if self._closed:
                return result
            self._closed = True
            if flush_open_fixation:
                result = self.detector.flush()
                self.store.add_events(result)
                if result.fixation is not None:
                    self.running.add_fixation(result.fixation)
        logger.info(
            f"Tracking session {self.session_id} closed after "
            f"{self.accepted_samples} samples ({self.dropped_samples} dropped)"
        )
        return result

    def __enter__(self) -> "GazeTrackingSession":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
