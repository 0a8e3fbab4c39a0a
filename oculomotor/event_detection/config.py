"""
Detection thresholds and hardware presets

Clinical-grade trackers are precise enough for a tight dispersion radius;
webcam trackers need a looser radius, longer minimum duration and
smoothing.
"""

import math
import numbers
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

INT_FIELDS = ('min_fixation_duration_ms', 'prolonged_fixation_ms', 'window_size', 'smoothing_window')
FLOAT_FIELDS = ('dispersion_threshold', 'parallel_tolerance')
BOOL_FIELDS = ('wrap_turn_angles', 'clamp_indices')


@dataclass(frozen=True)
class DetectionConfig:
    """Configuration parameters for fixation/saccade detection and metrics"""
    dispersion_threshold: float = 15.0  # pixels
    min_fixation_duration_ms: int = 80
    prolonged_fixation_ms: int = 400
    window_size: int = 1000  # raw samples kept for the chaos index
    parallel_tolerance: float = 0.001  # |cross| at or below this counts as parallel
    wrap_turn_angles: bool = False
    clamp_indices: bool = False
    smoothing_window: int = 1  # 1 disables smoothing

    def __post_init__(self):
        for name in INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        for name in FLOAT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value!r}")
        for name in BOOL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false, got {value!r}")

        if self.dispersion_threshold <= 0:
            raise ValueError(
                f"dispersion_threshold must be positive, got {self.dispersion_threshold}"
            )
        if self.min_fixation_duration_ms < 0:
            raise ValueError(
                f"min_fixation_duration_ms must be >= 0, got {self.min_fixation_duration_ms}"
            )
        if self.prolonged_fixation_ms < 0:
            raise ValueError(
                f"prolonged_fixation_ms must be >= 0, got {self.prolonged_fixation_ms}"
            )
        if self.window_size < 3:
            raise ValueError(f"window_size must be at least 3, got {self.window_size}")
        if self.parallel_tolerance < 0:
            raise ValueError(
                f"parallel_tolerance must be >= 0, got {self.parallel_tolerance}"
            )
        if self.smoothing_window < 1:
            raise ValueError(
                f"smoothing_window must be >= 1, got {self.smoothing_window}"
            )

    @classmethod
    def clinical(cls) -> "DetectionConfig":
        """Preset for hardware trackers (Tobii class)"""
        return cls()

    @classmethod
    def webcam(cls) -> "DetectionConfig":
        """Preset for webcam trackers"""
        return cls(
            dispersion_threshold=30.0,
            min_fixation_duration_ms=100,
            window_size=500,
            clamp_indices=True,
            smoothing_window=5,
        )

    @classmethod
    def preset(cls, name: str) -> "DetectionConfig":
        try:
            factory = PRESETS[name.strip().lower()]
        except KeyError:
            raise ValueError(
                f"Unknown preset: {name!r} (expected one of {sorted(PRESETS)})"
            ) from None
        return factory()

    @classmethod
    def from_dict(cls, config: Optional[Mapping[str, Any]]) -> "DetectionConfig":
        """
        Build a config from the ``eye_tracking`` section of a YAML file

        Args:
            config: Mapping with an optional ``preset`` key plus field
                overrides. ``None`` or empty gives the clinical preset.

        Returns:
            DetectionConfig

        Raises:
            ValueError: On unknown keys, unknown preset or invalid values
        """
        config = dict(config or {})
        base = cls.preset(config.pop('preset', None) or 'clinical')

        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Unknown eye_tracking settings: {sorted(unknown)}")

        return replace(base, **config)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


PRESETS = {
    'clinical': DetectionConfig.clinical,
    'webcam': DetectionConfig.webcam,
}
