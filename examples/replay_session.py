"""
Gaze Session Replay Example

Demonstrates the processing surface:
- Loading configuration and logging
- Feeding samples through a tracking session
- Reading live metrics
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np

from oculomotor import GazeSample, GazeTrackingSession
from oculomotor.utils import load_config, setup_logger_from_config


def synthetic_reading_trace(
    lines: int = 4,
    words_per_line: int = 8,
    rate_hz: int = 120,
    seed: int = 7
):
    """
    Generate samples for a reader moving word by word along text lines,
    with occasional regressions and tracking dropouts
    """
    rng = np.random.default_rng(seed)
    step_ms = 1000 // rate_hz
    t = 0

    for line in range(lines):
        y = 200 + line * 60
        word = 0
        while word < words_per_line:
            x = 100 + word * 90
            dwell = int(rng.integers(15, 50))  # samples per fixation
            for _ in range(dwell):
                valid = rng.random() > 0.03
                yield GazeSample(
                    x=float(x + rng.normal(0, 2)),
                    y=float(y + rng.normal(0, 2)),
                    timestamp_ms=t,
                    left_valid=valid,
                    right_valid=valid,
                    left_pupil_diameter=3.2,
                    right_pupil_diameter=3.1
                )
                t += step_ms

            if word > 1 and rng.random() < 0.15:
                word -= 1  # regression
            else:
                word += 1


def main():
    """Replay example"""

    print("=" * 60)
    print("Gaze Session Replay Example")
    print("=" * 60)

    try:
        config = load_config(os.path.join(os.path.dirname(__file__), '..', 'config', 'config.yaml'))
    except FileNotFoundError:
        print("Warning: config file not found, using defaults")
        config = {}

    setup_logger_from_config(config.get('logging'))

    print("\n1. Starting session...")
    session = GazeTrackingSession.from_config(config)
    print(f"   ✓ Session {session.session_id} ready")

    print("\n2. Replaying synthetic reading trace...")
    fixations = 0
    saccades = 0
    with session:
        for sample in synthetic_reading_trace():
            result = session.process_sample(sample)
            fixations += result.fixation is not None
            saccades += result.saccade is not None
    print(f"   ✓ {session.accepted_samples} samples ({session.dropped_samples} dropped)")
    print(f"   ✓ {fixations} fixations, {saccades} saccades")

    print("\n3. Metrics")
    for key, value in session.get_metrics().to_dict().items():
        print(f"   {key:<34} {value:.3f}" if isinstance(value, float) else f"   {key:<34} {value}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
