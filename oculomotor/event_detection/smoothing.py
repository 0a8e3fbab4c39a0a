"""
Moving-average smoothing for noisy (webcam) gaze streams
"""

from collections import deque

from .models import GazeSample


class GazeSmoother:
    """Averages each sample's position with the previous valid samples"""

    def __init__(self, window: int = 5):
        if window < 1:
            raise ValueError(f"Smoothing window must be >= 1, got {window}")
        self.window = window
        self._history: deque = deque(maxlen=window)

    def smooth(self, sample: GazeSample) -> GazeSample:
        """
        Smooth a valid sample

        Args:
            sample: Valid gaze sample

        Returns:
            Sample with the same timestamp, validity and pupils, positioned
            at the mean of the last ``window`` samples
        """
        if self.window == 1:
            return sample

        self._history.append((sample.x, sample.y))
        n = len(self._history)
        x = sum(p[0] for p in self._history) / n
        y = sum(p[1] for p in self._history) / n
        return sample.moved_to(x, y)

    def reset(self):
        self._history.clear()
