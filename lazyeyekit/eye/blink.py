from __future__ import annotations
from collections import deque
from typing import Deque

BLINK_THRESHOLD = 0.3


class BlinkTracker:
    """
    Rolling window of "eyes closed this frame" flags.

    rate() keeps the historical estimate (closed fraction * 60 * fps). That
    counts closed *frames*, not blinks, so a single 3-frame blink in a full
    window already reads as 90/min at 30 fps. window_rate() divides by the
    real window duration instead and is what new callers should prefer.
    """
    def __init__(self, capacity: int = 60, threshold: float = BLINK_THRESHOLD, fps: float = 30.0):
        if fps <= 0: raise ValueError("fps must be positive")
        self.threshold = threshold
        self.fps = fps
        self.closed: Deque[bool] = deque(maxlen=capacity)

    def update(self, openness: float) -> bool:
        shut = openness < self.threshold
        self.closed.append(shut)
        return shut

    def rate(self) -> float:
        if not self.closed: return 0.0
        return sum(self.closed) / len(self.closed) * 60.0 * self.fps

    def blink_count(self) -> int:
        """Closed->open transitions inside the window."""
        flags = list(self.closed)
        return sum(1 for a, b in zip(flags, flags[1:]) if a and not b)

    def window_rate(self) -> float:
        if not self.closed: return 0.0
        window_ms = len(self.closed) * 1000.0 / self.fps
        return self.blink_count() * 60000.0 / window_ms

    def reset(self):
        self.closed.clear()
