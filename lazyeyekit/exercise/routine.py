from __future__ import annotations
import logging
from typing import Optional
from . import patterns
from ..runtime.events import ExerciseTarget

logger = logging.getLogger(__name__)


class GuidedRoutine:
    """
    Five-minute guided session: look up, down, left, right, then follow a
    circle, one minute each. Pausing freezes the clock.
    """
    def __init__(self, total_ms: int = 300_000, step_ms: int = patterns.GUIDED_STEP_MS):
        self.total_ms = total_ms
        self.step_ms = step_ms
        self._started: Optional[int] = None
        self._paused_at: Optional[int] = None
        self._paused_total = 0

    @property
    def running(self) -> bool:
        return self._started is not None and self._paused_at is None

    def start(self, now_ms: int):
        self._started = now_ms; self._paused_at = None; self._paused_total = 0
        logger.info("guided routine started (%d s)", self.total_ms // 1000)

    def pause(self, now_ms: int):
        if self.running: self._paused_at = now_ms

    def resume(self, now_ms: int):
        if self._paused_at is not None:
            self._paused_total += now_ms - self._paused_at
            self._paused_at = None

    def elapsed(self, now_ms: int) -> int:
        if self._started is None: return 0
        end = self._paused_at if self._paused_at is not None else now_ms
        return min(self.total_ms, max(0, end - self._started - self._paused_total))

    def remaining_s(self, now_ms: int) -> int:
        return (self.total_ms - self.elapsed(now_ms) + 999) // 1000

    def progress(self, now_ms: int) -> float:
        """Percent complete, 0-100."""
        return 100.0 * self.elapsed(now_ms) / self.total_ms

    def complete(self, now_ms: int) -> bool:
        return self._started is not None and self.elapsed(now_ms) >= self.total_ms

    def step(self, now_ms: int) -> int:
        return (self.elapsed(now_ms) // self.step_ms) % patterns.pattern_length("guided")

    def instruction(self, now_ms: int) -> str:
        return patterns.GUIDED_STEPS[self.step(now_ms)]

    def target(self, now_ms: int) -> ExerciseTarget:
        return patterns.target("guided", self.step(now_ms), self.elapsed(now_ms))
