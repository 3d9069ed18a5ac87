from __future__ import annotations
import logging
from typing import Optional
from . import patterns
from .scorer import GazeBuffer, score
from ..config import ExerciseConfig
from ..runtime.events import EyeData, ExerciseResult, ExerciseTarget

logger = logging.getLogger(__name__)


class ExerciseSession:
    """
    Runs one exercise on its own clock, independent of the camera frame rate.

    The host calls tick(now_ms) from whatever timer it has, forwards each
    EyeData through record_gaze(), and calls finish() to get the result.
    stop() throws away the buffered gaze and the current target; calling it
    twice is harmless.
    """
    def __init__(self, cfg: ExerciseConfig | None = None, buffer_size: int = 50):
        self.cfg = cfg or ExerciseConfig()
        patterns.pattern_length(self.cfg.kind)  # fail fast on unknown kinds
        self.gaze = GazeBuffer(buffer_size)
        self.active = False
        self.step = 0
        self.current: Optional[ExerciseTarget] = None
        self._t0 = 0
        self._step_start = 0

    def start(self, now_ms: int):
        self.stop()
        self.active = True
        self._t0 = now_ms
        logger.info("exercise %s started", self.cfg.kind)
        self.tick(now_ms)

    def elapsed(self, now_ms: int) -> int:
        return now_ms - self._t0 if self.active else 0

    def tick(self, now_ms: int) -> Optional[ExerciseTarget]:
        if not self.active:
            return None
        elapsed = self.elapsed(now_ms)
        tgt = patterns.target(self.cfg.kind, self.step, elapsed, self.cfg.sub_mode)
        while elapsed - self._step_start >= tgt.duration_ms:
            self._step_start += tgt.duration_ms
            self.step += 1
            tgt = patterns.target(self.cfg.kind, self.step, elapsed, self.cfg.sub_mode)
        self.current = tgt
        return tgt

    def is_done(self, now_ms: int) -> bool:
        if not self.active:
            return True
        if self.cfg.steps is not None and self.step >= self.cfg.steps:
            return True
        return self.cfg.duration_ms is not None and self.elapsed(now_ms) >= self.cfg.duration_ms

    def record_gaze(self, eye: Optional[EyeData], now_ms: int):
        if self.active and eye is not None:
            self.gaze.append(eye.gaze_direction.x, eye.gaze_direction.y, now_ms)

    def finish(self, latest: Optional[EyeData]) -> ExerciseResult:
        result = score(self.gaze.drain(), self.current if self.active else None, latest)
        logger.info("exercise %s finished after %d steps: %s", self.cfg.kind, self.step, result)
        self.stop()
        return result

    def stop(self):
        self.active = False
        self.gaze.clear()
        self.current = None
        self.step = 0
        self._step_start = 0
