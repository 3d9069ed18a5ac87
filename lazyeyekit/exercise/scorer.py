from __future__ import annotations
import logging, math
from collections import deque
from typing import Deque, List, Optional, Sequence
from ..runtime.events import EyeData, ExerciseResult, ExerciseTarget, GazeSample

logger = logging.getLogger(__name__)


class GazeBuffer:
    """Last `capacity` gaze samples of the running exercise."""
    def __init__(self, capacity: int = 50):
        self.samples: Deque[GazeSample] = deque(maxlen=capacity)

    def append(self, x: float, y: float, timestamp_ms: int):
        self.samples.append(GazeSample(x=x, y=y, timestamp_ms=timestamp_ms))

    def drain(self) -> List[GazeSample]:
        out = list(self.samples)
        self.samples.clear()
        return out

    def clear(self):
        self.samples.clear()

    def __len__(self):
        return len(self.samples)


def score(samples: Sequence[GazeSample], target: Optional[ExerciseTarget],
          latest: Optional[EyeData] = None) -> ExerciseResult:
    """
    Summarize how well gaze followed `target`.

    response_time_ms is the mean spacing between samples, a stand-in for
    reaction latency; it does not measure stimulus-to-saccade time.
    """
    if not samples or target is None:
        logger.debug("nothing to score (samples=%d, target=%s)", len(samples), target is not None)
        return ExerciseResult.incomplete()
    tx, ty = target.normalized()
    acc = sum(1.0 - min(1.0, math.hypot(s.x - tx, s.y - ty)) for s in samples) / len(samples)
    n = len(samples)
    resp = (samples[-1].timestamp_ms - samples[0].timestamp_ms) / n if n > 1 else 0.0
    align = latest.eye_alignment if latest is not None else 0.0
    return ExerciseResult(accuracy=acc, response_time_ms=float(resp), eye_alignment=align, completed=True)
