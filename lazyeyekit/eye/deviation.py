from __future__ import annotations
import logging
from collections import deque
from itertools import islice
from typing import Deque, Optional, Tuple
from ..config import DeviationThresholds
from ..runtime.events import EyePoint, LazyEye, LazyEyeStatus, Severity

logger = logging.getLogger(__name__)


def frame_deviation(left: EyePoint, right: EyePoint, face_center_x: float, expected_iod: float = 60.0) -> float:
    """Weighted misalignment score for one frame (pixels)."""
    vertical = abs(left.y - right.y)
    centering = abs((left.x + right.x) / 2.0 - face_center_x)
    iod = abs(right.x - left.x)
    return 2.0 * vertical + 0.5 * centering + 0.3 * abs(iod - expected_iod)


def _tail(buf: deque, n: int):
    return list(islice(buf, max(0, len(buf) - n), None))


class DeviationAnalyzer:
    """
    Classifies persistent drift of one eye: none -> left/right and back.

    Nothing is reported until `min_samples` frames are buffered, so a few
    noisy detections at startup can't flag an eye.
    """
    def __init__(self, thresholds: DeviationThresholds | None = None, capacity: int = 60):
        self.th = thresholds or DeviationThresholds()
        self.deviations: Deque[float] = deque(maxlen=capacity)
        # (left_x, left_y, right_x, right_y, frame_width)
        self.positions: Deque[Tuple[float, float, float, float, float]] = deque(maxlen=capacity)
        self.status = LazyEyeStatus()

    def update(self, left: EyePoint, right: EyePoint, frame_width: float,
               face_center_x: Optional[float] = None) -> LazyEyeStatus:
        if face_center_x is None:
            face_center_x = (left.x + right.x) / 2.0
        dev = frame_deviation(left, right, face_center_x, self.th.expected_iod_px)
        self.deviations.append(dev)
        self.positions.append((left.x, left.y, right.x, right.y, float(frame_width)))
        return self._classify()

    def _classify(self) -> LazyEyeStatus:
        th = self.th
        n = len(self.deviations)
        if n < th.min_samples:
            return self._set(LazyEye.none, 0.0, n)
        recent = _tail(self.deviations, th.window)
        avg = sum(recent) / len(recent)
        if avg <= th.threshold:
            return self._set(LazyEye.none, avg, n)
        eye = self._drifting_eye()
        if eye is None:
            # over threshold but no side stands out; keep whatever we had
            eye = self.status.eye
        return self._set(eye, avg, n)

    def _drifting_eye(self) -> Optional[LazyEye]:
        th = self.th
        pos = _tail(self.positions, th.window)
        k = float(len(pos))
        left_off = sum(abs(lx - th.left_anchor * w) for lx, _, _, _, w in pos) / k
        right_off = sum(abs(rx - th.right_anchor * w) for _, _, rx, _, w in pos) / k
        vertical = sum(ly - ry for _, ly, _, ry, _ in pos) / k
        h_gap = abs(left_off - right_off)
        if abs(vertical) > th.vertical_margin and abs(vertical) > h_gap:
            # image y grows downward: the larger y is the lower eye
            return LazyEye.left if vertical > 0 else LazyEye.right
        if h_gap > th.horizontal_margin:
            return LazyEye.left if left_off > right_off else LazyEye.right
        return None

    def _set(self, eye: LazyEye, avg: float, n: int) -> LazyEyeStatus:
        severity = None
        if eye is not LazyEye.none:
            severity = Severity.severe if self.deviations[-1] > self.th.severe_threshold else Severity.moderate
        if eye is not self.status.eye:
            logger.info("lazy eye classification %s -> %s (avg deviation %.1f px)", self.status.eye.value, eye.value, avg)
        self.status = LazyEyeStatus(eye=eye, severity=severity, avg_deviation=avg, samples=n)
        return self.status

    def reset(self):
        self.deviations.clear(); self.positions.clear()
        self.status = LazyEyeStatus()
