from __future__ import annotations
import logging
from typing import Optional, Tuple
from .blink import BlinkTracker
from .geometry import EyeGeometry
from ..config import PipelineConfig
from ..filters.adaptive_one_euro import AdaptiveOneEuro
from ..runtime.events import EyeData, EyePoint, GazeVector

logger = logging.getLogger(__name__)


def gaze_direction(left: EyePoint, right: EyePoint, reference: Tuple[int, int] = (640, 480)) -> GazeVector:
    """
    Eye midpoint relative to the center of a fixed reference frame, in [-1,1].

    This tracks where the face is, not where the pupils point: the eye
    contours carry no iris position. With FaceMesh refine_landmarks the iris
    centers (468/473) could be measured against the contour instead.
    """
    hw, hh = reference[0] / 2.0, reference[1] / 2.0
    cx = (left.x + right.x) / 2.0; cy = (left.y + right.y) / 2.0
    return GazeVector(x=(cx - hw) / hw, y=(cy - hh) / hh)


def eye_alignment(left: EyePoint, right: EyePoint, tolerance_px: float = 20.0) -> float:
    """1.0 for level eyes, falling linearly to 0.0 at `tolerance_px` of vertical offset."""
    return max(0.0, 1.0 - abs(left.y - right.y) / tolerance_px)


class SignalComputer:
    def __init__(self, config: PipelineConfig | None = None):
        self.config = config or PipelineConfig()
        cfg = self.config
        self.blinks = BlinkTracker(capacity=cfg.history_size, threshold=cfg.blink_threshold, fps=cfg.fps)
        self.smoother: Optional[AdaptiveOneEuro] = None
        if cfg.gaze_smoothing is not None:
            s = cfg.gaze_smoothing
            self.smoother = AdaptiveOneEuro(min_cutoff=s.min_cutoff, beta=s.beta, d_cutoff=s.d_cutoff)
        self.latest: Optional[EyeData] = None

    def compute(self, geom: EyeGeometry, t: Optional[float] = None) -> EyeData:
        cfg = self.config
        gaze = gaze_direction(geom.left, geom.right, cfg.reference_size)
        if self.smoother is not None:
            conf = min(geom.left.confidence, geom.right.confidence)
            gx, gy = self.smoother(gaze.x, gaze.y, conf, t)
            gaze = GazeVector(x=gx, y=gy)
        self.blinks.update(geom.openness)
        self.latest = EyeData(
            left_eye=geom.left,
            right_eye=geom.right,
            gaze_direction=gaze,
            eye_alignment=eye_alignment(geom.left, geom.right, cfg.alignment_tolerance_px),
            blink_rate=self.blinks.rate(),
        )
        return self.latest

    def reset(self):
        self.blinks.reset()
        if self.smoother is not None: self.smoother.reset()
        self.latest = None
