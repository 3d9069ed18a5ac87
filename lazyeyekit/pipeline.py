from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol
from .config import PipelineConfig
from .eye.contours import LandmarkFrame
from .eye.deviation import DeviationAnalyzer
from .eye.geometry import EyeGeometryExtractor
from .eye.signals import SignalComputer
from .runtime.events import EyeData, LazyEyeStatus

logger = logging.getLogger(__name__)


class LandmarkSource(Protocol):
    def __call__(self, frame_bgr: Any) -> Optional[LandmarkFrame]: ...


@dataclass(frozen=True)
class DetectionResult:
    detected: bool
    landmarks: Optional[LandmarkFrame] = None


def detect_face(source: LandmarkSource, frame_bgr: Any) -> DetectionResult:
    """Run the detector on one frame. A crash inside the detector counts as no face."""
    try:
        lm = source(frame_bgr)
    except Exception:
        logger.debug("landmark detector failed on frame", exc_info=True)
        return DetectionResult(False)
    return DetectionResult(lm is not None, lm)


class TrackingPipeline:
    """
    Landmarks -> eye geometry -> signals -> drift classification, one frame
    per tick(). Not thread-safe: the host must serialize ticks.
    """
    def __init__(self, config: PipelineConfig | None = None):
        self.config = config or PipelineConfig()
        cfg = self.config
        self.extractor = EyeGeometryExtractor(cfg.contours)
        self.signals = SignalComputer(cfg)
        self.deviation = DeviationAnalyzer(cfg.deviation, capacity=cfg.history_size)
        self.frames = 0
        self.misses = 0

    @property
    def latest(self) -> Optional[EyeData]:
        return self.signals.latest

    @property
    def status(self) -> LazyEyeStatus:
        return self.deviation.status

    def tick(self, frame: Optional[LandmarkFrame], t: Optional[float] = None) -> Optional[EyeData]:
        """Process one frame; None means no face, which also clears the histories."""
        self.frames += 1
        if frame is None:
            self.misses += 1
            if self.signals.latest is not None:
                logger.debug("face lost, clearing signal history")
            self.reset()
            return None
        geom = self.extractor.extract(frame)
        eye = self.signals.compute(geom, t)
        self.deviation.update(geom.left, geom.right, geom.frame_width, geom.face_center_x)
        return eye

    def process(self, result: DetectionResult, t: Optional[float] = None) -> Optional[EyeData]:
        return self.tick(result.landmarks if result.detected else None, t)

    def reset(self):
        self.signals.reset()
        self.deviation.reset()
