from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence
import numpy as np
from .contours import EyeContours, LandmarkFrame
from ..runtime.events import EyePoint

logger = logging.getLogger(__name__)

FULL_CONFIDENCE = 0.9
MIN_OPENNESS_POINTS = 6


def eye_center(frame: LandmarkFrame, idx: Sequence[int]) -> EyePoint:
    """Mean of the contour points in video pixels.

    Indices the frame doesn't have are skipped and lower the confidence.
    An eye with no usable points sits at the origin with zero confidence.
    """
    pts = frame.pixels(idx)
    if not len(pts):
        logger.debug("no landmarks available for eye contour")
        return EyePoint(x=0.0, y=0.0, confidence=0.0)
    cx, cy = pts.mean(axis=0)
    conf = FULL_CONFIDENCE * len(pts) / max(1, len(idx))
    return EyePoint(x=float(cx), y=float(cy), confidence=conf)


def eye_openness(frame: LandmarkFrame, idx: Sequence[int]) -> float:
    """Eye aspect ratio in pixels: lid span (points 1,5) over corner span (points 0,3).

    Falls back to 1.0 (fully open) when fewer than six of the contour's points
    exist in the frame, when one of the four it reads is missing, or for
    degenerate corners.
    """
    available = sum(1 for i in idx if 0 <= i < len(frame))
    if available < MIN_OPENNESS_POINTS or max(idx[0], idx[1], idx[3], idx[5]) >= len(frame):
        logger.debug("eye contour has fewer than %d usable points, assuming open", MIN_OPENNESS_POINTS)
        return 1.0
    p0, p1, p3, p5 = frame.pixels([idx[0], idx[1], idx[3], idx[5]])
    height = abs(float(p1[1] - p5[1]))
    width = abs(float(p3[0] - p0[0]))
    if width <= 1e-9:
        logger.debug("zero-width eye contour, assuming open")
        return 1.0
    return height / width


@dataclass(frozen=True)
class EyeGeometry:
    left: EyePoint
    right: EyePoint
    left_openness: float
    right_openness: float
    face_center_x: float
    frame_width: int

    @property
    def openness(self) -> float:
        return (self.left_openness + self.right_openness) / 2.0


class EyeGeometryExtractor:
    def __init__(self, contours: EyeContours | None = None):
        self.contours = contours or EyeContours()

    def extract(self, frame: LandmarkFrame) -> EyeGeometry:
        c = self.contours
        return EyeGeometry(
            left=eye_center(frame, c.left),
            right=eye_center(frame, c.right),
            left_openness=eye_openness(frame, c.left),
            right_openness=eye_openness(frame, c.right),
            face_center_x=frame.face_center_x(),
            frame_width=frame.width,
        )

    __call__ = extract
