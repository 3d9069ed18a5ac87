from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator

# MediaPipe FaceMesh eye contours, 16 points each. Order matters for the
# openness ratio: [0] and [3] are the horizontal corners, [1] and [5] the lids.
LEFT_EYE = (33, 7, 163, 144, 145, 153, 154, 155, 133, 173, 157, 158, 159, 160, 161, 246)
RIGHT_EYE = (362, 382, 381, 380, 374, 373, 390, 249, 263, 466, 388, 387, 386, 385, 384, 398)


class EyeContours(BaseModel):
    """Which landmark indices make up each eye."""
    model_config = ConfigDict(frozen=True)
    left: Tuple[int, ...] = LEFT_EYE
    right: Tuple[int, ...] = RIGHT_EYE

    @field_validator("left", "right")
    @classmethod
    def _check(cls, v):
        if any(i < 0 for i in v):
            raise ValueError("landmark indices must be non-negative")
        if len(set(v)) != len(v):
            raise ValueError("duplicate landmark index in eye contour")
        return v


@dataclass(frozen=True, eq=False)
class LandmarkFrame:
    """One face's landmarks for one video frame, normalized to 0-1."""
    pts: np.ndarray  # (N,2)
    width: int
    height: int

    def __post_init__(self):
        pts = np.asarray(self.pts, dtype=np.float32).reshape(-1, 2)
        object.__setattr__(self, "pts", pts)

    def __len__(self) -> int:
        return self.pts.shape[0]

    def pixels(self, idx) -> np.ndarray:
        """Points at `idx` scaled to video pixels; indices past the end are dropped."""
        idx = [i for i in idx if i < len(self)]
        if not idx:
            return np.zeros((0, 2), dtype=np.float32)
        return self.pts[idx] * np.array([self.width, self.height], dtype=np.float32)

    def face_center_x(self) -> float:
        """Horizontal center of the landmark bounding box, in pixels."""
        if not len(self): return self.width / 2.0
        xs = self.pts[:, 0] * self.width
        return float((xs.min() + xs.max()) / 2.0)
