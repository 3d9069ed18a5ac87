from __future__ import annotations
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_frozen = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class EyePoint(BaseModel):
    model_config = _frozen
    x: float; y: float; confidence: float = Field(0.0, ge=0.0, le=1.0)


class GazeVector(BaseModel):
    model_config = _frozen
    x: float = 0.0; y: float = 0.0


class EyeData(BaseModel):
    """Per-frame signal snapshot handed to collaborators."""
    model_config = _frozen
    left_eye: EyePoint
    right_eye: EyePoint
    gaze_direction: GazeVector
    eye_alignment: float = Field(ge=0.0, le=1.0)
    blink_rate: float = Field(ge=0.0)


class LazyEye(str, Enum):
    none = "none"
    left = "left"
    right = "right"


class Severity(str, Enum):
    moderate = "moderate"
    severe = "severe"


class LazyEyeStatus(BaseModel):
    model_config = _frozen
    eye: LazyEye = LazyEye.none
    severity: Optional[Severity] = None
    avg_deviation: float = 0.0
    samples: int = 0

    @property
    def detected(self) -> bool:
        return self.eye is not LazyEye.none


class ExerciseTarget(BaseModel):
    model_config = _frozen
    x: float; y: float  # percent of the stimulus area, 0-100
    size: float
    color: Tuple[int, int, int]
    duration_ms: int

    @property
    def hex(self) -> str:
        return "#{:02X}{:02X}{:02X}".format(*self.color)

    def normalized(self) -> Tuple[float, float]:
        """Target position in the same [-1,1] space as gaze samples."""
        return (self.x - 50.0) / 50.0, (self.y - 50.0) / 50.0


class GazeSample(BaseModel):
    model_config = _frozen
    x: float; y: float; timestamp_ms: int


class ExerciseResult(BaseModel):
    model_config = _frozen
    accuracy: float = 0.0
    response_time_ms: float = 0.0
    eye_alignment: float = 0.0
    completed: bool = False

    @classmethod
    def incomplete(cls) -> "ExerciseResult":
        return cls()
