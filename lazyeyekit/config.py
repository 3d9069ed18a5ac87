from __future__ import annotations
from pathlib import Path
from typing import Literal, Optional, Tuple
import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator
from .eye.contours import EyeContours
from .errors import ConfigError

ExerciseKind = Literal["saccades", "smooth-pursuit", "convergence", "binocular", "guided"]
PursuitMode = Literal["figure-eight", "circle"]


class DeviationThresholds(BaseModel):
    """Calibration constants for lazy-eye drift classification (pixels)."""
    threshold: float = 12.0
    horizontal_margin: float = 15.0
    vertical_margin: float = 8.0
    severe_threshold: float = 20.0
    min_samples: int = Field(60, ge=1)
    window: int = Field(30, ge=1)
    expected_iod_px: float = 60.0
    left_anchor: float = Field(0.35, ge=0.0, le=1.0)
    right_anchor: float = Field(0.65, ge=0.0, le=1.0)


class SmoothingConfig(BaseModel):
    min_cutoff: float = Field(1.0, gt=0)
    beta: float = Field(0.0, ge=0)
    d_cutoff: float = Field(1.0, gt=0)


class ExerciseConfig(BaseModel):
    kind: ExerciseKind = "saccades"
    sub_mode: PursuitMode = "figure-eight"
    steps: Optional[int] = Field(None, ge=1)
    duration_ms: Optional[int] = Field(None, ge=1)


class PipelineConfig(BaseModel):
    fps: float = Field(30.0, gt=0)
    reference_size: Tuple[int, int] = (640, 480)
    alignment_tolerance_px: float = Field(20.0, gt=0)
    blink_threshold: float = Field(0.3, gt=0)
    history_size: int = Field(60, ge=1)
    gaze_buffer_size: int = Field(50, ge=1)
    contours: EyeContours = EyeContours()
    deviation: DeviationThresholds = DeviationThresholds()
    gaze_smoothing: Optional[SmoothingConfig] = None
    exercise: ExerciseConfig = ExerciseConfig()

    @model_validator(mode="after")
    def _window_fits(self):
        if self.deviation.window > self.history_size:
            raise ValueError("deviation.window cannot exceed history_size")
        if self.deviation.min_samples > self.history_size:
            raise ValueError("deviation.min_samples cannot exceed history_size")
        return self


def load_config(path: str | Path | None = None) -> PipelineConfig:
    if path is None:
        return PipelineConfig()
    try:
        with open(path, "r") as f: raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(path, str(e)) from e
    if not isinstance(raw, dict):
        raise ConfigError(path, "top level must be a mapping")
    try:
        return PipelineConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(path, str(e)) from e
