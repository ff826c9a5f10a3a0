from __future__ import annotations
import yaml
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from .errors import ConfigError

class TrackerConfig(BaseModel):
    """
    Blink window in frames. A run of eyes-absent frames whose length reaches
    min_frames_for_blink is a blink unless it outlasts max_frames_for_blink.
    no_face decides what a frame without a face does to the run:
    "reset" clears it, "pause" leaves it untouched.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    min_frames_for_blink: int = Field(2, ge=1)
    max_frames_for_blink: int = Field(7, ge=1)
    no_face: Literal["reset", "pause"] = "reset"

    @model_validator(mode="after")
    def _window(self):
        if self.min_frames_for_blink > self.max_frames_for_blink:
            raise ValueError(
                f"min_frames_for_blink ({self.min_frames_for_blink}) > "
                f"max_frames_for_blink ({self.max_frames_for_blink})")
        return self

class DetectorConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    backend: Literal["haar", "mesh"] = "haar"
    face_cascade: str = "haarcascade_frontalface_default.xml"
    eye_cascade: str = "haarcascade_eye.xml"
    face_scale_factor: float = Field(1.1, gt=1.0)
    face_min_neighbors: int = Field(3, ge=0)
    face_min_size: Tuple[int, int] = (30, 30)
    eye_scale_factor: float = Field(1.1, gt=1.0)
    eye_min_neighbors: int = Field(2, ge=0)
    eye_min_size: Tuple[int, int] = (20, 20)
    equalize: bool = True
    ear_threshold: float = Field(0.22, gt=0.0)

class Config(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    detector: DetectorConfig = Field(default_factory=DetectorConfig)

def _validate(data: Dict[str, Any]) -> Config:
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e

def load_config(path: Optional[str | Path]) -> Config:
    """Read a YAML config file; a missing path or empty file gives the defaults."""
    if path is None:
        return Config()
    try:
        with open(path, "r") as f: data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping, got {type(data).__name__}")
    return _validate(data)

def with_overrides(cfg: Config, tracker: Optional[Dict[str, Any]]=None,
                   detector: Optional[Dict[str, Any]]=None) -> Config:
    """Return cfg with the non-None values of tracker/detector replaced, re-validated."""
    data = cfg.model_dump()
    data["tracker"].update({k: v for k, v in (tracker or {}).items() if v is not None})
    data["detector"].update({k: v for k, v in (detector or {}).items() if v is not None})
    return _validate(data)
