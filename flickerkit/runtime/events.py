from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

class Observation(str, Enum):
    FACE_NOT_FOUND = "face_not_found"
    EYES_PRESENT = "eyes_present"
    EYES_ABSENT = "eyes_absent"

class FrameResult(BaseModel):
    """
    Outcome of one frame: either an observation or the error that replaced it.
    frame is 1-based; ts is frame / fps in seconds.
    """
    frame: int
    ts: float = 0.0
    observation: Optional[Observation] = None
    onset: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

class BlinkEvent(BaseModel):
    type: Literal["blink"] = "blink"
    frame: int
    ts: float

    def clock(self) -> str:
        m, s = divmod(self.ts, 60)
        return f"{int(m):02d}:{s:05.2f}"

class ScanReport(BaseModel):
    video: str
    blinks: int = 0
    events: List[BlinkEvent] = Field(default_factory=list)
    frames_processed: int = 0
    frames_skipped: int = 0
    fps: float = 0.0
    duration_s: float = 0.0
