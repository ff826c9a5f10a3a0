from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Tuple
from ..config import TrackerConfig
from ..runtime.events import Observation

@dataclass(frozen=True)
class TrackerState:
    consecutive_absent_frames: int = 0
    blinking: bool = False

def initial_state() -> TrackerState:
    return TrackerState()

def step(state: TrackerState, eyes_present: bool, cfg: TrackerConfig) -> Tuple[TrackerState, bool]:
    """
    Advance the blink state machine by one frame.
    Returns the new state and whether this frame is a blink onset.
    """
    if eyes_present:
        return TrackerState(), False
    n = state.consecutive_absent_frames + 1
    if n > cfg.max_frames_for_blink:
        # too long for a blink: eyes closed or looking away
        return TrackerState(n, False), False
    if n >= cfg.min_frames_for_blink and not state.blinking:
        return TrackerState(n, True), True
    return replace(state, consecutive_absent_frames=n), False

class BlinkTracker:
    """
    Owns the state of one stream. update()/reset() mirror step()/initial_state();
    observe() maps a detector Observation through the no_face policy.
    """
    def __init__(self, cfg: Optional[TrackerConfig]=None):
        self.cfg = cfg or TrackerConfig()
        self.state = initial_state()

    def update(self, eyes_present: bool) -> bool:
        self.state, onset = step(self.state, eyes_present, self.cfg)
        return onset

    def observe(self, obs: Optional[Observation]) -> bool:
        if obs is None:
            return False
        if obs is Observation.FACE_NOT_FOUND:
            if self.cfg.no_face == "pause":
                return False
            return self.update(True)
        return self.update(obs is Observation.EYES_PRESENT)

    def reset(self):
        self.state = initial_state()

    @property
    def blinking(self) -> bool:
        return self.state.blinking

    @property
    def consecutive_absent_frames(self) -> int:
        return self.state.consecutive_absent_frames
