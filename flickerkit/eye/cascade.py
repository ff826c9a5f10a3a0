from __future__ import annotations
import logging
import cv2
import numpy as np
from pathlib import Path
from typing import Optional
from ..config import DetectorConfig
from ..errors import DetectorLoadError, FrameError
from ..runtime.events import Observation

log = logging.getLogger(__name__)

def resolve_cascade(name: str) -> Optional[Path]:
    """
    Find a cascade file: the path as given (absolute or relative to cwd),
    then OpenCV's bundled haarcascades directory.
    """
    p = Path(name)
    if p.is_file():
        return p
    bundled = getattr(getattr(cv2, "data", None), "haarcascades", None)
    if bundled:
        q = Path(bundled) / p.name
        if q.is_file():
            return q
    return None

def _load(name: str, what: str) -> cv2.CascadeClassifier:
    path = resolve_cascade(name)
    if path is None:
        raise DetectorLoadError(f"{what} cascade not found: {name}")
    # builds without the cascade API (OpenCV 5) raise AttributeError
    try:
        clf = cv2.CascadeClassifier()
        ok = clf.load(str(path))
    except (cv2.error, SystemError, AttributeError) as e:
        raise DetectorLoadError(f"{what} cascade {path} failed to load: {e}") from e
    if not ok or clf.empty():
        raise DetectorLoadError(f"{what} cascade {path} failed to load")
    log.debug("loaded %s cascade from %s", what, path)
    return clf

class CascadeEyeDetector:
    """
    Haar cascade collaborator: first face in the frame, then eyes inside it.
    """
    def __init__(self, cfg: Optional[DetectorConfig]=None):
        self.cfg = cfg or DetectorConfig()
        self.face = _load(self.cfg.face_cascade, "face")
        self.eye = _load(self.cfg.eye_cascade, "eye")

    def _gray(self, frame: np.ndarray) -> np.ndarray:
        if frame.ndim == 3 and frame.shape[2] == 3:
            gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        elif frame.ndim == 2:
            gray = frame
        else:
            raise FrameError(f"unsupported frame shape {frame.shape}")
        return cv2.equalizeHist(gray) if self.cfg.equalize else gray

    def __call__(self, frame: Optional[np.ndarray]) -> Observation:
        if frame is None or frame.size == 0:
            raise FrameError("empty frame")
        c = self.cfg
        gray = self._gray(frame)
        faces = self.face.detectMultiScale(gray, scaleFactor=c.face_scale_factor,
                                           minNeighbors=c.face_min_neighbors,
                                           minSize=tuple(c.face_min_size))
        if len(faces) == 0:
            return Observation.FACE_NOT_FOUND
        x, y, w, h = faces[0]
        roi = gray[y:y+h, x:x+w]
        eyes = self.eye.detectMultiScale(roi, scaleFactor=c.eye_scale_factor,
                                         minNeighbors=c.eye_min_neighbors,
                                         minSize=tuple(c.eye_min_size))
        return Observation.EYES_PRESENT if len(eyes) > 0 else Observation.EYES_ABSENT
