from __future__ import annotations
import cv2
import numpy as np
from typing import Optional
from ..config import DetectorConfig
from ..errors import DetectorLoadError, FrameError
from ..runtime.events import Observation

# FaceMesh contour points per eye: outer corner, two top, inner corner, two bottom
LEFT_EYE = [33, 160, 158, 133, 153, 144]
RIGHT_EYE = [362, 385, 387, 263, 373, 380]

def eye_aspect_ratio(eye_pts: np.ndarray) -> float:
    A = np.linalg.norm(eye_pts[1] - eye_pts[5])
    B = np.linalg.norm(eye_pts[2] - eye_pts[4])
    C = np.linalg.norm(eye_pts[0] - eye_pts[3])
    if C == 0: return 0.0
    return float((A + B) / (2.0 * C))

def mean_ear(pts: np.ndarray) -> float:
    return (eye_aspect_ratio(pts[LEFT_EYE]) + eye_aspect_ratio(pts[RIGHT_EYE])) / 2.0

def eyes_open(pts: np.ndarray, thr: float=0.22) -> bool:
    return mean_ear(pts) >= thr

class MeshEyeDetector:
    """
    FaceMesh collaborator: eyes count as present while the mean EAR of the
    largest face stays at or above ear_threshold.
    """
    def __init__(self, cfg: Optional[DetectorConfig]=None):
        self.cfg = cfg or DetectorConfig(backend="mesh")
        try:
            import mediapipe as mp
            self.mesh = mp.solutions.face_mesh.FaceMesh(static_image_mode=False,
                                                        refine_landmarks=True,
                                                        max_num_faces=1)
        except (ImportError, AttributeError) as e:
            raise DetectorLoadError(f"mediapipe FaceMesh unavailable: {e}") from e

    def __call__(self, frame: Optional[np.ndarray]) -> Observation:
        if frame is None or frame.size == 0:
            raise FrameError("empty frame")
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        res = self.mesh.process(rgb)
        if not res.multi_face_landmarks:
            return Observation.FACE_NOT_FOUND
        # normalized coords scaled to pixels so EAR is aspect-correct
        h, w = frame.shape[:2]
        pts = np.array([(lm.x * w, lm.y * h) for lm in res.multi_face_landmarks[0].landmark],
                       dtype=np.float32)
        return Observation.EYES_PRESENT if eyes_open(pts, self.cfg.ear_threshold) else Observation.EYES_ABSENT
