from __future__ import annotations
import cv2
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator
from ..errors import VideoMetadataError, VideoOpenError

@dataclass
class VideoInfo:
    path: str
    frame_count: int
    fps: float
    width: int = 0
    height: int = 0

    @property
    def duration(self) -> float:
        return self.frame_count / self.fps if self.fps else 0.0

def _capture(path: str | Path) -> cv2.VideoCapture:
    if not Path(path).is_file():
        raise VideoOpenError(f"could not open video: {path} (no such file)")
    cap = cv2.VideoCapture(str(path))
    if not cap.isOpened():
        cap.release()
        raise VideoOpenError(f"could not open video: {path}")
    return cap

def open_video(path: str | Path) -> VideoInfo:
    cap = _capture(path)
    try:
        n = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        fps = float(cap.get(cv2.CAP_PROP_FPS))
        w = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)); h = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
    finally:
        cap.release()
    if n <= 0:
        raise VideoMetadataError(f"could not retrieve frame count: {path}")
    if fps <= 0:
        raise VideoMetadataError(f"could not retrieve frame rate: {path}")
    return VideoInfo(str(path), n, fps, w, h)

def frames(path: str | Path, fps: float) -> Iterator[Dict[str, Any]]:
    """Yield frames in order; meta index is 1-based and ts = index / fps."""
    cap = _capture(path)
    try:
        i = 0
        while True:
            ok, frame = cap.read()
            if not ok: break
            i += 1
            yield {"image": frame, "meta": {"index": i, "ts": i / fps if fps else 0.0}}
    finally:
        cap.release()
