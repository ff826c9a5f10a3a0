from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, Optional
from ..config import Config, DetectorConfig
from ..eye.tracker import BlinkTracker
from ..io.video import frames as video_frames, open_video
from .events import BlinkEvent, FrameResult, Observation, ScanReport

log = logging.getLogger(__name__)

Detector = Callable[[Any], Observation]

def build_detector(cfg: DetectorConfig) -> Detector:
    if cfg.backend == "mesh":
        from ..eye.mesh import MeshEyeDetector
        return MeshEyeDetector(cfg)
    from ..eye.cascade import CascadeEyeDetector
    return CascadeEyeDetector(cfg)

def scan(frames: Iterable[Dict[str, Any]], detector: Detector, tracker: BlinkTracker) -> Iterator[FrameResult]:
    """
    Run detector and tracker over frames in order. A frame whose detection
    raises is reported with its error and leaves the tracker untouched.
    """
    for i, f in enumerate(frames, 1):
        meta = f.get("meta", {})
        idx = meta.get("index", i); ts = meta.get("ts", 0.0)
        try:
            obs = detector(f["image"])
        except Exception as e:
            log.warning("frame %d skipped: %s", idx, e)
            yield FrameResult(frame=idx, ts=ts, error=str(e) or type(e).__name__)
            continue
        onset = tracker.observe(obs)
        yield FrameResult(frame=idx, ts=ts, observation=obs, onset=onset)

def count_blinks(path: str | Path, cfg: Optional[Config]=None, detector: Optional[Detector]=None,
                 on_blink: Optional[Callable[[BlinkEvent], None]]=None) -> ScanReport:
    """
    Scan a whole video file and count blink onsets.
    Raises VideoOpenError or DetectorLoadError before any frame is read.
    """
    cfg = cfg or Config()
    info = open_video(path)
    log.info("video duration: %.2f s (%d min %.2f s), %.2f fps",
             info.duration, int(info.duration // 60), info.duration % 60, info.fps)
    detector = detector or build_detector(cfg.detector)
    tracker = BlinkTracker(cfg.tracker)
    report = ScanReport(video=str(path), fps=info.fps, duration_s=info.duration)
    for res in scan(video_frames(path, info.fps), detector, tracker):
        report.frames_processed += 1
        if not res.ok:
            report.frames_skipped += 1
            continue
        if res.onset:
            ev = BlinkEvent(frame=res.frame, ts=res.ts)
            report.events.append(ev)
            report.blinks += 1
            log.info("blink detected at frame %d (%s)", ev.frame, ev.clock())
            if on_blink: on_blink(ev)
    log.info("frames processed: %d, skipped: %d", report.frames_processed, report.frames_skipped)
    log.info("total blinks detected: %d", report.blinks)
    return report
