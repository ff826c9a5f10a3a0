import pytest
from flickerkit.errors import VideoOpenError
from flickerkit.io.video import frames, open_video
from flickerkit.runtime.events import Observation
from flickerkit.runtime.scan import count_blinks

def test_open_video(video_file):
    info = open_video(video_file)
    assert info.frame_count == 12 and info.fps == pytest.approx(25.0)
    assert info.duration == pytest.approx(12/25.0)
    assert (info.width, info.height) == (64, 48)

def test_frames_are_numbered(video_file):
    fs = list(frames(video_file, 25.0))
    assert [f["meta"]["index"] for f in fs] == list(range(1, 13))
    assert fs[-1]["meta"]["ts"] == pytest.approx(12/25.0)

def test_missing_video(tmp_path):
    with pytest.raises(VideoOpenError, match="could not open video"):
        open_video(tmp_path / "none.avi")

def test_unreadable_video(tmp_path):
    p = tmp_path / "junk.avi"; p.write_bytes(b"not a video at all")
    with pytest.raises(VideoOpenError):
        open_video(p)

def test_count_blinks_end_to_end(video_file):
    P, A = Observation.EYES_PRESENT, Observation.EYES_ABSENT
    script = iter([P, A, A, P, P, A, A, A, A, A, A, A])
    seen = []
    rep = count_blinks(video_file, detector=lambda img: next(script), on_blink=seen.append)
    assert rep.blinks == 2 and [e.frame for e in rep.events] == [3, 7]
    assert rep.frames_processed == 12 and rep.frames_skipped == 0
    assert seen == rep.events
    assert rep.events[0].ts == pytest.approx(3/25.0)
