import numpy as np, pytest
from flickerkit.config import DetectorConfig
from flickerkit.errors import DetectorLoadError, FrameError
from flickerkit.eye.cascade import CascadeEyeDetector, resolve_cascade
from flickerkit.runtime.events import Observation

def test_bundled_cascades_resolve():
    assert resolve_cascade("haarcascade_frontalface_default.xml") is not None
    assert resolve_cascade("no_such_cascade.xml") is None

def test_blank_frame_has_no_face():
    det = CascadeEyeDetector()
    img = np.full((120,160,3), 128, np.uint8)
    assert det(img) is Observation.FACE_NOT_FOUND
    assert det(np.full((120,160), 128, np.uint8)) is Observation.FACE_NOT_FOUND

def test_empty_frame_raises():
    det = CascadeEyeDetector()
    with pytest.raises(FrameError):
        det(None)
    with pytest.raises(FrameError):
        det(np.zeros((0,0,3), np.uint8))

def test_missing_cascade_raises():
    with pytest.raises(DetectorLoadError, match="eye"):
        CascadeEyeDetector(DetectorConfig(eye_cascade="missing_eye.xml"))

def test_garbage_cascade_raises(tmp_path):
    bad = tmp_path / "bad.xml"; bad.write_text("<not a cascade/>")
    with pytest.raises(DetectorLoadError, match="face"):
        CascadeEyeDetector(DetectorConfig(face_cascade=str(bad)))

def test_cascade_api_missing_raises(monkeypatch):
    import flickerkit.eye.cascade as cascade
    monkeypatch.delattr(cascade.cv2, "CascadeClassifier")
    with pytest.raises(DetectorLoadError, match="face"):
        CascadeEyeDetector()
