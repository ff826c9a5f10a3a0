import cv2, numpy as np, pytest

@pytest.fixture
def video_file(tmp_path):
    """Tiny MJPG clip: 12 flat grey frames at 25 fps."""
    path = tmp_path / "clip.avi"
    out = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), 25.0, (64,48))
    assert out.isOpened()
    for i in range(12):
        out.write(np.full((48,64,3), 100 + i, np.uint8))
    out.release()
    return path
