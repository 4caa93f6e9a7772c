import numpy as np
import pytest


@pytest.fixture
def solid_frame():
    """Factory for uniform 8-bit RGB frames."""
    def make(rgb, width=8, height=6):
        return np.full((height, width, 3), rgb, dtype=np.uint8)
    return make


class FakeCapture:
    """Stands in for cv2.VideoCapture, replaying BGR frames."""

    def __init__(self, frames, opened=True, fps=30.0):
        self.frames = list(frames)
        self.opened = opened
        self.fps = fps
        self.released = False

    def isOpened(self):
        return self.opened and not self.released

    def read(self):
        if not self.frames:
            return False, None
        frame = self.frames.pop(0)
        if frame is None:
            return False, None
        return True, frame

    def get(self, prop):
        return self.fps

    def release(self):
        self.released = True


@pytest.fixture
def fake_capture(monkeypatch):
    """Patch cv2.VideoCapture; returns a function that installs a FakeCapture."""
    import cv2

    def install(frames, opened=True):
        capture = FakeCapture(frames, opened=opened)
        monkeypatch.setattr(cv2, "VideoCapture", lambda source: capture)
        return capture
    return install


@pytest.fixture
def free_port():
    """A local TCP port nothing is listening on."""
    import socket

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def busy_port():
    """A local TCP port another socket is already listening on."""
    import socket

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen()
    yield sock.getsockname()[1]
    sock.close()
