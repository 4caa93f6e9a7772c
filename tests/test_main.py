import numpy as np
import pytest

import main as cli
from main import main, parse_args


@pytest.fixture
def wave_video(fake_capture):
    """Fake video file: ten still black frames then three white ones."""
    frames = [np.zeros((4, 4, 3), dtype=np.uint8)] * 10 + [np.full((4, 4, 3), 255, dtype=np.uint8)] * 3
    return fake_capture(frames)


@pytest.fixture
def fake_window(monkeypatch):
    """Patch the OpenCV window calls; returns the list of shown images."""
    shown = []
    monkeypatch.setattr(cli.cv2, "imshow", lambda name, image: shown.append(image))
    monkeypatch.setattr(cli.cv2, "waitKey", lambda delay: -1)
    monkeypatch.setattr(cli.cv2, "destroyAllWindows", lambda: None)
    return shown


@pytest.mark.parametrize("argv, expected", [
    ([], {"source": 0, "show_window": False, "debug": False, "serve_port": None}),
    (["1"], {"source": 1, "show_window": False, "debug": False, "serve_port": None}),
    (["video.mp4", "--show", "--debug"], {"source": "video.mp4", "show_window": True, "debug": True, "serve_port": None}),
    (["--serve"], {"source": 0, "show_window": False, "debug": False, "serve_port": 3000}),
    (["2", "--serve", "8765"], {"source": 2, "show_window": False, "debug": False, "serve_port": 8765}),
])
def test_parse_args(argv, expected):
    assert parse_args(argv) == expected


def test_unavailable_camera_exits_cleanly(fake_capture, capsys):
    capture = fake_capture([], opened=False)

    assert main(["5"]) == 1
    out = capsys.readouterr().out
    assert "ERROR: Could not open camera: 5" in out
    assert "Troubleshooting" in out
    assert capture.released


def test_video_file_summary(wave_video, capsys):
    assert main(["clip.mp4"]) == 0
    out = capsys.readouterr().out
    assert "Total frames: 13" in out
    assert "Waves detected: 1" in out


def test_serve_sends_over_websocket(wave_video, free_port, capsys):
    assert main(["clip.mp4", "--serve", str(free_port)]) == 0
    out = capsys.readouterr().out
    assert "Waves detected: 1" in out
    assert wave_video.released


def test_serve_on_a_busy_port_fails_cleanly(wave_video, busy_port, capsys):
    assert main(["clip.mp4", "--serve", str(busy_port)]) == 1
    out = capsys.readouterr().out
    assert f"ERROR: Could not start WebSocket server on port {busy_port}" in out
    assert "Total frames: 0" in out
    assert wave_video.released


def test_show_previews_every_frame(wave_video, fake_window):
    assert main(["clip.mp4", "--show"]) == 0
    assert len(fake_window) == 13
    assert all(image.shape == (4, 4, 3) for image in fake_window)


def test_show_quits_on_q(wave_video, fake_window, monkeypatch, capsys):
    monkeypatch.setattr(cli.cv2, "waitKey", lambda delay: ord("q"))

    assert main(["clip.mp4", "--show"]) == 0
    assert len(fake_window) == 1
    assert "Total frames: 1" in capsys.readouterr().out


def test_preview_failure_keeps_detecting(wave_video, fake_window, monkeypatch, capsys):
    def headless_imshow(name, image):
        raise cli.cv2.error("The function is not implemented")

    monkeypatch.setattr(cli.cv2, "imshow", headless_imshow)

    assert main(["clip.mp4", "--show"]) == 0
    out = capsys.readouterr().out
    assert "Total frames: 13" in out
    assert "Waves detected: 1" in out
