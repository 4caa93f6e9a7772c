import numpy as np
import pytest

from handwave.exc import MissingCollaborator
from handwave.sources import CameraFrameSource, SequenceFrameSource


def bgr_frame(bgr):
    return np.full((4, 6, 3), bgr, dtype=np.uint8)


def test_sequence_source_announces_start():
    calls = []
    source = SequenceFrameSource([bgr_frame((1, 2, 3))])
    source.add_started_listener(lambda: calls.append("early"))

    assert source.poll() is None  # not started yet
    source.start()
    source.add_started_listener(lambda: calls.append("late"))

    assert calls == ["early", "late"]


def test_sequence_source_replays_and_runs_dry():
    frame = bgr_frame((1, 2, 3))
    source = SequenceFrameSource([frame, None, frame])
    source.start()

    assert source.poll() is frame
    assert source.poll() is None
    assert not source.exhausted
    assert source.poll() is frame
    assert source.poll() is None
    assert source.exhausted

    source.release()
    assert source.released


def test_camera_start_and_poll(fake_capture):
    capture = fake_capture([bgr_frame((255, 0, 0)), bgr_frame((0, 0, 255))])
    started = []
    camera = CameraFrameSource(0)
    camera.add_started_listener(lambda: started.append(True))

    camera.start()
    assert started == [True]
    assert camera.frame_size == (6, 4)

    # frames come out as RGB, starting with the test-read frame
    assert camera.poll()[0, 0].tolist() == [0, 0, 255]
    assert camera.poll()[0, 0].tolist() == [255, 0, 0]

    camera.release()
    assert capture.released


def test_camera_that_will_not_open(fake_capture):
    capture = fake_capture([], opened=False)
    camera = CameraFrameSource(3)
    started = []
    camera.add_started_listener(lambda: started.append(True))

    with pytest.raises(MissingCollaborator):
        camera.start()
    assert capture.released
    assert started == []
    assert camera.poll() is None


def test_camera_without_first_frame(fake_capture):
    capture = fake_capture([])
    with pytest.raises(MissingCollaborator):
        CameraFrameSource(0).start()
    assert capture.released


def test_camera_read_failure_is_no_new_frame(fake_capture):
    fake_capture([bgr_frame((0, 0, 0)), None, bgr_frame((0, 0, 0))])
    camera = CameraFrameSource(0)
    camera.start()

    assert camera.poll() is not None
    assert camera.poll() is None
    assert not camera.exhausted
    assert camera.poll() is not None


def test_video_file_runs_dry(fake_capture):
    fake_capture([bgr_frame((0, 0, 0))])
    video = CameraFrameSource("clip.mp4")
    video.start()

    assert video.fps == 30.0
    assert video.poll() is not None
    assert video.poll() is None
    assert video.exhausted
