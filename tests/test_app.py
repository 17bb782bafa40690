"""Tests for the painting session wiring."""

import threading
import time

import pytest

from emotion_painter.app import PaintingSession
from emotion_painter.core.expression import ExpressionScores


class FakeCamera:
    def __init__(self, frame=None):
        self.frame = frame
        self.opened = False
        self.released = False

    def open(self):
        self.opened = True
        return self.frame is not None

    def read(self):
        return self.frame

    def release(self):
        self.released = True


class BlockingCamera(FakeCamera):
    """Camera whose read waits until a frame is released, like a real device."""

    def __init__(self, frame):
        super().__init__(frame)
        self.entered = threading.Event()
        self.release_frame = threading.Event()
        self.reads = 0

    def read(self):
        self.reads += 1
        self.entered.set()
        self.release_frame.wait(5.0)
        return None


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def session_config(small_config):
    small_config.sample_range = 10.0
    return small_config


class TestStep:
    def test_publishes_frame_for_sampler(self, session_config, gradient_frame, scripted_detector):
        session = PaintingSession(session_config, FakeCamera(gradient_frame), scripted_detector())
        session.step()
        assert session.frames.latest() is gradient_frame

    def test_intro_before_start(self, session_config, gradient_frame, scripted_detector):
        session = PaintingSession(session_config, FakeCamera(gradient_frame), scripted_detector())
        assert session.elapsed_ms() == 0.0
        assert session.step() == 0

    def test_paints_after_intro(self, session_config, gradient_frame, scripted_detector):
        clock = FakeClock()
        detector = scripted_detector([[ExpressionScores(angry=1.0)]])
        session = PaintingSession(session_config, FakeCamera(gradient_frame), detector, seed=3, clock=clock)
        session._start = 0.0

        session.step()
        session.sampler.tick()
        assert detector.frames[0] is gradient_frame

        clock.now = 12.5
        assert session.elapsed_ms() == pytest.approx(12500.0)
        assert session.step() > 0

    def test_broken_camera_keeps_running(self, session_config, scripted_detector):
        clock = FakeClock(20.0)
        session = PaintingSession(session_config, FakeCamera(None), scripted_detector(), clock=clock)
        session._start = 0.0
        assert session.step() == 0
        assert session.frames.latest() is None


    def test_step_does_not_wait_on_blocked_camera(self, session_config, gradient_frame, scripted_detector):
        camera = BlockingCamera(gradient_frame)
        session = PaintingSession(session_config, camera, scripted_detector())
        session.frames.publish(gradient_frame)
        session.grabber.start()
        try:
            assert camera.entered.wait(2.0)
            started = time.monotonic()
            session.step()
            assert time.monotonic() - started < 1.0
            assert camera.reads == 1
        finally:
            camera.release_frame.set()
            session.grabber.stop()


class TestRun:
    def test_bounded_run_cleans_up(self, session_config, gradient_frame, scripted_detector):
        camera = FakeCamera(gradient_frame)
        session_config.fps = 240
        session = PaintingSession(session_config, camera, scripted_detector())

        session.run(max_frames=3)

        assert camera.opened and camera.released
        assert not session.sampler.is_running
        assert not session.grabber.is_running
        assert session.driver.frames_rendered == 3
        assert not session.running
