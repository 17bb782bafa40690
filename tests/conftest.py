"""Pytest configuration and shared fixtures."""

import os

# Headless pygame for every test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from emotion_painter.config import PainterConfig
from emotion_painter.core.expression import ExpressionScores


class RecordingCanvas:
    """Drawing surface double that records every call."""

    def __init__(self):
        self.calls = []
        self.depth = 0
        self.stroke_color = None
        self.weight = None

    def background(self, color):
        self.calls.append(("background", color))

    def reset_matrix(self):
        self.calls.append(("reset_matrix",))

    def stroke(self, color):
        self.stroke_color = color
        self.calls.append(("stroke", color))

    def stroke_weight(self, weight):
        self.weight = weight
        self.calls.append(("stroke_weight", weight))

    def push(self):
        self.depth += 1
        self.calls.append(("push",))

    def pop(self):
        self.depth -= 1
        self.calls.append(("pop",))

    def translate(self, dx, dy):
        self.calls.append(("translate", dx, dy))

    def rotate(self, angle):
        self.calls.append(("rotate", angle))

    def point(self, x, y):
        self.calls.append(("point", x, y, self.weight))

    def curve(self, *coords):
        self.calls.append(("curve", coords, self.weight))

    def text(self, message, x, y, color, **kwargs):
        self.calls.append(("text", message, x, y, color))

    def named(self, name):
        return [c for c in self.calls if c[0] == name]


class ScriptedDetector:
    """Returns queued face lists in order, then an empty list."""

    def __init__(self, script=None):
        self.script = list(script or [])
        self.frames = []

    def detect(self, frame):
        self.frames.append(frame)
        if self.script:
            return self.script.pop(0)
        return []


@pytest.fixture
def recording_canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def scripted_detector():
    """Factory: scripted_detector([[scores], [], ...])."""
    return ScriptedDetector


@pytest.fixture
def small_config() -> PainterConfig:
    """Small canvas and capture to keep tests fast."""
    return PainterConfig(
        width=200,
        height=150,
        capture_width=80,
        capture_height=60,
        curve_segments=8,
    )


@pytest.fixture
def gradient_frame() -> np.ndarray:
    """
    80x60 RGB frame with a horizontal brightness ramp.

    Returns:
        (60, 80, 3) uint8 array.
    """
    ramp = np.linspace(0, 255, 80, dtype=np.float32)
    frame = np.zeros((60, 80, 3), dtype=np.uint8)
    frame[:, :, 0] = ramp
    frame[:, :, 1] = ramp[::-1]
    frame[:, :, 2] = 128
    return frame


@pytest.fixture
def calm_scores() -> ExpressionScores:
    """Happy face: turbulence 0.0."""
    return ExpressionScores(happy=1.0)


@pytest.fixture
def stormy_scores() -> ExpressionScores:
    """Angry face: turbulence 1.0."""
    return ExpressionScores(angry=1.0)
