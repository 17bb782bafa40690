"""Expression-driven generative painting for live camera installations."""

from emotion_painter.config import PainterConfig
from emotion_painter.core.expression import ExpressionScores, ExpressionSnapshot, LatestValue
from emotion_painter.core.palette import map_color
from emotion_painter.core.sampler import ExpressionSampler
from emotion_painter.visualizers.driver import FrameDriver
from emotion_painter.visualizers.painter import StrokePainter, StrokeSpec

__version__ = "0.1.0"
__all__ = [
    "PainterConfig",
    "ExpressionScores",
    "ExpressionSnapshot",
    "LatestValue",
    "map_color",
    "ExpressionSampler",
    "FrameDriver",
    "StrokePainter",
    "StrokeSpec",
]
