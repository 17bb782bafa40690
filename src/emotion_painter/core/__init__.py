"""Expression sampling and colour mapping."""

from emotion_painter.core.expression import ExpressionScores, ExpressionSnapshot, LatestValue
from emotion_painter.core.palette import map_color
from emotion_painter.core.sampler import ExpressionSampler

__all__ = ["ExpressionScores", "ExpressionSnapshot", "LatestValue", "map_color", "ExpressionSampler"]
