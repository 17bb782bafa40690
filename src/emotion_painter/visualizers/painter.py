"""
Expression-driven brush strokes.

Maps turbulence to stroke geometry:
- Turbulence → Length & Thickness (longer, heavier marks)
- Turbulence → Alpha (more turbulent, more transparent)
- Turbulence > curve threshold → rotated curves, otherwise dots
- Turbulence × Luma → Colour (two-axis palette gradient)
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from emotion_painter.config import PainterConfig
from emotion_painter.core.palette import map_color, remap, to_drawable


@dataclass
class StrokeSpec:
    """Parameters of one painted mark, discarded after drawing."""
    length: float
    thickness: float
    tangent1: float
    tangent2: float
    alpha: float
    color: Tuple[float, float, float, float]
    kind: str  # "curve" or "point"
    rotation: float = 0.0  # radians, curves only

    @property
    def is_curve(self) -> bool:
        return self.kind == "curve"

    def control_points(self) -> Tuple[float, ...]:
        """Curve control points (x1, y1, ..., x4, y4) in the stroke's local frame."""
        step = self.length / 2
        return (
            self.tangent1, -step * 2,
            0.0, -step,
            0.0, step,
            self.tangent2, step * 2,
        )


class StrokePainter:
    """
    Decides and draws a single stroke per sampled pixel.

    Holds its own random generator so paintings can be reproduced from a seed.
    """

    def __init__(
        self,
        config: Optional[PainterConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.cfg = config or PainterConfig()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def stroke_ranges(self, turbulence: float) -> Tuple[float, float, float]:
        """Returns (length_mid, thickness_mid, alpha) for ``turbulence``."""
        cfg = self.cfg
        length_mid = remap(turbulence, 0.0, 1.0, *cfg.length_range)
        thickness_mid = remap(turbulence, 0.0, 1.0, *cfg.thickness_range)
        alpha = remap(-turbulence, -1.0, 0.0, *cfg.alpha_range)
        return length_mid, thickness_mid, alpha

    def _uniform(self, low: float, high: float) -> float:
        # Order-insensitive, like a sketchbook random(min, max)
        lo, hi = min(low, high), max(low, high)
        return float(self.rng.uniform(lo, hi)) if hi > lo else lo

    def derive(self, turbulence: float, luma: float) -> StrokeSpec:
        """Draw a fresh StrokeSpec for one pixel."""
        cfg = self.cfg
        length_mid, thickness_mid, alpha = self.stroke_ranges(turbulence)
        length = self._uniform(length_mid - cfg.length_window, length_mid)
        thickness = self._uniform(thickness_mid - cfg.thickness_window, thickness_mid)

        color = map_color(
            turbulence,
            luma,
            alpha,
            threshold=cfg.palette_threshold,
            clamp_blend=cfg.clamp_blend,
        )

        tangent1 = tangent2 = 0.0
        if self.rng.random() < cfg.curve_probability:
            tangent1 = self._uniform(-length, length)
            tangent2 = self._uniform(-length, length)

        if turbulence > cfg.curve_threshold:
            rotation = math.radians(self._uniform(-cfg.max_rotation_deg, cfg.max_rotation_deg))
            kind = "curve"
        else:
            rotation = 0.0
            kind = "point"

        return StrokeSpec(
            length=length,
            thickness=thickness,
            tangent1=tangent1,
            tangent2=tangent2,
            alpha=alpha,
            color=color,
            kind=kind,
            rotation=rotation,
        )

    def draw(self, canvas, spec: StrokeSpec):
        """Issue the drawing commands for ``spec`` at the canvas's current origin."""
        canvas.stroke(to_drawable(spec.color))
        if spec.is_curve:
            canvas.stroke_weight(spec.thickness)
            canvas.rotate(spec.rotation)
            canvas.curve(*spec.control_points())
        else:
            canvas.stroke_weight(spec.thickness * self.cfg.point_scale)
            canvas.point(0.0, 0.0)

    def paint_pixel(
        self,
        canvas,
        origin: Tuple[float, float],
        turbulence: float,
        luma: float,
    ) -> StrokeSpec:
        """Derive and draw one stroke at ``origin`` without leaking transforms."""
        spec = self.derive(turbulence, luma)
        canvas.push()
        canvas.translate(*origin)
        self.draw(canvas, spec)
        canvas.pop()
        return spec
