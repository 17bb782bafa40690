"""
Persistent pygame drawing surface.

Provides the small set of primitives the painter needs: stroke colour and
weight, points, 4-control-point curves, a 2D transform stack and aligned
text. Every mark is drawn on a per-pixel-alpha layer and blitted so strokes
composite over what is already on the canvas.
"""

import math
from typing import List, Sequence, Tuple

import numpy as np
import pygame

Color = Tuple[int, int, int, int]


def catmull_rom(
    p0: Sequence[float],
    p1: Sequence[float],
    p2: Sequence[float],
    p3: Sequence[float],
    segments: int = 16,
) -> np.ndarray:
    """
    Sample the Catmull-Rom segment between ``p1`` and ``p2``.

    ``p0`` and ``p3`` only shape the tangents, as with a Processing-style
    ``curve()``.

    Returns:
        (segments + 1, 2) float array from p1 to p2.
    """
    p0, p1, p2, p3 = (np.asarray(p, dtype=np.float64) for p in (p0, p1, p2, p3))
    t = np.linspace(0.0, 1.0, max(1, segments) + 1)[:, np.newaxis]
    t2 = t * t
    t3 = t2 * t
    return 0.5 * (
        2.0 * p1
        + (-p0 + p2) * t
        + (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * t2
        + (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * t3
    )


class StrokeCanvas:
    """Accumulating canvas with a Processing-like drawing state."""

    def __init__(
        self,
        width: int,
        height: int,
        background: Tuple[int, int, int] = (0, 0, 0),
        curve_segments: int = 16,
    ):
        self.width = width
        self.height = height
        self.curve_segments = curve_segments
        self.surface = pygame.Surface((width, height))
        self.surface.fill(background)

        self._matrix = np.identity(3)
        self._stack: List[Tuple[np.ndarray, Color, float]] = []
        self._stroke: Color = (255, 255, 255, 255)
        self._weight = 1.0
        self._fonts = {}

    # --- state ---

    def background(self, color: Tuple[int, int, int]):
        self.surface.fill(color)

    def stroke(self, color: Sequence[int]):
        if len(color) == 3:
            color = (*color, 255)
        self._stroke = tuple(int(c) for c in color)

    def stroke_weight(self, weight: float):
        self._weight = float(weight)

    def push(self):
        self._stack.append((self._matrix.copy(), self._stroke, self._weight))

    def pop(self):
        self._matrix, self._stroke, self._weight = self._stack.pop()

    def reset_matrix(self):
        self._matrix = np.identity(3)

    def translate(self, dx: float, dy: float):
        self._matrix = self._matrix @ np.array(
            [[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]]
        )

    def rotate(self, angle: float):
        """Rotate the local frame by ``angle`` radians (clockwise on screen)."""
        c, s = math.cos(angle), math.sin(angle)
        self._matrix = self._matrix @ np.array(
            [[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]]
        )

    def to_device(self, points: np.ndarray) -> np.ndarray:
        """Map (N, 2) local points to canvas pixel coordinates."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        homo = np.hstack([pts, np.ones((len(pts), 1))])
        return (homo @ self._matrix.T)[:, :2]

    # --- marks ---

    def point(self, x: float, y: float):
        """
        Round dot whose diameter is the stroke weight.

        Weights under 3 px paint the single pixel under the point;
        a negative weight is treated as its magnitude.
        """
        center = self.to_device(np.array([[x, y]]))

        def draw(layer, pts, r):
            if r < 1.5:
                layer.set_at((int(pts[0][0]), int(pts[0][1])), self._stroke)
            else:
                pygame.draw.circle(layer, self._stroke, pts[0], r)

        self._draw_layer(center, draw)

    def curve(
        self,
        x1: float, y1: float,
        x2: float, y2: float,
        x3: float, y3: float,
        x4: float, y4: float,
    ):
        """Smooth curve from (x2, y2) to (x3, y3) shaped by the outer control points."""
        local = catmull_rom((x1, y1), (x2, y2), (x3, y3), (x4, y4), self.curve_segments)
        polyline = self.to_device(local)

        def draw(layer, pts, r):
            width = max(1, int(round(r * 2)))
            pygame.draw.lines(layer, self._stroke, False, [tuple(p) for p in pts], width)
            # Round joins and caps
            if width > 2:
                for p in pts:
                    pygame.draw.circle(layer, self._stroke, p, r)

        self._draw_layer(polyline, draw)

    def _draw_layer(self, pts: np.ndarray, draw):
        radius = abs(self._weight) / 2.0
        pad = int(math.ceil(radius)) + 2
        x0 = int(math.floor(pts[:, 0].min())) - pad
        y0 = int(math.floor(pts[:, 1].min())) - pad
        x1 = int(math.ceil(pts[:, 0].max())) + pad
        y1 = int(math.ceil(pts[:, 1].max())) + pad

        # Skip marks entirely outside the canvas
        if x1 < 0 or y1 < 0 or x0 >= self.width or y0 >= self.height:
            return

        layer = pygame.Surface((x1 - x0, y1 - y0), pygame.SRCALPHA)
        local = [(float(p[0] - x0), float(p[1] - y0)) for p in pts]
        draw(layer, local, radius)
        self.surface.blit(layer, (x0, y0))

    def text(
        self,
        message: str,
        x: float,
        y: float,
        color: Sequence[int],
        font: str = "georgia",
        size: int = 20,
        align: str = "center",
    ):
        """
        Draw a line of text with alpha.

        ``y`` is the baseline-ish bottom of the line; ``align`` is one of
        "left", "center" or "right" relative to ``x``.
        """
        if not pygame.font.get_init():
            pygame.font.init()
        key = (font, size)
        if key not in self._fonts:
            self._fonts[key] = pygame.font.SysFont(font, size)

        rgba = tuple(int(c) for c in color)
        alpha = rgba[3] if len(rgba) == 4 else 255
        rendered = self._fonts[key].render(message, True, rgba[:3])
        rendered.set_alpha(alpha)

        dx, dy = self.to_device(np.array([[x, y]]))[0]
        rect = rendered.get_rect()
        rect.bottom = int(round(dy))
        if align == "center":
            rect.centerx = int(round(dx))
        elif align == "right":
            rect.right = int(round(dx))
        else:
            rect.left = int(round(dx))
        self.surface.blit(rendered, rect)

    def to_array(self) -> np.ndarray:
        """Canvas contents as an (H, W, 3) uint8 array."""
        # pygame uses (width, height) but numpy expects (height, width)
        arr = pygame.surfarray.array3d(self.surface)
        return np.transpose(arr, (1, 0, 2))
