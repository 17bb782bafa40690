"""
Frame orchestrator for the expression painter.

Reads the latest camera frame and expression snapshot, runs the intro
quotation until the painting phase starts, then sparsely samples source
pixels and hands each one to the stroke painter. The canvas is never cleared
once painting has begun.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from emotion_painter.config import PainterConfig
from emotion_painter.core.expression import ExpressionSnapshot, LatestValue
from emotion_painter.visualizers.painter import StrokePainter, StrokeSpec

logger = logging.getLogger(__name__)

INTRO = "intro"
PAINTING = "painting"


def pixel_luma(rgb: np.ndarray) -> np.ndarray:
    """Perceptual brightness of RGB pixels (last axis = channels)."""
    rgb = np.asarray(rgb, dtype=np.float64)
    return 0.299 * rgb[..., 0] + 0.587 * rgb[..., 1] + 0.114 * rgb[..., 2]


def mirror_origin(x: int, y: int, capture_width: int, capture_height: int) -> Tuple[float, float]:
    """Stroke origin for capture pixel (x, y): mirrored horizontally, centred."""
    return (capture_width - x - capture_width / 2, y - capture_height / 2)


class FrameDriver:
    """
    Drives one canvas from camera frames and expression snapshots.

    Call ``render_frame`` once per display frame with the elapsed session
    time in milliseconds.
    """

    def __init__(
        self,
        canvas,
        cell: LatestValue,
        config: Optional[PainterConfig] = None,
        painter: Optional[StrokePainter] = None,
        seed: Optional[int] = None,
    ):
        self.cfg = config or PainterConfig()
        self.canvas = canvas
        self.cell = cell
        self.painter = painter or StrokePainter(self.cfg, seed=seed)
        self.rng = self.painter.rng

        self._last_report_ms = 0.0
        self.frames_rendered = 0
        self.last_sampled = 0
        self.last_skipped = 0

    def phase(self, elapsed_ms: float) -> str:
        return PAINTING if self.cfg.is_painting(elapsed_ms) else INTRO

    def sample_pixels(self, height: int, width: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Pick the pixels to paint this frame.

        Each pixel independently draws from U[0, sample_range) and is kept when
        the draw is below 1.

        Returns:
            (ys, xs) index arrays in row-major order.
        """
        draws = self.rng.random((height, width)) * self.cfg.sample_range
        return np.nonzero(draws < 1.0)

    def render_frame(self, frame: Optional[np.ndarray], elapsed_ms: float) -> List[StrokeSpec]:
        """
        Render a single frame.

        Args:
            frame: (H, W, 3) uint8 RGB capture, or None if the camera has
                nothing to offer.
            elapsed_ms: Milliseconds since the session started.

        Returns:
            The strokes painted this frame.
        """
        self.frames_rendered += 1
        self.report_diagnostics(elapsed_ms)

        if self.phase(elapsed_ms) == INTRO:
            self._render_intro(elapsed_ms)
            return []
        return self._render_painting(frame)

    def _render_intro(self, elapsed_ms: float):
        cfg = self.cfg
        canvas = self.canvas
        alpha = cfg.quote_alpha(elapsed_ms)

        canvas.reset_matrix()
        canvas.background(cfg.background_color)
        cx, cy = cfg.width / 2, cfg.height / 2
        for line, dy in ((cfg.quote_line1, -cfg.quote_offset), (cfg.quote_line2, cfg.quote_offset)):
            canvas.text(
                line,
                cx,
                cy + dy,
                (255, 255, 255, int(alpha)),
                font=cfg.quote_font,
                size=cfg.quote_size,
                align="center",
            )

    def _render_painting(self, frame: Optional[np.ndarray]) -> List[StrokeSpec]:
        self.last_sampled = 0
        self.last_skipped = 0
        if frame is None:
            return []

        ch, cw = frame.shape[:2]
        ys, xs = self.sample_pixels(ch, cw)
        self.last_sampled = len(ys)

        snapshot: Optional[ExpressionSnapshot] = self.cell.latest()
        if snapshot is None:
            self.last_skipped = len(ys)
            if len(ys):
                logger.debug("Expression data undefined; skipped %d sampled pixels", len(ys))
            return []

        turbulence = snapshot.turbulence
        lumas = pixel_luma(frame[ys, xs])

        canvas = self.canvas
        canvas.reset_matrix()
        canvas.translate(self.cfg.width / 2, self.cfg.height / 2)

        strokes = []
        for y, x, luma in zip(ys, xs, lumas):
            origin = mirror_origin(int(x), int(y), cw, ch)
            strokes.append(self.painter.paint_pixel(canvas, origin, turbulence, float(luma)))
        return strokes

    def report_diagnostics(self, elapsed_ms: float):
        """Log the current expression state once per refresh interval."""
        if elapsed_ms - self._last_report_ms < self.cfg.refresh_delay_ms:
            return
        self._last_report_ms = elapsed_ms

        snapshot = self.cell.latest()
        if snapshot is None:
            logger.debug("Expression data undefined")
        else:
            logger.debug("Expression %s", snapshot.describe())
