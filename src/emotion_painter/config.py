"""
Configuration for the expression painter.

Every tunable constant of the installation lives here so the CLI and the
tests can override them in one place.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class PainterConfig:
    """Universal configuration for the painting session."""
    width: int = 1330
    height: int = 770
    fps: int = 60
    background_color: Tuple[int, int, int] = (0, 0, 0)

    # Camera
    camera_index: int = 0
    capture_width: int = 640
    capture_height: int = 480

    # Expression sampling
    refresh_delay_ms: int = 50

    # Intro quotation
    intro_duration_ms: int = 12000
    fade_start_ms: int = 5000
    fade_end_ms: int = 10000
    quote_line1: str = "\"All perception is colored by emotion\""
    quote_line2: str = "                       -Immanuel Kant"
    quote_font: str = "georgia"
    quote_size: int = 20
    quote_offset: int = 40

    # Pixel sampling: a pixel is painted when U[0, sample_range) < 1
    sample_range: float = 1000.0

    # Turbulence remap ranges (turbulence 0..1 -> range)
    length_range: Tuple[float, float] = (10.0, 100.0)
    thickness_range: Tuple[float, float] = (5.0, 35.0)
    alpha_range: Tuple[float, float] = (15.0, 70.0)  # driven by -turbulence over [-1, 0]
    length_window: float = 30.0
    thickness_window: float = 2.0

    # Geometry
    curve_probability: float = 0.7
    curve_threshold: float = 0.2
    point_scale: float = 3.0
    max_rotation_deg: float = 90.0
    curve_segments: int = 16

    # Palette
    palette_threshold: float = 0.25
    clamp_blend: bool = False  # off: raw turbulence extrapolates past endpoints

    def is_painting(self, elapsed_ms: float) -> bool:
        """True once the intro has finished."""
        return elapsed_ms >= self.intro_duration_ms

    def quote_alpha(self, elapsed_ms: float) -> float:
        """Alpha (0-255) of the intro quotation at ``elapsed_ms``."""
        t = min(max(elapsed_ms, 0.0), float(self.fade_end_ms))
        span = max(self.fade_end_ms - self.fade_start_ms, 1)
        alpha = (t - self.fade_start_ms) / span * 255.0
        return min(max(alpha, 0.0), 255.0)
