"""
Palette mapping.

Maps (turbulence, luma) to a stroke colour via two linear blends:
turbulence picks a point between two palette pairs, luma picks a point
between that pair's dark and light endpoints.
"""

from typing import Dict, Tuple

import numpy as np

RGB = Tuple[float, float, float]
RGBA = Tuple[float, float, float, float]

# (dark, light) per emotional regime
PALETTES: Dict[str, Tuple[RGB, RGB]] = {
    "peaceful": ((9.0, 13.0, 72.0), (225.0, 114.0, 55.0)),
    "neutral": ((81.0, 81.0, 107.0), (202.0, 156.0, 99.0)),
    "turbulent": ((27.0, 60.0, 90.0), (214.0, 103.0, 81.0)),
}

PALETTE_THRESHOLD = 0.25


def remap(
    value: float,
    start1: float,
    stop1: float,
    start2: float,
    stop2: float,
) -> float:
    """Linearly remap ``value`` from [start1, stop1] to [start2, stop2]. Not clamped."""
    return start2 + (stop2 - start2) * ((value - start1) / (stop1 - start1))


def lerp_color(c1: np.ndarray, c2: np.ndarray, amount: float) -> np.ndarray:
    """Per-channel linear interpolation. ``amount`` outside [0, 1] extrapolates."""
    return c1 + (c2 - c1) * amount


def map_color(
    turbulence: float,
    luma: float,
    alpha: float,
    threshold: float = PALETTE_THRESHOLD,
    clamp_blend: bool = False,
) -> RGBA:
    """
    Resolve the colour of a single stroke.

    The raw turbulence value is used as the palette blend factor in both
    regimes. It is not rescaled to the regime's sub-range, so the regime
    switch at ``threshold`` is discontinuous and turbulence above 1 pushes
    past the turbulent endpoints.

    Args:
        turbulence: Current turbulence signal.
        luma: Source pixel brightness in [0, 255].
        alpha: Stroke alpha (0-255), carried through unchanged.
        threshold: Turbulence at or below which the peaceful→neutral regime
            is used.
        clamp_blend: Clamp the turbulence blend factor to [0, 1].

    Returns:
        (r, g, b, a) floats. Channels may leave [0, 255] when extrapolating.
    """
    if turbulence <= threshold:
        start, end = PALETTES["peaceful"], PALETTES["neutral"]
    else:
        start, end = PALETTES["neutral"], PALETTES["turbulent"]

    blend = float(np.clip(turbulence, 0.0, 1.0)) if clamp_blend else turbulence

    dark = lerp_color(np.asarray(start[0]), np.asarray(end[0]), blend)
    light = lerp_color(np.asarray(start[1]), np.asarray(end[1]), blend)
    rgb = lerp_color(dark, light, remap(luma, 0.0, 255.0, 0.0, 1.0))

    return (float(rgb[0]), float(rgb[1]), float(rgb[2]), float(alpha))


def to_drawable(color: RGBA) -> Tuple[int, int, int, int]:
    """Round and clip an RGBA float colour to 8-bit channels."""
    return tuple(int(np.clip(round(c), 0, 255)) for c in color)
