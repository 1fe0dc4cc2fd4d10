# cylinder.py – hue/saturation/lightness ↔ point on the unit cylinder
#   - hue is the angle, saturation the radius, lightness the height
#   - the disc is centred on (0.5, 0.5) with radius 0.5
#   - inverted lightness flips the height axis (z = 1 - l)

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

HSL = tuple[float, float, float]
XYZ = tuple[float, float, float]

CENTER = 0.5
RADIUS = 0.5


def wrap_hue(h: float) -> float:
    h = float(h)
    if not math.isfinite(h):
        return 0.0
    h %= 360.0
    # -1e-17 % 360.0 rounds up to 360.0
    return 0.0 if h >= 360.0 else h


def clamp01(v: float) -> float:
    v = float(v)
    if math.isnan(v):
        return 0.0
    return 0.0 if v < 0.0 else 1.0 if v > 1.0 else v


def normalize_color(color: Sequence[float]) -> HSL:
    """Wrap hue into [0, 360) and clamp saturation/lightness into [0, 1]."""
    h, s, l = color
    return wrap_hue(h), clamp01(s), clamp01(l)


def to_position(color: Sequence[float], inverted_lightness: bool = False) -> XYZ:
    h, s, l = color
    angle = math.radians(wrap_hue(h))
    x = CENTER + RADIUS * s * math.cos(angle)
    y = CENTER + RADIUS * s * math.sin(angle)
    z = 1.0 - l if inverted_lightness else l
    return x, y, float(z)


def from_position(
    position: Sequence[float], inverted_lightness: bool = False, clamp: bool = False
) -> HSL:
    """Invert :func:`to_position`.

    With ``clamp`` the radius and the height are clamped into [0, 1]
    before conversion, so a point dropped outside the disc lands on its rim.
    """
    x, y, z = position
    dx, dy = x - CENTER, y - CENTER
    s = math.hypot(dx, dy) / RADIUS
    if clamp:
        s = clamp01(s)
        z = clamp01(z)
    h = wrap_hue(math.degrees(math.atan2(dy, dx)))
    l = 1.0 - z if inverted_lightness else z
    return h, s, float(l)


def positions_to_colors(xyz: np.ndarray, inverted_lightness: bool = False) -> np.ndarray:
    """Vectorised :func:`from_position` over an (n, 3) array → (n, 3) h, s, l."""
    xyz = np.asarray(xyz, dtype=np.float64)
    dx = xyz[:, 0] - CENTER
    dy = xyz[:, 1] - CENTER
    h = np.degrees(np.arctan2(dy, dx)) % 360.0
    h = np.where(h >= 360.0, 0.0, h)
    # differing per-axis shapes can cut across the rim
    s = np.minimum(np.hypot(dx, dy) / RADIUS, 1.0)
    l = 1.0 - xyz[:, 2] if inverted_lightness else xyz[:, 2]
    return np.stack([h, s, np.clip(l, 0.0, 1.0)], axis=1)
