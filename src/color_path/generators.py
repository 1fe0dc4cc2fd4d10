from __future__ import annotations

from typing import Sequence

import numpy as np

from .cylinder import HSL, normalize_color, wrap_hue


def _rng(rng: np.random.Generator | None) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def random_hsl_pair(
    start_hue: float | None = None, rng: np.random.Generator | None = None
) -> list[HSL]:
    """A light and a dark anchor 60–240° apart on the wheel."""
    g = _rng(rng)
    h0 = g.uniform(0.0, 360.0) if start_hue is None else start_hue
    s0, s1 = g.random(2)
    return [
        normalize_color((h0, s0, 0.75 + g.random() * 0.2)),
        normalize_color((h0 + 60.0 + g.random() * 180.0, s1, 0.3 + g.random() * 0.2)),
    ]


def random_hsl_triple(
    start_hue: float | None = None, rng: np.random.Generator | None = None
) -> list[HSL]:
    g = _rng(rng)
    h0 = g.uniform(0.0, 360.0) if start_hue is None else start_hue
    h1 = h0 + 60.0 + g.random() * 180.0
    h2 = h1 + 60.0 + g.random() * 90.0
    s = g.random(3)
    return [
        normalize_color((h0, s[0], 0.75 + g.random() * 0.2)),
        normalize_color((h1, s[1], 0.35 + g.random() * 0.2)),
        normalize_color((h2, s[2], 0.1 + g.random() * 0.2)),
    ]


def spaced_anchor_colors(
    count: int, jitter: float = 20.0, rng: np.random.Generator | None = None
) -> list[HSL]:
    """``count`` anchors with evenly spaced hues, each nudged by ±``jitter``°."""
    if count < 1:
        raise ValueError("count must be ≥ 1")
    g = _rng(rng)
    base = g.uniform(0.0, 360.0)
    step = 360.0 / count
    out: list[HSL] = []
    for i in range(count):
        h = wrap_hue(base + i * step + (g.random() - 0.5) * jitter * 2.0)
        out.append((h, 0.5 + g.random() * 0.5, 0.3 + g.random() * 0.5))
    return out


def jitter_colors(
    colors: Sequence[Sequence[float]], rng: np.random.Generator | None = None
) -> list[HSL]:
    """Shuffle control: pull hues back by up to 90°, reroll saturation, wobble lightness."""
    g = _rng(rng)
    return [
        normalize_color((h - 90.0 + g.random() * 90.0, g.random(), l - 0.05 + g.random() * 0.1))
        for h, _s, l in colors
    ]
