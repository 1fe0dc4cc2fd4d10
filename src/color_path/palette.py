"""Interpolated colour paths through a set of anchors.

The anchors live on a cylinder (hue = angle, saturation = radius,
lightness = height). Each segment between consecutive anchors is walked
with its own progress ``t`` per axis, re-shaped by that axis' position
function, and the interpolated point is mapped back to (h, s, l). Working
in x/y rather than on the hue number makes the path take the short way
around the wheel.

Typical use::

    p = Palette([(20, 0.8, 0.4), (200, 0.6, 0.8)], num_points=12)
    p.position_function_x = "arc"
    p.colors()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .anchors import GRAB_DISTANCE, AnchorPoint, AnchorSet, PointRef
from .cylinder import HSL, XYZ, clamp01, positions_to_colors
from .errors import InvalidSampleCount
from .generators import random_hsl_pair
from .position_functions import PositionFunction, get_position_function

log = logging.getLogger(__name__)

DEFAULT_NUM_POINTS = 16
DEFAULT_POSITION_FUNCTION = PositionFunction.SINUSOIDAL

FunctionRef = str | PositionFunction


@dataclass(frozen=True)
class FlattenedPoint:
    position: XYZ
    color: HSL
    segment_index: int
    t: float


def _check_num_points(n: object) -> int:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
        raise InvalidSampleCount(n)
    return int(n)


def segment_counts(num_points: int, segments: int, closed_loop: bool) -> list[int]:
    """Equal share per segment, remainder one each to the earliest segments.

    An open path always gives its final segment at least one sample so the
    last sample can sit on the last anchor.
    """
    base, extra = divmod(num_points, segments)
    counts = [base + (1 if i < extra else 0) for i in range(segments)]
    if not closed_loop and num_points >= 2 and counts[-1] == 0:
        donor = max(i for i, c in enumerate(counts) if c > 0)
        counts[donor] -= 1
        counts[-1] = 1
    return counts


def segment_progress(m: int, *, last_open: bool, closing: bool) -> np.ndarray:
    """Raw progress values for ``m`` samples on one segment."""
    if m <= 0:
        return np.empty(0, dtype=np.float64)
    k = np.arange(m, dtype=np.float64)
    if closing:
        # stop short of the first anchor, it already opens the path
        return k / m
    if m == 1:
        return np.ones(1) if last_open else np.zeros(1)
    return k / (m - 1)


class Palette:
    """Anchor set + sampling configuration, with memoised samples."""

    def __init__(
        self,
        anchor_colors: Sequence[Sequence[float]] | None = None,
        *,
        num_points: int = DEFAULT_NUM_POINTS,
        position_function: FunctionRef | None = None,
        position_function_x: FunctionRef | None = None,
        position_function_y: FunctionRef | None = None,
        position_function_z: FunctionRef | None = None,
        closed_loop: bool = False,
        inverted_lightness: bool = False,
        rng: np.random.Generator | None = None,
    ) -> None:
        if anchor_colors is None:
            anchor_colors = random_hsl_pair(rng=rng)
        shared = get_position_function(position_function or DEFAULT_POSITION_FUNCTION)

        self._anchors = AnchorSet(anchor_colors, inverted_lightness=inverted_lightness)
        self._num_points = _check_num_points(num_points)
        self._fx = get_position_function(position_function_x or shared)
        self._fy = get_position_function(position_function_y or shared)
        self._fz = get_position_function(position_function_z or shared)
        self._closed_loop = bool(closed_loop)

        self._config_revision = 0
        self._cache_key: tuple[int, int] | None = None
        self._cache: tuple[FlattenedPoint, ...] = ()

    @classmethod
    def create(cls, anchor_colors=None, num_points=DEFAULT_NUM_POINTS, **kwargs) -> "Palette":
        return cls(anchor_colors, num_points=num_points, **kwargs)

    # ---- configuration ----

    @property
    def num_points(self) -> int:
        return self._num_points

    @num_points.setter
    def num_points(self, n: int) -> None:
        self._num_points = _check_num_points(n)
        self._invalidate()

    @property
    def closed_loop(self) -> bool:
        return self._closed_loop

    @closed_loop.setter
    def closed_loop(self, flag: bool) -> None:
        self._closed_loop = bool(flag)
        self._invalidate()

    @property
    def inverted_lightness(self) -> bool:
        return self._anchors.inverted_lightness

    @inverted_lightness.setter
    def inverted_lightness(self, flag: bool) -> None:
        # anchors keep their colour; only derived heights change
        self._anchors.set_inverted_lightness(flag)

    @property
    def position_function_x(self) -> PositionFunction:
        return self._fx

    @position_function_x.setter
    def position_function_x(self, fn: FunctionRef) -> None:
        self._fx = get_position_function(fn)
        self._invalidate()

    @property
    def position_function_y(self) -> PositionFunction:
        return self._fy

    @position_function_y.setter
    def position_function_y(self, fn: FunctionRef) -> None:
        self._fy = get_position_function(fn)
        self._invalidate()

    @property
    def position_function_z(self) -> PositionFunction:
        return self._fz

    @position_function_z.setter
    def position_function_z(self, fn: FunctionRef) -> None:
        self._fz = get_position_function(fn)
        self._invalidate()

    @property
    def position_function(self) -> PositionFunction | None:
        """The shared function, or None when the axes differ."""
        if self._fx is self._fy is self._fz:
            return self._fx
        return None

    @position_function.setter
    def position_function(self, fn: FunctionRef) -> None:
        resolved = get_position_function(fn)
        self._fx = self._fy = self._fz = resolved
        self._invalidate()

    # ---- anchors ----

    @property
    def anchors(self) -> AnchorSet:
        return self._anchors

    @property
    def anchor_points(self) -> tuple[AnchorPoint, ...]:
        return self._anchors.points

    @property
    def anchor_colors(self) -> list[HSL]:
        return self._anchors.colors

    @property
    def segment_count(self) -> int:
        n = len(self._anchors)
        return n if self._closed_loop else n - 1

    def add_anchor(
        self,
        *,
        color: Sequence[float] | None = None,
        position: Sequence[float] | None = None,
        clamp: bool = True,
        insert_at: int | None = None,
    ) -> AnchorPoint:
        return self._anchors.add(color=color, position=position, clamp=clamp, insert_at=insert_at)

    def remove_anchor(self, *, point: PointRef | None = None, index: int | None = None) -> AnchorPoint:
        return self._anchors.remove(point=point, index=index)

    def update_anchor(
        self,
        *,
        point: PointRef,
        color: Sequence[float] | None = None,
        position: Sequence[float] | None = None,
        clamp: bool = False,
    ) -> AnchorPoint:
        return self._anchors.update(point=point, color=color, position=position, clamp=clamp)

    def shift_hue(self, delta: float) -> None:
        self._anchors.shift_hue(delta)

    def nearest_anchor(
        self, position: Sequence[float], max_distance: float = GRAB_DISTANCE
    ) -> AnchorPoint | None:
        return self._anchors.nearest(position, max_distance)

    # ---- sampling ----

    def samples(self) -> tuple[FlattenedPoint, ...]:
        key = (self._anchors.revision, self._config_revision)
        if key != self._cache_key:
            self._cache = tuple(self._compute())
            self._cache_key = key
        return self._cache

    def colors(self) -> list[HSL]:
        return [p.color for p in self.samples()]

    def get_color_at(self, t: float) -> HSL:
        """Colour at global progress ``t``; values outside [0, 1] are clamped."""
        t = clamp01(t)
        n = self.segment_count
        scaled = t * n
        seg = min(int(scaled), n - 1)
        local = np.array([scaled - seg], dtype=np.float64)
        a, b = self._segment_ends(seg)
        _, colors = self._walk(a, b, local)
        h, s, l = colors[0]
        return float(h), float(s), float(l)

    def _segment_ends(self, i: int) -> tuple[XYZ, XYZ]:
        pts = self._anchors
        return pts[i].position, pts[(i + 1) % len(pts)].position

    def _walk(self, a: XYZ, b: XYZ, t: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        start = np.asarray(a, dtype=np.float64)
        delta = np.asarray(b, dtype=np.float64) - start
        shaped = np.stack(
            [
                np.asarray(self._fx(t), dtype=np.float64),
                np.asarray(self._fy(t), dtype=np.float64),
                np.asarray(self._fz(t), dtype=np.float64),
            ],
            axis=1,
        )
        xyz = start + shaped * delta
        return xyz, positions_to_colors(xyz, self.inverted_lightness)

    def _compute(self) -> list[FlattenedPoint]:
        n = self.segment_count
        counts = segment_counts(self._num_points, n, self._closed_loop)
        log.debug(
            "sampling %d points over %d segments (%d anchors, closed=%s)",
            self._num_points,
            n,
            len(self._anchors),
            self._closed_loop,
        )
        out: list[FlattenedPoint] = []
        for i, m in enumerate(counts):
            ts = segment_progress(
                m,
                last_open=not self._closed_loop and i == n - 1 and i > 0,
                closing=self._closed_loop and i == n - 1,
            )
            if not len(ts):
                continue
            a, b = self._segment_ends(i)
            xyz, hsl = self._walk(a, b, ts)
            for t, p, c in zip(ts, xyz, hsl):
                out.append(
                    FlattenedPoint(
                        position=(float(p[0]), float(p[1]), float(p[2])),
                        color=(float(c[0]), float(c[1]), float(c[2])),
                        segment_index=i,
                        t=float(t),
                    )
                )
        return out

    def _invalidate(self) -> None:
        self._config_revision += 1
