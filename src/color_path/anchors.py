from __future__ import annotations

import itertools
import logging
import math
from typing import Iterable, Iterator, Sequence

from .cylinder import HSL, XYZ, from_position, normalize_color, to_position, wrap_hue
from .errors import AnchorNotFound, MinimumAnchors

log = logging.getLogger(__name__)

MIN_ANCHORS = 2
GRAB_DISTANCE = 0.05


class AnchorPoint:
    """A user-placed colour the path passes through exactly.

    ``position`` is derived from ``color`` and the inversion flag on every
    read; neither is writable from outside :class:`AnchorSet`.
    """

    __slots__ = ("_handle", "_color", "_inverted_lightness")

    def __init__(self, handle: int, color: Sequence[float], inverted_lightness: bool = False):
        self._handle = handle
        self._color: HSL = normalize_color(color)
        self._inverted_lightness = bool(inverted_lightness)

    @property
    def handle(self) -> int:
        return self._handle

    @property
    def color(self) -> HSL:
        return self._color

    @property
    def inverted_lightness(self) -> bool:
        return self._inverted_lightness

    @property
    def position(self) -> XYZ:
        return to_position(self._color, self._inverted_lightness)

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    @property
    def z(self) -> float:
        return self.position[2]

    def __repr__(self) -> str:
        h, s, l = self._color
        return f"AnchorPoint(handle={self._handle}, color=({h:.2f}, {s:.3f}, {l:.3f}))"


PointRef = AnchorPoint | int


class AnchorSet:
    """Ordered, mutable anchors; insertion order is path order.

    Every mutation bumps :attr:`revision` so that cached samples can be
    keyed on it.
    """

    def __init__(self, colors: Iterable[Sequence[float]], inverted_lightness: bool = False):
        self._handles = itertools.count()
        self._inverted_lightness = bool(inverted_lightness)
        self._points: list[AnchorPoint] = [self._new_point(c) for c in colors]
        if len(self._points) < MIN_ANCHORS:
            raise MinimumAnchors(MIN_ANCHORS)
        self._revision = 0

    # ---- container protocol ----

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[AnchorPoint]:
        return iter(self._points)

    def __getitem__(self, index: int) -> AnchorPoint:
        return self._points[index]

    @property
    def points(self) -> tuple[AnchorPoint, ...]:
        return tuple(self._points)

    @property
    def colors(self) -> list[HSL]:
        return [p.color for p in self._points]

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def inverted_lightness(self) -> bool:
        return self._inverted_lightness

    # ---- mutators ----

    def add(
        self,
        *,
        color: Sequence[float] | None = None,
        position: Sequence[float] | None = None,
        clamp: bool = True,
        insert_at: int | None = None,
    ) -> AnchorPoint:
        point = self._new_point(self._resolve_color(color, position, clamp))
        if insert_at is None:
            self._points.append(point)
        else:
            self._points.insert(insert_at, point)
        self._touch()
        return point

    def remove(self, *, point: PointRef | None = None, index: int | None = None) -> AnchorPoint:
        i = self.index_of(point=point, index=index)
        if len(self._points) - 1 < MIN_ANCHORS:
            raise MinimumAnchors(MIN_ANCHORS)
        removed = self._points.pop(i)
        self._touch()
        return removed

    def update(
        self,
        *,
        point: PointRef,
        color: Sequence[float] | None = None,
        position: Sequence[float] | None = None,
        clamp: bool = False,
    ) -> AnchorPoint:
        target = self._points[self.index_of(point=point)]
        target._color = normalize_color(self._resolve_color(color, position, clamp))
        self._touch()
        return target

    def shift_hue(self, delta: float) -> None:
        for p in self._points:
            h, s, l = p._color
            p._color = (wrap_hue(h + delta), s, l)
        self._touch()

    def set_inverted_lightness(self, flag: bool) -> None:
        flag = bool(flag)
        if flag == self._inverted_lightness:
            return
        self._inverted_lightness = flag
        for p in self._points:
            p._inverted_lightness = flag
        self._touch()

    # ---- queries ----

    def index_of(self, *, point: PointRef | None = None, index: int | None = None) -> int:
        if point is not None:
            for i, p in enumerate(self._points):
                if p is point or (isinstance(point, int) and p.handle == point):
                    return i
            raise AnchorNotFound(f"no anchor matches {point!r}")
        if index is not None:
            if -len(self._points) <= index < len(self._points):
                return index % len(self._points)
            raise AnchorNotFound(f"anchor index {index} out of range")
        raise AnchorNotFound("either point or index is required")

    def nearest(
        self, position: Sequence[float], max_distance: float = GRAB_DISTANCE
    ) -> AnchorPoint | None:
        """Closest anchor within ``max_distance`` in the (x, y) plane, else None.

        Height is ignored: the control surface is a 2D disc.
        """
        qx, qy = position[0], position[1]
        best: AnchorPoint | None = None
        best_d = math.inf
        for p in self._points:
            x, y, _ = p.position
            d = math.hypot(qx - x, qy - y)
            if d <= max_distance and d < best_d:
                best, best_d = p, d
        return best

    # ---- internals ----

    def _new_point(self, color: Sequence[float]) -> AnchorPoint:
        return AnchorPoint(next(self._handles), color, self._inverted_lightness)

    def _resolve_color(
        self,
        color: Sequence[float] | None,
        position: Sequence[float] | None,
        clamp: bool,
    ) -> Sequence[float]:
        if color is not None:
            return color
        if position is not None:
            return from_position(position, self._inverted_lightness, clamp=clamp)
        raise ValueError("either color or position is required")

    def _touch(self) -> None:
        self._revision += 1
        log.debug("anchor set revision %d (%d anchors)", self._revision, len(self._points))
