"""Rotary saturation drag.

Grabbing the ring around an anchor and circling it changes that anchor's
saturation: one full turn (``ROTARY_TURNS_TO_FULL``) sweeps the whole
0…1 range, or 2.5 turns with the fine modifier held.

The logic is a synchronous reducer, ``reduce(state, event, anchors)``,
returning the next state and at most one :class:`SaturationChange`.
:class:`RotaryDragController` wires it to a :class:`Palette`.

Angle deltas are unwrapped across the ±π seam before they are
accumulated. When the value is pinned at 0 or 1 and the pointer keeps
pushing outwards, the drag is re-anchored at the current angle so that
turning back responds at once.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Sequence

from .anchors import AnchorPoint
from .cylinder import clamp01

ROTARY_TURNS_TO_FULL = 1.0
ROTARY_TURNS_TO_FULL_FINE = 2.5
RING_INNER_RADIUS = 0.02
RING_OUTER_RADIUS = 0.05
SNAP_EPSILON = 0.01

TAU = 2.0 * math.pi


# ---- states ----------------------------------------------------------------


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Adjusting:
    anchor_index: int
    start_value: float
    previous_angle: float
    accumulated_angle: float = 0.0


State = Idle | Adjusting


# ---- events ----------------------------------------------------------------


@dataclass(frozen=True)
class PointerDown:
    position: tuple[float, float]


@dataclass(frozen=True)
class PointerMove:
    position: tuple[float, float]
    fine: bool = False


@dataclass(frozen=True)
class PointerUp:
    pass


Event = PointerDown | PointerMove | PointerUp


@dataclass(frozen=True)
class SaturationChange:
    anchor_index: int
    saturation: float


# ---- helpers ---------------------------------------------------------------


def unwrap_angle_delta(current: float, previous: float) -> float:
    """Signed shortest angular step from ``previous`` to ``current`` (radians)."""
    d = current - previous
    if d > math.pi:
        d -= TAU
    elif d < -math.pi:
        d += TAU
    return d


def _angle(anchor: AnchorPoint, position: Sequence[float]) -> float:
    return math.atan2(position[1] - anchor.y, position[0] - anchor.x)


def pick_ring(
    anchors: Sequence[AnchorPoint],
    position: Sequence[float],
    inner: float = RING_INNER_RADIUS,
    outer: float = RING_OUTER_RADIUS,
) -> int | None:
    """Index of the first anchor whose ring (inner, outer] contains ``position``."""
    for i, a in enumerate(anchors):
        d = math.hypot(position[0] - a.x, position[1] - a.y)
        if inner < d <= outer:
            return i
    return None


def snap(value: float, eps: float = SNAP_EPSILON) -> float:
    value = clamp01(value)
    if value > 1.0 - eps:
        return 1.0
    if value < eps:
        return 0.0
    return value


# ---- reducer ---------------------------------------------------------------


def reduce(
    state: State, event: Event, anchors: Sequence[AnchorPoint]
) -> tuple[State, SaturationChange | None]:
    if isinstance(event, PointerUp):
        return Idle(), None

    if isinstance(event, PointerDown):
        if isinstance(state, Adjusting):
            return state, None
        hit = pick_ring(anchors, event.position)
        if hit is None:
            return state, None
        anchor = anchors[hit]
        return Adjusting(hit, anchor.color[1], _angle(anchor, event.position)), None

    if isinstance(event, PointerMove):
        if not isinstance(state, Adjusting) or state.anchor_index >= len(anchors):
            return state, None
        anchor = anchors[state.anchor_index]
        angle = _angle(anchor, event.position)
        accumulated = state.accumulated_angle + unwrap_angle_delta(angle, state.previous_angle)

        turns_to_full = ROTARY_TURNS_TO_FULL_FINE if event.fine else ROTARY_TURNS_TO_FULL
        delta = (accumulated / TAU) / turns_to_full
        value = snap(state.start_value + delta)

        pushing_past = (value == 1.0 and delta > 0) or (value == 0.0 and delta < 0)
        if pushing_past:
            nxt = Adjusting(state.anchor_index, value, angle, 0.0)
        else:
            nxt = replace(state, previous_angle=angle, accumulated_angle=accumulated)
        return nxt, SaturationChange(state.anchor_index, value)

    raise TypeError(f"unsupported event {event!r}")


class RotaryDragController:
    """Feeds pointer events through :func:`reduce` and applies the result."""

    def __init__(self, palette) -> None:
        self.palette = palette
        self.state: State = Idle()

    @property
    def active(self) -> bool:
        return isinstance(self.state, Adjusting)

    def dispatch(self, event: Event) -> SaturationChange | None:
        anchors = self.palette.anchor_points
        self.state, change = reduce(self.state, event, anchors)
        if change is not None:
            anchor = anchors[change.anchor_index]
            h, _s, l = anchor.color
            self.palette.update_anchor(point=anchor, color=(h, change.saturation, l))
        return change

    def pointer_down(self, position: Sequence[float]) -> bool:
        self.dispatch(PointerDown((position[0], position[1])))
        return self.active

    def pointer_move(self, position: Sequence[float], fine: bool = False) -> float | None:
        change = self.dispatch(PointerMove((position[0], position[1]), fine))
        return None if change is None else change.saturation

    def pointer_up(self) -> None:
        self.dispatch(PointerUp())
