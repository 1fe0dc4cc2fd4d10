"""Query-string form of a palette: anchors, steps, flags, per-axis functions."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Mapping
from urllib.parse import urlencode

from .cylinder import HSL, normalize_color
from .errors import UnknownFunction
from .export import DEFAULT_MODEL, HUE_MODELS
from .palette import DEFAULT_NUM_POINTS, DEFAULT_POSITION_FUNCTION, Palette
from .position_functions import PositionFunction, get_position_function

log = logging.getLogger(__name__)


@dataclass
class PaletteState:
    anchors: list[HSL]
    steps: int = DEFAULT_NUM_POINTS
    inverted_lightness: bool = False
    closed_loop: bool = False
    fnx: PositionFunction = DEFAULT_POSITION_FUNCTION
    fny: PositionFunction = DEFAULT_POSITION_FUNCTION
    fnz: PositionFunction = DEFAULT_POSITION_FUNCTION
    model: str = DEFAULT_MODEL

    def build(self) -> Palette:
        return Palette(
            self.anchors,
            num_points=self.steps,
            position_function_x=self.fnx,
            position_function_y=self.fny,
            position_function_z=self.fnz,
            closed_loop=self.closed_loop,
            inverted_lightness=self.inverted_lightness,
        )


def parse_bool(val: str | None) -> bool:
    return (val or "").strip().lower() in {"1", "true", "yes", "on"}


def parse_function(val: str | None, default: PositionFunction = DEFAULT_POSITION_FUNCTION) -> PositionFunction:
    if not val:
        return default
    try:
        return get_position_function(val)
    except UnknownFunction:
        log.warning("unknown position function %r, using %s", val, default.value)
        return default


def model_or_default(val: str | None) -> str:
    m = (val or DEFAULT_MODEL).strip().lower()
    if m in HUE_MODELS:
        return m
    log.warning("unknown hue model %r, using %s", val, DEFAULT_MODEL)
    return DEFAULT_MODEL


def parse_anchors(raw: str | None) -> list[HSL]:
    if not raw:
        raise ValueError("anchors are required")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"anchors must be a JSON list: {exc}") from None
    if not isinstance(data, list):
        raise ValueError("anchors must be a JSON list of [h, s, l]")
    out: list[HSL] = []
    for item in data:
        if not isinstance(item, list) or len(item) != 3:
            raise ValueError(f"bad anchor {item!r}: expected [h, s, l]")
        try:
            out.append(normalize_color([float(v) for v in item]))
        except (TypeError, ValueError):
            raise ValueError(f"bad anchor {item!r}: values must be numbers") from None
    return out


def decode_state(params: Mapping[str, str]) -> PaletteState:
    try:
        steps = int(params.get("steps", DEFAULT_NUM_POINTS))
    except (TypeError, ValueError):
        raise ValueError("steps must be an integer") from None
    return PaletteState(
        anchors=parse_anchors(params.get("anchors")),
        steps=steps,
        inverted_lightness=parse_bool(params.get("invertedLightness")),
        closed_loop=parse_bool(params.get("closedLoop")),
        fnx=parse_function(params.get("fnx")),
        fny=parse_function(params.get("fny")),
        fnz=parse_function(params.get("fnz")),
        model=model_or_default(params.get("model")),
    )


def encode_state(palette: Palette, model: str = DEFAULT_MODEL) -> str:
    params = {
        "anchors": json.dumps([list(c) for c in palette.anchor_colors], separators=(",", ":")),
        "steps": palette.num_points,
        "invertedLightness": "true" if palette.inverted_lightness else "false",
        "closedLoop": "true" if palette.closed_loop else "false",
        "fnx": palette.position_function_x.value,
        "fny": palette.position_function_y.value,
        "fnz": palette.position_function_z.value,
        "model": model,
    }
    return urlencode(params)
