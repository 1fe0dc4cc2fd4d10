from __future__ import annotations

import re
from typing import Any, Callable, Mapping, Sequence

from coloraide import Color as CAColor
from coloraide.spaces.din99o import DIN99o
from coloraide.spaces.lch99o import LCh99o
from coloraide.spaces.okhsl import Okhsl


class C(CAColor):
    pass


C.register([Okhsl(), DIN99o(), LCh99o()])

Coords = Callable[[float, float, float], list[float]]

# hue model → (ColorAide space, (h, s, l) → native coords)
# polar models scale s/l onto chroma/lightness ranges roughly matching sRGB
MODELS: Mapping[str, tuple[str, Coords]] = {
    "okhsl": ("okhsl", lambda h, s, l: [h, s, l]),
    "hsl": ("hsl", lambda h, s, l: [h, s, l]),
    "jch": ("jzczhz", lambda h, s, l: [l * 0.222, s * 0.190, h]),
    "oklch": ("oklch", lambda h, s, l: [l * 0.999, s * 0.322, h]),
    "lch": ("lch", lambda h, s, l: [l * 100.0, s * 51.484, h]),
    "dlch": ("lch99o", lambda h, s, l: [l * 100.0, s * 51.484, h]),
}
HUE_MODELS: tuple[str, ...] = tuple(MODELS)
DEFAULT_MODEL = "okhsl"

FIT_HEX: Mapping[str, Any] = {"method": "raytrace"}  # consistent gamut-fit for hex output

SVG_RECT = 100


def check_model(val: str | None) -> str:
    m = (val or DEFAULT_MODEL).strip().lower()
    if m not in MODELS:
        raise ValueError(f"unknown hue model '{val}'")
    return m


def to_color(hsl: Sequence[float], model: str = DEFAULT_MODEL) -> C:
    h, s, l = (float(v) for v in hsl)
    space, coords = MODELS[check_model(model)]
    return C(space, coords(h, s, l))


def to_hex(hsl: Sequence[float], model: str = DEFAULT_MODEL) -> str:
    return to_color(hsl, model).convert("srgb").to_string(hex=True, fit=FIT_HEX)


def to_css(hsl: Sequence[float], model: str = DEFAULT_MODEL) -> str:
    return to_color(hsl, model).convert("srgb").to_string(fit=FIT_HEX)


def to_oklab(hsl: Sequence[float], model: str = DEFAULT_MODEL) -> tuple[float, float, float]:
    l, a, b = to_color(hsl, model).convert("oklab").coords()
    return float(l), float(a), float(b)


def in_gamut(hsl: Sequence[float], model: str = DEFAULT_MODEL) -> bool:
    return to_color(hsl, model).convert("srgb").in_gamut()


def export_value(hsl: Sequence[float], model: str = DEFAULT_MODEL) -> str:
    """Hex when the colour fits sRGB, otherwise the unclipped ``oklab(l a b)``."""
    if in_gamut(hsl, model):
        return to_hex(hsl, model)
    l, a, b = to_oklab(hsl, model)
    return f"oklab({l:.2f} {a:.2f} {b:.2f})"


def camel_case(title: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]+(.)", lambda m: m.group(1).upper(), title.lower())


def to_css_variables(hex_colors: Sequence[str], title: str = "Palette") -> str:
    """``:root`` block with one custom property per colour: -50, -100, -200, …"""
    name = camel_case(title)
    lines = [
        f"  --{name}-{50 if i == 0 else i * 100}: {hx};" for i, hx in enumerate(hex_colors)
    ]
    return ":root {\n" + "\n".join(lines) + "\n}"


def to_svg(hex_colors: Sequence[str], size: int = SVG_RECT) -> str:
    """A row of ``size``×``size`` swatches."""
    width = len(hex_colors) * size
    rects = "".join(
        f'<rect x="{i * size}" y="0" width="{size}" height="{size}" fill="{hx}" />'
        for i, hx in enumerate(hex_colors)
    )
    return (
        f'<svg width="{width}" height="{size}" viewBox="0 0 {width} {size}" '
        f'xmlns="http://www.w3.org/2000/svg">{rects}</svg>'
    )


def palette_hex(palette, model: str = DEFAULT_MODEL) -> list[str]:
    """Hex strings for every sampled colour of ``palette``."""
    return [to_hex(c, model) for c in palette.colors()]
