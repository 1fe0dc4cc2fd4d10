"""Error types raised by the palette engine.

All of them are recoverable and local to the call that raised them.
"""

from __future__ import annotations


class PaletteError(Exception):
    """Base class for every engine error."""


class UnknownFunction(PaletteError, LookupError):
    def __init__(self, name: object) -> None:
        super().__init__(f"unknown position function {name!r}")
        self.name = name


class AnchorNotFound(PaletteError, LookupError):
    pass


class MinimumAnchors(PaletteError, ValueError):
    def __init__(self, minimum: int = 2) -> None:
        super().__init__(f"a palette needs at least {minimum} anchors")
        self.minimum = minimum


class InvalidSampleCount(PaletteError, ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(f"num_points must be an integer ≥ 1, got {value!r}")
        self.value = value
