from __future__ import annotations

import math
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping

import numpy as np

from .errors import UnknownFunction

Scalar = float | np.ndarray
Shape = Callable[[Scalar], Scalar]

_EXP_NORM = 2.0**10 - 1.0


class PositionFunction(str, Enum):
    """Named re-parameterisation of segment progress along one axis.

    Every shape maps 0 → 0 and 1 → 1 exactly, so segments always start and
    end on their anchors. Members are callable on floats and numpy arrays.
    """

    LINEAR = "linear"
    QUADRATIC = "quadratic"
    CUBIC = "cubic"
    QUARTIC = "quartic"
    EXPONENTIAL = "exponential"
    SINUSOIDAL = "sinusoidal"
    ASINUSOIDAL = "asinusoidal"
    ARC = "arc"
    SMOOTHSTEP = "smoothstep"

    def __call__(self, t: Scalar) -> Scalar:
        return _SHAPES[self](t)

    def __str__(self) -> str:
        return self.value


_SHAPES: dict[PositionFunction, Shape] = {
    PositionFunction.LINEAR: lambda t: t,
    PositionFunction.QUADRATIC: lambda t: t**2,
    PositionFunction.CUBIC: lambda t: t**3,
    PositionFunction.QUARTIC: lambda t: t**4,
    PositionFunction.EXPONENTIAL: lambda t: (np.power(2.0, 10.0 * t) - 1.0) / _EXP_NORM,
    PositionFunction.SINUSOIDAL: lambda t: np.sin(t * (math.pi / 2)),
    PositionFunction.ASINUSOIDAL: lambda t: np.arcsin(t) / (math.pi / 2),
    PositionFunction.ARC: lambda t: 1.0 - np.sqrt(1.0 - t**2),
    PositionFunction.SMOOTHSTEP: lambda t: t * t * (3.0 - 2.0 * t),
}

REGISTRY: Mapping[str, PositionFunction] = MappingProxyType(
    {fn.value: fn for fn in PositionFunction}
)


def _canon_name(name: str) -> str:
    # accept "sinusoidalPosition" / "smoothStep" spellings from saved URLs
    key = name.strip()
    if key.endswith("Position"):
        key = key[: -len("Position")]
    return key.lower()


def get_position_function(name: str | PositionFunction) -> PositionFunction:
    if isinstance(name, PositionFunction):
        return name
    if not isinstance(name, str):
        raise UnknownFunction(name)
    try:
        return REGISTRY[_canon_name(name)]
    except KeyError:
        raise UnknownFunction(name) from None


def available_functions() -> tuple[str, ...]:
    return tuple(sorted(REGISTRY))
