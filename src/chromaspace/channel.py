"""Channel types: one scalar component of a color.

Three orthogonal kinds:
    PosNormalBoundedChannel : conventionally in [0, 1] (or [0, max] for an
                              integer format such as uint8)
    FreeChannel             : unbounded magnitude (XYZ, luminance, ...)
    AngularChannel          : a value on a circle (hue), see ``angle``

Scalar formats are numpy dtypes. Floating formats (float32, float64) carry
the value as is; integer formats are fixed-point encodings of the same
quantity. Casting between formats rounds to nearest and saturates at the
target format's bounds. It is not required to round-trip.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Type, TypeVar, Union

import numpy as np

from .angle import Angle, Deg

DEFAULT_FORMAT = np.dtype(np.float64)

ScalarFormat = Union[np.dtype, type, str]
C = TypeVar("C", bound="ColorChannel")


def as_format(fmt: ScalarFormat) -> np.dtype:
    """Validate and normalize a scalar format to a numpy dtype."""
    dtype = np.dtype(fmt)
    if not (np.issubdtype(dtype, np.floating) or np.issubdtype(dtype, np.integer)):
        raise TypeError(f"Channel format must be a float or integer dtype (got {dtype})")
    return dtype


def is_float_format(fmt: np.dtype) -> bool:
    return bool(np.issubdtype(fmt, np.floating))


def _format_bounds(fmt: np.dtype) -> tuple[float, float]:
    """Representable (min, max) of a format."""
    if is_float_format(fmt):
        info = np.finfo(fmt)
    else:
        info = np.iinfo(fmt)
    return float(info.min), float(info.max)


def _store(value: float, fmt: np.dtype) -> Any:
    """Round-to-nearest and saturate ``value`` into ``fmt``."""
    lo, hi = _format_bounds(fmt)
    if math.isnan(value):
        if is_float_format(fmt):
            return fmt.type(value)
        raise ValueError("Cannot store NaN in an integer channel format")
    value = min(max(value, lo), hi)
    if not is_float_format(fmt):
        value = float(np.rint(value))
    return fmt.type(value)


class ColorChannel(ABC):
    """Common interface for every channel kind."""

    fmt: np.dtype

    @classmethod
    def new(cls: Type[C], value: Any, fmt: ScalarFormat = DEFAULT_FORMAT) -> C:
        return cls(value, as_format(fmt))  # type: ignore[call-arg]

    @abstractmethod
    def scalar(self) -> float:
        """The channel value as a plain float."""
        raise NotImplementedError

    @abstractmethod
    def lerp(self: C, other: C, pos: float) -> C:
        raise NotImplementedError

    @abstractmethod
    def invert(self: C) -> C:
        raise NotImplementedError

    @abstractmethod
    def normalize(self: C) -> C:
        raise NotImplementedError

    @abstractmethod
    def is_normalized(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def cast(self: C, fmt: ScalarFormat) -> C:
        raise NotImplementedError

    def approx_eq(self, other: "ColorChannel", abs_tol: float = 1e-9) -> bool:
        return type(self) is type(other) and abs(self.scalar() - other.scalar()) <= abs_tol


@dataclass(frozen=True)
class PosNormalBoundedChannel(ColorChannel):
    """A channel normalized to [0, 1].

    With an integer format the canonical range becomes [0, iinfo.max], so a
    uint8 channel holding 255 represents the same quantity as 1.0.
    """

    value: Any
    fmt: np.dtype = field(default=DEFAULT_FORMAT)

    def __post_init__(self) -> None:
        fmt = as_format(self.fmt)
        object.__setattr__(self, "fmt", fmt)
        object.__setattr__(self, "value", _store(float(self.value), fmt))

    @staticmethod
    def _max_for(fmt: np.dtype) -> float:
        return 1.0 if is_float_format(fmt) else float(np.iinfo(fmt).max)

    def min_bound(self) -> float:
        return 0.0

    def max_bound(self) -> float:
        return self._max_for(self.fmt)

    def scalar(self) -> float:
        return float(self.value)

    def unit_value(self) -> float:
        """Value expressed on [0, 1] regardless of format."""
        return float(self.value) / self.max_bound()

    def lerp(self, other: "PosNormalBoundedChannel", pos: float) -> "PosNormalBoundedChannel":
        other = other.cast(self.fmt)
        a, b = float(self.value), float(other.value)
        return PosNormalBoundedChannel(a + (b - a) * pos, self.fmt)

    def invert(self) -> "PosNormalBoundedChannel":
        return PosNormalBoundedChannel(self.max_bound() - float(self.value), self.fmt)

    def normalize(self) -> "PosNormalBoundedChannel":
        clamped = min(max(float(self.value), 0.0), self.max_bound())
        return PosNormalBoundedChannel(clamped, self.fmt)

    def is_normalized(self) -> bool:
        return 0.0 <= float(self.value) <= self.max_bound()

    def cast(self, fmt: ScalarFormat) -> "PosNormalBoundedChannel":
        """Convert to another format, rescaling integer ranges.

        Float to integer clamps into [0, 1] first, so 1.2 becomes 255 for
        uint8 and -0.1 becomes 0.
        """
        target = as_format(fmt)
        if target == self.fmt:
            return self
        unit = self.unit_value()
        if is_float_format(target):
            return PosNormalBoundedChannel(unit, target)
        unit = min(max(unit, 0.0), 1.0)
        return PosNormalBoundedChannel(unit * self._max_for(target), target)

    def __float__(self) -> float:
        return float(self.value)


@dataclass(frozen=True)
class FreeChannel(ColorChannel):
    """An unbounded channel. Always considered normalized."""

    value: Any
    fmt: np.dtype = field(default=DEFAULT_FORMAT)

    def __post_init__(self) -> None:
        fmt = as_format(self.fmt)
        object.__setattr__(self, "fmt", fmt)
        object.__setattr__(self, "value", _store(float(self.value), fmt))

    def min_bound(self) -> float:
        return _format_bounds(self.fmt)[0]

    def max_bound(self) -> float:
        return _format_bounds(self.fmt)[1]

    def scalar(self) -> float:
        return float(self.value)

    def lerp(self, other: "FreeChannel", pos: float) -> "FreeChannel":
        a, b = float(self.value), float(other.value)
        return FreeChannel(a + (b - a) * pos, self.fmt)

    def invert(self) -> "FreeChannel":
        return FreeChannel(-float(self.value), self.fmt)

    def normalize(self) -> "FreeChannel":
        return self

    def is_normalized(self) -> bool:
        return True

    def cast(self, fmt: ScalarFormat) -> "FreeChannel":
        """Convert precision; integer targets clamp to [iinfo.min, iinfo.max]."""
        target = as_format(fmt)
        if target == self.fmt:
            return self
        return FreeChannel(float(self.value), target)

    def __float__(self) -> float:
        return float(self.value)


@dataclass(frozen=True)
class AngularChannel(ColorChannel):
    """A channel holding an ``Angle``; every operation delegates to it.

    Angles have no fixed-point form: an integer format falls back to float64.
    """

    value: Angle
    fmt: np.dtype = field(default=DEFAULT_FORMAT)

    def __post_init__(self) -> None:
        fmt = as_format(self.fmt)
        if not is_float_format(fmt):
            fmt = DEFAULT_FORMAT
        angle = self.value
        if not isinstance(angle, Angle):
            angle = Deg(float(angle))
        object.__setattr__(self, "fmt", fmt)
        object.__setattr__(self, "value", type(angle)(float(fmt.type(angle.value))))

    def min_bound(self) -> float:
        return 0.0

    def max_bound(self) -> float:
        return self.value.period()

    def scalar(self) -> float:
        return float(self.value.value)

    def lerp(self, other: "AngularChannel", pos: float) -> "AngularChannel":
        return AngularChannel(self.value.lerp(other.value, pos), self.fmt)

    def invert(self) -> "AngularChannel":
        return AngularChannel(self.value.invert(), self.fmt)

    def normalize(self) -> "AngularChannel":
        return AngularChannel(self.value.normalize(), self.fmt)

    def is_normalized(self) -> bool:
        return self.value.is_normalized()

    def cast(self, fmt: ScalarFormat) -> "AngularChannel":
        return AngularChannel(self.value, as_format(fmt))

    def approx_eq(self, other: ColorChannel, abs_tol: float = 1e-9) -> bool:
        if not isinstance(other, AngularChannel):
            return False
        return self.value.approx_eq(other.value, abs_tol=abs_tol)


__all__ = [
    "DEFAULT_FORMAT",
    "as_format",
    "is_float_format",
    "ColorChannel",
    "PosNormalBoundedChannel",
    "FreeChannel",
    "AngularChannel",
]
