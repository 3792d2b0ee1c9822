"""Color capability interfaces.

A concrete color is a frozen dataclass whose fields are channels. Each
capability below is an independent mix-in; a color model inherits exactly
the ones that apply to it, so for instance "has an angular channel" and
"flattens to a slice" never need a common base beyond ``Color``.

    Color                base: fixed arity, to_tuple, channel access
    FromTuple            from_tuple(to_tuple(c)) == c
    Flatten              contiguous array of one scalar format
    HomogeneousColor     broadcast / clamp over uniform channels
    PolarColor           one angular channel plus cartesian channels
    DeviceDependentColor needs a color space to be meaningful
    Color3, Color4       arity markers
    Lerp, Invert, Bounded  channel-wise operations
"""

from __future__ import annotations

from abc import ABC
from typing import Any, ClassVar, Iterable, Optional, Sequence, Tuple, Type, TypeVar

import numpy as np

from .channel import DEFAULT_FORMAT, AngularChannel, ColorChannel, ScalarFormat, as_format

C = TypeVar("C", bound="Color")


def _infer_format(values: Iterable[Any]) -> np.dtype:
    """Pick the scalar format from the first numpy-typed value, else float64."""
    for v in values:
        if isinstance(v, np.generic):
            return as_format(v.dtype)
    return DEFAULT_FORMAT


class Color(ABC):
    """Base of every color: an ordered, fixed-arity tuple of channels."""

    CHANNEL_KINDS: ClassVar[Tuple[Type[ColorChannel], ...]] = ()

    @classmethod
    def channel_kinds(cls) -> Tuple[Type[ColorChannel], ...]:
        return cls.CHANNEL_KINDS

    @classmethod
    def num_channels(cls) -> int:
        return len(cls.channel_kinds())

    @classmethod
    def from_channel_objects(cls: Type[C], channels: Sequence[ColorChannel]) -> C:
        """Build from already constructed channel objects, in channel order."""
        return cls(*channels)  # type: ignore[call-arg]

    def channels(self) -> Tuple[ColorChannel, ...]:
        return tuple(getattr(self, name) for name in self.__dataclass_fields__)  # type: ignore[attr-defined]

    def with_channels(self: C, channels: Iterable[ColorChannel]) -> C:
        return type(self).from_channel_objects(tuple(channels))

    def to_tuple(self) -> Tuple[Any, ...]:
        """Channel values in channel order (scalars, or ``Angle`` for hue)."""
        return tuple(ch.value for ch in self.channels())

    @property
    def fmt(self) -> np.dtype:
        """Scalar format of the first channel."""
        return self.channels()[0].fmt

    def cast(self: C, fmt: ScalarFormat) -> C:
        """Cast every channel to ``fmt`` (rounds and saturates)."""
        return self.with_channels(ch.cast(fmt) for ch in self.channels())

    def approx_eq(self, other: "Color", abs_tol: float = 1e-9) -> bool:
        if type(self) is not type(other):
            return False
        return all(a.approx_eq(b, abs_tol=abs_tol) for a, b in zip(self.channels(), other.channels()))


class FromTuple(Color):
    """A color constructible from a tuple of channel values."""

    @classmethod
    def from_tuple(cls: Type[C], values: Sequence[Any], fmt: Optional[ScalarFormat] = None) -> C:
        """Construct from channel values in channel order.

        Parameters
        ----------
        values : sequence
            One value per channel. Angular channels accept an ``Angle`` or a
            float in degrees.
        fmt : dtype, optional
            Scalar format. Inferred from numpy-typed values when omitted, so
            ``from_tuple(c.to_tuple())`` keeps the format of ``c``.
        """
        values = tuple(values)
        kinds = cls.channel_kinds()
        if len(values) != len(kinds):
            raise ValueError(
                f"{cls.__name__} has {len(kinds)} channels, got {len(values)} values"
            )
        dtype = as_format(fmt) if fmt is not None else _infer_format(values)
        return cls.from_channel_objects(tuple(kind(v, dtype) for kind, v in zip(kinds, values)))


class Flatten(Color):
    """A color whose channels share one scalar format and flatten to an array.

    ``as_slice`` lists channels in channel order (e.g. red, green, blue).
    """

    def as_slice(self) -> np.ndarray:
        values = [ch.value for ch in self.channels()]
        return np.array(values, dtype=self.fmt)

    @classmethod
    def from_slice(cls: Type[C], values: Sequence[Any]) -> C:
        """Inverse of ``as_slice``. A numpy array keeps its dtype as the format."""
        arr = np.asarray(values)
        if arr.ndim != 1:
            raise ValueError(f"Expected a 1-D slice, got shape {arr.shape}")
        fmt = arr.dtype if isinstance(values, np.ndarray) else None
        return cls.from_tuple(tuple(arr.tolist()), fmt=fmt)  # type: ignore[attr-defined]


class HomogeneousColor(Color):
    """A color with only one kind of channel."""

    @classmethod
    def broadcast(cls: Type[C], value: Any, fmt: ScalarFormat = DEFAULT_FORMAT) -> C:
        """Every channel set to ``value``."""
        kind = cls.channel_kinds()[0]
        return cls.from_channel_objects(tuple(kind(value, as_format(fmt)) for _ in cls.channel_kinds()))

    def clamp(self: C, min_value: float, max_value: float) -> C:
        """Clamp each channel's value into [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError(f"clamp bounds inverted: {min_value} > {max_value}")
        return self.with_channels(
            type(ch)(min(max(ch.scalar(), min_value), max_value), ch.fmt) for ch in self.channels()
        )


class PolarColor(Color):
    """A color with one angular channel and cartesian remaining channels."""

    ANGULAR_INDEX: ClassVar[int] = 0

    def angular_channel(self) -> AngularChannel:
        return self.channels()[self.ANGULAR_INDEX]  # type: ignore[return-value]

    def cartesian_channels(self) -> Tuple[ColorChannel, ...]:
        chs = self.channels()
        return chs[: self.ANGULAR_INDEX] + chs[self.ANGULAR_INDEX + 1 :]


class DeviceDependentColor(Color):
    """Marker: the color only identifies a stimulus once a space is chosen."""


class Color3(Color):
    """Marker: exactly three channels."""


class Color4(Color):
    """Marker: exactly four channels."""


class Lerp(Color):
    """Channel-wise linear interpolation."""

    def lerp(self: C, other: C, pos: float) -> C:
        """``pos=0`` returns ``self``; ``pos=1`` returns ``other``.

        ``pos`` outside [0, 1] extrapolates. Angular channels follow the
        shorter arc.
        """
        if type(self) is not type(other):
            raise TypeError(f"Cannot lerp {type(self).__name__} with {type(other).__name__}")
        return self.with_channels(a.lerp(b, pos) for a, b in zip(self.channels(), other.channels()))


class Invert(Color):
    """Channel-wise inversion."""

    def invert(self: C) -> C:
        return self.with_channels(ch.invert() for ch in self.channels())


class Bounded(Color):
    """Channel-wise normalization into each channel's canonical range."""

    def normalize(self: C) -> C:
        return self.with_channels(ch.normalize() for ch in self.channels())

    def is_normalized(self) -> bool:
        return all(ch.is_normalized() for ch in self.channels())


__all__ = [
    "Color",
    "FromTuple",
    "Flatten",
    "HomogeneousColor",
    "PolarColor",
    "DeviceDependentColor",
    "Color3",
    "Color4",
    "Lerp",
    "Invert",
    "Bounded",
]
