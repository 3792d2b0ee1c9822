"""Transfer-function encodings and the Linear / Encoded color tags.

A color value is in exactly one of two states:

    LinearColor(color)              channel values are linear light
    EncodedColor(color, encoding)   channel values went through a curve

They are distinct wrapper types, so code that needs linear light (the XYZ
transform) can refuse an undecoded value at the boundary:

    EncodedColor --decode()--> LinearColor --encode(enc)--> EncodedColor

Only channels the color declares in ``ENCODED_CHANNELS`` go through the
curve; angular hue and alpha are exempt.

Encodings:
    LinearEncoding  identity
    GammaEncoding   v ↦ sign(v)·|v|^(1/γ), inverse v ↦ sign(v)·|v|^γ
    SrgbEncoding    IEC 61966-2-1 piecewise curve, odd-extended below 0
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Generic, Tuple, TypeVar

from .channel import ColorChannel, FreeChannel, PosNormalBoundedChannel
from .color import Color


class ColorEncoding(ABC):
    """A transfer function: ``encode_channel`` is linear → encoded."""

    name: ClassVar[str] = "abstract"

    @abstractmethod
    def encode_channel(self, value: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def decode_channel(self, value: float) -> float:
        raise NotImplementedError

    def is_linear(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name}


@dataclass(frozen=True)
class LinearEncoding(ColorEncoding):
    """The identity transfer function."""

    name: ClassVar[str] = "linear"

    def encode_channel(self, value: float) -> float:
        return value

    def decode_channel(self, value: float) -> float:
        return value

    def is_linear(self) -> bool:
        return True


@dataclass(frozen=True)
class GammaEncoding(ColorEncoding):
    """Pure power-law curve with exponent ``gamma`` (> 0).

    Sign is preserved so out-of-gamut negative values survive a round trip.
    """

    gamma: float = 2.2

    name: ClassVar[str] = "gamma"

    def __post_init__(self) -> None:
        if not (math.isfinite(self.gamma) and self.gamma > 0):
            raise ValueError(f"gamma must be finite and > 0 (got {self.gamma})")

    def encode_channel(self, value: float) -> float:
        return math.copysign(abs(value) ** (1.0 / self.gamma), value)

    def decode_channel(self, value: float) -> float:
        return math.copysign(abs(value) ** self.gamma, value)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "gamma": self.gamma}


@dataclass(frozen=True)
class SrgbEncoding(ColorEncoding):
    """The sRGB transfer function.

    encode:  12.92·v                   for v ≤ 0.0031308
             1.055·v^(1/2.4) - 0.055   otherwise
    decode:  v / 12.92                 for v ≤ 0.04045
             ((v + 0.055)/1.055)^2.4   otherwise
    """

    name: ClassVar[str] = "srgb"

    _LINEAR_CUTOFF: ClassVar[float] = 0.0031308
    _ENCODED_CUTOFF: ClassVar[float] = 0.04045

    def encode_channel(self, value: float) -> float:
        v = abs(value)
        if v <= self._LINEAR_CUTOFF:
            out = 12.92 * v
        else:
            out = 1.055 * v ** (1.0 / 2.4) - 0.055
        return math.copysign(out, value)

    def decode_channel(self, value: float) -> float:
        v = abs(value)
        if v <= self._ENCODED_CUTOFF:
            out = v / 12.92
        else:
            out = ((v + 0.055) / 1.055) ** 2.4
        return math.copysign(out, value)


_ENCODINGS: Dict[str, Callable[..., ColorEncoding]] = {
    LinearEncoding.name: LinearEncoding,
    GammaEncoding.name: GammaEncoding,
    SrgbEncoding.name: SrgbEncoding,
}


def encoding_from_dict(data: Dict[str, Any]) -> ColorEncoding:
    """Rebuild an encoding from ``ColorEncoding.to_dict`` output."""
    payload = dict(data)
    try:
        factory = _ENCODINGS[payload.pop("name")]
    except KeyError as exc:
        raise ValueError(f"Unknown or missing encoding name in {data!r}") from exc
    return factory(**{k: float(v) for k, v in payload.items()})


def _apply_curve(channel: ColorChannel, curve: Callable[[float], float]) -> ColorChannel:
    """Run one channel through a curve, on its [0, 1] scale if bounded."""
    if isinstance(channel, PosNormalBoundedChannel):
        top = channel.max_bound()
        return PosNormalBoundedChannel(curve(channel.unit_value()) * top, channel.fmt)
    if isinstance(channel, FreeChannel):
        return FreeChannel(curve(channel.scalar()), channel.fmt)
    raise TypeError(f"{type(channel).__name__} does not take a transfer function")


class EncodableColor(Color):
    """Capability: some channels carry a transfer function."""

    ENCODED_CHANNELS: ClassVar[Tuple[int, ...]] = ()

    @classmethod
    def encoded_channel_indices(cls) -> Tuple[int, ...]:
        return cls.ENCODED_CHANNELS

    def _map_encoded(self, curve: Callable[[float], float]) -> "EncodableColor":
        indices = set(self.encoded_channel_indices())
        return self.with_channels(
            _apply_curve(ch, curve) if i in indices else ch for i, ch in enumerate(self.channels())
        )

    def encode_channels(self, encoding: ColorEncoding) -> "EncodableColor":
        return self._map_encoded(encoding.encode_channel)

    def decode_channels(self, encoding: ColorEncoding) -> "EncodableColor":
        return self._map_encoded(encoding.decode_channel)


T = TypeVar("T", bound=EncodableColor)


def _require_encodable(color: Any) -> None:
    if not isinstance(color, EncodableColor):
        raise TypeError(f"{type(color).__name__} is not an encodable color")


@dataclass(frozen=True)
class LinearColor(Generic[T]):
    """A color whose encoded channels hold linear light."""

    color: T

    def __post_init__(self) -> None:
        _require_encodable(self.color)

    @property
    def encoding(self) -> LinearEncoding:
        return LinearEncoding()

    def encode(self, encoding: ColorEncoding) -> "EncodedColor[T] | LinearColor[T]":
        """Apply ``encoding``; a linear encoding returns ``self``."""
        if encoding.is_linear():
            return self
        return EncodedColor(self.color.encode_channels(encoding), encoding)  # type: ignore[arg-type]

    def decode(self) -> "LinearColor[T]":
        return self

    def to_tuple(self) -> Tuple[Any, ...]:
        return self.color.to_tuple()

    def approx_eq(self, other: Any, abs_tol: float = 1e-9) -> bool:
        return isinstance(other, LinearColor) and self.color.approx_eq(other.color, abs_tol=abs_tol)


@dataclass(frozen=True)
class EncodedColor(Generic[T]):
    """A color whose encoded channels went through ``encoding``."""

    color: T
    encoding: ColorEncoding

    def __post_init__(self) -> None:
        _require_encodable(self.color)
        if not isinstance(self.encoding, ColorEncoding):
            raise TypeError(f"Expected a ColorEncoding, got {type(self.encoding).__name__}")
        if self.encoding.is_linear():
            raise TypeError("Use LinearColor for linearly encoded values")

    def decode(self) -> LinearColor[T]:
        return LinearColor(self.color.decode_channels(self.encoding))  # type: ignore[arg-type]

    def reencode(self, encoding: ColorEncoding) -> "EncodedColor[T] | LinearColor[T]":
        """Same color under ``encoding``; no-op when the encoding already matches."""
        if encoding == self.encoding:
            return self
        return self.decode().encode(encoding)

    def to_tuple(self) -> Tuple[Any, ...]:
        return self.color.to_tuple()

    def approx_eq(self, other: Any, abs_tol: float = 1e-9) -> bool:
        return (
            isinstance(other, EncodedColor)
            and other.encoding == self.encoding
            and self.color.approx_eq(other.color, abs_tol=abs_tol)
        )


def with_encoding(color: T, encoding: ColorEncoding) -> "EncodedColor[T] | LinearColor[T]":
    """Tag a bare color with ``encoding``, picking the matching wrapper type."""
    if encoding.is_linear():
        return LinearColor(color)
    return EncodedColor(color, encoding)


def encoding_roundtrip_error(color: EncodableColor, encoding: ColorEncoding) -> float:
    """Max channel error of decode(encode(c)) - c, for diagnostics."""
    back = color.encode_channels(encoding).decode_channels(encoding)
    return max(abs(a.scalar() - b.scalar()) for a, b in zip(color.channels(), back.channels()))


__all__ = [
    "ColorEncoding",
    "LinearEncoding",
    "GammaEncoding",
    "SrgbEncoding",
    "encoding_from_dict",
    "EncodableColor",
    "LinearColor",
    "EncodedColor",
    "with_encoding",
    "encoding_roundtrip_error",
]
