"""Device-dependent RGB and RGBA colors."""

from __future__ import annotations

from dataclasses import dataclass

from .alpha import Alpha
from .channel import DEFAULT_FORMAT, PosNormalBoundedChannel, ScalarFormat
from .color import (
    Bounded,
    Color3,
    Color4,
    DeviceDependentColor,
    Flatten,
    FromTuple,
    HomogeneousColor,
    Invert,
    Lerp,
)
from .encoding import EncodableColor


@dataclass(frozen=True)
class Rgb(
    FromTuple,
    Flatten,
    HomogeneousColor,
    Lerp,
    Invert,
    Bounded,
    EncodableColor,
    DeviceDependentColor,
    Color3,
):
    """Red, green, blue; each a normalized channel. Slice order is (r, g, b)."""

    red: PosNormalBoundedChannel
    green: PosNormalBoundedChannel
    blue: PosNormalBoundedChannel

    CHANNEL_KINDS = (PosNormalBoundedChannel, PosNormalBoundedChannel, PosNormalBoundedChannel)
    ENCODED_CHANNELS = (0, 1, 2)

    @classmethod
    def from_channels(
        cls, red: float, green: float, blue: float, fmt: ScalarFormat = DEFAULT_FORMAT
    ) -> "Rgb":
        return cls.from_tuple((red, green, blue), fmt=fmt)

    def to_hsv(self):
        from .hsv import Hsv

        return Hsv.from_rgb(self)


class Rgba(
    Alpha,
    FromTuple,
    Flatten,
    HomogeneousColor,
    Lerp,
    Invert,
    Bounded,
    EncodableColor,
    DeviceDependentColor,
    Color4,
):
    """``Rgb`` plus alpha. Slice order is (r, g, b, a)."""

    INNER = Rgb

    @classmethod
    def from_channels(
        cls, red: float, green: float, blue: float, alpha: float, fmt: ScalarFormat = DEFAULT_FORMAT
    ) -> "Rgba":
        return cls.from_tuple((red, green, blue, alpha), fmt=fmt)


__all__ = ["Rgb", "Rgba"]
