"""HSV and HSVA: a polar view of device-dependent RGB.

Hue is an angular channel (degrees by default); saturation and value are
normalized channels. HSV is a view of RGB values in whatever encoding
state those are in, so it carries no transfer function of its own.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Type

from .alpha import Alpha
from .angle import Angle, Deg
from .channel import DEFAULT_FORMAT, AngularChannel, PosNormalBoundedChannel, ScalarFormat
from .color import (
    Bounded,
    Color3,
    Color4,
    DeviceDependentColor,
    FromTuple,
    Invert,
    Lerp,
    PolarColor,
)
from .rgb import Rgb


def rgb_to_hsv_tuple(r: float, g: float, b: float) -> tuple[float, float, float]:
    """(r, g, b) in [0, 1] → (hue in degrees, saturation, value)."""
    hi = max(r, g, b)
    lo = min(r, g, b)
    delta = hi - lo
    if delta == 0.0:
        hue = 0.0
    elif hi == r:
        hue = 60.0 * math.fmod((g - b) / delta, 6.0)
    elif hi == g:
        hue = 60.0 * ((b - r) / delta + 2.0)
    else:
        hue = 60.0 * ((r - g) / delta + 4.0)
    if hue < 0.0:
        hue += 360.0
    sat = delta / hi if hi > 0.0 else 0.0
    return hue, sat, hi


def hsv_to_rgb_tuple(hue_deg: float, sat: float, val: float) -> tuple[float, float, float]:
    """Inverse of ``rgb_to_hsv_tuple``."""
    chroma = val * sat
    h = math.fmod(hue_deg, 360.0)
    if h < 0.0:
        h += 360.0
    h /= 60.0
    x = chroma * (1.0 - abs(math.fmod(h, 2.0) - 1.0))
    m = val - chroma
    sector = int(h) % 6
    r, g, b = [
        (chroma, x, 0.0),
        (x, chroma, 0.0),
        (0.0, chroma, x),
        (0.0, x, chroma),
        (x, 0.0, chroma),
        (chroma, 0.0, x),
    ][sector]
    return r + m, g + m, b + m


@dataclass(frozen=True)
class Hsv(FromTuple, PolarColor, Lerp, Invert, Bounded, DeviceDependentColor, Color3):
    """Hue, saturation, value."""

    hue: AngularChannel
    saturation: PosNormalBoundedChannel
    value: PosNormalBoundedChannel

    CHANNEL_KINDS = (AngularChannel, PosNormalBoundedChannel, PosNormalBoundedChannel)
    ANGULAR_INDEX = 0

    @classmethod
    def from_channels(
        cls, hue: Angle, saturation: float, value: float, fmt: ScalarFormat = DEFAULT_FORMAT
    ) -> "Hsv":
        return cls.from_tuple((hue, saturation, value), fmt=fmt)

    @classmethod
    def from_rgb(cls, rgb: Rgb, unit: Type[Angle] = Deg) -> "Hsv":
        r, g, b = (ch.unit_value() for ch in rgb.channels())  # type: ignore[attr-defined]
        hue, sat, val = rgb_to_hsv_tuple(r, g, b)
        fmt = rgb.fmt
        return cls(
            AngularChannel(Deg(hue).cast(unit), fmt if fmt.kind == "f" else DEFAULT_FORMAT),
            PosNormalBoundedChannel(sat * PosNormalBoundedChannel._max_for(fmt), fmt),
            PosNormalBoundedChannel(val * PosNormalBoundedChannel._max_for(fmt), fmt),
        )

    def to_rgb(self) -> Rgb:
        hue = self.hue.value.to_deg().value
        r, g, b = hsv_to_rgb_tuple(hue, self.saturation.unit_value(), self.value.unit_value())
        fmt = self.saturation.fmt
        top = self.saturation.max_bound()
        return Rgb.from_tuple((r * top, g * top, b * top), fmt=fmt)


class Hsva(Alpha, FromTuple, PolarColor, Lerp, Invert, Bounded, DeviceDependentColor, Color4):
    """``Hsv`` plus alpha."""

    INNER = Hsv


__all__ = ["Hsv", "Hsva", "rgb_to_hsv_tuple", "hsv_to_rgb_tuple"]
