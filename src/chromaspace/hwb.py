"""HWB (hue, whiteness, blackness) and HWBA."""

from __future__ import annotations

from dataclasses import dataclass

from .alpha import Alpha
from .angle import Angle
from .channel import DEFAULT_FORMAT, AngularChannel, PosNormalBoundedChannel, ScalarFormat
from .color import Bounded, Color3, Color4, DeviceDependentColor, FromTuple, Lerp, PolarColor
from .hsv import Hsv
from .rgb import Rgb


@dataclass(frozen=True)
class Hwb(FromTuple, PolarColor, Lerp, Bounded, DeviceDependentColor, Color3):
    """Hue, whiteness, blackness.

    Related to HSV by  w = (1 - s)·v,  b = 1 - v.  When w + b > 1 the pair is
    scaled down to sum to 1 before converting, which yields a gray.
    """

    hue: AngularChannel
    whiteness: PosNormalBoundedChannel
    blackness: PosNormalBoundedChannel

    CHANNEL_KINDS = (AngularChannel, PosNormalBoundedChannel, PosNormalBoundedChannel)
    ANGULAR_INDEX = 0

    @classmethod
    def from_channels(
        cls, hue: Angle, whiteness: float, blackness: float, fmt: ScalarFormat = DEFAULT_FORMAT
    ) -> "Hwb":
        return cls.from_tuple((hue, whiteness, blackness), fmt=fmt)

    @classmethod
    def from_hsv(cls, hsv: Hsv) -> "Hwb":
        s = hsv.saturation.unit_value()
        v = hsv.value.unit_value()
        fmt = hsv.saturation.fmt
        top = hsv.saturation.max_bound()
        return cls(
            hsv.hue,
            PosNormalBoundedChannel((1.0 - s) * v * top, fmt),
            PosNormalBoundedChannel((1.0 - v) * top, fmt),
        )

    @classmethod
    def from_rgb(cls, rgb: Rgb) -> "Hwb":
        return cls.from_hsv(Hsv.from_rgb(rgb))

    def to_hsv(self) -> Hsv:
        w = self.whiteness.unit_value()
        b = self.blackness.unit_value()
        total = w + b
        if total > 1.0:
            w, b = w / total, b / total
        v = 1.0 - b
        s = 1.0 - w / v if v > 0.0 else 0.0
        fmt = self.whiteness.fmt
        top = self.whiteness.max_bound()
        return Hsv(
            self.hue,
            PosNormalBoundedChannel(s * top, fmt),
            PosNormalBoundedChannel(v * top, fmt),
        )

    def to_rgb(self) -> Rgb:
        return self.to_hsv().to_rgb()


class Hwba(Alpha, FromTuple, PolarColor, Lerp, Bounded, DeviceDependentColor, Color4):
    """``Hwb`` plus alpha."""

    INNER = Hwb


__all__ = ["Hwb", "Hwba"]
