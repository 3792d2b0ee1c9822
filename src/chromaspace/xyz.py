"""CIE 1931 XYZ tristimulus color."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .channel import DEFAULT_FORMAT, FreeChannel, ScalarFormat, as_format
from .color import Bounded, Color3, Flatten, FromTuple, HomogeneousColor, Lerp


@dataclass(frozen=True)
class Xyz(FromTuple, Flatten, HomogeneousColor, Lerp, Bounded, Color3):
    """Device-independent tristimulus value (x, y, z), all free channels."""

    x: FreeChannel
    y: FreeChannel
    z: FreeChannel

    CHANNEL_KINDS = (FreeChannel, FreeChannel, FreeChannel)

    @classmethod
    def from_channels(cls, x: float, y: float, z: float, fmt: ScalarFormat = DEFAULT_FORMAT) -> "Xyz":
        return cls.from_tuple((x, y, z), fmt=fmt)

    @classmethod
    def from_chromaticity(
        cls, x: float, y: float, luminance: float = 1.0, fmt: ScalarFormat = DEFAULT_FORMAT
    ) -> "Xyz":
        """XYZ of chromaticity (x, y) scaled to luminance Y.

        X = x·Y/y,  Z = (1 - x - y)·Y/y
        """
        if y == 0:
            raise ValueError("Chromaticity y must be nonzero")
        scale = luminance / y
        return cls.from_tuple((x * scale, luminance, (1.0 - x - y) * scale), fmt=as_format(fmt))

    def chromaticity(self) -> Tuple[float, float]:
        """Return (x, y) = (X, Y) / (X + Y + Z)."""
        X, Y, Z = (float(v) for v in self.to_tuple())
        total = X + Y + Z
        if total == 0:
            raise ValueError("Chromaticity undefined for XYZ = (0, 0, 0)")
        return X / total, Y / total

    def luminance(self) -> float:
        return float(self.y.value)


__all__ = ["Xyz"]
