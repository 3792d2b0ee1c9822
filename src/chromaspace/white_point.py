"""Standard illuminant white points (CIE 1931 2° observer, Y = 1)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .channel import DEFAULT_FORMAT, ScalarFormat
from .xyz import Xyz


@dataclass(frozen=True)
class NamedWhitePoint:
    """A named reference white given as XYZ tristimulus values."""

    name: str
    X: float
    Y: float
    Z: float

    def xyz(self, fmt: ScalarFormat = DEFAULT_FORMAT) -> Xyz:
        return Xyz.from_channels(self.X, self.Y, self.Z, fmt=fmt)

    def chromaticity(self) -> Tuple[float, float]:
        total = self.X + self.Y + self.Z
        return self.X / total, self.Y / total


A = NamedWhitePoint("A", 1.09850, 1.00000, 0.35585)
C = NamedWhitePoint("C", 0.98074, 1.00000, 1.18232)
D50 = NamedWhitePoint("D50", 0.96422, 1.00000, 0.82521)
D55 = NamedWhitePoint("D55", 0.95682, 1.00000, 0.92149)
D65 = NamedWhitePoint("D65", 0.95047, 1.00000, 1.08883)
D75 = NamedWhitePoint("D75", 0.94972, 1.00000, 1.22638)
E = NamedWhitePoint("E", 1.00000, 1.00000, 1.00000)

WHITE_POINTS: Dict[str, NamedWhitePoint] = {wp.name: wp for wp in (A, C, D50, D55, D65, D75, E)}


def white_point(name: str) -> NamedWhitePoint:
    """Look up a white point by name (case-insensitive)."""
    try:
        return WHITE_POINTS[name.upper()]
    except KeyError as exc:
        raise ValueError(
            f"Unknown white point {name!r}; expected one of {sorted(WHITE_POINTS)}"
        ) from exc


__all__ = [
    "NamedWhitePoint",
    "A",
    "C",
    "D50",
    "D55",
    "D65",
    "D75",
    "E",
    "WHITE_POINTS",
    "white_point",
]
