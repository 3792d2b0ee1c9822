"""RGB primaries as CIE xy chromaticity coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .channel import DEFAULT_FORMAT, ScalarFormat
from .xyz import Xyz


class InvalidParameter(ValueError):
    """Raised when a constructor argument is outside its valid domain."""
    pass


def _validate_finite(name: str, value: float) -> None:
    """Raise InvalidParameter if value is NaN or infinite."""
    if not math.isfinite(value):
        raise InvalidParameter(f"{name} must be finite (got {value})")


@dataclass(frozen=True)
class RgbPrimary:
    """One display primary at chromaticity (x, y).

    ``y`` must be nonzero because the primary's tristimulus direction is
    (x/y, 1, (1 - x - y)/y).
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        _validate_finite("x", self.x)
        _validate_finite("y", self.y)
        if self.y == 0:
            raise InvalidParameter(f"Primary chromaticity y must be nonzero (got x={self.x}, y={self.y})")
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def to_tuple(self) -> Tuple[float, float]:
        return self.x, self.y

    def direction(self) -> Tuple[float, float, float]:
        """Unnormalized tristimulus direction (x/y, 1, (1 - x - y)/y)."""
        return self.x / self.y, 1.0, (1.0 - self.x - self.y) / self.y

    def to_xyz(self, luminance: float = 1.0, fmt: ScalarFormat = DEFAULT_FORMAT) -> Xyz:
        return Xyz.from_chromaticity(self.x, self.y, luminance, fmt=fmt)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RgbPrimary":
        return cls(float(data["x"]), float(data["y"]))


__all__ = ["RgbPrimary", "InvalidParameter"]
