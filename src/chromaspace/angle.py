"""Angles on a periodic domain, used by angular (hue) channels.

Three units share one implementation and differ only in their period:
    Deg   : period 360
    Rad   : period 2π
    Turns : period 1

Interpolation takes the shorter arc and returns a normalized angle, except
at position 0 which returns the start angle as given. When the two angles are exactly half a
period apart both arcs are equally short; we then always travel in the
positive (increasing angle) direction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Type, TypeVar

A = TypeVar("A", bound="Angle")


@dataclass(frozen=True)
class Angle:
    """Base class for an angle stored as a single float in some unit."""

    value: float

    PERIOD: ClassVar[float] = 1.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise ValueError(f"Angle value must be finite (got {self.value})")

    @classmethod
    def period(cls) -> float:
        return cls.PERIOD

    @classmethod
    def half_period(cls) -> float:
        return cls.PERIOD / 2.0

    def normalize(self: A) -> A:
        """Reduce into the canonical range [0, period)."""
        reduced = math.fmod(self.value, self.PERIOD)
        if reduced < 0.0:
            reduced += self.PERIOD
        # fmod of a tiny negative number can round back up to the period
        if reduced >= self.PERIOD:
            reduced = 0.0
        return type(self)(reduced)

    def is_normalized(self) -> bool:
        return 0.0 <= self.value < self.PERIOD

    def invert(self: A) -> A:
        """Rotate by half a period."""
        return type(self)(self.value + self.half_period()).normalize()

    def lerp(self: A, other: A, pos: float) -> A:
        """Interpolate along the shorter arc from ``self`` to ``other``.

        Parameters
        ----------
        other : Angle
            Target angle, converted to this angle's unit if necessary.
        pos : float
            Position along the arc; 0 returns ``self``, 1 returns ``other``.
            Values outside [0, 1] extrapolate along the same arc.

        Returns
        -------
        Angle
            Normalized interpolated angle in the unit of ``self``; ``pos=0``
            returns ``self`` unchanged.
        """
        if pos == 0:
            return self
        target = other.cast(type(self))
        start = self.normalize().value
        delta = math.fmod(target.normalize().value - start, self.PERIOD)
        if delta < 0.0:
            delta += self.PERIOD
        # delta is now the positive arc in [0, period); take the other way
        # round only when it is strictly shorter
        if delta > self.half_period():
            delta -= self.PERIOD
        return type(self)(start + delta * pos).normalize()

    def to_turns(self) -> float:
        return self.value / self.PERIOD

    def to_deg(self) -> "Deg":
        return Deg(self.to_turns() * Deg.PERIOD)

    def to_rad(self) -> "Rad":
        return Rad(self.to_turns() * Rad.PERIOD)

    def cast(self, unit: Type[A]) -> A:
        """Express this angle in another unit."""
        if type(self) is unit:
            return self  # type: ignore[return-value]
        return unit(self.to_turns() * unit.PERIOD)

    def sin(self) -> float:
        return math.sin(self.to_turns() * 2.0 * math.pi)

    def cos(self) -> float:
        return math.cos(self.to_turns() * 2.0 * math.pi)

    def approx_eq(self, other: "Angle", abs_tol: float = 1e-9) -> bool:
        """Compare on the circle, so 359.9999999 and 0 compare equal.

        ``abs_tol`` is in this angle's unit.
        """
        other = other.cast(type(self))
        diff = abs(math.fmod(self.value - other.value, self.PERIOD))
        return min(diff, self.PERIOD - diff) <= abs_tol

    def __add__(self: A, other: A) -> A:
        return type(self)(self.value + other.cast(type(self)).value)

    def __sub__(self: A, other: A) -> A:
        return type(self)(self.value - other.cast(type(self)).value)

    def __neg__(self: A) -> A:
        return type(self)(-self.value)

    def __float__(self) -> float:
        return float(self.value)


@dataclass(frozen=True)
class Deg(Angle):
    """Angle in degrees."""

    PERIOD: ClassVar[float] = 360.0


@dataclass(frozen=True)
class Rad(Angle):
    """Angle in radians."""

    PERIOD: ClassVar[float] = 2.0 * math.pi


@dataclass(frozen=True)
class Turns(Angle):
    """Angle as a fraction of a full turn."""

    PERIOD: ClassVar[float] = 1.0


__all__ = ["Angle", "Deg", "Rad", "Turns"]
