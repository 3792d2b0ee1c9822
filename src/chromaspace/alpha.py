"""Alpha wrapper: any color plus a trailing normalized alpha channel.

Concrete alpha types subclass ``Alpha`` and set ``INNER`` to the wrapped
color type, which fixes their arity at class level:

    class Rgba(Alpha, ...):
        INNER = Rgb

``to_tuple`` is flat: the inner channel values followed by alpha.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence, Tuple, Type, TypeVar

from .channel import ColorChannel, PosNormalBoundedChannel, ScalarFormat
from .color import Color

A = TypeVar("A", bound="Alpha")


@dataclass(frozen=True)
class Alpha(Color):
    """``color`` with an alpha (coverage) channel appended."""

    color: Color
    alpha: PosNormalBoundedChannel

    INNER: ClassVar[Optional[Type[Color]]] = None

    def __post_init__(self) -> None:
        if self.INNER is None:
            raise TypeError("Alpha must be subclassed with INNER set")
        if not isinstance(self.color, self.INNER):
            raise TypeError(
                f"{type(self).__name__} wraps {self.INNER.__name__}, got {type(self.color).__name__}"
            )
        if not isinstance(self.alpha, PosNormalBoundedChannel):
            object.__setattr__(self, "alpha", PosNormalBoundedChannel(self.alpha, self.color.fmt))

    @classmethod
    def channel_kinds(cls) -> Tuple[Type[ColorChannel], ...]:
        if cls.INNER is None:
            raise TypeError("Alpha must be subclassed with INNER set")
        return cls.INNER.channel_kinds() + (PosNormalBoundedChannel,)

    @classmethod
    def from_channel_objects(cls: Type[A], channels: Sequence[ColorChannel]) -> A:
        inner = cls.INNER.from_channel_objects(tuple(channels[:-1]))  # type: ignore[union-attr]
        return cls(inner, channels[-1])  # type: ignore[arg-type]

    @classmethod
    def from_color_alpha(cls: Type[A], color: Color, alpha: float, fmt: Optional[ScalarFormat] = None) -> A:
        return cls(color, PosNormalBoundedChannel(alpha, fmt if fmt is not None else color.fmt))

    def channels(self) -> Tuple[ColorChannel, ...]:
        return self.color.channels() + (self.alpha,)

    def alpha_value(self) -> Any:
        return self.alpha.value

    def strip_alpha(self) -> Color:
        return self.color

    @classmethod
    def encoded_channel_indices(cls) -> Tuple[int, ...]:
        """The inner color's encoded channels; alpha is always linear."""
        return getattr(cls.INNER, "ENCODED_CHANNELS", ())


__all__ = ["Alpha"]
