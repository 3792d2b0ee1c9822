"""Color-space parameter sets.

A ``ColorSpaceConfig`` is the plain-data description of an RGB color space
(primaries, white point, transfer function, scalar format). It round-trips
through dicts and JSON strings and builds the immutable space on demand.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from .channel import as_format, is_float_format
from .color_space import ColorSpace, EncodedColorSpace, LinearColorSpace
from .encoding import ColorEncoding, LinearEncoding, encoding_from_dict
from .primary import InvalidParameter, RgbPrimary
from .white_point import WHITE_POINTS, white_point

WhitePointSpec = Union[str, Tuple[float, float, float]]


def _validate_xy(name: str, value: Tuple[float, float]) -> Tuple[float, float]:
    """Raise InvalidParameter unless value is a finite (x, y) pair with y != 0."""
    if len(value) != 2:
        raise InvalidParameter(f"{name} must be an (x, y) pair (got {value!r})")
    x, y = float(value[0]), float(value[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidParameter(f"{name} must be finite (got {value!r})")
    if y == 0:
        raise InvalidParameter(f"{name} y must be nonzero (got {value!r})")
    return x, y


@dataclass
class ColorSpaceConfig:
    """Container for the parameters of an RGB color space.

    Fields:
    - red, green, blue: (x, y) chromaticities of the primaries
    - white_point: a standard illuminant name ("D65") or an XYZ triple
    - encoding: ``ColorEncoding.to_dict()`` form, e.g. {"name": "srgb"}
    - fmt: scalar format name ("float64" or "float32")
    """

    red: Tuple[float, float]
    green: Tuple[float, float]
    blue: Tuple[float, float]
    white_point: WhitePointSpec = field(default="D65")
    encoding: Dict[str, Any] = field(default_factory=lambda: {"name": "linear"})
    fmt: str = field(default="float64")

    def __post_init__(self) -> None:
        self.red = _validate_xy("red", self.red)
        self.green = _validate_xy("green", self.green)
        self.blue = _validate_xy("blue", self.blue)
        if isinstance(self.white_point, str):
            if self.white_point.upper() not in WHITE_POINTS:
                raise InvalidParameter(
                    f"Unknown white point {self.white_point!r}; expected one of {sorted(WHITE_POINTS)}"
                )
            self.white_point = self.white_point.upper()
        else:
            wp = tuple(float(v) for v in self.white_point)
            if len(wp) != 3 or not all(math.isfinite(v) for v in wp):
                raise InvalidParameter(f"white_point must be a name or 3 finite XYZ values (got {self.white_point!r})")
            self.white_point = wp  # type: ignore[assignment]
        try:
            self.encoding_object()
        except (ValueError, TypeError) as exc:
            raise InvalidParameter(f"Invalid encoding {self.encoding!r}: {exc}") from exc
        try:
            dtype = as_format(self.fmt)
        except TypeError as exc:
            raise InvalidParameter(str(exc)) from exc
        if not is_float_format(dtype):
            raise InvalidParameter(f"fmt must be a floating format (got {self.fmt!r})")
        self.fmt = dtype.name

    def encoding_object(self) -> ColorEncoding:
        return encoding_from_dict(self.encoding)

    def white_point_xyz(self) -> Tuple[float, float, float]:
        if isinstance(self.white_point, str):
            wp = white_point(self.white_point)
            return wp.X, wp.Y, wp.Z
        return tuple(self.white_point)  # type: ignore[return-value]

    def build(self) -> ColorSpace:
        """Construct the color space.

        Returns a ``LinearColorSpace`` for a linear encoding, otherwise an
        ``EncodedColorSpace``.

        Raises
        ------
        InvalidColorSpace
            If the primaries are linearly dependent.
        """
        linear = LinearColorSpace(
            RgbPrimary(*self.red),
            RgbPrimary(*self.green),
            RgbPrimary(*self.blue),
            self.white_point_xyz(),
            np.dtype(self.fmt),
        )
        encoding = self.encoding_object()
        if encoding.is_linear():
            return linear
        return EncodedColorSpace(linear, encoding)

    @classmethod
    def from_space(cls, space: ColorSpace, white_point_name: Optional[str] = None) -> "ColorSpaceConfig":
        """Describe an existing space. The white point is stored as XYZ
        unless ``white_point_name`` is given."""
        wp: WhitePointSpec
        if white_point_name is not None:
            wp = white_point_name
        else:
            wp = tuple(float(v) for v in space.white_point.to_tuple())  # type: ignore[assignment]
        return cls(
            red=space.red_primary.to_tuple(),
            green=space.green_primary.to_tuple(),
            blue=space.blue_primary.to_tuple(),
            white_point=wp,
            encoding=space.encoding.to_dict(),
            fmt=np.dtype(space.fmt).name,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a dictionary representation."""
        return {
            "red": list(self.red),
            "green": list(self.green),
            "blue": list(self.blue),
            "white_point": self.white_point if isinstance(self.white_point, str) else list(self.white_point),
            "encoding": dict(self.encoding),
            "fmt": self.fmt,
        }

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ColorSpaceConfig":
        wp = payload.get("white_point", "D65")
        return cls(
            red=tuple(payload["red"]),  # type: ignore[arg-type]
            green=tuple(payload["green"]),  # type: ignore[arg-type]
            blue=tuple(payload["blue"]),  # type: ignore[arg-type]
            white_point=wp if isinstance(wp, str) else tuple(wp),
            encoding=dict(payload.get("encoding", LinearEncoding().to_dict())),
            fmt=str(payload.get("fmt", "float64")),
        )

    @classmethod
    def from_json(cls, data: str | bytes | bytearray | Dict[str, Any]) -> "ColorSpaceConfig":
        """Deserialize from a JSON string or dict."""
        if isinstance(data, (str, bytes, bytearray)):
            payload = json.loads(data)
        else:
            payload = data
        return cls.from_dict(payload)


__all__ = ["ColorSpaceConfig"]
