"""Common RGB color spaces.

Each factory returns a freshly built, immutable space. Parameters:

    sRGB / linear sRGB  Rec. 709 primaries, D65, sRGB curve
    Adobe RGB (1998)    D65, gamma 563/256
    ProPhoto RGB        D50, gamma 1.8 (linear toe ignored)
"""

from __future__ import annotations

from typing import Any, Dict

from .channel import ScalarFormat, as_format
from .color_space import EncodedColorSpace, LinearColorSpace
from .config import ColorSpaceConfig

SRGB: Dict[str, Any] = {
    "red": (0.6400, 0.3300),
    "green": (0.3000, 0.6000),
    "blue": (0.1500, 0.0600),
    "white_point": "D65",
    "encoding": {"name": "srgb"},
}

ADOBE_RGB: Dict[str, Any] = {
    "red": (0.6400, 0.3300),
    "green": (0.2100, 0.7100),
    "blue": (0.1500, 0.0600),
    "white_point": "D65",
    "encoding": {"name": "gamma", "gamma": 563.0 / 256.0},
}

PROPHOTO_RGB: Dict[str, Any] = {
    "red": (0.7347, 0.2653),
    "green": (0.1596, 0.8404),
    "blue": (0.0366, 0.0001),
    "white_point": "D50",
    "encoding": {"name": "gamma", "gamma": 1.8},
}


def _build(params: Dict[str, Any], fmt: ScalarFormat) -> Any:
    return ColorSpaceConfig(**params, fmt=as_format(fmt).name).build()


def srgb(fmt: ScalarFormat = "float64") -> EncodedColorSpace:
    return _build(SRGB, fmt)


def linear_srgb(fmt: ScalarFormat = "float64") -> LinearColorSpace:
    return srgb(fmt).linear_space


def adobe_rgb(fmt: ScalarFormat = "float64") -> EncodedColorSpace:
    return _build(ADOBE_RGB, fmt)


def prophoto_rgb(fmt: ScalarFormat = "float64") -> EncodedColorSpace:
    return _build(PROPHOTO_RGB, fmt)


__all__ = ["SRGB", "ADOBE_RGB", "PROPHOTO_RGB", "srgb", "linear_srgb", "adobe_rgb", "prophoto_rgb"]
