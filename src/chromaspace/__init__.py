"""Chromaspace: generic color channels, capabilities and RGB ↔ XYZ spaces.

This package implements:

- Channel kinds: normalized, free and angular (hue)
- Composable color capabilities (tuple, slice, homogeneous, polar, ...)
- A 3×3 matrix type with checked inversion
- RGB color spaces derived from primaries and a white point
- Transfer-function encodings with distinct Linear / Encoded tags
- Conversion entry points between RGB-family colors and XYZ
"""

from chromaspace.angle import Angle, Deg, Rad, Turns
from chromaspace.channel import (
    ColorChannel,
    PosNormalBoundedChannel,
    FreeChannel,
    AngularChannel,
)
from chromaspace.color import (
    Color,
    FromTuple,
    Flatten,
    HomogeneousColor,
    PolarColor,
    DeviceDependentColor,
    Color3,
    Color4,
    Lerp,
    Invert,
    Bounded,
)
from chromaspace.linalg import Matrix3, SingularMatrixError
from chromaspace.primary import RgbPrimary, InvalidParameter
from chromaspace.white_point import NamedWhitePoint, white_point, WHITE_POINTS, D50, D65
from chromaspace.xyz import Xyz
from chromaspace.rgb import Rgb, Rgba
from chromaspace.hsv import Hsv, Hsva
from chromaspace.hwb import Hwb, Hwba
from chromaspace.alpha import Alpha
from chromaspace.encoding import (
    ColorEncoding,
    LinearEncoding,
    GammaEncoding,
    SrgbEncoding,
    EncodableColor,
    LinearColor,
    EncodedColor,
    with_encoding,
    encoding_from_dict,
    encoding_roundtrip_error,
)
from chromaspace.color_space import (
    ColorSpace,
    LinearColorSpace,
    EncodedColorSpace,
    InvalidColorSpace,
    TransformDiagnostics,
    transform_diagnostics,
)
from chromaspace.convert import color_to_xyz, xyz_to_color, xyz_to_bare, rgb_to_rgb
from chromaspace.config import ColorSpaceConfig
from chromaspace.spaces import srgb, linear_srgb, adobe_rgb, prophoto_rgb

__version__ = "0.1.0"

__all__ = [
    # angle
    "Angle",
    "Deg",
    "Rad",
    "Turns",
    # channel
    "ColorChannel",
    "PosNormalBoundedChannel",
    "FreeChannel",
    "AngularChannel",
    # color capabilities
    "Color",
    "FromTuple",
    "Flatten",
    "HomogeneousColor",
    "PolarColor",
    "DeviceDependentColor",
    "Color3",
    "Color4",
    "Lerp",
    "Invert",
    "Bounded",
    # linalg
    "Matrix3",
    "SingularMatrixError",
    # primaries / white points
    "RgbPrimary",
    "InvalidParameter",
    "NamedWhitePoint",
    "white_point",
    "WHITE_POINTS",
    "D50",
    "D65",
    # models
    "Xyz",
    "Rgb",
    "Rgba",
    "Hsv",
    "Hsva",
    "Hwb",
    "Hwba",
    "Alpha",
    # encoding
    "ColorEncoding",
    "LinearEncoding",
    "GammaEncoding",
    "SrgbEncoding",
    "EncodableColor",
    "LinearColor",
    "EncodedColor",
    "with_encoding",
    "encoding_from_dict",
    "encoding_roundtrip_error",
    # color spaces
    "ColorSpace",
    "LinearColorSpace",
    "EncodedColorSpace",
    "InvalidColorSpace",
    "TransformDiagnostics",
    "transform_diagnostics",
    # conversion
    "color_to_xyz",
    "xyz_to_color",
    "xyz_to_bare",
    "rgb_to_rgb",
    # config / named spaces
    "ColorSpaceConfig",
    "srgb",
    "linear_srgb",
    "adobe_rgb",
    "prophoto_rgb",
]
