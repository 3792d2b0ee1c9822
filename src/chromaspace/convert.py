"""Conversion entry points between device RGB and XYZ.

    color_to_xyz(space, color)       decode if encoded, then M · rgb
    xyz_to_color(space, xyz, ...)    M⁻¹ · xyz, then encode

Polar views of RGB (``Hsv``, ``Hwb``) are accepted as bare colors: they are
turned into ``Rgb`` in whatever encoding state they are in, which for a
bare color is the space's own encoding. Alpha is dropped first.
"""

from __future__ import annotations

from typing import Any, Optional, Type, Union

from .alpha import Alpha
from .color_space import ColorSpace
from .encoding import ColorEncoding, EncodedColor, LinearColor
from .hsv import Hsv
from .hwb import Hwb
from .rgb import Rgb
from .xyz import Xyz

_POLAR_TARGETS = (Hsv, Hwb)


def color_to_xyz(space: ColorSpace, color: Any) -> Xyz:
    """Convert an RGB-family color to XYZ under ``space``.

    Parameters
    ----------
    space : ColorSpace
        Linear or encoded color space.
    color : Rgb, Rgba, Hsv, Hsva, Hwb, Hwba, LinearColor or EncodedColor
        ``LinearColor`` goes straight through the forward transform;
        ``EncodedColor`` is decoded with its own encoding first; a bare color
        is assumed to be in the space's encoding.

    Returns
    -------
    Xyz

    Raises
    ------
    TypeError
        If ``color`` is not an RGB-family color.
    """
    if isinstance(color, Alpha) and isinstance(color.strip_alpha(), _POLAR_TARGETS):
        color = color.strip_alpha()
    if isinstance(color, _POLAR_TARGETS):
        color = color.to_rgb()
    return space.color_to_xyz(color)


def xyz_to_color(
    space: ColorSpace,
    xyz: Xyz,
    encoding: Optional[ColorEncoding] = None,
) -> Union[LinearColor, EncodedColor]:
    """Convert XYZ to RGB under ``space``, tagged with its encoding.

    ``encoding`` defaults to the space's; pass ``LinearEncoding()`` to get
    a ``LinearColor`` from an encoded space.
    """
    return space.xyz_to_color(xyz, encoding)


def xyz_to_bare(
    space: ColorSpace,
    xyz: Xyz,
    target: Type[Any] = Rgb,
) -> Any:
    """XYZ → an untagged color in the space's encoding.

    ``target`` may be ``Rgb``, ``Hsv`` or ``Hwb``.
    """
    rgb = space.xyz_to_color(xyz).color
    if target is Rgb:
        return rgb
    if target in _POLAR_TARGETS:
        return target.from_rgb(rgb)
    raise TypeError(f"Unsupported conversion target {getattr(target, '__name__', target)!r}")


def rgb_to_rgb(source: ColorSpace, destination: ColorSpace, color: Any) -> Union[LinearColor, EncodedColor]:
    """Move a color between two RGB spaces through XYZ.

    No chromatic adaptation is applied; spaces with different white points
    map XYZ to XYZ unchanged.
    """
    return destination.xyz_to_color(color_to_xyz(source, color))


__all__ = ["color_to_xyz", "xyz_to_color", "xyz_to_bare", "rgb_to_rgb"]
