"""RGB color spaces: primaries + white point → RGB ↔ XYZ transform.

Derivation of the forward (linear RGB → XYZ) matrix M:

    1. each primary (x, y) gives a direction d = (x/y, 1, (1 - x - y)/y)
    2. P = [d_r | d_g | d_b]   (directions as columns)
    3. P⁻¹
    4. (S_r, S_g, S_b) = P⁻¹ · W   with W the white point XYZ
    5. M = [S_r·d_r | S_g·d_g | S_b·d_b]
    6. M⁻¹ maps XYZ back to linear RGB

By construction M · (1, 1, 1) = W. A failed inversion at step 3 or 6 means
the primaries are linearly dependent (collinear in the xy plane) and the
space cannot be constructed: ``InvalidColorSpace`` is raised, never a
degenerate transform.

``EncodedColorSpace`` pairs a ``LinearColorSpace`` with a transfer
function and delegates every geometric query to it.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

from .alpha import Alpha
from .channel import DEFAULT_FORMAT, ScalarFormat, as_format, is_float_format
from .encoding import (
    ColorEncoding,
    EncodableColor,
    EncodedColor,
    LinearColor,
    LinearEncoding,
    with_encoding,
)
from .linalg import Matrix3, SingularMatrixError
from .primary import RgbPrimary
from .rgb import Rgb
from .white_point import NamedWhitePoint
from .xyz import Xyz

# Above this 2-norm condition number the transform still exists but loses
# several digits on a round trip
_ILL_CONDITIONED = 1e8
# Tolerance for validating user-supplied forward/inverse pairs
_INVERSE_TOL = 1e-6


class InvalidColorSpace(ValueError):
    """Raised when primaries and white point do not define a color space."""
    pass


class TransformDiagnostics(NamedTuple):
    """Numerical health of a color space's transform pair.

    Attributes
    ----------
    determinant : float
        det(M) of the forward transform.
    condition_number : float
        2-norm condition number of M.
    inverse_residual : float
        max |M·M⁻¹ - I| over all entries.
    white_point_error : float
        max |M·(1, 1, 1) - W| over the three components.
    """
    determinant: float
    condition_number: float
    inverse_residual: float
    white_point_error: float

    def is_safe(self, tol: float = 1e-9) -> bool:
        """True if the transform is well conditioned and self-consistent."""
        return (
            self.condition_number < _ILL_CONDITIONED
            and self.inverse_residual < tol
            and self.white_point_error < tol
        )

    def summary(self) -> str:
        lines = [
            "Transform Diagnostics",
            f"  det(M): {self.determinant:.6g}",
            f"  cond(M): {self.condition_number:.4g}",
            f"  max |M·M⁻¹ - I|: {self.inverse_residual:.3e}",
            f"  max |M·1 - W|: {self.white_point_error:.3e}",
        ]
        return "\n".join(lines)


def _coerce_white_point(wp: Union[Xyz, NamedWhitePoint, Sequence[float]], fmt: np.dtype) -> Xyz:
    if isinstance(wp, Xyz):
        return wp.cast(fmt)
    if isinstance(wp, NamedWhitePoint):
        return wp.xyz(fmt)
    values = tuple(float(v) for v in wp)
    if len(values) != 3:
        raise InvalidColorSpace(f"White point needs 3 XYZ values, got {len(values)}")
    return Xyz.from_channels(*values, fmt=fmt)


def primary_matrix(red: RgbPrimary, green: RgbPrimary, blue: RgbPrimary, fmt: ScalarFormat = DEFAULT_FORMAT) -> Matrix3:
    """P: the primaries' tristimulus directions as columns."""
    return Matrix3.from_columns(red.direction(), green.direction(), blue.direction(), fmt)


def build_transform(
    red: RgbPrimary,
    green: RgbPrimary,
    blue: RgbPrimary,
    white_point: Xyz,
    fmt: ScalarFormat = DEFAULT_FORMAT,
) -> Matrix3:
    """Derive the linear RGB → XYZ matrix.

    Raises
    ------
    InvalidColorSpace
        If the primaries are linearly dependent.
    """
    primaries = primary_matrix(red, green, blue, fmt)
    try:
        primaries_inv = primaries.inverse()
    except SingularMatrixError as exc:
        raise InvalidColorSpace(
            "Singular primary matrix, make sure red, green and blue are linearly independent "
            f"(red={red.to_tuple()}, green={green.to_tuple()}, blue={blue.to_tuple()})"
        ) from exc
    scale = primaries_inv.transform_vector(tuple(float(v) for v in white_point.to_tuple()))
    return primaries.scale_columns(scale)


class ColorSpace:
    """Shared behaviour of linear and encoded RGB spaces."""

    red_primary: RgbPrimary
    green_primary: RgbPrimary
    blue_primary: RgbPrimary
    white_point: Xyz
    xyz_transform: Matrix3
    inverse_xyz_transform: Matrix3
    encoding: ColorEncoding

    @property
    def fmt(self) -> np.dtype:
        return self.xyz_transform.fmt

    def primaries(self) -> Tuple[RgbPrimary, RgbPrimary, RgbPrimary]:
        return self.red_primary, self.green_primary, self.blue_primary

    def apply_transform(self, vec: Sequence[float]) -> Tuple[float, float, float]:
        """Linear RGB triplet → XYZ triplet."""
        return self.xyz_transform.transform_vector(vec)

    def apply_inverse_transform(self, vec: Sequence[float]) -> Tuple[float, float, float]:
        """XYZ triplet → linear RGB triplet."""
        return self.inverse_xyz_transform.transform_vector(vec)

    def decode_color(self, color: Any) -> LinearColor:
        """Bring ``color`` to linear light.

        A bare color is taken to be in this space's encoding; a tagged
        color is decoded with its own encoding.
        """
        if isinstance(color, LinearColor):
            return color
        if isinstance(color, EncodedColor):
            return color.decode()
        if isinstance(color, EncodableColor):
            return with_encoding(color, self.encoding).decode()
        raise TypeError(f"Cannot decode {type(color).__name__}; expected an encodable color")

    def color_to_xyz(self, color: Any) -> Xyz:
        """RGB (bare, linear or encoded) → XYZ, decoding first when needed."""
        linear = self.decode_color(color)
        rgb = linear.color
        if isinstance(rgb, Alpha):
            rgb = rgb.strip_alpha()
        if not isinstance(rgb, Rgb):
            raise TypeError(f"Expected an Rgb color, got {type(rgb).__name__}")
        vec = tuple(ch.unit_value() for ch in rgb.channels())  # type: ignore[attr-defined]
        x, y, z = self.apply_transform(vec)
        fmt = rgb.fmt if is_float_format(rgb.fmt) else self.fmt
        return Xyz.from_channels(x, y, z, fmt=fmt)

    def xyz_to_color(
        self, xyz: Xyz, encoding: Optional[ColorEncoding] = None
    ) -> Union[LinearColor, EncodedColor]:
        """XYZ → RGB tagged with ``encoding`` (default: the space's own).

        Out-of-gamut results are kept as is (channels may leave [0, 1]);
        call ``normalize`` on the color to clip.
        """
        if not isinstance(xyz, Xyz):
            raise TypeError(f"Expected Xyz, got {type(xyz).__name__}")
        r, g, b = self.apply_inverse_transform(tuple(float(v) for v in xyz.to_tuple()))
        linear = LinearColor(Rgb.from_channels(r, g, b, fmt=xyz.fmt))
        return linear.encode(encoding if encoding is not None else self.encoding)

    def diagnostics(self) -> TransformDiagnostics:
        return transform_diagnostics(self)


@dataclass(frozen=True)
class LinearColorSpace(ColorSpace):
    """A color space defined by primaries and a white point, no curve.

    Parameters
    ----------
    red_primary, green_primary, blue_primary : RgbPrimary
        Chromaticities of the three primaries.
    white_point : Xyz, NamedWhitePoint or 3 floats
        Reference white.
    fmt : dtype
        Floating scalar format of the transforms (default float64).
    xyz_transform, inverse_xyz_transform : Matrix3, optional
        Precomputed matrices; see ``with_transforms``. Derived when omitted.

    Raises
    ------
    InvalidColorSpace
        If the primaries are linearly dependent or the white point makes the
        transform singular.
    """

    red_primary: RgbPrimary
    green_primary: RgbPrimary
    blue_primary: RgbPrimary
    white_point: Any
    fmt: Any = field(default=DEFAULT_FORMAT, repr=False)
    xyz_transform: Optional[Matrix3] = field(default=None, repr=False)
    inverse_xyz_transform: Optional[Matrix3] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        fmt = as_format(self.fmt)
        if not is_float_format(fmt):
            raise InvalidColorSpace(f"Color space format must be floating point (got {fmt})")
        object.__setattr__(self, "fmt", fmt)
        object.__setattr__(self, "white_point", _coerce_white_point(self.white_point, fmt))

        if self.xyz_transform is None and self.inverse_xyz_transform is None:
            forward = build_transform(
                self.red_primary, self.green_primary, self.blue_primary, self.white_point, fmt
            )
            try:
                inverse = forward.inverse()
            except SingularMatrixError as exc:
                raise InvalidColorSpace(
                    "Singular RGB → XYZ transform; check the white point "
                    f"{tuple(float(v) for v in self.white_point.to_tuple())}"
                ) from exc
            object.__setattr__(self, "xyz_transform", forward)
            object.__setattr__(self, "inverse_xyz_transform", inverse)
        elif self.xyz_transform is None or self.inverse_xyz_transform is None:
            raise InvalidColorSpace("Supply both xyz_transform and inverse_xyz_transform, or neither")
        else:
            product = self.xyz_transform @ self.inverse_xyz_transform
            if not product.approx_eq(Matrix3.identity(fmt), abs_tol=_INVERSE_TOL):
                raise InvalidColorSpace("xyz_transform and inverse_xyz_transform are not mutual inverses")

        cond = self.xyz_transform.condition_number()
        if cond > _ILL_CONDITIONED:
            warnings.warn(
                f"RGB → XYZ transform is ill-conditioned (cond={cond:.3g}); "
                f"round trips may lose precision",
                stacklevel=3,
            )

    @classmethod
    def with_transforms(
        cls,
        red_primary: RgbPrimary,
        green_primary: RgbPrimary,
        blue_primary: RgbPrimary,
        white_point: Any,
        xyz_transform: Matrix3,
        inverse_xyz_transform: Matrix3,
    ) -> "LinearColorSpace":
        """Build from published matrices instead of deriving them."""
        return cls(
            red_primary,
            green_primary,
            blue_primary,
            white_point,
            xyz_transform.fmt,
            xyz_transform,
            inverse_xyz_transform,
        )

    @property
    def encoding(self) -> LinearEncoding:
        return LinearEncoding()

    def with_encoding(self, encoding: ColorEncoding) -> "EncodedColorSpace":
        return EncodedColorSpace(self, encoding)


@dataclass(frozen=True)
class EncodedColorSpace(ColorSpace):
    """A ``LinearColorSpace`` plus its default transfer function."""

    linear_space: LinearColorSpace
    encoding: ColorEncoding

    def __post_init__(self) -> None:
        if not isinstance(self.linear_space, LinearColorSpace):
            raise TypeError(f"Expected LinearColorSpace, got {type(self.linear_space).__name__}")
        if not isinstance(self.encoding, ColorEncoding):
            raise TypeError(f"Expected ColorEncoding, got {type(self.encoding).__name__}")

    @classmethod
    def from_primaries(
        cls,
        red_primary: RgbPrimary,
        green_primary: RgbPrimary,
        blue_primary: RgbPrimary,
        white_point: Any,
        encoding: ColorEncoding,
        fmt: ScalarFormat = DEFAULT_FORMAT,
    ) -> "EncodedColorSpace":
        return cls(LinearColorSpace(red_primary, green_primary, blue_primary, white_point, fmt), encoding)

    @property
    def red_primary(self) -> RgbPrimary:  # type: ignore[override]
        return self.linear_space.red_primary

    @property
    def green_primary(self) -> RgbPrimary:  # type: ignore[override]
        return self.linear_space.green_primary

    @property
    def blue_primary(self) -> RgbPrimary:  # type: ignore[override]
        return self.linear_space.blue_primary

    @property
    def white_point(self) -> Xyz:  # type: ignore[override]
        return self.linear_space.white_point

    @property
    def xyz_transform(self) -> Matrix3:  # type: ignore[override]
        return self.linear_space.xyz_transform

    @property
    def inverse_xyz_transform(self) -> Matrix3:  # type: ignore[override]
        return self.linear_space.inverse_xyz_transform

    @property
    def fmt(self) -> np.dtype:
        return self.linear_space.fmt

    def encode_channel(self, value: float) -> float:
        return self.encoding.encode_channel(value)

    def decode_channel(self, value: float) -> float:
        return self.encoding.decode_channel(value)

    def encode_color(self, color: Union[LinearColor, EncodableColor]) -> Union[LinearColor, EncodedColor]:
        """Linear light → this space's encoding. A bare color is taken as linear."""
        if not isinstance(color, LinearColor):
            color = LinearColor(color)
        return color.encode(self.encoding)

    def to_space_encoding(self, color: Union[LinearColor, EncodedColor]) -> Union[LinearColor, EncodedColor]:
        """Re-tag ``color`` with this space's encoding.

        No-op when it already carries an equal encoding; otherwise the color
        goes through linear light.
        """
        if isinstance(color, EncodedColor):
            return color.reencode(self.encoding)
        if isinstance(color, LinearColor):
            return color.encode(self.encoding)
        raise TypeError(
            f"Expected LinearColor or EncodedColor, got {type(color).__name__}; "
            "tag bare colors with with_encoding() first"
        )


def transform_diagnostics(space: ColorSpace) -> TransformDiagnostics:
    """Measure how well a space's matrices behave numerically."""
    forward = space.xyz_transform
    inverse = space.inverse_xyz_transform
    residual = np.abs((forward @ inverse).as_array() - np.eye(3))
    white = np.array(space.apply_transform((1.0, 1.0, 1.0)))
    expected = np.array([float(v) for v in space.white_point.to_tuple()])
    return TransformDiagnostics(
        determinant=forward.determinant(),
        condition_number=forward.condition_number(),
        inverse_residual=float(np.max(residual)),
        white_point_error=float(np.max(np.abs(white - expected))),
    )


__all__ = [
    "InvalidColorSpace",
    "TransformDiagnostics",
    "ColorSpace",
    "LinearColorSpace",
    "EncodedColorSpace",
    "primary_matrix",
    "build_transform",
    "transform_diagnostics",
]
