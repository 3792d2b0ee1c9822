"""Tests for RGB color-space construction and transforms."""

import warnings

import numpy as np
import pytest

from chromaspace.color_space import (
    EncodedColorSpace,
    InvalidColorSpace,
    LinearColorSpace,
    TransformDiagnostics,
    build_transform,
    transform_diagnostics,
)
from chromaspace.angle import Deg
from chromaspace.encoding import EncodedColor, GammaEncoding, LinearColor, SrgbEncoding
from chromaspace.hsv import Hsv
from chromaspace.linalg import Matrix3, SingularMatrixError
from chromaspace.primary import InvalidParameter, RgbPrimary
from chromaspace.rgb import Rgb, Rgba
from chromaspace.spaces import adobe_rgb, prophoto_rgb, srgb
from chromaspace.white_point import D50, D65
from chromaspace.xyz import Xyz

SRGB_PRIMARIES = (RgbPrimary(0.64, 0.33), RgbPrimary(0.30, 0.60), RgbPrimary(0.15, 0.06))

# Published linear sRGB → XYZ matrix for D65 = (0.95047, 1, 1.08883)
SRGB_TO_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ]
)

D65_XYZ = np.array([D65.X, D65.Y, D65.Z])


class TestDerivation:
    """Tests for deriving the RGB → XYZ matrix from primaries."""

    def test_srgb_matrix(self, linear_srgb_space):
        """Test sRGB primaries + D65 give the published matrix."""
        np.testing.assert_allclose(linear_srgb_space.xyz_transform.as_array(), SRGB_TO_XYZ, atol=1e-4)

    def test_inverse_pair(self, linear_srgb_space):
        """Test forward · inverse ≈ identity."""
        product = linear_srgb_space.xyz_transform @ linear_srgb_space.inverse_xyz_transform
        assert product.approx_eq(Matrix3.identity(), abs_tol=1e-9)

    def test_white_maps_to_white_point(self, linear_srgb_space):
        """Test RGB (1, 1, 1) maps to the white point."""
        np.testing.assert_allclose(linear_srgb_space.apply_transform((1.0, 1.0, 1.0)), D65_XYZ, atol=1e-12)

    def test_black_maps_to_zero(self, linear_srgb_space):
        """Test RGB (0, 0, 0) maps to XYZ (0, 0, 0)."""
        assert linear_srgb_space.apply_transform((0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)

    def test_gray_is_half_white(self, linear_srgb_space):
        """Test linear gray 0.5 maps to half the white point."""
        xyz = linear_srgb_space.color_to_xyz(Rgb.broadcast(0.5))
        np.testing.assert_allclose(xyz.to_tuple(), D65_XYZ / 2, atol=1e-12)
        np.testing.assert_allclose(xyz.to_tuple(), (0.475235, 0.5, 0.544415), atol=1e-6)

    def test_each_primary_has_its_chromaticity(self, linear_srgb_space):
        """Test each unit primary maps to XYZ with the primary's xy."""
        for i, primary in enumerate(SRGB_PRIMARIES):
            rgb = [0.0, 0.0, 0.0]
            rgb[i] = 1.0
            xyz = Xyz.from_tuple(linear_srgb_space.apply_transform(rgb))
            np.testing.assert_allclose(xyz.chromaticity(), primary.to_tuple(), atol=1e-12)

    def test_random_primaries(self, rng):
        """Test forward · inverse ≈ I and white → W for random valid spaces."""
        for _ in range(200):
            red = RgbPrimary(rng.uniform(0.55, 0.70), rng.uniform(0.25, 0.35))
            green = RgbPrimary(rng.uniform(0.15, 0.35), rng.uniform(0.50, 0.75))
            blue = RgbPrimary(rng.uniform(0.12, 0.18), rng.uniform(0.03, 0.10))
            white = Xyz.from_chromaticity(rng.uniform(0.28, 0.36), rng.uniform(0.30, 0.38), rng.uniform(0.5, 2.0))
            space = LinearColorSpace(red, green, blue, white)
            product = space.xyz_transform @ space.inverse_xyz_transform
            assert product.approx_eq(Matrix3.identity(), abs_tol=1e-4)
            np.testing.assert_allclose(space.apply_transform((1.0, 1.0, 1.0)), white.to_tuple(), atol=1e-9)

    def test_build_transform_matches(self):
        """Test the free function agrees with the constructed space."""
        m = build_transform(*SRGB_PRIMARIES, D65.xyz())
        space = LinearColorSpace(*SRGB_PRIMARIES, D65)
        assert m.approx_eq(space.xyz_transform, abs_tol=1e-15)

    def test_white_point_forms(self):
        """Test the white point may be an Xyz, a named point or 3 floats."""
        a = LinearColorSpace(*SRGB_PRIMARIES, D65)
        b = LinearColorSpace(*SRGB_PRIMARIES, D65.xyz())
        c = LinearColorSpace(*SRGB_PRIMARIES, (D65.X, D65.Y, D65.Z))
        assert a.xyz_transform == b.xyz_transform == c.xyz_transform
        assert isinstance(a.white_point, Xyz)

    def test_prophoto_uses_d50(self):
        """Test ProPhoto white maps to D50."""
        space = prophoto_rgb()
        np.testing.assert_allclose(space.apply_transform((1.0, 1.0, 1.0)), (D50.X, D50.Y, D50.Z), atol=1e-12)

    def test_adobe_green(self):
        """Test Adobe RGB's green primary has its chromaticity."""
        xyz = Xyz.from_tuple(adobe_rgb().apply_transform((0.0, 1.0, 0.0)))
        np.testing.assert_allclose(xyz.chromaticity(), (0.21, 0.71), atol=1e-12)


class TestInvalidSpaces:
    """Tests for rejected parameter sets."""

    def test_collinear_primaries(self):
        """Test primaries on one line in xy are rejected."""
        with pytest.raises(InvalidColorSpace) as info:
            LinearColorSpace(RgbPrimary(0.5, 0.25), RgbPrimary(0.25, 0.5), RgbPrimary(0.375, 0.375), D65)
        assert isinstance(info.value.__cause__, SingularMatrixError)

    def test_duplicate_primaries(self):
        """Test two equal primaries are rejected."""
        with pytest.raises(InvalidColorSpace):
            LinearColorSpace(RgbPrimary(0.64, 0.33), RgbPrimary(0.64, 0.33), RgbPrimary(0.15, 0.06), D65)

    def test_zero_white_point(self):
        """Test a zero white point makes the transform singular."""
        with pytest.raises(InvalidColorSpace):
            LinearColorSpace(*SRGB_PRIMARIES, (0.0, 0.0, 0.0))

    def test_primary_with_zero_y(self):
        """Test a primary with y = 0 cannot be built at all."""
        with pytest.raises(InvalidParameter):
            RgbPrimary(0.3, 0.0)

    def test_non_finite_primary(self):
        """Test NaN chromaticities are rejected."""
        with pytest.raises(InvalidParameter):
            RgbPrimary(float("nan"), 0.3)

    def test_integer_format(self):
        """Test transforms need a floating format."""
        with pytest.raises(InvalidColorSpace):
            LinearColorSpace(*SRGB_PRIMARIES, D65, np.uint8)

    def test_white_point_arity(self):
        """Test a white point needs three values."""
        with pytest.raises(InvalidColorSpace):
            LinearColorSpace(*SRGB_PRIMARIES, (1.0, 1.0))

    def test_invalid_color_space_is_value_error(self):
        """Test callers can catch ValueError."""
        assert issubclass(InvalidColorSpace, ValueError)


class TestWithTransforms:
    """Tests for spaces built from supplied matrices."""

    def test_accepts_matching_pair(self, linear_srgb_space):
        """Test a consistent pair is kept as given."""
        fwd = linear_srgb_space.xyz_transform
        inv = linear_srgb_space.inverse_xyz_transform
        space = LinearColorSpace.with_transforms(*SRGB_PRIMARIES, D65, fwd, inv)
        assert space.xyz_transform is fwd
        assert space.inverse_xyz_transform is inv

    def test_rejects_mismatched_pair(self, linear_srgb_space):
        """Test matrices that are not mutual inverses are rejected."""
        with pytest.raises(InvalidColorSpace, match="mutual inverses"):
            LinearColorSpace.with_transforms(
                *SRGB_PRIMARIES, D65, linear_srgb_space.xyz_transform, Matrix3.identity()
            )

    def test_rejects_half_pair(self, linear_srgb_space):
        """Test supplying only one matrix is rejected."""
        with pytest.raises(InvalidColorSpace):
            LinearColorSpace(*SRGB_PRIMARIES, D65, xyz_transform=linear_srgb_space.xyz_transform)

    def test_ill_conditioned_warns(self):
        """Test a valid but badly conditioned transform emits a warning."""
        fwd = Matrix3([1, 0, 0, 0, 1, 0, 0, 0, 1e-9])
        inv = Matrix3([1, 0, 0, 0, 1, 0, 0, 0, 1e9])
        with pytest.warns(UserWarning, match="ill-conditioned"):
            LinearColorSpace.with_transforms(*SRGB_PRIMARIES, D65, fwd, inv)

    def test_standard_spaces_do_not_warn(self):
        """Test built-in spaces are well conditioned."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            srgb()
            adobe_rgb()
            prophoto_rgb()


class TestColorToXyz:
    """Tests for the space-level conversion methods."""

    def test_bare_color_uses_space_encoding(self, srgb_space):
        """Test a bare color in an encoded space is decoded with its curve."""
        xyz = srgb_space.color_to_xyz(Rgb.broadcast(0.5))
        np.testing.assert_allclose(xyz.to_tuple(), D65_XYZ * 0.21404114, atol=1e-7)

    def test_linear_color_is_not_decoded(self, srgb_space):
        """Test a LinearColor goes straight through the transform."""
        xyz = srgb_space.color_to_xyz(LinearColor(Rgb.broadcast(0.5)))
        np.testing.assert_allclose(xyz.to_tuple(), D65_XYZ / 2, atol=1e-12)

    def test_encoded_color_uses_own_encoding(self, srgb_space):
        """Test an EncodedColor is decoded with its own curve."""
        color = EncodedColor(Rgb.broadcast(0.5), GammaEncoding(2.2))
        xyz = srgb_space.color_to_xyz(color)
        np.testing.assert_allclose(xyz.to_tuple(), D65_XYZ * 0.5 ** 2.2, atol=1e-12)

    def test_alpha_is_dropped(self, linear_srgb_space):
        """Test RGBA converts like its RGB part."""
        xyz = linear_srgb_space.color_to_xyz(Rgba.from_channels(0.5, 0.5, 0.5, 0.1))
        np.testing.assert_allclose(xyz.to_tuple(), D65_XYZ / 2, atol=1e-12)

    def test_uint8_rgb(self, linear_srgb_space):
        """Test integer RGB is read on its unit scale and yields float XYZ."""
        xyz = linear_srgb_space.color_to_xyz(Rgb.broadcast(255, np.uint8))
        assert xyz.fmt == np.dtype(np.float64)
        np.testing.assert_allclose(xyz.to_tuple(), D65_XYZ, atol=1e-12)

    def test_non_rgb_rejected(self, srgb_space):
        """Test a polar color is not accepted at the space level."""
        with pytest.raises(TypeError):
            srgb_space.color_to_xyz(Hsv.from_channels(Deg(0.0), 0.0, 0.0))

    def test_xyz_to_color_tags(self, srgb_space, linear_srgb_space):
        """Test the result carries the space's encoding."""
        xyz = Xyz.from_tuple(D65_XYZ / 2)
        encoded = srgb_space.xyz_to_color(xyz)
        assert isinstance(encoded, EncodedColor)
        assert encoded.encoding == SrgbEncoding()
        linear = linear_srgb_space.xyz_to_color(xyz)
        assert isinstance(linear, LinearColor)
        assert linear.color.approx_eq(Rgb.broadcast(0.5), abs_tol=1e-12)

    def test_out_of_gamut_kept(self, linear_srgb_space):
        """Test out-of-gamut XYZ is not clipped."""
        rgb = linear_srgb_space.xyz_to_color(Xyz.from_channels(0.0, 1.0, 0.0)).color
        assert not rgb.is_normalized()
        assert rgb.normalize().is_normalized()

    def test_float32_space(self):
        """Test a float32 space keeps float32 XYZ for float32 input."""
        space = srgb(np.float32).linear_space
        assert space.fmt == np.dtype(np.float32)
        xyz = space.color_to_xyz(Rgb.broadcast(0.5, np.float32))
        assert xyz.fmt == np.dtype(np.float32)
        np.testing.assert_allclose(xyz.to_tuple(), D65_XYZ / 2, atol=1e-6)


class TestEncodedColorSpace:
    """Tests for the encoded wrapper around a linear space."""

    def test_delegates_geometry(self, srgb_space):
        """Test primaries, white point and matrices come from the linear space."""
        linear = srgb_space.linear_space
        assert srgb_space.primaries() == linear.primaries()
        assert srgb_space.white_point == linear.white_point
        assert srgb_space.xyz_transform is linear.xyz_transform
        assert srgb_space.fmt == linear.fmt

    def test_channel_curve(self, srgb_space):
        """Test channel-level encode/decode use the space's curve."""
        assert np.isclose(srgb_space.decode_channel(0.5), 0.21404114)
        assert np.isclose(srgb_space.encode_channel(0.5), 0.73535698)

    def test_encode_color(self, srgb_space):
        """Test a bare color is taken as linear and encoded."""
        encoded = srgb_space.encode_color(Rgb.broadcast(0.5))
        assert isinstance(encoded, EncodedColor)
        assert np.isclose(encoded.color.red.value, 0.73535698)

    def test_to_space_encoding_noop(self, srgb_space):
        """Test a color already in the space's encoding is returned unchanged."""
        color = EncodedColor(Rgb.broadcast(0.5), SrgbEncoding())
        assert srgb_space.to_space_encoding(color) is color

    def test_to_space_encoding_reencodes(self, srgb_space):
        """Test a gamma-encoded color is moved to the sRGB curve."""
        color = EncodedColor(Rgb.broadcast(0.5), GammaEncoding(2.2))
        moved = srgb_space.to_space_encoding(color)
        assert moved.encoding == SrgbEncoding()
        assert moved.decode().approx_eq(color.decode(), abs_tol=1e-12)

    def test_to_space_encoding_bare_rejected(self, srgb_space):
        """Test bare colors must be tagged first."""
        with pytest.raises(TypeError):
            srgb_space.to_space_encoding(Rgb.broadcast(0.5))

    def test_with_encoding(self, linear_srgb_space):
        """Test a linear space can be paired with a curve."""
        space = linear_srgb_space.with_encoding(GammaEncoding(2.2))
        assert isinstance(space, EncodedColorSpace)
        assert space.linear_space is linear_srgb_space

    def test_rejects_non_linear_space(self, srgb_space):
        """Test the wrapped space must be linear."""
        with pytest.raises(TypeError):
            EncodedColorSpace(srgb_space, SrgbEncoding())


class TestDiagnostics:
    """Tests for transform diagnostics."""

    def test_srgb_is_safe(self, srgb_space):
        """Test sRGB is well conditioned and self-consistent."""
        diag = transform_diagnostics(srgb_space)
        assert isinstance(diag, TransformDiagnostics)
        assert diag.is_safe()
        assert diag.determinant > 0
        assert diag.inverse_residual < 1e-12
        assert diag.white_point_error < 1e-12

    def test_method_matches_function(self, linear_srgb_space):
        """Test the method and the free function agree."""
        assert linear_srgb_space.diagnostics() == transform_diagnostics(linear_srgb_space)

    def test_summary(self, linear_srgb_space):
        """Test the summary names each measure."""
        text = linear_srgb_space.diagnostics().summary()
        assert "cond(M)" in text
        assert "det(M)" in text

    def test_ill_conditioned_not_safe(self):
        """Test a badly conditioned space reports unsafe."""
        with pytest.warns(UserWarning):
            space = LinearColorSpace.with_transforms(
                *SRGB_PRIMARIES,
                D65,
                Matrix3([1, 0, 0, 0, 1, 0, 0, 0, 1e-9]),
                Matrix3([1, 0, 0, 0, 1, 0, 0, 0, 1e9]),
            )
        assert not space.diagnostics().is_safe()
