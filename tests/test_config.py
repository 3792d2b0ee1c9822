"""Tests for color-space parameter sets and the named spaces."""

import json

import numpy as np
import pytest

from chromaspace.color_space import EncodedColorSpace, InvalidColorSpace, LinearColorSpace
from chromaspace.config import ColorSpaceConfig
from chromaspace.encoding import GammaEncoding, LinearEncoding, SrgbEncoding
from chromaspace.primary import InvalidParameter
from chromaspace.spaces import ADOBE_RGB, PROPHOTO_RGB, SRGB, adobe_rgb, linear_srgb, prophoto_rgb, srgb
from chromaspace.white_point import D50, D65, white_point


class TestColorSpaceConfig:
    """Tests for ColorSpaceConfig."""

    def test_defaults(self):
        """Test default white point and encoding."""
        cfg = ColorSpaceConfig(red=(0.64, 0.33), green=(0.3, 0.6), blue=(0.15, 0.06))
        assert cfg.white_point == "D65"
        assert cfg.encoding == {"name": "linear"}
        assert cfg.fmt == "float64"

    def test_build_linear(self):
        """Test a linear encoding builds a LinearColorSpace."""
        space = ColorSpaceConfig(red=(0.64, 0.33), green=(0.3, 0.6), blue=(0.15, 0.06)).build()
        assert isinstance(space, LinearColorSpace)
        assert space.xyz_transform.approx_eq(linear_srgb().xyz_transform, abs_tol=1e-15)

    def test_build_encoded(self):
        """Test a curve builds an EncodedColorSpace."""
        space = ColorSpaceConfig(**SRGB).build()
        assert isinstance(space, EncodedColorSpace)
        assert space.encoding == SrgbEncoding()

    def test_json_roundtrip(self):
        """Test to_json / from_json round trip."""
        cfg = ColorSpaceConfig(**ADOBE_RGB, fmt="float32")
        restored = ColorSpaceConfig.from_json(cfg.to_json())
        assert restored == cfg
        assert restored.encoding_object() == GammaEncoding(563.0 / 256.0)

    def test_json_is_plain(self):
        """Test the JSON form is plain lists and strings."""
        payload = json.loads(ColorSpaceConfig(**PROPHOTO_RGB).to_json())
        assert payload["red"] == [0.7347, 0.2653]
        assert payload["white_point"] == "D50"
        assert payload["encoding"] == {"name": "gamma", "gamma": 1.8}

    def test_from_json_accepts_dict(self):
        """Test from_json also takes an already parsed dict."""
        cfg = ColorSpaceConfig(**SRGB)
        assert ColorSpaceConfig.from_json(cfg.to_dict()) == cfg

    def test_xyz_white_point(self):
        """Test an explicit XYZ white point survives a round trip."""
        cfg = ColorSpaceConfig(red=(0.64, 0.33), green=(0.3, 0.6), blue=(0.15, 0.06), white_point=(1.0, 1.0, 1.0))
        restored = ColorSpaceConfig.from_json(cfg.to_json())
        assert restored.white_point == (1.0, 1.0, 1.0)
        assert restored.white_point_xyz() == (1.0, 1.0, 1.0)

    def test_white_point_name_case(self):
        """Test illuminant names are case-insensitive."""
        cfg = ColorSpaceConfig(red=(0.64, 0.33), green=(0.3, 0.6), blue=(0.15, 0.06), white_point="d50")
        assert cfg.white_point == "D50"
        assert cfg.white_point_xyz() == (D50.X, D50.Y, D50.Z)

    def test_from_space(self):
        """Test describing a built space recovers its parameters."""
        assert ColorSpaceConfig.from_space(srgb(), white_point_name="D65") == ColorSpaceConfig(**SRGB)
        cfg = ColorSpaceConfig.from_space(adobe_rgb())
        assert cfg.white_point == (D65.X, D65.Y, D65.Z)
        assert cfg.encoding_object() == GammaEncoding(563.0 / 256.0)

    def test_from_space_linear(self):
        """Test a linear space serializes a linear encoding."""
        cfg = ColorSpaceConfig.from_space(linear_srgb())
        assert cfg.encoding_object() == LinearEncoding()

    def test_float32(self):
        """Test the format reaches the built space."""
        space = ColorSpaceConfig(**SRGB, fmt="float32").build()
        assert space.fmt == np.dtype(np.float32)


class TestInvalidConfig:
    """Tests for parameter validation."""

    def _params(self, **overrides):
        params = dict(SRGB)
        params.update(overrides)
        return params

    def test_unknown_white_point(self):
        """Test unknown illuminant names are rejected."""
        with pytest.raises(InvalidParameter, match="Unknown white point"):
            ColorSpaceConfig(**self._params(white_point="D99"))

    def test_white_point_not_finite(self):
        """Test non-finite XYZ white points are rejected."""
        with pytest.raises(InvalidParameter):
            ColorSpaceConfig(**self._params(white_point=(1.0, float("inf"), 1.0)))

    def test_zero_y_primary(self):
        """Test a primary with y = 0 is rejected."""
        with pytest.raises(InvalidParameter):
            ColorSpaceConfig(**self._params(red=(0.3, 0.0)))

    def test_short_primary(self):
        """Test a primary must be an (x, y) pair."""
        with pytest.raises(InvalidParameter):
            ColorSpaceConfig(**self._params(green=(0.3,)))

    @pytest.mark.parametrize("fmt", ["int32", "uint8", "bool"])
    def test_non_float_format(self, fmt):
        """Test only floating formats are accepted."""
        with pytest.raises(InvalidParameter):
            ColorSpaceConfig(**self._params(fmt=fmt))

    @pytest.mark.parametrize("encoding", [{"name": "pq"}, {"name": "gamma", "gamma": -1.0}, {}])
    def test_bad_encoding(self, encoding):
        """Test unknown or invalid encodings are rejected."""
        with pytest.raises(InvalidParameter):
            ColorSpaceConfig(**self._params(encoding=encoding))

    def test_collinear_primaries_fail_at_build(self):
        """Test dependent primaries pass validation but fail to build."""
        cfg = ColorSpaceConfig(red=(0.5, 0.25), green=(0.25, 0.5), blue=(0.375, 0.375))
        with pytest.raises(InvalidColorSpace):
            cfg.build()


class TestNamedSpaces:
    """Tests for the built-in space factories."""

    def test_srgb(self):
        """Test sRGB uses D65 and the sRGB curve."""
        space = srgb()
        assert space.encoding == SrgbEncoding()
        assert space.red_primary.to_tuple() == (0.64, 0.33)

    def test_linear_srgb(self):
        """Test linear sRGB shares sRGB's geometry without a curve."""
        assert linear_srgb().xyz_transform == srgb().xyz_transform
        assert linear_srgb().encoding == LinearEncoding()

    def test_prophoto(self):
        """Test ProPhoto uses D50 and gamma 1.8."""
        space = prophoto_rgb()
        assert space.encoding == GammaEncoding(1.8)
        assert space.white_point.approx_eq(white_point("d50").xyz())

    def test_white_point_lookup(self):
        """Test unknown names raise ValueError."""
        with pytest.raises(ValueError):
            white_point("F2")
