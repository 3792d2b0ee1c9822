"""Pytest configuration for chromaspace tests."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Provide a seeded random number generator for reproducibility."""
    return np.random.default_rng(42)


@pytest.fixture
def srgb_space():
    """Provide the sRGB color space (sRGB curve)."""
    from chromaspace.spaces import srgb
    return srgb()


@pytest.fixture
def linear_srgb_space():
    """Provide the linear sRGB color space (no curve)."""
    from chromaspace.spaces import linear_srgb
    return linear_srgb()
