"""Fixed-size 3×3 matrices for color-space transforms.

Only what the RGB ↔ XYZ derivation needs: products, vector transform,
determinant and inverse. Storage is a read-only numpy array so a matrix
can be shared freely between color spaces.

Singularity is judged relative to the Hadamard bound
    |det(M)| ≤ ‖row₀‖·‖row₁‖·‖row₂‖
so the test does not depend on the overall scale of the entries.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np

from .channel import DEFAULT_FORMAT, ScalarFormat, as_format, is_float_format

# |det| / Hadamard bound below this (in units of machine epsilon) is singular
_SINGULAR_EPS_FACTOR = 1e3


class SingularMatrixError(ValueError):
    """Raised when inverting a matrix whose determinant is numerically zero."""
    pass


class Matrix3:
    """A 3×3 matrix of floating-point scalars.

    Parameters
    ----------
    values : sequence of 9 floats
        Entries in row-major order.
    fmt : dtype
        Floating scalar format (default float64).
    """

    __slots__ = ("_m",)

    def __init__(self, values: Iterable[float], fmt: ScalarFormat = DEFAULT_FORMAT) -> None:
        dtype = as_format(fmt)
        if not is_float_format(dtype):
            raise TypeError(f"Matrix3 needs a floating format (got {dtype})")
        arr = np.array(list(values), dtype=dtype)
        if arr.size != 9:
            raise ValueError(f"Matrix3 needs 9 values, got {arr.size}")
        arr = arr.reshape(3, 3)
        arr.setflags(write=False)
        self._m = arr

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Matrix3":
        arr = np.asarray(arr)
        if arr.shape != (3, 3):
            raise ValueError(f"Expected shape (3, 3), got {arr.shape}")
        fmt = arr.dtype if is_float_format(arr.dtype) else DEFAULT_FORMAT
        return cls(arr.ravel(), fmt)

    @classmethod
    def from_columns(
        cls,
        c0: Sequence[float],
        c1: Sequence[float],
        c2: Sequence[float],
        fmt: ScalarFormat = DEFAULT_FORMAT,
    ) -> "Matrix3":
        arr = np.column_stack([np.asarray(c, dtype=as_format(fmt)) for c in (c0, c1, c2)])
        return cls(arr.ravel(), fmt)

    @classmethod
    def identity(cls, fmt: ScalarFormat = DEFAULT_FORMAT) -> "Matrix3":
        return cls(np.eye(3).ravel(), fmt)

    @property
    def fmt(self) -> np.dtype:
        return self._m.dtype

    def as_array(self) -> np.ndarray:
        """A writable copy of the entries, shape (3, 3)."""
        return np.array(self._m)

    def to_tuple(self) -> Tuple[float, ...]:
        return tuple(float(v) for v in self._m.ravel())

    def __getitem__(self, idx: Tuple[int, int]) -> float:
        return float(self._m[idx])

    def __repr__(self) -> str:
        rows = ", ".join("[" + ", ".join(f"{v:.7g}" for v in row) + "]" for row in self._m)
        return f"Matrix3([{rows}], fmt={self._m.dtype})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix3):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    def __hash__(self) -> int:
        return hash(self.to_tuple())

    def approx_eq(self, other: "Matrix3", abs_tol: float = 1e-9) -> bool:
        return bool(np.allclose(self._m, other._m, rtol=0.0, atol=abs_tol))

    def __matmul__(self, other: "Matrix3") -> "Matrix3":
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3((self._m @ other._m).ravel(), self.fmt)

    def matmul(self, other: "Matrix3") -> "Matrix3":
        return self @ other

    def transpose(self) -> "Matrix3":
        return Matrix3(self._m.T.ravel(), self.fmt)

    def transform_vector(self, vec: Sequence[float]) -> Tuple[float, float, float]:
        """Compute M·v for a 3-vector."""
        v = np.asarray(vec, dtype=self.fmt)
        if v.shape != (3,):
            raise ValueError(f"Expected a 3-vector, got shape {v.shape}")
        out = self._m @ v
        return float(out[0]), float(out[1]), float(out[2])

    def scale_columns(self, factors: Sequence[float]) -> "Matrix3":
        """Multiply column j by factors[j]."""
        f = np.asarray(factors, dtype=self.fmt)
        if f.shape != (3,):
            raise ValueError(f"Expected 3 column factors, got shape {f.shape}")
        return Matrix3((self._m * f[None, :]).ravel(), self.fmt)

    def determinant(self) -> float:
        """Cofactor expansion along the first row."""
        (a, b, c), (d, e, f), (g, h, i) = self._m.astype(np.float64)
        return float(a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g))

    def hadamard_bound(self) -> float:
        return float(np.prod(np.linalg.norm(self._m.astype(np.float64), axis=1)))

    def is_singular(self) -> bool:
        bound = self.hadamard_bound()
        if bound == 0.0:
            return True
        eps = float(np.finfo(self.fmt).eps)
        return abs(self.determinant()) <= _SINGULAR_EPS_FACTOR * eps * bound

    def inverse(self) -> "Matrix3":
        """Return M⁻¹ via the adjugate.

        Raises
        ------
        SingularMatrixError
            If the determinant is within floating-point tolerance of zero.
        """
        if self.is_singular():
            raise SingularMatrixError(
                f"Matrix is singular (det={self.determinant():.3e}, "
                f"Hadamard bound={self.hadamard_bound():.3e})"
            )
        (a, b, c), (d, e, f), (g, h, i) = self._m.astype(np.float64)
        det = self.determinant()
        adj = np.array(
            [
                [e * i - f * h, c * h - b * i, b * f - c * e],
                [f * g - d * i, a * i - c * g, c * d - a * f],
                [d * h - e * g, b * g - a * h, a * e - b * d],
            ]
        )
        return Matrix3((adj / det).ravel(), self.fmt)

    def condition_number(self) -> float:
        """2-norm condition number; ``inf`` for a singular matrix."""
        if self.is_singular():
            return float("inf")
        return float(np.linalg.cond(self._m.astype(np.float64)))


__all__ = ["Matrix3", "SingularMatrixError"]
