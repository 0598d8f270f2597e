import math

import jax.numpy as jnp
import numpy as np
from flax import struct
from jax import jit

from .types import Tuple
from .utils import EPSILON


class NonInvertibleMatrixError(ValueError):
    """Raised when inverting a matrix whose determinant is exactly zero."""


# --- Cofactor Expansion Helpers ---
# These operate on plain square arrays (4x4, 3x3 or 2x2) and are traceable,
# so the jitted kernels below unroll them completely at compile time.

def submatrix(a, row: int, col: int):
    """Copy of `a` with `row` and `col` removed (4x4 -> 3x3, 3x3 -> 2x2)."""
    a = jnp.asarray(a, dtype=jnp.float64)
    return jnp.delete(jnp.delete(a, row, axis=0), col, axis=1)

def determinant(a):
    """Determinant by cofactor expansion along row 0; 2x2 uses ad - cb directly."""
    a = jnp.asarray(a, dtype=jnp.float64)
    if a.shape == (2, 2):
        return a[0, 0] * a[1, 1] - a[1, 0] * a[0, 1]
    det = 0.0
    for col in range(a.shape[1]):
        det = det + a[0, col] * cofactor(a, 0, col)
    return det

def minor(a, row: int, col: int):
    return determinant(submatrix(a, row, col))

def cofactor(a, row: int, col: int):
    m = minor(a, row, col)
    if (row + col) % 2 != 0:
        return -m
    return m


@jit
def _determinant4(a):
    return determinant(a)

@jit
def _adjugate_inverse(a):
    """Inverse via the transposed cofactor matrix divided by the determinant.

    Assumes a non-zero determinant; the caller checks it first.
    """
    det = determinant(a)
    inv = jnp.zeros_like(a)
    for row in range(4):
        for col in range(4):
            # Writing to [col, row] is the transpose step of the adjugate
            inv = inv.at[col, row].set(cofactor(a, row, col) / det)
    return inv

@jit
def _matmul(a, b):
    return a @ b


@struct.dataclass
class Matrix4:
    """4x4 float64 transform. Compose with `@` (or `*`); rightmost acts first."""
    data: jnp.ndarray  # Shape (4, 4), row-major

    def __post_init__(self):
        if isinstance(self.data, (list, tuple, np.ndarray)):
            arr = jnp.asarray(self.data, dtype=jnp.float64)
            if arr.shape != (4, 4):
                raise ValueError(f"Matrix4 requires a 4x4 literal, got shape {arr.shape}")
            object.__setattr__(self, 'data', arr)

    @classmethod
    def identity(cls) -> "Matrix4":
        return cls(jnp.eye(4, dtype=jnp.float64))

    def __getitem__(self, index) -> float:
        row, col = index
        return float(self.data[row, col])

    # --- Products ---
    def __matmul__(self, other):
        if isinstance(other, Matrix4):
            return Matrix4(_matmul(self.data, other.data))
        if isinstance(other, Tuple):
            return Tuple(_matmul(self.data, other.data))
        return NotImplemented

    def __mul__(self, other):
        return self.__matmul__(other)

    # --- Cofactor Expansion ---
    def submatrix(self, row: int, col: int):
        return submatrix(self.data, row, col)

    def minor(self, row: int, col: int) -> float:
        return float(minor(self.data, row, col))

    def cofactor(self, row: int, col: int) -> float:
        return float(cofactor(self.data, row, col))

    def determinant(self) -> float:
        return float(_determinant4(self.data))

    def is_invertible(self) -> bool:
        return self.determinant() != 0.0

    def inverse(self) -> "Matrix4":
        """Inverse matrix; raises NonInvertibleMatrixError when the determinant is 0.

        Recomputed on every call, there is no cache.
        """
        det = self.determinant()
        if det == 0.0:
            raise NonInvertibleMatrixError(f"Matrix is not invertible (determinant is 0):\n{np.asarray(self.data)}")
        return Matrix4(_adjugate_inverse(self.data))

    def transpose(self) -> "Matrix4":
        return Matrix4(self.data.T)

    # --- Fluent Chaining ---
    # Each call applies its transform after the ones already in the chain,
    # so `identity().rotate_x(a).scale(5, 5, 5)` rotates first, then scales.
    def translate(self, x, y, z) -> "Matrix4":
        return translation(x, y, z) @ self

    def scale(self, x, y, z) -> "Matrix4":
        return scaling(x, y, z) @ self

    def rotate_x(self, radians) -> "Matrix4":
        return rotation_x(radians) @ self

    def rotate_y(self, radians) -> "Matrix4":
        return rotation_y(radians) @ self

    def rotate_z(self, radians) -> "Matrix4":
        return rotation_z(radians) @ self

    def shear(self, xy, xz, yx, yz, zx, zy) -> "Matrix4":
        return shearing(xy, xz, yx, yz, zx, zy) @ self

    # --- Comparison ---
    def __eq__(self, other):
        if not isinstance(other, Matrix4):
            return NotImplemented
        return bool(jnp.array_equal(self.data, other.data))

    def __hash__(self):
        return hash(tuple(np.asarray(self.data).ravel().tolist()))

    def isclose(self, other: "Matrix4", tol: float = EPSILON) -> bool:
        return bool(jnp.all(jnp.abs(self.data - other.data) < tol))

    def __repr__(self):
        return f"Matrix4({np.asarray(self.data).tolist()})"


IDENTITY = Matrix4.identity()


# --- Transform Builders ---

def translation(x, y, z) -> Matrix4:
    return Matrix4([
        [1.0, 0.0, 0.0, x],
        [0.0, 1.0, 0.0, y],
        [0.0, 0.0, 1.0, z],
        [0.0, 0.0, 0.0, 1.0],
    ])

translate = translation

def scaling(x, y, z) -> Matrix4:
    return Matrix4([
        [x, 0.0, 0.0, 0.0],
        [0.0, y, 0.0, 0.0],
        [0.0, 0.0, z, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])

def rotation_x(r) -> Matrix4:
    c, s = math.cos(r), math.sin(r)
    return Matrix4([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, c, -s, 0.0],
        [0.0, s, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])

def rotation_y(r) -> Matrix4:
    c, s = math.cos(r), math.sin(r)
    return Matrix4([
        [c, 0.0, s, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [-s, 0.0, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])

def rotation_z(r) -> Matrix4:
    c, s = math.cos(r), math.sin(r)
    return Matrix4([
        [c, -s, 0.0, 0.0],
        [s, c, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])

def shearing(xy, xz, yx, yz, zx, zy) -> Matrix4:
    """Shear: each output axis moves in proportion to the other two (e.g. xy: x by y)."""
    return Matrix4([
        [1.0, xy, xz, 0.0],
        [yx, 1.0, yz, 0.0],
        [zx, zy, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])
