import jax.numpy as jnp
import numpy as np
from flax import struct

from .utils import EPSILON, dot, magnitude, normalize, reflect, cross3

# --- Homogeneous Tuple Configuration ---
POINT_W = 1.0
VECTOR_W = 0.0


def _as_float_array(values, shape):
    arr = jnp.asarray(values, dtype=jnp.float64)
    if arr.shape != shape:
        raise ValueError(f"Expected components of shape {shape}, got {arr.shape}")
    return arr


@struct.dataclass
class Tuple:
    """Homogeneous 4-component value: a point (w=1) or a free vector (w=0).

    Storage is a float64 array of shape (4,). Every operation returns a new
    Tuple; the stored array is never updated in place.
    """
    data: jnp.ndarray  # Shape (4,): x, y, z, w

    def __post_init__(self):
        # Accept plain sequences; arrays and tracers pass through untouched
        if isinstance(self.data, (list, tuple, np.ndarray)):
            object.__setattr__(self, 'data', _as_float_array(self.data, (4,)))

    @classmethod
    def of(cls, x, y, z, w):
        return cls(data=jnp.array([x, y, z, w], dtype=jnp.float64))

    # --- Components ---
    @property
    def x(self) -> float:
        return float(self.data[0])

    @property
    def y(self) -> float:
        return float(self.data[1])

    @property
    def z(self) -> float:
        return float(self.data[2])

    @property
    def w(self) -> float:
        return float(self.data[3])

    def is_point(self) -> bool:
        return self.w == POINT_W

    def is_vector(self) -> bool:
        return self.w == VECTOR_W

    # --- Arithmetic ---
    def __add__(self, other: "Tuple") -> "Tuple":
        return Tuple(self.data + other.data)

    def __sub__(self, other: "Tuple") -> "Tuple":
        # Difference of two tuples is always a vector
        return Tuple((self.data - other.data).at[3].set(VECTOR_W))

    def __neg__(self) -> "Tuple":
        return Tuple(-self.data)

    def __mul__(self, scalar) -> "Tuple":
        return Tuple(self.data * scalar)

    def __rmul__(self, scalar) -> "Tuple":
        return self.__mul__(scalar)

    def __truediv__(self, scalar) -> "Tuple":
        return Tuple(self.data / scalar)

    def dot(self, other: "Tuple") -> float:
        return float(dot(self.data, other.data))

    def cross(self, other: "Tuple") -> "Tuple":
        return Tuple(cross3(self.data, other.data))

    def magnitude(self) -> float:
        return float(magnitude(self.data))

    def normalize(self) -> "Tuple":
        return Tuple(normalize(self.data))

    def reflect(self, normal: "Tuple") -> "Tuple":
        return Tuple(reflect(self.data, normal.data))

    # --- Comparison ---
    def __eq__(self, other):
        if not isinstance(other, Tuple):
            return NotImplemented
        return bool(jnp.array_equal(self.data, other.data))

    def __hash__(self):
        return hash(tuple(np.asarray(self.data).tolist()))

    def isclose(self, other: "Tuple", tol: float = EPSILON) -> bool:
        return bool(jnp.all(jnp.abs(self.data - other.data) < tol))

    def __repr__(self):
        return f"Tuple(x={self.x}, y={self.y}, z={self.z}, w={self.w})"


def point(x, y, z) -> Tuple:
    return Tuple.of(x, y, z, POINT_W)


def vector(x, y, z) -> Tuple:
    return Tuple.of(x, y, z, VECTOR_W)


ORIGIN = point(0.0, 0.0, 0.0)


@struct.dataclass
class Color:
    """RGB triple with unbounded float64 components (clamped only on output)."""
    data: jnp.ndarray  # Shape (3,): red, green, blue

    def __post_init__(self):
        if isinstance(self.data, (list, tuple, np.ndarray)):
            object.__setattr__(self, 'data', _as_float_array(self.data, (3,)))

    @classmethod
    def of(cls, red, green, blue):
        return cls(data=jnp.array([red, green, blue], dtype=jnp.float64))

    @property
    def red(self) -> float:
        return float(self.data[0])

    @property
    def green(self) -> float:
        return float(self.data[1])

    @property
    def blue(self) -> float:
        return float(self.data[2])

    def __add__(self, other: "Color") -> "Color":
        return Color(self.data + other.data)

    def __sub__(self, other: "Color") -> "Color":
        return Color(self.data - other.data)

    def __neg__(self) -> "Color":
        return Color(-self.data)

    def __mul__(self, other) -> "Color":
        # Color * Color is the component-wise (Hadamard) product
        if isinstance(other, Color):
            return self.hadamard(other)
        return Color(self.data * other)

    def __rmul__(self, scalar) -> "Color":
        return Color(self.data * scalar)

    def __truediv__(self, scalar) -> "Color":
        return Color(self.data / scalar)

    def hadamard(self, other: "Color") -> "Color":
        return Color(self.data * other.data)

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return bool(jnp.array_equal(self.data, other.data))

    def __hash__(self):
        return hash(tuple(np.asarray(self.data).tolist()))

    def isclose(self, other: "Color", tol: float = EPSILON) -> bool:
        return bool(jnp.all(jnp.abs(self.data - other.data) < tol))

    def __repr__(self):
        return f"Color(red={self.red}, green={self.green}, blue={self.blue})"


BLACK = Color.of(0.0, 0.0, 0.0)
WHITE = Color.of(1.0, 1.0, 1.0)


@struct.dataclass
class Ray:
    origin: Tuple     # Point
    direction: Tuple  # Vector, not required to be normalized

    def position(self, t) -> Tuple:
        """Point reached after travelling t units of direction from origin."""
        return self.origin + self.direction * t

    def transform(self, matrix) -> "Ray":
        """Return a new ray with origin and direction multiplied by matrix."""
        return Ray(origin=matrix @ self.origin, direction=matrix @ self.direction)
