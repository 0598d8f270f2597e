import jax.numpy as jnp
import numpy as np
from jax import jit

# Tolerance used for approximate float comparison throughout the package
EPSILON = 1e-4

# --- PPM Output Configuration ---
PPM_MAGIC = "P3"
PPM_MAX_COLOR_VALUE = 255
# Channel values are scaled by 256 (not 255) before truncation
PPM_CHANNEL_SCALE = 256.0


def equal(a, b, tol=EPSILON):
    """Approximate scalar comparison: |a - b| < tol."""
    return abs(float(a) - float(b)) < tol


# --- Vector Utilities ---
# All helpers below work on the last axis so they accept (4,) tuples,
# (3,) colors and batched (..., N) arrays alike.

@jit
def dot(v1, v2):
    return jnp.sum(v1 * v2, axis=-1)

@jit
def magnitude(v):
    return jnp.sqrt(dot(v, v))

@jit
def normalize(v):
    """Divide by the Euclidean norm over every component.

    Zero-length input is not guarded: the result is NaN, exactly as the
    division produces it.
    """
    return v / magnitude(v)[..., None]

@jit
def reflect(v, n):
    """Reflect vector v around normal n."""
    return v - n * 2.0 * dot(v, n)[..., None]

@jit
def cross3(a, b):
    """Cross product over the x, y, z components of homogeneous tuples (w dropped to 0)."""
    xyz = jnp.cross(a[..., :3], b[..., :3])
    return jnp.concatenate([xyz, jnp.zeros(xyz.shape[:-1] + (1,), dtype=xyz.dtype)], axis=-1)


# --- Output Utilities ---

def clamp_channel(values):
    """Map colour channel values onto integers in [0, 255].

    Policy, per channel:
        v < 0            -> 0
        v * 256 > 255    -> 255
        otherwise        -> floor(v * 256)
    NaN maps to 0. This is deliberately not round(v * 255).
    Accepts scalars or arrays; returns a numpy int64 array of the same shape.
    """
    v = np.nan_to_num(np.asarray(values, dtype=np.float64), nan=0.0)
    scaled = v * PPM_CHANNEL_SCALE
    clamped = np.where(
        np.floor(scaled) > PPM_MAX_COLOR_VALUE,
        PPM_MAX_COLOR_VALUE,
        np.where(v < 0.0, 0, np.floor(scaled)),
    )
    return clamped.astype(np.int64)
