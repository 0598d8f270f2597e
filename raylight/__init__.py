"""Numerical core of a minimal ray tracer: tuples, 4x4 transforms, spheres, Phong shading, PPM canvas."""

import jax

# All storage is double precision; must run before any array is created
jax.config.update("jax_enable_x64", True)

from .types import Tuple, Color, Ray, point, vector, ORIGIN, BLACK, WHITE
from .matrix import (
    Matrix4,
    IDENTITY,
    NonInvertibleMatrixError,
    translation,
    translate,
    scaling,
    rotation_x,
    rotation_y,
    rotation_z,
    shearing,
)
from .material import Material, PointLight, DEFAULT_MATERIAL
from .geometry import Sphere, Intersection, Intersections, hit
from .canvas import Canvas
from .utils import EPSILON, equal

__all__ = [
    "Tuple",
    "Color",
    "Ray",
    "point",
    "vector",
    "ORIGIN",
    "BLACK",
    "WHITE",
    "Matrix4",
    "IDENTITY",
    "NonInvertibleMatrixError",
    "translation",
    "translate",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "Material",
    "PointLight",
    "DEFAULT_MATERIAL",
    "Sphere",
    "Intersection",
    "Intersections",
    "hit",
    "Canvas",
    "EPSILON",
    "equal",
]
