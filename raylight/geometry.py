from dataclasses import field
from typing import Iterable, Iterator, Optional, Tuple as TupleType

import jax.numpy as jnp
from flax import struct
from jax import jit

from .types import Tuple, Ray, ORIGIN
from .matrix import Matrix4, IDENTITY
from .material import Material, DEFAULT_MATERIAL
from .utils import dot, normalize


# --- Sphere Kernels ---

@jit
def _unit_sphere_roots(direction, sphere_to_ray):
    """Quadratic for a ray against the unit sphere at the origin (object space).

    Returns (discriminant, t_near, t_far). The roots are only meaningful when
    the discriminant is non-negative.
    """
    a = dot(direction, direction)
    b = 2.0 * dot(direction, sphere_to_ray)
    c = dot(sphere_to_ray, sphere_to_ray) - 1.0
    discriminant = b * b - 4.0 * a * c

    sqrt_discriminant = jnp.sqrt(jnp.maximum(discriminant, 0.0))  # Avoid NaN on a miss
    t1 = (-b - sqrt_discriminant) / (2.0 * a)
    t2 = (-b + sqrt_discriminant) / (2.0 * a)
    return discriminant, t1, t2

@jit
def _world_normal(inverse, world_point, origin):
    object_point = inverse @ world_point
    object_normal = (object_point - origin).at[3].set(0.0)
    # Inverse-transpose keeps the normal perpendicular under non-uniform scaling;
    # it can leak a translation into w, so w is zeroed before normalizing
    world_normal = (inverse.T @ object_normal).at[3].set(0.0)
    return normalize(world_normal)


@struct.dataclass
class Sphere:
    """Unit sphere centred on the object-space origin.

    Size, position and orientation in the world come only from `transform`.
    Instances are immutable values; the setters return a modified copy.
    """
    transform: Matrix4 = field(default_factory=lambda: IDENTITY)
    material: Material = field(default_factory=lambda: DEFAULT_MATERIAL)

    def set_transform(self, transform: Matrix4) -> "Sphere":
        # Invertibility is only checked when the inverse is next needed
        return self.replace(transform=transform)

    def set_material(self, material: Material) -> "Sphere":
        return self.replace(material=material)

    def intersect(self, ray: Ray) -> "Intersections":
        """Both roots of the ray against this sphere, near root first.

        No filtering: tangent rays give the same t twice, and roots behind the
        ray origin are returned as negative t. A miss gives an empty set.
        Raises NonInvertibleMatrixError if the transform cannot be inverted.
        """
        local_ray = ray.transform(self.transform.inverse())
        sphere_to_ray = local_ray.origin - ORIGIN

        discriminant, t1, t2 = _unit_sphere_roots(local_ray.direction.data, sphere_to_ray.data)
        if float(discriminant) < 0.0:
            return Intersections()

        return Intersections([
            Intersection(t=float(t1), object=self),
            Intersection(t=float(t2), object=self),
        ])

    def normal_at(self, world_point: Tuple) -> Tuple:
        """Unit surface normal in world space at a point on the sphere."""
        inverse = self.transform.inverse()
        return Tuple(_world_normal(inverse.data, world_point.data, ORIGIN.data))


@struct.dataclass
class Intersection:
    t: float        # Distance along the ray, in units of its direction
    object: Sphere  # The sphere that was hit


class Intersections:
    """Ordered collection of intersections, kept in the order they were produced."""

    def __init__(self, intersections: Iterable[Intersection] = ()):
        self._intersections: TupleType[Intersection, ...] = tuple(intersections)

    @property
    def intersections(self) -> TupleType[Intersection, ...]:
        return self._intersections

    def __len__(self):
        return len(self._intersections)

    def __getitem__(self, index) -> Intersection:
        return self._intersections[index]

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._intersections)

    def __add__(self, other: "Intersections") -> "Intersections":
        return Intersections(self._intersections + tuple(other))

    def __eq__(self, other):
        if not isinstance(other, Intersections):
            return NotImplemented
        return self._intersections == other._intersections

    def __repr__(self):
        return f"Intersections({list(self._intersections)!r})"

    def hit(self) -> Optional[Intersection]:
        return hit(self)


def hit(intersections: Iterable[Intersection]) -> Optional[Intersection]:
    """The visible intersection: smallest t among those with t >= 0.

    Negative t lies behind the ray origin and is never selected. Returns
    None when nothing qualifies. Input order does not matter.
    """
    visible = [i for i in intersections if i.t >= 0.0]
    if not visible:
        return None
    return min(visible, key=lambda i: i.t)
