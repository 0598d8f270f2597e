import jax.numpy as jnp
from flax import struct
from dataclasses import field

from .types import Tuple, Color, BLACK, WHITE


@struct.dataclass
class PointLight:
    position: Tuple   # Point in world space
    intensity: Color  # Emitted color; no falloff with distance


@struct.dataclass
class Material:
    """Phong surface parameters."""
    color: Color = field(default_factory=lambda: WHITE)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    def lightning(self, light: PointLight, point: Tuple, eyev: Tuple, normalv: Tuple) -> Color:
        """Phong shading of `point` as seen along `eyev` with surface normal `normalv`.

        Sum of ambient, diffuse and specular terms. The result is not clamped,
        components can exceed 1.0. Pure function of its inputs.
        """
        # Combine surface color with the light's color
        effective_color = self.color * light.intensity
        ambient = effective_color * self.ambient

        # Direction to the light source
        lightv = (light.position - point).normalize()

        # Cosine of the angle between light vector and normal.
        # Negative means the light is on the other side of the surface.
        light_dot_normal = lightv.dot(normalv)
        if light_dot_normal < 0.0:
            diffuse = BLACK
            specular = BLACK
        else:
            diffuse = effective_color * self.diffuse * light_dot_normal

            # Cosine of the angle between reflection vector and eye vector.
            # Non-positive means the light reflects away from the eye.
            reflectv = (-lightv).reflect(normalv)
            reflect_dot_eye = reflectv.dot(eyev)
            if reflect_dot_eye <= 0.0:
                specular = BLACK
            else:
                factor = float(jnp.power(reflect_dot_eye, self.shininess))
                specular = light.intensity * self.specular * factor

        return ambient + diffuse + specular

    lighting = lightning


DEFAULT_MATERIAL = Material()
