import argparse
import math
import os
import sys
import time

import numpy as np
from PIL import Image
from tqdm import tqdm

from raylight import (
    Canvas, Color, Material, PointLight, Ray, Sphere,
    point, scaling, shearing, rotation_z, NonInvertibleMatrixError,
)

# --- Scene Configuration ---
RAY_ORIGIN = point(0.0, 0.0, -5.0)
LIGHT_POSITION = point(-10.0, 10.0, -10.0)
LIGHT_COLOR = Color.of(1.0, 1.0, 1.0)
SILHOUETTE_COLOR = Color.of(1.0, 0.0, 0.0)
SPHERE_COLOR = Color.of(1.0, 0.2, 1.0)

# Optional sphere deformations selectable from the command line
TRANSFORMS = {
    "none": None,
    "shrink-y": scaling(1.0, 0.5, 1.0),
    "shrink-x": scaling(0.5, 1.0, 1.0),
    "shrink-rotate": rotation_z(math.pi / 4) @ scaling(0.5, 1.0, 1.0),
    "shrink-skew": shearing(1, 0, 0, 0, 0, 0) @ scaling(0.5, 1.0, 1.0),
}


def _wall_ray(x, y, canvas_pixels, wall_z, wall_size):
    """Ray from RAY_ORIGIN through the centre of pixel (x, y) on the wall."""
    pixel_size = wall_size / canvas_pixels
    half = wall_size / 2.0
    # World y points up while canvas rows go down
    world_x = -half + pixel_size * x
    world_y = half - pixel_size * y
    position = point(world_x, world_y, wall_z)
    return Ray(origin=RAY_ORIGIN, direction=(position - RAY_ORIGIN).normalize())


def render_silhouette(sphere, canvas_pixels=100, wall_z=10.0, wall_size=7.0, color=SILHOUETTE_COLOR, progress=False):
    """Flat-coloured shadow of the sphere cast onto a wall behind it."""
    canvas = Canvas(canvas_pixels, canvas_pixels)
    for y in tqdm(range(canvas_pixels), desc="Rows", disable=not progress):
        for x in range(canvas_pixels):
            ray = _wall_ray(x, y, canvas_pixels, wall_z, wall_size)
            if sphere.intersect(ray).hit() is not None:
                canvas.write_pixel(x, y, color)
    return canvas


def render_shaded(sphere, light, canvas_pixels=100, wall_z=5.0, wall_size=10.0, progress=False):
    """Phong-shaded sphere, one ray per pixel."""
    canvas = Canvas(canvas_pixels, canvas_pixels)
    for y in tqdm(range(canvas_pixels), desc="Rows", disable=not progress):
        for x in range(canvas_pixels):
            ray = _wall_ray(x, y, canvas_pixels, wall_z, wall_size)
            hit = sphere.intersect(ray).hit()
            if hit is None:
                continue
            surface_point = ray.position(hit.t)
            normal = hit.object.normal_at(surface_point)
            eye = -ray.direction
            color = hit.object.material.lightning(light, surface_point, eye, normal)
            canvas.write_pixel(x, y, color)
    return canvas


def main():
    # --- Argument Parsing ---
    parser = argparse.ArgumentParser(description="Render a single sphere to a PPM image")
    parser.add_argument('--size', type=int, default=100, help='Canvas width and height in pixels')
    parser.add_argument('--silhouette', action='store_true', help='Flat silhouette instead of Phong shading')
    parser.add_argument('--transform', choices=sorted(TRANSFORMS), default='none', help='Deformation applied to the sphere')
    parser.add_argument('--output', type=str, default='sphere.ppm', help='Output PPM path')
    parser.add_argument('--png', action='store_true', help='Also write a PNG preview next to the PPM')
    args = parser.parse_args()

    if args.size <= 0:
        print(f"Error: --size must be positive, got {args.size}")
        sys.exit(1)

    sphere = Sphere(material=Material(color=SPHERE_COLOR))
    if TRANSFORMS[args.transform] is not None:
        sphere = sphere.set_transform(TRANSFORMS[args.transform])

    mode = "silhouette" if args.silhouette else "shaded"
    print(f"Rendering {args.size}x{args.size} {mode} sphere (transform: {args.transform})...")
    start_time = time.time()
    try:
        if args.silhouette:
            canvas = render_silhouette(sphere, canvas_pixels=args.size, progress=True)
        else:
            light = PointLight(position=LIGHT_POSITION, intensity=LIGHT_COLOR)
            canvas = render_shaded(sphere, light, canvas_pixels=args.size, progress=True)
    except NonInvertibleMatrixError as e:
        print(f"Error: sphere transform cannot be inverted: {e}")
        sys.exit(1)
    print(f"Rendering finished in {time.time() - start_time:.2f} seconds.")

    # --- Save Images ---
    with open(args.output, "w") as f:
        f.write(canvas.save())
    print(f"PPM saved to {args.output}")

    if args.png:
        output_png_path = os.path.splitext(args.output)[0] + ".png"
        img = Image.fromarray(np.ascontiguousarray(canvas.to_array()), 'RGB')
        img.save(output_png_path)
        print(f"PNG saved to {output_png_path}")


if __name__ == "__main__":
    main()
