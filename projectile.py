import argparse

from flax import struct

from raylight import Canvas, Color, Tuple, point, vector


@struct.dataclass
class Projectile:
    position: Tuple  # Point
    velocity: Tuple  # Vector, distance per tick


@struct.dataclass
class Environment:
    gravity: Tuple  # Vector added to velocity every tick
    wind: Tuple     # Vector added to velocity every tick


def tick(env: Environment, proj: Projectile) -> Projectile:
    position = proj.position + proj.velocity
    velocity = proj.velocity + env.gravity + env.wind
    return Projectile(position=position, velocity=velocity)


def simulate(env: Environment, proj: Projectile, max_ticks=10_000):
    """Positions visited until the projectile drops to y <= 0 (at most max_ticks)."""
    positions = []
    while proj.position.y > 0.0 and len(positions) < max_ticks:
        proj = tick(env, proj)
        positions.append(proj.position)
    return positions


def plot(positions, width, height, color=Color.of(1.0, 0.0, 0.0)) -> Canvas:
    """Plot positions onto a canvas with y pointing up; off-canvas points are skipped."""
    canvas = Canvas(width, height)
    for p in positions:
        x = int(round(p.x))
        y = height - 1 - int(round(p.y))
        if 0 <= x < width and 0 <= y < height:
            canvas.write_pixel(x, y, color)
    return canvas


def main():
    parser = argparse.ArgumentParser(description="Projectile trajectory plotted onto a PPM canvas")
    parser.add_argument('--speed', type=float, default=11.25, help='Launch speed (velocity magnitude)')
    parser.add_argument('--width', type=int, default=900, help='Canvas width')
    parser.add_argument('--height', type=int, default=550, help='Canvas height')
    parser.add_argument('--output', type=str, default='projectile.ppm', help='Output PPM path')
    args = parser.parse_args()

    proj = Projectile(position=point(0.0, 1.0, 0.0), velocity=vector(1.0, 1.8, 0.0).normalize() * args.speed)
    env = Environment(gravity=vector(0.0, -0.1, 0.0), wind=vector(-0.01, 0.0, 0.0))

    positions = simulate(env, proj)
    for count, p in enumerate(positions, start=1):
        print(f"Tick {count}: x={p.x:.3f} y={p.y:.3f}")
    print(f"Projectile landed after {len(positions)} ticks.")

    canvas = plot(positions, args.width, args.height)
    with open(args.output, "w") as f:
        f.write(canvas.save())
    print(f"PPM saved to {args.output}")


if __name__ == "__main__":
    main()
