import math

import jax.numpy as jnp
import pytest

from raylight import Tuple, Color, Ray, point, vector, ORIGIN, BLACK, WHITE, translation, scaling


# --- Tests for Tuple construction ---

def test_point_has_w_one():
    p = point(4.3, -4.2, 3.1)
    assert (p.x, p.y, p.z, p.w) == (4.3, -4.2, 3.1, 1.0)
    assert p.is_point()
    assert not p.is_vector()

def test_vector_has_w_zero():
    v = vector(4.3, -4.2, 3.1)
    assert v.w == 0.0
    assert v.is_vector()
    assert not v.is_point()

def test_storage_is_float64():
    assert point(1, 2, 3).data.dtype == jnp.float64

def test_tuple_from_sequence():
    assert Tuple([4.3, -4.2, 3.1, 1.0]) == point(4.3, -4.2, 3.1)

def test_tuple_rejects_wrong_length():
    with pytest.raises(ValueError):
        Tuple([1.0, 2.0, 3.0])

# --- Tests for Tuple arithmetic ---

def test_adding_vector_to_point():
    assert point(3, -2, 5) + vector(-2, 3, 1) == point(1, 1, 6)

def test_adding_two_vectors_stays_vector():
    assert (vector(1, 2, 3) + vector(1, 1, 1)).w == 0.0

def test_subtracting_two_points_gives_vector():
    assert point(3, 2, 1) - point(5, 6, 7) == vector(-2, -4, -6)

def test_subtracting_vector_from_point_forces_w_zero():
    # The difference of any two tuples is tagged as a vector
    assert (point(3, 2, 1) - vector(5, 6, 7)).w == 0.0

def test_negating_tuple():
    assert -Tuple.of(1, -2, 3, -4) == Tuple.of(-1, 2, -3, 4)

def test_scalar_multiplication_and_division():
    a = Tuple.of(1, -2, 3, -4)
    assert a * 3.5 == Tuple.of(3.5, -7, 10.5, -14)
    assert 0.5 * a == Tuple.of(0.5, -1, 1.5, -2)
    assert a / 2 == Tuple.of(0.5, -1, 1.5, -2)

def test_arithmetic_does_not_mutate_operands():
    a = point(1, 2, 3)
    b = vector(1, 1, 1)
    _ = a + b
    _ = a - b
    _ = -a
    assert a == point(1, 2, 3)
    assert b == vector(1, 1, 1)

# --- Tests for Tuple products and norms ---

def test_magnitude():
    assert vector(0, 0, 1).magnitude() == 1.0
    assert vector(1, 2, 3).magnitude() == pytest.approx(math.sqrt(14))
    assert vector(-1, -2, -3).magnitude() == pytest.approx(math.sqrt(14))

def test_magnitude_includes_w():
    assert Tuple.of(0, 0, 0, 1).magnitude() == 1.0

def test_normalize():
    assert vector(4, 0, 0).normalize() == vector(1, 0, 0)
    n = vector(1, 2, 3).normalize()
    s = math.sqrt(14)
    assert n.isclose(vector(1 / s, 2 / s, 3 / s))
    assert n.magnitude() == pytest.approx(1.0)

def test_normalize_zero_vector_gives_nan():
    n = vector(0, 0, 0).normalize()
    assert math.isnan(n.x) and math.isnan(n.y) and math.isnan(n.z)

def test_dot_product():
    assert vector(1, 2, 3).dot(vector(2, 3, 4)) == 20.0

def test_cross_product():
    a = vector(1, 2, 3)
    b = vector(2, 3, 4)
    assert a.cross(b) == vector(-1, 2, -1)
    assert b.cross(a) == vector(1, -2, 1)

def test_reflect_vector_approaching_at_45():
    assert vector(1, -1, 0).reflect(vector(0, 1, 0)) == vector(1, 1, 0)

def test_reflect_vector_off_slanted_surface():
    h = math.sqrt(2) / 2
    r = vector(0, -1, 0).reflect(vector(h, h, 0))
    assert r.isclose(vector(1, 0, 0))

# --- Tests for Tuple comparison ---

def test_equality_is_exact_isclose_is_approximate():
    a = point(1.0, 2.0, 3.0)
    b = point(1.0, 2.0, 3.00001)
    assert a != b
    assert a.isclose(b)
    assert not a.isclose(point(1.0, 2.0, 3.001))

def test_tuples_are_hashable():
    assert len({point(1, 2, 3), point(1, 2, 3), vector(1, 2, 3)}) == 2

def test_origin_constant():
    assert ORIGIN == point(0, 0, 0)

# --- Tests for Color ---

def test_color_components():
    c = Color.of(-0.5, 0.4, 1.7)
    assert (c.red, c.green, c.blue) == (-0.5, 0.4, 1.7)

def test_color_add_subtract():
    c1 = Color.of(0.9, 0.6, 0.75)
    c2 = Color.of(0.7, 0.1, 0.25)
    assert (c1 + c2).isclose(Color.of(1.6, 0.7, 1.0))
    assert (c1 - c2).isclose(Color.of(0.2, 0.5, 0.5))

def test_color_scalar_multiplication():
    assert Color.of(0.2, 0.3, 0.4) * 2 == Color.of(0.4, 0.6, 0.8)
    assert 2 * Color.of(0.2, 0.3, 0.4) == Color.of(0.4, 0.6, 0.8)
    assert Color.of(0.4, 0.6, 0.8) / 2 == Color.of(0.2, 0.3, 0.4)

def test_color_hadamard_product():
    c1 = Color.of(1, 0.2, 0.4)
    c2 = Color.of(0.9, 1, 0.1)
    assert (c1 * c2).isclose(Color.of(0.9, 0.2, 0.04))
    assert c1.hadamard(c2) == c1 * c2

def test_color_negation():
    assert -Color.of(1, -2, 3) == Color.of(-1, 2, -3)

def test_color_constants():
    assert BLACK == Color.of(0, 0, 0)
    assert WHITE == Color.of(1, 1, 1)

def test_color_rejects_wrong_length():
    with pytest.raises(ValueError):
        Color([1.0, 0.0])

# --- Tests for Ray ---

@pytest.fixture
def sample_ray():
    return Ray(origin=point(2, 3, 4), direction=vector(1, 0, 0))

def test_ray_keeps_origin_and_direction(sample_ray):
    assert sample_ray.origin == point(2, 3, 4)
    assert sample_ray.direction == vector(1, 0, 0)

def test_ray_position(sample_ray):
    assert sample_ray.position(0) == point(2, 3, 4)
    assert sample_ray.position(1) == point(3, 3, 4)
    assert sample_ray.position(-1) == point(1, 3, 4)
    assert sample_ray.position(2.5) == point(4.5, 3, 4)

def test_translating_ray():
    r = Ray(origin=point(1, 2, 3), direction=vector(0, 1, 0))
    r2 = r.transform(translation(3, 4, 5))
    assert r2.origin == point(4, 6, 8)
    # Translation does not move a vector
    assert r2.direction == vector(0, 1, 0)

def test_scaling_ray():
    r = Ray(origin=point(1, 2, 3), direction=vector(0, 1, 0))
    r2 = r.transform(scaling(2, 3, 4))
    assert r2.origin == point(2, 6, 12)
    assert r2.direction == vector(0, 3, 0)

def test_transform_returns_new_ray():
    r = Ray(origin=point(1, 2, 3), direction=vector(0, 1, 0))
    r.transform(translation(3, 4, 5))
    assert r == Ray(origin=point(1, 2, 3), direction=vector(0, 1, 0))
