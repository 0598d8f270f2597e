import math

import pytest

from raylight import Material, PointLight, Color, DEFAULT_MATERIAL, WHITE, point, vector

H = math.sqrt(2) / 2

# --- Fixtures ---

@pytest.fixture
def material():
    return Material()

@pytest.fixture
def position():
    return point(0, 0, 0)

def white_light(x, y, z):
    return PointLight(position=point(x, y, z), intensity=Color.of(1, 1, 1))

# --- Tests for PointLight / Material defaults ---

def test_point_light_has_position_and_intensity():
    light = PointLight(position=point(0, 0, 0), intensity=Color.of(1, 1, 1))
    assert light.position == point(0, 0, 0)
    assert light.intensity == Color.of(1, 1, 1)

def test_default_material(material):
    assert material.color == WHITE
    assert material.ambient == 0.1
    assert material.diffuse == 0.9
    assert material.specular == 0.9
    assert material.shininess == 200.0
    assert material == DEFAULT_MATERIAL

def test_material_replace_keeps_other_defaults(material):
    shiny = material.replace(shininess=10.0)
    assert shiny.shininess == 10.0
    assert shiny.ambient == 0.1
    assert material.shininess == 200.0

# --- Tests for lightning ---

def test_eye_between_light_and_surface(material, position):
    result = material.lightning(white_light(0, 0, -10), position, vector(0, 0, -1), vector(0, 0, -1))
    assert result.isclose(Color.of(1.9, 1.9, 1.9))

def test_eye_offset_45_degrees(material, position):
    result = material.lightning(white_light(0, 0, -10), position, vector(0, H, -H), vector(0, 0, -1))
    assert result.isclose(Color.of(1.0, 1.0, 1.0))

def test_light_offset_45_degrees(material, position):
    result = material.lightning(white_light(0, 10, -10), position, vector(0, 0, -1), vector(0, 0, -1))
    assert result.isclose(Color.of(0.7364, 0.7364, 0.7364))

def test_eye_in_path_of_reflection(material, position):
    result = material.lightning(white_light(0, 10, -10), position, vector(0, -H, -H), vector(0, 0, -1))
    assert result.isclose(Color.of(1.6364, 1.6364, 1.6364))

def test_light_behind_surface(material, position):
    result = material.lightning(white_light(0, 0, 10), position, vector(0, 0, -1), vector(0, 0, -1))
    assert result.isclose(Color.of(0.1, 0.1, 0.1))

def test_lighting_alias(material, position):
    args = (white_light(0, 0, -10), position, vector(0, 0, -1), vector(0, 0, -1))
    assert material.lighting(*args) == material.lightning(*args)

def test_result_is_not_clamped(material, position):
    bright = PointLight(position=point(0, 0, -10), intensity=Color.of(2, 2, 2))
    result = material.lightning(bright, position, vector(0, 0, -1), vector(0, 0, -1))
    assert result.isclose(Color.of(3.8, 3.8, 3.8))

def test_surface_color_tints_result(position):
    red = Material(color=Color.of(1, 0, 0))
    result = red.lightning(white_light(0, 0, 10), position, vector(0, 0, -1), vector(0, 0, -1))
    # Ambient only, filtered by the surface color
    assert result.isclose(Color.of(0.1, 0.0, 0.0))

def test_lightning_is_pure(material, position):
    light = white_light(0, 10, -10)
    eyev = vector(0, -H, -H)
    first = material.lightning(light, position, eyev, vector(0, 0, -1))
    second = material.lightning(light, position, eyev, vector(0, 0, -1))
    assert first == second
    assert light.position == point(0, 10, -10)
