"""Pytest configuration for pathtracer tests.

Shared fixtures: seeded generators, small hand-checkable scenes, and helpers
that compute expected colors directly from the closed-form formulas.
"""

import math
import os
import random

# pygame must never open a real window during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian


def sky(direction):
    """Background gradient for a direction given as a 3-tuple."""
    length = math.sqrt(sum(c * c for c in direction))
    t = 0.5 * (direction[1] / length + 1.0)
    return (1.0 - 0.5 * t, 1.0 - 0.3 * t, 1.0)


def gamma(color):
    """Gamma 2 plus clamp, as applied to every finished pixel."""
    return tuple(min(1.0, math.sqrt(max(0.0, c))) for c in color)


@pytest.fixture
def rng():
    """A deterministic generator for scatter and sampling tests."""
    return random.Random(1234)


@pytest.fixture
def lone_sphere_world():
    """A single diffuse sphere of radius 0.5 centered at (0, 0, -1)."""
    world = HittableList()
    world.add(Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Color(0.5, 0.5, 0.5))))
    return world


@pytest.fixture
def square_camera():
    """Pinhole sensor at the origin: viewport 2x2 at distance 1, looking down -z."""
    return Camera.from_viewport(2.0, 1.0, focal_length=1.0)
