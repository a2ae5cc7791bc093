"""Pytest configuration for pathtracer tests.

Shared fixtures: a seeded random source so sampling tests are repeatable,
and a few tiny scenes that render in well under a second.
"""

import random

import pytest

from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.quad import Quad
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def unit_sphere():
    """Unit sphere at the origin with a grey diffuse material."""
    return Sphere(Point3(0, 0, 0), 1.0, Lambertian(Color(0.5, 0.5, 0.5)))


@pytest.fixture
def lit_scene():
    """A diffuse sphere under a downward-facing area light.

    Returns (world, lights, camera settings) like the builders in
    pathtracer.scenes.
    """
    world = HittableList()
    world.add(Sphere(Point3(0, 0, 0), 1.0, Lambertian(Color(0.7, 0.7, 0.7))))
    world.add(Quad(Point3(-1, 3, -1), Vector3(2, 0, 0), Vector3(0, 0, 2),
                   DiffuseLight(Color(8, 8, 8))))
    lights = HittableList([Quad(Point3(-1, 3, -1), Vector3(2, 0, 0), Vector3(0, 0, 2))])
    camera_settings = dict(
        aspect_ratio=1.0,
        background=Color(0, 0, 0),
        vfov=40,
        lookfrom=Point3(0, 0, 6),
        lookat=Point3(0, 0, 0),
    )
    return world, lights, camera_settings


def approx_vec(v, expected, tol=1e-9):
    return all(abs(a - b) <= tol for a, b in zip(v, expected))
