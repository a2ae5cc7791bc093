"""Unit tests for the core value types.

Tests cover:
- Vector3 arithmetic, normalization and degenerate vectors
- Interval membership, clamping and padding
- AABB slab intersection, padding and merging
- Orthonormal bases and sampling helpers
"""

import math

import pytest

from pathtracer.core.aabb import AABB, MIN_EXTENT
from pathtracer.core.interval import Interval
from pathtracer.core.onb import ONB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import (random_cosine_direction, random_in_unit_disk,
                                   random_unit_vector, reflect, reflectance, refract)
from pathtracer.core.vector import Vector3


class TestVector3:
    """Tests for Vector3 arithmetic."""

    def test_arithmetic(self):
        """Component-wise add, subtract, negate and scale."""
        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)
        assert a + b == Vector3(5, 7, 9)
        assert b - a == Vector3(3, 3, 3)
        assert -a == Vector3(-1, -2, -3)
        assert a * 2 == Vector3(2, 4, 6)
        assert 2 * a == Vector3(2, 4, 6)
        assert a * b == Vector3(4, 10, 18)
        assert b / 2 == Vector3(2, 2.5, 3)

    def test_dot_and_cross(self):
        """Cross product of x and y is z."""
        x = Vector3(1, 0, 0)
        y = Vector3(0, 1, 0)
        assert x.dot(y) == 0
        assert x.cross(y) == Vector3(0, 0, 1)
        assert y.cross(x) == Vector3(0, 0, -1)

    def test_normalize(self):
        """Normalized vectors have unit length; zero stays zero."""
        v = Vector3(3, 4, 0).normalize()
        assert abs(v.length() - 1.0) < 1e-12
        assert Vector3(0, 0, 0).normalize() == Vector3(0, 0, 0)

    def test_near_zero(self):
        assert Vector3(1e-9, -1e-9, 0).near_zero()
        assert not Vector3(1e-3, 0, 0).near_zero()

    def test_indexing(self):
        v = Vector3(7, 8, 9)
        assert (v[0], v[1], v[2]) == (7, 8, 9)
        assert tuple(v) == (7, 8, 9)
        with pytest.raises(IndexError):
            v[3]

    def test_is_finite(self):
        assert Vector3(1, 2, 3).is_finite()
        assert not Vector3(math.nan, 0, 0).is_finite()
        assert not Vector3(0, math.inf, 0).is_finite()


class TestRay:
    def test_at(self):
        r = Ray(Vector3(1, 0, 0), Vector3(0, 2, 0))
        assert r.at(1.5) == Vector3(1, 3, 0)
        assert r.time == 0.0


class TestInterval:
    """Tests for Interval."""

    def test_default_is_empty(self):
        """The default interval contains nothing."""
        i = Interval()
        assert not i.contains(0)
        assert i.size() < 0

    def test_contains_vs_surrounds(self):
        """contains is closed, surrounds is open."""
        i = Interval(0, 1)
        assert i.contains(0) and i.contains(1)
        assert not i.surrounds(0) and not i.surrounds(1)
        assert i.surrounds(0.5)

    def test_clamp(self):
        i = Interval(0, 1)
        assert i.clamp(-1) == 0
        assert i.clamp(2) == 1
        assert i.clamp(0.25) == 0.25

    def test_expand_and_offset(self):
        i = Interval(0, 1).expand(1)
        assert i == Interval(-0.5, 1.5)
        assert Interval(0, 1) + 2 == Interval(2, 3)

    def test_enclosing(self):
        assert Interval.enclosing(Interval(0, 1), Interval(3, 4)) == Interval(0, 4)
        assert Interval.enclosing(Interval.EMPTY, Interval(3, 4)) == Interval(3, 4)


class TestAABB:
    """Tests for axis-aligned bounding boxes."""

    def test_from_points_any_order(self):
        box = AABB.from_points(Vector3(1, 2, 3), Vector3(-1, -2, -3))
        assert box.minimum == Vector3(-1, -2, -3)
        assert box.maximum == Vector3(1, 2, 3)

    def test_padding(self):
        """Flat boxes are padded so that every axis has a minimum extent."""
        box = AABB.from_points(Vector3(0, 0, 0), Vector3(1, 1, 0))
        assert box.z.size() >= MIN_EXTENT * 0.999

    def test_hit(self):
        box = AABB.from_points(Vector3(-1, -1, -1), Vector3(1, 1, 1))
        assert box.hit(Ray(Vector3(0, 0, -5), Vector3(0, 0, 1)), Interval(0, math.inf))
        assert not box.hit(Ray(Vector3(0, 3, -5), Vector3(0, 0, 1)), Interval(0, math.inf))
        # Box behind the ray.
        assert not box.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, 1)), Interval(0, math.inf))
        # Interval ending before the box.
        assert not box.hit(Ray(Vector3(0, 0, -5), Vector3(0, 0, 1)), Interval(0, 2))

    def test_hit_axis_parallel(self):
        """Zero direction components are handled without division."""
        box = AABB.from_points(Vector3(-1, -1, -1), Vector3(1, 1, 1))
        assert box.hit(Ray(Vector3(0.5, 0.5, -5), Vector3(0, 0, 1)), Interval(0, math.inf))
        assert not box.hit(Ray(Vector3(2, 0.5, -5), Vector3(0, 0, 1)), Interval(0, math.inf))

    def test_surrounding_box_and_longest_axis(self):
        a = AABB.from_points(Vector3(0, 0, 0), Vector3(1, 1, 1))
        b = AABB.from_points(Vector3(5, 0, 0), Vector3(6, 2, 1))
        merged = AABB.surrounding_box(a, b)
        assert merged.minimum == Vector3(0, 0, 0)
        assert merged.maximum == Vector3(6, 2, 1)
        assert merged.longest_axis() == 0

    def test_offset(self):
        box = AABB.from_points(Vector3(0, 0, 0), Vector3(1, 1, 1)) + Vector3(1, 2, 3)
        assert box.minimum == Vector3(1, 2, 3)


class TestSampling:
    """Tests for the sampling helpers and ONB."""

    def test_onb_is_orthonormal(self):
        for n in (Vector3(0, 0, 1), Vector3(1, 0, 0), Vector3(1, 2, 3)):
            b = ONB(n)
            for axis in (b.u, b.v, b.w):
                assert abs(axis.length() - 1.0) < 1e-9
            assert abs(b.u.dot(b.v)) < 1e-9
            assert abs(b.u.dot(b.w)) < 1e-9
            assert abs(b.v.dot(b.w)) < 1e-9

    def test_random_directions(self, rng):
        for _ in range(200):
            assert abs(random_unit_vector(rng).length() - 1.0) < 1e-9
            d = random_in_unit_disk(rng)
            assert d.z == 0 and d.length_squared() < 1.0
            c = random_cosine_direction(rng)
            assert c.z >= 0 and abs(c.length() - 1.0) < 1e-9

    def test_reflect(self):
        assert reflect(Vector3(1, -1, 0), Vector3(0, 1, 0)) == Vector3(1, 1, 0)

    def test_refract_normal_incidence(self):
        """A ray hitting head-on passes straight through."""
        out = refract(Vector3(0, -1, 0), Vector3(0, 1, 0), 1 / 1.5)
        assert abs(out.x) < 1e-12 and abs(out.y + 1.0) < 1e-12

    def test_reflectance(self):
        """Schlick reflectance is r0 head-on and 1 at grazing incidence."""
        assert abs(reflectance(1.0, 1.5) - 0.04) < 1e-12
        assert abs(reflectance(0.0, 1.5) - 1.0) < 1e-12
