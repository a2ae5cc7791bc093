"""Unit tests for quad intersection.

Tests cover:
- Ray hitting quad center (front and back face)
- Ray hitting quad at edges
- Ray missing quad (outside bounds)
- Ray parallel to quad plane and degenerate quads
- Boxes built from six quads
"""

import math

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Point3, Vector3
from pathtracer.geometry.quad import Quad, box

from conftest import approx_vec

FORWARD = Interval(0.001, math.inf)


def unit_quad():
    """1x1 quad in the z=0 plane; its front face looks down +z."""
    return Quad(Point3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 1, 0))


class TestQuadBasics:
    def test_normal_and_area(self):
        q = unit_quad()
        assert approx_vec(q.normal, (0, 0, 1))
        assert abs(q.area - 1.0) < 1e-12

    def test_bounding_box_is_padded(self):
        box_ = unit_quad().bounding_box()
        assert box_.z.size() > 0


class TestQuadHit:
    """Tests for Quad.hit."""

    def test_front_face_hit(self):
        rec = unit_quad().hit(Ray(Point3(0.5, 0.5, 1), Vector3(0, 0, -1)), FORWARD)
        assert rec is not None
        assert abs(rec.t - 1.0) < 1e-12
        assert rec.front_face
        assert approx_vec(rec.normal, (0, 0, 1))
        assert abs(rec.u - 0.5) < 1e-12 and abs(rec.v - 0.5) < 1e-12

    def test_back_face_hit(self):
        rec = unit_quad().hit(Ray(Point3(0.5, 0.5, -1), Vector3(0, 0, 1)), FORWARD)
        assert rec is not None
        assert not rec.front_face
        assert approx_vec(rec.normal, (0, 0, -1))

    def test_edge_hit(self):
        rec = unit_quad().hit(Ray(Point3(1.0, 0.5, -1), Vector3(0, 0, 1)), FORWARD)
        assert rec is not None
        assert abs(rec.u - 1.0) < 1e-12

    def test_miss_outside(self):
        assert unit_quad().hit(Ray(Point3(1.5, 0.5, -1), Vector3(0, 0, 1)), FORWARD) is None
        assert unit_quad().hit(Ray(Point3(0.5, -0.1, -1), Vector3(0, 0, 1)), FORWARD) is None

    def test_parallel_ray(self):
        assert unit_quad().hit(Ray(Point3(-1, 0.5, 0), Vector3(1, 0, 0)), FORWARD) is None

    def test_degenerate_quad_never_hits(self):
        q = Quad(Point3(0, 0, 0), Vector3(1, 0, 0), Vector3(2, 0, 0))
        assert q.degenerate
        assert q.hit(Ray(Point3(0.5, 0, -1), Vector3(0, 0, 1)), FORWARD) is None


class TestQuadSampling:
    def test_pdf_value_head_on(self):
        """From distance 1 straight below a unit quad the density is d^2 / (cos * area) = 1."""
        q = unit_quad()
        assert abs(q.pdf_value(Point3(0.5, 0.5, -1), Vector3(0, 0, 1)) - 1.0) < 1e-9

    def test_pdf_value_zero_when_missing(self):
        assert unit_quad().pdf_value(Point3(0.5, 0.5, -1), Vector3(0, 1, 0)) == 0.0

    def test_random_directions_hit_quad(self, rng):
        q = unit_quad()
        origin = Point3(0.5, 0.5, -2)
        for _ in range(100):
            assert q.hit(Ray(origin, q.random(origin, rng)), FORWARD) is not None


class TestBox:
    def test_box_has_six_sides_and_tight_bounds(self):
        b = box(Point3(1, 1, 1), Point3(0, 0, 0))
        assert len(b) == 6
        bbox = b.bounding_box()
        assert approx_vec(bbox.minimum, (0, 0, 0), 1e-3)
        assert approx_vec(bbox.maximum, (1, 1, 1), 1e-3)

    def test_ray_hits_nearest_side(self):
        b = box(Point3(0, 0, 0), Point3(1, 1, 1))
        rec = b.hit(Ray(Point3(0.5, 0.5, -2), Vector3(0, 0, 1)), FORWARD)
        assert rec is not None
        assert abs(rec.t - 2.0) < 1e-9
        assert approx_vec(rec.normal, (0, 0, -1))
