# geometry/quad.py
import math
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.world import HittableList


class Quad(Hittable):
    """
    Planar parallelogram with corner Q and edge vectors u and v, spanning
    Q, Q+u, Q+v and Q+u+v. The front face is on the side of cross(u, v).
    """
    def __init__(self, Q: Vector3, u: Vector3, v: Vector3, material=None):
        self.Q = Q
        self.u = u
        self.v = v
        self.material = material

        n = u.cross(v)
        n_dot_n = n.length_squared()
        # Parallel edges span no area; such a quad is never hit.
        self.degenerate = n_dot_n == 0.0
        self.normal = n.normalize()
        self.D = self.normal.dot(Q)
        self.w = n / n_dot_n if not self.degenerate else Vector3(0, 0, 0)
        self.area = math.sqrt(n_dot_n)

        self.bbox = self._compute_bounding_box()

    def _compute_bounding_box(self) -> AABB:
        bbox_diagonal1 = AABB.from_points(self.Q, self.Q + self.u + self.v)
        bbox_diagonal2 = AABB.from_points(self.Q + self.u, self.Q + self.v)
        return AABB.surrounding_box(bbox_diagonal1, bbox_diagonal2)

    def bounding_box(self) -> AABB:
        return self.bbox

    def hit(self, ray: Ray, ray_t: Interval, rng=None) -> Optional[HitRecord]:
        if self.degenerate:
            return None

        denom = self.normal.dot(ray.direction)

        # No hit if the ray is parallel to the plane.
        if abs(denom) < 1e-8:
            return None

        # Return None if the hit point parameter t is outside the ray interval.
        t = (self.D - self.normal.dot(ray.origin)) / denom
        if not ray_t.contains(t):
            return None

        # Determine if the hit point lies within the planar shape using its plane coordinates.
        intersection = ray.at(t)
        planar_hitpt_vector = intersection - self.Q
        alpha = self.w.dot(planar_hitpt_vector.cross(self.v))
        beta = self.w.dot(self.u.cross(planar_hitpt_vector))

        rec = HitRecord()
        if not self.is_interior(alpha, beta, rec):
            return None

        rec.t = t
        rec.p = intersection
        rec.material = self.material
        rec.set_face_normal(ray, self.normal)
        return rec

    def is_interior(self, a: float, b: float, rec: HitRecord) -> bool:
        """
        Membership test in plane coordinates; sets rec.u/rec.v on success.
        Subclasses override this for other planar shapes.
        """
        unit_interval = Interval(0, 1)
        if not unit_interval.contains(a) or not unit_interval.contains(b):
            return False
        rec.u = a
        rec.v = b
        return True

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        rec = self.hit(Ray(origin, direction), Interval(0.001, math.inf))
        if rec is None:
            return 0.0

        distance_squared = rec.t * rec.t * direction.length_squared()
        cosine = abs(direction.dot(rec.normal) / direction.length())
        if cosine == 0.0 or self.area == 0.0:
            return 0.0
        return distance_squared / (cosine * self.area)

    def random(self, origin: Vector3, rng) -> Vector3:
        p = self.Q + self.u * rng.random() + self.v * rng.random()
        return p - origin

    def __repr__(self) -> str:
        return f"Quad(Q={self.Q}, u={self.u}, v={self.v})"


def box(a: Vector3, b: Vector3, material=None) -> HittableList:
    """
    Returns the 3D box (six sides) that contains the two opposite vertices a & b.
    """
    sides = HittableList()

    # Construct the two opposite vertices with the minimum and maximum coordinates.
    lo = Vector3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))
    hi = Vector3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))

    dx = Vector3(hi.x - lo.x, 0, 0)
    dy = Vector3(0, hi.y - lo.y, 0)
    dz = Vector3(0, 0, hi.z - lo.z)

    sides.add(Quad(Vector3(lo.x, lo.y, hi.z), dx, dy, material))   # front
    sides.add(Quad(Vector3(hi.x, lo.y, hi.z), -dz, dy, material))  # right
    sides.add(Quad(Vector3(hi.x, lo.y, lo.z), -dx, dy, material))  # back
    sides.add(Quad(Vector3(lo.x, lo.y, lo.z), dz, dy, material))   # left
    sides.add(Quad(Vector3(lo.x, hi.y, hi.z), dx, -dz, material))  # top
    sides.add(Quad(Vector3(lo.x, lo.y, lo.z), dx, dz, material))   # bottom

    return sides
