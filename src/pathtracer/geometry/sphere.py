# geometry/sphere.py
import math
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.onb import ONB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_to_sphere
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.

    A moving sphere linearly interpolates its center from `center` at
    time 0 to `center + motion` at time 1.
    """
    def __init__(self, center: Vector3, radius: float, material=None,
                 motion: Vector3 = None):
        self.center = center
        self.motion = motion if motion is not None else Vector3(0, 0, 0)
        self.radius = max(0.0, radius)
        self.material = material

        rvec = Vector3(self.radius, self.radius, self.radius)
        box0 = AABB.from_points(center - rvec, center + rvec)
        if motion is None:
            self.bbox = box0
        else:
            center1 = center + self.motion
            box1 = AABB.from_points(center1 - rvec, center1 + rvec)
            self.bbox = AABB.surrounding_box(box0, box1)

    @classmethod
    def moving(cls, center1: Vector3, center2: Vector3, radius: float, material=None) -> "Sphere":
        return cls(center1, radius, material, motion=center2 - center1)

    def center_at(self, time: float) -> Vector3:
        return self.center + self.motion * time

    def hit(self, ray: Ray, ray_t: Interval, rng=None) -> Optional[HitRecord]:
        current_center = self.center_at(ray.time)
        oc = current_center - ray.origin
        a = ray.direction.length_squared()
        if a == 0.0 or self.radius == 0.0:
            return None
        h = ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = h * h - a * c

        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (h - sqrtd) / a
        if not ray_t.surrounds(root):
            root = (h + sqrtd) / a
            if not ray_t.surrounds(root):
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(rec.t)
        outward_normal = (rec.p - current_center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.u, rec.v = self.get_sphere_uv(outward_normal)
        rec.material = self.material
        return rec

    def bounding_box(self) -> AABB:
        return self.bbox

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        # Only valid for stationary spheres.
        rec = self.hit(Ray(origin, direction), Interval(0.001, math.inf))
        if rec is None:
            return 0.0

        dist_squared = (self.center - origin).length_squared()
        if dist_squared == 0.0:
            return 0.0
        ratio = self.radius * self.radius / dist_squared
        if ratio >= 1.0:
            # Origin inside the sphere: the cone is undefined.
            return 0.0
        cos_theta_max = math.sqrt(1 - ratio)
        solid_angle = 2 * math.pi * (1 - cos_theta_max)
        if solid_angle <= 0.0:
            return 0.0
        return 1 / solid_angle

    def random(self, origin: Vector3, rng) -> Vector3:
        direction = self.center - origin
        distance_squared = direction.length_squared()
        if distance_squared <= self.radius * self.radius:
            return direction if not direction.near_zero() else Vector3(1, 0, 0)
        uvw = ONB(direction)
        return uvw.transform(random_to_sphere(self.radius, distance_squared, rng))

    @staticmethod
    def get_sphere_uv(p: Vector3):
        """
        Texture coordinates of a point p on the unit sphere.

        u: angle around the Y axis from X=-1, mapped to [0, 1].
        v: angle from Y=-1 to Y=+1, mapped to [0, 1].
        """
        theta = math.acos(max(-1.0, min(1.0, -p.y)))
        phi = math.atan2(-p.z, p.x) + math.pi
        return phi / (2 * math.pi), theta / math.pi

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"
