# geometry/transforms.py
import math
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


class Translate(Hittable):
    """
    Moves the wrapped object by a fixed offset.
    """
    def __init__(self, obj: Hittable, offset: Vector3):
        self.object = obj
        self.offset = offset
        self.bbox = obj.bounding_box() + offset

    def hit(self, ray: Ray, ray_t: Interval, rng=None) -> Optional[HitRecord]:
        # Move the ray backwards by the offset
        offset_r = Ray(ray.origin - self.offset, ray.direction, ray.time)

        # Determine whether an intersection exists along the offset ray (and if so, where)
        rec = self.object.hit(offset_r, ray_t, rng)
        if rec is None:
            return None

        # Move the intersection point forwards by the offset
        rec.p = rec.p + self.offset
        return rec

    def bounding_box(self) -> AABB:
        return self.bbox

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.object.pdf_value(origin - self.offset, direction)

    def random(self, origin: Vector3, rng) -> Vector3:
        return self.object.random(origin - self.offset, rng)


class RotateY(Hittable):
    """
    Rotates the wrapped object by a fixed angle (degrees) about the Y axis.
    """
    def __init__(self, obj: Hittable, angle: float):
        self.object = obj
        self.angle = angle
        radians = degrees_to_radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)

        bbox = obj.bounding_box()
        lo = [math.inf, math.inf, math.inf]
        hi = [-math.inf, -math.inf, -math.inf]

        for i in range(2):
            for j in range(2):
                for k in range(2):
                    x = bbox.x.max if i else bbox.x.min
                    y = bbox.y.max if j else bbox.y.min
                    z = bbox.z.max if k else bbox.z.min

                    tester = self._to_world(Vector3(x, y, z))
                    for c in range(3):
                        lo[c] = min(lo[c], tester[c])
                        hi[c] = max(hi[c], tester[c])

        self.bbox = AABB.from_points(Vector3(*lo), Vector3(*hi))

    def _to_object(self, p: Vector3) -> Vector3:
        return Vector3(
            self.cos_theta * p.x - self.sin_theta * p.z,
            p.y,
            self.sin_theta * p.x + self.cos_theta * p.z,
        )

    def _to_world(self, p: Vector3) -> Vector3:
        return Vector3(
            self.cos_theta * p.x + self.sin_theta * p.z,
            p.y,
            -self.sin_theta * p.x + self.cos_theta * p.z,
        )

    def hit(self, ray: Ray, ray_t: Interval, rng=None) -> Optional[HitRecord]:
        # Transform the ray from world space to object space.
        rotated_r = Ray(self._to_object(ray.origin), self._to_object(ray.direction), ray.time)

        rec = self.object.hit(rotated_r, ray_t, rng)
        if rec is None:
            return None

        # Transform the intersection from object space back to world space.
        rec.p = self._to_world(rec.p)
        rec.normal = self._to_world(rec.normal)
        return rec

    def bounding_box(self) -> AABB:
        return self.bbox

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.object.pdf_value(self._to_object(origin), self._to_object(direction))

    def random(self, origin: Vector3, rng) -> Vector3:
        return self._to_world(self.object.random(self._to_object(origin), rng))
