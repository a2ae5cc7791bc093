# geometry/hittable.py
import random
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3

# Fallback random source for hit queries made outside a render (tests, tools).
default_rng = random.Random()


class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("p", "normal", "material", "t", "u", "v", "front_face")

    def __init__(self, p: Vector3 = None, normal: Vector3 = None,
                 t: float = 0.0, front_face: bool = True, material=None,
                 u: float = 0.0, v: float = 0.0):
        self.p = p                    # Intersection point
        self.normal = normal          # Unit normal, always against the ray
        self.t = t                    # Ray parameter at intersection
        self.front_face = front_face  # Whether the hit was on the outward side
        self.material = material      # Shared with the surface, not owned
        self.u = u                    # Surface texture coordinates
        self.v = v

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        """
        outward_normal = outward_normal.normalize()
        self.front_face = ray.direction.dot(outward_normal) <= 0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, ray_t: Interval, rng=None) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self) -> AABB:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        """
        Density, per unit solid angle, of sampling `direction` from `origin`
        toward this object. Zero for objects that cannot be sampled.
        """
        return 0.0

    def random(self, origin: Vector3, rng) -> Vector3:
        """
        A direction from `origin` toward a random point on this object.
        """
        return Vector3(1, 0, 0)
