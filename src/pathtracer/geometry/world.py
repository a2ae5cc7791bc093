# geometry/world.py
import logging
from typing import Iterable, List, Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


class HittableList(Hittable):
    """
    A flat, unordered list of Hittable objects. Used both as the top-level
    scene container and as the input for building a BVH.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = []
        self.bbox = AABB.EMPTY
        for obj in objects or ():
            self.add(obj)

    def add(self, obj: Hittable):
        self.objects.append(obj)
        self.bbox = AABB.surrounding_box(self.bbox, obj.bounding_box())

    def clear(self):
        self.objects.clear()
        self.bbox = AABB.EMPTY

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def build_bvh(self):
        """
        Builds a BVH over the current objects. The returned tree takes its
        own copy of the object list; later changes to this list do not
        affect it.
        """
        from pathtracer.geometry.bvh import BVHNode

        logger.debug("Building BVH over %d objects", len(self.objects))
        return BVHNode.from_list(self)

    def hit(self, ray: Ray, ray_t: Interval, rng=None) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = ray_t.max
        for obj in self.objects:
            rec = obj.hit(ray, Interval(ray_t.min, closest_so_far), rng)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self) -> AABB:
        return self.bbox

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        if not self.objects:
            return 0.0
        weight = 1.0 / len(self.objects)
        total = 0.0
        for obj in self.objects:
            total += weight * obj.pdf_value(origin, direction)
        return total

    def random(self, origin: Vector3, rng) -> Vector3:
        if not self.objects:
            return Vector3(1, 0, 0)
        return self.objects[rng.randrange(len(self.objects))].random(origin, rng)
