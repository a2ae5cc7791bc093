# geometry/bvh.py
from typing import List, Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord


class BVHNode(Hittable):
    """
    Binary bounding volume hierarchy node. Built once from a list of
    objects and never modified afterwards, so one tree can be shared by any
    number of render threads.

    Each node has exactly two children. A node over a single object holds
    that object as both children so traversal needs no special case.
    """
    def __init__(self, objects: List[Hittable], start: int = 0, end: Optional[int] = None):
        if end is None:
            end = len(objects)
        object_span = end - start
        if object_span <= 0:
            raise ValueError("BVHNode needs at least one object")

        # Compute the bounding box of all objects for this node
        self.box = AABB.EMPTY
        for i in range(start, end):
            self.box = AABB.surrounding_box(self.box, objects[i].bounding_box())

        axis = self.box.longest_axis()

        def box_min(obj):
            return obj.bounding_box().axis_interval(axis).min

        if object_span == 1:
            self.left = self.right = objects[start]
        elif object_span == 2:
            a, b = objects[start], objects[start + 1]
            if box_min(b) < box_min(a):
                a, b = b, a
            self.left, self.right = a, b
        else:
            objects[start:end] = sorted(objects[start:end], key=box_min)
            mid = start + object_span // 2
            self.left = BVHNode(objects, start, mid)
            self.right = BVHNode(objects, mid, end)

    @classmethod
    def from_list(cls, hittable_list) -> "BVHNode":
        # Copy so that sorting does not reorder the caller's list.
        return cls(list(hittable_list.objects))

    def hit(self, ray: Ray, ray_t: Interval, rng=None) -> Optional[HitRecord]:
        if not self.box.hit(ray, ray_t):
            return None

        hit_left = self.left.hit(ray, ray_t, rng)

        # Only accept a right hit closer than the left one.
        right_t = ray_t.with_max(hit_left.t) if hit_left is not None else ray_t
        hit_right = self.right.hit(ray, right_t, rng) if self.right is not self.left else None

        return hit_right if hit_right is not None else hit_left

    def bounding_box(self) -> AABB:
        return self.box

    def depth(self) -> int:
        """Height of the tree rooted here, counting this node."""
        left = self.left.depth() if isinstance(self.left, BVHNode) else 0
        right = self.right.depth() if isinstance(self.right, BVHNode) else 0
        return 1 + max(left, right)
