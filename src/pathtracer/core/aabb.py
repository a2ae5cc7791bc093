# core/aabb.py
from pathtracer.core.interval import Interval
from pathtracer.core.vector import Vector3

# Minimum extent along any axis; keeps boxes of planar surfaces hittable.
MIN_EXTENT = 0.0001


class AABB:
    """
    Axis-aligned bounding box stored as one Interval per axis.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: Interval = None, y: Interval = None, z: Interval = None):
        self.x = x if x is not None else Interval.EMPTY
        self.y = y if y is not None else Interval.EMPTY
        self.z = z if z is not None else Interval.EMPTY
        self._pad_to_minimums()

    @classmethod
    def from_points(cls, a: Vector3, b: Vector3) -> "AABB":
        """Box spanned by two extreme points, given in any order."""
        return cls(
            Interval(min(a.x, b.x), max(a.x, b.x)),
            Interval(min(a.y, b.y), max(a.y, b.y)),
            Interval(min(a.z, b.z), max(a.z, b.z)),
        )

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        return AABB(
            Interval.enclosing(box0.x, box1.x),
            Interval.enclosing(box0.y, box1.y),
            Interval.enclosing(box0.z, box1.z),
        )

    @property
    def minimum(self) -> Vector3:
        return Vector3(self.x.min, self.y.min, self.z.min)

    @property
    def maximum(self) -> Vector3:
        return Vector3(self.x.max, self.y.max, self.z.max)

    def axis_interval(self, n: int) -> Interval:
        if n == 1:
            return self.y
        if n == 2:
            return self.z
        return self.x

    def longest_axis(self) -> int:
        """Index of the axis with the largest extent."""
        sx, sy, sz = self.x.size(), self.y.size(), self.z.size()
        if sx > sy:
            return 0 if sx > sz else 2
        return 1 if sy > sz else 2

    def hit(self, ray, ray_t: Interval) -> bool:
        # Slab method: for each axis, narrow [t_min, t_max] to the slab crossing.
        t_min = ray_t.min
        t_max = ray_t.max
        origin = ray.origin
        direction = ray.direction
        for axis in range(3):
            ax = self.axis_interval(axis)
            d = direction[axis]
            o = origin[axis]
            if d == 0.0:
                # Parallel to the slab: either always inside or never.
                if o < ax.min or o > ax.max:
                    return False
                continue
            inv_d = 1.0 / d
            t0 = (ax.min - o) * inv_d
            t1 = (ax.max - o) * inv_d
            if t0 > t1:
                t0, t1 = t1, t0
            if t0 > t_min:
                t_min = t0
            if t1 < t_max:
                t_max = t1
            if t_max <= t_min:
                return False
        return True

    def __add__(self, offset: Vector3) -> "AABB":
        return AABB(self.x + offset.x, self.y + offset.y, self.z + offset.z)

    def _pad_to_minimums(self):
        if self.x.size() < MIN_EXTENT:
            self.x = self.x.expand(MIN_EXTENT)
        if self.y.size() < MIN_EXTENT:
            self.y = self.y.expand(MIN_EXTENT)
        if self.z.size() < MIN_EXTENT:
            self.z = self.z.expand(MIN_EXTENT)

    def __repr__(self) -> str:
        return f"AABB({self.x}, {self.y}, {self.z})"


AABB.EMPTY = AABB(Interval.EMPTY, Interval.EMPTY, Interval.EMPTY)
