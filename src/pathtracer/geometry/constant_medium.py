# geometry/constant_medium.py
import math
from typing import Optional, Union

from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord, default_rng
from pathtracer.materials.isotropic import Isotropic
from pathtracer.materials.textures import Texture


class ConstantMedium(Hittable):
    """
    Homogeneous participating medium (fog, smoke) filling a boundary object.

    A ray crossing the boundary scatters inside with probability governed by
    `density`; the scattering point is drawn from an exponential free-path
    distribution and the phase function is isotropic.
    """
    def __init__(self, boundary: Hittable, density: float, albedo: Union[Color, Texture]):
        self.boundary = boundary
        self.density = density
        self.neg_inv_density = -1.0 / density if density > 0 else -math.inf
        self.phase_function = Isotropic(albedo)

    def hit(self, ray: Ray, ray_t: Interval, rng=None) -> Optional[HitRecord]:
        if self.density <= 0:
            return None
        rng = rng if rng is not None else default_rng

        rec1 = self.boundary.hit(ray, Interval.UNIVERSE, rng)
        if rec1 is None:
            return None

        rec2 = self.boundary.hit(ray, Interval(rec1.t + 0.0001, math.inf), rng)
        if rec2 is None:
            return None

        t_enter = max(rec1.t, ray_t.min)
        t_exit = min(rec2.t, ray_t.max)

        if t_enter >= t_exit:
            return None

        t_enter = max(t_enter, 0.0)

        ray_length = ray.direction.length()
        if ray_length == 0.0:
            return None
        distance_inside_boundary = (t_exit - t_enter) * ray_length
        # 1 - random() lies in (0, 1], so the log is always defined.
        hit_distance = self.neg_inv_density * math.log(1.0 - rng.random())

        if hit_distance > distance_inside_boundary:
            return None

        rec = HitRecord()
        rec.t = t_enter + hit_distance / ray_length
        rec.p = ray.at(rec.t)

        rec.normal = Vector3(1, 0, 0)  # arbitrary
        rec.front_face = True          # also arbitrary
        rec.material = self.phase_function
        return rec

    def bounding_box(self) -> AABB:
        return self.boundary.bounding_box()
