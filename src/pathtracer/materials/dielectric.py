# materials/dielectric.py
import math

from pathtracer.core.ray import Ray
from pathtracer.core.utils import reflect, reflectance, refract
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterRecord


class Dielectric(Material):
    """
    Clear refractive material (glass, water). Light is either reflected or
    refracted, never absorbed.
    """
    def __init__(self, refraction_index: float):
        # Refractive index in vacuum or air, or the ratio of the material's
        # refractive index over the refractive index of the enclosing media
        self.refraction_index = refraction_index

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> ScatterRecord:
        attenuation = Color(1.0, 1.0, 1.0)  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        ri = 1.0 / self.refraction_index if rec.front_face else self.refraction_index

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ri * sin_theta > 1.0
        if cannot_refract or reflectance(cos_theta, ri) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ri)

        return ScatterRecord(attenuation, skip_pdf_ray=Ray(rec.p, direction, ray_in.time))
