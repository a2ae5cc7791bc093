# materials/lambertian.py

import math
from typing import Union

from pathtracer.core.pdf import CosinePDF
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.textures import Texture, as_texture


class Lambertian(Material):
    """
    Lambertian diffuse material with optional texture support.
    """

    def __init__(self, albedo: Union[Color, Texture]):
        # Store either a solid color or a texture.
        self.texture = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> ScatterRecord:
        """
        Diffuse surfaces always scatter; the direction is left to the
        cosine-weighted PDF around the normal.
        """
        attenuation = self.texture.value(rec.u, rec.v, rec.p)
        return ScatterRecord(attenuation, pdf=CosinePDF(rec.normal))

    def scattering_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        direction = scattered.direction.normalize()
        cos_theta = rec.normal.dot(direction)
        return 0.0 if cos_theta < 0 else cos_theta / math.pi
