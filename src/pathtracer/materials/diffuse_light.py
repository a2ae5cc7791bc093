# materials/diffuse_light.py
from typing import Union

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class DiffuseLight(Material):
    """
    Emissive material that provides constant radiance with optional texture support.

    Light leaves only through the front face, and the material never scatters.
    """
    def __init__(self, emit: Union[Color, Texture]):
        self.texture = as_texture(emit)

    def emitted(self, ray_in: Ray, rec: HitRecord, u: float, v: float, p: Vector3) -> Color:
        """
        Return the emitted radiance, which can be textured.

        Args:
            ray_in (Ray): The incoming ray.
            rec (HitRecord): The hit being shaded.
            u (float): The horizontal texture coordinate.
            v (float): The vertical texture coordinate.
            p (Vector3): The hit point.

        Returns:
            Color: The emission color, black on the back face.
        """
        if not rec.front_face:
            return Color(0, 0, 0)
        return self.texture.value(u, v, p)
