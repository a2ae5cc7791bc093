# materials/material.py
from typing import Optional

from pathtracer.core.pdf import PDF
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.hittable import HitRecord


class ScatterRecord:
    """
    Outcome of a scatter query.

    Diffuse materials fill in `pdf` and leave `skip_pdf` False; specular
    materials set `skip_pdf` and give the one ray to follow in
    `skip_pdf_ray`.
    """
    __slots__ = ("attenuation", "pdf", "skip_pdf", "skip_pdf_ray")

    def __init__(self, attenuation: Color, pdf: Optional[PDF] = None,
                 skip_pdf_ray: Optional[Ray] = None):
        self.attenuation = attenuation
        self.pdf = pdf
        self.skip_pdf_ray = skip_pdf_ray
        self.skip_pdf = skip_pdf_ray is not None


class Material:
    """
    Abstract material class. Materials are immutable once built and may be
    shared by any number of surfaces.
    """
    def emitted(self, ray_in: Ray, rec: HitRecord, u: float, v: float, p: Vector3) -> Color:
        """Radiance emitted at the hit point. Black unless overridden."""
        return Color(0, 0, 0)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[ScatterRecord]:
        """
        Computes how the incoming ray scatters, or None if it is absorbed.
        """
        return None

    def scattering_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        """Density of the material's own distribution at `scattered`."""
        return 0.0
