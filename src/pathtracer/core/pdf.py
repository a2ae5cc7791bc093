"""Probability densities over scattering directions.

A PDF answers two questions: how likely a given direction is (``value``)
and a fresh direction drawn from it (``generate``). The integrator mixes a
light-directed density with the material's own density so that both
strategies contribute samples.
"""

import math

from pathtracer.core.onb import ONB
from pathtracer.core.utils import random_cosine_direction, random_unit_vector
from pathtracer.core.vector import Vector3


class PDF:
    """Abstract density over directions."""

    def value(self, direction: Vector3) -> float:
        raise NotImplementedError("value() must be implemented by subclasses.")

    def generate(self, rng) -> Vector3:
        raise NotImplementedError("generate() must be implemented by subclasses.")


class SpherePDF(PDF):
    """Uniform density over the whole sphere of directions."""

    def value(self, direction: Vector3) -> float:
        return 1 / (4 * math.pi)

    def generate(self, rng) -> Vector3:
        return random_unit_vector(rng)


class CosinePDF(PDF):
    """Cosine-weighted density over the hemisphere around w."""

    def __init__(self, w: Vector3):
        self.uvw = ONB(w)

    def value(self, direction: Vector3) -> float:
        cosine_theta = direction.normalize().dot(self.uvw.w)
        return max(0.0, cosine_theta / math.pi)

    def generate(self, rng) -> Vector3:
        return self.uvw.transform(random_cosine_direction(rng))


class HittablePDF(PDF):
    """
    Density of directions from origin toward a set of surfaces.

    ``objects`` is anything exposing ``pdf_value(origin, direction)`` and
    ``random(origin, rng)``, typically the light list.
    """

    def __init__(self, objects, origin: Vector3):
        self.objects = objects
        self.origin = origin

    def value(self, direction: Vector3) -> float:
        return self.objects.pdf_value(self.origin, direction)

    def generate(self, rng) -> Vector3:
        return self.objects.random(self.origin, rng)


class MixturePDF(PDF):
    """Equal-weight mixture of two densities."""

    def __init__(self, p0: PDF, p1: PDF):
        self.p = (p0, p1)

    def value(self, direction: Vector3) -> float:
        return 0.5 * self.p[0].value(direction) + 0.5 * self.p[1].value(direction)

    def generate(self, rng) -> Vector3:
        if rng.random() < 0.5:
            return self.p[0].generate(rng)
        return self.p[1].generate(rng)
