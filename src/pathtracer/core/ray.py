# core/ray.py
from dataclasses import dataclass

from pathtracer.core.vector import Vector3


@dataclass(frozen=True)
class Ray:
    """
    Represents a ray in 3D space with an origin, a direction and the moment
    in the shutter interval [0, 1) it was emitted at. The direction is not
    required to be unit length.
    """
    origin: Vector3
    direction: Vector3
    time: float = 0.0

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t
