# materials/perlin.py
import math
import random

from pathtracer.core.vector import Vector3


class Perlin:
    """
    Gradient (Perlin) noise over 3D points with a 256-entry lattice.
    """
    point_count = 256

    def __init__(self, rng=None):
        rng = rng if rng is not None else random.Random()
        self.randvec = [Vector3.random(rng, -1, 1).normalize() for _ in range(self.point_count)]
        self.perm_x = self._generate_perm(rng)
        self.perm_y = self._generate_perm(rng)
        self.perm_z = self._generate_perm(rng)

    def noise(self, p: Vector3) -> float:
        u = p.x - math.floor(p.x)
        v = p.y - math.floor(p.y)
        w = p.z - math.floor(p.z)

        i = int(math.floor(p.x))
        j = int(math.floor(p.y))
        k = int(math.floor(p.z))

        c = [[[None, None], [None, None]], [[None, None], [None, None]]]
        for di in range(2):
            for dj in range(2):
                for dk in range(2):
                    c[di][dj][dk] = self.randvec[
                        self.perm_x[(i + di) & 255]
                        ^ self.perm_y[(j + dj) & 255]
                        ^ self.perm_z[(k + dk) & 255]
                    ]

        return self._perlin_interp(c, u, v, w)

    def turb(self, p: Vector3, depth: int = 7) -> float:
        accum = 0.0
        temp_p = p
        weight = 1.0

        for _ in range(depth):
            accum += weight * self.noise(temp_p)
            weight *= 0.5
            temp_p = temp_p * 2

        return abs(accum)

    def _generate_perm(self, rng):
        p = list(range(self.point_count))
        rng.shuffle(p)
        return p

    @staticmethod
    def _perlin_interp(c, u: float, v: float, w: float) -> float:
        # Hermite smoothing of the fractional parts.
        uu = u * u * (3 - 2 * u)
        vv = v * v * (3 - 2 * v)
        ww = w * w * (3 - 2 * w)
        accum = 0.0

        for i in range(2):
            for j in range(2):
                for k in range(2):
                    weight_v = Vector3(u - i, v - j, w - k)
                    accum += ((i * uu + (1 - i) * (1 - uu))
                              * (j * vv + (1 - j) * (1 - vv))
                              * (k * ww + (1 - k) * (1 - ww))
                              * c[i][j][k].dot(weight_v))

        return accum
