# materials/textures.py
import logging
import math
from typing import Union

import numpy as np
from PIL import Image

from pathtracer.core.interval import Interval
from pathtracer.core.vector import Color, Vector3
from pathtracer.materials.perlin import Perlin

logger = logging.getLogger(__name__)


class Texture:
    """Base class for all textures."""
    def value(self, u: float, v: float, p: Vector3) -> Color:
        """Color of the texture at surface coordinates (u, v) and point p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")


class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, color: Color):
        self.color = color

    def value(self, u: float, v: float, p: Vector3) -> Color:
        return self.color


def as_texture(albedo: Union[Color, Texture]) -> Texture:
    """Wraps a plain color in a SolidColor; textures pass through."""
    if isinstance(albedo, Texture):
        return albedo
    return SolidColor(albedo)


class CheckerTexture(Texture):
    """
    A 3D checker pattern: cells of side `scale` alternate between two
    textures by the parity of the cell's integer coordinates.
    """
    def __init__(self, scale: float, even: Union[Color, Texture], odd: Union[Color, Texture]):
        self.inv_scale = 1.0 / scale
        self.even = as_texture(even)
        self.odd = as_texture(odd)

    def value(self, u: float, v: float, p: Vector3) -> Color:
        x = int(math.floor(self.inv_scale * p.x))
        y = int(math.floor(self.inv_scale * p.y))
        z = int(math.floor(self.inv_scale * p.z))
        is_even = (x + y + z) % 2 == 0
        return self.even.value(u, v, p) if is_even else self.odd.value(u, v, p)


class ImageTexture(Texture):
    """A texture from an image file."""
    # Returned for every lookup when the image could not be loaded.
    DEBUG_COLOR = Color(0, 1, 1)

    def __init__(self, image_path: str):
        self.image_path = image_path
        self.data = None
        self.width = 0
        self.height = 0
        try:
            with Image.open(image_path) as img:
                if img.mode != 'RGB':
                    img = img.convert('RGB')
                self.data = np.asarray(img, dtype=np.float64) / 255.0
                self.width = img.width
                self.height = img.height
        except (OSError, ValueError) as e:
            logger.warning("Could not load texture %s: %s", image_path, e)

    def value(self, u: float, v: float, p: Vector3) -> Color:
        if self.data is None or self.height <= 0:
            return self.DEBUG_COLOR

        # Clamp input texture coordinates to [0,1] x [1,0]
        u = Interval(0, 1).clamp(u)
        v = 1.0 - Interval(0, 1).clamp(v)  # Flip V to image coordinates

        i = min(int(u * self.width), self.width - 1)
        j = min(int(v * self.height), self.height - 1)

        pixel = self.data[j, i]
        return Color(float(pixel[0]), float(pixel[1]), float(pixel[2]))


class NoiseTexture(Texture):
    """A marble-like procedural texture driven by Perlin turbulence."""
    def __init__(self, scale: float = 1.0, rng=None):
        self.noise = Perlin(rng)
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Color:
        return Color(0.5, 0.5, 0.5) * (1 + math.sin(self.scale * p.z + 10 * self.noise.turb(p, 7)))
