from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.isotropic import Isotropic
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import CheckerTexture, ImageTexture, NoiseTexture, SolidColor, Texture
