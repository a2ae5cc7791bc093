from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import HitRecord, Hittable
from pathtracer.geometry.quad import Quad, box
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.transforms import RotateY, Translate
from pathtracer.geometry.world import HittableList
