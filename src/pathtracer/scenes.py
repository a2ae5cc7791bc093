"""Demo scenes.

Each builder returns ``(world, lights, camera_settings)``: the surfaces to
render, the geometry-only light list used for importance sampling, and the
keyword arguments for :class:`pathtracer.camera.camera.Camera` that frame
the scene. Quality settings (width, samples, depth) are left to the caller.
"""

import logging
import random
from typing import Optional

from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.constant_medium import ConstantMedium
from pathtracer.geometry.quad import Quad, box
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.transforms import RotateY, Translate
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import CheckerTexture, ImageTexture, NoiseTexture

logger = logging.getLogger(__name__)


def cornell_box(seed: int = 0):
    """The Cornell box with a rotated block and a glass sphere. The layout is fixed; `seed` is unused."""
    world = HittableList()

    red = Lambertian(Color(.65, .05, .05))
    white = Lambertian(Color(.73, .73, .73))
    green = Lambertian(Color(.12, .45, .15))
    light = DiffuseLight(Color(15, 15, 15))

    # Cornell box sides
    world.add(Quad(Point3(555, 0, 0), Vector3(0, 0, 555), Vector3(0, 555, 0), green))
    world.add(Quad(Point3(0, 0, 555), Vector3(0, 0, -555), Vector3(0, 555, 0), red))
    world.add(Quad(Point3(0, 555, 0), Vector3(555, 0, 0), Vector3(0, 0, 555), white))
    world.add(Quad(Point3(0, 0, 555), Vector3(555, 0, 0), Vector3(0, 0, -555), white))
    world.add(Quad(Point3(555, 0, 555), Vector3(-555, 0, 0), Vector3(0, 555, 0), white))

    # Light, facing down into the box
    world.add(Quad(Point3(213, 554, 227), Vector3(130, 0, 0), Vector3(0, 0, 105), light))

    # Box
    box1 = box(Point3(0, 0, 0), Point3(165, 330, 165), white)
    box1 = RotateY(box1, 15)
    box1 = Translate(box1, Vector3(265, 0, 295))
    world.add(box1)

    # Glass sphere
    glass = Dielectric(1.5)
    world.add(Sphere(Point3(190, 90, 190), 90, glass))

    # Light sources for importance sampling; the glass sphere is included
    # to send more rays through it.
    lights = HittableList()
    lights.add(Quad(Point3(343, 554, 332), Vector3(-130, 0, 0), Vector3(0, 0, -105)))
    lights.add(Sphere(Point3(190, 90, 190), 90))

    camera_settings = dict(
        aspect_ratio=1.0,
        background=Color(0, 0, 0),
        vfov=40,
        lookfrom=Point3(278, 278, -800),
        lookat=Point3(278, 278, 0),
        vup=Vector3(0, 1, 0),
        defocus_angle=0,
    )
    return world, lights, camera_settings


def simple_scene(seed: int = 0):
    """Random small spheres around three large ones, with depth of field."""
    rng = random.Random(seed)
    world = HittableList()

    ground = Lambertian(Color(0.5, 0.5, 0.5))
    world.add(Sphere(Point3(0, -1000, 0), 1000, ground))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Point3(4, 0.2, 0)).length() > 0.9:
                if choose_mat < 0.8:
                    # diffuse
                    albedo = Color.random(rng) * Color.random(rng)
                    world.add(Sphere(center, 0.2, Lambertian(albedo)))
                elif choose_mat < 0.95:
                    # metal
                    albedo = Color.random(rng, 0.5, 1)
                    fuzz = rng.uniform(0, 0.5)
                    world.add(Sphere(center, 0.2, Metal(albedo, fuzz)))
                else:
                    # glass
                    world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    logger.debug("simple_scene: %d objects", len(world))
    world = HittableList([world.build_bvh()])

    lights = HittableList()
    lights.add(Sphere(Point3(0, 1, 0), 1.0))

    camera_settings = dict(
        aspect_ratio=16.0 / 9.0,
        background=Color(0.7, 0.8, 1.0),
        vfov=20,
        lookfrom=Point3(13, 2, 3),
        lookat=Point3(0, 0, 0),
        vup=Vector3(0, 1, 0),
        defocus_angle=0.6,
        focus_dist=10.0,
    )
    return world, lights, camera_settings


def final_scene(seed: int = 0, earth_texture: Optional[str] = None):
    """
    Everything at once: a BVH of ground boxes, a moving sphere, glass and
    metal, participating media, textures, and a rotated and translated
    cluster of small spheres.
    """
    rng = random.Random(seed)

    boxes1 = HittableList()
    ground = Lambertian(Color(0.48, 0.83, 0.53))
    boxes_per_side = 20
    for i in range(boxes_per_side):
        for j in range(boxes_per_side):
            w = 100.0
            x0 = -1000.0 + i * w
            z0 = -1000.0 + j * w
            y0 = 0.0
            x1 = x0 + w
            y1 = rng.uniform(1, 101)
            z1 = z0 + w
            boxes1.add(box(Point3(x0, y0, z0), Point3(x1, y1, z1), ground))

    world = HittableList()
    world.add(BVHNode.from_list(boxes1))

    # Main light
    light = DiffuseLight(Color(7, 7, 7))
    world.add(Quad(Point3(123, 554, 147), Vector3(300, 0, 0), Vector3(0, 0, 265), light))

    # Moving sphere
    center1 = Point3(400, 400, 200)
    center2 = center1 + Vector3(30, 0, 0)
    world.add(Sphere.moving(center1, center2, 50, Lambertian(Color(0.7, 0.3, 0.1))))

    # Glass & metal spheres
    world.add(Sphere(Point3(260, 150, 45), 50, Dielectric(1.5)))
    world.add(Sphere(Point3(0, 150, 145), 50, Metal(Color(0.8, 0.8, 0.9), 1.0)))

    # Blue subsurface-like medium inside a glass sphere
    boundary = Sphere(Point3(360, 150, 145), 70, Dielectric(1.5))
    world.add(boundary)
    world.add(ConstantMedium(boundary, 0.2, Color(0.2, 0.4, 0.9)))

    # Thin mist over the whole scene
    boundary = Sphere(Point3(0, 0, 0), 5000, Dielectric(1.5))
    world.add(ConstantMedium(boundary, .0001, Color(1, 1, 1)))

    # Textured globe; a checker stands in when no image is given
    if earth_texture is not None:
        globe = Lambertian(ImageTexture(earth_texture))
    else:
        globe = Lambertian(CheckerTexture(10.0, Color(.1, .2, .5), Color(.9, .9, .9)))
    world.add(Sphere(Point3(400, 200, 400), 100, globe))

    # Perlin noise sphere
    pertext = NoiseTexture(0.2, rng)
    world.add(Sphere(Point3(220, 280, 300), 80, Lambertian(pertext)))

    # Cluster of small spheres
    boxes2 = HittableList()
    white = Lambertian(Color(.73, .73, .73))
    for _ in range(1000):
        boxes2.add(Sphere(Point3.random(rng, 0, 165), 10, white))
    world.add(Translate(RotateY(BVHNode.from_list(boxes2), 15), Vector3(-100, 270, 395)))

    logger.debug("final_scene: %d top-level objects", len(world))

    lights = HittableList()
    lights.add(Quad(Point3(123, 554, 147), Vector3(300, 0, 0), Vector3(0, 0, 265)))

    camera_settings = dict(
        aspect_ratio=1.0,
        background=Color(0, 0, 0),
        vfov=40,
        lookfrom=Point3(478, 278, -600),
        lookat=Point3(278, 278, 0),
        vup=Vector3(0, 1, 0),
        defocus_angle=0,
    )
    return world, lights, camera_settings


def lit_sphere(seed: int = 0):
    """
    A single diffuse sphere lit from above and in front by a tilted area
    light that stays just outside the field of view. The layout is fixed;
    `seed` is unused.
    """
    world = HittableList()
    world.add(Sphere(Point3(0, 0, 0), 1.0, Lambertian(Color(0.7, 0.7, 0.7))))
    # Centered at (0, 2, 3); front face (cross(u, v)) points along (0, -2, -3) at the sphere.
    light_corner, light_u, light_v = Point3(-1.5, 1.25, 3.5), Vector3(0, 1.5, -1), Vector3(3, 0, 0)
    world.add(Quad(light_corner, light_u, light_v, DiffuseLight(Color(8, 8, 8))))

    lights = HittableList()
    lights.add(Quad(light_corner, light_u, light_v))

    camera_settings = dict(
        aspect_ratio=1.0,
        background=Color(0, 0, 0),
        vfov=40,
        lookfrom=Point3(0, 0, 6),
        lookat=Point3(0, 0, 0),
        vup=Vector3(0, 1, 0),
        defocus_angle=0,
    )
    return world, lights, camera_settings


SCENES = {
    "cornell": cornell_box,
    "simple": simple_scene,
    "final": final_scene,
    "lit-sphere": lit_sphere,
}
