# camera/camera.py
import logging
import math
import random
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

import numpy as np

from pathtracer.core.interval import Interval
from pathtracer.core.pdf import HittablePDF, MixturePDF
from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians, random_in_unit_disk
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.renderer.denoiser import DENOISE_MODES, denoise

logger = logging.getLogger(__name__)

# Receives (rows completed, total rows).
ProgressCallback = Callable[[int, int], None]

# Lower bound of valid hit distances; avoids re-hitting the surface a ray leaves from.
SHADOW_ACNE_EPSILON = 0.001


class Camera:
    """
    Thin-lens camera and Monte Carlo path tracing integrator.

    Every pixel is estimated from a sqrt_spp x sqrt_spp stratified grid of
    jittered sub-samples. Each sample follows one light path through the
    scene; diffuse bounces sample a 50/50 mixture of the material's own
    distribution and a distribution aimed at the `lights` list.
    """
    def __init__(self,
                 aspect_ratio: float = 1.0,
                 image_width: int = 100,
                 samples_per_pixel: int = 10,
                 max_depth: int = 10,
                 background: Color = None,
                 vfov: float = 90.0,
                 lookfrom: Point3 = None,
                 lookat: Point3 = None,
                 vup: Vector3 = None,
                 defocus_angle: float = 0.0,
                 focus_dist: float = 10.0,
                 denoise: Optional[str] = None,
                 seed: int = 0,
                 workers: int = 1):
        self.aspect_ratio = aspect_ratio
        self.image_width = image_width
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.background = background if background is not None else Color(0, 0, 0)

        self.vfov = vfov
        self.lookfrom = lookfrom if lookfrom is not None else Point3(0, 0, 0)
        self.lookat = lookat if lookat is not None else Point3(0, 0, -1)
        self.vup = vup if vup is not None else Vector3(0, 1, 0)

        self.defocus_angle = defocus_angle  # Variation angle of rays through each pixel
        self.focus_dist = focus_dist        # Distance to the plane of perfect focus

        if denoise == "off":
            denoise = None
        if denoise is not None and denoise not in DENOISE_MODES:
            raise ValueError(f"Unknown denoise mode: {denoise!r} (expected one of {DENOISE_MODES})")
        self.denoise = denoise
        self.seed = seed
        self.workers = max(1, workers)

        self.last_raw_buffer = None
        self.initialize()

    def initialize(self):
        """Derives image size, sampling grid and viewport geometry from the settings."""
        if self.image_width < 1:
            raise ValueError(f"image_width must be at least 1, got {self.image_width}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")

        self.image_height = max(1, int(self.image_width / self.aspect_ratio))

        # Non-square sample counts are truncated to the largest square grid.
        self.sqrt_spp = max(1, math.isqrt(self.samples_per_pixel))
        self.pixel_samples_scale = 1.0 / (self.sqrt_spp * self.sqrt_spp)
        self.recip_sqrt_spp = 1.0 / self.sqrt_spp

        self.center = self.lookfrom

        # Determine viewport dimensions.
        theta = degrees_to_radians(self.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2 * h * self.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Calculate the u,v,w unit basis vectors for the camera coordinate frame.
        self.w = (self.lookfrom - self.lookat).normalize()
        self.u = self.vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Vectors across the horizontal and down the vertical viewport edges.
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (self.center - self.w * self.focus_dist
                               - viewport_u / 2 - viewport_v / 2)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        defocus_radius = self.focus_dist * math.tan(degrees_to_radians(self.defocus_angle / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def get_ray(self, i: int, j: int, s_i: int, s_j: int, rng) -> Ray:
        """
        Camera ray from the defocus disk toward a jittered point inside
        stratum (s_i, s_j) of pixel (i, j), at a random shutter time.
        """
        offset = self.sample_square_stratified(s_i, s_j, rng)
        pixel_sample = (self.pixel00_loc
                        + self.pixel_delta_u * (i + offset.x)
                        + self.pixel_delta_v * (j + offset.y))

        ray_origin = self.center if self.defocus_angle <= 0 else self.defocus_disk_sample(rng)
        ray_direction = pixel_sample - ray_origin
        ray_time = rng.random()

        return Ray(ray_origin, ray_direction, ray_time)

    def sample_square_stratified(self, s_i: int, s_j: int, rng) -> Vector3:
        """
        Offset to a random point in sub-square (s_i, s_j) of the unit pixel
        [-.5,-.5] to [+.5,+.5].
        """
        px = ((s_i + rng.random()) * self.recip_sqrt_spp) - 0.5
        py = ((s_j + rng.random()) * self.recip_sqrt_spp) - 0.5
        return Vector3(px, py, 0)

    def defocus_disk_sample(self, rng) -> Point3:
        p = random_in_unit_disk(rng)
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

    def ray_color(self, ray: Ray, depth: int, world, lights, rng) -> Color:
        """
        Radiance arriving along `ray`, following at most `depth` bounces.

        Evaluated as a loop that carries the product of the attenuation
        weights of all previous bounces instead of recursing.
        """
        radiance = Color(0, 0, 0)
        throughput = Color(1, 1, 1)
        use_lights = lights is not None and (not hasattr(lights, "__len__") or len(lights) > 0)

        while depth > 0:
            rec = world.hit(ray, Interval(SHADOW_ACNE_EPSILON, math.inf), rng)
            if rec is None:
                return radiance + throughput * self.background

            material = rec.material
            emission = material.emitted(ray, rec, rec.u, rec.v, rec.p)
            radiance = radiance + throughput * emission

            srec = material.scatter(ray, rec, rng)
            if srec is None:
                return radiance

            if srec.skip_pdf:
                throughput = throughput * srec.attenuation
                ray = srec.skip_pdf_ray
                depth -= 1
                continue

            if use_lights:
                sampling_pdf = MixturePDF(HittablePDF(lights, rec.p), srec.pdf)
            else:
                sampling_pdf = srec.pdf

            scattered = Ray(rec.p, sampling_pdf.generate(rng), ray.time)
            pdf_value = sampling_pdf.value(scattered.direction)
            scattering_pdf = material.scattering_pdf(ray, rec, scattered)

            # A zero-density or non-finite sample carries no usable contribution.
            if not pdf_value > 0.0 or not math.isfinite(pdf_value) or scattering_pdf <= 0.0:
                return radiance

            throughput = throughput * srec.attenuation * (scattering_pdf / pdf_value)
            if not throughput.is_finite():
                return radiance
            ray = scattered
            depth -= 1

        return radiance

    def render_row(self, j: int, world, lights) -> List[Color]:
        """Renders pixel row j with its own seeded random source."""
        rng = random.Random(self.seed * 1_000_003 + j)
        row = []
        for i in range(self.image_width):
            pixel_color = Color(0, 0, 0)
            for s_j in range(self.sqrt_spp):
                for s_i in range(self.sqrt_spp):
                    r = self.get_ray(i, j, s_i, s_j, rng)
                    pixel_color = pixel_color + self.ray_color(r, self.max_depth, world, lights, rng)
            row.append(pixel_color * self.pixel_samples_scale)
        return row

    def render(self, world, lights=None, progress: Optional[ProgressCallback] = None) -> np.ndarray:
        """
        Renders the scene into a row-major (height * width, 3) float buffer
        of linear colors, denoised if a denoise mode is configured.

        Rows are independent; with `workers` > 1 they are spread over a
        thread pool. The result does not depend on the number of workers.
        """
        self.initialize()
        width, height = self.image_width, self.image_height
        logger.info("Rendering %dx%d, %d samples per pixel (%dx%d grid), depth %d",
                    width, height, self.samples_per_pixel, self.sqrt_spp, self.sqrt_spp,
                    self.max_depth)

        buffer = np.zeros((width * height, 3), dtype=np.float64)

        def store(j: int, row: List[Color]):
            for i, c in enumerate(row):
                buffer[j * width + i] = (c.x, c.y, c.z)

        rows_done = 0
        if self.workers == 1:
            for j in range(height):
                store(j, self.render_row(j, world, lights))
                rows_done += 1
                if progress is not None:
                    progress(rows_done, height)
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                futures = {pool.submit(self.render_row, j, world, lights): j for j in range(height)}
                for future, j in futures.items():
                    store(j, future.result())
                    rows_done += 1
                    if progress is not None:
                        progress(rows_done, height)

        self.last_raw_buffer = buffer
        if self.denoise is None:
            return buffer.copy()

        logger.info("Denoising (%s filter)", self.denoise)
        return denoise(buffer, width, height, self.denoise)

    def render_to_file(self, filename: str, world, lights=None,
                       progress: Optional[ProgressCallback] = None) -> bool:
        """
        Renders and writes the image; PPM for a `.ppm` suffix, otherwise
        PNG. Returns whether the file was written.
        """
        from pathtracer.renderer.image_io import write_image

        buffer = self.render(world, lights, progress)
        return write_image(filename, buffer, self.image_width, self.image_height)
