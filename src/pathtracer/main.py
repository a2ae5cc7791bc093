# main.py
import argparse
import logging
import sys
import time

from pathtracer.camera.camera import Camera
from pathtracer.config import DEFAULT_QUALITY, QUALITY_PRESETS, quality_settings
from pathtracer.renderer.denoiser import DENOISE_MODES
from pathtracer.renderer.image_io import write_image, write_ppm
from pathtracer.scenes import SCENES

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathtracer",
                                     description="Offline Monte Carlo path tracer")
    parser.add_argument("--scene", choices=sorted(SCENES), default="final",
                        help="scene to render")
    parser.add_argument("--quality", "-q", choices=list(QUALITY_PRESETS), default=DEFAULT_QUALITY,
                        help="resolution / samples / depth preset")
    parser.add_argument("--output", "-o", default=None,
                        help="output file (.png or .ppm); PPM on stdout when omitted")
    parser.add_argument("--denoise", choices=("off",) + DENOISE_MODES, default="off",
                        help="post-process filter")
    parser.add_argument("--seed", type=int, default=0,
                        help="seed for scene generation and sampling")
    parser.add_argument("--workers", "-j", type=int, default=1,
                        help="number of render threads")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="debug logging")
    return parser


class ProgressBar:
    """Scanline progress on a text stream, redrawn in place."""

    def __init__(self, stream=None, width: int = 40):
        self.stream = stream if stream is not None else sys.stderr
        self.width = width

    def __call__(self, done: int, total: int):
        filled = int(self.width * done / total) if total else self.width
        bar = "#" * filled + "-" * (self.width - filled)
        self.stream.write(f"\r[{bar}] {done}/{total} scanlines")
        if done >= total:
            self.stream.write("\n")
        self.stream.flush()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
                        stream=sys.stderr)

    settings = quality_settings(args.quality, args.scene)
    logger.info("Scene %s [%s] (%dpx wide, %d samples, depth %d)", args.scene, args.quality,
                settings["width"], settings["samples"], settings["depth"])

    world, lights, camera_settings = SCENES[args.scene](seed=args.seed)

    camera = Camera(image_width=settings["width"],
                    samples_per_pixel=settings["samples"],
                    max_depth=settings["depth"],
                    denoise=args.denoise,
                    seed=args.seed,
                    workers=args.workers,
                    **camera_settings)

    start_time = time.time()
    buffer = camera.render(world, lights, progress=ProgressBar())
    logger.info("Render finished in %.2fs", time.time() - start_time)

    if args.output is None:
        ok = write_ppm(sys.stdout, buffer, camera.image_width, camera.image_height)
    else:
        ok = write_image(args.output, buffer, camera.image_width, camera.image_height)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
