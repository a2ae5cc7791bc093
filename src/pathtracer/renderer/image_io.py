# renderer/image_io.py
import logging
import os
from typing import TextIO, Union

from PIL import Image

from pathtracer.renderer.tone_mapping import to_uint8

logger = logging.getLogger(__name__)


def write_png(filename: str, buffer, width: int, height: int) -> bool:
    """
    Save a linear color buffer as an 8-bit PNG. Returns False (after
    logging) when the file cannot be written.
    """
    pixels = to_uint8(buffer, width, height)
    try:
        Image.fromarray(pixels).save(filename, format="PNG")
    except (OSError, ValueError) as e:
        logger.error("Failed to write PNG file %s: %s", filename, e)
        return False
    logger.info("Saved to: %s", filename)
    return True


def write_ppm(target: Union[str, TextIO], buffer, width: int, height: int) -> bool:
    """
    Write a linear color buffer as ASCII PPM (P3) to a path or an open
    text stream.
    """
    pixels = to_uint8(buffer, width, height)
    lines = [f"P3\n{width} {height}\n255\n"]
    for y in range(height):
        for x in range(width):
            r, g, b = pixels[y, x]
            lines.append(f"{r} {g} {b}\n")
    text = "".join(lines)

    try:
        if isinstance(target, (str, os.PathLike)):
            with open(target, "w") as f:
                f.write(text)
            logger.info("Saved to: %s", target)
        else:
            target.write(text)
            target.flush()
    except OSError as e:
        logger.error("Failed to write PPM output %s: %s", target, e)
        return False
    return True


def write_image(filename: str, buffer, width: int, height: int) -> bool:
    """Chooses the format from the file suffix: .ppm or PNG otherwise."""
    if str(filename).lower().endswith(".ppm"):
        return write_ppm(filename, buffer, width, height)
    return write_png(filename, buffer, width, height)
