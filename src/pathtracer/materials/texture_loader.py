# materials/texture_loader.py
import os

from PIL import Image, UnidentifiedImageError

from pathtracer.materials.textures import ImageTexture


def load_texture(image_path: str) -> ImageTexture:
    """
    Load an image file as a texture, failing loudly instead of falling back
    to the debug color.

    Args:
        image_path: Path to the image file

    Returns:
        ImageTexture object

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the image format is unsupported
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            img.verify()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Error loading texture {image_path}: {e}") from e

    return ImageTexture(image_path)

