# renderer/tone_mapping.py
import numpy as np


def linear_to_gamma(linear):
    """
    Gamma 2 approximation: square root of each component, with negative
    (invalid) values mapped to 0.
    """
    linear = np.asarray(linear, dtype=np.float64)
    return np.sqrt(np.clip(linear, 0.0, None))


def to_uint8(buffer, width: int, height: int) -> np.ndarray:
    """
    Convert a row-major (width * height, 3) linear color buffer to a
    displayable (height, width, 3) uint8 image.
    """
    gamma = linear_to_gamma(buffer)
    gamma = np.nan_to_num(gamma, nan=0.0, posinf=0.999, neginf=0.0)
    clamped = np.clip(gamma, 0.0, 0.999)
    return (256 * clamped).astype(np.uint8).reshape(height, width, 3)