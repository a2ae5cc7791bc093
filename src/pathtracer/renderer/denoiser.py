"""Edge-aware post-process filters for rendered color buffers.

Every filter takes a row-major ``(width * height, 3)`` buffer and returns a
new buffer of the same shape; the input is never modified. The per-pixel
work runs in numba kernels parallelised over output rows.
"""

import math

import numpy as np
from numba import njit, prange

DENOISE_MODES = ("bilateral", "median", "fast")


@njit(parallel=True)
def _bilateral_kernel(img, out, radius, spatial_factor, intensity_factor):
    height, width, _ = img.shape
    for row in prange(height):
        y = np.int64(row)
        for x in range(width):
            cr = img[y, x, 0]
            cg = img[y, x, 1]
            cb = img[y, x, 2]
            sr = 0.0
            sg = 0.0
            sb = 0.0
            weight_sum = 0.0
            for ky in range(-radius, radius + 1):
                ny = min(max(y + ky, 0), height - 1)
                for kx in range(-radius, radius + 1):
                    nx = min(max(x + kx, 0), width - 1)
                    nr = img[ny, nx, 0]
                    ng = img[ny, nx, 1]
                    nb = img[ny, nx, 2]

                    spatial_weight = math.exp(-(kx * kx + ky * ky) * spatial_factor)
                    dr = cr - nr
                    dg = cg - ng
                    db = cb - nb
                    intensity_weight = math.exp(-(dr * dr + dg * dg + db * db) * intensity_factor)

                    w = spatial_weight * intensity_weight
                    sr += nr * w
                    sg += ng * w
                    sb += nb * w
                    weight_sum += w
            if weight_sum > 0.0:
                out[y, x, 0] = sr / weight_sum
                out[y, x, 1] = sg / weight_sum
                out[y, x, 2] = sb / weight_sum
            else:
                out[y, x, 0] = cr
                out[y, x, 1] = cg
                out[y, x, 2] = cb


@njit(parallel=True)
def _median_kernel(img, out, radius):
    height, width, _ = img.shape
    side = 2 * radius + 1
    n = side * side
    for row in prange(height):
        y = np.int64(row)
        rv = np.empty(n)
        gv = np.empty(n)
        bv = np.empty(n)
        for x in range(width):
            k = 0
            for ky in range(-radius, radius + 1):
                ny = min(max(y + ky, 0), height - 1)
                for kx in range(-radius, radius + 1):
                    nx = min(max(x + kx, 0), width - 1)
                    rv[k] = img[ny, nx, 0]
                    gv[k] = img[ny, nx, 1]
                    bv[k] = img[ny, nx, 2]
                    k += 1
            mid = n // 2
            out[y, x, 0] = np.sort(rv)[mid]
            out[y, x, 1] = np.sort(gv)[mid]
            out[y, x, 2] = np.sort(bv)[mid]


@njit(parallel=True)
def _fast_kernel(img, out, radius, edge_threshold):
    height, width, _ = img.shape
    for row in prange(height):
        y = np.int64(row)
        for x in range(width):
            cr = img[y, x, 0]
            cg = img[y, x, 1]
            cb = img[y, x, 2]
            sr = 0.0
            sg = 0.0
            sb = 0.0
            count = 0
            for ky in range(-radius, radius + 1):
                ny = y + ky
                if ny < 0 or ny >= height:
                    continue
                for kx in range(-radius, radius + 1):
                    nx = x + kx
                    if nx < 0 or nx >= width:
                        continue
                    nr = img[ny, nx, 0]
                    ng = img[ny, nx, 1]
                    nb = img[ny, nx, 2]
                    dr = cr - nr
                    dg = cg - ng
                    db = cb - nb
                    # The center pixel always takes part.
                    if (kx == 0 and ky == 0) or math.sqrt(dr * dr + dg * dg + db * db) < edge_threshold:
                        sr += nr
                        sg += ng
                        sb += nb
                        count += 1
            out[y, x, 0] = sr / count
            out[y, x, 1] = sg / count
            out[y, x, 2] = sb / count


def _as_image(image, width: int, height: int) -> np.ndarray:
    if width < 1 or height < 1:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    buffer = np.asarray(image, dtype=np.float64)
    if buffer.shape != (width * height, 3):
        raise ValueError(
            f"Buffer shape {buffer.shape} does not match a {width}x{height} RGB image")
    return np.ascontiguousarray(buffer.reshape(height, width, 3))


def bilateral_denoise(image, width: int, height: int,
                      sigma_spatial: float = 2.0, sigma_intensity: float = 0.1) -> np.ndarray:
    """
    Bilateral filter: Gaussian spatial weight times Gaussian color-difference
    weight over a window of radius ceil(2.5 * sigma_spatial), with image
    edges clamped.

    Args:
        sigma_spatial: spatial extent (larger = more smoothing).
        sigma_intensity: color threshold (larger = blurs across edges).
    """
    img = _as_image(image, width, height)
    out = np.empty_like(img)
    radius = int(math.ceil(sigma_spatial * 2.5))
    spatial_factor = 1.0 / (2.0 * sigma_spatial * sigma_spatial)
    intensity_factor = 1.0 / (2.0 * sigma_intensity * sigma_intensity)
    _bilateral_kernel(img, out, radius, spatial_factor, intensity_factor)
    return out.reshape(width * height, 3)


def median_denoise(image, width: int, height: int, kernel_size: int = 3) -> np.ndarray:
    """Per-channel median over a kernel_size square window, edges clamped."""
    img = _as_image(image, width, height)
    out = np.empty_like(img)
    _median_kernel(img, out, max(0, kernel_size // 2))
    return out.reshape(width * height, 3)


def fast_denoise(image, width: int, height: int,
                 kernel_size: int = 3, edge_threshold: float = 0.05) -> np.ndarray:
    """
    Edge-aware box filter: averages the in-bounds neighbours whose color
    distance to the center pixel is below edge_threshold. Out-of-bounds
    neighbours are skipped, so windows shrink at the image border.
    """
    img = _as_image(image, width, height)
    out = np.empty_like(img)
    _fast_kernel(img, out, max(0, kernel_size // 2), edge_threshold)
    return out.reshape(width * height, 3)


def denoise(image, width: int, height: int, mode: str) -> np.ndarray:
    """Applies the named filter with the renderer's default parameters."""
    if mode == "bilateral":
        return bilateral_denoise(image, width, height, 1.5, 0.15)
    if mode == "median":
        return median_denoise(image, width, height, 5)
    if mode == "fast":
        return fast_denoise(image, width, height, 3, 0.08)
    raise ValueError(f"Unknown denoise mode: {mode!r} (expected one of {DENOISE_MODES})")
