"""Tests for the post-process denoising filters."""

import numpy as np
import pytest

from pathtracer.renderer.denoiser import (DENOISE_MODES, bilateral_denoise, denoise,
                                          fast_denoise, median_denoise)


def uniform(width, height, color=(0.3, 0.5, 0.7)):
    return np.tile(np.array(color, dtype=np.float64), (width * height, 1))


def split_image(width, height):
    """Left half black, right half white."""
    img = np.zeros((height, width, 3))
    img[:, width // 2:, :] = 1.0
    return img.reshape(width * height, 3)


class TestDenoiseInvariants:
    """Properties shared by every filter."""

    @pytest.mark.parametrize("mode", DENOISE_MODES)
    def test_uniform_image_unchanged(self, mode):
        img = uniform(7, 5)
        out = denoise(img, 7, 5, mode)
        assert np.allclose(out, img)

    @pytest.mark.parametrize("mode", DENOISE_MODES)
    def test_shape_preserved_and_input_untouched(self, mode, rng):
        img = np.array([[rng.random() for _ in range(3)] for _ in range(9 * 4)])
        before = img.copy()
        out = denoise(img, 9, 4, mode)
        assert out.shape == (36, 3)
        assert np.array_equal(img, before)
        assert np.all(np.isfinite(out))

    @pytest.mark.parametrize("mode", DENOISE_MODES)
    def test_single_pixel(self, mode):
        img = uniform(1, 1, (0.1, 0.2, 0.3))
        assert np.allclose(denoise(img, 1, 1, mode), img)

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            denoise(uniform(2, 2), 2, 2, "gaussian")

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            median_denoise(uniform(2, 2), 3, 3)
        with pytest.raises(ValueError):
            fast_denoise(uniform(2, 2), 0, 4)


class TestFilters:
    """Filter-specific behaviour."""

    def test_median_removes_isolated_spike(self):
        img = np.zeros((5 * 5, 3))
        img[12] = [10.0, 10.0, 10.0]
        out = median_denoise(img, 5, 5, 3)
        assert np.allclose(out, 0.0)

    def test_fast_filter_preserves_hard_edge(self):
        img = split_image(8, 4)
        out = fast_denoise(img, 8, 4, 3, 0.05)
        assert np.allclose(out, img)

    def test_fast_filter_smooths_small_noise(self, rng):
        base = uniform(8, 8, (0.5, 0.5, 0.5))
        noisy = base + np.array([[rng.uniform(-0.01, 0.01)] * 3 for _ in range(64)])
        out = fast_denoise(noisy, 8, 8, 3, 0.1)
        assert np.abs(out - base).mean() < np.abs(noisy - base).mean()

    def test_bilateral_keeps_edges_sharper_than_box_blur(self):
        img = split_image(8, 4)
        out = bilateral_denoise(img, 8, 4, 2.0, 0.1).reshape(4, 8, 3)
        assert out[:, 0, :].max() < 0.01
        assert out[:, -1, :].min() > 0.99

    def test_bilateral_smooths_noise(self, rng):
        base = uniform(8, 8, (0.5, 0.5, 0.5))
        noisy = base + np.array([[rng.uniform(-0.05, 0.05)] * 3 for _ in range(64)])
        out = bilateral_denoise(noisy, 8, 8, 1.5, 0.5)
        assert np.abs(out - base).mean() < np.abs(noisy - base).mean()
