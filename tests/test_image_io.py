"""Tests for tone mapping and image file output."""

import io

import numpy as np
from PIL import Image

from pathtracer.renderer.image_io import write_image, write_png, write_ppm
from pathtracer.renderer.tone_mapping import linear_to_gamma, to_uint8


class TestToneMapping:
    def test_linear_to_gamma(self):
        out = linear_to_gamma(np.array([0.25, -1.0, 1.0]))
        assert np.allclose(out, [0.5, 0.0, 1.0])

    def test_to_uint8_clamps(self):
        buf = np.array([[0.25, 4.0, -1.0], [np.nan, 0.0, 1.0]])
        pixels = to_uint8(buf, 2, 1)
        assert pixels.shape == (1, 2, 3)
        assert pixels.dtype == np.uint8
        assert pixels[0, 0].tolist() == [128, 255, 0]
        assert pixels[0, 1].tolist() == [0, 0, 255]


class TestWriters:
    """Tests for PNG/PPM writers."""

    def test_write_png(self, tmp_path):
        path = tmp_path / "out.png"
        buf = np.full((3 * 2, 3), 0.25)
        assert write_png(str(path), buf, 3, 2)
        with Image.open(path) as img:
            assert img.size == (3, 2)
            assert img.getpixel((2, 1)) == (128, 128, 128)

    def test_write_png_failure_returns_false(self, tmp_path, caplog):
        path = tmp_path / "missing" / "out.png"
        assert not write_png(str(path), np.zeros((4, 3)), 2, 2)
        assert "out.png" in caplog.text

    def test_write_ppm_stream(self):
        stream = io.StringIO()
        buf = np.array([[1.0, 0.0, 0.25], [0.0, 0.0, 0.0]])
        assert write_ppm(stream, buf, 2, 1)
        assert stream.getvalue() == "P3\n2 1\n255\n255 0 128\n0 0 0\n"

    def test_write_image_picks_format(self, tmp_path):
        buf = np.zeros((4, 3))
        ppm = tmp_path / "a.ppm"
        png = tmp_path / "a.png"
        assert write_image(str(ppm), buf, 2, 2)
        assert write_image(str(png), buf, 2, 2)
        assert ppm.read_text().startswith("P3\n2 2\n255\n")
        with Image.open(png) as img:
            assert img.format == "PNG"

    def test_write_ppm_failure_returns_false(self, tmp_path):
        assert not write_ppm(str(tmp_path / "missing" / "a.ppm"), np.zeros((1, 3)), 1, 1)
