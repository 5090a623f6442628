"""Tests for image export.

Tests cover:
- Float to 8-bit quantization
- Format selection from file extensions
- Writing PPM and PNG files that Pillow reads back
"""

import numpy as np
import pytest
from PIL import Image

from raycast.preview.export import (
    guess_format,
    image_to_uint8,
    save_array,
    save_image,
    save_png,
    save_ppm,
)


def _gradient(height=2, width=3):
    image = np.zeros((height, width, 3), dtype=np.float64)
    image[0, 0] = (1.0, 0.0, 0.0)
    image[0, 1] = (0.0, 1.0, 0.0)
    image[1, 2] = (0.5, 0.25, 1.0)
    return image


class TestImageToUint8:
    """Tests for quantization."""

    def test_extremes(self):
        image = np.array([[[0.0, 1.0, 0.5]]])
        result = image_to_uint8(image)

        assert result.dtype == np.uint8
        assert result.tolist() == [[[0, 255, 128]]]

    def test_out_of_range_values_clipped(self):
        image = np.array([[[-0.5, 1.5, 0.0]]])
        assert image_to_uint8(image).tolist() == [[[0, 255, 0]]]

    def test_custom_max_value(self):
        image = np.array([[[1.0, 0.5, 0.0]]])
        assert image_to_uint8(image, max_value=100).tolist() == [[[100, 50, 0]]]

    @pytest.mark.parametrize("max_value", [0, 256])
    def test_invalid_max_value(self, max_value):
        with pytest.raises(ValueError, match="max_value"):
            image_to_uint8(np.zeros((1, 1, 3)), max_value=max_value)


class TestGuessFormat:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("out.png", "png"),
            ("OUT.PNG", "png"),
            ("out.ppm", "ppm"),
            ("out", "ppm"),
            ("out.jpg", "ppm"),
        ],
    )
    def test_guess_format(self, path, expected):
        assert guess_format(path) == expected


class TestSaveArray:
    """Tests for writing image files."""

    def test_save_ppm_header(self, tmp_path):
        """Test the file is a binary P6 PPM with max value 255."""
        path = tmp_path / "out.ppm"
        save_array(_gradient(), path)

        data = path.read_bytes()
        assert data.startswith(b"P6")
        assert b"255" in data[:20]
        # 3 bytes per pixel follow the header
        assert data.endswith(bytes([128, 64, 255]))

    def test_save_ppm_roundtrip(self, tmp_path):
        path = tmp_path / "out.ppm"
        save_array(_gradient(), path)

        with Image.open(path) as img:
            assert img.size == (3, 2)
            assert img.mode == "RGB"
            assert img.getpixel((0, 0)) == (255, 0, 0)
            assert img.getpixel((1, 0)) == (0, 255, 0)
            assert img.getpixel((2, 1)) == (128, 64, 255)

    def test_save_png_by_extension(self, tmp_path):
        path = tmp_path / "out.png"
        save_array(_gradient(), path)

        with Image.open(path) as img:
            assert img.format == "PNG"
            assert img.getpixel((0, 0)) == (255, 0, 0)

    def test_format_overrides_extension(self, tmp_path):
        path = tmp_path / "image.out"
        save_array(_gradient(), path, fmt="png")

        with Image.open(path) as img:
            assert img.format == "PNG"

    def test_wrong_shape(self, tmp_path):
        with pytest.raises(ValueError, match="Expected an"):
            save_array(np.zeros((2, 3)), tmp_path / "out.ppm")

    def test_unknown_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown image format"):
            save_array(_gradient(), tmp_path / "out.ppm", fmt="bmp")

    def test_unwritable_path(self, tmp_path):
        with pytest.raises(OSError):
            save_array(_gradient(), tmp_path / "missing" / "out.ppm")


class TestSaveRaster:
    """Tests for saving rendered rasters."""

    def test_save_rendered_scene(self, tmp_path, basic_scene_text):
        from raycast.core.render import render
        from raycast.scene.reader import read_scene

        raster = render(read_scene(basic_scene_text), 3, 3)
        save_image(raster, tmp_path / "scene.ppm")

        with Image.open(tmp_path / "scene.ppm") as img:
            assert img.getpixel((1, 1)) == (255, 0, 0)
            assert img.getpixel((1, 2)) == (0, 0, 255)
            assert img.getpixel((1, 0)) == (0, 0, 0)

    def test_save_ppm_and_png(self, tmp_path, basic_scene_text):
        from raycast.core.render import render
        from raycast.scene.reader import read_scene

        raster = render(read_scene(basic_scene_text), 3, 3)
        save_ppm(raster, tmp_path / "a.img")
        save_png(raster, tmp_path / "b.img")

        assert (tmp_path / "a.img").read_bytes().startswith(b"P6")
        with Image.open(tmp_path / "b.img") as img:
            assert img.format == "PNG"
