"""Integration tests for the ray-casting renderer.

Tests cover:
- Full renders of a small scene (sphere, plane and background pixels)
- Exact flat colors for spheres and planes
- Camera-only and empty scenes
- Error handling for missing cameras and invalid dimensions
- Single-pixel rendering
"""

import numpy as np
import pytest

from raycast.errors import MissingCameraError
from raycast.scene.model import Camera, Plane, Scene, Sphere, Vector3
from raycast.scene.reader import read_scene

BLACK = (0.0, 0.0, 0.0)
RED = (1.0, 0.0, 0.0)
BLUE = (0.0, 0.0, 1.0)


class TestRender:
    """Tests for full-image rendering."""

    def test_raster_shape(self, basic_scene_text):
        from raycast.core.render import render

        raster = render(read_scene(basic_scene_text), 4, 3)

        assert raster.width == 4
        assert raster.height == 3
        assert raster.pixels.shape == (3, 4, 3)
        assert raster.pixels.dtype == np.float64
        assert raster.hits.shape == (3, 4)

    def test_basic_scene_layout(self, basic_scene_text):
        """Test a 3x3 render: sky on top, red sphere in the middle, floor below."""
        from raycast.core.render import render

        raster = render(read_scene(basic_scene_text), 3, 3)

        # Top row looks up, over everything
        for x in range(3):
            assert raster.pixel(x, 0) == BLACK
        # The center looks straight at the near sphere
        assert raster.pixel(1, 1) == RED
        # Bottom row hits the floor
        for x in range(3):
            assert raster.pixel(x, 2) == BLUE

    def test_hit_indices(self, basic_scene_text):
        from raycast.core.render import render

        raster = render(read_scene(basic_scene_text), 3, 3)

        np.testing.assert_array_equal(raster.hits[0], [-1, -1, -1])
        assert raster.hits[1, 1] == 0
        np.testing.assert_array_equal(raster.hits[2], [2, 2, 2])

    def test_flat_color_is_exact(self):
        """Test that declared colors come back exactly, without shading."""
        from raycast.core.render import render

        color = Vector3(0.3, 0.7, 0.1)
        scene = Scene(
            camera=Camera(width=1.0, height=1.0),
            shapes=(Sphere(position=Vector3(0.0, 0.0, 3.0), radius=2.5, color=color),),
        )
        raster = render(scene, 5, 5)

        expected = np.broadcast_to(np.array(color), (5, 5, 3))
        np.testing.assert_array_equal(raster.pixels, expected)

    def test_plane_fills_view(self):
        from raycast.core.render import render

        wall = Plane(Vector3(0.0, 0.0, 10.0), Vector3(0.0, 0.0, -1.0), Vector3(0.25, 0.5, 0.75))
        raster = render(Scene(camera=Camera(width=2.0, height=2.0), shapes=(wall,)), 4, 4)

        assert np.all(raster.hits == 0)
        assert raster.pixel(3, 3) == (0.25, 0.5, 0.75)

    def test_camera_only_scene_is_black(self):
        from raycast.core.render import render

        raster = render(Scene(camera=Camera(width=1.0, height=1.0)), 8, 6)

        assert np.all(raster.pixels == 0.0)
        assert np.all(raster.hits == -1)

    def test_render_is_repeatable(self, basic_scene_text):
        """Test that rendering the same scene twice gives identical images."""
        from raycast.core.render import render

        scene = read_scene(basic_scene_text)
        first = render(scene, 16, 16)
        second = render(scene, 16, 16)

        np.testing.assert_array_equal(first.pixels, second.pixels)

    def test_rerender_replaces_previous_scene(self, basic_scene_text):
        """Test that a later render does not see shapes from an earlier one."""
        from raycast.core.render import render

        render(read_scene(basic_scene_text), 3, 3)
        raster = render(Scene(camera=Camera(width=2.0, height=2.0)), 3, 3)

        assert np.all(raster.hits == -1)

    def test_wide_image(self, basic_scene_text):
        """Test an image wider than any earlier render in the session."""
        from raycast.core.render import render

        raster = render(read_scene(basic_scene_text), 4099, 1)

        assert raster.pixels.shape == (1, 4099, 3)
        assert raster.hits.shape == (1, 4099)

    def test_sizes_in_any_order(self, basic_scene_text):
        """Test that growing and shrinking the output size keeps results consistent."""
        from raycast.core.render import render

        scene = read_scene(basic_scene_text)
        small = render(scene, 3, 3)
        render(scene, 7, 40)
        render(scene, 50, 2)
        again = render(scene, 3, 3)

        np.testing.assert_array_equal(small.hits, again.hits)
        np.testing.assert_array_equal(small.pixels, again.pixels)

    def test_missing_camera(self):
        from raycast.core.render import render

        scene = Scene(shapes=(Sphere(Vector3(0.0, 0.0, 5.0), 1.0, Vector3(1.0, 0.0, 0.0)),))
        with pytest.raises(MissingCameraError, match="No camera"):
            render(scene, 4, 4)

    @pytest.mark.parametrize(("width", "height"), [(0, 4), (4, 0), (-1, 4), (4, -1)])
    def test_invalid_dimensions(self, basic_scene_text, width, height):
        from raycast.core.render import render

        with pytest.raises(ValueError):
            render(read_scene(basic_scene_text), width, height)


class TestBuildPalette:
    """Tests for the hit-index color table."""

    def test_palette_rows(self, basic_scene_text):
        from raycast.core.render import BACKGROUND_COLOR, build_palette

        palette = build_palette(read_scene(basic_scene_text))

        assert palette.shape == (4, 3)
        assert tuple(palette[0]) == BACKGROUND_COLOR
        assert tuple(palette[1]) == RED
        assert tuple(palette[3]) == BLUE


class TestRenderPixel:
    """Tests for single-pixel rendering."""

    def test_render_pixel_matches_render(self, basic_scene_text):
        from raycast.core.render import render, render_pixel

        scene = read_scene(basic_scene_text)
        raster = render(scene, 5, 5)

        for x, y in [(2, 2), (0, 0), (4, 4), (2, 4)]:
            assert render_pixel(scene, x, y, 5, 5) == raster.pixel(x, y)

    def test_render_pixel_background(self, basic_scene_text):
        from raycast.core.render import render_pixel

        assert render_pixel(read_scene(basic_scene_text), 0, 0, 3, 3) == BLACK

    def test_render_pixel_out_of_bounds(self, basic_scene_text):
        from raycast.core.render import render_pixel

        with pytest.raises(ValueError, match="outside"):
            render_pixel(read_scene(basic_scene_text), 3, 0, 3, 3)
