"""Ray-casting renderer.

Each pixel is rendered by casting one primary ray from the camera origin
through the pixel's center on the sensor plane, finding the nearest shape
along it and taking that shape's flat color. Pixels with no hit take the
background color (black).

The per-pixel work is the pure Taichi function ``trace_pixel``: it depends
only on the uploaded scene, the pixel coordinates and the output size. The
render kernel runs it over the whole pixel grid as a parallel loop and
stores the winning shape index of every pixel in a hit buffer; colors are
then resolved on the host from the scene's own shape colors, identically
for spheres and planes.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycast.core.render import render
    >>> from raycast.scene.reader import load_scene
    >>>
    >>> scene = load_scene("scene.json")
    >>> raster = render(scene, 640, 480)
    >>> raster.pixels.shape
    (480, 640, 3)
"""

import logging
import time
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from raycast.camera.sensor import get_ray, setup_camera
from raycast.errors import MissingCameraError
from raycast.scene.intersection import cast_ray, upload_scene
from raycast.scene.model import Scene, shape_color

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

# Color of pixels whose ray hits nothing
BACKGROUND_COLOR = (0.0, 0.0, 0.0)

# Index of the nearest shape per pixel, -1 for background. Indexed [row, column].
# Allocated on first render and grown to fit the largest image rendered so far.
_hit_buffer = None


def _get_hit_buffer(width: int, height: int):
    """Return a hit buffer with at least ``height`` rows and ``width`` columns."""
    global _hit_buffer
    if _hit_buffer is None:
        rows, cols = height, width
    else:
        rows, cols = _hit_buffer.shape
        if rows >= height and cols >= width:
            return _hit_buffer
        rows, cols = max(rows, height), max(cols, width)

    _hit_buffer = ti.field(dtype=ti.i32, shape=(rows, cols))
    logger.debug("Allocated %dx%d hit buffer", cols, rows)
    return _hit_buffer


@dataclass
class RasterBuffer:
    """A rendered image, prior to any file-format encoding.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Float RGB samples in [0, 1], shape (height, width, 3),
            row-major with row 0 at the top.
        hits: Index of the shape seen by each pixel in the scene's shape
            list, or -1 for background. Shape (height, width).
    """

    width: int
    height: int
    pixels: npt.NDArray[np.float64]
    hits: npt.NDArray[np.int32]

    def pixel(self, x: int, y: int) -> tuple[float, float, float]:
        """Get the color of pixel (x, y), row 0 at the top."""
        r, g, b = self.pixels[y, x]
        return (float(r), float(g), float(b))


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")


def prepare_scene(scene: Scene) -> None:
    """Load the scene's camera and shapes into the GPU-side state.

    Raises:
        MissingCameraError: If the scene declares no camera.
    """
    if scene.camera is None:
        raise MissingCameraError("No camera found in scene")
    setup_camera(scene.camera)
    upload_scene(scene)


def build_palette(scene: Scene) -> npt.NDArray[np.float64]:
    """Build the color lookup table for resolving hit indices.

    Row 0 is the background color; row ``i + 1`` is the color of shape ``i``.
    """
    palette = np.empty((len(scene.shapes) + 1, 3), dtype=np.float64)
    palette[0] = BACKGROUND_COLOR
    for i, shape in enumerate(scene.shapes):
        palette[i + 1] = shape_color(shape)
    return palette


# =============================================================================
# Per-pixel Ray Casting (Taichi)
# =============================================================================


@ti.func
def trace_pixel(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> ti.i32:
    """Cast the primary ray of pixel (x, y).

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Index of the nearest shape hit, or -1 for background.
    """
    ray = get_ray(x, y, width, height)
    index, _ = cast_ray(ray.origin, ray.direction)
    return index


@ti.kernel
def _cast_all_pixels(hits: ti.template(), width: ti.i32, height: ti.i32):
    """Fill the hit buffer for every pixel in parallel."""
    for y, x in ti.ndrange(height, width):
        hits[y, x] = trace_pixel(x, y, width, height)


@ti.kernel
def _cast_single_pixel(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> ti.i32:
    """Cast the ray of one pixel (testing and debugging)."""
    return trace_pixel(x, y, width, height)


# =============================================================================
# Public Rendering API
# =============================================================================


def render(scene: Scene, width: int, height: int) -> RasterBuffer:
    """Render the scene at the requested resolution.

    Args:
        scene: The scene to render. Must declare a camera.
        width: Output width in pixels.
        height: Output height in pixels.

    Returns:
        The rendered RasterBuffer.

    Raises:
        MissingCameraError: If the scene declares no camera.
        ShapeCapacityError: If the scene has more shapes than the shape table holds.
        ValueError: If the dimensions are not positive.
    """
    _check_dimensions(width, height)
    prepare_scene(scene)

    start = time.perf_counter()
    hit_buffer = _get_hit_buffer(width, height)
    _cast_all_pixels(hit_buffer, width, height)
    hits = hit_buffer.to_numpy()[:height, :width].astype(np.int32)
    elapsed = time.perf_counter() - start

    pixels = build_palette(scene)[hits + 1]
    logger.debug(
        "Rendered %dx%d pixels against %d shapes in %.3fs",
        width,
        height,
        len(scene.shapes),
        elapsed,
    )
    return RasterBuffer(width=width, height=height, pixels=pixels, hits=hits)


def render_pixel(scene: Scene, x: int, y: int, width: int, height: int) -> tuple[float, float, float]:
    """Render a single pixel of the image.

    This is a Python-callable function for testing. For full images, use
    render() which processes all pixels in parallel.

    Args:
        scene: The scene to render. Must declare a camera.
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Tuple of (R, G, B) color values.

    Raises:
        MissingCameraError: If the scene declares no camera.
        ValueError: If the dimensions or pixel coordinates are invalid.
    """
    _check_dimensions(width, height)
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"Pixel ({x}, {y}) is outside the {width}x{height} image")
    prepare_scene(scene)

    index = int(_cast_single_pixel(x, y, width, height))
    if index < 0:
        return BACKGROUND_COLOR
    r, g, b = shape_color(scene.shapes[index])
    return (float(r), float(g), float(b))
