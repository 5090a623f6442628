"""Image export for rendered rasters.

The renderer produces normalized float samples; this module quantizes them
to 8-bit channels and writes an image file with Pillow.

Supported formats:
    - PPM (binary P6, max value 255)
    - PNG (8-bit RGB)

Example:
    >>> from raycast.preview.export import save_image
    >>> from raycast.core.render import render
    >>>
    >>> raster = render(scene, 640, 480)
    >>> save_image(raster, "output.ppm")
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from raycast.core.render import RasterBuffer

logger = logging.getLogger(__name__)

# Type alias for the supported output formats
ImageFormat = Literal["ppm", "png"]

# Largest channel value of the 8-bit output formats
DEFAULT_MAX_VALUE = 255


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    max_value: int = DEFAULT_MAX_VALUE,
) -> npt.NDArray[np.uint8]:
    """Quantize a float image in [0, 1] to 8-bit channels.

    Args:
        image: Image array of shape (H, W, 3) with values in [0, 1].
        max_value: Channel value that 1.0 maps to (at most 255).

    Returns:
        8-bit image array of shape (H, W, 3).

    Raises:
        ValueError: If max_value is outside [1, 255].
    """
    if not 1 <= max_value <= DEFAULT_MAX_VALUE:
        raise ValueError(f"max_value must be in [1, {DEFAULT_MAX_VALUE}], got {max_value}")

    clipped = np.clip(image, 0.0, 1.0)
    return np.rint(clipped * max_value).astype(np.uint8)


def guess_format(filepath: str | os.PathLike[str]) -> ImageFormat:
    """Pick the output format from a file extension (PPM unless ``.png``)."""
    _, ext = os.path.splitext(os.fspath(filepath))
    return "png" if ext.lower() == ".png" else "ppm"


def save_array(
    image: npt.NDArray[np.floating],
    filepath: str | os.PathLike[str],
    *,
    fmt: ImageFormat | None = None,
) -> None:
    """Save a float image array to a file.

    Args:
        image: Image array of shape (H, W, 3) with values in [0, 1].
        filepath: Output file path.
        fmt: "ppm" or "png"; guessed from the extension when omitted.

    Raises:
        ValueError: If the format is unknown or the array has the wrong shape.
        OSError: If the file cannot be written.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    if fmt is None:
        fmt = guess_format(filepath)
    if fmt not in ("ppm", "png"):
        raise ValueError(f"Unknown image format: {fmt}")

    image_uint8 = image_to_uint8(image)

    # Save using Pillow
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(os.fspath(filepath), format=fmt.upper())
    logger.debug("Saved %dx%d %s to %s", image.shape[1], image.shape[0], fmt, filepath)


def save_image(
    raster: RasterBuffer,
    filepath: str | os.PathLike[str],
    *,
    fmt: ImageFormat | None = None,
) -> None:
    """Save a rendered raster to a file.

    Args:
        raster: The rendered raster.
        filepath: Output file path.
        fmt: "ppm" or "png"; guessed from the extension when omitted.
    """
    save_array(raster.pixels, filepath, fmt=fmt)


def save_ppm(raster: RasterBuffer, filepath: str | os.PathLike[str]) -> None:
    """Save a rendered raster as a binary (P6) PPM file."""
    save_array(raster.pixels, filepath, fmt="ppm")


def save_png(raster: RasterBuffer, filepath: str | os.PathLike[str]) -> None:
    """Save a rendered raster as an 8-bit PNG file."""
    save_array(raster.pixels, filepath, fmt="png")
