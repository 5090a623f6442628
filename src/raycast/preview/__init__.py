"""Preview module for output and visualization.

This module handles rendering output and on-screen preview:

Components:
    display: Matplotlib-based preview display
    export: PPM/PNG image export utilities

Example:
    >>> from raycast.preview import save_image, show_preview
    >>> from raycast.core.render import render
    >>>
    >>> raster = render(scene, 320, 240)
    >>> save_image(raster, "output.ppm")
    >>> show_preview(raster)
"""

from raycast.preview.display import show_preview
from raycast.preview.export import (
    DEFAULT_MAX_VALUE,
    ImageFormat,
    guess_format,
    image_to_uint8,
    save_array,
    save_image,
    save_png,
    save_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    # Export functions
    "save_image",
    "save_array",
    "save_ppm",
    "save_png",
    "image_to_uint8",
    "guess_format",
    "ImageFormat",
    "DEFAULT_MAX_VALUE",
]
