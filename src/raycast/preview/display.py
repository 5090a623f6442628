"""Matplotlib-based preview display for rendered rasters.

Example:
    >>> from raycast.preview.display import show_preview
    >>> from raycast.core.render import render
    >>>
    >>> raster = render(scene, 320, 240)
    >>> show_preview(raster)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from raycast.core.render import RasterBuffer


def show_preview(
    raster: RasterBuffer,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a rendered raster as a Matplotlib figure.

    Args:
        raster: The rendered raster to display.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(np.clip(raster.pixels, 0.0, 1.0), interpolation="nearest")
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {raster.width}x{raster.height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
