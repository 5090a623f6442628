"""Core rendering module.

Components:
    ray: Ray data structure and vector helpers for Taichi kernels
    render: Per-pixel ray casting, render kernel and raster buffer

Rendering casts exactly one primary ray per pixel from the origin through
the camera's sensor plane and takes the flat color of the nearest shape hit.
There is no shading, no secondary rays and no sample accumulation.
"""

from .ray import (
    Ray,
    dot,
    length_squared,
    make_ray,
    normalize,
    ray_at,
    vec3,
)

# Note: render is NOT imported here. It declares Taichi fields, which must be
# created after ti.init(). Import it directly from raycast.core.render.

__all__ = [
    "Ray",
    "make_ray",
    "ray_at",
    "vec3",
    "dot",
    "length_squared",
    "normalize",
]
