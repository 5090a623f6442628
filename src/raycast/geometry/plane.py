"""Ray-plane intersection.

A plane through point P with normal N is hit at

    t = -dot(N, origin - P) / dot(N, direction)

A ray parallel to the plane (zero denominator) never hits it, whether it
lies in the plane or runs beside it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycast.geometry.plane import plane_intersection, vec3
    >>> @ti.kernel
    ... def distance() -> ti.f32:
    ...     return plane_intersection(
    ...         vec3(0.0, 0.0, 0.0), vec3(0.0, -1.0, 0.0), vec3(0.0, -2.0, 0.0), vec3(0.0, 1.0, 0.0)
    ...     )
"""

import taichi as ti

from raycast.core.ray import dot, vec3
from raycast.geometry.sphere import NO_HIT


@ti.func
def plane_intersection(
    ray_origin: vec3,
    ray_direction: vec3,
    position: vec3,
    normal: vec3,
) -> ti.f32:
    """Distance along the ray to the plane, if the plane is in front of it.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (need not be normalized).
        position: Any point on the plane.
        normal: The plane normal (unit length as stored by the reader).

    Returns:
        The strictly positive ray parameter t, or NO_HIT.
    """
    denom = dot(normal, ray_direction)

    result = NO_HIT
    if denom != 0.0:
        t = -dot(normal, ray_origin - position) / denom
        if t > 0.0:
            result = t

    return result
