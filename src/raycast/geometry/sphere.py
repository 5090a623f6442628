"""Ray-sphere intersection.

The intersection distance is the smallest strictly positive root of

    |origin + t * direction - center|^2 = radius^2

which expands to the quadratic a*t^2 + b*t + c = 0 with:

    a = dot(direction, direction)
    b = 2 * dot(direction, origin - center)
    c = dot(origin - center, origin - center) - radius^2

The nearer root is preferred; when the ray starts inside the sphere the
nearer root is negative and the farther one is used. A tangent ray has a
zero discriminant, both roots coincide, and that single root is returned.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycast.geometry.sphere import sphere_intersection, vec3
    >>> @ti.kernel
    ... def distance() -> ti.f32:
    ...     return sphere_intersection(
    ...         vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 1.0), vec3(0.0, 0.0, 5.0), 1.0
    ...     )
"""

import taichi as ti

from raycast.core.ray import dot, length_squared, vec3

# Returned by the intersection routines when the ray misses
NO_HIT = -1.0


@ti.func
def sphere_intersection(
    ray_origin: vec3,
    ray_direction: vec3,
    center: vec3,
    radius: ti.f32,
) -> ti.f32:
    """Distance along the ray to the nearest sphere hit in front of it.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (need not be normalized).
        center: Center of the sphere.
        radius: Radius of the sphere.

    Returns:
        The smallest strictly positive ray parameter t, or NO_HIT.
    """
    oc = ray_origin - center

    a = length_squared(ray_direction)
    b = 2.0 * dot(ray_direction, oc)
    c = length_squared(oc) - radius * radius

    discriminant = b * b - 4.0 * a * c

    # Taichi functions need a single return, so track the result
    result = NO_HIT
    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)

        t = (-b - sqrt_d) / (2.0 * a)
        if t > 0.0:
            result = t
        else:
            t = (-b + sqrt_d) / (2.0 * a)
            if t > 0.0:
                result = t

    return result
