"""Geometry module for ray-primitive intersection.

This module provides the intersection routines for the two primitive kinds:

Components:
    sphere: Ray-sphere intersection (closed-form quadratic)
    plane: Ray-plane intersection

All intersection routines are Taichi functions (@ti.func) returning the
distance along the ray to the nearest hit in front of the origin, or the
NO_HIT sentinel:

    t = sphere_intersection(ray_origin, ray_direction, center, radius)
    t = plane_intersection(ray_origin, ray_direction, position, normal)
"""

from .plane import plane_intersection
from .sphere import NO_HIT, sphere_intersection

__all__ = [
    "NO_HIT",
    "sphere_intersection",
    "plane_intersection",
]
