"""Immutable value types describing a scene.

The scene reader is the only producer of these objects; everything
downstream (GPU upload, rendering, color resolution) only reads them.

A Shape is a closed variant over Sphere and Plane. Both variants expose the
same ``kind`` tag and ``color`` accessor so callers never need to know which
one they hold to resolve a pixel color.

Example:
    >>> from raycast.scene.model import Camera, Scene, Sphere, Vector3
    >>> sphere = Sphere(
    ...     position=Vector3(0.0, 0.0, 5.0),
    ...     radius=1.0,
    ...     color=Vector3(1.0, 0.0, 0.0),
    ... )
    >>> scene = Scene(camera=Camera(width=1.0, height=1.0), shapes=(sphere,))
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, NamedTuple, Union


class ObjectKind(IntEnum):
    """Tag identifying the kind of a scene object.

    The integer values double as the shape tag stored in the GPU-side
    shape table.
    """

    CAMERA = 1
    SPHERE = 2
    PLANE = 3


class Vector3(NamedTuple):
    """A 3-component real vector."""

    x: float
    y: float
    z: float

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y, self.z)

    def normalized(self) -> Vector3:
        """Return the unit vector pointing the same way.

        Components are scaled by the largest magnitude first, so vectors with
        very large or very small components normalize without overflow or
        underflow.

        Raises:
            ZeroDivisionError: If the vector has zero length.
            ValueError: If a component is infinite or NaN.
        """
        scale = max(abs(self.x), abs(self.y), abs(self.z))
        if not math.isfinite(scale):
            raise ValueError(f"cannot normalize a non-finite vector {tuple(self)!r}")
        if scale == 0.0:
            raise ZeroDivisionError("cannot normalize a zero-length vector")
        x, y, z = self.x / scale, self.y / scale, self.z / scale
        n = math.hypot(x, y, z)
        return Vector3(x / n, y / n, z / n)


@dataclass(frozen=True)
class Camera:
    """Sensor dimensions of the (fixed-orientation) camera.

    Attributes:
        width: Sensor width at unit distance (positive).
        height: Sensor height at unit distance (positive).
    """

    kind: ClassVar[ObjectKind] = ObjectKind.CAMERA

    width: float
    height: float


@dataclass(frozen=True)
class Sphere:
    """A flat-colored sphere.

    Attributes:
        position: Center of the sphere.
        radius: Radius (positive).
        color: RGB color, each component in [0, 1].
    """

    kind: ClassVar[ObjectKind] = ObjectKind.SPHERE

    position: Vector3
    radius: float
    color: Vector3


@dataclass(frozen=True)
class Plane:
    """A flat-colored infinite plane.

    Attributes:
        position: Any point on the plane.
        normal: Unit-length plane normal.
        color: RGB color, each component in [0, 1].
    """

    kind: ClassVar[ObjectKind] = ObjectKind.PLANE

    position: Vector3
    normal: Vector3
    color: Vector3


Shape = Union[Sphere, Plane]


@dataclass(frozen=True)
class Scene:
    """A camera plus the shapes to render, in declaration order."""

    camera: Camera | None = None
    shapes: tuple[Shape, ...] = field(default_factory=tuple)

    @property
    def sphere_count(self) -> int:
        return sum(1 for shape in self.shapes if shape.kind == ObjectKind.SPHERE)

    @property
    def plane_count(self) -> int:
        return sum(1 for shape in self.shapes if shape.kind == ObjectKind.PLANE)


def shape_color(shape: Shape) -> Vector3:
    """Flat color of any shape variant."""
    return shape.color
