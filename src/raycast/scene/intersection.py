"""GPU-side shape table and nearest-hit ray casting.

The scene's shapes are mirrored into Taichi fields so the render kernel can
test every pixel's ray against them. Shapes keep their declaration order in
one table, tagged by kind, so spheres and planes interleave exactly as they
were declared.

Nearest-hit resolution is a brute-force linear scan: every shape is tested
and the smallest strictly positive distance wins. A later shape replaces the
current best only when it is strictly closer, so on equal distances the
first-declared shape wins.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycast.scene.intersection import upload_scene, cast_ray
    >>> from raycast.scene.reader import read_scene
    >>> upload_scene(read_scene(text))
    >>> # Use cast_ray within a Taichi kernel
"""

import taichi as ti

from raycast.errors import ShapeCapacityError
from raycast.geometry.plane import plane_intersection
from raycast.geometry.sphere import NO_HIT, sphere_intersection
from raycast.scene.model import ObjectKind, Plane, Scene, Sphere

vec3 = ti.math.vec3

# Shape tags as plain ints for use inside kernels
SPHERE_TAG = int(ObjectKind.SPHERE)
PLANE_TAG = int(ObjectKind.PLANE)

# Maximum number of shapes supported in the scene
MAX_SHAPES = 1024

# Shape storage: Structure of Arrays layout, one row per shape in
# declaration order. Unused columns of a row (radius for a plane, normal for
# a sphere) are left at zero.
shape_kinds = ti.field(dtype=ti.i32, shape=MAX_SHAPES)
shape_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SHAPES)
shape_radii = ti.field(dtype=ti.f32, shape=MAX_SHAPES)
shape_normals = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SHAPES)
num_shapes = ti.field(dtype=ti.i32, shape=())


def clear_shapes() -> None:
    """Remove all shapes from the table.

    Only the count is reset; rows are overwritten by the next upload.
    """
    num_shapes[None] = 0


def add_shape(shape: Sphere | Plane) -> int:
    """Append one shape to the table.

    Args:
        shape: The sphere or plane to add.

    Returns:
        The index of the added shape.

    Raises:
        ShapeCapacityError: If the maximum number of shapes is exceeded.
        TypeError: If ``shape`` is not a Sphere or Plane.
    """
    idx = num_shapes[None]
    if idx >= MAX_SHAPES:
        raise ShapeCapacityError(f"Maximum number of shapes ({MAX_SHAPES}) exceeded")

    if isinstance(shape, Sphere):
        shape_radii[idx] = shape.radius
        shape_normals[idx] = (0.0, 0.0, 0.0)
    elif isinstance(shape, Plane):
        shape_radii[idx] = 0.0
        shape_normals[idx] = tuple(shape.normal)
    else:
        raise TypeError(f"Unsupported shape: {shape!r}")

    shape_kinds[idx] = int(shape.kind)
    shape_positions[idx] = tuple(shape.position)
    num_shapes[None] = idx + 1
    return idx


def upload_scene(scene: Scene) -> int:
    """Replace the table contents with the scene's shapes.

    Args:
        scene: The scene whose shapes to upload, in declaration order.

    Returns:
        The number of shapes uploaded.
    """
    clear_shapes()
    for shape in scene.shapes:
        add_shape(shape)
    return get_shape_count()


def get_shape_count() -> int:
    """Get the number of shapes in the table."""
    return int(num_shapes[None])


@ti.func
def shape_intersection(i: ti.i32, ray_origin: vec3, ray_direction: vec3) -> ti.f32:
    """Intersect the ray with shape ``i`` of the table.

    Returns:
        The hit distance, or NO_HIT.
    """
    t = NO_HIT
    if shape_kinds[i] == SPHERE_TAG:
        t = sphere_intersection(ray_origin, ray_direction, shape_positions[i], shape_radii[i])
    elif shape_kinds[i] == PLANE_TAG:
        t = plane_intersection(ray_origin, ray_direction, shape_positions[i], shape_normals[i])
    return t


@ti.func
def cast_ray(ray_origin: vec3, ray_direction: vec3):
    """Find the nearest shape hit by a ray.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray.

    Returns:
        A tuple (index, t): the index of the nearest shape hit and its
        distance, or (-1, NO_HIT) when no shape is in front of the ray.
    """
    best_i = -1
    best_t = NO_HIT

    for i in range(num_shapes[None]):
        t = shape_intersection(i, ray_origin, ray_direction)
        if t > 0.0 and (best_i == -1 or t < best_t):
            best_i = i
            best_t = t

    return best_i, best_t
