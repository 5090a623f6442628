"""Fixed-orientation camera: sensor setup and primary ray generation.

The camera sits at the origin looking down +z. Its sensor is a
``width`` x ``height`` rectangle centered on the z axis at unit distance.
The output image divides the sensor into a grid of equal pixels; the ray
for a pixel passes through the pixel's center:

    pixwidth  = camera.width / N
    pixheight = camera.height / M

    direction = normalize(
        camera.width / 2  - pixwidth  * (x + 0.5),
        camera.height / 2 - pixheight * (y + 0.5),
        1,
    )

for an N x M image, pixel (x, y) with row 0 at the top. There are no
placement or rotation parameters.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycast.camera.sensor import setup_camera, get_ray
    >>> from raycast.scene.model import Camera
    >>> setup_camera(Camera(width=2.0, height=2.0))
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0, 0, 64, 64)  # Ray through the top-left pixel
"""

import taichi as ti

from raycast.core.ray import Ray, make_ray, normalize, vec3
from raycast.scene.model import Camera

# =============================================================================
# Taichi Fields for Camera State (GPU-accessible)
# =============================================================================

# Sensor dimensions at unit distance
_sensor_width = ti.field(dtype=ti.f32, shape=())
_sensor_height = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: Camera) -> None:
    """Load the camera's sensor dimensions for ray generation.

    Must be called before rendering, from Python scope.

    Args:
        camera: The scene camera.
    """
    _sensor_width[None] = camera.width
    _sensor_height[None] = camera.height


@ti.func
def get_camera_origin() -> vec3:
    """The camera position; rays always start at the coordinate origin."""
    return vec3(0.0, 0.0, 0.0)


@ti.func
def get_ray(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through the center of pixel (x, y).

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Output image width in pixels.
        height: Output image height in pixels.

    Returns:
        A Ray from the origin with a normalized direction.
    """
    w = _sensor_width[None]
    h = _sensor_height[None]
    pixwidth = w / ti.cast(width, ti.f32)
    pixheight = h / ti.cast(height, ti.f32)

    direction = vec3(
        w / 2.0 - pixwidth * (ti.cast(x, ti.f32) + 0.5),
        h / 2.0 - pixheight * (ti.cast(y, ti.f32) + 0.5),
        1.0,
    )

    return make_ray(get_camera_origin(), normalize(direction))


def get_camera_info() -> dict[str, float]:
    """Get the current sensor dimensions for debugging."""
    return {
        "width": float(_sensor_width[None]),
        "height": float(_sensor_height[None]),
    }
