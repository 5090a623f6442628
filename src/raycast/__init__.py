"""Taichi-based ray caster for declarative scene descriptions.

This package reads a scene description (a camera plus spheres and planes)
and renders it by casting one ray per pixel, with support for:
- A strict single-pass scene reader with per-field validation
- Closed-form ray-sphere and ray-plane intersection
- Parallel nearest-hit ray casting with flat colors
- PPM/PNG export and Matplotlib preview

Subpackages:
    core: Ray utilities and the renderer
    geometry: Intersection routines
    camera: Sensor setup and primary ray generation
    scene: Scene model, reader and GPU shape storage
    preview: Image export and preview display
"""

__version__ = "0.1.0"
