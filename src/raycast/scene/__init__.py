"""Scene module for scene description, reading and GPU storage.

Components:
    model: Immutable value types (Vector3, Camera, Sphere, Plane, Scene)
    reader: Single-pass parser for the scene description format
    intersection: GPU-side shape table and nearest-hit ray casting

The reader is the only producer of Scene objects. A Scene holds at most one
camera and its shapes in declaration order; it is never mutated after
reading. Before rendering, the shapes are mirrored into Taichi fields by
intersection.upload_scene().

Note: intersection is NOT imported here because it declares Taichi fields,
which must be created after ti.init(). Import it directly from
raycast.scene.intersection.
"""

from .model import Camera, ObjectKind, Plane, Scene, Shape, Sphere, Vector3, shape_color
from .reader import MAX_STRING_LENGTH, SceneReader, load_scene, read_scene

__all__ = [
    # Model
    "Vector3",
    "Camera",
    "Sphere",
    "Plane",
    "Shape",
    "Scene",
    "ObjectKind",
    "shape_color",
    # Reader
    "SceneReader",
    "read_scene",
    "load_scene",
    "MAX_STRING_LENGTH",
]
