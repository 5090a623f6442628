"""Pytest configuration for raycast tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate fields declared by modules imported earlier in the session.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_shape_table():
    """Clear the GPU-side shape table before and after each test."""
    # Import here so the fields are created after Taichi is initialized
    from raycast.scene.intersection import clear_shapes

    clear_shapes()
    yield
    clear_shapes()


@pytest.fixture
def basic_scene_text():
    """A camera, two spheres and a floor plane."""
    return """[
    {"type": "camera", "width": 2.0, "height": 2.0},
    {"type": "sphere", "position": [0, 0, 5], "radius": 1, "color": [1, 0, 0]},
    {"type": "sphere", "position": [0, 0, 20], "radius": 5, "color": [0, 1, 0]},
    {"type": "plane", "position": [0, -2, 0], "normal": [0, 1, 0], "color": [0, 0, 1]}
]
"""
