"""Camera module for primary ray generation.

Components:
    sensor: Fixed-orientation camera with a sensor plane at unit distance

Camera responsibilities:
    - Hold the sensor dimensions read from the scene's camera object
    - Map an output pixel (x, y) to a normalized primary ray through the
      pixel's center

Ray generation is a Taichi function so every pixel's ray can be built
inside the parallel render kernel.

Note: sensor is NOT imported here because it declares Taichi fields, which
must be created after ti.init(). Import it directly from raycast.camera.sensor.
"""
