"""
CPU path tracer for sphere scenes.

Build a HittableList of Spheres with Lambertian, Metal or Dielectric
materials, aim a Camera at it and call render() with RenderSettings; the
result is a (height, width, 3) numpy array of gamma-corrected colors.
"""
from pathtracer.camera.camera import Camera
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.errors import (ConfigurationError, PathTracerError, PoolCreationError,
                               RenderError)
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.output.image_writer import save_image
from pathtracer.renderer.raytracer import Renderer, render
from pathtracer.renderer.settings import RenderSettings, image_height

__version__ = "0.1.0"

__all__ = [
    "Camera", "Color", "ConfigurationError", "Dielectric", "HittableList", "Lambertian",
    "Metal", "PathTracerError", "PoolCreationError", "Ray", "RenderError", "RenderSettings",
    "Renderer", "Sphere", "Vector3", "image_height", "render", "save_image",
]
