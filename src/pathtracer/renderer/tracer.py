# renderer/tracer.py
"""
Reference path tracer written against the object model.

The compiled kernels in renderer.kernels implement the same light transport
over flat arrays; this module is the readable version and the "python" backend.
"""
import math
import random
from typing import Optional

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.sampling import finalize_channel, image_coordinate, pixel_seeds
from pathtracer.renderer.settings import RenderSettings

# Lower bound on hit distance, keeps bounced rays from re-hitting their own surface
T_MIN = 0.001

WHITE = Color(1.0, 1.0, 1.0)
SKY = Color(0.5, 0.7, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


def background_color(ray: Ray) -> Color:
    """
    Blend white and sky blue by the height of the ray direction.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY * t


def ray_color(ray: Ray, world: Hittable, depth: int, rng: random.Random) -> Color:
    if depth <= 0:
        return BLACK

    rec = world.hit(ray, T_MIN, math.inf)
    if rec is None:
        return background_color(ray)

    scattered = rec.material.scatter(ray, rec, rng)
    if scattered is None:
        return BLACK
    scattered_ray, attenuation = scattered
    return attenuation * ray_color(scattered_ray, world, depth - 1, rng)


def normal_color(ray: Ray, world: Hittable) -> Color:
    """
    Color a hit by its outward surface normal mapped from [-1, 1] to [0, 1].
    """
    rec = world.hit(ray, T_MIN, math.inf)
    if rec is None:
        return background_color(ray)
    n = rec.outward_normal()
    return Color(n.x + 1.0, n.y + 1.0, n.z + 1.0) * 0.5


def sample_pixel(row: int, col: int, world: Hittable, camera: Camera,
                 settings: RenderSettings, rng: random.Random) -> tuple:
    """
    Average samples_per_pixel jittered camera rays through one pixel.
    Returns the gamma-corrected (r, g, b).
    """
    samples = settings.samples_per_pixel
    r = g = b = 0.0
    for _ in range(samples):
        if samples > 1:
            du = rng.random()
            dv = rng.random()
        else:
            du = dv = 0.0
        s = image_coordinate(col + du, settings.width)
        t = image_coordinate(settings.height - 1 - row + dv, settings.height)
        ray = camera.get_ray(s, t, rng)
        if settings.shading == "normals":
            color = normal_color(ray, world)
        else:
            color = ray_color(ray, world, settings.max_depth, rng)
        r += color.x
        g += color.y
        b += color.z
    return (finalize_channel(r, samples),
            finalize_channel(g, samples),
            finalize_channel(b, samples))


class PythonRowRenderer:
    """
    Renders whole image rows with the reference tracer.
    """
    def __init__(self, world: Hittable, camera: Camera, settings: RenderSettings,
                 image: np.ndarray):
        self.world = world
        self.camera = camera
        self.settings = settings
        self.image = image

    def __call__(self, row: int, rng: Optional[random.Random]) -> None:
        width = self.settings.width
        out = self.image[row]
        if self.settings.seed is not None:
            seeds = pixel_seeds(self.settings.seed, row, width)
            for col in range(width):
                out[col] = sample_pixel(row, col, self.world, self.camera, self.settings,
                                        random.Random(int(seeds[col])))
        else:
            for col in range(width):
                out[col] = sample_pixel(row, col, self.world, self.camera, self.settings, rng)
