# scenes.py
"""
Built-in scenes. Each factory returns (world, camera) for a given aspect ratio.
"""
import random
from typing import Callable, Dict, Optional, Tuple

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal

Scene = Tuple[HittableList, Camera]


def simple_scene(aspect_ratio: float = 16.0 / 9.0) -> Scene:
    """
    A diffuse sphere resting on a large ground sphere, seen through a fixed sensor.
    """
    world = HittableList()
    world.add(Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Color(0.7, 0.3, 0.3))))
    world.add(Sphere(Vector3(0, -100.5, -1), 100, Lambertian(Color(0.8, 0.8, 0.0))))
    camera = Camera.from_viewport(2.0, aspect_ratio, focal_length=1.0)
    return world, camera


def materials_scene(aspect_ratio: float = 16.0 / 9.0) -> Scene:
    """
    Glass, diffuse and metal spheres side by side on a diffuse ground.
    """
    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    left = Dielectric(1.5)
    right = Metal(Color(0.8, 0.6, 0.2), 0.0)

    world = HittableList()
    world.add(Sphere(Vector3(0.0, -100.5, -1.0), 100.0, ground))
    world.add(Sphere(Vector3(0.0, 0.0, -1.0), 0.5, center))
    world.add(Sphere(Vector3(-1.0, 0.0, -1.0), 0.5, left))
    world.add(Sphere(Vector3(1.0, 0.0, -1.0), 0.5, right))

    look_from = Vector3(3, 3, 2)
    look_at = Vector3(0, 0, -1)
    camera = Camera(look_from, look_at, Vector3(0, 1, 0), 20, aspect_ratio,
                    aperture=0.5, focus_dist=(look_from - look_at).length())
    return world, camera


def weekend_scene(aspect_ratio: float = 3.0 / 2.0, seed: Optional[int] = None) -> Scene:
    """
    The classic cover scene: a field of small random spheres around three large ones.
    """
    rng = random.Random(seed)
    world = HittableList()
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(Color(0.5, 0.5, 0.5))))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue
            if choose_mat < 0.8:
                albedo = Color(rng.random(), rng.random(), rng.random()) * \
                    Color(rng.random(), rng.random(), rng.random())
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                albedo = Color(rng.uniform(0.5, 1), rng.uniform(0.5, 1), rng.uniform(0.5, 1))
                material = Metal(albedo, rng.uniform(0, 0.5))
            else:
                material = Dielectric(1.5)
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Vector3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Vector3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Vector3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    camera = Camera(Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0), 20,
                    aspect_ratio, aperture=0.1, focus_dist=10.0)
    return world, camera


SCENES: Dict[str, Callable[..., Scene]] = {
    "simple": simple_scene,
    "materials": materials_scene,
    "weekend": weekend_scene,
}
