# renderer/scene_data.py
import logging
import random
from typing import Optional

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.errors import ConfigurationError
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.renderer import kernels
from pathtracer.renderer.sampling import pixel_seeds
from pathtracer.renderer.settings import RenderSettings

logger = logging.getLogger(__name__)


class SceneData:
    """
    Flat array form of a scene for the compiled kernels.

    Spheres reference rows of the material table, so a material shared by
    several spheres is stored once.
    """
    def __init__(self, world: HittableList):
        spheres = []
        for obj in world.objects:
            if not isinstance(obj, Sphere):
                raise ConfigurationError(
                    f"The numba backend only renders spheres, got {type(obj).__name__}")
            spheres.append(obj)
        if not spheres:
            raise ConfigurationError("Cannot render an empty scene.")

        material_rows = {}
        materials = []
        self.centers = np.empty((len(spheres), 3), dtype=np.float64)
        self.radii = np.empty(len(spheres), dtype=np.float64)
        self.sphere_materials = np.empty(len(spheres), dtype=np.int64)

        for i, sphere in enumerate(spheres):
            key = id(sphere.material)
            if key not in material_rows:
                material_rows[key] = len(materials)
                materials.append(sphere.material)
            self.centers[i] = sphere.center.to_tuple()
            self.radii[i] = sphere.radius
            self.sphere_materials[i] = material_rows[key]

        self.kinds = np.empty(len(materials), dtype=np.int64)
        self.albedos = np.ones((len(materials), 3), dtype=np.float64)
        self.fuzzes = np.zeros(len(materials), dtype=np.float64)
        self.iors = np.ones(len(materials), dtype=np.float64)

        for m, material in enumerate(materials):
            if isinstance(material, Lambertian):
                self.albedos[m] = material.albedo.to_tuple()
            elif isinstance(material, Metal):
                self.albedos[m] = material.albedo.to_tuple()
                self.fuzzes[m] = material.fuzz
            elif isinstance(material, Dielectric):
                self.iors[m] = material.ref_idx
            else:
                raise ConfigurationError(
                    f"The numba backend has no kernel for {type(material).__name__}")
            self.kinds[m] = int(material.kind)

        logger.info("Packed %d spheres sharing %d materials", len(spheres), len(materials))

    @property
    def sphere_count(self) -> int:
        return self.radii.shape[0]

    @property
    def material_count(self) -> int:
        return self.kinds.shape[0]


def camera_array(camera: Camera) -> np.ndarray:
    """
    Rows: origin, lower_left_corner, horizontal, vertical, u, v.
    """
    return np.array([
        camera.origin.to_tuple(),
        camera.lower_left_corner.to_tuple(),
        camera.horizontal.to_tuple(),
        camera.vertical.to_tuple(),
        camera.u.to_tuple(),
        camera.v.to_tuple(),
    ], dtype=np.float64)


class KernelRowRenderer:
    """
    Renders whole image rows with the compiled kernel. The kernel releases the
    GIL, so rows on different worker threads run in parallel.
    """
    def __init__(self, world: HittableList, camera: Camera, settings: RenderSettings,
                 image: np.ndarray):
        self.scene = SceneData(world)
        self.camera = camera_array(camera)
        self.lens_radius = float(camera.lens_radius)
        self.settings = settings
        self.image = image
        self.shading = kernels.SHADE_NORMALS if settings.shading == "normals" else kernels.SHADE_PATH
        self._unseeded = np.zeros(settings.width, dtype=np.uint32)

    def warm_up(self):
        """
        Compile the kernel on a throwaway row so that workers do not race to compile it.
        """
        logger.debug("Compiling row kernel")
        scratch = np.zeros((self.settings.width, 3), dtype=np.float64)
        self._launch(0, scratch, 1)

    def _launch(self, row: int, out: np.ndarray, samples: int):
        settings = self.settings
        seeded = settings.seed is not None
        seeds = pixel_seeds(settings.seed, row, settings.width) if seeded else self._unseeded
        scene = self.scene
        kernels.render_row(
            row, settings.width, settings.height, samples, settings.max_depth,
            self.shading, seeded, seeds, self.camera, self.lens_radius,
            scene.centers, scene.radii, scene.sphere_materials,
            scene.kinds, scene.albedos, scene.fuzzes, scene.iors, out)

    def __call__(self, row: int, rng: Optional[random.Random]) -> None:
        self._launch(row, self.image[row], self.settings.samples_per_pixel)
