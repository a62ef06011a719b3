# renderer/raytracer.py
import logging
import time

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.geometry.world import HittableList
from pathtracer.renderer.scene_data import KernelRowRenderer
from pathtracer.renderer.scheduler import run_rows
from pathtracer.renderer.settings import RenderSettings
from pathtracer.renderer.tracer import PythonRowRenderer

logger = logging.getLogger(__name__)


class Renderer:
    """
    Renders a scene into a (height, width, 3) float grid of gamma-corrected
    colors in [0, 1], row 0 at the top.

    Settings and scene are validated before any worker starts, so invalid
    input raises ConfigurationError without producing a partial image.
    """
    def __init__(self, settings: RenderSettings):
        self.settings = settings.validate()
        self.rows_per_worker = []
        self.elapsed = 0.0

    def _row_renderer(self, world: HittableList, camera: Camera, image: np.ndarray):
        if self.settings.backend == "python":
            return PythonRowRenderer(world, camera, self.settings, image)
        row_renderer = KernelRowRenderer(world, camera, self.settings, image)
        row_renderer.warm_up()
        return row_renderer

    def render(self, world: HittableList, camera: Camera) -> np.ndarray:
        settings = self.settings
        world.validate()

        image = np.zeros((settings.height, settings.width, 3), dtype=np.float64)
        row_renderer = self._row_renderer(world, camera, image)

        logger.info(
            "Rendering %dx%d, %d samples per pixel, depth %d, %d workers, %s backend%s",
            settings.width, settings.height, settings.samples_per_pixel,
            settings.max_depth, settings.workers, settings.backend,
            "" if settings.seed is None else f", seed {settings.seed}")

        start = time.perf_counter()
        self.rows_per_worker = run_rows(settings.height, settings.workers, row_renderer)
        self.elapsed = time.perf_counter() - start

        logger.info("Rendered %d rows in %.2fs", settings.height, self.elapsed)
        return image


def render(world: HittableList, camera: Camera, settings: RenderSettings) -> np.ndarray:
    return Renderer(settings).render(world, camera)
