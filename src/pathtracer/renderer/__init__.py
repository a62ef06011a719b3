from pathtracer.renderer.raytracer import Renderer, render
from pathtracer.renderer.scheduler import RowQueue, run_rows
from pathtracer.renderer.settings import RenderSettings, image_height

__all__ = ["Renderer", "RenderSettings", "RowQueue", "image_height", "render", "run_rows"]
