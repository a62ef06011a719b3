# renderer/settings.py
import os
from dataclasses import dataclass, field
from typing import Optional

from pathtracer.errors import ConfigurationError, PoolCreationError

BACKENDS = ("numba", "python")
SHADINGS = ("path", "normals")

MAX_SEED = 2 ** 64 - 1


def default_workers() -> int:
    return os.cpu_count() or 1


def image_height(width: int, aspect_ratio: float) -> int:
    """
    Height of an image of the given width and aspect ratio, truncated, at least 1.
    """
    if aspect_ratio <= 0:
        raise ConfigurationError(f"Aspect ratio must be positive, got {aspect_ratio}")
    return max(1, int(width / aspect_ratio))


@dataclass(frozen=True)
class RenderSettings:
    """
    Everything the renderer needs besides the scene and the camera.

    seed: when set, every pixel draws from its own generator seeded from
        (seed, pixel index), which makes the image independent of the
        worker count. When None, each worker uses an unseeded generator.
    backend: "numba" runs compiled row kernels, "python" the reference tracer.
    shading: "path" for full light transport, "normals" to color by surface normal.
    """
    width: int = 400
    height: int = 225
    samples_per_pixel: int = 16
    max_depth: int = 8
    workers: int = field(default_factory=default_workers)
    seed: Optional[int] = None
    backend: str = "numba"
    shading: str = "path"

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def validate(self) -> "RenderSettings":
        if self.width < 1 or self.height < 1:
            raise ConfigurationError(
                f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel < 1:
            raise ConfigurationError(
                f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ConfigurationError(f"max_depth must not be negative, got {self.max_depth}")
        if self.workers < 1:
            raise PoolCreationError(self.workers)
        if self.seed is not None and not 0 <= self.seed <= MAX_SEED:
            raise ConfigurationError(f"seed must be in [0, 2**64), got {self.seed}")
        if self.backend not in BACKENDS:
            raise ConfigurationError(
                f"Unknown backend {self.backend!r}, expected one of {', '.join(BACKENDS)}")
        if self.shading not in SHADINGS:
            raise ConfigurationError(
                f"Unknown shading {self.shading!r}, expected one of {', '.join(SHADINGS)}")
        return self
