# materials/material.py
import random
from enum import IntEnum
from typing import Optional, Tuple

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord


class MaterialKind(IntEnum):
    """
    Tags used by the compiled kernels to dispatch on material type.
    """
    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2


class Material:
    """
    Abstract material class. Subclasses must implement scatter() and set kind.
    """
    kind: MaterialKind

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: random.Random) -> Optional[Tuple[Ray, Vector3]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")
