# materials/metal.py
import random
from typing import Optional, Tuple

from pathtracer.core.ray import Ray
from pathtracer.core.utils import clamp, random_in_unit_sphere, reflect
from pathtracer.core.vector import Vector3
from pathtracer.errors import ConfigurationError
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, MaterialKind


class Metal(Material):
    """
    Metal material with reflective properties. fuzz=0 is a perfect mirror.
    """
    kind = MaterialKind.METAL

    def __init__(self, albedo: Vector3, fuzz: float = 0.0):
        if fuzz < 0:
            raise ConfigurationError(f"Metal fuzz must not be negative, got {fuzz}")
        self.albedo = albedo
        self.fuzz = clamp(float(fuzz), 0.0, 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: random.Random) -> Optional[Tuple[Ray, Vector3]]:
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        if self.fuzz > 0:
            reflected = reflected + random_in_unit_sphere(rng) * self.fuzz
        scattered = Ray(rec.p, reflected)

        if scattered.direction.dot(rec.normal) > 0:
            return scattered, self.albedo

        return None  # Absorb the ray if it does not scatter forward

    def __repr__(self) -> str:
        return f"Metal({self.albedo!r}, fuzz={self.fuzz})"
