# materials/dielectric.py
import math
import random
from typing import Tuple

from pathtracer.core.ray import Ray
from pathtracer.core.utils import reflect, refract, schlick
from pathtracer.core.vector import Vector3
from pathtracer.errors import ConfigurationError
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, MaterialKind


class Dielectric(Material):
    """
    Clear refractive material such as glass (1.5) or water (1.33).
    """
    kind = MaterialKind.DIELECTRIC

    def __init__(self, ref_idx: float):
        if ref_idx <= 0:
            raise ConfigurationError(f"Refractive index must be positive, got {ref_idx}")
        self.ref_idx = float(ref_idx)

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: random.Random) -> Tuple[Ray, Vector3]:
        attenuation = Vector3(1.0, 1.0, 1.0)  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        ni_over_nt = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()

        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        # Total internal reflection leaves no choice
        if ni_over_nt * sin_theta > 1.0:
            return Ray(rec.p, reflect(unit_direction, rec.normal)), attenuation

        if rng.random() < schlick(cos_theta, ni_over_nt):
            return Ray(rec.p, reflect(unit_direction, rec.normal)), attenuation

        return Ray(rec.p, refract(unit_direction, rec.normal, ni_over_nt)), attenuation

    def __repr__(self) -> str:
        return f"Dielectric({self.ref_idx})"
