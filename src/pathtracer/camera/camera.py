# camera/camera.py
import math
import random

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk
from pathtracer.core.vector import Vector3
from pathtracer.errors import ConfigurationError


class Camera:
    """
    Thin-lens camera placed at look_from and aimed at look_at.

    vfov is the vertical field of view in degrees. A non-zero aperture blurs
    everything that is not at focus_dist from the lens.
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 1.0):
        if not 0 < vfov < 180:
            raise ConfigurationError(f"Vertical field of view must be in (0, 180), got {vfov}")
        if aspect_ratio <= 0:
            raise ConfigurationError(f"Aspect ratio must be positive, got {aspect_ratio}")
        if aperture < 0:
            raise ConfigurationError(f"Aperture must not be negative, got {aperture}")
        if focus_dist <= 0:
            raise ConfigurationError(f"Focus distance must be positive, got {focus_dist}")

        view = look_from - look_at
        if view.near_zero():
            raise ConfigurationError("Camera look_from and look_at coincide")
        side = vup.cross(view)
        if side.near_zero():
            raise ConfigurationError("Camera up vector is parallel to the view direction")

        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.lens_radius = aperture / 2.0

        viewport_height = 2.0 * math.tan(math.radians(vfov) / 2)
        viewport_width = aspect_ratio * viewport_height

        # Orthonormal basis: w points backwards, u to the right, v up
        self.w = view.normalize()
        self.u = side.normalize()
        self.v = self.w.cross(self.u)

        self.origin = look_from
        self.horizontal = self.u * (focus_dist * viewport_width)
        self.vertical = self.v * (focus_dist * viewport_height)
        self.lower_left_corner = (self.origin -
                                  self.horizontal / 2 -
                                  self.vertical / 2 -
                                  self.w * focus_dist)

    @classmethod
    def from_viewport(cls, viewport_height: float, aspect_ratio: float,
                      focal_length: float = 1.0) -> "Camera":
        """
        Pinhole sensor at the origin looking down -z, with a viewport of the
        given height placed focal_length in front of it.
        """
        if viewport_height <= 0 or focal_length <= 0:
            raise ConfigurationError("Viewport height and focal length must be positive")
        vfov = math.degrees(2.0 * math.atan(viewport_height / (2.0 * focal_length)))
        return cls(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0),
                   vfov, aspect_ratio, aperture=0.0, focus_dist=focal_length)

    def get_ray(self, s: float, t: float, rng: random.Random = None) -> Ray:
        """
        Generates the ray through normalized image coordinates (s, t),
        jittering its origin over the lens when the aperture is open.
        """
        if self.lens_radius <= 0:
            direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         self.origin)
            return Ray(self.origin, direction)

        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y

        ray_origin = self.origin + offset
        ray_direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         ray_origin)
        return Ray(ray_origin, ray_direction)

    def __repr__(self) -> str:
        return (f"Camera(origin={self.origin!r}, vfov={self.vfov}, "
                f"aspect_ratio={self.aspect_ratio}, aperture={self.aperture}, "
                f"focus_dist={self.focus_dist})")
