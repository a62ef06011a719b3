from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3

__all__ = ["Color", "Ray", "Vector3"]
