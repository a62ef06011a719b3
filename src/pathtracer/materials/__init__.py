from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material, MaterialKind
from pathtracer.materials.metal import Metal

__all__ = ["Dielectric", "Lambertian", "Material", "MaterialKind", "Metal"]
