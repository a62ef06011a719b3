# renderer/kernels.py
"""
Compiled CPU kernels for the "numba" backend.

Vectors are 3-tuples of float64. The scene arrives as flat arrays produced by
renderer.scene_data: sphere centers, radii and material indices plus a
material table (kind tag, albedo, fuzz, refractive index). Material dispatch
is a single branch on the kind tag.

Random numbers come from numba's generator, which keeps an independent state
per thread. render_row reseeds it per pixel only in seeded mode.
"""
import math

import numpy as np
from numba import njit

from pathtracer.materials.material import MaterialKind
from pathtracer.renderer.sampling import finalize_channel, image_coordinate

T_MIN = 0.001
INFINITY = math.inf

LAMBERTIAN = int(MaterialKind.LAMBERTIAN)
METAL = int(MaterialKind.METAL)
DIELECTRIC = int(MaterialKind.DIELECTRIC)

SHADE_PATH = 0
SHADE_NORMALS = 1

image_coordinate_kernel = njit(image_coordinate)
finalize_channel_kernel = njit(finalize_channel)


@njit
def dot(a, b):
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


@njit
def add(a, b):
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


@njit
def sub(a, b):
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


@njit
def scale(a, s):
    return (a[0] * s, a[1] * s, a[2] * s)


@njit
def mul(a, b):
    return (a[0] * b[0], a[1] * b[1], a[2] * b[2])


@njit
def unit(a):
    length = math.sqrt(dot(a, a))
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (a[0] / length, a[1] / length, a[2] / length)


@njit
def near_zero(a):
    s = 1e-8
    return abs(a[0]) < s and abs(a[1]) < s and abs(a[2]) < s


@njit
def row_of(array, i):
    return (array[i, 0], array[i, 1], array[i, 2])


@njit
def reflect(v, n):
    return sub(v, scale(n, 2.0 * dot(v, n)))


@njit
def refract(uv, n, etai_over_etat):
    cos_theta = min(-dot(uv, n), 1.0)
    r_out_perp = scale(add(uv, scale(n, cos_theta)), etai_over_etat)
    r_out_parallel = scale(n, -math.sqrt(abs(1.0 - dot(r_out_perp, r_out_perp))))
    return add(r_out_perp, r_out_parallel)


@njit
def schlick(cosine, ref_idx):
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


@njit
def random_in_unit_sphere():
    for _ in range(100):
        p = (2.0 * np.random.random() - 1.0,
             2.0 * np.random.random() - 1.0,
             2.0 * np.random.random() - 1.0)
        if dot(p, p) < 1.0:
            return p
    # Fallback if rejection sampling never lands inside (vanishingly rare)
    return (0.0, 0.0, 1.0)


@njit
def random_in_unit_disk():
    for _ in range(100):
        x = 2.0 * np.random.random() - 1.0
        y = 2.0 * np.random.random() - 1.0
        if x * x + y * y < 1.0:
            return x, y
    return 0.0, 0.0


@njit
def background(direction):
    unit_direction = unit(direction)
    t = 0.5 * (unit_direction[1] + 1.0)
    return (1.0 - t + 0.5 * t, 1.0 - t + 0.7 * t, 1.0)


@njit
def hit_sphere(origin, direction, center, radius, t_min, t_max):
    """Ray-sphere intersection. Returns (hit, t) with t in the open interval (t_min, t_max)."""
    if radius == 0.0:
        return False, 0.0
    oc = sub(origin, center)
    a = dot(direction, direction)
    if a == 0.0:
        return False, 0.0
    half_b = dot(oc, direction)
    c = dot(oc, oc) - radius * radius
    discriminant = half_b * half_b - a * c
    if discriminant < 0.0:
        return False, 0.0

    sqrtd = math.sqrt(discriminant)
    root = (-half_b - sqrtd) / a
    if root <= t_min or root >= t_max:
        root = (-half_b + sqrtd) / a
        if root <= t_min or root >= t_max:
            return False, 0.0
    return True, root


@njit
def hit_world(origin, direction, t_min, t_max, centers, radii):
    """Nearest hit over all spheres. Returns (index, t); index is -1 on a miss."""
    index = -1
    closest = t_max
    for i in range(radii.shape[0]):
        hit, t = hit_sphere(origin, direction, row_of(centers, i), radii[i], t_min, closest)
        if hit:
            index = i
            closest = t
    return index, closest


@njit
def surface(origin, direction, t, center, radius):
    """Hit point, facing normal, outward normal and front_face flag."""
    point = add(origin, scale(direction, t))
    outward = scale(sub(point, center), 1.0 / radius)
    front_face = not dot(direction, outward) > 0.0
    if front_face:
        normal = outward
    else:
        normal = scale(outward, -1.0)
    return point, normal, outward, front_face


@njit
def scatter(kind, albedo, fuzz, ior, direction, normal, front_face):
    """Returns (scattered, attenuation, new_direction)."""
    if kind == LAMBERTIAN:
        scatter_direction = add(normal, unit(random_in_unit_sphere()))
        if near_zero(scatter_direction):
            scatter_direction = normal
        return True, albedo, scatter_direction

    if kind == METAL:
        reflected = reflect(unit(direction), normal)
        if fuzz > 0.0:
            reflected = add(reflected, scale(random_in_unit_sphere(), fuzz))
        return dot(reflected, normal) > 0.0, albedo, reflected

    # Dielectric
    if front_face:
        ratio = 1.0 / ior
    else:
        ratio = ior
    unit_direction = unit(direction)
    cos_theta = min(-dot(unit_direction, normal), 1.0)
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    if ratio * sin_theta > 1.0 or np.random.random() < schlick(cos_theta, ratio):
        new_direction = reflect(unit_direction, normal)
    else:
        new_direction = refract(unit_direction, normal, ratio)
    return True, (1.0, 1.0, 1.0), new_direction


@njit
def trace(origin, direction, max_depth, centers, radii, sphere_materials,
          kinds, albedos, fuzzes, iors):
    """Iterative path tracer; each loop iteration is one bounce of the recursion."""
    throughput = (1.0, 1.0, 1.0)
    for _ in range(max_depth):
        index, t = hit_world(origin, direction, T_MIN, INFINITY, centers, radii)
        if index < 0:
            return mul(throughput, background(direction))

        point, normal, outward, front_face = surface(
            origin, direction, t, row_of(centers, index), radii[index])
        m = sphere_materials[index]
        scattered, attenuation, new_direction = scatter(
            kinds[m], row_of(albedos, m), fuzzes[m], iors[m],
            direction, normal, front_face)
        if not scattered:
            return (0.0, 0.0, 0.0)
        throughput = mul(throughput, attenuation)
        origin = point
        direction = new_direction
    return (0.0, 0.0, 0.0)


@njit
def shade_normal(origin, direction, centers, radii):
    index, t = hit_world(origin, direction, T_MIN, INFINITY, centers, radii)
    if index < 0:
        return background(direction)
    point, normal, outward, front_face = surface(
        origin, direction, t, row_of(centers, index), radii[index])
    return scale(add(outward, (1.0, 1.0, 1.0)), 0.5)


@njit
def camera_ray(s, t, cam_origin, cam_lower_left, cam_horizontal, cam_vertical,
               cam_u, cam_v, lens_radius):
    origin = cam_origin
    if lens_radius > 0.0:
        x, y = random_in_unit_disk()
        offset = add(scale(cam_u, x * lens_radius), scale(cam_v, y * lens_radius))
        origin = add(cam_origin, offset)
    target = add(add(cam_lower_left, scale(cam_horizontal, s)), scale(cam_vertical, t))
    return origin, sub(target, origin)


@njit(nogil=True)
def render_row(row, width, height, samples, max_depth, shading, seeded, seeds,
               camera, lens_radius,
               centers, radii, sphere_materials, kinds, albedos, fuzzes, iors,
               out):
    """
    Render one image row into out (shape (width, 3)).

    camera rows: origin, lower_left_corner, horizontal, vertical, u, v.
    """
    cam_origin = row_of(camera, 0)
    cam_lower_left = row_of(camera, 1)
    cam_horizontal = row_of(camera, 2)
    cam_vertical = row_of(camera, 3)
    cam_u = row_of(camera, 4)
    cam_v = row_of(camera, 5)

    for col in range(width):
        if seeded:
            np.random.seed(seeds[col])
        r = 0.0
        g = 0.0
        b = 0.0
        for _ in range(samples):
            du = 0.0
            dv = 0.0
            if samples > 1:
                du = np.random.random()
                dv = np.random.random()
            s = image_coordinate_kernel(col + du, width)
            t = image_coordinate_kernel(height - 1 - row + dv, height)
            origin, direction = camera_ray(s, t, cam_origin, cam_lower_left,
                                           cam_horizontal, cam_vertical,
                                           cam_u, cam_v, lens_radius)
            if shading == SHADE_NORMALS:
                color = shade_normal(origin, direction, centers, radii)
            else:
                color = trace(origin, direction, max_depth, centers, radii,
                              sphere_materials, kinds, albedos, fuzzes, iors)
            r += color[0]
            g += color[1]
            b += color[2]
        out[col, 0] = finalize_channel_kernel(r, samples)
        out[col, 1] = finalize_channel_kernel(g, samples)
        out[col, 2] = finalize_channel_kernel(b, samples)
