"""Tests for camera construction and ray generation."""

import math
import random

import pytest

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.errors import ConfigurationError


def assert_vec(actual, expected, abs_tol=1e-12):
    assert actual.x == pytest.approx(expected[0], abs=abs_tol)
    assert actual.y == pytest.approx(expected[1], abs=abs_tol)
    assert actual.z == pytest.approx(expected[2], abs=abs_tol)


class TestViewportCamera:
    """Tests for the fixed sensor built by Camera.from_viewport."""

    def test_basis(self):
        camera = Camera.from_viewport(2.0, 16.0 / 9.0, focal_length=1.0)
        width = 2.0 * 16.0 / 9.0
        assert_vec(camera.origin, (0, 0, 0))
        assert_vec(camera.horizontal, (width, 0, 0))
        assert_vec(camera.vertical, (0, 2, 0))
        assert_vec(camera.lower_left_corner, (-width / 2, -1, -1))
        assert camera.lens_radius == 0

    def test_center_ray_points_forward(self, square_camera):
        ray = square_camera.get_ray(0.5, 0.5)
        assert_vec(ray.origin, (0, 0, 0))
        assert_vec(ray.direction, (0, 0, -1))

    def test_corner_rays(self, square_camera):
        assert_vec(square_camera.get_ray(0.0, 0.0).direction, (-1, -1, -1))
        assert_vec(square_camera.get_ray(1.0, 1.0).direction, (1, 1, -1))

    def test_pinhole_needs_no_generator(self, square_camera):
        ray = square_camera.get_ray(0.25, 0.75, None)
        assert_vec(ray.direction, (-0.5, 0.5, -1))


class TestLookAtCamera:
    """Tests for the look-from / look-at camera with a thin lens."""

    def test_basis_is_orthonormal(self):
        camera = Camera(Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0), 20, 1.5)
        for axis in (camera.u, camera.v, camera.w):
            assert axis.length() == pytest.approx(1.0)
        assert camera.u.dot(camera.v) == pytest.approx(0.0, abs=1e-12)
        assert camera.u.dot(camera.w) == pytest.approx(0.0, abs=1e-12)
        assert camera.v.dot(camera.w) == pytest.approx(0.0, abs=1e-12)

    def test_center_ray_aims_at_target(self):
        look_from = Vector3(3, 3, 2)
        look_at = Vector3(0, 0, -1)
        camera = Camera(look_from, look_at, Vector3(0, 1, 0), 40, 2.0, focus_dist=1.0)
        direction = camera.get_ray(0.5, 0.5).direction.normalize()
        expected = (look_at - look_from).normalize()
        assert_vec(direction, tuple(expected))

    def test_vertical_field_of_view(self):
        camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 90, 1.0)
        top = camera.get_ray(0.5, 1.0).direction
        assert math.degrees(math.atan2(top.y, -top.z)) == pytest.approx(45.0)

    def test_aperture_rays_converge_on_focus_plane(self):
        camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 60, 1.5,
                        aperture=0.8, focus_dist=4.0)
        rng = random.Random(3)
        focus_points = []
        origins = set()
        for _ in range(50):
            ray = camera.get_ray(0.3, 0.6, rng)
            assert (ray.origin - camera.origin).length() < camera.lens_radius
            origins.add(ray.origin.to_tuple())
            focus_points.append(ray.origin + ray.direction)
        assert len(origins) > 1
        for point in focus_points[1:]:
            assert_vec(point, tuple(focus_points[0]), abs_tol=1e-9)
            assert point.z == pytest.approx(-4.0)

    @pytest.mark.parametrize("kwargs", [
        dict(vfov=0),
        dict(vfov=180),
        dict(aspect_ratio=0),
        dict(aperture=-1),
        dict(focus_dist=0),
        dict(look_at=Vector3(0, 0, 0)),
        dict(vup=Vector3(0, 0, 2)),
    ])
    def test_invalid_parameters(self, kwargs):
        params = dict(look_from=Vector3(0, 0, 0), look_at=Vector3(0, 0, -1),
                      vup=Vector3(0, 1, 0), vfov=60, aspect_ratio=1.0,
                      aperture=0.0, focus_dist=1.0)
        params.update(kwargs)
        with pytest.raises(ConfigurationError):
            Camera(**params)

    def test_invalid_viewport(self):
        with pytest.raises(ConfigurationError):
            Camera.from_viewport(0.0, 1.0)
