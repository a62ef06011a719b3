"""Tests for the built-in scenes."""

import pytest

from pathtracer.camera.camera import Camera
from pathtracer.geometry.sphere import Sphere
from pathtracer.renderer.scene_data import SceneData
from pathtracer.scenes import SCENES, materials_scene, simple_scene, weekend_scene


@pytest.mark.parametrize("name", sorted(SCENES))
def test_scene_builds(name):
    world, camera = SCENES[name](16 / 9)
    world.validate()
    assert isinstance(camera, Camera)
    assert all(isinstance(obj, Sphere) for obj in world)
    assert SceneData(world).sphere_count == len(world)


def test_simple_scene():
    world, _ = simple_scene()
    assert len(world) == 2


def test_materials_scene():
    world, camera = materials_scene()
    assert len(world) == 4
    assert camera.lens_radius == pytest.approx(0.25)


class TestWeekendScene:
    """The randomly populated cover scene."""

    def test_reproducible_for_a_seed(self):
        a, _ = weekend_scene(seed=3)
        b, _ = weekend_scene(seed=3)
        assert len(a) == len(b)
        for first, second in zip(a, b):
            assert first.center == second.center
            assert type(first.material) is type(second.material)

    def test_seed_changes_layout(self):
        a, _ = weekend_scene(seed=3)
        b, _ = weekend_scene(seed=4)
        assert [s.center for s in a] != [s.center for s in b]

    def test_large_spheres_present(self):
        world, _ = weekend_scene(seed=1)
        radii = [s.radius for s in world]
        assert radii[0] == 1000
        assert radii[-3:] == [1.0, 1.0, 1.0]
        assert 4 + 1 < len(world) <= 4 + 22 * 22
