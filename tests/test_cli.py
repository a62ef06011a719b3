"""Tests for the pathtracer command line."""

import argparse
import logging

import pytest
from PIL import Image

from pathtracer.main import LOG_ENV, build_parser, main, parse_aspect_ratio


class TestAspectRatio:
    """Tests for parse_aspect_ratio."""

    @pytest.mark.parametrize("text, expected", [
        ("16:9", 16 / 9),
        ("3/2", 1.5),
        ("1.25", 1.25),
        ("2", 2.0),
    ])
    def test_valid(self, text, expected):
        assert parse_aspect_ratio(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["wide", "16:0", "0", "-1", "a:b", "1/-2"])
    def test_invalid(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_aspect_ratio(text)


class TestParser:
    """Defaults and the logging environment variable."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.scene == "weekend"
        assert args.width == 400
        assert args.backend == "numba"
        assert args.output == "image.png"
        assert args.seed is None

    def test_log_level_from_environment(self, monkeypatch):
        monkeypatch.setenv(LOG_ENV, "debug")
        assert build_parser().parse_args([]).log_level == "debug"


class TestMain:
    """Full runs through main() on tiny images."""

    def test_python_backend_writes_ppm(self, tmp_path):
        out = tmp_path / "scene.ppm"
        code = main(["--scene", "simple", "--width", "8", "--aspect-ratio", "2:1",
                     "--samples", "2", "--depth", "3", "--workers", "2", "--seed", "5",
                     "--backend", "python", "-o", str(out)])
        assert code == 0
        lines = out.read_text(encoding="ascii").splitlines()
        assert lines[:3] == ["P3", "8 4", "255"]
        assert len(lines) == 3 + 4

    def test_numba_backend_writes_png(self, tmp_path):
        out = tmp_path / "scene.png"
        code = main(["--scene", "materials", "--width", "12", "--samples", "1",
                     "--depth", "2", "--workers", "3", "--shading", "normals",
                     "-o", str(out)])
        assert code == 0
        with Image.open(out) as img:
            assert img.size == (12, 6)

    def test_seeded_runs_are_identical(self, tmp_path):
        outputs = []
        for workers in ("1", "4"):
            out = tmp_path / f"w{workers}.ppm"
            assert main(["--scene", "weekend", "--width", "9", "--samples", "2",
                         "--depth", "3", "--seed", "11", "--workers", workers,
                         "--backend", "python", "-o", str(out)]) == 0
            outputs.append(out.read_text(encoding="ascii"))
        assert outputs[0] == outputs[1]

    def test_invalid_settings_exit_with_error(self, tmp_path, caplog):
        out = tmp_path / "never.png"
        with caplog.at_level(logging.ERROR):
            code = main(["--scene", "simple", "--width", "4", "--samples", "0",
                         "-o", str(out)])
        assert code == 1
        assert not out.exists()
        assert "samples_per_pixel" in caplog.text

    def test_zero_workers_exit_with_error(self, tmp_path):
        assert main(["--scene", "simple", "--width", "4", "--workers", "0",
                     "-o", str(tmp_path / "never.png")]) == 1
