# main.py
import argparse
import logging
import os
import sys
from typing import List, Optional

from pathtracer.errors import PathTracerError
from pathtracer.output.image_writer import save_image
from pathtracer.renderer.raytracer import Renderer
from pathtracer.renderer.settings import (BACKENDS, SHADINGS, RenderSettings,
                                          default_workers, image_height)
from pathtracer.scenes import SCENES, weekend_scene

logger = logging.getLogger("pathtracer")

LOG_ENV = "PATHTRACER_LOG"


def parse_aspect_ratio(text: str) -> float:
    """
    Accepts "16:9", "16/9" or a plain number.
    """
    for sep in (":", "/"):
        if sep in text:
            num, den = text.split(sep, 1)
            try:
                value = float(num) / float(den)
            except (ValueError, ZeroDivisionError):
                raise argparse.ArgumentTypeError(f"invalid aspect ratio: {text!r}")
            break
    else:
        try:
            value = float(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid aspect ratio: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"aspect ratio must be positive: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a built-in sphere scene with a multithreaded path tracer.")
    parser.add_argument("--scene", choices=sorted(SCENES), default="weekend",
                        help="scene to render (default: %(default)s)")
    parser.add_argument("--width", type=int, default=400,
                        help="image width in pixels (default: %(default)s)")
    parser.add_argument("--aspect-ratio", type=parse_aspect_ratio, default=None,
                        help="width:height, e.g. 16:9 (default: 3:2 for weekend, 16:9 otherwise)")
    parser.add_argument("--samples", type=int, default=16,
                        help="samples per pixel (default: %(default)s)")
    parser.add_argument("--depth", type=int, default=8,
                        help="maximum number of bounces (default: %(default)s)")
    parser.add_argument("--workers", type=int, default=default_workers(),
                        help="number of worker threads (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for a reproducible image, independent of --workers")
    parser.add_argument("--backend", choices=BACKENDS, default="numba",
                        help="row renderer (default: %(default)s)")
    parser.add_argument("--shading", choices=SHADINGS, default="path",
                        help="full path tracing or normal visualisation (default: %(default)s)")
    parser.add_argument("-o", "--output", default="image.png",
                        help="output file, .png or .ppm (default: %(default)s)")
    parser.add_argument("--preview", action="store_true",
                        help="show the finished image in a window")
    parser.add_argument("--log-level", default=os.environ.get(LOG_ENV, "info"),
                        choices=["debug", "info", "warning", "error"],
                        help=f"logging level (default: ${LOG_ENV} or info)")
    return parser


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.scene == "weekend":
            aspect_ratio = args.aspect_ratio or 3.0 / 2.0
            world, camera = weekend_scene(aspect_ratio, seed=args.seed)
        else:
            aspect_ratio = args.aspect_ratio or 16.0 / 9.0
            world, camera = SCENES[args.scene](aspect_ratio)

        settings = RenderSettings(
            width=args.width,
            height=image_height(args.width, aspect_ratio),
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            workers=args.workers,
            seed=args.seed,
            backend=args.backend,
            shading=args.shading,
        )
        image = Renderer(settings).render(world, camera)
        save_image(image, args.output)
    except PathTracerError as e:
        logger.error("%s", e)
        return 1

    if args.preview:
        from pathtracer.preview import show_image
        show_image(image, caption=f"pathtracer - {args.scene}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
