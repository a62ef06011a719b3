# output/image_writer.py
import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from pathtracer.errors import ConfigurationError
from pathtracer.renderer.tone_mapping import to_uint8

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def save_png(image: np.ndarray, path: PathLike) -> Path:
    """
    Save a (height, width, 3) [0, 1] image as an 8-bit RGB PNG (or any format
    Pillow infers from the suffix).
    """
    path = Path(path)
    Image.fromarray(to_uint8(image)).save(path)
    logger.info("Wrote %s", path)
    return path


def write_ppm(image: np.ndarray, path: PathLike) -> Path:
    """
    Write a plain-text (P3) PPM, one "R G B" triple per pixel.
    """
    path = Path(path)
    pixels = to_uint8(image)
    height, width, _ = pixels.shape
    with path.open("w", encoding="ascii") as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for row in pixels:
            f.write(" ".join(f"{r} {g} {b}" for r, g, b in row))
            f.write("\n")
    logger.info("Wrote %s", path)
    return path


def save_image(image: np.ndarray, path: PathLike) -> Path:
    """
    Save by suffix: .ppm goes to write_ppm, everything else through Pillow.
    """
    path = Path(path)
    if image.ndim != 3 or image.shape[2] != 3:
        raise ConfigurationError(f"Expected a (height, width, 3) image, got shape {image.shape}")
    if path.suffix.lower() == ".ppm":
        return write_ppm(image, path)
    return save_png(image, path)
