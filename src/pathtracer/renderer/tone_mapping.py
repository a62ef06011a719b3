# renderer/tone_mapping.py
import numpy as np


def to_uint8(image: np.ndarray) -> np.ndarray:
    """
    Quantize a gamma-corrected [0, 1] image to 8 bits as int(256 * clamp(c, 0, 0.999)).
    """
    return (256.0 * np.clip(image, 0.0, 0.999)).astype(np.uint8)
