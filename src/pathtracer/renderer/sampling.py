# renderer/sampling.py
# Plain-Python helpers shared by both backends; the kernels compile them with numba.
import math

import numpy as np

_GOLDEN_GAMMA = np.uint64(0x9E3779B97F4A7C15)
_MIX_1 = np.uint64(0xBF58476D1CE4E5B9)
_MIX_2 = np.uint64(0x94D049BB133111EB)


def image_coordinate(position: float, extent: int) -> float:
    """
    Maps a (possibly jittered) pixel position to [0, 1] across an image
    extent. A single pixel maps to the centre.
    """
    if extent == 1:
        return 0.5
    return position / (extent - 1)


def finalize_channel(total: float, samples: int) -> float:
    """
    Averages the sample sum, applies gamma 2 and clamps to [0, 1].
    """
    value = total / samples
    if value <= 0.0:
        return 0.0
    value = math.sqrt(value)
    if value > 1.0:
        return 1.0
    return value


def pixel_seeds(seed: int, row: int, width: int) -> np.ndarray:
    """
    Per-pixel 32-bit seeds for one image row, derived with splitmix64 from the
    render seed and the pixel index. The same pixel always gets the same seed.
    """
    index = np.arange(row * width, (row + 1) * width, dtype=np.uint64)
    z = np.full(width, seed, dtype=np.uint64) * _GOLDEN_GAMMA + index * _GOLDEN_GAMMA
    z = (z ^ (z >> np.uint64(30))) * _MIX_1
    z = (z ^ (z >> np.uint64(27))) * _MIX_2
    z = z ^ (z >> np.uint64(31))
    return (z >> np.uint64(32)).astype(np.uint32)
