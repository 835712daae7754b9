"""3x3 convolution with the Live-Wire border policies.

Border rows and columns have no full 3x3 window and are never convolved.
With ``border="copy"`` they keep the source value unchanged (no reflection,
no clamping); with ``border="zero"`` they are 0, which is what derivative
kernels use so a flat image has no gradient anywhere.
"""

from __future__ import annotations

from typing import Literal

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import correlate

BorderPolicy = Literal["copy", "zero"]

# Kernels are written in image orientation: rows are y, columns are x.
GAUSSIAN_3X3 = np.array(
    [
        [1, 2, 1],
        [2, 4, 2],
        [1, 2, 1],
    ],
    dtype=np.float64,
) / 16.0

LAPLACIAN_3X3 = np.array(
    [
        [0, -1, 0],
        [-1, 4, -1],
        [0, -1, 0],
    ],
    dtype=np.float64,
)

# Horizontal derivative: right minus left
SOBEL_X = np.array(
    [
        [-1, 0, 1],
        [-2, 0, 2],
        [-1, 0, 1],
    ],
    dtype=np.float64,
)

# Vertical derivative: bottom minus top
SOBEL_Y = np.array(
    [
        [-1, -2, -1],
        [0, 0, 0],
        [1, 2, 1],
    ],
    dtype=np.float64,
)


def convolve3x3(
    field: NDArray,
    kernel: NDArray[np.float64],
    border: BorderPolicy = "copy",
) -> NDArray[np.float64]:
    """Apply a 3x3 kernel to the interior of ``field``.

    The kernel is applied in correlation orientation, i.e. ``kernel[1 + dy,
    1 + dx]`` weighs the pixel at offset ``(dx, dy)``. Fields smaller than
    3 pixels on either axis are all border.
    """
    if kernel.shape != (3, 3):
        raise ValueError(f"Expected a 3x3 kernel, got {kernel.shape}")
    if border not in ("copy", "zero"):
        raise ValueError(f"Unknown border policy: {border!r}")

    src = np.asarray(field, dtype=np.float64)
    out = src.copy() if border == "copy" else np.zeros_like(src)
    rows, cols = src.shape
    if rows < 3 or cols < 3:
        return out

    filtered = correlate(src, kernel, mode="constant", cval=0.0)
    out[1:-1, 1:-1] = filtered[1:-1, 1:-1]
    return out
