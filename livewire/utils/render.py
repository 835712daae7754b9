"""Diagnostic rendering of per-pixel cost fields."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from livewire.image import ImageBuffer
from livewire.utils.math_helpers import round_half_up


def cost_field_to_gray(field: NDArray[np.float64]) -> NDArray[np.uint8]:
    """Scale a [0, 1] field to 0-255 bytes, clipping anything outside."""
    values = np.clip(np.asarray(field, dtype=np.float64), 0.0, 1.0) * 255.0
    return round_half_up(values).astype(np.uint8)


def cost_field_to_rgba(field: NDArray[np.float64]) -> ImageBuffer:
    """Cost written into R, G and B with opaque alpha; dark = cheap = edge."""
    gray = cost_field_to_gray(field)
    rgba = np.repeat(gray[:, :, np.newaxis], 4, axis=2)
    rgba[:, :, 3] = 255
    height, width = gray.shape
    return ImageBuffer(width=width, height=height, data=rgba.reshape(-1))


def cost_field_to_pil(field: NDArray[np.float64]) -> Image.Image:
    return Image.fromarray(cost_field_to_gray(field))
