"""F0.01: Grayscale.

Luminance-weighted intensity, 0.299 R + 0.587 G + 0.114 B, rounded half up.
Alpha is ignored.
"""

from __future__ import annotations

import numpy as np

from livewire.engine.context import FeatureContext
from livewire.engine.registry import Layer, stage
from livewire.utils.math_helpers import round_half_up

_LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


@stage(
    id="F0.01",
    layer=Layer.INTENSITY,
    description="Convert RGBA pixels to rounded luminance",
)
def grayscale(ctx: FeatureContext) -> None:
    rgb = ctx.image.to_array()[:, :, :3].astype(np.float64)
    ctx.grayscale = round_half_up(rgb @ _LUMA_WEIGHTS)
