"""F1.03: Laplacian zero crossings.

A pixel is labelled 0 when the Laplacian changes sign between it and one of
its 4-connected neighbours AND the pixel is the one closer to zero, so each
crossing is marked on a single side. Everything else, including the image
border, is 1.
"""

from __future__ import annotations

import numpy as np

from livewire.engine.context import FeatureContext
from livewire.engine.registry import Layer, stage


@stage(
    id="F1.03",
    layer=Layer.ZERO_CROSSING,
    dependencies=["F1.02"],
    description="Label Laplacian zero crossings (0 = edge)",
)
def zero_crossings(ctx: FeatureContext) -> None:
    lap = ctx.require("laplacian")
    labels = np.ones(lap.shape, dtype=np.uint8)
    rows, cols = lap.shape
    if rows < 3 or cols < 3:
        ctx.zero_crossings = labels
        return

    center = lap[1:-1, 1:-1]
    crossing = np.zeros(center.shape, dtype=bool)
    # up, down, left, right
    for neighbour in (lap[:-2, 1:-1], lap[2:, 1:-1], lap[1:-1, :-2], lap[1:-1, 2:]):
        sign_change = ((center < 0) & (neighbour > 0)) | ((center > 0) & (neighbour < 0))
        crossing |= sign_change & (np.abs(center) < np.abs(neighbour))

    labels[1:-1, 1:-1] = np.where(crossing, 0, 1)
    ctx.zero_crossings = labels
