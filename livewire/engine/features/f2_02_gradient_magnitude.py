"""F2.02: Normalised gradient magnitude.

g = round(sqrt(sx² + sy²)), then 1 - g / max(g) so that the strongest edge
in the image costs 0 and flat regions cost 1. A completely flat image
(max(g) = 0) is 1 everywhere.
"""

from __future__ import annotations

import numpy as np

from livewire.engine.context import FeatureContext
from livewire.engine.registry import Layer, stage
from livewire.utils.math_helpers import round_half_up


@stage(
    id="F2.02",
    layer=Layer.GRADIENT,
    dependencies=["F2.01"],
    description="Gradient magnitude normalised to [0, 1], inverted",
)
def gradient_magnitude(ctx: FeatureContext) -> None:
    g = round_half_up(np.hypot(ctx.require("sobel_x"), ctx.require("sobel_y")))
    max_g = float(g.max())

    ctx.gradient_raw = g
    ctx.max_gradient = max_g
    if max_g == 0:
        ctx.gradient_magnitude = np.ones_like(g)
    else:
        ctx.gradient_magnitude = 1.0 - g / max_g
