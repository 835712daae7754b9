"""F2.01: Sobel derivatives of the raw (unsmoothed) grayscale field.

Border responses are 0: there is no full window to measure a derivative.
"""

from __future__ import annotations

from livewire.engine.context import FeatureContext
from livewire.engine.registry import Layer, stage
from livewire.utils.convolution import SOBEL_X, SOBEL_Y, convolve3x3


@stage(
    id="F2.01",
    layer=Layer.GRADIENT,
    dependencies=["F0.01"],
    description="Horizontal and vertical Sobel responses",
)
def sobel(ctx: FeatureContext) -> None:
    gray = ctx.require("grayscale")
    ctx.sobel_x = convolve3x3(gray, SOBEL_X, border="zero")
    ctx.sobel_y = convolve3x3(gray, SOBEL_Y, border="zero")
