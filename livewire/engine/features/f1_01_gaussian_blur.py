"""F1.01: Gaussian blur (3x3, sigma ~ 0.85) of the grayscale field."""

from __future__ import annotations

from livewire.engine.context import FeatureContext
from livewire.engine.registry import Layer, stage
from livewire.utils.convolution import GAUSSIAN_3X3, convolve3x3


@stage(
    id="F1.01",
    layer=Layer.ZERO_CROSSING,
    dependencies=["F0.01"],
    description="Smooth grayscale with a 3x3 Gaussian",
)
def gaussian_blur(ctx: FeatureContext) -> None:
    ctx.smoothed = convolve3x3(ctx.require("grayscale"), GAUSSIAN_3X3)
