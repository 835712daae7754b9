"""F1.02: Laplacian of the smoothed field (together: Laplacian of Gaussian)."""

from __future__ import annotations

from livewire.engine.context import FeatureContext
from livewire.engine.registry import Layer, stage
from livewire.utils.convolution import LAPLACIAN_3X3, convolve3x3


@stage(
    id="F1.02",
    layer=Layer.ZERO_CROSSING,
    dependencies=["F1.01"],
    description="Apply the 4-neighbour Laplacian to the smoothed field",
)
def laplacian(ctx: FeatureContext) -> None:
    ctx.laplacian = convolve3x3(ctx.require("smoothed"), LAPLACIAN_3X3)
