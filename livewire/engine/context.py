"""FeatureContext: the single mutable state object flowing through all feature stages.

Each stage fills in one or more fields. Once every stage has run the context
is frozen into an immutable ``Features`` object which is all the cost model
and the search ever see.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from livewire.image import ImageBuffer


@dataclass(frozen=True)
class Features:
    """Derived per-pixel fields of one image, indexed [y, x] (flat: y*w + x)."""

    width: int
    height: int
    grayscale: NDArray[np.float64]
    zero_crossings: NDArray[np.uint8]
    sobel_x: NDArray[np.float64]
    sobel_y: NDArray[np.float64]
    gradient_magnitude: NDArray[np.float64]
    max_gradient: float

    def __post_init__(self) -> None:
        for name in ("grayscale", "zero_crossings", "sobel_x", "sobel_y", "gradient_magnitude"):
            arr = getattr(self, name)
            if arr.shape != (self.height, self.width):
                raise ValueError(f"{name} has shape {arr.shape}, expected {(self.height, self.width)}")
            arr.setflags(write=False)

    @property
    def size(self) -> int:
        return self.width * self.height

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def coords(self, index: int) -> tuple[int, int]:
        y, x = divmod(index, self.width)
        return (x, y)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height


@dataclass
class FeatureContext:
    """Shared state flowing through the feature pipeline."""

    image: ImageBuffer

    # --- Intensity (layer 0) ---
    grayscale: NDArray[np.float64] | None = None

    # --- Laplacian zero crossings (layer 1) ---
    # Gaussian-smoothed grayscale
    smoothed: NDArray[np.float64] | None = None
    # Laplacian of the smoothed field
    laplacian: NDArray[np.float64] | None = None
    # 1 = no zero crossing, 0 = zero crossing at this pixel
    zero_crossings: NDArray[np.uint8] | None = None

    # --- Gradient (layer 2) ---
    sobel_x: NDArray[np.float64] | None = None
    sobel_y: NDArray[np.float64] | None = None
    # Rounded raw magnitude before normalisation
    gradient_raw: NDArray[np.float64] | None = None
    max_gradient: float = 0.0
    # 1 - g / max(g): low value = strong edge
    gradient_magnitude: NDArray[np.float64] | None = None

    # --- Pipeline metadata ---
    completed_stages: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def require(self, name: str) -> NDArray:
        """Return a field populated by an earlier stage or fail loudly."""
        value = getattr(self, name)
        if value is None:
            raise RuntimeError(f"Field '{name}' has not been computed yet")
        return value

    def to_features(self) -> Features:
        return Features(
            width=self.width,
            height=self.height,
            grayscale=self.require("grayscale").copy(),
            zero_crossings=self.require("zero_crossings").copy(),
            sobel_x=self.require("sobel_x").copy(),
            sobel_y=self.require("sobel_y").copy(),
            gradient_magnitude=self.require("gradient_magnitude").copy(),
            max_gradient=float(self.max_gradient),
        )
