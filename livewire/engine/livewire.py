"""LiveWire: the capability interface consumed by interactive editing tools.

A tool adapts user input into three calls: ``set_image`` when the pixels
change, ``set_seed_point`` when the user anchors the wire, and ``path_to``
as the cursor moves. Both ``set_image`` and ``set_seed_point`` are blocking
and CPU-bound; callers on a UI thread should run them on a worker.
"""

from __future__ import annotations

import logging
import operator

import numpy as np
from numpy.typing import NDArray

from livewire.engine.config import LiveWireConfig
from livewire.engine.context import Features
from livewire.engine.cost import LocalCostModel
from livewire.engine.path import PointerMap
from livewire.engine.pipeline import FeaturePipeline
from livewire.engine.search import CancelCheck, ProgressCallback, ShortestPathEngine
from livewire.errors import OutOfBoundsError, SeedNotSetError
from livewire.image import ImageBuffer

logger = logging.getLogger(__name__)


class LiveWire:
    """Intelligent-scissors boundary snapping over a single image."""

    def __init__(
        self,
        image: ImageBuffer,
        config: LiveWireConfig | None = None,
        pipeline: FeaturePipeline | None = None,
    ) -> None:
        self.config = config or LiveWireConfig()
        self._pipeline = pipeline or FeaturePipeline()
        self._features: Features | None = None
        self._cost_model: LocalCostModel | None = None
        self._engine: ShortestPathEngine | None = None
        self._seed: tuple[int, int] | None = None
        self._pointer_map: PointerMap | None = None
        self.set_image(image)

    # --- image ---

    def set_image(self, image: ImageBuffer) -> None:
        """Rebuild all features for a new or edited image.

        The seed and its pointer map are dropped. If the image is rejected
        the previous state is kept.
        """
        features = self._pipeline.build(image)
        cost_model = LocalCostModel(features, self.config.weights)

        self._features = features
        self._cost_model = cost_model
        self._engine = ShortestPathEngine(cost_model, self.config)
        self._seed = None
        self._pointer_map = None

    @property
    def width(self) -> int:
        return self.features.width

    @property
    def height(self) -> int:
        return self.features.height

    @property
    def features(self) -> Features:
        assert self._features is not None
        return self._features

    # --- seed ---

    def set_seed_point(
        self,
        x: int,
        y: int,
        progress_callback: ProgressCallback | None = None,
        should_cancel: CancelCheck | None = None,
    ) -> None:
        """Anchor the wire at (x, y) and compute the full back-pointer tree."""
        seed = self._validate_point(x, y)
        assert self._engine is not None
        pointer_map = self._engine.compute_tree(
            seed, progress_callback=progress_callback, should_cancel=should_cancel
        )
        self._seed = seed
        self._pointer_map = pointer_map
        logger.debug("Seed set to (%d, %d)", seed[0], seed[1])

    def get_seed_point(self) -> tuple[int, int] | None:
        return self._seed

    @property
    def pointer_map(self) -> PointerMap | None:
        return self._pointer_map

    # --- paths ---

    def path_to(self, x: int, y: int) -> list[tuple[int, int]]:
        """Boundary polyline from (x, y) back to the seed, both inclusive."""
        if self._seed is None or self._pointer_map is None:
            raise SeedNotSetError("set_seed_point() must be called before path_to()")
        px, py = self._validate_point(x, y)
        return self._pointer_map.path_to(px, py)

    def get_cost_field(self) -> NDArray[np.float64]:
        """Normalised per-pixel cost, (height, width) in [0, 1]."""
        assert self._cost_model is not None
        return self._cost_model.cost_field()

    def _validate_point(self, x: int, y: int) -> tuple[int, int]:
        if isinstance(x, bool) or isinstance(y, bool):
            raise OutOfBoundsError(f"Coordinates must be integers, got ({x!r}, {y!r})")
        try:
            ix, iy = operator.index(x), operator.index(y)
        except TypeError as e:
            raise OutOfBoundsError(f"Coordinates must be integers, got ({x!r}, {y!r})") from e
        if not self.features.in_bounds(ix, iy):
            raise OutOfBoundsError(
                f"Pixel ({ix}, {iy}) outside {self.width}x{self.height} image"
            )
        return (ix, iy)
