"""Feature pipeline: runs the registered stages in dependency order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from collections.abc import Generator
from typing import Any

from livewire.engine.context import FeatureContext, Features
from livewire.engine.registry import StageRegistry, get_registry
from livewire.errors import FeatureExtractionError, InvalidImageError
from livewire.image import ImageBuffer

logger = logging.getLogger(__name__)

# The 3x3 kernels need a one-pixel border on every side
MIN_IMAGE_SIDE = 3


class FeaturePipeline:
    """Orchestrates the feature stages."""

    def __init__(self, registry: StageRegistry | None = None) -> None:
        if registry is None:
            _register_stages()
        self.registry = registry or get_registry()

    def run(self, ctx: FeatureContext) -> FeatureContext:
        """Run every stage on the given context.

        A failing stage is recorded in ``ctx.errors`` and re-raised as
        ``FeatureExtractionError``; later stages do not run.
        """
        start = time.perf_counter()
        ordered = self.registry.resolve_order()

        logger.debug("Feature pipeline: %d stages queued", len(ordered))

        for spec in ordered:
            t0 = time.perf_counter()
            self._run_stage(spec.id, spec.fn, ctx)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Features built for %dx%d image: %d stages in %.0fms",
            ctx.width,
            ctx.height,
            len(ctx.completed_stages),
            total,
        )
        return ctx

    def run_streaming(self, ctx: FeatureContext) -> Generator[dict[str, Any], None, None]:
        """Run the pipeline, yielding a progress dict around each stage.

        The caller's ``ctx`` is mutated in-place, so after the generator is
        exhausted the context contains all results (same as ``run()``).
        """
        ordered = self.registry.resolve_order()
        total = len(ordered)

        for i, spec in enumerate(ordered):
            yield {
                "stage_id": spec.id,
                "description": spec.description,
                "layer": spec.layer.name,
                "index": i,
                "total": total,
                "elapsed_ms": 0.0,
                "status": "running",
            }

            t0 = time.perf_counter()
            self._run_stage(spec.id, spec.fn, ctx)
            elapsed_ms = round((time.perf_counter() - t0) * 1000, 1)

            yield {
                "stage_id": spec.id,
                "description": spec.description,
                "layer": spec.layer.name,
                "index": i,
                "total": total,
                "elapsed_ms": elapsed_ms,
                "status": "ok",
            }

    def build(self, image: ImageBuffer) -> Features:
        """Validate ``image``, run all stages and freeze the result."""
        validate_image(image)
        ctx = self.run(FeatureContext(image=image))
        return ctx.to_features()

    @staticmethod
    def _run_stage(stage_id: str, fn, ctx: FeatureContext) -> None:
        try:
            fn(ctx)
        except Exception as e:
            ctx.errors[stage_id] = str(e)
            logger.warning("  %s FAILED: %s", stage_id, e)
            raise FeatureExtractionError(f"Stage {stage_id} failed: {e}") from e
        ctx.completed_stages.add(stage_id)


def validate_image(image: ImageBuffer | None) -> None:
    if image is None:
        raise InvalidImageError("No image supplied")
    if not isinstance(image, ImageBuffer):
        raise InvalidImageError(f"Expected an ImageBuffer, got {type(image).__name__}")
    if image.width < MIN_IMAGE_SIDE or image.height < MIN_IMAGE_SIDE:
        raise InvalidImageError(
            f"Image must be at least {MIN_IMAGE_SIDE}x{MIN_IMAGE_SIDE}, "
            f"got {image.width}x{image.height}"
        )


def build_features(image: ImageBuffer | None, pipeline: FeaturePipeline | None = None) -> Features:
    """Compute grayscale, zero-crossing and gradient fields for ``image``."""
    return (pipeline or FeaturePipeline()).build(image)


def _register_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    package = importlib.import_module("livewire.engine.features")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{package.__name__}.{module_name}")
