"""Live-Wire (intelligent scissors) boundary snapping for raster images."""

from livewire.engine import (
    CostWeights,
    Features,
    LiveWire,
    LiveWireConfig,
    PointerMap,
    build_features,
)
from livewire.errors import (
    ConfigurationError,
    FeatureExtractionError,
    InvalidImageError,
    InvariantViolationError,
    LiveWireError,
    NoPathError,
    OutOfBoundsError,
    SearchCancelledError,
    SeedNotSetError,
)
from livewire.image import ImageBuffer

__version__ = "0.1.0"

__all__ = [
    "LiveWire",
    "ImageBuffer",
    "Features",
    "PointerMap",
    "CostWeights",
    "LiveWireConfig",
    "build_features",
    "LiveWireError",
    "InvalidImageError",
    "ConfigurationError",
    "SeedNotSetError",
    "OutOfBoundsError",
    "NoPathError",
    "InvariantViolationError",
    "FeatureExtractionError",
    "SearchCancelledError",
]
