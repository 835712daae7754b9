"""Engine configuration: cost weights and search cadence."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from livewire.errors import ConfigurationError

if TYPE_CHECKING:
    from livewire.config import Settings

# Weights may drift from 1.0 by float rounding only
_WEIGHT_SUM_TOLERANCE = 1e-9


@dataclass(frozen=True)
class CostWeights:
    """Relative weights of the three local cost features."""

    zero_crossing: float = 0.43  # wz
    gradient_magnitude: float = 0.14  # wg
    gradient_direction: float = 0.43  # wd

    def __post_init__(self) -> None:
        values = (self.zero_crossing, self.gradient_magnitude, self.gradient_direction)
        if any(not math.isfinite(v) or v < 0 for v in values):
            raise ConfigurationError(f"Cost weights must be finite and non-negative: {values}")
        total = sum(values)
        if abs(total - 1.0) > _WEIGHT_SUM_TOLERANCE:
            raise ConfigurationError(f"Cost weights must sum to 1.0, got {total:.12g}")


@dataclass
class LiveWireConfig:
    """Controls the cost model and the shortest-path search."""

    weights: CostWeights = field(default_factory=CostWeights)

    # Number of pixel expansions between progress callbacks and cancel checks
    progress_interval: int = 4096

    def __post_init__(self) -> None:
        if self.progress_interval < 1:
            raise ConfigurationError(
                f"progress_interval must be >= 1, got {self.progress_interval}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> LiveWireConfig:
        weights = CostWeights(
            zero_crossing=settings.livewire_weight_zero_crossing,
            gradient_magnitude=settings.livewire_weight_gradient_magnitude,
            gradient_direction=settings.livewire_weight_gradient_direction,
        )
        return cls(weights=weights, progress_interval=settings.livewire_progress_interval)
