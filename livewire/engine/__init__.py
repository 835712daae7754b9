"""Live-Wire engine: feature extraction, cost model, search and path walk."""

from livewire.engine.config import CostWeights, LiveWireConfig
from livewire.engine.context import FeatureContext, Features
from livewire.engine.cost import LocalCostModel
from livewire.engine.livewire import LiveWire
from livewire.engine.path import PointerMap
from livewire.engine.pipeline import FeaturePipeline, build_features
from livewire.engine.registry import Layer, get_registry, stage
from livewire.engine.search import ShortestPathEngine

__all__ = [
    "stage",
    "Layer",
    "get_registry",
    "FeatureContext",
    "Features",
    "FeaturePipeline",
    "build_features",
    "CostWeights",
    "LiveWireConfig",
    "LocalCostModel",
    "ShortestPathEngine",
    "PointerMap",
    "LiveWire",
]
