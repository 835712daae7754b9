"""Shared test fixtures: small synthetic images with known features."""

from __future__ import annotations

import numpy as np
import pytest

from livewire.image import ImageBuffer


def uniform_image(width: int, height: int, value: int = 128) -> ImageBuffer:
    return ImageBuffer.from_array(np.full((height, width), value, dtype=np.uint8))


def vertical_edge_image(width: int, height: int, edge_x: int) -> ImageBuffer:
    """Dark (0) for x < edge_x, bright (255) for x >= edge_x; single channel."""
    gray = np.zeros((height, width), dtype=np.uint8)
    gray[:, edge_x:] = 255
    return ImageBuffer.from_array(gray)


def random_image(width: int, height: int, seed: int = 0) -> ImageBuffer:
    rng = np.random.default_rng(seed)
    rgb = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return ImageBuffer.from_array(rgb)


def square_image(size: int = 16, lo: int = 30, hi: int = 220) -> ImageBuffer:
    """Bright square on a dark background, inset by a quarter of ``size``."""
    gray = np.full((size, size), lo, dtype=np.uint8)
    q = size // 4
    gray[q : size - q, q : size - q] = hi
    return ImageBuffer.from_array(gray)


# 4x4, edge between columns 1 and 2
EDGE_4X4 = vertical_edge_image(4, 4, edge_x=2)

# 12x12, edge between columns 5 and 6
EDGE_12X12 = vertical_edge_image(12, 12, edge_x=6)

FLAT_5X5 = uniform_image(5, 5)


@pytest.fixture
def edge_4x4() -> ImageBuffer:
    return EDGE_4X4


@pytest.fixture
def edge_12x12() -> ImageBuffer:
    return EDGE_12X12


@pytest.fixture
def flat_5x5() -> ImageBuffer:
    return FLAT_5X5


@pytest.fixture
def noisy_image() -> ImageBuffer:
    return random_image(17, 11, seed=42)


@pytest.fixture
def square() -> ImageBuffer:
    return square_image()
