"""Shortest-path engine: Dijkstra over the implicit 8-connected pixel grid.

The frontier is a binary heap of (cost, index) pairs. Decrease-key is done
by pushing a fresh entry; stale entries are skipped when popped. Per-pixel
state lives in flat sequences indexed by ``y * width + x``.
"""

from __future__ import annotations

import heapq
import logging
import math
import time
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from livewire.engine.config import LiveWireConfig
from livewire.engine.cost import NEIGHBOR_OFFSETS, LocalCostModel
from livewire.engine.path import NO_PREDECESSOR, PointerMap
from livewire.errors import OutOfBoundsError, SearchCancelledError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]
CancelCheck = Callable[[], bool]


class ShortestPathEngine:
    """Builds the back-pointer tree for a seed over one image's cost model."""

    def __init__(self, cost_model: LocalCostModel, config: LiveWireConfig | None = None) -> None:
        self.cost_model = cost_model
        self.config = config or LiveWireConfig()
        self._links: NDArray[np.float64] | None = None

    @property
    def links(self) -> NDArray[np.float64]:
        """Flat link-cost table, (8 * n,), computed once per image."""
        if self._links is None:
            t0 = time.perf_counter()
            self._links = np.ascontiguousarray(self.cost_model.link_costs().reshape(-1))
            logger.debug("Link costs computed in %.1fms", (time.perf_counter() - t0) * 1000)
        return self._links

    def compute_tree(
        self,
        seed: tuple[int, int],
        progress_callback: ProgressCallback | None = None,
        should_cancel: CancelCheck | None = None,
    ) -> PointerMap:
        features = self.cost_model.features
        width, height = features.width, features.height
        sx, sy = seed
        if not features.in_bounds(sx, sy):
            raise OutOfBoundsError(f"Seed ({sx}, {sy}) outside {width}x{height} image")

        start = time.perf_counter()
        n = width * height
        seed_index = sy * width + sx
        interval = self.config.progress_interval

        # memoryview indexing yields plain floats without per-item numpy overhead
        link = memoryview(self.links)
        neighbours = [(k * n, dy * width + dx) for k, (dx, dy) in enumerate(NEIGHBOR_OFFSETS)]

        cost = [math.inf] * n
        pointer = [NO_PREDECESSOR] * n
        expanded = bytearray(n)

        cost[seed_index] = 0.0
        frontier: list[tuple[float, int]] = [(0.0, seed_index)]
        done = 0

        while frontier:
            cq, q = heapq.heappop(frontier)
            if expanded[q] or cq > cost[q]:
                continue
            expanded[q] = 1
            done += 1

            for base, delta in neighbours:
                c = link[base + q]
                if c == math.inf:
                    continue
                r = q + delta
                if expanded[r]:
                    continue
                tentative = cq + c
                if tentative < cost[r]:
                    cost[r] = tentative
                    pointer[r] = q
                    heapq.heappush(frontier, (tentative, r))

            if done % interval == 0:
                logger.debug("Search from (%d, %d): %d/%d pixels expanded", sx, sy, done, n)
                if progress_callback is not None:
                    progress_callback(done / n)
                if should_cancel is not None and should_cancel():
                    logger.warning(
                        "Search from (%d, %d) cancelled after %d/%d pixels", sx, sy, done, n
                    )
                    raise SearchCancelledError(f"Search from ({sx}, {sy}) cancelled")

        if progress_callback is not None:
            progress_callback(done / n)

        elapsed = (time.perf_counter() - start) * 1000
        logger.info("Search from (%d, %d): %d/%d pixels expanded in %.0fms", sx, sy, done, n, elapsed)

        return PointerMap(
            width=width,
            height=height,
            seed=(sx, sy),
            predecessors=np.array(pointer, dtype=np.int64),
            costs=np.array(cost, dtype=np.float64),
            expanded=np.frombuffer(bytes(expanded), dtype=np.uint8).astype(bool),
        )
