"""PointerMap: the back-pointer tree of one search, and the path walk over it."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from livewire.errors import InvariantViolationError, NoPathError, OutOfBoundsError

logger = logging.getLogger(__name__)

# Predecessor of the seed and of pixels the search never reached
NO_PREDECESSOR = -1


@dataclass(frozen=True)
class PointerMap:
    """Spanning tree of minimum-cost paths rooted at ``seed``.

    All arrays are flat and indexed by ``y * width + x``.
    """

    width: int
    height: int
    seed: tuple[int, int]
    predecessors: NDArray[np.int64]
    costs: NDArray[np.float64]
    expanded: NDArray[np.bool_]

    def __post_init__(self) -> None:
        for arr in (self.predecessors, self.costs, self.expanded):
            arr.setflags(write=False)

    @property
    def seed_index(self) -> int:
        return self.seed[1] * self.width + self.seed[0]

    @property
    def expanded_count(self) -> int:
        return int(np.count_nonzero(self.expanded))

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.width + x

    def cost(self, x: int, y: int) -> float:
        """Cumulative cost from the seed to (x, y); inf if never reached."""
        return float(self.costs[self._index(x, y)])

    def predecessor(self, x: int, y: int) -> tuple[int, int] | None:
        prev = int(self.predecessors[self._index(x, y)])
        if prev == NO_PREDECESSOR:
            return None
        y_prev, x_prev = divmod(prev, self.width)
        return (x_prev, y_prev)

    def path_to(self, x: int, y: int) -> list[tuple[int, int]]:
        """Pixels from (x, y) back to and including the seed."""
        current = self._index(x, y)
        if not self.expanded[current]:
            raise NoPathError(f"Pixel ({x}, {y}) was not reached from seed {self.seed}")

        seed_index = self.seed_index
        limit = self.width * self.height
        path = [(x, y)]
        steps = 0

        while current != seed_index:
            prev = int(self.predecessors[current])
            if prev == NO_PREDECESSOR:
                logger.error("Pointer chain from (%d, %d) broken at index %d", x, y, current)
                raise InvariantViolationError(
                    f"Pixel index {current} has no predecessor on the way to seed {self.seed}"
                )
            steps += 1
            if steps >= limit:
                logger.error("Pointer chain from (%d, %d) exceeds %d steps", x, y, limit)
                raise InvariantViolationError(
                    f"Pointer chain from ({x}, {y}) does not reach seed {self.seed}: cycle"
                )
            current = prev
            y_cur, x_cur = divmod(current, self.width)
            path.append((x_cur, y_cur))

        return path
