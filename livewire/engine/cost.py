"""Local cost model: directed cost of stepping from a pixel into one of its 8 neighbours.

    cost(p, q) = scale * (wz * Z(q) + wd * D(p, q) + wg * G(q))

Z is the zero-crossing label, G the inverted normalised gradient magnitude
and D the gradient-direction term. ``scale`` is 1 for diagonal links and
1/sqrt(2) for axis-aligned ones.

D compares the edge tangent at both ends with the link itself. The tangent
is the gradient rotated by 90°, (sobel_y, -sobel_x), normalised. The link
vector L is flipped to point from q to p whenever it disagrees with the
tangent at p, so D is symmetric in the link's orientation but not in p and
q. Where either gradient vanishes the term is 0.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from livewire.engine.config import CostWeights
from livewire.engine.context import Features
from livewire.errors import OutOfBoundsError
from livewire.utils.math_helpers import DIAGONAL_UNIT, unit_vectors

# (dx, dy) of the 8 neighbours; index k is the link direction used everywhere
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)

AXIS_SCALE = 1.0 / math.sqrt(2.0)
DIAGONAL_SCALE = 1.0


def link_scale(dx: int, dy: int) -> float:
    return DIAGONAL_SCALE if dx != 0 and dy != 0 else AXIS_SCALE


def _clip_unit(value: float) -> float:
    return -1.0 if value < -1.0 else 1.0 if value > 1.0 else value


class LocalCostModel:
    """Edge costs over one image's features."""

    def __init__(self, features: Features, weights: CostWeights | None = None) -> None:
        self.features = features
        self.weights = weights or CostWeights()
        # Unit edge tangent per pixel; degenerate where the gradient is zero
        self._tx, self._ty, self._flat = unit_vectors(features.sobel_y, -features.sobel_x)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.features.height, self.features.width)

    def direction_cost(self, p: tuple[int, int], q: tuple[int, int]) -> float:
        px, py = p
        qx, qy = q
        if self._flat[py, px] or self._flat[qy, qx]:
            return 0.0

        dpx, dpy = float(self._tx[py, px]), float(self._ty[py, px])
        dqx, dqy = float(self._tx[qy, qx]), float(self._ty[qy, qx])

        dx, dy = qx - px, qy - py
        unit = DIAGONAL_UNIT if dx != 0 and dy != 0 else 1.0
        lx, ly = dx * unit, dy * unit
        if dpx * lx + dpy * ly < 0:
            lx, ly = -lx, -ly

        dp = _clip_unit(dpx * lx + dpy * ly)
        dq = _clip_unit(lx * dqx + ly * dqy)
        return (math.acos(dp) + math.acos(dq)) / math.pi

    def local_cost(self, p: tuple[int, int], q: tuple[int, int]) -> float:
        """Cost of the directed link p -> q between 8-adjacent pixels."""
        f = self.features
        for x, y in (p, q):
            if not f.in_bounds(x, y):
                raise OutOfBoundsError(f"Pixel ({x}, {y}) outside {f.width}x{f.height} image")
        dx, dy = q[0] - p[0], q[1] - p[1]
        if (dx, dy) == (0, 0) or abs(dx) > 1 or abs(dy) > 1:
            raise ValueError(f"Pixels {p} and {q} are not 8-adjacent")

        qx, qy = q
        w = self.weights
        total = (
            w.zero_crossing * float(f.zero_crossings[qy, qx])
            + w.gradient_direction * self.direction_cost(p, q)
            + w.gradient_magnitude * float(f.gradient_magnitude[qy, qx])
        )
        return link_scale(dx, dy) * total

    def link_costs(self) -> NDArray[np.float64]:
        """All outgoing link costs at once.

        Returns an (8, h, w) array: ``[k, y, x]`` is the cost from (x, y) to
        (x + dx_k, y + dy_k) for ``NEIGHBOR_OFFSETS[k]``, or ``inf`` when
        that neighbour is outside the image.
        """
        f = self.features
        h, w = self.shape
        zc = f.zero_crossings.astype(np.float64)
        gm = f.gradient_magnitude
        wt = self.weights
        out = np.full((len(NEIGHBOR_OFFSETS), h, w), np.inf, dtype=np.float64)

        for k, (dx, dy) in enumerate(NEIGHBOR_OFFSETS):
            p_sl = (slice(max(0, -dy), h - max(0, dy)), slice(max(0, -dx), w - max(0, dx)))
            q_sl = (slice(max(0, dy), h - max(0, -dy)), slice(max(0, dx), w - max(0, -dx)))

            dpx, dpy = self._tx[p_sl], self._ty[p_sl]
            dqx, dqy = self._tx[q_sl], self._ty[q_sl]

            unit = DIAGONAL_UNIT if dx != 0 and dy != 0 else 1.0
            flip = np.where(dpx * (dx * unit) + dpy * (dy * unit) < 0, -1.0, 1.0)
            lx, ly = flip * (dx * unit), flip * (dy * unit)

            dp = np.clip(dpx * lx + dpy * ly, -1.0, 1.0)
            dq = np.clip(lx * dqx + ly * dqy, -1.0, 1.0)
            direction = (np.arccos(dp) + np.arccos(dq)) / np.pi
            direction = np.where(self._flat[p_sl] | self._flat[q_sl], 0.0, direction)

            out[k][p_sl] = link_scale(dx, dy) * (
                wt.zero_crossing * zc[q_sl]
                + wt.gradient_direction * direction
                + wt.gradient_magnitude * gm[q_sl]
            )

        return out

    def cost_field(self) -> NDArray[np.float64]:
        """Direction-free per-pixel cost normalised to [0, 1] (for display)."""
        f = self.features
        wt = self.weights
        denom = wt.zero_crossing + wt.gradient_magnitude
        if denom == 0:
            return np.zeros(self.shape, dtype=np.float64)
        field = wt.zero_crossing * f.zero_crossings + wt.gradient_magnitude * f.gradient_magnitude
        return field / denom
