"""Math helpers shared by the feature stages. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# sqrt(0.5): per-axis component of a unit diagonal step
DIAGONAL_UNIT = float(np.sqrt(0.5))


def round_half_up(values: NDArray[np.float64]) -> NDArray[np.float64]:
    """Round to the nearest integer with halves going up.

    ``np.round`` rounds halves to even; intensities and gradient magnitudes
    always round halves up instead: 0.5 -> 1, 2.5 -> 3.
    """
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def unit_vectors(
    vx: NDArray[np.float64], vy: NDArray[np.float64]
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.bool_]]:
    """Normalise a 2D vector field.

    Returns (ux, uy, degenerate) where ``degenerate`` marks zero vectors,
    which are left as (0, 0).
    """
    norm = np.hypot(vx, vy)
    degenerate = norm == 0
    safe = np.where(degenerate, 1.0, norm)
    return vx / safe, vy / safe, degenerate
