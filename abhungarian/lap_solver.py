"""
LAP Solver Module

Reference wrapper around the lap library's Jonker-Volgenant solver (lapjv).
"""

import numpy as np
import lap
from typing import Tuple

from .hungarian import check_cost_matrix


class LAPSolver:
    """Wrapper for LAP library's lapjv algorithm."""

    def __init__(self):
        self.name = "LAP"

    def solve(self, C) -> Tuple[np.ndarray, np.ndarray, int]:
        """
        Solve the assignment problem with lapjv.

        lapjv works in floating point; the cost is recomputed exactly on the
        integer matrix from the returned assignment.

        Args:
            C: Cost matrix

        Returns:
            rows, cols, cost: Row indices, assigned columns, total cost
        """
        C = check_cost_matrix(C)
        n = C.shape[0]
        rows = np.arange(n, dtype=np.int64)
        if n == 0:
            return rows, np.zeros(0, dtype=np.int64), 0

        _, x, _ = lap.lapjv(C.astype(np.float64), extend_cost=False)
        cols = np.asarray(x, dtype=np.int64)

        cost = sum(int(C[i, cols[i]]) for i in range(n))
        return rows, cols, cost

    def __call__(self, C) -> Tuple[np.ndarray, np.ndarray, int]:
        """Allow using solver as callable."""
        return self.solve(C)
