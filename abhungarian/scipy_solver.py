"""
SciPy Solver Module

Reference wrapper around SciPy's linear_sum_assignment for integer cost matrices.
"""

import numpy as np
import scipy.optimize
from typing import Tuple

from .hungarian import check_cost_matrix


class SciPySolver:
    """Wrapper for SciPy's linear_sum_assignment algorithm."""

    def __init__(self):
        self.name = "SciPy"

    def solve(self, C) -> Tuple[np.ndarray, np.ndarray, int]:
        """
        Solve the assignment problem with SciPy's linear_sum_assignment.

        Args:
            C: Cost matrix

        Returns:
            rows, cols, cost: Row indices, assigned columns, total cost
        """
        C = check_cost_matrix(C)
        rows, cols = scipy.optimize.linear_sum_assignment(C)
        cost = sum(int(C[r, c]) for r, c in zip(rows, cols))
        return rows.astype(np.int64), cols.astype(np.int64), cost

    def __call__(self, C) -> Tuple[np.ndarray, np.ndarray, int]:
        """Allow using solver as callable."""
        return self.solve(C)
