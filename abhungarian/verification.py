"""
Verification Module

Exact optimality checks for assignment results and cross-checks of the
Hungarian solver against the reference solvers.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from .hungarian import AssignmentResult, HungarianSolver, check_cost_matrix
from .scipy_solver import SciPySolver
from .lap_solver import LAPSolver

logger = logging.getLogger(__name__)


def check_assignment(row_to_col: np.ndarray, n: Optional[int] = None) -> bool:
    """Assert that row_to_col is a bijection between rows and columns 0..n-1."""
    row_to_col = np.asarray(row_to_col, dtype=np.int64)
    n = len(row_to_col) if n is None else n
    if len(row_to_col) != n:
        raise AssertionError(f"Expected {n} assigned rows, got {len(row_to_col)}")
    if n and (row_to_col.min() < 0 or row_to_col.max() >= n):
        raise AssertionError("Assignment contains unmatched or out-of-range columns")
    if len(np.unique(row_to_col)) != n:
        raise AssertionError("Assignment maps two rows to the same column")
    return True


def check_dual_feasible(C: np.ndarray, u: np.ndarray, v: np.ndarray) -> bool:
    """Assert dual feasibility: C_ij - u_i - v_j >= 0 for all i, j (exact integers)."""
    red = np.asarray(C) - np.asarray(u)[:, None] - np.asarray(v)[None, :]
    if red.size == 0:
        return True
    mn = int(red.min())
    if mn < 0:
        i, j = np.unravel_index(int(red.argmin()), red.shape)
        raise AssertionError(f"Dual infeasible: reduced cost {mn} on edge ({i}, {j})")
    return True


def check_dual_and_match(C: np.ndarray, u: np.ndarray, v: np.ndarray,
                         rows: np.ndarray, cols: np.ndarray) -> bool:
    """
    Assert dual feasibility and tightness on matched edges
    (complementary slackness).

    Args:
        C: Cost matrix, in the same unit as u and v
        u, v: Row and column potentials
        rows, cols: Matched pairs (rows[k], cols[k])
    """
    check_dual_feasible(C, u, v)
    rows = np.asarray(rows, dtype=np.int64)
    cols = np.asarray(cols, dtype=np.int64)
    if rows.size:
        red = np.asarray(C)[rows, cols] - np.asarray(u)[rows] - np.asarray(v)[cols]
        loose = np.flatnonzero(red != 0)
        if loose.size:
            k = int(loose[0])
            raise AssertionError(
                f"Complementary slackness violated on matched edge "
                f"({int(rows[k])}, {int(cols[k])}): reduced cost {int(red[k])}")
    return True


def check_strong_duality(C: np.ndarray, result: AssignmentResult) -> bool:
    """Assert that the reported cost equals both the primal sum and half the dual objective."""
    C = check_cost_matrix(C)
    primal = sum(int(C[v, u]) for v, u in enumerate(result.row_to_col))
    dual = sum(int(a) for a in result.alpha) + sum(int(b) for b in result.beta)
    if primal != result.cost:
        raise AssertionError(f"Reported cost {result.cost} but assignment costs {primal}")
    if dual != 2 * primal:
        raise AssertionError(f"Dual objective {dual} is not twice the cost {primal}")
    return True


def verify_result(C: np.ndarray, result: AssignmentResult) -> bool:
    """Full optimality certificate for a solve of C: bijection, duals, duality gap."""
    C = check_cost_matrix(C)
    n = C.shape[0]
    check_assignment(result.row_to_col, n)
    check_dual_and_match(2 * C, result.alpha, result.beta,
                         np.arange(n), result.row_to_col)
    check_strong_duality(C, result)
    return True


def verify_solver_correctness(C: np.ndarray, solvers: Optional[Sequence] = None) -> bool:
    """
    Verify that the Hungarian solver and the reference solvers agree on
    the optimal cost.

    Args:
        C: Cost matrix
        solvers: Solvers to compare; defaults to Hungarian, SciPy and LAP

    Returns:
        True if every solver reports the same cost
    """
    if solvers is None:
        solvers = [HungarianSolver(), SciPySolver(), LAPSolver()]

    try:
        costs = {solver.name: solver.solve(C)[2] for solver in solvers}
    except (ValueError, AssertionError) as e:
        logger.warning("Verification failed: %s", e)
        return False

    if len(set(costs.values())) > 1:
        logger.warning("Solvers disagree on the optimal cost: %s", costs)
        return False
    return True
