"""
Alpha-Beta Hungarian Module

Exact O(N^3) solver for the square assignment problem using the dual
(alpha-beta) form of the Hungarian method, as laid out in section 11.2 of
Papadimitriou & Steiglitz, "Combinatorial Optimization".

Costs are doubled on entry so that every dual step theta stays an integer
after halving. All potentials reported by this module are in that doubled
unit; the optimal cost is reported in the caller's unit.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

UNMATCHED = -1

# Slack of a column that no labelled row has reached yet.
_INFINITY = np.iinfo(np.int64).max


class InvariantViolation(AssertionError):
    """Dual feasibility or matching invariants were broken during a solve."""


def check_cost_matrix(C) -> np.ndarray:
    """
    Validate a cost matrix and return it as a square int64 array.

    Accepts nested sequences or numpy arrays of integers. Floats are
    accepted only when every entry is integral.

    Raises:
        TypeError: If the entries are not integers.
        ValueError: If the matrix is not square, has negative entries, or
            holds costs too large for exact int64 arithmetic.
    """
    C = np.asarray(C)

    if C.ndim == 1 and C.size == 0:
        return np.zeros((0, 0), dtype=np.int64)
    if C.ndim != 2:
        raise ValueError(f"Cost matrix must be 2-D, got shape {C.shape}")
    if C.shape[0] != C.shape[1]:
        raise ValueError(f"Cost matrix must be square, got shape {C.shape}")

    if C.dtype == np.bool_ or not (np.issubdtype(C.dtype, np.integer)
                                   or np.issubdtype(C.dtype, np.floating)):
        raise TypeError(f"Cost entries must be integers, got dtype {C.dtype}")

    n = C.shape[0]
    if n == 0:
        return np.zeros((0, 0), dtype=np.int64)

    if np.issubdtype(C.dtype, np.floating):
        if not np.all(np.isfinite(C)):
            raise ValueError("Cost entries must be finite")
        if np.any(C != np.floor(C)):
            raise TypeError("Cost entries must be integral")

    if C.min() < 0:
        raise ValueError("Negative costs are not supported")

    # Doubled costs, potentials and their sums must stay inside int64.
    limit = _INFINITY // (2 * (n + 1))
    if C.max() > limit:
        raise ValueError(f"Costs must not exceed {limit} for a {n}x{n} matrix")

    return C.astype(np.int64)


class DualState:
    """Row potentials alpha and column potentials beta (doubled unit)."""

    def __init__(self, alpha: np.ndarray, beta: np.ndarray):
        self.alpha = alpha
        self.beta = beta

    @classmethod
    def initialize(cls, cost2: np.ndarray) -> "DualState":
        """alpha = 0 and beta = column minima, which is always feasible."""
        n = cost2.shape[0]
        alpha = np.zeros(n, dtype=np.int64)
        if n:
            beta = cost2.min(axis=0).astype(np.int64)
        else:
            beta = np.zeros(0, dtype=np.int64)
        return cls(alpha, beta)

    def shift(self, theta: int, label_v: np.ndarray, label_u: np.ndarray) -> None:
        """
        Move the potentials by theta.

        Labelled rows rise and unlabelled rows fall; labelled columns fall and
        unlabelled columns rise. Tree edges keep their reduced cost, edges
        from the tree to free columns lose 2*theta.
        """
        self.alpha += np.where(label_v, theta, -theta)
        self.beta += np.where(label_u, -theta, theta)

    def objective(self) -> int:
        # Python ints: the partial sums may leave the int64 range.
        return sum(int(a) for a in self.alpha) + sum(int(b) for b in self.beta)


class MatchingState:
    """Partial matching between rows V and columns U."""

    def __init__(self, n: int):
        self.mate_v = np.full(n, UNMATCHED, dtype=np.int64)
        self.mate_u = np.full(n, UNMATCHED, dtype=np.int64)

    def is_row_matched(self, v: int) -> bool:
        return self.mate_v[v] != UNMATCHED

    def is_column_matched(self, u: int) -> bool:
        return self.mate_u[u] != UNMATCHED

    def match(self, v: int, u: int) -> None:
        self.mate_v[v] = u
        self.mate_u[u] = v

    @property
    def size(self) -> int:
        return int(np.count_nonzero(self.mate_v != UNMATCHED))


class SearchPhase(enum.Enum):
    SEEDED = "seeded"
    GROWING = "growing"
    FOUND = "found"


class SearchState:
    """Scratch data for a single phase. Never reused across phases."""

    def __init__(self, n: int):
        self.label_v = np.zeros(n, dtype=bool)
        self.label_u = np.zeros(n, dtype=bool)
        self.slack = np.full(n, _INFINITY, dtype=np.int64)
        # nhbor[u]: labelled row attaining slack[u].
        self.nhbor = np.full(n, UNMATCHED, dtype=np.int64)
        # parent[v]: row whose tree edge led to v's column; -1 for roots.
        self.parent = np.full(n, UNMATCHED, dtype=np.int64)
        self.phase = SearchPhase.SEEDED
        self.rounds = 0


@dataclass
class AssignmentResult:
    """
    Outcome of a solve.

    Attributes:
        cost: Optimal total cost, in the units of the input matrix
        row_to_col: Column assigned to each row
        col_to_row: Row assigned to each column
        alpha, beta: Optimal row/column potentials in the doubled unit
        phases: Number of phases executed (equals N)
    """
    cost: int
    row_to_col: np.ndarray
    col_to_row: np.ndarray
    alpha: np.ndarray
    beta: np.ndarray
    phases: int

    def pairs(self) -> List[Tuple[int, int]]:
        return [(v, int(u)) for v, u in enumerate(self.row_to_col)]


PhaseCallback = Callable[[int, "AlphaBetaHungarian"], None]


class AlphaBetaHungarian:
    """
    One solve of the assignment problem.

    The engine owns every array it works on; build a new one per matrix.

    Args:
        C: N x N matrix of non-negative integer costs
        check_invariants: Verify dual feasibility, tightness and matching
            size after every phase
        on_phase: Optional hook called as on_phase(phase_index, engine)
            after each phase
    """

    def __init__(self, C, check_invariants: bool = False,
                 on_phase: Optional[PhaseCallback] = None):
        self.cost = check_cost_matrix(C)
        self.n = self.cost.shape[0]
        self.cost2 = 2 * self.cost
        self.check_invariants = check_invariants
        self.on_phase = on_phase

        self.dual = DualState.initialize(self.cost2)
        self.matching = MatchingState(self.n)
        self.search_state = SearchState(self.n)
        self.phases_run = 0

    def relax(self, v: int) -> None:
        """Tighten slack[u] for every unlabelled column using newly labelled row v."""
        s = self.search_state
        free = ~s.label_u
        bound = self.cost2[v] - self.dual.alpha[v] - self.dual.beta

        if np.any(bound[free] < 0):
            u = int(np.flatnonzero(free & (bound < 0))[0])
            raise InvariantViolation(
                f"Negative reduced cost {int(bound[u])} on edge ({v}, {u})")

        # Strict comparison keeps the first row that reached the minimum.
        better = free & (bound < s.slack)
        s.slack[better] = bound[better]
        s.nhbor[better] = v

    def dual_update(self) -> int:
        """Shift the potentials by half the smallest free slack and return that amount."""
        s = self.search_state
        min_slack = int(s.slack[~s.label_u].min())
        if min_slack == _INFINITY:
            raise InvariantViolation("No labelled row reaches any free column")
        if min_slack % 2:
            raise InvariantViolation(f"Odd minimum slack {min_slack}")

        theta = min_slack // 2
        if theta > 0:
            self.dual.shift(theta, s.label_v, s.label_u)
        return theta

    def search(self) -> int:
        """
        Grow the Hungarian tree until an unmatched column becomes admissible,
        then augment the matching through it.

        Returns:
            The unmatched column that ended the search
        """
        s = self.search_state
        s.phase = SearchPhase.GROWING

        # Each round without an exposed column labels at least one matched
        # column, so N rounds always suffice.
        for _ in range(self.n):
            s.rounds += 1
            theta = self.dual_update()

            free = ~s.label_u
            s.slack[free] -= 2 * theta
            admissible = np.flatnonzero(free & (s.slack == 0))

            exposed = admissible[self.matching.mate_u[admissible] == UNMATCHED]
            if exposed.size:
                u = int(exposed[0])
                s.phase = SearchPhase.FOUND
                self.augment(int(s.nhbor[u]), u)
                return u

            for u in admissible:
                v = int(self.matching.mate_u[u])
                s.label_u[u] = True
                s.label_v[v] = True
                s.parent[v] = s.nhbor[u]
                self.relax(v)

        raise InvariantViolation(
            f"No augmenting path after {self.n} rounds in phase {self.phases_run}")

    def augment(self, v: int, u: int) -> None:
        """Flip the alternating path that ends with edge (v, u)."""
        parent = self.search_state.parent
        while True:
            previous = int(self.matching.mate_v[v])
            self.matching.match(v, u)
            if parent[v] == UNMATCHED:
                break
            v, u = int(parent[v]), previous

    def run_phase(self) -> None:
        s = self.search_state = SearchState(self.n)

        roots = np.flatnonzero(self.matching.mate_v == UNMATCHED)
        for v in roots:
            s.label_v[v] = True
            self.relax(int(v))

        u = self.search()
        logger.debug("phase %d: %d roots, %d rounds, augmented at column %d",
                     self.phases_run, len(roots), s.rounds, u)

    def run(self) -> AssignmentResult:
        """Run all N phases and return the optimal assignment."""
        if self.phases_run:
            raise RuntimeError("Solver already ran; create a new instance per matrix")

        for phase in range(self.n):
            self.run_phase()
            self.phases_run += 1
            if self.check_invariants:
                self._verify_phase()
            if self.on_phase is not None:
                self.on_phase(phase, self)

        result = self._result()
        logger.info("solved %dx%d assignment: cost=%d", self.n, self.n, result.cost)
        return result

    def _verify_phase(self) -> None:
        from .verification import check_dual_and_match

        rows = np.flatnonzero(self.matching.mate_v != UNMATCHED)
        if len(rows) != self.phases_run:
            raise InvariantViolation(
                f"{len(rows)} matched pairs after {self.phases_run} phases")
        try:
            check_dual_and_match(self.cost2, self.dual.alpha, self.dual.beta,
                                 rows, self.matching.mate_v[rows])
        except AssertionError as exc:
            raise InvariantViolation(f"After phase {self.phases_run - 1}: {exc}") from exc

    def _result(self) -> AssignmentResult:
        mate_v = self.matching.mate_v
        primal = sum(int(self.cost2[v, mate_v[v]]) for v in range(self.n))
        dual = self.dual.objective()
        if primal != dual:
            raise InvariantViolation(
                f"Primal cost {primal} differs from dual objective {dual}")

        return AssignmentResult(
            cost=primal // 2,
            row_to_col=mate_v.copy(),
            col_to_row=self.matching.mate_u.copy(),
            alpha=self.dual.alpha.copy(),
            beta=self.dual.beta.copy(),
            phases=self.phases_run,
        )


def solve_assignment(C, check_invariants: bool = False,
                     on_phase: Optional[PhaseCallback] = None) -> AssignmentResult:
    """
    Solve the assignment problem for cost matrix C.

    Args:
        C: N x N matrix of non-negative integer costs
        check_invariants: Verify the dual invariants after every phase
        on_phase: Optional per-phase hook, see AlphaBetaHungarian

    Returns:
        AssignmentResult with the optimal cost, assignment and potentials
    """
    return AlphaBetaHungarian(C, check_invariants=check_invariants,
                              on_phase=on_phase).run()


class HungarianSolver:
    """Alpha-beta Hungarian solver behind the common solver interface."""

    def __init__(self, check_invariants: bool = False):
        self.name = "Hungarian"
        self.check_invariants = check_invariants

    def solve(self, C) -> Tuple[np.ndarray, np.ndarray, int]:
        """
        Solve the assignment problem exactly.

        Args:
            C: Cost matrix

        Returns:
            rows, cols, cost: Row indices, assigned columns, total cost
        """
        result = solve_assignment(C, check_invariants=self.check_invariants)
        rows = np.arange(len(result.row_to_col), dtype=np.int64)
        return rows, result.row_to_col, result.cost

    def __call__(self, C) -> Tuple[np.ndarray, np.ndarray, int]:
        """Allow using solver as callable."""
        return self.solve(C)
