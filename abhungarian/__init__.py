"""
Alpha-Beta Hungarian Assignment Module

Exact solver for the square assignment problem (minimum-cost perfect
matching on an N x N integer cost matrix) based on the dual alpha-beta
Hungarian method, together with:
- SciPy linear_sum_assignment and lap.lapjv reference wrappers
- Exact optimality certificates (dual feasibility, tightness, strong duality)
- Integer cost matrix generators
- Timing and run logging for benchmarks
- Plain-text matrix input and result output
"""

from .hungarian import (
    AlphaBetaHungarian,
    AssignmentResult,
    DualState,
    HungarianSolver,
    InvariantViolation,
    MatchingState,
    SearchPhase,
    SearchState,
    check_cost_matrix,
    solve_assignment,
)
from .scipy_solver import SciPySolver
from .lap_solver import LAPSolver
from .verification import (
    check_assignment,
    check_dual_and_match,
    check_dual_feasible,
    check_strong_duality,
    verify_result,
    verify_solver_correctness,
)
from .timing import time_solver
from .generators import (
    SYNTHETIC_FAMILIES,
    textbook_costs,
    generate_uniform_costs,
    generate_near_diagonal_costs,
    generate_sparse_costs,
    generate_metric_costs,
    generate_worst_case_costs,
    generate_identity_like_costs,
    generate_constant_costs,
)
from .logging_system import RunLogger, list_runs, load_run
from .matrix_io import parse_cost_matrix, read_cost_matrix, write_assignment, write_cost

__all__ = [
    'AlphaBetaHungarian',
    'AssignmentResult',
    'DualState',
    'HungarianSolver',
    'InvariantViolation',
    'MatchingState',
    'SearchPhase',
    'SearchState',
    'check_cost_matrix',
    'solve_assignment',
    'SciPySolver',
    'LAPSolver',
    'check_assignment',
    'check_dual_and_match',
    'check_dual_feasible',
    'check_strong_duality',
    'verify_result',
    'verify_solver_correctness',
    'time_solver',
    'SYNTHETIC_FAMILIES',
    'textbook_costs',
    'generate_uniform_costs',
    'generate_near_diagonal_costs',
    'generate_sparse_costs',
    'generate_metric_costs',
    'generate_worst_case_costs',
    'generate_identity_like_costs',
    'generate_constant_costs',
    'RunLogger',
    'list_runs',
    'load_run',
    'parse_cost_matrix',
    'read_cost_matrix',
    'write_assignment',
    'write_cost',
]
