"""
Problem Generators Module

Integer cost matrix generators for testing and benchmarking the assignment
solvers. Includes uniform random, structured and degenerate problem types.
"""

import numpy as np
from typing import Callable, Dict


def textbook_costs() -> np.ndarray:
    """5x5 example from Papadimitriou & Steiglitz, section 11.2 (optimal cost 15)."""
    return np.array([
        [7, 2, 1, 9, 4],
        [9, 6, 9, 5, 5],
        [3, 8, 3, 1, 8],
        [7, 9, 4, 2, 2],
        [8, 4, 7, 4, 8],
    ], dtype=np.int64)


def generate_uniform_costs(n: int, high: int = 100, seed: int = 42) -> np.ndarray:
    """
    Generate uniform random integer costs in [0, high].

    Args:
        n: Matrix size
        high: Largest cost
        seed: Random seed for reproducibility

    Returns:
        n x n cost matrix
    """
    rng = np.random.default_rng(seed)
    return rng.integers(0, high + 1, size=(n, n), dtype=np.int64)


def generate_near_diagonal_costs(n: int, noise: int = 5, seed: int = 42) -> np.ndarray:
    """
    Generate near-diagonal costs for tracking/association scenarios.

    Cost grows with the distance from the diagonal, plus integer noise.

    Args:
        n: Matrix size
        noise: Largest noise added to an entry
        seed: Random seed for reproducibility
    """
    rng = np.random.default_rng(seed)
    idx = np.arange(n)
    C = 10 * np.abs(idx[:, None] - idx[None, :])
    C = C + rng.integers(0, noise + 1, size=(n, n))
    return C.astype(np.int64)


def generate_sparse_costs(n: int, sparsity_ratio: float = 0.3,
                          forbidden_cost: int = 10_000, seed: int = 42) -> np.ndarray:
    """
    Generate a sparse problem by giving most edges a prohibitive cost.

    Args:
        n: Matrix size
        sparsity_ratio: Fraction of edges to keep
        forbidden_cost: Cost of the removed edges
        seed: Random seed for reproducibility

    Returns:
        n x n cost matrix whose diagonal is always allowed, so a cheap
        perfect matching exists
    """
    rng = np.random.default_rng(seed)
    C = rng.integers(1, 101, size=(n, n), dtype=np.int64)
    keep_mask = rng.random((n, n)) < sparsity_ratio
    np.fill_diagonal(keep_mask, True)
    return np.where(keep_mask, C, forbidden_cost).astype(np.int64)


def generate_metric_costs(n: int, seed: int = 42) -> np.ndarray:
    """Rounded Euclidean distances between two random point sets in a 100x100 square."""
    rng = np.random.default_rng(seed)
    sources = rng.uniform(0, 100, (n, 2))
    targets = rng.uniform(0, 100, (n, 2))
    dist = np.linalg.norm(sources[:, None, :] - targets[None, :, :], axis=2)
    return np.rint(dist).astype(np.int64)


def generate_worst_case_costs(n: int) -> np.ndarray:
    """Anti-diagonal structure: the cheapest entries lie on the anti-diagonal."""
    i = np.arange(n)[:, None]
    j = np.arange(n)[None, :]
    return (np.abs(i - (n - 1 - j)) + 1).astype(np.int64)


def generate_identity_like_costs(n: int, diagonal_cost: int = 0,
                                 off_diagonal_cost: int = 1) -> np.ndarray:
    """Identity-like matrix; the identity assignment is the unique optimum."""
    C = np.full((n, n), off_diagonal_cost, dtype=np.int64)
    np.fill_diagonal(C, diagonal_cost)
    return C


def generate_constant_costs(n: int, value: int = 1) -> np.ndarray:
    """Every entry equal; every bijection is optimal with cost n * value."""
    return np.full((n, n), value, dtype=np.int64)


SYNTHETIC_FAMILIES: Dict[str, Callable[[int, int], np.ndarray]] = {
    "uniform": lambda n, seed: generate_uniform_costs(n, seed=seed),
    "near_diagonal": lambda n, seed: generate_near_diagonal_costs(n, seed=seed),
    "sparse": lambda n, seed: generate_sparse_costs(n, seed=seed),
    "metric": lambda n, seed: generate_metric_costs(n, seed=seed),
    "worst_case": lambda n, seed: generate_worst_case_costs(n),
    "constant": lambda n, seed: generate_constant_costs(n),
}
