"""
Timing Module

Repeated, timed solves of one instance. Reports median-based statistics and
whether every repeat produced the same optimal cost.
"""

import time
import statistics
from typing import Any, Callable, Dict


def time_solver(solver: Callable, C, num_warmups: int = 1,
                num_repeats: int = 5) -> Dict[str, Any]:
    """
    Time solver(C) over several runs.

    Args:
        solver: Callable returning (rows, cols, cost)
        C: Cost matrix
        num_warmups: Untimed runs before measuring
        num_repeats: Number of timed runs

    Returns:
        Dictionary with timing statistics in seconds, the cost of the first
        timed run, and 'consistent' telling whether all runs agreed on it.
        On a solver error: {'success': False, 'error': message}
    """
    costs = []
    times = []
    try:
        for _ in range(num_warmups):
            solver(C)

        for _ in range(num_repeats):
            start = time.perf_counter()
            _, _, cost = solver(C)
            times.append(time.perf_counter() - start)
            costs.append(cost)
    except (ValueError, AssertionError) as e:
        return {'success': False, 'error': str(e)}

    if not times:
        return {'success': False, 'error': 'No timed runs requested'}

    return {
        'success': True,
        'cost': costs[0],
        'consistent': len(set(costs)) == 1,
        'median': statistics.median(times),
        'mean': statistics.mean(times),
        'std': statistics.stdev(times) if len(times) > 1 else 0.0,
        'min': min(times),
        'max': max(times),
        'num_samples': len(times),
    }
