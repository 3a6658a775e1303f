"""Reading cost matrices and writing assignment results in plain text."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO, Union

import numpy as np


def parse_cost_matrix(text: str) -> np.ndarray:
    """
    Parse "N" followed by N*N whitespace-separated integers (row-major).

    Raises:
        ValueError: If the input is empty, malformed, short or too long.
    """
    tokens = text.split()
    if not tokens:
        raise ValueError("Input is empty")

    try:
        n = int(tokens[0])
    except ValueError:
        raise ValueError(f"Expecting matrix size but got {tokens[0]!r}") from None
    if n < 0:
        raise ValueError(f"Matrix size must be non-negative, got {n}")

    values = tokens[1:]
    block = n * n
    if len(values) < block:
        raise ValueError(f"Expecting {block} cost values but got {len(values)}")
    if len(values) > block:
        raise ValueError(f"Unexpected data after {block} cost values: {values[block]!r}")

    costs = []
    for tok in values:
        try:
            costs.append(int(tok))
        except ValueError:
            raise ValueError(f"Expecting integer cost but got {tok!r}") from None

    try:
        return np.array(costs, dtype=np.int64).reshape(n, n)
    except OverflowError:
        raise ValueError("Cost value does not fit in a 64-bit integer") from None


def read_cost_matrix(source: Optional[Union[str, Path]] = None) -> np.ndarray:
    """Read a cost matrix from a file, or from stdin when source is None or "-"."""
    if source is None or str(source) == "-":
        try:
            return parse_cost_matrix(sys.stdin.read())
        except ValueError as exc:
            raise ValueError(f"{exc} in (stdin)") from None

    with open(source, "r", encoding="utf-8") as f:
        try:
            return parse_cost_matrix(f.read())
        except ValueError as exc:
            raise ValueError(f"{exc} in {str(source)!r}") from None


def write_cost(f: TextIO, cost: int) -> None:
    print(cost, file=f)


def write_assignment(f: TextIO, row_to_col: np.ndarray) -> None:
    """Write one "row col" line per row, in row order (0-based)."""
    for v, u in enumerate(row_to_col):
        print(v, int(u), file=f)
