import csv

import numpy as np
import pytest

from abhungarian.generators import (
    SYNTHETIC_FAMILIES,
    generate_constant_costs,
    generate_identity_like_costs,
    generate_sparse_costs,
    generate_uniform_costs,
    generate_worst_case_costs,
)
from abhungarian.hungarian import HungarianSolver, solve_assignment
from abhungarian.logging_system import RunLogger, list_runs, load_run
from abhungarian.timing import time_solver


@pytest.mark.parametrize("family", sorted(SYNTHETIC_FAMILIES))
def test_families_produce_valid_matrices(family):
    C = SYNTHETIC_FAMILIES[family](8, 1)
    assert C.shape == (8, 8)
    assert C.dtype == np.int64
    assert C.min() >= 0


def test_uniform_costs_are_reproducible():
    assert np.array_equal(generate_uniform_costs(6, seed=5), generate_uniform_costs(6, seed=5))
    assert generate_uniform_costs(50, high=9).max() <= 9


def test_identity_like_optimum():
    result = solve_assignment(generate_identity_like_costs(6))
    assert result.cost == 0
    assert result.row_to_col.tolist() == list(range(6))


def test_worst_case_optimum_is_anti_diagonal():
    result = solve_assignment(generate_worst_case_costs(6))
    assert result.cost == 6
    assert result.row_to_col.tolist() == [5, 4, 3, 2, 1, 0]


def test_sparse_keeps_diagonal():
    C = generate_sparse_costs(10, sparsity_ratio=0.0)
    assert np.all(np.diag(C) < 10_000)
    assert solve_assignment(C).cost == int(np.trace(C))


def test_time_solver_reports_consistent_cost(textbook):
    stats = time_solver(HungarianSolver(), textbook, num_warmups=0, num_repeats=3)
    assert stats['success']
    assert stats['cost'] == 15
    assert stats['consistent']
    assert stats['num_samples'] == 3
    assert stats['min'] <= stats['median'] <= stats['max']


def test_time_solver_reports_errors():
    stats = time_solver(HungarianSolver(), [[1, 2, 3]], num_warmups=0, num_repeats=2)
    assert not stats['success']
    assert "square" in stats['error'] or "2-D" in stats['error']


def test_time_solver_needs_repeats(textbook):
    assert not time_solver(HungarianSolver(), textbook, num_repeats=0)['success']


def test_run_logger_writes_all_formats(tmp_path):
    logger = RunLogger(str(tmp_path), run_name="unit")
    logger.log_result("const_4x4", 4, "constant", "Hungarian", 0.002,
                      int(solve_assignment(generate_constant_costs(4, 3)).cost))
    logger.log_result("const_4x4", 4, "constant", "SciPy", 0.0, None, status="error",
                      notes="boom")
    path = logger.save()

    assert path.exists()
    assert list_runs(str(tmp_path)) == [logger.run_id]
    data = load_run(logger.run_id, str(tmp_path))
    assert [r["cost"] for r in data["results"]] == [12, None]
    assert "numpy_version" in data["environment"]

    with open(logger.csv_file, newline='') as f:
        rows = list(csv.DictReader(f))
    assert [r["solver_name"] for r in rows] == ["Hungarian", "SciPy"]
    assert rows[1]["notes"] == "boom"

    summary = logger.generate_summary()
    assert "Hungarian" in summary
    assert "all failed" in summary
    assert logger.detail_file.read_text().count("\n") >= 3


def test_back_to_back_runs_get_separate_files(tmp_path):
    first = RunLogger(str(tmp_path), run_name="bench")
    first.log_result("u_3x3", 3, "uniform", "Hungarian", 0.001, 7)
    second = RunLogger(str(tmp_path), run_name="bench")

    assert first.run_id != second.run_id
    assert first.csv_file != second.csv_file
    with open(first.csv_file, newline='') as f:
        assert len(list(csv.DictReader(f))) == 1


def test_load_missing_run(tmp_path):
    assert load_run("nope", str(tmp_path)) is None
    assert list_runs(str(tmp_path / "absent")) == []
