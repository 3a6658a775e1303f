import io
import logging

import pytest

from abhungarian import cli
from abhungarian.cli import EXIT_INVALID_INPUT, build_parser, configure_logging, main
from abhungarian.logging_system import list_runs, load_run

TEXTBOOK_TEXT = """5
7 2 1 9 4
9 6 9 5 5
3 8 3 1 8
7 9 4 2 2
8 4 7 4 8
"""


@pytest.fixture
def instance(tmp_path):
    path = tmp_path / "textbook.txt"
    path.write_text(TEXTBOOK_TEXT)
    return str(path)


def test_solve_cost_mode(instance, capsys):
    assert main(["solve", instance]) == 0
    assert capsys.readouterr().out == "15\n"


def test_solve_match_mode(instance, capsys, textbook):
    assert main(["solve", instance, "--mode", "match", "--check-invariants"]) == 0
    lines = capsys.readouterr().out.splitlines()
    pairs = [tuple(int(x) for x in line.split()) for line in lines]
    assert [v for v, _ in pairs] == [0, 1, 2, 3, 4]
    assert sorted(u for _, u in pairs) == [0, 1, 2, 3, 4]
    assert sum(int(textbook[v, u]) for v, u in pairs) == 15


def test_solve_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("2\n3 1\n1 3\n"))
    assert main(["solve"]) == 0
    assert capsys.readouterr().out == "2\n"


def test_solve_empty_instance(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("0\n"))
    assert main(["solve", "-", "--mode", "match"]) == 0
    assert capsys.readouterr().out == ""


def test_solve_with_verify(instance, capsys):
    assert main(["solve", instance, "--verify"]) == 0
    assert capsys.readouterr().out == "15\n"


@pytest.mark.parametrize("text", ["2 1 2 3", "2\n1 -1\n0 0\n", "abc"])
def test_solve_invalid_input(tmp_path, capsys, text):
    path = tmp_path / "bad.txt"
    path.write_text(text)
    assert main(["solve", str(path)]) == EXIT_INVALID_INPUT
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("error:")


def test_solve_missing_file(tmp_path, capsys):
    assert main(["solve", str(tmp_path / "missing.txt")]) == EXIT_INVALID_INPUT
    assert "error:" in capsys.readouterr().err


def test_parser_rejects_unknown_mode():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["solve", "--mode", "max"])


@pytest.mark.parametrize("argv, expected", [
    (["solve"], 0),
    (["solve", "-v"], 1),
    (["solve", "in.txt", "-vv"], 2),
    (["-v", "solve"], 1),
    (["bench", "--verbose"], 1),
])
def test_verbose_flag_after_or_before_subcommand(argv, expected):
    assert build_parser().parse_args(argv).verbose == expected


@pytest.mark.parametrize("verbosity, level", [
    (0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (3, logging.DEBUG),
])
def test_configure_logging_levels(monkeypatch, verbosity, level):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    configure_logging(verbosity)
    assert calls[0]["level"] == level


def test_solve_passes_verbosity_to_logging(instance, monkeypatch, capsys):
    seen = []
    monkeypatch.setattr(cli, "configure_logging", seen.append)
    assert main(["solve", instance, "-vv"]) == 0
    assert seen == [2]
    assert capsys.readouterr().out == "15\n"


def test_verify_skipped_for_costs_beyond_float_precision(tmp_path, monkeypatch, capsys, caplog):
    big = 2 ** 54
    path = tmp_path / "big.txt"
    path.write_text(f"2\n{big} 1\n1 {big}\n")

    def fail(C):
        raise AssertionError("reference solvers must not run")

    monkeypatch.setattr(cli, "verify_solver_correctness", fail)
    with caplog.at_level(logging.WARNING, logger="abhungarian.cli"):
        assert main(["solve", str(path), "--verify"]) == 0
    assert capsys.readouterr().out == "2\n"
    assert "2**53" in caplog.text


def test_bench_records_runs(tmp_path, capsys):
    log_dir = tmp_path / "logs"
    code = main(["bench", "--sizes", "3", "6", "--families", "uniform", "constant",
                 "--repeats", "2", "--warmups", "0", "--log-dir", str(log_dir)])
    assert code == 0

    out = capsys.readouterr().out
    assert "uniform_6x6" in out
    assert "constant_3x3" in out
    assert "MISMATCH" not in out

    runs = list_runs(str(log_dir))
    assert len(runs) == 1
    data = load_run(runs[0], str(log_dir))
    assert len(data["results"]) == 2 * 2 * 3
    assert {r["status"] for r in data["results"]} == {"success"}
