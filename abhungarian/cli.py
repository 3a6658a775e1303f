"""Command line front end: solve one instance, or benchmark against the reference solvers."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .generators import SYNTHETIC_FAMILIES
from .hungarian import HungarianSolver, InvariantViolation, solve_assignment
from .lap_solver import LAPSolver
from .logging_system import RunLogger
from .matrix_io import read_cost_matrix, write_assignment, write_cost
from .scipy_solver import SciPySolver
from .timing import time_solver
from .verification import verify_solver_correctness

logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2
EXIT_INVARIANT = 3

FLOAT_EXACT_LIMIT = 2 ** 53


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="abhungarian",
        description="Minimum-cost square assignment with the alpha-beta Hungarian method.")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress (-v info, -vv debug)")
    sub = parser.add_subparsers(dest="command", required=True)

    # Also accepted after the subcommand; SUPPRESS keeps a top-level -v intact.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="count", default=argparse.SUPPRESS,
                        help="Log progress (-v info, -vv debug)")

    solve = sub.add_parser("solve", parents=[common],
                           help="Solve one instance read from a file or stdin")
    solve.add_argument("input", nargs="?", default=None,
                       help="Instance file: N then N*N integers (default: stdin)")
    solve.add_argument("--mode", choices=["cost", "match"], default="cost",
                       help="Print the optimal cost or the row -> column assignment")
    solve.add_argument("--check-invariants", action="store_true",
                       help="Verify dual feasibility and tightness after every phase")
    solve.add_argument("--verify", action="store_true",
                       help="Cross-check the optimal cost against SciPy and lap")

    bench = sub.add_parser("bench", parents=[common],
                           help="Time the solvers on generated instances")
    bench.add_argument("--sizes", type=int, nargs="+", default=[50, 100, 200])
    bench.add_argument("--families", type=str, nargs="+", default=["uniform"],
                       choices=sorted(SYNTHETIC_FAMILIES))
    bench.add_argument("--repeats", type=int, default=3)
    bench.add_argument("--warmups", type=int, default=1)
    bench.add_argument("--seed", type=int, default=42)
    bench.add_argument("--log-dir", type=str, default=None,
                       help="Record every run as CSV/JSON under this directory")
    return parser


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run_solve(args: argparse.Namespace) -> int:
    try:
        C = read_cost_matrix(args.input)
        result = solve_assignment(C, check_invariants=args.check_invariants)
    except (ValueError, TypeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except InvariantViolation as exc:
        print(f"internal error: {exc}", file=sys.stderr)
        return EXIT_INVARIANT

    if args.verify:
        if C.size and int(C.max()) > FLOAT_EXACT_LIMIT:
            # SciPy and lap solve in float64 and may round to another assignment.
            logger.warning("skipping --verify: costs above 2**53 are not exact in float64")
        elif not verify_solver_correctness(C):
            print("error: reference solvers disagree with the Hungarian cost", file=sys.stderr)
            return EXIT_INVARIANT

    if args.mode == "cost":
        write_cost(sys.stdout, result.cost)
    else:
        write_assignment(sys.stdout, result.row_to_col)
    return 0


def run_bench(args: argparse.Namespace) -> int:
    solvers = [HungarianSolver(), SciPySolver(), LAPSolver()]
    run_logger = RunLogger(args.log_dir, run_name="bench") if args.log_dir else None
    all_agree = True
    benchmarked = 0

    print(f"{'Instance':<24} {'Size':<6} " + " ".join(f"{s.name + '(ms)':<14}" for s in solvers)
          + f" {'Cost':<12} {'Status':<10}")
    print("-" * (46 + 15 * len(solvers) + 10))

    for family in args.families:
        for n in args.sizes:
            C = SYNTHETIC_FAMILIES[family](n, args.seed)
            instance = f"{family}_{n}x{n}"
            timings = {s.name: time_solver(s, C, num_warmups=args.warmups,
                                           num_repeats=args.repeats)
                       for s in solvers}

            costs = {t['cost'] for t in timings.values() if t['success']}
            ok = (all(t['success'] and t['consistent'] for t in timings.values())
                  and len(costs) == 1)
            status = "ok" if ok else "MISMATCH"
            all_agree = all_agree and ok

            cells = []
            for s in solvers:
                t = timings[s.name]
                cells.append(f"{t['median'] * 1000:<14.2f}" if t['success'] else f"{'FAILED':<14}")
                if run_logger is not None:
                    run_logger.log_result(
                        instance=instance, problem_size=n, family=family,
                        solver_name=s.name,
                        time_seconds=t.get('median', 0.0),
                        cost=t.get('cost'),
                        status=("success" if ok else "mismatch") if t['success'] else "error",
                        notes=t.get('error', ""),
                    )
            cost_text = str(min(costs)) if costs else "-"
            print(f"{instance:<24} {n:<6} " + " ".join(cells) + f" {cost_text:<12} {status:<10}")
            benchmarked += 1

    if run_logger is not None:
        path = run_logger.save()
        print(f"\n{run_logger.generate_summary()}")
        print(f"Results saved to {path}")

    logger.info("benchmarked %d instances", benchmarked)
    return 0 if all_agree else 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "solve":
        return run_solve(args)
    return run_bench(args)


if __name__ == "__main__":
    sys.exit(main())
