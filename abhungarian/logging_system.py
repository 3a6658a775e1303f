"""
Run Logging Module

Structured record of benchmark runs: one CSV row per solve, a JSON document
per run session and a plain-text detail log, all under one log directory.
"""

import os
import json
import csv
import datetime
import platform
from typing import Dict, Any, List, Optional
from pathlib import Path

import numpy as np
import scipy

CSV_HEADERS = [
    "timestamp", "run_id", "instance", "problem_size", "family",
    "solver_name", "time_ms", "cost", "status", "notes",
]


class RunLogger:
    """
    Logger for benchmark sessions.

    Layout under log_dir:
        performance/<run_id>.csv   one row per solve
        runs/<run_id>.json         session metadata and all results
        detailed/<run_id>.log      timestamped messages
    """

    def __init__(self, log_dir: str = "logs", run_name: Optional[str] = None):
        self.log_dir = Path(log_dir)
        for sub in ("performance", "runs", "detailed"):
            (self.log_dir / sub).mkdir(parents=True, exist_ok=True)

        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        self.run_id = f"{run_name or 'run'}_{timestamp}"

        self.csv_file = self.log_dir / "performance" / f"{self.run_id}.csv"
        self.json_file = self.log_dir / "runs" / f"{self.run_id}.json"
        self.detail_file = self.log_dir / "detailed" / f"{self.run_id}.log"

        self.metadata: Dict[str, Any] = {
            "run_id": self.run_id,
            "start_time": datetime.datetime.now().isoformat(),
            "environment": self._get_environment_info(),
            "results": [],
        }

        with open(self.csv_file, 'w', newline='') as f:
            csv.writer(f).writerow(CSV_HEADERS)

        self._log_detail(f"Run {self.run_id} started")

    def _get_environment_info(self) -> Dict[str, str]:
        """Collect environment information for reproducibility."""
        env_info = {
            "python_version": platform.python_version(),
            "platform": platform.platform(),
            "numpy_version": np.__version__,
            "scipy_version": scipy.__version__,
        }
        for var in ["OMP_NUM_THREADS", "MKL_NUM_THREADS", "OPENBLAS_NUM_THREADS",
                    "NUMEXPR_NUM_THREADS"]:
            env_info[var] = os.environ.get(var, "not_set")
        return env_info

    def _log_detail(self, message: str):
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(self.detail_file, 'a') as f:
            f.write(f"[{timestamp}] {message}\n")

    def log_result(self,
                   instance: str,
                   problem_size: int,
                   family: str,
                   solver_name: str,
                   time_seconds: float,
                   cost: Optional[int],
                   status: str = "success",
                   notes: str = ""):
        """
        Record one solve.

        Args:
            instance: Name of the problem instance
            problem_size: n for an n x n matrix
            family: Generator family of the instance
            solver_name: Name of the solver used
            time_seconds: Median solve time in seconds
            cost: Optimal cost found, None on failure
            status: success / mismatch / error
            notes: Free text
        """
        timestamp = datetime.datetime.now().isoformat()

        with open(self.csv_file, 'a', newline='') as f:
            csv.writer(f).writerow([
                timestamp, self.run_id, instance, problem_size, family,
                solver_name, time_seconds * 1000, cost, status, notes,
            ])

        self._log_detail(
            f"{solver_name} on {instance} ({problem_size}x{problem_size}): "
            f"{time_seconds * 1000:.2f}ms, cost={cost}, status={status}"
        )

        self.metadata["results"].append({
            "timestamp": timestamp,
            "instance": instance,
            "problem_size": problem_size,
            "family": family,
            "solver_name": solver_name,
            "time_ms": time_seconds * 1000,
            "cost": cost,
            "status": status,
            "notes": notes,
        })

    def save(self) -> Path:
        """Write the session metadata and all results to JSON."""
        self.metadata["end_time"] = datetime.datetime.now().isoformat()
        with open(self.json_file, 'w') as f:
            json.dump(self.metadata, f, indent=2, default=str)
        self._log_detail(f"Results saved to {self.json_file}")
        return self.json_file

    def generate_summary(self) -> str:
        """Per-solver median times over successful results."""
        if not self.metadata["results"]:
            return "No results to summarize."

        by_solver: Dict[str, List[float]] = {}
        counts: Dict[str, int] = {}
        for result in self.metadata["results"]:
            solver = result["solver_name"]
            counts[solver] = counts.get(solver, 0) + 1
            if result["status"] == "success":
                by_solver.setdefault(solver, []).append(result["time_ms"])

        lines = [f"Run Summary: {self.run_id}", "=" * 60]
        for solver, count in counts.items():
            times = by_solver.get(solver)
            if times:
                lines.append(f"{solver:12}: {count:3} runs, "
                             f"med={float(np.median(times)):8.2f}ms")
            else:
                lines.append(f"{solver:12}: {count:3} runs, all failed")
        return "\n".join(lines)


def load_run(run_id: str, log_dir: str = "logs") -> Optional[Dict[str, Any]]:
    """Load a saved run from its JSON file."""
    json_file = Path(log_dir) / "runs" / f"{run_id}.json"
    if not json_file.exists():
        return None
    with open(json_file, 'r') as f:
        return json.load(f)


def list_runs(log_dir: str = "logs") -> List[str]:
    """List saved run IDs, newest first."""
    log_path = Path(log_dir) / "runs"
    if not log_path.exists():
        return []
    json_files = sorted(log_path.glob("*.json"), key=lambda f: f.stat().st_mtime, reverse=True)
    return [f.stem for f in json_files]
