"""Profile the packing search using :mod:`tetris_optimizer.perf`.

Run with::

    PYTHONPATH=src python examples/profile_solver.py --pieces 6

Each simulation packs a random set of pieces and records one section per
attempted board size.  Pass ``--help`` for options.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import List

from tetris_optimizer.cancellation import Deadline
from tetris_optimizer.perf import PerformanceTracker
from tetris_optimizer.solver import solve
from tetris_optimizer.tetromino import CANONICAL_SHAPES, Tetromino


LOGGER = logging.getLogger(__name__)

ALL_SHAPES = [shape for shapes in CANONICAL_SHAPES.values() for shape in shapes]


def random_pieces(count: int, rng: random.Random) -> List[Tetromino]:
    return [
        Tetromino(chr(ord("A") + i), rng.choice(ALL_SHAPES)) for i in range(count)
    ]


def run_solver(pieces: int, seed: int, tracker: PerformanceTracker, timeout: float) -> bool:
    rng = random.Random(seed)
    result = solve(Deadline(timeout), random_pieces(pieces, rng), profiler=tracker)
    return result.solved


def _format_summary(summary: list[dict[str, float | int]], limit: int = 10) -> str:
    if not summary:
        return "No timings recorded."
    parts: list[str] = []
    for row in summary[:limit]:
        total_ms = row["total"] * 1000.0
        avg_ms = row["average"] * 1000.0
        parts.append(
            f"{row['name']}: total={total_ms:.3f}ms, count={int(row['count'])}, avg={avg_ms:.3f}ms"
        )
    return "; ".join(parts)


def print_summary(tracker: PerformanceTracker, limit: int = 10) -> None:
    summary = tracker.summary(sort_by="total")
    if not summary:
        print("No timings recorded.")
        return
    width = max(len(row["name"]) for row in summary[:limit])
    header = f"{'Section':<{width}}  Total (ms)  Count  Avg (ms)  Max (ms)"
    print(header)
    print("-" * len(header))
    for row in summary[:limit]:
        print(
            f"{row['name']:<{width}}  {row['total'] * 1000.0:10.3f}"
            f"  {int(row['count']):5d}  {row['average'] * 1000.0:8.3f}"
            f"  {row['max'] * 1000.0:8.3f}"
        )


def log_summary(tracker: PerformanceTracker, *, limit: int, index: int) -> list[dict[str, float | int]]:
    summary = tracker.summary(sort_by="total")
    limit = max(0, limit)
    limited_summary = summary[:limit] if limit else []
    LOGGER.info("Simulation %d performance: %s", index, _format_summary(limited_summary, limit=limit))
    return limited_summary


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--pieces", type=int, default=6, help="Pieces per simulation.")
    parser.add_argument("--simulations", type=int, default=5, help="How many simulations to run.")
    parser.add_argument("--seed", type=int, default=42, help="Seed of the first simulation.")
    parser.add_argument("--timeout", type=float, default=60.0, help="Per-simulation timeout in seconds.")
    parser.add_argument(
        "--summary-limit",
        type=int,
        default=10,
        help="Maximum number of sections to include in summaries.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    tracker = PerformanceTracker()
    for sim_idx in range(1, args.simulations + 1):
        solved = run_solver(args.pieces, args.seed + sim_idx - 1, tracker, args.timeout)
        if not solved:
            LOGGER.warning("Simulation %d timed out", sim_idx)
        log_summary(tracker, limit=args.summary_limit, index=sim_idx)

    print_summary(tracker, limit=args.summary_limit)


if __name__ == "__main__":
    main()
