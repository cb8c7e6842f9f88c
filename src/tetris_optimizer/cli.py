"""Command-line entry point.

Run with::

    tetris-optimizer pieces.txt [--time] [--timeout SECONDS]

The packed board is written to stdout.  A rejected input prints ``ERROR``,
an expired deadline prints ``TIMEOUT - try with fewer tetrominoes`` and a
SIGINT/SIGTERM during the search prints ``INTERRUPTED``.  Diagnostics,
progress and the timing breakdown go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from typing import Dict, List, Optional, Sequence

from .cancellation import DEFAULT_TIMEOUT, Deadline
from .parser import ParseError, parse_file
from .perf import PerformanceTracker, format_breakdown
from .progress import ProgressDisplay
from .solver import solve


LOGGER = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "TIMEOUT - try with fewer tetrominoes"
_HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _positive_float(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if seconds <= 0:
        raise argparse.ArgumentTypeError("timeout must be positive")
    return seconds


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tetris-optimizer",
        description="Assemble tetrominoes into the smallest possible square.",
    )
    parser.add_argument("input_file", help="File with the tetrominoes to pack.")
    parser.add_argument(
        "--time",
        action="store_true",
        help="Print a timing breakdown to stderr.",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=DEFAULT_TIMEOUT,
        help=f"Give up after this many seconds (default: {DEFAULT_TIMEOUT:g}).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def _install_signal_handlers(deadline: Deadline) -> Dict[int, object]:
    def _handler(signum, _frame) -> None:
        deadline.cancel()

    previous = {}
    for signum in _HANDLED_SIGNALS:
        previous[signum] = signal.signal(signum, _handler)
    return previous


def _restore_signal_handlers(previous: Dict[int, object]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def run(args: argparse.Namespace) -> int:
    """Parse, solve and print; return the process exit status."""

    tracker = PerformanceTracker()
    deadline = Deadline(args.timeout)
    progress = ProgressDisplay(deadline)

    def finish() -> int:
        if args.time:
            sys.stderr.write(format_breakdown(tracker))
        return 0

    previous = _install_signal_handlers(deadline)
    try:
        try:
            with tracker.section("Parse"):
                pieces = parse_file(args.input_file)
        except ParseError as exc:
            LOGGER.info("Input rejected: %s", exc)
            print("ERROR")
            print(exc, file=sys.stderr)
            return finish()

        with progress:
            with tracker.section("Total solve"):
                result = solve(deadline, pieces)
    finally:
        _restore_signal_handlers(previous)

    if deadline.cancelled:
        LOGGER.info("Search interrupted by signal")
        print("INTERRUPTED")
        return finish()

    if result.timed_out or result.board is None:
        LOGGER.info("Search gave up after %.1fs", deadline.elapsed())
        print(TIMEOUT_MESSAGE)
        return finish()

    sys.stdout.write(result.board.render())
    sys.stdout.flush()
    progress.show_completion(tracker.snapshot()["Total solve"].total, tracker.elapsed())
    return finish()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(message)s",
        stream=sys.stderr,
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
