import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from examples.profile_solver import log_summary, random_pieces, run_solver
from tetris_optimizer.perf import PerformanceTracker


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


def test_log_summary_limits_rows_and_output(caplog):
    clock = FakeClock()
    tracker = PerformanceTracker(clock=clock)
    with tracker.section("size 5"):
        clock.advance(0.5)
    with tracker.section("size 4"):
        clock.advance(0.1)

    with caplog.at_level(logging.INFO, logger="examples.profile_solver"):
        summary = log_summary(tracker, limit=1, index=7)

    assert len(summary) == 1
    assert summary[0]["name"] == "size 5"
    message = "".join(caplog.messages)
    assert "Simulation 7" in message
    assert "size 5" in message
    assert "size 4" not in message


def test_run_solver_records_sections():
    import random

    pieces = random_pieces(3, random.Random(0))
    assert [p.label for p in pieces] == ["A", "B", "C"]

    tracker = PerformanceTracker()
    assert run_solver(3, seed=0, tracker=tracker, timeout=60.0)
    assert any(name.startswith("size ") for name in tracker.snapshot())
