import pytest

from tetris_optimizer.perf import PerformanceTracker, format_breakdown


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


def test_tracker_records_basic_stats():
    clock = FakeClock()
    tracker = PerformanceTracker(clock=clock)
    with tracker.section("size 4"):
        clock.advance(0.5)
    summary = tracker.summary()
    assert len(summary) == 1
    row = summary[0]
    assert row["name"] == "size 4"
    assert row["count"] == 1
    assert row["total"] == pytest.approx(0.5)
    assert row["self"] == pytest.approx(0.5)
    assert row["min"] == pytest.approx(0.5)
    assert row["max"] == pytest.approx(0.5)


def test_nested_sections_compute_exclusive_time():
    clock = FakeClock()
    tracker = PerformanceTracker(clock=clock)
    with tracker.section("Total solve"):
        clock.advance(0.5)
        with tracker.section("size 5"):
            clock.advance(0.2)
        clock.advance(0.3)
    stats = {row["name"]: row for row in tracker.summary()}
    assert stats["Total solve"]["total"] == pytest.approx(1.0)
    assert stats["Total solve"]["self"] == pytest.approx(0.8)
    assert stats["size 5"]["self"] == pytest.approx(0.2)


def test_summary_sorting_and_errors():
    clock = FakeClock()
    tracker = PerformanceTracker(clock=clock)
    with tracker.section("a"):
        clock.advance(0.1)
    with tracker.section("b"):
        clock.advance(0.3)
    assert [row["name"] for row in tracker.summary(sort_by="total")] == ["b", "a"]
    assert [row["name"] for row in tracker.summary(sort_by="max", descending=False)] == ["a", "b"]
    with pytest.raises(ValueError):
        tracker.summary(sort_by="unknown")


def test_disabled_tracker_records_nothing():
    clock = FakeClock()
    tracker = PerformanceTracker(clock=clock, enabled=False)
    with tracker.section("ignored"):
        clock.advance(0.4)
    assert tracker.summary() == []
    assert tracker.elapsed() == pytest.approx(0.4)


def test_out_of_order_stop_raises():
    tracker = PerformanceTracker(clock=FakeClock())
    outer = tracker._start("outer")
    tracker._start("inner")
    with pytest.raises(RuntimeError):
        tracker._stop(outer)


def test_format_breakdown_lists_recorded_sections_in_order():
    clock = FakeClock()
    tracker = PerformanceTracker(clock=clock)
    with tracker.section("Total solve"):
        clock.advance(0.5)
    with tracker.section("Parse"):
        clock.advance(0.25)
    clock.advance(0.25)
    assert format_breakdown(tracker) == (
        "=== Timing Breakdown ===\n"
        "Parse:            250ms\n"
        "Total solve:      500ms\n"
        "Total:           1000ms\n"
    )
