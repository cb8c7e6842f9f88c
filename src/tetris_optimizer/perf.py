"""Timing helpers behind the ``--time`` breakdown and the profiling script."""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Sequence


@dataclass
class PerfStat:
    """Aggregated timing information for a single label."""

    count: int = 0
    total: float = 0.0
    self_time: float = 0.0
    min_time: Optional[float] = None
    max_time: float = 0.0

    def add(self, total: float, exclusive: float) -> None:
        self.count += 1
        self.total += total
        self.self_time += exclusive
        if self.min_time is None or total < self.min_time:
            self.min_time = total
        if total > self.max_time:
            self.max_time = total

    @property
    def average(self) -> float:
        return self.total / self.count if self.count else 0.0


@dataclass
class _ActiveTimer:
    name: str
    start: float
    children: float = 0.0


class _Section:
    """Context manager returned by :meth:`PerformanceTracker.section`."""

    __slots__ = ("_tracker", "_token", "_name")

    def __init__(self, tracker: "PerformanceTracker", name: str) -> None:
        self._tracker = tracker
        self._token: Optional[_ActiveTimer] = None
        self._name = name

    def __enter__(self) -> "_Section":
        self._token = self._tracker._start(self._name)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._tracker._stop(self._token)
        self._token = None
        return False


class PerformanceTracker:
    """Collect wall-clock statistics for labelled, possibly nested sections.

    Time spent in a nested section is counted in the parent's inclusive
    ``total`` but not in its ``self_time``.  The clock is injectable so tests
    can drive it by hand.
    """

    def __init__(
        self,
        *,
        clock: Optional[Callable[[], float]] = None,
        enabled: bool = True,
    ) -> None:
        self._clock = clock or time.perf_counter
        self.enabled = enabled
        self._origin = self._clock()
        self._stats: Dict[str, PerfStat] = {}
        self._stack: List[_ActiveTimer] = []

    def elapsed(self) -> float:
        """Seconds since the tracker was created."""

        return self._clock() - self._origin

    def _start(self, name: str) -> Optional[_ActiveTimer]:
        if not self.enabled:
            return None
        token = _ActiveTimer(name=name, start=self._clock())
        self._stack.append(token)
        return token

    def _stop(self, token: Optional[_ActiveTimer]) -> float:
        if not self.enabled or token is None:
            return 0.0
        end = self._clock()
        if not self._stack or self._stack[-1] is not token:
            raise RuntimeError("Timer stack out of sync")
        self._stack.pop()
        elapsed = end - token.start
        exclusive = max(0.0, elapsed - token.children)
        self._stats.setdefault(token.name, PerfStat()).add(elapsed, exclusive)
        if self._stack:
            self._stack[-1].children += elapsed
        return elapsed

    def section(self, name: str) -> _Section:
        """Return a context manager timing ``name``."""

        return _Section(self, name)

    def snapshot(self) -> Dict[str, PerfStat]:
        return {name: replace(stat) for name, stat in self._stats.items()}

    def summary(
        self, *, sort_by: str = "total", descending: bool = True
    ) -> List[Dict[str, float | int]]:
        """Return one row per section, sorted by ``sort_by``."""

        key_map = {
            "total": lambda item: item[1].total,
            "self": lambda item: item[1].self_time,
            "count": lambda item: item[1].count,
            "average": lambda item: item[1].average,
            "max": lambda item: item[1].max_time,
        }
        if sort_by not in key_map:
            raise ValueError(f"Unknown sort key: {sort_by}")
        items = sorted(self._stats.items(), key=key_map[sort_by], reverse=descending)
        return [
            {
                "name": name,
                "count": stat.count,
                "total": stat.total,
                "self": stat.self_time,
                "average": stat.average,
                "min": stat.min_time if stat.min_time is not None else 0.0,
                "max": stat.max_time,
            }
            for name, stat in items
        ]


# Sections reported by ``--time``, in display order.
BREAKDOWN_ORDER = ("Parse", "Total solve")


def format_breakdown(
    tracker: PerformanceTracker, order: Sequence[str] = BREAKDOWN_ORDER
) -> str:
    """Return the ``=== Timing Breakdown ===`` report in milliseconds.

    Only sections in ``order`` that were actually recorded are listed; the
    final ``Total:`` line is the tracker's overall elapsed time.
    """

    stats = tracker.snapshot()
    lines = ["=== Timing Breakdown ==="]
    for name in order:
        stat = stats.get(name)
        if stat is not None:
            lines.append(f"{name + ':':<16} {int(stat.total * 1000):4d}ms")
    lines.append(f"{'Total:':<16} {int(tracker.elapsed() * 1000):4d}ms")
    return "\n".join(lines) + "\n"


__all__ = ["PerfStat", "PerformanceTracker", "BREAKDOWN_ORDER", "format_breakdown"]
