"""Cooperative cancellation signals for the solver.

The solver only ever calls ``is_set()`` on the signal it is given, so a plain
:class:`threading.Event` works as well as :class:`Deadline`.  ``Deadline``
additionally expires on its own once the configured number of seconds has
elapsed.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional, Protocol


# Default wall-clock budget for one solve: five minutes.
DEFAULT_TIMEOUT = 300.0


class CancelSignal(Protocol):
    """Anything the solver can poll for cancellation."""

    def is_set(self) -> bool:
        ...


class Deadline:
    """Cancellation signal triggered by a timeout or an explicit ``cancel``.

    Parameters
    ----------
    seconds:
        Budget in seconds measured from construction.  ``None`` disables the
        timeout so only :meth:`cancel` can trigger the signal.
    clock:
        Monotonic clock returning seconds.  Tests inject a fake clock.
    """

    def __init__(
        self,
        seconds: Optional[float] = DEFAULT_TIMEOUT,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._clock = clock or time.monotonic
        self.seconds = seconds
        self._start = self._clock()
        self._event = threading.Event()

    def cancel(self) -> None:
        """Trigger the signal immediately (safe to call from a signal handler)."""

        self._event.set()

    @property
    def cancelled(self) -> bool:
        """``True`` if :meth:`cancel` was called, as opposed to expiring."""

        return self._event.is_set()

    def elapsed(self) -> float:
        return self._clock() - self._start

    def remaining(self) -> float:
        """Seconds left before expiry, never negative; ``inf`` without a timeout."""

        if self.seconds is None:
            return float("inf")
        return max(0.0, self.seconds - self.elapsed())

    def expired(self) -> bool:
        return self.seconds is not None and self.elapsed() >= self.seconds

    def is_set(self) -> bool:
        return self._event.is_set() or self.expired()


__all__ = ["CancelSignal", "Deadline", "DEFAULT_TIMEOUT"]
