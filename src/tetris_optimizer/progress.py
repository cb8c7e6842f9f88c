"""Terminal countdown shown on stderr while the solver runs.

Nothing is written unless the stream is a terminal, so redirected output and
test captures stay clean.
"""

from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO

from .cancellation import Deadline


PROGRESS_WIDTH = 20
REFRESH_INTERVAL = 0.1
FILLED_BLOCK = "█"
EMPTY_BLOCK = "░"
# Width blanked out by ``clear``.
CLEAR_WIDTH = 50


def _stream_is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty()) if isatty is not None else False
    except ValueError:  # closed stream
        return False


class ProgressDisplay:
    """Redraw ``Time remaining: MM:SS [bar]`` for a :class:`Deadline`.

    Use as a context manager to refresh the line from a daemon thread every
    ``interval`` seconds until the block exits, at which point the line is
    cleared.
    """

    def __init__(
        self,
        deadline: Deadline,
        *,
        stream: Optional[TextIO] = None,
        width: int = PROGRESS_WIDTH,
        interval: float = REFRESH_INTERVAL,
        is_tty: Optional[bool] = None,
    ) -> None:
        self.deadline = deadline
        self.stream = stream if stream is not None else sys.stderr
        self.width = width
        self.interval = interval
        self.is_tty = _stream_is_tty(self.stream) if is_tty is None else is_tty
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def render_line(self) -> str:
        """Return the progress line without the leading carriage return."""

        remaining = self.deadline.remaining()
        if self.deadline.seconds:
            fraction = min(1.0, self.deadline.elapsed() / self.deadline.seconds)
        else:
            fraction = 0.0
        filled = int(fraction * self.width)
        bar = FILLED_BLOCK * filled + EMPTY_BLOCK * (self.width - filled)
        if remaining == float("inf"):
            return f"Time remaining: --:-- [{bar}]"
        minutes, seconds = divmod(int(remaining), 60)
        return f"Time remaining: {minutes:02d}:{seconds:02d} [{bar}]"

    def show(self) -> None:
        if not self.is_tty:
            return
        self.stream.write("\r" + self.render_line())
        self.stream.flush()

    def clear(self) -> None:
        if not self.is_tty:
            return
        self.stream.write("\r" + " " * CLEAR_WIDTH + "\r")
        self.stream.flush()

    def show_completion(self, solve_seconds: float, total_seconds: float) -> None:
        if not self.is_tty:
            return
        self.stream.write(
            f"Solved in {solve_seconds:.2f}s (total: {total_seconds:.2f}s)\n"
        )
        self.stream.flush()

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.show()

    def start(self) -> None:
        if not self.is_tty or self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="progress", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        self.clear()

    def __enter__(self) -> "ProgressDisplay":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
        return False


__all__ = ["ProgressDisplay", "PROGRESS_WIDTH", "REFRESH_INTERVAL"]
