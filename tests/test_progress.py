from __future__ import annotations

import io

from tetris_optimizer.cancellation import Deadline
from tetris_optimizer.progress import PROGRESS_WIDTH, ProgressDisplay


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


def make_display(is_tty: bool = True):
    clock = FakeClock()
    stream = io.StringIO()
    display = ProgressDisplay(
        Deadline(300.0, clock=clock), stream=stream, interval=0.01, is_tty=is_tty
    )
    return display, clock, stream


def test_render_line_counts_down() -> None:
    display, clock, _ = make_display()
    assert display.render_line() == f"Time remaining: 05:00 [{'░' * PROGRESS_WIDTH}]"
    clock.advance(150.0)
    assert display.render_line() == f"Time remaining: 02:30 [{'█' * 10}{'░' * 10}]"
    clock.advance(500.0)
    assert display.render_line() == f"Time remaining: 00:00 [{'█' * PROGRESS_WIDTH}]"


def test_show_and_clear_write_to_tty() -> None:
    display, clock, stream = make_display()
    clock.advance(61.0)
    display.show()
    assert stream.getvalue() == "\r" + display.render_line()
    display.clear()
    assert stream.getvalue().endswith("\r" + " " * 50 + "\r")


def test_completion_message() -> None:
    display, _, stream = make_display()
    display.show_completion(1.234, 2.5)
    assert stream.getvalue() == "Solved in 1.23s (total: 2.50s)\n"


def test_non_tty_stays_silent() -> None:
    display, _, stream = make_display(is_tty=False)
    with display:
        display.show()
    display.show_completion(1.0, 1.0)
    assert stream.getvalue() == ""


def test_stringio_is_not_a_tty() -> None:
    display = ProgressDisplay(Deadline(1.0), stream=io.StringIO())
    assert display.is_tty is False


def test_context_manager_stops_thread_and_clears() -> None:
    display, _, stream = make_display()
    with display:
        assert display._thread is not None
    assert display._thread is None
    assert stream.getvalue().endswith("\r" + " " * 50 + "\r")
