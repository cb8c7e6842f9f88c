"""Backtracking search for the smallest square that packs every piece.

Pieces are placed strictly in input order.  For each piece the candidate
origins are scanned row-major, and the first origin that leads to a complete
packing wins, so a given input always produces the same board.  Each
tentative placement is made on a copy of the parent board, which means a
failed branch is simply dropped and never has to be undone.

If every origin fails at one size, the search restarts on an empty board one
cell wider.  The loop has no upper bound: a large enough square always fits
the pieces, and the cancellation signal bounds the wall-clock cost.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .board import Board
from .cancellation import CancelSignal
from .perf import PerformanceTracker
from .tetromino import CELL_COUNT, Tetromino


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveResult:
    """Outcome of :func:`solve`.

    ``board`` is a complete packing or ``None``; it is never partial.
    ``timed_out`` is set when the cancellation signal stopped the search.
    """

    board: Optional[Board] = None
    timed_out: bool = False

    @property
    def solved(self) -> bool:
        return self.board is not None


def min_board_size(piece_count: int) -> int:
    """Return the smallest square side with room for ``piece_count`` pieces."""

    return math.isqrt(CELL_COUNT * piece_count - 1) + 1 if piece_count > 0 else 0


def _place_from(
    cancel: CancelSignal,
    board: Board,
    pieces: Sequence[Tetromino],
    index: int,
) -> Optional[Board]:
    """Place ``pieces[index:]`` on ``board`` and return the filled board.

    Returns ``None`` when no placement works or the search was cancelled.
    ``board`` itself is never modified.
    """

    if cancel.is_set():
        return None
    if index >= len(pieces):
        return board

    piece = pieces[index]
    size = board.size
    for row in range(size):
        for col in range(size):
            if not board.can_place(piece, row, col):
                continue
            branch = board.copy()
            branch.place(piece, row, col)
            solved = _place_from(cancel, branch, pieces, index + 1)
            if solved is not None:
                return solved
    return None


def solve(
    cancel: CancelSignal,
    pieces: Sequence[Tetromino],
    *,
    profiler: Optional[PerformanceTracker] = None,
) -> SolveResult:
    """Pack ``pieces`` into the smallest square board found before ``cancel``.

    Parameters
    ----------
    cancel:
        Polled before every board size and at the top of every recursive
        step.  Once set, the search unwinds and ``timed_out`` is reported.
    pieces:
        Validated pieces with unique labels, placed in this order.
    profiler:
        Optional tracker receiving one ``size N`` section per attempted size.
    """

    if not pieces:
        return SolveResult(board=Board(0))

    size = min_board_size(len(pieces))
    while True:
        if cancel.is_set():
            LOGGER.info("Search cancelled before trying size %d", size)
            return SolveResult(timed_out=True)

        LOGGER.debug("Trying board size %d for %d pieces", size, len(pieces))
        if profiler is not None:
            with profiler.section(f"size {size}"):
                solved = _place_from(cancel, Board(size), pieces, 0)
        else:
            solved = _place_from(cancel, Board(size), pieces, 0)

        if solved is not None:
            LOGGER.info(
                "Packed %d pieces on a %dx%d board (%d empty cells)",
                len(pieces),
                size,
                size,
                solved.count_empty(),
            )
            return SolveResult(board=solved)

        if cancel.is_set():
            LOGGER.info("Search cancelled while trying size %d", size)
            return SolveResult(timed_out=True)
        size += 1


__all__ = ["SolveResult", "min_board_size", "solve"]
