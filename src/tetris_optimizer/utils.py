"""Helpers for checking a solved board against its pieces."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .board import Board
from .tetromino import Point, Tetromino


def placed_cells(board: Board, label: str) -> List[Point]:
    """Return the cells holding ``label`` in row-major order."""

    rows, cols = np.nonzero(board.grid == ord(label))
    return [(int(r), int(c)) for r, c in zip(rows, cols)]


def verify_packing(board: Board, pieces: Sequence[Tetromino]) -> bool:
    """Return ``True`` if ``board`` is a complete packing of ``pieces``.

    Every piece must occupy exactly its own four offsets translated to a
    single origin on the board, and no other cell may be occupied.
    """

    occupied = 0
    for piece in pieces:
        cells = placed_cells(board, piece.label)
        if len(cells) != len(piece.cells):
            return False
        origin_row = min(r for r, _ in cells)
        origin_col = min(c for _, c in cells)
        if cells != piece.blocks(origin_row, origin_col):
            return False
        occupied += len(cells)
    return board.size * board.size - board.count_empty() == occupied
