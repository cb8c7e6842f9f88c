"""Square board representation used by the packing search."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .tetromino import Tetromino


Grid = NDArray[np.uint8]

# Glyph used for unoccupied cells when rendering.  Inside the grid an empty
# cell is ``0`` and an occupied cell holds the code point of its piece label.
EMPTY_GLYPH = "."
EMPTY = 0


def create_empty_grid(size: int) -> Grid:
    """Return a new ``size`` x ``size`` grid filled with zeros."""

    return np.zeros((size, size), dtype=np.uint8)


class Board:
    """Square grid holding the cells occupied by placed pieces."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"board size must be non-negative, got {size}")
        self.size = size
        self.grid: Grid = create_empty_grid(size)

    def get_cell(self, row: int, col: int) -> str:
        """Return the label at ``(row, col)`` or :data:`EMPTY_GLYPH`.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.size and 0 <= col < self.size:
            value = int(self.grid[row, col])
            return chr(value) if value != EMPTY else EMPTY_GLYPH
        raise IndexError("Cell out of bounds")

    def can_place(self, piece: Tetromino, row: int, col: int) -> bool:
        """Return ``True`` if ``piece`` fits with its origin at ``(row, col)``.

        All four cells are bounds-checked before any of them is read, so an
        off-board cell never reaches the grid lookup.
        """

        size = self.size
        for dr, dc in piece.cells:
            r = row + dr
            c = col + dc
            if r < 0 or r >= size or c < 0 or c >= size:
                return False

        grid = self.grid
        for dr, dc in piece.cells:
            if grid[row + dr, col + dc] != EMPTY:
                return False
        return True

    def place(self, piece: Tetromino, row: int, col: int) -> None:
        """Write ``piece``'s label into its four cells.

        The placement is not validated; callers must check :meth:`can_place`
        first.
        """

        value = ord(piece.label)
        grid = self.grid
        for r, c in piece.blocks(row, col):
            grid[r, c] = value

    def copy(self) -> "Board":
        """Return an independent copy of the board."""

        clone = Board.__new__(Board)
        clone.size = self.size
        clone.grid = self.grid.copy()
        return clone

    def count_empty(self) -> int:
        """Return the number of unoccupied cells."""

        return int(np.count_nonzero(self.grid == EMPTY))

    def render(self) -> str:
        """Return the grid as text, one newline-terminated line per row."""

        lines = []
        for row in range(self.size):
            lines.extend(self.get_cell(row, col) for col in range(self.size))
            lines.append("\n")
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()
