"""Tetromino definitions and shape validation.

Every valid piece is one of the 19 fixed orientations of the seven standard
tetrominoes.  The orientations are listed explicitly in
:data:`CANONICAL_SHAPES` rather than derived by rotating a base shape, and each
entry is stored in normalised row-major order so that comparing a candidate
against the catalogue is a plain sequence comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

Point = Tuple[int, int]  # (row, col)
Shape = Tuple[Point, ...]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


# All orientations, already normalised and sorted row-major.
CANONICAL_SHAPES: Dict[TetrominoType, Tuple[Shape, ...]] = {
    TetrominoType.I: (
        ((0, 0), (0, 1), (0, 2), (0, 3)),
        ((0, 0), (1, 0), (2, 0), (3, 0)),
    ),
    TetrominoType.O: (
        ((0, 0), (0, 1), (1, 0), (1, 1)),
    ),
    TetrominoType.T: (
        ((0, 0), (0, 1), (0, 2), (1, 1)),
        ((0, 0), (1, 0), (1, 1), (2, 0)),
        ((0, 1), (1, 0), (1, 1), (1, 2)),
        ((0, 1), (1, 0), (1, 1), (2, 1)),
    ),
    TetrominoType.S: (
        ((0, 1), (0, 2), (1, 0), (1, 1)),
        ((0, 0), (1, 0), (1, 1), (2, 1)),
    ),
    TetrominoType.Z: (
        ((0, 0), (0, 1), (1, 1), (1, 2)),
        ((0, 1), (1, 0), (1, 1), (2, 0)),
    ),
    TetrominoType.L: (
        ((0, 0), (1, 0), (2, 0), (2, 1)),
        ((0, 0), (0, 1), (0, 2), (1, 0)),
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((0, 2), (1, 0), (1, 1), (1, 2)),
    ),
    TetrominoType.J: (
        ((0, 1), (1, 1), (2, 0), (2, 1)),
        ((0, 0), (1, 0), (1, 1), (1, 2)),
        ((0, 0), (0, 1), (1, 0), (2, 0)),
        ((0, 0), (0, 1), (0, 2), (1, 2)),
    ),
}

# Flat lookup used by ``classify``.
_SHAPE_TYPES: Dict[Shape, TetrominoType] = {
    shape: t_type for t_type, shapes in CANONICAL_SHAPES.items() for shape in shapes
}

CELL_COUNT = 4


def normalize(cells: Iterable[Point]) -> List[Point]:
    """Return ``cells`` translated so the minimum row and column are zero.

    The result is sorted row-major (by row, then column).  An empty input is
    returned unchanged as an empty list.
    """

    cells = list(cells)
    if not cells:
        return cells
    min_r = min(r for r, _ in cells)
    min_c = min(c for _, c in cells)
    return sorted((r - min_r, c - min_c) for r, c in cells)


def classify(cells: Iterable[Point]) -> Optional[TetrominoType]:
    """Return the :class:`TetrominoType` matching ``cells`` or ``None``."""

    cells = list(cells)
    if len(cells) != CELL_COUNT:
        return None
    return _SHAPE_TYPES.get(tuple(normalize(cells)))


def matches_canonical(cells: Iterable[Point]) -> bool:
    """Return ``True`` if ``cells`` is a translated canonical tetromino."""

    return classify(cells) is not None


def is_label(label: object) -> bool:
    """Return ``True`` if ``label`` is usable as a piece identifier."""

    return (
        isinstance(label, str)
        and len(label) == 1
        and label.isascii()
        and label.isprintable()
        and not label.isspace()
    )


@dataclass(frozen=True)
class Tetromino:
    """A labelled piece with its four normalised cell offsets.

    ``cells`` may be given in any translated position and order; it is stored
    normalised.  Construction fails with :class:`ValueError` if the label is
    not a single printable ASCII character or if the cells are not one of the
    canonical shapes.
    """

    label: str
    cells: Shape

    def __post_init__(self) -> None:
        if not is_label(self.label):
            raise ValueError(f"invalid piece label: {self.label!r}")
        cells = tuple(tuple(p) for p in self.cells)
        if not matches_canonical(cells):
            raise ValueError(f"cells {cells} are not a tetromino")
        object.__setattr__(self, "cells", tuple(normalize(cells)))

    @property
    def shape(self) -> TetrominoType:
        """The tetromino type this piece is an orientation of."""

        return _SHAPE_TYPES[self.cells]

    def blocks(self, row: int, col: int) -> List[Point]:
        """Return the absolute cells covered when the origin is ``(row, col)``."""

        return [(row + dr, col + dc) for dr, dc in self.cells]
