"""Reading and validating tetromino input files.

An input file holds up to 26 pieces.  Each piece is drawn on four lines of
four characters, ``#`` for a filled cell and ``.`` for an empty one, and
consecutive pieces are separated by exactly one blank line::

    ...#
    ...#
    ...#
    ...#

    ....
    ..##
    .##.
    ....

Pieces are labelled ``A``, ``B``, ... in the order they appear.
"""

from __future__ import annotations

import logging
import os
import string
from typing import List, Sequence, Union

from .tetromino import CELL_COUNT, Point, Tetromino, matches_canonical, normalize


LOGGER = logging.getLogger(__name__)

FILLED = "#"
EMPTY = "."
ROWS = 4
COLUMNS = 4
# One label per uppercase letter.
MAX_PIECES = 26
LABELS = string.ascii_uppercase[:MAX_PIECES]


class ParseError(ValueError):
    """Input rejected during parsing.

    ``piece`` is the 1-based number of the offending piece, or ``0`` when the
    problem is not tied to a single piece.
    """

    def __init__(self, message: str, piece: int = 0) -> None:
        self.message = message
        self.piece = piece
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.piece > 0:
            return f"{self.message} at piece {self.piece}"
        return self.message


def parse_piece(
    rows: Sequence[str], *, filled: str = FILLED, empty: str = EMPTY
) -> List[Point]:
    """Return the normalised cells of the piece drawn in ``rows``.

    Raises:
        ParseError: If the drawing is not four rows of four valid characters,
            does not contain exactly four filled cells, or is not a tetromino.
    """

    if len(rows) != ROWS:
        raise ParseError(f"tetromino has {len(rows)} lines (expected {ROWS})")

    cells: List[Point] = []
    for row, line in enumerate(rows):
        if len(line) != COLUMNS:
            raise ParseError(
                f"line {row + 1} has {len(line)} characters (expected {COLUMNS})"
            )
        for col, ch in enumerate(line):
            if ch == filled:
                cells.append((row, col))
            elif ch != empty:
                raise ParseError(f"invalid character '{ch}'")

    cells = normalize(cells)
    if len(cells) != CELL_COUNT:
        raise ParseError(f"tetromino has {len(cells)} cells (expected {CELL_COUNT})")
    if not matches_canonical(cells):
        raise ParseError("invalid tetromino shape")
    return cells


def parse_lines(lines: Sequence[str]) -> List[Tetromino]:
    """Parse the lines of an input file into labelled pieces.

    Trailing carriage returns and trailing blank lines are ignored.
    """

    lines = [line.rstrip("\r") for line in lines]
    while lines and lines[-1] == "":
        lines.pop()
    if not lines:
        raise ParseError("empty file")

    pieces: List[Tetromino] = []
    i = 0
    while i < len(lines):
        number = len(pieces) + 1
        if number > MAX_PIECES:
            raise ParseError(f"too many tetrominoes (max {MAX_PIECES})", number)
        if i + ROWS > len(lines):
            raise ParseError("incomplete tetromino (less than 4 lines)", number)

        try:
            cells = parse_piece(lines[i : i + ROWS])
        except ParseError as exc:
            raise ParseError(exc.message, number) from None
        pieces.append(Tetromino(LABELS[number - 1], tuple(cells)))
        i += ROWS

        if i < len(lines):
            if lines[i] != "":
                raise ParseError("missing blank line separator", number)
            i += 1
            if i < len(lines) and lines[i] == "":
                raise ParseError("consecutive blank lines not allowed", number + 1)

    LOGGER.debug("Parsed %d tetrominoes", len(pieces))
    return pieces


def parse_text(text: str) -> List[Tetromino]:
    """Parse the full contents of an input file."""

    return parse_lines(text.split("\n"))


def parse_file(path: Union[str, os.PathLike]) -> List[Tetromino]:
    """Read ``path`` and parse it with :func:`parse_lines`.

    Raises:
        ParseError: If the file cannot be read or its contents are invalid.
    """

    try:
        with open(path, encoding="utf-8", newline="") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"cannot open file: {exc}") from exc
    return parse_text(text)


__all__ = [
    "ParseError",
    "parse_piece",
    "parse_lines",
    "parse_text",
    "parse_file",
    "MAX_PIECES",
    "FILLED",
    "EMPTY",
]
