"""Pack tetrominoes into the smallest possible square board."""

from .board import Board
from .cancellation import Deadline
from .parser import ParseError, parse_file, parse_lines, parse_piece
from .perf import PerfStat, PerformanceTracker
from .solver import SolveResult, min_board_size, solve
from .tetromino import (
    CANONICAL_SHAPES,
    Tetromino,
    TetrominoType,
    classify,
    matches_canonical,
    normalize,
)
from .utils import placed_cells, verify_packing

__all__ = [
    "Board",
    "Deadline",
    "ParseError",
    "parse_file",
    "parse_lines",
    "parse_piece",
    "PerfStat",
    "PerformanceTracker",
    "SolveResult",
    "min_board_size",
    "solve",
    "CANONICAL_SHAPES",
    "Tetromino",
    "TetrominoType",
    "classify",
    "matches_canonical",
    "normalize",
    "placed_cells",
    "verify_packing",
]
