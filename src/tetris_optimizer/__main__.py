"""Run the optimizer: ``python -m tetris_optimizer pieces.txt``."""

from __future__ import annotations

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
