"""
Text rendering and parsing of boards.
"""

import numpy as np
from .types import Grid, DIGITS
from .board import Board
from .candidates import CandidateSet


def render_board(board: Board) -> str:
    """
    One line per row, each cell as its digit or '.', space-separated.

    Every cell is followed by a space and every row by a newline.
    """
    lines = []
    for r in range(board.H):
        line = ""
        for c in range(board.W):
            value = int(board.data[r, c])
            line += ("." if value == 0 else str(value)) + " "
        lines.append(line)
    return "\n".join(lines) + "\n"


def render_candidates(candidates: CandidateSet) -> str:
    """
    Debug dump of the candidate masks (not a stable format).

    Each cell shows its possible digits in place, '-' where excluded,
    e.g. "1--4----9".
    """
    lines = []
    for r in range(candidates.H):
        cells = []
        for c in range(candidates.W):
            mask = int(candidates.data[r, c])
            cells.append("".join(
                str(v) if mask & (1 << (v - 1)) else "-"
                for v in range(1, candidates.digits + 1)
            ))
        lines.append(" ".join(cells))
    return "\n".join(lines) + "\n"


def parse_puzzle(text: str, size: int = DIGITS) -> Grid:
    """
    Parse a puzzle string of size*size characters, row-major.

    '0' or '.' marks a blank; whitespace is ignored.

    Raises:
        ValueError: on wrong length or unexpected characters
    """
    chars = [ch for ch in text if not ch.isspace()]
    if len(chars) != size * size:
        raise ValueError(f"Puzzle must have {size * size} cells, got {len(chars)}")

    values = []
    for ch in chars:
        if ch == '.':
            values.append(0)
        elif ch in "0123456789" and int(ch) <= size:
            values.append(int(ch))
        else:
            raise ValueError(f"Invalid puzzle character: {ch!r}")

    return np.array(values, dtype=int).reshape(size, size)
