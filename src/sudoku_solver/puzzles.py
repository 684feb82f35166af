"""Reference puzzles."""

from .types import G

CANONICAL_PUZZLE = G([
    [0, 0, 0, 0, 8, 0, 0, 0, 0],
    [0, 0, 5, 6, 0, 3, 9, 0, 0],
    [0, 8, 4, 0, 0, 0, 2, 7, 0],
    [0, 3, 0, 1, 0, 0, 0, 5, 0],
    [5, 0, 0, 0, 3, 0, 0, 0, 2],
    [0, 6, 0, 0, 0, 5, 0, 1, 0],
    [0, 1, 9, 0, 0, 0, 5, 6, 0],
    [0, 0, 8, 4, 0, 2, 7, 0, 0],
    [0, 0, 0, 0, 6, 0, 0, 0, 0],
])
