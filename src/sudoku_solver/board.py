"""
Board (value grid) for the Sudoku solver.

Holds the committed value of each cell: 0 = unknown, 1..digits = fixed.
The propagation engine only ever writes non-zero values into empty cells,
so a solve never un-fixes a cell.
"""

import numpy as np
from typing import List
from .types import DIGITS, check_grid


class Board:
    """
    H×W grid of small integers.

    Implementation: int array, data[r, c] = value (0 = unknown).
    """

    def __init__(self, H: int, W: int, digits: int = DIGITS):
        self.H = H
        self.W = W
        self.digits = digits
        self.data = np.zeros((H, W), dtype=int)

    @classmethod
    def from_grid(cls, g, digits: int = DIGITS) -> 'Board':
        """
        Build a board from a complete literal grid (0 = blank).

        Raises:
            ValueError: if g is not 2D or any value lies outside 0..digits
        """
        g = np.array(g, dtype=int)
        check_grid(g)
        if g.size and (g.min() < 0 or g.max() > digits):
            raise ValueError(f"Grid values must be in 0..{digits}, got range {g.min()}..{g.max()}")
        board = cls(g.shape[0], g.shape[1], digits)
        board.data = g.copy()
        return board

    def copy(self) -> 'Board':
        """Deep copy of board."""
        B = Board(self.H, self.W, self.digits)
        B.data = self.data.copy()
        return B

    def get(self, r: int, c: int) -> int:
        return int(self.data[r, c])

    def set_cell(self, r: int, c: int, value: int):
        """Write value (1..digits) at (r, c)."""
        assert 1 <= value <= self.digits, f"Cell value must be in 1..{self.digits}, got {value}"
        self.data[r, c] = value

    def count_filled(self) -> int:
        """Number of non-zero cells."""
        return int(np.count_nonzero(self.data))

    def count_open(self) -> int:
        """Number of cells still unknown."""
        return self.H * self.W - self.count_filled()

    def is_complete(self) -> bool:
        return self.count_open() == 0

    def to_list(self) -> List[List[int]]:
        return self.data.tolist()

    def __eq__(self, other: 'Board') -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.data.shape == other.data.shape and np.array_equal(self.data, other.data)
