"""
Candidate Set for the Sudoku solver.

Each cell carries a bitmask of the values still logically possible there:
bit k set means value k+1 is possible. Masks only ever lose bits during a
solve; set_exclusive_candidate narrows a mask to one of the bits it holds.
"""

import numpy as np
from typing import Set
from .types import DIGITS
from .board import Board


# ==============================================================================
# Value / Mask Conversion
# ==============================================================================

def value_to_mask(value: int, digits: int = DIGITS) -> int:
    """Convert a value (1..digits) to its single-bit mask."""
    assert 1 <= value <= digits, f"Value must be in 1..{digits}, got {value}"
    return 1 << (value - 1)


def mask_to_value(mask: int) -> int:
    """
    Convert a single-bit mask back to its value: floor(log2(mask)) + 1.

    Only valid for masks with exactly one bit set.
    """
    mask = int(mask)
    assert mask != 0 and (mask & (mask - 1)) == 0, \
        f"Mask must have exactly one bit set, got {mask:#b}"
    return mask.bit_length()


def popcount(mask: int) -> int:
    return bin(int(mask)).count('1')


def full_mask(digits: int = DIGITS) -> int:
    """Mask with every value possible (0b111111111 = 511 for 9 digits)."""
    return (1 << digits) - 1


# ==============================================================================
# Candidate Set
# ==============================================================================

class CandidateSet:
    """
    Grid where each cell holds the set of values still possible there.

    Implementation: H×W array of uint16 masks (bit k = value k+1 possible).
    A mask of 0 means either "solved, nothing left to propagate" (after
    mark_as_solved) or, on an open cell, a contradiction in the input.
    """

    def __init__(self, H: int, W: int, digits: int = DIGITS, init_mask: int = None):
        """
        Args:
            H, W: Grid dimensions
            digits: Size of the value range 1..digits
            init_mask: Initial mask for all cells (default: all values possible)
        """
        if init_mask is None:
            init_mask = full_mask(digits)
        self.H = H
        self.W = W
        self.digits = digits
        self.data = np.full((H, W), init_mask, dtype=np.uint16)

    @classmethod
    def for_board(cls, board: Board) -> 'CandidateSet':
        """Default candidate set shaped like board."""
        return cls(board.H, board.W, board.digits)

    def copy(self) -> 'CandidateSet':
        """Deep copy of candidate set."""
        C = CandidateSet(self.H, self.W, self.digits, 0)
        C.data = self.data.copy()
        return C

    def mask(self, r: int, c: int) -> int:
        return int(self.data[r, c])

    def get_set(self, r: int, c: int) -> Set[int]:
        """Get set of values still possible at cell (r, c)."""
        mask = int(self.data[r, c])
        return {v for v in range(1, self.digits + 1) if mask & (1 << (v - 1))}

    def has_candidate(self, r: int, c: int, value: int) -> bool:
        return bool(int(self.data[r, c]) & value_to_mask(value, self.digits))

    def exclude_candidate(self, r: int, c: int, value: int):
        """Clear value's bit at (r, c). No-op if already clear."""
        self.data[r, c] = int(self.data[r, c]) & ~value_to_mask(value, self.digits)

    def set_exclusive_candidate(self, r: int, c: int, value: int):
        """Collapse the mask at (r, c) to exactly value's bit."""
        self.data[r, c] = value_to_mask(value, self.digits)

    def mark_as_solved(self, r: int, c: int):
        """Clear the mask at (r, c); the board already holds its value."""
        self.data[r, c] = 0

    def remaining_candidates(self, r: int, c: int) -> int:
        """Number of values still possible at (r, c)."""
        return popcount(self.data[r, c])

    def apply_uniques(self, board: Board) -> bool:
        """
        Write every single-candidate cell into board.

        Returns:
            True if any board cell changed
        """
        changes_made = False
        for r in range(self.H):
            for c in range(self.W):
                if self.remaining_candidates(r, c) != 1:
                    continue
                value = mask_to_value(self.data[r, c])
                if board.get(r, c) != value:
                    board.set_cell(r, c, value)
                    changes_made = True
        return changes_made

    def total_candidates(self) -> int:
        """Sum of remaining candidates over all cells."""
        return sum(self.remaining_candidates(r, c)
                   for r in range(self.H) for c in range(self.W))

    def count_empty(self, board: Board) -> int:
        """Count open cells with no candidates left (contradiction symptom)."""
        return int(np.count_nonzero((board.data == 0) & (self.data == 0)))

    def __eq__(self, other: 'CandidateSet') -> bool:
        """Check if two candidate sets are equal."""
        if not isinstance(other, CandidateSet):
            return NotImplemented
        if self.H != other.H or self.W != other.W:
            return False
        return np.array_equal(self.data, other.data)
