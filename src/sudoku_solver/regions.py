"""
Regions for the Sudoku solver.

A region is an ordered group of cells that must hold each value exactly once
(a row, a column or a box). Regions are built once and shared read-only:
the uniqueness rule and the fill rule for a region hold the same instance.
"""

from dataclasses import dataclass
from typing import List, Tuple
from .types import Cell, DIGITS, BOX_ROWS, BOX_COLS


@dataclass(frozen=True)
class Region:
    """Immutable ordered list of (r, c) coordinates."""
    name: str                      # e.g. "row 0", "col 4", "box 2"
    positions: Tuple[Cell, ...]

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self):
        return iter(self.positions)

    def __contains__(self, cell) -> bool:
        return cell in self.positions


def build_regions(size: int = DIGITS,
                  box_rows: int = BOX_ROWS,
                  box_cols: int = BOX_COLS) -> List[Region]:
    """
    Build row, column and box regions for a size×size board.

    Order: rows top to bottom, columns left to right, then boxes in
    row-major order (cells row-major within each box).

    Raises:
        ValueError: if box_rows × box_cols boxes do not tile the board
    """
    if box_rows * box_cols != size or size % box_rows or size % box_cols:
        raise ValueError(f"Boxes of {box_rows}x{box_cols} do not tile a {size}x{size} board")

    regions = []

    # rows
    for r in range(size):
        regions.append(Region(f"row {r}", tuple((r, c) for c in range(size))))

    # columns
    for c in range(size):
        regions.append(Region(f"col {c}", tuple((r, c) for r in range(size))))

    # boxes
    box_index = 0
    for r_outer in range(size // box_rows):
        for c_outer in range(size // box_cols):
            regions.append(Region(
                f"box {box_index}",
                tuple((r_outer * box_rows + r_inner, c_outer * box_cols + c_inner)
                      for r_inner in range(box_rows)
                      for c_inner in range(box_cols))
            ))
            box_index += 1

    return regions


def build_9x9_regions() -> List[Region]:
    """The 27 regions of a standard board: 9 rows, 9 columns, 9 3x3 boxes."""
    return build_regions(9, 3, 3)
