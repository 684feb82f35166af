"""
Rule implementations for the Sudoku solver.

Each rule:
1. Inherits from Rule base class
2. Implements visit(board, candidates) - only ever removes candidates
3. Is safe to re-run every pass (order changes pass count, not the fixed point)
"""

from dataclasses import dataclass
from typing import List, Optional
from .board import Board
from .candidates import CandidateSet, value_to_mask
from .regions import Region, build_9x9_regions


# ==============================================================================
# Rule Base Class
# ==============================================================================

@dataclass
class Rule:
    """
    Base class for propagation rules.

    A rule reads the board and/or the candidate set and mutates the candidate
    set in place. It never writes to the board; that is apply_uniques' job.
    """
    name: str
    region: Optional[Region] = None

    def visit(self, board: Board, candidates: CandidateSet) -> None:
        raise NotImplementedError("Subclass must implement visit()")


# ==============================================================================
# Global: EXCLUDE_WHEN_SOLVED
# ==============================================================================

class EXCLUDE_WHEN_SOLVED_Rule(Rule):
    """
    Clear the candidate mask of every cell the board has already fixed.

    Keeps the candidate set in sync with the board; it is not done
    automatically, so this runs first on every pass.
    """

    def visit(self, board: Board, candidates: CandidateSet) -> None:
        for r in range(board.H):
            for c in range(board.W):
                if board.data[r, c] == 0:
                    continue
                candidates.mark_as_solved(r, c)


# ==============================================================================
# Per region: UNIQUE_BY_REGION
# ==============================================================================

class UNIQUE_BY_REGION_Rule(Rule):
    """No repeats: a solved cell's value is excluded from the rest of its region."""

    def visit(self, board: Board, candidates: CandidateSet) -> None:
        for (r, c) in self.region.positions:
            value = int(board.data[r, c])
            if value == 0:
                continue

            for (r2, c2) in self.region.positions:
                if (r2, c2) == (r, c):
                    continue
                candidates.exclude_candidate(r2, c2, value)


# ==============================================================================
# Per region: FILL_REGION_UNIQUELY (hidden single)
# ==============================================================================

class FILL_REGION_UNIQUELY_Rule(Rule):
    """
    If exactly one cell of the region can still hold a value, it must.

    For each value, the sole eligible cell is collapsed to that value and the
    value is excluded from every other cell. Values with zero or several
    eligible cells are skipped for this pass.
    """

    def visit(self, board: Board, candidates: CandidateSet) -> None:
        for value in range(1, candidates.digits + 1):
            bit = value_to_mask(value, candidates.digits)
            holders = [(r, c) for (r, c) in self.region.positions
                       if int(candidates.data[r, c]) & bit]
            if len(holders) != 1:
                continue

            solo = holders[0]
            for (r, c) in self.region.positions:
                if (r, c) == solo:
                    candidates.set_exclusive_candidate(r, c, value)
                else:
                    candidates.exclude_candidate(r, c, value)


# ==============================================================================
# Rule Set Construction
# ==============================================================================

def build_rules(regions: List[Region]) -> List[Rule]:
    """
    Build the rule set in the fixed pass order:
    global rule, then uniqueness per region, then fill per region.

    Both per-region rules share the same Region instance.
    """
    rules: List[Rule] = [EXCLUDE_WHEN_SOLVED_Rule("EXCLUDE_WHEN_SOLVED")]

    for region in regions:
        rules.append(UNIQUE_BY_REGION_Rule(f"UNIQUE_BY_REGION[{region.name}]", region))

    for region in regions:
        rules.append(FILL_REGION_UNIQUELY_Rule(f"FILL_REGION_UNIQUELY[{region.name}]", region))

    return rules


def build_9x9_rules() -> List[Rule]:
    return build_rules(build_9x9_regions())
