"""
Propagation Engine for the Sudoku solver.

- Candidate masks per cell (bit k = value k+1 still possible)
- Rules only ever remove candidates
- Each pass: apply every rule, then commit single-candidate cells to the board
- Converged once a pass commits nothing new
"""

import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .types import Grid, DIGITS
from .board import Board
from .candidates import CandidateSet
from .rules import Rule, build_9x9_rules
from .regions import Region
from .receipts import find_region_conflicts


# ==============================================================================
# Single Pass
# ==============================================================================

def run_pass(rules: List[Rule], board: Board, candidates: CandidateSet) -> None:
    """Apply every rule once, in order."""
    for rule in rules:
        rule.visit(board, candidates)


# ==============================================================================
# Fixed-Point Iterator
# ==============================================================================

def run_propagation(rules: List[Rule],
                    board: Board,
                    candidates: Optional[CandidateSet] = None,
                    *,
                    max_passes: Optional[int] = None) -> Tuple[CandidateSet, Dict]:
    """
    Run passes until apply_uniques reports no board change.

    The board is updated in place. Each pass either commits at least one open
    cell or ends the loop, so H*W*digits passes is a hard upper bound.

    Args:
        rules: Rules in pass order
        board: Board to solve (mutated)
        candidates: Prior candidate state; defaults to all values possible
        max_passes: Safety cap (default: H*W*digits)

    Returns:
        (candidates, stats) where stats = {"passes", "converged",
        "cells_filled", "cells_open", "cells_empty"}
    """
    if candidates is None:
        candidates = CandidateSet.for_board(board)
    if max_passes is None:
        max_passes = board.H * board.W * board.digits

    filled_before = board.count_filled()
    converged = False
    passes = 0

    while passes < max_passes:
        passes += 1
        run_pass(rules, board, candidates)
        if not candidates.apply_uniques(board):
            converged = True
            break

    stats = {
        "passes": passes,
        "converged": converged,
        "cells_filled": board.count_filled() - filled_before,
        "cells_open": board.count_open(),
        "cells_empty": candidates.count_empty(board),
    }
    return candidates, stats


# ==============================================================================
# Convenience Solve
# ==============================================================================

@dataclass
class SolveResult:
    """Result of propagating a puzzle to its fixed point."""
    board: Board
    candidates: CandidateSet
    stats: Dict
    conflicts: List[Tuple[str, int]]
    timing_ms: int

    @property
    def solved(self) -> bool:
        return self.board.is_complete() and not self.conflicts


def solve_puzzle(puzzle: Grid,
                 *,
                 rules: Optional[List[Rule]] = None,
                 max_passes: Optional[int] = None) -> SolveResult:
    """
    Propagate a puzzle without touching the caller's grid.

    An unsolved or contradictory puzzle is not an error: the result just
    has open cells (and possibly empty masks) in its stats.
    """
    t_start = time.time()

    board = Board.from_grid(puzzle)
    if rules is None:
        if board.data.shape != (DIGITS, DIGITS):
            raise ValueError(f"Default rules need a {DIGITS}x{DIGITS} puzzle, got {board.H}x{board.W}")
        rules = build_9x9_rules()

    candidates, stats = run_propagation(rules, board, max_passes=max_passes)

    regions = _regions_of(rules)
    conflicts = find_region_conflicts(board, regions)

    return SolveResult(board, candidates, stats, conflicts,
                       int((time.time() - t_start) * 1000))


def _regions_of(rules: List[Rule]) -> List[Region]:
    """Distinct regions referenced by rules, in first-seen order."""
    regions = []
    seen = set()
    for rule in rules:
        if rule.region is not None and id(rule.region) not in seen:
            seen.add(id(rule.region))
            regions.append(rule.region)
    return regions
