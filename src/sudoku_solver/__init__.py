"""
Sudoku Solver - Candidate Propagation

Logical-deduction solver: per-cell candidate bitmasks narrowed by rules
until a fixed point. No backtracking.
"""

from .types import Grid, Cell, G, DIGITS, BOX_ROWS, BOX_COLS
from .board import Board
from .candidates import (
    CandidateSet, value_to_mask, mask_to_value, popcount, full_mask
)
from .regions import Region, build_regions, build_9x9_regions
from .rules import (
    Rule,
    EXCLUDE_WHEN_SOLVED_Rule,
    UNIQUE_BY_REGION_Rule,
    FILL_REGION_UNIQUELY_Rule,
    build_rules,
    build_9x9_rules
)
from .engine import run_pass, run_propagation, SolveResult, solve_puzzle
from .receipts import (
    find_region_conflicts, verify_against_givens,
    puzzle_sha, rule_set_sha, log_receipt
)
from .render import render_board, render_candidates, parse_puzzle
from .puzzles import CANONICAL_PUZZLE

__all__ = [
    # Types
    'Grid', 'Cell', 'G', 'DIGITS', 'BOX_ROWS', 'BOX_COLS',

    # Board & candidates
    'Board',
    'CandidateSet', 'value_to_mask', 'mask_to_value', 'popcount', 'full_mask',

    # Regions & rules
    'Region', 'build_regions', 'build_9x9_regions',
    'Rule', 'EXCLUDE_WHEN_SOLVED_Rule', 'UNIQUE_BY_REGION_Rule',
    'FILL_REGION_UNIQUELY_Rule', 'build_rules', 'build_9x9_rules',

    # Engine
    'run_pass', 'run_propagation', 'SolveResult', 'solve_puzzle',

    # Receipts
    'find_region_conflicts', 'verify_against_givens',
    'puzzle_sha', 'rule_set_sha', 'log_receipt',

    # Rendering
    'render_board', 'render_candidates', 'parse_puzzle',
    'CANONICAL_PUZZLE',
]
