#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sudoku Solver - Receipts & Verification
=======================================

Every solve can be backed by receipts:
- Region conflicts: two solved cells sharing a value in one region
- Givens preserved: the engine never changes an input value
- Hashes: stable identifiers for the puzzle and the rule set
- receipts.jsonl: one JSON record per solve
"""

import json
import hashlib
from pathlib import Path
from datetime import datetime
from typing import Dict, List, Tuple

import numpy as np

from .types import Grid
from .board import Board
from .regions import Region

# =============================================================================
# Verification
# =============================================================================

def find_region_conflicts(board: Board, regions: List[Region]) -> List[Tuple[str, int]]:
    """
    Find values that appear more than once among a region's solved cells.

    Returns:
        List of (region name, value) pairs; empty if the board is consistent
    """
    conflicts = []
    for region in regions:
        seen = set()
        for (r, c) in region.positions:
            value = int(board.data[r, c])
            if value == 0:
                continue
            if value in seen:
                conflicts.append((region.name, value))
            seen.add(value)
    return conflicts


def verify_against_givens(puzzle: Grid, board: Board) -> bool:
    """Check that every non-zero cell of puzzle is unchanged on board."""
    puzzle = np.asarray(puzzle)
    if puzzle.shape != board.data.shape:
        return False
    givens = puzzle != 0
    return bool(np.array_equal(puzzle[givens], board.data[givens]))

# =============================================================================
# Hashes
# =============================================================================

def puzzle_sha(grid: Grid) -> str:
    """SHA-256 of the puzzle grid (canonical JSON)."""
    payload = {"grid": np.asarray(grid).tolist()}
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()


def rule_set_sha(rules: List) -> str:
    """SHA-256 of the rule sequence (names in pass order)."""
    if not rules:
        return hashlib.sha256(b"[]").hexdigest()
    payload = [{"name": rule.name} for rule in rules]
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()

# =============================================================================
# Receipt logging
# =============================================================================

def log_receipt(record: Dict, out_dir: str = None) -> None:
    """
    Write receipt record to JSONL file.

    Args:
        record: Dictionary with receipt data
        out_dir: Output directory (default: runs/YYYY-MM-DD)
    """
    if out_dir is None:
        date_str = datetime.now().strftime("%Y-%m-%d")
        out_dir = f"runs/{date_str}"

    Path(out_dir).mkdir(parents=True, exist_ok=True)
    receipt_path = Path(out_dir) / "receipts.jsonl"

    with open(receipt_path, "a") as f:
        f.write(json.dumps(record, sort_keys=True) + "\n")
