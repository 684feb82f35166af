#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sudoku Solver - Type Definitions
================================

Core types used throughout the solver:
- Grid: 2D integer array (0 = unknown, 1..9 = fixed value)
- Cell: (row, col) coordinate
"""

import numpy as np
from typing import Tuple

# =============================================================================
# Core Types
# =============================================================================

Grid = np.ndarray          # dtype=int, shape (H, W)
Cell = Tuple[int, int]     # (r, c)

# Canonical 9x9 shape
DIGITS = 9
BOX_ROWS = 3
BOX_COLS = 3

# =============================================================================
# Type Utilities
# =============================================================================

def G(lst) -> Grid:
    """Helper to build a grid from nested lists."""
    return np.array(lst, dtype=int)

def check_grid(g: Grid):
    """
    Validate that g is a proper Grid.

    Raises:
        ValueError: if g is not a 2D int ndarray
    """
    if not (isinstance(g, np.ndarray) and np.issubdtype(g.dtype, np.integer) and g.ndim == 2):
        raise ValueError(f"Grid must be 2D int ndarray, got {getattr(g, 'ndim', None)}D input.")
