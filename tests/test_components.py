"""
Unit tests for the solver building blocks: masks, candidate set, regions,
rules, rendering and receipts.
"""

import json
import numpy as np
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sudoku_solver import (
    G, Board, CandidateSet,
    value_to_mask, mask_to_value, popcount, full_mask,
    Region, build_regions, build_9x9_regions,
    UNIQUE_BY_REGION_Rule, FILL_REGION_UNIQUELY_Rule, EXCLUDE_WHEN_SOLVED_Rule,
    build_rules, build_9x9_rules,
    render_board, render_candidates, parse_puzzle,
    find_region_conflicts, verify_against_givens,
    puzzle_sha, rule_set_sha, log_receipt,
    CANONICAL_PUZZLE
)


# ==============================================================================
# Value / Mask Conversion
# ==============================================================================

def test_value_mask_roundtrip_bounds():
    assert value_to_mask(1) == 0b1
    assert value_to_mask(9) == 0b100000000
    assert mask_to_value(0b1) == 1
    assert mask_to_value(0b100000000) == 9
    assert full_mask() == 511


def test_mask_to_value_rejects_zero_and_multi_bit():
    with pytest.raises(AssertionError):
        mask_to_value(0)
    with pytest.raises(AssertionError):
        mask_to_value(0b101)


def test_value_to_mask_rejects_out_of_range():
    with pytest.raises(AssertionError):
        value_to_mask(0)
    with pytest.raises(AssertionError):
        value_to_mask(10)


# ==============================================================================
# Candidate Set
# ==============================================================================

def test_default_candidates_all_bits():
    C = CandidateSet(9, 9)
    assert C.data.shape == (9, 9)
    assert np.all(C.data == 511)
    assert C.remaining_candidates(0, 0) == 9
    assert C.total_candidates() == 81 * 9


def test_exclude_candidate_is_idempotent():
    C = CandidateSet(9, 9)
    C.exclude_candidate(1, 2, 5)
    assert C.mask(1, 2) == 511 & ~0b10000
    assert not C.has_candidate(1, 2, 5)

    # Already clear → no-op
    C.exclude_candidate(1, 2, 5)
    assert C.remaining_candidates(1, 2) == 8
    assert C.get_set(1, 2) == {1, 2, 3, 4, 6, 7, 8, 9}


def test_set_exclusive_and_mark_as_solved():
    C = CandidateSet(9, 9)
    C.set_exclusive_candidate(4, 4, 6)
    assert C.get_set(4, 4) == {6}
    assert C.remaining_candidates(4, 4) == 1

    C.mark_as_solved(4, 4)
    assert C.mask(4, 4) == 0
    assert C.remaining_candidates(4, 4) == 0


def test_count_empty_only_counts_open_cells():
    board = Board(9, 9)
    board.set_cell(0, 0, 3)
    C = CandidateSet(9, 9)
    C.mark_as_solved(0, 0)   # solved, not a contradiction
    C.mark_as_solved(5, 5)   # open with nothing left
    assert C.count_empty(board) == 1


def test_candidate_copy_is_independent():
    C = CandidateSet(9, 9)
    D = C.copy()
    D.exclude_candidate(0, 0, 1)
    assert C != D
    assert C.mask(0, 0) == 511


def test_popcount():
    assert popcount(0) == 0
    assert popcount(511) == 9
    assert popcount(np.uint16(0b1010)) == 2


# ==============================================================================
# Board
# ==============================================================================

def test_board_from_grid_and_set_cell():
    board = Board.from_grid(CANONICAL_PUZZLE)
    assert board.count_filled() == int(np.count_nonzero(CANONICAL_PUZZLE))
    assert board.get(0, 4) == 8

    board.set_cell(0, 0, 1)
    assert board.get(0, 0) == 1
    assert CANONICAL_PUZZLE[0, 0] == 0, "Board must not alias its input grid"


def test_board_rejects_out_of_range_values():
    with pytest.raises(ValueError):
        Board.from_grid([[0, 10], [0, 0]])
    with pytest.raises(ValueError):
        Board.from_grid([[0, -1], [0, 0]])


# ==============================================================================
# Regions
# ==============================================================================

def test_build_9x9_regions_shape():
    regions = build_9x9_regions()
    assert len(regions) == 27
    assert all(len(region) == 9 for region in regions)

    # Every cell lies in exactly one row, one column, one box
    counts = np.zeros((9, 9), dtype=int)
    for region in regions:
        for (r, c) in region:
            counts[r, c] += 1
    assert np.all(counts == 3)


def test_region_order_rows_cols_boxes():
    regions = build_9x9_regions()
    assert regions[0].positions == tuple((0, c) for c in range(9))
    assert regions[9].positions == tuple((r, 0) for r in range(9))
    assert regions[18].positions == ((0, 0), (0, 1), (0, 2),
                                     (1, 0), (1, 1), (1, 2),
                                     (2, 0), (2, 1), (2, 2))
    assert (4, 4) in regions[22]


def test_build_regions_general_shape():
    regions = build_regions(6, 2, 3)
    assert len(regions) == 18
    assert regions[12].positions == ((0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2))


def test_build_regions_rejects_bad_boxes():
    with pytest.raises(ValueError):
        build_regions(9, 2, 3)


def test_region_is_immutable():
    region = Region("row 0", ((0, 0), (0, 1)))
    with pytest.raises(Exception):
        region.positions = ()


# ==============================================================================
# Rules
# ==============================================================================

def test_rule_order_and_shared_regions():
    regions = build_9x9_regions()
    rules = build_rules(regions)

    assert len(rules) == 1 + 27 + 27
    assert isinstance(rules[0], EXCLUDE_WHEN_SOLVED_Rule)
    assert rules[0].region is None
    assert all(isinstance(r, UNIQUE_BY_REGION_Rule) for r in rules[1:28])
    assert all(isinstance(r, FILL_REGION_UNIQUELY_Rule) for r in rules[28:])

    # Both per-region rules hold the very same Region object
    for i, region in enumerate(regions):
        assert rules[1 + i].region is region
        assert rules[28 + i].region is region


def test_unique_by_region_excludes_solved_values():
    board = Board(9, 9)
    board.set_cell(0, 3, 5)
    C = CandidateSet(9, 9)
    rule = UNIQUE_BY_REGION_Rule("UNIQUE_BY_REGION[row 0]", build_9x9_regions()[0])

    rule.visit(board, C)

    for c in range(9):
        if c == 3:
            assert C.has_candidate(0, c, 5), "The solved cell itself is left alone"
        else:
            assert not C.has_candidate(0, c, 5)
    # Other rows untouched
    assert C.mask(1, 0) == 511


def test_fill_region_uniquely_hidden_single():
    """Only (0, 6) can hold 7 in row 0 → it becomes exactly 7."""
    board = Board(9, 9)
    C = CandidateSet(9, 9)
    for c in range(9):
        if c != 6:
            C.exclude_candidate(0, c, 7)

    rule = FILL_REGION_UNIQUELY_Rule("FILL_REGION_UNIQUELY[row 0]", build_9x9_regions()[0])
    rule.visit(board, C)

    assert C.get_set(0, 6) == {7}
    for c in range(9):
        if c != 6:
            assert not C.has_candidate(0, c, 7)


def test_fill_region_uniquely_skips_ties():
    """Two eligible cells for 7 → nothing happens for 7."""
    board = Board(9, 9)
    C = CandidateSet(9, 9)
    for c in range(9):
        if c not in (2, 6):
            C.exclude_candidate(0, c, 7)
    before = C.copy()

    rule = FILL_REGION_UNIQUELY_Rule("FILL_REGION_UNIQUELY[row 0]", build_9x9_regions()[0])
    rule.visit(board, C)

    assert C == before


def test_exclude_when_solved_never_touches_board():
    board = Board.from_grid(CANONICAL_PUZZLE)
    snapshot = board.copy()
    C = CandidateSet(9, 9)
    for rule in build_9x9_rules():
        rule.visit(board, C)
    assert board == snapshot


# ==============================================================================
# Rendering
# ==============================================================================

def test_render_board():
    board = Board.from_grid(G([[1, 0], [0, 2]]), digits=2)
    assert render_board(board) == "1 . \n. 2 \n"


def test_render_candidates():
    C = CandidateSet(1, 2)
    C.set_exclusive_candidate(0, 0, 3)
    C.mark_as_solved(0, 1)
    assert render_candidates(C) == "--3------ ---------\n"


def test_parse_puzzle():
    text = "000080000005603900084000270030100050500030002060005010019000560008402700000060000"
    assert np.array_equal(parse_puzzle(text), CANONICAL_PUZZLE)
    assert np.array_equal(parse_puzzle(text.replace("0", ".")), CANONICAL_PUZZLE)


def test_parse_puzzle_rejects_bad_input():
    with pytest.raises(ValueError):
        parse_puzzle("123")
    with pytest.raises(ValueError):
        parse_puzzle("x" * 81)


# ==============================================================================
# Receipts
# ==============================================================================

def test_find_region_conflicts():
    board = Board(9, 9)
    board.set_cell(0, 0, 4)
    board.set_cell(0, 8, 4)
    conflicts = find_region_conflicts(board, build_9x9_regions())
    assert conflicts == [("row 0", 4)]


def test_verify_against_givens():
    board = Board.from_grid(CANONICAL_PUZZLE)
    board.set_cell(0, 0, 1)
    assert verify_against_givens(CANONICAL_PUZZLE, board)

    board.data[0, 4] = 9
    assert not verify_against_givens(CANONICAL_PUZZLE, board)


def test_hashes_are_stable():
    assert puzzle_sha(CANONICAL_PUZZLE) == puzzle_sha(CANONICAL_PUZZLE.copy())
    assert puzzle_sha(CANONICAL_PUZZLE) != puzzle_sha(np.zeros((9, 9), dtype=int))
    assert rule_set_sha(build_9x9_rules()) == rule_set_sha(build_9x9_rules())
    assert len(rule_set_sha([])) == 64


def test_log_receipt_appends_jsonl(tmp_path):
    log_receipt({"puzzle": "a", "status": "partial"}, out_dir=str(tmp_path))
    log_receipt({"puzzle": "b", "status": "solved"}, out_dir=str(tmp_path))

    lines = (tmp_path / "receipts.jsonl").read_text().splitlines()
    assert [json.loads(line)["puzzle"] for line in lines] == ["a", "b"]


def test_parse_puzzle_rejects_non_ascii_digits():
    with pytest.raises(ValueError):
        parse_puzzle("٣" + "0" * 80)   # ARABIC-INDIC DIGIT THREE


def test_board_rejects_non_2d_input():
    with pytest.raises(ValueError):
        Board.from_grid([1, 2, 3])
    with pytest.raises(ValueError):
        Board.from_grid(5)
