#!/usr/bin/env python3
"""
Run the propagation solver on one puzzle or a dataset of puzzles.

Prints the propagated board(s) and writes receipts.jsonl (one record per
puzzle) for debugging and analysis.

Usage:
    python scripts/solve_puzzle.py
    python scripts/solve_puzzle.py --puzzle=000080000005603900084000270030100050500030002060005010019000560008402700000060000 --candidates
    python scripts/solve_puzzle.py --dataset=data/puzzles.json --output=runs/batch
"""

import sys
import json
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from sudoku_solver import (
    Board, DIGITS, CANONICAL_PUZZLE,
    build_9x9_rules, solve_puzzle,
    parse_puzzle, render_board, render_candidates,
    verify_against_givens, puzzle_sha, rule_set_sha, log_receipt
)


def load_puzzles(dataset_path: str) -> dict:
    """
    Load {puzzle_id: puzzle} from a JSON file.

    Each puzzle is either an 81-character string or a 9x9 list of lists.

    Raises:
        ValueError: if any puzzle is malformed (checked before anything is solved)
    """
    with open(dataset_path) as f:
        raw = json.load(f)

    puzzles = {}
    for puzzle_id, value in raw.items():
        if isinstance(value, str):
            try:
                puzzles[puzzle_id] = parse_puzzle(value)
            except ValueError as e:
                raise ValueError(f"[{puzzle_id}] {e}") from e
        else:
            try:
                board = Board.from_grid(value)
            except ValueError as e:
                raise ValueError(f"[{puzzle_id}] {e}") from e
            if board.data.shape != (DIGITS, DIGITS):
                raise ValueError(f"[{puzzle_id}] Puzzle must be {DIGITS}x{DIGITS}, got {board.H}x{board.W}")
            puzzles[puzzle_id] = board.data
    return puzzles


def run_puzzles(puzzles: dict, output_dir: str = None, show_candidates: bool = False,
                verbose: bool = True) -> int:
    """
    Solve every puzzle, print results and log receipts.

    Returns:
        Number of puzzles fully solved
    """
    rules = build_9x9_rules()
    rules_sha = rule_set_sha(rules)
    solved_count = 0
    total_count = len(puzzles)

    if verbose:
        print("=" * 70)
        print("Sudoku Solver - Candidate Propagation")
        print(f"Puzzles: {total_count}")
        if output_dir:
            print(f"Output: {output_dir}")
        print("=" * 70)

    for idx, (puzzle_id, puzzle) in enumerate(puzzles.items(), 1):
        result = solve_puzzle(puzzle, rules=rules)

        if result.solved:
            status = "solved"
            solved_count += 1
        else:
            status = "partial"

        receipt = {
            "puzzle": puzzle_id,
            "status": status,
            "fp": result.stats,
            "timing_ms": result.timing_ms,
            "conflicts": [list(c) for c in result.conflicts],
            "givens_preserved": verify_against_givens(puzzle, result.board),
            "board": result.board.to_list(),
            "hashes": {
                "puzzle_sha": puzzle_sha(puzzle),
                "rule_set_sha": rules_sha
            }
        }
        log_receipt(receipt, out_dir=output_dir)

        print(f"\n[{puzzle_id}] {status}: filled {result.stats['cells_filled']} cells "
              f"in {result.stats['passes']} passes, {result.stats['cells_open']} open")
        print(render_board(result.board), end="")
        if show_candidates:
            print()
            print(render_candidates(result.candidates), end="")

        if verbose and idx % 10 == 0:
            print(f"Progress: {idx}/{total_count} ({100*idx/total_count:.1f}%), Solved: {solved_count}")

    if verbose:
        print(f"\n{'='*70}")
        print(f"FINAL: Solved {solved_count}/{total_count}")
        print(f"{'='*70}")

    return solved_count


def main():
    parser = argparse.ArgumentParser(description="Sudoku candidate-propagation solver")
    parser.add_argument('--puzzle', type=str, default=None,
                        help='81-character puzzle string (0 or . for blanks)')
    parser.add_argument('--dataset', type=str, default=None,
                        help='JSON file mapping puzzle id to puzzle')
    parser.add_argument('--output', type=str, default=None,
                        help='Receipt directory (default: runs/YYYY-MM-DD)')
    parser.add_argument('--candidates', action='store_true',
                        help='Also print the remaining candidate masks')
    parser.add_argument('--quiet', action='store_true', help='Suppress banners')
    args = parser.parse_args()

    try:
        if args.dataset:
            puzzles = load_puzzles(args.dataset)
        elif args.puzzle:
            puzzles = {"puzzle": parse_puzzle(args.puzzle)}
        else:
            puzzles = {"canonical": CANONICAL_PUZZLE}
    except ValueError as e:
        parser.error(str(e))

    run_puzzles(puzzles, output_dir=args.output, show_candidates=args.candidates,
                verbose=not args.quiet)


if __name__ == "__main__":
    main()
