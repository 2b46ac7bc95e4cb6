"""Sudoku puzzle checker for N x N puzzles where N is a perfect square.

A puzzle is complete when it contains no zeros.  A complete puzzle is valid
when every row, every column and every box holds each of 1..N exactly once.
"""

from __future__ import annotations

import math
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

Grid = list[list[int]]


class PuzzleError(ValueError):
    """Raised when a puzzle cannot be read or has an unusable shape."""


@dataclass(frozen=True)
class CheckResult:
    """Outcome of checking a puzzle; ``valid`` is only meaningful if complete."""

    complete: bool
    valid: bool


def parse_puzzle(text: str) -> Grid:
    """Parse a puzzle: its size N followed by N*N whitespace-separated numbers."""
    try:
        numbers = [int(token) for token in text.split()]
    except ValueError as exc:
        raise PuzzleError(f"puzzle contains a non-numeric value: {exc}") from None
    if not numbers:
        raise PuzzleError("puzzle is empty")
    size, cells = numbers[0], numbers[1:]
    if size < 1:
        raise PuzzleError(f"puzzle size must be positive, got {size}")
    if len(cells) < size * size:
        raise PuzzleError(
            f"puzzle of size {size} needs {size * size} values, got {len(cells)}"
        )
    return [cells[start:start + size] for start in range(0, size * size, size)]


def read_puzzle(path) -> Grid:
    """Read a puzzle from the file at ``path``."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise PuzzleError(f"Could not open file {path}") from exc
    return parse_puzzle(text)


def format_puzzle(grid: Sequence[Sequence[int]]) -> str:
    """Render a puzzle the way it is printed: size line, rows, blank line."""
    lines = [f"{len(grid)}\n"]
    lines.extend("".join(f"{value} " for value in row) + "\n" for row in grid)
    lines.append("\n")
    return "".join(lines)


def _holds_all_digits(cells, size: int) -> bool:
    cells = list(cells)
    return len(cells) == size and set(cells) == set(range(1, size + 1))


def is_complete(grid: Sequence[Sequence[int]]) -> bool:
    """Return True when the grid holds no zeros."""
    return all(value != 0 for row in grid for value in row)


def rows_valid(grid: Sequence[Sequence[int]]) -> bool:
    """Return True when every row holds each of 1..N exactly once."""
    size = len(grid)
    return all(_holds_all_digits(row, size) for row in grid)


def columns_valid(grid: Sequence[Sequence[int]]) -> bool:
    """Return True when every column holds each of 1..N exactly once."""
    size = len(grid)
    return all(_holds_all_digits(column, size) for column in zip(*grid))


def _box_size(size: int) -> int:
    box = math.isqrt(size)
    if box * box != size:
        raise PuzzleError(f"puzzle size {size} is not a perfect square")
    return box


def subgrid_valid(grid: Sequence[Sequence[int]], row: int, column: int) -> bool:
    """Return True when the box whose top-left cell is (row, column) is valid.

    Coordinates are zero-based.
    """
    size = len(grid)
    box = _box_size(size)
    cells = (
        value
        for line in grid[row:row + box]
        for value in line[column:column + box]
    )
    return _holds_all_digits(cells, size)


def _check_shape(grid: Sequence[Sequence[int]]) -> int:
    size = len(grid)
    if size == 0:
        raise PuzzleError("puzzle is empty")
    if any(len(row) != size for row in grid):
        raise PuzzleError("puzzle is not square")
    return _box_size(size)


def check_puzzle(grid: Sequence[Sequence[int]]) -> CheckResult:
    """Check completeness and, for a complete puzzle, validity.

    Rows, columns and each box are checked concurrently.
    """
    box = _check_shape(grid)
    size = len(grid)
    with ThreadPoolExecutor() as pool:
        if not pool.submit(is_complete, grid).result():
            return CheckResult(complete=False, valid=False)
        jobs = [pool.submit(rows_valid, grid), pool.submit(columns_valid, grid)]
        jobs.extend(
            pool.submit(subgrid_valid, grid, row, column)
            for row in range(0, size, box)
            for column in range(0, size, box)
        )
        valid = all(job.result() for job in jobs)
    return CheckResult(complete=True, valid=valid)


def main(argv=None) -> int:
    """Check the puzzle file named on the command line and print the verdict."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: sudoku puzzle.txt")
        return 1
    try:
        grid = read_puzzle(args[0])
        result = check_puzzle(grid)
    except PuzzleError as exc:
        print(exc)
        return 1
    print(f"Complete puzzle? {str(result.complete).lower()}")
    if result.complete:
        print(f"Valid puzzle? {str(result.valid).lower()}")
    print(format_puzzle(grid), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())