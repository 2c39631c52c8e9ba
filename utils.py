"""Utility helpers for subgrid lookup, debug printing, and JSON payloads."""
from __future__ import annotations

from typing import Dict, List, Sequence

# Row-major block numbering: 0 is the top-left 3x3 block, 8 the bottom-right.
_SUBGRID_TABLE = (
    (0, 0, 0, 1, 1, 1, 2, 2, 2),
    (0, 0, 0, 1, 1, 1, 2, 2, 2),
    (0, 0, 0, 1, 1, 1, 2, 2, 2),
    (3, 3, 3, 4, 4, 4, 5, 5, 5),
    (3, 3, 3, 4, 4, 4, 5, 5, 5),
    (3, 3, 3, 4, 4, 4, 5, 5, 5),
    (6, 6, 6, 7, 7, 7, 8, 8, 8),
    (6, 6, 6, 7, 7, 7, 8, 8, 8),
    (6, 6, 6, 7, 7, 7, 8, 8, 8),
)


def subgrid_index(row: int, col: int) -> int:
    """Return the 3x3 block (0-8) containing cell (row, col)."""
    return _SUBGRID_TABLE[row][col]


def format_board(board: Sequence[Sequence[int]]) -> str:
    """Render a board as nine lines of digits, '.' for empty cells, plus a blank line."""
    lines = ["".join(str(value) if value else "." for value in row) for row in board]
    return "\n".join(lines) + "\n\n"


def print_board(board: Sequence[Sequence[int]]) -> None:
    print(format_board(board), end="")


def board_to_payload(board: Sequence[Sequence[int]]) -> Dict[str, List[List[int]]]:
    """Build the verification request body; unfilled cells are sent as 0."""
    return {"content": [[int(value) for value in row] for row in board]}
