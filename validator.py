"""Independent check that a board is a complete, valid Sudoku solution."""
from __future__ import annotations

from typing import Sequence

import numpy as np

_FULL_UNIT = np.arange(1, 10)


def _blocks(grid: np.ndarray) -> np.ndarray:
    """Rearrange the grid so each row holds one 3x3 block, in row-major block order."""
    return grid.reshape(3, 3, 3, 3).swapaxes(1, 2).reshape(9, 9)


def is_valid(board: Sequence[Sequence[int]]) -> bool:
    """Return True only if every row, column and block is a permutation of 1-9.

    Empty cells (0) make the board invalid. This scans the board from scratch
    and shares nothing with the solver's bookkeeping.
    """
    try:
        grid = np.asarray(board, dtype=np.int64)
    except (TypeError, ValueError):
        # Ragged rows or non-integer cells.
        return False
    if grid.shape != (9, 9):
        return False
    if ((grid < 1) | (grid > 9)).any():
        return False
    for units in (grid, grid.T, _blocks(grid)):
        if not (np.sort(units, axis=1) == _FULL_UNIT).all():
            return False
    return True
