"""Backtracking Sudoku solver with row/column/subgrid bitsets."""
from __future__ import annotations

import logging
from typing import List

from utils import subgrid_index

Grid = List[List[int]]

log = logging.getLogger(__name__)


class InvalidPuzzleError(ValueError):
    """The given clues already repeat a digit in a row, column or subgrid."""

    def __init__(self, row: int, col: int, digit: int) -> None:
        super().__init__(f"Invalid initial board: digit {digit} at ({row}, {col}) is already used")
        self.row = row
        self.col = col
        self.digit = digit


class SudokuSolver:
    """Depth-first solver that fills the board in place.

    Cells are visited in row-major order and digits are tried in ascending
    order, so an under-constrained puzzle always yields the same solution.
    """

    def __init__(self) -> None:
        self.attempts = 0
        self.last_status: str = "idle"

    def _reset_state(self) -> None:
        self.attempts = 0
        self.last_status = "idle"

    def solve_board(self, board: Grid) -> bool:
        """Solve ``board`` in place.

        Returns True with the board completed, or False with the board left
        exactly as it was passed in. Raises InvalidPuzzleError before touching
        anything if the clues contradict each other.
        """
        self._reset_state()
        row_used = [0] * 9
        col_used = [0] * 9
        grid_used = [0] * 9
        try:
            self._load_clues(board, row_used, col_used, grid_used)
        except InvalidPuzzleError:
            self.last_status = "invalid"
            raise

        if self._solve_from(board, 0, row_used, col_used, grid_used):
            self.last_status = "solved"
            log.debug("Solved after %d placements", self.attempts)
            return True
        self.last_status = "unsolved"
        log.debug("No solution after %d placements", self.attempts)
        return False

    def _load_clues(self, board: Grid, row_used: List[int], col_used: List[int], grid_used: List[int]) -> None:
        for row in range(9):
            for col in range(9):
                value = board[row][col]
                if value == 0:
                    continue
                bit = 1 << (value - 1)
                grid = subgrid_index(row, col)
                if (row_used[row] | col_used[col] | grid_used[grid]) & bit:
                    raise InvalidPuzzleError(row, col, value)
                row_used[row] |= bit
                col_used[col] |= bit
                grid_used[grid] |= bit

    def _solve_from(
        self,
        board: Grid,
        position: int,
        row_used: List[int],
        col_used: List[int],
        grid_used: List[int],
    ) -> bool:
        # Positions ahead of the search only ever hold clues.
        while position < 81 and board[position // 9][position % 9] != 0:
            position += 1
        if position == 81:
            return True

        row, col = divmod(position, 9)
        grid = subgrid_index(row, col)
        used = row_used[row] | col_used[col] | grid_used[grid]
        for value in range(1, 10):
            bit = 1 << (value - 1)
            if used & bit:
                continue
            board[row][col] = value
            row_used[row] |= bit
            col_used[col] |= bit
            grid_used[grid] |= bit
            self.attempts += 1
            if self._solve_from(board, position + 1, row_used, col_used, grid_used):
                return True
            board[row][col] = 0
            row_used[row] &= ~bit
            col_used[col] &= ~bit
            grid_used[grid] &= ~bit
        return False


def solve_puzzle(board: Grid) -> bool:
    """Solve ``board`` in place with a fresh solver."""
    return SudokuSolver().solve_board(board)
