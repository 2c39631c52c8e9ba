"""Test cases for the backtracking solver."""
import copy
import random
import unittest

from puzzles import (
    DEAD_END_PUZZLE,
    MINIMAL_PUZZLE,
    MINIMAL_SOLUTION,
    WIKI_PUZZLE,
    WIKI_SOLUTION,
    empty_grid,
    to_grid,
)
from solver import InvalidPuzzleError, SudokuSolver, solve_puzzle
from validator import is_valid


class TestSudokuSolver(unittest.TestCase):
    def setUp(self):
        self.solver = SudokuSolver()

    def test_solves_reference_puzzle(self):
        board = to_grid(WIKI_PUZZLE)
        self.assertTrue(self.solver.solve_board(board))
        self.assertEqual(board, to_grid(WIKI_SOLUTION))
        self.assertEqual(self.solver.last_status, "solved")

    def test_solves_minimal_puzzle_to_unique_solution(self):
        board = to_grid(MINIMAL_PUZZLE)
        self.assertEqual(sum(1 for row in board for value in row if value), 17)
        self.assertTrue(self.solver.solve_board(board))
        self.assertEqual(board, to_grid(MINIMAL_SOLUTION))

    def test_empty_board_solves_to_valid_grid(self):
        board = empty_grid()
        self.assertTrue(solve_puzzle(board))
        self.assertTrue(is_valid(board))
        # Row-major order with ascending digits fixes the first row.
        self.assertEqual(board[0], [1, 2, 3, 4, 5, 6, 7, 8, 9])

    def test_clues_are_never_overwritten(self):
        puzzle = to_grid(WIKI_PUZZLE)
        board = copy.deepcopy(puzzle)
        self.assertTrue(self.solver.solve_board(board))
        for row in range(9):
            for col in range(9):
                if puzzle[row][col]:
                    self.assertEqual(board[row][col], puzzle[row][col])

    def test_blanked_solution_is_recovered(self):
        solution = to_grid(WIKI_SOLUTION)
        board = copy.deepcopy(solution)
        for row in range(9):
            for col in range(9):
                if (row * 9 + col) % 3 != 0:
                    board[row][col] = 0
        self.assertTrue(self.solver.solve_board(board))
        self.assertTrue(is_valid(board))

    def test_full_valid_board_is_already_solved(self):
        board = to_grid(WIKI_SOLUTION)
        self.assertTrue(self.solver.solve_board(board))
        self.assertEqual(self.solver.attempts, 0)

    def test_unsolvable_board_is_restored(self):
        board = to_grid(DEAD_END_PUZZLE)
        original = copy.deepcopy(board)
        self.assertFalse(self.solver.solve_board(board))
        self.assertEqual(board, original)
        self.assertEqual(self.solver.last_status, "unsolved")
        self.assertEqual(self.solver.attempts, 1)

    def test_duplicate_in_row_is_rejected(self):
        board = empty_grid()
        board[0][0] = 5
        board[0][1] = 5
        original = copy.deepcopy(board)
        with self.assertRaises(InvalidPuzzleError) as ctx:
            self.solver.solve_board(board)
        self.assertEqual((ctx.exception.row, ctx.exception.col, ctx.exception.digit), (0, 1, 5))
        self.assertEqual(board, original)
        self.assertEqual(self.solver.last_status, "invalid")
        self.assertEqual(self.solver.attempts, 0)

    def test_duplicate_in_column_and_subgrid_is_rejected(self):
        column_clash = empty_grid()
        column_clash[0][4] = 7
        column_clash[8][4] = 7
        subgrid_clash = empty_grid()
        subgrid_clash[3][3] = 2
        subgrid_clash[5][5] = 2
        for board in (column_clash, subgrid_clash):
            with self.subTest(board=board):
                with self.assertRaises(InvalidPuzzleError):
                    self.solver.solve_board(board)

    def test_fully_duplicated_row_is_rejected(self):
        board = empty_grid()
        board[4] = [3] * 9
        with self.assertRaises(ValueError):
            solve_puzzle(board)

    def test_wrong_clue_unwinds_deep_search(self):
        # Each clue agrees with its row, column and block but rules out the unique solution.
        for row, col, digit in ((8, 6, 3), (7, 2, 2)):
            with self.subTest(cell=(row, col), digit=digit):
                board = to_grid(WIKI_PUZZLE)
                board[row][col] = digit
                original = copy.deepcopy(board)
                self.assertFalse(self.solver.solve_board(board))
                self.assertEqual(board, original)
                self.assertEqual(self.solver.last_status, "unsolved")
                self.assertGreater(self.solver.attempts, 500)

    def test_random_blankings_are_completed(self):
        solution = to_grid(WIKI_SOLUTION)
        for seed in range(5):
            with self.subTest(seed=seed):
                rng = random.Random(seed)
                board = copy.deepcopy(solution)
                for cell in rng.sample(range(81), 40):
                    board[cell // 9][cell % 9] = 0
                puzzle = copy.deepcopy(board)
                self.assertTrue(self.solver.solve_board(board))
                self.assertTrue(is_valid(board))
                for row in range(9):
                    for col in range(9):
                        if puzzle[row][col]:
                            self.assertEqual(board[row][col], puzzle[row][col])

    def test_status_resets_between_calls(self):
        with self.assertRaises(InvalidPuzzleError):
            self.solver.solve_board([[1] * 9] + empty_grid()[1:])
        board = to_grid(WIKI_PUZZLE)
        self.assertTrue(self.solver.solve_board(board))
        self.assertEqual(self.solver.last_status, "solved")


if __name__ == "__main__":
    unittest.main()
