"""Batch Sudoku solver: read puzzles, solve them, and optionally verify them remotely."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO, Dict, List, Optional, Sequence

from puzzle_reader import PuzzleReader, UnexpectedEndOfInput
from solver import Grid, InvalidPuzzleError, SudokuSolver
from utils import print_board
from validator import is_valid
from verifier import DEFAULT_MAX_CONNECTIONS, DEFAULT_TIMEOUT, DEFAULT_VERIFY_URL, PuzzleVerifier

log = logging.getLogger(__name__)


def process_puzzle(
    index: int,
    board: Grid,
    solver: SudokuSolver,
    check: bool = False,
    show: bool = False,
) -> Dict[str, object]:
    """Solve one puzzle in place and describe what happened."""
    info: Dict[str, object] = {"index": index, "solved": False, "checked": None, "status": "idle"}
    try:
        solved = solver.solve_board(board)
    except InvalidPuzzleError as exc:
        log.warning("Puzzle %d skipped: %s", index, exc)
        info["status"] = solver.last_status
        return info

    info["status"] = solver.last_status
    if not solved:
        log.warning("Puzzle %d has no solution", index)
        return info

    info["solved"] = True
    if check:
        info["checked"] = is_valid(board)
        if not info["checked"]:
            log.error("Puzzle %d failed the validity check", index)
    if show:
        print_board(board)
    return info


def run(
    stream: BinaryIO,
    check: bool = False,
    show: bool = False,
    verify: bool = False,
    url: str = DEFAULT_VERIFY_URL,
    max_connections: int = DEFAULT_MAX_CONNECTIONS,
    timeout: float = DEFAULT_TIMEOUT,
    sequential: bool = False,
) -> int:
    solver = SudokuSolver()
    solved_boards: List[Grid] = []
    total = 0
    failed_checks = 0

    try:
        for index, board in enumerate(PuzzleReader(stream)):
            total += 1
            info = process_puzzle(index, board, solver, check=check, show=show)
            if info["solved"]:
                solved_boards.append(board)
            if info["checked"] is False:
                failed_checks += 1
    except UnexpectedEndOfInput as exc:
        log.error("Stopped reading puzzles: %s", exc)
        return 1

    print(f"Solved {len(solved_boards)} out of {total}")
    ok = len(solved_boards) == total and failed_checks == 0

    if verify:
        with PuzzleVerifier(url=url, max_connections=max_connections, timeout=timeout) as verifier:
            summary = verifier.verify_puzzles(solved_boards, mode="sequential" if sequential else "pooled")
        print(f"Verified {summary.verified} out of {summary.total}")
        ok = ok and summary.all_verified
    return 0 if ok else 1


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Solve Sudoku puzzles by backtracking and verify the results")
    parser.add_argument("puzzles", nargs="?", default=None, help="Puzzle file (default: read stdin)")
    parser.add_argument("--check", action="store_true", help="Validate every solution locally")
    parser.add_argument("--print", dest="show", action="store_true", help="Print every solved board")
    parser.add_argument("--verify", action="store_true", help="Submit solved boards to the verification server")
    parser.add_argument("--url", type=str, default=DEFAULT_VERIFY_URL, help=f"Verification endpoint (default: {DEFAULT_VERIFY_URL})")
    parser.add_argument(
        "--max-connections",
        type=int,
        default=DEFAULT_MAX_CONNECTIONS,
        help=f"Concurrent verification requests (default: {DEFAULT_MAX_CONNECTIONS})",
    )
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Per-request timeout in seconds")
    parser.add_argument("--sequential", action="store_true", help="Send verification requests one at a time")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    options = dict(
        check=args.check,
        show=args.show,
        verify=args.verify,
        url=args.url,
        max_connections=args.max_connections,
        timeout=args.timeout,
        sequential=args.sequential,
    )
    if args.puzzles is None:
        return run(sys.stdin.buffer, **options)
    with open(args.puzzles, "rb") as stream:
        return run(stream, **options)


if __name__ == "__main__":
    sys.exit(main())
