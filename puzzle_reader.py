"""Read 9x9 puzzles from a byte stream.

A puzzle is 81 bytes, b'1'-b'9' for clues and b'.' for blanks, read in
row-major order. Any other byte (newlines, separators, headers in any
encoding) is skipped, so both one-line and grid-shaped files work.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional

from solver import Grid

log = logging.getLogger(__name__)

_CLUES = b"123456789"
_BLANK = b"."


class UnexpectedEndOfInput(EOFError):
    """The stream ended partway through a puzzle."""

    def __init__(self, cells_read: int) -> None:
        super().__init__(f"Unexpected end of input after {cells_read} of 81 cells")
        self.cells_read = cells_read


def read_puzzle(stream: BinaryIO) -> Optional[Grid]:
    """Return the next puzzle in ``stream``, or None when no puzzle is left."""
    byte = stream.read(1)
    while byte and byte not in _CLUES and byte != _BLANK:
        byte = stream.read(1)
    if not byte:
        return None

    cells: List[int] = []
    while True:
        if byte in _CLUES:
            cells.append(byte[0] - ord("0"))
        elif byte == _BLANK:
            cells.append(0)
        if len(cells) == 81:
            break
        byte = stream.read(1)
        if not byte:
            raise UnexpectedEndOfInput(len(cells))
    return [cells[row * 9 : (row + 1) * 9] for row in range(9)]


class PuzzleReader:
    """Iterate over every puzzle in a stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self.count = 0

    def __iter__(self) -> Iterator[Grid]:
        return self

    def __next__(self) -> Grid:
        puzzle = read_puzzle(self.stream)
        if puzzle is None:
            log.debug("Reached end of input after %d puzzles", self.count)
            raise StopIteration
        self.count += 1
        return puzzle


def read_puzzles(path: str) -> List[Grid]:
    puzzle_path = Path(path).expanduser()
    if not puzzle_path.exists():
        raise FileNotFoundError(f"Unable to read puzzles at {path}")
    with puzzle_path.open("rb") as stream:
        return list(PuzzleReader(stream))
