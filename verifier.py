"""Client for the remote Sudoku verification server."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter

from solver import Grid
from utils import board_to_payload

DEFAULT_VERIFY_URL = "http://127.0.0.1:4590/verify"
DEFAULT_MAX_CONNECTIONS = 8
DEFAULT_TIMEOUT = 30.0
VERIFIED_RESPONSE = "1"

log = logging.getLogger(__name__)


class GarbledResponseError(ValueError):
    """The server answered with a body that is not valid UTF-8."""


@dataclass
class VerificationSummary:
    total: int = 0
    verified: int = 0
    failed: int = 0

    @property
    def all_verified(self) -> bool:
        return self.verified == self.total


class PuzzleVerifier:
    """POST solved boards to the verification server.

    A single session is shared by all requests; its connection pool and the
    worker pool are both capped at ``max_connections``.
    """

    def __init__(
        self,
        url: str = DEFAULT_VERIFY_URL,
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        if max_connections < 1:
            raise ValueError(f"max_connections must be at least 1, got {max_connections}")
        self.url = url
        self.max_connections = max_connections
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else self._create_session(max_connections)

    @staticmethod
    def _create_session(max_connections: int) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=max_connections, pool_block=True)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"Content-Type": "application/json"})
        return session

    def verify_board(self, board: Sequence[Sequence[int]]) -> bool:
        """Return True if the server answers exactly "1" for this board."""
        response = self.session.post(self.url, json=board_to_payload(board), timeout=self.timeout)
        try:
            body = response.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise GarbledResponseError(f"Garbage server response ({len(response.content)} bytes)") from exc
        log.debug("Server returned %r (HTTP %d)", body, response.status_code)
        return body == VERIFIED_RESPONSE

    def _verify_counted(self, board: Sequence[Sequence[int]]) -> Optional[bool]:
        try:
            return self.verify_board(board)
        except (requests.RequestException, GarbledResponseError) as exc:
            log.error("Verification request failed: %s", exc)
            return None

    def verify_puzzles(self, boards: Iterable[Sequence[Sequence[int]]], mode: str = "pooled") -> VerificationSummary:
        """Verify every board, counting outcomes; one failed request never stops the batch."""
        if mode not in ("pooled", "sequential"):
            raise ValueError(f"Unknown verification mode: {mode}")
        pending = list(boards)
        if mode == "sequential" or self.max_connections == 1:
            results: List[Optional[bool]] = [self._verify_counted(board) for board in pending]
        else:
            with ThreadPoolExecutor(max_workers=self.max_connections) as pool:
                results = list(pool.map(self._verify_counted, pending))

        summary = VerificationSummary(total=len(results))
        for result in results:
            if result is None:
                summary.failed += 1
            elif result:
                summary.verified += 1
        log.info("Verified %d of %d puzzles (%d requests failed)", summary.verified, summary.total, summary.failed)
        return summary

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "PuzzleVerifier":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def verify_puzzles(
    boards: Iterable[Grid],
    max_connections: int = DEFAULT_MAX_CONNECTIONS,
    url: str = DEFAULT_VERIFY_URL,
) -> VerificationSummary:
    with PuzzleVerifier(url=url, max_connections=max_connections) as verifier:
        summary = verifier.verify_puzzles(boards)
    print(f"Verified {summary.verified} out of {summary.total}")
    return summary
