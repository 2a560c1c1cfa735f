"""Move history, undo stack, move queue and captured-piece list."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Move:
    """One move as played."""

    piece: str
    from_row: int
    from_col: int
    to_row: int
    to_col: int
    captured: str


class MoveHistory:
    """Moves played, iterated newest first."""

    def __init__(self) -> None:
        self._moves: deque[Move] = deque()

    def add(
        self,
        piece: str,
        from_row: int,
        from_col: int,
        to_row: int,
        to_col: int,
        captured: str,
    ) -> Move:
        """Record a move at the front of the history and return it."""
        move = Move(piece, from_row, from_col, to_row, to_col, captured)
        self._moves.appendleft(move)
        return move

    def clear(self) -> None:
        self._moves.clear()

    def __iter__(self) -> Iterator[Move]:
        return iter(self._moves)

    def __len__(self) -> int:
        return len(self._moves)


class UndoStack:
    """Snapshots of the board taken before each move."""

    def __init__(self) -> None:
        self._boards: list[list[list[str]]] = []

    def push(self, board: list[list[str]]) -> None:
        """Save a copy of ``board``."""
        self._boards.append([row[:] for row in board])

    def pop(self, board: list[list[str]]) -> bool:
        """Restore the latest snapshot into ``board`` in place.

        Returns False, leaving ``board`` untouched, when nothing is saved.
        """
        if not self._boards:
            return False
        saved = self._boards.pop()
        for row, saved_row in zip(board, saved):
            row[:] = saved_row
        return True

    def __len__(self) -> int:
        return len(self._boards)


@dataclass(frozen=True)
class _QueuedMove:
    from_row: int
    from_col: int
    to_row: int
    to_col: int
    score: int


class MoveQueue:
    """First-in first-out queue of scored candidate moves."""

    def __init__(self) -> None:
        self._items: deque[_QueuedMove] = deque()

    def enqueue(self, from_row: int, from_col: int, to_row: int, to_col: int, score: int) -> None:
        self._items.append(_QueuedMove(from_row, from_col, to_row, to_col, score))

    def dequeue(self) -> tuple[int, int, int, int]:
        """Remove the oldest move and return its coordinates."""
        if not self._items:
            raise IndexError("dequeue from an empty move queue")
        item = self._items.popleft()
        return item.from_row, item.from_col, item.to_row, item.to_col

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class CapturedPieces:
    """Pieces taken so far, in capture order."""

    def __init__(self) -> None:
        self._pieces: list[str] = []

    def add(self, piece: str) -> None:
        self._pieces.append(piece)

    def drop_last(self) -> None:
        """Forget the most recent capture, if any."""
        if self._pieces:
            self._pieces.pop()

    def __iter__(self) -> Iterator[str]:
        return iter(self._pieces)

    def __len__(self) -> int:
        return len(self._pieces)