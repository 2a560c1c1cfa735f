"""Saving and loading a game as plain text."""

from __future__ import annotations

import os
import re

from .board import EMPTY, WHITE, Game
from .history import MoveHistory

_MOVE_LINE = re.compile(r"(.) (-?\d+) (-?\d+) (-?\d+) (-?\d+) (.)")


def save_game(game: Game, history: MoveHistory, path: str | os.PathLike[str]) -> None:
    """Write the turn and then each move of ``history`` in its iteration order."""
    with open(path, "w", encoding="utf-8", newline="\n") as out:
        out.write(f"{game.turn}\n")
        for move in history:
            out.write(
                f"{move.piece} {move.from_row} {move.from_col} "
                f"{move.to_row} {move.to_col} {move.captured}\n"
            )


def load_game(game: Game, history: MoveHistory, path: str | os.PathLike[str]) -> None:
    """Reset ``game`` and ``history`` and replay the moves stored at ``path``.

    Reading stops at the first line that is not a move.
    """
    with open(path, encoding="utf-8", newline="") as source:
        lines = [line.rstrip("\r\n") for line in source]

    game.reset()
    history.clear()
    if not lines:
        return

    try:
        game.turn = int(lines[0].strip())
    except ValueError:
        game.turn = WHITE

    for line in lines[1:]:
        match = _MOVE_LINE.fullmatch(line)
        if match is None:
            break
        piece, captured = match.group(1), match.group(6)
        from_row, from_col, to_row, to_col = (int(match.group(i)) for i in range(2, 6))
        history.add(piece, from_row, from_col, to_row, to_col, captured)
        game.board[to_row][to_col] = piece
        game.board[from_row][from_col] = EMPTY