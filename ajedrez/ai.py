"""Computer opponent: static evaluation, alpha-beta minimax and move choice."""

from __future__ import annotations

import random
from collections.abc import Callable, Iterator

from .board import (
    BLACK_BISHOP,
    BLACK_KING,
    BLACK_KNIGHT,
    BLACK_PAWN,
    BLACK_QUEEN,
    BLACK_ROOK,
    BOARD_SIZE,
    BLACK,
    WHITE_BISHOP,
    WHITE_KING,
    WHITE_KNIGHT,
    WHITE_PAWN,
    WHITE_QUEEN,
    WHITE_ROOK,
    Game,
    is_black,
    is_white,
)

INFINITY = 999999
DEFAULT_DEPTH = 2
SCORE_TOLERANCE = 20

_PIECE_VALUES = {
    WHITE_PAWN: 100,
    BLACK_PAWN: -100,
    WHITE_KNIGHT: 320,
    BLACK_KNIGHT: -320,
    WHITE_BISHOP: 330,
    BLACK_BISHOP: -330,
    WHITE_ROOK: 500,
    BLACK_ROOK: -500,
    WHITE_QUEEN: 900,
    BLACK_QUEEN: -900,
    WHITE_KING: 10000,
    BLACK_KING: -10000,
}
_CENTER = (3, 4)
_KNIGHT_COLUMNS = (1, 6)
_OPENING_MOVES = 10
_CENTER_BONUS = 20
_KNIGHT_BONUS = 30
_PAWN_BONUS = 25
_KING_DISTANCE_WEIGHT = 10
_MOBILITY_WEIGHT = 3
_REPETITION_PENALTY = 50

Coordinates = tuple[int, int, int, int]


def _material_and_placement(game: Game) -> int:
    score = 0
    half = BOARD_SIZE // 2
    opening = game.move_count < _OPENING_MOVES
    for row, cells in enumerate(game.board):
        for col, piece in enumerate(cells):
            score += _PIECE_VALUES.get(piece, 0)
            central = row in _CENTER and col in _CENTER
            if central:
                if is_white(piece):
                    score += _CENTER_BONUS
                elif is_black(piece):
                    score -= _CENTER_BONUS
            if piece in (WHITE_KING, BLACK_KING):
                distance = abs(row - half) + abs(col - half)
                weight = distance * _KING_DISTANCE_WEIGHT
                score += -weight if piece == WHITE_KING else weight
            if opening:
                if piece == WHITE_KNIGHT and row == 6 and col in _KNIGHT_COLUMNS:
                    score += _KNIGHT_BONUS
                if piece == BLACK_KNIGHT and row == 1 and col in _KNIGHT_COLUMNS:
                    score -= _KNIGHT_BONUS
                if piece == WHITE_PAWN and central:
                    score += _PAWN_BONUS
                if piece == BLACK_PAWN and central:
                    score -= _PAWN_BONUS
    return score


def _mobility(game: Game) -> int:
    score = 0
    for row, cells in enumerate(game.board):
        for col, piece in enumerate(cells):
            if not (is_white(piece) or is_black(piece)):
                continue
            count = sum(
                1
                for to_row in range(BOARD_SIZE)
                for to_col in range(BOARD_SIZE)
                if game.is_valid_move(row, col, to_row, to_col)
            )
            weight = count * _MOBILITY_WEIGHT
            score += weight if is_white(piece) else -weight
    return score


def _repetition(game: Game) -> int:
    if game.move_count < 2:
        return 0
    penalty = _REPETITION_PENALTY if game.turn == BLACK else -_REPETITION_PENALTY
    current = ["".join(row) for row in game.board]
    score = 0
    for index in range(game.move_count - 2, game.move_count):
        saved = game.position(index)
        for row, cells in enumerate(current):
            if saved[row * BOARD_SIZE:(row + 1) * BOARD_SIZE] != cells:
                score -= penalty
    return score


def evaluate_position(game: Game) -> int:
    """Static score of the position; positive favours white."""
    return _material_and_placement(game) + _mobility(game) + _repetition(game)


def _moves(game: Game, owns: Callable[[str], bool]) -> Iterator[Coordinates]:
    for row, cells in enumerate(game.board):
        for col, piece in enumerate(cells):
            if not owns(piece):
                continue
            for to_row in range(BOARD_SIZE):
                for to_col in range(BOARD_SIZE):
                    if game.is_valid_move(row, col, to_row, to_col):
                        yield row, col, to_row, to_col


def _child(game: Game, move: Coordinates) -> Game:
    child = game.with_piece_moved(*move)
    child.turn = 1 - game.turn
    return child


def minimax(game: Game, depth: int, alpha: int, beta: int, maximizing: bool) -> int:
    """Alpha-beta search; the maximizing side moves black pieces, the other white."""
    if depth == 0 or game.is_checkmate() or game.is_draw():
        return evaluate_position(game)

    if maximizing:
        best = -INFINITY
        for move in _moves(game, is_black):
            value = minimax(_child(game, move), depth - 1, alpha, beta, False)
            best = max(best, value)
            alpha = max(alpha, value)
            if beta <= alpha:
                return best
        return best

    best = INFINITY
    for move in _moves(game, is_white):
        value = minimax(_child(game, move), depth - 1, alpha, beta, True)
        best = min(best, value)
        beta = min(beta, value)
        if beta <= alpha:
            return best
    return best


def choose_move(
    game: Game, rng: random.Random | None = None, depth: int = DEFAULT_DEPTH
) -> Coordinates | None:
    """Pick a black move among those scoring within the tolerance of the best.

    Returns ``(from_row, from_col, to_row, to_col)`` or None when there is no move.
    """
    if rng is None:
        rng = random.Random()
    scored = [
        (move, minimax(_child(game, move), depth - 1, -INFINITY, INFINITY, False))
        for move in _moves(game, is_black)
    ]
    if not scored:
        return None
    best = max(score for _, score in scored)
    candidates = [move for move, score in scored if score >= best - SCORE_TOLERANCE]
    return rng.choice(candidates)