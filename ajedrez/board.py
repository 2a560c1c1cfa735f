"""Chess board state, move validation and end-of-game detection."""

from __future__ import annotations

import copy as _copy
from collections.abc import Iterator

BOARD_SIZE = 8
SQUARE_SIZE = 80

EMPTY = " "
WHITE_PAWN = "P"
WHITE_KNIGHT = "N"
WHITE_BISHOP = "B"
WHITE_ROOK = "R"
WHITE_QUEEN = "Q"
WHITE_KING = "K"
BLACK_PAWN = "p"
BLACK_KNIGHT = "n"
BLACK_BISHOP = "b"
BLACK_ROOK = "r"
BLACK_QUEEN = "q"
BLACK_KING = "k"

WHITE = 0
BLACK = 1

_BACK_RANK = (
    WHITE_ROOK,
    WHITE_KNIGHT,
    WHITE_BISHOP,
    WHITE_QUEEN,
    WHITE_KING,
    WHITE_BISHOP,
    WHITE_KNIGHT,
    WHITE_ROOK,
)
_BLANK_POSITION = "\0" * (BOARD_SIZE * BOARD_SIZE)


def is_white(piece: str) -> bool:
    """Return True for a white (upper-case) piece."""
    return "A" <= piece <= "Z"


def is_black(piece: str) -> bool:
    """Return True for a black (lower-case) piece."""
    return "a" <= piece <= "z"


def _owned_by(side: int, piece: str) -> bool:
    if side == WHITE:
        return is_white(piece)
    if side == BLACK:
        return is_black(piece)
    return False


def _on_board(*coords: int) -> bool:
    return all(0 <= value < BOARD_SIZE for value in coords)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Game:
    """A chess position together with castling flags and recorded positions."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Put every piece back on its starting square and clear all state."""
        self.board: list[list[str]] = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self.board[7] = list(_BACK_RANK)
        self.board[6] = [WHITE_PAWN] * BOARD_SIZE
        self.board[0] = [piece.lower() for piece in _BACK_RANK]
        self.board[1] = [BLACK_PAWN] * BOARD_SIZE
        self.turn = WHITE
        self.white_king_moved = False
        self.white_rook_h_moved = False
        self.white_rook_a_moved = False
        self.black_king_moved = False
        self.black_rook_h_moved = False
        self.black_rook_a_moved = False
        self.move_count = 0
        self.positions: list[str] = []

    def copy(self) -> Game:
        """Return an independent copy of this game."""
        clone = _copy.copy(self)
        clone.board = [row[:] for row in self.board]
        clone.positions = list(self.positions)
        return clone

    def with_piece_moved(self, from_row: int, from_col: int, to_row: int, to_col: int) -> Game:
        """Return a copy with the piece lifted and dropped; the turn is unchanged."""
        clone = self.copy()
        clone.board[to_row][to_col] = self.board[from_row][from_col]
        clone.board[from_row][from_col] = EMPTY
        return clone

    def snapshot(self) -> str:
        """The current board as a 64-character string, row by row."""
        return "".join("".join(row) for row in self.board)

    def position(self, index: int) -> str:
        """The snapshot recorded at ``index``, or a blank one if none was recorded."""
        if 0 <= index < len(self.positions):
            return self.positions[index]
        return _BLANK_POSITION

    def record_position(self) -> None:
        """Store the current board at slot ``move_count`` and advance the count."""
        missing = self.move_count - len(self.positions)
        if missing > 0:
            self.positions.extend([_BLANK_POSITION] * missing)
        if self.move_count < len(self.positions):
            self.positions[self.move_count] = self.snapshot()
        else:
            self.positions.append(self.snapshot())
        self.move_count += 1

    def _squares(self) -> Iterator[tuple[int, int, str]]:
        for row, cells in enumerate(self.board):
            for col, piece in enumerate(cells):
                yield row, col, piece

    def _targets(self, row: int, col: int) -> Iterator[tuple[int, int]]:
        for to_row in range(BOARD_SIZE):
            for to_col in range(BOARD_SIZE):
                if self.is_valid_move(row, col, to_row, to_col):
                    yield to_row, to_col

    def _path_clear(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        step_row = _sign(to_row - from_row)
        step_col = _sign(to_col - from_col)
        distance = max(abs(to_row - from_row), abs(to_col - from_col))
        return all(
            self.board[from_row + k * step_row][from_col + k * step_col] == EMPTY
            for k in range(1, distance)
        )

    def is_valid_move(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        """Whether the side to move may move the piece at the origin to the target."""
        if not _on_board(from_row, from_col, to_row, to_col):
            return False

        piece = self.board[from_row][from_col]
        target = self.board[to_row][to_col]

        if not _owned_by(self.turn, piece):
            return False
        if target != EMPTY and _owned_by(self.turn, target):
            return False

        d_row = abs(to_row - from_row)
        d_col = abs(to_col - from_col)
        kind = piece.upper()

        if kind == WHITE_PAWN:
            direction = -1 if piece == WHITE_PAWN else 1
            home_row = 6 if piece == WHITE_PAWN else 1
            if from_col == to_col and target == EMPTY and to_row == from_row + direction:
                return True
            if (
                from_col == to_col
                and target == EMPTY
                and to_row == from_row + 2 * direction
                and from_row == home_row
                and self.board[from_row + direction][from_col] == EMPTY
            ):
                return True
            return d_col == 1 and to_row == from_row + direction and target != EMPTY

        if kind == WHITE_KNIGHT:
            return (d_row, d_col) in ((2, 1), (1, 2))

        if kind == WHITE_BISHOP:
            return d_row == d_col and self._path_clear(from_row, from_col, to_row, to_col)

        if kind == WHITE_ROOK:
            if from_row == to_row or from_col == to_col:
                return self._path_clear(from_row, from_col, to_row, to_col)
            return False

        if kind == WHITE_QUEEN:
            if d_row == d_col or from_row == to_row or from_col == to_col:
                return self._path_clear(from_row, from_col, to_row, to_col)
            return False

        if kind == WHITE_KING:
            if d_row <= 1 and d_col <= 1:
                return True
            return self._castling_allowed(piece, from_row, from_col, to_row, to_col)

        moved = self.with_piece_moved(from_row, from_col, to_row, to_col)
        return not moved.in_check(self.turn)

    def _castling_allowed(
        self, king: str, from_row: int, from_col: int, to_row: int, to_col: int
    ) -> bool:
        white = king == WHITE_KING
        if from_row != to_row or from_col != 4 or to_col not in (6, 2):
            return False
        if white and not (from_row == 7 and not self.white_king_moved):
            return False
        if not white and not (from_row == 0 and not self.black_king_moved):
            return False

        row = self.board[from_row]
        rook = WHITE_ROOK if white else BLACK_ROOK
        if to_col == 6:
            rook_moved = self.white_rook_h_moved if white else self.black_rook_h_moved
            if not row[5] and not row[6] and row[7] == rook and not rook_moved:
                return not self.in_check(self.turn)
        else:
            rook_moved = self.white_rook_a_moved if white else self.black_rook_a_moved
            if not row[3] and not row[2] and not row[1] and row[0] == rook and not rook_moved:
                return not self.in_check(self.turn)
        return False

    def in_check(self, side: int) -> bool:
        """Whether any opposing piece can validly move onto ``side``'s king."""
        king = WHITE_KING if side == WHITE else BLACK_KING
        king_square = next(
            ((row, col) for row, col, piece in self._squares() if piece == king), None
        )
        if king_square is None:
            return False
        king_row, king_col = king_square
        enemy = BLACK if side == WHITE else WHITE if side == BLACK else None
        return any(
            self.is_valid_move(row, col, king_row, king_col)
            for row, col, piece in self._squares()
            if enemy is not None and _owned_by(enemy, piece)
        )

    def is_checkmate(self) -> bool:
        """Whether the side to move is in check with no move that escapes it."""
        if not self.in_check(self.turn):
            return False
        for row, col, piece in self._squares():
            if not _owned_by(self.turn, piece):
                continue
            for to_row, to_col in self._targets(row, col):
                if not self.with_piece_moved(row, col, to_row, to_col).in_check(self.turn):
                    return False
        return True

    def _has_any_move(self) -> bool:
        return any(
            next(self._targets(row, col), None) is not None
            for row, col, piece in self._squares()
            if _owned_by(self.turn, piece)
        )

    def _insufficient_material(self) -> bool:
        heavy = {WHITE: 0, BLACK: 0}
        minor = {WHITE: 0, BLACK: 0}
        for _, _, piece in self._squares():
            if piece == EMPTY:
                continue
            side = WHITE if is_white(piece) else BLACK
            kind = piece.upper()
            if kind in (WHITE_PAWN, WHITE_ROOK, WHITE_QUEEN):
                heavy[side] += 2
            elif kind in (WHITE_KNIGHT, WHITE_BISHOP):
                minor[side] += 1
        return (
            heavy[WHITE] == 0
            and heavy[BLACK] == 0
            and minor[WHITE] <= 1
            and minor[BLACK] <= 1
        )

    def _threefold_repetition(self) -> bool:
        if self.move_count < 2:
            return False
        current = self.position(self.move_count)
        repetitions = 1
        for index in range(self.move_count - 2, -1, -2):
            if self.position(index) == current:
                repetitions += 1
            if repetitions >= 3:
                return True
        return False

    def is_draw(self) -> bool:
        """Stalemate, insufficient material or threefold repetition."""
        if not self.in_check(self.turn) and not self._has_any_move():
            return True
        if self._insufficient_material():
            return True
        return self._threefold_repetition()