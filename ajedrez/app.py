"""Interactive game session and the windowed front end."""

from __future__ import annotations

import argparse
import os
import random
from dataclasses import dataclass

from .ai import choose_move
from .board import (
    BLACK,
    BLACK_KING,
    BLACK_PAWN,
    BLACK_QUEEN,
    BLACK_ROOK,
    BOARD_SIZE,
    EMPTY,
    SQUARE_SIZE,
    WHITE,
    WHITE_KING,
    WHITE_PAWN,
    WHITE_QUEEN,
    WHITE_ROOK,
    Game,
    is_black,
    is_white,
)
from .history import CapturedPieces, MoveHistory, MoveQueue, UndoStack
from .savefile import load_game, save_game

SAVE_FILE = "partida.txt"
AI_PAUSE_MS = 200
AI_THINK_MS = 1500
DRAG_FRAME_MS = 10
IDLE_FRAME_MS = 16

Coordinates = tuple[int, int, int, int]


class Session:
    """A game in progress: board, history, undo snapshots and captures."""

    def __init__(self, rng: random.Random | None = None, renderer=None) -> None:
        self.game = Game()
        self.history = MoveHistory()
        self.undo_stack = UndoStack()
        self.queue = MoveQueue()
        self.captured = CapturedPieces()
        self.rng = rng if rng is not None else random.Random()
        self.renderer = renderer
        self.ai_enabled = True
        self.highlight = True

    def _invalidate(self) -> None:
        if self.renderer is not None:
            self.renderer.invalidate_history()

    def _castle(self, piece: str, from_row: int, from_col: int, to_col: int) -> None:
        king, white = (WHITE_KING, True) if piece == WHITE_KING else (BLACK_KING, False)
        if piece != king or from_col != 4 or to_col not in (6, 2):
            return
        row = self.game.board[from_row]
        if white:
            self.game.white_king_moved = True
        else:
            self.game.black_king_moved = True
        if to_col == 6:
            row[5], row[7] = row[7], EMPTY
            if white:
                self.game.white_rook_h_moved = True
            else:
                self.game.black_rook_h_moved = True
        else:
            row[3], row[0] = row[0], EMPTY
            if white:
                self.game.white_rook_a_moved = True
            else:
                self.game.black_rook_a_moved = True

    def _update_castling_flags(self, piece: str, from_row: int, from_col: int) -> None:
        game = self.game
        if piece == WHITE_KING:
            game.white_king_moved = True
        elif piece == BLACK_KING:
            game.black_king_moved = True
        elif piece == WHITE_ROOK and from_row == 7:
            if from_col == 0:
                game.white_rook_a_moved = True
            elif from_col == 7:
                game.white_rook_h_moved = True
        elif piece == BLACK_ROOK and from_row == 0:
            if from_col == 0:
                game.black_rook_a_moved = True
            elif from_col == 7:
                game.black_rook_h_moved = True

    def apply_move(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        """Play a move for the side to move; return False if it is not valid."""
        game = self.game
        if not game.is_valid_move(from_row, from_col, to_row, to_col):
            return False

        board = game.board
        self.undo_stack.push(board)
        piece = board[from_row][from_col]
        captured = board[to_row][to_col]
        self.history.add(piece, from_row, from_col, to_row, to_col, captured)
        if captured != EMPTY:
            self.captured.add(captured)

        self._castle(piece, from_row, from_col, to_col)
        self._update_castling_flags(piece, from_row, from_col)

        if piece == WHITE_PAWN and to_row == 0:
            board[to_row][to_col] = WHITE_QUEEN
        elif piece == BLACK_PAWN and to_row == BOARD_SIZE - 1:
            board[to_row][to_col] = BLACK_QUEEN
        else:
            board[to_row][to_col] = piece
        board[from_row][from_col] = EMPTY

        game.record_position()
        game.turn = 1 - game.turn
        self._invalidate()
        return True

    def undo(self) -> bool:
        """Restore the board before the last move and hand the turn back.

        The turn flips even when there is nothing to restore; returns whether
        a board snapshot was restored.
        """
        restored = self.undo_stack.pop(self.game.board)
        self.captured.drop_last()
        self.game.turn = 1 - self.game.turn
        if self.game.move_count > 0:
            self.game.move_count -= 1
        self._invalidate()
        return restored

    def save(self, path: str | os.PathLike[str] = SAVE_FILE) -> None:
        """Write the turn and move history to ``path``."""
        save_game(self.game, self.history, path)

    def load(self, path: str | os.PathLike[str] = SAVE_FILE) -> None:
        """Replace the game and history with those stored at ``path``."""
        load_game(self.game, self.history, path)
        self._invalidate()

    def ai_turn(self) -> Coordinates | None:
        """Let the computer play black; return the move made, or None."""
        move = choose_move(self.game, self.rng)
        self.queue.clear()
        if move is not None and self.apply_move(*move):
            return move
        print("Error: La IA no encontró un movimiento válido")
        self.game.turn = WHITE
        return None

    def outcome(self) -> str | None:
        """The end-of-game message, or None while play goes on."""
        if self.game.is_checkmate():
            if self.game.turn == WHITE:
                return "Jaque Mate: Ganan las Negras"
            return "Jaque Mate: Ganan las Blancas"
        if self.game.is_draw():
            return "Empate"
        return None

    def owns_square(self, row: int, col: int) -> bool:
        """Whether the square holds a piece of the side to move."""
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            return False
        piece = self.game.board[row][col]
        if self.game.turn == WHITE:
            return is_white(piece)
        if self.game.turn == BLACK:
            return is_black(piece)
        return False


@dataclass
class _Drag:
    active: bool = False
    from_row: int = -1
    from_col: int = -1
    piece: str = EMPTY
    mouse_x: int = 0
    mouse_y: int = 0


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="ajedrez", description="Play chess against the computer.")
    parser.add_argument("--assets", default="assets", help="directory with images and font")
    parser.add_argument("--save-file", default=SAVE_FILE, help="file used by the S and L keys")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Open the window and run the game until it ends or is closed."""
    args = _parse_args(argv)

    import pygame

    from .graphics import Renderer

    session = Session(rng=random.Random())
    drag = _Drag()

    with Renderer(args.assets) as renderer:
        renderer.load_textures()
        session.renderer = renderer
        last_frame = pygame.time.get_ticks()
        running = True

        def draw(check: bool) -> None:
            renderer.draw(
                session.game,
                drag.active,
                drag.piece,
                drag.mouse_x,
                drag.mouse_y,
                session.history,
                check,
                session.highlight,
            )

        while running:
            check = session.game.in_check(session.game.turn)
            message = session.outcome()
            if message is not None:
                print(f"Fin del Juego: {message}")
                break

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break
                if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    x, y = event.pos
                    row, col = y // SQUARE_SIZE, x // SQUARE_SIZE
                    if not drag.active and session.owns_square(row, col):
                        drag = _Drag(True, row, col, session.game.board[row][col], x, y)
                elif event.type == pygame.MOUSEMOTION and drag.active:
                    drag.mouse_x, drag.mouse_y = event.pos
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and drag.active:
                    x, y = event.pos
                    session.apply_move(drag.from_row, drag.from_col, y // SQUARE_SIZE, x // SQUARE_SIZE)
                    drag = _Drag(mouse_x=drag.mouse_x, mouse_y=drag.mouse_y)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_z:
                        session.undo()
                    elif event.key == pygame.K_s:
                        try:
                            session.save(args.save_file)
                        except OSError as exc:
                            print(f"Error guardando partida: {exc}")
                    elif event.key == pygame.K_l:
                        try:
                            session.load(args.save_file)
                        except OSError as exc:
                            print(f"Error cargando partida: {exc}")
                    elif event.key == pygame.K_r:
                        session.highlight = not session.highlight

            if session.ai_enabled and session.game.turn == BLACK and running:
                draw(check)
                pygame.time.wait(AI_PAUSE_MS)
                pygame.time.wait(AI_THINK_MS)
                session.ai_turn()

            now = pygame.time.get_ticks()
            interval = DRAG_FRAME_MS if drag.active else IDLE_FRAME_MS
            if now - last_frame >= interval:
                draw(check)
                last_frame = now

    return 0


if __name__ == "__main__":
    raise SystemExit(main())