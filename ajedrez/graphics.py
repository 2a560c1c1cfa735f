"""Drawing the board, pieces and side panel with pygame."""

from __future__ import annotations

import os
from itertools import islice
from pathlib import Path
from types import TracebackType
from collections.abc import Iterable

import pygame

from .board import (
    BLACK_BISHOP,
    BLACK_KING,
    BLACK_KNIGHT,
    BLACK_PAWN,
    BLACK_QUEEN,
    BLACK_ROOK,
    BOARD_SIZE,
    EMPTY,
    SQUARE_SIZE,
    WHITE,
    WHITE_BISHOP,
    WHITE_KING,
    WHITE_KNIGHT,
    WHITE_PAWN,
    WHITE_QUEEN,
    WHITE_ROOK,
    Game,
)
from .history import Move

BOARD_PIXELS = BOARD_SIZE * SQUARE_SIZE
PANEL_WIDTH = 200
WINDOW_SIZE = (BOARD_PIXELS + PANEL_WIDTH, BOARD_PIXELS)
TITLE = "Ajedrez"
FONT_FILE = "fuente.ttf"
FONT_SIZE = 20
MAX_HISTORY_LINES = 5

BACKGROUND = (0, 0, 0)
LIGHT_SQUARE = (255, 255, 255)
DARK_SQUARE = (139, 69, 19)
HIGHLIGHT = (0, 255, 0)
TEXT_COLOR = (255, 255, 255)

_PANEL_X = BOARD_PIXELS + 10
_TURN_Y = 10
_CHECK_Y = 40
_HISTORY_Y = 70
_HISTORY_STEP = 30

TEXTURE_FILES = (
    "rey_blanco.png",
    "reina_blanca.png",
    "alfil_blanco.png",
    "caballo_blanco.png",
    "torre_blanca.png",
    "peon_blanco.png",
    "rey_negro.png",
    "reina_negra.png",
    "alfil_negro.png",
    "caballo_negro.png",
    "torre_negra.png",
    "peon_negro.png",
)

_TEXTURE_INDEX = {
    piece: index
    for index, piece in enumerate(
        (
            WHITE_KING,
            WHITE_QUEEN,
            WHITE_BISHOP,
            WHITE_KNIGHT,
            WHITE_ROOK,
            WHITE_PAWN,
            BLACK_KING,
            BLACK_QUEEN,
            BLACK_BISHOP,
            BLACK_KNIGHT,
            BLACK_ROOK,
            BLACK_PAWN,
        )
    )
}


def texture_index(piece: str) -> int | None:
    """Index into the texture list for ``piece``, or None if it has no image."""
    return _TEXTURE_INDEX.get(piece)


def _square_name(row: int, col: int) -> str:
    return f"{chr(ord('a') + col)}{BOARD_SIZE - row}"


def move_notation(move: Move) -> str:
    """Short coordinate notation such as ``"Ng1-f3"``; pawns get a leading space."""
    symbol = " " if move.piece in (WHITE_PAWN, BLACK_PAWN) else move.piece
    return (
        f"{symbol}{_square_name(move.from_row, move.from_col)}"
        f"-{_square_name(move.to_row, move.to_col)}"
    )


class Renderer:
    """The game window and everything drawn in it."""

    def __init__(self, asset_dir: str | os.PathLike[str] = "assets") -> None:
        self.asset_dir = Path(asset_dir)
        pygame.display.init()
        pygame.font.init()
        self.screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(TITLE)
        self.textures: list[pygame.Surface | None] = [None] * len(TEXTURE_FILES)
        self.font: pygame.font.Font | None = None
        self._turn_white: pygame.Surface | None = None
        self._turn_black: pygame.Surface | None = None
        self._check: pygame.Surface | None = None
        self._history: list[tuple[pygame.Surface, tuple[int, int]]] = []

        try:
            self.font = pygame.font.Font(str(self.asset_dir / FONT_FILE), FONT_SIZE)
        except (OSError, pygame.error) as exc:
            print(f"Error cargando fuente: {exc}")

        if self.font is not None:
            self._turn_white = self._text("Turno: Blancas")
            self._turn_black = self._text("Turno: Negras")
            self._check = self._text("¡Jaque!")

    def _text(self, text: str) -> pygame.Surface:
        assert self.font is not None
        return self.font.render(text, False, TEXT_COLOR)

    def load_textures(self) -> None:
        """Load the twelve piece images; a missing image leaves its slot empty."""
        for index, name in enumerate(TEXTURE_FILES):
            path = self.asset_dir / name
            try:
                image = pygame.image.load(str(path)).convert_alpha()
            except (OSError, pygame.error) as exc:
                print(f"Error cargando {path}: {exc}")
                self.textures[index] = None
                continue
            self.textures[index] = pygame.transform.scale(image, (SQUARE_SIZE, SQUARE_SIZE))

    def invalidate_history(self) -> None:
        """Drop the cached history lines so they are rendered again."""
        self._history.clear()

    def _blit_piece(self, piece: str, rect: pygame.Rect) -> None:
        index = texture_index(piece)
        if index is None:
            return
        texture = self.textures[index]
        if texture is not None:
            self.screen.blit(texture, rect)

    def draw(
        self,
        game: Game,
        dragging: bool,
        piece: str,
        mouse_x: int,
        mouse_y: int,
        history: Iterable[Move],
        in_check: bool,
        highlight: bool,
    ) -> None:
        """Render one frame and show it."""
        self.screen.fill(BACKGROUND)
        mouse_row = mouse_y // SQUARE_SIZE
        mouse_col = mouse_x // SQUARE_SIZE
        show_targets = dragging and piece != EMPTY and highlight

        for row, cells in enumerate(game.board):
            for col, here in enumerate(cells):
                rect = pygame.Rect(col * SQUARE_SIZE, row * SQUARE_SIZE, SQUARE_SIZE, SQUARE_SIZE)
                self.screen.fill(LIGHT_SQUARE if (row + col) % 2 == 0 else DARK_SQUARE, rect)
                if show_targets and (
                    (row, col) == (mouse_row, mouse_col)
                    or game.is_valid_move(mouse_row, mouse_col, row, col)
                ):
                    self.screen.fill(HIGHLIGHT, rect)
                if dragging and here == piece and row == mouse_row and col == mouse_col:
                    continue
                self._blit_piece(here, rect)

        if dragging and piece != EMPTY:
            half = SQUARE_SIZE // 2
            self._blit_piece(
                piece, pygame.Rect(mouse_x - half, mouse_y - half, SQUARE_SIZE, SQUARE_SIZE)
            )

        if self.font is not None:
            turn_text = self._turn_white if game.turn == WHITE else self._turn_black
            if turn_text is not None:
                self.screen.blit(turn_text, (_PANEL_X, _TURN_Y))
            if in_check and self._check is not None:
                self.screen.blit(self._check, (_PANEL_X, _CHECK_Y))
            for index, move in enumerate(islice(history, MAX_HISTORY_LINES)):
                if index >= len(self._history):
                    position = (_PANEL_X, _HISTORY_Y + index * _HISTORY_STEP)
                    self._history.append((self._text(move_notation(move)), position))
            for surface, position in self._history:
                self.screen.blit(surface, position)

        pygame.display.flip()

    def close(self) -> None:
        """Release the window and shut pygame down."""
        self.textures = [None] * len(TEXTURE_FILES)
        self._history.clear()
        self.font = None
        pygame.quit()

    def __enter__(self) -> Renderer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()