# ajedrez

A desktop chess game. You play White with the mouse. Black is moved by a
small minimax search, depth 2 with alpha-beta pruning, that picks at random
among the moves scoring within 20 points of the best one.

## Installing

```
pip install .
```

pygame draws the window. The piece images and the font are read from an
assets directory, `assets/` in the working directory by default. The files are
`rey_blanco.png`, `reina_negra.png` and the other piece images, plus
`fuente.ttf`. If a file is missing, the game prints an error and keeps running
without that file. A missing image leaves its pieces undrawn. A missing font
leaves out the side panel text.

## Playing

```
ajedrez
ajedrez --assets path/to/assets --save-file my_game.txt
```

Options:

- `--assets DIR` is the directory that holds the images and the font. The default is `assets`.
- `--save-file FILE` is the file used by the S and L keys. The default is `partida.txt`.

Controls:

- Drag a white piece with the left mouse button and drop it on a square.
  While you drag, the origin square and the squares the piece may move to
  are highlighted.
- **Z** undoes the last move.
- **S** saves the game. **L** loads it back.
- **R** turns move highlighting on or off.

The side panel shows whose turn it is, "¡Jaque!" when the side to move is in
check, and the five most recent moves in a short notation such as `Ng1-f3`.
Pawn moves start with a space instead of a letter.

The game ends at checkmate, at stalemate, when there is too little material
left, or when a position comes up three times. The result is printed to the
terminal, for example `Fin del Juego: Empate`, and the window closes.

## Using the modules

The rules are in `ajedrez.board`:

```python
from ajedrez.board import Game

game = Game()
game.is_valid_move(6, 4, 4, 4)   # e2-e4: True
game.in_check(0)                 # is White in check? False
game.is_checkmate(), game.is_draw()
```

Rows go from 0, Black's back rank, to 7, White's back rank. Columns go from 0,
file a, to 7, file h. Side 0 is White and side 1 is Black.

- `ajedrez.ai.evaluate_position(game)` scores a position. A positive score favours White.
- `ajedrez.ai.minimax(game, depth, alpha, beta, maximizing)` runs the search.
- `ajedrez.ai.choose_move(game, rng=None, depth=2)` returns Black's move as
  `(from_row, from_col, to_row, to_col)`, or `None` when Black has no move.
- `ajedrez.savefile.save_game(game, history, path)` and
  `load_game(game, history, path)` write and read the save format. The first
  line holds the turn. Each following line holds one move:
  `piece from_row from_col to_row to_col captured`.
- `ajedrez.history` provides `MoveHistory` (newest move first), `UndoStack`,
  `MoveQueue` and `CapturedPieces`.
- `ajedrez.app.Session` keeps a game, its history, its undo stack and its
  captured pieces together. It has these methods:
  - `apply_move`, which handles castling and promotion to a queen
  - `undo`
  - `save`
  - `load`
  - `ai_turn`
  - `outcome`, which returns the end-of-game message or `None`
- `ajedrez.graphics.Renderer` is the pygame window. It can be used as a context manager.

## What it does not do

- Move checking follows how each piece moves. It does not reject a move that
  leaves your own king in check.
- En passant is not supported. Pawns promote only to a queen.
- Undo restores the board and hands the turn back. It does not remove the
  move from the history list, and it does not restore the castling rights.
- Loading a game replays each saved move by moving one piece. The rook move in
  castling and pawn promotion are not redone, and the castling rights start
  fresh.
- There is no two-player mode and no choice of colour. The computer always plays Black.

## Running the tests

```
pip install .[test]
pytest
```