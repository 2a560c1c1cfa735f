import pytest

from ajedrez.board import BLACK, EMPTY, WHITE_PAWN, Game
from ajedrez.history import Move, MoveHistory
from ajedrez.savefile import load_game, save_game


def test_save_format(tmp_path):
    game = Game()
    game.turn = BLACK
    history = MoveHistory()
    history.add("P", 6, 4, 4, 4, " ")
    path = tmp_path / "partida.txt"
    save_game(game, history, path)
    assert path.read_text() == "1\nP 6 4 4 4  \n"


def test_round_trip_single_move(tmp_path):
    game = Game()
    history = MoveHistory()
    history.add("P", 6, 4, 4, 4, " ")
    game.board[4][4] = WHITE_PAWN
    game.board[6][4] = EMPTY
    game.turn = BLACK
    path = tmp_path / "game.txt"
    save_game(game, history, path)

    loaded = Game()
    loaded_history = MoveHistory()
    load_game(loaded, loaded_history, path)
    assert loaded.turn == BLACK
    assert loaded.board == game.board
    assert list(loaded_history) == [Move("P", 6, 4, 4, 4, " ")]


def test_loaded_history_is_file_order_reversed(tmp_path):
    history = MoveHistory()
    history.add("P", 6, 4, 4, 4, " ")
    history.add("p", 1, 3, 3, 3, " ")
    history.add("P", 4, 4, 3, 3, "p")
    path = tmp_path / "game.txt"
    save_game(Game(), history, path)

    loaded_history = MoveHistory()
    load_game(Game(), loaded_history, path)
    assert list(loaded_history) == list(reversed(list(history)))


def test_load_resets_board(tmp_path):
    path = tmp_path / "game.txt"
    path.write_text("0\n")
    game = Game()
    game.board[3][3] = "Q"
    game.move_count = 7
    history = MoveHistory()
    history.add("Q", 7, 3, 3, 3, " ")
    load_game(game, history, path)
    assert game.board == Game().board
    assert game.move_count == 0
    assert len(history) == 0


def test_load_stops_at_bad_line(tmp_path):
    path = tmp_path / "game.txt"
    path.write_text("1\nN 7 6 5 5  \ngarbage\nP 6 0 4 0  \n")
    game = Game()
    history = MoveHistory()
    load_game(game, history, path)
    assert len(history) == 1
    assert game.board[5][5] == "N"
    assert game.board[6][0] == WHITE_PAWN


def test_load_missing_file_leaves_game(tmp_path):
    game = Game()
    game.turn = BLACK
    history = MoveHistory()
    history.add("P", 6, 4, 4, 4, " ")
    with pytest.raises(FileNotFoundError):
        load_game(game, history, tmp_path / "absent.txt")
    assert game.turn == BLACK
    assert len(history) == 1