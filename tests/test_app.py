import random

import pytest

from ajedrez.app import Session
from ajedrez.board import BLACK, BOARD_SIZE, EMPTY, WHITE


def _empty(session):
    session.game.board = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@pytest.fixture
def session():
    return Session(rng=random.Random(0))


def test_apply_pawn_move(session):
    assert session.apply_move(6, 4, 4, 4) is True
    assert session.game.board[4][4] == "P"
    assert session.game.board[6][4] == EMPTY
    assert session.game.turn == BLACK
    assert session.game.move_count == 1
    assert len(session.history) == 1
    assert len(session.undo_stack) == 1
    move = next(iter(session.history))
    assert (move.piece, move.from_row, move.from_col, move.to_row, move.to_col) == ("P", 6, 4, 4, 4)


def test_invalid_move_changes_nothing(session):
    before = [row[:] for row in session.game.board]
    assert session.apply_move(6, 4, 3, 4) is False
    assert session.game.board == before
    assert session.game.turn == WHITE
    assert len(session.history) == 0
    assert len(session.undo_stack) == 0


def test_capture_recorded(session):
    _empty(session)
    board = session.game.board
    board[7][4] = "K"
    board[0][4] = "k"
    board[4][4] = "R"
    board[2][4] = "n"
    assert session.apply_move(4, 4, 2, 4)
    assert list(session.captured) == ["n"]
    assert next(iter(session.history)).captured == "n"


def test_undo_restores_board_turn_and_captures(session):
    _empty(session)
    board = session.game.board
    board[7][4] = "K"
    board[0][4] = "k"
    board[4][4] = "R"
    board[2][4] = "n"
    before = [row[:] for row in board]
    session.apply_move(4, 4, 2, 4)
    assert session.undo() is True
    assert session.game.board == before
    assert session.game.turn == WHITE
    assert session.game.move_count == 0
    assert len(session.captured) == 0


def test_undo_with_nothing_saved_still_flips_turn(session):
    assert session.undo() is False
    assert session.game.turn == BLACK
    assert session.game.move_count == 0


def test_white_short_castle(session):
    board = session.game.board
    board[7][5] = EMPTY
    board[7][6] = EMPTY
    assert session.apply_move(7, 4, 7, 6)
    assert board[7][6] == "K"
    assert board[7][5] == "R"
    assert board[7][7] == EMPTY
    assert board[7][4] == EMPTY
    assert session.game.white_king_moved
    assert session.game.white_rook_h_moved


def test_black_long_castle(session):
    board = session.game.board
    for col in (1, 2, 3):
        board[0][col] = EMPTY
    session.game.turn = BLACK
    assert session.apply_move(0, 4, 0, 2)
    assert board[0][2] == "k"
    assert board[0][3] == "r"
    assert board[0][0] == EMPTY
    assert session.game.black_king_moved
    assert session.game.black_rook_a_moved
    assert session.game.turn == WHITE


def test_rook_move_sets_flag(session):
    session.game.board[6][0] = EMPTY
    assert session.apply_move(7, 0, 5, 0)
    assert session.game.white_rook_a_moved
    assert not session.game.white_rook_h_moved
    assert not session.game.white_king_moved


def test_white_pawn_promotes_to_queen(session):
    _empty(session)
    board = session.game.board
    board[7][4] = "K"
    board[0][7] = "k"
    board[1][0] = "P"
    assert session.apply_move(1, 0, 0, 0)
    assert board[0][0] == "Q"
    assert board[1][0] == EMPTY


def test_black_pawn_promotes_to_queen(session):
    _empty(session)
    board = session.game.board
    board[7][7] = "K"
    board[0][4] = "k"
    board[6][0] = "p"
    session.game.turn = BLACK
    assert session.apply_move(6, 0, 7, 0)
    assert board[7][0] == "q"


def test_outcome_none_at_start(session):
    assert session.outcome() is None


def test_outcome_fools_mate(session):
    for move in ((6, 5, 5, 5), (1, 4, 3, 4), (6, 6, 4, 6), (0, 3, 4, 7)):
        assert session.apply_move(*move)
    assert session.game.turn == WHITE
    assert session.outcome() == "Jaque Mate: Ganan las Negras"


def test_outcome_draw_bare_kings(session):
    _empty(session)
    session.game.board[7][4] = "K"
    session.game.board[0][4] = "k"
    assert session.outcome() == "Empate"


def test_save_load_round_trip(session, tmp_path):
    path = tmp_path / "partida.txt"
    session.apply_move(6, 4, 4, 4)
    session.save(path)
    other = Session(rng=random.Random(1))
    other.load(path)
    assert other.game.board == session.game.board
    assert other.game.turn == session.game.turn
    assert list(other.history) == list(session.history)


def test_load_missing_file_raises(session, tmp_path):
    with pytest.raises(FileNotFoundError):
        session.load(tmp_path / "missing.txt")


def test_ai_turn_plays_black_move(session):
    _empty(session)
    board = session.game.board
    board[7][0] = "K"
    board[0][7] = "k"
    board[0][0] = "r"
    session.game.turn = BLACK
    session.queue.enqueue(1, 1, 2, 2, 5)
    before = session.game.copy()
    move = session.ai_turn()
    assert move is not None
    assert before.is_valid_move(*move)
    assert session.game.turn == WHITE
    assert len(session.history) == 1
    assert next(iter(session.history)).piece in ("k", "r")
    assert len(session.queue) == 0


def test_ai_turn_without_moves(session):
    _empty(session)
    session.game.board[7][0] = "K"
    session.game.turn = BLACK
    assert session.ai_turn() is None
    assert session.game.turn == WHITE
    assert len(session.history) == 0


def test_owns_square(session):
    assert session.owns_square(6, 0)
    assert not session.owns_square(1, 0)
    assert not session.owns_square(3, 3)
    assert not session.owns_square(0, 9)