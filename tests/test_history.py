import pytest

from ajedrez.history import CapturedPieces, Move, MoveHistory, MoveQueue, UndoStack


def test_history_is_newest_first():
    history = MoveHistory()
    first = history.add("P", 6, 4, 4, 4, " ")
    second = history.add("p", 1, 4, 3, 4, " ")
    assert list(history) == [second, first]
    assert len(history) == 2
    assert first == Move("P", 6, 4, 4, 4, " ")


def test_history_clear():
    history = MoveHistory()
    history.add("N", 7, 6, 5, 5, " ")
    history.clear()
    assert len(history) == 0
    assert list(history) == []


def test_undo_restores_board_in_place():
    board = [["P", " "], [" ", "k"]]
    stack = UndoStack()
    stack.push(board)
    board[0][0] = " "
    board[0][1] = "P"
    assert stack.pop(board)
    assert board == [["P", " "], [" ", "k"]]
    assert len(stack) == 0


def test_undo_push_takes_copy():
    board = [["P"]]
    stack = UndoStack()
    stack.push(board)
    board[0][0] = "Q"
    stack.pop(board)
    assert board == [["P"]]


def test_undo_is_last_in_first_out():
    board = [["a"]]
    stack = UndoStack()
    stack.push([["x"]])
    stack.push([["y"]])
    stack.pop(board)
    assert board == [["y"]]
    stack.pop(board)
    assert board == [["x"]]


def test_pop_empty_stack_leaves_board():
    board = [["R"]]
    assert not UndoStack().pop(board)
    assert board == [["R"]]


def test_queue_is_fifo():
    queue = MoveQueue()
    queue.enqueue(1, 2, 3, 4, 10)
    queue.enqueue(5, 6, 7, 0, -3)
    assert queue.dequeue() == (1, 2, 3, 4)
    assert queue.dequeue() == (5, 6, 7, 0)
    assert len(queue) == 0


def test_dequeue_empty_raises():
    with pytest.raises(IndexError):
        MoveQueue().dequeue()


def test_queue_clear():
    queue = MoveQueue()
    queue.enqueue(0, 0, 1, 1, 0)
    queue.clear()
    with pytest.raises(IndexError):
        queue.dequeue()


def test_captured_pieces():
    captured = CapturedPieces()
    for piece in "pnbrq" * 3:
        captured.add(piece)
    assert len(captured) == 15
    captured.drop_last()
    assert list(captured) == list("pnbrq" * 3)[:-1]


def test_drop_last_on_empty_is_harmless():
    captured = CapturedPieces()
    captured.drop_last()
    assert len(captured) == 0