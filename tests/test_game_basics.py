import pytest

from tttgame.game_basics import (
    DRAW,
    LINES,
    ONGOING,
    WIN,
    O,
    X,
    apply_move,
    current_player,
    deserialize_board,
    empty_board,
    evaluate,
    is_valid_state,
    legal_moves,
    other,
    serialize_board,
)


@pytest.mark.parametrize("line", LINES)
@pytest.mark.parametrize("mark", [X, O])
def test_win_on_every_line(line, mark):
    board = [0] * 9
    for i in line:
        board[i] = mark
    out = evaluate(board)
    assert out.status == WIN
    assert out.mark == mark
    assert out.line == line
    assert out.winner == mark
    assert out.is_terminal


def test_lines_are_rows_then_columns_then_diagonals():
    assert LINES[:3] == ((0, 1, 2), (3, 4, 5), (6, 7, 8))
    assert LINES[3:6] == ((0, 3, 6), (1, 4, 7), (2, 5, 8))
    assert LINES[6:] == ((0, 4, 8), (2, 4, 6))


def test_first_line_in_order_is_reported():
    # row 0 and column 0 both complete; rows are checked first
    board = (1, 1, 1, 1, 2, 2, 1, 2, 2)
    assert evaluate(board).line == (0, 1, 2)


def test_full_board_without_line_is_draw():
    out = evaluate((1, 1, 2, 2, 2, 1, 1, 2, 1))
    assert out.status == DRAW
    assert out.winner is None
    assert out.line is None
    assert out.is_terminal


def test_win_on_full_board_beats_draw():
    out = evaluate((1, 2, 1, 2, 1, 2, 2, 1, 1))
    assert out.status == WIN and out.mark == X and out.line == (0, 4, 8)


@pytest.mark.parametrize("board", [
    (0,) * 9,
    (1, 0, 0, 0, 2, 0, 0, 0, 0),
    (1, 1, 0, 2, 2, 0, 0, 0, 0),
    (1, 2, 1, 2, 1, 2, 2, 1, 0),
])
def test_non_full_board_without_line_is_ongoing(board):
    out = evaluate(board)
    assert out.status == ONGOING
    assert not out.is_terminal


def test_scenario_x_completes_top_row():
    board = (X, X, 0, O, O, 0, 0, 0, 0)
    after = apply_move(board, 2, X)
    assert board == (X, X, 0, O, O, 0, 0, 0, 0)
    out = evaluate(after)
    assert (out.status, out.mark, out.line) == (WIN, X, (0, 1, 2))


def test_apply_move_returns_new_board():
    b = empty_board()
    nb = apply_move(b, 4, X)
    assert b == (0,) * 9
    assert nb[4] == X
    with pytest.raises(ValueError):
        apply_move(b, 9, X)


def test_legal_moves_ascending():
    assert legal_moves((1, 0, 2, 0, 0, 1, 0, 2, 0)) == [1, 3, 4, 6, 8]
    assert legal_moves(empty_board()) == list(range(9))


def test_other_and_current_player():
    assert other(X) == O and other(O) == X
    with pytest.raises(ValueError):
        other(0)
    assert current_player(empty_board()) == X
    assert current_player((1, 0, 0, 0, 0, 0, 0, 0, 0)) == O


def test_is_valid_state():
    assert is_valid_state(empty_board())
    assert is_valid_state((1, 1, 1, 2, 2, 0, 0, 0, 0))
    assert not is_valid_state((2, 0, 0, 0, 0, 0, 0, 0, 0))  # O cannot start
    assert not is_valid_state((1, 1, 1, 2, 2, 2, 0, 0, 0))  # double winner
    assert not is_valid_state((2, 2, 2, 1, 1, 0, 1, 1, 0))  # O won but X moved after
    assert not is_valid_state((1, 1))


def test_serialize_roundtrip_and_errors():
    assert serialize_board((1, 0, 0, 0, 2, 0, 0, 0, 0)) == "100020000"
    assert deserialize_board("100020000") == (1, 0, 0, 0, 2, 0, 0, 0, 0)
    for bad in ["abc", "0123456789", "12345678x", ""]:
        with pytest.raises(ValueError):
            deserialize_board(bad)
