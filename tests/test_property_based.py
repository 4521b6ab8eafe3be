from typing import List

import pytest
try:
    from hypothesis import given, settings, strategies as st  # type: ignore
except ModuleNotFoundError:  # pragma: no cover - test infra
    pytest.skip("Hypothesis not installed", allow_module_level=True)

from tttgame.game_basics import EMPTY, LINES, evaluate, is_valid_state, other
from tttgame.session import Mode, jump_to, new_session, play_move
from tttgame.solver import best_move, best_move_exhaustive

orders = st.permutations(list(range(9)))


def play_sequence(order: List[int], plies: int):
    s = new_session(Mode.TWO_PLAYER)
    for idx in order[:plies]:
        if s.outcome.is_terminal:
            break
        s = play_move(s, idx)
    return s


@given(orders, st.integers(min_value=0, max_value=9))
def test_random_games_stay_valid_and_consistent(order: List[int], plies: int):
    s = play_sequence(order, plies)
    board = s.board
    assert is_valid_state(board)
    assert s.current_step == len(s.history) - 1
    out = evaluate(board)
    winners = [line for line in LINES if board[line[0]] != EMPTY
               and board[line[0]] == board[line[1]] == board[line[2]]]
    if winners:
        assert out.line == winners[0]
        assert out.mark == board[winners[0][0]]
    elif EMPTY in board:
        assert out.status == "ongoing"
    else:
        assert out.status == "draw"


@settings(max_examples=40, deadline=None)
@given(orders, st.integers(min_value=3, max_value=8))
def test_memoized_search_matches_reference(order: List[int], plies: int):
    s = play_sequence(order, plies)
    me = s.next_mark
    assert best_move(s.board, me, other(me)) == best_move_exhaustive(s.board, me, other(me))


@settings(deadline=None)
@given(orders, st.integers(min_value=0, max_value=8))
def test_search_never_loses_a_drawn_position(order: List[int], plies: int):
    # from any position the side to move can hold, optimal self-play does not lose
    s = play_sequence(order, plies)
    if s.outcome.is_terminal:
        return
    me = s.next_mark
    start = best_move(s.board, me, other(me)).score
    while not s.outcome.is_terminal:
        mark = s.next_mark
        s = play_move(s, best_move(s.board, mark, other(mark)).index)
    result = s.outcome
    if start == 0:
        assert result.winner is None
    elif start == 1:
        assert result.winner == me
    else:
        assert result.winner == other(me)


@given(orders, st.integers(min_value=1, max_value=8), st.data())
def test_jump_then_move_truncates_future(order: List[int], plies: int, data):
    s = play_sequence(order, plies)
    step = data.draw(st.integers(min_value=0, max_value=len(s.history) - 1))
    back = jump_to(s, step)
    empties = [i for i, v in enumerate(back.board) if v == EMPTY]
    if back.outcome.is_terminal or not empties:
        assert play_move(back, empties[0] if empties else 0) is back
        return
    after = play_move(back, empties[0])
    assert len(after.history) == step + 2
    assert after.history[: step + 1] == s.history[: step + 1]
    assert after.board[empties[0]] == back.next_mark
