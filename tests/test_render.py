from tttgame.render import history_labels, render_board, render_session, status_line
from tttgame.session import Mode, begin_ai_turn, jump_to, new_session, play_move


def play_all(session, moves):
    for m in moves:
        session = play_move(session, m)
    return session


def test_status_lines():
    s = new_session(Mode.TWO_PLAYER)
    assert status_line(s) == "Next: X"
    assert status_line(play_move(s, 0)) == "Next: O"
    assert status_line(play_all(s, [0, 3, 1, 4, 2])) == "Winner: X"
    assert status_line(play_all(s, [0, 1, 2, 4, 3, 5, 7, 6, 8])) == "It's a draw!"


def test_status_line_shows_ai_thinking():
    s = begin_ai_turn(play_move(new_session(Mode.SINGLE_PLAYER), 0))
    assert status_line(s) == "Next: O ...AI is thinking"


def test_history_labels_mark_current_step():
    s = play_all(new_session(Mode.TWO_PLAYER), [0, 4])
    assert history_labels(s) == ["Start", "Move #1", "Move #2 *"]
    assert history_labels(jump_to(s, 0))[0] == "Start *"


def test_render_board_highlights_winning_line():
    text = render_board((1, 1, 1, 2, 2, 0, 0, 0, 0), (0, 1, 2))
    first_row = text.splitlines()[0]
    assert first_row == "[X]|[X]|[X]"
    assert " 5 " in text  # empty cells show their index


def test_render_session_includes_mode_and_history():
    text = render_session(new_session(Mode.SINGLE_PLAYER))
    assert "Single Player (vs AI)" in text
    assert "Theme: light" in text
    assert "History: Start *" in text
