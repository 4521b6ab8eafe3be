"""Text rendering of boards, status and history for the terminal front end."""
from __future__ import annotations

from typing import List, Optional, Sequence

from .game_basics import DRAW, SYMBOLS, Line
from .session import GameSession


def render_board(board: Sequence[int], line: Optional[Line] = None) -> str:
    # winning cells are drawn as [X]
    highlight = set(line or ())
    rows = []
    for r in range(3):
        cells = []
        for c in range(3):
            i = r * 3 + c
            sym = SYMBOLS[board[i]] if board[i] else str(i)
            cells.append(f"[{sym}]" if i in highlight else f" {sym} ")
        rows.append("|".join(cells))
    return "\n---+---+---\n".join(rows)


def status_line(session: GameSession, ai_thinking: bool = False) -> str:
    outcome = session.outcome
    if outcome.status == DRAW:
        return "It's a draw!"
    if outcome.winner is not None:
        return f"Winner: {SYMBOLS[outcome.winner]}"
    text = f"Next: {SYMBOLS[session.next_mark]}"
    if ai_thinking or session.ai_pending:
        text += " ...AI is thinking"
    return text


def history_labels(session: GameSession) -> List[str]:
    labels = []
    for step in range(len(session.history)):
        label = "Start" if step == 0 else f"Move #{step}"
        if step == session.current_step:
            label += " *"
        labels.append(label)
    return labels


def render_session(session: GameSession) -> str:
    return "\n".join([
        f"Mode: {session.mode.label}  Theme: {session.theme}",
        render_board(session.board, session.outcome.line),
        status_line(session),
        "History: " + ", ".join(history_labels(session)),
    ])
