"""
Game session: mode, linear move history with time travel, and the turn rules.

A ``GameSession`` is an immutable value. Every operation returns a new session,
or the very same object when the action is rejected. Rejections are silent
because they are the routine result of an interactive front end racing with a
deferred AI move (occupied cell, game already over, human moving for the AI).

Derived values (outcome, whose turn it is, whether the AI must move) are
properties computed from the current history entry and are never stored.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple

from .game_basics import EMPTY, O, X, Board, Outcome, apply_move, empty_board, evaluate

LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)


class Mode(str, Enum):
    SINGLE_PLAYER = "single"
    TWO_PLAYER = "two"

    @property
    def label(self) -> str:
        return MODE_LABELS[self]


MODE_LABELS = {
    Mode.SINGLE_PLAYER: "Single Player (vs AI)",
    Mode.TWO_PLAYER: "Two Player (Local)",
}

AI_MARK = O
HUMAN_MARK = X


@dataclass(frozen=True)
class HistoryEntry:
    board: Board
    x_is_next: bool

    @property
    def next_mark(self) -> int:
        return X if self.x_is_next else O


def _initial_history() -> Tuple[HistoryEntry, ...]:
    return (HistoryEntry(empty_board(), True),)


@dataclass(frozen=True)
class GameSession:
    mode: Mode = Mode.SINGLE_PLAYER
    history: Tuple[HistoryEntry, ...] = field(default_factory=_initial_history)
    current_step: int = 0
    # guard: an AI move is scheduled and humans may not move meanwhile
    ai_pending: bool = False
    # bumped on every reset; deferred AI moves carry it as a cancellation token
    generation: int = 0
    theme: str = LIGHT

    def __post_init__(self) -> None:
        if not 0 <= self.current_step < len(self.history):
            raise ValueError(
                f"current_step {self.current_step} outside history of length {len(self.history)}"
            )
        if self.theme not in THEMES:
            raise ValueError(f"Unknown theme: {self.theme!r}")

    @property
    def current(self) -> HistoryEntry:
        return self.history[self.current_step]

    @property
    def board(self) -> Board:
        return self.current.board

    @property
    def x_is_next(self) -> bool:
        return self.current.x_is_next

    @property
    def next_mark(self) -> int:
        return self.current.next_mark

    @property
    def outcome(self) -> Outcome:
        return evaluate(self.current.board)


def parse_mode(value) -> Mode:
    if isinstance(value, Mode):
        return value
    try:
        return Mode(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown mode: {value!r} (expected 'single' or 'two')") from None


def new_session(mode=Mode.SINGLE_PLAYER, theme: str = LIGHT) -> GameSession:
    return GameSession(mode=parse_mode(mode), theme=theme)


def needs_ai_move(session: GameSession) -> bool:
    return (
        session.mode == Mode.SINGLE_PLAYER
        and not session.outcome.is_terminal
        and session.next_mark == AI_MARK
    )


def play_move(session: GameSession, index: int, is_ai_move: bool = False) -> GameSession:
    if not 0 <= index < 9:
        raise ValueError(f"Cell index out of range: {index}")
    current = session.current
    if session.outcome.is_terminal or current.board[index] != EMPTY:
        return session
    if not is_ai_move:
        if session.ai_pending:
            return session
        if session.mode == Mode.SINGLE_PLAYER and current.next_mark == AI_MARK:
            return session

    board = apply_move(current.board, index, current.next_mark)
    history = session.history[: session.current_step + 1] + (
        HistoryEntry(board, not current.x_is_next),
    )
    return replace(
        session,
        history=history,
        current_step=len(history) - 1,
        ai_pending=False if is_ai_move else session.ai_pending,
    )


def jump_to(session: GameSession, step: int) -> GameSession:
    if not 0 <= step < len(session.history):
        raise ValueError(f"Step {step} outside history of length {len(session.history)}")
    return replace(session, current_step=step)


def switch_mode(session: GameSession, mode) -> GameSession:
    return GameSession(
        mode=parse_mode(mode),
        generation=session.generation + 1,
        theme=session.theme,
    )


def restart(session: GameSession) -> GameSession:
    return switch_mode(session, session.mode)


def toggle_theme(session: GameSession) -> GameSession:
    return replace(session, theme=DARK if session.theme == LIGHT else LIGHT)


def begin_ai_turn(session: GameSession) -> GameSession:
    return replace(session, ai_pending=True)


def cancel_ai_turn(session: GameSession) -> GameSession:
    if not session.ai_pending:
        return session
    return replace(session, ai_pending=False)
