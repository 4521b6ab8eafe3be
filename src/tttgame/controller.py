"""
Interactive driver around the pure session functions.

The controller owns the current ``GameSession`` and defers the AI reply by
``GameConfig.ai_delay_ms`` on the asyncio loop so a front end can draw the
human's move first. Each deferred move is a ticket bound to the session
generation and step it was scheduled for; a reset, a mode switch or a history
jump cancels the outstanding ticket, and a ticket that fires against a session
it no longer matches is discarded instead of applied.

Without a running event loop the AI reply is played inline.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from .config import GameConfig
from .session import (
    AI_MARK,
    HUMAN_MARK,
    GameSession,
    begin_ai_turn,
    cancel_ai_turn,
    jump_to,
    needs_ai_move,
    new_session,
    play_move,
    restart,
    switch_mode,
    toggle_theme,
)
from .solver import best_move


@dataclass(eq=False)
class _Ticket:
    generation: int
    step: int
    done: "asyncio.Future[bool]"
    handle: Optional[asyncio.TimerHandle] = None

    def resolve(self, applied: bool) -> None:
        if not self.done.done():
            self.done.set_result(applied)


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class GameController:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.config = config or GameConfig()
        self._loop = loop
        self._session = new_session(self.config.mode, theme=self.config.theme)
        self._ticket: Optional[_Ticket] = None

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def ai_thinking(self) -> bool:
        return self._ticket is not None

    def click(self, index: int) -> bool:
        """Human move at ``index``; returns False when the move was rejected."""
        before = self._session
        self._session = play_move(before, index, is_ai_move=False)
        if self._session is before:
            logging.debug("rejected move at %d (step=%d)", index, before.current_step)
            return False
        self._sync()
        return True

    def jump(self, step: int) -> None:
        target = jump_to(self._session, step)
        self._cancel_pending()
        self._session = cancel_ai_turn(target)
        self._sync()

    def switch_mode(self, mode) -> None:
        self._cancel_pending()
        self._session = switch_mode(self._session, mode)
        self._sync()

    def restart(self) -> None:
        self._cancel_pending()
        self._session = restart(self._session)
        self._sync()

    def toggle_theme(self) -> None:
        self._session = toggle_theme(self._session)

    async def wait_idle(self) -> None:
        """Wait until no AI move is outstanding."""
        while self._ticket is not None:
            await self._ticket.done

    def _sync(self) -> None:
        if self._ticket is not None or not needs_ai_move(self._session):
            return
        loop = self._loop or _running_loop()
        if loop is None:
            self._play_ai()
            return
        self._session = begin_ai_turn(self._session)
        ticket = _Ticket(
            generation=self._session.generation,
            step=self._session.current_step,
            done=loop.create_future(),
        )
        ticket.handle = loop.call_later(self.config.ai_delay_s, self._fire, ticket)
        self._ticket = ticket
        logging.debug(
            "AI move scheduled in %d ms (generation=%d step=%d)",
            self.config.ai_delay_ms, ticket.generation, ticket.step,
        )

    def _fire(self, ticket: _Ticket) -> None:
        if ticket is not self._ticket:
            logging.debug("discarding superseded AI move (generation=%d)", ticket.generation)
            ticket.resolve(False)
            return
        self._ticket = None
        s = self._session
        if s.generation != ticket.generation or s.current_step != ticket.step or not needs_ai_move(s):
            logging.debug(
                "discarding stale AI move (generation %d->%d, step %d->%d)",
                ticket.generation, s.generation, ticket.step, s.current_step,
            )
            self._session = cancel_ai_turn(s)
            ticket.resolve(False)
            self._sync()
            return
        self._play_ai()
        ticket.resolve(True)
        self._sync()

    def _play_ai(self) -> None:
        res = best_move(self._session.board, AI_MARK, HUMAN_MARK)
        if res.index is None:
            self._session = cancel_ai_turn(self._session)
            return
        self._session = play_move(self._session, res.index, is_ai_move=True)
        logging.debug("AI played %d (score=%d)", res.index, res.score)

    def _cancel_pending(self) -> None:
        ticket, self._ticket = self._ticket, None
        if ticket is None:
            return
        if ticket.handle is not None:
            ticket.handle.cancel()
        ticket.resolve(False)
        self._session = cancel_ai_turn(self._session)
        logging.debug("cancelled pending AI move (generation=%d)", ticket.generation)
