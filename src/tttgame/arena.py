"""
Seeded matches between the search AI and scripted opponents.

Opponents:
- random: uniform over legal moves.
- tactical: win, else block, else fork, else random.
- optimal: uniform over the game-theoretically optimal moves.
The AI itself always plays :func:`tttgame.solver.best_move`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from .game_basics import O, legal_moves, other
from .session import Mode, new_session, play_move
from .solver import best_move, optimal_moves
from .tactics import tactical_candidates

OPPONENTS = ("random", "tactical", "optimal")


@dataclass
class ArenaResult:
    opponent: str
    ai_mark: int
    wins: int = 0
    draws: int = 0
    losses: int = 0
    lengths: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int64))

    @property
    def games(self) -> int:
        return self.wins + self.draws + self.losses

    def summary(self) -> Dict[str, float]:
        n = max(1, self.games)
        return {
            "games": float(self.games),
            "win_rate": self.wins / n,
            "draw_rate": self.draws / n,
            "loss_rate": self.losses / n,
            "mean_length": float(self.lengths.mean()) if self.lengths.size else 0.0,
        }


def _opponent_move(kind: str, board, mark: int, rng: np.random.Generator) -> int:
    if kind == "random":
        choices = legal_moves(board)
    elif kind == "tactical":
        choices = tactical_candidates(board, mark) or legal_moves(board)
    else:
        choices = optimal_moves(board, mark, other(mark))
    return int(rng.choice(choices))


def play_game(kind: str, ai_mark: int, rng: np.random.Generator) -> tuple:
    """Play one game in a two-player session; returns (final outcome, plies)."""
    session = new_session(Mode.TWO_PLAYER)
    opp_mark = other(ai_mark)
    while not session.outcome.is_terminal:
        mark = session.next_mark
        if mark == ai_mark:
            idx = best_move(session.board, ai_mark, opp_mark).index
        else:
            idx = _opponent_move(kind, session.board, mark, rng)
        session = play_move(session, idx)
    return session.outcome, session.current_step


def play_match(opponent: str = "random", games: int = 100, seed: int = 42, ai_mark: int = O) -> ArenaResult:
    if opponent not in OPPONENTS:
        raise ValueError(f"Unknown opponent: {opponent!r} (expected one of {', '.join(OPPONENTS)})")
    if games < 0:
        raise ValueError(f"games must be >= 0, got {games}")
    rng = np.random.default_rng(seed)
    res = ArenaResult(opponent=opponent, ai_mark=ai_mark)
    lengths: List[int] = []
    for _ in range(games):
        outcome, plies = play_game(opponent, ai_mark, rng)
        lengths.append(plies)
        if outcome.winner == ai_mark:
            res.wins += 1
        elif outcome.winner is None:
            res.draws += 1
        else:
            res.losses += 1
    res.lengths = np.asarray(lengths, dtype=np.int64)
    logging.info(
        "arena opponent=%s games=%d wins=%d draws=%d losses=%d",
        opponent, res.games, res.wins, res.draws, res.losses,
    )
    return res
