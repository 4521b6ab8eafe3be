"""
Perfect-play move search (negamax form of minimax), from the searching player's perspective.
Scores:
- +1 when the searching player wins, -1 when the opponent wins, 0 for a draw.
Tie-break policy:
- Prefer win over draw over loss.
- Among wins and draws, prefer fewer plies to the end of the game; among losses, more plies.
- Remaining ties go to the lowest cell index (candidates are generated in ascending order
  and only a strictly better candidate replaces the current best).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Sequence

from .game_basics import DRAW, EMPTY, Board, apply_move, evaluate


@dataclass(frozen=True)
class SearchResult:
    index: Optional[int]
    score: int
    # plies until the game ends under optimal play from both sides
    plies: int = 0


def _terminal_score(board: Sequence[int], searching: int) -> Optional[int]:
    outcome = evaluate(board)
    if not outcome.is_terminal:
        return None
    if outcome.status == DRAW:
        return 0
    return 1 if outcome.mark == searching else -1


def _better(cand: SearchResult, best: Optional[SearchResult]) -> bool:
    if best is None:
        return True
    if cand.score != best.score:
        return cand.score > best.score
    if cand.score < 0:
        return cand.plies > best.plies
    return cand.plies < best.plies


def best_move_exhaustive(board: Sequence[int], searching: int, opponent: int) -> SearchResult:
    """Reference search: full depth, no pruning, no memoization."""
    score = _terminal_score(board, searching)
    if score is not None:
        return SearchResult(None, score)
    best: Optional[SearchResult] = None
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        reply = best_move_exhaustive(apply_move(board, i, searching), opponent, searching)
        cand = SearchResult(i, -reply.score, reply.plies + 1)
        if _better(cand, best):
            best = cand
    if best is None:
        return SearchResult(None, 0)
    return best


@lru_cache(maxsize=None)
def _search(board_t: Board, searching: int, opponent: int) -> SearchResult:
    score = _terminal_score(board_t, searching)
    if score is not None:
        return SearchResult(None, score)
    best: Optional[SearchResult] = None
    for i, v in enumerate(board_t):
        if v != EMPTY:
            continue
        reply = _search(apply_move(board_t, i, searching), opponent, searching)
        cand = SearchResult(i, -reply.score, reply.plies + 1)
        if _better(cand, best):
            best = cand
    if best is None:
        return SearchResult(None, 0)
    return best


def best_move(board: Sequence[int], searching: int, opponent: int) -> SearchResult:
    """Memoized search; picks the same move and score as :func:`best_move_exhaustive`."""
    res = _search(tuple(board), searching, opponent)
    logging.debug(
        "best_move searching=%d index=%s score=%d plies=%d",
        searching, res.index, res.score, res.plies,
    )
    return res


def optimal_moves(board: Sequence[int], searching: int, opponent: int) -> List[int]:
    """All cells that reach the best achievable score, ignoring game length."""
    board_t = tuple(board)
    if evaluate(board_t).is_terminal:
        return []
    scored = [
        (i, -_search(apply_move(board_t, i, searching), opponent, searching).score)
        for i, v in enumerate(board_t) if v == EMPTY
    ]
    if not scored:
        return []
    top = max(s for _, s in scored)
    return [i for i, s in scored if s == top]


def clear_cache() -> None:
    _search.cache_clear()


def cache_size() -> int:
    return _search.cache_info().currsize
