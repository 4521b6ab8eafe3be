"""
Tactics and simple motifs: immediate wins, blocks and forks for a given mark.
Used by the arena's scripted opponents.
"""
from typing import List, Optional, Sequence

from .game_basics import EMPTY, apply_move, evaluate, other


def immediate_winning_moves(board: Sequence[int], player: int) -> List[int]:
    wins: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        if evaluate(apply_move(board, i, player)).winner == player:
            wins.append(i)
    return wins


def blocking_moves(board: Sequence[int], player: int) -> List[int]:
    return immediate_winning_moves(board, other(player))


def fork_moves(board: Sequence[int], player: int) -> List[int]:
    forks: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        if len(immediate_winning_moves(apply_move(board, i, player), player)) >= 2:
            forks.append(i)
    return forks


def tactical_candidates(board: Sequence[int], player: int) -> Optional[List[int]]:
    """Win, else block, else fork; None when no motif applies."""
    for finder in (immediate_winning_moves, blocking_moves, fork_moves):
        moves = finder(board, player)
        if moves:
            return moves
    return None
