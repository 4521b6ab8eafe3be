"""tttgame package.

Rules engine, perfect-play move search, game session state machine with
time travel, and a terminal CLI.

Convenience imports are exposed for common workflows.
"""

from .game_basics import Outcome, evaluate
from .session import (
    GameSession,
    Mode,
    jump_to,
    new_session,
    play_move,
    restart,
    switch_mode,
    toggle_theme,
)
from .solver import SearchResult, best_move, best_move_exhaustive

__all__ = [
    "evaluate",
    "Outcome",
    "best_move",
    "best_move_exhaustive",
    "SearchResult",
    "GameSession",
    "Mode",
    "new_session",
    "play_move",
    "jump_to",
    "switch_mode",
    "restart",
    "toggle_theme",
]
