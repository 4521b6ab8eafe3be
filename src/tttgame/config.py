"""Runtime configuration.

Environment-first: ``TTT_AI_DELAY_MS``, ``TTT_MODE`` and ``TTT_THEME`` override
the defaults, and CLI flags override the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .session import LIGHT, THEMES, Mode, parse_mode

DEFAULT_AI_DELAY_MS = 500


@dataclass
class GameConfig:
    # presentation pacing only; never affects which move the AI picks
    ai_delay_ms: int = DEFAULT_AI_DELAY_MS
    mode: Mode = Mode.SINGLE_PLAYER
    theme: str = LIGHT

    def __post_init__(self) -> None:
        if self.ai_delay_ms < 0:
            raise ValueError(f"ai_delay_ms must be >= 0, got {self.ai_delay_ms}")
        self.mode = parse_mode(self.mode)
        if self.theme not in THEMES:
            raise ValueError(f"Unknown theme: {self.theme!r}")

    @property
    def ai_delay_s(self) -> float:
        return self.ai_delay_ms / 1000.0

    @classmethod
    def from_env(cls) -> "GameConfig":
        delay = os.getenv("TTT_AI_DELAY_MS")
        try:
            delay_ms = int(delay) if delay else DEFAULT_AI_DELAY_MS
        except ValueError:
            raise ValueError(f"TTT_AI_DELAY_MS must be an integer, got {delay!r}") from None
        return cls(
            ai_delay_ms=delay_ms,
            mode=os.getenv("TTT_MODE") or Mode.SINGLE_PLAYER,
            theme=os.getenv("TTT_THEME") or LIGHT,
        )
