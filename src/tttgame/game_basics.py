"""
Game basics: board representation, serialization, rules, outcome evaluation, validity.
Notes:
- A board is a tuple of 9 cells: 0=empty, 1=X, 2=O, row-major (index = row*3 + col).
- X always starts. A "ply" is one player's single move.
- Outcomes are always recomputed from a board; nothing caches them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

EMPTY = 0
X = 1
O = 2

SYMBOLS = {EMPTY: " ", X: "X", O: "O"}

Board = Tuple[int, ...]
Line = Tuple[int, int, int]

# rows, then columns, then both diagonals
LINES: Tuple[Line, ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

ONGOING = "ongoing"
WIN = "win"
DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    status: str
    mark: Optional[int] = None
    line: Optional[Line] = None

    @property
    def is_terminal(self) -> bool:
        return self.status != ONGOING

    @property
    def winner(self) -> Optional[int]:
        return self.mark if self.status == WIN else None


def empty_board() -> Board:
    return (EMPTY,) * 9


def other(mark: int) -> int:
    if mark not in (X, O):
        raise ValueError(f"Not a player mark: {mark!r}")
    return O if mark == X else X


def evaluate(board: Sequence[int]) -> Outcome:
    for line in LINES:
        a, b, c = line
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return Outcome(WIN, v, line)
    if EMPTY not in board:
        return Outcome(DRAW)
    return Outcome(ONGOING)


def legal_moves(board: Sequence[int]) -> list[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def apply_move(board: Sequence[int], index: int, mark: int) -> Board:
    """Return a new board with ``mark`` written at ``index``; ``board`` is untouched."""
    if not 0 <= index < 9:
        raise ValueError(f"Cell index out of range: {index}")
    cells = list(board)
    cells[index] = mark
    return tuple(cells)


def get_piece_counts(board: Sequence[int]) -> Tuple[int, int]:
    cells = list(board)
    return cells.count(X), cells.count(O)


def current_player(board: Sequence[int]) -> int:
    x, o = get_piece_counts(board)
    return X if x == o else O


def is_valid_state(board: Sequence[int]) -> bool:
    """True when the board is reachable from the empty board with X moving first."""
    if len(board) != 9 or any(v not in (EMPTY, X, O) for v in board):
        return False
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False

    def count_wins(p: int) -> int:
        return sum(1 for line in LINES if all(board[i] == p for i in line))

    x_wins, o_wins = count_wins(X), count_wins(O)
    if x_wins and o_wins:
        return False
    if x_wins and x_count != o_count + 1:
        return False
    if o_wins and x_count != o_count:
        return False
    return True


def serialize_board(board: Sequence[int]) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> Board:
    raw = board_str.strip()
    if len(raw) != 9 or any(c not in "012" for c in raw):
        raise ValueError("Invalid board string. Must be 9 chars of 0/1/2.")
    return tuple(int(c) for c in raw)
