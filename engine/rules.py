"""Geometry helpers and constants for Ataxx."""

from __future__ import annotations

from typing import Iterable, List, Tuple

BOARD_SIZE = 7
COLUMNS = "abcdefg"
ROWS = "1234567"

# Largest per-axis offset a move can cover (jump distance).
MAX_MOVE_DISTANCE = 2

# Consecutive jumps without an intervening clone that end the game.
JUMP_LIMIT = 25

Position = Tuple[int, int]


def in_bounds(pos: Position) -> bool:
    """Return whether a position is inside the Ataxx board."""
    row, col = pos
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def distance(a: Position, b: Position) -> int:
    """Return the king-move (Chebyshev) distance between two positions."""
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def neighbors(pos: Position, radius: int = 1) -> Iterable[Position]:
    """Yield in-bounds positions within radius of pos, excluding pos itself."""
    row, col = pos
    for dr in range(-radius, radius + 1):
        for dc in range(-radius, radius + 1):
            if dr == 0 and dc == 0:
                continue
            candidate = (row + dr, col + dc)
            if in_bounds(candidate):
                yield candidate


def reflections(pos: Position) -> List[Position]:
    """Return pos and its mirror images through both centre lines."""
    row, col = pos
    last = BOARD_SIZE - 1
    images: List[Position] = []
    for candidate in ((row, col), (last - row, col), (row, last - col), (last - row, last - col)):
        if candidate not in images:
            images.append(candidate)
    return images


def square_name(pos: Position) -> str:
    """Convert (row, col) to algebraic name such as 'b3'."""
    row, col = pos
    if not in_bounds(pos):
        raise ValueError(f"Position off board: {pos}")
    return f"{COLUMNS[col]}{ROWS[row]}"


def parse_square(name: str) -> Position:
    """Convert algebraic name such as 'b3' to (row, col)."""
    text = name.strip().lower()
    if len(text) != 2 or text[0] not in COLUMNS or text[1] not in ROWS:
        raise ValueError(f"Invalid square: {name!r}")
    return (ROWS.index(text[1]), COLUMNS.index(text[0]))
