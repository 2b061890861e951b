"""Player capability shared by automated and human players."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from engine.board import Move
from engine.pieces import Side


@runtime_checkable
class Player(Protocol):
    """Anything that can take a turn for one side of a game."""

    side: Side

    @property
    def is_auto(self) -> bool:
        """Whether moves are computed rather than typed in."""
        ...

    def get_move(self) -> Move:
        """Choose a move for the current turn, report it to the game, and return it."""
        ...
