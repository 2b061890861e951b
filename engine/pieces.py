"""Side and cell definitions for Ataxx."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict


class Side(str, Enum):
    """Player side."""

    RED = "red"
    BLUE = "blue"

    def opponent(self) -> "Side":
        return Side.BLUE if self is Side.RED else Side.RED

    @property
    def cell(self) -> "Cell":
        return SIDE_CELL[self]


class Cell(IntEnum):
    """Contents of one board square, stored in the numpy grid."""

    EMPTY = 0
    RED = 1
    BLUE = 2
    BLOCKED = 3


SIDE_CELL: Dict[Side, Cell] = {
    Side.RED: Cell.RED,
    Side.BLUE: Cell.BLUE,
}

CELL_SYMBOL: Dict[Cell, str] = {
    Cell.EMPTY: ".",
    Cell.RED: "r",
    Cell.BLUE: "b",
    Cell.BLOCKED: "X",
}

SYMBOL_CELL: Dict[str, Cell] = {symbol: cell for cell, symbol in CELL_SYMBOL.items()}
