import pytest

from engine.board import Board
from engine.pieces import Side

# Red a1 can reach six empty squares; blue a3/b2 are in range, blue g7 is walled in.
SMALL_OPEN_ROWS = [
    "XXXXXXb",
    "XXXXXXX",
    "XXXXXXX",
    "XXXXXXX",
    "b..XXXX",
    ".b.XXXX",
    "r..XXXX",
]

# Red a1 is walled in; blue g7 is free to move.
RED_STUCK_ROWS = [
    "......b",
    ".......",
    ".......",
    ".......",
    "XXX....",
    "XXX....",
    "rXX....",
]

# Red a1-b1 converts the only blue piece.
RED_WINS_NEXT_ROWS = [
    "XXXXXXX",
    "XXXXXXX",
    "XXXXXXX",
    "XXXXXXX",
    "XXXXXXX",
    "XbXXXXX",
    "r.XXXXX",
]


@pytest.fixture
def small_open_board():
    return Board.from_rows(SMALL_OPEN_ROWS, current_turn=Side.RED)


@pytest.fixture
def red_stuck_board():
    return Board.from_rows(RED_STUCK_ROWS, current_turn=Side.RED)


@pytest.fixture
def red_wins_next_board():
    return Board.from_rows(RED_WINS_NEXT_ROWS, current_turn=Side.RED)
