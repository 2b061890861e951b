"""Ataxx board state, move legality, and reversible move application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from engine.pieces import CELL_SYMBOL, SYMBOL_CELL, Cell, Side
from engine.rules import (
    BOARD_SIZE,
    COLUMNS,
    JUMP_LIMIT,
    ROWS,
    Position,
    distance,
    in_bounds,
    neighbors,
    parse_square,
    reflections,
    square_name,
)

PASS_TEXT = "-"


class IllegalMoveError(ValueError):
    """Raised when a move is applied that the board does not accept."""


@dataclass(frozen=True)
class Move:
    """An Ataxx action: a clone/jump between two squares, or a pass."""

    from_pos: Optional[Position] = None
    to_pos: Optional[Position] = None

    @classmethod
    def pass_move(cls) -> "Move":
        return PASS

    @classmethod
    def from_string(cls, text: str) -> "Move":
        """Parse 'a7-b6' style notation, or '-' for a pass."""
        stripped = text.strip()
        if stripped == PASS_TEXT:
            return PASS
        parts = stripped.split("-")
        if len(parts) != 2:
            raise ValueError(f"Invalid move: {text!r}")
        return cls(from_pos=parse_square(parts[0]), to_pos=parse_square(parts[1]))

    @property
    def is_pass(self) -> bool:
        return self.from_pos is None

    @property
    def is_clone(self) -> bool:
        return not self.is_pass and distance(self.from_pos, self.to_pos) == 1

    @property
    def is_jump(self) -> bool:
        return not self.is_pass and distance(self.from_pos, self.to_pos) == 2

    def __str__(self) -> str:
        if self.is_pass:
            return PASS_TEXT
        return f"{square_name(self.from_pos)}-{square_name(self.to_pos)}"


PASS = Move()


@dataclass(frozen=True)
class MoveResult:
    """Result metadata for an applied move."""

    converted: int
    winner: Optional[Side]
    is_draw: bool


Outcome = Tuple[bool, Optional[Side], bool]


@dataclass
class _UndoRecord:
    changes: List[Tuple[Position, Cell]]
    turn: Side
    consecutive_jumps: int
    outcome: Optional[Outcome]


class Board:
    """Ataxx board with a make/undo history."""

    size: int = BOARD_SIZE

    def __init__(self, jump_limit: int = JUMP_LIMIT) -> None:
        self.jump_limit = jump_limit
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)
        self.current_turn = Side.RED
        self.consecutive_jumps = 0
        self.ply_count = 0
        self._history: List[_UndoRecord] = []
        self._outcome: Optional[Outcome] = None

        last = self.size - 1
        self.grid[last, 0] = Cell.RED
        self.grid[0, last] = Cell.RED
        self.grid[0, 0] = Cell.BLUE
        self.grid[last, last] = Cell.BLUE

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        current_turn: Side = Side.RED,
        jump_limit: int = JUMP_LIMIT,
    ) -> "Board":
        """
        Build a board from text rows, top row (rank 7) first.

        Symbols: 'r' red, 'b' blue, 'X' blocked, '.' empty; spaces are ignored.
        """
        if len(rows) != cls.size:
            raise ValueError(f"Expected {cls.size} rows, got {len(rows)}")
        board = cls(jump_limit=jump_limit)
        board.grid[:, :] = Cell.EMPTY
        for offset, text in enumerate(rows):
            symbols = text.replace(" ", "")
            if len(symbols) != cls.size:
                raise ValueError(f"Row {text!r} must have {cls.size} squares")
            row = cls.size - 1 - offset
            for col, symbol in enumerate(symbols):
                if symbol not in SYMBOL_CELL:
                    raise ValueError(f"Unknown square symbol: {symbol!r}")
                board.grid[row, col] = SYMBOL_CELL[symbol]
        board.current_turn = current_turn
        return board

    def clone(self) -> "Board":
        """Independent copy of the position; history is not carried over."""
        cloned = Board.__new__(Board)
        cloned.jump_limit = self.jump_limit
        cloned.grid = self.grid.copy()
        cloned.current_turn = self.current_turn
        cloned.consecutive_jumps = self.consecutive_jumps
        cloned.ply_count = self.ply_count
        cloned._history = []
        cloned._outcome = self._outcome
        return cloned

    def iter_positions(self) -> Iterable[Position]:
        """Yield all board positions, column by column."""
        for col in range(self.size):
            for row in range(self.size):
                yield (row, col)

    def get_cell(self, pos: Position) -> Cell:
        row, col = pos
        return Cell(int(self.grid[row, col]))

    def set_block(self, square: str | Position) -> None:
        """Block a square and its reflections. Only allowed before the first move."""
        pos = parse_square(square) if isinstance(square, str) else square
        if not in_bounds(pos):
            raise ValueError(f"Position off board: {pos}")
        if self._history or self.ply_count:
            raise ValueError("Blocks can only be placed before the first move.")
        images = reflections(pos)
        for image in images:
            if self.get_cell(image) in (Cell.RED, Cell.BLUE):
                raise ValueError(f"Cannot block occupied square {square_name(image)}")
        for row, col in images:
            self.grid[row, col] = Cell.BLOCKED
        self._outcome = None

    def piece_count(self, side: Side) -> int:
        return int(np.count_nonzero(self.grid == side.cell))

    def can_move(self, side: Side) -> bool:
        """Return whether side has any clone or jump available, ignoring turn."""
        for row, col in np.argwhere(self.grid == side.cell):
            for target in neighbors((int(row), int(col)), radius=2):
                if self.grid[target] == Cell.EMPTY:
                    return True
        return False

    def is_legal_move(self, move: Move) -> bool:
        """Return whether move is legal for the side to move."""
        if move.is_pass:
            return not self.can_move(self.current_turn) and not self.game_over()[0]
        if move.to_pos is None or not in_bounds(move.from_pos) or not in_bounds(move.to_pos):
            return False
        if self.get_cell(move.from_pos) is not self.current_turn.cell:
            return False
        if self.get_cell(move.to_pos) is not Cell.EMPTY:
            return False
        if distance(move.from_pos, move.to_pos) not in (1, 2):
            return False
        return not self.game_over()[0]

    def apply_move(self, move: Move) -> MoveResult:
        """Apply a legal move, convert adjacent enemies, and switch turn."""
        if not self.is_legal_move(move):
            raise IllegalMoveError(f"Illegal move: {move!r}")

        mover = self.current_turn
        record = _UndoRecord(
            changes=[],
            turn=mover,
            consecutive_jumps=self.consecutive_jumps,
            outcome=self._outcome,
        )
        converted = 0
        if not move.is_pass:
            if move.is_jump:
                self._set(move.from_pos, Cell.EMPTY, record)
                self.consecutive_jumps += 1
            else:
                self.consecutive_jumps = 0
            self._set(move.to_pos, mover.cell, record)
            enemy = mover.opponent().cell
            for pos in neighbors(move.to_pos):
                if self.grid[pos] == enemy:
                    self._set(pos, mover.cell, record)
                    converted += 1

        self._history.append(record)
        self.ply_count += 1
        self.current_turn = mover.opponent()
        self._outcome = None

        is_terminal, winner, is_draw = self.game_over()
        return MoveResult(
            converted=converted,
            winner=winner if is_terminal else None,
            is_draw=is_draw if is_terminal else False,
        )

    def undo(self) -> None:
        """Reverse the most recent apply_move."""
        if not self._history:
            raise RuntimeError("No move to undo.")
        record = self._history.pop()
        for pos, previous in reversed(record.changes):
            self.grid[pos] = previous
        self.current_turn = record.turn
        self.consecutive_jumps = record.consecutive_jumps
        self.ply_count -= 1
        self._outcome = record.outcome

    def _set(self, pos: Position, cell: Cell, record: _UndoRecord) -> None:
        record.changes.append((pos, self.get_cell(pos)))
        self.grid[pos] = cell

    def game_over(self) -> Outcome:
        """Return (is_terminal, winner, is_draw)."""
        if self._outcome is None:
            self._outcome = self._compute_outcome()
        return self._outcome

    def winner(self) -> Optional[Side]:
        """Winning side, or None for a tie or an unfinished game."""
        return self.game_over()[1]

    def _compute_outcome(self) -> Outcome:
        red = self.piece_count(Side.RED)
        blue = self.piece_count(Side.BLUE)
        finished = (
            red == 0
            or blue == 0
            or self.consecutive_jumps >= self.jump_limit
            or (not self.can_move(Side.RED) and not self.can_move(Side.BLUE))
        )
        if not finished:
            return False, None, False
        if red > blue:
            return True, Side.RED, False
        if blue > red:
            return True, Side.BLUE, False
        return True, None, True

    def state_key(self) -> Tuple[object, ...]:
        """Hashable snapshot of everything that affects play."""
        return (self.current_turn.value, self.consecutive_jumps, self.grid.tobytes())

    def render_ascii(self) -> str:
        """Return a simple human-readable board representation."""
        lines: List[str] = []
        for row in range(self.size - 1, -1, -1):
            cells = " ".join(CELL_SYMBOL[self.get_cell((row, col))] for col in range(self.size))
            lines.append(f"{ROWS[row]}  {cells}")
        lines.append("   " + " ".join(COLUMNS))
        return "\n".join(lines)
