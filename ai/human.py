"""Terminal-driven human player."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from engine.board import Move
from engine.pieces import Side

if TYPE_CHECKING:
    from engine.game import Game


class QuitGame(Exception):
    """Raised when the human asks to leave the game."""


class HumanPlayer:
    """Reads moves such as 'a7-b6' (or '-' to pass) from a line source."""

    def __init__(
        self,
        game: "Game",
        side: Side,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.game = game
        self.side = side
        self._input = input_fn
        self._output = output_fn

    @property
    def is_auto(self) -> bool:
        return False

    def get_move(self) -> Move:
        while True:
            command = self._input(f"{self.side.value}> ").strip()
            if command.lower() in {"quit", "exit"}:
                raise QuitGame()
            try:
                move = Move.from_string(command)
            except ValueError:
                self._output("Invalid move format. Use e.g. a7-b6, or - to pass.")
                continue
            if not self.game.board.is_legal_move(move):
                self._output(f"Illegal move: {move}")
                continue
            self.game.report_move(move, self.side)
            return move
