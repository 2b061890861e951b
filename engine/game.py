"""Game controller: owns the live board and applies moves reported by players."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from engine.board import Board, Move, MoveResult
from engine.pieces import Side

if TYPE_CHECKING:
    from ai.player import Player

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_PLIES = 1000

MoveObserver = Callable[[Side, Move, MoveResult], None]


@dataclass
class GameRecord:
    """Summary of one finished (or capped) game."""

    winner: Optional[Side]
    is_draw: bool
    plies: int
    moves: List[Tuple[Side, Move]] = field(default_factory=list)


class Game:
    """Runs turns between two players over a shared board."""

    def __init__(
        self,
        board: Optional[Board] = None,
        max_plies: int = DEFAULT_MAX_PLIES,
        observer: Optional[MoveObserver] = None,
    ) -> None:
        self.board = board if board is not None else Board()
        self.max_plies = max_plies
        self.observer = observer
        self.players: Dict[Side, "Player"] = {}
        self.moves: List[Tuple[Side, Move]] = []

    def set_player(self, player: "Player") -> None:
        self.players[player.side] = player

    def report_move(self, move: Move, side: Side) -> MoveResult:
        """Apply a move announced by the player for side."""
        if side is not self.board.current_turn:
            raise ValueError(f"{side.value} reported a move on {self.board.current_turn.value}'s turn")
        result = self.board.apply_move(move)
        self.moves.append((side, move))
        LOGGER.info("%s plays %s (converted=%d)", side.value, move, result.converted)
        if self.observer is not None:
            self.observer(side, move, result)
        return result

    def play(self) -> GameRecord:
        """Ask players for moves until the game ends or the ply cap is hit."""
        missing = [side.value for side in Side if side not in self.players]
        if missing:
            raise RuntimeError(f"No player registered for: {', '.join(missing)}")

        plies = 0
        while plies < self.max_plies:
            terminal, winner, is_draw = self.board.game_over()
            if terminal:
                LOGGER.info(
                    "Game over after %d plies | winner=%s draw=%s",
                    plies,
                    winner.value if winner else None,
                    is_draw,
                )
                return GameRecord(winner=winner, is_draw=is_draw, plies=plies, moves=list(self.moves))

            player = self.players[self.board.current_turn]
            before = len(self.moves)
            player.get_move()
            if len(self.moves) != before + 1:
                raise RuntimeError(f"{player.side.value} player did not report exactly one move")
            plies += 1

        LOGGER.info("Ply cap %d reached; scoring game as a draw", self.max_plies)
        return GameRecord(winner=None, is_draw=True, plies=plies, moves=list(self.moves))
