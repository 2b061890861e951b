"""Minimax AI with alpha-beta pruning for Ataxx."""

from __future__ import annotations

import json
import logging
import random
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from engine.board import Board, Move
from engine.pieces import Side
from engine.rules import BOARD_SIZE, MAX_MOVE_DISTANCE

if TYPE_CHECKING:
    from engine.game import Game

LOGGER = logging.getLogger(__name__)

DEFAULT_DEPTH = 4
# Magnitude of a won position (positive for red, negative for blue).
WINNING_VALUE = 2**31 - 21
# Larger than any score the evaluator can produce.
INFINITY = 2**31 - 1


class SearchInvariantError(RuntimeError):
    """Raised when the search breaks one of its own guarantees."""


def check_search_bounds(depth: int, winning_value: int) -> None:
    """Reject settings whose decided-position scores would reach INFINITY."""
    if depth < 1:
        raise ValueError(f"Search depth must be positive, got {depth}")
    if winning_value + depth >= INFINITY:
        raise ValueError(
            f"winning_value + depth must stay below {INFINITY}, got {winning_value} + {depth}"
        )


class SearchConfig:
    """Search and board settings loaded from a JSON payload."""

    def __init__(self, payload: Optional[Dict[str, object]] = None) -> None:
        payload = payload or {}
        self.depth = int(payload.get("depth", DEFAULT_DEPTH))
        self.winning_value = int(payload.get("winning_value", WINNING_VALUE))

        board = payload.get("board", {})
        self.blocks: List[str] = [str(square) for square in board.get("blocks", [])]
        self.max_plies = int(board.get("max_plies", 1000))
        check_search_bounds(self.depth, self.winning_value)

    @classmethod
    def from_json(cls, path: str | Path) -> "SearchConfig":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(payload)


@dataclass(frozen=True)
class SearchResult:
    """Value of a searched position and, at the recording frame, its best move."""

    value: int
    move: Optional[Move] = None


def enumerate_moves(board: Board) -> List[Move]:
    """All legal moves for the side to move, in fixed order; a lone pass if none."""
    moves: List[Move] = []
    mover = board.current_turn.cell
    for col in range(BOARD_SIZE):
        for row in range(BOARD_SIZE):
            if board.get_cell((row, col)) is not mover:
                continue
            for dc in range(-MAX_MOVE_DISTANCE, MAX_MOVE_DISTANCE + 1):
                for dr in range(-MAX_MOVE_DISTANCE, MAX_MOVE_DISTANCE + 1):
                    move = Move(from_pos=(row, col), to_pos=(row + dr, col + dc))
                    if board.is_legal_move(move):
                        moves.append(move)
    if not moves:
        moves.append(Move.pass_move())
    return moves


def static_score(board: Board, winning_value: int) -> int:
    """Heuristic value of board; +/- winning_value when decided, 0 for a tie."""
    terminal, winner, _ = board.game_over()
    if terminal:
        if winner is Side.RED:
            return winning_value
        if winner is Side.BLUE:
            return -winning_value
        return 0
    return board.piece_count(Side.RED) - board.piece_count(Side.BLUE)


@contextmanager
def applied(board: Board, move: Move) -> Iterator[Board]:
    """Apply move for the duration of the block; always undo on exit."""
    board.apply_move(move)
    try:
        yield board
    finally:
        board.undo()


class AlphaBetaSearch:
    """Depth-limited minimax over a single shared board."""

    def __init__(self, winning_value: int = WINNING_VALUE) -> None:
        self.winning_value = winning_value
        self.nodes = 0

    def search(
        self,
        board: Board,
        depth: int,
        save_move: bool,
        sense: int,
        alpha: int,
        beta: int,
    ) -> SearchResult:
        """
        Search board to depth plies and return its value.

        sense is 1 when red (maximizing) is to move and -1 for blue. The best
        move is included in the result only when save_move is set. A value of
        winning_value + depth is used for decided positions so that wins found
        sooner outrank later ones.
        """
        self.nodes += 1
        if depth == 0 or board.game_over()[0]:
            return SearchResult(static_score(board, self.winning_value + depth))

        moves = enumerate_moves(board)
        if not moves:
            raise SearchInvariantError("Move enumeration returned no moves.")

        best_move: Optional[Move] = None
        if sense == 1:
            best_value = -INFINITY
            for move in moves:
                with applied(board, move):
                    value = self.search(board, depth - 1, False, -sense, alpha, beta).value
                alpha = max(alpha, value)
                if value > best_value:
                    best_value = value
                    best_move = move
                if alpha >= beta:
                    break
        else:
            best_value = INFINITY
            for move in moves:
                with applied(board, move):
                    value = self.search(board, depth - 1, False, -sense, alpha, beta).value
                beta = min(beta, value)
                if value < best_value:
                    best_value = value
                    best_move = move
                if alpha >= beta:
                    break

        return SearchResult(best_value, best_move if save_move else None)


class MinimaxAI:
    """Automated Ataxx player backed by alpha-beta search."""

    def __init__(
        self,
        game: "Game",
        side: Side,
        seed: int,
        depth: int = DEFAULT_DEPTH,
        winning_value: int = WINNING_VALUE,
    ) -> None:
        check_search_bounds(depth, winning_value)
        self.game = game
        self.side = side
        self.seed = seed
        self.depth = depth
        self.winning_value = winning_value
        # Not consumed by move selection yet.
        self._rng = random.Random(seed)

    @classmethod
    def from_config(cls, game: "Game", side: Side, seed: int, config: SearchConfig) -> "MinimaxAI":
        return cls(game, side, seed, depth=config.depth, winning_value=config.winning_value)

    @property
    def is_auto(self) -> bool:
        return True

    def get_move(self) -> Move:
        """Pick a move on the game's board and report it."""
        move = self.choose_move(self.game.board)
        self.game.report_move(move, self.side)
        return move

    def choose_move(self, board: Board) -> Move:
        """Return the best move for this side from board, or a pass if stuck."""
        if board.current_turn is not self.side:
            raise ValueError(f"It is {board.current_turn.value}'s turn, not {self.side.value}'s")
        if not board.can_move(self.side):
            LOGGER.debug("%s has no moves; passing", self.side.value)
            return Move.pass_move()
        if board.game_over()[0]:
            raise ValueError("Cannot choose a move in a finished game.")

        result = self.find_move(board.clone())
        if result.move is None:
            raise SearchInvariantError(f"Root search for {self.side.value} recorded no move.")
        return result.move

    def find_move(self, board: Board) -> SearchResult:
        """Run the root search on board, which the caller hands over exclusively."""
        searcher = AlphaBetaSearch(self.winning_value)
        sense = 1 if self.side is Side.RED else -1
        result = searcher.search(board, self.depth, True, sense, -INFINITY, INFINITY)
        LOGGER.debug(
            "Minimax %s selected %s with score %d after %d nodes",
            self.side.value,
            result.move,
            result.value,
            searcher.nodes,
        )
        return result
