"""AI-vs-AI match series for comparing search settings."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ai.minimax_ai import DEFAULT_DEPTH, MinimaxAI
from engine.board import Board
from engine.game import DEFAULT_MAX_PLIES, Game, GameRecord
from engine.pieces import Side

LOGGER = logging.getLogger(__name__)


@dataclass
class MatchConfig:
    """Match series settings."""

    games: int = 10
    red_depth: int = DEFAULT_DEPTH
    blue_depth: int = DEFAULT_DEPTH
    base_seed: int = 0
    max_plies: int = DEFAULT_MAX_PLIES
    blocks: List[str] = field(default_factory=list)
    log_every: int = 1


class MatchRunner:
    """Plays a series of games between two minimax agents."""

    def __init__(self, config: MatchConfig) -> None:
        self.config = config

    def play_game(self, game_index: int) -> GameRecord:
        seed = self.config.base_seed + game_index
        board = Board()
        for square in self.config.blocks:
            board.set_block(square)
        game = Game(board=board, max_plies=self.config.max_plies)
        game.set_player(MinimaxAI(game, Side.RED, seed, depth=self.config.red_depth))
        game.set_player(MinimaxAI(game, Side.BLUE, seed + 9973, depth=self.config.blue_depth))
        return game.play()

    def run(self) -> List[GameRecord]:
        records: List[GameRecord] = []
        for game_index in range(self.config.games):
            record = self.play_game(game_index)
            records.append(record)
            if (game_index + 1) % max(1, self.config.log_every) == 0:
                LOGGER.info(
                    "Match game %d/%d | winner=%s draw=%s plies=%d",
                    game_index + 1,
                    self.config.games,
                    record.winner.value if record.winner else None,
                    record.is_draw,
                    record.plies,
                )
        return records

    @staticmethod
    def summarize(records: Sequence[GameRecord]) -> Dict[str, int]:
        summary = {"red_wins": 0, "blue_wins": 0, "draws": 0}
        for record in records:
            if record.is_draw:
                summary["draws"] += 1
            elif record.winner is Side.RED:
                summary["red_wins"] += 1
            elif record.winner is Side.BLUE:
                summary["blue_wins"] += 1
        return summary


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run an Ataxx AI-vs-AI match series.")
    parser.add_argument("--games", type=int, default=10, help="Number of games")
    parser.add_argument("--red-depth", type=int, default=DEFAULT_DEPTH, help="Red search depth")
    parser.add_argument("--blue-depth", type=int, default=DEFAULT_DEPTH, help="Blue search depth")
    parser.add_argument("--base-seed", type=int, default=0, help="Seed of the first game")
    parser.add_argument("--max-plies", type=int, default=DEFAULT_MAX_PLIES, help="Ply cap per game")
    parser.add_argument("--block", action="append", default=[], help="Square to block (repeatable)")
    parser.add_argument("--log-level", type=str, default="INFO", help="Python logging level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    runner = MatchRunner(
        MatchConfig(
            games=args.games,
            red_depth=args.red_depth,
            blue_depth=args.blue_depth,
            base_seed=args.base_seed,
            max_plies=args.max_plies,
            blocks=list(args.block),
        )
    )
    summary = runner.summarize(runner.run())
    print(f"Red wins: {summary['red_wins']} | Blue wins: {summary['blue_wins']} | Draws: {summary['draws']}")


if __name__ == "__main__":
    main()
