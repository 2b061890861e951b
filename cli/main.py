"""CLI entrypoint for playing Ataxx against the AI."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from ai.human import HumanPlayer, QuitGame
from ai.minimax_ai import MinimaxAI, SearchConfig
from engine.board import Board, Move, MoveResult
from engine.game import Game
from engine.pieces import Side


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Ataxx in the terminal.")
    parser.add_argument("--config", type=str, default=None, help="Path to search config JSON")
    parser.add_argument("--depth", type=int, default=None, help="Minimax depth (overrides config)")
    parser.add_argument("--seed", type=int, default=0, help="AI seed")
    parser.add_argument(
        "--human-side",
        type=str,
        default="red",
        choices=["red", "blue", "none"],
        help="Which side the human controls; 'none' lets two AIs play",
    )
    parser.add_argument(
        "--block",
        action="append",
        default=None,
        help="Square to block, with its reflections (repeatable)",
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Python logging level")
    return parser.parse_args(argv)


def build_game(args: argparse.Namespace) -> Game:
    config = SearchConfig.from_json(args.config) if args.config else SearchConfig()
    if args.depth is not None:
        config.depth = args.depth

    board = Board()
    for square in args.block if args.block is not None else config.blocks:
        board.set_block(square)

    game = Game(board=board, max_plies=config.max_plies)

    def show_move(side: Side, move: Move, result: MoveResult) -> None:
        print(f"{side.value} played {move} (converted {result.converted})")
        print(game.board.render_ascii())

    game.observer = show_move
    human_side = None if args.human_side == "none" else Side(args.human_side)
    for index, side in enumerate(Side):
        if side is human_side:
            game.set_player(HumanPlayer(game, side))
        else:
            game.set_player(MinimaxAI.from_config(game, side, args.seed + index, config))
    return game


def run_cli(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))
    logger = logging.getLogger("ataxx.cli")

    game = build_game(args)
    logger.info("Starting Ataxx game. Human=%s", args.human_side)
    print("Commands: <from>-<to> (e.g. a7-b6) | - to pass | quit")
    print(game.board.render_ascii())

    try:
        record = game.play()
    except QuitGame:
        print("Exiting game.")
        return

    print()
    print(game.board.render_ascii())
    print(f"Red: {game.board.piece_count(Side.RED)} | Blue: {game.board.piece_count(Side.BLUE)}")
    if record.is_draw:
        print("Game ended in a draw.")
    else:
        print(f"Winner: {record.winner.value if record.winner else 'none'}")


if __name__ == "__main__":
    run_cli()
