"""Command-line entrypoint for backgammon-rules.

Reads a table snapshot (and a move list) as JSON and prints the verdict,
so the engine can be driven from scripts and CI jobs.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from backgammon_rules import __version__
from backgammon_rules.core.dice import dice_values
from backgammon_rules.core.types import GameState, MoveStep, Player
from backgammon_rules.validation import calculate_turn_moves, has_legal_moves, validate_moves


def _load_json(path: str):
    return json.loads(Path(path).read_text())


def _player_arg(value: Optional[str]) -> Optional[Player]:
    return Player(value) if value else None


def _roll_to_pool(roll) -> List[int]:
    """Expand a two-dice roll to its pool; doubles give four values."""
    values = [int(d) for d in roll]
    if len(values) == 2:
        return dice_values((values[0], values[1]))
    return values


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a turn and print the verdict as JSON."""
    state = GameState.from_dict(_load_json(args.state))
    payload = _load_json(args.moves)

    player = _player_arg(args.player)
    if isinstance(payload, dict):
        raw_moves = payload.get("moves", [])
        if player is None and payload.get("player"):
            player = Player(payload["player"])
        if payload.get("diceRoll"):
            # A move file carries the roll it was played with
            state.dice = _roll_to_pool(payload["diceRoll"])
            state.dice_used = []
    else:
        raw_moves = payload

    moves = [MoveStep.from_dict(m) for m in raw_moves]
    result = validate_moves(state, moves, player)
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.valid else 1


def cmd_legal_moves(args: argparse.Namespace) -> int:
    """Print the legal single steps for the unused dice."""
    state = GameState.from_dict(_load_json(args.state))
    player = _player_arg(args.player)
    moves = calculate_turn_moves(state, player)
    print(json.dumps(
        {
            "hasLegalMoves": has_legal_moves(state, player),
            "moves": [m.to_dict() for m in moves],
        },
        indent=2,
    ))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="backgammon-rules",
        description="Backgammon move validation CLI",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"backgammon-rules {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log validation steps to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    validate = subparsers.add_parser("validate", help="Validate a turn")
    validate.add_argument("state", help="Table snapshot JSON file")
    validate.add_argument("moves", help="Move list (or move file) JSON file")
    validate.add_argument("--player", choices=[p.value for p in Player])
    validate.set_defaults(func=cmd_validate)

    legal = subparsers.add_parser("legal-moves", help="List legal single moves")
    legal.add_argument("state", help="Table snapshot JSON file")
    legal.add_argument("--player", choices=[p.value for p in Player])
    legal.set_defaults(func=cmd_legal_moves)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint used by the `backgammon-rules` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if args.command is None:
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
