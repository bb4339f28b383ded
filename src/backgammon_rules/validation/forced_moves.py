"""Forced-move analysis.

Backgammon requires a player to use as many dice as any legal sequence
could. This module searches every move sequence reachable from a position
to find that maximum, independent of what the player submitted.

The search recurses over the distinct die values left in the pool (a
double branches once per value but is consumed one instance at a time).
Depth is at most 4, so the tree stays small; a per-call transposition
cache can still be passed in to share identical subtrees.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from backgammon_rules.core.board import apply_move_step
from backgammon_rules.core.dice import consume_die, dice_to_string, distinct_dice, remaining_dice
from backgammon_rules.core.types import (
    DicePool,
    ForcedMoveInfo,
    GameState,
    MoveSequence,
    MoveStep,
    Player,
    Position,
)
from backgammon_rules.validation.move_generation import generate_moves_for_die
from backgammon_rules.validation.result import ErrorCode, RuleViolation

logger = logging.getLogger(__name__)

Path = Tuple[MoveStep, ...]


@dataclass
class MoveTree:
    """Result of searching all move sequences from a position.

    Attributes:
        max_dice: Most dice any legal sequence consumes
        paths: Every sequence that consumes ``max_dice`` dice
    """
    max_dice: int = 0
    paths: List[Path] = field(default_factory=lambda: [()])


# ==============================================================================
# TRANSPOSITION CACHE
# ==============================================================================


class MoveTreeCache:
    """Cache of searched subtrees keyed by position, dice multiset and player.

    Only valid within a single search: table options are not part of the key.
    Unbounded: a turn search is at most 4 plies deep.
    """

    def __init__(self):
        self._table: Dict[bytes, MoveTree] = {}
        self.hits = 0

    @staticmethod
    def _key(position: Position, dice: DicePool, player: Player) -> bytes:
        return position.key(dice) + (b'\x00' if player == Player.WHITE else b'\x01')

    def lookup(self, position: Position, dice: DicePool, player: Player) -> Optional[MoveTree]:
        tree = self._table.get(self._key(position, dice, player))
        if tree is not None:
            self.hits += 1
        return tree

    def store(self, position: Position, dice: DicePool, player: Player, tree: MoveTree) -> None:
        self._table[self._key(position, dice, player)] = tree

    def __len__(self) -> int:
        return len(self._table)


# ==============================================================================
# TREE SEARCH
# ==============================================================================


def build_move_tree(
    position: Position,
    dice: DicePool,
    player: Player,
    cache: Optional[MoveTreeCache] = None,
) -> MoveTree:
    """Find the maximum dice usable from a position and every sequence reaching it.

    Args:
        position: Position to search from (not mutated)
        dice: Dice still to be played
        player: Player to move
        cache: Optional transposition cache shared across the recursion

    Returns:
        MoveTree with the maximum and all tied sequences. With no dice left
        (or no legal move) the result is 0 dice and one empty sequence.
    """
    if not dice:
        return MoveTree(max_dice=0, paths=[()])

    if cache is not None:
        cached = cache.lookup(position, dice, player)
        if cached is not None:
            return cached

    max_dice = 0
    best_paths: List[Path] = [()]

    for die in distinct_dice(dice):
        rest = consume_die(dice, die)
        for step in generate_moves_for_die(position, die, player):
            child = position.copy()
            apply_move_step(child, step, player)

            subtree = build_move_tree(child, rest, player, cache)
            total = 1 + subtree.max_dice

            if total > max_dice:
                max_dice = total
                best_paths = [(step,) + path for path in subtree.paths]
            elif total == max_dice:
                best_paths.extend((step,) + path for path in subtree.paths)

    tree = MoveTree(max_dice=max_dice, paths=best_paths)
    if cache is not None:
        cache.store(position, dice, player, tree)
    return tree


def search_turn(state: GameState, player: Player, cache: Optional[MoveTreeCache] = None) -> MoveTree:
    """Search the dice of the state's roll that are still unplayed."""
    dice = remaining_dice(state.dice, state.dice_used)
    tree = build_move_tree(Position.copy(state), dice, player, cache)
    logger.debug(
        "Move tree for %s with dice %s: max_dice=%d, paths=%d",
        player, dice_to_string(dice), tree.max_dice, len(tree.paths),
    )
    if cache is not None:
        logger.debug("Move tree cache: %d entries, %d hits", len(cache), cache.hits)
    return tree


# ==============================================================================
# FORCED-MOVE RULES
# ==============================================================================


def forced_move_info(tree: MoveTree, moves_played: MoveSequence) -> ForcedMoveInfo:
    """Compare a submitted sequence against the search result."""
    dice_used = len(moves_played)
    return ForcedMoveInfo(
        more_moves_available=dice_used < tree.max_dice,
        max_dice_usable=tree.max_dice,
        dice_used=dice_used,
    )


def analyze_forced_moves(
    state: GameState,
    moves_played: MoveSequence,
    player: Player,
) -> ForcedMoveInfo:
    """Analyze forced-move compliance of a turn.

    Args:
        state: State before the turn
        moves_played: Moves the player submitted
        player: Player who made the moves

    Returns:
        ForcedMoveInfo comparing dice used to the maximum usable
    """
    return forced_move_info(search_turn(state, player, MoveTreeCache()), moves_played)


def forced_move_error(info: ForcedMoveInfo) -> Optional[RuleViolation]:
    """Create the forced-move violation, if the turn under-used its dice."""
    if info.more_moves_available:
        return RuleViolation(
            ErrorCode.FORCED_MOVE_VIOLATION,
            f"Forced move violation: {info.max_dice_usable} dice could be used "
            f"but only {info.dice_used} were used",
        )
    return None


def higher_die_error(
    tree: MoveTree,
    dice: DicePool,
    moves_played: MoveSequence,
) -> Optional[RuleViolation]:
    """Check the rule that a lone playable die must be the larger one.

    Applies only to non-double rolls where at most one die can be played:
    if some legal sequence plays the larger die, the player must too.
    """
    if tree.max_dice != 1 or len(set(dice)) != 2 or len(moves_played) != 1:
        return None

    larger = max(dice)
    larger_playable = any(path and path[0].die == larger for path in tree.paths)
    if larger_playable and moves_played[0].die != larger:
        return RuleViolation(
            ErrorCode.HIGHER_DIE_REQUIRED,
            f"Only one die can be played: the higher die {larger} must be used "
            f"instead of {moves_played[0].die}",
        )
    return None
