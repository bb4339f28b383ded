"""Turn validation entry points.

validate_move checks one step against a state; validate_moves checks a
whole turn, step by step on a working copy, then confirms the turn used
as many dice as the forced-move rule demands.
"""

import logging
from typing import List, Optional

from backgammon_rules.core.board import apply_move_step
from backgammon_rules.core.dice import consume_die, remaining_dice
from backgammon_rules.core.types import (
    DicePool,
    GameState,
    HitInfo,
    MoveSequence,
    MoveStep,
    Player,
)
from backgammon_rules.validation.forced_moves import (
    MoveTreeCache,
    forced_move_error,
    forced_move_info,
    higher_die_error,
    search_turn,
)
from backgammon_rules.validation.move_generation import calculate_legal_moves
from backgammon_rules.validation.result import (
    RuleViolation,
    ValidationResult,
    combine_results,
)
from backgammon_rules.validation.validators import (
    detect_blot_hit,
    validate_bar_reentry,
    validate_bearing_off,
    validate_dice_consumption,
    validate_move_direction,
    validate_point_blocking,
    validate_source,
    validate_turn,
)

logger = logging.getLogger(__name__)


def validate_move(
    state: GameState,
    step: MoveStep,
    player: Optional[Player] = None,
    remaining: Optional[DicePool] = None,
) -> ValidationResult:
    """Validate a single step against a state.

    The turn check runs first and short-circuits. The remaining checks
    (source, bar re-entry, direction, dice, blocking, bear-off) all run
    and their violations are merged. Blot-hit detection runs only if all
    of them pass.

    Args:
        state: Current game state (not mutated)
        step: Step to validate
        player: Player making the step (defaults to the active player)
        remaining: Unused dice (defaults to the state's dice minus dice used)

    Returns:
        ValidationResult, with hit_info if the step hits a blot
    """
    mover = player or state.active_player
    dice = remaining if remaining is not None else remaining_dice(state.dice, state.dice_used)

    turn_result = validate_turn(state, step, mover)
    if not turn_result.valid:
        return turn_result

    combined = combine_results([
        validate_source(state, step, mover),
        validate_bar_reentry(state, step, mover),
        validate_move_direction(step, mover),
        validate_dice_consumption(step, dice, mover),
        validate_point_blocking(state, step, mover),
        validate_bearing_off(state, step, mover),
    ])

    if combined.valid:
        hit = detect_blot_hit(state, step, mover)
        if hit.hit_info is not None:
            combined = combined.add_hit_info(hit.hit_info)

    return combined


def validate_moves(
    state: GameState,
    moves: MoveSequence,
    player: Optional[Player] = None,
) -> ValidationResult:
    """Validate a complete turn.

    Each step is validated against a working copy that has every earlier
    step applied; the first failing step rejects the turn (its errors are
    prefixed with "Move N: ") and the forced-move analysis is skipped.
    When every step passes, the analysis runs against the untouched
    pre-turn state, and a turn that used fewer dice than the maximum is
    rejected.

    Args:
        state: State before the turn (not mutated)
        moves: Steps of the turn, in order (may be empty)
        player: Player making the moves (defaults to the active player)

    Returns:
        ValidationResult carrying forced_move_info and the last hit_info
        whenever the forced-move analysis ran
    """
    mover = player or state.active_player
    moves = list(moves)

    if not moves:
        # An empty turn is only legal when no die can be played
        return _forced_move_verdict(state, moves, mover, hit_info=None)

    working = state.copy()
    dice = remaining_dice(state.dice, state.dice_used)
    last_hit: Optional[HitInfo] = None

    for index, step in enumerate(moves, start=1):
        result = validate_move(working, step, mover, dice)
        logger.debug("Move %d (%s) for %s: valid=%s", index, step, mover, result.valid)

        if not result.valid:
            prefix = f"Move {index}: "
            logger.warning(
                "Rejected turn for %s at move %d: %s",
                mover, index, "; ".join(result.errors),
            )
            return ValidationResult.failures(v.prefixed(prefix) for v in result.violations)

        if result.hit_info is not None:
            last_hit = result.hit_info

        apply_move_step(working, step, mover)
        dice = consume_die(dice, step.die)

    return _forced_move_verdict(state, moves, mover, hit_info=last_hit)


def _forced_move_verdict(
    state: GameState,
    moves: MoveSequence,
    player: Player,
    hit_info: Optional[HitInfo],
) -> ValidationResult:
    """Run the forced-move analysis against the pre-turn state."""
    tree = search_turn(state, player, MoveTreeCache())
    info = forced_move_info(tree, moves)

    violations: List[RuleViolation] = []
    error = forced_move_error(info)
    if error is not None:
        violations.append(error)
    elif state.table_options.enforce_higher_die:
        error = higher_die_error(tree, remaining_dice(state.dice, state.dice_used), moves)
        if error is not None:
            violations.append(error)

    if violations:
        logger.warning("Rejected turn for %s: %s", player, violations[0].message)

    result = ValidationResult.failures(violations).add_forced_move_info(info)
    return result.add_hit_info(hit_info)


def calculate_turn_moves(state: GameState, player: Optional[Player] = None) -> MoveSequence:
    """Legal first steps for the state's unused dice."""
    mover = player or state.active_player
    return calculate_legal_moves(state, remaining_dice(state.dice, state.dice_used), mover)


def has_legal_moves(state: GameState, player: Optional[Player] = None) -> bool:
    """Check if the player can play any of the state's unused dice.

    Used by callers to decide whether a turn should be passed automatically.
    """
    return len(calculate_turn_moves(state, player)) > 0
