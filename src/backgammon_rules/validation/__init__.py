"""Move validation - pure rule checking for backgammon turns.

Usage:
    from backgammon_rules.core.types import GameState, MoveStep, Player
    from backgammon_rules.validation import validate_moves

    state = GameState.from_dict(snapshot)
    moves = [MoveStep.from_dict(m) for m in submitted]
    result = validate_moves(state, moves, Player.WHITE)

    if result.valid:
        ...  # apply the moves
    else:
        print(result.errors)
"""

# Result types
from .result import ErrorCode, RuleViolation, ValidationResult, combine_results

# Individual validators
from .validators import (
    calculate_required_die,
    detect_blot_hit,
    validate_bar_reentry,
    validate_bearing_off,
    validate_dice_consumption,
    validate_move_direction,
    validate_point_blocking,
    validate_source,
    validate_turn,
)

# Move generation and forced moves
from .move_generation import calculate_legal_moves, generate_moves_for_die
from .forced_moves import (
    MoveTree,
    MoveTreeCache,
    analyze_forced_moves,
    build_move_tree,
    forced_move_error,
    higher_die_error,
)

# Entry points
from .validate_move import (
    calculate_turn_moves,
    has_legal_moves,
    validate_move,
    validate_moves,
)

__all__ = [
    # Results
    "ErrorCode",
    "RuleViolation",
    "ValidationResult",
    "combine_results",
    # Validators
    "calculate_required_die",
    "detect_blot_hit",
    "validate_bar_reentry",
    "validate_bearing_off",
    "validate_dice_consumption",
    "validate_move_direction",
    "validate_point_blocking",
    "validate_source",
    "validate_turn",
    # Move generation
    "calculate_legal_moves",
    "generate_moves_for_die",
    # Forced moves
    "MoveTree",
    "MoveTreeCache",
    "analyze_forced_moves",
    "build_move_tree",
    "forced_move_error",
    "higher_die_error",
    # Entry points
    "calculate_turn_moves",
    "has_legal_moves",
    "validate_move",
    "validate_moves",
]
