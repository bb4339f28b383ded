"""
Backgammon Rules - move validation and forced-move analysis for backgammon turns.
"""

__version__ = "0.1.0"

# Core exports
from backgammon_rules.core.types import (
    GameState,
    MoveStep,
    Player,
    Position,
    TableOptions,
)
from backgammon_rules.validation import (
    ValidationResult,
    calculate_legal_moves,
    has_legal_moves,
    validate_move,
    validate_moves,
)

__all__ = [
    "GameState",
    "MoveStep",
    "Player",
    "Position",
    "TableOptions",
    "ValidationResult",
    "calculate_legal_moves",
    "has_legal_moves",
    "validate_move",
    "validate_moves",
]
