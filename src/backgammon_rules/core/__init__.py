"""Core board logic and data structures."""

from backgammon_rules.core.types import (
    BAR_POSITION,
    BEAR_OFF_POSITION,
    Dice,
    DicePool,
    ForcedMoveInfo,
    GameState,
    HitInfo,
    MoveStep,
    Player,
    Point,
    Position,
    TableOptions,
)

__all__ = [
    "BAR_POSITION",
    "BEAR_OFF_POSITION",
    "Dice",
    "DicePool",
    "ForcedMoveInfo",
    "GameState",
    "HitInfo",
    "MoveStep",
    "Player",
    "Point",
    "Position",
    "TableOptions",
]
