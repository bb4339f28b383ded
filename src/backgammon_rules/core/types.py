"""Core type definitions for backgammon move validation.

This module defines the data structures shared by the board predicates,
the validators, the move enumerator and the forced-move search.

Board layout (24 points, signed counts):
    - Index 0-23 are board points; positive values are white pieces,
      negative values are black pieces.
    - White moves from high to low indices and bears off below point 0
      (home board: 0-5).
    - Black moves from low to high indices and bears off above point 23
      (home board: 18-23).
    - BAR_POSITION (-1) is the source of a bar re-entry move and
      BEAR_OFF_POSITION (24) the destination of a bear-off move.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple
import numpy as np
from numpy.typing import NDArray


# ==============================================================================
# BOARD CONSTANTS
# ==============================================================================

NUM_POINTS = 24
CHECKERS_PER_PLAYER = 15
BAR_POSITION = -1
BEAR_OFF_POSITION = 24
MIN_DIE = 1
MAX_DIE = 6

Point = int  # -1=bar, 0-23=points, 24=off


class Player(Enum):
    """Player colors."""
    WHITE = "white"
    BLACK = "black"

    def opponent(self) -> "Player":
        """Return the opponent player."""
        return Player.BLACK if self == Player.WHITE else Player.WHITE

    def __str__(self) -> str:
        return self.value


# Dice roll as thrown (two dice) and the pool of unused die values
Dice = Tuple[int, int]
DicePool = List[int]


# ==============================================================================
# MOVES
# ==============================================================================

@dataclass(frozen=True)
class MoveStep:
    """A single checker movement.

    Attributes:
        from_point: Starting position (-1=bar, 0-23=points)
        to_point: Ending position (0-23=points, 24=off)
        die: Which die value pays for the movement (1-6)
    """
    from_point: Point
    to_point: Point
    die: int

    def __post_init__(self):
        """Validate move step."""
        if not BAR_POSITION <= self.from_point < NUM_POINTS:
            raise ValueError(f"Invalid from_point: {self.from_point}")
        if not 0 <= self.to_point <= BEAR_OFF_POSITION:
            raise ValueError(f"Invalid to_point: {self.to_point}")
        if not MIN_DIE <= self.die <= MAX_DIE:
            raise ValueError(f"Invalid die: {self.die}")

    @staticmethod
    def from_dict(data: Dict) -> "MoveStep":
        """Create from a ``{"from", "to", "die"}`` mapping."""
        return MoveStep(
            from_point=int(data["from"]),
            to_point=int(data["to"]),
            die=int(data["die"]),
        )

    def to_dict(self) -> Dict[str, int]:
        return {"from": self.from_point, "to": self.to_point, "die": self.die}

    def __str__(self) -> str:
        src = "bar" if self.from_point == BAR_POSITION else str(self.from_point)
        dst = "off" if self.to_point == BEAR_OFF_POSITION else str(self.to_point)
        return f"{src}/{dst} ({self.die})"


# A sequence of steps making up one turn (at most 4, for doubles)
MoveSequence = List[MoveStep]

# Single moves available for the remaining dice
LegalMoves = List[MoveStep]


# ==============================================================================
# TABLE OPTIONS
# ==============================================================================

@dataclass
class TableOptions:
    """Ruleset toggles carried by a table.

    Attributes:
        allow_bear_off_overshoot: Bear off with a larger die than needed from
            any home point. When False, overshoot is only allowed from the
            point farthest from bearing off.
        enforce_higher_die: When only one die of a non-double can be played,
            require the larger one if it is playable.
    """
    allow_bear_off_overshoot: bool = True
    enforce_higher_die: bool = False

    @staticmethod
    def from_dict(data: Optional[Dict]) -> "TableOptions":
        """Create from a camelCase snapshot mapping (missing keys use defaults)."""
        data = data or {}
        return TableOptions(
            allow_bear_off_overshoot=bool(data.get("allowBearOffOvershoot", True)),
            enforce_higher_die=bool(data.get("enforceHigherDie", False)),
        )

    def to_dict(self) -> Dict[str, bool]:
        return {
            "allowBearOffOvershoot": self.allow_bear_off_overshoot,
            "enforceHigherDie": self.enforce_higher_die,
        }


# ==============================================================================
# POSITIONS
# ==============================================================================

def _zero_counts() -> Dict[Player, int]:
    return {Player.WHITE: 0, Player.BLACK: 0}


def _read_counts(data: Optional[Dict]) -> Dict[Player, int]:
    data = data or {}
    return {
        Player.WHITE: int(data.get("white", 0)),
        Player.BLACK: int(data.get("black", 0)),
    }


@dataclass
class Position:
    """Piece placement: the minimal state needed to generate and apply moves.

    Attributes:
        board: Signed checker counts for points 0-23 (length 24)
        bar: Pieces on the bar per player
        home: Pieces borne off per player
        table_options: Ruleset toggles affecting bear-off legality
    """
    board: NDArray[np.int32] = field(default_factory=lambda: np.zeros(NUM_POINTS, dtype=np.int32))
    bar: Dict[Player, int] = field(default_factory=_zero_counts)
    home: Dict[Player, int] = field(default_factory=_zero_counts)
    table_options: TableOptions = field(default_factory=TableOptions)

    def __post_init__(self):
        """Validate position shape."""
        self.board = np.asarray(self.board, dtype=np.int32)
        if self.board.shape != (NUM_POINTS,):
            raise ValueError(f"board must have length {NUM_POINTS}, got shape {self.board.shape}")
        if np.any(np.abs(self.board) > CHECKERS_PER_PLAYER):
            raise ValueError("Invalid checker count on board")
        self.bar = {p: int(self.bar.get(p, 0)) for p in Player}
        self.home = {p: int(self.home.get(p, 0)) for p in Player}
        for counts in (self.bar, self.home):
            for player, count in counts.items():
                if not 0 <= count <= CHECKERS_PER_PLAYER:
                    raise ValueError(f"Invalid {player} count: {count}")

    def copy(self) -> "Position":
        """Clone board, bar and home (table options are shared, never mutated)."""
        return Position(
            board=self.board.copy(),
            bar=dict(self.bar),
            home=dict(self.home),
            table_options=self.table_options,
        )

    def key(self, dice: DicePool) -> bytes:
        """Hashable key for this position paired with a dice multiset."""
        counts = (
            self.bar[Player.WHITE], self.bar[Player.BLACK],
            self.home[Player.WHITE], self.home[Player.BLACK],
        )
        return self.board.tobytes() + bytes(counts) + bytes(sorted(dice))


@dataclass
class GameState(Position):
    """Position plus the turn context of a table snapshot.

    Attributes:
        active_player: Player whose turn it is
        dice: Dice of the current roll (2 values, or 4 for doubles)
        dice_used: Die values already consumed this turn
    """
    active_player: Player = Player.WHITE
    dice: DicePool = field(default_factory=list)
    dice_used: DicePool = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        if any(not MIN_DIE <= d <= MAX_DIE for d in list(self.dice) + list(self.dice_used)):
            raise ValueError(f"Invalid dice: {self.dice} / used {self.dice_used}")

    def copy(self) -> "GameState":
        """Deep copy of the snapshot."""
        return GameState(
            board=self.board.copy(),
            bar=dict(self.bar),
            home=dict(self.home),
            table_options=self.table_options,
            active_player=self.active_player,
            dice=list(self.dice),
            dice_used=list(self.dice_used),
        )

    @staticmethod
    def from_dict(data: Dict) -> "GameState":
        """Create from a camelCase table snapshot.

        Only the fields the engine needs are read; anything else in the
        snapshot (players, messages, timestamps) is ignored.
        """
        return GameState(
            board=np.array(data["board"], dtype=np.int32),
            bar=_read_counts(data.get("bar")),
            home=_read_counts(data.get("home")),
            table_options=TableOptions.from_dict(data.get("tableOptions")),
            active_player=Player(data.get("activePlayer", "white")),
            dice=[int(d) for d in data.get("dice", [])],
            dice_used=[int(d) for d in data.get("diceUsed", [])],
        )

    def to_dict(self) -> Dict:
        return {
            "board": [int(v) for v in self.board],
            "bar": {p.value: self.bar[p] for p in Player},
            "home": {p.value: self.home[p] for p in Player},
            "activePlayer": self.active_player.value,
            "dice": list(self.dice),
            "diceUsed": list(self.dice_used),
            "tableOptions": self.table_options.to_dict(),
        }


# ==============================================================================
# VALIDATION OUTCOMES
# ==============================================================================

@dataclass(frozen=True)
class HitInfo:
    """A blot hit by a move.

    Attributes:
        point: Board point where the hit occurred (0-23)
        player: Owner of the piece that was hit (sent to the bar)
    """
    point: Point
    player: Player

    def to_dict(self) -> Dict:
        return {"point": self.point, "player": self.player.value}


@dataclass(frozen=True)
class ForcedMoveInfo:
    """Outcome of the forced-move analysis for a submitted turn.

    Attributes:
        more_moves_available: True if a legal sequence used more dice
        max_dice_usable: Most dice any legal sequence could consume
        dice_used: Dice consumed by the submitted moves
    """
    more_moves_available: bool
    max_dice_usable: int
    dice_used: int

    def to_dict(self) -> Dict:
        return {
            "moreMovesAvailable": self.more_moves_available,
            "maxDiceUsable": self.max_dice_usable,
            "diceUsed": self.dice_used,
        }
