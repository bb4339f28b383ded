"""Single-move generation.

Generates every structurally legal single step for one die value. Used by
legal-move queries and by the forced-move search.
"""

from backgammon_rules.core.board import (
    bar_entry_point,
    bear_off_allowed,
    is_point_blocked,
    move_destination,
    player_points,
)
from backgammon_rules.core.dice import distinct_dice
from backgammon_rules.core.types import (
    BAR_POSITION,
    BEAR_OFF_POSITION,
    NUM_POINTS,
    DicePool,
    LegalMoves,
    MoveStep,
    Player,
    Position,
)


def generate_moves_for_die(position: Position, die: int, player: Player) -> LegalMoves:
    """Generate all legal single steps for a die value.

    With pieces on the bar, the only candidate is the bar entry for this
    die (none if the entry point is blocked). Otherwise every occupied
    point is tried: destinations past the edge are bear-offs judged by the
    bear-off rule, the rest are normal moves judged by blocking.

    Args:
        position: Current position
        die: Die value (1-6)
        player: Player to move

    Returns:
        Legal steps, in ascending source-point order
    """
    moves: LegalMoves = []

    if position.bar[player] > 0:
        entry = bar_entry_point(die, player)
        if not is_point_blocked(position.board, entry, player):
            moves.append(MoveStep(BAR_POSITION, entry, die))
        return moves

    for from_point in player_points(position.board, player):
        dest = move_destination(from_point, die, player)

        if dest < 0 or dest >= NUM_POINTS:
            if bear_off_allowed(position, from_point, die, player):
                moves.append(MoveStep(from_point, BEAR_OFF_POSITION, die))
            continue

        if not is_point_blocked(position.board, dest, player):
            moves.append(MoveStep(from_point, dest, die))

    return moves


def calculate_legal_moves(position: Position, dice: DicePool, player: Player) -> LegalMoves:
    """Get all legal single steps for any of the remaining dice.

    Each distinct die value is tried once, so doubles do not produce
    duplicate steps.

    Args:
        position: Current position (not mutated)
        dice: Remaining dice
        player: Player to move

    Returns:
        Legal first steps across all distinct dice
    """
    moves: LegalMoves = []
    for die in distinct_dice(dice):
        moves.extend(generate_moves_for_die(position, die, player))
    return moves
