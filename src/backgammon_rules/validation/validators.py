"""Single-move validators.

Each validator checks one rule for one step and returns a ValidationResult.
Validators never mutate the position they inspect.
"""

from backgammon_rules.core.board import (
    bar_entry_point,
    bar_entry_range,
    exact_bear_off_die,
    first_point_outside_home,
    highest_home_point,
    is_bar_entry,
    is_bear_off,
    is_opponent_piece,
    is_point_blocked,
    opponent,
    pieces_at,
)
from backgammon_rules.core.types import (
    BAR_POSITION,
    NUM_POINTS,
    DicePool,
    GameState,
    HitInfo,
    MoveStep,
    Player,
    Position,
)
from backgammon_rules.validation.result import ErrorCode, ValidationResult


def validate_turn(state: GameState, step: MoveStep, player: Player) -> ValidationResult:
    """Check that the move is made by the active player.

    This check runs first; every other check is meaningless for the
    wrong mover.
    """
    if player != state.active_player:
        return ValidationResult.error(
            ErrorCode.TURN_MISMATCH,
            f"Not your turn: expected {state.active_player} but got {player}",
        )
    return ValidationResult.ok()


def validate_source(position: Position, step: MoveStep, player: Player) -> ValidationResult:
    """Check that the source point (or the bar) holds one of the mover's pieces."""
    if pieces_at(position, step.from_point, player) > 0:
        return ValidationResult.ok()
    where = "the bar" if is_bar_entry(step) else f"point {step.from_point}"
    return ValidationResult.error(
        ErrorCode.NO_PIECE_AT_SOURCE,
        f"No {player} piece on {where}",
    )


def validate_move_direction(step: MoveStep, player: Player) -> ValidationResult:
    """Check that the move goes the right way for the player.

    White moves from higher to lower indices, black from lower to higher.
    Bar entry and bear-off are exempt.
    """
    if is_bar_entry(step) or is_bear_off(step):
        return ValidationResult.ok()

    if player == Player.WHITE and step.from_point <= step.to_point:
        return ValidationResult.error(
            ErrorCode.DIRECTION_VIOLATION,
            f"white must move from higher to lower indices "
            f"(attempted {step.from_point} to {step.to_point})",
        )

    if player == Player.BLACK and step.from_point >= step.to_point:
        return ValidationResult.error(
            ErrorCode.DIRECTION_VIOLATION,
            f"black must move from lower to higher indices "
            f"(attempted {step.from_point} to {step.to_point})",
        )

    return ValidationResult.ok()


def calculate_required_die(step: MoveStep, player: Player) -> int:
    """Calculate the die value a step needs.

    - Bar entry: 24 - to (white) or to + 1 (black)
    - Bear-off: from + 1 (white) or 24 - from (black), the exact distance
    - Normal move: |to - from|
    """
    if is_bar_entry(step):
        if player == Player.WHITE:
            return NUM_POINTS - step.to_point
        return step.to_point + 1

    if is_bear_off(step):
        return exact_bear_off_die(step.from_point, player)

    return abs(step.to_point - step.from_point)


def validate_dice_consumption(
    step: MoveStep,
    remaining_dice: DicePool,
    player: Player,
) -> ValidationResult:
    """Check that the step's die matches its distance and is still available.

    Bear-off steps skip the distance match; larger dice are judged by
    validate_bearing_off.
    """
    required = calculate_required_die(step, player)

    if not is_bear_off(step) and step.die != required:
        return ValidationResult.error(
            ErrorCode.DICE_MISMATCH,
            f"Move {step.from_point} to {step.to_point} requires die {required} "
            f"but used {step.die}",
        )

    if step.die not in remaining_dice:
        available = ", ".join(str(d) for d in remaining_dice)
        return ValidationResult.error(
            ErrorCode.DICE_UNAVAILABLE,
            f"Die value {step.die} is not available in remaining dice [{available}]",
        )

    return ValidationResult.ok()


def validate_bar_reentry(position: Position, step: MoveStep, player: Player) -> ValidationResult:
    """Check bar re-entry precedence.

    With pieces on the bar, every move must enter from the bar, on the
    point the die determines inside the opponent's home board, and that
    point must not hold 2+ opposing pieces.
    """
    on_bar = position.bar[player]
    if on_bar == 0:
        return ValidationResult.ok()

    if not is_bar_entry(step):
        return ValidationResult.error(
            ErrorCode.BAR_REENTRY_REQUIRED,
            f"Must re-enter from bar before moving other pieces ({on_bar} pieces on bar)",
        )

    low, high = bar_entry_range(player)
    if not low <= step.to_point <= high:
        return ValidationResult.error(
            ErrorCode.BAR_ENTRY_WRONG_POINT,
            f"Bar entry must be to point {low}-{high} for {player} "
            f"(attempted to {step.to_point})",
        )

    expected = bar_entry_point(step.die, player)
    if step.to_point != expected:
        return ValidationResult.error(
            ErrorCode.BAR_ENTRY_WRONG_POINT,
            f"Bar entry with die {step.die} must be to point {expected} "
            f"(attempted to {step.to_point})",
        )

    if is_point_blocked(position.board, step.to_point, player):
        return ValidationResult.error(
            ErrorCode.BAR_ENTRY_BLOCKED,
            f"Cannot enter from bar: point {step.to_point} is blocked by {opponent(player)} "
            f"({abs(int(position.board[step.to_point]))} pieces)",
        )

    return ValidationResult.ok()


def validate_point_blocking(position: Position, step: MoveStep, player: Player) -> ValidationResult:
    """Check that the destination does not hold 2+ opposing pieces.

    Bear-off is never blocked. Bar entries are judged by
    validate_bar_reentry.
    """
    if is_bear_off(step) or is_bar_entry(step):
        return ValidationResult.ok()

    if is_point_blocked(position.board, step.to_point, player):
        count = abs(int(position.board[step.to_point]))
        return ValidationResult.error(
            ErrorCode.POINT_BLOCKED,
            f"Point {step.to_point} is blocked by {opponent(player)} ({count} pieces)",
        )

    return ValidationResult.ok()


def detect_blot_hit(position: Position, step: MoveStep, player: Player) -> ValidationResult:
    """Report a hit if the destination holds exactly one opposing piece.

    This is a detector, not a gate: the result is always valid.
    """
    if is_bear_off(step):
        return ValidationResult.ok()

    value = int(position.board[step.to_point])
    if is_opponent_piece(value, player) and abs(value) == 1:
        return ValidationResult.with_hit(HitInfo(point=step.to_point, player=opponent(player)))

    return ValidationResult.ok()


def validate_bearing_off(position: Position, step: MoveStep, player: Player) -> ValidationResult:
    """Check a bear-off step.

    - No pieces on the bar or outside the home board
    - The exact die is always legal, a smaller die never is
    - A larger die is legal if the table allows overshoot; otherwise only
      from the highest occupied home point
    """
    if not is_bear_off(step):
        return ValidationResult.ok()

    outside = first_point_outside_home(position, player)
    if outside is not None:
        where = "bar" if outside == BAR_POSITION else f"point {outside}"
        return ValidationResult.error(
            ErrorCode.BEAR_OFF_INELIGIBLE,
            f"Cannot bear off: pieces exist outside home board ({where})",
        )

    exact = exact_bear_off_die(step.from_point, player)
    if step.die == exact:
        return ValidationResult.ok()

    if step.die < exact:
        return ValidationResult.error(
            ErrorCode.BEAR_OFF_UNDERSHOOT,
            f"Cannot bear off from point {step.from_point}: die {step.die} "
            f"is less than required {exact}",
        )

    if not position.table_options.allow_bear_off_overshoot:
        highest = highest_home_point(position, player)
        if highest is not None and step.from_point != highest:
            return ValidationResult.error(
                ErrorCode.BEAR_OFF_OVERSHOOT_DISALLOWED,
                f"Cannot bear off from point {step.from_point} with die {step.die}: "
                f"higher pieces exist on point {highest}",
            )

    return ValidationResult.ok()
