"""Board predicates and position manipulation.

This module implements the board-level backgammon logic, including:
- Ownership, home-board and bar-entry arithmetic
- Position construction and queries
- Move application on working copies

Board Layout:
    White moves 23→0→off (home board: 0-5, enters from the bar on 18-23)
    Black moves 0→23→off (home board: 18-23, enters from the bar on 0-5)

    Point indices:
    12 13 14 15 16 17    18 19 20 21 22 23
    +------------------+------------------+
    |                  |                  |  Black home
    |                  |                  |
    |                  |                  |
    |                  |                  |
    |                  |                  |
    |                  |                  |  White home
    +------------------+------------------+
    11 10  9  8  7  6     5  4  3  2  1  0
"""

from typing import List, Optional, Tuple
import numpy as np
from numpy.typing import NDArray
from backgammon_rules.core.types import (
    BAR_POSITION,
    BEAR_OFF_POSITION,
    CHECKERS_PER_PLAYER,
    NUM_POINTS,
    DicePool,
    GameState,
    MoveSequence,
    MoveStep,
    Player,
    Point,
    Position,
    TableOptions,
)


WHITE_HOME_RANGE = (0, 5)
BLACK_HOME_RANGE = (18, 23)
WHITE_BAR_ENTRY_RANGE = (18, 23)
BLACK_BAR_ENTRY_RANGE = (0, 5)


# ==============================================================================
# BOARD PREDICATES
# ==============================================================================

def opponent(player: Player) -> Player:
    """Get the opponent of a player."""
    return player.opponent()


def is_player_piece(value: int, player: Player) -> bool:
    """Check if a signed point value holds the player's pieces.

    Positive values are white, negative values are black.
    """
    if player == Player.WHITE:
        return value > 0
    return value < 0


def is_opponent_piece(value: int, player: Player) -> bool:
    """Check if a signed point value holds the opponent's pieces."""
    return is_player_piece(value, opponent(player))


def home_board_range(player: Player) -> Tuple[int, int]:
    """Get the (min, max) points of a player's home board (inclusive)."""
    return WHITE_HOME_RANGE if player == Player.WHITE else BLACK_HOME_RANGE


def bar_entry_range(player: Player) -> Tuple[int, int]:
    """Get the (min, max) points a player can enter on from the bar.

    Pieces re-enter in the opponent's home board.
    """
    return WHITE_BAR_ENTRY_RANGE if player == Player.WHITE else BLACK_BAR_ENTRY_RANGE


def is_in_home_board(point: Point, player: Player) -> bool:
    """Check if a point lies in the player's home board."""
    low, high = home_board_range(player)
    return low <= point <= high


def bar_entry_point(die: int, player: Player) -> Point:
    """Get the entry point for a die value when entering from the bar.

    Args:
        die: Die value (1-6)
        player: Which player

    Returns:
        Point number (white enters at 24 - die, black at die - 1)
    """
    if player == Player.WHITE:
        return NUM_POINTS - die
    return die - 1


def is_bar_entry(step: MoveStep) -> bool:
    return step.from_point == BAR_POSITION


def is_bear_off(step: MoveStep) -> bool:
    return step.to_point == BEAR_OFF_POSITION


def is_point_blocked(board: NDArray[np.int32], point: Point, player: Player) -> bool:
    """Check if a point is blocked for a player.

    A point is blocked when the opponent holds 2 or more pieces on it.
    The bear-off destination is never blocked.
    """
    if point == BEAR_OFF_POSITION:
        return False
    value = int(board[point])
    return is_opponent_piece(value, player) and abs(value) >= 2


def move_destination(from_point: Point, die: int, player: Player) -> int:
    """Calculate the raw destination of moving ``die`` pips from a point.

    The result may fall off the board (below 0 for white, above 23 for
    black), which means the move would bear off.
    """
    if from_point == BAR_POSITION:
        return bar_entry_point(die, player)
    if player == Player.WHITE:
        return from_point - die
    return from_point + die


def exact_bear_off_die(point: Point, player: Player) -> int:
    """Die value that bears off exactly from a point.

    White needs 1 from point 0 and 6 from point 5; black needs 1 from
    point 23 and 6 from point 18.
    """
    if player == Player.WHITE:
        return point + 1
    return NUM_POINTS - point


# ==============================================================================
# POSITION QUERIES
# ==============================================================================

def player_points(board: NDArray[np.int32], player: Player) -> List[Point]:
    """Get all points where a player has pieces, in index order."""
    if player == Player.WHITE:
        return [int(p) for p in np.flatnonzero(board > 0)]
    return [int(p) for p in np.flatnonzero(board < 0)]


def pieces_at(position: Position, point: Point, player: Player) -> int:
    """Number of the player's pieces at a point (or on the bar)."""
    if point == BAR_POSITION:
        return position.bar[player]
    value = int(position.board[point])
    return abs(value) if is_player_piece(value, player) else 0


def first_point_outside_home(position: Position, player: Player) -> Optional[Point]:
    """Find a piece that keeps the player from bearing off.

    Returns:
        BAR_POSITION if the player has pieces on the bar, the lowest-index
        board point holding a piece outside the home board, or None when
        every remaining piece is home.
    """
    if position.bar[player] > 0:
        return BAR_POSITION
    for point in player_points(position.board, player):
        if not is_in_home_board(point, player):
            return point
    return None


def all_pieces_in_home(position: Position, player: Player) -> bool:
    """Check if a player can bear off (no bar pieces, nothing outside home)."""
    return first_point_outside_home(position, player) is None


def highest_home_point(position: Position, player: Player) -> Optional[Point]:
    """Get the home point farthest from bearing off that holds the player's pieces.

    For white this is the highest index in 0-5, for black the lowest in 18-23.

    Returns:
        Point index, or None if the player has no pieces in the home board
    """
    low, high = home_board_range(player)
    candidates = range(high, low - 1, -1) if player == Player.WHITE else range(low, high + 1)
    for point in candidates:
        if is_player_piece(int(position.board[point]), player):
            return point
    return None


def bear_off_allowed(position: Position, from_point: Point, die: int, player: Player) -> bool:
    """Check whether bearing off from a point with a die is legal.

    The exact die is always legal, a smaller die never is. A larger die
    is legal when the table allows overshoot, otherwise only from the
    player's highest occupied home point.
    """
    if not all_pieces_in_home(position, player):
        return False
    exact = exact_bear_off_die(from_point, player)
    if die == exact:
        return True
    if die < exact:
        return False
    if position.table_options.allow_bear_off_overshoot:
        return True
    return from_point == highest_home_point(position, player)


def count_pieces(position: Position, player: Player) -> int:
    """Total pieces of a player: board + bar + home."""
    if player == Player.WHITE:
        on_board = int(position.board[position.board > 0].sum())
    else:
        on_board = int(-position.board[position.board < 0].sum())
    return on_board + position.bar[player] + position.home[player]


def pip_count(position: Position, player: Player) -> int:
    """Calculate pip count for a player.

    Pip count is the total number of pips needed to bear off every piece.
    A piece on the bar counts 25.
    """
    total = 25 * position.bar[player]
    for point in player_points(position.board, player):
        total += exact_bear_off_die(point, player) * abs(int(position.board[point]))
    return total


def is_valid_position(position: Position) -> Tuple[bool, str]:
    """Validate the piece-count invariant.

    Returns:
        (is_valid, error_message) tuple
    """
    for player in Player:
        total = count_pieces(position, player)
        if total != CHECKERS_PER_PLAYER:
            return False, (
                f"{player} has {total} pieces (bar: {position.bar[player]}, "
                f"home: {position.home[player]}), should have {CHECKERS_PER_PLAYER}"
            )
    return True, ""


def winner(position: Position) -> Optional[Player]:
    """Get the player who has borne off all pieces, if any."""
    for player in Player:
        if position.home[player] == CHECKERS_PER_PLAYER:
            return player
    return None


# ==============================================================================
# BOARD CONSTRUCTION
# ==============================================================================

INITIAL_BOARD = (
    -2, 0, 0, 0, 0, 5,
    0, 3, 0, 0, 0, -5,
    5, 0, 0, 0, -3, 0,
    -5, 0, 0, 0, 0, 2,
)


def initial_state(
    active_player: Player = Player.WHITE,
    dice: Optional[DicePool] = None,
    table_options: Optional[TableOptions] = None,
) -> GameState:
    """Create the standard backgammon starting position.

    Standard setup (point indices):
    - White: 2 on 23, 5 on 12, 3 on 7, 5 on 5
    - Black: 2 on 0, 5 on 11, 3 on 16, 5 on 18

    Returns:
        GameState in starting position
    """
    return GameState(
        board=np.array(INITIAL_BOARD, dtype=np.int32),
        table_options=table_options or TableOptions(),
        active_player=active_player,
        dice=list(dice or []),
    )


def empty_state(
    active_player: Player = Player.WHITE,
    dice: Optional[DicePool] = None,
    table_options: Optional[TableOptions] = None,
) -> GameState:
    """Create a state with no pieces on the board, bar or home."""
    return GameState(
        table_options=table_options or TableOptions(),
        active_player=active_player,
        dice=list(dice or []),
    )


# ==============================================================================
# MOVE APPLICATION
# ==============================================================================

def apply_move_step(position: Position, step: MoveStep, player: Player) -> None:
    """Apply a single step to a position (mutates position).

    A single opposing piece on the destination is hit and sent to the
    opponent's bar.

    Raises:
        ValueError: If the source holds none of the player's pieces or the
            destination is blocked
    """
    if pieces_at(position, step.from_point, player) == 0:
        raise ValueError(f"No {player} piece to move for {step}")
    if is_point_blocked(position.board, step.to_point, player):
        raise ValueError(f"Destination of {step} is blocked for {player}")

    sign = 1 if player == Player.WHITE else -1

    if step.from_point == BAR_POSITION:
        position.bar[player] -= 1
    else:
        position.board[step.from_point] -= sign

    if step.to_point == BEAR_OFF_POSITION:
        position.home[player] += 1
        return

    value = int(position.board[step.to_point])
    if is_opponent_piece(value, player) and abs(value) == 1:
        position.bar[opponent(player)] += 1
        position.board[step.to_point] = 0
    position.board[step.to_point] += sign


def apply_moves(state: GameState, steps: MoveSequence, player: Player) -> GameState:
    """Apply a validated sequence of steps to a copy of a state.

    Args:
        state: State before the turn
        steps: Steps to apply, in order
        player: Player making the moves

    Returns:
        New state with the steps applied and their dice marked as used
    """
    new_state = state.copy()
    for step in steps:
        apply_move_step(new_state, step, player)
        new_state.dice_used.append(step.die)
    return new_state


# ==============================================================================
# BOARD DISPLAY (for debugging)
# ==============================================================================

def board_to_string(position: Position) -> str:
    """Convert a position to string representation.

    Args:
        position: Position to display

    Returns:
        ASCII table of each point
    """
    lines = []
    lines.append("=" * 30)
    if isinstance(position, GameState):
        lines.append(f"Player to move: {position.active_player}")
        lines.append(f"Dice: {position.dice} (used {position.dice_used})")
    lines.append(f"White pip count: {pip_count(position, Player.WHITE)}")
    lines.append(f"Black pip count: {pip_count(position, Player.BLACK)}")
    lines.append("")
    lines.append("Point | White | Black")
    lines.append("------+-------+------")

    lines.append(f"BAR   |  {position.bar[Player.WHITE]:2d}   |  {position.bar[Player.BLACK]:2d}")
    for point in range(NUM_POINTS):
        value = int(position.board[point])
        w = value if value > 0 else 0
        b = -value if value < 0 else 0
        lines.append(f"{point:2d}    |  {w:2d}   |  {b:2d}")
    lines.append(f"OFF   |  {position.home[Player.WHITE]:2d}   |  {position.home[Player.BLACK]:2d}")

    lines.append("=" * 30)
    return "\n".join(lines)
