"""Tests for board module."""

import numpy as np
import pytest
from backgammon_rules.core.board import (
    all_pieces_in_home,
    apply_move_step,
    apply_moves,
    bar_entry_point,
    bar_entry_range,
    bear_off_allowed,
    board_to_string,
    count_pieces,
    empty_state,
    exact_bear_off_die,
    first_point_outside_home,
    highest_home_point,
    initial_state,
    is_in_home_board,
    is_opponent_piece,
    is_player_piece,
    is_point_blocked,
    is_valid_position,
    move_destination,
    opponent,
    pieces_at,
    pip_count,
    player_points,
    winner,
)
from backgammon_rules.core.types import BAR_POSITION, BEAR_OFF_POSITION, MoveStep, Player


class TestBoardPredicates:
    """Tests for ownership, home and entry arithmetic."""

    def test_ownership_by_sign(self):
        assert is_player_piece(3, Player.WHITE)
        assert not is_player_piece(-3, Player.WHITE)
        assert is_player_piece(-1, Player.BLACK)
        assert not is_player_piece(0, Player.BLACK)
        assert is_opponent_piece(-2, Player.WHITE)
        assert not is_opponent_piece(0, Player.WHITE)

    def test_opponent(self):
        assert opponent(Player.WHITE) == Player.BLACK
        assert opponent(Player.BLACK) == Player.WHITE

    def test_home_board_membership(self):
        assert all(is_in_home_board(p, Player.WHITE) for p in range(0, 6))
        assert not is_in_home_board(6, Player.WHITE)
        assert all(is_in_home_board(p, Player.BLACK) for p in range(18, 24))
        assert not is_in_home_board(17, Player.BLACK)

    def test_bar_entry_point(self):
        """White enters at 24 - die, black at die - 1."""
        assert bar_entry_point(1, Player.WHITE) == 23
        assert bar_entry_point(6, Player.WHITE) == 18
        assert bar_entry_point(1, Player.BLACK) == 0
        assert bar_entry_point(6, Player.BLACK) == 5

    def test_bar_entry_ranges_are_opponent_home(self):
        assert bar_entry_range(Player.WHITE) == (18, 23)
        assert bar_entry_range(Player.BLACK) == (0, 5)

    def test_move_destination(self):
        assert move_destination(12, 3, Player.WHITE) == 9
        assert move_destination(12, 3, Player.BLACK) == 15
        assert move_destination(2, 5, Player.WHITE) == -3
        assert move_destination(BAR_POSITION, 4, Player.WHITE) == 20

    def test_exact_bear_off_die(self):
        assert exact_bear_off_die(0, Player.WHITE) == 1
        assert exact_bear_off_die(5, Player.WHITE) == 6
        assert exact_bear_off_die(23, Player.BLACK) == 1
        assert exact_bear_off_die(18, Player.BLACK) == 6

    def test_point_blocking(self, make_state):
        state = make_state(black={9: 2, 7: 1})
        assert is_point_blocked(state.board, 9, Player.WHITE)
        assert not is_point_blocked(state.board, 7, Player.WHITE)
        assert not is_point_blocked(state.board, 9, Player.BLACK)
        assert not is_point_blocked(state.board, BEAR_OFF_POSITION, Player.WHITE)


class TestBoardQueries:
    """Tests for position state queries."""

    def test_initial_state(self):
        """Test standard starting position."""
        state = initial_state()

        assert state.board[23] == 2
        assert state.board[12] == 5
        assert state.board[7] == 3
        assert state.board[5] == 5
        assert state.board[0] == -2
        assert state.board[11] == -5
        assert state.board[16] == -3
        assert state.board[18] == -5

        assert count_pieces(state, Player.WHITE) == 15
        assert count_pieces(state, Player.BLACK) == 15
        assert state.active_player == Player.WHITE

    def test_pip_count_initial(self):
        """Standard pip count at start is 167 for each player."""
        state = initial_state()
        assert pip_count(state, Player.WHITE) == 167
        assert pip_count(state, Player.BLACK) == 167

    def test_pip_count_bar(self, make_state):
        state = make_state(bar_white=1)
        assert pip_count(state, Player.WHITE) == 25

    def test_empty_state(self):
        state = empty_state()
        assert count_pieces(state, Player.WHITE) == 0
        assert not is_valid_position(state)[0]

    def test_player_points(self, make_state):
        state = make_state(white={12: 2, 3: 1}, black={9: 2})
        assert player_points(state.board, Player.WHITE) == [3, 12]
        assert player_points(state.board, Player.BLACK) == [9]

    def test_pieces_at(self, make_state):
        state = make_state(white={12: 2}, black={9: 3}, bar_white=1)
        assert pieces_at(state, 12, Player.WHITE) == 2
        assert pieces_at(state, 9, Player.WHITE) == 0
        assert pieces_at(state, 9, Player.BLACK) == 3
        assert pieces_at(state, BAR_POSITION, Player.WHITE) == 1

    def test_all_pieces_in_home(self, make_state):
        """Test bear off eligibility."""
        assert all_pieces_in_home(make_state(white={1: 2, 3: 3}), Player.WHITE)

        outside = make_state(white={1: 2, 13: 1})
        assert not all_pieces_in_home(outside, Player.WHITE)
        assert first_point_outside_home(outside, Player.WHITE) == 13

        on_bar = make_state(white={1: 2}, bar_white=1)
        assert first_point_outside_home(on_bar, Player.WHITE) == BAR_POSITION

    def test_highest_home_point(self, make_state):
        state = make_state(white={0: 1, 4: 2}, black={20: 1, 22: 3})
        assert highest_home_point(state, Player.WHITE) == 4
        assert highest_home_point(state, Player.BLACK) == 20
        assert highest_home_point(make_state(), Player.WHITE) is None

    def test_bear_off_allowed(self, make_state):
        state = make_state(white={0: 1, 4: 1})
        assert bear_off_allowed(state, 0, 1, Player.WHITE)
        assert bear_off_allowed(state, 0, 6, Player.WHITE)
        assert not bear_off_allowed(state, 4, 3, Player.WHITE)

        strict = make_state(white={0: 1, 4: 1}, overshoot=False)
        assert not bear_off_allowed(strict, 0, 6, Player.WHITE)
        assert bear_off_allowed(strict, 4, 6, Player.WHITE)

    def test_is_valid_position(self, make_state):
        ok, message = is_valid_position(make_state(white={12: 2}))
        assert ok and message == ""

        state = make_state(white={12: 2})
        state.board[3] = 1
        ok, message = is_valid_position(state)
        assert not ok
        assert "16 pieces" in message

    def test_winner(self, make_state):
        assert winner(make_state(white={12: 2}, black={9: 1})) is None
        assert winner(make_state(black={9: 1})) == Player.WHITE


class TestMoveApplication:
    """Tests for applying moves."""

    def test_apply_simple_move(self, sample_state):
        """Test applying a simple move."""
        position = sample_state.copy()
        apply_move_step(position, MoveStep(23, 22, 1), Player.WHITE)

        assert sample_state.board[23] == 2
        assert position.board[23] == 1
        assert position.board[22] == 1

    def test_apply_black_move(self, sample_state):
        position = sample_state.copy()
        apply_move_step(position, MoveStep(0, 3, 3), Player.BLACK)
        assert position.board[0] == -1
        assert position.board[3] == -1

    def test_apply_hitting_move(self, make_state):
        """Test applying a move that hits opponent."""
        position = make_state(white={8: 1}, black={5: 1})
        apply_move_step(position, MoveStep(8, 5, 3), Player.WHITE)

        assert position.board[8] == 0
        assert position.board[5] == 1
        assert position.bar[Player.BLACK] == 1
        assert is_valid_position(position)[0]

    def test_apply_bar_entry(self, make_state):
        position = make_state(bar_white=1, black={20: 1})
        apply_move_step(position, MoveStep(BAR_POSITION, 20, 4), Player.WHITE)

        assert position.bar[Player.WHITE] == 0
        assert position.board[20] == 1
        assert position.bar[Player.BLACK] == 1

    def test_apply_bearing_off(self, make_state):
        """Test bearing off."""
        position = make_state(white={0: 5})
        apply_move_step(position, MoveStep(0, BEAR_OFF_POSITION, 1), Player.WHITE)

        assert position.board[0] == 4
        assert position.home[Player.WHITE] == 11

    def test_apply_to_blocked_point_raises(self, sample_state):
        """Point 11 holds 5 black pieces."""
        position = sample_state.copy()
        with pytest.raises(ValueError):
            apply_move_step(position, MoveStep(12, 11, 1), Player.WHITE)
        assert position.board[12] == 5
        assert position.board[11] == -5

    def test_apply_from_empty_point_raises(self, sample_state):
        with pytest.raises(ValueError):
            apply_move_step(sample_state.copy(), MoveStep(10, 7, 3), Player.WHITE)

    def test_apply_from_empty_bar_raises(self, sample_state):
        with pytest.raises(ValueError):
            apply_move_step(sample_state.copy(), MoveStep(BAR_POSITION, 21, 3), Player.WHITE)

    def test_apply_moves_rejects_illegal_step(self, sample_state):
        with pytest.raises(ValueError):
            apply_moves(sample_state, [MoveStep(23, 20, 3), MoveStep(12, 11, 1)], Player.WHITE)
        assert sample_state.board[23] == 2

    def test_apply_moves_returns_new_state(self, make_state):
        state = make_state(white={12: 2})
        steps = [MoveStep(12, 9, 3), MoveStep(12, 7, 5)]
        new_state = apply_moves(state, steps, Player.WHITE)

        assert state.board[12] == 2
        assert state.dice_used == []
        assert new_state.board[12] == 0
        assert new_state.board[9] == 1
        assert new_state.board[7] == 1
        assert new_state.dice_used == [3, 5]

    @pytest.mark.parametrize("steps", [
        [MoveStep(23, 20, 3), MoveStep(23, 22, 1)],
        [MoveStep(7, 4, 3), MoveStep(5, 4, 1)],
    ])
    def test_piece_count_preserved(self, sample_state, steps):
        """Board + bar + home stays 15 per player after any applied move."""
        new_state = apply_moves(sample_state, steps, Player.WHITE)
        assert count_pieces(new_state, Player.WHITE) == 15
        assert count_pieces(new_state, Player.BLACK) == 15


class TestBoardDisplay:
    """Tests for debug rendering."""

    def test_board_to_string(self, sample_state):
        text = board_to_string(sample_state)
        assert "Player to move: white" in text
        assert "White pip count: 167" in text
        assert "BAR" in text and "OFF" in text

    def test_board_rows(self):
        text = board_to_string(initial_state())
        rows = [line for line in text.splitlines() if line.startswith("23 ")]
        assert rows and "2" in rows[0]
        assert np.sum(initial_state().board) == 0
