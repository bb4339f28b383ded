"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from backgammon_rules.core.types import (
    CHECKERS_PER_PLAYER,
    GameState,
    Player,
    TableOptions,
)


def build_state(
    white=None,
    black=None,
    bar_white=0,
    bar_black=0,
    dice=(3, 5),
    active=Player.WHITE,
    overshoot=True,
    higher_die=False,
):
    """Create a state from {point: count} maps.

    Pieces not placed on the board or bar are counted as borne off, so
    every state keeps 15 pieces per player.
    """
    white = white or {}
    black = black or {}
    board = np.zeros(24, dtype=np.int32)
    for point, count in white.items():
        board[point] = count
    for point, count in black.items():
        board[point] = -count

    return GameState(
        board=board,
        bar={Player.WHITE: bar_white, Player.BLACK: bar_black},
        home={
            Player.WHITE: CHECKERS_PER_PLAYER - sum(white.values()) - bar_white,
            Player.BLACK: CHECKERS_PER_PLAYER - sum(black.values()) - bar_black,
        },
        table_options=TableOptions(
            allow_bear_off_overshoot=overshoot,
            enforce_higher_die=higher_die,
        ),
        active_player=active,
        dice=list(dice),
    )


@pytest.fixture
def make_state():
    """Factory fixture for building test positions."""
    return build_state


@pytest.fixture
def sample_state():
    """Create the standard starting position with white to play 3-1."""
    from backgammon_rules.core.board import initial_state
    return initial_state(Player.WHITE, [3, 1])
