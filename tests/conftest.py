"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from dexchess.core.board import Board
from dexchess.core.notation import STARTING_FEN, parse_board
from dexchess.game.state import GameState


@pytest.fixture
def start_board() -> Board:
    """A freshly parsed standard starting position."""
    return parse_board(STARTING_FEN)


@pytest.fixture
def game() -> GameState:
    """A game set up at the standard starting position."""
    gs = GameState()
    gs.setup()
    return gs
