"""
Pytest configuration for connect4play tests.

Adds the repository root to sys.path so the package imports without being
installed, and provides the move sequences shared across test modules.
"""

import sys
from pathlib import Path
from typing import Iterable

import pytest

_root_path = str(Path(__file__).resolve().parent.parent)
if _root_path not in sys.path:
    sys.path.insert(0, _root_path)

from connect4play.debug import DebugLevel, debug  # noqa: E402
from connect4play.game.board import Board  # noqa: E402

# Red connects four along the bottom row on move 7
RED_HORIZONTAL_WIN = [0, 0, 1, 1, 2, 2, 3]

# Blue stacks four in column 1 on move 8
BLUE_VERTICAL_WIN = [0, 1, 0, 1, 0, 1, 2, 1]

# Red completes (5,0) (4,1) (3,2) (2,3) on move 11
RED_DIAGONAL_WIN = [0, 1, 1, 2, 2, 3, 2, 3, 3, 5, 3]

# Fills a 6x7 board without four in a row anywhere. Every column alternates
# colours bottom to top; bottoms read R R B B R R B across the board.
DRAW_6X7 = ([0, 2, 2, 0] * 3
            + [1, 3, 3, 1] * 3
            + [4, 6, 6, 4] * 3
            + [5] * 6)


def play_moves(board: Board, moves: Iterable[int]) -> Board:
    for column in moves:
        board.make_move(column)
    return board


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def play():
    """Play a list of columns on a board and return it."""
    return play_moves


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep log output at the default level and restore it after each test."""
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")
