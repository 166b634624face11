"""
utils.py - Constants, enumerations and helper functions for Connect Four

This module provides the board size rules, player and result enumerations,
and the grid helpers (win scanning, rendering) shared by the rest of the
game implementation.
"""

from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

# Game constants
DEFAULT_ROWS = 6
DEFAULT_COLS = 7
MIN_ROWS = 6
MIN_COLS = 7
MAX_SIZE = 12  # Largest rows or cols value the board view can draw legibly
MAX_SIZE_DIFF = 2  # Rows and cols may differ by at most this much
CONNECT_N = 4  # Number of pieces in a row to win
SAVE_FILE = "save.json"

Coord = Tuple[int, int]


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    RED = 1    # Always moves first
    BLUE = 2

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.RED:
            return Player.BLUE
        elif self == Player.BLUE:
            return Player.RED
        return Player.EMPTY

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str) -> 'Player':
        """
        Look up a playing side by its display name.

        Args:
            name: "Red" or "Blue" (case-insensitive)

        Returns:
            The matching player

        Raises:
            ValueError: If the name does not belong to a playing side
        """
        if isinstance(name, str):
            key = name.strip().upper()
            if key in ("RED", "BLUE"):
                return cls[key]
        raise ValueError(f"Unknown player name: {name!r}")

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.RED:
            return "R"
        else:
            return "B"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    RED_WIN = auto()
    BLUE_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    def winner(self) -> Optional[Player]:
        """Get the winning player, or None for draws and unfinished games."""
        if self == GameResult.RED_WIN:
            return Player.RED
        if self == GameResult.BLUE_WIN:
            return Player.BLUE
        return None

    @staticmethod
    def win_for(player: Player) -> 'GameResult':
        if player == Player.RED:
            return GameResult.RED_WIN
        if player == Player.BLUE:
            return GameResult.BLUE_WIN
        raise ValueError("The empty player cannot win")


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1)
}


def board_size_problem(rows: int, cols: int) -> Optional[str]:
    """
    Describe why a board size is not allowed.

    Args:
        rows: Number of rows
        cols: Number of columns

    Returns:
        A human readable reason, or None if the size is allowed
    """
    if rows < MIN_ROWS or cols < MIN_COLS:
        return f"Board must be at least {MIN_ROWS}x{MIN_COLS}, got {rows}x{cols}"
    if rows > MAX_SIZE or cols > MAX_SIZE:
        return f"Board may be at most {MAX_SIZE}x{MAX_SIZE}, got {rows}x{cols}"
    if abs(cols - rows) > MAX_SIZE_DIFF:
        return (f"Rows and columns may differ by at most {MAX_SIZE_DIFF}, "
                f"got {rows}x{cols}")
    return None


def is_valid_board_size(rows: int, cols: int) -> bool:
    """Check if a board of the given size may be played on."""
    return board_size_problem(rows, cols) is None


def is_valid_position(grid: np.ndarray, row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        grid: The game board
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    rows, cols = grid.shape
    return 0 <= row < rows and 0 <= col < cols


def get_column_height(grid: np.ndarray, column: int) -> int:
    """
    Get the current height of a column (number of pieces).

    Args:
        grid: The game board
        column: The column to check

    Returns:
        The number of pieces in the column
    """
    return int(np.count_nonzero(grid[:, column] != Player.EMPTY.value))


def find_line_at_position(grid: np.ndarray, row: int, col: int) -> List[Coord]:
    """
    Find a line of CONNECT_N or more pieces running through a position.

    Args:
        grid: The game board
        row: Row index of the piece to check from
        col: Column index of the piece to check from

    Returns:
        The (row, col) positions of the line ordered from one end to the
        other, or an empty list if the piece is not part of a winning line
    """
    player_value = grid[row, col]
    if player_value == Player.EMPTY.value:
        return []

    for dr, dc in DIRECTION_VECTORS.values():
        # Walk back to the start of the run, then forward to its end
        r, c = row, col
        while is_valid_position(grid, r - dr, c - dc) and grid[r - dr, c - dc] == player_value:
            r -= dr
            c -= dc

        positions = []
        while is_valid_position(grid, r, c) and grid[r, c] == player_value:
            positions.append((r, c))
            r += dr
            c += dc

        if len(positions) >= CONNECT_N:
            return positions

    return []


def find_any_line(grid: np.ndarray) -> Optional[Tuple[Player, List[Coord]]]:
    """
    Scan the whole board for a winning line.

    Args:
        grid: The game board

    Returns:
        (player, line) for the first winning line found scanning top to
        bottom and left to right, or None if nobody has four in a row
    """
    rows, cols = grid.shape
    for row in range(rows):
        for col in range(cols):
            line = find_line_at_position(grid, row, col)
            if line:
                return Player(int(grid[row, col])), line
    return None


def has_floating_pieces(grid: np.ndarray) -> bool:
    """
    Check whether any piece sits above an empty cell in its column.

    Args:
        grid: The game board

    Returns:
        True if the gravity rule is broken anywhere on the board
    """
    occupied = grid != Player.EMPTY.value
    # Once a column is occupied at some row, every row below must be too
    covered = np.logical_or.accumulate(occupied, axis=0)
    return bool(np.any(covered & ~occupied))


def render_board_ascii(grid: np.ndarray, highlight: Optional[List[Coord]] = None) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: The game board
        highlight: Positions to draw in lower case (a winning line)

    Returns:
        ASCII representation of the board
    """
    rows, cols = grid.shape
    marked = set(highlight or [])
    width = cols * 3 - 1

    result = ["|" + "-" * width + "|"]
    for row in range(rows):
        cells = []
        for col in range(cols):
            symbol = str(Player(int(grid[row, col])))
            if (row, col) in marked:
                symbol = symbol.lower()
            cells.append(f"{symbol:>2}")
        result.append("|" + " ".join(cells) + "|")
    result.append("|" + "-" * width + "|")

    # Columns are shown 1-based to players
    result.append("|" + " ".join(f"{i + 1:>2}" for i in range(cols)) + "|")

    return "\n".join(result)
