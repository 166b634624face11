"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class which represents a Connect Four game
board of any allowed size and provides methods for making and undoing moves,
checking win and draw conditions, and inspecting the position.
"""

from typing import List, Optional, Tuple

import numpy as np

from connect4play.debug import debug
from connect4play.errors import (BoardSizeError, ColumnFullError,
                                 ColumnOutOfRangeError, GameOverError)
from connect4play.utils import (DEFAULT_COLS, DEFAULT_ROWS, Coord, GameResult,
                                Player, board_size_problem, find_any_line,
                                find_line_at_position, get_column_height,
                                render_board_ascii)

MoveRecord = Tuple[int, Player]


class Board:
    """
    Represents a Connect Four game board.

    The grid is a numpy array indexed [row, col] with row 0 at the top.
    The board manages whose turn it is, validates and executes moves,
    keeps the move history and tracks the game outcome.
    """

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS):
        """
        Initialize an empty board.

        Args:
            rows: Number of rows
            cols: Number of columns

        Raises:
            BoardSizeError: If the size breaks the board size rules
        """
        problem = board_size_problem(rows, cols)
        if problem:
            raise BoardSizeError(problem)

        debug.debug(f"Initializing new {rows}x{cols} Board", "board")
        self.rows = rows
        self.cols = cols
        self.reset()

    def reset(self) -> None:
        """Reset the board to an empty state with Red to move."""
        debug.debug("Resetting board", "board")
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)
        self.moves_made: List[MoveRecord] = []
        self.current_player = Player.RED
        self.game_result = GameResult.IN_PROGRESS
        self.last_move: Optional[Coord] = None
        self.winning_line: List[Coord] = []

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        debug.trace("Creating board copy", "board")
        new_board = Board(self.rows, self.cols)
        new_board.grid = self.grid.copy()
        new_board.moves_made = list(self.moves_made)
        new_board.current_player = self.current_player
        new_board.game_result = self.game_result
        new_board.last_move = self.last_move
        new_board.winning_line = list(self.winning_line)
        return new_board

    @property
    def move_count(self) -> int:
        return len(self.moves_made)

    def check_move(self, column: int) -> None:
        """
        Check that a move can be played, raising if it cannot.

        Args:
            column: The column to place a piece (0-indexed)

        Raises:
            GameOverError: The game already has an outcome
            ColumnOutOfRangeError: The column is not on the board
            ColumnFullError: The column has no empty cell left
        """
        if self.game_result.is_game_over():
            raise GameOverError(column, f"The game is over ({self.describe_result()})")

        if not isinstance(column, (int, np.integer)) or isinstance(column, bool):
            raise ColumnOutOfRangeError(column, f"Column {column!r} is not a column number")

        if not (0 <= column < self.cols):
            raise ColumnOutOfRangeError(
                column, f"Column {column + 1} is off the board (1-{self.cols})")

        if self.grid[0, column] != Player.EMPTY.value:
            raise ColumnFullError(column, f"Column {column + 1} is full")

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a move is valid.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the move is valid, False otherwise
        """
        try:
            self.check_move(column)
        except (GameOverError, ColumnOutOfRangeError, ColumnFullError) as e:
            debug.trace(f"Invalid move: {e}", "board")
            return False
        return True

    def get_valid_moves(self) -> List[int]:
        """
        Get a list of valid columns where a piece can be placed.

        Returns:
            List of valid column indices
        """
        if self.game_result.is_game_over():
            return []
        return [int(col) for col in np.flatnonzero(self.grid[0] == Player.EMPTY.value)]

    def column_height(self, column: int) -> int:
        """Number of pieces already in a column."""
        return get_column_height(self.grid, column)

    def landing_row(self, column: int) -> Optional[int]:
        """
        Get the row a piece dropped into a column would come to rest in.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            Row index, or None if the column is full or off the board
        """
        if not (0 <= column < self.cols):
            return None
        row = self.rows - self.column_height(column) - 1
        return row if row >= 0 else None

    def is_full(self) -> bool:
        return bool(np.all(self.grid[0] != Player.EMPTY.value))

    def make_move(self, column: int) -> int:
        """
        Drop the current player's piece into the specified column.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            The row the piece landed in

        Raises:
            InvalidMoveError: If the move is not allowed
        """
        self.check_move(column)
        column = int(column)
        player = self.current_player

        row = self.landing_row(column)
        debug.trace(f"Placing {player.display_name} piece at ({row}, {column})", "board")
        self.grid[row, column] = player.value
        self.last_move = (row, column)
        self.moves_made.append((column, player))

        debug.start_timer("win_check")
        line = find_line_at_position(self.grid, row, column)
        if line:
            self.game_result = GameResult.win_for(player)
            self.winning_line = line
            debug.info(f"{player.display_name} wins after move at {self.last_move}", "board")
        elif self.is_full():
            self.game_result = GameResult.DRAW
            debug.info("Game ends in a draw", "board")
        debug.end_timer("win_check", "board")

        if not self.game_result.is_game_over():
            self.current_player = player.other()
            debug.debug(f"Switching to {self.current_player.display_name}", "board")

        return row

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False if no moves to undo
        """
        if not self.moves_made:
            debug.debug("No moves to undo", "board")
            return False

        column, player = self.moves_made.pop()
        row = self.rows - self.column_height(column)
        debug.debug(f"Undoing move at ({row}, {column})", "board")
        self.grid[row, column] = Player.EMPTY.value

        # The position before the undone move was still being played
        self.game_result = GameResult.IN_PROGRESS
        self.winning_line = []
        self.current_player = player

        if self.moves_made:
            previous_column = self.moves_made[-1][0]
            self.last_move = (self.rows - self.column_height(previous_column), previous_column)
        else:
            self.last_move = None

        return True

    def find_winner(self) -> Optional[Tuple[Player, List[Coord]]]:
        """
        Scan the whole board for a winning line.

        Returns:
            (player, line) if someone has four in a row, otherwise None
        """
        return find_any_line(self.grid)

    def get_winning_line(self) -> List[Coord]:
        """
        Get the positions of the winning line if the game is won.

        Returns:
            List of (row, col) positions forming the winning line, or empty list if no win
        """
        return list(self.winning_line)

    def describe_result(self) -> str:
        winner = self.game_result.winner()
        if winner is not None:
            return f"{winner.display_name} wins"
        if self.game_result == GameResult.DRAW:
            return "draw"
        return "in progress"

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array representing the board
        """
        return self.grid.copy()

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid, self.winning_line)

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.rows == other.rows
                and self.cols == other.cols
                and np.array_equal(self.grid, other.grid)
                and self.moves_made == other.moves_made
                and self.current_player == other.current_player
                and self.game_result == other.game_result
                and self.last_move == other.last_move
                and self.winning_line == other.winning_line)

    __hash__ = None
