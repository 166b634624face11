"""
rules.py - Game management and board size settings for Connect Four

This module provides:
1. ConnectFourGame, the high-level game object the front ends drive
2. BoardSize, the adjustable size used when the next game is started
"""

from dataclasses import dataclass
from typing import List, Optional

from connect4play.debug import debug
from connect4play.errors import BoardSizeError
from connect4play.game.board import Board, MoveRecord
from connect4play.utils import (DEFAULT_COLS, DEFAULT_ROWS, Coord, GameResult,
                                Player, board_size_problem, is_valid_board_size)


@dataclass
class BoardSize:
    """
    The board size picked in the menu for the next new game.

    Every change keeps the size within the board size rules; a step that
    would break them is refused and leaves the size unchanged.
    """
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS

    def __post_init__(self):
        problem = board_size_problem(self.rows, self.cols)
        if problem:
            raise BoardSizeError(problem)

    def _resize(self, rows: int, cols: int) -> bool:
        if not is_valid_board_size(rows, cols):
            debug.debug(f"Refusing board size {rows}x{cols}", "game")
            return False
        self.rows, self.cols = rows, cols
        return True

    def increase_rows(self) -> bool:
        return self._resize(self.rows + 1, self.cols)

    def decrease_rows(self) -> bool:
        return self._resize(self.rows - 1, self.cols)

    def increase_cols(self) -> bool:
        return self._resize(self.rows, self.cols + 1)

    def decrease_cols(self) -> bool:
        return self._resize(self.rows, self.cols - 1)

    def label(self) -> str:
        return f"{self.rows}x{self.cols}"


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    This class wraps a Board and gives the front ends one place to start
    games, play and undo moves, and ask about the outcome.
    """

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS,
                 board: Optional[Board] = None):
        """
        Initialize a new Connect Four game.

        Args:
            rows: Number of rows for a fresh board
            cols: Number of columns for a fresh board
            board: An existing board to continue playing on (rows and cols
                are ignored when given)
        """
        self.board = board if board is not None else Board(rows, cols)
        debug.debug(f"Initializing {self.board.rows}x{self.board.cols} ConnectFourGame", "game")

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    def reset(self) -> None:
        """Restart the game on a board of the same size."""
        debug.debug("Resetting game", "game")
        self.board.reset()

    def new_game(self, rows: int, cols: int) -> None:
        """
        Replace the board with an empty one of a new size.

        Raises:
            BoardSizeError: If the size breaks the board size rules
        """
        debug.info(f"Starting new {rows}x{cols} game", "game")
        self.board = Board(rows, cols)

    def make_move(self, column: int) -> int:
        """
        Make a move in the game.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            The row the piece landed in

        Raises:
            InvalidMoveError: If the move is not allowed
        """
        debug.debug(f"Game: {self.board.current_player.display_name} plays column {column}", "game")
        return self.board.make_move(column)

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False otherwise
        """
        return self.board.undo_move()

    def is_game_over(self) -> bool:
        return self.board.game_result.is_game_over()

    def get_result(self) -> GameResult:
        return self.board.game_result

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        return self.board.game_result.winner()

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_valid_moves(self) -> List[int]:
        return self.board.get_valid_moves()

    def get_winning_line(self) -> List[Coord]:
        return self.board.get_winning_line()

    def get_history(self) -> List[MoveRecord]:
        """Moves played so far as (column, player), oldest first."""
        return list(self.board.moves_made)

    def status_text(self) -> str:
        """One-line description of the turn or the outcome."""
        winner = self.get_winner()
        if winner is not None:
            return f"{winner.display_name} wins!"
        if self.board.game_result == GameResult.DRAW:
            return "Draw!"
        return f"{self.get_current_player().display_name}'s turn"

    def render(self) -> str:
        return self.board.render()

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConnectFourGame):
            return NotImplemented
        return self.board == other.board

    __hash__ = None
