"""
session.py - Game session shared by the Connect Four front ends

A GameSession holds everything that outlives a single game: the game being
played, the board size picked for the next game, where games are saved and
whether the menu may resume play. Front ends forward user actions here and
render whatever the session reports back; nothing in this module touches a
user interface toolkit.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from connect4play.data.save_manager import load_game, save_game
from connect4play.debug import debug
from connect4play.errors import InvalidMoveError, SaveFileError
from connect4play.game.rules import BoardSize, ConnectFourGame
from connect4play.utils import SAVE_FILE, Coord, GameResult, Player


@dataclass
class MoveOutcome:
    """What happened when a column was chosen."""
    column: int
    accepted: bool
    player: Optional[Player] = None
    row: Optional[int] = None
    result: GameResult = GameResult.IN_PROGRESS
    winning_line: List[Coord] = field(default_factory=list)
    message: str = ""

    @property
    def game_over(self) -> bool:
        return self.result.is_game_over()


class GameSession:
    """
    Menu and game state for one run of the program.

    Invalid moves and failed loads are reported through return values and
    last_message; they never end the session or disturb the current game.
    """

    def __init__(self, board_size: Optional[BoardSize] = None,
                 save_path: str = SAVE_FILE):
        """
        Initialize a session.

        Args:
            board_size: Size used for new games (defaults to 6x7)
            save_path: File used by save() and load()
        """
        self.board_size = board_size or BoardSize()
        self.save_path = os.fspath(save_path)
        self.game = ConnectFourGame(self.board_size.rows, self.board_size.cols)
        self.allow_resume = False
        self.in_menu = True
        self.last_message = ""

    def new_game(self) -> ConnectFourGame:
        """Start a new game at the configured board size and leave the menu."""
        self.game = ConnectFourGame(self.board_size.rows, self.board_size.cols)
        self.allow_resume = True
        self.in_menu = False
        self.last_message = f"New {self.board_size.label()} game. {self.status_text()}"
        debug.info(f"Session started new {self.board_size.label()} game", "session")
        return self.game

    def drop(self, column: int) -> MoveOutcome:
        """
        Drop the current player's piece into a column.

        Args:
            column: Column index (0-indexed)

        Returns:
            The outcome; rejected moves carry the reason in message
        """
        player = self.game.get_current_player()
        try:
            row = self.game.make_move(column)
        except InvalidMoveError as e:
            debug.debug(f"Rejected move in column {column}: {e}", "session")
            self.last_message = str(e)
            return MoveOutcome(column=column, accepted=False,
                               result=self.game.get_result(), message=str(e))

        self.last_message = self.status_text()
        if self.game.is_game_over():
            # Nothing left to resume once the game has an outcome
            self.allow_resume = False
        return MoveOutcome(column=column, accepted=True, player=player, row=row,
                           result=self.game.get_result(),
                           winning_line=self.game.get_winning_line(),
                           message=self.last_message)

    def undo(self) -> bool:
        if self.game.undo_move():
            self.allow_resume = True
            self.last_message = f"Move undone. {self.status_text()}"
            return True
        self.last_message = "No moves to undo."
        return False

    def save(self) -> bool:
        """
        Save the current game to the session's save file.

        Returns:
            True if the game was saved. Nothing is written unless there
            is a game that can be resumed
        """
        if not self.allow_resume:
            self.last_message = "No game in progress to save."
            return False
        try:
            save_game(self.game, self.save_path)
        except SaveFileError as e:
            debug.error(f"Failed to save game: {e}", "session")
            self.last_message = f"Save failed: {e.reason}"
            return False
        self.last_message = f"Game saved to {self.save_path}"
        return True

    def load(self) -> bool:
        """
        Replace the current game with the one in the session's save file.

        Returns:
            True if a game was loaded; on False the previous game is kept
        """
        try:
            game = load_game(self.save_path)
        except SaveFileError as e:
            debug.error(f"Failed to load game: {e}", "session")
            self.last_message = f"Load failed: {e.reason}"
            return False

        self.game = game
        self.board_size = BoardSize(game.rows, game.cols)
        self.allow_resume = not game.is_game_over()
        self.in_menu = False
        self.last_message = f"Game loaded. {self.status_text()}"
        return True

    def pause(self) -> None:
        """Show the menu; play may be resumed unless the game has ended."""
        self.in_menu = True
        self.allow_resume = not self.game.is_game_over()

    def resume(self) -> bool:
        if not self.allow_resume:
            return False
        self.in_menu = False
        return True

    def restart(self) -> None:
        """Start the current game over on a board of the same size."""
        self.game.reset()
        self.allow_resume = True
        self.in_menu = False
        self.last_message = f"Game restarted. {self.status_text()}"

    def status_text(self) -> str:
        return self.game.status_text()
