"""
errors.py - Exceptions raised by the Connect Four game core
"""


class Connect4Error(Exception):
    """Base class for all errors raised by connect4play."""

    pass


class InvalidMoveError(Connect4Error, ValueError):
    """Raised when a move cannot be played on the current board."""

    def __init__(self, column: int, message: str):
        super().__init__(message)
        self.column = column


class GameOverError(InvalidMoveError):
    """Raised when a move is attempted after the game has ended."""

    pass


class ColumnOutOfRangeError(InvalidMoveError):
    """Raised when a move names a column that is not on the board."""

    pass


class ColumnFullError(InvalidMoveError):
    """Raised when a move is played into a column with no empty cells."""

    pass


class BoardSizeError(Connect4Error, ValueError):
    """Raised when a board is created with a size the rules do not allow."""

    pass


class SaveFileError(Connect4Error):
    """Raised when a saved game cannot be written, read or understood."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{message} ({path})")
        self.path = path
        self.reason = message
