"""
save_manager.py - Saving and loading games for Connect Four

Games are stored as JSON. Writes go to a temporary file that then replaces
the save file, and both reads and writes hold a file lock so a half-written
save is never read back. A save file is checked thoroughly on load: a file
that does not describe a reachable position is rejected as a whole and the
caller keeps the game it already had.

File layout (version 1), with the disks stored column by column and row 0
at the top of each column:

    {
      "version": 1,
      "board": {"rows": 6, "cols": 7, "disks": [[null, ..., "Red"], ...]},
      "turn": "Blue",
      "history": {"moves": [[3, "Red"]]}
    }
"""

import json
import os
import shutil
from typing import Any, Dict, List, Union

import filelock
import numpy as np

from connect4play.debug import debug
from connect4play.errors import BoardSizeError, InvalidMoveError, SaveFileError
from connect4play.game.board import Board
from connect4play.game.rules import ConnectFourGame
from connect4play.utils import SAVE_FILE, Player, has_floating_pieces

FORMAT_VERSION = 1
LOCK_TIMEOUT = 5  # Seconds to wait for another process holding the save file

PathLike = Union[str, "os.PathLike[str]"]


def _lock_for(file_path: str) -> filelock.FileLock:
    return filelock.FileLock(f"{file_path}.lock", timeout=LOCK_TIMEOUT)


# File utility functions
def safe_read_json(file_path: PathLike) -> Any:
    """
    Read a JSON file while holding its lock.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON data

    Raises:
        SaveFileError: If the file is missing, locked, unreadable or not JSON
    """
    file_path = os.fspath(file_path)
    if not os.path.exists(file_path):
        raise SaveFileError(file_path, "No saved game found")

    try:
        with _lock_for(file_path):
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
    except filelock.Timeout as e:
        raise SaveFileError(file_path, "Save file is in use") from e
    except (ValueError, RecursionError) as e:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors too
        debug.error(f"Error decoding JSON from {file_path}: {e}", "data")
        raise SaveFileError(file_path, "Save file is corrupt") from e
    except OSError as e:
        debug.error(f"Error reading {file_path}: {e}", "data")
        raise SaveFileError(file_path, f"Could not read save file: {e.strerror or e}") from e


def safe_write_json(file_path: PathLike, data: Any) -> None:
    """
    Write data to a JSON file, replacing any previous contents atomically.

    Args:
        file_path: Path to JSON file
        data: Data to write

    Raises:
        SaveFileError: If the data could not be written
    """
    file_path = os.fspath(file_path)
    temp_file = f"{file_path}.tmp"
    try:
        with _lock_for(file_path):
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            shutil.move(temp_file, file_path)
    except filelock.Timeout as e:
        raise SaveFileError(file_path, "Save file is in use") from e
    except (OSError, TypeError, ValueError) as e:
        debug.error(f"Error writing to {file_path}: {e}", "data")
        if os.path.exists(temp_file):
            os.remove(temp_file)
        raise SaveFileError(file_path, f"Could not write save file: {e}") from e


# Conversion between games and JSON-ready dictionaries
def game_to_dict(game: ConnectFourGame) -> Dict[str, Any]:
    """
    Convert a game into the saved-game dictionary layout.

    Args:
        game: The game to convert

    Returns:
        A dictionary that json can serialize directly
    """
    board = game.board
    disks = []
    for col in range(board.cols):
        column = []
        for row in range(board.rows):
            cell = Player(int(board.grid[row, col]))
            column.append(None if cell == Player.EMPTY else cell.display_name)
        disks.append(column)

    return {
        "version": FORMAT_VERSION,
        "board": {"rows": board.rows, "cols": board.cols, "disks": disks},
        "turn": board.current_player.display_name,
        "history": {"moves": [[col, player.display_name] for col, player in board.moves_made]},
    }


def _require(condition: bool, source: str, message: str) -> None:
    if not condition:
        raise SaveFileError(source, message)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _read_disks(disks: Any, rows: int, cols: int, source: str) -> np.ndarray:
    _require(isinstance(disks, list) and len(disks) == cols, source,
             f"Board must list {cols} columns of disks")

    grid = np.zeros((rows, cols), dtype=np.int8)
    for col, column in enumerate(disks):
        _require(isinstance(column, list) and len(column) == rows, source,
                 f"Column {col + 1} must hold {rows} cells")
        for row, cell in enumerate(column):
            if cell is None:
                continue
            try:
                grid[row, col] = Player.from_name(cell).value
            except ValueError as e:
                raise SaveFileError(source, f"Unknown disk {cell!r} in column {col + 1}") from e
    return grid


def _read_moves(history: Any, source: str) -> List[List[Any]]:
    _require(isinstance(history, dict) and isinstance(history.get("moves"), list), source,
             "Save file has no move history")
    moves = history["moves"]
    for index, move in enumerate(moves):
        _require(isinstance(move, list) and len(move) == 2 and _is_int(move[0]), source,
                 f"Move {index + 1} in the history is malformed")
    return moves


def game_from_dict(data: Any, source: str = "<data>") -> ConnectFourGame:
    """
    Rebuild a game from a saved-game dictionary.

    The move history is replayed on an empty board and must reproduce the
    saved disks exactly, which also guarantees the gravity rule, alternating
    turns and a consistent outcome.

    Args:
        data: Parsed JSON from a save file
        source: Where the data came from, used in error messages

    Returns:
        The restored game

    Raises:
        SaveFileError: If the data does not describe a valid game
    """
    _require(isinstance(data, dict), source, "Save file does not hold a game")
    version = data.get("version", FORMAT_VERSION)
    _require(version == FORMAT_VERSION, source, f"Unsupported save file version {version!r}")

    board_data = data.get("board")
    _require(isinstance(board_data, dict), source, "Save file has no board")
    rows, cols = board_data.get("rows"), board_data.get("cols")
    _require(_is_int(rows) and _is_int(cols), source, "Board size is missing")

    try:
        board = Board(rows, cols)
    except BoardSizeError as e:
        raise SaveFileError(source, str(e)) from e

    grid = _read_disks(board_data.get("disks"), rows, cols, source)
    _require(not has_floating_pieces(grid), source, "Board has disks floating above empty cells")

    for index, (column, name) in enumerate(_read_moves(data.get("history"), source)):
        try:
            player = Player.from_name(name)
        except ValueError as e:
            raise SaveFileError(source, f"Move {index + 1} names unknown player {name!r}") from e
        _require(player == board.current_player, source,
                 f"Move {index + 1} was played out of turn")
        try:
            board.make_move(column)
        except InvalidMoveError as e:
            raise SaveFileError(source, f"Move {index + 1} is not playable: {e}") from e

    _require(np.array_equal(board.grid, grid), source,
             "Move history does not match the disks on the board")

    try:
        turn = Player.from_name(data.get("turn"))
    except ValueError as e:
        raise SaveFileError(source, "Save file does not say whose turn it is") from e
    # A finished game has no next turn, so only a game in progress is checked
    if not board.game_result.is_game_over():
        _require(turn == board.current_player, source,
                 f"Save file says it is {turn.display_name}'s turn, "
                 f"but the history says {board.current_player.display_name}")

    return ConnectFourGame(board=board)


# Save and load
def save_game(game: ConnectFourGame, file_path: PathLike = SAVE_FILE) -> str:
    """
    Save a game to disk.

    Args:
        game: The game to save
        file_path: Path of the save file

    Returns:
        The path the game was written to

    Raises:
        SaveFileError: If the game could not be written
    """
    file_path = os.fspath(file_path)
    safe_write_json(file_path, game_to_dict(game))
    debug.info(f"Saved {game.rows}x{game.cols} game after "
               f"{game.board.move_count} moves to {file_path}", "data")
    return file_path


def load_game(file_path: PathLike = SAVE_FILE) -> ConnectFourGame:
    """
    Load a game from disk.

    Args:
        file_path: Path of the save file

    Returns:
        The restored game

    Raises:
        SaveFileError: If the file is missing, unreadable or invalid
    """
    file_path = os.fspath(file_path)
    game = game_from_dict(safe_read_json(file_path), file_path)
    debug.info(f"Loaded {game.rows}x{game.cols} game with "
               f"{game.board.move_count} moves from {file_path}", "data")
    return game
