"""
cli.py - Command-line launcher and terminal interface for Connect Four

With no command the graphical game starts. The "play" command runs the same
game in the terminal and "show" prints the position stored in a save file.
"""

import argparse
import sys
from typing import Callable, List, Optional

from connect4play.data.save_manager import load_game
from connect4play.debug import DebugLevel, debug
from connect4play.errors import BoardSizeError, SaveFileError
from connect4play.game.rules import BoardSize
from connect4play.interfaces.session import GameSession
from connect4play.utils import DEFAULT_COLS, DEFAULT_ROWS, SAVE_FILE

HELP_TEXT = ("Commands: 1-{cols} drop a disk, u undo, r restart, n new game, "
             "s save, l load, h help, q quit")


class TextCLI:
    """Terminal front end: one command per line of input."""

    def __init__(self, session: GameSession,
                 input_func: Optional[Callable[[str], str]] = None,
                 output: Optional[Callable[[str], None]] = None):
        """
        Initialize the terminal interface.

        Args:
            session: The session to play in
            input_func: Reads one line of player input (default input)
            output: Writes one block of text (default print)
        """
        self.session = session
        self.input = input_func or input
        self.output = output or print

    def show_board(self) -> None:
        self.output(self.session.game.render())
        self.output(self.session.status_text())

    def handle_command(self, text: str) -> bool:
        """
        Carry out one line of player input.

        Args:
            text: The line as typed

        Returns:
            False once the player has asked to quit, True otherwise
        """
        command = text.strip().lower()
        session = self.session

        if command in ("q", "quit", "exit"):
            self.output("Quitting game.")
            return False

        if command in ("h", "help", "?"):
            self.output(HELP_TEXT.format(cols=session.game.cols))
        elif command == "u":
            session.undo()
            self.output(session.last_message)
            self.show_board()
        elif command == "r":
            session.restart()
            self.output(session.last_message)
            self.show_board()
        elif command == "n":
            session.new_game()
            self.output(session.last_message)
            self.show_board()
        elif command == "s":
            session.save()
            self.output(session.last_message)
        elif command == "l":
            if session.load():
                self.output(session.last_message)
                self.show_board()
            else:
                self.output(session.last_message)
        elif command.isdigit():
            # Columns are shown to players starting at 1
            outcome = session.drop(int(command) - 1)
            if outcome.accepted:
                self.show_board()
                if outcome.game_over:
                    self.output("Game over! Type n for a new game or q to quit.")
            else:
                self.output(f"Invalid move: {outcome.message}")
        elif command:
            self.output(f"Unknown command {text.strip()!r}. "
                        + HELP_TEXT.format(cols=session.game.cols))

        return True

    def play(self) -> None:
        """Play in the terminal until the player quits or input ends."""
        self.output("Starting a new Connect Four game!")
        self.output(HELP_TEXT.format(cols=self.session.game.cols))
        self.session.new_game()
        self.show_board()

        while True:
            player = self.session.game.get_current_player().display_name
            try:
                line = self.input(f"{player} > ")
            except EOFError:
                self.output("")
                return
            if not self.handle_command(line):
                return


def _add_common_options(parser: argparse.ArgumentParser, suppress_defaults: bool = False) -> None:
    """
    Add the options shared by the launcher and every subcommand.

    Subcommand copies suppress their defaults so that an option given before
    the subcommand name is not overwritten.
    """
    def default(value):
        return argparse.SUPPRESS if suppress_defaults else value

    parser.add_argument('--rows', type=int, default=default(DEFAULT_ROWS),
                        help=f'Rows for new games (default {DEFAULT_ROWS})')
    parser.add_argument('--cols', type=int, default=default(DEFAULT_COLS),
                        help=f'Columns for new games (default {DEFAULT_COLS})')
    parser.add_argument('--save-file', default=default(SAVE_FILE),
                        help=f'File used by save and load (default {SAVE_FILE})')
    parser.add_argument('--debug', action='store_true', default=default(False),
                        help='Enable debug logging')
    parser.add_argument('--debug-level', default=default('warning'),
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging level (default warning)')
    parser.add_argument('--log-file', default=default(None),
                        help='Also write log messages to this file')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="connect4", description="Connect Four")
    _add_common_options(parser)

    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    gui_parser = subparsers.add_parser('gui', help='Play in a window (default)')
    play_parser = subparsers.add_parser('play', help='Play in the terminal')
    show_parser = subparsers.add_parser('show', help='Print the game stored in a save file')
    for subparser in (gui_parser, play_parser, show_parser):
        _add_common_options(subparser, suppress_defaults=True)
    show_parser.add_argument('file', nargs='?', default=None,
                             help='Save file to show (default: --save-file)')

    return parser


def configure_debug(args: argparse.Namespace) -> None:
    """Configure logging from the parsed arguments."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)


def show_save_file(path: str, output: Callable[[str], None] = print) -> int:
    """
    Print the board and status stored in a save file.

    Returns:
        Process exit code
    """
    try:
        game = load_game(path)
    except SaveFileError as e:
        output(f"Error: {e}")
        return 1

    output(game.render())
    output(f"{game.rows}x{game.cols}, {game.board.move_count} moves. {game.status_text()}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_debug(args)

    if args.command == 'show':
        return show_save_file(args.file or args.save_file)

    try:
        board_size = BoardSize(args.rows, args.cols)
    except BoardSizeError as e:
        parser.error(str(e))

    session = GameSession(board_size, save_path=args.save_file)

    if args.command == 'play':
        TextCLI(session).play()
        return 0

    try:
        from connect4play.interfaces import gui
    except ImportError as e:
        print(f"Error: the graphical game needs Tkinter ({e}). "
              "Use 'connect4 play' to play in the terminal.", file=sys.stderr)
        return 1

    gui.main(session)
    return 0


if __name__ == "__main__":
    sys.exit(main())
