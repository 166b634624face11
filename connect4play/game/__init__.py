"""
connect4play.game - Core game mechanics for Connect Four

This package contains the board representation, the rules and the game
state management. Nothing in here knows about any user interface.
"""

from connect4play.game.board import Board
from connect4play.game.rules import BoardSize, ConnectFourGame

__all__ = ['Board', 'BoardSize', 'ConnectFourGame']
