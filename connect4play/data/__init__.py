"""
connect4play.data - Persistence for Connect Four games

This package handles writing games to save files and reading them back.
"""

from connect4play.data.save_manager import load_game, save_game

__all__ = ['load_game', 'save_game']
