"""
connect4play - Connect Four for two players on one machine

This package provides the board and rules of Connect Four on configurable
board sizes, saving and loading of games, and a graphical and a terminal
interface to play them.
"""

# Version number
__version__ = '0.1.0'
