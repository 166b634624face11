"""
connect4play.interfaces - User interfaces for Connect Four

This package contains the session shared by the front ends, the Tkinter
window and the command-line interface.
"""

# Don't import anything here: the GUI module needs Tkinter, which not every
# Python install ships
__all__ = []
