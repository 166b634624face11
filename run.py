#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

    python run.py              # play in a window
    python run.py play         # play in the terminal
    python run.py show save.json
"""

import os
import sys

# Add the project root to Python path so the package imports without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connect4play.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
