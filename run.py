#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Examples:
    python run.py play
    python run.py --debug play --no-animate
    python run.py replay --moves 0,1,0,1,0,1,0
    python run.py check --position 0,0,...,1
"""

import sys

from connect4game.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
