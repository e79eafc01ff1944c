"""
connect4game - Two-player Connect Four

This package provides the game engine (board, drop resolution, win detection)
together with thin presentation layers: a terminal interface and a Gymnasium
environment.
"""

# Version number
__version__ = '0.1.0'
