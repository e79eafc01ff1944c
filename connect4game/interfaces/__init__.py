"""
connect4game.interfaces - Presentation layers for Connect Four

Collaborators that drive the GameEngine: a terminal CLI and a Gymnasium
environment.
"""

# Don't import anything here to avoid circular imports
__all__ = []
