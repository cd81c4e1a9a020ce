"""Chess rules arbiter: legal moves, special moves, game-state transitions."""

__version__ = "0.1.0"
