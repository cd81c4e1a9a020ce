"""Exceptions raised by the rules engine."""

from __future__ import annotations


class ArbiterError(Exception):
    """Base class for every error raised by :mod:`arbiter`."""


class MalformedFen(ArbiterError, ValueError):
    """FEN text has the wrong shape or an unrecognised character."""

    def __init__(self, message: str, fen: str = "") -> None:
        super().__init__(message)
        self.fen = fen


class IllegalMove(ArbiterError, ValueError):
    """The requested move is not in the legal set for the selected piece."""


class PromotionRequired(IllegalMove):
    """A pawn reaches the last rank but no promotion piece was chosen."""
