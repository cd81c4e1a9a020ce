"""Session settings."""

from __future__ import annotations

from dataclasses import dataclass

from arbiter.core.fen import STARTING_FEN
from arbiter.core.rules import HALFMOVE_DRAW_LIMIT


@dataclass
class SessionSettings:
    """All configurable settings of a :class:`~arbiter.game.GameSession`."""

    # Position used by ``reset()`` and when no FEN is given
    start_fen: str = STARTING_FEN

    # Draw once the halfmove clock reaches this many plies
    halfmove_draw_limit: int = HALFMOVE_DRAW_LIMIT
