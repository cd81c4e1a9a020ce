"""Game session layer — one position per game, history, phase, events.

Quick start::

    from arbiter.game import GameSession

    session = GameSession()
    session.legal_destinations("e2")     # [e3, e4]
    session.play("e2", "e4")
    session.status().check
"""

from arbiter.game.interfaces import GameEndReason, GameEvents, GamePhase
from arbiter.game.session import GameSession, MoveRecord
from arbiter.game.settings import SessionSettings

__all__ = [
    "GameEndReason",
    "GameEvents",
    "GamePhase",
    "GameSession",
    "MoveRecord",
    "SessionSettings",
]
