"""Session-level enums and observer definitions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from arbiter.core.enums import GameResult

if TYPE_CHECKING:
    from arbiter.game.session import GameSession, MoveRecord


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a session."""

    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a game finished."""

    NONE = 0
    CHECKMATE = auto()
    STALEMATE = auto()
    HALFMOVE_CLOCK = auto()
    BARE_KINGS = auto()


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[["MoveRecord", "GameSession"], None]
GameOverCallback = Callable[[GameResult, GameEndReason], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
