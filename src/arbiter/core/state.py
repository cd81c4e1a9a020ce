"""GameState — FEN metadata that travels alongside the board."""

from __future__ import annotations

from dataclasses import dataclass, field

from arbiter.core.enums import CastlingRights, Color
from arbiter.core.types import Square


@dataclass(slots=True)
class GameState:
    """Active color, castling rights, en-passant target, clocks and history.

    ``history`` holds one placement-only FEN snapshot per applied move.  It
    is kept for a future repetition rule and is not consulted by the
    classifier.
    """

    active: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    history: list[str] = field(default_factory=list)

    def copy(self) -> GameState:
        return GameState(
            active=self.active,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
            history=self.history.copy(),
        )
