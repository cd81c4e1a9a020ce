"""High-level chess rules: check, checkmate, stalemate, draw detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from arbiter.core.enums import Color, GameResult, PieceType
from arbiter.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from arbiter.core.position import Position

HALFMOVE_DRAW_LIMIT = 50


@dataclass(frozen=True, slots=True)
class PositionStatus:
    """Classification snapshot of one position."""

    check: bool
    checkmate: bool
    stalemate: bool
    draw: bool

    @property
    def game_over(self) -> bool:
        return self.checkmate or self.stalemate or self.draw


class Rules:
    """Static, read-only classifier that operates on a :class:`Position`."""

    # Product policy:
    # - Draw once the halfmove clock reaches the limit (default 50 plies).
    # - Material draw only for bare kings.
    # - No repetition draws; position history is recorded but not consulted.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.active)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        gen = MoveGenerator(position)
        if not gen.is_in_check(position.active):
            return False
        return not gen.has_legal_move()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        gen = MoveGenerator(position)
        if gen.is_in_check(position.active):
            return False
        return not gen.has_legal_move()

    @staticmethod
    def is_bare_kings(position: Position) -> bool:
        """Exactly two pieces remain and both are kings."""
        occupied = list(position.board)
        return len(occupied) == 2 and all(p.kind == PieceType.KING for _, p in occupied)

    @staticmethod
    def is_halfmove_limit(
        position: Position, limit: int = HALFMOVE_DRAW_LIMIT
    ) -> bool:
        return position.halfmove_clock >= limit

    @staticmethod
    def is_draw(
        position: Position, halfmove_limit: int = HALFMOVE_DRAW_LIMIT
    ) -> bool:
        return Rules.is_halfmove_limit(position, halfmove_limit) or Rules.is_bare_kings(
            position
        )

    @staticmethod
    def is_game_over(
        position: Position, halfmove_limit: int = HALFMOVE_DRAW_LIMIT
    ) -> bool:
        return Rules.status(position, halfmove_limit).game_over

    @staticmethod
    def status(
        position: Position, halfmove_limit: int = HALFMOVE_DRAW_LIMIT
    ) -> PositionStatus:
        """Classify *position* with a single pass of move generation."""
        gen = MoveGenerator(position)
        check = gen.is_in_check(position.active)
        stuck = not gen.has_legal_move()
        return PositionStatus(
            check=check,
            checkmate=check and stuck,
            stalemate=not check and stuck,
            draw=Rules.is_draw(position, halfmove_limit),
        )

    @staticmethod
    def game_result(
        position: Position, halfmove_limit: int = HALFMOVE_DRAW_LIMIT
    ) -> GameResult:
        """Determine the current game result; checkmate outranks draws."""
        status = Rules.status(position, halfmove_limit)
        if status.checkmate:
            return (
                GameResult.BLACK_WINS
                if position.active == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if status.stalemate or status.draw:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
