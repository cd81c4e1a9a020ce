"""GameSession — one game: a position, its history and lifecycle.

Merges what a play loop needs from the core: legality checks before any
mutation, move application, re-classification and notifications.  The
session performs no I/O; prompting and rendering belong to the caller.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from arbiter.core.enums import Color, GameResult, PieceType
from arbiter.core.errors import IllegalMove, PromotionRequired
from arbiter.core.fen import position_from_fen, position_to_fen
from arbiter.core.move import Destination, Move
from arbiter.core.move_generator import MoveGenerator
from arbiter.core.piece import promotion_kind
from arbiter.core.position import Position
from arbiter.core.rules import PositionStatus, Rules
from arbiter.core.shapes import PROMOTION_RANK
from arbiter.core.types import Square, parse_square
from arbiter.game.interfaces import GameEndReason, GameEvents, GamePhase
from arbiter.game.settings import SessionSettings

_LOGGER = logging.getLogger(__name__)

SquareLike = Square | str


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    fen_after: str
    was_check: bool = False
    was_capture: bool = False


class GameSession:
    """Owns one :class:`Position` and serialises every change to it.

    Queries may be called any number of times.  :meth:`play`, :meth:`load`
    and :meth:`reset` take the session lock, so at most one of them runs at
    a time.
    """

    def __init__(
        self,
        settings: SessionSettings | None = None,
        fen: str | None = None,
    ) -> None:
        self.settings = settings if settings is not None else SessionSettings()
        self.events = GameEvents()
        self._lock = threading.Lock()
        self._position = position_from_fen(fen or self.settings.start_fen)
        self.move_history: list[MoveRecord] = []
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self._classify()

    # ── Lifecycle ────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Start over from the configured start position."""
        self.load(self.settings.start_fen)

    def load(self, fen: str) -> None:
        """Replace the whole game with the position described by *fen*.

        A malformed FEN raises before anything changes.
        """
        position = position_from_fen(fen)
        with self._lock:
            self._install(position)
        _LOGGER.debug("Loaded position %s", fen)

    def _install(self, position: Position) -> None:
        self._position = position
        self.move_history = []
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self._classify()

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def side_to_move(self) -> Color:
        return self._position.active

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played in this session."""
        return len(self.move_history)

    def fen(self) -> str:
        return position_to_fen(self._position)

    def status(self) -> PositionStatus:
        return Rules.status(self._position, self.settings.halfmove_draw_limit)

    def legal_destinations(self, origin: SquareLike) -> list[Destination]:
        """Legal destinations of the side-to-move piece on *origin*."""
        sq = _as_square(origin)
        piece = self._position.board[sq]
        if piece is None or piece.color != self._position.active:
            return []
        return MoveGenerator(self._position).legal_destinations(sq)

    def legal_moves(self) -> dict[Square, list[Destination]]:
        return MoveGenerator(self._position).legal_moves()

    def needs_promotion(self, origin: SquareLike, destination: SquareLike) -> bool:
        """Whether moving *origin* → *destination* requires a promotion choice."""
        piece = self._position.board[_as_square(origin)]
        return (
            piece is not None
            and piece.kind == PieceType.PAWN
            and _as_square(destination).rank == PROMOTION_RANK[piece.color]
        )

    # ── Move application ─────────────────────────────────────────────────

    def play(
        self,
        origin: SquareLike,
        destination: SquareLike,
        promotion: PieceType | str | None = None,
    ) -> MoveRecord:
        """Validate and apply a move; return its history record.

        Raises :class:`IllegalMove` (or :class:`PromotionRequired`) without
        touching the game when the move is rejected.
        """
        with self._lock:
            try:
                record = self._play_locked(origin, destination, promotion)
            except IllegalMove as exc:
                _LOGGER.warning("Rejected move %s-%s: %s", origin, destination, exc)
                raise

        for cb in self.events.on_move:
            cb(record, self)
        if self.is_game_over:
            _LOGGER.info("Game over: %s (%s)", self.result.name, self.end_reason.name)
            for on_over in self.events.on_game_over:
                on_over(self.result, self.end_reason)
        return record

    def _play_locked(
        self,
        origin: SquareLike,
        destination: SquareLike,
        promotion: PieceType | str | None,
    ) -> MoveRecord:
        if self.is_game_over:
            raise IllegalMove("The game is over")

        from_sq = _as_square(origin)
        to_sq = _as_square(destination)
        position = self._position

        piece = position.board[from_sq]
        if piece is None:
            raise IllegalMove(f"No piece on {from_sq}")
        if piece.color != position.active:
            raise IllegalMove(
                f"It is {position.active}'s turn, {from_sq} holds {piece}"
            )

        legal = MoveGenerator(position).legal_destinations(from_sq)
        if not any(d.square == to_sq for d in legal):
            raise IllegalMove(f"{from_sq}-{to_sq} is not a legal move")

        if self.needs_promotion(from_sq, to_sq):
            if promotion is None:
                raise PromotionRequired(
                    f"Choose a promotion piece for {from_sq}-{to_sq}"
                )
            try:
                promotion = promotion_kind(promotion)
            except ValueError as exc:
                raise IllegalMove(str(exc)) from None

        move = position.apply_move(from_sq, to_sq, promotion)
        status = self._classify()
        record = MoveRecord(
            move=move,
            fen_after=self.fen(),
            was_check=status.check,
            was_capture=move.is_capture,
        )
        self.move_history.append(record)
        return record

    # ── Internal ─────────────────────────────────────────────────────────

    def _classify(self) -> PositionStatus:
        status = self.status()
        if status.checkmate:
            reason = GameEndReason.CHECKMATE
        elif status.stalemate:
            reason = GameEndReason.STALEMATE
        elif Rules.is_halfmove_limit(self._position, self.settings.halfmove_draw_limit):
            reason = GameEndReason.HALFMOVE_CLOCK
        elif Rules.is_bare_kings(self._position):
            reason = GameEndReason.BARE_KINGS
        else:
            return status

        self.end_reason = reason
        self.result = Rules.game_result(
            self._position, self.settings.halfmove_draw_limit
        )
        self.phase = GamePhase.GAME_OVER
        return status


def _as_square(value: SquareLike) -> Square:
    if isinstance(value, Square):
        return value
    try:
        return parse_square(value)
    except ValueError as exc:
        raise IllegalMove(str(exc)) from None
