"""Castling: rights bookkeeping, legality and rook relocation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from arbiter.core.enums import CastlingRights, Color, MoveFlag, PieceType
from arbiter.core.move import Destination
from arbiter.core.piece import Piece
from arbiter.core.types import (
    A1,
    A8,
    B1,
    B8,
    C1,
    C8,
    D1,
    D8,
    E1,
    E8,
    F1,
    F8,
    G1,
    G8,
    H1,
    H8,
    Square,
)

if TYPE_CHECKING:
    from arbiter.core.move_generator import MoveGenerator


@dataclass(frozen=True, slots=True)
class CastleRoute:
    """Fixed geometry of one castling option."""

    color: Color
    right: CastlingRights
    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square
    must_be_empty: tuple[Square, ...]
    king_path: tuple[Square, ...]  # squares the king crosses or lands on


ROUTES: tuple[CastleRoute, ...] = (
    CastleRoute(
        Color.WHITE, CastlingRights.WHITE_KINGSIDE, E1, G1, H1, F1, (F1, G1), (F1, G1)
    ),
    CastleRoute(
        Color.WHITE,
        CastlingRights.WHITE_QUEENSIDE,
        E1,
        C1,
        A1,
        D1,
        (B1, C1, D1),
        (D1, C1),
    ),
    CastleRoute(
        Color.BLACK, CastlingRights.BLACK_KINGSIDE, E8, G8, H8, F8, (F8, G8), (F8, G8)
    ),
    CastleRoute(
        Color.BLACK,
        CastlingRights.BLACK_QUEENSIDE,
        E8,
        C8,
        A8,
        D8,
        (B8, C8, D8),
        (D8, C8),
    ),
)

# Home squares of kings and rooks → rights lost once the square is touched.
_HOME_RIGHTS: dict[Square, CastlingRights] = {
    E1: CastlingRights.WHITE_BOTH,
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    E8: CastlingRights.BLACK_BOTH,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}


class CastleManager:
    """Castling queries for the position behind a :class:`MoveGenerator`."""

    __slots__ = ("_gen",)

    def __init__(self, generator: MoveGenerator) -> None:
        self._gen = generator

    def routes(self, color: Color) -> list[CastleRoute]:
        """Routes whose right is still held by *color*."""
        rights = self._gen.position.castling
        return [r for r in ROUTES if r.color == color and rights & r.right]

    def destinations(self, king_sq: Square) -> list[Destination]:
        """Castle landing squares available to the king on *king_sq*."""
        board = self._gen.position.board
        king = board[king_sq]
        if king is None or king.kind != PieceType.KING:
            return []

        routes = [r for r in self.routes(king.color) if r.king_from == king_sq]
        if not routes:
            return []

        threatened = self._gen.threatened(king.color)
        if king_sq in threatened:
            return []

        rook = Piece(king.color, PieceType.ROOK)
        found: list[Destination] = []
        for route in routes:
            if board[route.rook_from] != rook:
                continue
            if not all(board.is_empty(sq) for sq in route.must_be_empty):
                continue
            if any(sq in threatened for sq in route.king_path):
                continue
            found.append(Destination(route.king_to))
        return found

    # -- Move application helpers -----------------------------------------------

    @staticmethod
    def is_castle(piece: Piece, origin: Square, destination: Square) -> bool:
        """A king moving more than one file along its rank."""
        return (
            piece.kind == PieceType.KING
            and origin.rank == destination.rank
            and abs(destination.file - origin.file) > 1
        )

    @staticmethod
    def flag_for(origin: Square, destination: Square) -> MoveFlag:
        if destination.file > origin.file:
            return MoveFlag.CASTLE_KINGSIDE
        return MoveFlag.CASTLE_QUEENSIDE

    @staticmethod
    def rook_relocation(origin: Square, destination: Square) -> tuple[Square, Square]:
        """Rook (from, to) for a castle; the rook lands beside the king."""
        rank = origin.rank
        if destination.file > origin.file:
            return Square(7, rank), Square(destination.file - 1, rank)
        return Square(0, rank), Square(destination.file + 1, rank)

    @staticmethod
    def revoke(
        rights: CastlingRights,
        origin: Square,
        destination: Square,
    ) -> CastlingRights:
        """Rights left after a move touching *origin* and *destination*.

        Rights only ever shrink.
        """
        for sq in (origin, destination):
            lost = _HOME_RIGHTS.get(sq)
            if lost is not None:
                rights &= ~lost
        return rights
