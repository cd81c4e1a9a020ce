"""Pseudo-legal and legal move generation + attack detection.

Generation runs in three explicit stages, each available on its own:

1. :meth:`MoveGenerator.raw_rays` — geometry only, first blocker included.
2. :meth:`MoveGenerator.pseudo_legal` — blocking and capture resolved.
3. :meth:`MoveGenerator.legal_destinations` — king safety enforced
   (check, double check, pins, block-or-capture).

Every stage returns a fresh immutable collection; nothing is reused across
calls and the position is never mutated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from arbiter.core.castle import CastleManager
from arbiter.core.enums import Color, PieceType
from arbiter.core.move import Destination
from arbiter.core.rays import raw_ray, resolve_ray
from arbiter.core.shapes import push_steps, shape_for
from arbiter.core.types import Square, square_at, squares_between

if TYPE_CHECKING:
    from arbiter.core.board import Board
    from arbiter.core.position import Position


# -- Board-level primitives --------------------------------------------------


def pseudo_legal_on(
    board: Board,
    origin: Square,
    en_passant: Square | None = None,
) -> frozenset[Destination]:
    """Blocking-resolved destinations of the piece on *origin*.

    *en_passant* is honoured only for pawns; callers pass it for the side
    to move alone.
    """
    piece = board[origin]
    if piece is None:
        return frozenset()

    shape = shape_for(piece)
    steps = push_steps(piece, origin)
    found: set[Destination] = set()
    for direction in shape.directions:
        ray = raw_ray(board, origin, direction, steps)
        prefix = resolve_ray(board, ray, piece.color, can_capture=not shape.quiet_only)
        found.update(prefix.destinations)

    if shape.quiet_only:
        for df, dr in shape.capture_directions:
            target = square_at(origin, df, dr)
            if target is None:
                continue
            occupant = board[target]
            if piece.is_enemy_of(occupant):
                found.add(Destination(target, capture=True))
            elif occupant is None and target == en_passant:
                found.add(Destination(target, capture=True))
    return frozenset(found)


def coverage_on(board: Board, origin: Square) -> frozenset[Square]:
    """Squares the piece on *origin* attacks.

    The first blocker on each ray counts regardless of color, so a
    defended piece is covered.  Pawns cover their capture diagonals only.
    """
    piece = board[origin]
    if piece is None:
        return frozenset()

    shape = shape_for(piece)
    covered: set[Square] = set()
    for direction in shape.capture_directions:
        covered.update(raw_ray(board, origin, direction, shape.max_steps))
    return frozenset(covered)


def threatened_on(board: Board, by_color: Color) -> frozenset[Square]:
    """Union of the coverage of every *by_color* piece."""
    covered: set[Square] = set()
    for sq in board.all_pieces(by_color):
        covered |= coverage_on(board, sq)
    return frozenset(covered)


def is_attacked_on(board: Board, sq: Square, by_color: Color) -> bool:
    return any(
        sq in coverage_on(board, origin) for origin in board.all_pieces(by_color)
    )


def en_passant_victim(origin: Square, destination: Square, mover: Color) -> Square:
    """Square of the pawn removed by an en-passant capture."""
    return Square(destination.file, destination.rank - mover.forward)


class MoveGenerator:
    """Generates destinations for the side to move of a :class:`Position`.

    Read-only: every query may be repeated and interleaved freely.
    """

    __slots__ = ("_pos", "_board", "_castles")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board
        self._castles = CastleManager(self)

    @property
    def position(self) -> Position:
        return self._pos

    # -- Stage 1 / 2 ----------------------------------------------------------

    def raw_rays(self, origin: Square) -> tuple[tuple[Square, ...], ...]:
        """Geometric rays of the piece on *origin* (move directions only)."""
        piece = self._board[origin]
        if piece is None:
            return ()
        shape = shape_for(piece)
        steps = push_steps(piece, origin)
        return tuple(raw_ray(self._board, origin, d, steps) for d in shape.directions)

    def pseudo_legal(self, origin: Square) -> frozenset[Destination]:
        """Destinations ignoring king safety."""
        piece = self._board[origin]
        if piece is None:
            return frozenset()
        en_passant = self._pos.en_passant if piece.color == self._pos.active else None
        return pseudo_legal_on(self._board, origin, en_passant)

    def coverage(self, origin: Square) -> frozenset[Square]:
        return coverage_on(self._board, origin)

    # -- Attack detection ------------------------------------------------------

    def attackers(self, color: Color) -> tuple[Square, ...]:
        """Enemy pieces whose pseudo-legal destinations include *color*'s king."""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return ()
        found: list[Square] = []
        for sq in self._board.all_pieces(color.opposite):
            if any(d.square == king_sq for d in pseudo_legal_on(self._board, sq)):
                found.append(sq)
        return tuple(found)

    def threatened(self, color: Color) -> frozenset[Square]:
        """Squares covered by *color*'s opponent, seen through *color*'s king.

        The king is lifted before coverage is computed so squares behind it
        on a checking line stay threatened.
        """
        board = self._board
        king_sq = board.king_square(color)
        if king_sq is not None:
            board = board.copy()
            board[king_sq] = None
        return threatened_on(board, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return is_attacked_on(self._board, sq, by_color)

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked?  ``False`` when it has no king."""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return king_sq in self.threatened(color)

    # -- Stage 3 ----------------------------------------------------------------

    def legal_destinations(self, origin: Square) -> list[Destination]:
        """Sorted legal destinations of the piece on *origin*."""
        piece = self._board[origin]
        if piece is None:
            return []

        color = piece.color
        candidates = self.pseudo_legal(origin)

        if piece.kind == PieceType.KING:
            threatened = self.threatened(color)
            legal = {d for d in candidates if d.square not in threatened}
            legal.update(self._castles.destinations(origin))
            return sorted(legal)

        attackers = self.attackers(color)
        if len(attackers) > 1:
            return []
        if len(attackers) == 1:
            candidates = self._resolving_check(origin, candidates, attackers[0])

        return sorted(d for d in candidates if self._keeps_king_safe(origin, d.square))

    def legal_moves(self) -> dict[Square, list[Destination]]:
        """Legal destinations per origin for the side to move (empty omitted)."""
        moves: dict[Square, list[Destination]] = {}
        for sq in self._board.all_pieces(self._pos.active):
            destinations = self.legal_destinations(sq)
            if destinations:
                moves[sq] = destinations
        return moves

    def legal_move_count(self) -> int:
        return sum(len(d) for d in self.legal_moves().values())

    def has_legal_move(self) -> bool:
        active = self._pos.active
        return any(self.legal_destinations(sq) for sq in self._board.all_pieces(active))

    # -- Internal helpers ------------------------------------------------------

    def _is_en_passant(self, origin: Square, destination: Square) -> bool:
        piece = self._board[origin]
        return (
            piece is not None
            and piece.kind == PieceType.PAWN
            and destination == self._pos.en_passant
            and origin.file != destination.file
            and self._board.is_empty(destination)
        )

    def _resolving_check(
        self,
        origin: Square,
        candidates: frozenset[Destination],
        attacker: Square,
    ) -> frozenset[Destination]:
        """Candidates that capture the single checker or block its line."""
        piece = self._board[origin]
        checker = self._board[attacker]
        assert piece is not None and checker is not None

        allowed = {attacker}
        if shape_for(checker).slides:
            king_sq = self._board.king_square(piece.color)
            assert king_sq is not None
            allowed.update(squares_between(attacker, king_sq))

        kept: set[Destination] = set()
        for d in candidates:
            if d.square in allowed:
                kept.add(d)
            elif (
                self._is_en_passant(origin, d.square)
                and en_passant_victim(origin, d.square, piece.color) == attacker
            ):
                kept.add(d)
        return frozenset(kept)

    def _keeps_king_safe(self, origin: Square, destination: Square) -> bool:
        """Whether the mover's king is unattacked once the move is made."""
        piece = self._board[origin]
        assert piece is not None
        board = self._board.copy()
        if self._is_en_passant(origin, destination):
            board[en_passant_victim(origin, destination, piece.color)] = None
        board[origin] = None
        board[destination] = piece

        king_sq = board.king_square(piece.color)
        if king_sq is None:
            return True
        return not is_attacked_on(board, king_sq, piece.color.opposite)
