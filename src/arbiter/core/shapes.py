"""Piece movement shapes.

Every piece kind is one row in :data:`SHAPES`: a fixed set of direction
vectors, the maximum number of steps along each, and whether the piece
slides.  The move generator consumes this table through a single
ray-resolution routine; there is no per-kind dispatch.

Pawn rows are written from white's point of view and are mirrored for
black by :func:`shape_for`.
"""

from __future__ import annotations

from dataclasses import dataclass

from arbiter.core.enums import Color, PieceType
from arbiter.core.piece import Piece
from arbiter.core.types import Square

Direction = tuple[int, int]  # (file_offset, rank_offset)

KNIGHT_OFFSETS: tuple[Direction, ...] = (
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
    (-2, 1),
    (-1, 2),
)

BISHOP_DIRS: tuple[Direction, ...] = ((1, 1), (1, -1), (-1, -1), (-1, 1))
ROOK_DIRS: tuple[Direction, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
QUEEN_DIRS: tuple[Direction, ...] = ROOK_DIRS + BISHOP_DIRS
KING_OFFSETS: tuple[Direction, ...] = QUEEN_DIRS

PAWN_PUSH: tuple[Direction, ...] = ((0, 1),)
PAWN_CAPTURES: tuple[Direction, ...] = ((-1, 1), (1, 1))

PAWN_HOME_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
PROMOTION_RANK: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}
BOARD_SPAN = 7


@dataclass(frozen=True, slots=True)
class MovementShape:
    """Direction table for one piece kind.

    ``captures`` lists directions that only ever capture (pawn diagonals);
    for every other kind the move and capture directions are the same.
    """

    directions: tuple[Direction, ...]
    max_steps: int
    slides: bool
    captures: tuple[Direction, ...] | None = None

    @property
    def capture_directions(self) -> tuple[Direction, ...]:
        return self.directions if self.captures is None else self.captures

    @property
    def quiet_only(self) -> bool:
        """Whether the plain directions never capture (pawn pushes)."""
        return self.captures is not None

    def mirrored(self) -> MovementShape:
        """Same shape with every rank offset negated."""
        return MovementShape(
            directions=tuple((df, -dr) for df, dr in self.directions),
            max_steps=self.max_steps,
            slides=self.slides,
            captures=(
                None
                if self.captures is None
                else tuple((df, -dr) for df, dr in self.captures)
            ),
        )


SHAPES: dict[PieceType, MovementShape] = {
    PieceType.PAWN: MovementShape(PAWN_PUSH, 1, False, PAWN_CAPTURES),
    PieceType.KNIGHT: MovementShape(KNIGHT_OFFSETS, 1, False),
    PieceType.BISHOP: MovementShape(BISHOP_DIRS, BOARD_SPAN, True),
    PieceType.ROOK: MovementShape(ROOK_DIRS, BOARD_SPAN, True),
    PieceType.QUEEN: MovementShape(QUEEN_DIRS, BOARD_SPAN, True),
    PieceType.KING: MovementShape(KING_OFFSETS, 1, False),
}

_BLACK_PAWN_SHAPE = SHAPES[PieceType.PAWN].mirrored()


def shape_for(piece: Piece) -> MovementShape:
    """Movement shape of *piece*, oriented for its color."""
    if piece.kind == PieceType.PAWN and piece.color == Color.BLACK:
        return _BLACK_PAWN_SHAPE
    return SHAPES[piece.kind]


def push_steps(piece: Piece, origin: Square) -> int:
    """How far *piece* may travel along its plain directions from *origin*.

    Pawns get two steps from their home rank; every other kind uses the
    table value.
    """
    shape = shape_for(piece)
    if piece.kind == PieceType.PAWN and origin.rank == PAWN_HOME_RANK[piece.color]:
        return 2
    return shape.max_steps


def slides(kind: PieceType) -> bool:
    return SHAPES[kind].slides
