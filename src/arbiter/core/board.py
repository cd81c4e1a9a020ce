"""Board - piece placement on an 8x8 grid addressed by :class:`Square`."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from arbiter.core.enums import Color, PieceType
from arbiter.core.piece import Piece
from arbiter.core.types import Square, all_squares

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid; each cell holds a :class:`Piece` or ``None``."""

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        # [rank][file], rank 0 is the first rank.
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq.rank][sq.file]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._grid[sq.rank][sq.file] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq.rank][sq.file] is None

    def __iter__(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares with their pieces, in algebraic order."""
        for sq in all_squares():
            piece = self[sq]
            if piece is not None:
                yield sq, piece

    # -- Query helpers ------------------------------------------------------

    def find_pieces(self, predicate: Callable[[Piece], bool]) -> list[Square]:
        """Squares whose piece satisfies *predicate*, sorted by name."""
        return [sq for sq, piece in self if predicate(piece)]

    def pieces(self, color: Color, kind: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *kind*."""
        return self.find_pieces(lambda p: p.color == color and p.kind == kind)

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return self.find_pieces(lambda p: p.color == color)

    def piece_count(self) -> int:
        return sum(1 for _ in self)

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` when the board has none.

        Classification assumes at most one king per color; with several,
        the last one in algebraic order is returned.
        """
        kings = self.pieces(color, PieceType.KING)
        return kings[-1] if kings else None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, kind in enumerate(_BACK_RANK):
            b[Square(f, 0)] = Piece(Color.WHITE, kind)
            b[Square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(f, 7)] = Piece(Color.BLACK, kind)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self._grid[rank][file]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
