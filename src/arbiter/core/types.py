"""Square value type and coordinate helpers.

Files and ranks are zero-based: ``Square(0, 0)`` is a1 and ``Square(7, 7)``
is h8.  Squares order by file, then rank, which is the same order as
sorting by algebraic name.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

_FILES = "abcdefgh"
_RANKS = "12345678"


def on_board(file: int, rank: int) -> bool:
    """Whether (*file*, *rank*) lies inside the 8x8 board."""
    return 0 <= file < 8 and 0 <= rank < 8


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """Immutable board coordinate."""

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not on_board(self.file, self.rank):
            raise ValueError(f"Square out of range: ({self.file}, {self.rank})")

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``Square(4, 3).name == 'e4'``."""
        return _FILES[self.file] + _RANKS[self.rank]

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Square({self.name})"


def square_at(origin: Square, file_offset: int, rank_offset: int) -> Square | None:
    """Square reached from *origin* by the given offsets, or ``None`` off-board."""
    file = origin.file + file_offset
    rank = origin.rank + rank_offset
    if not on_board(file, rank):
        return None
    return Square(file, rank)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(4, 3)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(_FILES.index(name[0]), _RANKS.index(name[1]))


def square_name(sq: Square) -> str:
    return sq.name


def all_squares() -> Iterator[Square]:
    """Every square, a1 through h8 in algebraic order."""
    for file in range(8):
        for rank in range(8):
            yield Square(file, rank)


def squares_between(start: Square, end: Square) -> tuple[Square, ...]:
    """Squares strictly between two aligned squares.

    Returns an empty tuple when the squares do not share a rank, file or
    diagonal, or when they are adjacent.
    """
    df = end.file - start.file
    dr = end.rank - start.rank
    if df == 0 and dr == 0:
        return ()
    if df != 0 and dr != 0 and abs(df) != abs(dr):
        return ()

    step_f = (df > 0) - (df < 0)
    step_r = (dr > 0) - (dr < 0)
    between: list[Square] = []
    file = start.file + step_f
    rank = start.rank + step_r
    while (file, rank) != (end.file, end.rank):
        between.append(Square(file, rank))
        file += step_f
        rank += step_r
    return tuple(between)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Square(f, 0) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(f, 1) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(f, 2) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(f, 3) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(f, 4) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(f, 5) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(f, 6) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Square(f, 7) for f in range(8))
