"""Ray walking and blocking/capture resolution.

A *raw ray* is the geometric walk from an origin along one direction,
stopping at the board edge, after ``max_steps`` squares, or right after the
first occupied square.  Resolving a raw ray yields the *reachable prefix*:
every empty square before the blocker, plus the blocker itself when it is
an enemy piece that may be captured.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from arbiter.core.enums import Color
from arbiter.core.move import Destination
from arbiter.core.types import Square, square_at

if TYPE_CHECKING:
    from arbiter.core.board import Board
    from arbiter.core.shapes import Direction


@dataclass(frozen=True, slots=True)
class ReachablePrefix:
    """Squares reachable along one ray after blocking is applied."""

    quiet: tuple[Square, ...] = ()
    capture: Square | None = None

    @property
    def destinations(self) -> tuple[Destination, ...]:
        found = tuple(Destination(sq) for sq in self.quiet)
        if self.capture is not None:
            found += (Destination(self.capture, capture=True),)
        return found

    def __bool__(self) -> bool:
        return bool(self.quiet) or self.capture is not None


_NOTHING = ReachablePrefix()


def raw_ray(
    board: Board,
    origin: Square,
    direction: Direction,
    max_steps: int,
) -> tuple[Square, ...]:
    """Walk from *origin* along *direction*, including the first blocker."""
    df, dr = direction
    squares: list[Square] = []
    current: Square | None = origin
    for _ in range(max_steps):
        current = square_at(current, df, dr)
        if current is None:
            break
        squares.append(current)
        if not board.is_empty(current):
            break
    return tuple(squares)


def resolve_ray(
    board: Board,
    ray: tuple[Square, ...],
    mover: Color,
    *,
    can_capture: bool = True,
) -> ReachablePrefix:
    """Reduce a raw ray to the squares a *mover*-colored piece can reach."""
    if not ray:
        return _NOTHING

    last = ray[-1]
    occupant = board[last]
    if occupant is None:
        return ReachablePrefix(ray)
    if can_capture and occupant.color != mover:
        return ReachablePrefix(ray[:-1], last)
    return ReachablePrefix(ray[:-1])
