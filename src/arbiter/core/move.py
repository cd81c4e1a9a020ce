"""Move and destination value objects."""

from __future__ import annotations

from dataclasses import dataclass

from arbiter.core.enums import MoveFlag, PieceType
from arbiter.core.types import Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True, order=True)
class Destination:
    """A square a selected piece may move to.

    ``capture`` marks destinations that take an enemy piece (en passant
    included).  It only affects presentation; quiet and capture
    destinations are equally legal.
    """

    square: Square
    capture: bool = False

    def __str__(self) -> str:
        return f"x{self.square}" if self.capture else str(self.square)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of an applied move."""

    origin: Square
    destination: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.origin}{self.destination}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def is_capture(self) -> bool:
        return self.flag in (MoveFlag.CAPTURE, MoveFlag.EN_PASSANT) or (
            self.flag == MoveFlag.PROMOTION
            and self.origin.file != self.destination.file
        )

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)
