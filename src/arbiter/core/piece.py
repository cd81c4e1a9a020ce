"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from arbiter.core.enums import Color, PieceType

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

PROMOTION_KINDS: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    Promotion never mutates a piece; the pawn is replaced by a new one.
    """

    color: Color
    kind: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.kind)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, kind)

    @staticmethod
    def is_piece_char(char: str) -> bool:
        return char in _CHAR_MAP

    # ── Relations ────────────────────────────────────────────────────────

    def is_enemy_of(self, other: Piece | None) -> bool:
        return other is not None and other.color != self.color

    def promoted(self, kind: PieceType) -> Piece:
        """Replacement piece of the same color."""
        if kind not in PROMOTION_KINDS:
            raise ValueError(f"Cannot promote to {kind.name}")
        return Piece(self.color, kind)


def promotion_kind(choice: str | PieceType) -> PieceType:
    """Resolve a promotion choice given as a kind or a letter (q, r, b, n)."""
    if isinstance(choice, PieceType):
        kind = choice
    else:
        try:
            _, kind = _CHAR_MAP[choice.lower()]
        except KeyError:
            raise ValueError(f"Invalid promotion choice: {choice!r}") from None
    if kind not in PROMOTION_KINDS:
        raise ValueError(f"Invalid promotion choice: {choice!r}")
    return kind
