"""FEN parsing and serialization for full positions."""

from __future__ import annotations

from arbiter.core.enums import CastlingRights, Color
from arbiter.core.errors import MalformedFen
from arbiter.core.placement import decode_fen_placement, encode_fen_placement
from arbiter.core.position import Position
from arbiter.core.state import GameState
from arbiter.core.types import Square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_RIGHT_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def position_from_fen(fen: str) -> Position:
    """Parse a six-field FEN string into a :class:`Position`."""
    parts = fen.split()
    if len(parts) != 6:
        raise MalformedFen(
            f"Invalid FEN (need 6 fields, found {len(parts)}): {fen!r}", fen
        )

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    # 1. Piece placement
    board = decode_fen_placement(placement)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise MalformedFen(f"Invalid FEN side-to-move field: {side_part!r}", fen)

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _RIGHT_CHARS.get(ch)
            if right is None or ch in seen:
                raise MalformedFen(
                    f"Invalid FEN castling field: {castling_part!r}", fen
                )
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise MalformedFen(
                f"Invalid FEN en-passant square: {ep_part!r}", fen
            ) from None

    # 5–6. Clocks
    halfmove = _parse_counter(half_part, "halfmove clock", fen, minimum=0)
    fullmove = _parse_counter(full_part, "fullmove number", fen, minimum=1)

    state = GameState(
        active=side,
        castling=castling,
        en_passant=ep,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
    )
    return Position(board, state)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    board_str = encode_fen_placement(pos.board)

    castling_str = "".join(
        ch for ch, right in _RIGHT_CHARS.items() if pos.castling & right
    )
    if not castling_str:
        castling_str = "-"

    ep_str = pos.en_passant.name if pos.en_passant is not None else "-"

    return (
        f"{board_str} {pos.active.fen} {castling_str} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )


def _parse_counter(text: str, label: str, fen: str, *, minimum: int) -> int:
    if not (text.isascii() and text.isdigit()):
        raise MalformedFen(f"Invalid FEN {label}: {text!r}", fen)
    value = int(text)
    if value < minimum:
        raise MalformedFen(f"Invalid FEN {label}: {text!r}", fen)
    return value
