"""FEN piece-placement codec (the first FEN field)."""

from __future__ import annotations

from arbiter.core.board import Board
from arbiter.core.errors import MalformedFen
from arbiter.core.piece import Piece
from arbiter.core.types import Square


def decode_fen_placement(text: str) -> Board:
    """Parse the placement field, e.g. ``rnbqkbnr/pppppppp/8/...``.

    Ranks are listed from the eighth down to the first.  Digits 1-8 are
    runs of empty squares, letters are pieces (uppercase = white).
    """
    ranks = text.split("/")
    if len(ranks) != 8:
        raise MalformedFen(
            f"Invalid FEN placement (found {len(ranks)} ranks): {text!r}", text
        )

    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in "12345678":
                file += int(ch)
            elif Piece.is_piece_char(ch):
                if file >= 8:
                    raise MalformedFen(f"Invalid FEN rank width: {text!r}", text)
                board[Square(file, rank)] = Piece.from_char(ch)
                file += 1
            else:
                raise MalformedFen(
                    f"Unexpected character {ch!r} in FEN placement: {text!r}", text
                )
            if file > 8:
                raise MalformedFen(f"Invalid FEN rank width: {text!r}", text)
        if file != 8:
            raise MalformedFen(f"Invalid FEN rank width: {text!r}", text)
    return board


def encode_fen_placement(board: Board) -> str:
    """Serialise *board* to the placement field, run-length encoding blanks."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[Square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)
