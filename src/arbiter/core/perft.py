"""Perft node counting for move-generator verification.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

from __future__ import annotations

from arbiter.core.enums import PieceType
from arbiter.core.move_generator import MoveGenerator
from arbiter.core.piece import PROMOTION_KINDS
from arbiter.core.position import Position
from arbiter.core.shapes import PROMOTION_RANK


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes *depth* plies below *position*.

    Each promotion counts once per promotion piece.  Game-over conditions
    are ignored, as is usual for perft.
    """
    if depth == 0:
        return 1

    nodes = 0
    gen = MoveGenerator(position)
    for origin, destinations in gen.legal_moves().items():
        piece = position.board[origin]
        assert piece is not None
        for dest in destinations:
            promotes = (
                piece.kind == PieceType.PAWN
                and dest.square.rank == PROMOTION_RANK[piece.color]
            )
            if promotes:
                choices: tuple[PieceType | None, ...] = PROMOTION_KINDS
            else:
                choices = (None,)
            for choice in choices:
                if depth == 1:
                    nodes += 1
                    continue
                child = position.copy()
                child.apply_move(origin, dest.square, choice)
                nodes += perft(child, depth - 1)
    return nodes
