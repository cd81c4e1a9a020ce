"""Core rules layer — pure chess logic with zero external dependencies.

Quick start::

    from arbiter.core import STARTING_FEN, MoveGenerator, Rules, parse_square
    from arbiter.core import position_from_fen

    pos = position_from_fen(STARTING_FEN)
    gen = MoveGenerator(pos)
    gen.legal_destinations(parse_square("e2"))   # [e3, e4]
    pos.apply_move(parse_square("e2"), parse_square("e4"))
    Rules.status(pos)
"""

from arbiter.core.board import Board
from arbiter.core.castle import CastleManager
from arbiter.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from arbiter.core.errors import (
    ArbiterError,
    IllegalMove,
    MalformedFen,
    PromotionRequired,
)
from arbiter.core.fen import STARTING_FEN, position_from_fen, position_to_fen
from arbiter.core.move import Destination, Move
from arbiter.core.move_generator import MoveGenerator
from arbiter.core.perft import perft
from arbiter.core.piece import Piece
from arbiter.core.placement import decode_fen_placement, encode_fen_placement
from arbiter.core.position import Position
from arbiter.core.rules import PositionStatus, Rules
from arbiter.core.shapes import SHAPES, MovementShape, shape_for
from arbiter.core.state import GameState
from arbiter.core.types import (
    Square,
    parse_square,
    square_at,
    square_name,
    squares_between,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Errors
    "ArbiterError",
    "IllegalMove",
    "MalformedFen",
    "PromotionRequired",
    # Types / helpers
    "Square",
    "parse_square",
    "square_at",
    "square_name",
    "squares_between",
    # Domain objects
    "Board",
    "CastleManager",
    "Destination",
    "GameState",
    "Move",
    "MoveGenerator",
    "MovementShape",
    "Piece",
    "Position",
    "PositionStatus",
    "Rules",
    "SHAPES",
    "shape_for",
    "perft",
    # Notation
    "STARTING_FEN",
    "decode_fen_placement",
    "encode_fen_placement",
    "position_from_fen",
    "position_to_fen",
]
