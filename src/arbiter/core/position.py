"""Position — board + game state, and the move-application state machine."""

from __future__ import annotations

import logging

from arbiter.core.board import Board
from arbiter.core.castle import CastleManager
from arbiter.core.enums import CastlingRights, Color, MoveFlag, PieceType
from arbiter.core.errors import IllegalMove, PromotionRequired
from arbiter.core.move import Move
from arbiter.core.move_generator import en_passant_victim
from arbiter.core.piece import Piece, promotion_kind
from arbiter.core.placement import encode_fen_placement
from arbiter.core.shapes import PROMOTION_RANK
from arbiter.core.state import GameState
from arbiter.core.types import Square, square_at

_LOGGER = logging.getLogger(__name__)


class Position:
    """Full chess position: board plus :class:`GameState`.

    :meth:`apply_move` is the only mutator.  It builds the next board and
    state on copies and commits both at the end, so a failing move leaves
    the position untouched.
    """

    __slots__ = ("board", "state")

    def __init__(
        self, board: Board | None = None, state: GameState | None = None
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.state = state if state is not None else GameState()

    # ── State shortcuts ──────────────────────────────────────────────────

    @property
    def active(self) -> Color:
        return self.state.active

    @property
    def castling(self) -> CastlingRights:
        return self.state.castling

    @property
    def en_passant(self) -> Square | None:
        return self.state.en_passant

    @property
    def halfmove_clock(self) -> int:
        return self.state.halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self.state.fullmove_number

    @property
    def history(self) -> list[str]:
        return self.state.history

    # ── Core move operation ──────────────────────────────────────────────

    def apply_move(
        self,
        origin: Square,
        destination: Square,
        promotion: PieceType | str | None = None,
    ) -> Move:
        """Apply a legal (origin, destination) pair and return the move record.

        The caller is responsible for legality; only the piece on *origin*
        and the promotion choice are checked here.
        """
        piece = self.board[origin]
        if piece is None:
            raise IllegalMove(f"No piece on {origin}")

        board = self.board.copy()
        state = self.state.copy()
        previous_target = state.en_passant
        captured = board[destination]
        flag = MoveFlag.CAPTURE if captured is not None else MoveFlag.NORMAL

        placed = piece
        promotes = (
            piece.kind == PieceType.PAWN
            and destination.rank == PROMOTION_RANK[piece.color]
        )
        if promotes:
            if promotion is None:
                raise PromotionRequired(
                    f"Promotion piece required for {origin}{destination}"
                )
            try:
                placed = piece.promoted(promotion_kind(promotion))
            except ValueError as exc:
                raise IllegalMove(str(exc)) from None
            flag = MoveFlag.PROMOTION

        # 1. Castling: relocate the rook beside the king's landing square.
        if CastleManager.is_castle(piece, origin, destination):
            rook_from, rook_to = CastleManager.rook_relocation(origin, destination)
            board[rook_to] = board[rook_from]
            board[rook_from] = None
            state.castling &= ~CastlingRights.for_color(piece.color)
            flag = CastleManager.flag_for(origin, destination)

        # 2. Rights: touching a king or rook home square clears its rights.
        state.castling = CastleManager.revoke(state.castling, origin, destination)

        # 3. En-passant target for the opponent.
        state.en_passant = None
        if piece.kind == PieceType.PAWN and abs(destination.rank - origin.rank) == 2:
            flag = MoveFlag.DOUBLE_PAWN
            if self._enemy_pawn_beside(destination, piece):
                state.en_passant = Square(
                    origin.file, (origin.rank + destination.rank) // 2
                )

        # 4. En-passant capture removes the pawn behind the target.
        if (
            piece.kind == PieceType.PAWN
            and destination == previous_target
            and origin.file != destination.file
            and captured is None
        ):
            victim_sq = en_passant_victim(origin, destination, piece.color)
            captured = board[victim_sq]
            board[victim_sq] = None
            flag = MoveFlag.EN_PASSANT

        # 5. Relocate the mover (promotion already folded into ``placed``).
        board[origin] = None
        board[destination] = placed

        # 6. Clocks and turn.
        if piece.kind == PieceType.PAWN or captured is not None:
            state.halfmove_clock = 0
        else:
            state.halfmove_clock += 1
        if piece.color == Color.BLACK:
            state.fullmove_number += 1
        state.active = state.active.opposite

        # 7. Placement snapshot.
        state.history.append(encode_fen_placement(board))

        self.board = board
        self.state = state

        promoted_to = placed.kind if flag == MoveFlag.PROMOTION else None
        move = Move(origin, destination, flag, promoted_to)
        _LOGGER.debug("Applied %s (%s)", move, flag.name)
        return move

    def _enemy_pawn_beside(self, sq: Square, mover: Piece) -> bool:
        enemy_pawn = Piece(mover.color.opposite, PieceType.PAWN)
        for df in (-1, 1):
            neighbour = square_at(sq, df, 0)
            if neighbour is not None and self.board[neighbour] == enemy_pawn:
                return True
        return False

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        return Position(self.board.copy(), self.state.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.board == other.board and self.state == other.state

    def __repr__(self) -> str:
        from arbiter.core.fen import position_to_fen

        return f"Position({position_to_fen(self)!r})"
