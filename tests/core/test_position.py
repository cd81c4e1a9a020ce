"""Tests for Position.apply_move — the game-state transition."""

import pytest

from arbiter.core.enums import CastlingRights, Color, MoveFlag, PieceType
from arbiter.core.errors import IllegalMove, PromotionRequired
from arbiter.core.fen import STARTING_FEN, position_from_fen, position_to_fen
from arbiter.core.piece import Piece
from arbiter.core.types import (
    A1,
    A8,
    C1,
    D1,
    E1,
    E2,
    E4,
    E5,
    E7,
    F1,
    G1,
    H1,
    parse_square,
)


class TestTurnAndClocks:
    def test_side_switches(self, start) -> None:
        start.apply_move(E2, E4)
        assert start.active == Color.BLACK

    def test_fullmove_after_black(self, start) -> None:
        start.apply_move(E2, E4)
        assert start.fullmove_number == 1
        start.apply_move(E7, E5)
        assert start.fullmove_number == 2

    def test_halfmove_increments_on_quiet_piece_move(self, start) -> None:
        start.apply_move(parse_square("g1"), parse_square("f3"))
        assert start.halfmove_clock == 1
        start.apply_move(parse_square("g8"), parse_square("f6"))
        assert start.halfmove_clock == 2

    def test_halfmove_resets_on_pawn_move(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/4P3/4K3 w - - 17 30")
        pos.apply_move(E2, parse_square("e3"))
        assert pos.halfmove_clock == 0

    def test_halfmove_resets_on_capture(self) -> None:
        fen = "4k3/8/8/8/8/8/8/3RK3 w - - 17 30"
        pos = position_from_fen(fen)
        move = pos.apply_move(D1, parse_square("d5"))
        assert pos.halfmove_clock == 18
        assert move.flag == MoveFlag.NORMAL
        pos = position_from_fen("4k3/8/3r4/8/8/8/8/3RK3 w - - 17 30")
        move = pos.apply_move(D1, parse_square("d6"))
        assert pos.halfmove_clock == 0
        assert move.flag == MoveFlag.CAPTURE

    def test_history_records_placement(self, start) -> None:
        start.apply_move(E2, E4)
        start.apply_move(E7, E5)
        assert start.history == [
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR",
            "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR",
        ]

    def test_fen_after_moves(self, start) -> None:
        start.apply_move(E2, E4)
        assert position_to_fen(start) == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"
        )


class TestEnPassant:
    FEN = "k7/8/8/8/6p1/8/7P/K7 w - - 0 1"

    def test_target_created_next_to_enemy_pawn(self) -> None:
        pos = position_from_fen(self.FEN)
        move = pos.apply_move(parse_square("h2"), parse_square("h4"))
        assert move.flag == MoveFlag.DOUBLE_PAWN
        assert pos.en_passant == parse_square("h3")

    def test_capture_removes_pawn_and_clears_target(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(parse_square("h2"), parse_square("h4"))
        move = pos.apply_move(parse_square("g4"), parse_square("h3"))
        assert move.flag == MoveFlag.EN_PASSANT
        assert move.is_capture
        assert pos.en_passant is None
        assert pos.board[parse_square("h4")] is None
        assert pos.board[parse_square("h3")] == Piece(Color.BLACK, PieceType.PAWN)
        assert position_to_fen(pos).split()[3] == "-"
        assert pos.halfmove_clock == 0

    def test_no_target_without_adjacent_enemy_pawn(self, start) -> None:
        start.apply_move(E2, E4)
        assert start.en_passant is None

    def test_target_lasts_one_ply(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(parse_square("h2"), parse_square("h4"))
        pos.apply_move(parse_square("a8"), parse_square("b8"))
        assert pos.en_passant is None


class TestCastling:
    FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_kingside_moves_rook(self) -> None:
        pos = position_from_fen(self.FEN)
        move = pos.apply_move(E1, G1)
        assert move.flag == MoveFlag.CASTLE_KINGSIDE
        assert move.is_castle
        assert not move.is_capture
        assert pos.board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[H1] is None
        assert pos.castling == CastlingRights.BLACK_BOTH

    def test_queenside_moves_rook(self) -> None:
        pos = position_from_fen(self.FEN)
        move = pos.apply_move(E1, C1)
        assert move.flag == MoveFlag.CASTLE_QUEENSIDE
        assert pos.board[D1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[A1] is None
        assert pos.halfmove_clock == 1

    def test_rook_move_clears_one_right(self) -> None:
        pos = position_from_fen(self.FEN)
        move = pos.apply_move(H1, parse_square("h5"))
        assert not move.is_castle
        assert pos.castling == CastlingRights.ALL & ~CastlingRights.WHITE_KINGSIDE

    def test_capturing_rook_clears_opponent_right(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(A1, A8)
        assert not pos.castling & CastlingRights.WHITE_QUEENSIDE
        assert not pos.castling & CastlingRights.BLACK_QUEENSIDE
        assert pos.castling & CastlingRights.BLACK_KINGSIDE

    def test_rights_never_restored(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(E1, parse_square("e2"))
        pos.apply_move(parse_square("e8"), parse_square("e7"))
        pos.apply_move(parse_square("e2"), E1)
        assert pos.castling == CastlingRights.NONE


class TestPromotion:
    FEN = "k7/4P3/8/8/8/8/8/K7 w - - 3 40"

    def test_requires_choice(self) -> None:
        pos = position_from_fen(self.FEN)
        before = pos.copy()
        with pytest.raises(PromotionRequired):
            pos.apply_move(E7, parse_square("e8"))
        assert pos == before

    def test_letter_choice(self) -> None:
        pos = position_from_fen(self.FEN)
        move = pos.apply_move(E7, parse_square("e8"), "q")
        assert pos.board[parse_square("e8")] == Piece(Color.WHITE, PieceType.QUEEN)
        assert pos.board[E7] is None
        assert move.flag == MoveFlag.PROMOTION
        assert str(move) == "e7e8q"

    def test_underpromotion(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(E7, parse_square("e8"), PieceType.KNIGHT)
        assert pos.board[parse_square("e8")] == Piece(Color.WHITE, PieceType.KNIGHT)

    def test_invalid_choice(self) -> None:
        pos = position_from_fen(self.FEN)
        with pytest.raises(IllegalMove):
            pos.apply_move(E7, parse_square("e8"), "k")
        assert pos.board[E7] == Piece(Color.WHITE, PieceType.PAWN)


class TestErrors:
    def test_empty_origin(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        with pytest.raises(IllegalMove, match="No piece"):
            pos.apply_move(E4, E5)
        assert position_to_fen(pos) == STARTING_FEN
