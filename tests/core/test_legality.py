"""Tests for king-safety filtering: check, double check, pins, block-or-capture."""

from arbiter.core.enums import Color
from arbiter.core.fen import position_from_fen
from arbiter.core.move_generator import MoveGenerator
from arbiter.core.types import parse_square


class TestKingMoves:
    def test_king_avoids_threatened_squares(self) -> None:
        # Black rook on d8 covers the d-file.
        pos = position_from_fen("3rk3/8/8/8/8/8/8/4K3 w - - 0 1")
        gen = MoveGenerator(pos)
        found = {d.square for d in gen.legal_destinations(parse_square("e1"))}
        assert found == {parse_square("e2"), parse_square("f1"), parse_square("f2")}

    def test_king_cannot_retreat_along_checking_line(self, legal) -> None:
        # Rook a1 checks along the first rank; f1 stays covered through the king.
        assert "f1" not in legal("4k3/8/8/8/8/8/8/r3K3 w - - 0 1", "e1")

    def test_king_cannot_capture_defended_piece(self, legal) -> None:
        # Rook d2 is defended by the rook on d8.
        assert "d2" not in legal("3rk3/8/8/8/8/8/3r4/4K3 w - - 0 1", "e1")

    def test_king_captures_undefended_checker(self, legal) -> None:
        assert "d2" in legal("4k3/8/8/8/8/8/3r4/4K3 w - - 0 1", "e1")

    def test_no_legal_king_move_is_threatened(self) -> None:
        fens = [
            "4k3/8/8/8/8/8/8/r3K3 w - - 0 1",
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 b - - 0 1",
        ]
        for fen in fens:
            pos = position_from_fen(fen)
            gen = MoveGenerator(pos)
            king = pos.board.king_square(pos.active)
            assert king is not None
            threatened = gen.threatened(pos.active)
            for d in gen.legal_destinations(king):
                assert d.square not in threatened, f"{fen}: {d}"


class TestDoubleCheck:
    # Rook h1 and bishop b4 both attack the king on e1.
    FEN = "4k3/8/8/8/1b6/8/2N5/R1B1K2r w - - 0 1"

    def test_two_attackers(self) -> None:
        gen = MoveGenerator(position_from_fen(self.FEN))
        assert len(gen.attackers(Color.WHITE)) == 2

    def test_only_king_moves(self) -> None:
        pos = position_from_fen(self.FEN)
        gen = MoveGenerator(pos)
        moves = gen.legal_moves()
        assert set(moves) == {parse_square("e1")}
        for sq in pos.board.all_pieces(Color.WHITE):
            if sq != parse_square("e1"):
                assert gen.legal_destinations(sq) == []


class TestSingleCheck:
    def test_block_or_capture_slider(self, legal) -> None:
        # Rook e8 checks white king e1; bishop c1 may block on e3 only.
        fen = "k3r3/8/8/8/8/8/8/2B1K3 w - - 0 1"
        assert legal(fen, "c1") == {"e3"}

    def test_capture_checker(self, legal) -> None:
        # Knight f3 checks e1; bishop g2 may only capture it.
        fen = "k7/8/8/8/8/5n2/6B1/4K3 w - - 0 1"
        assert legal(fen, "g2") == {"f3"}

    def test_cannot_block_knight_check(self, legal) -> None:
        # Knight d3 checks e1; the rook can only capture.
        fen = "k7/8/8/8/8/3n4/8/3RK3 w - - 0 1"
        assert legal(fen, "d1") == {"d3"}

    def test_pinned_piece_cannot_resolve_check(self, legal) -> None:
        # Bishop d2 is pinned by the a5 bishop and cannot block the e8 rook.
        fen = "k3r3/8/8/b7/8/8/3B4/4K3 w - - 0 1"
        assert legal(fen, "d2") == set()

    def test_en_passant_captures_checking_pawn(self, legal) -> None:
        # Black d7-d5 gave check to the king on e4; exd6 e.p. removes the checker.
        fen = "k7/8/8/3pP3/4K3/8/8/8 w - d6 0 1"
        assert "d6" in legal(fen, "e5")


class TestPins:
    def test_pinned_rook_moves_along_pin(self, legal) -> None:
        # Rook e4 pinned by rook e8 against king e1.
        fen = "k3r3/8/8/8/4R3/8/8/4K3 w - - 0 1"
        assert legal(fen, "e4") == {"e2", "e3", "e5", "e6", "e7", "e8"}

    def test_pinned_knight_frozen(self, legal) -> None:
        fen = "k7/8/8/b7/8/8/3N4/4K3 w - - 0 1"
        assert legal(fen, "d2") == set()

    def test_en_passant_exposing_king_on_rank(self, legal) -> None:
        # Capturing e.p. would clear both pawns off the fifth rank.
        fen = "8/8/8/K2pP2r/8/8/8/7k w - d6 0 1"
        assert legal(fen, "e5") == {"e6"}
