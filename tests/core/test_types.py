"""Tests for Square addressing helpers."""

import pytest

from arbiter.core.types import (
    A1,
    C3,
    E4,
    H8,
    Square,
    all_squares,
    parse_square,
    square_at,
    square_name,
    squares_between,
)


class TestSquare:
    def test_name(self) -> None:
        assert Square(4, 3).name == "e4"
        assert str(H8) == "h8"

    def test_parse_round_trip(self) -> None:
        for sq in all_squares():
            assert parse_square(sq.name) == sq

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "a0", "e44", "E4"])
    def test_parse_invalid(self, name: str) -> None:
        with pytest.raises(ValueError, match="Invalid square name"):
            parse_square(name)

    def test_constructor_rejects_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            Square(8, 0)

    def test_ordering_matches_algebraic_names(self) -> None:
        squares = list(all_squares())
        assert sorted(squares, key=lambda s: s.name) == sorted(squares)

    def test_constants(self) -> None:
        assert A1 == Square(0, 0)
        assert E4 == parse_square("e4")


class TestSquareAt:
    def test_zero_offset_is_identity(self) -> None:
        for sq in all_squares():
            assert square_at(sq, 0, 0) == sq

    def test_offset(self) -> None:
        assert square_at(E4, 1, 2) == parse_square("f6")
        assert square_at(E4, -4, -3) == A1

    def test_off_board_is_none(self) -> None:
        assert square_at(A1, -1, 0) is None
        assert square_at(A1, 0, -1) is None
        assert square_at(H8, 1, 1) is None


class TestSquareName:
    def test_matches_name_property(self) -> None:
        assert square_name(E4) == "e4"
        assert all(square_name(sq) == sq.name for sq in all_squares())


class TestSquaresBetween:
    def test_file(self) -> None:
        assert squares_between(A1, parse_square("a4")) == (
            parse_square("a2"),
            parse_square("a3"),
        )

    def test_diagonal_reversed(self) -> None:
        assert squares_between(parse_square("e5"), A1) == (
            parse_square("d4"),
            C3,
            parse_square("b2"),
        )

    def test_not_aligned_knight_like(self) -> None:
        assert squares_between(E4, A1) == ()

    def test_adjacent_is_empty(self) -> None:
        assert squares_between(E4, parse_square("e5")) == ()

    def test_not_aligned(self) -> None:
        assert squares_between(A1, parse_square("b3")) == ()
