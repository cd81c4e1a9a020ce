"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from arbiter.core.fen import STARTING_FEN, position_from_fen
from arbiter.core.move_generator import MoveGenerator
from arbiter.core.position import Position
from arbiter.core.types import parse_square


@pytest.fixture
def start() -> Position:
    """Fresh standard starting position."""
    return position_from_fen(STARTING_FEN)


@pytest.fixture
def legal() -> Callable[[str, str], set[str]]:
    """``legal(fen, "e2")`` → names of the legal destinations of that piece."""

    def _legal(fen: str, origin: str) -> set[str]:
        gen = MoveGenerator(position_from_fen(fen))
        return {d.square.name for d in gen.legal_destinations(parse_square(origin))}

    return _legal
