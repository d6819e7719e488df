"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from chessverb.core.move import Move
from chessverb.core.position import Position


def play(position: Position, *ucis: str) -> Position:
    """Apply a sequence of UCI moves without legality checks."""
    for uci in ucis:
        position = position.apply(Move.from_uci(uci))
    return position


@pytest.fixture
def start() -> Position:
    return Position.initial()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep a developer's CHESSVERB_* settings out of the tests."""
    for key in list(os.environ):
        if key.startswith("CHESSVERB_"):
            monkeypatch.delenv(key)
    yield
