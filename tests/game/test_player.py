"""Tests for Player implementations."""

from chessverb.core.enums import Color
from chessverb.game.player import AIPlayer, HumanPlayer
from chessverb.game.session import GameSession


def _session() -> GameSession:
    return GameSession(HumanPlayer(Color.WHITE), HumanPlayer(Color.BLACK))


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Color.WHITE, "Alice", agent_id="alice")
        assert p.color == Color.WHITE
        assert p.name == "Alice"
        assert p.id == "alice"
        assert p.is_human is True
        assert p.model is None

    def test_defaults(self) -> None:
        p = HumanPlayer(Color.BLACK)
        assert "black" in p.name.lower()
        assert p.id == "human-black"

    def test_request_move_noop(self) -> None:
        HumanPlayer(Color.WHITE).request_move(_session())  # should not raise

    def test_cancel_noop(self) -> None:
        HumanPlayer(Color.WHITE).cancel()  # should not raise


class TestAIPlayer:
    def test_properties(self) -> None:
        p = AIPlayer(Color.BLACK, "gpt-4o-mini", name="Opponent")
        assert p.color == Color.BLACK
        assert p.name == "Opponent"
        assert p.model == "gpt-4o-mini"
        assert p.id == "ai-black"
        assert p.is_human is False

    def test_request_move_calls_callback(self) -> None:
        called_with = []
        p = AIPlayer(Color.BLACK, "m", on_request_move=called_with.append)
        session = _session()
        p.request_move(session)
        assert called_with == [session]

    def test_cancel_calls_callback(self) -> None:
        cancelled = []
        p = AIPlayer(Color.BLACK, "m", on_cancel=lambda: cancelled.append(True))
        p.cancel()
        assert cancelled == [True]

    def test_callbacks_optional(self) -> None:
        p = AIPlayer(Color.WHITE, "m")
        p.request_move(_session())
        p.cancel()
