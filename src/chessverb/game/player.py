"""Concrete player implementations."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessverb.core.enums import Color
from chessverb.game.interfaces import IPlayer

if TYPE_CHECKING:
    from chessverb.game.session import GameSession


class HumanPlayer(IPlayer):
    """A human participant — moves come from the front-end.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_id", "_color", "_name")

    def __init__(self, color: Color, name: str = "", agent_id: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"
        self._id = agent_id or f"human-{color}"

    @property
    def id(self) -> str:
        return self._id

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, session: GameSession) -> None:
        pass  # Human moves arrive via session.make_move()

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """An AI participant that delegates move selection to a callback.

    The model call itself lives outside the engine: ``AIPlayer`` only
    stores a *bridge* callable invoked on ``request_move``. The bridge is
    expected to read the session through its verbs and eventually call
    ``session.make_move`` with this player's id.

    Args:
        color: Side the AI plays.
        model: Model identifier, e.g. ``gpt-4o-mini``.
        name: Display name.
        agent_id: Identifier used on verbs; defaults to ``ai-<color>``.
        on_request_move: ``(GameSession) -> None`` — called when the
            session asks the AI to start thinking.
        on_cancel: ``() -> None`` — called to abort a pending request.
    """

    __slots__ = ("_id", "_color", "_name", "_model", "_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        model: str,
        name: str = "",
        agent_id: str = "",
        on_request_move: Callable[[GameSession], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._model = model
        self._name = name or f"AI ({color})"
        self._id = agent_id or f"ai-{color}"
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def id(self) -> str:
        return self._id

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def model(self) -> str:
        return self._model

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, session: GameSession) -> None:
        if self._on_request_move is not None:
            self._on_request_move(session)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
