"""Abstract interfaces for the game layer.

Follows Dependency Inversion: :class:`GameSession` depends on these ABCs,
not on concrete player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessverb.core.enums import Color

if TYPE_CHECKING:
    from chessverb.game.session import GameSession


class GamePhase(IntEnum):
    """Finite-state-machine states for a session."""

    AWAITING_MOVE = auto()
    THINKING = auto()  # an AI player has been asked for a move
    GAME_OVER = auto()


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Agent identifier used to authorise verbs."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @property
    def model(self) -> str | None:
        """Model identifier for AI players."""
        return None

    @abstractmethod
    def request_move(self, session: GameSession) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (moves arrive from the front-end).
        For AI this hands the session to whatever picks the move.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move computation (AI only, no-op for human)."""
