"""Game management layer — sessions, players, verbs, configuration.

Quick start::

    from chessverb.game import GameSession, HumanPlayer, AIPlayer

    session = GameSession(
        HumanPlayer(Color.WHITE, "Alice", agent_id="alice"),
        AIPlayer(Color.BLACK, "gpt-4o-mini"),
    )
    session.start()
    session.make_move("alice", "e2e4")
"""

from chessverb.game.briefing import Briefing, build_briefing, detect_move_loop
from chessverb.game.config import GameMode, SessionConfig
from chessverb.game.interfaces import GamePhase, IPlayer
from chessverb.game.player import AIPlayer, HumanPlayer
from chessverb.game.records import MoveRecord, VerbAction
from chessverb.game.session import GameEvents, GameSession
from chessverb.game.verbs import CHESS_VERBS, VerbLibrary, VerbSpec, verb_summary

__all__ = [
    # Interfaces
    "GamePhase",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameEvents",
    "GameSession",
    "HumanPlayer",
    "MoveRecord",
    "VerbAction",
    # Verbs
    "CHESS_VERBS",
    "VerbLibrary",
    "VerbSpec",
    "verb_summary",
    # AI briefing
    "Briefing",
    "build_briefing",
    "detect_move_loop",
    # Configuration
    "GameMode",
    "SessionConfig",
]
