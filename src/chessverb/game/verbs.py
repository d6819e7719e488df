"""Catalogue of the verbs an agent may call on a session.

The descriptions are written for a planning model: they are what an AI
player reads to learn how to inspect the game and submit a move.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class VerbCategory(str, Enum):
    READ = "read"
    WRITE = "write"


@dataclass(frozen=True, slots=True)
class VerbParam:
    type: str
    description: str
    required: bool = True


@dataclass(frozen=True, slots=True)
class VerbSpec:
    name: str
    category: VerbCategory
    description: str
    params: dict[str, VerbParam] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class VerbLibrary:
    namespace: str
    version: str
    description: str
    verbs: tuple[VerbSpec, ...]

    def qualified_name(self, verb: str) -> str:
        """``get_state`` → ``chess.get_state``; unknown names raise ``KeyError``."""
        self.get(verb)
        return f"{self.namespace}.{verb}"

    def get(self, verb: str) -> VerbSpec:
        for spec in self.verbs:
            if spec.name == verb:
                return spec
        raise KeyError(f"Unknown verb: {self.namespace}.{verb}")

    def summary(self) -> str:
        """One ``- name: description`` line per verb."""
        return "\n".join(f"- {v.name}: {v.description}" for v in self.verbs)


_GAME_ID = VerbParam("string", "Game identifier")

CHESS_VERBS = VerbLibrary(
    namespace="chess",
    version="1.0.0",
    description="Agent-facing chess interface",
    verbs=(
        VerbSpec(
            name="get_state",
            category=VerbCategory.READ,
            description=(
                "Returns the current board position (FEN), whose turn it is, "
                "and the game status."
            ),
            params={"game_id": _GAME_ID},
        ),
        VerbSpec(
            name="get_legal_moves",
            category=VerbCategory.READ,
            description="Returns all legal moves for the current position in UCI format.",
            params={"game_id": _GAME_ID},
        ),
        VerbSpec(
            name="get_history",
            category=VerbCategory.READ,
            description=(
                "Returns the complete move history with SAN notation, "
                "timestamps, and ply numbers."
            ),
            params={"game_id": _GAME_ID},
        ),
        VerbSpec(
            name="make_move",
            category=VerbCategory.WRITE,
            description=(
                "Submits a move in UCI format. The engine validates turn order, "
                "legality, and game status before applying."
            ),
            params={
                "game_id": _GAME_ID,
                "uci": VerbParam("string", "Move in UCI format (e.g., 'e2e4')"),
                "reasoning": VerbParam(
                    "string", "Optional reasoning for the move", required=False
                ),
            },
        ),
        VerbSpec(
            name="resign",
            category=VerbCategory.WRITE,
            description="Resign the game. The opponent wins.",
            params={"game_id": _GAME_ID},
        ),
    ),
)


def verb_summary() -> str:
    """Verb list for an AI planner prompt."""
    return CHESS_VERBS.summary()
