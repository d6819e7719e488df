"""Append-only log entries owned by a session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chessverb.core.api import LegalMove
from chessverb.core.enums import PieceType
from chessverb.core.move import Move


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    san: str
    fen_after: str
    ply: int
    timestamp: float
    piece: PieceType
    captured: PieceType | None = None
    reasoning: str | None = None

    @classmethod
    def from_legal_move(
        cls,
        played: LegalMove,
        fen_after: str,
        ply: int,
        timestamp: float,
        reasoning: str | None = None,
    ) -> MoveRecord:
        return cls(
            move=played.move,
            san=played.san,
            fen_after=fen_after,
            ply=ply,
            timestamp=timestamp,
            piece=played.piece,
            captured=played.captured,
            reasoning=reasoning,
        )

    @property
    def uci(self) -> str:
        return self.move.uci

    @property
    def promotion(self) -> PieceType | None:
        return self.move.promotion

    @property
    def was_capture(self) -> bool:
        return self.captured is not None

    @property
    def was_check(self) -> bool:
        return self.san.endswith(("+", "#"))


@dataclass(slots=True)
class VerbAction:
    """One verb executed against a session, with its arguments and result."""

    id: str
    verb: str
    agent: str
    args: dict[str, Any]
    result: dict[str, Any] = field(default_factory=dict)
    timestamp: float = 0.0
    reasoning: str | None = None

    @property
    def ok(self) -> bool:
        return bool(self.result.get("ok", True))

    @property
    def error(self) -> str | None:
        return self.result.get("error")
