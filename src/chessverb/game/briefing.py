"""Position briefing handed to an AI bridge.

Collects what a model needs to choose a move: the board, material,
captures, recent moves, a warning when the last moves shuttle back and
forth, and the legal moves in UCI. The model call itself stays outside.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessverb.core.enums import Color
from chessverb.core.material import (
    CapturedPieces,
    MaterialBalance,
    captured_pieces,
    material_balance,
)

if TYPE_CHECKING:
    from chessverb.game.session import GameSession

_RECENT_PLIES = 6
_CYCLE = 4


def detect_move_loop(sans: Sequence[str]) -> tuple[str, ...] | None:
    """The repeated cycle when the last eight moves are one four-move cycle twice.

    Four plies is the shortest round trip that returns both sides to where
    they were (Nf3 Nf6 Ng1 Ng8).
    """
    if len(sans) < 2 * _CYCLE:
        return None
    cycle = tuple(sans[-_CYCLE:])
    if tuple(sans[-2 * _CYCLE : -_CYCLE]) == cycle:
        return cycle
    return None


@dataclass(frozen=True, slots=True)
class Briefing:
    color: Color
    fen: str
    board: str
    material: MaterialBalance
    captured: CapturedPieces
    history: tuple[str, ...]
    legal_moves: tuple[str, ...]
    loop: tuple[str, ...] | None = None

    def to_prompt(self) -> str:
        """Plain-text rendering for a model prompt."""
        recent = ", ".join(self.history[-_RECENT_PLIES:]) or "none"
        sections = [
            f"You are playing {self.color}.",
            f"CURRENT BOARD POSITION:\n{self.board}\nFEN: {self.fen}",
            "MATERIAL COUNT:\n"
            f"White: {self.material.white} points | Black: {self.material.black} points\n"
            f"{self.material.description}",
            f"CAPTURED PIECES:\n{self.captured.description}",
            f"RECENT MOVES: {recent}",
        ]
        if self.loop is not None:
            sections.append(
                f"LOOP DETECTED: moves {', '.join(self.loop)} are repeating. "
                "Choose a different plan."
            )
        sections.append(f"LEGAL MOVES (UCI):\n{', '.join(self.legal_moves)}")
        return "\n\n".join(sections)


def build_briefing(session: GameSession) -> Briefing:
    """Briefing for the side to move in *session*."""
    position = session.position
    history = tuple(r.san for r in session.history)
    return Briefing(
        color=position.side_to_move,
        fen=session.fen,
        board=str(position.board),
        material=material_balance(position),
        captured=captured_pieces(position),
        history=history,
        legal_moves=tuple(m.uci for m in session.legal_moves()),
        loop=detect_move_loop(history),
    )
