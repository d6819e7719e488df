"""Material count and captured-piece tally for a position.

Both are read straight off the board, so they need no move history.
Captures are inferred against the standard starting set; a promoted pawn
shows up as a missing pawn and an extra piece, never as a negative count.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessverb.core.enums import Color, PieceType
from chessverb.core.position import Position

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}

# Most valuable first, as the tally is listed.
_STARTING_SET: tuple[tuple[PieceType, int], ...] = (
    (PieceType.QUEEN, 1),
    (PieceType.ROOK, 2),
    (PieceType.BISHOP, 2),
    (PieceType.KNIGHT, 2),
    (PieceType.PAWN, 8),
)


@dataclass(frozen=True, slots=True)
class MaterialBalance:
    white: int
    black: int

    @property
    def advantage(self) -> int:
        """Positive when White is ahead."""
        return self.white - self.black

    @property
    def description(self) -> str:
        if self.advantage > 0:
            return f"White is ahead by {self.advantage} points"
        if self.advantage < 0:
            return f"Black is ahead by {-self.advantage} points"
        return "Material is equal"


@dataclass(frozen=True, slots=True)
class CapturedPieces:
    """Pieces each side has lost."""

    white_lost: tuple[PieceType, ...]
    black_lost: tuple[PieceType, ...]

    def lost_by(self, color: Color) -> tuple[PieceType, ...]:
        return self.white_lost if color == Color.WHITE else self.black_lost

    @property
    def description(self) -> str:
        lines = [
            f"{side} has lost: {', '.join(pt.name.capitalize() for pt in lost)}"
            for side, lost in (("White", self.white_lost), ("Black", self.black_lost))
            if lost
        ]
        return "\n".join(lines) or "No pieces captured yet"


def material_balance(position: Position) -> MaterialBalance:
    totals = {Color.WHITE: 0, Color.BLACK: 0}
    for _, piece in position.board:
        totals[piece.color] += PIECE_VALUES[piece.piece_type]
    return MaterialBalance(white=totals[Color.WHITE], black=totals[Color.BLACK])


def captured_pieces(position: Position) -> CapturedPieces:
    board = position.board

    def lost(color: Color) -> tuple[PieceType, ...]:
        missing: list[PieceType] = []
        for piece_type, count in _STARTING_SET:
            remaining = len(board.pieces(color, piece_type))
            missing.extend([piece_type] * max(0, count - remaining))
        return tuple(missing)

    return CapturedPieces(white_lost=lost(Color.WHITE), black_lost=lost(Color.BLACK))
