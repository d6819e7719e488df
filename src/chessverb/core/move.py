"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from chessverb.core.enums import PieceType
from chessverb.core.errors import IllegalAction
from chessverb.core.piece import piece_letter, piece_type_from_letter
from chessverb.core.types import Square, parse_square, square_name

_PROMOTION_TYPES = frozenset(
    (PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)
)


@dataclass(frozen=True, slots=True)
class Move:
    """Origin, destination and optional promotion kind.

    Special moves (castling, en passant, double pawn push) are not tagged;
    they are recognised from the position the move is applied to.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += piece_letter(self.promotion)
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation, e.g. ``e2e4`` or ``e7e8q``."""
        return str(self)

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse coordinate notation. Says nothing about legality."""
        if len(text) not in (4, 5):
            raise IllegalAction(f"Invalid UCI move: {text!r}")
        try:
            from_sq = parse_square(text[0:2])
            to_sq = parse_square(text[2:4])
        except ValueError:
            raise IllegalAction(f"Invalid UCI move: {text!r}") from None

        promotion: PieceType | None = None
        if len(text) == 5:
            promotion = piece_type_from_letter(text[4])
            if promotion not in _PROMOTION_TYPES or not text[4].islower():
                raise IllegalAction(f"Invalid UCI promotion: {text!r}")
        return cls(from_sq, to_sq, promotion)
