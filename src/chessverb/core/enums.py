"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_char(self) -> str:
        return "w" if self == Color.WHITE else "b"

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class GameStatus(IntEnum):
    """Classification of a position (or of a finished session)."""

    IN_PROGRESS = 0
    CHECKMATE_WHITE_WINS = auto()
    CHECKMATE_BLACK_WINS = auto()
    STALEMATE = auto()
    DRAW_FIFTY_MOVE = auto()
    DRAW_INSUFFICIENT_MATERIAL = auto()
    # Only ever assigned by a session, never by the rules.
    RESIGNATION_WHITE_WINS = auto()
    RESIGNATION_BLACK_WINS = auto()

    @property
    def is_over(self) -> bool:
        return self != GameStatus.IN_PROGRESS

    @property
    def is_draw(self) -> bool:
        return self in (
            GameStatus.STALEMATE,
            GameStatus.DRAW_FIFTY_MOVE,
            GameStatus.DRAW_INSUFFICIENT_MATERIAL,
        )

    @property
    def winner(self) -> Color | None:
        if self in (GameStatus.CHECKMATE_WHITE_WINS, GameStatus.RESIGNATION_WHITE_WINS):
            return Color.WHITE
        if self in (GameStatus.CHECKMATE_BLACK_WINS, GameStatus.RESIGNATION_BLACK_WINS):
            return Color.BLACK
        return None

    def __str__(self) -> str:
        return self.name.lower()
