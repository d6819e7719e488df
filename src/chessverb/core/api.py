"""Engine boundary: the four calls the rest of the application makes.

Callers work with FEN strings, UCI strings and :class:`LegalMove` records;
board internals never leak past this module.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessverb.core.enums import GameStatus, PieceType
from chessverb.core.move import Move
from chessverb.core.move_generator import MoveGenerator
from chessverb.core.notation.san import move_to_san
from chessverb.core.position import Position
from chessverb.core.rules import Rules
from chessverb.core.types import square_name


@dataclass(frozen=True, slots=True)
class LegalMove:
    """A legal move with its presentation data."""

    move: Move
    san: str
    piece: PieceType
    captured: PieceType | None = None

    @property
    def uci(self) -> str:
        return self.move.uci

    @property
    def promotion(self) -> PieceType | None:
        return self.move.promotion

    @property
    def from_square(self) -> str:
        return square_name(self.move.from_sq)

    @property
    def to_square(self) -> str:
        return square_name(self.move.to_sq)

    @property
    def is_capture(self) -> bool:
        return self.captured is not None


def _describe(position: Position, move: Move, legal: list[Move]) -> LegalMove:
    board = position.board
    piece = board[move.from_sq]
    assert piece is not None
    target = board[move.to_sq]
    captured = target.piece_type if target is not None else None
    if piece.piece_type == PieceType.PAWN and move.to_sq == position.en_passant:
        captured = PieceType.PAWN
    return LegalMove(
        move=move,
        san=move_to_san(position, move, legal),
        piece=piece.piece_type,
        captured=captured,
    )


def new_game() -> Position:
    """Standard starting position."""
    return Position.initial()


def legal_moves(position: Position) -> list[LegalMove]:
    """Every legal move of the side to move, with UCI and SAN."""
    legal = MoveGenerator(position).generate_legal_moves()
    return [_describe(position, move, legal) for move in legal]


def apply_uci(position: Position, uci: str) -> tuple[Position, LegalMove] | None:
    """Play the move written *uci* if it is legal.

    Returns ``None`` when the string is not a legal move in *position*;
    nothing is raised for bad input.
    """
    legal = MoveGenerator(position).generate_legal_moves()
    for move in legal:
        if move.uci == uci:
            return position.apply(move), _describe(position, move, legal)
    return None


def status(position: Position) -> GameStatus:
    """Classify *position* (in progress, mate, stalemate or draw)."""
    return Rules.status(position)
