"""Position — complete game state (board + metadata) as an immutable value."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessverb.core.board import Board
from chessverb.core.enums import CastlingRights, Color, PieceType
from chessverb.core.move import Move
from chessverb.core.piece import Piece
from chessverb.core.types import (
    A1,
    A8,
    H1,
    H8,
    Square,
    file_of,
    make_square,
    rank_of,
)

# Rook home square -> the castling right that depends on it.
_ROOK_CORNERS: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}

_KING_RIGHTS: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_BOTH,
    Color.BLACK: CastlingRights.BLACK_BOTH,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    A position is never modified after construction. :meth:`apply` builds the
    successor on a copied board, so a caller may simulate any number of
    moves from the same position and throw the results away.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position."""
        return cls()

    # ── State transition ────────────────────────────────────────────────

    def apply(self, move: Move) -> Position:
        """Return the position after *move*.

        *move* must be consistent with this board (normally one produced by
        the move generator); castling and en passant are recognised from the
        geometry of the move.
        """
        board = self.board.copy()
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        captured = board[move.to_sq]
        is_pawn = piece.piece_type == PieceType.PAWN

        # 1. En passant: the captured pawn sits beside the origin, not on the target.
        if is_pawn and move.to_sq == self.en_passant:
            ep_capture_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))
            captured = board[ep_capture_sq]
            board[ep_capture_sq] = None

        # 2. Relocate the mover (promotion swaps its kind).
        placed = piece
        if move.promotion is not None:
            placed = Piece(piece.color, move.promotion)
        board[move.from_sq] = None
        board[move.to_sq] = placed

        # 3. Castling drags the rook along.
        if piece.piece_type == PieceType.KING:
            step = file_of(move.to_sq) - file_of(move.from_sq)
            if abs(step) == 2:
                r = rank_of(move.from_sq)
                rook_from, rook_to = (
                    (make_square(7, r), make_square(5, r))
                    if step > 0
                    else (make_square(0, r), make_square(3, r))
                )
                board[rook_to] = board[rook_from]
                board[rook_from] = None

        # 4. Castling rights.
        castling = self.castling
        if piece.piece_type == PieceType.KING:
            castling &= ~_KING_RIGHTS[piece.color]
        if piece.piece_type == PieceType.ROOK and move.from_sq in _ROOK_CORNERS:
            castling &= ~_ROOK_CORNERS[move.from_sq]
        if captured is not None and move.to_sq in _ROOK_CORNERS:
            castling &= ~_ROOK_CORNERS[move.to_sq]

        # 5. En passant target for the opponent.
        en_passant: Square | None = None
        if is_pawn and abs(rank_of(move.to_sq) - rank_of(move.from_sq)) == 2:
            en_passant = make_square(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )

        # 6–7. Clocks.
        halfmove_clock = 0 if is_pawn or captured is not None else self.halfmove_clock + 1
        fullmove_number = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove_number += 1

        # 8. Hand the turn over.
        return Position(
            board=board,
            side_to_move=self.side_to_move.opposite,
            castling=castling,
            en_passant=en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    # ── Queries ─────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    def __str__(self) -> str:
        return f"{self.board}\n{self.side_to_move} to move"
