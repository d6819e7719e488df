"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessverb.core import attacks
from chessverb.core.enums import Color, GameStatus, PieceType
from chessverb.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessverb.core.position import Position

_MINOR_PIECES = (PieceType.BISHOP, PieceType.KNIGHT)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Draw policy: fifty-move and insufficient material end the game on
    # their own; repetition is not tracked.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return attacks.is_in_check(position.board, position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).generate_legal_moves()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).generate_legal_moves()

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, or K+B / K+N vs K.

        Other dead positions (two knights, same-colour bishops) still count
        as playable.
        """
        board = position.board
        total = board.piece_count()

        if total == 2:
            return True

        if total == 3:
            return any(
                piece.piece_type in _MINOR_PIECES
                for _, piece in board
                if piece.piece_type != PieceType.KING
            )

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def status(position: Position, legal_move_count: int | None = None) -> GameStatus:
        """Classify *position*.

        *legal_move_count* may be passed when the caller already generated
        the legal moves.
        """
        if legal_move_count is None:
            legal_move_count = len(MoveGenerator(position).generate_legal_moves())

        if legal_move_count == 0:
            if Rules.is_in_check(position):
                return (
                    GameStatus.CHECKMATE_BLACK_WINS
                    if position.side_to_move == Color.WHITE
                    else GameStatus.CHECKMATE_WHITE_WINS
                )
            return GameStatus.STALEMATE

        if Rules.is_fifty_move_rule(position):
            return GameStatus.DRAW_FIFTY_MOVE

        if Rules.is_insufficient_material(position):
            return GameStatus.DRAW_INSUFFICIENT_MATERIAL

        return GameStatus.IN_PROGRESS
