"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessverb.core import attacks
from chessverb.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
)
from chessverb.core.enums import CastlingRights, Color, PieceType
from chessverb.core.move import Move
from chessverb.core.piece import Piece
from chessverb.core.types import Square

if TYPE_CHECKING:
    from chessverb.core.position import Position


_PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class _PawnGeometry:
    """Per-color pawn constants: step, start rank, last rank before promotion."""

    __slots__ = ("step", "start_rank", "pre_promotion_rank")

    def __init__(self, step: int, start_rank: int, pre_promotion_rank: int) -> None:
        self.step = step
        self.start_rank = start_rank
        self.pre_promotion_rank = pre_promotion_rank


_PAWNS: dict[Color, _PawnGeometry] = {
    Color.WHITE: _PawnGeometry(8, 1, 6),
    Color.BLACK: _PawnGeometry(-8, 6, 1),
}


class _CastlingPath:
    """Squares involved in one castling move for one side."""

    __slots__ = ("right", "king_from", "king_to", "rook_from", "between", "transit")

    def __init__(
        self,
        right: CastlingRights,
        king_from: Square,
        king_to: Square,
        rook_from: Square,
        between: tuple[Square, ...],
    ) -> None:
        self.right = right
        self.king_from = king_from
        self.king_to = king_to
        self.rook_from = rook_from
        self.between = between
        # The square the king passes over on its way to king_to.
        self.transit = (king_from + king_to) // 2


def _castling_paths(color: Color) -> tuple[_CastlingPath, _CastlingPath]:
    offset = 0 if color == Color.WHITE else 56
    ks, qs = (
        (CastlingRights.WHITE_KINGSIDE, CastlingRights.WHITE_QUEENSIDE)
        if color == Color.WHITE
        else (CastlingRights.BLACK_KINGSIDE, CastlingRights.BLACK_QUEENSIDE)
    )
    return (
        _CastlingPath(ks, offset + 4, offset + 6, offset + 7, (offset + 5, offset + 6)),
        _CastlingPath(
            qs, offset + 4, offset + 2, offset, (offset + 1, offset + 2, offset + 3)
        ),
    )


_CASTLING_PATHS: dict[Color, tuple[_CastlingPath, _CastlingPath]] = {
    color: _castling_paths(color) for color in Color
}


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    The position is only read. Legality is tested by applying each
    candidate to produce a throwaway successor.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        moving_color = self._pos.side_to_move
        apply = self._pos.apply
        return [
            move
            for move in self.generate_pseudo_legal_moves()
            if not attacks.is_in_check(apply(move).board, moving_color)
        ]

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        board = self._board

        for sq in board.pieces(color, PieceType.PAWN):
            self._gen_pawn(sq, color, moves)
        for sq in board.pieces(color, PieceType.KNIGHT):
            self._gen_steps(sq, color, KNIGHT_TARGETS[sq], moves)
        for sq in board.pieces(color, PieceType.BISHOP):
            self._gen_sliding(sq, color, BISHOP_RAYS[sq], moves)
        for sq in board.pieces(color, PieceType.ROOK):
            self._gen_sliding(sq, color, ROOK_RAYS[sq], moves)
        for sq in board.pieces(color, PieceType.QUEEN):
            self._gen_sliding(sq, color, QUEEN_RAYS[sq], moves)
        for sq in board.pieces(color, PieceType.KING):
            self._gen_steps(sq, color, KING_TARGETS[sq], moves)
            self._gen_castling(sq, color, moves)

        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return attacks.is_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return attacks.is_square_attacked(self._board, sq, by_color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        geometry = _PAWNS[color]
        rank_idx = sq >> 3
        file_idx = sq & 7
        promotes = rank_idx == geometry.pre_promotion_rank

        one_step = sq + geometry.step
        if not 0 <= one_step < 64:
            return  # stranded on its own last rank in a hand-written FEN
        if board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, promotes, moves)
            if rank_idx == geometry.start_rank:
                two_step = one_step + geometry.step
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step))

        for df in (-1, 1):
            if not 0 <= file_idx + df < 8:
                continue
            cap_sq = one_step + df
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, promotes, moves)
            elif cap_sq == self._pos.en_passant:
                moves.append(Move(sq, cap_sq))

    @staticmethod
    def _add_pawn_move(
        from_sq: Square, to_sq: Square, promotes: bool, moves: list[Move]
    ) -> None:
        if promotes:
            for pt in _PROMOTION_TYPES:
                moves.append(Move(from_sq, to_sq, pt))
        else:
            moves.append(Move(from_sq, to_sq))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        opponent = color.opposite
        home_rook = Piece(color, PieceType.ROOK)

        for path in _CASTLING_PATHS[color]:
            if not self._pos.castling & path.right or king_sq != path.king_from:
                continue
            if board[path.rook_from] != home_rook:
                continue
            if not all(board.is_empty(sq) for sq in path.between):
                continue
            if any(
                self.is_square_attacked(sq, opponent)
                for sq in (path.king_from, path.transit, path.king_to)
            ):
                continue
            moves.append(Move(king_sq, path.king_to))
