"""Attack detection over a bare board.

Answers only "is this square attacked right now": side to move, en passant
and castling rights play no part.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessverb.core.enums import Color, PieceType
from chessverb.core.types import Square, make_square, on_board

if TYPE_CHECKING:
    from chessverb.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        targets.append(
            tuple(
                make_square(file_idx + df, rank_idx + dr)
                for df, dr in offsets
                if on_board(file_idx + df, rank_idx + dr)
            )
        )
    return tuple(targets)


def _build_mask(squares: tuple[Square, ...]) -> int:
    mask = 0
    for sq in squares:
        mask |= 1 << sq
    return mask


def _build_pawn_attacker_masks() -> tuple[tuple[int, ...], tuple[int, ...]]:
    """[by_color][target] -> squares a pawn of *by_color* attacks *target* from.

    White pawns attack upward, so they sit one rank below the target;
    black pawns one rank above.
    """
    masks: list[tuple[int, ...]] = []
    for rank_step in (-1, 1):
        per_square: list[int] = []
        for sq in range(64):
            file_idx = sq & 7
            rank_idx = sq >> 3
            mask = 0
            for df in (-1, 1):
                if on_board(file_idx + df, rank_idx + rank_step):
                    mask |= 1 << make_square(file_idx + df, rank_idx + rank_step)
            per_square.append(mask)
        masks.append(tuple(per_square))
    return (masks[0], masks[1])


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while on_board(af, ar):
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
_KNIGHT_ATTACK_MASKS = tuple(_build_mask(t) for t in KNIGHT_TARGETS)
_KING_ATTACK_MASKS = tuple(_build_mask(t) for t in KING_TARGETS)
_PAWN_ATTACKER_MASKS = _build_pawn_attacker_masks()

BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Queries ----------------------------------------------------------------


def _slider_on_rays(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    kinds: tuple[PieceType, PieceType],
) -> bool:
    for ray in rays:
        for sq in ray:
            piece = board[sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in kinds:
                return True
            break
    return False


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    if (
        board.pieces_bitboard(by_color, PieceType.PAWN)
        & _PAWN_ATTACKER_MASKS[int(by_color)][sq]
    ):
        return True

    if board.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_ATTACK_MASKS[sq]:
        return True

    if board.pieces_bitboard(by_color, PieceType.KING) & _KING_ATTACK_MASKS[sq]:
        return True

    has_queen = bool(board.pieces_bitboard(by_color, PieceType.QUEEN))

    if (has_queen or board.pieces_bitboard(by_color, PieceType.ROOK)) and (
        _slider_on_rays(board, ROOK_RAYS[sq], by_color, _ORTHOGONAL_SLIDERS)
    ):
        return True

    if (has_queen or board.pieces_bitboard(by_color, PieceType.BISHOP)) and (
        _slider_on_rays(board, BISHOP_RAYS[sq], by_color, _DIAGONAL_SLIDERS)
    ):
        return True

    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    A side with no king on the board is never in check.
    """
    if not board.pieces_bitboard(color, PieceType.KING):
        return False
    return is_square_attacked(board, board.king_square(color), color.opposite)
