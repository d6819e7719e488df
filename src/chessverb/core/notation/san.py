"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

from collections.abc import Sequence

from chessverb.core import attacks
from chessverb.core.enums import PieceType
from chessverb.core.errors import IllegalAction
from chessverb.core.move import Move
from chessverb.core.move_generator import MoveGenerator
from chessverb.core.position import Position
from chessverb.core.types import (
    FILE_NAMES,
    RANK_NAMES,
    file_of,
    parse_square,
    rank_of,
    square_name,
)

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}


def _disambiguation(
    position: Position, move: Move, piece_type: PieceType, legal: Sequence[Move]
) -> str:
    board = position.board
    rivals = [
        m
        for m in legal
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and (p := board[m.from_sq]) is not None
        and p.piece_type == piece_type
    ]
    if not rivals:
        return ""
    if not any(file_of(m.from_sq) == file_of(move.from_sq) for m in rivals):
        return FILE_NAMES[file_of(move.from_sq)]
    if not any(rank_of(m.from_sq) == rank_of(move.from_sq) for m in rivals):
        return RANK_NAMES[rank_of(move.from_sq)]
    return square_name(move.from_sq)


def move_to_san(
    position: Position,
    move: Move,
    legal_moves: Sequence[Move] | None = None,
) -> str:
    """Convert a legal *move* to SAN given the *position* before the move.

    *legal_moves* is the full legal move list of *position*, used for
    disambiguation; it is generated when omitted.
    """
    board = position.board
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(move.from_sq)}")

    king_step = file_of(move.to_sq) - file_of(move.from_sq)
    if piece.piece_type == PieceType.KING and abs(king_step) == 2:
        san = "O-O" if king_step > 0 else "O-O-O"
    elif piece.piece_type == PieceType.PAWN:
        san = ""
        if board[move.to_sq] is not None or move.to_sq == position.en_passant:
            san += FILE_NAMES[file_of(move.from_sq)] + "x"
        san += square_name(move.to_sq)
        if move.promotion is not None:
            san += "=" + _SAN_PIECE[move.promotion]
    else:
        if legal_moves is None:
            legal_moves = MoveGenerator(position).generate_legal_moves()
        san = _SAN_PIECE[piece.piece_type]
        san += _disambiguation(position, move, piece.piece_type, legal_moves)
        if board[move.to_sq] is not None:
            san += "x"
        san += square_name(move.to_sq)

    # Check / checkmate suffix
    after = position.apply(move)
    if attacks.is_in_check(after.board, after.side_to_move):
        san += "#" if not MoveGenerator(after).generate_legal_moves() else "+"

    return san


def parse_san(position: Position, san: str) -> Move:
    """Parse a SAN string into a legal :class:`Move` given the current *position*.

    Raises:
        IllegalAction: if *san* is malformed, names no legal move, or is
            ambiguous.
    """
    legal = MoveGenerator(position).generate_legal_moves()
    board = position.board
    clean = san.strip().rstrip("+#!?")

    if clean in ("O-O", "0-0", "O-O-O", "0-0-0"):
        step = 2 if clean in ("O-O", "0-0") else -2
        for m in legal:
            p = board[m.from_sq]
            if (
                p is not None
                and p.piece_type == PieceType.KING
                and file_of(m.to_sq) - file_of(m.from_sq) == step
            ):
                return m
        raise IllegalAction(f"Illegal move: {san}")

    promotion: PieceType | None = None
    if "=" in clean:
        clean, _, promo_text = clean.partition("=")
        promotion = _SAN_PIECE_REV.get(promo_text)
        if promotion is None or promotion == PieceType.KING:
            raise IllegalAction(f"Invalid promotion in SAN: {san}")

    try:
        to_sq = parse_square(clean[-2:])
    except ValueError:
        raise IllegalAction(f"Invalid SAN: {san}") from None
    clean = clean[:-2].removesuffix("x")

    if clean and clean[0] in _SAN_PIECE_REV:
        piece_type = _SAN_PIECE_REV[clean[0]]
        clean = clean[1:]
    else:
        piece_type = PieceType.PAWN

    from_file: int | None = None
    from_rank: int | None = None
    for ch in clean:
        if ch in FILE_NAMES:
            from_file = FILE_NAMES.index(ch)
        elif ch in RANK_NAMES:
            from_rank = RANK_NAMES.index(ch)
        else:
            raise IllegalAction(f"Invalid SAN: {san}")

    candidates: list[Move] = []
    for m in legal:
        p = board[m.from_sq]
        if p is None or p.piece_type != piece_type or m.to_sq != to_sq:
            continue
        if m.promotion != promotion:
            continue
        if from_file is not None and file_of(m.from_sq) != from_file:
            continue
        if from_rank is not None and rank_of(m.from_sq) != from_rank:
            continue
        candidates.append(m)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise IllegalAction(f"Illegal move: {san}")
    raise IllegalAction(f"Ambiguous move: {san} → {[str(m) for m in candidates]}")
