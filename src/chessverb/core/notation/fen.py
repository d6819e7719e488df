"""FEN parsing and serialization."""

from __future__ import annotations

from chessverb.core.board import Board
from chessverb.core.enums import CastlingRights, Color
from chessverb.core.errors import MalformedEncoding
from chessverb.core.piece import Piece
from chessverb.core.position import Position
from chessverb.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Canonical emission order.
_CASTLING_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)
_RIGHTS_BY_LETTER = dict(_CASTLING_LETTERS)
_EMPTY_RUNS = "12345678"


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedEncoding(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                if ch not in _EMPTY_RUNS:
                    raise MalformedEncoding(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += int(ch)
            else:
                if file >= 8:
                    raise MalformedEncoding(f"Invalid FEN rank width: {fen!r}")
                board[make_square(file, rank)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise MalformedEncoding(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise MalformedEncoding(f"Invalid FEN rank width: {fen!r}")
    return board


def _parse_castling(field: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if field == "-":
        return castling
    for ch in field:
        right = _RIGHTS_BY_LETTER.get(ch)
        if right is None or castling & right:
            raise MalformedEncoding(f"Invalid FEN castling field: {field!r}")
        castling |= right
    return castling


def _parse_en_passant(field: str, side: Color) -> Square | None:
    if field == "-":
        return None
    try:
        ep = parse_square(field)
    except ValueError:
        raise MalformedEncoding(f"Invalid FEN en-passant square: {field!r}") from None
    expected_rank = 5 if side == Color.WHITE else 2
    if rank_of(ep) != expected_rank:
        raise MalformedEncoding(
            f"Invalid FEN en-passant square for side-to-move: {field!r}"
        )
    return ep


def _parse_counter(field: str, name: str, minimum: int) -> int:
    if not (field.isascii() and field.isdigit()):
        raise MalformedEncoding(f"Invalid FEN {name}: {field!r}")
    value = int(field)
    if value < minimum:
        raise MalformedEncoding(f"Invalid FEN {name}: {field!r}")
    return value


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    All six fields are required.

    Raises:
        MalformedEncoding: if any field is missing or does not parse.
    """
    parts = fen.split()
    if len(parts) != 6:
        raise MalformedEncoding(f"Invalid FEN (need 6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    board = _parse_placement(placement, fen)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise MalformedEncoding(f"Invalid FEN side-to-move field: {side_part!r}")

    return Position(
        board=board,
        side_to_move=side,
        castling=_parse_castling(castling_part),
        en_passant=_parse_en_passant(ep_part, side),
        halfmove_clock=_parse_counter(half_part, "halfmove clock", 0),
        fullmove_number=_parse_counter(full_part, "fullmove number", 1),
    )


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)

    castling_str = "".join(
        letter for letter, right in _CASTLING_LETTERS if pos.castling & right
    )
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return " ".join(
        (
            "/".join(rows),
            pos.side_to_move.fen_char,
            castling_str or "-",
            ep_str,
            str(pos.halfmove_clock),
            str(pos.fullmove_number),
        )
    )
