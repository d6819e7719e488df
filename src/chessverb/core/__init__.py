"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from chessverb.core import apply_uci, legal_moves, new_game, status

    pos = new_game()
    for lm in legal_moves(pos):
        print(lm.uci, lm.san)
    pos, played = apply_uci(pos, "e2e4")
"""

from chessverb.core.api import LegalMove, apply_uci, legal_moves, new_game, status
from chessverb.core.attacks import is_in_check, is_square_attacked
from chessverb.core.board import Board
from chessverb.core.enums import CastlingRights, Color, GameStatus, PieceType
from chessverb.core.errors import IllegalAction, MalformedEncoding
from chessverb.core.material import (
    PIECE_VALUES,
    CapturedPieces,
    MaterialBalance,
    captured_pieces,
    material_balance,
)
from chessverb.core.move import Move
from chessverb.core.move_generator import MoveGenerator
from chessverb.core.notation import (
    STARTING_FEN,
    move_to_san,
    parse_san,
    position_from_fen,
    position_to_fen,
)
from chessverb.core.piece import Piece
from chessverb.core.position import Position
from chessverb.core.rules import Rules
from chessverb.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameStatus",
    "PieceType",
    # Errors
    "IllegalAction",
    "MalformedEncoding",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "is_in_check",
    "is_square_attacked",
    # Material
    "PIECE_VALUES",
    "CapturedPieces",
    "MaterialBalance",
    "captured_pieces",
    "material_balance",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "parse_san",
    "position_from_fen",
    "position_to_fen",
    # Engine boundary
    "LegalMove",
    "apply_uci",
    "legal_moves",
    "new_game",
    "status",
]
