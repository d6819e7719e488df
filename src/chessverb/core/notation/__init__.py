"""Notation package: FEN / SAN / PGN parsing and serialization."""

from chessverb.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from chessverb.core.notation.models import PgnMove
from chessverb.core.notation.pgn import (
    build_pgn,
    pgn_movetext_from_moves,
    pgn_movetext_from_sans,
    pgn_result_token,
)
from chessverb.core.notation.san import move_to_san, parse_san

__all__ = [
    "STARTING_FEN",
    "PgnMove",
    "position_from_fen",
    "position_to_fen",
    "move_to_san",
    "parse_san",
    "pgn_result_token",
    "pgn_movetext_from_sans",
    "pgn_movetext_from_moves",
    "build_pgn",
]
