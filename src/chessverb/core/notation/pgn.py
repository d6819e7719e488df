"""PGN serialization helpers."""

from __future__ import annotations

from collections.abc import Sequence

from chessverb.core.enums import Color, GameStatus
from chessverb.core.notation.models import PgnMove


def pgn_result_token(status: GameStatus) -> str:
    """Convert :class:`GameStatus` to a PGN result token."""
    winner = status.winner
    if winner == Color.WHITE:
        return "1-0"
    if winner == Color.BLACK:
        return "0-1"
    if status.is_draw:
        return "1/2-1/2"
    return "*"


def pgn_movetext_from_sans(sans: Sequence[str], result_token: str) -> str:
    """Build PGN movetext from SAN moves and a result token."""
    return pgn_movetext_from_moves([PgnMove(san=san) for san in sans], result_token)


def pgn_movetext_from_moves(
    moves: Sequence[PgnMove],
    result_token: str,
    first_fullmove: int = 1,
    black_first: bool = False,
) -> str:
    """Build PGN movetext from mainline moves with optional comments.

    *first_fullmove* and *black_first* describe the starting position when
    the game did not begin from the standard setup.
    """
    parts: list[str] = []
    offset = 1 if black_first else 0
    for idx, move in enumerate(moves):
        ply = idx + offset
        move_number = first_fullmove + ply // 2
        if ply % 2 == 0:
            parts.append(f"{move_number}.")
        elif idx == 0:
            parts.append(f"{move_number}...")
        parts.append(move.san)
        if move.comment:
            # PGN comments cannot contain a closing brace.
            safe_comment = move.comment.replace("}", "]")
            parts.append(f"{{{safe_comment}}}")
    parts.append(result_token)
    return " ".join(parts)


def build_pgn(
    headers: dict[str, str],
    moves: Sequence[PgnMove],
    result_token: str,
    first_fullmove: int = 1,
    black_first: bool = False,
) -> str:
    """Build a single-game PGN document."""
    lines: list[str] = []
    for key, value in headers.items():
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        lines.append(f'[{key} "{escaped}"]')
    lines.append("")
    lines.append(
        pgn_movetext_from_moves(moves, result_token, first_fullmove, black_first)
    )
    lines.append("")
    return "\n".join(lines)
