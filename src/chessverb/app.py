"""Console entry point: two humans play over stdin/stdout."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from typing import TextIO

from chessverb.core.errors import IllegalAction, MalformedEncoding
from chessverb.core.notation.san import parse_san
from chessverb.game.config import GameMode, SessionConfig
from chessverb.game.session import GameSession

_LOGGER = logging.getLogger(__name__)

_HELP = "Enter moves as UCI (e2e4) or SAN (Nf3). Commands: moves, pgn, resign, quit."


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chessverb", description="Play chess in the terminal.")
    parser.add_argument("--fen", help="start from this position instead of the default")
    return parser


def _to_uci(session: GameSession, text: str) -> str:
    """Accept either notation; SAN is resolved against the current position."""
    if any(lm.uci == text for lm in session.legal_moves()):
        return text
    try:
        return parse_san(session.position, text).uci
    except IllegalAction:
        return text  # let the session reject it


def run_console(session: GameSession, stdin: TextIO, stdout: TextIO) -> int:
    """Drive *session* from *stdin* until the game ends or input runs out."""

    def say(text: str = "") -> None:
        print(text, file=stdout)

    say(_HELP)
    session.start()
    while not session.is_game_over:
        say()
        say(str(session.position.board))
        say(f"{session.current_player.name} to move ({session.side_to_move})")
        line = stdin.readline()
        if not line:
            break
        text = line.strip()
        if not text:
            continue
        if text == "quit":
            break
        if text == "moves":
            say(" ".join(lm.san for lm in session.legal_moves()))
            continue
        if text == "pgn":
            say(session.to_pgn())
            continue
        if text == "resign":
            session.resign(session.current_player.id)
            break

        action = session.make_move(session.current_player.id, _to_uci(session, text))
        if not action.ok:
            say(f"{action.error}: {text}")
            continue
        say(f"{session.history[-1].ply}. {session.history[-1].san}")

    say()
    say(f"Result: {session.status}")
    say(session.to_pgn())
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Launch a human-vs-human console game."""
    args = _build_parser().parse_args(argv)
    try:
        config = SessionConfig.from_env()
    except ValueError as exc:
        _LOGGER.error("Bad configuration: %s", exc)
        return 2
    logging.basicConfig(level=config.log_level)

    config = replace(config, mode=GameMode.HUMAN_VS_HUMAN)
    if args.fen:
        config = replace(config, start_fen=args.fen)

    try:
        session = GameSession.from_config(config)
    except MalformedEncoding as exc:
        _LOGGER.error("Cannot start game: %s", exc)
        return 2
    return run_console(session, sys.stdin, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
