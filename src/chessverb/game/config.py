"""Session configuration.

Defaults can be overridden from the environment::

    CHESSVERB_START_FEN    starting position (FEN)
    CHESSVERB_MODE         human-vs-ai | ai-vs-ai | human-vs-human
    CHESSVERB_WHITE_MODEL  model id for an AI white player
    CHESSVERB_BLACK_MODEL  model id for an AI black player
    CHESSVERB_LOG_LEVEL    logging level name for the console front-end
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from chessverb.core.notation.fen import STARTING_FEN

_ENV_PREFIX = "CHESSVERB_"


class GameMode(str, Enum):
    HUMAN_VS_AI = "human-vs-ai"
    AI_VS_AI = "ai-vs-ai"
    HUMAN_VS_HUMAN = "human-vs-human"


@dataclass(frozen=True)
class SessionConfig:
    start_fen: str = STARTING_FEN
    mode: GameMode = GameMode.HUMAN_VS_AI
    white_model: str = "gpt-4o-mini"
    black_model: str = "claude-3-haiku-20240307"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SessionConfig:
        """Build a config from ``CHESSVERB_*`` variables over the defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()

        mode_text = env.get(f"{_ENV_PREFIX}MODE")
        if mode_text is None:
            mode = defaults.mode
        else:
            try:
                mode = GameMode(mode_text.strip().lower())
            except ValueError:
                raise ValueError(f"Unknown {_ENV_PREFIX}MODE: {mode_text!r}") from None

        log_level = env.get(f"{_ENV_PREFIX}LOG_LEVEL", defaults.log_level).strip().upper()
        if log_level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown {_ENV_PREFIX}LOG_LEVEL: {log_level!r}")

        return cls(
            start_fen=env.get(f"{_ENV_PREFIX}START_FEN", defaults.start_fen),
            mode=mode,
            white_model=env.get(f"{_ENV_PREFIX}WHITE_MODEL", defaults.white_model),
            black_model=env.get(f"{_ENV_PREFIX}BLACK_MODEL", defaults.black_model),
            log_level=log_level,
        )
