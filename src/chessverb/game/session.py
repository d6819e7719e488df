"""GameSession — one game between two agents.

Owns the current position, the move history and the verb action log.
Every verb checks who is asking before touching the engine; the engine
itself knows nothing about agents or turn ownership.
"""

from __future__ import annotations

import itertools
import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from chessverb.core import api
from chessverb.core.api import LegalMove
from chessverb.core.attacks import is_in_check
from chessverb.core.enums import Color, GameStatus
from chessverb.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from chessverb.core.notation.models import PgnMove
from chessverb.core.notation.pgn import build_pgn, pgn_result_token
from chessverb.core.position import Position
from chessverb.game.config import GameMode, SessionConfig
from chessverb.game.interfaces import GamePhase, IPlayer
from chessverb.game.player import AIPlayer, HumanPlayer
from chessverb.game.records import MoveRecord, VerbAction
from chessverb.game.verbs import CHESS_VERBS

_LOGGER = logging.getLogger(__name__)

_ids = itertools.count(1)


def _next_id(prefix: str) -> str:
    """Opaque, human-debuggable identifier, unique within the process."""
    return f"{prefix}_{int(time.time() * 1000)}_{next(_ids)}"


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, "GameSession"], None]
GameOverCallback = Callable[[GameStatus], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Turn-taking wrapper around the engine for two agents.

    Single-writer: the owner serialises calls on one session.
    """

    def __init__(
        self,
        white: IPlayer,
        black: IPlayer,
        fen: str | None = None,
        session_id: str | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if white.color != Color.WHITE or black.color != Color.BLACK:
            raise ValueError("Players must be passed as (white, black)")
        if white.id == black.id:
            raise ValueError(f"Both players share the id {white.id!r}")

        self.id = session_id or _next_id("game")
        self.start_fen = fen or STARTING_FEN
        self.position: Position = position_from_fen(self.start_fen)
        self.history: list[MoveRecord] = []
        self.action_log: list[VerbAction] = []
        self.created_at = time.time()
        self.events = GameEvents()
        self._players: dict[Color, IPlayer] = {Color.WHITE: white, Color.BLACK: black}
        self._status = api.status(self.position)
        self._phase = GamePhase.GAME_OVER if self._status.is_over else GamePhase.AWAITING_MOVE
        self._rng = rng or random.Random()
        self._prompting = False
        self._prompt_pending = False

    @classmethod
    def from_config(cls, config: SessionConfig) -> GameSession:
        """Create a session with the players implied by ``config.mode``."""
        white: IPlayer
        black: IPlayer
        if config.mode == GameMode.HUMAN_VS_AI:
            white = HumanPlayer(Color.WHITE, "You", agent_id="human")
            black = AIPlayer(Color.BLACK, config.black_model, name="AI (Black)")
        elif config.mode == GameMode.AI_VS_AI:
            white = AIPlayer(Color.WHITE, config.white_model, name="AI (White)")
            black = AIPlayer(Color.BLACK, config.black_model, name="AI (Black)")
        else:
            white = HumanPlayer(Color.WHITE, "White")
            black = HumanPlayer(Color.BLACK, "Black")
        return cls(white, black, fen=config.start_fen)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def is_game_over(self) -> bool:
        return self._status.is_over

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def current_player(self) -> IPlayer:
        return self._players[self.position.side_to_move]

    @property
    def ply_count(self) -> int:
        return len(self.history)

    @property
    def fen(self) -> str:
        return position_to_fen(self.position)

    def player(self, color: Color) -> IPlayer:
        return self._players[color]

    def player_by_id(self, agent_id: str) -> IPlayer | None:
        for p in self._players.values():
            if p.id == agent_id:
                return p
        return None

    def legal_moves(self) -> list[LegalMove]:
        """Legal moves without logging a verb; empty once the game is over."""
        if self.is_game_over:
            return []
        return api.legal_moves(self.position)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> None:
        """Prompt whoever is to move. Call once after wiring up listeners."""
        if self.is_game_over:
            self._set_phase(GamePhase.GAME_OVER)
            return
        self._prompt_current_player()

    # ── Read verbs ───────────────────────────────────────────────────────

    def get_state(self, agent_id: str) -> VerbAction:
        return self._record(
            "get_state",
            agent_id,
            {},
            {
                "fen": self.fen,
                "turn": self.side_to_move.fen_char,
                "status": str(self._status),
                "ply": self.ply_count,
                "in_check": is_in_check(self.position.board, self.side_to_move),
            },
        )

    def get_legal_moves(self, agent_id: str) -> tuple[VerbAction, list[LegalMove]]:
        moves = self.legal_moves()
        action = self._record(
            "get_legal_moves",
            agent_id,
            {},
            {"count": len(moves), "moves": [m.uci for m in moves]},
        )
        return action, moves

    def get_history(self, agent_id: str) -> VerbAction:
        return self._record(
            "get_history",
            agent_id,
            {},
            {
                "moves": [
                    {"san": r.san, "uci": r.uci, "ply": r.ply} for r in self.history
                ],
                "total_moves": self.ply_count,
            },
        )

    # ── Write verbs ──────────────────────────────────────────────────────

    def make_move(
        self, agent_id: str, uci: str, reasoning: str | None = None
    ) -> VerbAction:
        """Play *uci* for *agent_id*.

        Rejections (wrong agent, finished game, illegal move) come back as
        an action with ``ok == False``; nothing is raised.
        """
        args = {"uci": uci}

        if self.current_player.id != agent_id:
            return self._reject("make_move", agent_id, args, "Not your turn", reasoning)
        if self.is_game_over:
            return self._reject("make_move", agent_id, args, "Game is over", reasoning)

        applied = api.apply_uci(self.position, uci)
        if applied is None:
            return self._reject("make_move", agent_id, args, "Illegal move", reasoning)

        next_position, played = applied
        self.position = next_position
        record = MoveRecord.from_legal_move(
            played,
            fen_after=self.fen,
            ply=self.ply_count + 1,
            timestamp=time.time(),
            reasoning=reasoning,
        )
        self.history.append(record)
        self._status = api.status(self.position)

        action = self._record(
            "make_move",
            agent_id,
            args,
            {
                "ok": True,
                "san": record.san,
                "new_fen": record.fen_after,
                "status": str(self._status),
                "ply": record.ply,
            },
            reasoning,
        )

        for cb in self.events.on_move:
            cb(record, self)

        if self.is_game_over:
            self._finish()
        else:
            self._prompt_current_player()
        return action

    def make_move_or_fallback(
        self, agent_id: str, uci: str, reasoning: str | None = None
    ) -> VerbAction:
        """Like :meth:`make_move`, but an unusable *uci* is replaced.

        Meant for AI bridges whose model answer may not be a legal move.
        A legal move sharing the answer's origin and destination is
        preferred (this fixes a missing promotion letter); otherwise a
        random legal move is played. The reasoning records the correction.
        """
        if self.current_player.id != agent_id or self.is_game_over:
            return self.make_move(agent_id, uci, reasoning)

        legal = [m.uci for m in self.legal_moves()]
        if uci in legal:
            return self.make_move(agent_id, uci, reasoning)

        replacement = None
        if len(uci) >= 4:
            replacement = next((m for m in legal if m.startswith(uci[:4])), None)
        if replacement is None:
            replacement = self._rng.choice(legal)

        _LOGGER.info("%s: %s sent %r, playing %s instead", self.id, agent_id, uci, replacement)
        note = "move corrected to valid option"
        return self.make_move(
            agent_id, replacement, f"{reasoning} ({note})" if reasoning else note
        )

    def resign(self, agent_id: str) -> VerbAction:
        resigning = self.player_by_id(agent_id)
        if resigning is None:
            return self._reject("resign", agent_id, {}, "Unknown agent")
        if self.is_game_over:
            return self._reject("resign", agent_id, {}, "Game is over")

        if resigning.color == Color.WHITE:
            self._status = GameStatus.RESIGNATION_BLACK_WINS
        else:
            self._status = GameStatus.RESIGNATION_WHITE_WINS

        opponent = self._players[resigning.color.opposite]
        if not opponent.is_human:
            opponent.cancel()

        action = self._record(
            "resign",
            agent_id,
            {},
            {"ok": True, "winner": str(resigning.color.opposite), "status": str(self._status)},
        )
        self._finish()
        return action

    # ── Export ───────────────────────────────────────────────────────────

    def to_pgn(self) -> str:
        """PGN of the game so far; AI reasoning is kept as move comments."""
        start = position_from_fen(self.start_fen)
        headers = {
            "Event": "chessverb game",
            "Date": time.strftime("%Y.%m.%d", time.localtime(self.created_at)),
            "White": self._players[Color.WHITE].name,
            "Black": self._players[Color.BLACK].name,
            "Result": pgn_result_token(self._status),
        }
        if self.start_fen != STARTING_FEN:
            headers["SetUp"] = "1"
            headers["FEN"] = self.start_fen
        moves = [PgnMove(san=r.san, comment=r.reasoning or "") for r in self.history]
        return build_pgn(
            headers,
            moves,
            headers["Result"],
            first_fullmove=start.fullmove_number,
            black_first=start.side_to_move == Color.BLACK,
        )

    # ── Internal helpers ─────────────────────────────────────────────────

    def _record(
        self,
        verb: str,
        agent_id: str,
        args: dict[str, Any],
        result: dict[str, Any],
        reasoning: str | None = None,
    ) -> VerbAction:
        action = VerbAction(
            id=_next_id("act"),
            verb=CHESS_VERBS.qualified_name(verb),
            agent=agent_id,
            args={"game_id": self.id, **args},
            result=result,
            timestamp=time.time(),
            reasoning=reasoning,
        )
        self.action_log.append(action)
        _LOGGER.debug("%s %s by %s -> %s", self.id, action.verb, agent_id, result)
        return action

    def _reject(
        self,
        verb: str,
        agent_id: str,
        args: dict[str, Any],
        error: str,
        reasoning: str | None = None,
    ) -> VerbAction:
        _LOGGER.info("%s: %s rejected for %s: %s %s", self.id, verb, agent_id, error, args)
        return self._record(verb, agent_id, args, {"ok": False, "error": error}, reasoning)

    def _prompt_current_player(self) -> None:
        # A bridge that moves from inside request_move re-enters here; the
        # outermost call keeps prompting so the stack stays flat.
        self._prompt_pending = True
        if self._prompting:
            return
        self._prompting = True
        try:
            while self._prompt_pending and not self.is_game_over:
                self._prompt_pending = False
                cp = self.current_player
                if cp.is_human:
                    self._set_phase(GamePhase.AWAITING_MOVE)
                else:
                    self._set_phase(GamePhase.THINKING)
                    cp.request_move(self)
        finally:
            self._prompting = False

    def _finish(self) -> None:
        _LOGGER.info("%s finished: %s after %d plies", self.id, self._status, self.ply_count)
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(self._status)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
