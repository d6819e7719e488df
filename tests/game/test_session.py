"""Tests for GameSession — turn ownership, verbs, history, export."""

import random

import pytest

from chessverb.core.enums import Color, GameStatus, PieceType
from chessverb.core.errors import MalformedEncoding
from chessverb.game.config import GameMode, SessionConfig
from chessverb.game.interfaces import GamePhase
from chessverb.game.player import AIPlayer, HumanPlayer
from chessverb.game.records import MoveRecord
from chessverb.game.session import GameSession

FOOLS_MATE = ["f2f3", "e7e5", "g2g4", "d8h4"]


@pytest.fixture
def session() -> GameSession:
    return GameSession(
        HumanPlayer(Color.WHITE, "Alice", agent_id="alice"),
        HumanPlayer(Color.BLACK, "Bob", agent_id="bob"),
    )


def _play(session: GameSession, *ucis: str) -> None:
    for uci in ucis:
        action = session.make_move(session.current_player.id, uci)
        assert action.ok, (uci, action.result)


class TestConstruction:
    def test_initial_state(self, session: GameSession) -> None:
        assert session.status == GameStatus.IN_PROGRESS
        assert session.phase == GamePhase.AWAITING_MOVE
        assert session.side_to_move == Color.WHITE
        assert session.current_player.id == "alice"
        assert session.ply_count == 0
        assert session.id.startswith("game_")

    def test_players_must_be_white_then_black(self) -> None:
        with pytest.raises(ValueError):
            GameSession(HumanPlayer(Color.BLACK), HumanPlayer(Color.WHITE))

    def test_player_ids_must_differ(self) -> None:
        with pytest.raises(ValueError):
            GameSession(
                HumanPlayer(Color.WHITE, agent_id="same"),
                HumanPlayer(Color.BLACK, agent_id="same"),
            )

    def test_bad_fen(self) -> None:
        with pytest.raises(MalformedEncoding):
            GameSession(HumanPlayer(Color.WHITE), HumanPlayer(Color.BLACK), fen="nonsense")

    def test_finished_position(self) -> None:
        s = GameSession(
            HumanPlayer(Color.WHITE),
            HumanPlayer(Color.BLACK),
            fen="rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3",
        )
        assert s.is_game_over
        assert s.phase == GamePhase.GAME_OVER
        assert s.legal_moves() == []
        action = s.make_move("human-white", "e2e4")
        assert action.error == "Game is over"

    def test_from_config_human_vs_ai(self) -> None:
        s = GameSession.from_config(SessionConfig(black_model="some-model"))
        assert s.player(Color.WHITE).is_human
        assert s.player(Color.WHITE).id == "human"
        assert not s.player(Color.BLACK).is_human
        assert s.player(Color.BLACK).model == "some-model"

    def test_from_config_ai_vs_ai(self) -> None:
        s = GameSession.from_config(SessionConfig(mode=GameMode.AI_VS_AI))
        assert not s.player(Color.WHITE).is_human
        assert not s.player(Color.BLACK).is_human

    def test_from_config_fen(self) -> None:
        fen = "4k3/8/8/8/8/8/8/R3K3 w - - 0 1"
        s = GameSession.from_config(
            SessionConfig(start_fen=fen, mode=GameMode.HUMAN_VS_HUMAN)
        )
        assert s.fen == fen


class TestMakeMove:
    def test_accepts_move(self, session: GameSession) -> None:
        action = session.make_move("alice", "e2e4", reasoning="centre")
        assert action.ok
        assert action.verb == "chess.make_move"
        assert action.agent == "alice"
        assert action.args == {"game_id": session.id, "uci": "e2e4"}
        assert action.result["san"] == "e4"
        assert action.result["new_fen"] == session.fen
        assert action.result["status"] == "in_progress"
        assert action.result["ply"] == 1
        assert action.reasoning == "centre"
        assert session.side_to_move == Color.BLACK

    def test_not_your_turn(self, session: GameSession) -> None:
        action = session.make_move("bob", "e7e5")
        assert not action.ok
        assert action.error == "Not your turn"
        assert session.history == []

    def test_unknown_agent_is_not_your_turn(self, session: GameSession) -> None:
        assert session.make_move("mallory", "e2e4").error == "Not your turn"

    def test_illegal_move(self, session: GameSession) -> None:
        before = session.fen
        action = session.make_move("alice", "e2e5")
        assert action.error == "Illegal move"
        assert session.fen == before
        assert session.current_player.id == "alice"

    def test_garbage_is_illegal(self, session: GameSession) -> None:
        assert session.make_move("alice", "hello").error == "Illegal move"

    def test_rejections_are_logged(self, session: GameSession) -> None:
        session.make_move("bob", "e7e5")
        session.make_move("alice", "e2e5")
        assert [a.error for a in session.action_log] == ["Not your turn", "Illegal move"]

    def test_checkmate_ends_game(self, session: GameSession) -> None:
        _play(session, *FOOLS_MATE)
        assert [r.san for r in session.history] == ["f3", "e5", "g4", "Qh4#"]
        assert session.status == GameStatus.CHECKMATE_BLACK_WINS
        assert session.phase == GamePhase.GAME_OVER
        assert session.legal_moves() == []
        assert session.make_move("alice", "e2e4").error == "Game is over"


class TestHistory:
    def test_records(self, session: GameSession) -> None:
        _play(session, "e2e4", "d7d5", "e4d5")
        history = session.history
        assert [r.ply for r in history] == [1, 2, 3]
        assert [r.uci for r in history] == ["e2e4", "d7d5", "e4d5"]
        last = history[-1]
        assert last.san == "exd5"
        assert last.piece == PieceType.PAWN
        assert last.captured == PieceType.PAWN
        assert last.was_capture
        assert not last.was_check
        assert last.fen_after == session.fen
        assert all(r.timestamp > 0 for r in history)
        assert history[0].timestamp <= history[1].timestamp <= history[2].timestamp

    def test_get_history_verb(self, session: GameSession) -> None:
        _play(session, "e2e4", "e7e5")
        action = session.get_history("bob")
        assert action.verb == "chess.get_history"
        assert action.result == {
            "moves": [
                {"san": "e4", "uci": "e2e4", "ply": 1},
                {"san": "e5", "uci": "e7e5", "ply": 2},
            ],
            "total_moves": 2,
        }


class TestReadVerbs:
    def test_get_state(self, session: GameSession) -> None:
        action = session.get_state("bob")
        assert action.ok
        assert action.verb == "chess.get_state"
        assert action.args == {"game_id": session.id}
        assert action.result["fen"] == session.fen
        assert action.result["turn"] == "w"
        assert action.result["status"] == "in_progress"
        assert action.result["ply"] == 0
        assert action.result["in_check"] is False
        assert action.id.startswith("act_")

    def test_get_state_in_check(self, session: GameSession) -> None:
        _play(session, "e2e4", "f7f6", "d1h5")
        assert session.get_state("bob").result["in_check"] is True

    def test_get_legal_moves(self, session: GameSession) -> None:
        action, moves = session.get_legal_moves("alice")
        assert action.result["count"] == 20
        assert "e2e4" in action.result["moves"]
        assert len(moves) == 20

    def test_reads_work_for_either_agent(self, session: GameSession) -> None:
        assert session.get_legal_moves("bob")[0].ok
        assert len(session.action_log) == 1

    def test_action_ids_unique(self, session: GameSession) -> None:
        session.get_state("alice")
        session.get_state("alice")
        ids = [a.id for a in session.action_log]
        assert len(set(ids)) == 2


class TestResign:
    def test_white_resigns(self, session: GameSession) -> None:
        action = session.resign("alice")
        assert action.ok
        assert action.result["winner"] == "black"
        assert session.status == GameStatus.RESIGNATION_BLACK_WINS
        assert session.phase == GamePhase.GAME_OVER

    def test_out_of_turn_resign(self, session: GameSession) -> None:
        session.resign("bob")
        assert session.status == GameStatus.RESIGNATION_WHITE_WINS

    def test_unknown_agent(self, session: GameSession) -> None:
        assert session.resign("mallory").error == "Unknown agent"
        assert session.status == GameStatus.IN_PROGRESS

    def test_after_game_over(self, session: GameSession) -> None:
        session.resign("alice")
        assert session.resign("bob").error == "Game is over"
        assert session.status == GameStatus.RESIGNATION_BLACK_WINS

    def test_cancels_thinking_ai(self) -> None:
        cancelled: list[bool] = []
        ai = AIPlayer(Color.BLACK, "m", on_cancel=lambda: cancelled.append(True))
        s = GameSession(HumanPlayer(Color.WHITE, agent_id="h"), ai)
        s.resign("h")
        assert cancelled == [True]


class TestEvents:
    def test_callbacks(self, session: GameSession) -> None:
        moves: list[MoveRecord] = []
        results: list[GameStatus] = []
        phases: list[GamePhase] = []
        session.events.on_move.append(lambda record, s: moves.append(record))
        session.events.on_game_over.append(results.append)
        session.events.on_phase_changed.append(phases.append)

        _play(session, *FOOLS_MATE)

        assert [r.uci for r in moves] == FOOLS_MATE
        assert results == [GameStatus.CHECKMATE_BLACK_WINS]
        assert phases[-1] == GamePhase.GAME_OVER


class TestAIPrompting:
    def test_bridge_replies_through_verbs(self) -> None:
        def bridge(s: GameSession) -> None:
            _, moves = s.get_legal_moves("ai-black")
            reply = "e7e5" if any(m.uci == "e7e5" for m in moves) else moves[0].uci
            s.make_move("ai-black", reply, reasoning="mirror")

        s = GameSession(
            HumanPlayer(Color.WHITE, agent_id="h"),
            AIPlayer(Color.BLACK, "m", on_request_move=bridge),
        )
        phases: list[GamePhase] = []
        s.events.on_phase_changed.append(phases.append)
        s.start()
        assert s.phase == GamePhase.AWAITING_MOVE

        s.make_move("h", "e2e4")
        assert [r.san for r in s.history] == ["e4", "e5"]
        assert s.history[-1].reasoning == "mirror"
        assert GamePhase.THINKING in phases
        assert s.phase == GamePhase.AWAITING_MOVE
        assert s.current_player.id == "h"

    def test_start_prompts_ai_white(self) -> None:
        prompted: list[GameSession] = []
        s = GameSession(
            AIPlayer(Color.WHITE, "m", on_request_move=prompted.append),
            HumanPlayer(Color.BLACK),
        )
        s.start()
        assert prompted == [s]
        assert s.phase == GamePhase.THINKING

    @pytest.mark.parametrize("seed", [7, 2024])
    def test_random_ai_game_plays_to_the_end(self, seed: int) -> None:
        rng = random.Random(seed)

        def bridge(s: GameSession) -> None:
            move = rng.choice(s.legal_moves())
            s.make_move(s.current_player.id, move.uci)

        s = GameSession(
            AIPlayer(Color.WHITE, "m", on_request_move=bridge),
            AIPlayer(Color.BLACK, "m", on_request_move=bridge),
        )
        over: list[GameStatus] = []
        s.events.on_game_over.append(over.append)
        s.start()
        assert s.is_game_over
        assert s.phase == GamePhase.GAME_OVER
        assert over == [s.status]
        assert s.ply_count == len(s.history) > 0


class TestMakeMoveOrFallback:
    PROMOTION_FEN = "8/4P3/8/8/8/8/k7/4K3 w - - 0 1"

    def _session(self, fen: str | None = None) -> GameSession:
        return GameSession(
            HumanPlayer(Color.WHITE, agent_id="w"),
            HumanPlayer(Color.BLACK, agent_id="b"),
            fen=fen,
            rng=random.Random(1),
        )

    def test_legal_move_passes_through(self) -> None:
        s = self._session()
        action = s.make_move_or_fallback("w", "e2e4", reasoning="centre")
        assert action.ok
        assert action.result["san"] == "e4"
        assert s.history[-1].reasoning == "centre"

    def test_missing_promotion_letter(self) -> None:
        s = self._session(self.PROMOTION_FEN)
        action = s.make_move_or_fallback("w", "e7e8", reasoning="promote")
        assert action.ok
        assert s.history[-1].uci.startswith("e7e8")
        assert s.history[-1].reasoning == "promote (move corrected to valid option)"

    def test_garbage_plays_a_legal_move(self) -> None:
        s = self._session()
        legal = {m.uci for m in s.legal_moves()}
        action = s.make_move_or_fallback("w", "zz")
        assert action.ok
        assert s.history[-1].uci in legal
        assert s.history[-1].reasoning == "move corrected to valid option"
        assert s.side_to_move == Color.BLACK

    def test_wrong_agent_still_rejected(self) -> None:
        s = self._session()
        action = s.make_move_or_fallback("b", "e7e5")
        assert not action.ok
        assert action.result["error"] == "Not your turn"
        assert s.ply_count == 0

    def test_finished_game_still_rejected(self) -> None:
        s = self._session()
        for uci in FOOLS_MATE:
            s.make_move(s.current_player.id, uci)
        action = s.make_move_or_fallback("w", "zz")
        assert not action.ok
        assert action.result["error"] == "Game is over"


class TestPgnExport:
    def test_standard_start(self, session: GameSession) -> None:
        _play(session, "e2e4", "e7e5", "f1c4")
        pgn = session.to_pgn()
        assert '[White "Alice"]' in pgn
        assert '[Black "Bob"]' in pgn
        assert '[Result "*"]' in pgn
        assert "SetUp" not in pgn
        assert "1. e4 e5 2. Bc4 *" in pgn

    def test_result_and_reasoning(self, session: GameSession) -> None:
        session.make_move("alice", "f2f3", reasoning="bold")
        _play(session, "e7e5", "g2g4", "d8h4")
        pgn = session.to_pgn()
        assert '[Result "0-1"]' in pgn
        assert "1. f3 {bold} e5 2. g4 Qh4# 0-1" in pgn

    def test_custom_start_black_to_move(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        s = GameSession(HumanPlayer(Color.WHITE), HumanPlayer(Color.BLACK), fen=fen)
        _play(s, "e7e5", "g1f3")
        pgn = s.to_pgn()
        assert '[SetUp "1"]' in pgn
        assert f'[FEN "{fen}"]' in pgn
        assert "1... e5 2. Nf3 *" in pgn
