"""Material balance and captured-piece tally."""

from conftest import play

from chessverb.core.enums import Color, PieceType
from chessverb.core.material import captured_pieces, material_balance
from chessverb.core.notation import position_from_fen
from chessverb.core.position import Position


class TestMaterialBalance:
    def test_starting_position(self, start: Position) -> None:
        balance = material_balance(start)
        assert (balance.white, balance.black) == (39, 39)
        assert balance.advantage == 0
        assert balance.description == "Material is equal"

    def test_after_capture(self, start: Position) -> None:
        balance = material_balance(play(start, "e2e4", "d7d5", "e4d5"))
        assert (balance.white, balance.black) == (39, 38)
        assert balance.description == "White is ahead by 1 points"

    def test_black_ahead(self) -> None:
        balance = material_balance(position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1"))
        assert balance.advantage == -5
        assert balance.description == "Black is ahead by 5 points"


class TestCapturedPieces:
    def test_none_at_start(self, start: Position) -> None:
        captured = captured_pieces(start)
        assert captured.white_lost == ()
        assert captured.black_lost == ()
        assert captured.description == "No pieces captured yet"

    def test_pawn_taken(self, start: Position) -> None:
        captured = captured_pieces(play(start, "e2e4", "d7d5", "e4d5"))
        assert captured.black_lost == (PieceType.PAWN,)
        assert captured.lost_by(Color.WHITE) == ()
        assert captured.description == "Black has lost: Pawn"

    def test_both_sides_listed_most_valuable_first(self, start: Position) -> None:
        pos = play(start, "e2e4", "d7d5", "e4d5", "d8d5", "b1c3", "d5d2", "c1d2")
        captured = captured_pieces(pos)
        assert captured.white_lost == (PieceType.PAWN, PieceType.PAWN)
        assert captured.black_lost == (PieceType.QUEEN, PieceType.PAWN)
        assert captured.description == (
            "White has lost: Pawn, Pawn\nBlack has lost: Queen, Pawn"
        )

    def test_promotion_never_counts_negative(self) -> None:
        pos = position_from_fen("4Q3/8/8/8/8/8/k7/4K3 b - - 0 1")
        lost = captured_pieces(pos).white_lost
        assert PieceType.QUEEN not in lost
        assert lost.count(PieceType.PAWN) == 8
        assert len(lost) == 14
