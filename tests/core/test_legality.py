"""Tests for king safety, pins and castling legality."""

import pytest

from dexchess.core.errors import IllegalMove
from dexchess.core.legality import (
    find_attackers,
    is_controlled,
    is_in_check,
    is_legal,
    is_piece_pinned,
    is_threatened,
    leaves_king_safe,
)
from dexchess.core.move import Move
from dexchess.core.move_generator import legal_moves
from dexchess.core.notation import parse_board, parse_move
from dexchess.core.types import A1, B4, C1, D2, E1, E2, E5, G1, H4


def _play(fen: str, text: str) -> None:
    board = parse_board(fen)
    is_legal(parse_move(text, board), board)


class TestCheck:
    def test_start_not_in_check(self) -> None:
        board = parse_board(
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
        )
        assert not is_in_check(board)

    def test_fools_mate_in_check(self) -> None:
        # After 1.f3 e5 2.g4 Qh4 white is in check
        board = parse_board(
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        )
        assert is_in_check(board)
        assert find_attackers(board, E1, flip=True) == [H4]

    def test_double_check_attackers(self) -> None:
        board = parse_board("4k3/8/8/8/1b6/8/8/r3K3 w - - 0 1")
        assert sorted(find_attackers(board, E1, flip=True)) == [B4, A1]


class TestKingSafety:
    def test_king_cannot_step_into_attack(self) -> None:
        with pytest.raises(IllegalMove, match="King will be under attack"):
            _play("4k3/3r4/8/8/8/8/8/4K3 w - - 0 1", "Kd1")

    def test_king_may_step_away(self) -> None:
        _play("4k3/3r4/8/8/8/8/8/4K3 w - - 0 1", "Kf1")

    def test_king_cannot_capture_defended_piece(self) -> None:
        with pytest.raises(IllegalMove):
            _play("4k3/8/8/8/8/2b5/3p4/4K3 w - - 0 1", "Kxd2")

    def test_move_must_answer_check(self) -> None:
        with pytest.raises(IllegalMove):
            _play("4k3/8/8/8/8/8/8/r3K2N w - - 0 1", "Nf2")

    def test_king_capture_rejected(self) -> None:
        # Black is in check with white to move.
        with pytest.raises(IllegalMove, match="king can't be captured"):
            _play("4k3/8/8/8/8/8/8/4RK2 w - - 0 1", "Rxe8")

    def test_king_capture_not_generated(self) -> None:
        board = parse_board("4k3/8/8/8/8/8/8/4RK2 w - - 0 1")
        assert all(str(m) != "e1e8x" for m in legal_moves(board))

    def test_rejection_leaves_board_untouched(self) -> None:
        fen = "4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1"
        board = parse_board(fen)
        before = board.copy()
        assert not leaves_king_safe(parse_move("Bd3", board), board)
        assert board == before


class TestPins:
    def test_pinned_bishop_cannot_leave_file(self) -> None:
        board = parse_board("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        assert is_piece_pinned(board, E2, E1)
        with pytest.raises(IllegalMove, match="King will be under attack"):
            is_legal(parse_move("Bd3", board), board)

    def test_pinned_rook_slides_along_pin(self) -> None:
        fen = "4k3/4r3/8/8/8/8/4R3/4K3 w - - 0 1"
        _play(fen, "Re5")
        _play(fen, "Rxe7")
        with pytest.raises(IllegalMove):
            _play(fen, "Rd2")

    def test_blocked_line_is_not_a_pin(self) -> None:
        board = parse_board("4k3/4r3/8/8/4P3/8/4B3/4K3 w - - 0 1")
        assert not is_piece_pinned(board, E2, E1)

    def test_knight_cannot_pin(self) -> None:
        board = parse_board("4k3/8/8/8/8/4n3/4B3/4K3 w - - 0 1")
        assert not is_piece_pinned(board, E2, E1)

    def test_en_passant_exposing_rank(self) -> None:
        with pytest.raises(IllegalMove):
            _play("8/8/8/K2pP2r/8/8/8/7k w - d6 0 1", "exd6")


class TestCastling:
    def test_through_attacked_square(self) -> None:
        fen = "4k3/8/8/8/8/8/5r2/R3K2R w KQ - 0 1"
        with pytest.raises(IllegalMove, match="King or rook will be under attack"):
            _play(fen, "O-O")
        _play(fen, "O-O-O")

    def test_out_of_check(self) -> None:
        with pytest.raises(IllegalMove, match="invalid castle"):
            _play("4k3/4r3/8/8/8/8/8/R3K2R w KQ - 0 1", "O-O")

    def test_into_check(self) -> None:
        with pytest.raises(IllegalMove, match="invalid castle"):
            _play("4k3/6r1/8/8/8/8/8/R3K2R w KQ - 0 1", "O-O")

    def test_pawn_guarding_transit_square(self) -> None:
        fen = "4k3/8/8/8/8/8/6p1/R3K2R w KQ - 0 1"
        with pytest.raises(IllegalMove, match="invalid castle"):
            _play(fen, "O-O")
        _play(fen, "O-O-O")

    def test_attacked_b_file_does_not_stop_long_castle(self) -> None:
        _play("1r2k3/8/8/8/8/8/8/R3K2R w KQ - 0 1", "O-O-O")

    def test_black_through_attacked_square(self) -> None:
        with pytest.raises(IllegalMove, match="invalid castle"):
            _play("r3k2r/8/8/8/8/8/8/3RK3 b kq - 0 1", "O-O-O")


class TestAttackQueries:
    def test_threatened_from_mover_perspective(self) -> None:
        board = parse_board("4k3/4r3/8/8/8/8/8/4K3 w - - 0 1")
        assert is_threatened(board, E1, flip=True)
        assert not is_threatened(board, E1)

    def test_pawn_attack_on_empty_square_needs_control(self) -> None:
        board = parse_board("4k3/8/8/8/8/8/3p4/4K3 w - - 0 1")
        assert not is_threatened(board, C1, flip=True)
        assert is_controlled(board, C1, flip=True)

    def test_defended_piece_is_controlled(self) -> None:
        board = parse_board("4k3/8/8/8/8/2b5/3p4/4K3 w - - 0 1")
        assert not is_threatened(board, D2, flip=True)
        assert is_controlled(board, D2, flip=True)

    def test_probe_does_not_touch_board(self) -> None:
        board = parse_board("4k3/8/8/8/8/8/3p4/4K3 w - - 0 1")
        before = board.copy()
        is_controlled(board, G1, flip=True)
        is_controlled(board, E5, flip=True)
        assert board == before

    def test_castle_is_legal_with_clear_path(self) -> None:
        board = parse_board("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert leaves_king_safe(Move(E1, G1, is_castle=True), board)
