"""Tests for Board."""

import pytest

from dexchess.core.board import Board, apply_move
from dexchess.core.enums import CastlingRights, Color, PieceType
from dexchess.core.move import Move
from dexchess.core.notation import STARTING_FEN, parse_board
from dexchess.core.piece import Piece
from dexchess.core.types import (
    A1, C1, D1, E1, F1, G1, H1,
    A2, E2, A3,
    A8, E8, G8,
    A7, D7, E7, F6, H3,
    D5, E5, D6, E3, E4, G3, F3,
)


class TestBoardInitial:
    def test_matches_starting_fen(self) -> None:
        assert Board.initial() == parse_board(STARTING_FEN)

    def test_kings(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_white_pawns(self) -> None:
        board = Board.initial()
        pawns = board.pieces(Color.WHITE, PieceType.PAWN)
        assert len(pawns) == 8
        assert all(48 <= sq < 56 for sq in pawns)  # rank 2

    def test_black_pawns(self) -> None:
        board = Board.initial()
        pawns = board.pieces(Color.BLACK, PieceType.PAWN)
        assert len(pawns) == 8
        assert all(8 <= sq < 16 for sq in pawns)  # rank 7

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for sq in range(16, 48):
            assert board[sq] is None


class TestBoardOperations:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(Color.WHITE, PieceType.PAWN)
        board[E4] = piece
        assert board[E4] == piece
        assert board.is_empty(E2)

    def test_copy_independence(self) -> None:
        board = Board.initial()
        copy = board.copy()
        assert board == copy
        copy[E1] = None
        assert board != copy
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert board.king_square(Color.WHITE) == E1

    def test_king_cache_follows_assignment(self) -> None:
        board = Board.initial()
        board[E1] = None
        board[E3] = Piece(Color.WHITE, PieceType.KING)
        assert board.king_square(Color.WHITE) == E3

    def test_king_square_missing_raises(self) -> None:
        board = Board()
        with pytest.raises(ValueError, match="No WHITE king"):
            board.king_square(Color.WHITE)

    def test_all_pieces_count(self) -> None:
        board = Board.initial()
        assert len(board.all_pieces(Color.WHITE)) == 16
        assert len(board.all_pieces(Color.BLACK)) == 16
        assert board.count(Color.BLACK, PieceType.KNIGHT) == 2

    def test_own_and_enemy_follow_side_to_move(self) -> None:
        board = Board.initial()
        assert board.is_own(E2)
        assert board.is_enemy(E7)
        assert board.is_own(E7, flip=True)
        assert not board.is_own(E4)
        assert not board.is_enemy(E4)

    def test_repr_not_empty(self) -> None:
        text = repr(Board.initial())
        assert "K" in text
        assert "a b c d e f g h" in text


class TestApplyMove:
    def test_double_push_sets_en_passant(self) -> None:
        board = Board.initial()
        board.apply_move(Move(E2, E4))
        assert board[E4] == Piece(Color.WHITE, PieceType.PAWN)
        assert board[E2] is None
        assert board.en_passant == E3
        assert board.side_to_move == Color.BLACK
        assert board.fullmove_number == 1
        assert board.halfmove_clock == 0

    def test_en_passant_cleared_after_next_move(self) -> None:
        board = Board.initial()
        board.apply_move(Move(E2, E4))
        board.apply_move(Move(D7, D6))
        assert board.en_passant is None
        assert board.fullmove_number == 2

    def test_quiet_piece_move_increments_halfmove_clock(self) -> None:
        board = Board.initial()
        board.apply_move(Move(G1, F3))
        assert board.halfmove_clock == 1
        board.apply_move(Move(G8, F6))
        assert board.halfmove_clock == 2

    def test_capture_resets_halfmove_clock(self) -> None:
        board = parse_board("4k3/8/8/3p4/8/8/8/3QK3 w - - 7 30")
        board.apply_move(Move(D1, D5, is_capture=True))
        assert board.halfmove_clock == 0
        assert board[D5] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_en_passant_removes_victim(self) -> None:
        board = parse_board("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        board.apply_move(Move(E5, D6, is_capture=True, is_en_passant=True))
        assert board[D6] == Piece(Color.WHITE, PieceType.PAWN)
        assert board[D5] is None
        assert board[E5] is None

    def test_kingside_castle_moves_rook(self) -> None:
        board = parse_board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        board.apply_move(Move(E1, G1, is_castle=True))
        assert board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert board[H1] is None
        assert board.king_square(Color.WHITE) == G1
        assert board.castling == CastlingRights.BLACK_BOTH

    def test_queenside_castle_moves_rook(self) -> None:
        board = parse_board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        board.apply_move(Move(E1, C1, is_castle=True))
        assert board[C1] == Piece(Color.WHITE, PieceType.KING)
        assert board[D1] == Piece(Color.WHITE, PieceType.ROOK)
        assert board[A1] is None

    def test_king_move_clears_both_rights(self) -> None:
        board = parse_board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        board.apply_move(Move(E1, F1))
        assert board.castling == CastlingRights.BLACK_BOTH

    def test_rook_move_clears_one_right(self) -> None:
        board = parse_board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        board.apply_move(Move(H1, H3))
        assert board.castling == (
            CastlingRights.WHITE_QUEENSIDE | CastlingRights.BLACK_BOTH
        )

    def test_rook_captured_on_corner_clears_right(self) -> None:
        board = parse_board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        board.apply_move(Move(A1, A8, is_capture=True))
        assert board.castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_KINGSIDE
        )

    def test_promotion_defaults_to_queen(self) -> None:
        board = parse_board("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        board.apply_move(Move(A7, A8))
        assert board[A8] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_promotion_to_requested_piece(self) -> None:
        board = parse_board("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        board.apply_move(Move(A7, A8, promotion=PieceType.KNIGHT))
        assert board[A8] == Piece(Color.WHITE, PieceType.KNIGHT)

    def test_module_function_returns_board(self) -> None:
        board = Board.initial()
        result = apply_move(board, Move(A2, A3))
        assert result is board
        assert board[A3] == Piece(Color.WHITE, PieceType.PAWN)

    def test_missing_piece_raises(self) -> None:
        board = Board.initial()
        with pytest.raises(ValueError, match="No piece"):
            board.apply_move(Move(E4, E5))

    def test_knight_move_keeps_castling(self) -> None:
        board = Board.initial()
        board.apply_move(Move(G1, F3))
        assert board.castling == CastlingRights.ALL
        assert board[F3] == Piece(Color.WHITE, PieceType.KNIGHT)
        assert board[G3] is None
