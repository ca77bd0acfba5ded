"""Legal move enumeration.

Built on the same piece rules and legality checks used to validate typed
moves, so every generated move is one :func:`parse_move` would accept.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dexchess.core.errors import IllegalMove
from dexchess.core.legality import castling_move, is_legal, leaves_king_safe
from dexchess.core.notation.move_text import build_move
from dexchess.core.piece_rules import is_valid

if TYPE_CHECKING:
    from dexchess.core.board import Board
    from dexchess.core.move import Move


class MoveGenerator:
    """Generates legal moves for the side to move on a :class:`Board`.

    Promotions are generated once, to a Queen.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    def generate_legal_moves(self) -> list[Move]:
        board = self._board
        moves: list[Move] = []
        for origin in board.all_pieces(board.side_to_move):
            piece = board[origin]
            assert piece is not None
            for target in range(64):
                if not is_valid(piece.piece_type, origin, target, board):
                    continue
                move = build_move(board, origin, target)
                if leaves_king_safe(move, board):
                    moves.append(move)
        moves.extend(self._castling_moves())
        return moves

    def _castling_moves(self) -> list[Move]:
        moves: list[Move] = []
        for kingside in (True, False):
            try:
                move = castling_move(self._board, kingside)
                is_legal(move, self._board)
            except IllegalMove:
                continue
            moves.append(move)
        return moves

    def has_legal_moves(self) -> bool:
        return bool(self.generate_legal_moves())


def legal_moves(board: Board) -> list[Move]:
    """Every legal move for the side to move on *board*."""
    return MoveGenerator(board).generate_legal_moves()
