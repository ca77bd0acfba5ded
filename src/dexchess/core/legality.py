"""Legality validation: king safety, pins and castling paths.

Candidate moves are tried on a :meth:`Board.copy` and the copy is thrown
away afterwards, so the canonical board is never touched by a rejected move.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dexchess.core.enums import CastlingRights, Color, PieceType
from dexchess.core.errors import IllegalMove
from dexchess.core.move import Move
from dexchess.core.piece_rules import (
    can_pin,
    is_controlled,
    is_threatened,
    is_valid,
    mover_color,
    piece_is_valid,
)
from dexchess.core.types import (
    Square,
    file_of,
    is_on_board,
    make_square,
    row_of,
    sign,
    square_name,
)

if TYPE_CHECKING:
    from dexchess.core.board import Board

__all__ = [
    "castling_move",
    "find_attackers",
    "is_controlled",
    "is_in_check",
    "is_legal",
    "is_piece_pinned",
    "is_threatened",
    "leaves_king_safe",
]

KING_UNDER_ATTACK = "King will be under attack - invalid move!"
CASTLE_UNDER_ATTACK = "King or rook will be under attack - invalid castle!"
KING_CAPTURE = "A king can't be captured, the position is broken!"


def find_attackers(board: Board, square: Square, flip: bool = False) -> list[Square]:
    """Attackers of *square* among the side to move (the other side if *flip*).

    Scanning stops once a second attacker is found: callers only need to
    tell single from double attacks.
    """
    attackers: list[Square] = []
    for sq in board.all_pieces(mover_color(board, flip)):
        if piece_is_valid(sq, square, board, flip):
            attackers.append(sq)
            if len(attackers) > 1:
                break
    return attackers


def is_in_check(board: Board) -> bool:
    """Is the king of the side to move attacked?"""
    king_sq = board.king_square(board.side_to_move)
    return is_threatened(board, king_sq, flip=True)


def is_piece_pinned(board: Board, square: Square, king_square: Square) -> bool:
    """Is the piece on *square* pinned against the king on *king_square*?

    Walks from the king through *square*; the piece is pinned when the first
    piece found beyond it is an enemy slider able to reach *square*.
    """
    if square == king_square:
        return False
    piece = board[square]
    if piece is None:
        return False

    df = file_of(square) - file_of(king_square)
    dr = row_of(square) - row_of(king_square)
    if df != 0 and dr != 0 and abs(df) != abs(dr):
        return False

    step_file, step_row = sign(df), sign(dr)
    f = file_of(king_square) + step_file
    r = row_of(king_square) + step_row
    before_piece = True
    # The pinner belongs to the opponent of the pinned piece.
    pinner_flip = piece.color == board.side_to_move
    while is_on_board(f, r):
        sq = make_square(f, r)
        if sq == square:
            before_piece = False
        elif not board.is_empty(sq):
            if before_piece:
                return False
            pinner = board[sq]
            assert pinner is not None
            return can_pin(pinner.piece_type) and is_valid(
                pinner.piece_type, sq, square, board, pinner_flip
            )
        f += step_file
        r += step_row
    return False


def castling_move(board: Board, kingside: bool) -> Move:
    """Castling move for the side to move, if rights and path allow it.

    Raises :class:`IllegalMove` when the right is gone or a piece stands
    between king and rook. Attacks are checked later by :func:`is_legal`.
    """
    color = board.side_to_move
    if kingside:
        right = CastlingRights.kingside(color)
        unavailable = "Short castling is currently unavailable!"
    else:
        right = CastlingRights.queenside(color)
        unavailable = "Long castling is currently unavailable!"
    if not board.castling & right:
        raise IllegalMove(unavailable)

    row = 7 if color == Color.WHITE else 0
    origin = make_square(4, row)
    target = make_square(6 if kingside else 2, row)
    rook = make_square(7 if kingside else 0, row)
    step = 1 if kingside else -1
    for sq in range(origin + step, rook, step):
        if not board.is_empty(sq):
            side = "king-side" if kingside else "queen-side"
            raise IllegalMove(
                f"Can't castle {side}! A piece is obstructing the castle in "
                f"{square_name(sq)}."
            )
    return Move(origin, target, is_castle=True)


def is_legal(move: Move, board: Board) -> None:
    """Raise :class:`IllegalMove` if *move* leaves or passes the king through attack."""
    if move.is_castle:
        _check_castle(move, board)
        return

    captured = board[move.target]
    if captured is not None and captured.piece_type == PieceType.KING:
        raise IllegalMove(KING_CAPTURE)

    mover = board.side_to_move
    trial = board.copy()
    trial.apply_move(move)
    if is_threatened(trial, trial.king_square(mover)):
        raise IllegalMove(KING_UNDER_ATTACK)


def _check_castle(move: Move, board: Board) -> None:
    castling_move(board, kingside=move.target > move.origin)
    king = board[move.origin]
    if king is None or king.piece_type != PieceType.KING:
        raise IllegalMove(CASTLE_UNDER_ATTACK)

    step = 1 if move.target > move.origin else -1
    for sq in range(move.origin, move.target + step, step):
        trial = board.copy()
        trial[move.origin] = None
        trial[sq] = king
        if is_threatened(trial, sq, flip=True):
            raise IllegalMove(CASTLE_UNDER_ATTACK)


def leaves_king_safe(move: Move, board: Board) -> bool:
    """Non-raising form of :func:`is_legal`."""
    try:
        is_legal(move, board)
    except IllegalMove:
        return False
    return True
