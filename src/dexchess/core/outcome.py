"""High-level chess rules: check, checkmate, stalemate, draw detection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dexchess.core.enums import Color, Outcome, PieceType
from dexchess.core.legality import (
    find_attackers,
    is_piece_pinned,
    leaves_king_safe,
)
from dexchess.core.notation.move_text import build_move
from dexchess.core.piece_rules import (
    can_pin,
    has_any_destination,
    is_valid,
    pawn_direction,
)
from dexchess.core.types import Square, file_of, is_on_board, make_square, row_of, sign

if TYPE_CHECKING:
    from dexchess.core.board import Board

_LOGGER = logging.getLogger(__name__)

_HEAVY_OR_PAWN = (PieceType.QUEEN, PieceType.ROOK, PieceType.PAWN)


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def is_fifty_move_rule(board: Board) -> bool:
        return board.halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """No queen, rook or pawn left and at most one minor piece per side."""
        for color in Color:
            if any(board.count(color, pt) for pt in _HEAVY_OR_PAWN):
                return False
            minors = board.count(color, PieceType.BISHOP) + board.count(
                color, PieceType.KNIGHT
            )
            if minors > 1:
                return False
        return True

    @staticmethod
    def attackers_of_king(board: Board) -> list[Square]:
        """Opponent pieces giving check (at most two are reported)."""
        king_sq = board.king_square(board.side_to_move)
        return find_attackers(board, king_sq, flip=True)

    @staticmethod
    def has_legal_moves(board: Board, attackers: list[Square] | None = None) -> bool:
        """Does the side to move have at least one legal move?

        *attackers* are the pieces currently checking the king; pass an empty
        list (or ``None``) when not in check.
        """
        attackers = attackers or []
        if attackers:
            return _has_reply_to_check(board, attackers)
        return _has_quiet_move(board)

    @staticmethod
    def outcome(board: Board) -> Outcome:
        """Classify *board* for the side to move."""
        if Rules.is_fifty_move_rule(board):
            result = Outcome.FIFTY_MOVE_RULE
        elif Rules.is_insufficient_material(board):
            result = Outcome.INSUFFICIENT_MATERIAL
        else:
            attackers = Rules.attackers_of_king(board)
            in_check = bool(attackers)
            no_move = not Rules.has_legal_moves(board, attackers)
            if in_check and no_move:
                result = Outcome.CHECKMATE
            elif in_check:
                result = Outcome.CHECK
            elif no_move:
                result = Outcome.DRAW
            else:
                result = Outcome.PLAYING

        if result.is_terminal:
            _LOGGER.info("Game over: %s (%s to move)", result, board.side_to_move)
        return result


def outcome(board: Board) -> Outcome:
    """Classify the position after a move; see :meth:`Rules.outcome`."""
    return Rules.outcome(board)


# -- Legal-move existence ----------------------------------------------------


def _own_pieces(board: Board, king_sq: Square) -> list[Square]:
    return [sq for sq in board.all_pieces(board.side_to_move) if sq != king_sq]


def _king_can_step(board: Board, king_sq: Square) -> bool:
    return has_any_destination(PieceType.KING, king_sq, board, must_be_safe=True)


def _tries(board: Board, origin: Square, target: Square) -> bool:
    """Rule-valid and does not leave the king attacked."""
    piece = board[origin]
    if piece is None or not is_valid(piece.piece_type, origin, target, board):
        return False
    return leaves_king_safe(build_move(board, origin, target), board)


def _pawn_targets(board: Board, origin: Square) -> list[Square]:
    advance = pawn_direction(board.side_to_move)
    f0, r0 = file_of(origin), row_of(origin)
    row = r0 + advance
    if not 0 <= row < 8:
        return []
    targets = [make_square(f, row) for f in (f0 - 1, f0, f0 + 1) if 0 <= f < 8]
    if 0 <= r0 + 2 * advance < 8:
        targets.append(make_square(f0, r0 + 2 * advance))
    return targets


def _has_quiet_move(board: Board) -> bool:
    king_sq = board.king_square(board.side_to_move)
    pinned: list[Square] = []

    for sq in _own_pieces(board, king_sq):
        if is_piece_pinned(board, sq, king_sq):
            pinned.append(sq)
            continue
        piece = board[sq]
        assert piece is not None
        if not has_any_destination(piece.piece_type, sq, board):
            continue
        if piece.piece_type != PieceType.PAWN:
            return True
        # En passant can expose the king along the rank, so pawns confirm.
        if any(_tries(board, sq, target) for target in _pawn_targets(board, sq)):
            return True

    for sq in pinned:
        # A pinned piece may still slide along the pin axis.
        df = sign(file_of(king_sq) - file_of(sq))
        dr = sign(row_of(king_sq) - row_of(sq))
        for direction in (1, -1):
            f = file_of(sq) + df * direction
            r = row_of(sq) + dr * direction
            if is_on_board(f, r) and _tries(board, sq, make_square(f, r)):
                return True

    return _king_can_step(board, king_sq)


def _has_reply_to_check(board: Board, attackers: list[Square]) -> bool:
    king_sq = board.king_square(board.side_to_move)
    if _king_can_step(board, king_sq):
        return True
    if len(attackers) > 1:
        # Double check: only the king can move.
        return False

    attacker_sq = attackers[0]
    attacker = board[attacker_sq]
    assert attacker is not None

    targets = [attacker_sq]
    if can_pin(attacker.piece_type):
        step = sign(file_of(attacker_sq) - file_of(king_sq)) + (
            sign(row_of(attacker_sq) - row_of(king_sq)) * 8
        )
        sq = king_sq + step
        while sq != attacker_sq:
            targets.append(sq)
            sq += step
    if (
        attacker.piece_type == PieceType.PAWN
        and board.en_passant is not None
        and file_of(board.en_passant) == file_of(attacker_sq)
    ):
        targets.append(board.en_passant)

    for sq in _own_pieces(board, king_sq):
        if is_piece_pinned(board, sq, king_sq):
            continue
        if any(_tries(board, sq, target) for target in targets):
            return True
    return False
