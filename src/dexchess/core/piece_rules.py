"""Per-piece movement rules.

Each piece kind has two pure predicates:

``is_valid(origin, target, board, flip)``
    Can the piece on *origin* travel to *target*? The piece must belong to the
    side to move, or to the other side when *flip* is set, which is how attack
    queries look at the board from the opponent's perspective without
    touching ``side_to_move``.

``has_any_destination(origin, board, flip, must_be_safe)``
    Does the piece have at least one pseudo-legal destination? Sliding pieces
    only need to look at their adjacent squares. ``must_be_safe`` (used for
    kings) also requires the destination not to be controlled by the
    opponent.

Dispatch goes through a ``match`` on :class:`PieceType`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from dexchess.core.enums import Color, PieceType
from dexchess.core.piece import Piece
from dexchess.core.types import Square, file_of, is_on_board, make_square, row_of, sign

if TYPE_CHECKING:
    from dexchess.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)
ORTHOGONAL_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))

_SLIDERS = frozenset({PieceType.ROOK, PieceType.BISHOP, PieceType.QUEEN})


def mover_color(board: Board, flip: bool) -> Color:
    """Colour whose pieces are being moved from the given perspective."""
    return board.side_to_move.opposite if flip else board.side_to_move


def pawn_direction(color: Color) -> int:
    """Row delta of a pawn advance (white moves towards row 0)."""
    return -1 if color == Color.WHITE else 1


def pawn_home_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def can_pin(piece_type: PieceType) -> bool:
    """Sliding pieces are the only ones able to pin."""
    return piece_type in _SLIDERS


# -- Public dispatch ---------------------------------------------------------


def is_valid(
    piece_type: PieceType,
    origin: Square,
    target: Square,
    board: Board,
    flip: bool = False,
) -> bool:
    if not _basic_validate(piece_type, origin, target, board, flip):
        return False

    match piece_type:
        case PieceType.ROOK:
            return _orthogonal_clear(origin, target, board)
        case PieceType.BISHOP:
            return _diagonal_clear(origin, target, board)
        case PieceType.QUEEN:
            return _orthogonal_clear(origin, target, board) or _diagonal_clear(
                origin, target, board
            )
        case PieceType.KNIGHT:
            return _knight_valid(origin, target)
        case PieceType.KING:
            return _king_valid(origin, target)
        case PieceType.PAWN:
            return _pawn_valid(origin, target, board, flip)
        case _:
            assert_never(piece_type)


def has_any_destination(
    piece_type: PieceType,
    origin: Square,
    board: Board,
    flip: bool = False,
    must_be_safe: bool = False,
) -> bool:
    match piece_type:
        case PieceType.ROOK:
            return _has_step(origin, board, flip, ORTHOGONAL_DIRS, must_be_safe)
        case PieceType.BISHOP:
            return _has_step(origin, board, flip, DIAGONAL_DIRS, must_be_safe)
        case PieceType.QUEEN:
            return _has_step(
                origin, board, flip, DIAGONAL_DIRS + ORTHOGONAL_DIRS, must_be_safe
            )
        case PieceType.KNIGHT:
            return _has_step(origin, board, flip, KNIGHT_OFFSETS, must_be_safe)
        case PieceType.KING:
            return _has_step(
                origin, board, flip, DIAGONAL_DIRS + ORTHOGONAL_DIRS, must_be_safe
            )
        case PieceType.PAWN:
            return _pawn_has_destination(origin, board, flip)
        case _:
            assert_never(piece_type)


def piece_is_valid(
    origin: Square, target: Square, board: Board, flip: bool = False
) -> bool:
    """:func:`is_valid` for whatever piece stands on *origin*."""
    piece = board[origin]
    if piece is None:
        return False
    return is_valid(piece.piece_type, origin, target, board, flip)


# -- Shared checks -----------------------------------------------------------


def _basic_validate(
    piece_type: PieceType, origin: Square, target: Square, board: Board, flip: bool
) -> bool:
    if origin == target:
        return False
    piece = board[origin]
    if piece is None or piece.piece_type != piece_type:
        return False
    if piece.color != mover_color(board, flip):
        return False
    occupant = board[target]
    return occupant is None or occupant.color != piece.color


def _orthogonal_clear(origin: Square, target: Square, board: Board) -> bool:
    df = file_of(target) - file_of(origin)
    dr = row_of(target) - row_of(origin)
    if df != 0 and dr != 0:
        return False
    return _path_clear(origin, target, sign(df), sign(dr), board)


def _diagonal_clear(origin: Square, target: Square, board: Board) -> bool:
    df = file_of(target) - file_of(origin)
    dr = row_of(target) - row_of(origin)
    if abs(df) != abs(dr):
        return False
    return _path_clear(origin, target, sign(df), sign(dr), board)


def _path_clear(
    origin: Square, target: Square, step_file: int, step_row: int, board: Board
) -> bool:
    """Every square strictly between *origin* and *target* is empty."""
    step = step_file + step_row * 8
    sq = origin + step
    while sq != target:
        if not board.is_empty(sq):
            return False
        sq += step
    return True


def _knight_valid(origin: Square, target: Square) -> bool:
    df = abs(file_of(target) - file_of(origin))
    dr = abs(row_of(target) - row_of(origin))
    return {df, dr} == {1, 2}


def _king_valid(origin: Square, target: Square) -> bool:
    df = abs(file_of(target) - file_of(origin))
    dr = abs(row_of(target) - row_of(origin))
    return df <= 1 and dr <= 1


def _pawn_valid(origin: Square, target: Square, board: Board, flip: bool) -> bool:
    color = mover_color(board, flip)
    advance = pawn_direction(color)
    f0, r0 = file_of(origin), row_of(origin)
    ff, rf = file_of(target), row_of(target)

    if not board.is_empty(target) or (target == board.en_passant and f0 != ff):
        return abs(f0 - ff) == 1 and rf == r0 + advance

    if ff != f0:
        return False
    if rf == r0 + advance:
        return True
    return (
        r0 == pawn_home_row(color)
        and rf == r0 + 2 * advance
        and board.is_empty(make_square(f0, r0 + advance))
    )


# -- Destination probes ------------------------------------------------------


def _has_step(
    origin: Square,
    board: Board,
    flip: bool,
    offsets: tuple[tuple[int, int], ...],
    must_be_safe: bool,
) -> bool:
    f0, r0 = file_of(origin), row_of(origin)
    vacated: Board | None = None
    for df, dr in offsets:
        f, r = f0 + df, r0 + dr
        if not is_on_board(f, r):
            continue
        sq = make_square(f, r)
        if board.is_own(sq, flip):
            continue
        if not must_be_safe:
            return True
        if vacated is None:
            # Sliding attackers must see through the square being left.
            vacated = board.copy()
            vacated[origin] = None
        if not is_controlled(vacated, sq, not flip):
            return True
    return False


def _pawn_has_destination(origin: Square, board: Board, flip: bool) -> bool:
    advance = pawn_direction(mover_color(board, flip))
    f0, r0 = file_of(origin), row_of(origin)
    r = r0 + advance
    if not 0 <= r < 8:
        return False
    if board.is_empty(make_square(f0, r)):
        return True
    for f in (f0 - 1, f0 + 1):
        if not 0 <= f < 8:
            continue
        sq = make_square(f, r)
        if board.en_passant == sq or board.is_enemy(sq, flip):
            return True
    return False


# -- Attack queries ----------------------------------------------------------


def is_threatened(board: Board, square: Square, flip: bool = False) -> bool:
    """Can a piece of the side to move (the other side if *flip*) move onto *square*?

    Only counts real moves, so an empty square is not attacked by pawns;
    see :func:`is_controlled` for that.
    """
    attacker_color = mover_color(board, flip)
    for sq in board.all_pieces(attacker_color):
        if piece_is_valid(sq, square, board, flip):
            return True
    return False


def is_controlled(board: Board, square: Square, flip: bool = False) -> bool:
    """Like :func:`is_threatened` but also counts defended and empty squares.

    The square is probed as if it held an enemy pawn, which makes pawn
    diagonals and protected pieces count.
    """
    probe = board.copy()
    defender = mover_color(board, flip).opposite
    probe[square] = Piece(defender, PieceType.PAWN)
    return is_threatened(probe, square, flip)
