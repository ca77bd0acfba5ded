"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from dexchess.core import STARTING_FEN, apply_move, is_legal, outcome
    from dexchess.core import parse_board, parse_move, serialize_board

    board = parse_board(STARTING_FEN)
    move = parse_move("e4", board)
    is_legal(move, board)
    apply_move(board, move)
    print(serialize_board(board), outcome(board))
"""

from dexchess.core.board import Board, apply_move
from dexchess.core.enums import CastlingRights, Color, Outcome, PieceType
from dexchess.core.errors import (
    AmbiguousMove,
    ChessError,
    IllegalMove,
    MalformedMoveText,
    MalformedPosition,
    MalformedRecord,
    NoSuchMove,
)
from dexchess.core.legality import is_in_check, is_legal, leaves_king_safe
from dexchess.core.move import Move
from dexchess.core.move_generator import MoveGenerator, legal_moves
from dexchess.core.notation import (
    STARTING_FEN,
    move_to_text,
    parse_board,
    parse_move,
    serialize_board,
)
from dexchess.core.outcome import Rules, outcome
from dexchess.core.piece import Piece
from dexchess.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "Outcome",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Errors
    "AmbiguousMove",
    "ChessError",
    "IllegalMove",
    "MalformedMoveText",
    "MalformedPosition",
    "MalformedRecord",
    "NoSuchMove",
    # Engine surface
    "STARTING_FEN",
    "apply_move",
    "is_in_check",
    "is_legal",
    "leaves_king_safe",
    "legal_moves",
    "move_to_text",
    "outcome",
    "parse_board",
    "parse_move",
    "serialize_board",
]
