"""Notation package: position strings and typed move text."""

from dexchess.core.notation.fen import STARTING_FEN, parse_board, serialize_board
from dexchess.core.notation.move_text import build_move, move_to_text, parse_move

__all__ = [
    "STARTING_FEN",
    "parse_board",
    "serialize_board",
    "build_move",
    "move_to_text",
    "parse_move",
]
