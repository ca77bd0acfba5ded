"""Position string (FEN) parsing and serialization."""

from __future__ import annotations

import logging

from dexchess.core.board import Board
from dexchess.core.enums import CastlingRights, Color, PieceType
from dexchess.core.errors import MalformedPosition
from dexchess.core.piece import Piece
from dexchess.core.types import (
    Square,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def parse_board(fen: str) -> Board:
    """Parse a six-field position string into a :class:`Board`.

    Raises :class:`MalformedPosition` with a player-facing explanation when
    the text is not a valid position.
    """
    parts = fen.split()
    if len(parts) < 6:
        raise MalformedPosition(
            "Missing components! The syntax must be "
            "`positions turn castling enpassant halfmoves fullmoves`"
        )
    if len(parts) > 6:
        raise MalformedPosition(f"Too many components in position: {fen!r}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    board = Board()
    _parse_placement(placement, board)

    # Side to move
    if side_part == "w":
        board.side_to_move = Color.WHITE
    elif side_part == "b":
        board.side_to_move = Color.BLACK
    else:
        raise MalformedPosition(f"Invalid side to move: {side_part!r} (use w or b)")

    # Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None:
                raise MalformedPosition(f"Invalid castling field: {castling_part!r}")
            castling |= right
    board.castling = castling
    board.normalize_castling()

    # En passant
    if ep_part != "-":
        try:
            board.en_passant = parse_square(ep_part)
        except ValueError:
            raise MalformedPosition(
                "Unable to parse en-passant square into a valid square (a1-h8)"
            ) from None
        expected_rank = 5 if board.side_to_move == Color.WHITE else 2
        if rank_of(board.en_passant) != expected_rank:
            raise MalformedPosition(
                f"En-passant square {ep_part} can't be captured by the side to move."
            )

    # Clocks
    try:
        board.halfmove_clock = int(half_part)
    except ValueError:
        raise MalformedPosition("Unable to parse halfmoves into an integer.") from None
    if board.halfmove_clock < 0:
        raise MalformedPosition("Halfmoves can't be negative.")

    try:
        board.fullmove_number = int(full_part)
    except ValueError:
        raise MalformedPosition("Unable to parse fullmoves into an integer.") from None
    if board.fullmove_number < 1:
        raise MalformedPosition("Fullmoves must be a positive integer.")

    _LOGGER.debug("Parsed position %s", fen)
    return board


def _parse_placement(placement: str, board: Board) -> None:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedPosition(
            "Positions expression doesn't have the correct number of ranks "
            "separated by '/'"
        )

    kings: dict[Color, Square] = {}
    for row, rank_text in enumerate(ranks):
        rank_label = 8 - row
        file = 0
        for ch in rank_text:
            if ch in "12345678":
                file += int(ch)
                if file > 8:
                    raise MalformedPosition(
                        f"Rank {rank_label} contains more than 8 positions."
                    )
                continue
            if file >= 8:
                raise MalformedPosition(
                    f"Rank {rank_label} contains more than 8 positions."
                )
            try:
                piece = Piece.from_char(ch)
            except ValueError:
                raise MalformedPosition(
                    f'Rank {rank_label} contains an invalid piece: "{ch}"'
                ) from None
            sq = make_square(file, row)
            if piece.piece_type == PieceType.KING:
                if piece.color in kings:
                    color_name = piece.color.name.lower()
                    raise MalformedPosition(
                        f"This board contains more than one {color_name} king!"
                    )
                kings[piece.color] = sq
            board[sq] = piece
            file += 1
        if file != 8:
            raise MalformedPosition(
                f"Rank {rank_label} contains fewer than 8 positions."
            )

    if len(kings) != 2:
        raise MalformedPosition("Both colors must at least have a king!")


def serialize_board(board: Board) -> str:
    """Serialise a :class:`Board` to its canonical position string."""
    # 1. Placement
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for file in range(8):
            piece = board[make_square(file, row)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    placement = "/".join(rows)

    # 2. Side
    side_str = "w" if board.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if board.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(board.en_passant) if board.en_passant is not None else "-"

    return (
        f"{placement} {side_str} {castling_str} {ep_str} "
        f"{board.halfmove_clock} {board.fullmove_number}"
    )
