"""Parsing of human-typed move text.

Three forms are understood, tried in this order:

* castling: ``O-O`` / ``O-O-O`` (any case, zeros accepted);
* explicit squares: ``e2e4``, ``b1xc3``, ``g1 f3``;
* abbreviated algebraic: ``Nf3``, ``exd5``, ``Rad1``, ``N1c3``, ``e8=N``.

The capture marker is optional and never trusted: capture and en-passant
flags are read from the board.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from dexchess.core.enums import PieceType
from dexchess.core.errors import (
    AmbiguousMove,
    IllegalMove,
    MalformedMoveText,
    NoSuchMove,
)
from dexchess.core.legality import castling_move
from dexchess.core.move import Move
from dexchess.core.piece import LETTER_PIECES, PIECE_NAMES
from dexchess.core.piece_rules import is_valid, pawn_direction
from dexchess.core.types import Square, file_of, parse_square, row_of, square_name

if TYPE_CHECKING:
    from dexchess.core.board import Board

_LOGGER = logging.getLogger(__name__)

_PROMOTION_RE = re.compile(r"=([A-Za-z])(?:[+#!?.]|$)")
_SHORT_CASTLE_RE = re.compile(r"^[O0]-[O0](?:[+#!?.\s]|$)")
_LONG_CASTLE_RE = re.compile(r"^[O0]-[O0]-[O0](?:[+#!?.\s]|$)")
_EXPLICIT_RE = re.compile(r"^(?P<origin>[a-h][1-8])[x\s]*(?P<target>[a-hA-H][1-8])")
_ABBREVIATED_RE = re.compile(
    r"^(?P<piece>[A-Z])?(?P<file>[a-h])?(?P<rank>[1-8])?x?(?P<target>[a-hA-H][1-8])"
)


def parse_move(
    text: str,
    board: Board,
    default_promotion: PieceType = PieceType.QUEEN,
) -> Move:
    """Turn *text* into a :class:`Move` for the side to move on *board*.

    The move is checked against the piece rules but not for king safety;
    run :func:`dexchess.core.legality.is_legal` before applying it.

    Abbreviated text counts every piece the rules allow to reach the target,
    pinned ones included. When one of two candidates is pinned the text
    still needs a file or rank filter (``Nfd3``), or :class:`AmbiguousMove`
    is raised.
    """
    text = text.strip()
    promotion = _parse_promotion(text)

    upper = text.upper()
    if _LONG_CASTLE_RE.match(upper):
        return castling_move(board, kingside=False)
    if _SHORT_CASTLE_RE.match(upper):
        return castling_move(board, kingside=True)

    explicit = _EXPLICIT_RE.match(text)
    if explicit:
        origin = parse_square(explicit["origin"])
        target = parse_square(explicit["target"].lower())
        piece = board[origin]
        if piece is None or piece.color != board.side_to_move:
            raise NoSuchMove(
                f"The specified origin square ({explicit['origin']}) "
                "doesn't contain a valid piece"
            )
        if not is_valid(piece.piece_type, origin, target, board):
            raise IllegalMove("The targeted piece cannot move to the desired square!")
        move = build_move(board, origin, target, promotion, default_promotion)
        _LOGGER.debug("Parsed %r as %s", text, move)
        return move

    abbreviated = _ABBREVIATED_RE.match(text)
    if abbreviated:
        move = _parse_abbreviated(abbreviated, board, promotion, default_promotion)
        _LOGGER.debug("Parsed %r as %s", text, move)
        return move

    raise MalformedMoveText(f"Unable to understand the move {text!r}.")


def _parse_promotion(text: str) -> PieceType | None:
    match = _PROMOTION_RE.search(text)
    if match is None:
        return None
    letter = match.group(1).upper()
    piece_type = LETTER_PIECES.get(letter)
    if piece_type is None:
        raise MalformedMoveText(f'"{letter}" cannot be parsed to a valid piece!')
    if piece_type in (PieceType.KING, PieceType.PAWN):
        raise IllegalMove("You can't promote a piece to a King or a Pawn.")
    return piece_type


def _parse_abbreviated(
    match: re.Match[str],
    board: Board,
    promotion: PieceType | None,
    default_promotion: PieceType,
) -> Move:
    target = parse_square(match["target"].lower())

    letter = match["piece"]
    if letter is None:
        piece_type = PieceType.PAWN
    else:
        if letter not in LETTER_PIECES:
            raise MalformedMoveText(f'"{letter}" cannot be parsed to a valid piece!')
        piece_type = LETTER_PIECES[letter]

    file_filter = ord(match["file"]) - ord("a") if match["file"] else None
    row_filter = ord("8") - ord(match["rank"]) if match["rank"] else None

    candidates = [
        sq
        for sq in board.pieces(board.side_to_move, piece_type)
        if (file_filter is None or file_of(sq) == file_filter)
        and (row_filter is None or row_of(sq) == row_filter)
        and is_valid(piece_type, sq, target, board)
    ]

    name = PIECE_NAMES[piece_type]
    if not candidates:
        where = ""
        if match["file"]:
            where += f" in file {match['file']}"
        if match["rank"]:
            where += f" in rank {match['rank']}"
        raise NoSuchMove(
            f"Invalid move! Unable to find any {name}{where} "
            f"which can move to {square_name(target)}"
        )
    if len(candidates) > 1:
        names = [square_name(sq) for sq in candidates]
        raise AmbiguousMove(
            f"Ambiguous move! A {name} can move to that position from: "
            f"{', '.join(names)}",
            candidates=names,
        )
    return build_move(board, candidates[0], target, promotion, default_promotion)


def build_move(
    board: Board,
    origin: Square,
    target: Square,
    promotion: PieceType | None = None,
    default_promotion: PieceType = PieceType.QUEEN,
) -> Move:
    """Move from *origin* to *target* with flags inferred from *board*."""
    piece = board[origin]
    is_pawn = piece is not None and piece.piece_type == PieceType.PAWN

    if is_pawn and _is_last_row(board, target):
        promotion = promotion or default_promotion
    else:
        promotion = None

    is_en_passant = (
        is_pawn
        and target == board.en_passant
        and board.is_empty(target)
        and file_of(target) != file_of(origin)
    )
    return Move(
        origin,
        target,
        is_capture=is_en_passant or not board.is_empty(target),
        is_en_passant=is_en_passant,
        promotion=promotion,
    )


def _is_last_row(board: Board, target: Square) -> bool:
    last_row = 0 if pawn_direction(board.side_to_move) < 0 else 7
    return row_of(target) == last_row


def move_to_text(move: Move) -> str:
    """Stored text form of *move* (inverse of :meth:`Move.from_stored`)."""
    return str(move)
