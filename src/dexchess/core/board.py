"""Mutable board: placement, side to move, castling rights and clocks."""

from __future__ import annotations

import logging

from dexchess.core.enums import CastlingRights, Color, PieceType
from dexchess.core.move import Move
from dexchess.core.piece import Piece
from dexchess.core.types import (
    A1,
    A8,
    E1,
    E8,
    H1,
    H8,
    Square,
    file_of,
    make_square,
    row_of,
)

_LOGGER = logging.getLogger(__name__)

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}
_KING_HOMES: dict[Color, Square] = {Color.WHITE: E1, Color.BLACK: E8}


class Board:
    """Mutable chess position.

    Squares are indexed row-major from a8 (see :mod:`dexchess.core.types`).
    The king square of each colour is cached and kept current by item
    assignment, so :meth:`king_square` is O(1).
    """

    __slots__ = (
        "_squares",
        "_king_squares",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
    )

    def __init__(
        self,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._squares[sq]
        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[old_piece.color] == sq
        ):
            self._king_squares[old_piece.color] = None

        self._squares[sq] = piece
        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[piece.color] = sq

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*, in index order."""
        wanted = Piece(color, piece_type)
        return [sq for sq, piece in enumerate(self._squares) if piece == wanted]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.color == color
        ]

    def count(self, color: Color, piece_type: PieceType) -> int:
        wanted = Piece(color, piece_type)
        return sum(1 for piece in self._squares if piece == wanted)

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[color]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    def is_own(self, sq: Square, flip: bool = False) -> bool:
        """Whether *sq* holds a piece of the side to move (the other side if *flip*)."""
        piece = self._squares[sq]
        if piece is None:
            return False
        return (piece.color == self.side_to_move) != flip

    def is_enemy(self, sq: Square, flip: bool = False) -> bool:
        """Whether *sq* holds a piece of the side not to move (the mover if *flip*)."""
        piece = self._squares[sq]
        if piece is None:
            return False
        return (piece.color != self.side_to_move) != flip

    # -- Mutation -----------------------------------------------------------

    def apply_move(self, move: Move) -> None:
        """Apply *move* in place.

        The move is trusted: callers validate it first with
        :func:`dexchess.core.legality.is_legal` on a copy.
        """
        piece = self._squares[move.origin]
        if piece is None:
            raise ValueError(f"No piece on square {move.origin}")

        captured = self._squares[move.target]
        self[move.origin] = None
        self[move.target] = piece

        if move.is_en_passant:
            victim = make_square(file_of(move.target), row_of(move.origin))
            captured = self._squares[victim]
            self[victim] = None

        if move.is_castle:
            row = row_of(move.target)
            rook_from = make_square(0 if file_of(move.target) < 4 else 7, row)
            rook_to = make_square(
                (file_of(move.origin) + file_of(move.target)) // 2, row
            )
            rook = self._squares[rook_from]
            self[rook_from] = None
            if rook is None:
                rook = Piece(piece.color, PieceType.ROOK)
            self[rook_to] = rook

        is_pawn = piece.piece_type == PieceType.PAWN
        if is_pawn and abs(row_of(move.target) - row_of(move.origin)) == 2:
            self.en_passant = (move.origin + move.target) // 2
        else:
            self.en_passant = None

        if is_pawn and row_of(move.target) in (0, 7):
            self[move.target] = Piece(piece.color, move.promotion or PieceType.QUEEN)

        self._update_castling(move, piece)

        if is_pawn or captured is not None or move.is_capture:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opposite

    def _update_castling(self, move: Move, piece: Piece) -> None:
        if piece.piece_type == PieceType.KING:
            self.castling &= ~CastlingRights.both(piece.color)
        for sq in (move.origin, move.target):
            if sq in _ROOK_CORNERS:
                self.castling &= ~_ROOK_CORNERS[sq]

    def normalize_castling(self) -> CastlingRights:
        """Drop castling rights whose king or rook is off its home square.

        Returns the rights that were removed.
        """
        before = self.castling
        for color in Color:
            if self._squares[_KING_HOMES[color]] != Piece(color, PieceType.KING):
                self.castling &= ~CastlingRights.both(color)
        for corner, right in _ROOK_CORNERS.items():
            color = Color.WHITE if right & CastlingRights.WHITE_BOTH else Color.BLACK
            if self._squares[corner] != Piece(color, PieceType.ROOK):
                self.castling &= ~right
        removed = before & ~self.castling
        if removed:
            _LOGGER.warning("Dropped castling rights without king/rook: %r", removed)
        return removed

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board(
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )
        b._squares = self._squares.copy()
        b._king_squares = self._king_squares.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls(castling=CastlingRights.ALL)
        back_rank = [
            PieceType.ROOK,
            PieceType.KNIGHT,
            PieceType.BISHOP,
            PieceType.QUEEN,
            PieceType.KING,
            PieceType.BISHOP,
            PieceType.KNIGHT,
            PieceType.ROOK,
        ]
        for f, pt in enumerate(back_rank):
            b[make_square(f, 0)] = Piece(Color.BLACK, pt)
            b[make_square(f, 1)] = Piece(Color.BLACK, PieceType.PAWN)
            b[make_square(f, 6)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, 7)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._squares == other._squares
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for file in range(8):
                p = self[make_square(file, row)]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


def apply_move(board: Board, move: Move) -> Board:
    """Apply *move* to *board* in place and return it."""
    board.apply_move(move)
    return board
