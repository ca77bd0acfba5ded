"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from dexchess.core.enums import Color, PieceType

# Letter used in FEN and move text, independent of colour.
PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
LETTER_PIECES: dict[str, PieceType] = {v: k for k, v in PIECE_LETTERS.items()}

PIECE_NAMES: dict[PieceType, str] = {
    PieceType.PAWN: "Pawn",
    PieceType.KNIGHT: "Knight",
    PieceType.BISHOP: "Bishop",
    PieceType.ROOK: "Rook",
    PieceType.QUEEN: "Queen",
    PieceType.KING: "King",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = PIECE_LETTERS[self.piece_type]
        return letter if self.color == Color.WHITE else letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            ptype = LETTER_PIECES[char.upper()]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)

    @property
    def name(self) -> str:
        return PIECE_NAMES[self.piece_type]
