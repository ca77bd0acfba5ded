"""Move value object and its stored text form."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from dexchess.core.enums import Color, Outcome, PieceType
from dexchess.core.errors import MalformedMoveText
from dexchess.core.types import (
    C1,
    C8,
    E1,
    E8,
    G1,
    G8,
    Square,
    file_of,
    make_square,
    parse_square,
    row_of,
    square_name,
)

if TYPE_CHECKING:
    from dexchess.core.board import Board

_SHORT_CASTLE_RE = re.compile(r"^[O0]-[O0](?:[+#!?.\s]|$)")
_LONG_CASTLE_RE = re.compile(r"^[O0]-[O0]-[O0](?:[+#!?.\s]|$)")


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Flags describe the move as understood against the board it was parsed
    on; ``is_check`` / ``is_checkmate`` are only known after it is applied
    (see :meth:`with_outcome`).
    """

    origin: Square
    target: Square
    is_castle: bool = False
    is_capture: bool = False
    is_en_passant: bool = False
    is_check: bool = False
    is_checkmate: bool = False
    promotion: PieceType | None = None

    def with_outcome(self, outcome: Outcome) -> Move:
        """Copy of this move with check flags matching *outcome*."""
        return replace(
            self,
            is_check=outcome == Outcome.CHECK,
            is_checkmate=outcome == Outcome.CHECKMATE,
        )

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        if self.is_castle:
            return "O-O" if self.target > self.origin else "O-O-O"
        text = f"{square_name(self.origin)}{square_name(self.target)}"
        if self.is_capture:
            text += "x"
        if self.is_en_passant:
            text += "p"
        return text

    def highlight_squares(self) -> list[Square]:
        """Squares touched by the move, including the rook of a castle."""
        squares = [self.origin, self.target]
        if self.is_castle:
            if file_of(self.target) < 4:
                squares += [self.target + 1, self.target - 2]
            else:
                squares += [self.target - 1, self.target + 1]
        return squares

    def en_passant_victim(self) -> Square | None:
        """Square of the pawn removed by an en-passant capture."""
        if not self.is_en_passant:
            return None
        return make_square(file_of(self.target), row_of(self.origin))

    # ── Stored form ──────────────────────────────────────────────────────

    @classmethod
    def from_stored(cls, text: str, board: Board) -> Move:
        """Parse the text produced by ``str(move)``.

        *board* is the position **after** the move, so a castle belongs to
        the side that is not on move.
        """
        upper = text.upper()
        mover = board.side_to_move.opposite
        if _LONG_CASTLE_RE.match(upper):
            if mover == Color.WHITE:
                return cls(E1, C1, is_castle=True)
            return cls(E8, C8, is_castle=True)
        if _SHORT_CASTLE_RE.match(upper):
            if mover == Color.WHITE:
                return cls(E1, G1, is_castle=True)
            return cls(E8, G8, is_castle=True)

        if len(text) not in (4, 5, 6):
            raise MalformedMoveText(f"Wrong format for stored move: {text!r}")
        suffix = text[4:]
        if suffix not in ("", "x", "xp"):
            raise MalformedMoveText(f"Wrong format for stored move: {text!r}")
        try:
            origin = parse_square(text[:2])
        except ValueError:
            raise MalformedMoveText(
                f"Wrong format on origin of stored move: {text!r}"
            ) from None
        try:
            target = parse_square(text[2:4])
        except ValueError:
            raise MalformedMoveText(
                f"Wrong format on target of stored move: {text!r}"
            ) from None
        return cls(
            origin,
            target,
            is_capture=suffix.startswith("x"),
            is_en_passant=suffix == "xp",
        )
