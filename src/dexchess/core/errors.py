"""Exception taxonomy for the rules engine.

Every error carries a message that can be shown to the player as-is. All of
them are :class:`ValueError` subclasses, so callers that only care about
"bad input" can catch that.
"""

from __future__ import annotations

from collections.abc import Sequence


class ChessError(ValueError):
    """Base class for recoverable rules-engine errors."""


class MalformedPosition(ChessError):
    """The position string is structurally invalid."""


class MalformedMoveText(ChessError):
    """The move text matches no recognised grammar."""


class NoSuchMove(ChessError):
    """No piece satisfies the move description."""


class AmbiguousMove(ChessError):
    """Several pieces satisfy an abbreviated move description."""

    def __init__(self, message: str, candidates: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.candidates = tuple(candidates)


class IllegalMove(ChessError):
    """The move breaks the rules (king safety, castling availability...)."""


class MalformedRecord(ChessError):
    """A persisted game record cannot be decoded."""
