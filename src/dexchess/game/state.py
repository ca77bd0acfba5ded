"""Game state: the current board, the last move and the move history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from dexchess.config import EngineSettings
from dexchess.core.board import Board
from dexchess.core.enums import Color, Outcome
from dexchess.core.errors import IllegalMove
from dexchess.core.legality import is_legal
from dexchess.core.move import Move
from dexchess.core.move_generator import legal_moves
from dexchess.core.notation import parse_board, parse_move, serialize_board
from dexchess.core.outcome import outcome
from dexchess.game.record import NO_MOVE, GameRecord

_LOGGER = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    text: str
    fen_after: str
    outcome: Outcome


@dataclass
class GameState:
    """Runs typed moves through parsing, legality, application and outcome.

    This is a pure data/logic class: no chat, no rendering, no locking.
    A move that fails at any stage leaves the state exactly as it was.
    """

    settings: EngineSettings = field(default_factory=EngineSettings)
    board: Board = field(default_factory=Board.initial, init=False)
    last_move: Move | None = field(default=None, init=False)
    outcome: Outcome = field(default=Outcome.PLAYING, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    extras: dict[str, str] = field(default_factory=dict, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, position: str | None = None) -> None:
        """Initialise (or reset) the game from a FEN or a preset name."""
        board = parse_board(self.settings.resolve_position(position))
        self.board = board
        self.last_move = None
        self.outcome = outcome(board)
        self.move_history.clear()
        _LOGGER.debug("New game from %s", serialize_board(board))

    # ── Move application ─────────────────────────────────────────────────

    def play(self, text: str) -> MoveRecord:
        """Parse, validate and apply the typed move *text*.

        Raises a :class:`dexchess.core.errors.ChessError` subclass carrying
        a player-facing message when the move is rejected.
        """
        if self.outcome.is_terminal:
            raise IllegalMove(f"The game is already over ({self.outcome}).")

        move = parse_move(text, self.board, self.settings.default_promotion)
        is_legal(move, self.board)

        board = self.board.copy()
        board.apply_move(move)
        result = outcome(board)
        move = move.with_outcome(result)

        self.board = board
        self.last_move = move
        self.outcome = result

        record = MoveRecord(
            move=move,
            text=text.strip(),
            fen_after=serialize_board(board),
            outcome=result,
        )
        self.move_history.append(record)
        _LOGGER.debug("Played %s (%s)", move, result)
        return record

    # ── Persistence ──────────────────────────────────────────────────────

    def to_record(self) -> GameRecord:
        return GameRecord(
            fen=self.fen,
            last_move=str(self.last_move) if self.last_move is not None else NO_MOVE,
            extras=dict(self.extras),
        )

    @classmethod
    def from_record(
        cls, record: GameRecord, settings: EngineSettings | None = None
    ) -> GameState:
        """Restore a game; the history restarts empty."""
        state = cls(settings=settings or EngineSettings())
        board = parse_board(record.fen)
        state.board = board
        state.outcome = outcome(board)
        if record.last_move and record.last_move != NO_MOVE:
            stored = Move.from_stored(record.last_move, board)
            state.last_move = stored.with_outcome(state.outcome)
        state.extras = dict(record.extras)
        return state

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def fen(self) -> str:
        return serialize_board(self.board)

    @property
    def side_to_move(self) -> Color:
        return self.board.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_terminal

    @property
    def ply_count(self) -> int:
        """Number of half-moves played since setup."""
        return len(self.move_history)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return legal_moves(self.board)
