"""Persisted game record and its JSON codec."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from dexchess.core.errors import MalformedRecord
from dexchess.core.notation import STARTING_FEN

NO_MOVE = "-"


@dataclass
class GameRecord:
    """Everything needed to resume a game.

    ``extras`` holds host-owned string fields (message ids, player ids,
    draw agreements, board theme...) that the engine passes through
    untouched.
    """

    fen: str = STARTING_FEN
    last_move: str = NO_MOVE
    extras: dict[str, str] = field(default_factory=dict)

    # ── JSON codec ───────────────────────────────────────────────────────

    def to_json(self) -> str:
        return json.dumps(
            {"fen": self.fen, "last_move": self.last_move, "extras": self.extras},
            sort_keys=True,
        )

    @classmethod
    def from_json(cls, text: str) -> GameRecord:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedRecord(f"Game record is not valid JSON: {exc.msg}") from exc
        if not isinstance(data, dict):
            raise MalformedRecord("Game record must be a JSON object.")

        fen = data.get("fen")
        if not isinstance(fen, str):
            raise MalformedRecord("Game record is missing its position.")
        last_move = data.get("last_move", NO_MOVE)
        if not isinstance(last_move, str):
            raise MalformedRecord("Game record has an invalid last move.")
        extras = data.get("extras", {})
        if not isinstance(extras, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in extras.items()
        ):
            raise MalformedRecord("Game record extras must map strings to strings.")
        return cls(fen=fen, last_move=last_move, extras=dict(extras))
