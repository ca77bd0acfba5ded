"""Game management layer: state machine and persisted records.

Quick start::

    from dexchess.game import GameState

    game = GameState()
    game.setup()
    record = game.play("e4")
    print(record.fen_after, record.outcome)
"""

from dexchess.game.record import GameRecord
from dexchess.game.state import GameState, MoveRecord

__all__ = [
    "GameRecord",
    "GameState",
    "MoveRecord",
]
