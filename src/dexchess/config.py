"""Engine settings and logging bootstrap helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from dexchess.core.enums import PieceType
from dexchess.core.notation import STARTING_FEN, parse_board, serialize_board

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class EngineSettings:
    """All host-configurable settings."""

    # Positions
    positions: dict[str, str] = field(default_factory=dict)  # name -> FEN

    # Moves
    default_promotion: PieceType = PieceType.QUEEN

    # Logging
    log_level: str = "WARNING"

    def resolve_position(self, name_or_fen: str | None = None) -> str:
        """Canonical position string for a preset name or a raw FEN.

        Preset names are matched case-insensitively. Presets are only
        validated here, when they are first used.
        """
        if not name_or_fen or not name_or_fen.strip():
            return STARTING_FEN

        key = name_or_fen.strip().lower()
        presets = {name.lower(): fen for name, fen in self.positions.items()}
        if key in presets:
            _LOGGER.debug("Resolved preset position %r", key)
            return serialize_board(parse_board(presets[key]))
        return serialize_board(parse_board(name_or_fen))

    def apply_logging(self) -> None:
        """Configure the ``dexchess`` logger at :attr:`log_level`."""
        configure_logging(self.log_level)


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Install a basic stderr handler on the ``dexchess`` logger.

    Hosts that already configure logging should not call this.
    """
    logger = logging.getLogger("dexchess")
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
