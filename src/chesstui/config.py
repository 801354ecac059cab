"""Application configuration assembled by the command line."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from chesstui.core.notation import STARTING_FEN


@dataclass(slots=True, frozen=True)
class AppConfig:
    """Settings for one terminal session.

    Args:
        engine_path: UCI engine executable; ``None`` runs without an engine.
        tickrate_ms: Redraw / event poll interval in milliseconds.
        start_fen: Position loaded at start-up.
        log_level: Name of the :mod:`logging` level for stderr output.
    """

    engine_path: Path | None = None
    tickrate_ms: int = 200
    start_fen: str = STARTING_FEN
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.tickrate_ms <= 0:
            raise ValueError(f"Tick rate must be positive, got {self.tickrate_ms}")
