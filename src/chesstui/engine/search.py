"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True, frozen=True)
class Evaluation:
    """Latest search report from the external engine.

    Scores are from the point of view of the side to move, as UCI reports
    them. Exactly one of ``score_cp`` / ``mate_in`` is set once the engine
    has reported a score.
    """

    depth: int = 0
    score_cp: int | None = None
    mate_in: int | None = None
    nodes: int = 0
    pv: tuple[str, ...] = ()

    def __str__(self) -> str:
        if self.mate_in is not None:
            score = f"mate {self.mate_in}"
        elif self.score_cp is not None:
            score = f"{self.score_cp / 100:+.2f}"
        else:
            score = "-"
        return f"depth {self.depth} | score {score} | nodes {self.nodes}"


class IEngine(Protocol):
    """What the game session needs from an external search process."""

    @property
    def is_searching(self) -> bool: ...

    def set_position(self, fen: str) -> None: ...

    def start_search(self) -> None: ...

    def stop_search(self) -> None: ...

    def close(self) -> None: ...


class NoopEngine:
    """Engine stand-in used when no executable is configured."""

    __slots__ = ("_fen",)

    def __init__(self) -> None:
        self._fen: str | None = None

    @property
    def is_searching(self) -> bool:
        return False

    @property
    def fen(self) -> str | None:
        return self._fen

    def set_position(self, fen: str) -> None:
        self._fen = fen

    def start_search(self) -> None:
        return None

    def stop_search(self) -> None:
        return None

    def close(self) -> None:
        return None
