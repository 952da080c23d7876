"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from checkie.core.board import Board
    from checkie.core.enums import Player
    from checkie.core.move import Move
    from checkie.core.types import Position

CancelCheck = Callable[[], bool]


class Difficulty(IntEnum):
    """Opponent strength; the value is the search depth in plies."""

    EASY = 1
    MEDIUM = 3
    HARD = 5

    @property
    def depth(self) -> int:
        return int(self.value)

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = Difficulty.MEDIUM.depth

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty) -> SearchLimits:
        return cls(max_depth=difficulty.depth)


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``candidates`` holds every root move that reached ``score``;
    ``best_move`` is the one picked among them.
    """

    best_move: Move | None
    score: int
    depth: int
    nodes: int
    candidates: tuple[Move, ...] = ()


class IEngine(Protocol):
    """Protocol for engines used by the game layer and the Qt worker."""

    def search(
        self,
        board: Board,
        player: Player,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
        from_position: Position | None = None,
    ) -> SearchResult: ...
