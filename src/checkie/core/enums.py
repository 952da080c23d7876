"""Core enumerations for the draughts domain."""

from __future__ import annotations

from enum import IntEnum


class Player(IntEnum):
    """Side color. White moves first and starts on rows 5-7."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Player:
        return Player(1 - self.value)

    @property
    def forward(self) -> int:
        """Row delta of this side's men (white advances toward row 0)."""
        return -1 if self is Player.WHITE else 1

    @property
    def promotion_row(self) -> int:
        """The opponent's back rank, where this side's men are crowned."""
        return 0 if self is Player.WHITE else 7

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Piece kinds ordered by material value."""

    MAN = 1
    KING = 2
