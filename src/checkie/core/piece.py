"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from checkie.core.enums import PieceKind, Player
from checkie.core.types import Position

# Diagram character <-> (Player, PieceKind)
_CHAR_MAP: dict[str, tuple[Player, PieceKind]] = {
    "w": (Player.WHITE, PieceKind.MAN),
    "W": (Player.WHITE, PieceKind.KING),
    "b": (Player.BLACK, PieceKind.MAN),
    "B": (Player.BLACK, PieceKind.KING),
}

_UNICODE: dict[tuple[Player, PieceKind], str] = {
    (Player.WHITE, PieceKind.MAN): "⛀",
    (Player.WHITE, PieceKind.KING): "⛁",
    (Player.BLACK, PieceKind.MAN): "⛂",
    (Player.BLACK, PieceKind.KING): "⛃",
}

_DIAGRAM_CHARS: dict[tuple[Player, PieceKind], str] = {
    v: k for k, v in _CHAR_MAP.items()
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object for a draughts piece on its square."""

    owner: Player
    kind: PieceKind
    position: Position

    @property
    def is_king(self) -> bool:
        return self.kind == PieceKind.KING

    def moved_to(self, position: Position) -> Piece:
        return replace(self, position=position)

    def promoted(self) -> Piece:
        return replace(self, kind=PieceKind.KING)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Diagram character (``w``/``b`` men, ``W``/``B`` kings)."""
        return _DIAGRAM_CHARS[(self.owner, self.kind)]

    @classmethod
    def from_char(cls, char: str, position: Position) -> Piece:
        """Create a piece from its diagram character, e.g. 'W' -> white king."""
        try:
            owner, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(owner, kind, position)

    @property
    def symbol(self) -> str:
        """Unicode draughts symbol, e.g. ⛃."""
        return _UNICODE[(self.owner, self.kind)]
