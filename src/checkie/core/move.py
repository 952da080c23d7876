"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from checkie.core.types import Position, square_number


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable single step: a one-square slide or a two-square jump.

    The jumped-over cell is not stored; it is always the midpoint of
    ``from_pos`` and ``to_pos``.
    """

    from_pos: Position
    to_pos: Position

    @property
    def is_capture(self) -> bool:
        return abs(self.to_pos.row - self.from_pos.row) == 2

    @property
    def captured(self) -> Position | None:
        """Cell of the jumped piece, or None for a simple move."""
        if not self.is_capture:
            return None
        return self.from_pos.midpoint(self.to_pos)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        sep = "x" if self.is_capture else "-"
        return f"{square_number(self.from_pos)}{sep}{square_number(self.to_pos)}"

    @property
    def notation(self) -> str:
        """Standard numeric notation, e.g. ``22-18`` or ``22x15``."""
        return str(self)
