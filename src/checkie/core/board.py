"""Board - piece placement on an 8x8 draughts board."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from checkie.core.enums import PieceKind, Player
from checkie.core.piece import Piece
from checkie.core.types import BOARD_SIZE, Position

_CELL_COUNT = BOARD_SIZE * BOARD_SIZE
_ROWS_PER_SIDE = 3


class Board:
    """Immutable 64-cell board.

    Boards are values: every "mutation" returns a new board, so a search
    can explore futures from a snapshot without touching the live game.
    """

    __slots__ = ("_cells", "_hash")

    def __init__(self, cells: Iterable[Piece | None] | None = None) -> None:
        if cells is None:
            self._cells: tuple[Piece | None, ...] = (None,) * _CELL_COUNT
        else:
            self._cells = tuple(cells)
            if len(self._cells) != _CELL_COUNT:
                raise ValueError(f"Board needs {_CELL_COUNT} cells, got {len(self._cells)}")
        self._hash: int | None = None

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._cells[pos.index]

    def is_empty(self, pos: Position) -> bool:
        return self._cells[pos.index] is None

    def __iter__(self) -> Iterator[Piece]:
        """Pieces in row-major order."""
        return (p for p in self._cells if p is not None)

    # -- Query helpers ------------------------------------------------------

    def pieces(self, player: Player) -> list[Piece]:
        """*player*'s pieces in row-major order."""
        return [p for p in self._cells if p is not None and p.owner == player]

    def count(self, player: Player, kind: PieceKind | None = None) -> int:
        return sum(
            1
            for p in self._cells
            if p is not None and p.owner == player and (kind is None or p.kind == kind)
        )

    def has_pieces(self, player: Player) -> bool:
        return any(p is not None and p.owner == player for p in self._cells)

    # -- Derivation ---------------------------------------------------------

    def replace(self, changes: Mapping[Position, Piece | None]) -> Board:
        """New board with the given cells overwritten."""
        cells = list(self._cells)
        for pos, piece in changes.items():
            cells[pos.index] = piece
        return Board(cells)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> Board:
        """Board holding *pieces*, each placed at its own position."""
        cells: list[Piece | None] = [None] * _CELL_COUNT
        for piece in pieces:
            if cells[piece.position.index] is not None:
                raise ValueError(f"Two pieces on {piece.position}")
            cells[piece.position.index] = piece
        return cls(cells)

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position: 12 men per side on the dark squares."""
        pieces: list[Piece] = []
        for row in range(BOARD_SIZE):
            if row < _ROWS_PER_SIDE:
                owner = Player.BLACK
            elif row >= BOARD_SIZE - _ROWS_PER_SIDE:
                owner = Player.WHITE
            else:
                continue
            for col in range(BOARD_SIZE):
                if (row + col) % 2 == 1:
                    pieces.append(Piece(owner, PieceKind.MAN, Position(row, col)))
        return cls.from_pieces(pieces)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._cells)
        return self._hash

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            line = []
            for col in range(BOARD_SIZE):
                p = self._cells[row * BOARD_SIZE + col]
                line.append(str(p) if p else ".")
            rows.append(f"{row} {' '.join(line)}")
        rows.append("  0 1 2 3 4 5 6 7")
        return "\n".join(rows)
