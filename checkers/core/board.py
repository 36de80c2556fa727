from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .move import BOARD_SIZE, is_within_bounds
from .pieces import Color, Man, Piece


Row = tuple[Optional[Piece], ...]
Grid = tuple[Row, ...]
BoardState = tuple[str, ...]


def is_playable(row: int, col: int) -> bool:
    return is_within_bounds(row, col) and (row + col) % 2 == 1


class Board:
    """Immutable 8x8 grid. Every mutator returns a new board."""

    __slots__ = ("_grid",)

    boardSize = BOARD_SIZE

    def __init__(self, grid: Optional[Grid] = None) -> None:
        if grid is None:
            grid = tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE))
        self._grid: Grid = grid

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def initial(cls) -> "Board":
        pieces: list[Piece] = []
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if not is_playable(row, col):
                    continue
                if row < 3:
                    pieces.append(Man(Color.WHITE, row, col))
                elif row >= BOARD_SIZE - 3:
                    pieces.append(Man(Color.BLACK, row, col))
        return cls.from_pieces(pieces)

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> "Board":
        rows = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        for piece in pieces:
            if not is_playable(piece.row, piece.col):
                raise ValueError(f"Pieces can only stand on dark squares, got {piece.position}.")
            rows[piece.row][piece.col] = piece
        return cls(tuple(tuple(row) for row in rows))

    @staticmethod
    def is_within_bounds(row: int, col: int) -> bool:
        return is_within_bounds(row, col)

    @property
    def rows(self) -> Grid:
        return self._grid

    def getPiece(self, row: int, col: int) -> Optional[Piece]:
        if is_within_bounds(row, col):
            return self._grid[row][col]
        return None

    def getAllPieces(self) -> list[Piece]:
        return list(self)

    def pieces_of(self, color: Color) -> list[Piece]:
        return [piece for piece in self if piece.color == color]

    def count(self, color: Color) -> int:
        return sum(1 for piece in self if piece.color == color)

    def place(self, piece: Piece) -> "Board":
        if not is_playable(piece.row, piece.col):
            raise ValueError(f"Pieces can only stand on dark squares, got {piece.position}.")
        return self._with_cells({piece.position: piece})

    def remove(self, row: int, col: int) -> "Board":
        if self.getPiece(row, col) is None:
            return self
        return self._with_cells({(row, col): None})

    def relocate(self, piece: Piece, updated: Piece) -> "Board":
        """Swap ``piece`` for ``updated``, which may stand on another square."""
        if self.getPiece(piece.row, piece.col) != piece:
            raise ValueError("Piece must occupy its recorded position before moving.")
        if not is_playable(updated.row, updated.col):
            raise ValueError(f"Pieces can only stand on dark squares, got {updated.position}.")
        cells: dict[tuple[int, int], Optional[Piece]] = {piece.position: None}
        cells[updated.position] = updated
        return self._with_cells(cells)

    def to_state(self) -> BoardState:
        lines = []
        for row in self._grid:
            cells = []
            for piece in row:
                if piece is None:
                    cells.append(".")
                    continue
                symbol = "b" if piece.color == Color.BLACK else "w"
                cells.append(symbol.upper() if piece.is_king else symbol)
            lines.append("".join(cells))
        return tuple(lines)

    def _with_cells(self, cells: dict[tuple[int, int], Optional[Piece]]) -> "Board":
        rows = [list(row) for row in self._grid]
        for (row, col), piece in cells.items():
            rows[row][col] = piece
        return Board(tuple(tuple(row) for row in rows))

    def __iter__(self) -> Iterator[Piece]:
        for row in self._grid:
            for piece in row:
                if piece is not None:
                    yield piece

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __hash__(self) -> int:
        return hash(self._grid)

    def __repr__(self) -> str:
        return "Board(\n  " + "\n  ".join(self.to_state()) + "\n)"
