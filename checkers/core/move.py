from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

BOARD_SIZE = 8

Coordinate = tuple[int, int]


def is_within_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True, slots=True)
class Move:
    """A destination square, optionally marked with the square it captures."""

    end: Coordinate
    capture: Optional[Coordinate] = None

    @property
    def row(self) -> int:
        return self.end[0]

    @property
    def col(self) -> int:
        return self.end[1]

    @property
    def is_capture(self) -> bool:
        return self.capture is not None

    def __str__(self) -> str:
        if self.capture is None:
            return f"-> {self.row},{self.col}"
        return f"x {self.capture[0]},{self.capture[1]} -> {self.row},{self.col}"
