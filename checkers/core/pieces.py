from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional

from .move import BOARD_SIZE, Coordinate, Move

if TYPE_CHECKING:
    from .board import Board
    from .state import GameState


MoveList = list[Move]
DIAGONALS = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class Color(Enum):
    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self) -> "Color":
        return Color.WHITE if self is Color.BLACK else Color.BLACK


@dataclass(frozen=True, slots=True, repr=False)
class Piece:
    color: Color
    row: int
    col: int
    id: str = ""

    is_king: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if not self.id:
            object.__setattr__(self, "id", f"{self.color.value}-{self.row}-{self.col}")

    @property
    def position(self) -> Coordinate:
        return (self.row, self.col)

    @property
    def forward(self) -> int:
        # Black starts on rows 5-7 and heads for row 0.
        return -1 if self.color == Color.BLACK else 1

    @property
    def last_row(self) -> int:
        return 0 if self.color == Color.BLACK else BOARD_SIZE - 1

    def moved(self, row: int, col: int) -> "Piece":
        return replace(self, row=row, col=col)

    def possibleMoves(self, state: "GameState") -> MoveList:
        return []

    def __repr__(self) -> str:
        piece_type = "K" if self.is_king else "M"
        return f"{piece_type}({self.color.name},{self.row},{self.col})"


@dataclass(frozen=True, slots=True, repr=False)
class King(Piece):
    is_king: ClassVar[bool] = True

    def possibleMoves(self, state: "GameState") -> MoveList:
        board = state.board
        moves: MoveList = []
        capture_moves: MoveList = []

        for dr, dc in DIAGONALS:
            r, c = self.row + dr, self.col + dc
            captured: Optional[Coordinate] = None
            while board.is_within_bounds(r, c):
                target = board.getPiece(r, c)
                if target is None:
                    if captured is None:
                        if not state.must_jump:
                            moves.append(Move((r, c)))
                    elif captured != state.capture_position:
                        capture_moves.append(Move((r, c), capture=captured))
                elif captured is None and target.color != self.color:
                    captured = (r, c)
                else:
                    break
                r += dr
                c += dc

        return capture_moves if capture_moves else moves


@dataclass(frozen=True, slots=True, repr=False)
class Man(Piece):
    def promote(self) -> King:
        return King(self.color, self.row, self.col, self.id)

    def possibleMoves(self, state: "GameState") -> MoveList:
        board = state.board
        moves: MoveList = []

        if not state.must_jump:
            for dc in (-1, 1):
                new_r, new_c = self.row + self.forward, self.col + dc
                if board.is_within_bounds(new_r, new_c) and board.getPiece(new_r, new_c) is None:
                    moves.append(Move((new_r, new_c)))

        capture_moves = self._jump_moves(board, self.forward, state.capture_position)
        # Backward jumps only for the piece that is already chaining.
        jumping = state.jumping_piece
        if jumping is not None and jumping.id == self.id:
            capture_moves += self._jump_moves(board, -self.forward, state.capture_position)

        return capture_moves if capture_moves else moves

    def _jump_moves(
        self,
        board: "Board",
        direction: int,
        used_capture: Optional[Coordinate],
    ) -> MoveList:
        jumps: MoveList = []
        for dc in (-2, 2):
            end_r, end_c = self.row + 2 * direction, self.col + dc
            if not board.is_within_bounds(end_r, end_c):
                continue
            mid = (self.row + direction, self.col + dc // 2)
            target = board.getPiece(*mid)
            if (
                target is not None
                and target.color != self.color
                and board.getPiece(end_r, end_c) is None
                and mid != used_capture
            ):
                jumps.append(Move((end_r, end_c), capture=mid))
        return jumps
