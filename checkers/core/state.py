from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from .board import Board
from .move import Coordinate, Move
from .pieces import Color, Piece

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 3


def clamp_difficulty(level: int) -> int:
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, int(level)))


@dataclass(frozen=True, slots=True)
class CaptureTally:
    """Captured pieces counted by the color of the piece that was taken."""

    black: int = 0
    white: int = 0

    def get(self, color: Color) -> int:
        return self.black if color == Color.BLACK else self.white

    def incremented(self, color: Color) -> "CaptureTally":
        if color == Color.BLACK:
            return replace(self, black=self.black + 1)
        return replace(self, white=self.white + 1)


@dataclass(frozen=True, slots=True)
class GameState:
    board: Board
    current_player: Color = Color.BLACK
    selected_piece: Optional[Piece] = None
    valid_moves: tuple[Move, ...] = ()
    captured_pieces: CaptureTally = CaptureTally()
    game_over: bool = False
    winner: Optional[Color] = None
    is_draw: bool = False
    must_jump: bool = False
    jumping_piece: Optional[Piece] = None
    capture_position: Optional[Coordinate] = None
    ai_difficulty: int = MIN_DIFFICULTY
    moves_without_capture: int = 0

    def evolve(self, **changes: Any) -> "GameState":
        return replace(self, **changes)


def initial_state(difficulty: int = MIN_DIFFICULTY) -> GameState:
    return GameState(board=Board.initial(), ai_difficulty=clamp_difficulty(difficulty))
