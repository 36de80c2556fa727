"""Core checkers engine package."""

from .board import Board
from .game import Game
from .move import Coordinate, Move
from .pieces import Color, King, Man, Piece
from .player import PlayerController, PlayerKind
from .rules import (
	GameStatus,
	check_for_jumps,
	check_game_over,
	find_pieces_with_jumps,
	get_valid_moves,
	move_piece,
	select_piece,
)
from .state import CaptureTally, GameState, initial_state

__all__ = [
	"Board",
	"Game",
	"Move",
	"Coordinate",
	"Color",
	"Piece",
	"Man",
	"King",
	"PlayerController",
	"PlayerKind",
	"GameState",
	"GameStatus",
	"CaptureTally",
	"initial_state",
	"get_valid_moves",
	"check_for_jumps",
	"find_pieces_with_jumps",
	"move_piece",
	"select_piece",
	"check_game_over",
]
