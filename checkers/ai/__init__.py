"""Automated opponent: heuristic evaluation and minimax search."""

from .agents import create_minimax_controller
from .heuristic import evaluate_board
from .minimax import SearchResult, search_depth, select_move, simulate_complete_move

__all__ = [
	"create_minimax_controller",
	"evaluate_board",
	"search_depth",
	"select_move",
	"simulate_complete_move",
	"SearchResult",
]
