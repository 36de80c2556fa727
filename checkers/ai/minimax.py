from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

from checkers.core.move import Move
from checkers.core.pieces import Color, Piece
from checkers.core.rules import get_valid_moves, move_piece
from checkers.core.state import GameState

from .heuristic import evaluate_board

logger = logging.getLogger(__name__)

MAX_SEARCH_DEPTH = 4
LONE_PIECE_DEPTH = 3
MAX_CHAIN_JUMPS = 3

MoveHistory = FrozenSet[str]
MoveGroup = Tuple[Piece, List[Move]]


@dataclass(frozen=True)
class SearchResult:
	score: float
	move: Optional[Tuple[Piece, Move]] = None


def select_move(state: GameState, *, rng: Optional[random.Random] = None) -> Optional[Tuple[Piece, Move]]:
	"""Return the move white should play, or ``None`` when it has nothing to play."""
	rng = rng if rng is not None else random.Random()
	difficulty = state.ai_difficulty or 1
	depth = search_depth(state)

	result = minimax(state, depth, -math.inf, math.inf, True, difficulty, frozenset(), rng)
	logger.debug("Minimax depth=%d difficulty=%d score=%s move=%s", depth, difficulty, result.score, result.move)
	if result.move is None:
		return None

	piece, move = result.move
	# The search works on simulated states; confirm against the live one.
	if move.end not in {candidate.end for candidate in get_valid_moves(state, piece)}:
		return None
	return result.move


def search_depth(state: GameState) -> int:
	if state.board.count(Color.WHITE) == 1:
		return LONE_PIECE_DEPTH
	difficulty = state.ai_difficulty or 1
	return min(2 + difficulty, MAX_SEARCH_DEPTH)


def minimax(
	state: GameState,
	depth: int,
	alpha: float,
	beta: float,
	maximizing: bool,
	difficulty: int,
	history: MoveHistory,
	rng: random.Random,
) -> SearchResult:
	if depth == 0 or state.game_over:
		return SearchResult(evaluate_board(state, difficulty))

	color = Color.WHITE if maximizing else Color.BLACK
	groups = _move_groups(state, color)
	if not groups:
		return SearchResult(evaluate_board(state, difficulty))

	# Shuffled to break ties between equal lines and keep games from looping.
	rng.shuffle(groups)

	best_score = -math.inf if maximizing else math.inf
	best_move: Optional[Tuple[Piece, Move]] = None

	for piece, moves in groups:
		for move in moves:
			key = _move_key(piece, move)
			if key in history:
				continue

			child = simulate_complete_move(state, piece, move)
			score = minimax(child, depth - 1, alpha, beta, not maximizing, difficulty, history | {key}, rng).score

			if maximizing:
				if score > best_score:
					best_score = score
					best_move = (piece, move)
				alpha = max(alpha, score)
			else:
				if score < best_score:
					best_score = score
					best_move = (piece, move)
				beta = min(beta, score)
			# Only the rest of this piece's moves are pruned.
			if beta <= alpha:
				break

	return SearchResult(best_score, best_move)


def simulate_complete_move(state: GameState, piece: Piece, move: Move) -> GameState:
	"""Play ``move`` and greedily follow any capture chain it starts."""
	if move.end not in {candidate.end for candidate in get_valid_moves(state, piece)}:
		return state

	current = move_piece(state, piece.position, move.end)
	current_piece = current.board.getPiece(*move.end)
	visited = {piece.position}
	jumps_taken = 0

	while current.must_jump and current_piece is not None and jumps_taken < MAX_CHAIN_JUMPS:
		position = current_piece.position
		if position in visited:
			break
		visited.add(position)

		jumps = [
			candidate
			for candidate in get_valid_moves(current, current_piece)
			if candidate.is_capture and candidate.end not in visited
		]
		if not jumps:
			break

		next_move = jumps[0]
		before = current.board
		current = move_piece(current, position, next_move.end)
		if current.board == before:
			break

		current_piece = current.board.getPiece(*next_move.end)
		jumps_taken += 1

		if current_piece is not None and current_piece.is_king and not piece.is_king:
			break

	return current


def _move_groups(state: GameState, color: Color) -> List[MoveGroup]:
	groups: List[MoveGroup] = []
	for candidate in state.board.pieces_of(color):
		moves = get_valid_moves(state, candidate)
		if moves:
			groups.append((candidate, moves))
	return groups


def _move_key(piece: Piece, move: Move) -> str:
	return f"{piece.id}-{move.row}-{move.col}"
