from __future__ import annotations

from checkers.core.board import Board
from checkers.core.pieces import Color, Piece
from checkers.core.rules import check_for_jumps
from checkers.core.state import GameState


_MIN_MULTIPLIER = 0.3
_KING_VALUE = 3.0
_MAN_VALUE = 1.0
_ROW_WEIGHT = 0.1
_CENTER_WEIGHT = 0.2
_PROTECTION_WEIGHT = 0.1
_ADVANCEMENT_WEIGHT = 0.3
_CAPTURE_THREAT_WEIGHT = 1.0
_LONE_PIECE_REACH = 14
_LONE_PIECE_WEIGHT = 0.2


# Top-level evaluator: material, structure and the lone-piece chase, always from white's side.
def evaluate_board(state: GameState, difficulty: int = 1) -> float:
	"""Score the position for white; positive favours white, negative favours black.

	``difficulty`` scales most of white's bonuses so that weaker levels value
	kings and structure less. Black's row and advancement terms are left
	unscaled.
	"""
	multiplier = difficulty_multiplier(difficulty)
	board = state.board
	score = 0.0

	if state.current_player == Color.WHITE and check_for_jumps(state):
		score += _CAPTURE_THREAT_WEIGHT * multiplier

	for piece in board:
		value = _piece_score(piece, board, multiplier)
		if piece.color == Color.WHITE:
			score += value
		else:
			score -= value

	white_pieces = board.pieces_of(Color.WHITE)
	if len(white_pieces) == 1:
		score += _lone_piece_bonus(white_pieces[0], board)

	return score


def difficulty_multiplier(difficulty: int) -> float:
	return max(_MIN_MULTIPLIER, difficulty / 3)


def _piece_score(piece: Piece, board: Board, multiplier: float) -> float:
	base = _KING_VALUE * multiplier if piece.is_king else _MAN_VALUE
	center = _CENTER_WEIGHT * multiplier if _in_center(piece) else 0.0
	protection = _PROTECTION_WEIGHT * multiplier if _is_protected(piece, board) else 0.0
	return base + _row_bonus(piece, multiplier) + center + protection + _advancement(piece, multiplier)


# Row term; grows toward row 0 for white and row 7 for black.
def _row_bonus(piece: Piece, multiplier: float) -> float:
	if piece.color == Color.WHITE:
		return (7 - piece.row) * _ROW_WEIGHT * multiplier
	return piece.row * _ROW_WEIGHT


# Fraction of the board crossed toward the opponent's back rank.
def _advancement(piece: Piece, multiplier: float) -> float:
	if piece.color == Color.WHITE:
		return (piece.row / 7) * _ADVANCEMENT_WEIGHT * multiplier
	return ((7 - piece.row) / 7) * _ADVANCEMENT_WEIGHT


def _in_center(piece: Piece) -> bool:
	return abs(3.5 - piece.col) < 2 and abs(3.5 - piece.row) < 2


# A friendly piece on a forward diagonal (either direction for kings).
def _is_protected(piece: Piece, board: Board) -> bool:
	row_dirs = (-1, 1) if piece.is_king else (piece.forward,)
	for d_row in row_dirs:
		for d_col in (-1, 1):
			neighbor = board.getPiece(piece.row + d_row, piece.col + d_col)
			if neighbor is not None and neighbor.color == piece.color:
				return True
	return False


# Pulls a last white piece toward the nearest black one instead of drifting into the draw limit.
def _lone_piece_bonus(piece: Piece, board: Board) -> float:
	distances = [
		abs(piece.row - target.row) + abs(piece.col - target.col)
		for target in board.pieces_of(Color.BLACK)
	]
	if not distances:
		return 0.0
	return (_LONE_PIECE_REACH - min(distances)) * _LONE_PIECE_WEIGHT
