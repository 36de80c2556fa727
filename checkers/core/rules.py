"""Rules of the game: move generation, forced captures, transitions and results.

Every function takes a :class:`GameState` and returns a new value. Illegal
input never raises; it yields an empty list or the state that was passed in.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from .board import Board
from .move import Coordinate, Move, is_within_bounds
from .pieces import Color, Man, Piece
from .state import CaptureTally, GameState

DRAW_MOVE_LIMIT = 30


class GameStatus(NamedTuple):
    game_over: bool
    winner: Optional[Color]
    is_draw: bool


ONGOING = GameStatus(game_over=False, winner=None, is_draw=False)


def get_valid_moves(state: GameState, piece: Optional[Piece]) -> list[Move]:
    if piece is None or piece.color != state.current_player:
        return []
    jumping = state.jumping_piece
    if jumping is not None and jumping.id != piece.id:
        return []
    return piece.possibleMoves(state)


def check_for_jumps(state: GameState) -> bool:
    return bool(find_pieces_with_jumps(state))


def find_pieces_with_jumps(state: GameState) -> list[Piece]:
    forced = state.evolve(must_jump=True)
    pieces: list[Piece] = []
    for piece in state.board.pieces_of(state.current_player):
        moves = get_valid_moves(forced, piece)
        if moves and moves[0].is_capture:
            pieces.append(piece)
    return pieces


def check_game_over(state: GameState) -> GameStatus:
    if state.moves_without_capture >= DRAW_MOVE_LIMIT:
        return GameStatus(game_over=True, winner=None, is_draw=True)

    board = state.board
    if board.count(Color.BLACK) == 0:
        return GameStatus(game_over=True, winner=Color.WHITE, is_draw=False)
    if board.count(Color.WHITE) == 0:
        return GameStatus(game_over=True, winner=Color.BLACK, is_draw=False)

    relaxed = state.evolve(must_jump=False)
    for piece in board.pieces_of(state.current_player):
        if get_valid_moves(relaxed, piece):
            return ONGOING

    # Stalemate is a loss for the side that cannot move.
    return GameStatus(game_over=True, winner=state.current_player.opponent, is_draw=False)


def select_piece(state: GameState, square: Coordinate) -> GameState:
    if state.game_over or not is_within_bounds(*square):
        return state
    piece = state.board.getPiece(*square)
    if piece is None or piece.color != state.current_player:
        return state
    if state.jumping_piece is not None and state.jumping_piece.id != piece.id:
        return state
    if state.must_jump and piece not in find_pieces_with_jumps(state):
        return state
    return state.evolve(selected_piece=piece, valid_moves=tuple(get_valid_moves(state, piece)))


def clear_selection(state: GameState) -> GameState:
    if state.jumping_piece is not None or state.selected_piece is None:
        return state
    return state.evolve(selected_piece=None, valid_moves=())


def move_piece(state: GameState, start: Coordinate, end: Coordinate) -> GameState:
    if not is_within_bounds(*start) or not is_within_bounds(*end):
        return state

    piece = state.board.getPiece(*start)
    if piece is None or piece.color != state.current_player:
        return state

    move = _find_move(get_valid_moves(state, piece), end)
    if move is None:
        return state

    board = state.board
    tally = state.captured_pieces
    if move.capture is not None:
        captured = board.getPiece(*move.capture)
        if captured is not None:
            board = board.remove(*move.capture)
            tally = tally.incremented(captured.color)

    will_become_king = isinstance(piece, Man) and end[0] == piece.last_row
    updated = piece.moved(*end)
    if will_become_king:
        updated = updated.promote()
    board = board.relocate(piece, updated)

    moves_without_capture = 0 if move.is_capture else state.moves_without_capture + 1

    if not move.is_capture or will_become_king:
        return _end_turn(state, board, tally, moves_without_capture)

    further = get_valid_moves(
        state.evolve(board=board, must_jump=True, capture_position=move.capture),
        updated,
    )
    if any(candidate.is_capture for candidate in further):
        return state.evolve(
            board=board,
            captured_pieces=tally,
            selected_piece=updated,
            valid_moves=tuple(further),
            must_jump=True,
            jumping_piece=updated,
            capture_position=move.capture,
            moves_without_capture=0,
        )

    return _end_turn(state, board, tally, moves_without_capture)


def _end_turn(
    state: GameState,
    board: Board,
    tally: CaptureTally,
    moves_without_capture: int,
) -> GameState:
    handed_over = state.evolve(
        board=board,
        current_player=state.current_player.opponent,
        selected_piece=None,
        valid_moves=(),
        captured_pieces=tally,
        must_jump=False,
        jumping_piece=None,
        capture_position=None,
        moves_without_capture=moves_without_capture,
    )
    status = check_game_over(handed_over)
    return handed_over.evolve(
        must_jump=check_for_jumps(handed_over),
        game_over=status.game_over,
        winner=status.winner,
        is_draw=status.is_draw,
    )


def _find_move(moves: list[Move], end: Coordinate) -> Optional[Move]:
    for move in moves:
        if move.end == tuple(end):
            return move
    return None
