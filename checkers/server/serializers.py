from __future__ import annotations

from typing import Any, Optional

from checkers.core.game import Game
from checkers.core.move import Coordinate, Move
from checkers.core.pieces import Color, Piece
from checkers.core.player import PlayerController
from checkers.core.rules import find_pieces_with_jumps
from checkers.core.state import GameState


def _coord_tuple_to_dict(coord: Coordinate) -> dict[str, int]:
    row, col = coord
    return {"row": row, "col": col}


def serialize_piece(piece: Optional[Piece]) -> Optional[dict[str, Any]]:
    if piece is None:
        return None
    return {
        "id": piece.id,
        "row": piece.row,
        "col": piece.col,
        "color": piece.color.value,
        "isKing": piece.is_king,
    }


def serialize_move(move: Move) -> dict[str, Any]:
    return {
        "end": _coord_tuple_to_dict(move.end),
        "capture": _coord_tuple_to_dict(move.capture) if move.capture is not None else None,
        "isCapture": move.is_capture,
    }


def serialize_controller(controller: PlayerController) -> dict[str, str]:
    return controller.describe()


def serialize_events(before: GameState, after: GameState) -> list[str]:
    """Name what changed between two snapshots so clients can play sounds and animations."""
    events: list[str] = []
    if before.board != after.board:
        events.append("move")
    captured_before = before.captured_pieces.black + before.captured_pieces.white
    captured_after = after.captured_pieces.black + after.captured_pieces.white
    if captured_after > captured_before:
        events.append("capture")
    if any(_king_count(after, color) > _king_count(before, color) for color in Color):
        events.append("king")
    if after.game_over and not before.game_over:
        events.append("game_over")
    return events


def _king_count(state: GameState, color: Color) -> int:
    return sum(1 for piece in state.board.pieces_of(color) if piece.is_king)


def serialize_game(
    game: Game,
    settings: dict[str, Any],
    events: Optional[list[str]] = None,
) -> dict[str, Any]:
    state = game.state
    pieces = [serialize_piece(piece) for piece in state.board]
    piece_counts = {
        color.value: {
            "total": state.board.count(color),
            "kings": _king_count(state, color),
        }
        for color in Color
    }

    return {
        "boardSize": state.board.boardSize,
        "turn": state.current_player.value,
        "pieces": pieces,
        "pieceCounts": piece_counts,
        "selectedPiece": serialize_piece(state.selected_piece),
        "validMoves": [serialize_move(move) for move in state.valid_moves],
        "capturedPieces": {
            "black": state.captured_pieces.black,
            "white": state.captured_pieces.white,
        },
        "gameOver": state.game_over,
        "winner": state.winner.value if state.winner else None,
        "isDraw": state.is_draw,
        "mustJump": state.must_jump,
        "mustJumpPieces": [serialize_piece(piece) for piece in find_pieces_with_jumps(state)]
        if state.must_jump
        else [],
        "jumpingPiece": serialize_piece(state.jumping_piece),
        "aiDifficulty": state.ai_difficulty,
        "movesWithoutCapture": state.moves_without_capture,
        "moveCount": len(game.history),
        "canUndo": bool(game.history),
        "players": {
            "white": serialize_controller(game.getPlayer(Color.WHITE)),
            "black": serialize_controller(game.getPlayer(Color.BLACK)),
        },
        "settings": dict(settings),
        "events": list(events or []),
    }
