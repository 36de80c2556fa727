from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Optional

from checkers.ai.agents import create_minimax_controller
from checkers.core.game import Game
from checkers.core.pieces import Color, Piece
from checkers.core.player import PlayerController
from checkers.core.rules import get_valid_moves
from checkers.core.state import GameState

from .schemas import ConfigRequest, MoveRequest, ResetRequest, SelectRequest
from .serializers import serialize_events, serialize_game, serialize_move

logger = logging.getLogger(__name__)


def _default_settings() -> dict[str, Any]:
    return {"aiEnabled": True, "seed": None}


class GameSession:
    """Thread-safe orchestrator around a single Game instance."""

    def __init__(self, difficulty: int = 1) -> None:
        self.lock = Lock()
        self.game = Game(difficulty)
        self.settings: dict[str, Any] = _default_settings()
        self._apply_player_controllers()

    # public API ---------------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        with self.lock:
            return self._serialize_locked()

    def reset(self, payload: Optional[ResetRequest] = None) -> dict[str, Any]:
        with self.lock:
            before = self.game.state
            difficulty = payload.difficulty if payload is not None else None
            self.game.reset(difficulty)
            self._apply_player_controllers()
            return self._serialize_locked(before)

    def configure(self, payload: ConfigRequest) -> dict[str, Any]:
        with self.lock:
            config = payload.model_dump(exclude_unset=True)
            if config.get("difficulty") is not None:
                self.game.setDifficulty(config["difficulty"])
            if config.get("aiEnabled") is not None:
                self.settings["aiEnabled"] = config["aiEnabled"]
            if "seed" in config:
                self.settings["seed"] = config["seed"]
            self._apply_player_controllers()
            return self._serialize_locked()

    def get_valid_moves(self, row: int, col: int) -> dict[str, Any]:
        with self.lock:
            piece = self._require_piece(row, col)
            if piece.color != self.game.current_player:
                raise ValueError("It is not this piece's turn.")
            moves = get_valid_moves(self.game.state, piece)
            return {
                "piece": {"row": row, "col": col},
                "moves": [serialize_move(move) for move in moves],
            }

    def select_piece(self, payload: SelectRequest) -> dict[str, Any]:
        with self.lock:
            self._require_human_turn()
            before = self.game.state
            if not self.game.selectPiece(payload.row, payload.col):
                raise ValueError(f"Piece at row {payload.row}, col {payload.col} cannot be selected.")
            return self._serialize_locked(before)

    def make_move(self, payload: MoveRequest) -> dict[str, Any]:
        with self.lock:
            self._require_human_turn()
            before = self.game.state
            start = (payload.start.row, payload.start.col)
            end = (payload.end.row, payload.end.col)
            if not self.game.makeMove(start, end):
                raise ValueError("Requested move is not legal in this position.")
            return self._serialize_locked(before)

    def run_ai_move(self) -> dict[str, Any]:
        with self.lock:
            if self.game.state.game_over:
                raise RuntimeError("The game is already over.")
            if not self.game.isAITurn():
                raise RuntimeError("It is not the automated player's turn.")
            before = self.game.state
            logger.info(
                "AI turn for %s at difficulty %d.",
                before.current_player.value,
                before.ai_difficulty,
            )
            if not self.game.requestAIMove():
                raise RuntimeError("AI controller could not choose a move.")
            return self._serialize_locked(before)

    def undo_move(self) -> dict[str, Any]:
        with self.lock:
            before = self.game.state
            if not self.game.undoMove():
                raise ValueError("No moves to undo.")
            return self._serialize_locked(before)

    # helpers ------------------------------------------------------------

    def _serialize_locked(self, before: Optional[GameState] = None) -> dict[str, Any]:
        events = serialize_events(before, self.game.state) if before is not None else []
        return serialize_game(self.game, self.settings, events)

    def _require_piece(self, row: int, col: int) -> Piece:
        piece = self.game.state.board.getPiece(row, col)
        if piece is None:
            raise ValueError(f"No piece at row {row}, col {col}.")
        return piece

    def _require_human_turn(self) -> None:
        if self.game.isAITurn():
            raise RuntimeError("It is the automated player's turn.")

    def _apply_player_controllers(self) -> None:
        self.game.setPlayer(Color.BLACK, PlayerController.human("Black Human"))
        self.game.setPlayer(Color.WHITE, self._white_controller())

    def _white_controller(self) -> PlayerController:
        if not self.settings["aiEnabled"]:
            return PlayerController.human("White Human")
        return create_minimax_controller("White", seed=self.settings["seed"])
