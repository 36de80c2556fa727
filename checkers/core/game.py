from __future__ import annotations

import logging
from typing import Optional

from .move import Coordinate, Move
from .pieces import Color, Piece
from .player import PlayerController
from .rules import get_valid_moves, move_piece, select_piece
from .state import GameState, clamp_difficulty, initial_state

logger = logging.getLogger(__name__)


class Game:
    """Mutable wrapper that walks a game through immutable states."""

    def __init__(self, difficulty: int = 1):
        self.state: GameState = initial_state(difficulty)
        self.history: list[GameState] = []
        self.players: dict[Color, PlayerController] = {
            Color.WHITE: PlayerController.human("White Human"),
            Color.BLACK: PlayerController.human("Black Human"),
        }

    @property
    def current_player(self) -> Color:
        return self.state.current_player

    @property
    def winner(self) -> Optional[Color]:
        return self.state.winner

    def reset(self, difficulty: Optional[int] = None) -> None:
        level = self.state.ai_difficulty if difficulty is None else difficulty
        self.state = initial_state(level)
        self.history.clear()

    def setDifficulty(self, level: int) -> None:
        self.state = self.state.evolve(ai_difficulty=clamp_difficulty(level))

    def setPlayer(self, color: Color, controller: PlayerController) -> None:
        self.players[color] = controller

    def getPlayer(self, color: Color) -> PlayerController:
        return self.players[color]

    def currentController(self) -> PlayerController:
        return self.getPlayer(self.current_player)

    def isAITurn(self) -> bool:
        return not self.state.game_over and not self.currentController().is_human

    def getValidMoves(self) -> dict[Piece, list[Move]]:
        moves_map: dict[Piece, list[Move]] = {}
        for piece in self.state.board.pieces_of(self.current_player):
            moves = get_valid_moves(self.state, piece)
            if moves:
                moves_map[piece] = moves
        return moves_map

    def selectPiece(self, row: int, col: int) -> bool:
        selected = select_piece(self.state, (row, col))
        if selected is self.state:
            return False
        self.state = selected
        return True

    def makeMove(self, start: Coordinate, end: Coordinate) -> bool:
        if self.state.game_over:
            logger.debug("Rejected move %s -> %s: game is over.", start, end)
            return False
        previous = self.state
        result = move_piece(previous, start, end)
        if result is previous:
            logger.debug("Rejected move %s -> %s for %s.", start, end, previous.current_player.value)
            return False
        self.history.append(previous)
        self.state = result
        if result.game_over:
            outcome = "draw" if result.is_draw else f"{result.winner.value} wins"
            logger.info("Game over after %d moves: %s.", len(self.history), outcome)
        return True

    def requestAIMove(self) -> bool:
        """Let the current controller play its whole turn, chain captures included."""
        controller = self.currentController()
        if controller.is_human or self.state.game_over:
            return False
        color = self.current_player
        moved = False
        while not self.state.game_over and self.current_player == color:
            decision = controller.select_move(self) or self._firstLegalMove()
            if decision is None:
                break
            piece, move = decision
            if not self.makeMove(piece.position, move.end):
                break
            moved = True
            if self.state.jumping_piece is None:
                break
        return moved

    def _firstLegalMove(self) -> Optional[tuple[Piece, Move]]:
        # The search can come back empty-handed when every line repeats a move;
        # the side still has to play while it has a legal move.
        for piece, moves in self.getValidMoves().items():
            logger.warning(
                "%s found no move; playing %s -> %s.",
                self.currentController().name,
                piece.position,
                moves[0].end,
            )
            return piece, moves[0]
        return None

    def undoMove(self) -> bool:
        if not self.history:
            logger.debug("No moves to undo.")
            return False
        state = self.history.pop()
        # Step back over automated turns so the human is on move again.
        while self.history and not self.getPlayer(state.current_player).is_human:
            state = self.history.pop()
        self.state = state
        return True

    def isGameOver(self) -> bool:
        return self.state.game_over

    def getWinner(self) -> Optional[Color]:
        return self.state.winner
