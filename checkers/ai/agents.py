from __future__ import annotations

import random
from typing import Optional

from checkers.core.game import Game
from checkers.core.player import PlayerController, PlayerKind
from checkers.core.state import clamp_difficulty

from .minimax import select_move as minimax_select

__all__ = ["create_minimax_controller"]


def create_minimax_controller(
    name: str,
    difficulty: Optional[int] = None,
    *,
    seed: Optional[int] = None,
) -> PlayerController:
    level = clamp_difficulty(difficulty) if difficulty is not None else None
    rng = random.Random(seed)

    def _policy(game: Game):
        state = game.state
        if level is not None and state.ai_difficulty != level:
            state = state.evolve(ai_difficulty=level)
        return minimax_select(state, rng=rng)

    suffix = f" (level={level})" if level is not None else ""
    return PlayerController.automated(
        kind=PlayerKind.MINIMAX,
        name=f"{name} Minimax{suffix}",
        policy=_policy,
    )
