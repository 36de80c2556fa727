from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .game import Game
    from .move import Move
    from .pieces import Piece

# A policy answers with the piece to move and one of its destinations.
MoveDecision = Tuple["Piece", "Move"]
MovePolicy = Callable[["Game"], Optional[MoveDecision]]


class PlayerKind(str, Enum):
    HUMAN = "human"
    MINIMAX = "minimax"


@dataclass(frozen=True)
class PlayerController:
    """Who plays a color. Humans have no policy; their moves come from the client."""

    kind: PlayerKind
    name: str
    policy: Optional[MovePolicy] = None

    @classmethod
    def human(cls, name: str) -> "PlayerController":
        return cls(kind=PlayerKind.HUMAN, name=name)

    @classmethod
    def automated(cls, kind: PlayerKind, name: str, policy: MovePolicy) -> "PlayerController":
        if kind == PlayerKind.HUMAN:
            raise ValueError("An automated controller needs a non-human kind.")
        return cls(kind=kind, name=name, policy=policy)

    @property
    def is_human(self) -> bool:
        return self.kind == PlayerKind.HUMAN or self.policy is None

    def select_move(self, game: "Game") -> Optional[MoveDecision]:
        if self.is_human:
            return None
        return self.policy(game)

    def describe(self) -> dict[str, str]:
        return {"kind": self.kind.value, "name": self.name}
