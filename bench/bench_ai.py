from __future__ import annotations

import random
import sys
import time
from pathlib import Path

REPO_DIR = Path(__file__).resolve().parents[1]
if str(REPO_DIR) not in sys.path:
    sys.path.insert(0, str(REPO_DIR))

from checkers.ai import minimax  # noqa: E402
from checkers.core.rules import get_valid_moves, move_piece  # noqa: E402
from checkers.core.state import GameState, initial_state  # noqa: E402


def _white_to_move(difficulty: int) -> GameState:
    state = initial_state(difficulty)
    # Black opens (5,0) -> (4,1) so the automated side has a position to search.
    return move_piece(state, (5, 0), (4, 1))


def bench_move_generation(loops: int = 5000) -> None:
    state = initial_state()
    pieces = state.board.pieces_of(state.current_player)
    start = time.perf_counter()
    for _ in range(loops):
        for piece in pieces:
            _ = get_valid_moves(state, piece)
    elapsed = time.perf_counter() - start
    print(f"[move generation] loops={loops} pieces={len(pieces)}  {elapsed:.4f}s")


def bench_select_move(runs: int = 3) -> None:
    for difficulty in (1, 2, 3):
        state = _white_to_move(difficulty)
        depth = minimax.search_depth(state)
        timings = []
        for run in range(runs):
            rng = random.Random(run)
            t0 = time.perf_counter()
            _ = minimax.select_move(state, rng=rng)
            timings.append(time.perf_counter() - t0)
        mean = sum(timings) / len(timings)
        print(f"[minimax] difficulty={difficulty} depth={depth} runs={runs}  mean={mean:.4f}s  worst={max(timings):.4f}s")


def main() -> None:
    print("== Microbench: move generation ==")
    bench_move_generation()
    print()
    print("== Minimax bench ==")
    bench_select_move()


if __name__ == "__main__":
    main()
