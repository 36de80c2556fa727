from __future__ import annotations

import math
import random
import sys
import types
import unittest
from contextlib import contextmanager
from pathlib import Path

REPO_DIR = Path(__file__).resolve().parents[1]
if str(REPO_DIR) not in sys.path:
    sys.path.insert(0, str(REPO_DIR))


from checkers.ai import minimax  # noqa: E402
from checkers.ai.heuristic import evaluate_board  # noqa: E402
from checkers.core.board import Board  # noqa: E402
from checkers.core.move import Move  # noqa: E402
from checkers.core.pieces import Color, King, Man, Piece  # noqa: E402
from checkers.core.rules import check_for_jumps, get_valid_moves, move_piece  # noqa: E402
from checkers.core.state import GameState, initial_state  # noqa: E402


def _state(*pieces: Piece, turn: Color = Color.WHITE, **changes) -> GameState:
    state = GameState(board=Board.from_pieces(pieces), current_player=turn)
    state = state.evolve(must_jump=check_for_jumps(state))
    return state.evolve(**changes)


def _chain_position() -> GameState:
    # White (1,2) can take (2,3) and then (4,5) in one turn.
    return _state(
        Man(Color.WHITE, 1, 2),
        Man(Color.BLACK, 2, 3),
        Man(Color.BLACK, 4, 5),
        Man(Color.BLACK, 7, 0),
    )


def _repeat_stall_position() -> GameState:
    # (3,0)x(4,1) chains to a crown on (7,0); once black's king steps to (6,1)
    # white's only capture lands on (5,2) again, a key already in the branch.
    return _state(
        Man(Color.WHITE, 3, 0),
        Man(Color.BLACK, 4, 1),
        Man(Color.BLACK, 6, 1),
        Man(Color.BLACK, 4, 3),
        King(Color.BLACK, 7, 2),
        ai_difficulty=3,
    )


class _KeepOrder:
    def shuffle(self, items) -> None:
        pass


@contextmanager
def _patch_attr(obj, name: str, value):
    old = getattr(obj, name)
    setattr(obj, name, value)
    try:
        yield
    finally:
        setattr(obj, name, old)


class SearchDepthTests(unittest.TestCase):
    def test_package_exposes_the_search_module(self) -> None:
        self.assertIsInstance(minimax, types.ModuleType)
        self.assertTrue(callable(minimax.minimax))

    def test_depth_follows_difficulty(self) -> None:
        self.assertEqual(minimax.search_depth(initial_state(1)), 3)
        self.assertEqual(minimax.search_depth(initial_state(2)), 4)
        self.assertEqual(minimax.search_depth(initial_state(3)), 4)

    def test_lone_white_piece_searches_three_plies(self) -> None:
        state = _state(Man(Color.WHITE, 2, 1), Man(Color.BLACK, 5, 2), ai_difficulty=3)
        self.assertEqual(minimax.search_depth(state), 3)


class SelectMoveTests(unittest.TestCase):
    def test_no_move_when_white_is_stuck(self) -> None:
        state = _state(
            Man(Color.WHITE, 0, 1),
            Man(Color.BLACK, 1, 0),
            Man(Color.BLACK, 1, 2),
            Man(Color.BLACK, 2, 3),
        )
        self.assertIsNone(minimax.select_move(state, rng=random.Random(1)))

    def test_no_move_when_black_is_on_turn(self) -> None:
        self.assertIsNone(minimax.select_move(initial_state(), rng=random.Random(1)))

    def test_forced_capture_is_chosen(self) -> None:
        state = _state(Man(Color.WHITE, 2, 1), Man(Color.BLACK, 3, 2), Man(Color.BLACK, 6, 7))
        piece, move = minimax.select_move(state, rng=random.Random(3))
        self.assertEqual(piece.position, (2, 1))
        self.assertEqual(move, Move((4, 3), capture=(3, 2)))

    def test_seeded_search_is_reproducible(self) -> None:
        state = move_piece(initial_state(1), (5, 0), (4, 1))
        first = minimax.select_move(state, rng=random.Random(11))
        second = minimax.select_move(state, rng=random.Random(11))
        self.assertIsNotNone(first)
        self.assertEqual(first, second)

    def test_selected_move_is_legal(self) -> None:
        state = move_piece(initial_state(1), (5, 2), (4, 3))
        for seed in range(3):
            piece, move = minimax.select_move(state, rng=random.Random(seed))
            self.assertEqual(piece.color, Color.WHITE)
            self.assertIn(move, get_valid_moves(state, piece))


class MinimaxTests(unittest.TestCase):
    def test_leaf_returns_evaluation(self) -> None:
        state = initial_state()
        result = minimax.minimax(state, 0, -math.inf, math.inf, True, 2, frozenset(), random.Random(0))
        self.assertIsNone(result.move)
        self.assertEqual(result.score, evaluate_board(state, 2))

    def test_game_over_returns_evaluation(self) -> None:
        state = _state(Man(Color.WHITE, 2, 1), game_over=True, winner=Color.WHITE)
        result = minimax.minimax(state, 3, -math.inf, math.inf, True, 1, frozenset(), random.Random(0))
        self.assertIsNone(result.move)
        self.assertEqual(result.score, evaluate_board(state, 1))

    def test_repeated_move_in_branch_is_skipped(self) -> None:
        state = _state(Man(Color.WHITE, 2, 1), Man(Color.BLACK, 3, 2), Man(Color.BLACK, 6, 7))
        history = frozenset({"white-2-1-4-3"})
        result = minimax.minimax(state, 1, -math.inf, math.inf, True, 1, history, random.Random(0))
        self.assertIsNone(result.move)
        self.assertEqual(result.score, -math.inf)

    def test_side_without_moves_is_evaluated(self) -> None:
        state = initial_state()
        result = minimax.minimax(state, 2, -math.inf, math.inf, True, 1, frozenset(), random.Random(0))
        self.assertIsNone(result.move)
        self.assertEqual(result.score, evaluate_board(state, 1))

    def test_branch_of_repeated_moves_leaves_no_choice(self) -> None:
        state = _repeat_stall_position()
        self.assertEqual(get_valid_moves(state, state.board.getPiece(3, 0)), [Move((5, 2), capture=(4, 1))])

        result = minimax.minimax(state, 3, -math.inf, math.inf, True, 3, frozenset(), random.Random(0))
        self.assertEqual(result.score, -math.inf)
        self.assertIsNone(result.move)
        self.assertIsNone(minimax.select_move(state, rng=random.Random(8)))

    def test_cutoff_only_skips_the_rest_of_one_piece(self) -> None:
        state = _state(Man(Color.WHITE, 2, 1), Man(Color.WHITE, 2, 5), Man(Color.BLACK, 7, 6))
        searched = []
        simulate = minimax.simulate_complete_move

        def _recording(current, piece, move):
            searched.append((piece.position, move.end))
            return simulate(current, piece, move)

        with _patch_attr(minimax, "simulate_complete_move", _recording):
            minimax.minimax(state, 1, -math.inf, -1000.0, True, 1, frozenset(), _KeepOrder())
        # Every first move already beats beta, yet the second piece is still searched.
        self.assertEqual([start for start, _ in searched], [(2, 1), (2, 5)])

        searched.clear()
        with _patch_attr(minimax, "simulate_complete_move", _recording):
            minimax.minimax(state, 1, -math.inf, math.inf, True, 1, frozenset(), _KeepOrder())
        self.assertEqual(len(searched), 4)


class SimulateCompleteMoveTests(unittest.TestCase):
    def test_chain_collapses_into_one_ply(self) -> None:
        state = _chain_position()
        piece = state.board.getPiece(1, 2)
        result = minimax.simulate_complete_move(state, piece, Move((3, 4), capture=(2, 3)))

        self.assertEqual(result.board.getPiece(5, 6).id, "white-1-2")
        self.assertIsNone(result.board.getPiece(2, 3))
        self.assertIsNone(result.board.getPiece(4, 5))
        self.assertEqual(result.current_player, Color.BLACK)
        self.assertEqual(result.captured_pieces.black, 2)

    def test_illegal_move_leaves_state_alone(self) -> None:
        state = _chain_position()
        piece = state.board.getPiece(1, 2)
        self.assertIs(minimax.simulate_complete_move(state, piece, Move((2, 1))), state)

    def test_crowning_stops_the_chain(self) -> None:
        # (5,2)x(6,3) lands on row 7; the new king could continue over (6,5) but the turn ends.
        state = _state(
            Man(Color.WHITE, 5, 2),
            Man(Color.BLACK, 6, 3),
            Man(Color.BLACK, 6, 5),
            Man(Color.BLACK, 2, 7),
        )
        piece = state.board.getPiece(5, 2)
        result = minimax.simulate_complete_move(state, piece, Move((7, 4), capture=(6, 3)))
        self.assertTrue(result.board.getPiece(7, 4).is_king)
        self.assertIsNotNone(result.board.getPiece(6, 5))
        self.assertEqual(result.current_player, Color.BLACK)

    def test_chain_stops_after_three_extra_jumps(self) -> None:
        # (0,3) takes (1,2), (3,2), (5,4) and (5,6); (3,6) would be the fifth.
        state = _state(
            Man(Color.WHITE, 0, 3),
            Man(Color.BLACK, 1, 2),
            Man(Color.BLACK, 3, 2),
            Man(Color.BLACK, 5, 4),
            Man(Color.BLACK, 5, 6),
            Man(Color.BLACK, 3, 6),
        )
        piece = state.board.getPiece(0, 3)
        result = minimax.simulate_complete_move(state, piece, Move((2, 1), capture=(1, 2)))

        self.assertEqual(minimax.MAX_CHAIN_JUMPS, 3)
        self.assertEqual(result.board.getPiece(4, 7).id, "white-0-3")
        self.assertIsNotNone(result.board.getPiece(3, 6))
        self.assertEqual(result.captured_pieces.black, 4)
        self.assertEqual(result.current_player, Color.WHITE)
        self.assertIn(Move((2, 5), capture=(3, 6)), result.valid_moves)

    def test_chain_does_not_return_to_a_visited_square(self) -> None:
        # Around the diamond (1,2) -> (3,4) -> (5,2) -> (3,0); the last jump would land on (1,2).
        state = _state(
            Man(Color.WHITE, 1, 2),
            Man(Color.BLACK, 2, 3),
            Man(Color.BLACK, 4, 3),
            Man(Color.BLACK, 4, 1),
            Man(Color.BLACK, 2, 1),
        )
        piece = state.board.getPiece(1, 2)
        result = minimax.simulate_complete_move(state, piece, Move((3, 4), capture=(2, 3)))

        self.assertEqual(result.board.getPiece(3, 0).id, "white-1-2")
        self.assertIsNone(result.board.getPiece(1, 2))
        self.assertIsNotNone(result.board.getPiece(2, 1))
        self.assertEqual(result.captured_pieces.black, 3)
        self.assertEqual(result.valid_moves, (Move((1, 2), capture=(2, 1)),))


if __name__ == "__main__":
    unittest.main()
