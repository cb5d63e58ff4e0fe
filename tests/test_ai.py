"""
Unit tests for CPU move selection.

Covers:
- Board move enumeration and automatic promotion
- Greedy scoring (checkmate first, captures, square safety)
- Drop fallback and the no-legal-action outcome
- CPU turns driven through GameState
"""

import random
import unittest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from shogi_engine.piece import Piece
from shogi_engine.board import empty_board, standard_setup
from shogi_engine.rules import is_checkmate
from shogi_engine.game import BoardMove, Drop, NoLegalAction, GameState
from shogi_engine.ai import (
    enumerate_board_moves, simulate_move, capture_value, choose_ai_move,
    get_cpu_move_random, CPU_DIFFICULTIES, CPU_STRATEGIES
)
from shogi_engine.utils import SENTE, GOTE


class TestEnumeration(unittest.TestCase):

    def test_opening_move_count(self):
        self.assertEqual(len(enumerate_board_moves(standard_setup(), SENTE)), 30)
        self.assertEqual(len(enumerate_board_moves(standard_setup(), GOTE)), 30)

    def test_promotes_whenever_offered(self):
        board = empty_board()
        board[5][4] = Piece('S', GOTE)
        for move in enumerate_board_moves(board, GOTE):
            expected = 'S+' if move.to_pos[0] == 6 else 'S'
            self.assertEqual(move.piece.kind, expected)

    def test_simulate_move_keeps_original(self):
        board = standard_setup()
        move = BoardMove((6, 0), (5, 0), Piece('P', SENTE))
        simulated = simulate_move(board, move)
        self.assertEqual(simulated[5][0], Piece('P', SENTE))
        self.assertIsNone(simulated[6][0])
        self.assertIsNone(board[5][0])

    def test_capture_values(self):
        self.assertEqual(capture_value(None), 0)
        self.assertEqual(capture_value(Piece('R+', SENTE)), 9)
        self.assertEqual(capture_value(Piece('P', SENTE)), 1)
        self.assertEqual(capture_value(Piece('K', SENTE)), 0)


class TestGreedy(unittest.TestCase):

    def test_prefers_checkmate(self):
        board = empty_board()
        board[7][4] = Piece('K', SENTE)
        board[6][3] = Piece('R', GOTE)
        board[6][5] = Piece('B', GOTE)
        action = choose_ai_move(board, {}, 'white')
        self.assertIsInstance(action, BoardMove)
        self.assertEqual(action.from_pos, (6, 5))
        self.assertEqual(action.to_pos, (7, 4))
        self.assertEqual(action.piece, Piece('B+', GOTE))
        self.assertTrue(is_checkmate(simulate_move(board, action), 'black'))

    def test_prefers_capture(self):
        board = empty_board()
        board[8][0] = Piece('K', SENTE)
        board[2][4] = Piece('G', GOTE)
        board[3][5] = Piece('S', SENTE)
        action = choose_ai_move(board, {}, GOTE)
        self.assertEqual(action.to_pos, (3, 5))
        self.assertEqual(action.piece, Piece('G', GOTE))

    def test_avoids_attacked_squares(self):
        board = empty_board()
        board[8][0] = Piece('K', SENTE)
        board[2][4] = Piece('G', GOTE)
        board[4][3] = Piece('P', SENTE)   # 3,3 に利いている
        action = choose_ai_move(board, {}, GOTE)
        self.assertNotEqual(action.to_pos, (3, 3))
        self.assertEqual(action.to_pos, (3, 4))  # 同点なら最初の手

    def test_drop_fallback_in_hand_order(self):
        board = empty_board()
        board[8][8] = Piece('K', SENTE)
        action = choose_ai_move(board, {'N': 1, 'P': 1}, GOTE)
        self.assertEqual(action, Drop((0, 0), 'N', GOTE))

    def test_drop_fallback_skips_two_pawns(self):
        board = empty_board()
        board[4][4] = Piece('K', SENTE)
        board[8][0] = Piece('P', GOTE)   # 動けない歩
        action = choose_ai_move(board, {'P': 1}, GOTE)
        self.assertEqual(action, Drop((0, 1), 'P', GOTE))

    def test_drop_fallback_skips_dead_ranks(self):
        board = empty_board()
        board[0][4] = Piece('K', GOTE)
        action = choose_ai_move(board, {'N': 1}, 'black')
        self.assertEqual(action, Drop((2, 0), 'N', SENTE))

    def test_no_legal_action(self):
        board = empty_board()
        board[8][4] = Piece('K', SENTE)
        self.assertEqual(choose_ai_move(board, {}, GOTE), NoLegalAction(GOTE))

    def test_unknown_strategy(self):
        with self.assertRaises(ValueError):
            choose_ai_move(standard_setup(), {}, GOTE, strategy='minimax')


class TestRandom(unittest.TestCase):

    def test_random_move_is_enumerated(self):
        board = standard_setup()
        action = get_cpu_move_random(board, {}, GOTE, rng=random.Random(7))
        self.assertIn(action, enumerate_board_moves(board, GOTE))

    def test_difficulties_map_to_strategies(self):
        for strategy in CPU_DIFFICULTIES.values():
            self.assertIn(strategy, CPU_STRATEGIES)


class TestCpuTurn(unittest.TestCase):

    def test_cpu_without_action_resigns(self):
        state = GameState(mode='CPU')
        state.board = empty_board()
        state.board[8][4] = Piece('K', SENTE)
        state.turn = GOTE
        action = state.play_cpu_turn()
        self.assertEqual(action, NoLegalAction(GOTE))
        self.assertTrue(state.game_over)
        self.assertEqual(state.winner, SENTE)
        self.assertEqual(state.kifu, ['△投了'])

    def test_cpu_drops_from_hand(self):
        state = GameState(mode='CPU')
        state.board = empty_board()
        state.board[8][8] = Piece('K', SENTE)
        state.hands[GOTE] = {'G': 1}
        state.turn = GOTE
        state.play_cpu_turn()
        self.assertEqual(state.board[0][0], Piece('G', GOTE))
        self.assertEqual(state.hand(GOTE), {})
        self.assertEqual(state.kifu, ['△9一金打'])
        self.assertEqual(state.turn, SENTE)

    def test_cpu_checkmate_ends_game(self):
        state = GameState(mode='CPU')
        state.board = empty_board()
        state.board[7][4] = Piece('K', SENTE)
        state.board[6][3] = Piece('R', GOTE)
        state.board[6][5] = Piece('B', GOTE)
        state.turn = GOTE
        state.play_cpu_turn()
        self.assertTrue(state.game_over)
        self.assertEqual(state.winner, GOTE)
        self.assertIsNone(state.check)
        self.assertEqual(state.kifu, ['△5八角成'])


if __name__ == '__main__':
    unittest.main(verbosity=2)
