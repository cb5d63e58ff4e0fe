"""
Shogi Engine Package

A Shogi (Japanese Chess) rule engine with a greedy CPU opponent.
Rendering and input handling are left to the embedding application, which
only calls the operations re-exported here.

Modules:
- piece: Piece value type, movement tables and promotion mappings
- board: Board representation and initial setups
- hand: Captured-piece ledger
- rules: Move generation, check / checkmate detection, drop rules
- game: Move application and game state management
- ai: CPU move selection strategies
- utils: Constants and helpers
"""

import logging

from .piece import Piece, demote_kind, promote_kind
from .board import Board, create_initial_board, standard_setup, empty_board, HANDICAPS
from .hand import add_to_hand, remove_from_hand, has_in_hand, new_hands
from .rules import (
    ShogiError, IllegalMoveError, RuleViolationError, movable_positions,
    should_promote, promote, demote, is_in_check, is_checkmate
)
from .game import (
    BoardMove, Drop, NoLegalAction, MoveResult, GameState, apply_move, apply_drop
)
from .ai import choose_ai_move, CPU_STRATEGIES
from .utils import SENTE, GOTE

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    'Piece', 'demote_kind', 'promote_kind',
    'Board', 'create_initial_board', 'standard_setup', 'empty_board', 'HANDICAPS',
    'add_to_hand', 'remove_from_hand', 'has_in_hand', 'new_hands',
    'ShogiError', 'IllegalMoveError', 'RuleViolationError', 'movable_positions',
    'should_promote', 'promote', 'demote', 'is_in_check', 'is_checkmate',
    'BoardMove', 'Drop', 'NoLegalAction', 'MoveResult', 'GameState', 'apply_move', 'apply_drop',
    'choose_ai_move', 'CPU_STRATEGIES', 'SENTE', 'GOTE',
]
