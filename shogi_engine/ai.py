"""
CPU move selection for Shogi.

This module provides:
- Enumeration of every board move of one side (promoting whenever offered)
- Pure move simulation on a private copy of the board
- A one-ply greedy selector (checkmate first, then capture value + safety)
- A uniform random selector
- Hand-drop fallback when no board move exists
- The strategy registry used by GameState
"""

import logging
import random
from typing import Callable, Dict, List, Optional

from .piece import CAPTURE_VALUES, Piece
from .board import Board, clone_board, iter_pieces
from .hand import Hand, hand_kinds
from .game import BoardMove, Drop, NoLegalAction, AiAction
from .rules import movable_positions, is_checkmate, is_square_attacked, generate_drop_targets
from .utils import GOTE, PLAYER_NAMES, OwnerLike, opponent, to_owner

logger = logging.getLogger(__name__)

# 安全度の加点 (移動先に相手の利きがあれば減点)
SAFETY_PENALTY = -2
SAFETY_BONUS = 1

CpuStrategy = Callable[[Board, Hand, int], AiAction]


def enumerate_board_moves(board: Board, owner: int) -> List[BoardMove]:
    """owner の盤上の全ての手 (成れるときは常に成る)"""
    moves: List[BoardMove] = []
    for r, c, p in iter_pieces(board, owner):
        for tr, tc in movable_positions(p, r, c, board):
            placed = p.promote() if p.should_promote(r, tr) else p
            moves.append(BoardMove((r, c), (tr, tc), placed))
    return moves


def simulate_move(board: Board, move: BoardMove) -> Board:
    """仮想的に1手指した盤面 (元の盤面は変更しない)"""
    temp_board = clone_board(board)
    (fr, fc), (tr, tc) = move.from_pos, move.to_pos
    temp_board[tr][tc], temp_board[fr][fc] = move.piece, None
    return temp_board


def capture_value(piece: Optional[Piece]) -> int:
    """駒を取ったときの得点 (取らない手は 0)"""
    if piece is None:
        return 0
    return CAPTURE_VALUES.get(piece.kind, 0)


def find_drop(board: Board, hand: Hand, owner: int) -> Optional[Drop]:
    """持ち駒の並び順・盤の行優先で最初に打てる升を探す"""
    for kind in hand_kinds(hand):
        targets = generate_drop_targets(board, kind, owner)
        if targets:
            return Drop(targets[0], kind, owner)
    return None


def _fallback(board: Board, hand: Hand, owner: int) -> AiAction:
    """盤上の手がないときは打つ手、それもなければ NoLegalAction"""
    drop = find_drop(board, hand, owner)
    if drop is not None:
        logger.debug("%s has no board move, dropping %s at %s",
                     PLAYER_NAMES[owner], drop.kind, drop.target)
        return drop
    logger.info("%s has no legal action", PLAYER_NAMES[owner])
    return NoLegalAction(owner)


def get_cpu_move_random(board: Board, hand: Hand, owner: int,
                        rng: Optional[random.Random] = None) -> AiAction:
    """入門レベル: ランダム手"""
    moves = enumerate_board_moves(board, owner)
    if not moves:
        return _fallback(board, hand, owner)
    return (rng or random).choice(moves)


def get_cpu_move_greedy(board: Board, hand: Hand, owner: int) -> AiAction:
    """初級レベル: 詰みがあれば詰み、なければ駒得と安全度で1手読み"""
    enemy = opponent(owner)
    best_move: Optional[BoardMove] = None
    best_score = float('-inf')

    for move in enumerate_board_moves(board, owner):
        simulated = simulate_move(board, move)
        if is_checkmate(simulated, enemy):
            logger.debug("checkmating move found: %s -> %s", move.from_pos, move.to_pos)
            return move

        tr, tc = move.to_pos
        score = capture_value(board[tr][tc])
        score += SAFETY_PENALTY if is_square_attacked(simulated, tr, tc, enemy) else SAFETY_BONUS
        if score > best_score:
            best_score, best_move = score, move

    if best_move is None:
        return _fallback(board, hand, owner)
    logger.debug("greedy choice %s -> %s (score %d)", best_move.from_pos, best_move.to_pos, best_score)
    return best_move


# CPU の指し手方針
CPU_STRATEGIES: Dict[str, CpuStrategy] = {
    'random': get_cpu_move_random,
    'greedy': get_cpu_move_greedy,
}

# CPU難易度設定 (表示名 -> 方針)
CPU_DIFFICULTIES = {'入門': 'random', '初級': 'greedy'}


def choose_ai_move(board: Board, hand: Hand, owner: OwnerLike = GOTE,
                   strategy: str = 'greedy') -> AiAction:
    """CPU の1手を選ぶ (BoardMove / Drop / NoLegalAction)"""
    try:
        cpu_move_func = CPU_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"unknown cpu strategy: {strategy!r}") from None
    return cpu_move_func(board, hand, to_owner(owner))
