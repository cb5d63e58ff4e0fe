"""
Move application and game state management for Shogi.

This module provides:
- Move / Drop / NoLegalAction value types
- Pure state transitions (apply_move, apply_drop) returning new board and hands
- GameState class owning the current position, kifu and undo history
- CPU turn handling for the automated side
"""

import logging
from typing import List, Optional, NamedTuple, Tuple, Union, TypedDict

from .piece import Piece, JAPANESE_PIECE_NAMES
from .board import Board, clone_board, create_initial_board, board_to_text
from .hand import Hand, Hands, new_hands, copy_hands, add_to_hand, remove_from_hand
from .rules import (
    IllegalMoveError, RuleViolationError, movable_positions, has_king,
    is_in_check, must_promote, validate_drop
)
from .utils import (
    Position, OwnerLike, in_bounds, opponent, to_owner, coords_to_kifu,
    JAPANESE_TURN_SYMBOL, PLAYER_NAMES, SENTE, GOTE
)

logger = logging.getLogger(__name__)


class BoardMove(NamedTuple):
    """盤上の駒を動かす手。piece は移動後の駒 (成りを反映済み)"""
    from_pos: Position
    to_pos: Position
    piece: Piece


class Drop(NamedTuple):
    """持ち駒を打つ手"""
    target: Position
    kind: str
    owner: int


class NoLegalAction(NamedTuple):
    """指す手も打つ手もない"""
    owner: int


AiAction = Union[BoardMove, Drop, NoLegalAction]


class MoveResult(NamedTuple):
    """1手適用後の状態"""
    board: Board
    hands: Hands
    game_over: bool
    winner: Optional[int]
    check: Optional[int]       # 王手を掛けられている側 (なければ None)
    turn: int                  # 次の手番
    captured: Optional[Piece]  # 取った駒 (盤上にあったままの形)


def _check_move(board: Board, from_pos: Position, to_pos: Position, piece: Piece) -> Piece:
    """移動を検証し、移動元の駒を返す"""
    fr, fc = from_pos
    tr = to_pos[0]
    if not in_bounds(fr, fc) or not in_bounds(*to_pos):
        raise IllegalMoveError(f"{from_pos} -> {to_pos} is off the board")
    source = board[fr][fc]
    if source is None:
        raise IllegalMoveError(f"no piece at {from_pos}")
    if source.owner != piece.owner:
        raise IllegalMoveError(f"piece at {from_pos} belongs to {PLAYER_NAMES[source.owner]}")
    if piece != source:
        if piece != source.promote() or source.promote() == source:
            raise IllegalMoveError(f"{source!r} cannot become {piece!r}")
        if not source.should_promote(fr, tr):
            raise IllegalMoveError(f"promotion is not available for {from_pos} -> {to_pos}")
    if to_pos not in movable_positions(source, fr, fc, board):
        raise IllegalMoveError(f"{source!r} cannot move {from_pos} -> {to_pos}")
    return source


def apply_move(board: Board, hands: Hands, from_pos: Position, to_pos: Position,
               piece: Piece) -> MoveResult:
    """盤上の手を適用した新しい局面を返す (引数の盤面・持ち駒は変更しない)"""
    _check_move(board, from_pos, to_pos, piece)
    mover = piece.owner
    (fr, fc), (tr, tc) = from_pos, to_pos

    new_board = clone_board(board)
    new_hands = copy_hands(hands)
    captured = board[tr][tc]
    if captured is not None and captured.kind != 'K':
        new_hands[mover] = add_to_hand(new_hands[mover], captured.kind)

    new_board[tr][tc], new_board[fr][fc] = piece, None

    enemy = opponent(mover)
    if not has_king(new_board, enemy):
        logger.info("game over: %s captured the king", PLAYER_NAMES[mover])
        return MoveResult(new_board, new_hands, True, mover, None, enemy, captured)

    check = enemy if is_in_check(new_board, enemy) else None
    if check is not None:
        logger.info("check: %s king is attacked", PLAYER_NAMES[enemy])
    return MoveResult(new_board, new_hands, False, None, check, enemy, captured)


def apply_drop(board: Board, hands: Hands, target: Position, kind: str,
               owner: OwnerLike) -> MoveResult:
    """持ち駒を打った新しい局面を返す。規則違反は RuleViolationError"""
    owner = to_owner(owner)
    row, col = target
    validate_drop(board, hands[owner], row, col, kind, owner)

    new_board = clone_board(board)
    new_hands = copy_hands(hands)
    new_board[row][col] = Piece(kind, owner)
    new_hands[owner] = remove_from_hand(new_hands[owner], kind)

    enemy = opponent(owner)
    check = enemy if is_in_check(new_board, enemy) else None
    if check is not None:
        logger.info("check: %s king is attacked", PLAYER_NAMES[enemy])
    return MoveResult(new_board, new_hands, False, None, check, enemy, None)


# ========================================
# 対局状態
# ========================================

class HistoryItem(TypedDict):
    """対局状態スナップショット"""
    board: Board
    hands: Hands
    turn: int
    kifu: List[str]
    last_move_target: Optional[Tuple[int, int]]
    check: Optional[int]


class GameState:
    """ゲーム状態を管理するクラス"""

    def __init__(self, handicap: str = '平手', mode: str = 'CPU',
                 cpu_strategy: str = 'greedy', cpu_owner: OwnerLike = GOTE):
        from .ai import CPU_STRATEGIES
        if mode not in ('2P', 'CPU'):
            raise ValueError(f"unknown mode: {mode!r}")
        if cpu_strategy not in CPU_STRATEGIES:
            raise ValueError(f"unknown cpu strategy: {cpu_strategy!r}")

        self.board = create_initial_board(handicap)
        self.hands: Hands = new_hands()
        self.turn = SENTE
        self.kifu: List[str] = []
        self.history: List[HistoryItem] = []
        self.game_over = False
        self.winner: Optional[int] = None
        self.check: Optional[int] = None
        self.last_move_target: Optional[Tuple[int, int]] = None

        self.handicap = handicap
        self.mode = mode
        self.cpu_strategy = cpu_strategy
        self.cpu_owner = to_owner(cpu_owner)

    def save_history(self) -> None:
        """現在局面を履歴へ保存"""
        history_item: HistoryItem = {
            'board': clone_board(self.board),
            'hands': copy_hands(self.hands),
            'turn': self.turn,
            'kifu': list(self.kifu),
            'last_move_target': self.last_move_target,
            'check': self.check,
        }
        self.history.append(history_item)

    def load_history(self, item: HistoryItem) -> None:
        """履歴から状態を復元"""
        self.board = item['board']
        self.hands = item['hands']
        self.turn = item['turn']
        self.kifu = item['kifu']
        self.last_move_target = item['last_move_target']
        self.check = item['check']
        self.game_over, self.winner = False, None

    def undo(self) -> bool:
        """待った。CPU 対局では CPU の手とあわせて自分の手番まで戻す"""
        if not self.history:
            return False
        self.load_history(self.history.pop())
        while self.is_cpu_turn() and self.history:
            self.load_history(self.history.pop())
        return True

    def is_cpu_turn(self) -> bool:
        return self.mode == 'CPU' and self.turn == self.cpu_owner and not self.game_over

    def hand(self, owner: OwnerLike) -> Hand:
        return self.hands[to_owner(owner)]

    def movable_positions(self, row: int, col: int) -> List[Tuple[int, int]]:
        """UI の候補表示用。手番の駒でなければ空"""
        piece = self.board[row][col]
        if piece is None or piece.owner != self.turn or self.game_over:
            return []
        return movable_positions(piece, row, col, self.board)

    def _ensure_can_play(self) -> None:
        if self.game_over:
            raise IllegalMoveError("the game is over")

    def move(self, from_pos: Position, to_pos: Position, promote: Optional[bool] = None) -> MoveResult:
        """手番側の駒を動かす。行き所がなくなる場合は自動で成る"""
        self._ensure_can_play()
        fr, fc = from_pos
        tr, _ = to_pos
        piece = self.board[fr][fc] if in_bounds(fr, fc) else None
        if piece is None or piece.owner != self.turn:
            logger.warning("rejected move %s -> %s: not a %s piece", from_pos, to_pos,
                           PLAYER_NAMES[self.turn])
            raise IllegalMoveError(f"no {PLAYER_NAMES[self.turn]} piece at {from_pos}")

        can = piece.should_promote(fr, tr)
        if promote and not can:
            raise IllegalMoveError(f"promotion is not available for {from_pos} -> {to_pos}")
        promo = can and (must_promote(piece.kind, piece.owner, tr) or bool(promote))
        placed = piece.promote() if promo else piece

        try:
            result = apply_move(self.board, self.hands, from_pos, to_pos, placed)
        except IllegalMoveError as e:
            logger.warning("rejected move %s -> %s: %s", from_pos, to_pos, e)
            raise

        dest = "同" if self.last_move_target == to_pos else coords_to_kifu(*to_pos)
        kifu_text = f"{JAPANESE_TURN_SYMBOL[self.turn]}{dest}{JAPANESE_PIECE_NAMES[piece.kind]}"
        if promo:
            kifu_text += "成"
        elif can:
            kifu_text += "不成"
        self._commit(result, kifu_text, to_pos)
        return result

    def drop(self, target: Position, kind: str) -> MoveResult:
        """手番側の持ち駒を打つ"""
        self._ensure_can_play()
        try:
            result = apply_drop(self.board, self.hands, target, kind, self.turn)
        except (IllegalMoveError, RuleViolationError) as e:
            logger.warning("rejected drop of %s at %s: %s", kind, target, e)
            raise
        kifu_text = f"{JAPANESE_TURN_SYMBOL[self.turn]}{coords_to_kifu(*target)}{JAPANESE_PIECE_NAMES[kind]}打"
        self._commit(result, kifu_text, target)
        return result

    def _commit(self, result: MoveResult, kifu_text: str, target: Position) -> None:
        self.save_history()
        self.board, self.hands = result.board, result.hands
        self.kifu.append(kifu_text)
        self.last_move_target = target
        self.turn = result.turn
        self.check = result.check
        if result.game_over:
            self.game_over, self.winner = True, result.winner
        logger.info("%d. %s", len(self.kifu), kifu_text)
        logger.debug("board after %s:\n%s", kifu_text, board_to_text(self.board))

    def play_cpu_turn(self) -> AiAction:
        """CPU の手番を1手進める。指せる手がなければ CPU の負け"""
        from .ai import choose_ai_move
        self._ensure_can_play()
        if not self.is_cpu_turn():
            raise IllegalMoveError(f"it is not the cpu's turn ({PLAYER_NAMES[self.turn]} to move)")

        action = choose_ai_move(self.board, self.hands[self.turn], self.turn, self.cpu_strategy)
        if isinstance(action, BoardMove):
            fr, fc = action.from_pos
            source = self.board[fr][fc]
            self.move(action.from_pos, action.to_pos, promote=action.piece != source)
        elif isinstance(action, Drop):
            self.drop(action.target, action.kind)
        else:
            self.resign()
        return action

    def resign(self) -> None:
        """手番側の投了"""
        self._ensure_can_play()
        self.save_history()
        self.kifu.append(f"{JAPANESE_TURN_SYMBOL[self.turn]}投了")
        self.game_over, self.winner = True, opponent(self.turn)
        logger.info("game over: %s resigned", PLAYER_NAMES[self.turn])

