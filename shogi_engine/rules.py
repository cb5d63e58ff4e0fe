"""
Game rules, move generation, and check detection for Shogi.

This module provides:
- Destination generation for all piece kinds (steps, jumps and sliding rays)
- Check and checkmate detection
- Promotion rules (offered promotion and forced promotion)
- Drop validation (occupied squares, two pawns in a file, dead ranks)
- The engine's error types

Destinations are pseudo-legal: a move that leaves the mover's own king in
check is not filtered out, losing the king ends the game instead.
"""

from typing import List, Tuple, Optional, Iterable

from .piece import Piece, STEP_MOVES, SLIDER_DIRS, demote_kind
from .board import Board, iter_pieces
from .hand import Hand, has_in_hand
from .utils import BOARD_SIZE, SENTE, OwnerLike, in_bounds, opponent, to_owner


class ShogiError(ValueError):
    """エンジンが操作を拒否したときの基底例外"""


class IllegalMoveError(ShogiError):
    """生成された移動先にない手、手番違い、持っていない駒打ちなど"""


class RuleViolationError(ShogiError):
    """二歩・行き所のない駒など、打つ手の規則違反"""


def _sign_for_owner(owner: int) -> int:
    """プレイヤーの向きに応じた符号を返す"""
    return 1 if owner == SENTE else -1


def _is_open(board: Board, r: int, c: int, owner: int) -> bool:
    """盤内で、かつ自分の駒で塞がれていないか"""
    if not in_bounds(r, c):
        return False
    target = board[r][c]
    return target is None or target.owner != owner


def _add_step_moves(board: Board, row: int, col: int, owner: int,
                    offsets: Iterable[Tuple[int, int]], moves: List[Tuple[int, int]]) -> None:
    """ステップ移動の手を追加 (桂馬の跳びも含む)"""
    sign = _sign_for_owner(owner)
    for dr, dc in offsets:
        nr, nc = row + dr * sign, col + dc
        if _is_open(board, nr, nc, owner):
            moves.append((nr, nc))


def _add_slider_moves(board: Board, row: int, col: int, owner: int,
                      dirs: Iterable[Tuple[int, int]], moves: List[Tuple[int, int]]) -> None:
    """スライド移動の手を追加"""
    sign = _sign_for_owner(owner)
    for dr, dc in dirs:
        dr *= sign
        nr, nc = row + dr, col + dc
        while in_bounds(nr, nc):
            target = board[nr][nc]
            if target is None:
                moves.append((nr, nc))
            else:
                if target.owner != owner:
                    moves.append((nr, nc))
                break
            nr, nc = nr + dr, nc + dc


def movable_positions(piece: Piece, row: int, col: int, board: Board) -> List[Tuple[int, int]]:
    """駒が (row, col) から動ける升を列挙 (自駒の升は含まない)"""
    moves: List[Tuple[int, int]] = []
    dirs = SLIDER_DIRS.get(piece.kind)
    if dirs:
        _add_slider_moves(board, row, col, piece.owner, dirs, moves)
    steps = STEP_MOVES.get(piece.kind)
    if steps:
        _add_step_moves(board, row, col, piece.owner, steps, moves)
    return moves


def find_king(board: Board, owner: int) -> Optional[Tuple[int, int]]:
    """王の位置を探す"""
    for r, c, p in iter_pieces(board, owner):
        if p.kind == 'K':
            return (r, c)
    return None


def has_king(board: Board, owner: int) -> bool:
    return find_king(board, owner) is not None


def is_square_attacked(board: Board, row: int, col: int, by_owner: int) -> bool:
    """by_owner の駒のいずれかが (row, col) に動けるか"""
    for r, c, p in iter_pieces(board, by_owner):
        if (row, col) in movable_positions(p, r, c, board):
            return True
    return False


def is_in_check(board: Board, owner: OwnerLike) -> bool:
    """王手状態かチェック (玉がなければ王手ではない)"""
    owner = to_owner(owner)
    king_pos = find_king(board, owner)
    if not king_pos:
        return False
    return is_square_attacked(board, king_pos[0], king_pos[1], opponent(owner))


def is_checkmate(board: Board, owner: OwnerLike) -> bool:
    """詰みの判定。

    玉自身の逃げ先がすべて現在の盤面で相手の利きにあれば詰みとみなす。
    合駒や他の駒で王手駒を取る手は考慮しない。逃げ先が一つもない玉も
    詰み扱いになる。玉がいない場合は詰み扱い。
    """
    owner = to_owner(owner)
    king_pos = find_king(board, owner)
    if not king_pos:
        return True
    kr, kc = king_pos
    enemy = opponent(owner)
    for er, ec in movable_positions(board[kr][kc], kr, kc, board):
        if not is_square_attacked(board, er, ec, enemy):
            return False
    return True


def should_promote(piece: Piece, from_row: int, to_row: int) -> bool:
    """成りを選べる移動か"""
    return piece.should_promote(from_row, to_row)


def promote(piece: Piece) -> Piece:
    return piece.promote()


def demote(kind: str) -> str:
    return demote_kind(kind)


def _last_ranks(kind: str, owner: int) -> range:
    """その駒が動けなくなる段 (行き所のない段)"""
    if kind in ('P', 'L'):
        return range(0, 1) if owner == SENTE else range(8, 9)
    if kind == 'N':
        return range(0, 2) if owner == SENTE else range(7, 9)
    return range(0)


def must_promote(kind: str, owner: int, to_row: int) -> bool:
    """必須成りの判定 (成らないと二度と動けない升)"""
    return to_row in _last_ranks(kind, owner)


def has_pawn_in_column(board: Board, col: int, owner: int) -> bool:
    """指定筋に既に歩があるかチェック（二歩禁止）"""
    for r in range(BOARD_SIZE):
        piece = board[r][col]
        if piece is not None and piece.kind == 'P' and piece.owner == owner:
            return True
    return False


def drop_into_forbidden_rank(kind: str, owner: int, row: int) -> bool:
    """行き所のない駒の判定"""
    return row in _last_ranks(kind, owner)


def drop_violation(board: Board, kind: str, owner: int, row: int, col: int) -> Optional[str]:
    """打つ手の規則違反の理由を返す (問題なければ None)"""
    if kind == 'P' and has_pawn_in_column(board, col, owner):
        return "二歩"
    if drop_into_forbidden_rank(kind, owner, row):
        return "行き所のない駒"
    return None


def is_valid_drop(board: Board, kind: str, owner: int, row: int, col: int) -> bool:
    """打つ手が有効かチェック"""
    if not in_bounds(row, col) or board[row][col] is not None:
        return False
    return drop_violation(board, kind, owner, row, col) is None


def generate_drop_targets(board: Board, kind: str, owner: int) -> List[Tuple[int, int]]:
    """打つ手の着手先を行優先で生成"""
    return [(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)
            if is_valid_drop(board, kind, owner, r, c)]


def validate_drop(board: Board, hand: Hand, row: int, col: int, kind: str, owner: int) -> None:
    """打つ手を検証し、違反なら例外を送出"""
    if kind == 'K' or demote_kind(kind) != kind:
        raise IllegalMoveError(f"{kind} cannot be dropped")
    if not in_bounds(row, col):
        raise IllegalMoveError(f"({row}, {col}) is off the board")
    if board[row][col] is not None:
        raise IllegalMoveError(f"({row}, {col}) is occupied")
    if not has_in_hand(hand, kind):
        raise IllegalMoveError(f"{kind} not in hand")
    reason = drop_violation(board, kind, owner, row, col)
    if reason:
        raise RuleViolationError(f"{kind} at ({row}, {col}): {reason}")
