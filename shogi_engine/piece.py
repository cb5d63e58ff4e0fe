"""
Piece model, movement tables, and piece-related constants for Shogi.

This module defines:
- Piece value type (kind, owner) with promotion / demotion behaviour
- Movement tables for all 14 piece kinds (step offsets and sliding rays)
- Promotion zones and promotion / demotion mappings
- Japanese piece names and capture values used by the move selector

Offsets are (d_row, d_col) seen from sente (owner 0), whose forward direction
is towards row 0. Gote offsets are obtained by flipping d_row.
"""

from typing import Dict, List, Tuple

from .utils import SENTE, GOTE, PLAYER_NAMES

# 金将の6方向 (前, 斜め前, 左右, 後ろ)
GOLD_STEPS = [(-1, 0), (-1, -1), (-1, 1), (0, -1), (0, 1), (1, 0)]
DIAGONALS = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
ORTHOGONALS = [(1, 0), (-1, 0), (0, 1), (0, -1)]

# 駒の移動パターン定義 (1マス移動・跳び)
STEP_MOVES: Dict[str, List[Tuple[int, int]]] = {
    'K': [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)],
    'G': GOLD_STEPS,
    'S': [(-1, 0), (-1, -1), (-1, 1), (1, -1), (1, 1)],
    'N': [(-2, -1), (-2, 1)],
    'P': [(-1, 0)],
    'P+': GOLD_STEPS,
    'L+': GOLD_STEPS,
    'N+': GOLD_STEPS,
    'S+': GOLD_STEPS,
    'B+': ORTHOGONALS,
    'R+': DIAGONALS,
}

# スライド移動の方向
SLIDER_DIRS: Dict[str, List[Tuple[int, int]]] = {
    'R': ORTHOGONALS,
    'R+': ORTHOGONALS,
    'B': DIAGONALS,
    'B+': DIAGONALS,
    'L': [(-1, 0)],
}

# 成りと戻しのマッピング
PROMOTE_MAP = {'P': 'P+', 'L': 'L+', 'N': 'N+', 'S': 'S+', 'B': 'B+', 'R': 'R+'}
DEMOTE_MAP = {v: k for k, v in PROMOTE_MAP.items()}

BASE_KINDS = ['K', 'R', 'B', 'G', 'S', 'N', 'L', 'P']
ALL_KINDS = BASE_KINDS + list(DEMOTE_MAP)

# 成り域 (敵陣3段)
PROMOTION_ZONE = {SENTE: range(0, 3), GOTE: range(6, 9)}

# 駒の日本語名
JAPANESE_PIECE_NAMES = {
    'K': '玉', 'R': '飛', 'B': '角', 'G': '金', 'S': '銀', 'N': '桂', 'L': '香', 'P': '歩',
    'R+': '龍', 'B+': '馬', 'S+': '成銀', 'N+': '成桂', 'L+': '成香', 'P+': 'と',
}

# 駒を取ったときの得点 (玉は終局条件なので 0)
CAPTURE_VALUES: Dict[str, int] = {
    'P': 1, 'P+': 2, 'S': 3, 'S+': 4, 'N': 3, 'N+': 4, 'L': 3, 'L+': 4,
    'G': 5, 'B': 6, 'B+': 8, 'R': 7, 'R+': 9, 'K': 0,
}


def promote_kind(kind: str) -> str:
    """駒種を成り駒にする（成れない駒はそのまま）"""
    return PROMOTE_MAP.get(kind, kind)


def demote_kind(kind: str) -> str:
    """駒種を元の形に戻す（成り駒→成る前の駒）"""
    return DEMOTE_MAP.get(kind, kind)


class Piece:
    """駒の値オブジェクト。盤上の位置は持たず、移動は新しい Piece を置くことで表す。"""
    __slots__ = ("kind", "owner")

    def __init__(self, kind: str, owner: int):
        if kind not in ALL_KINDS:
            raise ValueError(f"unknown piece kind: {kind!r}")
        if owner not in PLAYER_NAMES:
            raise ValueError(f"unknown owner: {owner!r}")
        self.kind = kind
        self.owner = owner

    def kind_symbol(self) -> str:
        return self.kind

    @property
    def promoted(self) -> bool:
        return self.kind.endswith('+')

    @property
    def can_promote(self) -> bool:
        return self.kind in PROMOTE_MAP

    def promote(self) -> 'Piece':
        if not self.can_promote:
            return self
        return Piece(PROMOTE_MAP[self.kind], self.owner)

    def demote(self) -> 'Piece':
        if not self.promoted:
            return self
        return Piece(DEMOTE_MAP[self.kind], self.owner)

    def should_promote(self, from_row: int, to_row: int) -> bool:
        """成りを選択できる移動か (敵陣に入る・敵陣内・敵陣から出る)"""
        zone = PROMOTION_ZONE[self.owner]
        return self.can_promote and (from_row in zone or to_row in zone)

    def movable_positions(self, row: int, col: int, board) -> List[Tuple[int, int]]:
        from .rules import movable_positions  # rules は piece に依存するため遅延 import
        return movable_positions(self, row, col, board)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self.kind == other.kind and self.owner == other.owner

    def __hash__(self) -> int:
        return hash((self.kind, self.owner))

    def __repr__(self) -> str:
        return f"{self.kind_symbol()}{'S' if self.owner == SENTE else 'G'}"
