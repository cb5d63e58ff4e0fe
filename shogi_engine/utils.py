"""
Constants and small helpers shared by the Shogi engine.

This module provides:
- Board size and player constants
- Japanese coordinate / turn tables used by the kifu notation
- Coordinate conversion utilities
- Owner normalisation ('black' / 'white' / 0 / 1)
- Logging convenience for applications embedding the engine
"""

import logging
from typing import Tuple, Union

# 盤面の基本設定
BOARD_SIZE = 9

# 手番 (0: 先手/黒, 1: 後手/白)
SENTE = 0
GOTE = 1
PLAYER_NAMES = {SENTE: 'black', GOTE: 'white'}
OWNER_FROM_NAME = {v: k for k, v in PLAYER_NAMES.items()}

# 座標系と表示関連
JAPANESE_Y_COORDS = ['一', '二', '三', '四', '五', '六', '七', '八', '九']
JAPANESE_TURN_SYMBOL = {SENTE: '▲', GOTE: '△'}

Position = Tuple[int, int]
OwnerLike = Union[int, str]


def opponent(owner: int) -> int:
    """相手の手番を返す"""
    return 1 - owner


def to_owner(owner: OwnerLike) -> int:
    """'black' / 'white' または 0 / 1 を手番番号に正規化"""
    if isinstance(owner, str):
        try:
            return OWNER_FROM_NAME[owner.lower()]
        except KeyError:
            raise ValueError(f"unknown player: {owner!r}") from None
    if owner not in (SENTE, GOTE):
        raise ValueError(f"unknown player: {owner!r}")
    return owner


def in_bounds(row: int, col: int) -> bool:
    """座標が盤面内かチェック"""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def coords_to_kifu(row: int, col: int) -> str:
    """盤上座標を棋譜記法に変換"""
    return f"{9-col}{JAPANESE_Y_COORDS[row]}"


def configure_logging(level: int = logging.INFO) -> None:
    """エンジンのログ出力を標準エラーへ流す (アプリケーション向け)"""
    logger = logging.getLogger('shogi_engine')
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s %(name)s %(levelname)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(level)
