"""
Board representation and setup for the Shogi engine.

This module provides:
- Board type definition (9x9 grid indexed board[row][col])
- Board copy and iteration helpers
- Initial board setup functions (standard and handicap games)
- A plain text diagram of a board for logs and debugging
"""

from typing import List, Optional, Callable, Dict, Tuple, Iterator

from .piece import Piece, JAPANESE_PIECE_NAMES
from .utils import BOARD_SIZE, SENTE, GOTE

# 型エイリアス
Board = List[List[Optional[Piece]]]


def empty_board() -> Board:
    """駒のない盤面を作成"""
    return [[None for _ in range(BOARD_SIZE)] for __ in range(BOARD_SIZE)]


def clone_board(board: Board) -> Board:
    """Board の軽量クローン (Piece は値なので共有してよい)"""
    return [list(row) for row in board]


def iter_pieces(board: Board, owner: Optional[int] = None) -> Iterator[Tuple[int, int, Piece]]:
    """盤上の駒を行優先で列挙"""
    for r, row in enumerate(board):
        for c, p in enumerate(row):
            if p is not None and (owner is None or p.owner == owner):
                yield r, c, p


def standard_setup() -> Board:
    """標準的な初期配置を作成"""
    board = empty_board()
    back = ['L', 'N', 'S', 'G', 'K', 'G', 'S', 'N', 'L']

    # 後手配置
    for c, k in enumerate(back):
        board[0][c] = Piece(k, GOTE)
    board[1][1], board[1][7] = Piece('R', GOTE), Piece('B', GOTE)
    for c in range(BOARD_SIZE):
        board[2][c] = Piece('P', GOTE)

    # 先手配置
    for c in range(BOARD_SIZE):
        board[6][c] = Piece('P', SENTE)
    board[7][1], board[7][7] = Piece('B', SENTE), Piece('R', SENTE)
    for c, k in enumerate(back):
        board[8][c] = Piece(k, SENTE)

    return board


def handicap_setup(remove_kinds: List[str]) -> List[Tuple[int, int]]:
    """指定された種類(kind)の駒を後手(上手)から取り除く位置リストを返す。
    remove_kinds: 取り除きたい駒のリスト ['R','B',...] のような形式。
    戻り値: [(row, col), ...]
    """
    positions = []
    temp = standard_setup()
    # 指定の種類ごとに盤を走査し最初に見つかった後手駒を除去対象とする
    for kind in remove_kinds:
        for r, c, p in iter_pieces(temp, GOTE):
            if p.kind == kind:
                positions.append((r, c))
                temp[r][c] = None
                break
    return positions


HANDICAPS: Dict[str, Callable[[], List[Tuple[int, int]]]] = {
    '平手': lambda: [],
    '香落ち': lambda: handicap_setup(['L']),
    '角落ち': lambda: handicap_setup(['B']),
    '飛車落ち': lambda: handicap_setup(['R']),
    '飛香落ち': lambda: handicap_setup(['R', 'L']),
    '二枚落ち': lambda: handicap_setup(['R', 'B']),
}


def create_initial_board(handicap: str = '平手') -> Board:
    """対局開始時の盤面 (駒落ち対応)"""
    if handicap not in HANDICAPS:
        raise ValueError(f"unknown handicap: {handicap!r}")
    board = standard_setup()
    for r, c in HANDICAPS[handicap]():
        board[r][c] = None
    return board


# 盤面図用の1文字表記
ONE_CHAR_NAMES = {'S+': '全', 'N+': '圭', 'L+': '杏'}


def board_to_text(board: Board) -> str:
    """盤面をテキスト図にする (後手の駒は v を付ける)"""
    lines = []
    for row in board:
        cells = []
        for p in row:
            if p is None:
                cells.append(' ・ ')
            else:
                name = ONE_CHAR_NAMES.get(p.kind) or JAPANESE_PIECE_NAMES[p.kind]
                cells.append(f"{'v' if p.owner == GOTE else ' '}{name} ")
        lines.append(''.join(cells))
    return '\n'.join(lines)
