"""
Captured-piece ("hand") ledger for the Shogi engine.

A hand maps a base piece kind to a positive count. Every function here is
non-destructive: the ledger passed in is never modified, a new dict is
returned instead. Captured promoted pieces are stored in their demoted form.
"""

from typing import Dict, List

from .piece import demote_kind
from .utils import SENTE, GOTE

# 型エイリアス
Hand = Dict[str, int]
Hands = Dict[int, Hand]


def new_hand() -> Hand:
    return {}


def new_hands() -> Hands:
    """両対局者の空の持ち駒"""
    return {SENTE: new_hand(), GOTE: new_hand()}


def copy_hands(hands: Hands) -> Hands:
    return {owner: dict(hand) for owner, hand in hands.items()}


def add_to_hand(hand: Hand, kind: str) -> Hand:
    """持ち駒に1枚追加 (成り駒は元の駒として加える)"""
    base = demote_kind(kind)
    updated = dict(hand)
    updated[base] = updated.get(base, 0) + 1
    return updated


def remove_from_hand(hand: Hand, kind: str) -> Hand:
    """持ち駒を1枚減らす。0枚になったら項目ごと削除"""
    count = hand.get(kind, 0)
    if count <= 0:
        raise ValueError(f"{kind} not in hand")
    updated = dict(hand)
    if count == 1:
        del updated[kind]
    else:
        updated[kind] = count - 1
    return updated


def has_in_hand(hand: Hand, kind: str) -> bool:
    return hand.get(kind, 0) > 0


def hand_count(hand: Hand, kind: str) -> int:
    return max(hand.get(kind, 0), 0)


def hand_kinds(hand: Hand) -> List[str]:
    """打てる駒種を持ち駒の並び順で返す"""
    return [kind for kind, count in hand.items() if count > 0]
