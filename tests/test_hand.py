"""
Unit tests for the captured-piece ledger.
"""

import unittest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from shogi_engine.hand import (
    add_to_hand, remove_from_hand, has_in_hand, hand_count, hand_kinds,
    new_hands, copy_hands
)
from shogi_engine.utils import SENTE, GOTE


class TestHand(unittest.TestCase):

    def test_add_is_non_destructive(self):
        hand = {}
        updated = add_to_hand(hand, 'P')
        self.assertEqual(hand, {})
        self.assertEqual(updated, {'P': 1})
        self.assertEqual(add_to_hand(updated, 'P'), {'P': 2})

    def test_promoted_pieces_are_demoted(self):
        hand = add_to_hand({}, 'R+')
        hand = add_to_hand(hand, 'N+')
        self.assertEqual(hand, {'R': 1, 'N': 1})
        self.assertFalse(has_in_hand(hand, 'R+'))

    def test_remove(self):
        hand = {'S': 2, 'P': 1}
        self.assertEqual(remove_from_hand(hand, 'S'), {'S': 1, 'P': 1})
        self.assertEqual(remove_from_hand(hand, 'P'), {'S': 2})
        self.assertEqual(hand, {'S': 2, 'P': 1})

    def test_remove_missing_raises(self):
        with self.assertRaises(ValueError):
            remove_from_hand({}, 'G')
        with self.assertRaises(ValueError):
            remove_from_hand({'G': 0}, 'G')

    def test_queries(self):
        hand = {'L': 2, 'B': 1}
        self.assertTrue(has_in_hand(hand, 'L'))
        self.assertFalse(has_in_hand(hand, 'R'))
        self.assertEqual(hand_count(hand, 'L'), 2)
        self.assertEqual(hand_count(hand, 'R'), 0)
        self.assertEqual(hand_kinds({'N': 1, 'P': 0, 'G': 3}), ['N', 'G'])

    def test_copy_hands_is_independent(self):
        hands = new_hands()
        self.assertEqual(hands, {SENTE: {}, GOTE: {}})
        copied = copy_hands(hands)
        copied[SENTE]['P'] = 1
        self.assertEqual(hands[SENTE], {})


if __name__ == '__main__':
    unittest.main(verbosity=2)
