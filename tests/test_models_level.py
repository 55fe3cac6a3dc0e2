import unittest

import pandas as pd

from models import Level, Ticker, reserved
from primitives import Side


class LevelTests(unittest.TestCase):
    def test_defaults(self):
        level = Level('', Side.BUY, 2, 5)
        self.assertFalse(level.filled)
        self.assertFalse(level.middle)
        self.assertEqual(10, level.cost)

    def test_to_dict(self):
        """ Side is stored as a plain integer so that it can be safely dumped. """
        data = Level('uid', Side.SELL, 0.5, 4.0, True, False).to_dict()
        self.assertEqual({'id': 'uid', 'side': -1, 'quantity': 0.5, 'rate': 4.0, 'filled': True, 'middle': False},
                         data)
        self.assertIs(type(data['side']), int)

    def test_from_dict(self):
        level = Level.from_dict({'id': None, 'side': 1, 'quantity': 1, 'rate': 3, 'filled': 0, 'middle': 1})
        self.assertEqual('', level.id)
        self.assertIs(Side.BUY, level.side)
        self.assertIsInstance(level.quantity, float)
        self.assertFalse(level.filled)
        self.assertTrue(level.middle)

    def test_container_columns(self):
        """ Test that container has the dataclass attributes as columns, in order """
        df = Level.container()
        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(['id', 'side', 'quantity', 'rate', 'filled', 'middle'], list(df.columns))

        df = Level.container([Level('a', Side.BUY, 1, 2), Level('b', Side.SELL, 3, 4)])
        self.assertEqual(2, len(df))
        self.assertEqual(['a', 'b'], df['id'].to_list())


class ReservedTests(unittest.TestCase):
    def test_reserved(self):
        levels = [Level('', Side.SELL, 1, 12),
                  Level('', Side.SELL, 2, 11),
                  Level('', Side.SELL, 5, 10, middle=True),
                  Level('', Side.BUY, 3, 9),
                  Level('', Side.BUY, 4, 8)]
        currency, asset = reserved(levels)
        self.assertAlmostEqual(3 * 9 + 4 * 8, currency)
        self.assertAlmostEqual(3, asset)

    def test_empty(self):
        self.assertEqual((0.0, 0.0), reserved([]))


class TickerTests(unittest.TestCase):
    def test_mid(self):
        self.assertEqual(100, Ticker(99, 101, 100.5).mid)


if __name__ == '__main__':
    unittest.main()
