#!/usr/bin/env/ python
# encoding: utf-8

"""
Test the lane chunking.
"""

import unittest

import cipherkit.chunks

__author__ = 'aldur'


class ChunksTestCase(unittest.TestCase):
    def test_partition(self):
        f = cipherkit.chunks.partition

        self.assertEqual(f(10, 4), (2, 2))
        self.assertEqual(f(8, 4), (2, 0))
        self.assertEqual(f(3, 4), (0, 3))
        self.assertEqual(f(0, 4), (0, 0))
        self.assertEqual(f(7, 1), (7, 0))

        self.assertRaises(AssertionError, f, 7, 0)

    def test_split(self):
        f = cipherkit.chunks.split

        self.assertEqual(
            f(10, 4),
            [(0, 4), (4, 8), (8, 10)]
        )
        self.assertEqual(
            f(8, 4),
            [(0, 4), (4, 8), (8, 8)]
        )
        self.assertEqual(
            f(2, 4),
            [(0, 2)]
        )

    def test_split_covers_everything(self):
        f = cipherkit.chunks.split

        for n in range(0, 30):
            for lanes in range(1, 9):
                ranges = f(n, lanes)
                indexes = [i for start, stop in ranges for i in range(start, stop)]

                self.assertEqual(indexes, list(range(n)))

                start, stop = ranges[-1]
                self.assertLess(stop - start, lanes)

    def test_iter_groups(self):
        f = cipherkit.chunks.iter_groups
        b = bytes(range(10 * 4))

        groups = list(f(b, 4, 4))
        self.assertEqual(
            [is_tail for is_tail, _ in groups],
            [False, False, True]
        )
        self.assertEqual(
            [len(g) for _, g in groups],
            [16, 16, 8]
        )
        self.assertEqual(b"".join(g for _, g in groups), b)


if __name__ == '__main__':
    unittest.main()
