#!/usr/bin/env/ python
# encoding: utf-8

__author__ = 'aldur'

import cipherkit.util
import unittest


class UtilTestCase(unittest.TestCase):
    def test_xor(self):
        a = bytearray.fromhex("1c0111001f010100061a024b53535009181c")
        b = bytearray.fromhex("686974207468652062756c6c277320657965")
        c = bytearray(cipherkit.util.xor(a, b))
        truth = bytearray.fromhex("746865206b696420646f6e277420706c6179")

        self.assertEqual(c, truth)

    def test_xor_into(self):
        f = cipherkit.util.xor_into
        src = bytes.fromhex("1c0111001f010100061a024b53535009181c")
        ks = bytes.fromhex("686974207468652062756c6c277320657965")
        truth = bytes.fromhex("746865206b696420646f6e277420706c6179")

        dst = bytearray(len(src))
        f(src, ks, dst, 6)
        self.assertEqual(dst, truth)

        # In-place.
        b = bytearray(src)
        f(b, ks, b, 3)
        self.assertEqual(b, truth)

        b = bytearray(src)
        view = memoryview(b)
        f(view, ks, view, 1)
        self.assertEqual(b, truth)

    def test_xor_into_lengths(self):
        f = cipherkit.util.xor_into
        self.assertRaises(
            AssertionError,
            f, bytes(4), bytes(3), bytearray(4), 1
        )
        self.assertRaises(
            AssertionError,
            f, bytes(4), bytes(4), bytearray(4), 3
        )

    def test_ceil_div(self):
        f = cipherkit.util.ceil_div

        self.assertEqual(f(0, 16), 0)
        self.assertEqual(f(1, 16), 1)
        self.assertEqual(f(16, 16), 1)
        self.assertEqual(f(17, 16), 2)
        self.assertEqual(f(33, 16), 3)

    def test_int_32_lsb(self):
        f = cipherkit.util.int_32_lsb

        self.assertEqual(f(2 ** 32 + 5), 5)
        self.assertEqual(f(0xFFFFFFFF), 0xFFFFFFFF)


if __name__ == '__main__':
    unittest.main()
