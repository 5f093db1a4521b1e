#!/usr/bin/env/ python
# encoding: utf-8

"""
Test the buffer views.
"""

import unittest

import cipherkit.inout

__author__ = 'aldur'


class InOutTestCase(unittest.TestCase):
    def test_pair(self):
        a, b = bytes(range(16)), bytearray(16)
        pair = cipherkit.inout.InOut(a, b)

        self.assertEqual(len(pair), 16)
        self.assertFalse(pair.is_in_place)
        self.assertEqual(bytes(pair.get_in()), a)

        pair.get_out()[0] = 42
        self.assertEqual(b[0], 42)

    def test_pair_mismatch(self):
        self.assertRaises(
            cipherkit.inout.LengthMismatchException,
            cipherkit.inout.InOut,
            bytes(16), bytearray(15)
        )

    def test_pair_from_mut(self):
        b = bytearray(range(16))
        pair = cipherkit.inout.InOut.from_mut(b)

        self.assertTrue(pair.is_in_place)
        pair.get_out()[1] = 0
        self.assertEqual(pair.get_in()[1], 0)

    def test_length_mismatch(self):
        out = bytearray(4)

        with self.assertRaises(cipherkit.inout.LengthMismatchException) as cm:
            cipherkit.inout.InOutBuf(bytes(5), out)

        self.assertEqual(cm.exception.in_len, 5)
        self.assertEqual(cm.exception.out_len, 4)
        self.assertEqual(out, bytearray(4))

    def test_not_a_multiple(self):
        self.assertRaises(
            ValueError,
            cipherkit.inout.InOutBuf,
            bytes(17), bytearray(17), 16
        )

    def test_read_only_output(self):
        self.assertRaises(
            TypeError,
            cipherkit.inout.InOutBuf,
            bytes(16), bytes(16)
        )
        self.assertRaises(
            TypeError,
            cipherkit.inout.InOutBuf.from_mut,
            bytes(16)
        )

    def test_from_mut(self):
        b = bytearray(48)
        buf = cipherkit.inout.InOutBuf.from_mut(b, 16)

        self.assertEqual(len(buf), 3)
        self.assertEqual(buf.nbytes, 48)
        self.assertTrue(buf.is_in_place)
        self.assertTrue(buf.get(2).is_in_place)
        self.assertTrue(buf.reslice(1, 2).is_in_place)

    def test_get(self):
        a = bytes(range(48))
        buf = cipherkit.inout.InOutBuf(a, bytearray(48), 16)

        self.assertFalse(buf.is_in_place)
        self.assertEqual(bytes(buf.get(1).get_in()), a[16:32])
        self.assertRaises(IndexError, buf.get, 3)
        self.assertEqual(
            [bytes(p.get_in()) for p in buf],
            [a[0:16], a[16:32], a[32:48]]
        )

    def test_reslice(self):
        a = bytes(range(64))
        out = bytearray(64)
        buf = cipherkit.inout.InOutBuf(a, out, 16)

        sub = buf.reslice(1, 3)
        self.assertEqual(len(sub), 2)
        self.assertEqual(bytes(sub.get_in()), a[16:48])

        sub.get_out()[:] = bytes(range(100, 132))
        self.assertEqual(out[16:48], bytes(range(100, 132)))
        self.assertEqual(out[:16], bytes(16))

        head, tail = buf.split_at(1)
        self.assertEqual(len(head), 1)
        self.assertEqual(len(tail), 3)

    def test_into_chunks(self):
        a = bytes(range(160))
        buf = cipherkit.inout.InOutBuf(a, bytearray(160), 16)

        groups, tail = buf.into_chunks(4)
        self.assertEqual(len(groups), 2)
        self.assertEqual([len(g) for g in groups], [4, 4])
        self.assertEqual(len(tail), 2)
        self.assertEqual(
            b"".join(bytes(c.get_in()) for c in groups + [tail]),
            a
        )

        groups, tail = buf.into_chunks(5)
        self.assertEqual(len(groups), 2)
        self.assertEqual(len(tail), 0)

        groups, tail = buf.into_chunks(1)
        self.assertEqual(len(groups), 10)
        self.assertEqual(len(tail), 0)

    def test_into_blocks(self):
        a = bytes(range(40))
        buf = cipherkit.inout.InOutBuf(a, bytearray(40))

        blocks, tail = buf.into_blocks(16)
        self.assertEqual(len(blocks), 2)
        self.assertEqual(blocks.elem_size, 16)
        self.assertEqual(len(tail), 8)
        self.assertEqual(bytes(tail.get_in()), a[32:])

        blocks, tail = buf.reslice(0, 32).into_blocks(16)
        self.assertEqual(len(blocks), 2)
        self.assertEqual(len(tail), 0)

        blocks, tail = buf.reslice(0, 5).into_blocks(16)
        self.assertEqual(len(blocks), 0)
        self.assertEqual(len(tail), 5)


if __name__ == '__main__':
    unittest.main()
