#!/usr/bin/env/ python
# encoding: utf-8

"""
Test block counters and seekable cores.
"""

import sys
import unittest

import cipherkit.counter

__author__ = 'aldur'


class _IndexCore(cipherkit.counter.StreamCipherSeekCore):
    """
    Keystream block i holds i, in big endian.
    """

    block_size = 4

    def __init__(self, bits, par_blocks: int=1):
        self.counter = cipherkit.counter.Counter(bits)
        self.par_blocks = par_blocks
        self.calls = []

    def keystream_blocks(self, pos: int, n: int) -> bytes:
        self.calls.append((pos, n))
        return b"".join(
            (i & 0xFFFFFFFF).to_bytes(4, "big") for i in range(pos, pos + n)
        )


class CounterTestCase(unittest.TestCase):
    def test_widths(self):
        self.assertEqual(cipherkit.counter.Counter.u32().max_value, 2 ** 32 - 1)
        self.assertEqual(cipherkit.counter.Counter.u64().max_value, 2 ** 64 - 1)
        self.assertEqual(cipherkit.counter.Counter.u128().max_value, 2 ** 128 - 1)
        self.assertIsNone(cipherkit.counter.Counter.unbounded().max_value)
        self.assertEqual(cipherkit.counter.Counter.i32().max_value, 2 ** 31 - 1)
        self.assertEqual(
            cipherkit.counter.Counter.usize().max_value,
            sys.maxsize * 2 + 1
        )

    def test_remaining(self):
        c = cipherkit.counter.Counter.u32(10)
        self.assertEqual(c.remaining(), 2 ** 32 - 1 - 10)

        c.value = c.max_value
        self.assertEqual(c.remaining(), 0)

        self.assertIsNone(cipherkit.counter.Counter.unbounded(5).remaining())

    def test_range(self):
        c = cipherkit.counter.Counter(8)

        with self.assertRaises(ValueError):
            c.value = 256
        with self.assertRaises(ValueError):
            c.value = -1
        self.assertRaises(ValueError, cipherkit.counter.Counter, 8, 300)

        c = cipherkit.counter.Counter.unbounded()
        c.value = 2 ** 200
        self.assertEqual(int(c), 2 ** 200)

    def test_advance(self):
        c = cipherkit.counter.Counter(8, 250)
        c.advance(5)
        self.assertEqual(c.value, 255)
        c.advance(3)
        self.assertEqual(c.value, 2)

        c = cipherkit.counter.Counter.unbounded(250)
        c.advance(10)
        self.assertEqual(c.value, 260)


class SeekCoreTestCase(unittest.TestCase):
    def test_positions(self):
        core = _IndexCore(32)
        self.assertEqual(core.get_block_pos(), 0)

        core.write_keystream_blocks(bytearray(4 * 3))
        self.assertEqual(core.get_block_pos(), 3)

        core.set_block_pos(100)
        buf = bytearray(4)
        core.write_keystream_blocks(buf)
        self.assertEqual(buf, (100).to_bytes(4, "big"))
        self.assertEqual(core.get_block_pos(), 101)

        self.assertRaises(ValueError, core.set_block_pos, 2 ** 32)

    def test_remaining_blocks(self):
        core = _IndexCore(32)
        core.set_block_pos(2 ** 32 - 3)
        self.assertEqual(core.remaining_blocks(), 2)

        self.assertIsNone(_IndexCore(None).remaining_blocks())

        core = _IndexCore(128)
        self.assertIsNone(core.remaining_blocks())
        core.set_block_pos(2 ** 128 - 1 - sys.maxsize)
        self.assertEqual(core.remaining_blocks(), sys.maxsize)

    def test_wide_generation(self):
        core = _IndexCore(32, par_blocks=4)
        core.write_keystream_blocks(bytearray(4 * 10))

        self.assertEqual(core.calls, [(0, 4), (4, 4), (8, 2)])

    def test_wrap_around(self):
        core = _IndexCore(32, par_blocks=4)
        core.set_block_pos(2 ** 32 - 2)

        buf = bytearray(4 * 4)
        core.write_keystream_blocks(buf)

        self.assertEqual(
            buf,
            bytes.fromhex("fffffffe" "ffffffff" "00000000" "00000001")
        )
        self.assertEqual(core.calls, [(2 ** 32 - 2, 2), (0, 2)])
        self.assertEqual(core.get_block_pos(), 2)


if __name__ == '__main__':
    unittest.main()
