#!/usr/bin/env/ python
# encoding: utf-8

"""
Test the PRNG, and its keystream.
"""

import random
import unittest

import cipherkit.prng

__author__ = 'aldur'


def _word_stream(key: int, b: bytes) -> bytes:
    """
    XOR b against MT19937 numbers, most significant byte first.
    """
    mt_prng = cipherkit.prng.MT19937(key)

    result = bytearray(b)
    for i in range(0, len(b), 4):
        key = mt_prng.extract_number()
        for j, shift in enumerate((24, 16, 8, 0)):
            if i + j < len(b):
                result[i + j] ^= key >> shift & 0xff

    return bytes(result)


class PRNGTestCase(unittest.TestCase):
    def test_mt19937(self):
        mt_prng = cipherkit.prng.MT19937(5489)

        self.assertEqual(mt_prng.extract_number(), 3499211612)
        self.assertEqual(mt_prng.extract_number(), 581869302)

    def test_mt19937_stream(self):
        f = cipherkit.prng.mt19937_stream
        key = random.randint(0, 2 ** 32 - 1)
        b = "00foobarfoobar00!".encode("ascii")

        cipher = f(key, b)
        self.assertEqual(len(cipher), len(b))
        self.assertEqual(cipher, _word_stream(key, b))
        self.assertEqual(f(key, cipher), b)

    def test_core_seek(self):
        core = cipherkit.prng.Mt19937Core(5489)
        run = bytearray(4 * 700)
        core.write_keystream_blocks(run)

        for pos in (650, 3, 699, 0):
            core.set_block_pos(pos)
            block = bytearray(4)
            core.write_keystream_blocks(block)
            self.assertEqual(block, run[pos * 4:(pos + 1) * 4])

        core.set_block_pos(0)
        block = bytearray(4)
        core.write_keystream_blocks(block)
        self.assertEqual(block, (3499211612).to_bytes(4, "big"))


if __name__ == '__main__':
    unittest.main()
