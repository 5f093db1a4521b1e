#!/usr/bin/env/ python
# encoding: utf-8

__author__ = 'aldur'

"""Handle PRN generation, and PRN keystreams."""

import cipherkit.counter
import cipherkit.util

BLOCK_SIZE = 4


class MT19937:

    """
    32 bits Mersenne Twister, the generator behind Mt19937Core.
    The state is refilled in one go every STATE_SIZE outputs.

    :param seed: The 32 bits seed.
    """

    STATE_SIZE = 624
    SHIFT = 397
    MATRIX = 0x9908b0df
    UPPER_MASK = 0x80000000
    LOWER_MASK = 0x7fffffff
    INIT_MULTIPLIER = 1812433253

    def __init__(self, seed: int):
        assert 0 <= seed <= 2 ** 32 - 1

        state = [seed]
        for i in range(1, self.STATE_SIZE):
            previous = state[-1]
            state.append(cipherkit.util.int_32_lsb(
                self.INIT_MULTIPLIER * (previous ^ previous >> 30) + i
            ))

        self.state = state
        self.index = self.STATE_SIZE

    def _refill(self):
        n, state = self.STATE_SIZE, self.state

        for i in range(n):
            y = (state[i] & self.UPPER_MASK) | \
                (state[(i + 1) % n] & self.LOWER_MASK)
            state[i] = state[(i + self.SHIFT) % n] ^ y >> 1
            if y & 1:
                state[i] ^= self.MATRIX

        self.index = 0

    @staticmethod
    def _temper(y: int) -> int:
        y ^= y >> 11
        y ^= y << 7 & 0x9d2c5680
        y ^= y << 15 & 0xefc60000
        y ^= y >> 18
        return cipherkit.util.int_32_lsb(y)

    def extract_number(self) -> int:
        """
        :return: The next 32 bits output.
        """
        if self.index >= self.STATE_SIZE:
            self._refill()

        y = self.state[self.index]
        self.index += 1
        return self._temper(y)


class Mt19937Core(cipherkit.counter.StreamCipherSeekCore):

    """
    Use MT19937 numbers as keystream,
    each one a 4 bytes (big endian) block.

    The generator never wraps around,
    so the number of remaining blocks is unknown.
    Seeking backwards replays the generator from its seed.

    :param seed: The MT seed.
    """

    block_size = BLOCK_SIZE

    def __init__(self, seed: int):
        self.seed = seed
        self.counter = cipherkit.counter.Counter.unbounded()
        self._prng = MT19937(seed)
        self._prng_pos = 0

    def keystream_blocks(self, pos: int, n: int) -> bytes:
        if pos < self._prng_pos:
            self._prng = MT19937(self.seed)
            self._prng_pos = 0

        for _ in range(pos - self._prng_pos):
            self._prng.extract_number()

        self._prng_pos = pos + n
        return b"".join(
            self._prng.extract_number().to_bytes(BLOCK_SIZE, "big")
            for _ in range(n)
        )


def mt19937_stream(key: int, b: bytes) -> bytes:
    """
    XOR b against the Mt19937Core keystream seeded with key.

    :param key: The 32 bits seed.
    :param b: Any number of bytes.
    :returns: A new buffer, as long as b.
    """
    result = bytearray(b)
    Mt19937Core(key).apply_keystream_partial(result)
    return bytes(result)
