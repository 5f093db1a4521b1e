#!/usr/bin/env python
# encoding: utf-8

"""Block positions for seekable stream ciphers."""

import abc
import sys
import typing

import cipherkit.backend
import cipherkit.stream

__author__ = 'aldur'


class Counter:

    """
    A fixed width, unsigned block counter.
    A width of None gives an unbounded counter.

    :param bits: The counter width.
    :param value: The initial value.
    """

    def __init__(self, bits: typing.Optional[int]=32, value: int=0):
        assert bits is None or bits > 0
        self.bits = bits
        self._value = 0
        self.value = value

    @classmethod
    def i32(cls, value: int=0) -> "Counter":
        """
        The non-negative range of a signed 32 bits integer.
        """
        return cls(31, value)

    @classmethod
    def u32(cls, value: int=0) -> "Counter":
        return cls(32, value)

    @classmethod
    def u64(cls, value: int=0) -> "Counter":
        return cls(64, value)

    @classmethod
    def u128(cls, value: int=0) -> "Counter":
        return cls(128, value)

    @classmethod
    def usize(cls, value: int=0) -> "Counter":
        """
        As wide as the platform word (see sys.maxsize).
        """
        return cls(sys.maxsize.bit_length() + 1, value)

    @classmethod
    def unbounded(cls, value: int=0) -> "Counter":
        return cls(None, value)

    @property
    def bounded(self) -> bool:
        return self.bits is not None

    @property
    def max_value(self) -> typing.Optional[int]:
        return (1 << self.bits) - 1 if self.bounded else None

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int):
        if value < 0 or (self.bounded and value > self.max_value):
            raise ValueError(
                "Counter value {} does not fit in {} bits.".format(value, self.bits)
            )
        self._value = value

    def remaining(self) -> typing.Optional[int]:
        """
        :return: How many times the counter can be advanced
            before reaching its maximum value, None if unbounded.
        """
        return self.max_value - self._value if self.bounded else None

    def advance(self, n: int=1):
        """
        Advance the counter, wrapping around on overflow.

        :param n: The increment.
        """
        assert n >= 0
        self._value += n
        if self.bounded:
            self._value &= self.max_value

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return "Counter(bits={}, value={})".format(self.bits, self._value)


class _CounterBackend(cipherkit.backend.StreamBackend):

    """
    Generate keystream blocks starting at the core position,
    advancing it as blocks are produced.
    """

    def __init__(self, core: "StreamCipherSeekCore"):
        self.core = core
        self.block_size = core.block_size
        self.par_blocks = core.par_blocks

    def _gen(self, out: memoryview, n: int):
        counter = self.core.counter
        start = 0

        while n:
            run = n
            if counter.bounded:
                run = min(n, counter.max_value + 1 - counter.value)  # Until wrap.

            stop = start + run * self.block_size
            out[start:stop] = self.core.keystream_blocks(counter.value, run)
            counter.advance(run)
            start, n = stop, n - run

    def gen_ks_block(self, block: memoryview):
        self._gen(block, 1)

    def gen_par_ks_blocks(self, blocks: memoryview):
        assert len(blocks) == self.par_blocks * self.block_size
        self._gen(blocks, self.par_blocks)

    def gen_tail_blocks(self, blocks: memoryview):
        assert len(blocks) < self.par_blocks * self.block_size
        self._gen(blocks, len(blocks) // self.block_size)


class StreamCipherSeekCore(cipherkit.stream.StreamCipherCore):

    """
    A stream cipher whose keystream block is a pure function
    of the key and of the block position.

    Subclasses set `block_size`, `par_blocks` and a `counter`,
    and implement `keystream_blocks`.
    """

    par_blocks = 1
    counter = None  # type: Counter

    @abc.abstractmethod
    def keystream_blocks(self, pos: int, n: int) -> bytes:
        """
        Generate n keystream blocks, the first one at position pos.
        Positions from pos to pos + n - 1 never wrap around.

        :param pos: The first block position.
        :param n: The number of blocks.
        :return: n * block_size keystream bytes.
        """
        pass

    def process_with_backend(self, f: cipherkit.backend.StreamClosure):
        f.call(_CounterBackend(self))

    def remaining_blocks(self) -> typing.Optional[int]:
        remaining = self.counter.remaining()
        if remaining is None or remaining > sys.maxsize:
            return None
        return remaining

    def get_block_pos(self) -> int:
        """
        :return: The position of the next keystream block.
        """
        return self.counter.value

    def set_block_pos(self, pos: int):
        """
        Move to another block position.
        Keystream reuse is not prevented: this is up to the caller.

        :param pos: The position of the next keystream block.
        """
        self.counter.value = pos
        self.consumed = False
