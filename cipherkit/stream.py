#!/usr/bin/env/ python
# encoding: utf-8

"""
Handle stream operations here.

A stream primitive generates keystream blocks,
which are XOR-ed against the data.
Block-level methods leave budget checks to the caller,
partial (byte-level) methods check the budget before touching anything.
"""

import abc
import typing

import cipherkit.backend
import cipherkit.inout
import cipherkit.util

__author__ = 'aldur'


class InsufficientCapacityException(Exception):
    """
    Thrown when the keystream left is too short for the requested data.
    """

    def __init__(self, needed: int, remaining: int):
        super().__init__(
            "Needed {} keystream blocks, only {} left.".format(needed, remaining)
        )
        self.needed = needed
        self.remaining = remaining


class StreamConsumedException(Exception):
    """
    Thrown when using a stream primitive
    whose last keystream block has been partially discarded.
    """
    pass


class StreamCipherCore(metaclass=abc.ABCMeta):

    """
    Block-level synchronous stream cipher.

    Subclasses set `block_size` and implement
    `remaining_blocks` and `process_with_backend`.
    """

    block_size = 0
    consumed = False

    @abc.abstractmethod
    def remaining_blocks(self) -> typing.Optional[int]:
        """
        Number of blocks left before the primitive wraps around.

        :return: The number of blocks, or None if it can't be told
            (unbounded, or too big to be represented).
        """
        pass

    @abc.abstractmethod
    def process_with_backend(self, f: cipherkit.backend.StreamClosure):
        """
        Call the closure with the keystream backend.
        The backend advances the position by one
        for each keystream block it generates.

        :param f: The closure.
        """
        pass

    def check_usable(self):
        """
        :raises: StreamConsumedException
        """
        if self.consumed:
            raise StreamConsumedException(
                "The final keystream block has been consumed, seek first."
            )

    def write_keystream_blocks(self, buf: bytearray):
        """
        Write keystream blocks to buf.

        WARNING: the number of remaining blocks is not checked!

        :param buf: A writable buffer, its length a multiple of block_size.
        """
        self.check_usable()

        buf = cipherkit.inout.InOutBuf.from_mut(buf, self.block_size)
        self.process_with_backend(
            cipherkit.backend.WriteBlocksCtx(buf.get_out(), self.block_size)
        )

    def apply_keystream_blocks(
            self,
            blocks,
            post_fn: typing.Callable[[memoryview], None]=None
    ):
        """
        XOR keystream blocks against blocks.

        WARNING: the number of remaining blocks is not checked!

        :param blocks: An InOutBuf of blocks, or a writable buffer
            (processed in-place) whose length is a multiple of block_size.
        :param post_fn: Called once per processed chunk,
            with the output side of the chunk.
        """
        if not isinstance(blocks, cipherkit.inout.InOutBuf):
            blocks = cipherkit.inout.InOutBuf.from_mut(blocks, self.block_size)
        assert blocks.elem_size == self.block_size, \
            "Expected blocks of {} bytes.".format(self.block_size)

        self.check_usable()
        self.process_with_backend(
            cipherkit.backend.ApplyBlocksCtx(blocks, post_fn)
        )

    def apply_keystream_blocks_b2b(
            self,
            in_blocks: bytes,
            out_blocks: bytearray,
            post_fn: typing.Callable[[memoryview], None]=None
    ):
        """
        XOR keystream blocks against in_blocks, writing to out_blocks.

        :raises: LengthMismatchException
        """
        self.apply_keystream_blocks(
            cipherkit.inout.InOutBuf(in_blocks, out_blocks, self.block_size),
            post_fn
        )

    def check_remaining(self, data_len: int):
        """
        Check that enough keystream is left for data_len bytes.

        :param data_len: The number of bytes.
        :raises: InsufficientCapacityException
        """
        remaining = self.remaining_blocks()
        if remaining is None:
            return

        needed = cipherkit.util.ceil_div(data_len, self.block_size)
        if needed > remaining:
            raise InsufficientCapacityException(needed, remaining)

    def try_apply_keystream_partial(self, buf, out_buf: bytearray=None):
        """
        Apply the keystream to data not divided into blocks.

        The trailing bytes are XOR-ed against the beginning of one more
        keystream block, whose other bytes are discarded:
        afterwards the primitive can't be used anymore,
        unless its position is set again.

        Nothing is read or written if the keystream left is too short.

        :param buf: An InOutBuf of bytes, or a writable buffer
            (processed in-place if out_buf is None).
        :param out_buf: The output buffer.
        :raises: InsufficientCapacityException, LengthMismatchException
        """
        if not isinstance(buf, cipherkit.inout.InOutBuf):
            buf = cipherkit.inout.InOutBuf.from_mut(buf) if out_buf is None \
                else cipherkit.inout.InOutBuf(buf, out_buf)
        assert buf.elem_size == 1

        self.check_usable()
        self.check_remaining(buf.nbytes)

        blocks, tail = buf.into_blocks(self.block_size)
        if len(blocks):
            self.apply_keystream_blocks(blocks)

        n = len(tail)
        if n:
            block = bytearray(self.block_size)
            block[:n] = tail.get_in()
            self.apply_keystream_blocks(block)
            tail.get_out()[:] = block[:n]

        self.consumed = True

    def apply_keystream_partial(self, buf, out_buf: bytearray=None):
        """
        Same as `try_apply_keystream_partial`,
        but the caller guarantees that enough keystream is left.

        :raises: AssertionError if it is not the case.
        """
        try:
            self.try_apply_keystream_partial(buf, out_buf)
        except InsufficientCapacityException as e:
            raise AssertionError(str(e)) from e
