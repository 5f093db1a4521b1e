#!/usr/bin/env python
# encoding: utf-8

"""
Byte-level streaming on top of a block-level stream cipher.

The wrapper keeps the last generated keystream block,
so that data can be processed in pieces of any length.
"""

import cipherkit.inout
import cipherkit.stream
import cipherkit.util

__author__ = 'aldur'


class StreamCipherOverflowException(Exception):
    """
    Thrown when seeking past the end of the keystream.
    """
    pass


class StreamCipherCoreWrapper:

    """
    Wrap a StreamCipherCore (seekable or not).

    :param core: The block-level stream cipher.
    """

    def __init__(self, core: cipherkit.stream.StreamCipherCore):
        self.core = core
        self.block_size = core.block_size
        self._buffer = bytearray(self.block_size)
        self._pos = self.block_size  # Bytes of _buffer already used.

    def _leftover(self) -> int:
        return self.block_size - self._pos

    def check_remaining(self, data_len: int):
        """
        Check that enough keystream is left for data_len bytes.

        :param data_len: The number of bytes.
        :raises: InsufficientCapacityException
        """
        leftover = self._leftover()
        if data_len <= leftover:
            return

        remaining = self.core.remaining_blocks()
        if remaining is None:
            return

        needed = cipherkit.util.ceil_div(data_len - leftover, self.block_size)
        if needed > remaining:
            raise cipherkit.stream.InsufficientCapacityException(needed, remaining)

    def _xor_buffered(self, data: cipherkit.inout.InOutBuf):
        n = data.nbytes
        cipherkit.util.xor_into(
            data.get_in(),
            self._buffer[self._pos:self._pos + n],
            data.get_out(),
            n
        )
        self._pos += n

    def try_apply_keystream(self, buf, out_buf: bytearray=None):
        """
        XOR the next keystream bytes against buf.
        Nothing is written if the keystream left is too short.

        :param buf: An InOutBuf of bytes, or a writable buffer
            (processed in-place if out_buf is None).
        :param out_buf: The output buffer.
        :raises: InsufficientCapacityException, LengthMismatchException,
            StreamConsumedException
        """
        if not isinstance(buf, cipherkit.inout.InOutBuf):
            buf = cipherkit.inout.InOutBuf.from_mut(buf) if out_buf is None \
                else cipherkit.inout.InOutBuf(buf, out_buf)
        assert buf.elem_size == 1

        self.core.check_usable()
        self.check_remaining(buf.nbytes)

        n = min(self._leftover(), buf.nbytes)
        if n:
            head, buf = buf.split_at(n)
            self._xor_buffered(head)

        blocks, tail = buf.into_blocks(self.block_size)
        if len(blocks):
            self.core.apply_keystream_blocks(blocks)

        if len(tail):
            self.core.write_keystream_blocks(self._buffer)
            self._pos = 0
            self._xor_buffered(tail)

    def apply_keystream(self, buf, out_buf: bytearray=None):
        """
        Same as `try_apply_keystream`,
        but the caller guarantees that enough keystream is left.

        :raises: AssertionError if it is not the case.
        """
        try:
            self.try_apply_keystream(buf, out_buf)
        except cipherkit.stream.InsufficientCapacityException as e:
            raise AssertionError(str(e)) from e

    def apply_keystream_b2b(self, in_buf: bytes, out_buf: bytearray):
        """
        XOR the next keystream bytes against in_buf, writing to out_buf.

        :raises: InsufficientCapacityException, LengthMismatchException
        """
        self.try_apply_keystream(in_buf, out_buf)

    def try_current_pos(self) -> int:
        """
        :return: The byte position of the next keystream byte.
        :raises: StreamCipherOverflowException if the buffered block
            sits behind the core position (the counter wrapped around,
            or the core was moved directly).
        """
        block = self.core.get_block_pos()
        if self._leftover() == 0:
            return block * self.block_size

        if block == 0:
            raise StreamCipherOverflowException(
                "The buffered block precedes block 0."
            )
        return (block - 1) * self.block_size + self._pos

    def current_pos(self) -> int:
        """
        Same as `try_current_pos`, for callers that never
        move the core behind the wrapper.

        :raises: AssertionError if the position can't be computed.
        """
        try:
            return self.try_current_pos()
        except StreamCipherOverflowException as e:
            raise AssertionError(str(e)) from e

    def try_seek(self, pos: int):
        """
        Move to the given keystream byte.

        :param pos: The byte position.
        :raises: StreamCipherOverflowException
        """
        assert pos >= 0
        block, offset = divmod(pos, self.block_size)

        max_value = self.core.counter.max_value
        if max_value is not None and (
                block > max_value or (offset and block == max_value)
        ):
            raise StreamCipherOverflowException(
                "Position {} is past the end of the keystream.".format(pos)
            )

        self.core.set_block_pos(block)
        if offset:
            self.core.write_keystream_blocks(self._buffer)
            self._pos = offset
        else:
            self._pos = self.block_size

    def seek(self, pos: int):
        """
        Same as `try_seek`, for positions known to be in range.

        :raises: AssertionError if pos is past the end of the keystream.
        """
        try:
            self.try_seek(pos)
        except StreamCipherOverflowException as e:
            raise AssertionError(str(e)) from e
