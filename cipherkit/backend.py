#!/usr/bin/env python
# encoding: utf-8

"""
Bind "what to process" to "how to process it".

A closure knows which memory has to be processed,
a backend knows how to transform one block (and, optionally,
a full group of `par_blocks` blocks at once).
A primitive hands its backend to the closure,
and the closure drives the backend over its memory,
group by group, in order.
"""

import abc
import typing

import cipherkit.chunks
import cipherkit.inout
import cipherkit.util

__author__ = 'aldur'


class BlockBackend(metaclass=abc.ABCMeta):

    """
    Transform blocks, one at the time or a lane group at the time.

    Overriding `proc_par_blocks` is only allowed if the result
    can't be told apart from calling `proc_block` on each block, in order.
    """

    block_size = 0
    par_blocks = 1

    @abc.abstractmethod
    def proc_block(self, block: cipherkit.inout.InOut):
        """
        Read the input side of the block,
        write the transformed block to the output side.

        :param block: A single block pair.
        """
        pass

    def proc_par_blocks(self, blocks: cipherkit.inout.InOutBuf):
        """
        Transform a full lane group.

        :param blocks: Exactly `par_blocks` block pairs.
        """
        assert len(blocks) == self.par_blocks, \
            "Got {} blocks, expected {}.".format(len(blocks), self.par_blocks)

        for i in range(self.par_blocks):
            self.proc_block(blocks.get(i))

    def proc_tail_blocks(self, blocks: cipherkit.inout.InOutBuf):
        """
        Transform what is left after the full lane groups.

        :param blocks: Less than `par_blocks` block pairs.
        """
        assert len(blocks) < self.par_blocks, \
            "Tail of {} blocks with {} lanes.".format(len(blocks), self.par_blocks)

        for block in blocks:
            self.proc_block(block)


class StreamBackend(metaclass=abc.ABCMeta):

    """
    Generate keystream blocks, advancing the owner position
    by one for each block generated.
    """

    block_size = 0
    par_blocks = 1

    @abc.abstractmethod
    def gen_ks_block(self, block: memoryview):
        """
        Write the next keystream block.

        :param block: A writable block.
        """
        pass

    def gen_par_ks_blocks(self, blocks: memoryview):
        """
        Write the next `par_blocks` keystream blocks.

        :param blocks: A writable buffer of exactly `par_blocks` blocks.
        """
        assert len(blocks) == self.par_blocks * self.block_size

        for start in range(0, len(blocks), self.block_size):
            self.gen_ks_block(blocks[start:start + self.block_size])

    def gen_tail_blocks(self, blocks: memoryview):
        """
        Write less than `par_blocks` keystream blocks.

        :param blocks: A writable buffer of blocks.
        """
        assert len(blocks) < self.par_blocks * self.block_size

        for start in range(0, len(blocks), self.block_size):
            self.gen_ks_block(blocks[start:start + self.block_size])


class BlockClosure(metaclass=abc.ABCMeta):

    """
    Something to be processed by a block backend.
    """

    block_size = 0

    @abc.abstractmethod
    def call(self, backend: BlockBackend):
        """
        Drive the backend over the closure memory.

        :param backend: The backend.
        """
        pass


class StreamClosure(metaclass=abc.ABCMeta):

    """
    Something to be processed by a stream backend.
    """

    block_size = 0

    @abc.abstractmethod
    def call(self, backend: StreamBackend):
        pass


def _check(closure, backend):
    assert backend.block_size == closure.block_size, \
        "Backend block size {} differs from {}.".format(
            backend.block_size, closure.block_size
        )
    assert backend.par_blocks >= 1


class BlockCtx(BlockClosure):

    """
    A single block.
    """

    def __init__(self, block: cipherkit.inout.InOut):
        self.block = block
        self.block_size = len(block)

    def call(self, backend: BlockBackend):
        _check(self, backend)
        backend.proc_block(self.block)


class BlocksCtx(BlockClosure):

    """
    A run of blocks.
    """

    def __init__(self, blocks: cipherkit.inout.InOutBuf):
        self.blocks = blocks
        self.block_size = blocks.elem_size

    def call(self, backend: BlockBackend):
        _check(self, backend)

        if backend.par_blocks > 1:
            chunks, tail = self.blocks.into_chunks(backend.par_blocks)
            for chunk in chunks:
                backend.proc_par_blocks(chunk)
            if len(tail):
                backend.proc_tail_blocks(tail)
        else:
            for block in self.blocks:
                backend.proc_block(block)


class WriteBlocksCtx(StreamClosure):

    """
    Copy keystream blocks to a buffer.
    """

    def __init__(self, buf: memoryview, block_size: int):
        assert len(buf) % block_size == 0
        self.buf = buf
        self.block_size = block_size

    def call(self, backend: StreamBackend):
        _check(self, backend)

        if backend.par_blocks > 1:
            for is_tail, group in cipherkit.chunks.iter_groups(
                    self.buf, self.block_size, backend.par_blocks
            ):
                if is_tail:
                    if len(group):
                        backend.gen_tail_blocks(group)
                else:
                    backend.gen_par_ks_blocks(group)
        else:
            for start in range(0, len(self.buf), self.block_size):
                backend.gen_ks_block(self.buf[start:start + self.block_size])


class ApplyBlocksCtx(StreamClosure):

    """
    XOR keystream blocks against a run of blocks.

    :param blocks: The blocks.
    :param post_fn: Called with the output side of each processed chunk,
        right after the keystream has been applied to it.
    """

    def __init__(
            self,
            blocks: cipherkit.inout.InOutBuf,
            post_fn: typing.Callable[[memoryview], None]=None
    ):
        self.blocks = blocks
        self.block_size = blocks.elem_size
        self.post_fn = post_fn

    def _apply(self, chunk, keystream: bytearray):
        cipherkit.util.xor_into(
            chunk.get_in(), keystream, chunk.get_out(), self.block_size
        )
        if self.post_fn is not None:
            self.post_fn(chunk.get_out())

    def call(self, backend: StreamBackend):
        _check(self, backend)

        if backend.par_blocks > 1:
            chunks, tail = self.blocks.into_chunks(backend.par_blocks)
            for chunk in chunks:
                keystream = bytearray(chunk.nbytes)
                backend.gen_par_ks_blocks(memoryview(keystream))
                self._apply(chunk, keystream)

            if len(tail):
                keystream = bytearray(tail.nbytes)
                backend.gen_tail_blocks(memoryview(keystream))
                self._apply(tail, keystream)
        else:
            for block in self.blocks:
                keystream = bytearray(self.block_size)
                backend.gen_ks_block(memoryview(keystream))
                self._apply(block, keystream)
