#!/usr/bin/env/ python
# encoding: utf-8

"""
Handle block ciphers here.

A primitive only supplies a backend (how to transform one block,
or a lane group of blocks), everything else is built on top of it:
single blocks, block pairs, runs of blocks in-place or buffer-to-buffer.

Primitives which can work with read-only access to their state
(`BlockEncrypt`, `BlockDecrypt`) are also usable wherever exclusive
access is required (`BlockEncryptMut`, `BlockDecryptMut`).
The opposite does not hold: a stateful primitive,
such as one driving a hardware peripheral,
only implements the `*Mut` classes.
"""

import abc
import typing

import cipherkit.backend
import cipherkit.inout

__author__ = 'aldur'


def _block_ctx(
        block_size: int, block, out_block=None
) -> cipherkit.backend.BlockCtx:
    """
    Wrap a single block (or a block pair) for the backend.

    :param block_size: The primitive block size.
    :param block: The input block (processed in-place if out_block is None).
    :param out_block: The output block.
    :return: The closure.
    """
    if out_block is None:
        pair = cipherkit.inout.InOut.from_mut(block)
    else:
        pair = cipherkit.inout.InOut(block, out_block)

    if len(pair) != block_size:
        raise ValueError(
            "Expected a block of {} bytes, got {}.".format(block_size, len(pair))
        )
    return cipherkit.backend.BlockCtx(pair)


def _blocks_ctx(
        block_size: int, blocks, out_blocks=None
) -> cipherkit.backend.BlocksCtx:
    """
    Wrap a run of blocks for the backend.

    :param block_size: The primitive block size.
    :param blocks: The input blocks (processed in-place if out_blocks is None).
    :param out_blocks: The output blocks.
    :return: The closure.
    :raises: LengthMismatchException
    """
    if out_blocks is None:
        buf = cipherkit.inout.InOutBuf.from_mut(blocks, block_size)
    else:
        buf = cipherkit.inout.InOutBuf(blocks, out_blocks, block_size)
    return cipherkit.backend.BlocksCtx(buf)


class BlockCipher(metaclass=abc.ABCMeta):
    """
    Marker class for block ciphers.
    """

    block_size = 0


class BlockEncryptMut(metaclass=abc.ABCMeta):

    """
    Encrypt-only functionality, with exclusive access to the primitive.
    """

    block_size = 0

    @abc.abstractmethod
    def encrypt_with_backend_mut(self, f: cipherkit.backend.BlockClosure):
        """
        Call the closure with the encryption backend.

        :param f: The closure.
        """
        pass

    def encrypt_block_inout_mut(self, block: cipherkit.inout.InOut):
        self.encrypt_with_backend_mut(cipherkit.backend.BlockCtx(block))

    def encrypt_blocks_inout_mut(self, blocks: cipherkit.inout.InOutBuf):
        self.encrypt_with_backend_mut(cipherkit.backend.BlocksCtx(blocks))

    def encrypt_block_mut(self, block: bytearray):
        """
        Encrypt a single block in-place.
        """
        self.encrypt_with_backend_mut(_block_ctx(self.block_size, block))

    def encrypt_block_b2b_mut(self, in_block: bytes, out_block: bytearray):
        """
        Encrypt in_block and write the result to out_block.
        """
        self.encrypt_with_backend_mut(
            _block_ctx(self.block_size, in_block, out_block)
        )

    def encrypt_blocks_mut(self, blocks: bytearray):
        """
        Encrypt blocks in-place.
        """
        self.encrypt_with_backend_mut(_blocks_ctx(self.block_size, blocks))

    def encrypt_blocks_b2b_mut(self, in_blocks: bytes, out_blocks: bytearray):
        """
        Encrypt blocks buffer-to-buffer.

        :raises: LengthMismatchException
        """
        self.encrypt_with_backend_mut(
            _blocks_ctx(self.block_size, in_blocks, out_blocks)
        )


class BlockDecryptMut(metaclass=abc.ABCMeta):

    """
    Decrypt-only functionality, with exclusive access to the primitive.
    """

    block_size = 0

    @abc.abstractmethod
    def decrypt_with_backend_mut(self, f: cipherkit.backend.BlockClosure):
        """
        Call the closure with the decryption backend.

        :param f: The closure.
        """
        pass

    def decrypt_block_inout_mut(self, block: cipherkit.inout.InOut):
        self.decrypt_with_backend_mut(cipherkit.backend.BlockCtx(block))

    def decrypt_blocks_inout_mut(self, blocks: cipherkit.inout.InOutBuf):
        self.decrypt_with_backend_mut(cipherkit.backend.BlocksCtx(blocks))

    def decrypt_block_mut(self, block: bytearray):
        """
        Decrypt a single block in-place.
        """
        self.decrypt_with_backend_mut(_block_ctx(self.block_size, block))

    def decrypt_block_b2b_mut(self, in_block: bytes, out_block: bytearray):
        """
        Decrypt in_block and write the result to out_block.
        """
        self.decrypt_with_backend_mut(
            _block_ctx(self.block_size, in_block, out_block)
        )

    def decrypt_blocks_mut(self, blocks: bytearray):
        """
        Decrypt blocks in-place.
        """
        self.decrypt_with_backend_mut(_blocks_ctx(self.block_size, blocks))

    def decrypt_blocks_b2b_mut(self, in_blocks: bytes, out_blocks: bytearray):
        """
        Decrypt blocks buffer-to-buffer.

        :raises: LengthMismatchException
        """
        self.decrypt_with_backend_mut(
            _blocks_ctx(self.block_size, in_blocks, out_blocks)
        )


class BlockEncrypt(BlockEncryptMut):

    """
    Encrypt-only functionality, with read-only access to the primitive.
    """

    @abc.abstractmethod
    def encrypt_with_backend(self, f: cipherkit.backend.BlockClosure):
        """
        Call the closure with the encryption backend.

        :param f: The closure.
        """
        pass

    def encrypt_with_backend_mut(self, f: cipherkit.backend.BlockClosure):
        self.encrypt_with_backend(f)

    def encrypt_block_inout(self, block: cipherkit.inout.InOut):
        self.encrypt_with_backend(cipherkit.backend.BlockCtx(block))

    def encrypt_blocks_inout(self, blocks: cipherkit.inout.InOutBuf):
        self.encrypt_with_backend(cipherkit.backend.BlocksCtx(blocks))

    def encrypt_block(self, block: bytearray):
        """
        Encrypt a single block in-place.

        :param block: A writable block.
        """
        self.encrypt_with_backend(_block_ctx(self.block_size, block))

    def encrypt_block_b2b(self, in_block: bytes, out_block: bytearray):
        """
        Encrypt in_block and write the result to out_block.

        :param in_block: The plaintext block.
        :param out_block: The writable ciphertext block.
        """
        self.encrypt_with_backend(
            _block_ctx(self.block_size, in_block, out_block)
        )

    def encrypt_blocks(self, blocks: bytearray):
        """
        Encrypt blocks in-place.

        :param blocks: A writable buffer, its length a multiple of block_size.
        """
        self.encrypt_with_backend(_blocks_ctx(self.block_size, blocks))

    def encrypt_blocks_b2b(self, in_blocks: bytes, out_blocks: bytearray):
        """
        Encrypt blocks buffer-to-buffer.
        Nothing is written if the buffers differ in length.

        :param in_blocks: The plaintext blocks.
        :param out_blocks: The writable ciphertext buffer.
        :raises: LengthMismatchException
        """
        self.encrypt_with_backend(
            _blocks_ctx(self.block_size, in_blocks, out_blocks)
        )


class BlockDecrypt(BlockDecryptMut):

    """
    Decrypt-only functionality, with read-only access to the primitive.
    """

    @abc.abstractmethod
    def decrypt_with_backend(self, f: cipherkit.backend.BlockClosure):
        """
        Call the closure with the decryption backend.

        :param f: The closure.
        """
        pass

    def decrypt_with_backend_mut(self, f: cipherkit.backend.BlockClosure):
        self.decrypt_with_backend(f)

    def decrypt_block_inout(self, block: cipherkit.inout.InOut):
        self.decrypt_with_backend(cipherkit.backend.BlockCtx(block))

    def decrypt_blocks_inout(self, blocks: cipherkit.inout.InOutBuf):
        self.decrypt_with_backend(cipherkit.backend.BlocksCtx(blocks))

    def decrypt_block(self, block: bytearray):
        """
        Decrypt a single block in-place.

        :param block: A writable block.
        """
        self.decrypt_with_backend(_block_ctx(self.block_size, block))

    def decrypt_block_b2b(self, in_block: bytes, out_block: bytearray):
        """
        Decrypt in_block and write the result to out_block.

        :param in_block: The ciphertext block.
        :param out_block: The writable plaintext block.
        """
        self.decrypt_with_backend(
            _block_ctx(self.block_size, in_block, out_block)
        )

    def decrypt_blocks(self, blocks: bytearray):
        """
        Decrypt blocks in-place.

        :param blocks: A writable buffer, its length a multiple of block_size.
        """
        self.decrypt_with_backend(_blocks_ctx(self.block_size, blocks))

    def decrypt_blocks_b2b(self, in_blocks: bytes, out_blocks: bytearray):
        """
        Decrypt blocks buffer-to-buffer.
        Nothing is written if the buffers differ in length.

        :param in_blocks: The ciphertext blocks.
        :param out_blocks: The writable plaintext buffer.
        :raises: LengthMismatchException
        """
        self.decrypt_with_backend(
            _blocks_ctx(self.block_size, in_blocks, out_blocks)
        )


class _FunctionBackend(cipherkit.backend.BlockBackend):

    """
    A single-lane backend calling a block function.
    """

    def __init__(
            self,
            block_size: int,
            f: typing.Callable[[memoryview, memoryview], None]
    ):
        self.block_size = block_size
        self.f = f

    def proc_block(self, block: cipherkit.inout.InOut):
        self.f(block.get_in(), block.get_out())


class SimpleBlockCipher(BlockCipher, BlockEncrypt, BlockDecrypt):

    """
    A block cipher defined by its single-block functions.

    Subclasses set `block_size` and implement
    `encrypt_block_into` and `decrypt_block_into`.
    Both functions may be called with aliasing views:
    they must read the whole input before writing the output.
    """

    @abc.abstractmethod
    def encrypt_block_into(self, in_block: memoryview, out_block: memoryview):
        pass

    @abc.abstractmethod
    def decrypt_block_into(self, in_block: memoryview, out_block: memoryview):
        pass

    def encrypt_with_backend(self, f: cipherkit.backend.BlockClosure):
        f.call(_FunctionBackend(self.block_size, self.encrypt_block_into))

    def decrypt_with_backend(self, f: cipherkit.backend.BlockClosure):
        f.call(_FunctionBackend(self.block_size, self.decrypt_block_into))
