#!/usr/bin/env python
# encoding: utf-8

"""
AES, plugged into the block and stream interfaces.

The permutation itself comes from PyCryptodome:
here AES only provides backends.
"""

import cipherkit.backend
import cipherkit.blocks
import cipherkit.counter
import cipherkit.inout
import cipherkit.keys

from Crypto.Cipher import AES

__author__ = 'aldur'

BLOCK_SIZE = 16
KEY_SIZES = (16, 24, 32)
DEFAULT_PAR_BLOCKS = 8


class _AesBackend(cipherkit.backend.BlockBackend):

    """
    Transform blocks through an ECB object.
    ECB handles a whole lane group in a single call.
    """

    block_size = BLOCK_SIZE

    def __init__(self, f, par_blocks: int):
        self.f = f
        self.par_blocks = par_blocks

    def proc_block(self, block: cipherkit.inout.InOut):
        block.get_out()[:] = self.f(bytes(block.get_in()))

    def proc_par_blocks(self, blocks: cipherkit.inout.InOutBuf):
        assert len(blocks) == self.par_blocks
        blocks.get_out()[:] = self.f(bytes(blocks.get_in()))


class Aes(cipherkit.blocks.BlockCipher,
          cipherkit.blocks.BlockEncrypt,
          cipherkit.blocks.BlockDecrypt):

    """
    The AES block cipher (128, 192 or 256 bits keys).

    :param key: The cipher key.
    :param par_blocks: How many blocks to process at once.
    :raises: InvalidLengthException
    """

    block_size = BLOCK_SIZE

    def __init__(self, key: bytes, par_blocks: int=DEFAULT_PAR_BLOCKS):
        assert par_blocks >= 1

        key = cipherkit.keys.check_length("key", key, *KEY_SIZES)
        self._aes = AES.new(key, AES.MODE_ECB)
        self.par_blocks = par_blocks

    def encrypt_with_backend(self, f: cipherkit.backend.BlockClosure):
        f.call(_AesBackend(self._aes.encrypt, self.par_blocks))

    def decrypt_with_backend(self, f: cipherkit.backend.BlockClosure):
        f.call(_AesBackend(self._aes.decrypt, self.par_blocks))


class AesCtrCore(cipherkit.counter.StreamCipherSeekCore):

    """
    AES keystream: the block at position i is the encryption of
    nonce || i, with i in little endian.

    With a 64 bits counter the nonce is 8 bytes long,
    with a 32 bits counter it is 12 bytes long.

    :param key: The cipher key.
    :param nonce: The nonce.
    :param counter_bits: The counter width (32 or 64).
    :param par_blocks: How many keystream blocks to generate at once.
    :raises: InvalidLengthException
    """

    block_size = BLOCK_SIZE

    def __init__(
            self,
            key: bytes,
            nonce: bytes,
            counter_bits: int=64,
            par_blocks: int=DEFAULT_PAR_BLOCKS
    ):
        assert counter_bits in (32, 64), "Unsupported counter width."
        assert par_blocks >= 1

        self._counter_bytes = counter_bits // 8
        self._nonce = cipherkit.keys.check_length(
            "nonce", nonce, BLOCK_SIZE - self._counter_bytes
        )
        self._aes = Aes(key)
        self.counter = cipherkit.counter.Counter(counter_bits)
        self.par_blocks = par_blocks

    def keystream_blocks(self, pos: int, n: int) -> bytes:
        counter_blocks = bytearray(b"".join(
            self._nonce + (pos + i).to_bytes(self._counter_bytes, "little")
            for i in range(n)
        ))
        self._aes.encrypt_blocks(counter_blocks)
        return bytes(counter_blocks)
