#!/usr/bin/env python
# encoding: utf-8

"""
ChaCha20 keystream, plugged into the stream interfaces.
Keystream generation is delegated to PyCryptodome.
"""

import cipherkit.counter
import cipherkit.keys
import cipherkit.stream

from Crypto.Cipher import ChaCha20

__author__ = 'aldur'

BLOCK_SIZE = 64
KEY_SIZE = 32


class ChaCha20Core(cipherkit.counter.StreamCipherSeekCore):

    """
    The ChaCha20 stream cipher.

    An 8 bytes nonce (original construction) gives a 64 bits block counter,
    a 12 bytes nonce (RFC 7539) a 32 bits one.
    PyCryptodome refuses the block at the largest counter value,
    so generating it raises InsufficientCapacityException.

    :param key: The 32 bytes key.
    :param nonce: The nonce.
    :param par_blocks: How many keystream blocks to generate at once.
    :raises: InvalidLengthException
    """

    block_size = BLOCK_SIZE

    def __init__(self, key: bytes, nonce: bytes, par_blocks: int=4):
        assert par_blocks >= 1

        key = cipherkit.keys.check_length("key", key, KEY_SIZE)
        nonce = cipherkit.keys.check_length("nonce", nonce, 8, 12)

        self._chacha = ChaCha20.new(key=key, nonce=nonce)
        self.counter = cipherkit.counter.Counter(64 if len(nonce) == 8 else 32)
        self.par_blocks = par_blocks

    def keystream_blocks(self, pos: int, n: int) -> bytes:
        last = self.counter.max_value
        if pos + n > last:
            raise cipherkit.stream.InsufficientCapacityException(n, last - pos)

        self._chacha.seek(pos * BLOCK_SIZE)
        return self._chacha.encrypt(bytes(n * BLOCK_SIZE))
