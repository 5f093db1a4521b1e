#!/usr/bin/env python
# encoding: utf-8

"""Various utils."""

__author__ = "aldur"


def xor(a: bytes, b: bytes) -> bytes:
    """Return a xor b.

    :param a: Some bytes.
    :param b: Some bytes.
    :returns: a xor b
    """
    assert len(a) == len(b), \
        "Arguments must have same length."

    return (
        int.from_bytes(a, "little") ^ int.from_bytes(b, "little")
    ).to_bytes(len(a), "little")


def xor_into(src, keystream, dst, width: int):
    """
    XOR src against keystream and store the result in dst,
    one element of `width` bytes at the time.

    dst may alias src: every element is read once,
    before being written, and never read again afterwards.

    :param src: The input buffer.
    :param keystream: The keystream buffer.
    :param dst: The (writable) output buffer.
    :param width: The element width, in bytes.
    """
    n = len(src)
    assert n == len(keystream) == len(dst), \
        "Arguments must have same length."
    assert width > 0 and n % width == 0

    for i in range(0, n, width):
        element = bytes(src[i:i + width])  # Read...
        dst[i:i + width] = xor(element, keystream[i:i + width])  # ...then write.


def ceil_div(n: int, d: int) -> int:
    """
    Integer division, rounding up.

    :param n: The dividend (n >= 0).
    :param d: The divisor (d > 0).
    :return: ceil(n / d)
    """
    assert n >= 0
    assert d > 0
    return -(-n // d)


def int_32_lsb(x: int):
    """
    Get the 32 least significant bits.

    :param x: A number.
    :return: The 32 LSBits of x.
    """
    return int(0xFFFFFFFF & x)
