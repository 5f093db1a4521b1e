#!/usr/bin/env python
# encoding: utf-8

"""Split runs of blocks into lane groups."""

__author__ = 'aldur'


def partition(n: int, lanes: int) -> tuple:
    """
    Given a number of blocks and the lane width,
    count the full groups and the blocks left over.

    :param n: The number of blocks.
    :param lanes: The lane width (lanes >= 1).
    :return: (number of full groups, length of the tail)
    """
    assert n >= 0
    assert lanes >= 1, "Lane width must be at least 1."

    return divmod(n, lanes)


def split(n: int, lanes: int) -> list:
    """
    Split the block indexes from 0 to n into full groups of `lanes` blocks,
    followed by a single tail group.

    The ranges cover [0, n) in order and never overlap.
    The tail range is always present, and it is empty
    when n is a multiple of lanes.

    :param n: The number of blocks.
    :param lanes: The lane width.
    :return: A list of (start, stop) ranges, the last one being the tail.
    """
    full, tail = partition(n, lanes)

    ranges = [(i * lanes, (i + 1) * lanes) for i in range(full)]
    ranges.append((n - tail, n))
    return ranges


def iter_groups(b: bytes, block_size: int, lanes: int):
    """
    Iterate the full lane groups of a buffer of blocks,
    and then its tail.

    :param b: A buffer, whose length is a multiple of block_size.
    :param block_size: The block size.
    :param lanes: The lane width.
    :return: A generator of (is_tail, slice of b).
    """
    assert block_size > 0
    assert len(b) % block_size == 0

    ranges = split(len(b) // block_size, lanes)
    for i, (start, stop) in enumerate(ranges):
        yield i == len(ranges) - 1, b[start * block_size:stop * block_size]
