#!/usr/bin/env python
# encoding: utf-8

"""Key and nonce validation."""

__author__ = 'aldur'


class InvalidLengthException(Exception):
    """
    Thrown when a key or a nonce has an unsupported length.
    """
    pass


def check_length(name: str, b: bytes, *sizes: int) -> bytes:
    """
    Check that b has one of the given lengths.

    :param name: What b is, for error reporting.
    :param b: The key or nonce.
    :param sizes: The accepted lengths.
    :return: b, as bytes.
    :raises: InvalidLengthException
    """
    assert sizes

    if len(b) not in sizes:
        raise InvalidLengthException(
            "{} must be {} bytes long, got {}.".format(
                name.capitalize(),
                " or ".join(str(s) for s in sizes),
                len(b)
            )
        )
    return bytes(b)
