#!/usr/bin/env python
# encoding: utf-8

"""Self-checks of the block and stream substrate, runnable from the shell."""

import argparse
import contextlib
import functools
import io
import os
import sys

import colorama

import cipherkit.aes
import cipherkit.chacha
import cipherkit.chunks
import cipherkit.inout
import cipherkit.prng
import cipherkit.stream
import cipherkit.wrapper

__author__ = "aldur"

_checks = []


def check(check_f):
    """
    Decorator for check functions.

    :param check_f: The check function.
    :return: The decorated function.
    """

    class Tee(io.StringIO):
        """
        Print standard output as usual,
        and at the same time keep track of what
        is being printed.
        """

        def write(self, b: str):
            """
            Write the buffer on the standard output
            before calling the super implementation.

            :param b: The buffer to be written.
            """
            sys.__stdout__.write(b)
            return super().write(b)

    @functools.wraps(check_f)
    def decorated_check():
        """
        Execute the function and return to screen the result.
        """
        captured_stdout = Tee()
        print("Executing check: {}.\n".format(check_f.__name__))

        with contextlib.redirect_stdout(captured_stdout):
            result = check_f()

        v = captured_stdout.getvalue()
        if v and not v.endswith("\n\n"):
            print("")

        print(
            "{}Check {}.{}".format(
                colorama.Fore.GREEN if result else colorama.Fore.RED,
                "passed" if result else "failed",
                colorama.Fore.RESET
            ))

        return result

    _checks.append(decorated_check)
    return decorated_check


@check
def chunk_ordering() -> bool:
    """Ten blocks, four lanes: two groups and a tail of two, in order."""
    blocks = bytes(range(10 * 16))
    view = cipherkit.inout.InOutBuf(blocks, bytearray(len(blocks)), 16)

    groups, tail = view.into_chunks(4)
    print("Partition: {}.".format(cipherkit.chunks.partition(10, 4)))

    joined = b"".join(bytes(g.get_in()) for g in groups + [tail])
    return len(groups) == 2 and len(tail) == 2 and joined == blocks


@check
def batching_transparency() -> bool:
    """Lane groups give the same output of one block at the time."""
    key = os.urandom(16)
    plaintext = os.urandom(16 * 37)

    outputs = set()
    for lanes in (1, 2, 4, 8):
        b = bytearray(plaintext)
        cipherkit.aes.Aes(key, par_blocks=lanes).encrypt_blocks(b)
        outputs.add(bytes(b))

    return len(outputs) == 1


@check
def aliasing_safety() -> bool:
    """In-place encryption equals buffer-to-buffer encryption."""
    cipher = cipherkit.aes.Aes(os.urandom(16), par_blocks=4)
    plaintext = os.urandom(16 * 11)

    in_place = bytearray(plaintext)
    cipher.encrypt_blocks(in_place)

    out = bytearray(len(plaintext))
    cipher.encrypt_blocks_b2b(plaintext, out)

    return in_place == out


@check
def block_round_trip() -> bool:
    """decrypt(encrypt(blocks)) == blocks."""
    cipher = cipherkit.aes.Aes(os.urandom(32))
    plaintext = os.urandom(16 * 5)

    b = bytearray(plaintext)
    cipher.encrypt_blocks(b)
    cipher.decrypt_blocks(b)
    return b == plaintext


@check
def stream_round_trip() -> bool:
    """Applying the keystream twice gives back the data."""
    key, nonce = os.urandom(32), os.urandom(12)
    plaintext = os.urandom(1000)

    b = bytearray(plaintext)
    cipherkit.chacha.ChaCha20Core(key, nonce).apply_keystream_partial(b)
    print("Ciphertext starts with {}.".format(bytes(b[:8]).hex()))
    cipherkit.chacha.ChaCha20Core(key, nonce).apply_keystream_partial(b)
    return b == plaintext


@check
def length_mismatch() -> bool:
    """Mismatching buffers are refused, and nothing is written."""
    out = bytearray(4)
    try:
        cipherkit.inout.InOutBuf(bytes(5), out)
    except cipherkit.inout.LengthMismatchException as e:
        print(e)
        return out == bytearray(4)
    return False


@check
def partial_tail_budget() -> bool:
    """With two blocks left, 17 bytes fit and 33 bytes don't."""
    def core():
        c = cipherkit.aes.AesCtrCore(bytes(16), bytes(12), counter_bits=32)
        c.set_block_pos(c.counter.max_value - 2)
        return c

    core().try_apply_keystream_partial(bytearray(17))

    b = bytearray(33)
    try:
        core().try_apply_keystream_partial(b)
    except cipherkit.stream.InsufficientCapacityException as e:
        print(e)
        return b == bytearray(33)
    return False


@check
def seek_determinism() -> bool:
    """Block five of a run equals the block generated after seeking to five."""
    core = cipherkit.aes.AesCtrCore(os.urandom(16), os.urandom(8))

    run = bytearray(10 * 16)
    core.write_keystream_blocks(run)

    core.set_block_pos(5)
    block = bytearray(16)
    core.write_keystream_blocks(block)

    return block == run[5 * 16:6 * 16]


@check
def byte_streaming() -> bool:
    """Processing bytes in pieces equals processing them at once."""
    plaintext = os.urandom(300)

    at_once = bytearray(plaintext)
    cipherkit.prng.Mt19937Core(42).apply_keystream_partial(at_once)

    in_pieces = bytearray(plaintext)
    stream = cipherkit.wrapper.StreamCipherCoreWrapper(cipherkit.prng.Mt19937Core(42))
    view = memoryview(in_pieces)
    for start, stop in ((0, 3), (3, 4), (4, 77), (77, 300)):
        stream.apply_keystream(view[start:stop])

    return at_once == in_pieces


def main():
    """Run the checks named on the command line, or all of them."""
    names = {c.__name__: c for c in _checks}

    parser = argparse.ArgumentParser(
        description='Block and stream substrate self-checks.'
    )
    parser.add_argument(
        "checks",
        metavar="check",
        nargs="*",
        help="the checks to be run (defaults to all of them)"
    )
    args = parser.parse_args()

    unknown = [n for n in args.checks if n not in names]
    if unknown:
        parser.error("unknown checks: {}".format(", ".join(unknown)))

    colorama.init()

    selected = [names[n] for n in args.checks] if args.checks else _checks
    results = [c() for c in selected]
    sys.exit(0 if all(results) else 1)


if __name__ == '__main__':
    main()
