#!/usr/bin/env python
# encoding: utf-8

"""
Paired (input, output) views over byte memory.

A view reads from its input side and writes to its output side.
The two sides either alias the same memory (in-place)
or point to different buffers (buffer-to-buffer),
and they always have the same length.
"""

import cipherkit.chunks

__author__ = 'aldur'


class LengthMismatchException(Exception):
    """
    Thrown when input and output buffers differ in length.
    """

    def __init__(self, in_len: int, out_len: int):
        super().__init__(
            "Input and output buffers differ in length: {} != {}.".format(
                in_len, out_len
            )
        )
        self.in_len = in_len
        self.out_len = out_len


def _view(b, writable: bool=False) -> memoryview:
    """
    Get a flat, unsigned bytes view of b.

    :param b: A bytes-like object.
    :param writable: Whether the view must support writes.
    :return: A memoryview over b.
    """
    v = memoryview(b)
    if v.format != "B" or v.ndim != 1:
        v = v.cast("B")
    if writable and v.readonly:
        raise TypeError("Output buffer must be writable.")
    return v


class InOut:

    """
    A single (input, output) element pair.

    :param in_view: The input side.
    :param out_view: The output side.
    :raises: LengthMismatchException
    """

    __slots__ = ("_in", "_out", "_in_place")

    def __init__(self, in_view, out_view):
        in_place = in_view is out_view
        in_view = _view(in_view, writable=in_place)
        out_view = in_view if in_place else _view(out_view, writable=True)

        if len(in_view) != len(out_view):
            raise LengthMismatchException(len(in_view), len(out_view))

        self._in = in_view
        self._out = out_view
        self._in_place = in_place

    @classmethod
    def from_mut(cls, b) -> "InOut":
        """
        Build an in-place pair.

        :param b: A writable buffer.
        :return: A pair reading and writing b.
        """
        v = _view(b, writable=True)
        return cls(v, v)

    def __len__(self) -> int:
        return len(self._in)

    @property
    def is_in_place(self) -> bool:
        return self._in_place

    def get_in(self) -> memoryview:
        return self._in

    def get_out(self) -> memoryview:
        return self._out


class InOutBuf:

    """
    A run of (input, output) element pairs,
    each one `elem_size` bytes long.

    Passing the very same object as input and output
    builds an in-place view.

    :param in_buf: The input buffer.
    :param out_buf: The (writable) output buffer.
    :param elem_size: The size of each element, in bytes.
    :raises: LengthMismatchException
    """

    __slots__ = ("_in", "_out", "_in_place", "elem_size")

    def __init__(self, in_buf, out_buf, elem_size: int=1):
        assert elem_size > 0

        in_place = in_buf is out_buf
        in_view = _view(in_buf, writable=in_place)
        out_view = in_view if in_place else _view(out_buf, writable=True)

        if len(in_view) != len(out_view):
            raise LengthMismatchException(len(in_view), len(out_view))
        if len(in_view) % elem_size != 0:
            raise ValueError(
                "Buffer length {} is not a multiple of {}.".format(
                    len(in_view), elem_size
                )
            )

        self._in = in_view
        self._out = out_view
        self._in_place = in_place
        self.elem_size = elem_size

    @classmethod
    def from_mut(cls, b, elem_size: int=1) -> "InOutBuf":
        """
        Build an in-place view.
        Never fails because of mismatching lengths.

        :param b: A writable buffer.
        :param elem_size: The size of each element, in bytes.
        :return: A view reading and writing b.
        """
        v = _view(b, writable=True)
        return cls(v, v, elem_size)

    def __len__(self) -> int:
        return len(self._in) // self.elem_size

    def __iter__(self):
        for i in range(len(self)):
            yield self.get(i)

    @property
    def is_in_place(self) -> bool:
        return self._in_place

    @property
    def nbytes(self) -> int:
        return len(self._in)

    def get_in(self) -> memoryview:
        return self._in

    def get_out(self) -> memoryview:
        return self._out

    def _sub(self, s: slice):
        """
        Slice both sides, preserving aliasing.
        """
        in_view = self._in[s]
        out_view = in_view if self._in_place else self._out[s]
        return in_view, out_view

    def get(self, i: int) -> InOut:
        """
        Get the pair at index i.

        :param i: The element index.
        :return: The i-th element pair.
        """
        if not 0 <= i < len(self):
            raise IndexError("Element index out of range.")

        s = slice(i * self.elem_size, (i + 1) * self.elem_size)
        return InOut(*self._sub(s))

    def reslice(self, start: int, stop: int) -> "InOutBuf":
        """
        Get a smaller view, over elements from start to stop.

        :param start: The first element (included).
        :param stop: The last element (excluded).
        :return: The new view.
        """
        assert 0 <= start <= stop <= len(self)

        s = slice(start * self.elem_size, stop * self.elem_size)
        return InOutBuf(*self._sub(s), self.elem_size)

    def split_at(self, mid: int) -> tuple:
        """
        Split the view in two.

        :param mid: Index of the first element of the second view.
        :return: The two views.
        """
        return self.reslice(0, mid), self.reslice(mid, len(self))

    def into_chunks(self, lanes: int) -> tuple:
        """
        Split the view in groups of `lanes` elements.

        :param lanes: The number of elements in each group.
        :return: A list of full groups and the tail view
            (holding less than `lanes` elements).
        """
        ranges = cipherkit.chunks.split(len(self), lanes)
        *groups, tail = [self.reslice(start, stop) for start, stop in ranges]

        assert len(tail) < lanes, \
            "Tail holds {} elements, lanes are {}.".format(len(tail), lanes)
        return groups, tail

    def into_blocks(self, block_size: int) -> tuple:
        """
        Regroup a view of bytes as a view of blocks.

        :param block_size: The block size.
        :return: A view of full blocks and a bytes view of the trailing
            bytes (less than block_size).
        """
        assert self.elem_size == 1
        assert block_size > 0

        n = len(self) - len(self) % block_size
        return (
            InOutBuf(*self._sub(slice(0, n)), block_size),
            InOutBuf(*self._sub(slice(n, None)), 1)
        )
