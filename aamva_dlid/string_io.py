"""
:py:mod:`aamva_dlid.string_io`: Growable string reader
======================================================

A :py:class:`StringIO` holds a string buffer and a read cursor. Unlike
:py:class:`io.StringIO`, reading past the end of the buffer raises
:py:exc:`~aamva_dlid.exceptions.InsufficientData` rather than returning a
short string, and more data may be appended at any time without disturbing
the cursor::

    >>> reader = StringIO("@\\n")
    >>> reader.read(1)
    '@'
    >>> reader.read(2)
    Traceback (most recent call last):
      ...
    InsufficientData: 2 character(s) requested but only 1 available
    >>> reader.append("\\x1e")
    >>> reader.read(2)
    '\\n\\x1e'

Characters are never removed from the buffer, so absolute offsets (such as
those given by subfile designators) remain valid however much data is
appended later.

.. autoclass:: StringIO
    :members:
"""

from aamva_dlid.exceptions import InsufficientData

__all__ = [
    "StringIO",
]


class StringIO(object):
    """
    A read cursor over a string which may grow.

    Parameters
    ==========
    data : str
        The initial buffer contents.
    pos : int
        The initial cursor position.
    """

    def __init__(self, data="", pos=0):
        self._data = data
        self._pos = pos

    @property
    def data(self):
        """The complete buffer contents, including already-read characters."""
        return self._data

    @property
    def pos(self):
        """The index of the next character to be read."""
        return self._pos

    def remaining(self):
        """Return the number of unread characters."""
        return max(0, len(self._data) - self._pos)

    def peek(self, n):
        """
        Return the next ``n`` characters without advancing the cursor.

        Raises
        ======
        :py:exc:`~aamva_dlid.exceptions.InsufficientData`
            If fewer than ``n`` characters remain.
        """
        available = self.remaining()
        if n > available:
            raise InsufficientData(n, available)
        return self._data[self._pos : self._pos + n]

    def read(self, n):
        """
        Return the next ``n`` characters and advance the cursor past them.

        Raises
        ======
        :py:exc:`~aamva_dlid.exceptions.InsufficientData`
            If fewer than ``n`` characters remain. The cursor is not moved.
        """
        value = self.peek(n)
        self._pos += n
        return value

    def append(self, data):
        """Append ``data`` to the end of the buffer."""
        self._data += data

    def __repr__(self):
        return "{}(data={!r}, pos={!r})".format(
            self.__class__.__name__,
            self._data,
            self._pos,
        )
