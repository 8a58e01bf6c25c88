"""
:py:mod:`aamva_dlid.exceptions`
===============================

Exception types raised while reading and parsing AAMVA DL/ID payloads.

Only two classes of problem are distinguished by this library:

* :py:exc:`InsufficientData`: the payload read so far ends before the parser
  could finish the current step. This is not a failure; more data should be
  appended and parsing resumed.
* :py:exc:`ParseError` (and its :py:exc:`HeaderParseError` subclass): the
  payload is malformed and the parser which raised it cannot make further
  progress.

.. autoexception:: InsufficientData

.. autoexception:: ParseError

.. autoexception:: HeaderParseError
"""

__all__ = [
    "InsufficientData",
    "ParseError",
    "HeaderParseError",
]


class InsufficientData(EOFError):
    """
    Raised by :py:class:`~aamva_dlid.string_io.StringIO` when fewer characters
    remain than were requested.

    Attributes
    ==========
    requested : int
        The number of characters requested.
    available : int
        The number of unread characters which were available.
    """

    def __init__(self, requested, available):
        self.requested = requested
        self.available = available
        super(InsufficientData, self).__init__(
            "{} character(s) requested but only {} available".format(
                requested, available
            )
        )


class ParseError(ValueError):
    """
    The payload is structurally invalid (e.g. the ``"ANSI "`` file type is
    missing, a numeric field contains non-digits or a record key is
    malformed).
    """


class HeaderParseError(ParseError):
    """
    The leading ``@`` marker or one of the three header separator characters
    is invalid. Usually indicates that the input is not a DL/ID payload at
    all.
    """
