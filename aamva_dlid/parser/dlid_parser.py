"""
:py:mod:`aamva_dlid.parser.dlid_parser`: Incremental DL/ID parser
=================================================================

.. autoclass:: Parser
    :members:

.. autofunction:: make_dlid_parser
"""

import logging

from aamva_dlid.string_io import StringIO

from aamva_dlid.exceptions import InsufficientData, ParseError

from aamva_dlid.structures import empty_parse_result

from aamva_dlid.parser.engine import StepEngine

from aamva_dlid.parser.header import make_header_step

from aamva_dlid.parser.designators import make_designators_step

from aamva_dlid.parser.subfiles import make_subfiles_step

__all__ = [
    "Parser",
    "make_dlid_parser",
]


class Parser(object):
    """
    An incremental parser for a single DL/ID payload.

    Data may be supplied all at once or a few characters at a time (e.g. as
    typed by a barcode scanner in keyboard emulation mode). Two equivalent
    ways of driving the parser are provided:

    * :py:meth:`append` adds data and reports whether more is needed::

          >>> parser = Parser()
          >>> parser.append("@\\n\\x1e\\rANSI ")
          True
          >>> parser.append(rest_of_payload)
          False
          >>> parser.complete
          True

    * :py:meth:`parse` raises
      :py:exc:`~aamva_dlid.exceptions.InsufficientData` when more data is
      needed and :py:exc:`~aamva_dlid.exceptions.ParseError` for malformed
      payloads.

    Once a :py:exc:`~aamva_dlid.exceptions.ParseError` has occurred the parser
    cannot make further progress and a new one must be created.

    Parameters
    ==========
    data : str
        Initial payload data.
    reader : :py:class:`~aamva_dlid.string_io.StringIO` or None
        The reader to parse from. If None a new, private, reader is created.
        If given, data may be appended to the reader directly before calling
        :py:meth:`parse`.
    """

    def __init__(self, data="", reader=None):
        if reader is None:
            reader = StringIO()
        reader.append(data)
        self._reader = reader

        self._engine = StepEngine(
            [
                make_header_step(reader),
                make_designators_step(reader),
                make_subfiles_step(reader),
            ],
            empty_parse_result(),
        )

    @property
    def reader(self):
        """The :py:class:`~aamva_dlid.string_io.StringIO` being parsed."""
        return self._reader

    @property
    def data(self):
        """All payload data supplied so far."""
        return self._reader.data

    @property
    def complete(self):
        """True once the whole payload has been parsed."""
        return self._engine.complete

    @property
    def failed(self):
        """True if a parse error has occurred."""
        return self._engine.error is not None

    @property
    def error(self):
        """The :py:exc:`~aamva_dlid.exceptions.ParseError` (or
        :py:exc:`~aamva_dlid.exceptions.HeaderParseError`) which occurred, or
        None."""
        return self._engine.error

    @property
    def result(self):
        """The :py:class:`~aamva_dlid.structures.ParseResult`, or None if
        parsing is not complete."""
        return self._engine.result if self.complete else None

    @property
    def header(self):
        return self.result["header"] if self.complete else None

    @property
    def subfile_designators(self):
        return self.result["subfile_designators"] if self.complete else None

    @property
    def subfiles(self):
        return self.result["subfiles"] if self.complete else None

    def parse(self):
        """
        Parse as much of the payload as possible.

        Returns
        =======
        :py:class:`~aamva_dlid.structures.ParseResult`

        Raises
        ======
        :py:exc:`~aamva_dlid.exceptions.InsufficientData`
            If the payload is incomplete. Append more data and call again.
        :py:exc:`~aamva_dlid.exceptions.HeaderParseError`
        :py:exc:`~aamva_dlid.exceptions.ParseError`
            If the payload is malformed. Every later call raises the same
            exception.
        """
        was_complete = self._engine.complete
        result = self._engine.run()
        if not was_complete:
            logging.info(
                "Parsed DL/ID payload from issuer %s with %d subfile(s).",
                result["header"]["iin"],
                len(result["subfile_designators"]),
            )
        return result

    def append(self, data):
        """
        Append data to the payload and parse as far as possible.

        Returns
        =======
        bool
            True if more data is needed, False once parsing has completed or
            failed (see :py:attr:`complete` and :py:attr:`error`).
        """
        self._reader.append(data)
        try:
            self.parse()
        except InsufficientData:
            return True
        except ParseError as e:
            logging.info("DL/ID parsing failed: %s", e)
            return False
        return False


def make_dlid_parser(reader):
    """
    Make a :py:class:`Parser` which reads from the supplied
    :py:class:`~aamva_dlid.string_io.StringIO`.
    """
    return Parser(reader=reader)
