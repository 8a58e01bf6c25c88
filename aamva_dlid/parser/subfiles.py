"""
:py:mod:`aamva_dlid.parser.subfiles`: Subfile body steps
========================================================

Each subfile designator gives the offset and length of a subfile within the
payload. Subfiles of the types in
:py:data:`~aamva_dlid.tables.RECOGNIZED_SUBFILE_TYPES` are parsed into
records; other subfiles are only checked to lie within the payload.

A recognised subfile starts with its two character type and then contains a
series of records, each a three letter data element ID followed by a value,
delimited by the data element separator and ending with the segment
terminator::

    DLDAQT64235789\\nDCSSAMPLE\\r

Records are only ever read from the declared window of the payload, even if
the buffer holds more data. The window is read as a whole (or not at all)
before any records are scanned, so scanning never runs out of data part way
through.

.. autofunction:: make_subfiles_step

.. autofunction:: scan_records
"""

import re

import logging

from sentinels import Sentinel

from aamva_dlid.string_io import StringIO

from aamva_dlid.exceptions import ParseError

from aamva_dlid.structures import frozen_mapping

from aamva_dlid.string_utils import escape_text

from aamva_dlid.tables import (
    SUBFILE_TYPE_LENGTH,
    RECORD_KEY_LENGTH,
    RECOGNIZED_SUBFILE_TYPES,
)

__all__ = [
    "RECORD_KEY_PATTERN",
    "AWAITING_RECORD_OR_END",
    "READING_KEY",
    "READING_VALUE",
    "DONE",
    "read_window",
    "scan_records",
    "make_subfiles_step",
]


RECORD_KEY_PATTERN = re.compile(r"[A-Z]{3}\Z")
"""Data element IDs are three uppercase letters."""


AWAITING_RECORD_OR_END = Sentinel("AWAITING_RECORD_OR_END")
READING_KEY = Sentinel("READING_KEY")
READING_VALUE = Sentinel("READING_VALUE")
DONE = Sentinel("DONE")
"""Record scanner states."""


def read_window(reader, designator):
    """
    Return the characters of 'reader''s buffer covered by the designator,
    independent of the reader's cursor.

    Raises
    ======
    :py:exc:`~aamva_dlid.exceptions.InsufficientData`
        If the buffer does not (yet) contain the whole window.
    """
    return StringIO(reader.data, designator["offset"]).peek(designator["length"])


def scan_records(
    window, data_element_separator, segment_terminator, subfile_type=None
):
    """
    Scan the records in a complete subfile window.

    The end of the window terminates the record being read (or the scan, if
    between records) when no segment terminator is present.

    Parameters
    ==========
    window : str
        The subfile's characters, starting with its two character type.
    data_element_separator : str
    segment_terminator : str
    subfile_type : str or None
        Used in log and error messages only.

    Returns
    =======
    records : {key: value, ...}
        In order of first appearance. When a key is repeated the last value
        is kept.

    Raises
    ======
    :py:exc:`~aamva_dlid.exceptions.ParseError`
        If a record key is not three uppercase letters or the window ends
        part-way through a key.
    """
    if subfile_type is None:
        subfile_type = window[:SUBFILE_TYPE_LENGTH]

    if len(window) < SUBFILE_TYPE_LENGTH:
        raise ParseError("Subfile {} too short: {!r}".format(subfile_type, window))

    reader = StringIO(window, SUBFILE_TYPE_LENGTH)
    records = {}

    state = AWAITING_RECORD_OR_END
    key = None
    value = []

    while state is not DONE:
        if state is AWAITING_RECORD_OR_END:
            if reader.remaining() == 0:
                state = DONE
                continue
            char = reader.peek(1)
            if char == segment_terminator:
                reader.read(1)
                state = DONE
            elif char == data_element_separator:
                reader.read(1)
            else:
                state = READING_KEY
        elif state is READING_KEY:
            if reader.remaining() < RECORD_KEY_LENGTH:
                raise ParseError(
                    "Truncated record key in subfile {}: '{}'".format(
                        subfile_type, escape_text(reader.peek(reader.remaining()))
                    )
                )
            key = reader.read(RECORD_KEY_LENGTH)
            if not RECORD_KEY_PATTERN.match(key):
                raise ParseError(
                    "Invalid record in subfile {}: '{}'".format(
                        subfile_type, escape_text(key)
                    )
                )
            value = []
            state = READING_VALUE
        elif state is READING_VALUE:
            char = reader.read(1) if reader.remaining() else None
            if (
                char is None
                or char == data_element_separator
                or char == segment_terminator
            ):
                if key in records:
                    logging.warning(
                        "Duplicate record %s in subfile %s, keeping last value.",
                        key,
                        subfile_type,
                    )
                records[key] = "".join(value)
                if char == data_element_separator:
                    state = AWAITING_RECORD_OR_END
                else:
                    state = DONE
            else:
                value.append(char)

    return records


def _subfile(reader, designator):
    subfile_type = designator["type"]

    def step(result):
        window = read_window(reader, designator)

        if subfile_type not in RECOGNIZED_SUBFILE_TYPES:
            logging.debug(
                "Skipping unrecognised subfile type %r (%d characters).",
                subfile_type,
                len(window),
            )
            return result, []

        header = result["header"]
        records = scan_records(
            window,
            header["data_element_separator"],
            header["segment_terminator"],
            subfile_type,
        )

        subfiles = dict(result["subfiles"])
        subfiles[subfile_type] = frozen_mapping(records)
        return result.replace(subfiles=frozen_mapping(subfiles)), []

    return step


def make_subfiles_step(reader):
    """
    Make a step which expands into one subfile-parsing step for each of the
    (already parsed) subfile designators, in designator order.
    """

    def step(result):
        return (
            result,
            [
                _subfile(reader, designator)
                for designator in result["subfile_designators"]
            ],
        )

    return step
