"""
:py:mod:`aamva_dlid.parser.header`: Payload header steps
========================================================

The header has a fixed layout::

    @ <data element separator> <record separator> <segment terminator>
    ANSI <iin:6> <aamva version:2> <jurisdiction version:2> <entries:2>

Each field is parsed by its own step so that a payload arriving a character
at a time never re-reads (or re-validates) an already parsed field.

.. autofunction:: make_header_step
"""

import re

from aamva_dlid.exceptions import ParseError, HeaderParseError

from aamva_dlid.tables import (
    HEADER_MARKER,
    FILE_TYPE,
    IIN_LENGTH,
    VERSION_LENGTH,
    NUM_ENTRIES_LENGTH,
)

__all__ = [
    "INVALID_SEPARATOR_PATTERN",
    "DECIMAL_PATTERN",
    "read_separator",
    "read_decimal",
    "make_header_step",
]


INVALID_SEPARATOR_PATTERN = re.compile(r"[a-zA-Z0-9 ]")
"""Characters which may not be used as header separators."""

DECIMAL_PATTERN = re.compile(r"[0-9]+\Z")


def read_separator(reader, name):
    """
    Read a single separator character.

    Raises
    ======
    :py:exc:`~aamva_dlid.exceptions.HeaderParseError`
        If the character is a letter, digit or space.
    """
    separator = reader.read(1)
    if INVALID_SEPARATOR_PATTERN.match(separator):
        raise HeaderParseError(
            "Invalid {} 0x{:02X}".format(name.replace("_", " "), ord(separator))
        )
    return separator


def read_decimal(reader, length, name):
    """
    Read a fixed-width, unsigned decimal number.

    Raises
    ======
    :py:exc:`~aamva_dlid.exceptions.ParseError`
        If any character is not an ASCII digit.
    """
    string = reader.read(length)
    if not DECIMAL_PATTERN.match(string):
        raise ParseError("Invalid {}: {!r}".format(name.replace("_", " "), string))
    return int(string)


def _expect_marker(reader):
    def step(result):
        if reader.read(len(HEADER_MARKER)) != HEADER_MARKER:
            raise HeaderParseError("Expected {!r}".format(HEADER_MARKER))
        return result, []

    return step


def _expect_file_type(reader):
    def step(result):
        file_type = reader.read(len(FILE_TYPE))
        if file_type != FILE_TYPE:
            raise ParseError(
                "Invalid header: expected {!r}, got {!r}".format(FILE_TYPE, file_type)
            )
        return result, []

    return step


def _header_field(reader, name, read_value):
    """
    Make a step which sets the header entry 'name' to the value returned by
    ``read_value(reader)``.
    """

    def step(result):
        value = read_value(reader)
        header = result["header"].replace(**{name: value})
        return result.replace(header=header), []

    return step


def make_header_step(reader):
    """
    Make a step which expands into the sequence of steps which parse the
    header from 'reader' into the result's ``header`` entry.
    """

    def step(result):
        return (
            result,
            [
                _expect_marker(reader),
                _header_field(
                    reader,
                    "data_element_separator",
                    lambda r: read_separator(r, "data_element_separator"),
                ),
                _header_field(
                    reader,
                    "record_separator",
                    lambda r: read_separator(r, "record_separator"),
                ),
                _header_field(
                    reader,
                    "segment_terminator",
                    lambda r: read_separator(r, "segment_terminator"),
                ),
                _expect_file_type(reader),
                _header_field(reader, "iin", lambda r: r.read(IIN_LENGTH)),
                _header_field(
                    reader, "aamva_version", lambda r: r.read(VERSION_LENGTH)
                ),
                _header_field(
                    reader, "jurisdiction_version", lambda r: r.read(VERSION_LENGTH)
                ),
                _header_field(
                    reader,
                    "num_entries",
                    lambda r: read_decimal(r, NUM_ENTRIES_LENGTH, "number of entries"),
                ),
            ],
        )

    return step
