"""
:py:mod:`aamva_dlid.tables`: AAMVA DL/ID Constants and Tables-of-Values
=======================================================================

Constants describing the fixed parts of the AAMVA DL/ID payload layout along
with lookup tables used to give friendly names to parsed values.

.. note::

    The lookup tables are purely informative. The parser never rejects an
    issuer identification number or data element ID because it is absent
    from these tables.
"""

from collections import namedtuple

from aamva_dlid.tables._csv_reading import read_lookup_from_csv

__all__ = [
    "HEADER_MARKER",
    "FILE_TYPE",
    "IIN_LENGTH",
    "VERSION_LENGTH",
    "NUM_ENTRIES_LENGTH",
    "SUBFILE_TYPE_LENGTH",
    "SUBFILE_OFFSET_LENGTH",
    "SUBFILE_LENGTH_LENGTH",
    "SUBFILE_DESIGNATOR_SIZE",
    "RECORD_KEY_LENGTH",
    "RECOGNIZED_SUBFILE_TYPES",
    "CAPTURE_TIMEOUT",
    "Issuer",
    "ISSUERS",
    "DATA_ELEMENTS",
    "issuer_name",
    "data_element_name",
]


HEADER_MARKER = "@"
"""The compliance indicator which starts every payload."""

FILE_TYPE = "ANSI "
"""The file type literal following the three header separators."""

IIN_LENGTH = 6
"""Length of the issuer identification number."""

VERSION_LENGTH = 2
"""Length of the AAMVA and jurisdiction version number fields."""

NUM_ENTRIES_LENGTH = 2
"""Length of the (decimal) number of subfile designators."""

SUBFILE_TYPE_LENGTH = 2
SUBFILE_OFFSET_LENGTH = 4
SUBFILE_LENGTH_LENGTH = 4

SUBFILE_DESIGNATOR_SIZE = (
    SUBFILE_TYPE_LENGTH + SUBFILE_OFFSET_LENGTH + SUBFILE_LENGTH_LENGTH
)
"""Total length of a subfile designator entry (10)."""

RECORD_KEY_LENGTH = 3
"""Length of a data element ID within a subfile."""

RECOGNIZED_SUBFILE_TYPES = ("DL", "ID")
"""Subfile types whose bodies are parsed into records."""

CAPTURE_TIMEOUT = 0.2
"""
Seconds without input after which
:py:class:`~aamva_dlid.capture.DLIDInput` abandons a capture.
"""


Issuer = namedtuple("Issuer", "jurisdiction,country")

ISSUERS = read_lookup_from_csv(
    "issuers.csv", "iin", ["jurisdiction", "country"], Issuer
)
"""
Lookup from issuer identification number to :py:class:`Issuer`.
"""

DATA_ELEMENTS = read_lookup_from_csv(
    "data_elements.csv", "element_id", ["description"]
)
"""
Lookup from data element ID (e.g. ``"DCS"``) to a description string.
"""


def issuer_name(iin):
    """
    Return a "jurisdiction, country" string for a known issuer identification
    number or None otherwise.
    """
    issuer = ISSUERS.get(iin)
    if issuer is None:
        return None
    return "{}, {}".format(issuer.jurisdiction, issuer.country)


def data_element_name(element_id):
    """
    Return the description of a known data element ID or None otherwise.
    """
    return DATA_ELEMENTS.get(element_id)
