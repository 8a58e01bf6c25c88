"""
:py:mod:`aamva_dlid.structures`: Parsed DL/ID data structures
=============================================================

The parser produces its output as a :py:class:`ParseResult` made up of the
:py:mod:`~aamva_dlid.fixeddict` types defined here. All of these are
immutable.

.. autoclass:: Header

.. autoclass:: SubfileDesignator

.. autoclass:: ParseResult

.. autofunction:: frozen_mapping

.. autofunction:: empty_parse_result
"""

from types import MappingProxyType

from aamva_dlid.fixeddict import fixeddict, Entry

from aamva_dlid.string_formatters import (
    Char,
    Text,
    MultilineList,
    MultilineMapping,
)

from aamva_dlid.tables import issuer_name, data_element_name

__all__ = [
    "Header",
    "SubfileDesignator",
    "ParseResult",
    "frozen_mapping",
    "empty_parse_result",
]


Header = fixeddict(
    "Header",
    Entry(
        "data_element_separator",
        formatter=Char(),
        help_type="str",
        help="Delimits records within a subfile.",
    ),
    Entry(
        "record_separator",
        formatter=Char(),
        help_type="str",
        help="Read from the header but not otherwise used.",
    ),
    Entry(
        "segment_terminator",
        formatter=Char(),
        help_type="str",
        help="Terminates each subfile.",
    ),
    Entry(
        "iin",
        friendly_formatter=issuer_name,
        help_type="str",
        help="Six character issuer identification number.",
    ),
    Entry("aamva_version", help_type="str"),
    Entry("jurisdiction_version", help_type="str"),
    Entry(
        "num_entries",
        help_type="int",
        help="The number of subfile designators which follow the header.",
    ),
    help="""
        A DL/ID payload header. Entries are added one at a time as they are
        parsed.
    """,
)


SubfileDesignator = fixeddict(
    "SubfileDesignator",
    Entry("type", help_type="str", help='Two character type code, e.g. "DL".'),
    Entry(
        "offset",
        help_type="int",
        help="Offset of the subfile from the start of the payload.",
    ),
    Entry("length", help_type="int", help="Length of the subfile."),
    help="""
        A subfile directory entry.
    """,
)


def format_designator(designator):
    return "{} (offset {}, length {})".format(
        designator["type"],
        designator["offset"],
        designator["length"],
    )


def format_records(records):
    return MultilineMapping(
        value_formatter=Text(quote='"'),
        friendly_key_formatter=data_element_name,
    )(records)


ParseResult = fixeddict(
    "ParseResult",
    Entry("header", help_type=":py:class:`Header`"),
    Entry(
        "subfile_designators",
        formatter=MultilineList(formatter=format_designator),
        help_type="(:py:class:`SubfileDesignator`, ...)",
        help="In order of appearance in the payload.",
    ),
    Entry(
        "subfiles",
        formatter=MultilineMapping(value_formatter=format_records),
        help_type="{type: {key: value, ...}, ...}",
        help="""
            The records of each recognised subfile type, as read-only
            mappings.
        """,
    ),
    help="""
        A (possibly partially) parsed DL/ID payload.
    """,
)


def frozen_mapping(mapping):
    """
    Return a read-only view of a copy of the dictionary 'mapping'.
    """
    return MappingProxyType(dict(mapping))


def empty_parse_result():
    """
    Return the :py:class:`ParseResult` which parsing starts from: an empty
    :py:class:`Header` with no designators or subfiles.
    """
    return ParseResult(
        header=Header(),
        subfile_designators=(),
        subfiles=frozen_mapping({}),
    )
