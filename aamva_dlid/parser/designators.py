"""
:py:mod:`aamva_dlid.parser.designators`: Subfile designator steps
=================================================================

The header is followed by one fixed-width designator per declared entry::

    <type:2> <offset:4> <length:4>

.. autofunction:: make_designators_step
"""

from aamva_dlid.string_io import StringIO

from aamva_dlid.structures import SubfileDesignator

from aamva_dlid.parser.header import read_decimal

from aamva_dlid.tables import (
    SUBFILE_DESIGNATOR_SIZE,
    SUBFILE_TYPE_LENGTH,
    SUBFILE_OFFSET_LENGTH,
    SUBFILE_LENGTH_LENGTH,
)

__all__ = [
    "parse_designator",
    "make_designators_step",
]


def parse_designator(block):
    """
    Parse a complete designator string into a
    :py:class:`~aamva_dlid.structures.SubfileDesignator`.

    Raises
    ======
    :py:exc:`~aamva_dlid.exceptions.ParseError`
        If the offset or length are not decimal.
    """
    block_reader = StringIO(block)
    subfile_type = block_reader.read(SUBFILE_TYPE_LENGTH)
    offset = read_decimal(block_reader, SUBFILE_OFFSET_LENGTH, "offset")
    length = read_decimal(block_reader, SUBFILE_LENGTH_LENGTH, "length")
    return SubfileDesignator(type=subfile_type, offset=offset, length=length)


def _designator(reader):
    def step(result):
        # The cursor only advances once the whole block has parsed
        designator = parse_designator(reader.peek(SUBFILE_DESIGNATOR_SIZE))
        reader.read(SUBFILE_DESIGNATOR_SIZE)
        return (
            result.replace(
                subfile_designators=result["subfile_designators"] + (designator,)
            ),
            [],
        )

    return step


def make_designators_step(reader):
    """
    Make a step which expands into one designator-parsing step for each of
    the ``num_entries`` declared in the (already parsed) header.
    """

    def step(result):
        num_entries = result["header"]["num_entries"]
        return result, [_designator(reader) for _ in range(num_entries)]

    return step
