"""
:py:mod:`aamva_dlid.tables._csv_reading`: Internal table reading routines
=========================================================================

These routines load lookup tables from the CSV files in the
``aamva_dlid/tables/`` directory.
"""

import os
import csv

from collections import OrderedDict


__all__ = [
    "csv_path",
    "read_csv_without_comments",
    "read_lookup_from_csv",
]


def csv_path(csv_filename):
    """
    Given a CSV filename in the ``aamva_dlid/tables/`` directory, returns
    a complete path to that file.
    """
    return os.path.join(os.path.dirname(__file__), csv_filename)


def read_csv_without_comments(csv_filename):
    """
    Given a CSV filename in the ``aamva_dlid/tables/`` directory, returns
    a list of dictionaries, one per row, containing the values in the CSV (as
    read by :py:class:`csv.DictReader`).

    Leading rows which are empty or contain only '#' prefixed cells are
    skipped; the first remaining row gives the column headings.
    """
    csv_filename = csv_path(csv_filename)

    with open(csv_filename, newline="", encoding="utf-8") as f:
        for first_non_empty_row, cells in enumerate(csv.reader(f)):
            if any(
                cell.strip() != "" and not cell.strip().startswith("#")
                for cell in cells
            ):
                break

    with open(csv_filename, newline="", encoding="utf-8") as f:
        for _ in range(first_non_empty_row):
            f.readline()

        return list(csv.DictReader(f))


def read_lookup_from_csv(csv_filename, key_column, value_columns, value_type=None):
    """
    Create an ordered dictionary from the rows of a CSV file.

    Parameters
    ==========
    csv_filename : str
        Filename of the CSV file to read (relative to the
        aamva_dlid/tables directory).
    key_column : str
        The column whose (stripped) values are used as dictionary keys. Rows
        with an empty key are skipped.
    value_columns : [str, ...]
        The columns to read for each row.
    value_type : callable or None
        If None, the dictionary values are the (stripped) string in the single
        column named in 'value_columns'. Otherwise the stripped values of all
        'value_columns' are passed, in order, as positional arguments to this
        callable (e.g. a :py:func:`~collections.namedtuple` type).

    Returns
    =======
    :py:class:`collections.OrderedDict`
    """
    out = OrderedDict()
    for row in read_csv_without_comments(csv_filename):
        key = row[key_column].strip()
        if not key:
            continue

        values = [row[column].strip() for column in value_columns]
        if value_type is None:
            (out[key],) = values
        else:
            out[key] = value_type(*values)

    return out
