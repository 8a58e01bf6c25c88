r"""
.. _aamva-dlid-viewer:

``aamva-dlid-viewer``
=====================

A command-line utility which parses an AAMVA DL/ID payload (the text encoded
in the PDF417 barcode of a driver's license or ID card) and displays its
contents.

Usage
-----

Pass a file containing a payload (as captured from a barcode scanner) or
pipe it to stdin::

    $ aamva-dlid-viewer payload.txt
    ParseResult:
      header:
        Header:
          data_element_separator: '\n' (0x0A)
          record_separator: '\x1e' (0x1E)
          segment_terminator: '\r' (0x0D)
          iin: Virginia, USA (636000)
          aamva_version: 11
          jurisdiction_version: 00
          num_entries: 2
      subfile_designators:
        0: DL (offset 41, length 277)
        1: ZV (offset 318, length 8)
      subfiles:
        DL:
          DAQ (Customer ID number): "T64235789"
          DCS (Customer family name): "SAMPLE"
          ...

The payload is read as ISO-8859-1 so that subfile offsets correspond to byte
offsets in the file. The ``--json`` option produces machine readable output
instead.

The ``--chunk-size`` option feeds the payload to the parser a few characters
at a time, as a barcode scanner emulating a keyboard would.

The exit status is 0 if the payload was parsed, 1 if it could not be read, 2
if it is malformed and 3 if it ended before parsing was complete.


Arguments
---------

The complete set of arguments can be listed using ``--help``

.. program-output:: aamva-dlid-viewer --help

"""

import os
import sys
import json
import logging
import traceback

from argparse import ArgumentParser

from aamva_dlid import __version__

from aamva_dlid.parser import Parser

from aamva_dlid.string_utils import ellipsise_lossy, escape_text

__all__ = [
    "read_payload",
    "result_to_json",
    "DLIDViewer",
    "parse_args",
    "main",
]


PAYLOAD_ENCODING = "latin-1"


def read_payload(filename):
    """
    Read a payload from the named file, or from stdin if filename is "-".
    No newline translation is performed.
    """
    if filename == "-":
        return sys.stdin.buffer.read().decode(PAYLOAD_ENCODING)
    with open(filename, "rb") as f:
        return f.read().decode(PAYLOAD_ENCODING)


def result_to_json(result):
    """
    Convert a :py:class:`~aamva_dlid.structures.ParseResult` into a
    JSON-serialisable dictionary.
    """
    return {
        "header": dict(result["header"]),
        "subfile_designators": [dict(sd) for sd in result["subfile_designators"]],
        "subfiles": {
            subfile_type: dict(records)
            for subfile_type, records in result["subfiles"].items()
        },
    }


class DLIDViewer(object):
    def __init__(self, filename, chunk_size, as_json, verbose):
        """
        Parameters
        ==========
        filename : str
            The payload filename to read from ("-" for stdin).
        chunk_size : int or None
            If not None, the number of characters passed to the parser at
            once.
        as_json : bool
            If True, print the result as JSON.
        verbose : int
            If >=1, show Python stack traces on failure.
        """
        self._filename = filename
        self._chunk_size = chunk_size
        self._as_json = as_json
        self._verbose = verbose

    def _chunks(self, payload):
        if self._chunk_size is None:
            yield payload
        else:
            for start in range(0, len(payload), self._chunk_size):
                yield payload[start : start + self._chunk_size]

    def run(self):
        try:
            payload = read_payload(self._filename)
        except (OSError, UnicodeDecodeError) as e:
            self._print_error(str(e))
            return 1

        parser = Parser()
        awaiting_data = True
        for chunk in self._chunks(payload):
            awaiting_data = parser.append(chunk)
            logging.debug(
                "Appended %d character(s), awaiting data: %s", len(chunk), awaiting_data
            )
            if not awaiting_data:
                break

        if parser.complete:
            if self._as_json:
                print(json.dumps(result_to_json(parser.result), indent=2))
            else:
                print(str(parser.result))
            return 0
        elif parser.failed:
            self._print_error(
                "malformed payload: {}".format(parser.error),
            )
            return 2
        else:
            self._print_error(
                "payload ended before parsing was complete after {} character(s): "
                "'{}'".format(
                    len(payload),
                    ellipsise_lossy(escape_text(payload)),
                )
            )
            return 3

    def _print_error(self, message):
        """
        Print an error message to stderr.
        """
        # Avoid interleaving with stdout
        sys.stdout.flush()

        if self._verbose >= 1:
            if sys.exc_info()[0] is not None:
                traceback.print_exc()

        prog = os.path.basename(sys.argv[0])
        message = "{}: error: {}".format(prog, message)
        sys.stderr.write("{}\n".format(message))


def positive_int(string):
    value = int(string)
    if value < 1:
        raise ValueError("must be at least 1")
    return value


def parse_args(*args, **kwargs):
    """
    Parse a set of command line arguments. Returns a :py:mod:`argparse`
    ``args`` object with the following fields:

    * payload (str): The filename of the payload to read ("-" for stdin).
    * chunk_size (int or None): Characters to feed the parser at once.
    * json (bool): True if JSON output is requested.
    * verbose (int): The verbosity level.
    """
    parser = ArgumentParser(
        description="""
        Parse and display an AAMVA DL/ID barcode payload.
    """
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    parser.add_argument(
        "payload",
        nargs="?",
        default="-",
        help="""
            The filename of the payload to parse. Reads from stdin if omitted
            or '-'.
        """,
    )

    parser.add_argument(
        "--chunk-size",
        "-c",
        type=positive_int,
        default=None,
        help="""
            Feed the payload to the parser this many characters at a time.
            By default the whole payload is parsed at once.
        """,
    )

    parser.add_argument(
        "--json",
        "-j",
        action="store_true",
        default=False,
        help="""
            Print the parsed payload as JSON.
        """,
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="""
            Show progress information. Give twice to also show parser debug
            output.
        """,
    )

    return parser.parse_args(*args, **kwargs)


def main(*args, **kwargs):
    args = parse_args(*args, **kwargs)

    log_level = logging.WARNING
    if args.verbose >= 2:
        log_level = logging.DEBUG
    elif args.verbose >= 1:
        log_level = logging.INFO
    logging.basicConfig(level=log_level)

    viewer = DLIDViewer(
        filename=args.payload,
        chunk_size=args.chunk_size,
        as_json=args.json,
        verbose=args.verbose,
    )
    return viewer.run()


if __name__ == "__main__":
    sys.exit(main())
