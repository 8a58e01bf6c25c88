"""
The :py:mod:`aamva_dlid` module decodes the AAMVA DL/ID payload: the text
encoded in the PDF417 barcode on North American driver's licenses and ID
cards.

..
    You are currently reading the documentation in its source form (e.g.
    directly from the Python source docstrings or via ``help()``).


Main components
---------------

* An incremental payload parser (:py:mod:`aamva_dlid.parser`) which accepts
  data a few characters at a time and resumes where it left off.
* Immutable data structures for the parsed payload
  (:py:mod:`aamva_dlid.structures`).
* Keyboard-input capture helpers for barcode scanners emulating a keyboard
  (:py:mod:`aamva_dlid.capture`).
* The :ref:`aamva-dlid-viewer` command line tool.

Typical usage::

    >>> from aamva_dlid import Parser
    >>> parser = Parser()
    >>> parser.append(payload_start)
    True
    >>> parser.append(payload_end)
    False
    >>> parser.subfiles["DL"]["DCS"]
    'SAMPLE'

Only the structure of the payload is checked: field values (dates, codes
etc.) are returned verbatim and not validated.
"""

from aamva_dlid.version import __version__

from aamva_dlid.exceptions import *
from aamva_dlid.string_io import *
from aamva_dlid.structures import *
from aamva_dlid.parser import Parser, make_dlid_parser
