"""
:py:mod:`aamva_dlid.parser`: Incremental AAMVA DL/ID payload parser
===================================================================

This module parses the text payload encoded in the PDF417 barcode of North
American driver's licenses and ID cards. The payload may be supplied
incrementally: whenever the data runs out the parser suspends and resumes
where it left off once more data is appended.

The parser is built from a queue of resumable steps
(:py:mod:`~aamva_dlid.parser.engine`) which parse the header
(:py:mod:`~aamva_dlid.parser.header`), the subfile designators
(:py:mod:`~aamva_dlid.parser.designators`) and finally the subfile records
(:py:mod:`~aamva_dlid.parser.subfiles`).

Most users will only need :py:class:`Parser`.
"""

from aamva_dlid.parser.engine import *
from aamva_dlid.parser.header import *
from aamva_dlid.parser.designators import *
from aamva_dlid.parser.subfiles import *
from aamva_dlid.parser.dlid_parser import *
