"""
Sample DL/ID payloads shared by the test suite.

The example payload is taken from the AAMVA DL/ID Card Design Standard (2020)
annex D.
"""

EXAMPLE_RECORDS = [
    ("DAQ", "T64235789"),
    ("DCS", "SAMPLE"),
    ("DDE", "N"),
    ("DAC", "MICHAEL"),
    ("DDF", "N"),
    ("DAD", "JOHN"),
    ("DDG", "N"),
    ("DCU", "JR"),
    ("DCA", "D"),
    ("DCB", "K"),
    ("DCD", "PH"),
    ("DBD", "06062022"),
    ("DBB", "06062006"),
    ("DBA", "06062027"),
    ("DBC", "1"),
    ("DAU", "068 in"),
    ("DAY", "BRO"),
    ("DAG", "2300 WEST BROAD STREET"),
    ("DAI", "RICHMOND"),
    ("DAJ", "VA"),
    ("DAK", "232690000 "),
    ("DCF", "2424244747474786102204"),
    ("DCG", "USA"),
    ("DCK", "123456789"),
    ("DDA", "F"),
    ("DDB", "06062018"),
    ("DDJ", "06062027"),
    ("DDD", "1"),
]

EXAMPLE_HEADER = {
    "data_element_separator": "\n",
    "record_separator": "\x1e",
    "segment_terminator": "\r",
    "iin": "636000",
    "aamva_version": "11",
    "jurisdiction_version": "00",
    "num_entries": 2,
}

EXAMPLE_DESIGNATORS = [
    {"type": "DL", "offset": 41, "length": 277},
    {"type": "ZV", "offset": 318, "length": 8},
]

EXAMPLE_SUBFILES = {"DL": dict(EXAMPLE_RECORDS)}

EXAMPLE_DL_SUBFILE = "DL" + "\n".join(k + v for k, v in EXAMPLE_RECORDS) + "\r"

EXAMPLE_PAYLOAD = (
    "@\n\x1e\rANSI 636000110002DL00410277ZV03180008"
    + EXAMPLE_DL_SUBFILE
    + "ZVZVA01\r"
)

# Some cards end each subfile with a data element separator and a segment
# terminator
EXAMPLE_PAYLOAD_EXTRA_SEPARATOR = (
    "@\n\x1e\rANSI 636000110002DL00410278ZV03190009"
    + EXAMPLE_DL_SUBFILE[:-1]
    + "\n\r"
    + "ZVZVA01\n\r"
)

EXAMPLE_EXTRA_SEPARATOR_DESIGNATORS = [
    {"type": "DL", "offset": 41, "length": 278},
    {"type": "ZV", "offset": 319, "length": 9},
]


def make_payload(
    subfiles,
    sep="\n",
    rs="\x1e",
    term="\r",
    iin="636000",
    aamva_version="10",
    jurisdiction_version="00",
):
    """
    Build a well-formed payload from a list of (type, body) pairs where each
    body is the complete subfile (including its leading type and trailing
    terminator).
    """
    header = "@{}{}{}ANSI {}{}{}{:02d}".format(
        sep, rs, term, iin, aamva_version, jurisdiction_version, len(subfiles)
    )
    offset = len(header) + 10 * len(subfiles)
    designators = ""
    bodies = ""
    for subfile_type, body in subfiles:
        designators += "{}{:04d}{:04d}".format(subfile_type, offset, len(body))
        bodies += body
        offset += len(body)
    return header + designators + bodies
