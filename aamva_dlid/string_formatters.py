r"""
The :py:mod:`aamva_dlid.string_formatters` module contains facilities for
formatting (or pretty printing) parsed DL/ID values as strings.

When we say 'string formatter' we mean a function/callable which takes a value
and returns a string representation of that value. Instances of the classes in
this module act as formatters. For example, the :py:class:`Char` class may be
used as a formatter for separator characters::

    >>> from aamva_dlid.string_formatters import Char

    >>> char_formatter = Char()
    >>> char_formatter("\n")
    "'\\n' (0x0A)"

"""

from aamva_dlid.string_utils import indent, escape_char, escape_text

__all__ = [
    "Hex",
    "Char",
    "Text",
    "MultilineList",
    "MultilineMapping",
]


class Hex(object):
    """
    Prints numbers in hexadecimal.

    Parameters
    ==========
    num_digits : int
        Minimum number of digits to show.
    prefix : str
        Defaults to "0x"
    """

    def __init__(self, num_digits=0, prefix="0x"):
        self.num_digits = num_digits
        self.prefix = prefix

    def __call__(self, number):
        return "{}{}{:0{}X}".format(
            "-" if number < 0 else "",
            self.prefix,
            abs(number),
            self.num_digits,
        )


class Char(object):
    r"""
    A formatter for single characters (e.g. separators) which shows the
    escaped character followed by its code point in hex.

    Examples::

        >>> Char()("\x1e")
        "'\\x1e' (0x1E)"
        >>> Char()("")
        "''"
    """

    def __init__(self, code_point_formatter=Hex(2)):
        self.code_point_formatter = code_point_formatter

    def __call__(self, char):
        if len(char) != 1:
            return "'{}'".format(escape_text(char))
        return "'{}' ({})".format(
            escape_char(char),
            self.code_point_formatter(ord(char)),
        )


class Text(object):
    """
    A formatter for free text values which escapes control characters and
    optionally surrounds the value with quotes.
    """

    def __init__(self, quote=""):
        self.quote = quote

    def __call__(self, text):
        return "{0}{1}{0}".format(self.quote, escape_text(text))


class MultilineList(object):
    """
    A formatter for lists which displays each value on its own line.

    Examples::

        >>> MultilineList()(["one", "two", "three"])
        0: one
        1: two
        2: three

        >>> # A heading may be added
        >>> MultilineList(heading="MyList")(["one", "two", "three"])
        MyList
          0: one
          1: two
          2: three
    """

    def __init__(self, heading=None, formatter=str):
        self.heading = heading
        self.formatter = formatter

    def __call__(self, lst):
        lines = "\n".join(
            "{}: {}".format(i, self.formatter(value)) for i, value in enumerate(lst)
        )

        if self.heading is None:
            return lines
        else:
            return "{}\n{}".format(self.heading, indent(lines))


class MultilineMapping(object):
    """
    A formatter for mappings which displays each item on its own line, in
    insertion order.

    Parameters
    ==========
    key_formatter : function(key) -> string
    value_formatter : function(value) -> string
        Multi-line values are indented beneath their key.
    friendly_key_formatter : function(key) -> string or None
        If provided and returns a non-None value, this is shown in brackets
        after the key.

    Examples::

        >>> MultilineMapping()({"DAQ": "T64235789", "DCS": "SAMPLE"})
        DAQ: T64235789
        DCS: SAMPLE

        >>> MultilineMapping(friendly_key_formatter={"DCS": "Family name"}.get)(
        ...     {"DCS": "SAMPLE"})
        DCS (Family name): SAMPLE
    """

    def __init__(
        self, key_formatter=str, value_formatter=str, friendly_key_formatter=None
    ):
        self.key_formatter = key_formatter
        self.value_formatter = value_formatter
        self.friendly_key_formatter = friendly_key_formatter

    def _format_key(self, key):
        key_string = self.key_formatter(key)
        if self.friendly_key_formatter is not None:
            friendly_string = self.friendly_key_formatter(key)
            if friendly_string is not None:
                key_string = "{} ({})".format(key_string, friendly_string)
        return key_string

    def __call__(self, mapping):
        lines = []
        for key, value in mapping.items():
            value_string = self.value_formatter(value)
            if "\n" in value_string:
                lines.append(
                    "{}:\n{}".format(self._format_key(key), indent(value_string))
                )
            else:
                lines.append("{}: {}".format(self._format_key(key), value_string))
        return "\n".join(lines)
