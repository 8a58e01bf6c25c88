"""
The :py:mod:`aamva_dlid.string_utils` module contains string routines used
when displaying DL/ID payloads, which are full of control characters.
"""

__all__ = [
    "indent",
    "escape_char",
    "escape_text",
    "ellipsise_lossy",
]


ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\\": "\\\\",
}
"""Short escape sequences for common control characters."""


def indent(text, prefix="  "):
    """
    Indent the string 'text' with the prefix string 'prefix'.

    Unlike :py:func:`textwrap.indent`, every line (including blank ones) is
    indented.
    """
    return "{}{}".format(prefix, ("\n{}".format(prefix)).join(text.split("\n")))


def escape_char(char):
    """
    Return a printable rendering of a single character. Printable characters
    are returned unchanged, common control characters use their backslash
    escape and anything else is shown as a hex escape.

    For example::

        >>> escape_char("A")
        'A'
        >>> escape_char("\\n")
        '\\\\n'
        >>> escape_char("\\x1e")
        '\\\\x1e'
    """
    if char in ESCAPES:
        return ESCAPES[char]
    elif char.isprintable():
        return char
    elif ord(char) <= 0xFF:
        return "\\x{:02x}".format(ord(char))
    elif ord(char) <= 0xFFFF:
        return "\\u{:04x}".format(ord(char))
    else:
        return "\\U{:08x}".format(ord(char))


def escape_text(text):
    """Apply :py:func:`escape_char` to every character in 'text'."""
    return "".join(escape_char(char) for char in text)


def ellipsise_lossy(text, max_length=80):
    """
    Given a string which may not fit within a given line length, truncate the
    string by adding ellipses in the middle.
    """
    if len(text) <= max_length:
        return text
    else:
        before_length = (max_length - 3) // 2
        after_length = (max_length - 3) - before_length
        return "{}...{}".format(text[:before_length], text[-after_length:])
