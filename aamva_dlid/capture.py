"""
:py:mod:`aamva_dlid.capture`: Capturing DL/ID payloads from keyboard input
==========================================================================

Barcode scanners commonly emulate a keyboard, "typing" a scanned payload into
whatever text field has focus. This module separates such payloads from
ordinary typing.

:py:class:`DLIDInput` models a text field. Characters are appended to its
value as usual until an ``@`` (the first character of every DL/ID payload) is
typed. From then on characters are *captured* and fed to a
:py:class:`~aamva_dlid.parser.Parser` instead:

* If the payload parses, the
  :py:class:`~aamva_dlid.structures.ParseResult` is published in the state's
  ``result`` entry and capturing stops.
* If the header turns out to be invalid, or no input arrives for
  :py:data:`~aamva_dlid.tables.CAPTURE_TIMEOUT` seconds, capturing is
  cancelled and the captured characters are returned to the value as if they
  had been typed normally.

:py:class:`SpecialCharInput` translates the key combinations scanners use for
the payload's control characters (e.g. Ctrl+J for a line feed) and Alt code
sequences into characters.

Neither class depends on a particular GUI toolkit: callers forward key events
and call :py:meth:`DLIDInput.check_timeout` periodically.

.. autoclass:: DLIDInput
    :members:

.. autoclass:: InputState

.. autoclass:: SpecialCharInput
    :members:
"""

import time

import logging

from aamva_dlid.fixeddict import fixeddict, Entry

from aamva_dlid.string_formatters import Text

from aamva_dlid.exceptions import HeaderParseError

from aamva_dlid.parser import Parser

from aamva_dlid.tables import HEADER_MARKER, CAPTURE_TIMEOUT

__all__ = [
    "InputState",
    "DLIDInput",
    "SpecialCharInput",
    "get_special_char",
]


InputState = fixeddict(
    "InputState",
    Entry("value", formatter=Text(quote='"'), help_type="str"),
    Entry("is_capturing", help_type="bool"),
    Entry(
        "is_parsing_dlid",
        help_type="bool",
        help="True once enough has been captured to look like a DL/ID payload.",
    ),
    Entry(
        "result",
        help_type=":py:class:`~aamva_dlid.structures.ParseResult` or None",
    ),
    help="""
        A snapshot of the state of a :py:class:`DLIDInput`.
    """,
)


PARSING_DLID_THRESHOLD = 4
"""Number of captured characters after which a capture is considered to be
a DL/ID payload (the marker and the three separators)."""


class DLIDInput(object):
    """
    A text input which captures DL/ID payloads.

    Parameters
    ==========
    initial_value : str
    timeout : float
        Seconds of inactivity after which a capture is abandoned.
    clock : function() -> float
        Returns the current time in seconds.
    """

    def __init__(self, initial_value="", timeout=CAPTURE_TIMEOUT, clock=time.monotonic):
        self._timeout = timeout
        self._clock = clock
        self._deadline = None
        self._parser = Parser()
        self._observers = []
        self._state = InputState(
            value=initial_value,
            is_capturing=False,
            is_parsing_dlid=False,
            result=None,
        )

    @property
    def state(self):
        """The current :py:class:`InputState`."""
        return self._state

    def subscribe(self, callback):
        """
        Call ``callback()`` after every state change.

        Returns
        =======
        unsubscribe : function()
            Removes the callback. Calling it more than once has no effect.
        """
        self._observers.append(callback)

        def unsubscribe():
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _update(self, **changes):
        self._state = self._state.replace(**changes)
        for callback in list(self._observers):
            callback()

    def _reset_timeout(self):
        self._deadline = self._clock() + self._timeout

    def _start_capturing(self):
        logging.debug("Starting DL/ID capture.")
        self._parser = Parser(HEADER_MARKER)
        self._reset_timeout()
        self._update(is_capturing=True)

    def _cancel_capturing(self):
        self._deadline = None
        if self._state["is_capturing"]:
            logging.debug("Cancelling DL/ID capture.")
            # The marker is already part of the value
            captured = self._parser.data[len(HEADER_MARKER) :]
            self._parser = Parser()
            self._update(
                value=self._state["value"] + captured,
                is_capturing=False,
                is_parsing_dlid=False,
                result=None,
            )

    def _complete_capturing(self, result):
        logging.debug("Completed DL/ID capture.")
        self._deadline = None
        self._parser = Parser()
        self._update(is_capturing=False, is_parsing_dlid=False, result=result)

    def check_timeout(self):
        """
        Cancel the capture in progress if it has timed out.

        Returns
        =======
        bool
            True if a capture was cancelled.
        """
        if self._deadline is not None and self._clock() >= self._deadline:
            self._cancel_capturing()
            return True
        return False

    def append(self, value):
        """Handle characters typed into the input."""
        if self._state["is_capturing"]:
            self.check_timeout()

        if self._state["is_capturing"]:
            if self._parser.append(value):
                self._reset_timeout()
                if (
                    len(self._parser.data) >= PARSING_DLID_THRESHOLD
                    and not self._state["is_parsing_dlid"]
                ):
                    self._update(is_parsing_dlid=True)
            elif self._parser.complete:
                self._complete_capturing(self._parser.result)
            elif isinstance(self._parser.error, HeaderParseError):
                self._cancel_capturing()
            else:
                # Swallow input until the capture times out
                self._reset_timeout()
        else:
            new_value = self._state["value"] + value
            self._update(value=new_value)

            if new_value.endswith(HEADER_MARKER):
                self._start_capturing()

    def set_value(self, value):
        """
        Replace the input's value (e.g. following an edit). If the new value
        extends the old one, only the added characters are handled as typed
        input.
        """
        if value.startswith(self._state["value"]):
            self.append(value[len(self._state["value"]) :])
        else:
            self._update(value="")
            self.append(value)


ALT_KEY = "Alt"
ENTER_KEY = "Enter"
DIGITS = "0123456789"


def get_special_char(key, ctrl=False):
    """
    Return the payload control character produced by a key combination, or
    None.

    * Ctrl+J produces a line feed (data element separator)
    * Ctrl+6 or Ctrl+^ produces a record separator (0x1E)
    * Enter produces a carriage return (segment terminator)
    """
    if key == "j" and ctrl:
        return "\n"
    elif key in ("6", "^") and ctrl:
        return "\x1e"
    elif key == ENTER_KEY:
        return "\r"
    else:
        return None


class SpecialCharInput(object):
    """
    Converts key events into special characters.

    Handles Alt codes (holding Alt while typing a decimal code point), Enter,
    Ctrl+J and Ctrl+6. Key names follow the DOM ``KeyboardEvent.key``
    convention (e.g. ``"Alt"``, ``"Enter"``, ``"j"``).
    """

    def __init__(self):
        self._alt_buffer = ""

    def append_alt_code(self, digit):
        """Append a digit to the Alt code being composed."""
        self._alt_buffer += digit

    def reset(self):
        """Discard the Alt code being composed."""
        self._alt_buffer = ""

    def finish(self):
        """
        Finish composing an Alt code.

        Returns
        =======
        str or None
            The character with the composed code point or None if no valid
            code was entered.
        """
        alt_buffer = self._alt_buffer
        self.reset()
        try:
            return chr(int(alt_buffer, 10))
        except (ValueError, OverflowError):
            return None

    def on_key_down(self, key, alt=False, ctrl=False):
        """
        Handle a key press.

        Returns
        =======
        str or None
            A special character to input, if any.
        """
        if key == ALT_KEY:
            return None

        if alt and len(key) == 1 and key in DIGITS:
            self.append_alt_code(key)
            return None

        return get_special_char(key, ctrl)

    def on_key_up(self, key):
        """
        Handle a key release. Releasing Alt completes an Alt code.

        Returns
        =======
        str or None
            A special character to input, if any.
        """
        if key == ALT_KEY:
            if self._alt_buffer:
                return self.finish()
            self.reset()
        return None
