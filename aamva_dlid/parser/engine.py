"""
:py:mod:`aamva_dlid.parser.engine`: Resumable step engine
=========================================================

The DL/ID parser is built from a queue of *steps*. A step is a plain function
which takes the current (immutable)
:py:class:`~aamva_dlid.structures.ParseResult` and returns a tuple::

    (new_result, follow_up_steps)

Where ``follow_up_steps`` is a (possibly empty) list of steps which replace
the completed step at the head of the queue. Steps may therefore expand into
further steps whose number is only known once earlier data has been parsed
(e.g. one step per subfile designator).

A step which reads from a :py:class:`~aamva_dlid.string_io.StringIO` may fail
with :py:exc:`~aamva_dlid.exceptions.InsufficientData`. Since results are
immutable and only replaced once a step returns, a failing step has no effect
on the engine's result and it remains at the head of the queue to be re-run
once more data is available. Steps must consume from their reader only once
they can no longer fail for want of data.

A :py:exc:`~aamva_dlid.exceptions.ParseError` is terminal: it is recorded and
re-raised by every subsequent call to :py:meth:`StepEngine.run`.

.. autoclass:: StepEngine
    :members:
"""

from collections import deque

from aamva_dlid.exceptions import ParseError

__all__ = [
    "StepEngine",
]


class StepEngine(object):
    """
    Drives a queue of parsing steps.

    Parameters
    ==========
    steps : [step, ...]
        The initial steps, in the order they will be run.
    result : :py:class:`~aamva_dlid.structures.ParseResult`
        The result passed to the first step.
    """

    def __init__(self, steps, result):
        self._steps = deque(steps)
        self._result = result
        self._error = None

    @property
    def result(self):
        """The result produced by the most recently completed step."""
        return self._result

    @property
    def error(self):
        """The :py:exc:`~aamva_dlid.exceptions.ParseError` which stopped this
        engine, or None."""
        return self._error

    @property
    def pending(self):
        """The number of steps currently queued."""
        return len(self._steps)

    @property
    def complete(self):
        """True once every step has run successfully."""
        return self._error is None and not self._steps

    def run(self):
        """
        Run queued steps until none remain.

        Returns
        =======
        :py:class:`~aamva_dlid.structures.ParseResult`
            The final result.

        Raises
        ======
        :py:exc:`~aamva_dlid.exceptions.InsufficientData`
            If a step ran out of data. The step remains queued and the result
            is unchanged; call :py:meth:`run` again once more data is
            available.
        :py:exc:`~aamva_dlid.exceptions.ParseError`
            If a step encountered malformed data, or a previous call did.
        """
        if self._error is not None:
            raise self._error

        while self._steps:
            step = self._steps[0]
            try:
                result, follow_up_steps = step(self._result)
            except ParseError as e:
                self._error = e
                raise

            self._result = result
            self._steps.popleft()
            self._steps.extendleft(reversed(follow_up_steps))

        return self._result
