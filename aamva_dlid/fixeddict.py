r"""
The :py:mod:`aamva_dlid.fixeddict` module provides the :py:func:`fixeddict`
function for creating new immutable :py:class:`dict` subclasses which permit
only certain keys to be used. These new types may be read like ordinary Python
dictionaries but add three main features:

* Explicitness -- Parsed DL/ID structures (headers, subfile designators, parse
  results) are plain dictionaries with clear type names.
* Avoidance of typos -- Misspelt key names will result in a
  :py:exc:`FixedDictKeyError`.
* Immutability -- Values cannot be changed in place. Instead
  :py:meth:`replace` returns an updated copy. The parser relies on this to
  guarantee that a parsing step which fails has no visible effect.


Tutorial
--------

Using :py:func:`fixeddict`, dictionary-like types with well defined fields can
be described like so::

    >>> from aamva_dlid.fixeddict import fixeddict

    >>> Version = fixeddict(
    ...     "Version",
    ...     "aamva_version",
    ...     "jurisdiction_version",
    ... )

This produces a 'dict' subclass called ``Version`` which only allows the
specified keys to be used::

    >>> v = Version(aamva_version="10")
    >>> v["aamva_version"]
    '10'

    >>> Version(not_in_fixeddict=123)
    Traceback (most recent call last):
      ...
    FixedDictKeyError: 'not_in_fixeddict' not allowed in Version

    >>> v["jurisdiction_version"] = "00"
    Traceback (most recent call last):
      ...
    TypeError: Version is immutable

    >>> v.replace(jurisdiction_version="00")
    Version({'aamva_version': '10', 'jurisdiction_version': '00'})

The generated types have a 'pretty' string representation::

    >>> print(v.replace(jurisdiction_version="00"))
    Version:
      aamva_version: 10
      jurisdiction_version: 00

Custom string formatting functions may be provided for each entry in the
dictionary. To define these, :py:class:`Entry` instances must be used in
place of key name strings like so::

    >>> from aamva_dlid.string_formatters import Char
    >>> Separators = fixeddict(
    ...     "Separators",
    ...     Entry("data_element_separator", formatter=Char()),
    ...     Entry("segment_terminator", formatter=Char()),
    ... )
    >>> print(Separators(data_element_separator="\n", segment_terminator="\r"))
    Separators:
      data_element_separator: '\n' (0x0A)
      segment_terminator: '\r' (0x0D)

See the :py:mod:`aamva_dlid.string_formatters` module for a set of useful
string formatting functions.


API
---

.. autofunction:: fixeddict

.. autoclass:: Entry

.. autoexception:: FixedDictKeyError

"""

import sys

from collections import OrderedDict

from textwrap import dedent

from aamva_dlid.string_utils import indent


__all__ = [
    "fixeddict",
    "Entry",
    "FixedDictKeyError",
]


class Entry(object):
    """
    Defines advanced properties of of an entry in a :py:func:`fixeddict`
    dictionary.

    All constructor arguments, except name, are keyword-only.

    Parameters
    ==========
    name : str
        The name of this entry in the dictionary.
    formatter : function(value) -> string
        A function which takes a value and returns a string representation
        to use when printing this value as a string. Defaults to 'str'.
    friendly_formatter : function(value) -> string
        If provided, when converting this value to a string, this function
        will be used to generate a 'friendly' name for this value. This
        will be followed by the actual value in brackets. If this function
        returns None, only the actual value will be shown (without
        brackets).
    help : str
        Optional documentation string.
    help_type : str
        Optional string describing the type of the entry.
    """

    def __init__(self, name, **kwargs):
        self.name = name

        self.formatter = kwargs.pop("formatter", str)
        self.friendly_formatter = kwargs.pop("friendly_formatter", None)

        self.help = kwargs.pop("help", None)
        if self.help is not None:
            self.help = dedent(self.help).strip()

        self.help_type = kwargs.pop("help_type", None)
        if self.help_type is not None:
            self.help_type = dedent(self.help_type).strip()

        if kwargs:
            raise TypeError(
                "unexpected keyword arguments: {} for {}".format(
                    ", ".join(kwargs.keys()), self.__class__.__name__
                )
            )

    def to_string(self, value):
        """
        Convert a value to a string according to the formatters of this
        :py:class:`Entry`.
        """
        value_string = self.formatter(value)

        if self.friendly_formatter is not None:
            friendly_string = self.friendly_formatter(value)
            if friendly_string is not None:
                value_string = "{} ({})".format(friendly_string, value_string)

        return value_string


class FixedDictKeyError(KeyError):
    """
    A :py:exc:`KeyError` which also includes information about which fixeddict
    dictionary it was produced by.

    Attributes
    ==========
    key
        The key which was accessed.
    fixeddict_class
        The :py:mod:`~aamva_dlid.fixeddict` type of the dictionary used.
    """

    def __init__(self, key, fixeddict_class):
        super(FixedDictKeyError, self).__init__(key)
        self.key = key
        self.fixeddict_class = fixeddict_class

    def __str__(self):
        return "{!r} not allowed in {}".format(self.key, self.fixeddict_class.__name__)


def fixeddict(name, *entries, **kwargs):
    """
    Create an immutable fixed-entry dictionary type.

    A fixed-entry dictionary is a :py:class:`dict` subclass which permits only
    a preset list of key names and which may not be modified after
    construction.

    The first argument is the name of the created class, the remaining
    arguments may be strings or :py:class:`Entry` instances describing the
    allowed entries in the dictionary.

    Instances of the dictionary can be created like an ordinary dictionary::

        >>> ExampleDict = fixeddict("ExampleDict", "attr", Entry("other_attr"))
        >>> d = ExampleDict(attr=10, other_attr=20)
        >>> d["attr"]
        10

    All mutating :py:class:`dict` methods raise :py:exc:`TypeError`. Use the
    ``replace(**changes)`` method to obtain a modified copy.

    The string format of generated dictionaries includes certain
    pretty-printing behaviour (see :py:class:`Entry`) and will also omit any
    entries whose name is prefixed with an underscore (``_``).

    The class itself will have a static (and read-only) attribute
    ``entry_objs`` which is a :py:class:`collections.OrderedDict` mapping from
    entry name to :py:class:`Entry` object in the dictionary.

    The keyword-only argument, 'module' may be provided which overrides the
    ``__module__`` value of the returned fixeddict type. (By default the module
    name is inferred using runtime stack inspection, if possible). This must be
    set correctly for this type to be picklable.

    The keyword-only argument 'help' may be used to set the docstring of the
    returned class. This will automatically be appended with the list of
    entries allowed (and their help strings).
    """
    module = kwargs.pop("module", None)
    help = kwargs.pop("help", None)
    assert not kwargs, "Got unexpected keyword arguments: {}".format(", ".join(kwargs))

    if help is not None:
        help = dedent(help).strip()

    # {name: Entry, ...}
    entry_objs = OrderedDict(
        (entry.name, entry)
        for entry in (arg if isinstance(arg, Entry) else Entry(arg) for arg in entries)
    )

    __dict__ = {}

    def __init__(self, *args, **kwargs):
        dict.__init__(self, *args, **kwargs)

        for name in self.keys():
            if name not in entry_objs:
                raise FixedDictKeyError(name, self.__class__)

    __dict__["__init__"] = __init__

    __dict__["help"] = help
    __dict__["__doc__"] = "{}\n\nParameters\n==========\n{}\n".format(
        help if help is not None else "A :py:mod:`~aamva_dlid.fixeddict`.",
        "\n".join(
            "{}{}{}".format(
                entry.name,
                (" : " + entry.help_type if entry.help_type is not None else ""),
                (("\n" + indent(entry.help, "    ")) if entry.help is not None else ""),
            )
            for entry in entry_objs.values()
        ),
    )

    def _immutable(self, *args, **kwargs):
        raise TypeError("{} is immutable".format(self.__class__.__name__))

    for method_name in (
        "__setitem__",
        "__delitem__",
        "setdefault",
        "update",
        "pop",
        "popitem",
        "clear",
        "__ior__",
    ):
        __dict__[method_name] = _immutable

    def replace(self, **changes):
        for key in changes:
            if key not in entry_objs:
                raise FixedDictKeyError(key, self.__class__)
        new_values = dict(self)
        new_values.update(changes)
        return self.__class__(new_values)

    __dict__["replace"] = replace

    def __repr__(self):
        return "{}({{{}}})".format(
            self.__class__.__name__,
            ", ".join(
                "{!r}: {!r}".format(name, self[name])
                for name, entry_obj in entry_objs.items()
                if name in self
            ),
        )

    __dict__["__repr__"] = __repr__

    def __str__(self):
        if len(self) == 0:
            return self.__class__.__name__
        else:
            lines = []
            for name, entry_obj in entry_objs.items():
                if name not in self or name.startswith("_"):
                    continue
                value_string = entry_obj.to_string(self[name])
                if "\n" in value_string:
                    lines.append(
                        indent("{}:\n{}".format(name, indent(value_string)))
                    )
                else:
                    lines.append(indent("{}: {}".format(name, value_string)))
            return "{}:\n{}".format(self.__class__.__name__, "\n".join(lines))

    __dict__["__str__"] = __str__

    def copy(self):
        return self.__class__(self)

    __dict__["copy"] = copy

    # Dictionaries have their own magic behaviour by default under pickle and
    # the default behaviour would use the (disabled) __setitem__.
    def __reduce__(self):
        return (type(self), (dict(self),))

    __dict__["__reduce__"] = __reduce__

    cls = type(name, (dict,), __dict__)

    setattr(cls, "entry_objs", entry_objs)

    # Setting the __module__ class attributes tells pickle where to find this
    # type when unpickling.
    if module is None:
        try:
            module = sys._getframe(1).f_globals["__name__"]
        except (AttributeError, ValueError, KeyError):
            pass
    if module is not None:
        setattr(cls, "__module__", module)

    return cls
