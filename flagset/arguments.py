r"""
Flagset argument descriptors.

Overview
- Argument: declarative descriptor plus mutable parse-result slot for one named
  command-line argument. It is configured through chained mutators before being
  registered into an ArgumentSet, mutated by the parser (value and given flag),
  and read-only afterward.

Kinds
- Option: presence-only switch (the default). Resolves to a boolean given flag.
- Value-bearing: marked with expects_value(); consumes the following token as its
  value. A value-bearing argument is never an option, and there is no way back.

Forms
- short: a single character, invoked as "-x" (Unset until set_short() is called).
- long: a string, invoked as "--name" (empty until set_long() is called).
  No character-set or prefix validation happens at this layer.

Values
- The resolved value is a string. An empty string means “absent”: get_value()
  returns None both when nothing was stored and when "" was stored.

Quick example:
    >>> from flagset import Argument
    >>> output = Argument.with_name("output").set_short("o").set_long("output").expects_value().required()
    >>> verbose = Argument.with_name("verbose").set_short("v").set_long("verbose")
    >>> output.is_option(), verbose.is_option()
    (False, True)
"""
import functools
import operator

from .utils import *


class Argument:
    """
    One declared command-line argument.

    Every mutator returns the same instance so declarations can be chained:
        Argument.with_name("name").set_long("name").expects_value()

    Properties
    - name, short and long are exposed as read-only attributes.
    """

    name = mirror("name")
    short = mirror("short")
    long = mirror("long")

    def __init__(self, name, /):
        if not isinstance(name, str):
            raise TypeError("argument 'name' must be a string")
        self._name = name
        self._short = Unset
        self._long = ""
        self._value = ""
        self._required = False
        self._expects_value = False
        self._option = True
        self._given = False

    @classmethod
    def with_name(cls, name, /):
        """
        Create an argument with the given name and every other field defaulted.
        """
        return cls(name)

    def set_short(self, short, /):
        """
        Assign the short form (one character, e.g. "o" for "-o").
        """
        if not isinstance(short, str) or len(short) != 1:
            raise TypeError("argument 'short' must be a single character")
        self._short = short
        return self

    def set_long(self, long, /):
        """
        Assign the long form (e.g. "output" for "--output").
        """
        if not isinstance(long, str):
            raise TypeError("argument 'long' must be a string")
        self._long = long
        return self

    def set_value(self, value, /):
        """
        Store the resolved value unconditionally (last write wins).
        """
        if not isinstance(value, str):
            raise TypeError("argument 'value' must be a string")
        self._value = value
        return self

    def get_value(self):
        """
        Return the resolved value, or None when it is empty.
        """
        return self._value or None

    def expects_value(self):
        """
        Mark the argument as value-consuming; it stops being an option.
        """
        self._expects_value = True
        self._option = False
        return self

    def is_expecting_value(self):
        return self._expects_value

    def required(self):
        self._required = True
        return self

    def is_required(self):
        return self._required

    def is_option(self):
        return self._option

    def is_given(self):
        return self._given

    def set_given(self, given, /):
        if not isinstance(given, bool):
            raise TypeError("argument 'given' must be a boolean")
        self._given = given
        return self

    def __repr__(self):
        return f"argument({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __rich_repr__(self):
        yield "name", self._name
        yield "short", self._short
        yield "long", self._long
        yield "value", self.get_value()
        yield "required", self._required
        yield "option", self._option
        yield "given", self._given


__all__ = (
    "Argument",
)
