"""
Flagset faults (errors and warnings), termination policy and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue.
- Termination: how an argument set reports an unrecoverable validation failure
  (render + exit the process, or raise a typed error to the host).
- ArgumentException / ArgumentWarning: base types that carry a message plus
  structured options (argument name, code, hint, runtime flags) and know how to
  render and surface themselves.
- trigger(): central entry point to surface any fault.

Integration
- ArgumentSet.terminate() builds a MissingRequiredValueError and passes it to
  trigger() together with its runtime options (console, exit, termination,
  fancy, colorful).
- With Termination.RAISE the error propagates to the host; with
  Termination.EXIT it is printed on the diagnostic console and the injected
  exit hook is called with status 1.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import Enum, IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - values (1120x): MISSING_REQUIRED_VALUE
    - warnings (1220x): MISSING_VALUE

    the host may remap codes to labels through a __codes__ mapping in __main__
    (see normalize()).
    """
    # --- value errors (11xxx) ---
    MISSING_REQUIRED_VALUE = 11201

    # --- warnings (12xxx) ---
    MISSING_VALUE          = 12201

    def normalize(self):
        """
        return a host-normalized string for this code.

        when __main__ defines no __codes__ mapping (or lacks this code) the
        numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class Termination(Enum):
    """
    termination policy for missing required values.

    - EXIT: write a diagnostic naming the argument and end the process (status 1).
    - RAISE: raise a MissingRequiredValueError for the host to catch.
    """
    EXIT = "exit"
    RAISE = "raise"


def _prog(options):
    main = __import__("__main__")
    tool = options.get("tool")
    return getattr(main, "__prog__", tool.name if tool is not None else "")


class ArgumentException(Exception):
    """
    base class for argument errors.

    the message is the human-readable sentence; everything else travels in
    `options` (read-only): `name` of the offending argument, `code`, `title`,
    `hint`, and the runtime flags used to surface the error.
    """
    __fault__ = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType({"code": type(self).__fault__} | options)

    @property
    def name(self):
        """name of the offending argument (None when not bound to one)."""
        return self.options.get("name")

    @property
    def code(self):
        return self.options["code"]

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        header = Text.assemble(
            "[ ",
            text(_prog(self.options) or "error", styler("prog-name")),
            " — ",
            text(self.code.normalize() if self.code else "", styler("code")),
            " | ",
            text(self.options.get("title", "error").title(), styler("error-title")),
            " ]"
        )
        message = text(coalesce(self.message, ""), styler("error-message"))
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if self.options.get("termination", Termination.EXIT) is Termination.RAISE:
            raise self from None
        self.options.get("console", console).print(self)
        self.options.get("exit", sys.exit)(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingRequiredValueError(ArgumentException):
    """a required argument has no value after a full parse pass."""
    __fault__ = FaultCode.MISSING_REQUIRED_VALUE


class ArgumentWarning(ABC, Warning):
    """base class for non-fatal argument diagnostics (surfaced via warnings.warn)."""
    __fault__ = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType({"code": type(self).__fault__} | options)

    @property
    def name(self):
        return self.options.get("name")

    @property
    def code(self):
        return self.options["code"]

    def __trigger__(self) -> None:
        warnings.warn(self, stacklevel=len(inspect.stack()))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingValueWarning(ArgumentWarning):
    """a value-bearing argument was the last token, so no value followed it."""
    __fault__ = FaultCode.MISSING_VALUE


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into a copy of the fault via copy.replace() before triggering.

    typical options
    - tool, console, exit, termination, fancy, colorful, name, title, hint.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "ArgumentException",
    "MissingRequiredValueError",
    "ArgumentWarning",
    "MissingValueWarning",
    "FaultCode",
    "Termination",
    "trigger",
)
