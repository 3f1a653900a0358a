"""
Flagset argument sets: own the declared arguments, parse argv, answer queries.

What this module provides
- ArgumentSet: one parsing session for one process invocation.
  • Built from an argc/argv pair (the program name is dropped).
  • Populated with Argument descriptors through add_argument(), in order.
  • parse() scans the tokens once, updates the owned descriptors in place, then
    validates required arguments through the termination policy.
  • get()/is_given() answer queries by argument name.
  • show_help() renders a Rich help screen and exits.

Lifecycle
- Constructed → Configured (add_argument / setters, any order) → Parsed (one
  parse() call). parse() is single-use: calling it again rescans the tokens and
  the resulting given flags are not guaranteed.

Matching rules (left to right over the tokens)
- "--NAME": an empty NAME is ignored, "--help" shows help, otherwise the first
  argument whose long form is NAME is matched.
- "-X...": only the character right after the dash counts; a bare "-" is
  ignored, "-h" shows help, otherwise the first argument whose short form is X
  is matched.
- anything else is ignored (bare positionals are not collected).
- unknown names are ignored silently.
- a matched value-bearing argument takes the next token as its value, and that
  token is not scanned again; when there is no next token the value stays absent
  and a MissingValueWarning is emitted.
- a matched option gets its given flag set.

Runtime options (keyword-only)
- fancy: wrap help/errors in a Rich panel.
- colorful: apply the palette (overridable through __main__.__styles__).
- console: diagnostic sink for help and errors (defaults: stdout for help,
  stderr for errors).
- exit: callable ending the process with a status (defaults to sys.exit). It is
  expected not to return; if it does, parse() still stops after help.

Quick start
    import sys
    from flagset import Argument, ArgumentSet

    args = ArgumentSet.from_argv(len(sys.argv), sys.argv)
    args.add_argument(Argument.with_name("name").set_short("n").set_long("name").expects_value().required())
    args.add_argument(Argument.with_name("verbose").set_short("v").set_long("verbose"))
    args.parse()

    print(args.get("name"), args.is_given("verbose"))
"""
import functools
import operator
import os.path
import sys
from collections import defaultdict
from collections.abc import Sequence

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .arguments import Argument
from .faults import *
from .utils import *


class ArgumentSet:
    """
    Ordered collection of Argument descriptors bound to one argv.

    Properties (read-only; containers are returned as copies)
    - tokens: raw tokens without the program name.
    - count: number of tokens, fixed at construction.
    - arguments: registered arguments in registration order.
    - termination, about, author, name, version, fancy, colorful.
    """

    tokens = mirror("tokens")
    count = mirror("count")
    arguments = mirror("arguments")
    termination = mirror("termination")
    about = mirror("about")
    author = mirror("author")
    name = mirror("name")
    version = mirror("version")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, argc, argv, /, *, fancy=False, colorful=True, console=Unset, exit=Unset):
        """
        Bind the set to an argc/argv pair.

        Parameters
        - argc: int
          External argument count (program name included). Zero (or less) yields
          an empty token list and a count of 0.
        - argv: Sequence[str]
          Argument vector; argv[0] is the program name and is not parsed.

        Raises
        - TypeError: argc is not an int, or argv is not a sequence of strings.
        - ValueError: argc is larger than len(argv).
        """
        if not isinstance(argc, int) or isinstance(argc, bool):
            raise TypeError("argument set 'argc' must be an integer")
        if not isinstance(argv, Sequence) or isinstance(argv, str):
            raise TypeError("argument set 'argv' must be a sequence of strings")
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("argument set 'argv' must be a sequence of strings")
        if argc > len(argv):
            raise ValueError(f"argument set 'argc' ({argc}) exceeds the length of 'argv' ({len(argv)})")
        if console is not Unset and not isinstance(console, Console):
            raise TypeError("argument set 'console' must be a rich console")
        if exit is not Unset and not callable(exit):
            raise TypeError("argument set 'exit' must be callable")

        self._count = max(argc - 1, 0)
        self._tokens = list(argv[1:argc]) if argc > 0 else []
        self._arguments = []
        self._termination = Termination.EXIT
        self._about = ""
        self._author = ""
        self._name = os.path.basename(argv[0]) if argc > 0 else ""
        self._version = "0.0.1"
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._console = console
        self._exit = coalesce(exit, sys.exit)

    @classmethod
    def from_argv(cls, argc=Unset, argv=Unset, /, **options):
        """
        Create an argument set from argc/argv (defaults: len(sys.argv) and sys.argv).
        """
        argv = coalesce(argv, sys.argv)
        return cls(coalesce(argc, len(argv)), argv, **options)

    def add_argument(self, argument, /):
        """
        Register an argument. Names are not checked for duplicates; lookups use
        the first registered match.
        """
        if not isinstance(argument, Argument):
            raise TypeError("add_argument() argument must be an Argument")
        self._arguments.append(argument)
        return self

    def _lookup(self, form, key, /):
        for argument in self._arguments:
            if getattr(argument, form) == key:
                return argument
        return None

    def get(self, name, /):
        """
        Return the value of the first argument called `name`, or None when there
        is no such argument or it has no value.
        """
        argument = self._lookup("name", name)
        return argument.get_value() if argument is not None else None

    def is_given(self, name, /):
        """
        Return True only when the first argument called `name` is an option and
        it was given on the command line.
        """
        argument = self._lookup("name", name)
        return argument is not None and argument.is_option() and argument.is_given()

    def _consume(self, index, token, argument, /):
        # Shared by the long and short paths.
        if index >= self._count:
            trigger(
                MissingValueWarning(f"no value follows {token!r} for argument {argument.name!r}"),
                name=argument.name,
            )
            return Unset
        return self._tokens[index]

    def parse(self):
        """
        Scan the tokens, update the registered arguments, then validate.

        Help tokens ("-h", "--help") show help and end parsing before any
        validation. Every required argument left without a value goes through
        terminate().
        """
        index = 0
        while index < self._count:
            token = self._tokens[index]
            index += 1

            if token.startswith("--"):
                if not (key := token[2:]):
                    continue
                if key == "help":
                    self.show_help()
                    return self
                argument = self._lookup("long", key)
            elif token.startswith("-"):
                if len(token) < 2:
                    continue
                if (key := token[1]) == "h":
                    self.show_help()
                    return self
                argument = self._lookup("short", key)
            else:
                continue

            if argument is None:
                continue

            if argument.is_expecting_value():
                value = self._consume(index, token, argument)
                if value is not Unset:
                    argument.set_value(value)
                    index += 1

            if argument.is_option():
                argument.set_given(True)

        for argument in self._arguments:
            if argument.is_required() and argument.get_value() is None:
                self.terminate(argument)

        return self

    def set_termination(self, termination, /):
        if not isinstance(termination, Termination):
            raise TypeError("set_termination() argument must be a Termination")
        self._termination = termination
        return self

    def set_about(self, about, /):
        if not isinstance(about, str):
            raise TypeError("set_about() argument must be a string")
        self._about = about
        return self

    def set_author(self, author, /):
        if not isinstance(author, str):
            raise TypeError("set_author() argument must be a string")
        self._author = author
        return self

    def set_name(self, name, /):
        if not isinstance(name, str):
            raise TypeError("set_name() argument must be a string")
        self._name = name
        return self

    def set_version(self, version, /):
        if not isinstance(version, str):
            raise TypeError("set_version() argument must be a string")
        self._version = version
        return self

    def _forms(self, argument, /):
        forms = []
        if argument.short:
            forms.append("-" + argument.short)
        if argument.long:
            forms.append("--" + argument.long)
        return forms

    def show_help(self):
        """
        Render help to the console and exit with status 0.

        Palette keys
        - usage-label, program-name, usage-section, about-section
        - group-label, short-name, long-name, metavar, required-marker
        - footer-section, panel-title

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        - When colorful is False, styling is suppressed.
        """
        console = coalesce(self._console, Console())
        styles = defaultdict(str, {
            # === Head sections ===
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
            "about-section": "italic #A3A3A3",  # Neutral gray

            # === Arguments ===
            "group-label": "bold #FFFFFF",
            "short-name": "bold #22C55E",
            "long-name": "bold #00E6FF",
            "metavar": "bold #FFD600",
            "required-marker": "#EF4444",

            # === Footer / panel ===
            "footer-section": "#737373",
            "panel-title": "bold #FF4D94",
        } | getattr(__import__('__main__'), "__styles__", {}))

        def styler(style):
            return styles[style] if self._colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self._colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        def names(argument):
            styled = [
                text(form, styler("short-name" if not form.startswith("--") else "long-name"))
                for form in self._forms(argument)
            ]
            return Text(", ").join(styled)

        renders = []

        # Usage: required value-bearing arguments are spelled out, the rest is [OPTIONS]
        usage = Text()
        usage.append(text("usage:", styler("usage-label"))).append(" ")
        usage.append(text(self._name or "PROG", styler("program-name")))
        usage.append(text(" [OPTIONS]", styler("usage-section")))
        for argument in self._arguments:
            if argument.is_required() and (forms := self._forms(argument)):
                usage.append(" ")
                usage.append(text(forms[-1], styler("usage-section")))
                if argument.is_expecting_value():
                    usage.append(" ").append(text("VALUE", styler("metavar")))
        renders.append(usage)

        if self._about:
            renders.append(Text("\n").append(text(self._about, styler("about-section"))))

        table = Table.grid(padding=(0, 2))
        table.add_column(no_wrap=True)
        table.add_column(no_wrap=True)
        table.add_column()
        for argument in self._arguments:
            table.add_row(
                names(argument) if self._forms(argument) else text(argument.name, styler("long-name")),
                text("VALUE", styler("metavar")) if argument.is_expecting_value() else Text(""),
                text("(required)", styler("required-marker")) if argument.is_required() else Text(""),
            )
        table.add_row(
            Text(", ").join((text("-h", styler("short-name")), text("--help", styler("long-name")))),
            Text(""),
            Text("show this message and exit"),
        )
        renders.append(Text("\n").append(text("options:", styler("group-label"))))
        renders.append(table)

        footer = Text(" — ").join(
            text(part, styler("footer-section")) for part in (self._author, self._version) if part
        )
        if footer:
            renders.append(Text("\n").append(footer))

        renderable = Group(*renders)

        if self._fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{self._name or 'PROG'} HELP".upper(), " ", "]", style=styler("panel-title")),
                title_align="left",
            )

        console.print(renderable)
        self._exit(0)

    def terminate(self, argument, /):
        """
        Report a required argument without a value through the termination policy.

        - Termination.EXIT: print the error on the diagnostic console and call the
          exit hook with status 1.
        - Termination.RAISE: raise MissingRequiredValueError carrying the argument name.
        """
        if not isinstance(argument, Argument):
            raise TypeError("terminate() argument must be an Argument")
        forms = self._forms(argument)
        options = {
            "name": argument.name,
            "title": "missing required value",
            "hint": (
                f"pass it as {'/'.join(forms)}{' VALUE' if argument.is_expecting_value() else ''}"
                if forms else "register a short or long form for it"
            ),
            "tool": self,
            "exit": self._exit,
            "termination": self._termination,
            "fancy": self._fancy,
            "colorful": self._colorful,
        }
        if self._console is not Unset:
            options["console"] = self._console
        trigger(MissingRequiredValueError(f"missing required value for argument {argument.name!r}"), **options)

    def __repr__(self):
        return f"argument-set({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __rich_repr__(self):
        yield "name", self._name
        yield "version", self._version
        yield "tokens", self._tokens
        yield "arguments", self._arguments
        yield "termination", self._termination


__all__ = (
    "ArgumentSet",
)
