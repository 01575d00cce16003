"""
Argot argument resolution: declared expectations → runtime values and help.

What this module provides
- Arguments: owns an ordered registry of Expectation objects and an immutable raw
  flag mapping, and answers:
  • get(name): the converted value of a declared argument (any alias works).
  • get_raw(*names): the first raw value present under the given names.
  • should_help(): whether "--help" was passed.
  • get_help_message(): deterministic, plain help text built from the declarations.
  and originates the two user-facing signals (see argot.faults).

Resolution rules
- get(name) finds the first expectation (declaration order) that has `name` as an
  alias. Asking for an undeclared name raises LookupError; that is a bug in the
  calling code, not a user error.
- The raw value is looked up under every alias of that expectation, in alias order.
- When no alias is present, the declared default is used; without a default the
  value is None.
- The convertor always runs, over the raw value, the default, or None.

Help layout
    <description>
    version: <version>

      --port, --p
            Port to listen on.
            default: 8080

Quick start
    from argot import Arguments, Expectation, handle

    arguments = Arguments(
        Expectation("port, p", default=8080, description="Port to listen on.", convertor=int),
        {"name": "host", "default": "localhost"},
    )
    arguments.set_description("Tiny development server.")
    arguments.set_version("v1.2.3")

    with handle():
        if arguments.should_help():
            arguments.trigger_help_exception()
        serve(arguments.get("host"), arguments.get("port"))
"""
import atexit
import re
import sys
from collections import defaultdict
from collections.abc import Mapping
from types import MappingProxyType

from rich.console import Console
from rich.highlighter import ReprHighlighter
from rich.panel import Panel
from rich.pretty import pretty_repr
from rich.text import Text

from .expectations import expect
from .faults import HelpException, ValueException, isfault
from .flags import parse, tokenize
from .utils import *

INDENT = " " * 8


def _resolve_source(source, /):
    """
    Internal: materialize the raw flag mapping once.

    - Mapping: an already-parsed raw flag mapping (copied).
    - Unset / str / Iterable[str]: tokens, parsed by argot.flags.parse.
    """
    if isinstance(source, Mapping):
        return MappingProxyType(dict(source))
    return MappingProxyType(parse(tokenize(source)))


class Arguments:
    """
    Registry of expected arguments bound to one raw flag mapping.

    Parameters
    - *expectations: Expectation | Mapping
      Declarations, in display order. Mappings are normalized by argot.expect().
    - source: Unset | str | Iterable[str] | Mapping
      Where raw values come from. Unset reads sys.argv[1:] once, now.
    - colorful: bool
      Style the rendered help and faults (plain text from get_help_message()
      is never styled).
    - fancy: bool
      Wrap rendered help in a panel.
    """

    def __init__(self, *expectations, source=Unset, colorful=True, fancy=False):
        self._expectations = tuple(map(expect, expectations))
        self._raw = _resolve_source(source)
        self._description = None
        self._version = None
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._farewell = Unset

    expectations = view("expectations")
    raw = view("raw")
    description = view("description")
    version = view("version")

    def get_raw(self, *names):
        """
        Return the first raw value present under `names` (in the given order),
        or None when none of them is present.
        """
        for name in names:
            if (value := self._raw.get(name)) is not None:
                return value
        return None

    def get(self, name, /):
        """
        Return the converted value of the declared argument known as `name`.

        Precedence: raw value (by alias order) > declared default > None.
        The expectation's convertor is applied to whichever was selected.

        Raises
        - LookupError: when no expectation declares `name`.
        - anything the convertor raises, unchanged.
        """
        for expectation in self._expectations:
            if name in expectation:
                break
        else:
            raise LookupError(f"argument {name!r} is not declared")

        value = self.get_raw(*expectation.names)
        if value is None:
            value = coalesce(expectation.default)
        return expectation.convertor(value)

    def should_help(self):
        return bool(self.get_raw("help"))

    def set_description(self, description, /):
        if not isinstance(description, str):
            raise TypeError("set_description() argument must be a string")
        self._description = description

    def set_version(self, version, /):
        """
        Store the version, dropping the "v" in front of dotted-numeric runs
        ("v1.2.3" → "1.2.3"); everything else is kept verbatim.
        """
        if not isinstance(version, str):
            raise TypeError("set_version() argument must be a string")
        self._version = re.sub(r"v([0-9]+(?:\.[0-9]+)*)", r"\1", version)

    def keep_process_alive(self, message="Press Enter to exit...", /):
        """
        Wait for Enter before the interpreter exits (interactive sessions only).

        Useful when the program runs in a window that closes on exit. Only the
        last message given is used.
        """
        if not isinstance(message, str):
            raise TypeError("keep_process_alive() argument must be a string")
        if self._farewell is Unset:
            atexit.register(self._linger)
        self._farewell = message

    def _linger(self):
        if sys.stdin is not None and sys.stdin.isatty():
            Console().input(self._farewell)

    def _render(self, colorful):
        """
        Internal: build the help as rich Text; `colorful` toggles styling only,
        the plain content is identical either way.
        """
        styles = defaultdict(str, {
            "description-section": "",
            "version-section": "italic #737373",
            "argument-name": "bold",
            "argument-description": "#9CA3AF",
            "default-label": "#9CA3AF",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style=""):
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        highlighter = ReprHighlighter()
        blocks = []

        for expectation in self._expectations:
            names = Text(", ").join(Text.assemble("--", text(name, "argument-name")) for name in expectation.names)
            lines = [Text.assemble("  ", names)]

            if expectation.description:
                for line in expectation.description.split("\n"):
                    lines.append(Text.assemble(INDENT, text(line, "argument-description")))

            if expectation.has_default():
                default = pretty_repr(expectation.default)
                lines.append(Text.assemble(
                    INDENT,
                    text("default:", "default-label"),
                    " ",
                    highlighter(default) if colorful else Text(default),
                ))

            # every block is wrapped in newlines, so neighbours end up two blank lines apart
            blocks.append(Text.assemble("\n", Text("\n").join(lines), "\n"))

        head = []
        if self._description:
            head.append(text(self._description, "description-section"))
        if self._version:
            head.append(text(f"version: {self._version}", "version-section"))

        body = Text("\n").join(blocks)

        sections = (Text("\n").join(head), body)
        return Text("\n").join(section for section in sections if section.plain)

    def get_help_message(self):
        """
        Return the help text as a plain string.

        Deterministic: a pure function of the declarations, the description and
        the version.
        """
        return self._render(False).plain

    def __rich__(self):
        renderable = self._render(self._colorful)
        if self._fancy:
            renderable.rstrip()
            return Panel(renderable, title=Text("[ HELP ]"), title_align="left")
        return renderable

    def trigger_help_exception(self):
        """
        Raise HelpException with the full help text (and its styled rendering).
        """
        raise HelpException(
            self.get_help_message(),
            renderable=self.__rich__(),
            colorful=self._colorful,
            fancy=self._fancy,
        )

    @staticmethod
    def create_value_exception(message, /):
        """
        Build (not raise) a ValueException for a rejected argument value.
        """
        return ValueException(message)

    @staticmethod
    def is_argument_exception(error, /):
        """
        Tell whether `error` is one of argot's user-facing faults.
        """
        return isfault(error)

    def __repr__(self):
        return "arguments(expectations=%r)" % (self._expectations,)


__all__ = (
    "Arguments",
)
