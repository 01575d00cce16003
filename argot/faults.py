"""
Argot faults (user-facing signals) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for the user-facing signals.
- ArgumentException: base of the family; carries a message + options and knows how
  to render (__rich__) and surface (__trigger__) itself.
  • HelpException: help was requested; payload is the rendered help text.
    Surfacing prints it to stdout and exits with status 0.
  • ValueException: an argument value was rejected; payload is the message.
    Surfacing prints it to stderr and exits with status 1.
- isfault(): “is this one of ours” predicate used by callers to decide between a
  friendly message and a full traceback.
- trigger(): central entry point to surface a fault with runtime options.
- handle(): context manager for program entry points.

Integration
- Argot never raises these on its own initiative: HelpException comes from
  Arguments.trigger_help_exception(), ValueException from convertors or caller
  validation via Arguments.create_value_exception().
- Anything that is not a fault (a LookupError for an undeclared argument, a
  TypeError from a convertor) propagates untouched.

Host customization (read from __main__ at render time)
- __prog__: program name shown in headers (defaults to the basename of sys.argv[0]).
- __codes__: mapping FaultCode → label, to replace numeric codes.
- __styles__: mapping style-key → rich style, merged over the defaults.
"""
import os.path
import sys
from collections import defaultdict
from contextlib import contextmanager
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import *

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    - signals (21xxx)
      • HELP_REQUESTED: the user asked for help; not an error.
      • INVALID_VALUE: a value was rejected by a convertor or caller validation.
    """
    HELP_REQUESTED = 21101
    INVALID_VALUE  = 21111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog():
    return getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) or "argot")


class ArgumentException(Exception):
    """
    Base of argot's user-facing signals.

    Subclasses define `code` (a FaultCode), `title` and `status` (exit status
    used when the fault is triggered).
    """
    code = None
    title = "argument fault"
    status = 1

    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | Unset):
            raise TypeError(f"{type(self).__name__}() argument must be a string")
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __styles__(self):
        """
        default palette merged with the host's __styles__.
        """
        return defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "error-message": "#C8C8D0",  # soft light gray message
        } | getattr(__import__("__main__"), "__styles__", {}))

    def __rich__(self):
        styles = self.__styles__()
        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        header = Text.assemble(
            "[ ",
            text(_prog(), "prog-name"),
            " — ",
            *((text(self.code.normalize(), "code"), " | ") if self.code is not None else ()),
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")

        if self.options.get("fancy", False):
            return Panel(message, title=header, title_align="left")

        return Group(header, message)

    def __trigger__(self):
        (console if self.status else Console()).print(self)
        if self.options.get("exit", True):
            sys.exit(self.status)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class HelpException(ArgumentException):
    """
    Help was requested. The message is the full, plain help text.

    Options
    - renderable: styled version of the help to print instead of the plain text.
    """
    code = FaultCode.HELP_REQUESTED
    title = "help"
    status = 0

    def __rich__(self):
        renderable = self.options.get("renderable", Unset)
        if renderable is Unset:
            return Text(self.message)
        return renderable


class ValueException(ArgumentException):
    """
    An argument value was rejected. The message explains why.
    """
    code = FaultCode.INVALID_VALUE
    title = "invalid value"
    status = 1


def isfault(object, /):
    """
    tell whether an object belongs to argot's fault family.

    LookupError from an undeclared argument, convertor errors and any other
    exception are not faults.
    """
    return isinstance(object, ArgumentException)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentException).
    - options are merged into the fault via __replace__(**options) before triggering.

    typical options
    - colorful, fancy, exit, renderable.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


@contextmanager
def handle(**options):
    """
    surface faults raised inside the block; let every other exception through.

    Example
        with handle():
            if arguments.should_help():
                arguments.trigger_help_exception()
            port = arguments.get("port")
    """
    try:
        yield
    except ArgumentException as fault:
        trigger(fault, **options)


__all__ = (
    "ArgumentException",
    "HelpException",
    "ValueException",
    "FaultCode",
    "isfault",
    "trigger",
    "handle",
)
