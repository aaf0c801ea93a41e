"""
Commandeer faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing failure
  of the argument pipeline. The code is the error's kind discriminator.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- One subclass per kind (NoCommandError, UnknownCommandError, UnknownOptionError,
  ValidationFailedError) so callers may catch either the family or one kind.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).

UX goals
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The pipeline raises faults directly; runners (invoke) call trigger(fault, **ctx).
- In non-shell mode, exceptions are raised; in shell mode, they are rendered via rich
  and the process exits with status 1.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the pipeline (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • NO_COMMAND, UNKNOWN_COMMAND
    - switches (1111x)
      • UNKNOWN_OPTION
    - validation (1113x)
      • VALIDATION_FAILED

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- routing errors (11xxx) ---
    NO_COMMAND                  = 11100
    UNKNOWN_COMMAND             = 11101

    # --- switch errors (11xxx) ---
    UNKNOWN_OPTION              = 11112

    # --- validation errors (11xxx) ---
    VALIDATION_FAILED           = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base fault of the argument pipeline.

    every instance carries its kind in options["code"] (see the code property);
    the remaining options are context for renderers and callers:
    - title: short headline, hint: one actionable sentence, input: offending token,
      issues: validation issues, prog: program name, and the runtime switches
      shell/fancy/colorful used by trigger().
    """

    __code__ = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType({"code": self.__code__} | options)

    @property
    def code(self):
        return self.options["code"]

    def __rich__(self):
        main = __import__("__main__")

        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
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

        prog = text(self.options.get("prog") or getattr(main, "__prog__", "cli"), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"
        title = self.options.get("title") or type(self).__name__

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class NoCommandError(CommandException):
    __code__ = FaultCode.NO_COMMAND


class UnknownCommandError(CommandException):
    __code__ = FaultCode.UNKNOWN_COMMAND


class UnknownOptionError(CommandException):
    __code__ = FaultCode.UNKNOWN_OPTION


class ValidationFailedError(CommandException):
    __code__ = FaultCode.VALIDATION_FAILED

    @property
    def issues(self):
        return self.options.get("issues", ())


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console and the process exits;
      otherwise, the exception is raised.

    typical options
    - shell, fancy, colorful, prog, and any other context the reporter may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "CommandException",
    "NoCommandError",
    "UnknownCommandError",
    "UnknownOptionError",
    "ValidationFailedError",
    "FaultCode",
    "trigger",
)
