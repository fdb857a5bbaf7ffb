"""
Flagrelay faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure kind the core
  can report. The excluded dispatcher maps them to process exit codes.
- FlagException / FlagWarning: base types that carry message + options and
  know how to render themselves through the rich protocol.
- Concrete kinds: EmptyPayloadError, InvalidUsageError, InvalidValueError,
  NotFoundError, InternalError, DuplicateNameWarning.

Propagation
- Every core operation raises; there is no local recovery. The first fault
  raised anywhere in a parse aborts the whole operation.
- Printing, colors and exit codes are the caller's business: pass a fault to a
  rich Console (console.print(fault)) to get the styled rendering.

Host customization (read from __main__, as with any rich-aware tool)
- __codes__: mapping FaultCode → label, to override the printed code label.
- __styles__: mapping style-name → rich style, to restyle the rendering.
"""
import re
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - ERROR (1): generic failure, e.g. an empty parsed payload.
    - INVALID_USAGE (2): malformed declaration, missing required flag,
      unrecognized flag, malformed decoded payload.
    - INVALID_VALUE (4): a supplied value fails type/pattern/whitelist checks,
      or a value-bearing flag is missing its value.
    - NOT_FOUND (40): a queried name is absent from a parse result.
    - INTERNAL_ERROR (99): token decoding failed at the byte level.
    """
    ERROR          = 1
    INVALID_USAGE  = 2
    INVALID_VALUE  = 4
    NOT_FOUND      = 40
    INTERNAL_ERROR = 99

    def normalize(self):
        """
        return a host-normalized label for this code.

        the host application can provide a __codes__ mapping in __main__
        to override labels. when no mapping is present, the member name is used.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.name))


def _render(fault, defaults, /):
    main = __import__("__main__")
    styles = defaultdict(str, defaults | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style])

    header = Text.assemble(
        "[ ",
        text(getattr(main, "__prog__", "flagrelay"), "prog-name"),
        " — ",
        text(fault.code.normalize(), "code"),
        " | ",
        text(fault.title, "title"),
        " ]"
    )
    message = text(fault.message, "message")
    parts = [message]
    if hint := fault.options.get("hint"):
        parts.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fault.options.get("fancy", False):
        return Panel(Group(*parts), title=header, title_align="left")
    return Group(header, *parts)


class FlagException(Exception):
    """
    base type for every fault raised by the core.

    contract
    - message: short, lowercased, one-sentence description.
    - options: read-only context (flag, token, value, hint, colorful, fancy, ...).
    - code: class-level FaultCode classifying the failure kind.
    """
    code = FaultCode.ERROR

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def title(self):
        return self.code.name.replace("_", " ").title()

    def __str__(self):
        return "%s: %s" % (self.code.normalize(), self.message)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyPayloadError(FlagException):
    code = FaultCode.ERROR


class InvalidUsageError(FlagException):
    code = FaultCode.INVALID_USAGE


class InvalidValueError(FlagException):
    code = FaultCode.INVALID_VALUE


class NotFoundError(FlagException):
    code = FaultCode.NOT_FOUND


class InternalError(FlagException):
    code = FaultCode.INTERNAL_ERROR


class FlagWarning(Warning):
    """
    base type for non-fatal diagnostics, emitted through warnings.warn.
    """
    code = FaultCode.ERROR

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def title(self):
        return re.sub(r"(?<!^)(?=[A-Z])", " ", type(self).__name__).lower()

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateNameWarning(FlagWarning):
    code = FaultCode.INVALID_USAGE


__all__ = (
    "FaultCode",
    "FlagException",
    "EmptyPayloadError",
    "InvalidUsageError",
    "InvalidValueError",
    "NotFoundError",
    "InternalError",
    "FlagWarning",
    "DuplicateNameWarning",
)
