"""
Argus faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings), grouped by domain.
- ArgumentsException / ArgumentsWarning: base types that carry message + options and
  know how to render themselves as a single "Error: <message>" line.
- trigger(): central entry point to surface any fault (raise or print, see below).

UX goals
- Position-first messages: parser messages name the ordinal position of the
  offending token (“at third position”); converters describe the bad value.
- Lowercased, one-line messages; an optional hint line when the schema enables hints.

Integration
- The parser raises faults; Schema.parse() catches them and calls
  trigger(fault, shell=True, ...) which prints them to standard error.
- Outside shell mode, exceptions are raised and warnings go through warnings.warn.
"""
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - internal (101xx)
      • INVALID_INVOCATION
    - positionals (111xx)
      • INSUFFICIENT_ARGUMENTS, UNRECOGNIZED_ARGUMENT
    - switches (112xx)
      • UNRECOGNIZED_FLAG, MISSING_VALUE, TRAILING_TEXT
    - conversion (113xx)
      • CONVERSION_FAILED
    - warnings (12xxx)
      • UNREACHABLE_ARGUMENT
    """
    # --- internal errors (10xxx) ---
    INVALID_INVOCATION          = 10101

    # --- positional errors (11xxx) ---
    INSUFFICIENT_ARGUMENTS      = 11101
    UNRECOGNIZED_ARGUMENT       = 11102

    # --- switch errors (11xxx) ---
    UNRECOGNIZED_FLAG           = 11201
    MISSING_VALUE               = 11202
    TRAILING_TEXT               = 11203

    # --- conversion errors (11xxx) ---
    CONVERSION_FAILED           = 11301

    # --- warnings (12xxx) ---
    UNREACHABLE_ARGUMENT        = 12101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _styles():
    return defaultdict(str, {
        "error-label": "bold #FF4DA6",  # friendly pinky label
        "internal-label": "bold #FF5F5F",  # red for embedder misuse
        "error-message": "#C8C8D0",  # soft light gray message
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",  # gentle green hint text
        "code": "bold #00E5FF",  # neon cyan fault code
        "warning-label": "bold #FFB400",  # amber for warnings
    } | getattr(__import__("__main__"), "__styles__", {}))


class ArgumentsException(Exception):
    """
    base type for every parse-time fault.

    carries the one-line message plus a read-only mapping of options
    (code, title, hint, index, input, and the runtime flags shell/colorful/hints).
    """
    __label__ = "Error"
    __style__ = "error-label"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        styles = _styles()
        colorful = self.options.get("colorful", False)

        def styler(style):
            return styles[style] if colorful else ""

        line = Text.assemble(
            (self.__label__, styler(self.__style__)),
            ": ",
            (self.message, styler("error-message")),
        )

        if not self.options.get("hints", False) or not self.options.get("hint"):
            return line

        hint = Text.assemble(
            (" → ", styler("hint-arrow")),
            (self.options["hint"], styler("hint")),
        )
        if self.code is not None:
            hint.append(" [").append(self.code.normalize(), styler("code")).append("]")
        return Group(line, hint)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from self.__cause__
        console.print(self, soft_wrap=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        replaced = type(self)(self.message, **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        return replaced


class UsageError(ArgumentsException): ...
class InsufficientArgumentsError(UsageError): ...
class MissingValueError(UsageError): ...
class ConversionFailedError(UsageError): ...
class TrailingTextError(UsageError): ...
class UnrecognizedFlagError(UsageError): ...
class UnrecognizedArgumentError(UsageError): ...


class InternalError(ArgumentsException):
    __label__ = "Internal error"
    __style__ = "internal-label"


class InvalidInvocationError(InternalError): ...


class ArgumentsWarning(Warning):
    """
    base type for non-fatal faults (declaration smells, mostly).
    """
    __label__ = "Warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __rich__(self):
        styles = _styles()
        colorful = self.options.get("colorful", False)
        return Text.assemble(
            (self.__label__, styles["warning-label"] if colorful else ""),
            ": ",
            (self.message, styles["error-message"] if colorful else ""),
        )

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))
        console.print(self, soft_wrap=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnreachableArgumentWarning(ArgumentsWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console on standard error;
      otherwise, exceptions are raised and warnings are emitted.

    typical options
    - shell, colorful, hints, title, code, hint, input, index.
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
    "ArgumentsException",
    "UsageError",
    "InsufficientArgumentsError",
    "MissingValueError",
    "ConversionFailedError",
    "TrailingTextError",
    "UnrecognizedFlagError",
    "UnrecognizedArgumentError",
    "InternalError",
    "InvalidInvocationError",
    "ArgumentsWarning",
    "UnreachableArgumentWarning",
    "FaultCode",
    "trigger",
)
