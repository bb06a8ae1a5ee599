r"""
Argus value converters.

Contract
- A converter is called with the text still to be consumed for one value and
  returns a pair (value, rest):
  • rest is None (or "") when the whole text was consumed;
  • otherwise rest is the unconsumed suffix. Only short-flag runs use it, so that
    "-t4v" can hand "4" to -t and keep "v" for the next switch.
- On failure a converter raises ConversionFailedError with its own message
  ("failed to parse '12x' as int"); the parser never re-describes it.

Built-ins
- parse_str: opaque string, consumes the whole text.
- parse_char: exactly one character, the rest is handed back.
- parse_int / parse_uint (32-bit), parse_long / parse_ulong, parse_longlong /
  parse_ulonglong, parse_size (64-bit): strtol-style prefix parsing in base 10.
- parse_float (32-bit) / parse_double (64-bit): strtod-style prefix parsing,
  including hexadecimal literals ("0x1.8p3").

Numeric parsing is locale-independent and accepts optional leading whitespace
and an optional sign. No digits → malformed; magnitude outside the target width
→ out of range; unsigned targets reject negative results.

Custom converters
    >>> @converter("positive int", zero=0, format="d")
    ... def positive(text):
    ...     if (value := int(text)) < 0:
    ...         raise ValueError("not positive")
    ...     return value
    ...
    >>> @converter("hex byte", partial=True)
    ... def byte(text):
    ...     return int(text[:2], 16), text[2:]
"""
import functools
import math
import re
import struct

from .faults import ArgumentsException, ConversionFailedError, FaultCode
from .utils import Unset, coalesce, mirror, rename

_INTEGER = re.compile(r"\s*(?P<number>[+-]?\d+)", re.ASCII)
_FLOATING = re.compile(
    r"\s*(?P<number>[+-]?(?:inf(?:inity)?|nan"
    r"|0x(?P<hex>(?:[0-9a-f]+(?:\.[0-9a-f]*)?|\.[0-9a-f]+)(?:p[+-]?\d+)?)"
    r"|(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?))",
    re.ASCII | re.IGNORECASE,
)


class Converter:
    """
    Callable converter with the metadata the schema and the help renderer need.

    Parameters
    - function: the conversion callable.
      • partial=False: str -> value; the whole text is consumed.
      • partial=True: str -> (value, rest), see the module contract.
    - name: type label used in messages ("unsigned int"); defaults to the
      function's __name__.
    - zero: type-appropriate zero used for Required fields before parsing.
    - format: format spec used to render Optional defaults in help; the empty
      spec renders any default the way str() does.
    - floating: marks floating-point converters (enables 'precision' on Optional).

    Exceptions raised by the function other than argus faults are wrapped into
    ConversionFailedError; the original exception is kept as __cause__.
    """

    __introspectable__ = (
        "name",
        "zero",
        "format",
        "partial",
        "floating",
    )

    def __init__(self, function, /, name=Unset, zero=None, format="", *, partial=False, floating=False):
        if not callable(function):
            raise TypeError("converter 'function' must be callable")
        if not isinstance(name := coalesce(name, getattr(function, "__name__", "value")), str):
            raise TypeError("converter 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError("converter 'name' cannot be empty")
        if not isinstance(format, str):
            raise TypeError("converter 'format' must be a string")

        self._function = function
        self._name = name
        self._zero = zero
        self._format = format
        self._partial = bool(partial)
        self._floating = bool(floating)

    name = mirror("name")
    zero = mirror("zero")
    format = mirror("format")
    partial = mirror("partial")
    floating = mirror("floating")

    def __call__(self, text, /):
        if not isinstance(text, str):
            raise TypeError("converter argument must be a string")
        try:
            if not self.partial:
                return self._function(text), None
            result = self._function(text)
        except ArgumentsException:
            raise
        except Exception as exception:
            raise ConversionFailedError(
                "failed to parse %r as %s" % (text, self.name),
                title="conversion error",
                code=FaultCode.CONVERSION_FAILED,
                input=text,
                hint="use a valid %s" % self.name,
            ) from exception

        if not isinstance(result, tuple) or len(result) != 2:
            raise TypeError(f"partial converter {self.name!r} must return a (value, rest) pair")
        value, rest = result
        if not isinstance(rest, str | None):
            raise TypeError(f"partial converter {self.name!r} rest must be a string or None")
        return value, rest or None

    def __repr__(self):
        return f"converter({self.name!r})"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


def converter(name=Unset, /, *, zero=None, format="", partial=False, floating=False):
    """
    Decorator/factory for custom converters.

    Usage
        @converter("positive int", zero=0, format="d")
        def positive(text): ...

        @converter(partial=True)
        def byte(text):
            return int(text[:2], 16), text[2:]

    Returns
    - Converter: the decorated function wrapped with its metadata.
    """
    if callable(name):
        # Bare @converter form.
        return Converter(name)

    @rename("converter")
    def wrapper(function, /):
        if not callable(function):
            raise TypeError("@converter() must be applied to a callable")
        return Converter(function, name, zero, format, partial=partial, floating=floating)

    return wrapper


def _failure(text, typename, reason):
    return ConversionFailedError(
        "failed to parse %r as %s (%s)" % (text, typename, reason),
        title="conversion error",
        code=FaultCode.CONVERSION_FAILED,
        input=text,
        hint="use a valid %s" % typename,
    )


@functools.cache
def _integer(typename, bits, signed, /):
    """
    Build a strtol-style converter for a fixed-width integer type.
    """
    if signed:
        lower, upper = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        lower, upper = 0, (1 << bits) - 1

    @rename("parse_" + typename.replace(" ", "_"))
    def parse(text):
        if not (match := _INTEGER.match(text)):
            raise _failure(text, typename, "no digits")
        value = int(match["number"])
        if not signed and value < 0:
            raise _failure(text, typename, "negative value")
        if not lower <= value <= upper:
            raise _failure(text, typename, "out of range")
        return value, text[match.end():]

    return Converter(parse, typename, 0, "d", partial=True)


@functools.cache
def _floating(typename, bits, /):
    """
    Build a strtod-style converter for a 32 or 64-bit floating-point type.
    """
    pack = "<f" if bits == 32 else "<d"

    @rename("parse_" + typename.replace(" ", "_"))
    def parse(text):
        if not (match := _FLOATING.match(text)):
            raise _failure(text, typename, "no digits")
        number = match["number"]
        try:
            value = float.fromhex(number) if match["hex"] else float(number)
            value, = struct.unpack(pack, struct.pack(pack, value))
        except OverflowError:
            raise _failure(text, typename, "out of range") from None

        # inf/nan spelled out are legal; finite text must land on a finite, non-vanishing value.
        if match["hex"]:
            mantissa, nonzero = re.split(r"[pP]", match["hex"])[0], r"[1-9a-fA-F]"
        else:
            mantissa, nonzero = re.split(r"[eE]", number)[0], r"[1-9]"
        if not re.search(r"inf|nan", number, re.IGNORECASE):
            if math.isinf(value) or (value == 0.0 and re.search(nonzero, mantissa)):
                raise _failure(text, typename, "out of range")
        return value, text[match.end():]

    return Converter(parse, typename, 0.0, "g", partial=True, floating=True)


@rename("parse_str")
def _parse_str(text):
    return text, None


@rename("parse_char")
def _parse_char(text):
    if not text:
        raise _failure(text, "char", "empty")
    return text[0], text[1:]


parse_str = Converter(_parse_str, "string", None, "s", partial=True)
parse_char = Converter(_parse_char, "char", "\0", "s", partial=True)
parse_int = _integer("int", 32, True)
parse_uint = _integer("unsigned int", 32, False)
parse_long = _integer("long", 64, True)
parse_ulong = _integer("unsigned long", 64, False)
parse_longlong = _integer("long long", 64, True)
parse_ulonglong = _integer("unsigned long long", 64, False)
parse_size = _integer("size", 64, False)
parse_float = _floating("float", 32)
parse_double = _floating("double", 64)


__all__ = (
    "Converter",
    "converter",
    "parse_str",
    "parse_char",
    "parse_int",
    "parse_uint",
    "parse_long",
    "parse_ulong",
    "parse_longlong",
    "parse_ulonglong",
    "parse_size",
    "parse_float",
    "parse_double",
)
