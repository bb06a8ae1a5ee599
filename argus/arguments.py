r"""
Argus argument declarations.

Overview
- Declarations (a tagged union of three kinds)
  • Required: positional, value-bearing argument matched strictly by position.
  • Optional: flagged, value-bearing argument with a default (e.g., -t4 / --threads 4).
  • Boolean: flagged, valueless switch; False until observed, then True (e.g., -v).

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ via read-only properties.

Metadata (sanitized on construction)
- Shared (all declarations)
  • name: container field name; a Python identifier not starting with "_".
  • descr: Unset | str | Text (short help), non-empty when provided.
- Required/Optional only (value-bearing)
  • converter: Converter or plain str -> T callable (wrapped into a whole-token Converter).
- Flagged (Optional/Boolean)
  • short: Unset | single character (no "-" and no whitespace).
  • long: Unset | str matching r"[^\W\d_](-?[^\W_]+)*" (given without the leading "--").
- Optional only
  • metavar: help label of the value, defaults to the field name.
  • default: any object; becomes the field value when the flag is absent.
  • format / precision: display format of the default in help.

Quick example:
    >>> from argus.arguments import Required, Optional, Boolean
    >>> from argus.converters import parse_uint
    >>> Required("input", "input", "Input file path")
    >>> Optional("threads", "t", "threads", default=1, converter=parse_uint)
    >>> Boolean("verbose", "v", "verbose", "Verbose output")
"""
import builtins
import keyword
import re

from rich.text import Text

from .converters import Converter
from .converters import parse_str
from .utils import *


class ArgumentType(type):
    """
    Metaclass that turns declarations into introspectable, read-only records.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and pretty printing.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - boolean(name='verbose', short='v', long='verbose', descr=None, helper=False)
            """
            fields = ", ".join("%s=%r" % pair for pair in self.__rich_repr__())
            return f"{type(self).__typename__}({fields})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate shared declaration metadata.

    - name: required; must be a Python identifier, not a keyword, and must not
      start with an underscore (it becomes a Namespace field).
    - descr: optional short description. If omitted (Unset), it becomes None.
      If provided, it must be a non-empty string after trimming.

    Raises
    - TypeError: if 'name' or 'descr' has the wrong type.
    - ValueError: if 'name' is not a valid field name or 'descr' is empty.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not name.isidentifier() or keyword.iskeyword(name) or name.startswith("_"):
        raise ValueError(f"{cls.__typename__} 'name' must be a public identifier, got {name!r}")
    metadata["name"] = name

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_flagged_metadata(cls, metadata, /):
    r"""
    Internal: validate and normalize the flag identifiers of Optional/Boolean.

    - short: Unset or a single printable character that is neither "-" nor whitespace.
    - long: Unset or an identifier given without its "--" prefix; segments start with
      a Unicode letter and are separated by single hyphens (e.g., "disable-cache").
      Underscores and leading digits are rejected to keep CLI style conventional.

    Both may be Unset; the declaration is then unreachable from the command line
    (the schema warns about it).
    """
    if not isinstance(short := metadata["short"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str):
        if len(short) != 1:
            raise ValueError(f"{cls.__typename__} 'short' must be a single character, got {short!r}")
        elif short == "-" or short.isspace() or not short.isprintable():
            raise ValueError(f"{cls.__typename__} 'short' cannot be {short!r}")
    metadata["short"] = coalesce(short)

    if not isinstance(long := metadata["long"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'long' must be a string")
    elif isinstance(long, str):
        if long.startswith("-"):
            raise ValueError(f"{cls.__typename__} 'long' must be given without its leading dashes")
        elif not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", long):
            raise ValueError(f"{cls.__typename__} 'long' must be a valid shell-style option name, got {long!r}")
    metadata["long"] = coalesce(long)


def _sanitize_valued_metadata(cls, metadata, /):
    """
    Internal: validate the converter of value-bearing declarations.

    - converter: a Converter is kept as-is; any other callable is wrapped into a
      whole-token Converter (so plain `int` or a user function works).
    """
    if isinstance(converter := metadata["converter"], Converter):
        return
    if not callable(converter):
        raise TypeError(f"{cls.__typename__} 'converter' must be callable")
    metadata["converter"] = Converter(converter)


class Required(metaclass=ArgumentType):
    """
    Positional, value-bearing argument declaration.

    Required arguments are consumed in declaration order from the head of the
    argument vector; the converter always receives the whole token.
    """

    __introspectable__ = (
        "name",
        "label",
        "descr",
        "converter",
    )

    def __init__(self, name, /, label=Unset, descr=Unset, converter=parse_str):
        """
        Parameters
        - name: container field name.
        - label: display name in help ("<label>"); defaults to the field name.
        - descr: short description for help.
        - converter: Converter (or plain callable) turning the token into a value.
        """
        metadata = {
            "name": name,
            "label": label,
            "descr": descr,
            "converter": converter,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_valued_metadata(type(self), metadata)

        if not isinstance(label := metadata["label"], str | Unset):
            raise TypeError(f"{type(self).__typename__} 'label' must be a string")
        elif isinstance(label, str) and not (label := label.strip()):
            raise ValueError(f"{type(self).__typename__} 'label' cannot be empty")
        metadata["label"] = coalesce(label, metadata["name"])

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def zero(self):
        """
        Type-appropriate value of the field before parsing.
        """
        return self.converter.zero


class Optional(metaclass=ArgumentType):
    """
    Flagged, value-bearing argument declaration.

    Reachable as "--long value" or inline in a short-flag run ("-t4", "-vt4").
    When absent from the command line, the field keeps 'default'.
    """

    __introspectable__ = (
        "name",
        "short",
        "long",
        "metavar",
        "default",
        "descr",
        "converter",
        "format",
    )

    def __init__(
            self,
            name,
            /,
            short=Unset,
            long=Unset,
            metavar=Unset,
            default=None,
            descr=Unset,
            converter=parse_str,
            format=Unset,
            precision=Unset,
    ):
        """
        Parameters
        - name: container field name.
        - short / long: flag identifiers (each independently omittable).
        - metavar: label of the value in help; defaults to the field name.
        - default: field value when the flag is absent (not converted).
        - descr: short description for help.
        - converter: Converter (or plain callable) turning text into a value.
        - format: format spec for the default in help; defaults to the converter's.
        - precision: significant digits for floating converters (".{precision}g").
        """
        metadata = {
            "name": name,
            "short": short,
            "long": long,
            "metavar": metavar,
            "default": default,
            "descr": descr,
            "converter": converter,
            "format": format,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_flagged_metadata(type(self), metadata)
        _sanitize_valued_metadata(type(self), metadata)

        if not isinstance(metavar := metadata["metavar"], str | Unset):
            raise TypeError(f"{type(self).__typename__} 'metavar' must be a string")
        elif isinstance(metavar, str) and not (metavar := metavar.strip()):
            raise ValueError(f"{type(self).__typename__} 'metavar' cannot be empty")
        metadata["metavar"] = coalesce(metavar, metadata["name"])

        if precision is not Unset:
            if format is not Unset:
                raise TypeError(f"{type(self).__typename__} cannot have both 'format' and 'precision'")
            if not metadata["converter"].floating:
                raise TypeError(f"{type(self).__typename__} 'precision' requires a floating converter")
            if not isinstance(precision, int) or isinstance(precision, bool):
                raise TypeError(f"{type(self).__typename__} 'precision' must be an integer")
            if precision < 0:
                raise ValueError(f"{type(self).__typename__} 'precision' cannot be negative")
            format = f".{precision}g"

        if not isinstance(format := coalesce(format, metadata["converter"].format), str):
            raise TypeError(f"{type(self).__typename__} 'format' must be a string")
        if default is not None:
            try:
                builtins.format(default, format)
            except (TypeError, ValueError):
                raise ValueError(f"{type(self).__typename__} 'format' {format!r} does not apply to default {default!r}") from None
        metadata["format"] = format

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class Boolean(metaclass=ArgumentType):
    """
    Flagged, presence-only switch declaration.

    The field is False until one of its flags is observed, then True. A helper
    switch (e.g., -h/--help) makes Schema.invoke() print help and exit.
    """

    __introspectable__ = (
        "name",
        "short",
        "long",
        "descr",
        "helper",
    )

    def __init__(self, name, /, short=Unset, long=Unset, descr=Unset, *, helper=False):
        """
        Parameters
        - name: container field name.
        - short / long: flag identifiers (each independently omittable).
        - descr: short description for help.
        - helper: marks a help-requesting switch.
        """
        metadata = {
            "name": name,
            "short": short,
            "long": long,
            "descr": descr,
            "helper": bool(helper),
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_flagged_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


__all__ = (
    # Declarations
    "Required",
    "Optional",
    "Boolean",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
