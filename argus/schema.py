"""
Argus argument schema.

A Schema is the single declaration of a program's command line: an ordered
list of Required arguments, plus Optional and Boolean flags. Lookup tables are
derived once at construction and the schema is read-only afterwards.

Entry points
- defaults(): a fresh Namespace with every field at its initial value.
- parse(argv, namespace): run the parser, report any fault on standard error
  and return whether parsing succeeded.
- help(): print the help screen on standard output.
- invoke(argv): the usual main() prologue; parse, print help and exit on
  failure or when a helper switch is set, otherwise return the namespace.

Example
    >>> schema = Schema(
    ...     (Required("input", "input", "Input file path"),),
    ...     (Optional("threads", "t", "threads", default=1, converter=parse_uint),),
    ...     (Boolean("verbose", "v", "verbose", "Verbose output"),),
    ... )
    >>> namespace = schema.defaults()
    >>> schema.parse(["prog", "in.txt", "-vt4"], namespace)
    True
"""
import copy
import sys

from .arguments import Required, Optional, Boolean
from .faults import *
from .helper import print_help
from .namespace import Namespace
from .parser import Parser
from .utils import *


def _sanitize_declarations(kind, declarations, label, /):
    if not isinstance(declarations, list | tuple):
        raise TypeError(f"schema {label!r} must be a list or tuple")
    for declaration in declarations:
        if not isinstance(declaration, kind):
            raise TypeError(f"schema {label!r} items must be {kind.__typename__} declarations, got {declaration!r}")
    return tuple(declarations)


class Schema:
    """
    Immutable description of a command line.

    Parameters
    - required: Required declarations, in positional order.
    - optional: Optional declarations.
    - boolean: Boolean declarations.
    - prog: program name shown in help (defaults to argv[0]).
    - colorful: style faults and help output.
    - hints: append a hint line with the fault code to reported errors.

    Raises
    - TypeError: a list holds something else than its declaration kind.
    - ValueError: duplicate field names, short flags or long flags.
    """

    __introspectable__ = (
        "required",
        "optional",
        "boolean",
        "prog",
        "colorful",
        "hints",
    )

    def __init__(self, required=(), optional=(), boolean=(), /, prog=Unset, *, colorful=False, hints=False):
        self._required = _sanitize_declarations(Required, required, "required")
        self._optional = _sanitize_declarations(Optional, optional, "optional")
        self._boolean = _sanitize_declarations(Boolean, boolean, "boolean")

        if not isinstance(prog, str | Unset):
            raise TypeError("schema 'prog' must be a string")
        elif isinstance(prog, str) and not (prog := prog.strip()):
            raise ValueError("schema 'prog' cannot be empty")
        self._prog = coalesce(prog)
        self._colorful = bool(colorful)
        self._hints = bool(hints)

        self._fields = {}
        for declaration in self._required + self._optional + self._boolean:
            if declaration.name in self._fields:
                raise ValueError(f"schema field {declaration.name!r} is declared more than once")
            if hasattr(Namespace, declaration.name):
                raise ValueError(f"schema field {declaration.name!r} is reserved by the namespace")
            self._fields[declaration.name] = declaration

        self._shorts = {}
        self._longs = {}
        for declaration in self._optional + self._boolean:
            if (short := declaration.short) is not None:
                if short in self._shorts:
                    raise ValueError(f"schema flag '-{short}' is declared more than once")
                self._shorts[short] = declaration
            if (long := declaration.long) is not None:
                if "--" + long in self._longs:
                    raise ValueError(f"schema flag '--{long}' is declared more than once")
                self._longs["--" + long] = declaration
            if short is None and long is None:
                trigger(
                    UnreachableArgumentWarning(
                        f"{type(declaration).__typename__} {declaration.name!r} has neither a short nor a long flag",
                        code=FaultCode.UNREACHABLE_ARGUMENT,
                    ),
                    stacklevel=4,
                )

    required = mirror("required")
    optional = mirror("optional")
    boolean = mirror("boolean")
    prog = mirror("prog")
    colorful = mirror("colorful")
    hints = mirror("hints")
    fields = mirror("fields")
    shorts = mirror("shorts")
    longs = mirror("longs")

    @property
    def required_count(self):
        return len(self._required)

    @property
    def optional_count(self):
        return len(self._optional)

    @property
    def boolean_count(self):
        return len(self._boolean)

    def defaults(self):
        """
        Return a fresh Namespace with every field at its initial value.

        - Required: the converter's zero (None for strings, 0 for integers, ...).
        - Optional: a shallow copy of the declared default, as given (a list stays a list).
        - Boolean: False.
        """
        values = {}
        for declaration in self._required:
            values[declaration.name] = declaration.zero
        for declaration in self._optional:
            values[declaration.name] = copy.copy(declaration._default)
        for declaration in self._boolean:
            values[declaration.name] = False
        return Namespace(self, values)

    def parse(self, argv, namespace, /):
        """
        Parse argv into namespace.

        Faults are printed on standard error ("Error: <message>") instead of
        being raised; the return value tells whether parsing succeeded.
        """
        try:
            Parser(self).parse(argv, namespace)
        except ArgumentsException as fault:
            trigger(fault, shell=True, colorful=self._colorful, hints=self._hints)
            return False
        return True

    def help(self, prog=Unset, *, console=Unset):
        """
        Print the help screen on standard output (or the given rich console).
        """
        print_help(self, prog, console=console)

    def invoke(self, argv=Unset):
        """
        Parse argv (sys.argv by default) and return the namespace.

        On failure the help screen is printed and the process exits with
        status 1; when a helper switch is set, the help screen is printed and
        the process exits with status 0.
        """
        argv = coalesce(argv, sys.argv)
        namespace = self.defaults()
        if not self.parse(argv, namespace):
            print_help(self, argv=argv)
            sys.exit(1)
        if any(namespace[declaration.name] for declaration in self._boolean if declaration.helper):
            print_help(self, argv=argv)
            sys.exit(0)
        return namespace

    def __repr__(self):
        fields = ", ".join("%s=%r" % pair for pair in self.__rich_repr__())
        return f"schema({fields})"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


__all__ = (
    "Schema",
)
