"""
Argus parser engine.

Parser(schema).parse(argv, namespace) walks an argv-style vector once:

1. positional phase: argv[1..required_count] feed the Required converters in
   declaration order (whole token, any unconsumed text is discarded);
2. flag phase: every remaining token is either
   • an exact long flag ("--threads"): Optional takes the next token, Boolean is set;
   • a short-flag run ("-vt4"): switches consume one character each, an Optional
     takes the text after its flag character and the run resumes after it;
   • anything else, which is an error.

The first failure raises a fault and ends the parse; fields resolved before it
keep their values. Positions in messages are 1-based argv indices.
"""
from collections.abc import Sequence

from .arguments import Boolean
from .faults import *
from .namespace import Namespace
from .utils import ordinal


class Parser:
    """
    Single-pass parser bound to one schema.

    The parser holds no per-call state; one instance may serve any number of
    parse() calls.
    """

    def __init__(self, schema, /):
        from .schema import Schema

        if not isinstance(schema, Schema):
            raise TypeError("parser 'schema' must be a Schema")
        self._schema = schema

    schema = property(lambda self: self._schema)

    def parse(self, argv, namespace, /):
        """
        Parse argv into namespace and return the namespace.

        Raises
        - InvalidInvocationError: argv is not a non-empty sequence of strings, or
          namespace was not created by this parser's schema.
        - UsageError subclasses: the command line does not match the schema.
        """
        argv = self._check(argv, namespace)
        schema = self._schema

        if len(argv) - 1 < schema.required_count:
            raise InsufficientArgumentsError(
                "not all required arguments included (expected %d, got %d)" % (schema.required_count, len(argv) - 1),
                title="missing arguments",
                code=FaultCode.INSUFFICIENT_ARGUMENTS,
                hint="provide every required argument before the options",
            )

        for index, declaration in enumerate(schema.required, 1):
            value, _ = declaration.converter(argv[index])
            namespace._assign(declaration.name, value)

        index = schema.required_count + 1
        while index < len(argv):
            index = self._step(argv, index, namespace)
        return namespace

    def _check(self, argv, namespace):
        if not isinstance(argv, Sequence) or isinstance(argv, str) or not argv:
            raise InvalidInvocationError(
                "null or empty argument vector",
                title="invalid invocation",
                code=FaultCode.INVALID_INVOCATION,
                hint="pass a sequence whose first item is the program name",
            )
        if not all(isinstance(token, str) for token in argv):
            raise InvalidInvocationError(
                "argument vector must contain only strings",
                title="invalid invocation",
                code=FaultCode.INVALID_INVOCATION,
                hint="pass a sequence of strings",
            )
        if not isinstance(namespace, Namespace) or namespace.schema is not self._schema:
            raise InvalidInvocationError(
                "namespace does not belong to this schema",
                title="invalid invocation",
                code=FaultCode.INVALID_INVOCATION,
                hint="create the namespace with schema.defaults()",
            )
        return tuple(argv)

    def _step(self, argv, index, namespace):
        """
        Resolve the token at argv[index]; return the index of the next token.
        """
        token = argv[index]

        if (declaration := self._schema.longs.get(token)) is not None:
            if isinstance(declaration, Boolean):
                namespace._assign(declaration.name, True)
                return index + 1

            if index + 1 >= len(argv):
                raise MissingValueError(
                    "option %r at %s position requires a value" % (token, ordinal(index)),
                    title="missing value",
                    code=FaultCode.MISSING_VALUE,
                    index=index,
                    input=token,
                    hint="pass a value after %s" % token,
                )
            value, rest = declaration.converter(argv[index + 1])
            if rest:
                raise TrailingTextError(
                    "couldn't parse argument %r for option %r at %s position" % (argv[index + 1], token, ordinal(index + 1)),
                    title="trailing text",
                    code=FaultCode.TRAILING_TEXT,
                    index=index + 1,
                    input=argv[index + 1],
                    hint="remove %r from the value" % rest,
                )
            namespace._assign(declaration.name, value)
            return index + 2

        if token.startswith("-"):
            self._run(token, index, namespace)
            return index + 1

        raise UnrecognizedArgumentError(
            "invalid argument %r at %s position" % (token, ordinal(index)),
            title="unrecognized argument",
            code=FaultCode.UNRECOGNIZED_ARGUMENT,
            index=index,
            input=token,
            hint="check the number of positional arguments",
        )

    def _run(self, token, index, namespace):
        """
        Resolve a combined short-flag run such as "-vt4" or "-t4v".
        """
        shorts = self._schema.shorts
        cursor = token[1:]

        # A bare "-" names no flag at all.
        if not cursor:
            raise self._unrecognized("-", index)

        while cursor:
            if (declaration := shorts.get(cursor[0])) is None:
                raise self._unrecognized("-" + cursor, index)

            if isinstance(declaration, Boolean):
                namespace._assign(declaration.name, True)
                cursor = cursor[1:]
                continue

            if not (text := cursor[1:]):
                raise MissingValueError(
                    "option %r at %s position requires a value" % ("-" + cursor[0], ordinal(index)),
                    title="missing value",
                    code=FaultCode.MISSING_VALUE,
                    index=index,
                    input=token,
                    hint="attach the value to the flag (e.g., -%s<%s>)" % (cursor[0], declaration.metavar),
                )
            value, rest = declaration.converter(text)
            namespace._assign(declaration.name, value)
            cursor = rest or ""

    @staticmethod
    def _unrecognized(flag, index):
        return UnrecognizedFlagError(
            "invalid flag %r at %s position" % (flag, ordinal(index)),
            title="unrecognized flag",
            code=FaultCode.UNRECOGNIZED_FLAG,
            index=index,
            input=flag,
            hint="check the available options",
        )


__all__ = (
    "Parser",
)
