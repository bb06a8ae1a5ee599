"""
Parser engine tests.

Scope
- Positional phase: order, arity, whole-token conversion.
- Long flags: exact matching, separate value tokens, trailing text rejection.
- Short-flag runs: switches, inline values, run continuation after a value.
- Faults: first failure wins, position-first messages, partial results kept.
- Invocation checks: malformed argv and foreign namespaces.
"""
import unittest
from unittest import TestCase

from argus import *


class TestParser(TestCase):
    """File-processor command line: <input> <output> [-t<threads>] [-v] [-h]."""

    def setUp(self):
        self.schema = Schema(
            (
                Required("input", "input", "Input file path"),
                Required("output", "output", "Output file path"),
            ),
            (
                Optional("threads", "t", "threads", default=1, descr="Number of threads to use", converter=parse_uint),
            ),
            (
                Boolean("verbose", "v", "verbose", "Verbose output"),
                Boolean("help", "h", "help", "Show help", helper=True),
            ),
        )
        self.parser = Parser(self.schema)

    def parse(self, *tokens):
        return self.parser.parse(["fp", *tokens], self.schema.defaults())

    def fault(self, kind, *tokens):
        namespace = self.schema.defaults()
        with self.assertRaises(kind) as context:
            self.parser.parse(["fp", *tokens], namespace)
        return context.exception, namespace

    def testEndToEnd(self):
        namespace = self.parse("in.txt", "out.txt", "-t4", "-v")
        self.assertEqual(
            namespace.asdict(),
            {"input": "in.txt", "output": "out.txt", "threads": 4, "verbose": True, "help": False},
        )

    def testDefaultsWithoutFlags(self):
        namespace = self.parse("in.txt", "out.txt")
        self.assertEqual(namespace.threads, 1)
        self.assertFalse(namespace.verbose)

    def testReturnsGivenNamespace(self):
        namespace = self.schema.defaults()
        self.assertIs(self.parser.parse(["fp", "a", "b"], namespace), namespace)

    def testPositionalOrder(self):
        namespace = self.parse("b.txt", "a.txt")
        self.assertEqual((namespace.input, namespace.output), ("b.txt", "a.txt"))

    def testPositionalTokensAreTakenVerbatim(self):
        namespace = self.parse("-v", "out.txt")
        self.assertEqual(namespace.input, "-v")
        self.assertFalse(namespace.verbose)

    def testInsufficientRequired(self):
        fault, namespace = self.fault(InsufficientArgumentsError, "in.txt")
        self.assertEqual(str(fault), "not all required arguments included (expected 2, got 1)")
        self.assertIsNone(namespace.input)

    def testCombinedShortFlags(self):
        namespace = self.parse("in.txt", "out.txt", "-vt4")
        self.assertTrue(namespace.verbose)
        self.assertEqual(namespace.threads, 4)

    def testRunContinuesAfterValue(self):
        namespace = self.parse("in.txt", "out.txt", "-t12vh")
        self.assertEqual(namespace.threads, 12)
        self.assertTrue(namespace.verbose)
        self.assertTrue(namespace.help)

    def testLongFlags(self):
        namespace = self.parse("in.txt", "out.txt", "--threads", "8", "--verbose")
        self.assertEqual(namespace.threads, 8)
        self.assertTrue(namespace.verbose)

    def testLaterFlagsWin(self):
        namespace = self.parse("in.txt", "out.txt", "-t2", "--threads", "3")
        self.assertEqual(namespace.threads, 3)

    def testLongFlagExactness(self):
        fault, namespace = self.fault(UnrecognizedFlagError, "in.txt", "out.txt", "--thread", "8")
        self.assertEqual(str(fault), "invalid flag '--thread' at third position")
        self.assertEqual(namespace.threads, 1)

    def testLongFlagPrefixOfSwitch(self):
        fault, _ = self.fault(UnrecognizedFlagError, "in.txt", "out.txt", "--verb")
        self.assertEqual(str(fault), "invalid flag '--verb' at third position")

    def testTrailingTextRejected(self):
        fault, namespace = self.fault(TrailingTextError, "in.txt", "out.txt", "--threads", "12x")
        self.assertEqual(str(fault), "couldn't parse argument '12x' for option '--threads' at fourth position")
        self.assertEqual(namespace.threads, 1)

    def testTrailingTextInShortRunIsNextFlag(self):
        fault, namespace = self.fault(UnrecognizedFlagError, "in.txt", "out.txt", "-t12x")
        self.assertEqual(str(fault), "invalid flag '-x' at third position")
        self.assertEqual(namespace.threads, 12)

    def testUnsignedRejectsNegative(self):
        fault, namespace = self.fault(ConversionFailedError, "in.txt", "out.txt", "--threads", "-5")
        self.assertEqual(str(fault), "failed to parse '-5' as unsigned int (negative value)")
        self.assertEqual(namespace.threads, 1)

    def testUnsignedRejectsNegativeInline(self):
        self.fault(ConversionFailedError, "in.txt", "out.txt", "-t-5")

    def testLongValueMissing(self):
        fault, _ = self.fault(MissingValueError, "in.txt", "out.txt", "--threads")
        self.assertEqual(str(fault), "option '--threads' at third position requires a value")

    def testShortValueMissing(self):
        fault, namespace = self.fault(MissingValueError, "in.txt", "out.txt", "-vt")
        self.assertEqual(str(fault), "option '-t' at third position requires a value")
        self.assertTrue(namespace.verbose)

    def testShortValueIsNotTakenFromNextToken(self):
        self.fault(MissingValueError, "in.txt", "out.txt", "-t", "4")

    def testBareDash(self):
        fault, _ = self.fault(UnrecognizedFlagError, "in.txt", "out.txt", "-")
        self.assertEqual(str(fault), "invalid flag '-' at third position")

    def testUnknownShortFlagQuotesRemainingRun(self):
        fault, namespace = self.fault(UnrecognizedFlagError, "in.txt", "out.txt", "-vqt4")
        self.assertEqual(str(fault), "invalid flag '-qt4' at third position")
        self.assertTrue(namespace.verbose)

    def testUnexpectedPositional(self):
        fault, namespace = self.fault(UnrecognizedArgumentError, "in.txt", "out.txt", "-v", "extra")
        self.assertEqual(str(fault), "invalid argument 'extra' at fourth position")
        self.assertEqual(namespace.input, "in.txt")
        self.assertTrue(namespace.verbose)

    def testFirstFailureWins(self):
        fault, _ = self.fault(UnrecognizedArgumentError, "in.txt", "out.txt", "extra", "--bogus")
        self.assertEqual(fault.options["index"], 3)

    def testFaultOptions(self):
        fault, _ = self.fault(TrailingTextError, "in.txt", "out.txt", "--threads", "12x")
        self.assertIs(fault.code, FaultCode.TRAILING_TEXT)
        self.assertEqual(fault.options["input"], "12x")
        self.assertEqual(fault.options["index"], 4)


class TestFlagsOnly(TestCase):
    """Schemas without required arguments."""

    def setUp(self):
        self.schema = Schema(
            (),
            (
                Optional("thread", "t", "thread", default=2, converter=parse_uint),
                Optional("ratio", long="ratio", default=0.5, converter=parse_float),
            ),
            (
                Boolean("quiet", "q", "quiet"),
            ),
        )

    def testRoundTripDefaults(self):
        namespace = self.schema.defaults()
        Parser(self.schema).parse(["prog"], namespace)
        self.assertEqual(namespace, self.schema.defaults())
        self.assertEqual(namespace.asdict(), {"thread": 2, "ratio": 0.5, "quiet": False})

    def testLongerTokenDoesNotMatch(self):
        with self.assertRaises(UnrecognizedFlagError) as context:
            Parser(self.schema).parse(["prog", "--threads", "4"], self.schema.defaults())
        self.assertEqual(str(context.exception), "invalid flag '--threads' at first position")

    def testEmptyToken(self):
        with self.assertRaises(UnrecognizedArgumentError):
            Parser(self.schema).parse(["prog", ""], self.schema.defaults())


class TestConversions(TestCase):
    """Converters seen through the parser."""

    def setUp(self):
        self.schema = Schema(
            (
                Required("count", "count", converter=parse_int),
            ),
            (
                Optional("mode", "m", "mode", default="a", converter=parse_char),
                Optional("ratio", "r", "ratio", default=0.5, converter=parse_double),
                Optional("offset", "o", "offset", default=0, converter=parse_long),
                Optional("name", "n", "name", converter=str.upper),
            ),
            (
                Boolean("verbose", "v", "verbose"),
            ),
        )

    def parse(self, *tokens):
        return Parser(self.schema).parse(["prog", *tokens], self.schema.defaults())

    def testPositionalRestIsDiscarded(self):
        self.assertEqual(self.parse("12x").count, 12)

    def testPositionalConversionFailure(self):
        namespace = self.schema.defaults()
        with self.assertRaises(ConversionFailedError) as context:
            Parser(self.schema).parse(["prog", "abc"], namespace)
        self.assertEqual(str(context.exception), "failed to parse 'abc' as int (no digits)")
        self.assertEqual(namespace.count, 0)

    def testCharRunContinuation(self):
        namespace = self.parse("1", "-mxv")
        self.assertEqual(namespace.mode, "x")
        self.assertTrue(namespace.verbose)

    def testFloatRunContinuation(self):
        namespace = self.parse("1", "-r2.5v")
        self.assertEqual(namespace.ratio, 2.5)
        self.assertTrue(namespace.verbose)

    def testNegativeLongValue(self):
        self.assertEqual(self.parse("1", "--offset", "-5").offset, -5)

    def testWholeTokenConverterInShortRun(self):
        namespace = self.parse("1", "-nvalue")
        self.assertEqual(namespace.name, "VALUE")
        self.assertFalse(namespace.verbose)

    def testCharLongValueMustBeSingleCharacter(self):
        with self.assertRaises(TrailingTextError):
            self.parse("1", "--mode", "xy")


class TestInvocation(TestCase):
    """Malformed calls are internal errors, not usage errors."""

    def setUp(self):
        self.schema = Schema((Required("input"),))
        self.parser = Parser(self.schema)

    def testParserRequiresSchema(self):
        with self.assertRaises(TypeError):
            Parser(object())

    def testEmptyArgv(self):
        with self.assertRaises(InvalidInvocationError) as context:
            self.parser.parse([], self.schema.defaults())
        self.assertEqual(str(context.exception), "null or empty argument vector")

    def testArgvMustBeSequence(self):
        for argv in (None, "prog input", 3):
            with self.subTest(argv=argv), self.assertRaises(InvalidInvocationError):
                self.parser.parse(argv, self.schema.defaults())

    def testArgvItemsMustBeStrings(self):
        with self.assertRaises(InvalidInvocationError):
            self.parser.parse(["prog", 1], self.schema.defaults())

    def testForeignNamespace(self):
        other = Schema((Required("input"),))
        with self.assertRaises(InvalidInvocationError):
            self.parser.parse(["prog", "in.txt"], other.defaults())

    def testTupleArgv(self):
        self.assertEqual(self.parser.parse(("prog", "in.txt"), self.schema.defaults()).input, "in.txt")


if __name__ == "__main__":
    unittest.main()
