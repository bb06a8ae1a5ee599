"""
Help renderer tests.

Scope
- Usage line: required labels vs <ARGUMENTS>, flag hints vs [OPTIONS].
- Two-pass aligned ARGUMENTS / OPTIONS blocks and default formatting.
- Program name resolution and deterministic output.
"""
import io
import re
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argus import *
from argus.helper import render, print_help


def processor(**options):
    return Schema(
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
        **options,
    )


class TestRender(TestCase):

    def testFileProcessor(self):
        self.assertEqual(
            render(processor(), "file-processor").plain,
            "\n".join((
                "USAGE:",
                "    file-processor <input> <output> [-t<threads>] [-v] [-h]",
                "",
                "ARGUMENTS:",
                "    <input>" + " " * 18 + "Input file path",
                "    <output>" + " " * 17 + "Output file path",
                "",
                "OPTIONS:",
                "    -t, --threads <threads>  Number of threads to use (default: 1)",
                "    -v, --verbose" + " " * 12 + "Verbose output",
                "    -h, --help" + " " * 15 + "Show help",
            )),
        )

    def testIdempotent(self):
        schema = processor()
        self.assertEqual(render(schema, "fp").plain, render(schema, "fp").plain)

    def testColorfulKeepsLayout(self):
        self.assertEqual(
            render(processor(colorful=True), "fp").plain,
            render(processor(), "fp").plain,
        )

    def testManyRequiredCollapse(self):
        schema = Schema(tuple(Required(name) for name in ("a", "b", "c", "d")))
        self.assertEqual(render(schema, "prog").plain.splitlines()[1], "    prog <ARGUMENTS>")

    def testThreeRequiredListed(self):
        schema = Schema(tuple(Required(name) for name in ("a", "b", "c")))
        self.assertEqual(render(schema, "prog").plain.splitlines()[1], "    prog <a> <b> <c>")

    def testManyFlagsCollapse(self):
        schema = Schema((), (), tuple(Boolean(name, name[0]) for name in ("all", "brief", "color", "dry")))
        self.assertEqual(render(schema, "prog").plain.splitlines()[1], "    prog [OPTIONS]")

    def testLongOnlyHints(self):
        schema = Schema((), (Optional("level", long="level", default=0, converter=parse_int),), (Boolean("quiet", long="quiet"),))
        self.assertEqual(
            render(schema, "prog").plain.splitlines()[1],
            "    prog [--level <level>] [--quiet]",
        )

    def testNoRequiredBlock(self):
        schema = Schema((), (), (Boolean("verbose", "v", "verbose", "Verbose output"),))
        self.assertEqual(
            render(schema, "prog").plain,
            "USAGE:\n    prog [-v]\n\nOPTIONS:\n    -v, --verbose  Verbose output",
        )

    def testNoFlagsBlock(self):
        schema = Schema((Required("path", descr="File to read"),))
        self.assertEqual(
            render(schema, "prog").plain,
            "USAGE:\n    prog <path>\n\nARGUMENTS:\n    <path>  File to read",
        )

    def testShortOnlyAndMetavar(self):
        schema = Schema((), (Optional("count", "c", metavar="lines", default=10, converter=parse_uint),))
        self.assertEqual(
            render(schema, "prog").plain,
            "USAGE:\n    prog [-c<lines>]\n\nOPTIONS:\n    -c <lines>  (default: 10)",
        )

    def testMissingDescriptionLeavesNoTrailingSpace(self):
        schema = Schema((), (), (Boolean("verbose", "v", "verbose"), Boolean("quiet", "q")))
        for line in render(schema, "prog").plain.splitlines():
            self.assertEqual(line, line.rstrip())

    def testDefaultFormatting(self):
        schema = Schema((), (
            Optional("ratio", "r", "ratio", default=3.14159, descr="Ratio", converter=parse_double, precision=3),
            Optional("pattern", "p", "pattern", descr="Pattern"),
            Optional("level", "l", "level", default=7, descr="Level", converter=parse_int, format="03d"),
        ))
        lines = render(schema, "prog").plain.splitlines()
        self.assertTrue(lines[-3].endswith("Ratio (default: 3.14)"))
        self.assertTrue(lines[-2].endswith("Pattern (default: none)"))
        self.assertTrue(lines[-1].endswith("Level (default: 007)"))

    def testOptionsAlignWithArguments(self):
        lines = render(processor(), "fp").plain.splitlines()
        columns = {re.match(r"    \S+(?: \S+)*\s+", line).end() for line in lines[3:] if line.startswith("    ")}
        self.assertEqual(len(columns), 1)


class TestProgram(TestCase):

    def testSchemaProg(self):
        self.assertTrue(render(processor(prog="file-processor")).plain.startswith("USAGE:\n    file-processor "))

    def testExplicitProgWins(self):
        self.assertTrue(render(processor(prog="file-processor"), "fp").plain.startswith("USAGE:\n    fp "))

    def testArgvBasename(self):
        self.assertTrue(render(processor(), argv=["/usr/local/bin/tool"]).plain.startswith("USAGE:\n    tool "))

    def testMainProg(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__prog__", "hooked", create=True):
            self.assertTrue(render(processor(prog="file-processor")).plain.startswith("USAGE:\n    hooked "))

    def testProgMustBeString(self):
        with self.assertRaises(TypeError):
            render(processor(), 3)


class TestPrintHelp(TestCase):

    def testPrintsRenderedText(self):
        schema = processor()
        console = Console(file=io.StringIO(), width=40)
        print_help(schema, "fp", console=console)
        self.assertEqual(console.file.getvalue(), render(schema, "fp").plain + "\n")

    def testSchemaHelp(self):
        schema = processor(prog="file-processor")
        console = Console(file=io.StringIO())
        schema.help(console=console)
        schema.help(console=console)
        output = console.file.getvalue()
        self.assertEqual(output[:len(output) // 2], output[len(output) // 2:])

    def testConsoleMustBeRich(self):
        with self.assertRaises(TypeError):
            print_help(processor(), console=io.StringIO())


if __name__ == "__main__":
    unittest.main()
