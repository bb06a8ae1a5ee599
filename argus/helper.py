"""
Argus help renderer.

render() builds the complete help screen of a schema as a rich Text:

    USAGE:
        file-processor <input> <output> [-t<threads>] [-v]

    ARGUMENTS:
        <input>                  Input file path
        <output>                 Output file path

    OPTIONS:
        -t, --threads <threads>  Number of threads (default: 1)
        -v, --verbose            Verbose output

Layout rules
- Up to three required arguments are listed by label in the usage line, more
  collapse into <ARGUMENTS>.
- Up to three flagged declarations get a usage hint each, more collapse into
  [OPTIONS].
- Left cells are measured first; every row is then padded to the widest cell
  plus two spaces. Nothing is wrapped, so the output only depends on the schema
  and the program name.

Styles apply only when the schema is colorful; __main__.__styles__ overrides
the palette and __main__.__prog__ overrides the program name.
"""
import os
import sys
from collections import defaultdict
from collections.abc import Sequence

from rich.console import Console
from rich.text import Text

from .arguments import Optional, Boolean
from .utils import Unset, coalesce

INDENT = " " * 4
GUTTER = " " * 2


def _styles():
    return defaultdict(str, {
        "usage-label": "bold #FFB400",  # amber section titles
        "section-label": "bold #FFB400",
        "prog": "bold #00E5FF",  # neon cyan program name
        "flag-name": "bold #FF4DA6",  # pinky flags
        "metavar": "#9CE19C",  # gentle green placeholders
        "descr": "#C8C8D0",  # soft light gray text
        "default": "dim italic",
    } | getattr(__import__("__main__"), "__styles__", {}))


def _program(schema, prog, argv):
    """
    Resolve the program token: explicit prog, __main__.__prog__, schema prog,
    then the basename of argv[0].
    """
    if prog is not Unset:
        if not isinstance(prog, str):
            raise TypeError("help 'prog' must be a string")
        return prog
    if isinstance(main := getattr(__import__("__main__"), "__prog__", Unset), str):
        return main
    if schema.prog is not None:
        return schema.prog
    argv = coalesce(argv, sys.argv)
    if isinstance(argv, Sequence) and not isinstance(argv, str) and argv and isinstance(argv[0], str) and argv[0]:
        return os.path.basename(argv[0])
    return "program"


def _spelling(declaration):
    flags = []
    if declaration.short is not None:
        flags.append("-" + declaration.short)
    if declaration.long is not None:
        flags.append("--" + declaration.long)
    return ", ".join(flags)


def _hint(declaration):
    """
    Usage-line hint of a flagged declaration, or None when it has no flag.
    """
    if isinstance(declaration, Optional):
        if declaration.short is not None:
            return "[-%s<%s>]" % (declaration.short, declaration.metavar)
        if declaration.long is not None:
            return "[--%s <%s>]" % (declaration.long, declaration.metavar)
    elif isinstance(declaration, Boolean):
        if declaration.short is not None:
            return "[-%s]" % declaration.short
        if declaration.long is not None:
            return "[--%s]" % declaration.long
    return None


def _default(declaration):
    if declaration.default is None:
        return "none"
    return format(declaration.default, declaration.format)


def render(schema, prog=Unset, /, *, argv=Unset):
    """
    Render the help screen of schema.

    Parameters
    - schema: the Schema to describe.
    - prog: program token; resolved as described in _program() when omitted.
    - argv: vector whose first item names the program (defaults to sys.argv).

    Returns
    - Text: the help screen without a trailing newline.
    """
    styles = _styles()

    def styler(style):
        return styles[style] if schema.colorful else ""

    required = schema.required
    flagged = schema.optional + schema.boolean

    usage = Text.assemble(
        ("USAGE:", styler("usage-label")),
        "\n",
        INDENT,
        (_program(schema, prog, argv), styler("prog")),
    )
    if 1 <= len(required) <= 3:
        for declaration in required:
            usage.append(" ").append("<%s>" % declaration.label, styler("metavar"))
    elif required:
        usage.append(" ").append("<ARGUMENTS>", styler("metavar"))
    if len(flagged) <= 3:
        for hint in filter(None, map(_hint, flagged)):
            usage.append(" ").append(hint, styler("flag-name"))
    else:
        usage.append(" ").append("[OPTIONS]", styler("flag-name"))

    # First pass: left cells (flag spelling and placeholder) of every row.
    cells = []
    for declaration in required:
        cells.append([("<%s>" % declaration.label, styler("metavar"))])
    for declaration in flagged:
        cell = []
        if spelling := _spelling(declaration):
            cell.append((spelling, styler("flag-name")))
        if isinstance(declaration, Optional):
            cell.append(("<%s>" % declaration.metavar, styler("metavar")))
        cells.append(cell)
    cells = [Text(" ").join(Text.assemble(part) for part in cell) for cell in cells]
    width = max((cell.cell_len for cell in cells), default=0)

    # Second pass: padded rows.
    rows = []
    for cell, declaration in zip(cells, required + flagged):
        row = Text.assemble(INDENT, cell, " " * (width - cell.cell_len), GUTTER)
        if isinstance(declaration.descr, Text):
            row.append_text(declaration.descr)
        elif declaration.descr is not None:
            row.append(declaration.descr, styler("descr"))
        if isinstance(declaration, Optional):
            if declaration.descr is not None:
                row.append(" ")
            row.append("(default: %s)" % _default(declaration), styler("default"))
        row.rstrip()
        rows.append(row)

    blocks = [usage]
    if required:
        blocks.append(Text("\n").join([Text("ARGUMENTS:", styler("section-label")), *rows[:len(required)]]))
    if flagged:
        blocks.append(Text("\n").join([Text("OPTIONS:", styler("section-label")), *rows[len(required):]]))
    return Text("\n\n").join(blocks)


def print_help(schema, prog=Unset, /, *, console=Unset, argv=Unset):
    """
    Print the help screen of schema on standard output (or the given console).
    """
    console = coalesce(console, Console(highlight=False))
    if not isinstance(console, Console):
        raise TypeError("print_help() 'console' must be a rich Console")
    console.print(render(schema, prog, argv=argv), soft_wrap=True)


__all__ = (
    "render",
    "print_help",
)
