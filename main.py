from rich.pretty import pprint

from argus import *

schema = Schema(
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
    prog="file-processor",
    colorful=True,
    hints=True,
)


if __name__ == '__main__':
    args = schema.invoke()
    print("Processing %s -> %s" % (args.input, args.output))
    print("Threads: %u" % args.threads)
    if args.verbose:
        pprint(args)
