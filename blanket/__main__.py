"""CLI entry point for the Blanket interpreter.

Usage:
    python -m blanket [-v|-vv|-vvv] [-e EXPR]... [source_file]

Options:
  -v            Increase debug verbosity (can be repeated)
  -e EXPR       Evaluate EXPR (can be repeated; runs before the file)

Each `-e` expression and then each non-blank line of the source file
(`-` reads standard input) is evaluated in one session, so `sclr`
bindings carry over from line to line. Values are printed on stdout and
errors on stderr. Debug information is written to `debug.txt` in the
current directory when verbosity is greater than zero.
"""

import argparse
import sys
from pathlib import Path

from termcolor import colored

from .errors import format_error
from .session import DEFAULT_SOURCE_NAME, Session


def report_error(error) -> None:
    print(colored(format_error(error), 'red', attrs=['bold']), file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Blanket expression language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('-e', dest='exprs', metavar='EXPR', action='append', default=[],
                        help='evaluate an expression (can be repeated)')
    parser.add_argument('source', nargs='?', help="Blanket source file, one expression per line ('-' for stdin)")
    args = parser.parse_args(argv)

    if not args.exprs and not args.source:
        parser.error('nothing to evaluate; pass -e EXPR or a source file')

    inputs = [('<arg>', 1, expr) for expr in args.exprs]
    if args.source == '-':
        inputs.extend((DEFAULT_SOURCE_NAME, ln, line) for ln, line in enumerate(sys.stdin.read().splitlines(), 1))
    elif args.source:
        source_file = Path(args.source)
        if not source_file.exists():
            print(f"Error: file {source_file} not found", file=sys.stderr)
            sys.exit(1)
        with open(source_file, 'r', encoding='utf-8') as f:
            inputs.extend((str(source_file), ln, line) for ln, line in enumerate(f.read().splitlines(), 1))

    failed = False
    with Session(debug_level=args.v) as session:
        for fn, ln, text in inputs:
            if not text.strip():
                continue
            result = session.run(text, fn, ln)
            if result.error:
                report_error(result.error)
                failed = True
            elif result.value is not None:
                print(result.value)

    if failed:
        sys.exit(1)


if __name__ == '__main__':
    main()
