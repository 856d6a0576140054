"""
command-line shell: read a file, parse it, save the graph, optionally render/view it.

exit codes:
  0  the input is a valid sentence
  1  syntax error (the partial graph is still written)
  2  input file missing or not a regular file (argparse usage errors also exit 2)
  3  input file could not be read
  4  the graph could not be written
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .lexer import LexicalStream
from .parser import analyze
from .render import print_tokens, render_graph, save_dot
from .viewer import open_web_graphviz

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SYNTAX_ERROR = 1
EXIT_NO_INPUT = 2
EXIT_UNREADABLE = 3
EXIT_UNWRITABLE = 4


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="descent",
        description="Recursive-descent syntax analyzer that emits the derivation as a graphviz parse tree.",
    )
    ap.add_argument("input", help="source file; tokens must be whitespace delimited, '#' lines are comments")
    ap.add_argument("-o", "--output", default=config.DEFAULT_OUTPUT_STEM,
                    help="output path without extension (default: %(default)s)")
    ap.add_argument("--render", action="store_true", help="also render the graph with the graphviz executable")
    ap.add_argument("--format", choices=config.RENDER_FORMATS, default=config.DEFAULT_RENDER_FORMAT,
                    help="render format (default: %(default)s)")
    ap.add_argument("--tokens", action="store_true", help="print the classified tokens before parsing")
    ap.add_argument("--view", action="store_true", help="offer to open the graph in an online viewer")
    ap.add_argument("-q", "--quiet", action="store_true", help="don't echo the generated graph")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.input)
    if not path.is_file():
        print(f"Input file not found: {path}", file=sys.stderr)
        return EXIT_NO_INPUT

    try:
        lexer = LexicalStream.from_file(path)
    except (OSError, UnicodeDecodeError) as ex:
        logger.critical("could not read the file: %s", ex)
        return EXIT_UNREADABLE

    if args.tokens:
        print_tokens(lexer.tokens)

    echo = None if args.quiet else (lambda msg: print(msg, end=""))
    outcome = analyze(lexer, echo)

    try:
        save_dot(outcome.code, args.output)
    except OSError as ex:
        logger.critical("could not write the graph: %s", ex)
        return EXIT_UNWRITABLE
    if args.render:
        render_graph(outcome.code, args.output, args.format)
    if args.view:
        open_web_graphviz(outcome.code)

    if not outcome.ok:
        print(outcome.error.message, file=sys.stderr)
        return EXIT_SYNTAX_ERROR
    return EXIT_OK
