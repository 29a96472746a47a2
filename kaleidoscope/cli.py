"""
Kaleidoscope command-line driver.

Reads a program, prints its tokens (optionally) and the parsed top-level
nodes. With no file argument the built-in demo program is used.

Examples:
    kaleidoscope                       # parse the demo program
    kaleidoscope prog.ks --tokens      # show tokens too
    echo "1 + 2 * 3" | kaleidoscope -  # read from stdin
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .lexer import Lexer, Token, tokenize_file
from .parser import Parser, ParseError, TreePrinter

logger = logging.getLogger(__name__)

DEMO_SOURCE = "\n".join([
    "def foo(x, y)",
    "  x + y * 2 + (4 + 5) / 3",
    "",
    "foo(3, 4)",
])


def _read_tokens(path: Optional[str]) -> List[Token]:
    """Tokenize the demo program, stdin (`-`) or a file.
    
    Raises:
        OSError: If the file cannot be read
    """
    if path is None:
        return Lexer(DEMO_SOURCE, "<demo>").tokenize()
    if path == "-":
        return Lexer(sys.stdin.read(), "<stdin>").tokenize()
    return tokenize_file(path)


def run(tokens: List[Token], filename: str, show_tokens: bool = False) -> int:
    """Parse `tokens`, printing the results. Returns an exit code."""
    
    if show_tokens:
        print("[" + ", ".join(str(token) for token in tokens) + "]")
    
    try:
        nodes = Parser(tokens).parse()
    except ParseError as e:
        print(str(e), end="", file=sys.stderr)
        return 1
    
    printer = TreePrinter()
    for node in nodes:
        print(printer.render(node))
    
    logger.info("%s: %d tokens, %d top-level nodes", filename, len(tokens), len(nodes))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the kaleidoscope command."""
    parser = argparse.ArgumentParser(
        prog="kaleidoscope",
        description="Tokenize and parse Kaleidoscope source",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("file", nargs="?",
                        help="Source file, '-' for stdin (default: built-in demo program)")
    parser.add_argument("--tokens", action="store_true",
                        help="Print the token list before the tree")
    parser.add_argument("--log-level", dest="log_level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")
    
    try:
        tokens = _read_tokens(args.file)
    except FileNotFoundError:
        print(f"File not found: {args.file}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Cannot read {args.file}: {e.strerror or e}", file=sys.stderr)
        return 1
    
    filename = {None: "<demo>", "-": "<stdin>"}.get(args.file, args.file)
    return run(tokens, filename, show_tokens=args.tokens)


if __name__ == "__main__":
    sys.exit(main())
