from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .api import load_source
from .compiler import compile_source, format_listing
from .engine import Engine
from .errors import BFVMError, SourceLoadError


def _positive(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfvm",
        description="Run a program in the eight-command tape language.",
    )
    parser.add_argument("source", help="Path to the program source")
    parser.add_argument("--dump", action="store_true", help="Print the compiled instructions instead of running")
    parser.add_argument("--cells", type=_positive, default=1, help="Tape cells to pre-allocate (default 1)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log compiler and engine activity to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)5s %(name)s: %(message)s", stream=sys.stderr)

    try:
        source = load_source(args.source)
    except SourceLoadError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    instructions = compile_source(source)
    if args.dump:
        if instructions:
            print(format_listing(instructions))
        return 0

    engine = Engine(instructions, source=source, initial_cells=args.cells)
    try:
        engine.run()
    except BFVMError as e:
        print(f"fatal: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 1
    finally:
        engine.stdout.flush()
    return 0
