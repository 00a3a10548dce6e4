#!/usr/bin/env python3
# run_cursor_log.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Command-line interface printing commit history with resumable cursors

import os
import sys
import argparse
from pathlib import Path
from typing import List, Optional, Tuple

from core.walker import Walker
from model.cursor import Cursor
from model.exceptions import (
    CursorFormatError,
    CursorLogError,
    OutputClosedError,
    UsageError,
)
from model.object_id import ObjectId
from store import open_store
from utils.config import load_settings
from utils.emitter import emit_walk
from utils.logger import configure_logging, get_logger
from utils.walk_visualizer import render_walk_graph

USAGE = "usage: cursor-log <ref-ish> [<skip>]"


class CursorLogArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports bad arguments as UsageError.

    argparse exits with status 2 on its own; the tool reports every
    failure with status 1, so errors are raised to main() instead.
    """

    def error(self, message):
        raise UsageError(message)


def parse_skip_count(text: str) -> int:
    """Parse the optional skip count argument.

    Raises:
        argparse.ArgumentTypeError: If the count is not a non-negative integer
    """
    try:
        count = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"skip count must be a non-negative integer: {text!r}")
    if count < 0:
        raise argparse.ArgumentTypeError(f"skip count must be a non-negative integer: {text!r}")
    return count


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = CursorLogArgumentParser(
        prog="cursor-log",
        description="Print commit history newest-first with a resumable cursor on every line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output lines look like:
  <root>+<offset>  <commit>

To continue a walk later, pass a printed cursor back:
  cursor-log <root> <offset>
  cursor-log --resume <root>+<offset>

The record store is taken from GIT_DIR: a git directory, or a CSV graph
file with id,timestamp,parents columns.
        """,
    )

    parser.add_argument(
        "reference", nargs="?", help="Reference naming the commit to start from"
    )

    parser.add_argument(
        "skip",
        nargs="?",
        type=parse_skip_count,
        default=0,
        help="Number of leading records to discard (default: 0)",
    )

    parser.add_argument(
        "--resume",
        metavar="CURSOR",
        help="Continue a walk from a printed <root>+<offset> cursor",
    )

    parser.add_argument(
        "--graph-out",
        type=Path,
        help="Also draw the emitted records to this path with Graphviz",
    )

    parser.add_argument(
        "--graph-format",
        default="dot",
        help="Graphviz output format for --graph-out (default: dot source)",
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --verbose)"
    )

    return parser


def resolve_walk_request(args: argparse.Namespace) -> Tuple[str, int]:
    """Turn parsed arguments into the reference to start at and a skip count.

    Raises:
        UsageError: If neither or both of a reference and --resume are given
    """
    if args.resume is not None:
        if args.reference is not None:
            raise UsageError("--resume cannot be combined with a reference or skip count")
        try:
            cursor = Cursor.parse(args.resume)
        except CursorFormatError as e:
            raise UsageError(str(e))
        return cursor.root.hex(), cursor.offset

    if args.reference is None:
        raise UsageError("missing required <ref-ish>")

    return args.reference, args.skip


def run(argv: Optional[List[str]] = None, out=None) -> int:
    """Parse arguments, open the store and print the walk.

    Returns:
        Number of lines printed

    Raises:
        CursorLogError: On any usage, configuration or store failure
    """
    if out is None:
        out = sys.stdout

    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, debug=args.debug)
    logger = get_logger()

    reference, skip = resolve_walk_request(args)
    settings = load_settings()
    logger.info(f"Record store: {settings.store_location}")

    with open_store(settings.store_location) as store:
        walker = Walker.start(store, reference)

        emitted: Optional[List[Tuple[Cursor, ObjectId]]] = [] if args.graph_out else None
        count = emit_walk(walker, out, skip=skip, collect=emitted)

        if args.graph_out:
            render_walk_graph(emitted, store, args.graph_out, args.graph_format)

    return count


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the cursor log tool.

    Returns:
        Exit code (0 for success, 1 for any failure)
    """
    logger = get_logger()

    try:
        run(argv)
        return 0

    except OutputClosedError:
        # Reader went away (e.g. piped into head); everything it wanted was printed
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 0

    except UsageError as e:
        print(USAGE, file=sys.stderr)
        logger.error(f"{e}")
        return 1

    except CursorLogError as e:
        logger.error(f"{e}")
        return 1

    except KeyboardInterrupt:
        logger.error("Walk interrupted by user")
        return 1


def main_entry() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
