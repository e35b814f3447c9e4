"""fdleakcheck - command-line entry point."""

import argparse
import logging
import sys

from fdleakcheck.builder import SnapshotBuilder
from fdleakcheck.errors import FdLeakCheckError

logger = logging.getLogger("fdleakcheck")

EXIT_OK = 0
EXIT_LEAK = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the fdleakcheck command."""
    parser = argparse.ArgumentParser(
        prog="fdleakcheck",
        description="Show the file descriptors open in this process, or check "
        "that two back-to-back snapshots agree.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="take two snapshots and exit 1 if they differ",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="do not print the detailed listing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log every command that is run",
    )
    return parser


def setup_logging(verbose: bool) -> None:
    """Send fdleakcheck's log records to stderr."""
    level = logging.DEBUG if verbose else logging.WARNING
    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt="[%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)


def _show(builder: SnapshotBuilder, quiet: bool) -> int:
    fds = builder.take()
    print(f"pid {builder.pid}: {len(fds.open_fds)} open fds: "
          + " ".join(str(fd) for fd in fds.open_fds))
    if not quiet:
        print(fds.describe(), end="")
    return EXIT_OK


def _check(builder: SnapshotBuilder, quiet: bool) -> int:
    fds_before = builder.take()
    fds_after = builder.take()
    if not fds_before.differs(fds_after):
        print("no leaks found")
        return EXIT_OK

    print("leaks found!", file=sys.stderr)
    if not quiet:
        print("fds open before:", file=sys.stderr)
        print(fds_before.describe(), file=sys.stderr)
        print("fds open after:", file=sys.stderr)
        print(fds_after.describe(), file=sys.stderr)
    return EXIT_LEAK


def main(argv: list[str] | None = None) -> int:
    """Entry point for the fdleakcheck command."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    builder = SnapshotBuilder()
    try:
        if args.check:
            return _check(builder, args.quiet)
        return _show(builder, args.quiet)
    except FdLeakCheckError as e:
        print(f"failed to check fd leaks: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
