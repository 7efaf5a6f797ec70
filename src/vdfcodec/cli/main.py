"""Main CLI entry point for vdfcodec."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..cli.show import dump_file, print_schema
from ..exceptions import VDFError
from ..models import Shortcut


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the vdfcodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="vdfcodec",
        description="vdfcodec: Binary VDF Record Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vdfcodec --dump shortcuts.vdf          Print every entry as JSON
  vdfcodec --dump shortcuts.vdf --raw    Print raw field names and sizes
  vdfcodec --schema                      Show the shortcut wire schema
        """,
    )

    parser.add_argument(
        "--dump",
        metavar="FILE",
        type=str,
        help="Decode a shortcuts.vdf file and print its entries",
    )

    parser.add_argument(
        "--raw",
        action="store_true",
        help="With --dump, print raw fields instead of typed records",
    )

    parser.add_argument(
        "--schema",
        action="store_true",
        help="Print the wire schema of the shortcut record",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="vdfcodec 0.1.0",
    )

    args = parser.parse_args(argv)

    if args.schema:
        print_schema(Shortcut)
        return 0

    if args.dump:
        file_path = Path(args.dump)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            dump_file(file_path, Shortcut, raw=args.raw)
            return 0
        except (OSError, VDFError) as e:
            print(f"Error decoding file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
