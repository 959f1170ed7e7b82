"""
Command-line entry point.

Usage:
    spice2json schema.json                  # document to stdout
    spice2json schema.json out.json         # document to a file
    spice2json --compact --sort-keys schema.json

The input is the compiled schema in its JSON form. Logs go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from spice2json import __version__
from spice2json.compiler import export_schema, to_json_string
from spice2json.core.config import settings
from spice2json.core.errors import SchemaInputError, Spice2JsonError, get_exit_code
from spice2json.core.observability import configure_logging
from spice2json.domain.compiled import load_compiled_schema

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spice2json",
        description="Export a compiled authorization schema as a JSON document.",
    )
    parser.add_argument("input", type=Path, help="compiled schema JSON file")
    parser.add_argument(
        "output", type=Path, nargs="?", default=None, help="output file (default: stdout)"
    )
    parser.add_argument(
        "--compact", action="store_true", help="write single-line JSON instead of indenting"
    )
    parser.add_argument(
        "--sort-keys",
        action=argparse.BooleanOptionalAction,
        default=settings.output_sort_keys,
        help="sort object keys at every level (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level", default=settings.app_log_level, help="logging level (default: %(default)s)"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(args: argparse.Namespace) -> str:
    """
    Load, export and serialize one schema.

    Raises:
        SchemaInputError: If the input file cannot be read or parsed
        SchemaExportError: If a definition cannot be exported
    """
    try:
        # Bytes go straight to the loader, which reports bad UTF-8 as invalid input
        raw = args.input.read_bytes()
    except OSError as e:
        raise SchemaInputError(
            f"Cannot read {args.input}: {e.strerror or e}", details={"path": str(args.input)}
        ) from e

    document = export_schema(load_compiled_schema(raw))
    indent = 0 if args.compact else settings.output_indent
    return to_json_string(document, indent=indent, sort_keys=args.sort_keys)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, structured=settings.observability_structured_logs)

    try:
        output = run(args)
    except Spice2JsonError as e:
        logger.debug("Export failed", exc_info=True)
        print(f"spice2json: {e.message}", file=sys.stderr)
        return get_exit_code(e)

    if args.output is None:
        sys.stdout.write(output + "\n")
        return 0

    try:
        args.output.write_text(output + "\n", encoding="utf-8")
    except OSError as e:
        print(f"spice2json: cannot write {args.output}: {e.strerror or e}", file=sys.stderr)
        return 1

    logger.info("Wrote %s", args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
