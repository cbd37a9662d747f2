"""Command-line entry point: read DBAL text, print the AST as JSON.

Usage:
    python -m DBAL2AST schema.dbal
    cat schema.dbal | dbal2ast --feature numbers
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from DBAL2AST.config import get_config, get_default_profile
from DBAL2AST.dbal import DBALError, build_profile, parse_dbal
from DBAL2AST.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="dbal2ast",
        description="Parse a DBAL schema and print its AST as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="DBAL file to parse (default: read from stdin)",
    )
    parser.add_argument(
        "--feature",
        action="append",
        default=None,
        help="Enable an optional lexer feature (repeatable): underscore_identifiers, numbers",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="JSON indentation (default: dbal.json_indent from config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override logging level (default: logging.level from config.yaml)",
    )
    return parser.parse_args(argv)


def read_source(path: Optional[str]) -> str:
    """Read DBAL text from ``path``, or from stdin when no path is given.

    A leading UTF-8 byte order mark is dropped.
    """
    if not path:
        text = sys.stdin.read()
        return text[1:] if text.startswith("\ufeff") else text
    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"{source} not found or not a regular file")
    return source.read_text(encoding="utf-8-sig")


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function. Returns the process exit code."""
    args = parse_args(argv)

    log_cfg = get_config("logging")
    setup_logging(
        level=args.log_level or log_cfg.get("level", "INFO"),
        format_type=log_cfg.get("format", "simple"),
        log_to_file=bool(log_cfg.get("log_to_file", False)),
        log_file=log_cfg.get("log_file"),
    )

    try:
        default = get_default_profile()
        profile = build_profile(
            version=default.version,
            features=set(default.features) | set(args.feature or []),
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        text = read_source(args.path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {args.path}: {e}", file=sys.stderr)
        return 2

    try:
        ast = parse_dbal(text, profile=profile)
    except DBALError as e:
        logger.debug(f"Parsing failed: {e.message}")
        print(str(e), file=sys.stderr)
        return 1

    indent = args.indent if args.indent is not None else get_config("dbal").get("json_indent", 2)
    print(ast.to_json(indent=indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
