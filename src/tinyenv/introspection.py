"""Command-line inspection of resolved environment variables.

Usage:
    python -m tinyenv PORT DEBUG --default PORT=3000 --default DEBUG=false
    python -m tinyenv HOSTS --default 'HOSTS=[]' --array-type HOSTS=string --json
    python -m tinyenv API_KEY --check
"""

import argparse
from collections.abc import Sequence
import json
import logging
import sys
from typing import Any

from .api import load_environ
from .exceptions import TinyEnvError
from .standard import TinyEnvSchema
from .types import EnvRecord, OriginMap, is_secret_key

# ruff: noqa: T201


def summarize_origins(origin: OriginMap) -> dict[str, int]:
    """Count keys per origin, e.g. ``{"env": 3, "default": 1}``."""
    counts: dict[str, int] = {}
    for source in origin.values():
        counts[source] = counts.get(source, 0) + 1
    return counts


def parse_default(text: str) -> Any:
    """Read a default given on the command line.

    JSON literals keep their type (``3000``, ``false``, ``[]``, ``{}``);
    anything else is taken as a plain string.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _split_assignments(items: Sequence[str], flag: str) -> dict[str, str]:
    result = {}
    for item in items:
        if "=" not in item:
            raise argparse.ArgumentTypeError(
                f"{flag} expects KEY=VALUE, got {item!r}"
            )
        key, value = item.split("=", 1)
        result[key.strip()] = value
    return result


def get_env_info(record: EnvRecord) -> dict[str, Any]:
    """Structured, redacted description of a resolved record."""
    return {
        "status": "valid",
        "values": {
            key: "[REDACTED]" if is_secret_key(key) else value
            for key, value in record.items()
        },
        "sources": dict(record.origin),
        "summary": summarize_origins(record.origin),
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve and inspect environment variables",
        prog="python -m tinyenv",
    )
    parser.add_argument("keys", nargs="+", metavar="KEY", help="Keys to resolve")
    parser.add_argument(
        "--default",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Default for a key; JSON literals fix its type",
    )
    parser.add_argument(
        "--array-type",
        action="append",
        default=[],
        metavar="KEY=TYPE",
        help="Element type (string, number, boolean) for a list key",
    )
    parser.add_argument("--delimiter", default=",", help="Separator for list values")
    parser.add_argument("--env-file", help=".env file to read beneath the environment")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON instead of human-readable format",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Just check that the keys resolve (exit code 0=valid, 1=invalid)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for environment inspection."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        defaults = {
            key: parse_default(value)
            for key, value in _split_assignments(args.default, "--default").items()
        }
        array_types = _split_assignments(args.array_type, "--array-type")
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        schema = TinyEnvSchema(
            args.keys,
            {
                "defaults": defaults,
                "delimiter": args.delimiter,
                "array_types": array_types,
            },
        )
        record = schema.parse(load_environ(args.env_file))
    except (TinyEnvError, FileNotFoundError) as e:
        if args.check:
            sys.exit(1)
        if args.json:
            print(json.dumps({"status": "invalid", "error": str(e)}, indent=2))
        else:
            print(f"Configuration Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.check:
        sys.exit(0)

    if args.json:
        print(json.dumps(get_env_info(record), indent=2))
        return

    _print_record(record)


def _print_record(record: EnvRecord) -> None:
    print("=== Resolved Environment ===")
    for line in record.audit().splitlines():
        print(f"  {line}")

    print("\n=== Sources ===")
    for source, count in sorted(summarize_origins(record.origin).items()):
        print(f"  {source}: {count}")


if __name__ == "__main__":
    main()
